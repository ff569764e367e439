"""Parser context: namespace-aware dispatch table, id table and diagnostics."""

from __future__ import annotations

import warnings
from typing import TYPE_CHECKING, Any, Iterable

from ogcxml.avlist.change import PropertyChangeEvent
from ogcxml.avlist.store import AttributeStore
from ogcxml.config import validate_namespace_uri
from ogcxml.errors import InvalidArgumentError
from ogcxml.logging_config import logger
from ogcxml.parsing.handlers.leaf import (
    BooleanIntegerParser,
    BooleanParser,
    DoubleParser,
    IntegerParser,
    StringParser,
)
from ogcxml.parsing.handlers.unrecognized import UnrecognizedElementParser
from ogcxml.parsing.notifications import (
    EXCEPTION,
    UNRECOGNIZED,
    NotificationListener,
    ParserNotification,
)
from ogcxml.parsing.protocols import ElementParser, QName, XMLEvent

if TYPE_CHECKING:
    from ogcxml.parsing.events import EventStream
    from ogcxml.parsing.parser import AbstractElementParser

# Names of the default parsers installed in every context
STRING = QName.local("String")
DOUBLE = QName.local("Double")
INTEGER = QName.local("Integer")
BOOLEAN = QName.local("Boolean")
BOOLEAN_INTEGER = QName.local("BooleanInteger")
UNRECOGNIZED_ELEMENT = QName.local("UnrecognizedElement")


def _require(value: Any, what: str) -> None:
    if value is None:
        raise InvalidArgumentError(f"{what} is None")


class ParserContext(AttributeStore):
    """Global state of one document parse.

    The context maps qualified element names to prototype parsers,
    resolves names against a default namespace, hands out fresh parser
    instances, keeps the id table used for internal references and
    reports non-fatal anomalies as ParserNotifications through its own
    change channel.

    The dispatch table is shared with copies of the context and should be
    treated as read-only once parsing starts.
    """

    def __init__(
        self,
        event_stream: EventStream | None = None,
        default_namespace: str | None = "",
        notification_listener: NotificationListener | None = None,
        parsers: dict[QName, ElementParser] | None = None,
    ) -> None:
        """Initialize the context.

        Args:
            event_stream: Stream to pull events from (may be set later)
            default_namespace: Namespace assumed for unqualified names
            notification_listener: Receiver of parser notifications; when
                None, notifications are logged as warnings
            parsers: Dispatch table to share; a new one with the default
                parsers is created when omitted
        """
        super().__init__()
        self._event_stream = event_stream
        self._default_namespace = ""
        self.default_namespace = default_namespace
        self.notification_listener = notification_listener
        self._id_table: dict[str, Any] = {}

        if parsers is None:
            self._parsers: dict[QName, ElementParser] = {}
            self._initialize_parsers()
        else:
            self._parsers = parsers

        self.add_property_change_listener(self._dispatch_notification)

    def _initialize_parsers(self) -> None:
        self._parsers[STRING] = StringParser()
        self._parsers[DOUBLE] = DoubleParser()
        self._parsers[INTEGER] = IntegerParser()
        self._parsers[BOOLEAN] = BooleanParser()
        self._parsers[BOOLEAN_INTEGER] = BooleanIntegerParser()
        self._parsers[UNRECOGNIZED_ELEMENT] = UnrecognizedElementParser()

    def copy(self) -> ParserContext:
        """Create a working copy for a new parse.

        The copy shares the dispatch table, keeps the default namespace,
        the notification listener and the stored values, and starts with
        an empty id table and no event stream.
        """
        clone = ParserContext(
            default_namespace=self.default_namespace,
            notification_listener=self.notification_listener,
            parsers=self._parsers,
        )
        clone.set_values(super().copy())
        return clone

    @property
    def default_namespace(self) -> str:
        return self._default_namespace

    @default_namespace.setter
    def default_namespace(self, namespace_uri: str | None) -> None:
        namespace_uri = namespace_uri or ""
        validate_namespace_uri(namespace_uri)
        self._default_namespace = namespace_uri

    @property
    def event_stream(self) -> EventStream | None:
        return self._event_stream

    @event_stream.setter
    def event_stream(self, stream: EventStream) -> None:
        _require(stream, "Event stream")
        self._event_stream = stream

    # Dispatch table

    def register_parser(self, name: QName, parser: ElementParser) -> None:
        """Install or replace the prototype parser for an element name.

        Args:
            name: Qualified element name
            parser: Prototype whose new_instance() yields working parsers

        Raises:
            InvalidArgumentError: If an argument is None or the prototype
                cannot produce instances
        """
        _require(name, "Element name")
        _require(parser, "Parser")
        if not callable(getattr(parser, "new_instance", None)):
            raise InvalidArgumentError(
                f"Parser {type(parser).__name__} for {name} has no new_instance()"
            )
        self._parsers[name] = parser

    def _add_parsers(self, prototype_name: QName, namespace: str, names: Iterable[str]) -> None:
        prototype = self._parsers[prototype_name]
        for local_name in names:
            self.register_parser(QName(namespace or "", local_name), prototype)

    def add_string_parsers(self, namespace: str, names: Iterable[str]) -> None:
        """Register the string parser for several elements of one namespace."""
        self._add_parsers(STRING, namespace, names)

    def add_double_parsers(self, namespace: str, names: Iterable[str]) -> None:
        self._add_parsers(DOUBLE, namespace, names)

    def add_integer_parsers(self, namespace: str, names: Iterable[str]) -> None:
        self._add_parsers(INTEGER, namespace, names)

    def add_boolean_parsers(self, namespace: str, names: Iterable[str]) -> None:
        self._add_parsers(BOOLEAN, namespace, names)

    def add_boolean_integer_parsers(self, namespace: str, names: Iterable[str]) -> None:
        self._add_parsers(BOOLEAN_INTEGER, namespace, names)

    def registered_names(self) -> set[QName]:
        return set(self._parsers)

    def has_parser(self, name: QName) -> bool:
        """Check whether a prototype is registered for name, with namespace fallback."""
        _require(name, "Element name")
        return self._lookup_prototype(name) is not None

    def _lookup_prototype(self, name: QName) -> ElementParser | None:
        prototype = self._parsers.get(name)
        if prototype is not None:
            return prototype

        # Try the forms that assume the default namespace on either side
        if not name.namespace_uri:
            return self._parsers.get(QName(self.default_namespace, name.local_name))
        if self.is_default_namespace(name.namespace_uri):
            return self._parsers.get(QName.local(name.local_name))
        return None

    def get_parser(self, name: QName) -> ElementParser | None:
        """Get a fresh parser instance for an element name.

        The name is looked up as given, then with the default namespace
        substituted for a missing namespace, then without namespace when
        it is in the default namespace.

        Args:
            name: Qualified element name

        Returns:
            A new parser instance, or None when no prototype is registered
            or the prototype fails to instantiate

        Raises:
            InvalidArgumentError: If name is None
        """
        _require(name, "Element name")
        prototype = self._lookup_prototype(name)
        if prototype is None:
            return None

        try:
            return prototype.new_instance()
        except Exception:
            logger.warning(f"Cannot create parser for element {name}", exc_info=True)
            return None

    def allocate(
        self,
        event: XMLEvent,
        default_parser: ElementParser | None = None,
    ) -> ElementParser | None:
        """Get a parser for a start event, or default_parser if none is registered."""
        _require(event, "Event")
        if event.name is None:
            return None
        parser = self.get_parser(event.name)
        return parser if parser is not None else default_parser

    def get_string_parser(self) -> ElementParser:
        return self.get_parser(STRING)

    def get_double_parser(self) -> ElementParser:
        return self.get_parser(DOUBLE)

    def get_integer_parser(self) -> ElementParser:
        return self.get_parser(INTEGER)

    def get_boolean_parser(self) -> ElementParser:
        return self.get_parser(BOOLEAN)

    def get_boolean_integer_parser(self) -> ElementParser:
        return self.get_parser(BOOLEAN_INTEGER)

    def get_unrecognized_element_parser(self) -> ElementParser:
        """Get the parser for elements without a registered parser.

        Replace it by registering another parser under UNRECOGNIZED_ELEMENT.
        """
        return self.get_parser(UNRECOGNIZED_ELEMENT)

    # Name matching

    def is_default_namespace(self, namespace_uri: str | None) -> bool:
        return bool(self.default_namespace) and self.default_namespace == namespace_uri

    def is_same_name(self, a: QName, b: QName) -> bool:
        """Compare element names, letting a missing namespace stand for the default one."""
        if a == b:
            return True
        if a.local_name != b.local_name:
            return False
        if not a.namespace_uri:
            return b.namespace_uri == self.default_namespace
        if not b.namespace_uri:
            return a.namespace_uri == self.default_namespace
        return False

    def is_same_attribute_name(self, a: QName | None, b: QName | None) -> bool:
        """Compare attribute names by local name only."""
        return (
            a is not None
            and b is not None
            and bool(a.local_name)
            and a.local_name == b.local_name
        )

    def is_start_element(self, event: XMLEvent, name: QName) -> bool:
        _require(event, "Event")
        _require(name, "Element name")
        return event.is_start_element and self.is_same_name(event.name, name)

    def is_end_element(self, event: XMLEvent, start_event: XMLEvent) -> bool:
        """Check whether event closes the element opened by start_event."""
        _require(event, "Event")
        _require(start_event, "Start event")
        return event.is_end_element and event.name == start_event.name

    # Events

    def next_event(self) -> XMLEvent | None:
        """Return the next significant event, or None at the end of the stream.

        Character events holding only whitespace are skipped.
        """
        if self._event_stream is None:
            raise InvalidArgumentError("Parser context has no event stream")

        event = self._event_stream.next_event()
        while event is not None and event.is_whitespace:
            event = self._event_stream.next_event()
        return event

    def get_characters(self, event: XMLEvent) -> str | None:
        _require(event, "Event")
        return event.data if event.is_characters else None

    # Id table

    @property
    def id_table(self) -> dict[str, Any]:
        """Snapshot of the id table."""
        return dict(self._id_table)

    def add_id(self, element_id: str | None, obj: Any) -> None:
        if element_id is not None:
            self._id_table[element_id] = obj

    def get_id(self, element_id: str) -> Any:
        return self._id_table.get(element_id)

    def resolve_internal_references(
        self,
        reference_name: str,
        field_name: str,
        parser: AbstractElementParser,
    ) -> None:
        """Replace "#id" field values with the objects they refer to.

        Legacy pass kept for documents with internal links. For every
        string field of parser whose key ends with reference_name and whose
        value starts with "#", the referenced object is stored under
        field_name, unless field_name is already set.
        """
        warnings.warn(
            "resolve_internal_references is a legacy pass and may be removed",
            DeprecationWarning,
            stacklevel=2,
        )
        if parser is None or not parser.has_fields():
            return

        new_fields: dict[str, Any] = {}
        for key, value in parser.fields.entries():
            if key is None or key == "id" or not isinstance(value, str):
                continue
            if value.startswith("#") and key.endswith(reference_name):
                if not parser.has_field(field_name):
                    new_fields[field_name] = self.get_id(value[1:])

        if new_fields:
            parser.set_fields(new_fields)

    # Diagnostics

    def notify(
        self,
        property_name: str,
        event: XMLEvent | None,
        message: str,
        value: Any = None,
    ) -> None:
        """Report a non-fatal anomaly through the change channel.

        Args:
            property_name: EXCEPTION or UNRECOGNIZED
            event: Event at which the anomaly occurred
            message: Description of the anomaly
            value: Offending value (the exception, or the event)
        """
        self.fire_property_change_event(
            ParserNotification(
                self,
                property_name,
                None,
                value if value is not None else event,
                event=event,
                message=message,
            )
        )

    def _dispatch_notification(self, change: PropertyChangeEvent) -> None:
        if not isinstance(change, ParserNotification):
            return

        if self.notification_listener is not None:
            self.notification_listener(change)
            return

        if change.property_name in (EXCEPTION, UNRECOGNIZED):
            logger.warning(change.describe())
