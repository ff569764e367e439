"""Base element parser implementing the recursive parse protocol."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Mapping

from ogcxml.avlist.store import AttributeStore
from ogcxml.config import CHARACTERS_CONTENT
from ogcxml.errors import (
    ElementContentError,
    InvalidArgumentError,
    ParserInstantiationError,
    UnterminatedElementError,
)
from ogcxml.logging_config import logger
from ogcxml.parsing.notifications import EXCEPTION, UNRECOGNIZED
from ogcxml.parsing.protocols import ElementKind, ElementParser, QName, XMLEvent

if TYPE_CHECKING:
    from ogcxml.parsing.context import ParserContext


class AbstractElementParser:
    """Parser for one element, storing what it finds in a field store.

    parse() handles the element's attributes once, then pulls events
    until the matching end element:

    - character data is appended to the CharactersContent field
    - start elements are handed to a child parser obtained through
      allocate(); elements nobody handles go to the context's
      unrecognized-element parser and raise an UnrecognizedElement
      notification
    - child results are integrated through do_add_event_content()

    Subclasses customise the do_* hooks and allocate(). Set
    attribute_fields to a mapping of attribute local names to field keys
    to store only those attributes; when it is None, every attribute is
    stored under its local name.
    """

    attribute_fields: dict[str, str] | None = None

    def __init__(self, namespace_uri: str | None = "") -> None:
        self.namespace_uri = namespace_uri or ""
        self._fields: AttributeStore | None = None

    @property
    def element_kind(self) -> ElementKind:
        return ElementKind.COMPOSITE

    def new_instance(self) -> AbstractElementParser:
        """Create a fresh parser of the same class and namespace.

        Raises:
            ParserInstantiationError: If the class cannot be built from a namespace URI
        """
        try:
            return type(self)(self.namespace_uri)
        except TypeError as e:
            raise ParserInstantiationError(
                f"Cannot create a new {type(self).__name__}: {e}"
            ) from e

    # Fields

    @property
    def fields(self) -> AttributeStore:
        if self._fields is None:
            self._fields = AttributeStore()
        return self._fields

    def has_fields(self) -> bool:
        return self._fields is not None and len(self._fields) > 0

    def has_field(self, key: str | QName) -> bool:
        key = key.local_name if isinstance(key, QName) else key
        return self._fields is not None and self._fields.has_key(key)

    def get_field(self, key: str | QName) -> Any:
        key = key.local_name if isinstance(key, QName) else key
        return self._fields.get_value(key) if self._fields is not None else None

    def set_field(self, key: str | QName, value: Any) -> None:
        key = key.local_name if isinstance(key, QName) else key
        self.fields.set_value(key, value)

    def set_fields(self, values: AttributeStore | Mapping[str, Any]) -> None:
        self.fields.set_values(values)

    @property
    def characters(self) -> str | None:
        """Character data collected directly inside the element."""
        return self.get_field(CHARACTERS_CONTENT)

    # Parse protocol

    def parse(self, ctx: ParserContext, event: XMLEvent, *args: Any) -> Any:
        """Parse the element started by event.

        Args:
            ctx: The parser context
            event: Start element event of this element
            args: Passed unchanged to every child parser

        Returns:
            The value produced by result(), self by default

        Raises:
            InvalidArgumentError: If ctx or event is None
            UnterminatedElementError: If the stream ends before the end tag
        """
        if ctx is None:
            raise InvalidArgumentError("Parser context is None")
        if event is None:
            raise InvalidArgumentError("Event is None")

        with logger.indent_block(f"{event} line {event.line}"):
            self.do_parse_event_attributes(ctx, event, *args)

            element_id = self.get_field("id")
            if isinstance(element_id, str):
                ctx.add_id(element_id, self)

            next_event = ctx.next_event()
            while next_event is not None:
                if ctx.is_end_element(next_event, event):
                    self.do_finish_parsing(ctx, next_event, *args)
                    return self.result()

                if next_event.is_characters:
                    self.do_add_characters(ctx, next_event, *args)
                else:
                    try:
                        self.do_parse_event_content(ctx, next_event, *args)
                    except ElementContentError as e:
                        ctx.notify(EXCEPTION, next_event, "Exception parsing element", e)

                next_event = ctx.next_event()

        raise UnterminatedElementError(str(event.name), event.line)

    def result(self) -> Any:
        """Value returned once the end element has been reached."""
        return self

    def do_parse_event_attributes(self, ctx: ParserContext, event: XMLEvent, *args: Any) -> None:
        for name, value in event.attributes.items():
            if self.attribute_fields is None:
                self.set_field(name.local_name, value)
                continue

            field_key = self.attribute_fields.get(name.local_name)
            if field_key is not None:
                self.set_field(field_key, value)

    def do_add_characters(self, ctx: ParserContext, event: XMLEvent, *args: Any) -> None:
        text = ctx.get_characters(event)
        if not text:
            return
        previous = self.get_field(CHARACTERS_CONTENT)
        self.set_field(CHARACTERS_CONTENT, previous + text if previous else text)

    def allocate(self, ctx: ParserContext, event: XMLEvent) -> ElementParser | None:
        """Get the parser for a child element.

        Subclasses pass a local default to ctx.allocate() for children the
        registry may not know.
        """
        return ctx.allocate(event)

    def do_parse_event_content(self, ctx: ParserContext, event: XMLEvent, *args: Any) -> None:
        if not event.is_start_element:
            return

        parser = self.allocate(ctx, event)
        if parser is None:
            ctx.notify(UNRECOGNIZED, event, "Unrecognized element")
            parser = ctx.get_unrecognized_element_parser()

        result = parser.parse(ctx, event, *args)
        if result is not None:
            self.do_add_event_content(result, parser.element_kind, ctx, event, *args)

    def do_add_event_content(
        self,
        result: Any,
        kind: ElementKind,
        ctx: ParserContext,
        event: XMLEvent,
        *args: Any,
    ) -> None:
        """Integrate a child result; stored under the child's local name by default."""
        self.set_field(event.name, result)

    def do_finish_parsing(self, ctx: ParserContext, event: XMLEvent, *args: Any) -> None:
        """Hook called with the end element event before result() is returned."""

    def __repr__(self) -> str:
        fields = dict(self._fields.entries()) if self._fields is not None else {}
        return f"{type(self).__name__}({fields!r})"


class CompositeParser(AbstractElementParser):
    """Generic parser that keeps each child result in a field named after the child."""
