"""Protocol definitions for the event-driven parsing engine."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from ogcxml.parsing.context import ParserContext


@dataclass(frozen=True)
class QName:
    """Namespace-qualified name.

    The empty namespace URI means "no namespace".

    Example:
        QName("http://www.opengis.net/wms", "Service")
        QName.from_clark("{http://www.opengis.net/wms}Service")
    """

    namespace_uri: str = ""
    local_name: str = ""

    @classmethod
    def local(cls, local_name: str) -> QName:
        """Create a name without namespace."""
        return cls("", local_name)

    @classmethod
    def from_clark(cls, clark: str) -> QName:
        """Parse Clark notation ({namespace}local) as produced by lxml."""
        if clark.startswith("{"):
            end = clark.find("}")
            if end != -1:
                return cls(clark[1:end], clark[end + 1 :])
        return cls("", clark)

    def to_clark(self) -> str:
        if self.namespace_uri:
            return f"{{{self.namespace_uri}}}{self.local_name}"
        return self.local_name

    def __str__(self) -> str:
        return self.to_clark()


class EventKind(Enum):
    """Kinds of structural events produced by an EventStream."""

    START_ELEMENT = auto()
    END_ELEMENT = auto()
    CHARACTERS = auto()


@dataclass(frozen=True)
class XMLEvent:
    """One structural event of a tokenized document."""

    kind: EventKind
    name: QName | None = None
    """Element name (start and end events only)."""

    attributes: dict[QName, str] = field(default_factory=dict)
    """Attributes of a start element."""

    data: str | None = None
    """Text of a character event."""

    line: int | None = None
    """Line of input being consumed when the event was produced."""

    @property
    def is_start_element(self) -> bool:
        return self.kind is EventKind.START_ELEMENT

    @property
    def is_end_element(self) -> bool:
        return self.kind is EventKind.END_ELEMENT

    @property
    def is_characters(self) -> bool:
        return self.kind is EventKind.CHARACTERS

    @property
    def is_whitespace(self) -> bool:
        """True for character events holding only whitespace."""
        return self.is_characters and not (self.data or "").strip()

    def attribute(self, local_name: str) -> str | None:
        """Get an attribute value by local name, ignoring its namespace."""
        for name, value in self.attributes.items():
            if name.local_name == local_name:
                return value
        return None

    def __str__(self) -> str:
        if self.is_start_element:
            return f"<{self.name}>"
        if self.is_end_element:
            return f"</{self.name}>"
        return repr(self.data)


class ElementKind(Enum):
    """Classification of parse results, used to integrate a child into its parent."""

    SERVICE_INFORMATION = auto()  # OGC <Service> block
    CAPABILITY_INFORMATION = auto()  # OGC <Capability> block
    LEAF_VALUE = auto()  # Strings, numbers, booleans
    COMPOSITE = auto()  # Elements with their own field set
    UNRECOGNIZED = auto()  # Elements without a registered parser


class ElementParser(Protocol):
    """Protocol for element parsers.

    A parser registered in a ParserContext is a prototype: the context
    asks it for a fresh instance for every element it parses. The
    instance consumes events up to and including the end event matching
    the start event it was given.
    """

    @property
    def element_kind(self) -> ElementKind:
        """Return the classification of the values this parser produces."""
        ...

    def new_instance(self) -> ElementParser:
        """Create a fresh working copy of this prototype.

        Raises:
            ParserInstantiationError: If no instance can be created
        """
        ...

    def parse(self, ctx: ParserContext, event: XMLEvent, *args: Any) -> Any:
        """Parse the element started by event.

        Args:
            ctx: Context providing events, parsers and the id table
            event: The start element event of the element to parse
            args: Caller arguments passed unchanged to child parsers

        Returns:
            The parsed value, or None if the element produced nothing

        Raises:
            UnterminatedElementError: If the stream ends before the end tag
        """
        ...
