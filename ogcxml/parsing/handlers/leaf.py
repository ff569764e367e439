"""Leaf parsers producing strings, numbers and booleans from element text.

These are the default parsers every ParserContext installs. A leaf
parser collects the text of its element and converts it when the end
element is reached. Text that cannot be converted raises
ElementContentError, which the parent parser reports as an Exception
notification.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from ogcxml.errors import ElementContentError
from ogcxml.parsing.parser import AbstractElementParser
from ogcxml.parsing.protocols import ElementKind

if TYPE_CHECKING:
    from ogcxml.parsing.context import ParserContext
    from ogcxml.parsing.protocols import XMLEvent


class LeafParser(AbstractElementParser):
    """Base for parsers whose value is the element's text.

    Attributes are ignored and nested elements are consumed without
    contributing to the value.
    """

    attribute_fields: dict[str, str] | None = {}

    def __init__(self, namespace_uri: str | None = "") -> None:
        super().__init__(namespace_uri)
        self._element_name = ""

    @property
    def element_kind(self) -> ElementKind:
        return ElementKind.LEAF_VALUE

    def parse(self, ctx: ParserContext, event: XMLEvent, *args: Any) -> Any:
        self._element_name = event.name.local_name if event is not None and event.name else ""
        return super().parse(ctx, event, *args)

    def do_parse_event_content(self, ctx: ParserContext, event: XMLEvent, *args: Any) -> None:
        if event.is_start_element:
            ctx.get_unrecognized_element_parser().parse(ctx, event, *args)

    def text(self) -> str | None:
        """Stripped element text, or None when the element is empty."""
        text = (self.characters or "").strip()
        return text or None

    def result(self) -> Any:
        text = self.text()
        return self.convert(text) if text is not None else None

    def convert(self, text: str) -> Any:
        return text

    def invalid(self, text: str, expected: str) -> ElementContentError:
        return ElementContentError(self._element_name, text, expected)


class StringParser(LeafParser):
    """Returns the stripped text of the element."""


class DoubleParser(LeafParser):
    def convert(self, text: str) -> float:
        try:
            return float(text)
        except ValueError:
            raise self.invalid(text, "a number") from None


class IntegerParser(LeafParser):
    def convert(self, text: str) -> int:
        try:
            return int(text)
        except ValueError:
            raise self.invalid(text, "an integer") from None


class BooleanParser(LeafParser):
    """Accepts true/false and 1/0, case-insensitively."""

    TRUE_VALUES = {"true", "1"}
    FALSE_VALUES = {"false", "0"}

    def convert(self, text: str) -> bool:
        value = text.lower()
        if value in self.TRUE_VALUES:
            return True
        if value in self.FALSE_VALUES:
            return False
        raise self.invalid(text, "a boolean")


class BooleanIntegerParser(LeafParser):
    """Accepts only 1 and 0."""

    def convert(self, text: str) -> bool:
        if text == "1":
            return True
        if text == "0":
            return False
        raise self.invalid(text, "0 or 1")
