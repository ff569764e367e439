"""Parser for elements that have no registered parser."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from ogcxml.parsing.parser import AbstractElementParser
from ogcxml.parsing.protocols import ElementKind

if TYPE_CHECKING:
    from ogcxml.parsing.context import ParserContext
    from ogcxml.parsing.protocols import XMLEvent


class UnrecognizedElementParser(AbstractElementParser):
    """Consumes an unknown element and everything inside it.

    Attributes and direct text are kept as fields. Descendants are parsed
    with further unrecognized parsers and kept under their local names,
    without raising more notifications.
    """

    @property
    def element_kind(self) -> ElementKind:
        return ElementKind.UNRECOGNIZED

    def do_parse_event_content(self, ctx: ParserContext, event: XMLEvent, *args: Any) -> None:
        if not event.is_start_element:
            return
        child = self.new_instance()
        self.set_field(event.name, child.parse(ctx, event, *args))
