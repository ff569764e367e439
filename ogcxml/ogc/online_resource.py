"""Parser for OGC <OnlineResource> elements."""

from __future__ import annotations

from ogcxml.avlist.store import get_string_value
from ogcxml.parsing.parser import AbstractElementParser


class OGCOnlineResource(AbstractElementParser):
    """An xlink reference: <OnlineResource xlink:type="simple" xlink:href="..."/>.

    Attributes are matched by local name, so documents that omit or use
    another prefix for the xlink namespace parse the same way.
    """

    attribute_fields = {"href": "href", "type": "type"}

    @property
    def href(self) -> str | None:
        return get_string_value(self.fields, "href")

    @property
    def type(self) -> str | None:
        return get_string_value(self.fields, "type")

    def __str__(self) -> str:
        return f"href: {self.href or 'none'}, type: {self.type or 'none'}"
