"""Parsers for the OGC <Service> block of a capabilities document."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from ogcxml.avlist.store import get_int_value, get_string_value
from ogcxml.ogc.online_resource import OGCOnlineResource
from ogcxml.parsing.parser import AbstractElementParser
from ogcxml.parsing.protocols import ElementKind, ElementParser, QName

if TYPE_CHECKING:
    from ogcxml.parsing.context import ParserContext
    from ogcxml.parsing.protocols import XMLEvent


class OGCKeywordList(AbstractElementParser):
    """Collects the <Keyword> strings of a <KeywordList>; parses to a list."""

    def __init__(self, namespace_uri: str | None = "") -> None:
        super().__init__(namespace_uri)
        self.keywords: list[str] = []

    def allocate(self, ctx: ParserContext, event: XMLEvent) -> ElementParser | None:
        default = None
        if ctx.is_start_element(event, QName(self.namespace_uri, "Keyword")):
            default = ctx.get_string_parser()
        return ctx.allocate(event, default)

    def do_add_event_content(self, result: Any, kind: ElementKind, ctx, event, *args) -> None:
        if isinstance(result, str):
            self.keywords.append(result)

    def result(self) -> list[str]:
        return self.keywords


class OGCContactInformation(AbstractElementParser):
    """<ContactInformation> and its nested groups.

    Nested groups are parsed by further contact parsers, every other child
    as a string.
    """

    GROUPS = ("ContactPersonPrimary", "ContactAddress")

    def allocate(self, ctx: ParserContext, event: XMLEvent) -> ElementParser | None:
        if event.name.local_name in self.GROUPS:
            default = OGCContactInformation(self.namespace_uri)
        else:
            default = ctx.get_string_parser()
        return ctx.allocate(event, default)

    def _group_value(self, group: str, key: str) -> str | None:
        parser = self.get_field(group)
        if not isinstance(parser, OGCContactInformation):
            return None
        return get_string_value(parser.fields, key)

    @property
    def person(self) -> str | None:
        return self._group_value("ContactPersonPrimary", "ContactPerson")

    @property
    def organization(self) -> str | None:
        return self._group_value("ContactPersonPrimary", "ContactOrganization")

    @property
    def position(self) -> str | None:
        return get_string_value(self.fields, "ContactPosition")

    @property
    def city(self) -> str | None:
        return self._group_value("ContactAddress", "City")

    @property
    def country(self) -> str | None:
        return self._group_value("ContactAddress", "Country")

    @property
    def voice_telephone(self) -> str | None:
        return get_string_value(self.fields, "ContactVoiceTelephone")

    @property
    def email(self) -> str | None:
        return get_string_value(self.fields, "ContactElectronicMailAddress")


class OGCServiceInformation(AbstractElementParser):
    """The <Service> block: name, title, abstract, keywords, contact and limits."""

    STRING_FIELDS = ("Name", "Title", "Abstract", "Fees", "AccessConstraints")
    INTEGER_FIELDS = ("LayerLimit", "MaxWidth", "MaxHeight")

    @property
    def element_kind(self) -> ElementKind:
        return ElementKind.SERVICE_INFORMATION

    def allocate(self, ctx: ParserContext, event: XMLEvent) -> ElementParser | None:
        local_name = event.name.local_name
        if not ctx.is_start_element(event, QName(self.namespace_uri, local_name)):
            return ctx.allocate(event)

        default: ElementParser | None = None
        if local_name in self.STRING_FIELDS:
            default = ctx.get_string_parser()
        elif local_name in self.INTEGER_FIELDS:
            default = ctx.get_integer_parser()
        elif local_name == "KeywordList":
            default = OGCKeywordList(self.namespace_uri)
        elif local_name == "OnlineResource":
            default = OGCOnlineResource(self.namespace_uri)
        elif local_name == "ContactInformation":
            default = OGCContactInformation(self.namespace_uri)
        return ctx.allocate(event, default)

    @property
    def name(self) -> str | None:
        return get_string_value(self.fields, "Name")

    @property
    def title(self) -> str | None:
        return get_string_value(self.fields, "Title")

    @property
    def abstract(self) -> str | None:
        return get_string_value(self.fields, "Abstract")

    @property
    def fees(self) -> str | None:
        return get_string_value(self.fields, "Fees")

    @property
    def access_constraints(self) -> str | None:
        return get_string_value(self.fields, "AccessConstraints")

    @property
    def layer_limit(self) -> int | None:
        return get_int_value(self.fields, "LayerLimit")

    @property
    def max_width(self) -> int | None:
        return get_int_value(self.fields, "MaxWidth")

    @property
    def max_height(self) -> int | None:
        return get_int_value(self.fields, "MaxHeight")

    @property
    def keywords(self) -> list[str]:
        keywords = self.get_field("KeywordList")
        return list(keywords) if isinstance(keywords, list) else []

    @property
    def online_resource(self) -> OGCOnlineResource | None:
        resource = self.get_field("OnlineResource")
        return resource if isinstance(resource, OGCOnlineResource) else None

    @property
    def contact_information(self) -> OGCContactInformation | None:
        contact = self.get_field("ContactInformation")
        return contact if isinstance(contact, OGCContactInformation) else None

    def __str__(self) -> str:
        lines = [
            "Service Information:",
            f"  Name: {self.name or 'none'}",
            f"  Title: {self.title or 'none'}",
            f"  Abstract: {self.abstract or 'none'}",
            f"  Keywords: {', '.join(self.keywords) or 'none'}",
            f"  OnlineResource: {self.online_resource or 'none'}",
            f"  Fees: {self.fees or 'none'}",
            f"  AccessConstraints: {self.access_constraints or 'none'}",
        ]
        return "\n".join(lines)
