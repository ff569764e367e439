"""Parsers for the OGC <Capability> block: request descriptions and exception formats."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from ogcxml.ogc.online_resource import OGCOnlineResource
from ogcxml.parsing.parser import AbstractElementParser
from ogcxml.parsing.protocols import ElementKind, ElementParser, QName

if TYPE_CHECKING:
    from ogcxml.parsing.context import ParserContext
    from ogcxml.parsing.protocols import XMLEvent


@dataclass
class DCPEndpoint:
    """One distributed computing platform endpoint of a request."""

    protocol: str
    """Platform, "HTTP" for every current OGC service."""

    method: str | None
    """HTTP method ("Get" or "Post"), if given."""

    href: str | None
    """Endpoint URL."""


class OGCDCPType(AbstractElementParser):
    """<DCPType><HTTP><Get><OnlineResource .../></Get></HTTP></DCPType>.

    HTTP, Get and Post are not consumed by child parsers; they only set
    the protocol and method for the OnlineResource elements that follow.
    """

    METHODS = ("Get", "Post")

    def __init__(self, namespace_uri: str | None = "") -> None:
        super().__init__(namespace_uri)
        self.endpoints: list[DCPEndpoint] = []
        self._protocol = ""
        self._method: str | None = None

    def do_parse_event_content(self, ctx: ParserContext, event: XMLEvent, *args: Any) -> None:
        if not event.is_start_element:
            return

        if ctx.is_start_element(event, QName(self.namespace_uri, "HTTP")):
            self._protocol = "HTTP"
        elif any(ctx.is_start_element(event, QName(self.namespace_uri, m)) for m in self.METHODS):
            self._method = event.name.local_name
        elif ctx.is_start_element(event, QName(self.namespace_uri, "OnlineResource")):
            parser = ctx.allocate(event, OGCOnlineResource(self.namespace_uri))
            resource = parser.parse(ctx, event, *args)
            if isinstance(resource, OGCOnlineResource):
                self.endpoints.append(DCPEndpoint(self._protocol, self._method, resource.href))
        else:
            super().do_parse_event_content(ctx, event, *args)


class OGCRequestDescription(AbstractElementParser):
    """One operation of the <Request> block, e.g. <GetMap>.

    The operation name is the element's local name.
    """

    def __init__(self, namespace_uri: str | None = "") -> None:
        super().__init__(namespace_uri)
        self.request_name: str | None = None
        self.formats: list[str] = []
        self.dcp_types: list[OGCDCPType] = []

    def parse(self, ctx: ParserContext, event: XMLEvent, *args: Any) -> Any:
        if event is not None and event.name is not None:
            self.request_name = event.name.local_name
        return super().parse(ctx, event, *args)

    def allocate(self, ctx: ParserContext, event: XMLEvent) -> ElementParser | None:
        default = None
        if ctx.is_start_element(event, QName(self.namespace_uri, "Format")):
            default = ctx.get_string_parser()
        elif ctx.is_start_element(event, QName(self.namespace_uri, "DCPType")):
            default = OGCDCPType(self.namespace_uri)
        return ctx.allocate(event, default)

    def do_add_event_content(self, result: Any, kind: ElementKind, ctx, event, *args) -> None:
        if isinstance(result, OGCDCPType):
            self.dcp_types.append(result)
        elif event.name.local_name == "Format" and isinstance(result, str):
            self.formats.append(result)
        else:
            super().do_add_event_content(result, kind, ctx, event, *args)

    @property
    def endpoints(self) -> list[DCPEndpoint]:
        return [endpoint for dcp in self.dcp_types for endpoint in dcp.endpoints]

    def get_online_resource(self, method: str = "Get") -> str | None:
        """URL of the first endpoint for an HTTP method."""
        for endpoint in self.endpoints:
            if endpoint.method == method:
                return endpoint.href
        return None

    def __str__(self) -> str:
        return f"{self.request_name}: formats {', '.join(self.formats) or 'none'}"


class OGCRequestList(AbstractElementParser):
    """<Request>: every child is an operation; parses to a list of descriptions."""

    def __init__(self, namespace_uri: str | None = "") -> None:
        super().__init__(namespace_uri)
        self.descriptions: list[OGCRequestDescription] = []

    def allocate(self, ctx: ParserContext, event: XMLEvent) -> ElementParser | None:
        return ctx.allocate(event, OGCRequestDescription(self.namespace_uri))

    def do_add_event_content(self, result: Any, kind: ElementKind, ctx, event, *args) -> None:
        if isinstance(result, OGCRequestDescription):
            self.descriptions.append(result)

    def result(self) -> list[OGCRequestDescription]:
        return self.descriptions


class OGCExceptionFormats(AbstractElementParser):
    """<Exception>: parses to the list of its <Format> strings."""

    def __init__(self, namespace_uri: str | None = "") -> None:
        super().__init__(namespace_uri)
        self.formats: list[str] = []

    def allocate(self, ctx: ParserContext, event: XMLEvent) -> ElementParser | None:
        default = None
        if ctx.is_start_element(event, QName(self.namespace_uri, "Format")):
            default = ctx.get_string_parser()
        return ctx.allocate(event, default)

    def do_add_event_content(self, result: Any, kind: ElementKind, ctx, event, *args) -> None:
        if isinstance(result, str):
            self.formats.append(result)

    def result(self) -> list[str]:
        return self.formats


class OGCCapabilityInformation(AbstractElementParser):
    """The <Capability> block.

    Request and Exception are understood; layers and extended
    capabilities are left to registered parsers or the unrecognized
    element parser.
    """

    def __init__(self, namespace_uri: str | None = "") -> None:
        super().__init__(namespace_uri)
        self.request_descriptions: list[OGCRequestDescription] = []
        self.exception_formats: list[str] = []

    @property
    def element_kind(self) -> ElementKind:
        return ElementKind.CAPABILITY_INFORMATION

    def allocate(self, ctx: ParserContext, event: XMLEvent) -> ElementParser | None:
        default = None
        if ctx.is_start_element(event, QName(self.namespace_uri, "Request")):
            default = OGCRequestList(self.namespace_uri)
        elif ctx.is_start_element(event, QName(self.namespace_uri, "Exception")):
            default = OGCExceptionFormats(self.namespace_uri)
        return ctx.allocate(event, default)

    def do_add_event_content(self, result: Any, kind: ElementKind, ctx, event, *args) -> None:
        if ctx.is_start_element(event, QName(self.namespace_uri, "Request")) and isinstance(result, list):
            self.request_descriptions.extend(result)
        elif ctx.is_start_element(event, QName(self.namespace_uri, "Exception")) and isinstance(result, list):
            self.exception_formats.extend(result)
        else:
            super().do_add_event_content(result, kind, ctx, event, *args)

    @property
    def request_names(self) -> list[str]:
        return [d.request_name for d in self.request_descriptions if d.request_name]

    def get_request_description(self, name: str) -> OGCRequestDescription | None:
        for description in self.request_descriptions:
            if description.request_name == name:
                return description
        return None

    def __str__(self) -> str:
        lines = ["Capability Information:", "  Requests:"]
        lines.extend(f"    {d}" for d in self.request_descriptions)
        lines.append(f"  Exception formats: {', '.join(self.exception_formats) or 'none'}")
        return "\n".join(lines)
