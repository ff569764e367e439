"""WMS flavor of OGC capabilities documents (versions 1.1.x and 1.3.0)."""

from __future__ import annotations

from typing import Any

from ogcxml.config import WMS_CONTENT_TYPES, WMS_NAMESPACE
from ogcxml.ogc.capabilities import OGCCapabilities
from ogcxml.ogc.capability import OGCCapabilityInformation
from ogcxml.ogc.service import OGCServiceInformation
from ogcxml.parsing import context_factory
from ogcxml.parsing.context import ParserContext
from ogcxml.parsing.notifications import NotificationListener
from ogcxml.parsing.protocols import QName

# WMS 1.3.0 documents are qualified, 1.1.x documents are not
ROOT_ELEMENT_NAMES = (
    QName(WMS_NAMESPACE, "WMS_Capabilities"),
    QName(WMS_NAMESPACE, "WMT_MS_Capabilities"),
)


class WMSCapabilities(OGCCapabilities):
    """Capabilities document of a Web Map Service.

    Example:
        caps = WMSCapabilities("https://example.com/wms?request=GetCapabilities").parse()
    """

    content_type = WMS_CONTENT_TYPES[0]

    def __init__(
        self,
        doc_source: Any,
        notification_listener: NotificationListener | None = None,
    ) -> None:
        super().__init__(WMS_NAMESPACE, doc_source, notification_listener)

    @property
    def default_namespace_uri(self) -> str:
        return WMS_NAMESPACE

    def is_root_element_name(self, name: QName) -> bool:
        return any(self.parser_context.is_same_name(name, root) for root in ROOT_ELEMENT_NAMES)

    def register_parsers(self, ctx: ParserContext) -> None:
        if not ctx.has_parser(self.CAPABILITY):
            ctx.register_parser(self.CAPABILITY, OGCCapabilityInformation(WMS_NAMESPACE))


def create_wms_parser_context() -> ParserContext:
    """Build the prototype context for WMS documents."""
    ctx = ParserContext(default_namespace=WMS_NAMESPACE)
    ctx.register_parser(QName(WMS_NAMESPACE, "Service"), OGCServiceInformation(WMS_NAMESPACE))
    ctx.register_parser(QName(WMS_NAMESPACE, "Capability"), OGCCapabilityInformation(WMS_NAMESPACE))
    return ctx


context_factory.add_parser_context(WMS_CONTENT_TYPES, create_wms_parser_context())
