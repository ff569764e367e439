"""OGC capabilities documents built on the parsing engine."""

from ogcxml.ogc.capabilities import OGCCapabilities
from ogcxml.ogc.capability import (
    DCPEndpoint,
    OGCCapabilityInformation,
    OGCDCPType,
    OGCExceptionFormats,
    OGCRequestDescription,
    OGCRequestList,
)
from ogcxml.ogc.online_resource import OGCOnlineResource
from ogcxml.ogc.service import (
    OGCContactInformation,
    OGCKeywordList,
    OGCServiceInformation,
)
from ogcxml.ogc.wms import WMSCapabilities, create_wms_parser_context

__all__ = [
    "DCPEndpoint",
    "OGCCapabilities",
    "OGCCapabilityInformation",
    "OGCContactInformation",
    "OGCDCPType",
    "OGCExceptionFormats",
    "OGCKeywordList",
    "OGCOnlineResource",
    "OGCRequestDescription",
    "OGCRequestList",
    "OGCServiceInformation",
    "WMSCapabilities",
    "create_wms_parser_context",
]
