"""Shared configuration for the ogcxml package."""

import re

# HTTP timeout in seconds for remote capabilities documents
HTTP_TIMEOUT = 10

# Namespace of WMS 1.3.0 capabilities documents
WMS_NAMESPACE = "http://www.opengis.net/wms"

# Content types under which WMS capabilities are served
WMS_CONTENT_TYPES = (
    "application/vnd.ogc.wms_xml",
    "text/xml",
    "application/xml",
)

# Field key under which element parsers accumulate character data
CHARACTERS_CONTENT = "CharactersContent"

# Schemes that identify a document source as a remote URL
REMOTE_SOURCE_PATTERN = re.compile(r"^https?://", re.IGNORECASE)


def validate_namespace_uri(namespace_uri: str) -> None:
    """Validate a namespace URI.

    The empty string is the "no namespace" URI and is accepted.

    Args:
        namespace_uri: The namespace URI to validate

    Raises:
        ValueError: If the URI is not a string or contains whitespace
    """
    if not isinstance(namespace_uri, str):
        raise ValueError(f"Invalid namespace URI: {namespace_uri!r}")
    if any(ch.isspace() for ch in namespace_uri):
        raise ValueError(
            f"Invalid namespace URI: '{namespace_uri}'. Namespace URIs cannot contain whitespace"
        )


def is_remote_source(source: str) -> bool:
    """Check whether a document source string is an HTTP(S) URL."""
    return bool(REMOTE_SOURCE_PATTERN.match(source))
