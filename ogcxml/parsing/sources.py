"""Open document sources of various kinds as EventStreams."""

from __future__ import annotations

import io
from pathlib import Path
from typing import Any

import requests

from ogcxml.config import HTTP_TIMEOUT, is_remote_source
from ogcxml.errors import InvalidArgumentError, XMLStreamError
from ogcxml.parsing.events import EventStream


def download_document(url: str) -> bytes:
    """Download a document over HTTP(S).

    Args:
        url: The document URL

    Returns:
        Raw response body

    Raises:
        requests.HTTPError: If the server answers with an error status
    """
    response = requests.get(url, timeout=HTTP_TIMEOUT)
    try:
        response.raise_for_status()
    except requests.HTTPError as e:
        raise requests.HTTPError(f"Failed to download {url}: {e}") from e
    return response.content


def open_event_stream(doc_source: Any) -> EventStream:
    """Open a document source as an EventStream.

    Accepted sources:
    - an EventStream (returned unchanged)
    - a Path, or a string naming an existing file
    - an http(s) URL string
    - a string holding the XML text itself (starts with "<")
    - bytes holding the XML document
    - a file-like object with readline()

    Args:
        doc_source: The document source

    Returns:
        An EventStream owning the opened source

    Raises:
        InvalidArgumentError: If the source is None or of an unsupported kind
        XMLStreamError: If a named file cannot be opened
    """
    if doc_source is None:
        raise InvalidArgumentError("Document source is None")

    if isinstance(doc_source, EventStream):
        return doc_source

    if isinstance(doc_source, (bytes, bytearray)):
        return EventStream(io.BytesIO(bytes(doc_source)), name="<bytes>")

    if isinstance(doc_source, str):
        text = doc_source.lstrip()
        if text.startswith("<"):
            return EventStream(io.StringIO(text), name="<string>")
        if is_remote_source(doc_source):
            return EventStream(io.BytesIO(download_document(doc_source)), name=doc_source)
        return _open_file(Path(doc_source))

    if isinstance(doc_source, Path):
        return _open_file(doc_source)

    if hasattr(doc_source, "readline"):
        return EventStream(doc_source, name=getattr(doc_source, "name", "<stream>"))

    raise InvalidArgumentError(
        f"Unsupported document source type: {type(doc_source).__name__}"
    )


def _open_file(path: Path) -> EventStream:
    try:
        handle = path.open("rb")
    except OSError as e:
        raise XMLStreamError(f"Cannot open document {path}: {e}") from e
    return EventStream(handle, name=str(path))
