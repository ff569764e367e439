"""Shared test fixtures for ogcxml tests."""

from pathlib import Path
from unittest.mock import Mock

import pytest

from ogcxml.logging_config import GlobalIndent
from ogcxml.parsing import context_factory
from ogcxml.parsing.context import ParserContext
from ogcxml.parsing.events import EventStream
from ogcxml.parsing.sources import open_event_stream

# Shared fixtures directory
FIXTURES_DIR = Path(__file__).parent / "fixtures"

WMS_NS = "http://www.opengis.net/wms"


@pytest.fixture
def fixtures_dir() -> Path:
    """Return the path to the test fixtures directory."""
    return FIXTURES_DIR


@pytest.fixture(autouse=True)
def reset_indent():
    """Keep the tracing indentation from leaking between tests."""
    GlobalIndent.reset()
    yield
    GlobalIndent.reset()


@pytest.fixture
def restore_context_factory():
    """Restore the context factory registrations after a test changes them."""
    saved = list(context_factory._entries)
    yield
    context_factory.clear()
    context_factory._entries.extend(saved)


@pytest.fixture
def make_context():
    """Factory fixture to create a context reading an XML string.

    Usage:
        def test_example(make_context):
            ctx = make_context("<a><b>1</b></a>", default_namespace="urn:x")
            event = ctx.next_event()
    """

    def _create(xml: str, default_namespace: str = "", **kwargs) -> ParserContext:
        stream: EventStream = open_event_stream(xml)
        return ParserContext(stream, default_namespace=default_namespace, **kwargs)

    return _create


@pytest.fixture
def notifications():
    """List collecting the notifications delivered to a listener."""
    return []


@pytest.fixture
def mock_http_response():
    """Factory fixture to create mock HTTP responses.

    Usage:
        def test_example(mock_http_response):
            response = mock_http_response(b"<xml>content</xml>")
            # response.content == b"<xml>content</xml>"
            # response.raise_for_status() does nothing
    """

    def _create_response(content: bytes) -> Mock:
        response = Mock()
        response.content = content
        response.raise_for_status = Mock()
        return response

    return _create_response
