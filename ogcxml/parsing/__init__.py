"""Event-driven, namespace-aware XML parsing engine."""

from ogcxml.parsing.context import (
    BOOLEAN,
    BOOLEAN_INTEGER,
    DOUBLE,
    INTEGER,
    STRING,
    UNRECOGNIZED_ELEMENT,
    ParserContext,
)
from ogcxml.parsing.events import EventStream
from ogcxml.parsing.notifications import (
    EXCEPTION,
    UNRECOGNIZED,
    NotificationListener,
    ParserNotification,
)
from ogcxml.parsing.parser import AbstractElementParser, CompositeParser
from ogcxml.parsing.protocols import (
    ElementKind,
    ElementParser,
    EventKind,
    QName,
    XMLEvent,
)
from ogcxml.parsing.sources import open_event_stream

__all__ = [
    "AbstractElementParser",
    "BOOLEAN",
    "BOOLEAN_INTEGER",
    "CompositeParser",
    "DOUBLE",
    "EXCEPTION",
    "ElementKind",
    "ElementParser",
    "EventKind",
    "EventStream",
    "INTEGER",
    "NotificationListener",
    "ParserContext",
    "ParserNotification",
    "QName",
    "STRING",
    "UNRECOGNIZED",
    "UNRECOGNIZED_ELEMENT",
    "XMLEvent",
    "open_event_stream",
]
