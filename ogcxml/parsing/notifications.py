"""Parse-time diagnostics delivered through the context's change channel."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

from ogcxml.avlist.change import PropertyChangeEvent
from ogcxml.parsing.protocols import XMLEvent

# Property names of parser notifications
EXCEPTION = "Exception"
UNRECOGNIZED = "UnrecognizedElement"


@dataclass
class ParserNotification(PropertyChangeEvent):
    """A non-fatal anomaly met while parsing."""

    event: XMLEvent | None = None
    """Event at which the anomaly occurred."""

    message: str = ""
    """Human-readable description."""

    def describe(self) -> str:
        """Format the notification for logs and console output."""
        if self.event is None:
            return self.message
        where = f" on line {self.event.line}" if self.event.line is not None else ""
        return f"{self.message}: {self.event}{where}"


NotificationListener = Callable[[ParserNotification], None]
