"""Pull-style event stream over lxml's feed parser."""

from __future__ import annotations

from collections import deque
from typing import IO, Iterator

from lxml import etree

from ogcxml.errors import XMLStreamError
from ogcxml.logging_config import logger
from ogcxml.parsing.protocols import EventKind, QName, XMLEvent


class _EventCollector:
    """lxml parser target that turns callbacks into queued XMLEvents.

    Adjacent text callbacks are joined into a single character event.
    """

    def __init__(self) -> None:
        self.events: deque[XMLEvent] = deque()
        self.depth = 0
        self.seen_root = False
        self.line: int | None = None
        self._text: list[str] = []

    def _flush_text(self) -> None:
        if self._text:
            self.events.append(
                XMLEvent(EventKind.CHARACTERS, data="".join(self._text), line=self.line)
            )
            self._text = []

    def start(self, tag, attrib, nsmap=None) -> None:
        self._flush_text()
        attributes = {QName.from_clark(key): value for key, value in attrib.items()}
        self.events.append(
            XMLEvent(
                EventKind.START_ELEMENT,
                name=QName.from_clark(tag),
                attributes=attributes,
                line=self.line,
            )
        )
        self.depth += 1
        self.seen_root = True

    def end(self, tag) -> None:
        self._flush_text()
        self.events.append(
            XMLEvent(EventKind.END_ELEMENT, name=QName.from_clark(tag), line=self.line)
        )
        self.depth -= 1

    def data(self, data: str) -> None:
        self._text.append(data)

    def close(self) -> None:
        self._flush_text()


class EventStream:
    """Structural events of one document, read on demand.

    The stream owns its source: close() releases it, and the stream is
    a context manager. Input is fed to lxml one line at a time, so an
    event's line is the line being consumed when it was produced.

    A document that ends inside an open element simply ends the stream;
    the element parser waiting for the end tag reports the failure.

    Example:
        with EventStream(open("caps.xml", "rb")) as stream:
            for event in stream:
                print(event)
    """

    def __init__(
        self,
        source: IO,
        name: str = "<stream>",
        skip_whitespace: bool = True,
    ) -> None:
        """Initialize the stream.

        Args:
            source: Binary (or text) file-like object supporting readline()
            name: Description of the source for error messages
            skip_whitespace: Drop character events holding only whitespace
        """
        self.name = name
        self.skip_whitespace = skip_whitespace
        self._source = source
        self._collector = _EventCollector()
        self._parser: etree.XMLParser | None = None
        self._line = 0
        self._exhausted = False
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def next_event(self) -> XMLEvent | None:
        """Return the next event, or None at the end of the document.

        Raises:
            XMLStreamError: If the source cannot be read or is malformed
        """
        while True:
            while self._collector.events:
                event = self._collector.events.popleft()
                if self.skip_whitespace and event.is_whitespace:
                    continue
                return event

            if self._exhausted or self._closed:
                return None
            self._feed_next_line()

    def _feed_next_line(self) -> None:
        try:
            chunk = self._source.readline()
        except (OSError, ValueError) as e:
            raise XMLStreamError(f"Cannot read {self.name}: {e}") from e

        if not chunk:
            self._finish()
            return

        if isinstance(chunk, str):
            chunk = chunk.encode("utf-8")
            encoding = "utf-8"
        else:
            encoding = None

        if self._parser is None:
            self._parser = self._create_parser(encoding)

        self._line += 1
        self._collector.line = self._line
        try:
            self._parser.feed(chunk)
        except etree.XMLSyntaxError as e:
            raise XMLStreamError(
                f"Malformed XML in {self.name} near line {self._line}: {e}"
            ) from e

    def _create_parser(self, encoding: str | None) -> etree.XMLParser:
        # Text sources are already decoded: their encoding declaration no longer applies
        return etree.XMLParser(
            target=self._collector,
            encoding=encoding,
            resolve_entities=False,
            no_network=True,
            load_dtd=False,
        )

    def _finish(self) -> None:
        self._exhausted = True
        if self._parser is None:
            logger.debug(f"Document {self.name} is empty")
            return
        try:
            self._parser.close()
        except etree.XMLSyntaxError as e:
            if self._collector.depth > 0 or not self._collector.seen_root:
                # Truncated or empty document: report end of stream
                logger.debug(f"Document {self.name} ended early: {e}")
                self._collector.close()
                return
            raise XMLStreamError(f"Malformed XML in {self.name}: {e}") from e

    def close(self) -> None:
        """Release the underlying source. Safe to call more than once."""
        if self._closed:
            return
        self._closed = True
        close = getattr(self._source, "close", None)
        if close is not None:
            close()

    def __iter__(self) -> Iterator[XMLEvent]:
        event = self.next_event()
        while event is not None:
            yield event
            event = self.next_event()

    def __enter__(self) -> EventStream:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
