"""Root parser of OGC capabilities documents."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from ogcxml.errors import InvalidArgumentError
from ogcxml.logging_config import logger
from ogcxml.ogc.capability import OGCCapabilityInformation
from ogcxml.ogc.service import OGCServiceInformation
from ogcxml.parsing import context_factory
from ogcxml.parsing.context import ParserContext
from ogcxml.parsing.events import EventStream
from ogcxml.parsing.notifications import NotificationListener
from ogcxml.parsing.parser import AbstractElementParser
from ogcxml.parsing.protocols import ElementKind, ElementParser, QName, XMLEvent
from ogcxml.parsing.sources import open_event_stream


class OGCCapabilities(AbstractElementParser, ABC):
    """A capabilities document and the parser that reads it.

    Subclasses name the default namespace and the accepted root elements
    of their service flavor, and register the parser of their
    <Capability> block.

    Example:
        caps = WMSCapabilities("caps.xml").parse()
        if caps is not None:
            print(caps.version, caps.service_information.title)
    """

    content_type = "text/xml"

    def __init__(
        self,
        namespace_uri: str,
        doc_source: Any,
        notification_listener: NotificationListener | None = None,
    ) -> None:
        """Open the document source and prepare the parser context.

        Args:
            namespace_uri: Namespace of the document's elements
            doc_source: Anything open_event_stream() accepts
            notification_listener: Receiver of parse diagnostics

        Raises:
            InvalidArgumentError: If namespace_uri or doc_source is None
        """
        if namespace_uri is None:
            raise InvalidArgumentError("Namespace URI is None")
        super().__init__(namespace_uri)

        self._version: str | None = None
        self._update_sequence: str | None = None
        self._service_information: OGCServiceInformation | None = None
        self._capability_information: OGCCapabilityInformation | None = None

        self.SERVICE = QName(namespace_uri, "Service")
        self.CAPABILITY = QName(namespace_uri, "Capability")
        self.VERSION = QName(namespace_uri, "version")
        self.UPDATE_SEQUENCE = QName(namespace_uri, "updateSequence")

        self.event_stream = self.create_event_stream(doc_source)
        try:
            self.parser_context = self.create_parser_context(self.event_stream)
            if notification_listener is not None:
                self.parser_context.notification_listener = notification_listener

            if not self.parser_context.has_parser(self.SERVICE):
                self.parser_context.register_parser(
                    self.SERVICE, OGCServiceInformation(namespace_uri)
                )
            self.register_parsers(self.parser_context)
        except Exception:
            self.event_stream.close()
            raise

    @property
    @abstractmethod
    def default_namespace_uri(self) -> str:
        """Namespace assumed for unqualified element names."""

    @abstractmethod
    def is_root_element_name(self, name: QName) -> bool:
        """Check whether name is a root element of this document flavor."""

    def register_parsers(self, ctx: ParserContext) -> None:
        """Register flavor-specific parsers, such as the <Capability> parser."""

    def create_event_stream(self, doc_source: Any) -> EventStream:
        return open_event_stream(doc_source)

    def create_parser_context(self, event_stream: EventStream) -> ParserContext:
        """Get a context from the context factory, or build a plain one."""
        ctx = context_factory.create_parser_context(
            self.content_type, self.default_namespace_uri
        )
        if ctx is None:
            ctx = ParserContext(default_namespace=self.default_namespace_uri)
        ctx.event_stream = event_stream
        return ctx

    def parse(self, *args: Any) -> OGCCapabilities | None:
        """Parse the document.

        Events before the root element are skipped. The event stream is
        closed when parsing ends, successfully or not.

        Args:
            args: Passed unchanged to every element parser

        Returns:
            self, populated, or None if the root element was never found

        Raises:
            UnterminatedElementError: If the document ends inside an element
            XMLStreamError: If the document cannot be read or is malformed
        """
        ctx = self.parser_context
        try:
            event = ctx.next_event()
            while event is not None:
                if event.is_start_element and self.is_root_element_name(event.name):
                    super().parse(ctx, event, *args)
                    return self
                event = ctx.next_event()

            logger.info(f"No capabilities root element found in {self.event_stream.name}")
            return None
        finally:
            self.event_stream.close()

    def do_parse_event_attributes(self, ctx: ParserContext, event: XMLEvent, *args: Any) -> None:
        for name, value in event.attributes.items():
            if ctx.is_same_attribute_name(name, self.VERSION):
                self._version = value
            elif ctx.is_same_attribute_name(name, self.UPDATE_SEQUENCE):
                self._update_sequence = value

    def allocate(self, ctx: ParserContext, event: XMLEvent) -> ElementParser | None:
        default = None
        if ctx.is_start_element(event, self.SERVICE):
            default = OGCServiceInformation(self.namespace_uri)
        return ctx.allocate(event, default)

    def do_add_event_content(self, result: Any, kind: ElementKind, ctx, event, *args) -> None:
        if kind is ElementKind.SERVICE_INFORMATION:
            if self._service_information is not None:
                logger.debug(f"Ignoring duplicate {event.name} on line {event.line}")
                return
            self._service_information = result
        elif kind is ElementKind.CAPABILITY_INFORMATION:
            if self._capability_information is not None:
                logger.debug(f"Ignoring duplicate {event.name} on line {event.line}")
                return
            self._capability_information = result
        else:
            logger.debug(f"Ignoring {event.name} in capabilities document")

    @property
    def version(self) -> str | None:
        return self._version

    @property
    def update_sequence(self) -> str | None:
        return self._update_sequence

    @property
    def service_information(self) -> OGCServiceInformation | None:
        return self._service_information

    @property
    def capability_information(self) -> OGCCapabilityInformation | None:
        return self._capability_information

    def __str__(self) -> str:
        lines = [
            f"Version: {self.version or 'none'}",
            f"UpdateSequence: {self.update_sequence or 'none'}",
            str(self.service_information or "Service Information: none"),
            str(self.capability_information or "Capability Information: none"),
        ]
        return "\n".join(lines) + "\n"
