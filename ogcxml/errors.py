"""Exceptions raised by the ogcxml parsing engine and attribute store."""

from __future__ import annotations


class XMLParserError(Exception):
    """Base class for ogcxml errors."""


class InvalidArgumentError(XMLParserError, ValueError):
    """Raised when a public operation receives a missing key, name or source."""


class TypeMismatchError(XMLParserError, TypeError):
    """Raised when a stored value is read through an accessor of another type."""


class XMLStreamError(XMLParserError):
    """Raised when the document source cannot be read or tokenized."""


class UnterminatedElementError(XMLParserError):
    """Raised when the stream ends before an element's end tag."""

    def __init__(self, element_name: str, line: int | None = None) -> None:
        """Initialize the error.

        Args:
            element_name: Name of the element that was never closed
            line: Line on which the element started, if known
        """
        self.element_name = element_name
        self.line = line
        msg = f"Element <{element_name}> is not terminated"
        if line is not None:
            msg = f"{msg} (started on line {line})"
        super().__init__(msg)


class ParserInstantiationError(XMLParserError):
    """Raised when a prototype parser cannot produce a fresh instance."""


class ElementContentError(XMLParserError):
    """Raised by a leaf parser whose element text cannot be converted."""

    def __init__(self, element_name: str, text: str, expected: str) -> None:
        self.element_name = element_name
        self.text = text
        self.expected = expected
        super().__init__(f"Content of <{element_name}> is not {expected}: {text!r}")
