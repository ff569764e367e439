"""Default parsers installed in every parser context."""

from ogcxml.parsing.handlers.leaf import (
    BooleanIntegerParser,
    BooleanParser,
    DoubleParser,
    IntegerParser,
    LeafParser,
    StringParser,
)
from ogcxml.parsing.handlers.unrecognized import UnrecognizedElementParser

__all__ = [
    "BooleanIntegerParser",
    "BooleanParser",
    "DoubleParser",
    "IntegerParser",
    "LeafParser",
    "StringParser",
    "UnrecognizedElementParser",
]
