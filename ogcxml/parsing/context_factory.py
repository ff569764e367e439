"""Process-wide factory of parser contexts keyed by content type and namespace."""

from __future__ import annotations

from dataclasses import dataclass, field
from threading import Lock
from typing import Iterable

from ogcxml.errors import InvalidArgumentError
from ogcxml.logging_config import logger
from ogcxml.parsing.context import ParserContext


@dataclass
class ContextTableEntry:
    """Prototype context registered for a set of content types."""

    content_types: list[str]
    prototype: ParserContext
    default_namespace: str = field(init=False)

    def __post_init__(self) -> None:
        self.default_namespace = self.prototype.default_namespace or ""


_entries: list[ContextTableEntry] = []
_lock = Lock()


def _make_entry(content_types: Iterable[str], prototype: ParserContext) -> ContextTableEntry:
    content_types = list(content_types or [])
    if not content_types:
        raise InvalidArgumentError("Content type list is empty")
    if prototype is None:
        raise InvalidArgumentError("Parser context is None")
    # Contexts are instantiated by copying the prototype
    if not callable(getattr(prototype, "copy", None)):
        raise InvalidArgumentError(
            f"Parser context {type(prototype).__name__} cannot be copied"
        )
    return ContextTableEntry(content_types, prototype)


def add_parser_context(content_types: Iterable[str], prototype: ParserContext) -> None:
    """Register a prototype context after the existing ones.

    Args:
        content_types: Content (MIME) types the context handles
        prototype: Context copied by create_parser_context()

    Raises:
        InvalidArgumentError: If no content types are given, the prototype
            is None or it cannot be copied
    """
    entry = _make_entry(content_types, prototype)
    with _lock:
        _entries.append(entry)


def prepend_parser_context(content_types: Iterable[str], prototype: ParserContext) -> None:
    """Register a prototype context ahead of the existing ones."""
    entry = _make_entry(content_types, prototype)
    with _lock:
        _entries.insert(0, entry)


def create_parser_context(
    content_type: str,
    default_namespace: str | None = None,
) -> ParserContext | None:
    """Create a context for a content type and default namespace.

    The first registered prototype handling the content type whose default
    namespace matches is copied. Prototypes failing to copy are skipped.

    Args:
        content_type: Content type of the document
        default_namespace: Default namespace of the document (None for none)

    Returns:
        A fresh context, or None when no prototype matches

    Raises:
        InvalidArgumentError: If content_type is None
    """
    if content_type is None:
        raise InvalidArgumentError("Content type is None")

    namespace = default_namespace or ""
    with _lock:
        entries = list(_entries)

    for entry in entries:
        if content_type not in entry.content_types or entry.default_namespace != namespace:
            continue
        try:
            return entry.prototype.copy()
        except Exception as e:
            logger.warning(f"Exception creating parser context for {content_type}: {e}")

    return None


def registered_content_types() -> set[str]:
    with _lock:
        return {content_type for entry in _entries for content_type in entry.content_types}


def clear() -> None:
    """Remove every registered prototype (used by tests)."""
    with _lock:
        _entries.clear()
