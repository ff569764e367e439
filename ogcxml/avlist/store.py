"""Observable, thread-safe attribute-value store."""

from __future__ import annotations

import threading
from typing import Any, Mapping

from ogcxml.avlist.change import ChangeSupport, PropertyChangeEvent, PropertyChangeListener
from ogcxml.errors import InvalidArgumentError, TypeMismatchError
from ogcxml.logging_config import logger


def _check_key(key: str | None, what: str = "Key") -> None:
    if key is None:
        raise InvalidArgumentError(f"{what} is None")


class AttributeStore:
    """Mutable string-keyed map of arbitrary values with change notification.

    The backing dict is only created on first write. A stored None is a
    real entry, distinguishable from a missing key through has_key().
    Every public operation holds a per-instance reentrant lock, so a store
    can be shared between threads.
    """

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._values: dict[str, Any] | None = None
        self._change_support: ChangeSupport | None = None

    def _map(self) -> dict[str, Any]:
        if self._values is None:
            self._values = {}
        return self._values

    def get_value(self, key: str) -> Any:
        """Get the value stored under a key.

        Args:
            key: The attribute key

        Returns:
            The stored value, or None when the key has no entry

        Raises:
            InvalidArgumentError: If key is None
        """
        _check_key(key)
        with self._lock:
            if self._values is None:
                return None
            return self._values.get(key)

    def get_string_value(self, key: str) -> str | None:
        """Get a value that must be a string.

        Raises:
            InvalidArgumentError: If key is None
            TypeMismatchError: If the stored value is not a string
        """
        _check_key(key)
        with self._lock:
            value = self.get_value(key)
            if value is not None and not isinstance(value, str):
                raise TypeMismatchError(
                    f"Value for key '{key}' is not a string: {value!r}"
                )
            return value

    def set_value(self, key: str, value: Any) -> Any:
        """Store a value, replacing any previous entry.

        Returns:
            The previous value, or None
        """
        _check_key(key)
        with self._lock:
            values = self._map()
            previous = values.get(key)
            values[key] = value
            return previous

    def set_values(self, other: AttributeStore | Mapping[str, Any]) -> AttributeStore:
        """Copy every entry of another store (or a mapping) onto this one.

        Entries already present under the same key are overwritten.

        Raises:
            InvalidArgumentError: If other is None
        """
        if other is None:
            raise InvalidArgumentError("Attribute store to merge is None")
        entries = other.entries() if isinstance(other, AttributeStore) else list(other.items())
        with self._lock:
            for key, value in entries:
                self.set_value(key, value)
        return self

    def has_key(self, key: str) -> bool:
        _check_key(key)
        with self._lock:
            return self._values is not None and key in self._values

    def remove_key(self, key: str) -> Any:
        """Remove an entry.

        Returns:
            The removed value, or None if there was no entry
        """
        _check_key(key)
        with self._lock:
            if self._values is None:
                return None
            return self._values.pop(key, None)

    def entries(self) -> list[tuple[str, Any]]:
        """Return a snapshot of all (key, value) pairs."""
        with self._lock:
            return list(self._values.items()) if self._values else []

    def keys(self) -> list[str]:
        with self._lock:
            return list(self._values) if self._values else []

    def values(self) -> list[Any]:
        with self._lock:
            return list(self._values.values()) if self._values else []

    def copy(self) -> AttributeStore:
        """Return a shallow copy.

        The copy has its own key space but shares value references.
        Listeners are not copied.
        """
        clone = AttributeStore()
        with self._lock:
            if self._values is not None:
                clone._map().update(self._values)
        return clone

    def clear(self) -> AttributeStore:
        with self._lock:
            if self._values is not None:
                self._values.clear()
        return self

    def __len__(self) -> int:
        with self._lock:
            return len(self._values) if self._values else 0

    def __contains__(self, key: object) -> bool:
        _check_key(key)
        with self._lock:
            return self._values is not None and key in self._values

    def __iter__(self):
        return iter(self.keys())

    def __repr__(self) -> str:
        return f"{type(self).__name__}({dict(self.entries())!r})"

    # Change notification

    def _changes(self) -> ChangeSupport:
        if self._change_support is None:
            self._change_support = ChangeSupport(self)
        return self._change_support

    def add_property_change_listener(
        self,
        listener: PropertyChangeListener,
        property_name: str | None = None,
    ) -> None:
        """Register a listener for one property, or for all when no name is given.

        Raises:
            InvalidArgumentError: If listener is None
        """
        if listener is None:
            raise InvalidArgumentError("Listener is None")
        with self._lock:
            self._changes().add_listener(listener, property_name)

    def remove_property_change_listener(
        self,
        listener: PropertyChangeListener,
        property_name: str | None = None,
    ) -> None:
        if listener is None:
            raise InvalidArgumentError("Listener is None")
        with self._lock:
            self._changes().remove_listener(listener, property_name)

    def fire_property_change(self, property_name: str, old_value: Any, new_value: Any) -> None:
        """Notify listeners that a property changed.

        Raises:
            InvalidArgumentError: If property_name is None
        """
        _check_key(property_name, "Property name")
        self.fire_property_change_event(
            PropertyChangeEvent(self, property_name, old_value, new_value)
        )

    def fire_property_change_event(self, event: PropertyChangeEvent) -> None:
        if event is None:
            raise InvalidArgumentError("Event is None")
        with self._lock:
            self._changes().fire(event)


def get_string_value(store: AttributeStore, key: str, default: str | None = None) -> str | None:
    """Read a string value, falling back to a default.

    Missing entries and non-string values both yield the default.
    """
    try:
        value = store.get_string_value(key)
    except TypeMismatchError:
        return default
    return value if value is not None else default


def get_int_value(store: AttributeStore, key: str, default: int | None = None) -> int | None:
    """Read an integer value, converting strings.

    Unconvertible strings are logged and yield the default.
    """
    value = store.get_value(key)
    if value is None:
        return default
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    if not isinstance(value, str):
        return default
    try:
        return int(value.strip())
    except ValueError:
        logger.warning(f"Conversion error for key '{key}': {value!r} is not an integer")
        return default


def get_float_value(store: AttributeStore, key: str, default: float | None = None) -> float | None:
    """Read a float value, converting ints and strings."""
    value = store.get_value(key)
    if value is None:
        return default
    if isinstance(value, float):
        return value
    if isinstance(value, int) and not isinstance(value, bool):
        return float(value)
    if not isinstance(value, str):
        return default
    try:
        return float(value.strip())
    except ValueError:
        logger.warning(f"Conversion error for key '{key}': {value!r} is not a number")
        return default
