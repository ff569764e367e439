"""Property change events and listener bookkeeping."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable

PropertyChangeListener = Callable[["PropertyChangeEvent"], None]


@dataclass
class PropertyChangeEvent:
    """A change of one named property on a source object."""

    source: Any
    """Object on which the change was fired."""

    property_name: str
    """Name of the changed property."""

    old_value: Any = None
    """Value before the change (None if unknown)."""

    new_value: Any = None
    """Value after the change (None if unknown)."""


class ChangeSupport:
    """Listener registry for one observable object.

    Listeners registered without a property name receive every event;
    listeners registered for a name receive only events for that property.
    Callers are responsible for locking; AttributeStore holds its own lock
    while touching this object.
    """

    def __init__(self, source: Any) -> None:
        self.source = source
        self._all_listeners: list[PropertyChangeListener] = []
        self._named_listeners: dict[str, list[PropertyChangeListener]] = {}

    def add_listener(
        self,
        listener: PropertyChangeListener,
        property_name: str | None = None,
    ) -> None:
        if property_name is None:
            self._all_listeners.append(listener)
        else:
            self._named_listeners.setdefault(property_name, []).append(listener)

    def remove_listener(
        self,
        listener: PropertyChangeListener,
        property_name: str | None = None,
    ) -> None:
        """Remove one registration of a listener; unknown listeners are ignored."""
        listeners = (
            self._all_listeners
            if property_name is None
            else self._named_listeners.get(property_name, [])
        )
        if listener in listeners:
            listeners.remove(listener)

    def has_listeners(self, property_name: str | None = None) -> bool:
        if self._all_listeners:
            return True
        return property_name is not None and bool(
            self._named_listeners.get(property_name)
        )

    def fire(self, event: PropertyChangeEvent) -> None:
        """Deliver an event to interested listeners.

        Nothing is delivered when both values are present and equal.

        Args:
            event: The event to deliver
        """
        old_value = event.old_value
        new_value = event.new_value
        if old_value is not None and new_value is not None and old_value == new_value:
            return

        listeners = list(self._all_listeners)
        listeners.extend(self._named_listeners.get(event.property_name, ()))
        for listener in listeners:
            listener(event)
