"""Observable attribute-value store."""

from ogcxml.avlist.change import ChangeSupport, PropertyChangeEvent, PropertyChangeListener
from ogcxml.avlist.store import (
    AttributeStore,
    get_float_value,
    get_int_value,
    get_string_value,
)

__all__ = [
    "AttributeStore",
    "ChangeSupport",
    "PropertyChangeEvent",
    "PropertyChangeListener",
    "get_float_value",
    "get_int_value",
    "get_string_value",
]
