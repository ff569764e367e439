"""Tests for the observable attribute store."""

import threading

import pytest

from ogcxml.avlist import (
    AttributeStore,
    ChangeSupport,
    PropertyChangeEvent,
    get_float_value,
    get_int_value,
    get_string_value,
)
from ogcxml.errors import InvalidArgumentError, TypeMismatchError


class TestAttributeStoreValues:
    """Tests for reading and writing values."""

    def test_set_then_get(self) -> None:
        """A stored value is returned by get_value."""
        store = AttributeStore()
        store.set_value("Title", "Grenzen")
        assert store.get_value("Title") == "Grenzen"

    def test_set_value_returns_previous(self) -> None:
        """set_value returns the value it replaced."""
        store = AttributeStore()
        assert store.set_value("a", 1) is None
        assert store.set_value("a", 2) == 1
        assert store.get_value("a") == 2

    def test_missing_key_returns_none(self) -> None:
        """An empty store answers None without creating its map."""
        store = AttributeStore()
        assert store.get_value("missing") is None
        assert len(store) == 0
        assert store.entries() == []

    def test_none_value_is_an_entry(self) -> None:
        """A stored None is distinguishable from a missing key."""
        store = AttributeStore()
        store.set_value("empty", None)
        assert store.has_key("empty")
        assert store.get_value("empty") is None
        assert not store.has_key("other")
        assert "empty" in store

    def test_remove_key(self) -> None:
        """remove_key returns the removed value and deletes the entry."""
        store = AttributeStore()
        store.set_value("a", "x")
        assert store.remove_key("a") == "x"
        assert not store.has_key("a")
        assert store.remove_key("a") is None

    def test_none_key_rejected(self) -> None:
        """Every keyed operation rejects a None key."""
        store = AttributeStore()
        with pytest.raises(InvalidArgumentError):
            store.set_value(None, 1)
        with pytest.raises(InvalidArgumentError):
            store.get_value(None)
        with pytest.raises(InvalidArgumentError):
            store.has_key(None)
        with pytest.raises(InvalidArgumentError):
            store.remove_key(None)

    def test_invalid_argument_is_value_error(self) -> None:
        """InvalidArgumentError can be caught as ValueError."""
        with pytest.raises(ValueError):
            AttributeStore().get_value(None)

    def test_get_string_value_type_mismatch(self) -> None:
        """get_string_value refuses non-string values."""
        store = AttributeStore()
        store.set_value("count", 3)
        with pytest.raises(TypeMismatchError):
            store.get_string_value("count")

    def test_get_string_value_missing(self) -> None:
        """get_string_value returns None for a missing key."""
        assert AttributeStore().get_string_value("missing") is None

    def test_clear(self) -> None:
        """clear removes every entry and returns the store."""
        store = AttributeStore()
        store.set_value("a", 1)
        assert store.clear() is store
        assert len(store) == 0

    def test_entries_snapshot_allows_mutation(self) -> None:
        """Iterating a snapshot while mutating the store does not fail."""
        store = AttributeStore()
        store.set_values({"a": 1, "b": 2, "c": 3})
        for key, _ in store.entries():
            store.remove_key(key)
        assert len(store) == 0

    def test_contains_none_rejected(self) -> None:
        """Membership tests reject a None key like every keyed operation."""
        with pytest.raises(InvalidArgumentError):
            None in AttributeStore()

    def test_keys_and_values(self) -> None:
        """keys and values mirror the entries."""
        store = AttributeStore()
        store.set_values({"a": 1, "b": 2})
        assert sorted(store.keys()) == ["a", "b"]
        assert sorted(store.values()) == [1, 2]
        assert sorted(store) == ["a", "b"]


class TestAttributeStoreMergeAndCopy:
    """Tests for set_values and copy."""

    def test_set_values_overwrites_collisions(self) -> None:
        """Merging keeps unrelated keys and overwrites shared ones."""
        store = AttributeStore()
        store.set_values({"a": 1, "b": 2})
        other = AttributeStore()
        other.set_values({"b": 20, "c": 30})

        assert store.set_values(other) is store
        assert dict(store.entries()) == {"a": 1, "b": 20, "c": 30}

    def test_set_values_none_rejected(self) -> None:
        """Merging None fails."""
        with pytest.raises(InvalidArgumentError):
            AttributeStore().set_values(None)

    def test_copy_has_independent_keys(self) -> None:
        """Changing the copy's keys does not change the original."""
        store = AttributeStore()
        store.set_value("a", 1)
        clone = store.copy()
        clone.set_value("a", 2)
        clone.set_value("b", 3)

        assert store.get_value("a") == 1
        assert not store.has_key("b")

    def test_copy_shares_values(self) -> None:
        """The copy is shallow: mutable values are shared."""
        store = AttributeStore()
        store.set_value("list", [])
        clone = store.copy()
        clone.get_value("list").append("x")
        assert store.get_value("list") == ["x"]

    def test_copy_does_not_copy_listeners(self) -> None:
        """Listeners of the original are not notified by the copy."""
        received = []
        store = AttributeStore()
        store.add_property_change_listener(received.append)
        store.copy().fire_property_change("a", 1, 2)
        assert received == []


class TestPropertyChange:
    """Tests for change notification."""

    def test_listener_receives_event(self) -> None:
        """A wildcard listener receives every change."""
        received = []
        store = AttributeStore()
        store.add_property_change_listener(received.append)

        store.fire_property_change("Title", "old", "new")

        assert len(received) == 1
        event = received[0]
        assert event.source is store
        assert event.property_name == "Title"
        assert event.old_value == "old"
        assert event.new_value == "new"

    def test_named_listener_filters(self) -> None:
        """A listener registered for one property ignores others."""
        received = []
        store = AttributeStore()
        store.add_property_change_listener(received.append, "Title")

        store.fire_property_change("Name", 1, 2)
        store.fire_property_change("Title", 1, 2)

        assert [e.property_name for e in received] == ["Title"]

    def test_equal_values_suppressed(self) -> None:
        """Nothing is delivered when old and new values are equal."""
        received = []
        store = AttributeStore()
        store.add_property_change_listener(received.append)

        store.fire_property_change("a", "same", "same")

        assert received == []

    def test_none_values_delivered(self) -> None:
        """A change with a None side is always delivered."""
        received = []
        store = AttributeStore()
        store.add_property_change_listener(received.append)

        store.fire_property_change("a", None, None)
        store.fire_property_change("a", None, "x")

        assert len(received) == 2

    def test_remove_listener(self) -> None:
        """A removed listener receives nothing."""
        received = []
        store = AttributeStore()
        store.add_property_change_listener(received.append)
        store.remove_property_change_listener(received.append)

        store.fire_property_change("a", 1, 2)

        assert received == []

    def test_none_listener_rejected(self) -> None:
        """Registering None fails."""
        with pytest.raises(InvalidArgumentError):
            AttributeStore().add_property_change_listener(None)

    def test_none_property_name_rejected(self) -> None:
        """Firing without a property name fails."""
        with pytest.raises(InvalidArgumentError):
            AttributeStore().fire_property_change(None, 1, 2)


class TestChangeSupport:
    """Tests for ChangeSupport dispatch order."""

    def test_wildcard_listeners_before_named(self) -> None:
        """Wildcard listeners are invoked before property listeners."""
        order = []
        support = ChangeSupport(source=None)
        support.add_listener(lambda e: order.append("named"), "a")
        support.add_listener(lambda e: order.append("all"))

        support.fire(PropertyChangeEvent(None, "a", 1, 2))

        assert order == ["all", "named"]

    def test_listener_may_unregister_during_dispatch(self) -> None:
        """A listener removing itself does not disturb the current dispatch."""
        calls = []
        support = ChangeSupport(source=None)

        def once(event: PropertyChangeEvent) -> None:
            calls.append("once")
            support.remove_listener(once)

        support.add_listener(once)
        support.add_listener(lambda e: calls.append("other"))

        support.fire(PropertyChangeEvent(None, "a", 1, 2))
        support.fire(PropertyChangeEvent(None, "a", 2, 3))

        assert calls == ["once", "other", "other"]

    def test_has_listeners(self) -> None:
        """has_listeners reports wildcard and named registrations."""
        support = ChangeSupport(source=None)
        assert not support.has_listeners("a")
        support.add_listener(print, "a")
        assert support.has_listeners("a")
        assert not support.has_listeners("b")


class TestTypedAccessors:
    """Tests for the module-level typed accessors."""

    def test_get_string_value_default(self) -> None:
        """Missing and non-string values yield the default."""
        store = AttributeStore()
        store.set_value("n", 5)
        assert get_string_value(store, "missing", "dflt") == "dflt"
        assert get_string_value(store, "n", "dflt") == "dflt"

    def test_get_int_value_converts_strings(self) -> None:
        """Integer strings are converted."""
        store = AttributeStore()
        store.set_value("n", " 16 ")
        store.set_value("i", 4)
        assert get_int_value(store, "n") == 16
        assert get_int_value(store, "i") == 4

    def test_get_int_value_bad_string(self) -> None:
        """Unconvertible strings yield the default."""
        store = AttributeStore()
        store.set_value("n", "wide")
        assert get_int_value(store, "n", -1) == -1

    def test_get_int_value_ignores_bool(self) -> None:
        """Booleans are not treated as integers."""
        store = AttributeStore()
        store.set_value("flag", True)
        assert get_int_value(store, "flag") is None

    def test_get_float_value(self) -> None:
        """Float strings and ints are converted."""
        store = AttributeStore()
        store.set_value("f", "1.5")
        store.set_value("i", 2)
        store.set_value("bad", "x")
        assert get_float_value(store, "f") == 1.5
        assert get_float_value(store, "i") == 2.0
        assert get_float_value(store, "bad", 0.0) == 0.0


class TestAttributeStoreThreads:
    """Tests for concurrent use of one store."""

    def test_concurrent_writes_lose_nothing(self) -> None:
        """Concurrent set_value calls leave every entry present."""
        store = AttributeStore()
        errors = []

        def writer(prefix: str) -> None:
            try:
                for i in range(500):
                    store.set_value(f"{prefix}{i}", i)
                    store.entries()
            except Exception as e:  # pragma: no cover
                errors.append(e)

        threads = [threading.Thread(target=writer, args=(f"t{n}-",)) for n in range(8)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert errors == []
        assert len(store) == 8 * 500

    def test_interleaved_readers_writers_and_copies(self) -> None:
        """Copies and iteration run safely alongside mutation of shared keys."""
        store = AttributeStore()
        shared_keys = [f"key{i}" for i in range(20)]
        errors = []
        copies = []
        stop = threading.Event()

        def writer(n: int) -> None:
            try:
                for i in range(1000):
                    key = shared_keys[(n + i) % len(shared_keys)]
                    if i % 3 == 0:
                        store.remove_key(key)
                    else:
                        store.set_value(key, i)
            except Exception as e:  # pragma: no cover
                errors.append(e)

        def reader(n: int) -> None:
            try:
                while not stop.is_set():
                    clone = store.copy()
                    clone.set_value(f"copy-only-{n}", n)
                    copies.append(clone)
                    store.get_value(shared_keys[n % len(shared_keys)])
                    for key in list(store):
                        assert not key.startswith("copy-only")
            except Exception as e:  # pragma: no cover
                errors.append(e)

        writers = [threading.Thread(target=writer, args=(n,)) for n in range(4)]
        readers = [threading.Thread(target=reader, args=(n,)) for n in range(4)]
        for thread in readers + writers:
            thread.start()
        for thread in writers:
            thread.join()
        stop.set()
        for thread in readers:
            thread.join()

        assert errors == []
        assert copies
        assert not any(key.startswith("copy-only") for key in store.keys())
        assert set(store.keys()) <= set(shared_keys)
