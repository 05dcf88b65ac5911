"""Tests for activity_timer.store."""
from __future__ import annotations

import threading

import pytest

from activity_timer import Activity, ActivityNotFoundError, ActivityStore, InvalidArgumentError


class TestCreate:
    def test_ids_strictly_increase_from_one(self, clock):
        store = ActivityStore(clock=clock)
        ids = [store.create(f"task-{i}") for i in range(5)]
        assert ids == [1, 2, 3, 4, 5]

    def test_new_activity_has_no_timestamps(self, clock):
        store = ActivityStore(clock=clock)
        activity = store.get(store.create("build"))
        assert activity == Activity(id=1, message="build", timestamps=[])

    @pytest.mark.parametrize("message", [None, 42, b"bytes", ["build"]], ids=["none", "int", "bytes", "list"])
    def test_rejects_missing_or_non_string_message(self, clock, message):
        store = ActivityStore(clock=clock)
        with pytest.raises(InvalidArgumentError):
            store.create(message)
        assert len(store) == 0

    def test_rejects_missing_message_without_argument(self, clock):
        with pytest.raises(InvalidArgumentError, match="requires an activity message"):
            ActivityStore(clock=clock).create()

    def test_ids_are_not_reused(self, clock):
        store = ActivityStore(clock=clock)
        first = store.create("a")
        store.destroy(first)
        store.clear()
        assert store.create("b") == first + 1


class TestMarkAndDestroy:
    def test_mark_appends_and_returns_timestamp(self, clock):
        store = ActivityStore(clock=clock)
        activity_id = store.create("build")

        assert store.mark(activity_id) == clock.now
        clock.advance(250)
        assert store.mark(activity_id) == clock.now

        activity = store.get(activity_id)
        assert activity.timestamps == [clock.now - 250, clock.now]
        assert activity.elapsed_ms == 250

    def test_destroy_returns_record_and_forgets_it(self, clock):
        store = ActivityStore(clock=clock)
        activity_id = store.create("build")
        store.mark(activity_id)

        activity = store.destroy(activity_id)

        assert activity.id == activity_id
        assert activity.timestamps == [clock.now]
        assert activity_id not in store
        assert store.ids() == []

    @pytest.mark.parametrize("operation", ["get", "mark", "destroy"])
    def test_unknown_id_raises_not_found(self, clock, operation):
        store = ActivityStore(clock=clock)
        with pytest.raises(ActivityNotFoundError) as excinfo:
            getattr(store, operation)(99)
        assert excinfo.value.activity_id == 99
        assert 'activity with id "99" not found.' in str(excinfo.value)

    @pytest.mark.parametrize("operation", ["get", "mark", "destroy"])
    def test_destroyed_id_raises_not_found(self, clock, operation):
        store = ActivityStore(clock=clock)
        activity_id = store.create("build")
        store.destroy(activity_id)
        with pytest.raises(ActivityNotFoundError):
            getattr(store, operation)(activity_id)

    def test_not_found_is_a_lookup_error(self, clock):
        with pytest.raises(LookupError):
            ActivityStore(clock=clock).get(1)


def test_default_clock_uses_epoch_milliseconds():
    store = ActivityStore()
    stamp = store.mark(store.create("now"))
    # after 2001-09-09 and expressed in ms, not seconds
    assert stamp > 1_000_000_000_000


def test_unmarked_activity_properties():
    activity = Activity(id=1, message="idle")
    assert activity.first_timestamp is None
    assert activity.last_timestamp is None
    assert activity.elapsed_ms == 0


def test_concurrent_create_and_destroy_allocates_unique_ids(clock):
    store = ActivityStore(clock=clock)
    per_thread = 500
    results = {}

    def worker(name):
        ids = []
        for i in range(per_thread):
            activity_id = store.create(f"{name}-{i}")
            store.mark(activity_id)
            store.destroy(activity_id)
            ids.append(activity_id)
        results[name] = ids

    threads = [threading.Thread(target=worker, args=(f"t{n}",)) for n in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    all_ids = [i for ids in results.values() for i in ids]
    assert len(all_ids) == 8 * per_thread
    assert sorted(all_ids) == list(range(1, 8 * per_thread + 1))
    # each thread sees its own IDs in increasing order
    for ids in results.values():
        assert ids == sorted(ids)
    assert len(store) == 0
