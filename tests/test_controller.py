"""Tests for the trip state controller sync model"""
import asyncio
import logging
from unittest.mock import AsyncMock

import pytest

from melbgo.core import CollectionState, ConnectionStatus, TRIP_SCHEMA_VERSION, TripStateController
from melbgo.models import (
    COLLECTIONS,
    DAYS,
    EXPENSES,
    LINKS,
    TODO_CATEGORIES,
    TODOS,
    Todo,
    dump_collection,
)
from melbgo.models.seed import default_collection
from melbgo.services.todos import add_todo
from melbgo.store import InMemoryDocumentStore, StoreError

from .conftest import TRIP_ID, ManualStore

CUSTOM_DAY = {
    "day": 1, "date": "2026-01-21", "weekday": "週三", "weather": "rain", "temp": 12,
    "tips": "old itinerary", "events": [],
}
CUSTOM_EXPENSE = {
    "id": "e1", "title": "Coffee", "amount": 9.5, "currency": "AUD",
    "payer": "我", "involved": ["我", "旅伴"], "category": "food",
}


class TestSeeding:
    async def test_missing_document_is_seeded_with_defaults(self, store):
        controller = TripStateController(store, TRIP_ID)
        await controller.start()
        await controller.drain()

        document = store.get(TRIP_ID)
        assert document is not None
        assert document["version"] == TRIP_SCHEMA_VERSION
        for key in COLLECTIONS:
            assert document[key] == dump_collection(key, default_collection(key))
            assert controller.get(key) == default_collection(key)
        assert controller.loading is False
        assert controller.connection_status is ConnectionStatus.CONNECTED

    async def test_seeded_document_reloads_equal_to_defaults(self, store):
        first = TripStateController(store, TRIP_ID)
        await first.start()
        await first.stop()

        second = TripStateController(store, TRIP_ID)
        await second.start()
        await second.drain()

        for key in COLLECTIONS:
            assert second.get(key) == default_collection(key)
        assert second.version == TRIP_SCHEMA_VERSION
        await second.stop()

    async def test_states_are_loading_until_first_snapshot(self):
        store = ManualStore()
        controller = TripStateController(store, TRIP_ID)
        await controller.start()

        assert controller.loading is True
        assert all(controller.state_of(key) is CollectionState.LOADING for key in COLLECTIONS)

        store.on_snapshot(None)
        await controller.drain()
        assert controller.loading is False
        assert all(controller.state_of(key) is CollectionState.SYNCED for key in COLLECTIONS)
        assert len(store.created) == 1


class TestSchemaUpgrade:
    async def test_unversioned_document_gets_fresh_days_only(self):
        store = InMemoryDocumentStore({TRIP_ID: {
            DAYS: [CUSTOM_DAY],
            EXPENSES: [CUSTOM_EXPENSE],
            LINKS: [],
            TODOS: [{"id": "t1", "text": "Pack hat", "isCompleted": True, "category": "packing"}],
        }})
        controller = TripStateController(store, TRIP_ID)
        await controller.start()
        await controller.drain()

        assert controller.get(DAYS) == default_collection(DAYS)
        assert [e.id for e in controller.get(EXPENSES)] == ["e1"]
        assert controller.get(LINKS) == []
        assert [t.id for t in controller.get(TODOS)] == ["t1"]

        document = store.get(TRIP_ID)
        assert document["version"] == TRIP_SCHEMA_VERSION
        assert document[DAYS] == dump_collection(DAYS, default_collection(DAYS))
        assert document[EXPENSES] == [CUSTOM_EXPENSE]
        # Healing of missing fields stays local until the field is edited
        assert TODO_CATEGORIES not in document
        await controller.stop()

    async def test_older_version_is_upgraded(self):
        store = InMemoryDocumentStore({TRIP_ID: {DAYS: [CUSTOM_DAY], "version": 1}})
        controller = TripStateController(store, TRIP_ID)
        await controller.start()
        await controller.drain()

        assert controller.get(DAYS) == default_collection(DAYS)
        assert store.get(TRIP_ID)["version"] == TRIP_SCHEMA_VERSION
        await controller.stop()

    async def test_current_version_is_left_alone(self):
        store = InMemoryDocumentStore({TRIP_ID: {DAYS: [CUSTOM_DAY], "version": TRIP_SCHEMA_VERSION}})
        controller = TripStateController(store, TRIP_ID)
        store.patch = AsyncMock(wraps=store.patch)
        await controller.start()
        await controller.drain()

        assert controller.get(DAYS)[0].tips == "old itinerary"
        store.patch.assert_not_called()
        await controller.stop()

    async def test_upgrade_is_idempotent(self):
        store = InMemoryDocumentStore({TRIP_ID: {DAYS: [CUSTOM_DAY]}})
        controller = TripStateController(store, TRIP_ID)
        await controller.start()
        await controller.drain()

        store.patch = AsyncMock(wraps=store.patch)
        assert controller.upgrade_schema(store.get(TRIP_ID)["version"]) is False
        await controller.drain()
        store.patch.assert_not_called()
        await controller.stop()


    async def test_later_snapshots_do_not_repeat_the_upgrade(self, editor, caplog):
        store = ManualStore()
        store.patch = AsyncMock(side_effect=StoreError("offline", trip_id=TRIP_ID))
        controller = TripStateController(store, TRIP_ID)
        await controller.start()
        store.on_snapshot({DAYS: [CUSTOM_DAY], "version": 1})
        await controller.drain()

        days = controller.get(DAYS)
        days[0] = days[0].model_copy(update={"tips": "edited"})
        controller.apply_mutation(DAYS, days, editor)
        await controller.drain()

        caplog.clear()
        # The failed upgrade left the stored version behind
        with caplog.at_level(logging.INFO):
            store.on_snapshot({DAYS: dump_collection(DAYS, days), "version": 1})
            await controller.drain()

        assert controller.get(DAYS)[0].tips == "edited"
        assert store.patch.await_count == 2
        assert "Upgrading" not in caplog.text

    async def test_upgrade_runs_again_after_resubscribing(self):
        store = InMemoryDocumentStore({TRIP_ID: {DAYS: [CUSTOM_DAY]}})
        controller = TripStateController(store, TRIP_ID)
        await controller.start()
        await controller.stop()

        store.documents[TRIP_ID].update({DAYS: [CUSTOM_DAY], "version": 1})
        await controller.start()
        await controller.drain()

        assert controller.get(DAYS) == default_collection(DAYS)
        assert store.get(TRIP_ID)["version"] == TRIP_SCHEMA_VERSION
        await controller.stop()


class TestMutations:
    async def test_authorized_mutation_is_applied_then_persisted(self, controller, store, editor):
        applied = controller.apply_mutation(TODOS, lambda todos: add_todo(todos, "Buy sunscreen"), editor)

        assert applied is True
        assert controller.get(TODOS)[0].text == "Buy sunscreen"
        assert controller.state_of(TODOS) is CollectionState.PENDING

        await controller.drain()
        assert store.get(TRIP_ID)[TODOS][0]["text"] == "Buy sunscreen"
        assert controller.state_of(TODOS) is CollectionState.SYNCED

    async def test_plain_value_replaces_collection(self, controller, store, editor):
        assert controller.apply_mutation(LINKS, [], editor) is True
        await controller.drain()
        assert controller.get(LINKS) == []
        assert store.get(TRIP_ID)[LINKS] == []

    async def test_read_only_mutations_are_ignored(self, controller, store, reader):
        before = {key: controller.get(key) for key in COLLECTIONS}
        store.patch = AsyncMock(wraps=store.patch)

        for key in COLLECTIONS:
            assert controller.apply_mutation(key, lambda _: [], reader) is False
        await controller.drain()

        assert {key: controller.get(key) for key in COLLECTIONS} == before
        store.patch.assert_not_called()

    async def test_unknown_collection_raises(self, controller, editor):
        with pytest.raises(KeyError):
            controller.apply_mutation("photos", [], editor)

    async def test_failed_write_keeps_local_value(self, controller, store, editor, caplog):
        store.patch = AsyncMock(side_effect=StoreError("permission denied", trip_id=TRIP_ID))
        new_todos = [Todo(id="x", text="Check visa", is_completed=False, category="docs")]

        with caplog.at_level(logging.ERROR):
            assert controller.apply_mutation(TODOS, new_todos, editor) is True
            await controller.drain()

        assert controller.get(TODOS) == new_todos
        assert controller.state_of(TODOS) is CollectionState.SYNCED
        assert "Update failed" in caplog.text

    async def test_write_patches_only_the_mutated_field(self, editor):
        store = ManualStore()
        controller = TripStateController(store, TRIP_ID)
        await controller.start()
        store.on_snapshot({key: dump_collection(key, default_collection(key)) for key in COLLECTIONS} | {"version": 2})

        controller.apply_mutation(TODOS, lambda todos: add_todo(todos, "Charge camera"), editor)
        await controller.drain()

        assert len(store.patches) == 1
        trip_id, fields = store.patches[0]
        assert trip_id == TRIP_ID
        assert list(fields) == [TODOS]

    async def test_remote_snapshot_replaces_local_values(self, controller, store):
        store.documents[TRIP_ID][LINKS] = []
        store._notify(TRIP_ID)
        assert controller.get(LINKS) == []


class TestErrorsAndHealing:
    async def test_transport_error_before_data_falls_back_to_defaults(self, caplog):
        store = ManualStore()
        controller = TripStateController(store, TRIP_ID)
        await controller.start()

        with caplog.at_level(logging.ERROR):
            store.on_error(ConnectionError("network unreachable"))

        assert controller.loading is False
        assert controller.connection_status is ConnectionStatus.OFFLINE
        for key in COLLECTIONS:
            assert controller.get(key) == default_collection(key)
            assert controller.state_of(key) is CollectionState.SYNCED
        assert "sync error" in caplog.text

    async def test_transport_error_after_data_keeps_values(self):
        store = ManualStore()
        controller = TripStateController(store, TRIP_ID)
        await controller.start()
        store.on_snapshot({LINKS: [], "version": TRIP_SCHEMA_VERSION})

        store.on_error(ConnectionError("socket closed"))

        assert controller.get(LINKS) == []
        assert controller.connection_status is ConnectionStatus.OFFLINE

    async def test_reconnect_restores_connected_status(self):
        store = ManualStore()
        controller = TripStateController(store, TRIP_ID)
        await controller.start()
        store.on_error(ConnectionError("offline"))

        store.on_snapshot({"version": TRIP_SCHEMA_VERSION})
        assert controller.connection_status is ConnectionStatus.CONNECTED

    async def test_malformed_field_is_replaced_by_default(self, caplog):
        store = ManualStore()
        controller = TripStateController(store, TRIP_ID)
        await controller.start()

        with caplog.at_level(logging.WARNING):
            store.on_snapshot({TODOS: [{"id": 3}], EXPENSES: [CUSTOM_EXPENSE], "version": TRIP_SCHEMA_VERSION})

        assert controller.get(TODOS) == default_collection(TODOS)
        assert [e.id for e in controller.get(EXPENSES)] == ["e1"]
        assert "malformed" in caplog.text

    async def test_partial_document_is_healed_per_field(self):
        store = ManualStore()
        controller = TripStateController(store, TRIP_ID)
        await controller.start()
        store.on_snapshot({EXPENSES: [CUSTOM_EXPENSE], "version": TRIP_SCHEMA_VERSION})

        assert len(controller.get(EXPENSES)) == 1
        assert controller.get(TODO_CATEGORIES) == default_collection(TODO_CATEGORIES)
        assert controller.get(DAYS) == default_collection(DAYS)

    async def test_stop_closes_subscription(self):
        store = ManualStore()
        controller = TripStateController(store, TRIP_ID)
        await controller.start()
        await controller.stop()
        assert store.closed is True


async def test_snapshot_exposes_trip_document(controller):
    snapshot = controller.snapshot()
    assert snapshot.loading is False
    assert snapshot.trip.version == TRIP_SCHEMA_VERSION
    assert len(snapshot.trip.days) == len(default_collection(DAYS))
    assert set(snapshot.collection_states) == set(COLLECTIONS)


class SlowSeedStore(ManualStore):
    """Store whose seed insert completes only when released"""

    def __init__(self):
        super().__init__()
        self.release = asyncio.Event()
        self.calls = []

    async def create_if_absent(self, trip_id, seed):
        await self.release.wait()
        self.calls.append("create")
        await super().create_if_absent(trip_id, seed)

    async def patch(self, trip_id, fields):
        self.calls.append("patch")
        await super().patch(trip_id, fields)


async def test_writes_wait_for_seed_creation(editor):
    store = SlowSeedStore()
    controller = TripStateController(store, TRIP_ID)
    await controller.start()
    store.on_snapshot(None)

    assert controller.apply_mutation(TODOS, lambda todos: add_todo(todos, "Book ETA"), editor) is True
    await asyncio.sleep(0)
    assert store.calls == []

    store.release.set()
    await controller.drain()
    assert store.calls == ["create", "patch"]
    assert store.patches[0][1][TODOS][0]["text"] == "Book ETA"
