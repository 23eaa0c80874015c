"""Shared fixtures: an in-memory trip store and a started controller"""
from typing import Callable, List, Optional, Tuple

import pytest

from melbgo.core import AccessGate, TripStateController
from melbgo.store import DocumentStore, InMemoryDocumentStore

TRIP_ID = "test-trip"
SECRET = "open-sesame"


class ManualStore(DocumentStore):
    """Store whose snapshots and errors are driven by the test"""

    def __init__(self):
        self.on_snapshot: Optional[Callable] = None
        self.on_error: Optional[Callable] = None
        self.created: List[dict] = []
        self.patches: List[Tuple[str, dict]] = []
        self.closed = False

    async def subscribe(self, trip_id, on_snapshot, on_error):
        self.on_snapshot = on_snapshot
        self.on_error = on_error

        async def unsubscribe():
            self.closed = True

        return unsubscribe

    async def create_if_absent(self, trip_id, seed):
        self.created.append(seed)

    async def patch(self, trip_id, fields):
        self.patches.append((trip_id, fields))


@pytest.fixture
def store() -> InMemoryDocumentStore:
    return InMemoryDocumentStore()


@pytest.fixture
async def controller(store):
    controller = TripStateController(store, TRIP_ID)
    await controller.start()
    await controller.drain()
    yield controller
    await controller.stop()


@pytest.fixture
def editor() -> AccessGate:
    return AccessGate(SECRET, marker=SECRET)


@pytest.fixture
def reader() -> AccessGate:
    return AccessGate(SECRET)
