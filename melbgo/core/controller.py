"""
Trip State Controller

Owns the in-memory copy of the six trip collections and is the only writer
to the document store.

SYNC MODEL:
- One live subscription to the trip document; every snapshot (including the
  echo of our own writes) replaces local collections field by field
- Mutations update local state synchronously, then persist the whole
  collection field in a fire-and-forget task
- Failed writes are logged and never retried or rolled back
- Concurrent editors resolve by last-writer-wins per top-level field
- The schema upgrade check runs once per subscription, on the first snapshot
- Writes issued while the seed document is being created wait for it
"""
import asyncio
import logging
from collections import Counter
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, Optional, Set, Union

from pydantic import ValidationError

from ..models import COLLECTIONS, DAYS, Trip, dump_collection, parse_collection
from ..models.seed import default_collection
from ..store import DocumentStore
from ..store.base import Document, Unsubscribe
from .gate import AccessGate

logger = logging.getLogger(__name__)

# Stored documents below this version get their itinerary days replaced by
# the built-in defaults on load.
TRIP_SCHEMA_VERSION = 2

Update = Union[list, Callable[[list], list]]


class CollectionState(str, Enum):
    UNINITIALIZED = "uninitialized"
    LOADING = "loading"
    SYNCED = "synced"
    PENDING = "pending"  # synced, with an optimistic local write in flight


class ConnectionStatus(str, Enum):
    CONNECTED = "connected"
    OFFLINE = "offline"


@dataclass(frozen=True)
class TripSnapshot:
    """Point-in-time view of the controller for readers"""
    trip: Trip
    loading: bool
    connection_status: ConnectionStatus
    collection_states: Dict[str, CollectionState]


class TripStateController:
    """Single source of truth for one trip document"""

    def __init__(self, store: DocumentStore, trip_id: str, target_version: int = TRIP_SCHEMA_VERSION):
        self.store = store
        self.trip_id = trip_id
        self.target_version = target_version

        self.version: Optional[int] = None
        self.loading = True
        self.connection_status = ConnectionStatus.OFFLINE

        self._values: Dict[str, list] = {key: [] for key in COLLECTIONS}
        self._states: Dict[str, CollectionState] = {key: CollectionState.UNINITIALIZED for key in COLLECTIONS}
        self._in_flight: Counter = Counter()
        self._tasks: Set[asyncio.Task] = set()
        self._unsubscribe: Optional[Unsubscribe] = None
        self._loaded = False
        self._seeding: Optional[asyncio.Task] = None

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    async def start(self) -> None:
        """Open the trip subscription (once per controller)"""
        if self._unsubscribe is not None:
            return
        for key in COLLECTIONS:
            self._states[key] = CollectionState.LOADING
        self._loaded = False
        logger.info(f"📡 Subscribing to trip '{self.trip_id}'")
        self._unsubscribe = await self.store.subscribe(self.trip_id, self._on_snapshot, self._on_error)

    async def drain(self) -> None:
        """Wait for every write issued so far to settle"""
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

    async def stop(self) -> None:
        """Let outstanding writes finish, then close the subscription"""
        await self.drain()
        if self._unsubscribe is not None:
            await self._unsubscribe()
            self._unsubscribe = None
            logger.info(f"Subscription to trip '{self.trip_id}' closed")

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def get(self, key: str) -> list:
        """Current local value of one collection (treat records as read-only)"""
        return list(self._values[key])

    def state_of(self, key: str) -> CollectionState:
        return self._states[key]

    def snapshot(self) -> TripSnapshot:
        trip = Trip(
            days=self.get("days"),
            expenses=self.get("expenses"),
            links=self.get("links"),
            todos=self.get("todos"),
            todo_categories=self.get("todoCategories"),
            expense_categories=self.get("expenseCategories"),
            version=self.version,
        )
        return TripSnapshot(
            trip=trip,
            loading=self.loading,
            connection_status=self.connection_status,
            collection_states=dict(self._states),
        )

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def apply_mutation(self, key: str, update: Update, gate: AccessGate) -> bool:
        """
        Replace one collection and persist it.

        Args:
            key: Collection name (document field, e.g. "todoCategories")
            update: New value, or a function of the current value returning it
            gate: Access gate of the caller; read-only callers are ignored

        Returns:
            True if the mutation was applied, False for read-only callers

        Raises:
            KeyError: If `key` is not a trip collection
            pydantic.ValidationError: If the new value has the wrong shape
        """
        if key not in self._values:
            raise KeyError(f"Unknown collection '{key}'")
        if not gate.is_authorized:
            logger.debug(f"Ignored read-only mutation of '{key}'")
            return False

        new_value = update(self.get(key)) if callable(update) else update
        new_value = parse_collection(key, list(new_value))

        self._values[key] = new_value
        self._persist_in_background({key: dump_collection(key, new_value)}, key)
        return True

    # ------------------------------------------------------------------
    # Store callbacks
    # ------------------------------------------------------------------

    def _on_snapshot(self, document: Optional[Document]) -> None:
        self.connection_status = ConnectionStatus.CONNECTED
        if document is None:
            self._seed()
        else:
            self._adopt(document)
            if self._loaded:
                self.version = document.get("version")
            else:
                self.upgrade_schema(document.get("version"))
        self._loaded = True
        self.loading = False

    def _on_error(self, error: Exception) -> None:
        logger.error(f"❌ Trip sync error: {type(error).__name__}: {str(error)}")
        self.connection_status = ConnectionStatus.OFFLINE
        for key in COLLECTIONS:
            if self._states[key] in (CollectionState.UNINITIALIZED, CollectionState.LOADING):
                self._values[key] = default_collection(key)
                self._states[key] = CollectionState.SYNCED
        self.loading = False

    def _seed(self) -> None:
        logger.info(f"🌱 Trip '{self.trip_id}' not found, creating it from built-in data")
        seed: Document = {}
        for key in COLLECTIONS:
            self._values[key] = default_collection(key)
            self._states[key] = CollectionState.SYNCED
            seed[key] = dump_collection(key, self._values[key])
        seed["version"] = self.target_version
        self.version = self.target_version
        self._seeding = self._spawn(self._create(seed))

    def _adopt(self, document: Document) -> None:
        for key in COLLECTIONS:
            raw = document.get(key)
            if raw is None:
                logger.info(f"Trip document has no '{key}', using built-in defaults")
                value = default_collection(key)
            else:
                try:
                    value = parse_collection(key, raw)
                except ValidationError as e:
                    logger.warning(f"⚠️ Stored '{key}' is malformed ({e.error_count()} errors), using built-in defaults")
                    value = default_collection(key)
            self._values[key] = value
            if self._in_flight[key] == 0:
                self._states[key] = CollectionState.SYNCED

    def upgrade_schema(self, stored_version: Any) -> bool:
        """
        Force-refresh itinerary days for documents older than the target version.

        Only `days` is replaced; the other collections keep whatever is stored.

        Returns:
            True if an upgrade was applied
        """
        self.version = stored_version
        if isinstance(stored_version, int) and stored_version >= self.target_version:
            return False

        logger.info(f"⬆️ Upgrading trip '{self.trip_id}' from version {stored_version} to {self.target_version}")
        self._values[DAYS] = default_collection(DAYS)
        self.version = self.target_version
        self._persist_in_background(
            {DAYS: dump_collection(DAYS, self._values[DAYS]), "version": self.target_version},
            DAYS,
        )
        return True

    # ------------------------------------------------------------------
    # Background writes
    # ------------------------------------------------------------------

    def _persist_in_background(self, fields: Document, key: str) -> None:
        self._in_flight[key] += 1
        self._states[key] = CollectionState.PENDING
        self._spawn(self._patch(fields, key))

    def _spawn(self, coro) -> asyncio.Task:
        task = asyncio.get_running_loop().create_task(coro)
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    async def _patch(self, fields: Document, key: str) -> None:
        if self._seeding is not None and not self._seeding.done():
            await self._seeding
        try:
            await self.store.patch(self.trip_id, fields)
        except Exception as e:
            logger.error(f"❌ Update failed for {sorted(fields)}: {type(e).__name__}: {str(e)}")
        finally:
            self._in_flight[key] -= 1
            if self._in_flight[key] == 0 and self._states[key] is CollectionState.PENDING:
                self._states[key] = CollectionState.SYNCED

    async def _create(self, seed: Document) -> None:
        try:
            await self.store.create_if_absent(self.trip_id, seed)
        except Exception as e:
            logger.error(f"❌ Creating trip '{self.trip_id}' failed: {type(e).__name__}: {str(e)}")
