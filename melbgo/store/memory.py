"""Process-local document store with the same echo semantics as the hosted one"""
import copy
import logging
from typing import Dict, List, Optional, Tuple

from .base import (
    Document,
    DocumentNotFoundError,
    DocumentStore,
    ErrorHandler,
    SnapshotHandler,
    Unsubscribe,
)

logger = logging.getLogger(__name__)


class InMemoryDocumentStore(DocumentStore):
    """
    Dict-backed store for local development and tests.

    Every write notifies all subscribers of the document synchronously with a
    deep copy, so subscribers see their own writes echoed back.
    """

    def __init__(self, documents: Optional[Dict[str, Document]] = None):
        self.documents: Dict[str, Document] = copy.deepcopy(documents or {})
        self._subscribers: Dict[str, List[Tuple[SnapshotHandler, ErrorHandler]]] = {}

    async def subscribe(
        self,
        trip_id: str,
        on_snapshot: SnapshotHandler,
        on_error: ErrorHandler,
    ) -> Unsubscribe:
        entry = (on_snapshot, on_error)
        self._subscribers.setdefault(trip_id, []).append(entry)
        logger.info(f"Subscribed to in-memory document '{trip_id}'")
        on_snapshot(self.get(trip_id))

        async def unsubscribe() -> None:
            handlers = self._subscribers.get(trip_id, [])
            if entry in handlers:
                handlers.remove(entry)

        return unsubscribe

    async def create_if_absent(self, trip_id: str, seed: Document) -> None:
        if trip_id in self.documents:
            return
        self.documents[trip_id] = copy.deepcopy(seed)
        self._notify(trip_id)

    async def patch(self, trip_id: str, fields: Document) -> None:
        if trip_id not in self.documents:
            raise DocumentNotFoundError(f"No document '{trip_id}' to update", trip_id=trip_id)
        self.documents[trip_id].update(copy.deepcopy(fields))
        self._notify(trip_id)

    def get(self, trip_id: str) -> Optional[Document]:
        """Deep copy of the stored document, or None"""
        document = self.documents.get(trip_id)
        return copy.deepcopy(document) if document is not None else None

    def fail(self, trip_id: str, error: Exception) -> None:
        """Report a transport failure to every subscriber of `trip_id`"""
        for _, on_error in list(self._subscribers.get(trip_id, [])):
            on_error(error)

    def _notify(self, trip_id: str) -> None:
        for on_snapshot, _ in list(self._subscribers.get(trip_id, [])):
            on_snapshot(self.get(trip_id))
