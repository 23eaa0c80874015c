"""Document store contract for the live trip document"""
from abc import ABC, abstractmethod
from typing import Any, Awaitable, Callable, Dict, Optional

Document = Dict[str, Any]
SnapshotHandler = Callable[[Optional[Document]], None]
ErrorHandler = Callable[[Exception], None]
Unsubscribe = Callable[[], Awaitable[None]]


class StoreError(Exception):
    """Raised when the document store rejects or cannot complete a request"""
    def __init__(self, message: str, trip_id: Optional[str] = None):
        self.message = message
        self.trip_id = trip_id
        super().__init__(self.message)


class DocumentNotFoundError(StoreError):
    """Raised when patching a document that does not exist"""


class DocumentStore(ABC):
    """
    Keyed document store with live change notifications.

    Documents are plain dicts keyed by top-level field name (camelCase, as
    stored). A snapshot of ``None`` means the document does not exist.
    """

    @abstractmethod
    async def subscribe(
        self,
        trip_id: str,
        on_snapshot: SnapshotHandler,
        on_error: ErrorHandler,
    ) -> Unsubscribe:
        """
        Open a live subscription to one document

        `on_snapshot` is called with the current document on initial load and
        again after every change, including changes written by this process.
        `on_error` is called on transport failure.

        Returns:
            Coroutine function that closes the subscription
        """

    @abstractmethod
    async def create_if_absent(self, trip_id: str, seed: Document) -> None:
        """Write `seed` as the document unless one already exists"""

    @abstractmethod
    async def patch(self, trip_id: str, fields: Document) -> None:
        """
        Merge the named top-level fields into an existing document

        Raises:
            DocumentNotFoundError: If the document does not exist
            StoreError: If the write fails
        """
