"""Supabase-backed trip document with Realtime change notifications"""
import json
import logging
from typing import Any, Dict, Optional

from postgrest.exceptions import APIError
from realtime import RealtimeSubscribeStates
from supabase import AsyncClient, acreate_client

from .base import (
    Document,
    DocumentNotFoundError,
    DocumentStore,
    ErrorHandler,
    SnapshotHandler,
    StoreError,
    Unsubscribe,
)

logger = logging.getLogger(__name__)

# Document field -> table column. One jsonb column per collection so that a
# patch only rewrites the columns it names.
FIELD_COLUMNS: Dict[str, str] = {
    "days": "days",
    "expenses": "expenses",
    "links": "links",
    "todos": "todos",
    "todoCategories": "todo_categories",
    "expenseCategories": "expense_categories",
    "version": "version",
}
COLUMN_FIELDS = {column: field for field, column in FIELD_COLUMNS.items()}


def document_to_row(document: Document) -> Dict[str, Any]:
    """Map known document fields onto table columns"""
    return {FIELD_COLUMNS[field]: value for field, value in document.items() if field in FIELD_COLUMNS}


def row_to_document(row: Dict[str, Any]) -> Document:
    """
    Map a table row back to a document.

    NULL columns are left out so the reader treats them as missing fields.
    """
    document: Document = {}
    for column, value in row.items():
        field = COLUMN_FIELDS.get(column)
        if field is None or value is None:
            continue
        if isinstance(value, str) and field != "version":
            value = json.loads(value)
        document[field] = value
    return document


def _changed_row(payload: Dict[str, Any]) -> Optional[Dict[str, Any]]:
    """Extract the new row from a postgres_changes payload, None on delete"""
    data = payload.get("data", payload)
    record = data.get("record") or data.get("new")
    return record or None


class SupabaseClient:
    """Lazily created async Supabase client shared by the store"""
    _instance: Optional[AsyncClient] = None

    @classmethod
    async def get_client(cls, url: str, key: str) -> AsyncClient:
        """Get or create the async client instance"""
        if cls._instance is None:
            cls._instance = await acreate_client(url, key)
        return cls._instance


class SupabaseDocumentStore(DocumentStore):
    """
    Trip documents stored as rows of a Supabase table.

    Expected table (see ``sql/trips.sql``): ``id text primary key`` plus one
    jsonb column per collection and an integer ``version`` column, with the
    table added to the ``supabase_realtime`` publication.
    """

    def __init__(self, url: str, key: str, table: str = "trips"):
        self.url = url
        self.key = key
        self.table = table

    async def _client(self) -> AsyncClient:
        return await SupabaseClient.get_client(self.url, self.key)

    async def fetch(self, trip_id: str) -> Optional[Document]:
        """Read the document once, None if the row does not exist"""
        client = await self._client()
        result = await client.table(self.table).select("*").eq("id", trip_id).execute()
        if result.data:
            return row_to_document(result.data[0])
        return None

    async def subscribe(
        self,
        trip_id: str,
        on_snapshot: SnapshotHandler,
        on_error: ErrorHandler,
    ) -> Unsubscribe:
        client = await self._client()

        try:
            on_snapshot(await self.fetch(trip_id))
        except Exception as e:
            logger.error(f"❌ Initial load of trip '{trip_id}' failed: {type(e).__name__}: {str(e)}")
            on_error(StoreError(f"Initial load failed: {e}", trip_id=trip_id))

        def handle_change(payload: Dict[str, Any]) -> None:
            row = _changed_row(payload)
            on_snapshot(row_to_document(row) if row else None)

        def handle_status(status: RealtimeSubscribeStates, error: Optional[Exception]) -> None:
            if status == RealtimeSubscribeStates.SUBSCRIBED:
                logger.info(f"✓ Realtime channel open for trip '{trip_id}'")
            elif status in (RealtimeSubscribeStates.CHANNEL_ERROR, RealtimeSubscribeStates.TIMED_OUT):
                logger.warning(f"⚠️ Realtime channel {status} for trip '{trip_id}'")
                on_error(error or StoreError(f"Realtime channel {status}", trip_id=trip_id))

        channel = client.channel(f"trip:{trip_id}")
        channel.on_postgres_changes(
            "*",
            schema="public",
            table=self.table,
            filter=f"id=eq.{trip_id}",
            callback=handle_change,
        )
        await channel.subscribe(handle_status)

        async def unsubscribe() -> None:
            await client.remove_channel(channel)
            logger.info(f"Realtime channel closed for trip '{trip_id}'")

        return unsubscribe

    async def create_if_absent(self, trip_id: str, seed: Document) -> None:
        client = await self._client()
        row = {"id": trip_id, **document_to_row(seed)}
        try:
            await client.table(self.table)\
                .upsert(row, on_conflict="id", ignore_duplicates=True)\
                .execute()
        except APIError as e:
            raise StoreError(f"Failed to create trip document: {e.message}", trip_id=trip_id) from e

    async def patch(self, trip_id: str, fields: Document) -> None:
        client = await self._client()
        try:
            result = await client.table(self.table)\
                .update(document_to_row(fields))\
                .eq("id", trip_id)\
                .execute()
        except APIError as e:
            raise StoreError(f"Failed to update trip document: {e.message}", trip_id=trip_id) from e

        if not result.data:
            raise DocumentNotFoundError(f"No document '{trip_id}' to update", trip_id=trip_id)
