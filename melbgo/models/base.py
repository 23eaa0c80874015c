"""Shared base for records stored in the trip document"""
import time
from pydantic import BaseModel
from pydantic.alias_generators import to_camel


class DocumentModel(BaseModel):
    """
    Base model for trip document records.

    Attributes are snake_case in Python and camelCase in the document
    (``booking_url`` <-> ``bookingUrl``). Either name is accepted on input.
    """
    model_config = {
        "alias_generator": to_camel,
        "populate_by_name": True,
    }


def new_id() -> str:
    """Timestamp-based record id (milliseconds since the epoch)"""
    return str(int(time.time() * 1000))
