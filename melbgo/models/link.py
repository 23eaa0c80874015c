"""Booking links: stored records and the merged read-only view"""
from typing import Annotated, Literal, Union
from pydantic import Field

from .base import DocumentModel
from .itinerary import EventKind

LinkType = Literal["hotel", "car", "flight", "ticket", "transport", "activity", "food"]


class Link(DocumentModel):
    """Manually entered booking link"""
    id: str
    title: str
    type: LinkType = "ticket"
    url: str
    details: str = ""


class StoredLinkEntry(DocumentModel):
    """View entry backed by a record in the `links` collection"""
    source: Literal["stored"] = "stored"
    id: str
    title: str
    type: LinkType
    url: str
    details: str = ""


class EventLinkEntry(DocumentModel):
    """View entry projected from an itinerary event's booking URL"""
    source: Literal["event"] = "event"
    id: str = Field(..., description="Id of the owning event")
    day_index: int = Field(..., ge=0)
    title: str
    type: EventKind
    url: str
    details: str = ""


LinkEntry = Annotated[Union[StoredLinkEntry, EventLinkEntry], Field(discriminator="source")]
