"""
Booking links hub

The hub shows two kinds of entries in one list: links projected from
itinerary events that carry a booking URL (listed first, in trip order) and
manually stored links. Edits and deletes go back to whichever record owns
the entry.
"""
from typing import List, Literal

from pydantic import Field, TypeAdapter

from ..core import AccessGate, TripStateController
from ..models import (
    DAYS,
    LINKS,
    Day,
    DocumentModel,
    EventLinkEntry,
    Link,
    LinkEntry,
    LinkType,
    StoredLinkEntry,
    new_id,
)
from .errors import UnknownRecordError
from .itinerary import find_event

LinkSource = Literal["stored", "event"]

_ENTRIES = TypeAdapter(List[LinkEntry])


class LinkDraft(DocumentModel):
    title: str = Field(..., min_length=1)
    url: str = Field(..., min_length=1)
    details: str = ""
    type: LinkType = "ticket"


def collect_links(days: List[Day], links: List[Link]) -> List[LinkEntry]:
    entries: List[LinkEntry] = []
    for day_index, day in enumerate(days):
        for event in day.events:
            if event.booking_url:
                entries.append(EventLinkEntry(
                    id=event.id,
                    day_index=day_index,
                    title=event.title,
                    type=event.type,
                    url=event.booking_url,
                    details=event.notes or "",
                ))
    entries.extend(StoredLinkEntry(**link.model_dump()) for link in links)
    return entries


def dump_link_entries(entries: List[LinkEntry]) -> List[dict]:
    """Serialize hub entries with document-style (camelCase) keys"""
    return _ENTRIES.dump_python(entries, mode="json", by_alias=True, exclude_none=True)


def add_link(links: List[Link], draft: LinkDraft) -> List[Link]:
    return [Link(id=new_id(), **draft.model_dump()), *links]


def update_link(links: List[Link], link_id: str, draft: LinkDraft) -> List[Link]:
    if not any(link.id == link_id for link in links):
        raise UnknownRecordError("link", link_id)
    return [
        link.model_copy(update=draft.model_dump()) if link.id == link_id else link
        for link in links
    ]


def remove_link(links: List[Link], link_id: str) -> List[Link]:
    remaining = [link for link in links if link.id != link_id]
    if len(remaining) == len(links):
        raise UnknownRecordError("link", link_id)
    return remaining


def _update_event(days: List[Day], event_id: str, **changes) -> List[Day]:
    day_index, _ = find_event(days, event_id)
    day = days[day_index]
    events = [e.model_copy(update=changes) if e.id == event_id else e for e in day.events]
    return [*days[:day_index], day.model_copy(update={"events": events}), *days[day_index + 1:]]


def update_event_link(days: List[Day], event_id: str, draft: LinkDraft) -> List[Day]:
    """
    Edit a link owned by an event: title, booking URL and notes.

    The event keeps its own kind; link types such as "car" or "ticket"
    have no event counterpart.
    """
    return _update_event(days, event_id, title=draft.title, booking_url=draft.url, notes=draft.details)


def remove_event_link(days: List[Day], event_id: str) -> List[Day]:
    """Detach the booking URL; the event itself stays in the itinerary"""
    return _update_event(days, event_id, booking_url=None)


def save_link_entry(
    controller: TripStateController,
    gate: AccessGate,
    source: LinkSource,
    link_id: str,
    draft: LinkDraft,
) -> bool:
    if source == "event":
        return controller.apply_mutation(DAYS, lambda days: update_event_link(days, link_id, draft), gate)
    return controller.apply_mutation(LINKS, lambda links: update_link(links, link_id, draft), gate)


def delete_link_entry(
    controller: TripStateController,
    gate: AccessGate,
    source: LinkSource,
    link_id: str,
) -> bool:
    if source == "event":
        return controller.apply_mutation(DAYS, lambda days: remove_event_link(days, link_id), gate)
    return controller.apply_mutation(LINKS, lambda links: remove_link(links, link_id), gate)
