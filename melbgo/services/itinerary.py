"""Itinerary operations: saving, deleting and navigating to events"""
from datetime import date
from typing import List, Optional, Tuple
from urllib.parse import quote

from pydantic import Field, TypeAdapter

from ..models import Day, DocumentModel, EventKind, FlightDetails, TripEvent, new_id
from ..models.itinerary import TIME_PATTERN
from .errors import UnknownRecordError

MAPS_SEARCH_URL = "https://www.google.com/maps/search/?api=1&query={query}"

_EVENT = TypeAdapter(TripEvent)


class EventDraft(DocumentModel):
    """Edit-form buffer for creating or editing an event"""
    time: str = Field(..., pattern=TIME_PATTERN)
    title: str
    location: str = ""
    type: EventKind = "activity"
    lat: Optional[float] = None
    lng: Optional[float] = None
    notes: Optional[str] = None
    booking_url: Optional[str] = None
    nav_link: Optional[str] = None
    flight_details: Optional[FlightDetails] = None


def _day_at(days: List[Day], day_index: int) -> Day:
    if not 0 <= day_index < len(days):
        raise UnknownRecordError("day", day_index)
    return days[day_index]


def _replace_day(days: List[Day], day_index: int, day: Day) -> List[Day]:
    return [*days[:day_index], day, *days[day_index + 1:]]


def _event_fields(event) -> dict:
    return event.model_dump(exclude_none=True)


def save_event(
    days: List[Day],
    day_index: int,
    draft: EventDraft,
    event_id: Optional[str] = None,
) -> List[Day]:
    """
    Create a new event, or merge `draft` into the event `event_id`.

    The day's events are re-sorted by time afterwards. Drafts without a
    title or time are ignored.

    Raises:
        UnknownRecordError: If the day or the edited event does not exist
        pydantic.ValidationError: If the result is not a valid event
            (e.g. a flight without flight details)
    """
    if not draft.title or not draft.time:
        return days

    day = _day_at(days, day_index)
    events = list(day.events)
    changes = draft.model_dump(exclude_unset=True)

    if event_id is not None:
        index = next((i for i, e in enumerate(events) if e.id == event_id), None)
        if index is None:
            raise UnknownRecordError("event", event_id)
        events[index] = _EVENT.validate_python({**_event_fields(events[index]), **changes, "id": event_id})
    else:
        events.append(_EVENT.validate_python({**changes, "type": draft.type, "id": new_id()}))

    events.sort(key=lambda e: e.time)
    return _replace_day(days, day_index, day.model_copy(update={"events": events}))


def delete_event(days: List[Day], day_index: int, event_id: str) -> List[Day]:
    day = _day_at(days, day_index)
    events = [e for e in day.events if e.id != event_id]
    if len(events) == len(day.events):
        raise UnknownRecordError("event", event_id)
    return _replace_day(days, day_index, day.model_copy(update={"events": events}))


def update_memo(days: List[Day], day_index: int, text: str) -> List[Day]:
    """Replace the day's memo; callers sync on blur rather than per keystroke"""
    day = _day_at(days, day_index)
    if day.tips == text:
        return days
    return _replace_day(days, day_index, day.model_copy(update={"tips": text}))


def find_event(days: List[Day], event_id: str) -> Tuple[int, TripEvent]:
    """Locate an event anywhere in the trip"""
    for day_index, day in enumerate(days):
        for event in day.events:
            if event.id == event_id:
                return day_index, event
    raise UnknownRecordError("event", event_id)


def navigation_url(event: TripEvent) -> Optional[str]:
    """Explicit navigation link, else a map search for the event's location"""
    if event.nav_link:
        return event.nav_link
    if event.location:
        return MAPS_SEARCH_URL.format(query=quote(event.location, safe="!~*'()"))
    return None


def select_initial_day(days: List[Day], today: date) -> int:
    """
    Day to open on: today's day during the trip, the last day once it is
    over, otherwise the first day.
    """
    if not days:
        return 0
    today_str = today.isoformat()
    for index, day in enumerate(days):
        if day.date == today_str:
            return index
    if today_str > days[-1].date:
        return len(days) - 1
    return 0
