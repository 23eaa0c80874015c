"""Itinerary records: days and their events"""
from typing import Annotated, List, Literal, Optional, Union
from pydantic import Field

from .base import DocumentModel

TIME_PATTERN = r"^\d{2}:\d{2}$"

EventKind = Literal["food", "activity", "transport", "hotel", "flight"]
Weather = Literal["sunny", "cloudy", "rain", "partly-cloudy"]


class FlightDetails(DocumentModel):
    """Boarding-pass style details shown on flight cards"""
    flight_number: str
    airline: str
    depart_code: str
    arrive_code: str
    depart_terminal: Optional[str] = None
    arrive_terminal: Optional[str] = None
    duration: Optional[str] = None


class EventBase(DocumentModel):
    """Fields shared by every kind of itinerary event"""
    id: str
    time: str = Field(..., pattern=TIME_PATTERN, description="Local time, HH:MM")
    title: str = Field(..., min_length=1)
    location: str = ""
    lat: Optional[float] = Field(None, ge=-90, le=90)
    lng: Optional[float] = Field(None, ge=-180, le=180)
    notes: Optional[str] = None
    booking_url: Optional[str] = None
    nav_link: Optional[str] = None


class FoodEvent(EventBase):
    type: Literal["food"] = "food"


class ActivityEvent(EventBase):
    type: Literal["activity"] = "activity"


class TransportEvent(EventBase):
    type: Literal["transport"] = "transport"


class HotelEvent(EventBase):
    type: Literal["hotel"] = "hotel"


class FlightEvent(EventBase):
    """Flight leg; the only event kind that carries flight details"""
    type: Literal["flight"] = "flight"
    flight_details: FlightDetails


TripEvent = Annotated[
    Union[FoodEvent, ActivityEvent, TransportEvent, HotelEvent, FlightEvent],
    Field(discriminator="type"),
]


class Day(DocumentModel):
    """One day of the trip"""
    day: int = Field(..., ge=1, description="1-based ordinal")
    date: str = Field(..., pattern=r"^\d{4}-\d{2}-\d{2}$")
    weekday: str
    weather: Weather = "sunny"
    temp: Union[int, float] = 0
    tips: str = ""
    events: List[TripEvent] = Field(default_factory=list)
