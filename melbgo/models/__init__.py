"""Trip document models"""
from .base import DocumentModel, new_id
from .category import Category
from .expense import USERS, Currency, Expense
from .itinerary import (
    ActivityEvent,
    Day,
    EventKind,
    FlightDetails,
    FlightEvent,
    FoodEvent,
    HotelEvent,
    TransportEvent,
    TripEvent,
)
from .link import EventLinkEntry, Link, LinkEntry, LinkType, StoredLinkEntry
from .todo import Todo
from .trip import (
    COLLECTIONS,
    DAYS,
    EXPENSE_CATEGORIES,
    EXPENSES,
    LINKS,
    TODO_CATEGORIES,
    TODOS,
    Trip,
    dump_collection,
    parse_collection,
)
