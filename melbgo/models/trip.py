"""The trip document and its six collections"""
from typing import Any, Dict, List, Optional
from pydantic import Field, TypeAdapter

from .base import DocumentModel
from .category import Category
from .expense import Expense
from .itinerary import Day
from .link import Link
from .todo import Todo

DAYS = "days"
EXPENSES = "expenses"
LINKS = "links"
TODOS = "todos"
TODO_CATEGORIES = "todoCategories"
EXPENSE_CATEGORIES = "expenseCategories"

COLLECTIONS = (DAYS, EXPENSES, LINKS, TODOS, TODO_CATEGORIES, EXPENSE_CATEGORIES)

_ADAPTERS: Dict[str, TypeAdapter] = {
    DAYS: TypeAdapter(List[Day]),
    EXPENSES: TypeAdapter(List[Expense]),
    LINKS: TypeAdapter(List[Link]),
    TODOS: TypeAdapter(List[Todo]),
    TODO_CATEGORIES: TypeAdapter(List[Category]),
    EXPENSE_CATEGORIES: TypeAdapter(List[Category]),
}


class Trip(DocumentModel):
    """The single persisted trip document"""
    days: List[Day] = Field(default_factory=list)
    expenses: List[Expense] = Field(default_factory=list)
    links: List[Link] = Field(default_factory=list)
    todos: List[Todo] = Field(default_factory=list)
    todo_categories: List[Category] = Field(default_factory=list)
    expense_categories: List[Category] = Field(default_factory=list)
    version: Optional[int] = None


def parse_collection(key: str, raw: Any) -> list:
    """
    Validate a raw document field into typed records

    Raises:
        KeyError: If `key` is not a trip collection
        pydantic.ValidationError: If the field does not match the record shape
    """
    return _ADAPTERS[key].validate_python(raw)


def dump_collection(key: str, value: list) -> list:
    """
    Serialize a collection for the document store.

    Produces plain JSON types with camelCase keys; unset optional fields
    are dropped instead of being written as nulls.
    """
    return _ADAPTERS[key].dump_python(value, mode="json", by_alias=True, exclude_none=True)
