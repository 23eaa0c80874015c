"""Checklist operations"""
from typing import Dict, List

from pydantic import BaseModel

from ..core import AccessGate, TripStateController
from ..models import TODO_CATEGORIES, TODOS, Category, Todo, new_id
from .categories import delete_category
from .errors import UnknownRecordError

FALLBACK_TODO_CATEGORY = "todo"
UNCATEGORIZED = "uncategorized"


class TodoProgress(BaseModel):
    total: int
    completed: int
    percent: int


def add_todo(todos: List[Todo], text: str, category: str = FALLBACK_TODO_CATEGORY) -> List[Todo]:
    """Prepend a new open item; blank text is ignored"""
    text = text.strip()
    if not text:
        return todos
    return [Todo(id=new_id(), text=text, is_completed=False, category=category), *todos]


def toggle_todo(todos: List[Todo], todo_id: str) -> List[Todo]:
    if not any(t.id == todo_id for t in todos):
        raise UnknownRecordError("todo", todo_id)
    return [
        t.model_copy(update={"is_completed": not t.is_completed}) if t.id == todo_id else t
        for t in todos
    ]


def delete_todo(todos: List[Todo], todo_id: str) -> List[Todo]:
    remaining = [t for t in todos if t.id != todo_id]
    if len(remaining) == len(todos):
        raise UnknownRecordError("todo", todo_id)
    return remaining


def group_todos(todos: List[Todo], categories: List[Category]) -> Dict[str, List[Todo]]:
    """
    Bucket items by category, in category order.

    Items whose category no longer exists are shown under "todo" (or the
    first category); with no categories at all they land in "uncategorized".
    """
    groups: Dict[str, List[Todo]] = {c.id: [] for c in categories}
    groups[UNCATEGORIZED] = []

    fallback = FALLBACK_TODO_CATEGORY if FALLBACK_TODO_CATEGORY in groups else (
        categories[0].id if categories else UNCATEGORIZED
    )
    for todo in todos:
        groups[todo.category if todo.category in groups else fallback].append(todo)
    return groups


def progress(todos: List[Todo]) -> TodoProgress:
    total = len(todos)
    completed = sum(1 for t in todos if t.is_completed)
    percent = 0 if total == 0 else round(completed / total * 100)
    return TodoProgress(total=total, completed=completed, percent=percent)


def delete_todo_category(controller: TripStateController, gate: AccessGate, category_id: str) -> bool:
    """Delete a user to-do category; its items move to "todo" """
    return delete_category(
        controller, gate, TODO_CATEGORIES, TODOS, category_id, FALLBACK_TODO_CATEGORY
    )
