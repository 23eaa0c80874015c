"""Category list operations shared by expenses and to-dos"""
import random
import time
from typing import List, Optional, Sequence, TypeVar

from ..core import AccessGate, TripStateController
from ..models import Category

COLOR_PRESETS = [
    "bg-red-50 text-red-700 dark:bg-red-900/30 dark:text-red-300",
    "bg-orange-50 text-orange-700 dark:bg-orange-900/30 dark:text-orange-300",
    "bg-amber-50 text-amber-700 dark:bg-amber-900/30 dark:text-amber-300",
    "bg-lime-50 text-lime-700 dark:bg-lime-900/30 dark:text-lime-300",
    "bg-emerald-50 text-emerald-700 dark:bg-emerald-900/30 dark:text-emerald-300",
    "bg-teal-50 text-teal-700 dark:bg-teal-900/30 dark:text-teal-300",
    "bg-cyan-50 text-cyan-700 dark:bg-cyan-900/30 dark:text-cyan-300",
    "bg-blue-50 text-blue-700 dark:bg-blue-900/30 dark:text-blue-300",
    "bg-indigo-50 text-indigo-700 dark:bg-indigo-900/30 dark:text-indigo-300",
    "bg-violet-50 text-violet-700 dark:bg-violet-900/30 dark:text-violet-300",
    "bg-purple-50 text-purple-700 dark:bg-purple-900/30 dark:text-purple-300",
    "bg-fuchsia-50 text-fuchsia-700 dark:bg-fuchsia-900/30 dark:text-fuchsia-300",
    "bg-pink-50 text-pink-700 dark:bg-pink-900/30 dark:text-pink-300",
    "bg-rose-50 text-rose-700 dark:bg-rose-900/30 dark:text-rose-300",
]

T = TypeVar("T")


def new_category_id() -> str:
    return f"cat_{int(time.time() * 1000)}"


def add_category(categories: List[Category], label: str, color: Optional[str] = None) -> List[Category]:
    """Append a user category with a random colour preset; blank labels are ignored"""
    label = label.strip()
    if not label:
        return categories
    category = Category(
        id=new_category_id(),
        label=label,
        color=color or random.choice(COLOR_PRESETS),
        is_default=False,
    )
    return [*categories, category]


def find_category(categories: Sequence[Category], category_id: str) -> Optional[Category]:
    return next((c for c in categories if c.id == category_id), None)


def can_delete(categories: Sequence[Category], category_id: str) -> bool:
    """Only existing, non-default categories can be deleted"""
    category = find_category(categories, category_id)
    return category is not None and not category.is_default


def remove_category(categories: List[Category], category_id: str) -> List[Category]:
    if not can_delete(categories, category_id):
        return categories
    return [c for c in categories if c.id != category_id]


def reassign_category(items: List[T], from_id: str, to_id: str) -> List[T]:
    """Move every item of category `from_id` to `to_id`"""
    return [
        item.model_copy(update={"category": to_id}) if item.category == from_id else item
        for item in items
    ]


def delete_category(
    controller: TripStateController,
    gate: AccessGate,
    categories_key: str,
    items_key: str,
    category_id: str,
    fallback_id: str,
) -> bool:
    """
    Delete a user category and move its items to `fallback_id`.

    Default categories and unknown ids are left alone.

    Returns:
        True if the category was deleted
    """
    if not gate.is_authorized or not can_delete(controller.get(categories_key), category_id):
        return False
    controller.apply_mutation(categories_key, lambda cats: remove_category(cats, category_id), gate)
    controller.apply_mutation(items_key, lambda items: reassign_category(items, category_id, fallback_id), gate)
    return True
