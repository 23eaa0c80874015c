"""Tests for expense ledger operations"""
import pytest
from pydantic import ValidationError

from melbgo.models import EXPENSE_CATEGORIES, EXPENSES, USERS
from melbgo.services.categories import add_category
from melbgo.services.errors import UnknownRecordError
from melbgo.services.expenses import ExpenseDraft, add_expense, delete_expense_category, remove_expense


def test_draft_involves_everyone_by_default():
    draft = ExpenseDraft(title="Myki top-up", amount=20)
    assert draft.involved == list(USERS)
    assert draft.currency == "AUD"
    assert draft.category == "other"


def test_draft_validation():
    with pytest.raises(ValidationError):
        ExpenseDraft(title="Free", amount=0)
    with pytest.raises(ValidationError):
        ExpenseDraft(title="Nobody", amount=5, involved=[])
    assert ExpenseDraft(title="Dup", amount=5, involved=["我", "我"]).involved == ["我"]


def test_add_expense_prepends():
    expenses = add_expense([], ExpenseDraft(title="Coffee", amount=5))
    expenses = add_expense(expenses, ExpenseDraft(title="Tram", amount=4), expense_id="tram")
    assert [e.title for e in expenses] == ["Tram", "Coffee"]
    assert expenses[0].id == "tram"


def test_remove_expense():
    expenses = add_expense([], ExpenseDraft(title="Coffee", amount=5), expense_id="c")
    assert remove_expense(expenses, "c") == []
    with pytest.raises(UnknownRecordError):
        remove_expense(expenses, "missing")


async def test_deleted_category_moves_expenses_to_other(controller, editor):
    controller.apply_mutation(EXPENSE_CATEGORIES, lambda cats: add_category(cats, "Souvenirs"), editor)
    category_id = controller.get(EXPENSE_CATEGORIES)[-1].id
    controller.apply_mutation(
        EXPENSES,
        lambda expenses: add_expense(expenses, ExpenseDraft(title="Koala", amount=30, category=category_id)),
        editor,
    )

    assert delete_expense_category(controller, editor, category_id) is True
    await controller.drain()

    assert category_id not in [c.id for c in controller.get(EXPENSE_CATEGORIES)]
    assert controller.get(EXPENSES)[0].category == "other"


async def test_default_expense_category_cannot_be_deleted(controller, editor):
    assert delete_expense_category(controller, editor, "food") is False
    assert "food" in [c.id for c in controller.get(EXPENSE_CATEGORIES)]
