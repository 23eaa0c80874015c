"""Expense ledger operations"""
from typing import List, Optional

from pydantic import Field, field_validator

from ..core import AccessGate, TripStateController
from ..models import EXPENSE_CATEGORIES, EXPENSES, USERS, Currency, DocumentModel, Expense, new_id
from .categories import delete_category
from .errors import UnknownRecordError

FALLBACK_EXPENSE_CATEGORY = "other"


class ExpenseDraft(DocumentModel):
    """New-expense form; everyone is involved unless narrowed down"""
    title: str = Field(..., min_length=1)
    amount: float = Field(..., gt=0)
    currency: Currency = "AUD"
    payer: str = USERS[0]
    involved: List[str] = Field(default_factory=lambda: list(USERS), min_length=1)
    category: str = FALLBACK_EXPENSE_CATEGORY

    @field_validator("involved")
    @classmethod
    def unique_involved(cls, v):
        """Drop duplicate users while keeping order"""
        return list(dict.fromkeys(v))


def add_expense(expenses: List[Expense], draft: ExpenseDraft, expense_id: Optional[str] = None) -> List[Expense]:
    """Newest expenses are listed first"""
    expense = Expense(id=expense_id or new_id(), **draft.model_dump())
    return [expense, *expenses]


def remove_expense(expenses: List[Expense], expense_id: str) -> List[Expense]:
    remaining = [e for e in expenses if e.id != expense_id]
    if len(remaining) == len(expenses):
        raise UnknownRecordError("expense", expense_id)
    return remaining


def delete_expense_category(controller: TripStateController, gate: AccessGate, category_id: str) -> bool:
    """Delete a user expense category; its expenses move to "other" """
    return delete_category(
        controller, gate, EXPENSE_CATEGORIES, EXPENSES, category_id, FALLBACK_EXPENSE_CATEGORY
    )
