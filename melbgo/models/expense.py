"""Shared-expense ledger records"""
from typing import List, Literal
from pydantic import Field

from .base import DocumentModel

USERS = ("我", "旅伴")

Currency = Literal["AUD", "TWD"]


class Expense(DocumentModel):
    """A single payment, split equally among the involved users"""
    id: str
    title: str
    amount: float = Field(..., description="Amount in the unit of `currency`")
    currency: Currency = "AUD"
    payer: str
    involved: List[str] = Field(..., min_length=1)
    category: str = "other"
