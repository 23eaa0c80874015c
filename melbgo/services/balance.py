"""
Balance and currency engine for the two-person ledger

All amounts are normalized to AUD. The exchange rate is AUD -> TWD
(NT$ per A$1) and is supplied by the caller on every computation.
"""
from dataclasses import dataclass
from typing import Dict, Iterable, Sequence

from ..models import USERS, Expense


@dataclass(frozen=True)
class Settlement:
    """Who pays whom to square the ledger"""
    debtor: str
    creditor: str
    amount_aud: float
    amount_twd: float

    @property
    def message(self) -> str:
        return f"{self.debtor} 需支付 {self.creditor} ${self.amount_aud:.2f} AUD (約合台幣 {self.amount_twd:.0f})"


def _check_rate(rate: float) -> None:
    if rate <= 0:
        raise ValueError("Exchange rate must be positive")


def normalize_amount(expense: Expense, rate: float) -> float:
    """Expense amount in AUD"""
    _check_rate(rate)
    if expense.currency == "TWD":
        return expense.amount / rate
    return expense.amount


def compute_balances(
    expenses: Iterable[Expense],
    rate: float,
    users: Sequence[str] = USERS,
) -> Dict[str, float]:
    """
    Net AUD balance per user: what they paid minus their equal share of
    every expense they are involved in. Positive means others owe them.

    Users outside `users` who appear on an expense are added to the result.
    """
    balances: Dict[str, float] = {user: 0.0 for user in users}
    for expense in expenses:
        amount = normalize_amount(expense, rate)
        share = amount / len(expense.involved)
        balances[expense.payer] = balances.get(expense.payer, 0.0) + amount
        for user in expense.involved:
            balances[user] = balances.get(user, 0.0) - share
    return balances


def settle(balances: Dict[str, float], rate: float, users: Sequence[str] = USERS) -> Settlement:
    """Settlement between the two users of the ledger"""
    _check_rate(rate)
    first, second = users[0], users[1]
    if balances[first] > 0:
        amount = balances[first]
        return Settlement(debtor=second, creditor=first, amount_aud=amount, amount_twd=abs(amount * rate))
    amount = balances[second]
    return Settlement(debtor=first, creditor=second, amount_aud=amount, amount_twd=abs(balances[first] * rate))


def aud_to_twd(amount: float, rate: float) -> int:
    """Scratch converter, rounded to whole NT$"""
    _check_rate(rate)
    return round(amount * rate)


def twd_to_aud(amount: float, rate: float) -> float:
    _check_rate(rate)
    return round(amount / rate, 2)
