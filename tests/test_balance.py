"""Tests for the balance and currency engine"""
import random

import pytest

from melbgo.models import USERS, Expense
from melbgo.services.balance import (
    aud_to_twd,
    compute_balances,
    normalize_amount,
    settle,
    twd_to_aud,
)

ME, COMPANION = USERS


def expense(amount, payer=ME, involved=USERS, currency="AUD", id="e"):
    return Expense(
        id=id,
        title="Dinner",
        amount=amount,
        currency=currency,
        payer=payer,
        involved=list(involved),
        category="food",
    )


def test_even_split_settlement():
    balances = compute_balances([expense(100)], rate=21.5)
    assert balances == {ME: 50.0, COMPANION: -50.0}

    settlement = settle(balances, rate=21.5)
    assert settlement.debtor == COMPANION
    assert settlement.creditor == ME
    assert settlement.amount_aud == 50.0
    assert settlement.amount_twd == pytest.approx(1075)
    assert settlement.message == "旅伴 需支付 我 $50.00 AUD (約合台幣 1075)"


def test_companion_paid_more():
    balances = compute_balances([expense(30, payer=COMPANION)], rate=20)
    settlement = settle(balances, rate=20)
    assert settlement.debtor == ME
    assert settlement.creditor == COMPANION
    assert settlement.amount_aud == pytest.approx(15)
    assert settlement.amount_twd == pytest.approx(300)


def test_twd_expense_is_normalized():
    assert normalize_amount(expense(2150, currency="TWD"), rate=21.5) == pytest.approx(100)
    balances = compute_balances([expense(2150, currency="TWD")], rate=21.5)
    assert balances[ME] == pytest.approx(50)


def test_expense_for_one_person():
    balances = compute_balances([expense(40, payer=ME, involved=[COMPANION])], rate=21.5)
    assert balances == {ME: 40.0, COMPANION: -40.0}


def test_even_ledger_settles_to_zero():
    balances = compute_balances([], rate=21.5)
    settlement = settle(balances, rate=21.5)
    assert settlement.amount_aud == 0
    assert settlement.amount_twd == 0


def test_balances_sum_to_zero():
    rng = random.Random(2026)
    for _ in range(50):
        expenses = [
            expense(
                round(rng.uniform(0.5, 900), 2),
                payer=rng.choice(USERS),
                involved=rng.choice([USERS, [ME], [COMPANION]]),
                currency=rng.choice(["AUD", "TWD"]),
                id=str(i),
            )
            for i in range(rng.randint(0, 12))
        ]
        balances = compute_balances(expenses, rate=rng.uniform(15, 25))
        assert sum(balances.values()) == pytest.approx(0, abs=1e-6)


def test_invalid_rate():
    with pytest.raises(ValueError):
        compute_balances([expense(10)], rate=0)
    with pytest.raises(ValueError):
        aud_to_twd(10, -1)


def test_converter():
    assert aud_to_twd(10, 21.5) == 215
    assert aud_to_twd(1.03, 21.5) == 22
    assert twd_to_aud(1000, 21.5) == 46.51
