"""Manual expense ledger."""

from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Any
from uuid import uuid4

import structlog

from stall_books.errors import InvalidEntry
from stall_books.models import AppData, Expense
from stall_books.money import positive, total

logger = structlog.get_logger(__name__)


def expenses_on(state: AppData, day: date) -> list[Expense]:
    return [expense for expense in state.expenses if expense.date == day]


def total_expenses(state: AppData, day: date) -> Decimal:
    return total(expense.amount for expense in expenses_on(state, day))


def add_expense(
    state: AppData,
    day: date,
    description: str,
    amount: Any,
    expense_id: str | None = None,
) -> AppData:
    """Record an expense against a business date."""
    description = (description or "").strip()
    if not description:
        raise InvalidEntry("Expense description is required")
    value = positive(amount, "amount")

    expense = Expense(
        id=expense_id or f"exp-{uuid4().hex[:12]}",
        description=description,
        amount=value,
        date=day,
    )
    logger.info("expense_added", expense_id=expense.id, amount=str(value), day=day.isoformat())
    return state.model_copy(update={"expenses": [*state.expenses, expense]})


def delete_expense(state: AppData, expense_id: str) -> AppData:
    """Remove an expense by id; unknown ids leave the document unchanged."""
    remaining = [expense for expense in state.expenses if expense.id != expense_id]
    if len(remaining) == len(state.expenses):
        return state
    logger.info("expense_deleted", expense_id=expense_id)
    return state.model_copy(update={"expenses": remaining})
