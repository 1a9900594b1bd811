"""Cash drawer reconciliation.

Expected cash for a day is the starting float plus cash sales minus that
day's expenses. Reconciling records the counted amount and the signed
difference. Resetting reopens the count but keeps the previous figures visible
so the user can correct them.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Any

import structlog

from stall_books.business_day import BusinessDayResolver
from stall_books.expenses import total_expenses
from stall_books.history import daily_log, update_daily_log
from stall_books.models import AppData, DailyCash
from stall_books.money import non_negative
from stall_books.revenue import daily_revenue
from stall_books.store import KeyedRecords

logger = structlog.get_logger(__name__)


class ReconciliationState(str, Enum):
    OPEN = "open"
    RECONCILED = "reconciled"


@dataclass(frozen=True)
class CashCount:
    """Snapshot of the cash drawer figures for one day."""

    day: date
    state: ReconciliationState
    starting_float: Decimal
    cash_sales: Decimal
    expenses: Decimal
    actual: Decimal | None
    difference: Decimal | None

    @property
    def expected(self) -> Decimal:
        return self.starting_float + self.cash_sales - self.expenses


def _floats(state: AppData) -> KeyedRecords[date, DailyCash]:
    return KeyedRecords(state.daily_cash, lambda day: DailyCash(date=day))


def starting_float(state: AppData, day: date) -> Decimal:
    return _floats(state).get_or_create(day).starting_float


def set_starting_float(state: AppData, day: date, amount: Any) -> AppData:
    value = non_negative(amount, "starting_float")
    records, _ = _floats(state).update(day, starting_float=value)
    logger.info("starting_float_set", day=day.isoformat(), amount=str(value))
    return state.model_copy(update={"daily_cash": records})


def expected_cash(
    state: AppData, day: date, resolver: BusinessDayResolver | None = None
) -> Decimal:
    cash_sales = daily_revenue(state.transactions, day, resolver).cash
    return starting_float(state, day) + cash_sales - total_expenses(state, day)


def reconcile(
    state: AppData,
    day: date,
    actual: Any,
    resolver: BusinessDayResolver | None = None,
) -> AppData:
    """Record the counted cash for ``day`` and its difference from expected."""
    counted = non_negative(actual, "actual_cash")
    expected = expected_cash(state, day, resolver)
    difference = counted - expected
    logger.info(
        "cash_reconciled",
        day=day.isoformat(),
        expected=str(expected),
        actual=str(counted),
        difference=str(difference),
    )
    return update_daily_log(
        state,
        day,
        cash_reconciled=True,
        actual_cash_in_hand=counted,
        cash_difference=difference,
    )


def reset_reconciliation(state: AppData, day: date) -> AppData:
    """Reopen the cash count; the last actual amount and difference remain."""
    if not daily_log(state, day).cash_reconciled:
        return state
    logger.info("cash_reconciliation_reset", day=day.isoformat())
    return update_daily_log(state, day, cash_reconciled=False)


def reconciliation_status(
    state: AppData, day: date, resolver: BusinessDayResolver | None = None
) -> CashCount:
    log = daily_log(state, day)
    return CashCount(
        day=day,
        state=(
            ReconciliationState.RECONCILED
            if log.cash_reconciled
            else ReconciliationState.OPEN
        ),
        starting_float=starting_float(state, day),
        cash_sales=daily_revenue(state.transactions, day, resolver).cash,
        expenses=total_expenses(state, day),
        actual=log.actual_cash_in_hand,
        difference=log.cash_difference,
    )
