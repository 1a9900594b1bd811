"""Daily logs: manual back-fill, savings jar and day closing.

For the current business date revenue and expenses are derived from the
transaction and expense logs. For any other date they come from the manually
entered ``DailyLog`` figures. The two sources are never mixed for one date.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Any

import structlog

from stall_books.business_day import BusinessDayResolver, recent_dates
from stall_books.expenses import total_expenses
from stall_books.models import AppData, DailyLog
from stall_books.money import ZERO, non_negative, total
from stall_books.revenue import daily_revenue
from stall_books.store import KeyedRecords

logger = structlog.get_logger(__name__)


def _logs(state: AppData) -> KeyedRecords[date, DailyLog]:
    return KeyedRecords(state.daily_logs, lambda day: DailyLog(date=day))


def daily_log(state: AppData, day: date) -> DailyLog:
    """Stored log for ``day`` or an all-default one."""
    return _logs(state).get_or_create(day)


def update_daily_log(state: AppData, day: date, **changes: Any) -> AppData:
    """Upsert the log for ``day``; fields not in ``changes`` are preserved."""
    records, _ = _logs(state).update(day, **changes)
    return state.model_copy(update={"daily_logs": records})


@dataclass(frozen=True)
class DailyFigures:
    """Revenue, expenses and savings for one business date."""

    day: date
    revenue: Decimal
    expenses: Decimal
    savings_amount: Decimal
    savings_deposited: bool
    derived: bool

    @property
    def deposited_savings(self) -> Decimal:
        """Savings that count towards totals; undeposited amounts are zero."""
        return self.savings_amount if self.savings_deposited else ZERO

    @property
    def net(self) -> Decimal:
        return self.revenue - self.expenses


def daily_figures(
    state: AppData,
    day: date,
    today: date,
    resolver: BusinessDayResolver | None = None,
) -> DailyFigures:
    log = daily_log(state, day)
    if day == today:
        revenue = daily_revenue(state.transactions, day, resolver).total
        expenses = total_expenses(state, day)
        derived = True
    else:
        revenue = log.manual_revenue
        expenses = log.manual_expenses
        derived = False
    return DailyFigures(
        day=day,
        revenue=revenue,
        expenses=expenses,
        savings_amount=log.savings_amount,
        savings_deposited=log.savings_deposited,
        derived=derived,
    )


def save_daily_log(
    state: AppData,
    day: date,
    revenue: Any,
    expenses: Any,
    savings: Any,
) -> AppData:
    """Store manual revenue, expenses and savings for a date."""
    values = {
        "manual_revenue": non_negative(revenue, "revenue"),
        "manual_expenses": non_negative(expenses, "expenses"),
        "savings_amount": non_negative(savings, "savings"),
    }
    logger.info(
        "daily_log_saved",
        day=day.isoformat(),
        **{key: str(value) for key, value in values.items()},
    )
    return update_daily_log(state, day, **values)


def toggle_savings_deposited(
    state: AppData, day: date, amount: Any | None = None
) -> AppData:
    """Flip the savings-deposited flag, storing the amount alongside it.

    ``amount`` is the pending savings input; when omitted the amount already
    stored for the date is kept.
    """
    log = daily_log(state, day)
    value = log.savings_amount if amount is None else non_negative(amount, "savings")
    deposited = not log.savings_deposited
    logger.info(
        "savings_toggled", day=day.isoformat(), deposited=deposited, amount=str(value)
    )
    return update_daily_log(
        state, day, savings_deposited=deposited, savings_amount=value
    )


def is_day_closed(state: AppData, day: date) -> bool:
    return daily_log(state, day).is_closed


def close_day(state: AppData, day: date) -> AppData:
    """Lock a business date against new orders."""
    if is_day_closed(state, day):
        return state
    logger.info("day_closed", day=day.isoformat())
    return update_daily_log(state, day, is_closed=True)


def reopen_day(state: AppData, day: date) -> AppData:
    if not is_day_closed(state, day):
        return state
    logger.info("day_reopened", day=day.isoformat())
    return update_daily_log(state, day, is_closed=False)


@dataclass(frozen=True)
class RecentDaysSummary:
    """Figures for a window of days ending today, oldest first."""

    days: tuple[DailyFigures, ...]

    @property
    def revenue(self) -> Decimal:
        return total(item.revenue for item in self.days)

    @property
    def expenses(self) -> Decimal:
        return total(item.expenses for item in self.days)

    @property
    def savings(self) -> Decimal:
        return total(item.deposited_savings for item in self.days)


def summarize_recent_days(
    state: AppData,
    today: date,
    days: int = 7,
    resolver: BusinessDayResolver | None = None,
) -> RecentDaysSummary:
    return RecentDaysSummary(
        days=tuple(
            daily_figures(state, day, today, resolver)
            for day in recent_dates(today, days)
        )
    )
