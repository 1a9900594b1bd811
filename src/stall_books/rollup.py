"""Monthly roll-up against the studio's monthly revenue target."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Any

import structlog

from stall_books.business_day import (
    BusinessDayResolver,
    days_in_month,
    parse_year_month,
    year_month,
)
from stall_books.history import DailyFigures, daily_figures
from stall_books.models import AppData, StudioMonthlyData
from stall_books.money import ZERO, non_negative, total
from stall_books.store import KeyedRecords
from stall_books.studio import studio_day

logger = structlog.get_logger(__name__)

HUNDRED = Decimal("100")


@dataclass(frozen=True)
class MonthlySummary:
    year_month: str
    days: tuple[DailyFigures, ...]
    savings: Decimal
    profit: Decimal
    target: Decimal

    @property
    def revenue(self) -> Decimal:
        return total(item.revenue for item in self.days)

    @property
    def expenses(self) -> Decimal:
        return total(item.expenses for item in self.days)

    @property
    def progress(self) -> Decimal:
        """Percent of target reached; unclamped, zero when no target is set."""
        if self.target <= 0:
            return ZERO
        return self.revenue * HUNDRED / self.target

    @property
    def progress_display(self) -> Decimal:
        return min(max(self.progress, ZERO), HUNDRED)


def _months(state: AppData) -> KeyedRecords[str, StudioMonthlyData]:
    return KeyedRecords(
        state.studio.monthly,
        lambda ym: StudioMonthlyData(year_month=ym),
        key="year_month",
    )


def monthly_target(state: AppData, ym: str) -> Decimal:
    parse_year_month(ym)
    return _months(state).get_or_create(ym).monthly_target


def set_monthly_target(state: AppData, ym: str, target: Any) -> AppData:
    parse_year_month(ym)
    value = non_negative(target, "monthly_target")
    monthly, _ = _months(state).update(ym, monthly_target=value)
    logger.info("monthly_target_set", year_month=ym, target=str(value))
    studio = state.studio.model_copy(update={"monthly": monthly})
    return state.model_copy(update={"studio": studio})


def monthly_savings(state: AppData, ym: str) -> Decimal:
    """Deposited savings across every log dated in the month."""
    parse_year_month(ym)
    return total(
        log.savings_amount
        for log in state.daily_logs
        if log.savings_deposited and year_month(log.date) == ym
    )


def studio_profit(
    state: AppData, ym: str, resolver: BusinessDayResolver | None = None
) -> Decimal:
    """(POS income + manual income) - manual expenses over the month's ledgers."""
    profit = ZERO
    for day in days_in_month(ym):
        view = studio_day(state, day, resolver)
        profit += view.income - view.expense
    return profit


def monthly_summary(
    state: AppData,
    ym: str,
    today: date,
    resolver: BusinessDayResolver | None = None,
) -> MonthlySummary:
    parse_year_month(ym)
    days = tuple(
        daily_figures(state, day, today, resolver) for day in days_in_month(ym)
    )
    return MonthlySummary(
        year_month=ym,
        days=days,
        savings=monthly_savings(state, ym),
        profit=studio_profit(state, ym, resolver),
        target=monthly_target(state, ym),
    )
