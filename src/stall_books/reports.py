"""Daily sales report and short revenue recap."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal

from stall_books.business_day import BusinessDayResolver, recent_dates
from stall_books.history import daily_log
from stall_books.models import AppData, PaymentMethod, Transaction
from stall_books.money import total
from stall_books.revenue import DailyRevenue, daily_revenue


@dataclass(frozen=True)
class ReportLine:
    transaction_id: str
    label: str
    items: str
    method: PaymentMethod
    created_at: datetime
    total: Decimal


@dataclass(frozen=True)
class DailySalesReport:
    day: date
    revenue: DailyRevenue
    lines: tuple[ReportLine, ...]


@dataclass(frozen=True)
class RevenueRecap:
    rows: tuple[tuple[date, Decimal], ...]

    @property
    def total(self) -> Decimal:
        return total(amount for _, amount in self.rows)


def transaction_label(trx: Transaction) -> str:
    """Customer name, or a short order number when none was given."""
    return trx.customer_name.strip() or f"Order #{trx.id[-4:]}"


def items_summary(trx: Transaction) -> str:
    return ", ".join(f"{item.name} x{item.quantity}" for item in trx.items)


def daily_sales_report(
    state: AppData, day: date, resolver: BusinessDayResolver | None = None
) -> DailySalesReport:
    revenue = daily_revenue(state.transactions, day, resolver)
    lines = tuple(
        ReportLine(
            transaction_id=trx.id,
            label=transaction_label(trx),
            items=items_summary(trx),
            method=trx.payment.method,
            created_at=trx.created_at,
            total=trx.total,
        )
        for trx in revenue.transactions
    )
    return DailySalesReport(day=day, revenue=revenue, lines=lines)


def revenue_recap(state: AppData, today: date, days: int = 3) -> RevenueRecap:
    """Manually logged revenue for the last ``days`` days, newest first."""
    return RevenueRecap(
        rows=tuple(
            (day, daily_log(state, day).manual_revenue)
            for day in reversed(recent_dates(today, days))
        )
    )
