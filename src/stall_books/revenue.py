"""Daily revenue aggregation over the transaction log."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date
from decimal import Decimal

from stall_books.business_day import BusinessDayResolver, default_resolver
from stall_books.models import PaymentMethod, Transaction
from stall_books.money import total


@dataclass(frozen=True)
class DailyRevenue:
    """Paid sales for one business day, split by payment method."""

    day: date
    cash: Decimal
    electronic: Decimal
    transactions: tuple[Transaction, ...] = ()

    @property
    def total(self) -> Decimal:
        return self.cash + self.electronic

    @property
    def count(self) -> int:
        return len(self.transactions)

    def for_method(self, method: PaymentMethod) -> Decimal:
        return self.cash if method == PaymentMethod.CASH else self.electronic


def paid_transactions(
    transactions: Iterable[Transaction],
    day: date,
    resolver: BusinessDayResolver | None = None,
) -> list[Transaction]:
    """Paid transactions whose business date is ``day``, in log order."""
    resolver = resolver or default_resolver()
    return [
        trx
        for trx in transactions
        if trx.payment.is_paid and resolver.resolve(trx.created_at) == day
    ]


def daily_revenue(
    transactions: Iterable[Transaction],
    day: date,
    resolver: BusinessDayResolver | None = None,
) -> DailyRevenue:
    """Aggregate paid sales for ``day``. Always recomputed from the full log."""
    paid = paid_transactions(transactions, day, resolver)
    cash = total(t.total for t in paid if t.payment.method == PaymentMethod.CASH)
    electronic = total(
        t.total for t in paid if t.payment.method == PaymentMethod.ELECTRONIC
    )
    return DailyRevenue(day=day, cash=cash, electronic=electronic, transactions=tuple(paid))
