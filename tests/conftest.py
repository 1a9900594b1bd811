"""Pytest configuration and fixtures."""

import os
from collections.abc import Callable
from datetime import date, datetime, timedelta, timezone
from decimal import Decimal

import pytest

# Keep settings independent of any developer .env
os.environ.setdefault("STALL_TIMEZONE", "Asia/Jakarta")
os.environ.setdefault("STALL_AUTOSAVE", "false")

from stall_books.business_day import BusinessDayResolver  # noqa: E402
from stall_books.models import (  # noqa: E402
    AppData,
    LineItem,
    Payment,
    PaymentMethod,
    PaymentStatus,
    Transaction,
)

WIB = timezone(timedelta(hours=7))


@pytest.fixture
def resolver() -> BusinessDayResolver:
    """Store on UTC+7, business day starting at midnight."""
    return BusinessDayResolver(tz=WIB, day_start_hour=0)


@pytest.fixture
def today() -> date:
    return date(2025, 3, 14)


@pytest.fixture
def state() -> AppData:
    return AppData()


@pytest.fixture
def make_transaction() -> Callable[..., Transaction]:
    """Factory for transactions created at store-local noon of a date."""
    counter = {"n": 0}

    def _make(
        day: date,
        total: int | str,
        method: PaymentMethod = PaymentMethod.CASH,
        paid: bool = True,
        hour: int = 12,
        customer_name: str = "",
    ) -> Transaction:
        counter["n"] += 1
        amount = Decimal(str(total))
        return Transaction(
            id=f"trx-{counter['n']:04d}",
            items=[LineItem(name="Mie Goreng", price=amount, quantity=1)],
            customer_name=customer_name,
            payment=Payment(
                status=PaymentStatus.PAID if paid else PaymentStatus.UNPAID,
                method=method,
            ),
            created_at=datetime(day.year, day.month, day.day, hour, 0, tzinfo=WIB),
            total=amount,
        )

    return _make


@pytest.fixture
def with_transactions() -> Callable[..., AppData]:
    def _with(state: AppData, *transactions: Transaction) -> AppData:
        return state.model_copy(
            update={"transactions": [*state.transactions, *transactions]}
        )

    return _with
