"""Tests for command dispatch."""

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest

from stall_books.commands import (
    AddExpense,
    AddLedgerEntry,
    CloseDay,
    DeleteLedgerEntry,
    MarkPaid,
    PlaceOrder,
    ReconcileCash,
    SaveDailyLog,
    SetMonthlyTarget,
    SetStartingFloat,
    apply,
)
from stall_books.errors import InvalidAmount
from stall_books.models import LineItem, PaymentStatus
from stall_books.reconciliation import reconciliation_status
from stall_books.rollup import monthly_target

WIB = timezone(timedelta(hours=7))


class TestApply:
    """Tests for apply."""

    def test_each_command_reaches_its_operation(self, state, today, resolver):
        """Each command type updates its own part of the document."""
        state = apply(state, SetStartingFloat(day=today, amount=100000))
        state = apply(state, AddExpense(day=today, description="Gas", amount=25000))
        state = apply(state, SaveDailyLog(day=today, revenue=1, expenses=2, savings=3))
        state = apply(state, SetMonthlyTarget(year_month="2025-03", target=500000))
        state = apply(
            state,
            AddLedgerEntry(
                day=today,
                description="Tips",
                amount=5000,
                entry_type="income",
                pool="ewallet",
                entry_id="e-1",
            ),
        )

        assert len(state.expenses) == 1
        assert state.daily_cash[0].starting_float == Decimal("100000")
        assert state.daily_logs[0].savings_amount == Decimal("3")
        assert monthly_target(state, "2025-03") == Decimal("500000")

        state = apply(state, DeleteLedgerEntry(day=today, entry_id="e-1"))
        assert state.studio.daily[0].entries == []

    def test_order_then_pay(self, state, resolver):
        """An order placed by command can be paid by command."""
        created = datetime(2025, 3, 14, 12, tzinfo=WIB)
        items = (LineItem(name="Es Jeruk", price=Decimal("5000"), quantity=3),)

        state = apply(
            state,
            PlaceOrder(created_at=created, items=items, transaction_id="trx-1"),
            resolver,
        )
        state = apply(state, MarkPaid(transaction_id="trx-1"))

        assert state.transactions[0].payment.status == PaymentStatus.PAID
        assert state.transactions[0].total == Decimal("15000")

    def test_reconcile_uses_resolver(self, state, today, resolver, make_transaction, with_transactions):
        """The resolver passed to apply attributes sales to the day."""
        state = with_transactions(state, make_transaction(today, 20000))
        state = apply(state, SetStartingFloat(day=today, amount=50000))

        state = apply(state, ReconcileCash(day=today, actual=69000), resolver)

        assert reconciliation_status(state, today, resolver).difference == Decimal("-1000")

    def test_failed_command_leaves_state(self, state, today):
        """A rejected command leaves the input snapshot untouched."""
        before = apply(state, CloseDay(day=today))

        with pytest.raises(InvalidAmount):
            apply(before, AddExpense(day=today, description="Gas", amount=-1))

        assert before.expenses == []

    def test_unknown_command(self, state):
        """Unregistered command types raise TypeError."""

        @dataclass(frozen=True)
        class Teleport:
            pass

        with pytest.raises(TypeError, match="Teleport"):
            apply(state, Teleport())  # type: ignore[arg-type]
