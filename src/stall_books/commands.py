"""User actions as data, applied to a snapshot to produce the next one."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any

from stall_books import expenses, history, orders, reconciliation, rollup, studio
from stall_books.business_day import BusinessDayResolver
from stall_books.models import AppData, EntryType, LineItem, PaymentMethod, Pool


@dataclass(frozen=True)
class SetStartingFloat:
    day: date
    amount: Any


@dataclass(frozen=True)
class ReconcileCash:
    day: date
    actual: Any


@dataclass(frozen=True)
class ResetReconciliation:
    day: date


@dataclass(frozen=True)
class SaveDailyLog:
    day: date
    revenue: Any
    expenses: Any
    savings: Any


@dataclass(frozen=True)
class ToggleSavingsDeposited:
    day: date
    amount: Any | None = None


@dataclass(frozen=True)
class CloseDay:
    day: date


@dataclass(frozen=True)
class ReopenDay:
    day: date


@dataclass(frozen=True)
class AddExpense:
    day: date
    description: str
    amount: Any
    expense_id: str | None = None


@dataclass(frozen=True)
class DeleteExpense:
    expense_id: str


@dataclass(frozen=True)
class AddLedgerEntry:
    day: date
    description: str
    amount: Any
    entry_type: EntryType | str
    pool: Pool | str
    entry_id: str | None = None


@dataclass(frozen=True)
class DeleteLedgerEntry:
    day: date
    entry_id: str


@dataclass(frozen=True)
class SetStartingBalances:
    day: date
    cash: Any
    bank: Any
    ewallet: Any


@dataclass(frozen=True)
class SetDailyTarget:
    day: date
    target: Any


@dataclass(frozen=True)
class SetMonthlyTarget:
    year_month: str
    target: Any


@dataclass(frozen=True)
class PlaceOrder:
    created_at: datetime
    items: tuple[LineItem, ...] = field(default_factory=tuple)
    method: PaymentMethod | str = PaymentMethod.CASH
    customer_name: str = ""
    transaction_id: str | None = None


@dataclass(frozen=True)
class MarkPaid:
    transaction_id: str
    method: PaymentMethod | str | None = None


Command = (
    SetStartingFloat
    | ReconcileCash
    | ResetReconciliation
    | SaveDailyLog
    | ToggleSavingsDeposited
    | CloseDay
    | ReopenDay
    | AddExpense
    | DeleteExpense
    | AddLedgerEntry
    | DeleteLedgerEntry
    | SetStartingBalances
    | SetDailyTarget
    | SetMonthlyTarget
    | PlaceOrder
    | MarkPaid
)

Handler = Callable[[AppData, Any, BusinessDayResolver | None], AppData]

_HANDLERS: dict[type, Handler] = {
    SetStartingFloat: lambda s, c, r: reconciliation.set_starting_float(s, c.day, c.amount),
    ReconcileCash: lambda s, c, r: reconciliation.reconcile(s, c.day, c.actual, r),
    ResetReconciliation: lambda s, c, r: reconciliation.reset_reconciliation(s, c.day),
    SaveDailyLog: lambda s, c, r: history.save_daily_log(
        s, c.day, c.revenue, c.expenses, c.savings
    ),
    ToggleSavingsDeposited: lambda s, c, r: history.toggle_savings_deposited(
        s, c.day, c.amount
    ),
    CloseDay: lambda s, c, r: history.close_day(s, c.day),
    ReopenDay: lambda s, c, r: history.reopen_day(s, c.day),
    AddExpense: lambda s, c, r: expenses.add_expense(
        s, c.day, c.description, c.amount, c.expense_id
    ),
    DeleteExpense: lambda s, c, r: expenses.delete_expense(s, c.expense_id),
    AddLedgerEntry: lambda s, c, r: studio.add_manual_entry(
        s, c.day, c.description, c.amount, c.entry_type, c.pool, c.entry_id
    ),
    DeleteLedgerEntry: lambda s, c, r: studio.delete_manual_entry(s, c.day, c.entry_id),
    SetStartingBalances: lambda s, c, r: studio.set_starting_balances(
        s, c.day, c.cash, c.bank, c.ewallet
    ),
    SetDailyTarget: lambda s, c, r: studio.set_daily_target(s, c.day, c.target),
    SetMonthlyTarget: lambda s, c, r: rollup.set_monthly_target(s, c.year_month, c.target),
    PlaceOrder: lambda s, c, r: orders.place_order(
        s,
        c.items,
        c.created_at,
        method=c.method,
        customer_name=c.customer_name,
        resolver=r,
        transaction_id=c.transaction_id,
    )[0],
    MarkPaid: lambda s, c, r: orders.mark_paid(s, c.transaction_id, c.method),
}


def apply(
    state: AppData,
    command: Command,
    resolver: BusinessDayResolver | None = None,
) -> AppData:
    """Return the snapshot that results from applying ``command`` to ``state``.

    ``state`` itself is never modified; on error it is still the current
    document.
    """
    handler = _HANDLERS.get(type(command))
    if handler is None:
        raise TypeError(f"Unknown command: {type(command).__name__}")
    return handler(state, command, resolver)
