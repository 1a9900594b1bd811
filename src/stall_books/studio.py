"""Studio ledger: cash, bank and e-wallet pools with dated entries.

A day's full ledger is the POS income synthesized from paid transactions
followed by the manual entries in the order they were added. Synthesized
entries are built on every read and never stored, so re-reading a ledger
cannot duplicate them and newly paid orders show up immediately.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Any
from uuid import uuid4

import structlog

from stall_books.business_day import BusinessDayResolver, recent_dates
from stall_books.errors import InvalidEntry
from stall_books.models import (
    POS_ENTRY_PREFIX,
    AppData,
    EntryType,
    LedgerEntry,
    Pool,
    StudioDailyData,
)
from stall_books.money import ZERO, non_negative, positive, total
from stall_books.revenue import daily_revenue
from stall_books.store import KeyedRecords

logger = structlog.get_logger(__name__)

# Exceeding the target by more than this factor counts as "exceeded"
TARGET_EXCEEDED_FACTOR = Decimal("1.1")


@dataclass(frozen=True)
class PoolBalances:
    cash: Decimal = ZERO
    bank: Decimal = ZERO
    ewallet: Decimal = ZERO

    @property
    def total(self) -> Decimal:
        return self.cash + self.bank + self.ewallet

    def for_pool(self, pool: Pool) -> Decimal:
        return {Pool.CASH: self.cash, Pool.BANK: self.bank, Pool.EWALLET: self.ewallet}[pool]


@dataclass(frozen=True)
class StudioDay:
    """Computed view of one day's ledger."""

    day: date
    starting: PoolBalances
    entries: tuple[LedgerEntry, ...]
    ending: PoolBalances
    daily_target: Decimal

    @property
    def income(self) -> Decimal:
        return total(e.amount for e in self.entries if e.type == EntryType.INCOME)

    @property
    def expense(self) -> Decimal:
        return total(e.amount for e in self.entries if e.type == EntryType.EXPENSE)

    @property
    def pos_income(self) -> Decimal:
        return total(e.amount for e in self.entries if is_pos_entry(e.id))


class TargetStatus(str, Enum):
    NOT_SET = "not_set"
    NOT_REACHED = "not_reached"
    REACHED = "reached"
    EXCEEDED = "exceeded"


def is_pos_entry(entry_id: str) -> bool:
    return entry_id.startswith(POS_ENTRY_PREFIX)


def _days(state: AppData) -> KeyedRecords[date, StudioDailyData]:
    return KeyedRecords(state.studio.daily, lambda day: StudioDailyData(date=day))


def _with_days(state: AppData, daily: list[StudioDailyData]) -> AppData:
    studio = state.studio.model_copy(update={"daily": daily})
    return state.model_copy(update={"studio": studio})


def studio_record(state: AppData, day: date) -> StudioDailyData:
    """Stored record for ``day``; new dates start at zero balances."""
    return _days(state).get_or_create(day)


def synthesize_pos_entries(
    state: AppData, day: date, resolver: BusinessDayResolver | None = None
) -> list[LedgerEntry]:
    """POS income entries for ``day``: cash to the cash pool, electronic to e-wallet."""
    revenue = daily_revenue(state.transactions, day, resolver)
    entries: list[LedgerEntry] = []
    if revenue.cash > 0:
        entries.append(
            LedgerEntry(
                id=f"{POS_ENTRY_PREFIX}cash-{day.isoformat()}",
                description="POS sales (cash)",
                amount=revenue.cash,
                type=EntryType.INCOME,
                pool=Pool.CASH,
            )
        )
    if revenue.electronic > 0:
        entries.append(
            LedgerEntry(
                id=f"{POS_ENTRY_PREFIX}electronic-{day.isoformat()}",
                description="POS sales (electronic)",
                amount=revenue.electronic,
                type=EntryType.INCOME,
                pool=Pool.EWALLET,
            )
        )
    return entries


def full_ledger(
    state: AppData, day: date, resolver: BusinessDayResolver | None = None
) -> list[LedgerEntry]:
    return [*synthesize_pos_entries(state, day, resolver), *studio_record(state, day).entries]


def _apply_entries(starting: PoolBalances, entries: list[LedgerEntry]) -> PoolBalances:
    movement = {pool: ZERO for pool in Pool}
    for entry in entries:
        sign = 1 if entry.type == EntryType.INCOME else -1
        movement[entry.pool] += sign * entry.amount
    return PoolBalances(
        cash=starting.cash + movement[Pool.CASH],
        bank=starting.bank + movement[Pool.BANK],
        ewallet=starting.ewallet + movement[Pool.EWALLET],
    )


def studio_day(
    state: AppData, day: date, resolver: BusinessDayResolver | None = None
) -> StudioDay:
    record = studio_record(state, day)
    starting = PoolBalances(
        cash=record.starting_cash,
        bank=record.starting_bank,
        ewallet=record.starting_ewallet,
    )
    entries = full_ledger(state, day, resolver)
    return StudioDay(
        day=day,
        starting=starting,
        entries=tuple(entries),
        ending=_apply_entries(starting, entries),
        daily_target=record.daily_target,
    )


def ending_balances(
    state: AppData, day: date, resolver: BusinessDayResolver | None = None
) -> PoolBalances:
    return studio_day(state, day, resolver).ending


def add_manual_entry(
    state: AppData,
    day: date,
    description: str,
    amount: Any,
    entry_type: EntryType | str,
    pool: Pool | str,
    entry_id: str | None = None,
) -> AppData:
    """Append a manual income or expense entry to a day's ledger."""
    description = (description or "").strip()
    if not description:
        raise InvalidEntry("Ledger entry description is required")
    value = positive(amount, "amount")
    try:
        kind = EntryType(entry_type)
        target_pool = Pool(pool)
    except ValueError as exc:
        raise InvalidEntry(str(exc)) from exc
    entry_id = entry_id or f"entry-{uuid4().hex[:12]}"
    if is_pos_entry(entry_id):
        raise InvalidEntry(f"Entry id {entry_id!r} is reserved for POS income")

    entry = LedgerEntry(
        id=entry_id,
        description=description,
        amount=value,
        type=kind,
        pool=target_pool,
    )
    record = studio_record(state, day)
    daily, _ = _days(state).update(day, entries=[*record.entries, entry])
    logger.info(
        "ledger_entry_added",
        day=day.isoformat(),
        entry_id=entry.id,
        type=kind.value,
        pool=target_pool.value,
        amount=str(value),
    )
    return _with_days(state, daily)


def delete_manual_entry(state: AppData, day: date, entry_id: str) -> AppData:
    """Remove a manual entry. Unknown and POS ids are a no-op."""
    record = _days(state).find(day)
    if record is None or is_pos_entry(entry_id):
        return state
    remaining = [entry for entry in record.entries if entry.id != entry_id]
    if len(remaining) == len(record.entries):
        return state
    daily, _ = _days(state).update(day, entries=remaining)
    logger.info("ledger_entry_deleted", day=day.isoformat(), entry_id=entry_id)
    return _with_days(state, daily)


def set_starting_balances(
    state: AppData, day: date, cash: Any, bank: Any, ewallet: Any
) -> AppData:
    values = {
        "starting_cash": non_negative(cash, "cash"),
        "starting_bank": non_negative(bank, "bank"),
        "starting_ewallet": non_negative(ewallet, "ewallet"),
    }
    daily, _ = _days(state).update(day, **values)
    logger.info(
        "starting_balances_set",
        day=day.isoformat(),
        **{key: str(value) for key, value in values.items()},
    )
    return _with_days(state, daily)


def set_daily_target(state: AppData, day: date, target: Any) -> AppData:
    value = non_negative(target, "daily_target")
    daily, _ = _days(state).update(day, daily_target=value)
    logger.info("daily_target_set", day=day.isoformat(), target=str(value))
    return _with_days(state, daily)


def daily_target_status(revenue: Decimal, target: Decimal) -> TargetStatus:
    if target <= 0:
        return TargetStatus.NOT_SET
    if revenue > target * TARGET_EXCEEDED_FACTOR:
        return TargetStatus.EXCEEDED
    if revenue > 0 and revenue >= target:
        return TargetStatus.REACHED
    return TargetStatus.NOT_REACHED


def balance_history(
    state: AppData,
    today: date,
    days: int = 7,
    resolver: BusinessDayResolver | None = None,
) -> list[StudioDay]:
    """Ledger views for the last ``days`` days, newest first."""
    return [
        studio_day(state, day, resolver)
        for day in reversed(recent_dates(today, days))
    ]
