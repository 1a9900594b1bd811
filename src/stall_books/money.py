"""Exact money arithmetic helpers."""

from __future__ import annotations

from collections.abc import Iterable
from decimal import Decimal, InvalidOperation
from typing import Any

from stall_books.errors import InvalidAmount

ZERO = Decimal("0")


def to_money(value: Any, field: str = "amount") -> Decimal:
    """Parse user input into a finite Decimal.

    Accepts ints, Decimals, floats (through their shortest repr) and numeric
    strings; a comma is read as the decimal separator.
    """
    if isinstance(value, bool) or value is None:
        raise InvalidAmount(field, value, "not a number")
    if isinstance(value, Decimal):
        result = value
    elif isinstance(value, (int, float)):
        result = Decimal(str(value))
    elif isinstance(value, str):
        text = value.strip().replace(",", ".")
        if not text:
            raise InvalidAmount(field, value, "not a number")
        try:
            result = Decimal(text)
        except InvalidOperation as exc:
            raise InvalidAmount(field, value, "not a number") from exc
    else:
        raise InvalidAmount(field, value, "not a number")

    if not result.is_finite():
        raise InvalidAmount(field, value, "not a finite number")
    return result


def non_negative(value: Any, field: str = "amount") -> Decimal:
    amount = to_money(value, field)
    if amount < 0:
        raise InvalidAmount(field, value, "must not be negative")
    return amount


def positive(value: Any, field: str = "amount") -> Decimal:
    amount = to_money(value, field)
    if amount <= 0:
        raise InvalidAmount(field, value, "must be greater than zero")
    return amount


def total(amounts: Iterable[Decimal]) -> Decimal:
    return sum(amounts, start=ZERO)


def to_json_number(value: Decimal) -> int | str:
    """Integral amounts become JSON integers, anything else an exact string."""
    if value == value.to_integral_value():
        return int(value)
    return str(value)
