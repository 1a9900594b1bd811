"""Order placement and payment, the minimum needed to feed the books."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime
from uuid import uuid4

import structlog

from stall_books.business_day import BusinessDayResolver, default_resolver
from stall_books.errors import DayClosed, InvalidAmount, InvalidEntry, InvalidTransition, NotFound
from stall_books.history import is_day_closed
from stall_books.models import (
    AppData,
    LineItem,
    Payment,
    PaymentMethod,
    PaymentStatus,
    Transaction,
)
from stall_books.money import total

logger = structlog.get_logger(__name__)


def place_order(
    state: AppData,
    items: Sequence[LineItem],
    created_at: datetime,
    method: PaymentMethod | str = PaymentMethod.CASH,
    customer_name: str = "",
    resolver: BusinessDayResolver | None = None,
    transaction_id: str | None = None,
) -> tuple[AppData, Transaction]:
    """Add an unpaid order to the transaction log.

    Raises:
        InvalidEntry: The cart is empty or the payment method is unknown.
        InvalidAmount: A line has a negative price.
        DayClosed: The order's business date has been closed.
    """
    if not items:
        raise InvalidEntry("Cart is empty")
    for item in items:
        if item.price < 0:
            raise InvalidAmount("price", item.price, "must not be negative")
    try:
        payment_method = PaymentMethod(method)
    except ValueError as exc:
        raise InvalidEntry(str(exc)) from exc

    resolver = resolver or default_resolver()
    day = resolver.resolve(created_at)
    if is_day_closed(state, day):
        raise DayClosed(f"Business day {day.isoformat()} is closed")

    trx = Transaction(
        id=transaction_id or f"trx-{uuid4().hex[:12]}",
        items=list(items),
        customer_name=customer_name.strip(),
        payment=Payment(status=PaymentStatus.UNPAID, method=payment_method),
        created_at=created_at,
        total=total(item.line_total for item in items),
    )
    logger.info("order_placed", transaction_id=trx.id, total=str(trx.total), day=day.isoformat())
    return state.model_copy(update={"transactions": [*state.transactions, trx]}), trx


def mark_paid(
    state: AppData,
    transaction_id: str,
    method: PaymentMethod | str | None = None,
) -> AppData:
    """Settle an order. A transaction moves from unpaid to paid exactly once."""
    for idx, trx in enumerate(state.transactions):
        if trx.id == transaction_id:
            break
    else:
        raise NotFound(f"Transaction {transaction_id!r} not found")

    if trx.payment.is_paid:
        raise InvalidTransition(f"Transaction {transaction_id!r} is already paid")
    try:
        payment_method = PaymentMethod(method) if method else trx.payment.method
    except ValueError as exc:
        raise InvalidEntry(str(exc)) from exc

    payment = Payment(status=PaymentStatus.PAID, method=payment_method)
    transactions = list(state.transactions)
    transactions[idx] = trx.model_copy(update={"payment": payment})
    logger.info(
        "order_paid",
        transaction_id=transaction_id,
        method=payment_method.value,
        total=str(trx.total),
    )
    return state.model_copy(update={"transactions": transactions})
