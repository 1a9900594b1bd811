"""Persisted document models.

The whole application state is one ``AppData`` document. Field names are
snake_case in Python and camelCase in the JSON file, matching the format the
stall's existing exports use. All models are frozen: operations build new
snapshots with ``model_copy(update=...)`` instead of mutating in place.
"""

from datetime import date as date_type
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Annotated, Any

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    PlainSerializer,
    field_validator,
    model_validator,
)
from pydantic.alias_generators import to_camel

from stall_books.money import ZERO, to_json_number

Money = Annotated[
    Decimal,
    PlainSerializer(to_json_number, return_type=int | str, when_used="json"),
]


class DocumentModel(BaseModel):
    """Base for every model stored in the document."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        extra="ignore",
    )


class PaymentStatus(str, Enum):
    UNPAID = "unpaid"
    PAID = "paid"


class PaymentMethod(str, Enum):
    CASH = "cash"
    ELECTRONIC = "electronic"


class EntryType(str, Enum):
    INCOME = "income"
    EXPENSE = "expense"


class Pool(str, Enum):
    """Money pools tracked by the studio ledger."""

    CASH = "cash"
    BANK = "bank"
    EWALLET = "ewallet"


# Labels written by the original stall app
_LEGACY_STATUS = {"Belum Bayar": "unpaid", "Sudah Bayar": "paid"}
_LEGACY_METHOD = {"Cash": "cash", "QRIS": "electronic"}

# Ids with this prefix belong to ledger entries built from POS sales on read
POS_ENTRY_PREFIX = "pos-"


# === Catalogue (document shape only) ===


class MenuItem(DocumentModel):
    id: str
    name: str
    price: Money = ZERO
    stock_id: str = ""


class InventoryItem(DocumentModel):
    id: str
    name: str
    quantity: int = 0
    min_stock: int = 0


class DisplaySettings(DocumentModel):
    primary_color: str = "#4b5320"
    secondary_color: str = "#f5f0e1"
    background_image: str = ""


# === Sales ===


class LineItem(DocumentModel):
    id: str = ""
    name: str
    price: Money
    quantity: int = Field(default=1, gt=0)
    stock_id: str = ""

    @property
    def line_total(self) -> Decimal:
        return self.price * self.quantity


class Payment(DocumentModel):
    status: PaymentStatus = PaymentStatus.UNPAID
    method: PaymentMethod = PaymentMethod.CASH

    @field_validator("status", mode="before")
    @classmethod
    def _legacy_status(cls, value: Any) -> Any:
        if isinstance(value, str):
            return _LEGACY_STATUS.get(value, value)
        return value

    @field_validator("method", mode="before")
    @classmethod
    def _legacy_method(cls, value: Any) -> Any:
        if isinstance(value, str):
            return _LEGACY_METHOD.get(value, value)
        return value

    @property
    def is_paid(self) -> bool:
        return self.status == PaymentStatus.PAID


class Transaction(DocumentModel):
    id: str
    items: list[LineItem] = Field(default_factory=list)
    customer_name: str = ""
    payment: Payment = Field(default_factory=Payment)
    delivered: bool = False
    created_at: datetime
    total: Money


class Expense(DocumentModel):
    id: str
    description: str
    amount: Money
    date: date_type


# === Daily books ===


class DailyCash(DocumentModel):
    """Starting float in the cash drawer for one business day."""

    date: date_type
    starting_float: Money = ZERO


class DailyLog(DocumentModel):
    """Per-day manual figures, savings jar and cash count."""

    date: date_type
    manual_revenue: Money = ZERO
    manual_expenses: Money = ZERO
    savings_deposited: bool = False
    savings_amount: Money = ZERO
    is_closed: bool = False
    cash_reconciled: bool = False
    actual_cash_in_hand: Money | None = None
    cash_difference: Money | None = None


# === Studio ledger ===


class LedgerEntry(DocumentModel):
    id: str
    description: str
    amount: Money
    type: EntryType
    pool: Pool


class StudioDailyData(DocumentModel):
    date: date_type
    starting_cash: Money = Field(
        default=ZERO,
        validation_alias=AliasChoices("startingCash", "starting_cash", "cashOnHand"),
        serialization_alias="startingCash",
    )
    starting_bank: Money = Field(
        default=ZERO,
        validation_alias=AliasChoices("startingBank", "starting_bank", "bankBalance"),
        serialization_alias="startingBank",
    )
    starting_ewallet: Money = Field(
        default=ZERO,
        validation_alias=AliasChoices(
            "startingEwallet", "starting_ewallet", "danaBalance"
        ),
        serialization_alias="startingEwallet",
    )
    daily_target: Money = ZERO
    entries: list[LedgerEntry] = Field(default_factory=list)


class StudioMonthlyData(DocumentModel):
    year_month: str = Field(pattern=r"^\d{4}-(0[1-9]|1[0-2])$")
    monthly_target: Money = ZERO


class StudioData(DocumentModel):
    daily: list[StudioDailyData] = Field(default_factory=list)
    monthly: list[StudioMonthlyData] = Field(default_factory=list)


# === Root ===


class AppData(DocumentModel):
    """Root aggregate and single unit of persistence."""

    menu: list[MenuItem] = Field(default_factory=list)
    toppings: list[MenuItem] = Field(default_factory=list)
    drinks: list[MenuItem] = Field(default_factory=list)
    inventory: list[InventoryItem] = Field(default_factory=list)
    transactions: list[Transaction] = Field(default_factory=list)
    expenses: list[Expense] = Field(default_factory=list)
    settings: DisplaySettings = Field(default_factory=DisplaySettings)
    daily_cash: list[DailyCash] = Field(default_factory=list)
    daily_logs: list[DailyLog] = Field(default_factory=list)
    studio: StudioData = Field(
        default_factory=StudioData,
        validation_alias=AliasChoices("qayzanStudio", "studio"),
        serialization_alias="qayzanStudio",
    )

    @model_validator(mode="after")
    def _one_record_per_key(self) -> "AppData":
        """Reject documents with two records for one day or month."""
        keyed = (
            ("dailyLogs", [log.date for log in self.daily_logs]),
            ("dailyCash", [cash.date for cash in self.daily_cash]),
            ("qayzanStudio.daily", [day.date for day in self.studio.daily]),
            ("qayzanStudio.monthly", [month.year_month for month in self.studio.monthly]),
        )
        for section, keys in keyed:
            seen: set[object] = set()
            for key in keys:
                if key in seen:
                    raise ValueError(f"{section} has more than one record for {key}")
                seen.add(key)

        for day in self.studio.daily:
            for entry in day.entries:
                if entry.id.startswith(POS_ENTRY_PREFIX):
                    raise ValueError(
                        f"qayzanStudio.daily {day.date}: entry id {entry.id!r} "
                        f"uses the reserved prefix {POS_ENTRY_PREFIX!r}"
                    )
        return self
