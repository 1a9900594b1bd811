"""Session: the current document snapshot plus its clock and storage.

Usage:
    session = Session.open()
    session.dispatch(AddExpense(day=session.today, description="Gas", amount=25000))
    summary = session.monthly_summary()
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import date, datetime
from pathlib import Path

import structlog

from stall_books import history, reconciliation, reports, rollup, studio
from stall_books.business_day import BusinessDayResolver, year_month
from stall_books.commands import Command, apply
from stall_books.config import StallSettings, bind_business_day, get_settings
from stall_books.errors import BookkeepingError
from stall_books.models import AppData
from stall_books.persistence import dump_document, import_document, load, save

logger = structlog.get_logger(__name__)


class Session:
    """Holds one document and serialises every change through ``dispatch``.

    Each successful command replaces the snapshot with a new object, so callers
    can detect change by identity. A rejected command leaves the snapshot as it
    was.
    """

    def __init__(
        self,
        state: AppData | None = None,
        resolver: BusinessDayResolver | None = None,
        clock: Callable[[], datetime] | None = None,
        path: Path | None = None,
        autosave: bool | None = None,
        settings: StallSettings | None = None,
    ):
        self._settings = settings or get_settings()
        self._state = state if state is not None else AppData()
        self._resolver = resolver or BusinessDayResolver.from_settings(self._settings)
        self._clock = clock or (lambda: datetime.now(self._resolver.tz))
        self._path = path
        self._autosave = self._settings.autosave if autosave is None else autosave
        self._logger = logger.bind(component="session")

    @classmethod
    def open(
        cls,
        path: Path | None = None,
        settings: StallSettings | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> Session:
        """Load the stored document (or defaults) from ``path``."""
        settings = settings or get_settings()
        path = path or settings.data_path
        return cls(state=load(path), clock=clock, path=path, settings=settings)

    @property
    def state(self) -> AppData:
        return self._state

    @property
    def resolver(self) -> BusinessDayResolver:
        return self._resolver

    @property
    def today(self) -> date:
        return self._resolver.today(self._clock())

    # === Writes ===

    def dispatch(self, command: Command) -> AppData:
        """Apply a command and make the result the current snapshot."""
        bind_business_day(self.today)
        try:
            new_state = apply(self._state, command, self._resolver)
        except BookkeepingError as e:
            self._logger.warning(
                "command_rejected",
                command=type(command).__name__,
                error=str(e),
                details=e.details,
            )
            raise
        if new_state is self._state:
            return self._state

        self._state = new_state
        self._logger.info("command_applied", command=type(command).__name__)
        self._persist()
        return self._state

    def import_text(self, text: str) -> AppData:
        """Replace the whole document with an export; fails closed."""
        try:
            document = import_document(text)
        except BookkeepingError as e:
            self._logger.warning("import_rejected", error=str(e))
            raise
        self._state = document
        self._persist()
        return self._state

    def export_text(self) -> str:
        return dump_document(self._state)

    def save(self) -> None:
        if self._path is None:
            raise ValueError("Session has no storage path")
        save(self._path, self._state)

    def _persist(self) -> None:
        if self._autosave and self._path is not None:
            save(self._path, self._state)

    # === Reads ===

    def daily_figures(self, day: date | None = None) -> history.DailyFigures:
        return history.daily_figures(
            self._state, day or self.today, self.today, self._resolver
        )

    def recent_days(self, days: int | None = None) -> history.RecentDaysSummary:
        return history.summarize_recent_days(
            self._state,
            self.today,
            days or self._settings.history_days,
            self._resolver,
        )

    def cash_count(self, day: date | None = None) -> reconciliation.CashCount:
        return reconciliation.reconciliation_status(
            self._state, day or self.today, self._resolver
        )

    def studio_day(self, day: date | None = None) -> studio.StudioDay:
        return studio.studio_day(self._state, day or self.today, self._resolver)

    def balance_history(self) -> list[studio.StudioDay]:
        return studio.balance_history(
            self._state, self.today, self._settings.history_days, self._resolver
        )

    def target_status(self) -> studio.TargetStatus:
        view = self.studio_day()
        return studio.daily_target_status(view.pos_income, view.daily_target)

    def monthly_summary(self, ym: str | None = None) -> rollup.MonthlySummary:
        return rollup.monthly_summary(
            self._state, ym or year_month(self.today), self.today, self._resolver
        )

    def sales_report(self, day: date | None = None) -> reports.DailySalesReport:
        return reports.daily_sales_report(self._state, day or self.today, self._resolver)

    def revenue_recap(self) -> reports.RevenueRecap:
        return reports.revenue_recap(self._state, self.today, self._settings.recap_days)
