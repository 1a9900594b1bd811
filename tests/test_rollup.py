"""Tests for the monthly roll-up."""

from datetime import date
from decimal import Decimal

import pytest

from stall_books.business_day import days_in_month
from stall_books.errors import InvalidAmount, InvalidTimestamp
from stall_books.history import daily_figures, save_daily_log, toggle_savings_deposited
from stall_books.models import PaymentMethod
from stall_books.rollup import (
    monthly_savings,
    monthly_summary,
    monthly_target,
    set_monthly_target,
    studio_profit,
)
from stall_books.studio import add_manual_entry


class TestMonthlySummary:
    """Tests for monthly_summary."""

    def test_revenue_matches_per_day_selection(
        self, state, today, resolver, make_transaction, with_transactions
    ):
        """Monthly revenue equals the sum of each day's figures."""
        state = with_transactions(
            state,
            make_transaction(today, 40000),
            make_transaction(date(2025, 3, 2), 70000),
        )
        state = save_daily_log(state, date(2025, 3, 1), 120000, 10000, 0)
        state = save_daily_log(state, date(2025, 3, 2), 90000, 0, 0)
        state = save_daily_log(state, today, 555555, 0, 0)
        state = save_daily_log(state, date(2025, 2, 28), 800000, 0, 0)

        summary = monthly_summary(state, "2025-03", today, resolver)
        expected = sum(
            (daily_figures(state, day, today, resolver).revenue for day in days_in_month("2025-03")),
            start=Decimal("0"),
        )

        assert summary.revenue == expected == Decimal("250000")
        assert summary.expenses == Decimal("10000")
        assert len(summary.days) == 31

    def test_scenario_c_progress(self, state, today, resolver):
        """A quarter of the target reads as 25 percent."""
        state = save_daily_log(state, date(2025, 3, 1), 250000, 0, 0)
        state = set_monthly_target(state, "2025-03", 1000000)

        summary = monthly_summary(state, "2025-03", today, resolver)

        assert summary.revenue == Decimal("250000")
        assert summary.progress == Decimal("25.0")
        assert summary.progress_display == Decimal("25")

    def test_progress_over_target_is_unclamped(self, state, today, resolver):
        """Progress above target is kept; the display value caps at 100."""
        state = save_daily_log(state, date(2025, 3, 1), 1500000, 0, 0)
        state = set_monthly_target(state, "2025-03", 1000000)

        summary = monthly_summary(state, "2025-03", today, resolver)

        assert summary.progress == Decimal("150")
        assert summary.progress_display == Decimal("100")

    def test_progress_without_target(self, state, today, resolver):
        """Without a target progress is zero."""
        state = save_daily_log(state, date(2025, 3, 1), 1500000, 0, 0)
        assert monthly_summary(state, "2025-03", today, resolver).progress == 0


class TestMonthlySavings:
    """Tests for monthly savings."""

    def test_only_deposited_in_month(self, state):
        """Only deposited savings inside the month count."""
        state = toggle_savings_deposited(state, date(2025, 3, 1), 10000)
        state = toggle_savings_deposited(state, date(2025, 3, 31), 20000)
        state = save_daily_log(state, date(2025, 3, 15), 0, 0, 99999)
        state = toggle_savings_deposited(state, date(2025, 4, 1), 40000)

        assert monthly_savings(state, "2025-03") == Decimal("30000")


class TestStudioProfit:
    """Tests for studio profit."""

    def test_profit_combines_pos_and_manual(
        self, state, today, resolver, make_transaction, with_transactions
    ):
        """Profit adds POS and manual income, less manual expenses."""
        state = with_transactions(
            state,
            make_transaction(today, 50000),
            make_transaction(date(2025, 3, 3), 20000, method=PaymentMethod.ELECTRONIC),
            make_transaction(date(2025, 4, 1), 90000),
        )
        state = add_manual_entry(state, date(2025, 3, 5), "Catering job", 100000, "income", "bank")
        state = add_manual_entry(state, today, "Gas", 15000, "expense", "cash")

        assert studio_profit(state, "2025-03", resolver) == Decimal("155000")
        assert monthly_summary(state, "2025-03", today, resolver).profit == Decimal("155000")


class TestMonthlyTarget:
    """Tests for monthly target storage."""

    def test_upsert(self, state):
        """Setting a monthly target twice keeps one record."""
        state = set_monthly_target(state, "2025-03", 1000000)
        state = set_monthly_target(state, "2025-03", 2000000)

        assert len(state.studio.monthly) == 1
        assert monthly_target(state, "2025-03") == Decimal("2000000")
        assert monthly_target(state, "2025-04") == 0

    def test_rejects_bad_input(self, state):
        """Negative targets and malformed months raise bookkeeping errors."""
        with pytest.raises(InvalidAmount):
            set_monthly_target(state, "2025-03", -5)
        with pytest.raises(InvalidTimestamp):
            set_monthly_target(state, "March", 5)
        with pytest.raises(InvalidTimestamp):
            set_monthly_target(state, "2025-3", 1000)

    def test_single_digit_month_rejected_on_reads(self, state, today, resolver):
        """Reads with a single-digit month fail with InvalidTimestamp."""
        with pytest.raises(InvalidTimestamp):
            monthly_target(state, "2025-3")
        with pytest.raises(InvalidTimestamp):
            monthly_summary(state, "2025-3", today, resolver)
