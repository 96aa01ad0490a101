"""
Tests for calendar helpers, totals and month store operations.
"""

import pytest
from decimal import Decimal
from uuid import uuid4

from budget_tracker.ledger import (
    LedgerValidationError,
    UnknownMonthError,
    add_expense,
    add_income,
    available_years,
    balance,
    daily_total,
    day_belongs_to_month,
    days_in_month,
    format_currency,
    format_day_label,
    initialize_year,
    month_id,
    month_names,
    monthly_total,
    parse_amount,
    parse_month_id,
    remove_expense,
    set_income,
    transaction_count,
    year_slice,
)
from budget_tracker.models import ExpenseItem


@pytest.fixture
def store_2026():
    return initialize_year({}, 2026)


class TestCalendarUtils:
    """Tests for month and day key helpers."""

    def test_month_names(self):
        names = month_names(2026)
        assert len(names) == 12
        assert names[0] == "January"
        assert names[11] == "December"

    @pytest.mark.parametrize("year,expected", [
        (2028, 29),
        (2026, 28),
        (2027, 28),
        (2000, 29),
        (1900, 28),
    ])
    def test_february_length(self, year, expected):
        """Leap years get 29 days (divisible by 4, not by 100 unless by 400)."""
        assert len(days_in_month(year, 1)) == expected

    def test_days_in_month_keys(self):
        days = days_in_month(2026, 2)
        assert len(days) == 31
        assert days[0] == "2026-03-01"
        assert days[-1] == "2026-03-31"
        assert days == sorted(days)

    def test_thirty_day_month(self):
        assert days_in_month(2026, 3)[-1] == "2026-04-30"

    def test_month_id_is_zero_padded(self):
        assert month_id(2026, 0) == "2026-01"
        assert month_id(2026, 11) == "2026-12"

    def test_month_id_rejects_bad_index(self):
        with pytest.raises(ValueError):
            month_id(2026, 12)

    def test_parse_month_id(self):
        assert parse_month_id("2026-03") == (2026, 2)
        with pytest.raises(ValueError):
            parse_month_id("2026-3")

    def test_day_belongs_to_month(self):
        assert day_belongs_to_month("2026-03-15", "2026-03") is True
        assert day_belongs_to_month("2026-04-01", "2026-03") is False
        assert day_belongs_to_month("2026-02-29", "2026-02") is False
        assert day_belongs_to_month("2026-03-5", "2026-03") is False
        assert day_belongs_to_month(None, "2026-03") is False

    def test_format_day_label(self):
        assert format_day_label("2026-03-15") == "Sun, Mar 15"

    def test_available_years(self):
        assert available_years(2026, [2026, 2027, 2030]) == [2026, 2027, 2030]
        assert available_years(2031, [2026, 2027]) == [2026, 2027, 2031]


class TestTotals:
    """Tests for the ledger aggregator."""

    def test_daily_total_of_nothing_is_zero(self):
        assert daily_total(None) == Decimal("0")
        assert daily_total([]) == Decimal("0")

    def test_daily_total(self):
        items = [
            ExpenseItem(description="Tea", amount=Decimal("0.10")),
            ExpenseItem(description="Snack", amount=Decimal("0.20")),
        ]
        # Exact, unlike 0.1 + 0.2 in binary floats
        assert daily_total(items) == Decimal("0.30")

    def test_monthly_total_sums_present_days(self):
        days = {
            "2026-03-01": (ExpenseItem(description="A", amount=Decimal("10")),),
            "2026-03-02": (),
            "2026-03-03": (
                ExpenseItem(description="B", amount=Decimal("5.25")),
                ExpenseItem(description="C", amount=Decimal("4.75")),
            ),
        }
        assert monthly_total(days) == Decimal("20.00")
        assert monthly_total({}) == Decimal("0")

    def test_transaction_count(self):
        assert transaction_count(None) == 0
        assert transaction_count((ExpenseItem(description="A", amount=Decimal("1")),)) == 1

    @pytest.mark.parametrize("amount,expected", [
        (Decimal("1954.5"), "৳1,954.50"),
        (Decimal("0"), "৳0.00"),
        (Decimal("-45.5"), "-৳45.50"),
        (Decimal("1234567.891"), "৳1,234,567.89"),
    ])
    def test_format_currency(self, amount, expected):
        assert format_currency(amount) == expected

    def test_format_currency_custom_symbol(self):
        assert format_currency(Decimal("5"), "$") == "$5.00"


class TestParseAmount:

    @pytest.mark.parametrize("value,expected", [
        ("45.50", Decimal("45.50")),
        (45.5, Decimal("45.5")),
        (12, Decimal("12")),
        (Decimal("3.10"), Decimal("3.10")),
    ])
    def test_parses_numbers(self, value, expected):
        assert parse_amount(value) == expected

    @pytest.mark.parametrize("value", ["abc", "", "NaN", "Infinity", True, None])
    def test_rejects_non_numbers(self, value):
        with pytest.raises(LedgerValidationError):
            parse_amount(value)


class TestInitializeYear:

    def test_creates_twelve_empty_months(self, store_2026):
        assert len(store_2026) == 12
        assert list(store_2026) == [f"2026-{m:02d}" for m in range(1, 13)]
        for month in store_2026.values():
            assert month.income == Decimal("0")
            assert month.days == {}
            assert month.year == 2026
        assert store_2026["2026-03"].name == "March"

    def test_is_idempotent(self, store_2026):
        assert initialize_year(store_2026, 2026) is store_2026

    def test_existing_year_is_not_filled(self, store_2026):
        """A partial year is left as-is: no merge, no partial fill."""
        partial = {"2026-03": store_2026["2026-03"]}
        assert initialize_year(partial, 2026) is partial

    def test_adds_a_second_year_alongside(self, store_2026):
        store = initialize_year(store_2026, 2027)
        assert len(store) == 24
        assert len(store_2026) == 12
        assert len(year_slice(store, 2027)) == 12


class TestIncome:

    def test_set_income_replaces(self, store_2026):
        store = set_income(store_2026, "2026-03", 2000)
        store = set_income(store, "2026-03", Decimal("1500"))
        assert store["2026-03"].income == Decimal("1500")

    def test_set_income_leaves_old_snapshot_alone(self, store_2026):
        store = set_income(store_2026, "2026-03", 2000)
        assert store is not store_2026
        assert store_2026["2026-03"].income == Decimal("0")
        # Untouched months are shared
        assert store["2026-04"] is store_2026["2026-04"]

    def test_set_income_unknown_month(self, store_2026):
        with pytest.raises(UnknownMonthError):
            set_income(store_2026, "2031-01", 100)

    def test_set_income_rejects_negative(self, store_2026):
        with pytest.raises(LedgerValidationError):
            set_income(store_2026, "2026-03", -5)

    def test_add_income_accumulates(self, store_2026):
        store = add_income(store_2026, "2026-03", "1000")
        store = add_income(store, "2026-03", "250.25")
        assert store["2026-03"].income == Decimal("1250.25")

    def test_add_income_rejects_negative_delta(self, store_2026):
        with pytest.raises(LedgerValidationError):
            add_income(store_2026, "2026-03", -1)

    def test_set_income_keeps_expenses(self, store_2026):
        store, item = add_expense(store_2026, "2026-03", "2026-03-15", "Groceries", "45.50")
        store = set_income(store, "2026-03", 2000)
        assert store["2026-03"].days["2026-03-15"] == (item,)


class TestExpenses:

    def test_add_expense_appends_in_order(self, store_2026):
        store, first = add_expense(store_2026, "2026-03", "2026-03-15", "Groceries", "45.50")
        store, second = add_expense(store, "2026-03", "2026-03-15", "Bus", "2")
        assert store["2026-03"].days["2026-03-15"] == (first, second)
        assert first.id != second.id

    def test_add_expense_does_not_alias(self, store_2026):
        store, _ = add_expense(store_2026, "2026-03", "2026-03-15", "Groceries", "45.50")
        assert store_2026["2026-03"].days == {}
        assert store["2026-03"] is not store_2026["2026-03"]

    def test_add_expense_unknown_month(self, store_2026):
        with pytest.raises(UnknownMonthError):
            add_expense(store_2026, "2027-03", "2027-03-15", "Groceries", 10)

    def test_add_expense_day_outside_month(self, store_2026):
        with pytest.raises(LedgerValidationError):
            add_expense(store_2026, "2026-03", "2026-04-01", "Groceries", 10)

    @pytest.mark.parametrize("day_key", [None, 15, "2026-03-W1"])
    def test_add_expense_rejects_malformed_day_key(self, store_2026, day_key):
        with pytest.raises(LedgerValidationError):
            add_expense(store_2026, "2026-03", day_key, "Groceries", 10)

    @pytest.mark.parametrize("description,amount", [
        ("", 10),
        ("   ", 10),
        ("Groceries", 0),
        ("Groceries", -3),
        ("Groceries", "ten"),
        ("Groceries", "1.005"),
    ])
    def test_add_expense_rejects_invalid_input(self, store_2026, description, amount):
        with pytest.raises(LedgerValidationError):
            add_expense(store_2026, "2026-03", "2026-03-15", description, amount)

    def test_remove_expense(self, store_2026):
        store, first = add_expense(store_2026, "2026-03", "2026-03-15", "Groceries", "45.50")
        store, second = add_expense(store, "2026-03", "2026-03-15", "Bus", "2")
        store = remove_expense(store, "2026-03", "2026-03-15", first.id)
        assert store["2026-03"].days["2026-03-15"] == (second,)

    def test_remove_expense_accepts_string_id(self, store_2026):
        store, item = add_expense(store_2026, "2026-03", "2026-03-15", "Groceries", "45.50")
        store = remove_expense(store, "2026-03", "2026-03-15", str(item.id))
        assert store["2026-03"].days["2026-03-15"] == ()

    def test_remove_missing_id_is_noop(self, store_2026):
        store, _ = add_expense(store_2026, "2026-03", "2026-03-15", "Groceries", "45.50")
        assert remove_expense(store, "2026-03", "2026-03-15", uuid4()) is store
        assert remove_expense(store, "2026-03", "2026-03-16", uuid4()) is store

    def test_remove_expense_unknown_month(self, store_2026):
        with pytest.raises(UnknownMonthError):
            remove_expense(store_2026, "2027-03", "2027-03-15", uuid4())

    def test_daily_total_tracks_remaining_items(self, store_2026):
        """After any add/remove sequence the day total is the sum of what is left."""
        store = store_2026
        added = []
        for amount in ["10.00", "2.50", "7.25", "0.25"]:
            store, item = add_expense(store, "2026-03", "2026-03-10", "Item", amount)
            added.append(item)
        store = remove_expense(store, "2026-03", "2026-03-10", added[1].id)
        store = remove_expense(store, "2026-03", "2026-03-10", added[3].id)

        items = store["2026-03"].days["2026-03-10"]
        assert daily_total(items) == Decimal("17.25")
        assert daily_total(items) == sum(item.amount for item in items)


class TestMonthScenario:
    """End-to-end walk through one month."""

    def test_groceries_income_and_removal(self, store_2026):
        store, item = add_expense(store_2026, "2026-03", "2026-03-15", "Groceries", Decimal("45.50"))
        march = store["2026-03"]
        assert daily_total(march.days.get("2026-03-15")) == Decimal("45.50")
        assert monthly_total(march.days) == Decimal("45.50")

        store = set_income(store, "2026-03", 2000)
        assert balance(store["2026-03"]) == Decimal("1954.50")

        store = remove_expense(store, "2026-03", "2026-03-15", item.id)
        assert daily_total(store["2026-03"].days.get("2026-03-15")) == Decimal("0")
        assert balance(store["2026-03"]) == Decimal("2000")

    def test_balance_can_go_negative(self, store_2026):
        store, _ = add_expense(store_2026, "2026-03", "2026-03-01", "Rent", 800)
        store = set_income(store, "2026-03", 500)
        assert balance(store["2026-03"]) == Decimal("-300")


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
