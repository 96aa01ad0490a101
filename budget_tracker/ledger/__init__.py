"""
Ledger package: calendar keys, month store operations and totals.
"""

from budget_tracker.ledger.calendar_utils import (
    available_years,
    day_belongs_to_month,
    days_in_month,
    format_day_label,
    month_id,
    month_names,
    parse_month_id,
)
from budget_tracker.ledger.month_store import (
    LedgerError,
    LedgerValidationError,
    UnknownMonthError,
    add_expense,
    add_income,
    has_year,
    initialize_year,
    parse_amount,
    remove_expense,
    set_income,
    year_slice,
)
from budget_tracker.ledger.totals import (
    balance,
    daily_total,
    format_currency,
    monthly_total,
    transaction_count,
)

__all__ = [
    # Calendar
    "available_years",
    "day_belongs_to_month",
    "days_in_month",
    "format_day_label",
    "month_id",
    "month_names",
    "parse_month_id",
    # Month store
    "LedgerError",
    "LedgerValidationError",
    "UnknownMonthError",
    "add_expense",
    "add_income",
    "has_year",
    "initialize_year",
    "parse_amount",
    "remove_expense",
    "set_income",
    "year_slice",
    # Totals
    "balance",
    "daily_total",
    "format_currency",
    "monthly_total",
    "transaction_count",
]
