"""
Ledger aggregation.

Totals are computed on demand from the month record; nothing here
is cached or stored.
"""

from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable, Mapping, Optional

from budget_tracker.models.ledger import ExpenseItem, MonthData


ZERO = Decimal("0")
CENTS = Decimal("0.01")


def daily_total(items: Optional[Iterable[ExpenseItem]]) -> Decimal:
    """Sum of one day's expenses. A missing or empty day totals zero."""
    if not items:
        return ZERO
    return sum((item.amount for item in items), ZERO)


def monthly_total(days: Mapping[str, Iterable[ExpenseItem]]) -> Decimal:
    """Sum of every recorded day. Days never touched are simply absent."""
    return sum((daily_total(items) for items in days.values()), ZERO)


def balance(month: MonthData) -> Decimal:
    """Income left after the month's expenses. Can go negative."""
    return month.income - monthly_total(month.days)


def transaction_count(items: Optional[Iterable[ExpenseItem]]) -> int:
    return len(tuple(items)) if items else 0


def format_currency(amount: Decimal, symbol: str = "৳") -> str:
    """
    Format an amount for display: '৳1,954.50', '-৳45.50'.

    Rounds half-up to cents; the stored value is never rounded.
    """
    quantized = Decimal(amount).quantize(CENTS, rounding=ROUND_HALF_UP)
    sign = "-" if quantized < 0 else ""
    return f"{sign}{symbol}{abs(quantized):,.2f}"
