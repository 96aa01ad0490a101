"""
Month Store Operations

Every operation takes the current store snapshot and returns a new one.
Nothing is edited in place:
- the returned dict is always a fresh dict when something changed
- the touched MonthData is a fresh object
- untouched months are shared with the previous snapshot

Callers that compare snapshots by identity (`old is new`) can therefore
tell whether anything changed. Operations that change nothing return the
very same snapshot object.

IMPORTANT: Operations never partially apply. Invalid input or an unknown
month raises before any new snapshot is built.
"""

from decimal import Decimal, InvalidOperation
from typing import Union
from uuid import UUID

from pydantic import ValidationError

from budget_tracker.errors import BudgetTrackerError
from budget_tracker.ledger.calendar_utils import (
    day_belongs_to_month,
    month_id,
    month_names,
)
from budget_tracker.models.ledger import ExpenseItem, MonthData, MonthStore


AmountInput = Union[Decimal, int, float, str]


class LedgerError(BudgetTrackerError):
    """Base exception for month store operations."""
    pass


class LedgerValidationError(LedgerError):
    """Invalid input to a mutator; the store is left unchanged."""
    pass


class UnknownMonthError(LedgerError):
    """Mutator invoked against a month id that is not in the store."""

    def __init__(self, month_identifier: str):
        super().__init__(f"Unknown month: {month_identifier}")
        self.month_id = month_identifier


def parse_amount(value: AmountInput) -> Decimal:
    """
    Convert user input into a Decimal amount.

    Floats go through str() so 45.5 becomes Decimal('45.5'), not the
    binary expansion. Booleans and non-finite values are rejected.
    """
    if isinstance(value, bool):
        raise LedgerValidationError("Amount must be a number")
    try:
        amount = value if isinstance(value, Decimal) else Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        raise LedgerValidationError(f"Amount is not a number: {value!r}")
    if not amount.is_finite():
        raise LedgerValidationError(f"Amount is not a number: {value!r}")
    return amount


def _get_month(store: MonthStore, month_identifier: str) -> MonthData:
    try:
        return store[month_identifier]
    except KeyError:
        raise UnknownMonthError(month_identifier) from None


def has_year(store: MonthStore, year: int) -> bool:
    """True if any month of `year` is already in the store."""
    prefix = f"{year:04d}-"
    return any(key.startswith(prefix) for key in store)


def initialize_year(store: MonthStore, year: int) -> MonthStore:
    """
    Populate all 12 months of `year` with zero income and no expenses.

    If any month of that year already exists the store is returned
    unchanged - no merge, no partial fill.
    """
    if has_year(store, year):
        return store

    new_store = dict(store)
    for index, name in enumerate(month_names(year)):
        identifier = month_id(year, index)
        new_store[identifier] = MonthData(
            id=identifier,
            name=name,
            year=year,
            income=Decimal("0"),
            days={},
        )
    return new_store


def set_income(
    store: MonthStore,
    month_identifier: str,
    new_income: AmountInput,
) -> MonthStore:
    """Replace a month's income wholesale."""
    month = _get_month(store, month_identifier)
    income = parse_amount(new_income)
    if income < 0:
        raise LedgerValidationError("Income cannot be negative")

    try:
        updated = MonthData(**{**month.model_dump(), "income": income})
    except ValidationError as e:
        raise LedgerValidationError(f"Invalid income: {e.errors()[0]['msg']}")

    new_store = dict(store)
    new_store[month_identifier] = updated
    return new_store


def add_income(
    store: MonthStore,
    month_identifier: str,
    delta: AmountInput,
) -> MonthStore:
    """Add `delta` to the month's existing income."""
    month = _get_month(store, month_identifier)
    amount = parse_amount(delta)
    if amount < 0:
        raise LedgerValidationError("Income to add cannot be negative")
    return set_income(store, month_identifier, month.income + amount)


def add_expense(
    store: MonthStore,
    month_identifier: str,
    day_key: str,
    description: str,
    amount: AmountInput,
) -> tuple[MonthStore, ExpenseItem]:
    """
    Append a new expense to the end of a day's list.

    Returns the new snapshot and the created item (for its id).
    """
    month = _get_month(store, month_identifier)
    if not day_belongs_to_month(day_key, month_identifier):
        raise LedgerValidationError(
            f"Day {day_key} is not in month {month_identifier}"
        )
    if not isinstance(description, str) or not description.strip():
        raise LedgerValidationError("Description is required")

    value = parse_amount(amount)
    if value <= 0:
        raise LedgerValidationError("Amount must be greater than zero")

    try:
        item = ExpenseItem(description=description, amount=value)
    except ValidationError as e:
        raise LedgerValidationError(f"Invalid expense: {e.errors()[0]['msg']}")

    days = dict(month.days)
    days[day_key] = (*days.get(day_key, ()), item)

    new_store = dict(store)
    new_store[month_identifier] = month.model_copy(update={"days": days})
    return new_store, item


def remove_expense(
    store: MonthStore,
    month_identifier: str,
    day_key: str,
    item_id: Union[UUID, str],
) -> MonthStore:
    """
    Remove the expense with `item_id` from a day.

    A missing day or id is a no-op and returns the same snapshot.
    """
    month = _get_month(store, month_identifier)
    items = month.days.get(day_key)
    if not items:
        return store

    target = str(item_id)
    remaining = tuple(item for item in items if str(item.id) != target)
    if len(remaining) == len(items):
        return store

    days = dict(month.days)
    days[day_key] = remaining

    new_store = dict(store)
    new_store[month_identifier] = month.model_copy(update={"days": days})
    return new_store


def year_slice(store: MonthStore, year: int) -> MonthStore:
    """Only the months belonging to `year`, in month order."""
    prefix = f"{year:04d}-"
    return {key: store[key] for key in sorted(store) if key.startswith(prefix)}
