"""
Core Ledger Models for Budget Tracker

These models define the strict schemas for the month store:
1. Enforce type safety at runtime
2. Provide clear validation error messages
3. Be serializable for local persistence
4. Stay immutable, so every change produces a new snapshot

DESIGN DECISION: Amounts are Decimal, never float.
Summing currency as binary floats drifts (0.1 + 0.2 != 0.3);
Decimal keeps totals exact for typical currency magnitudes.
"""

import re
from datetime import date
from decimal import Decimal
from typing import Annotated
from uuid import UUID, uuid4

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    TypeAdapter,
    model_validator,
)


MONTH_ID_PATTERN = re.compile(r"^(\d{4})-(\d{2})$")


# =============================================================================
# EXPENSES
# =============================================================================

class ExpenseItem(BaseModel):
    """
    A single expense recorded against a calendar day.

    Items are never edited after creation - only removed by id.
    """
    model_config = ConfigDict(str_strip_whitespace=True, frozen=True)

    id: UUID = Field(
        default_factory=uuid4,
        description="Unique item identifier"
    )
    description: str = Field(
        ...,
        min_length=1,
        max_length=200,
        description="What the money was spent on"
    )
    amount: Annotated[
        Decimal,
        Field(gt=0, decimal_places=2, description="Amount in currency units")
    ]


# =============================================================================
# MONTHS
# =============================================================================

class MonthData(BaseModel):
    """
    Income and per-day expenses for one calendar month.

    CRITICAL: `id`, `year` and every day-key must agree on the month.
    A record that disagrees with itself is rejected on construction,
    including when it is loaded back from storage.
    """
    model_config = ConfigDict(frozen=True)

    id: str = Field(
        ...,
        pattern=r"^\d{4}-\d{2}$",
        description="Month identifier (YYYY-MM)"
    )
    name: str = Field(
        ...,
        min_length=1,
        description="Display name of the month"
    )
    year: int = Field(
        ...,
        ge=1,
        le=9999,
    )
    income: Annotated[
        Decimal,
        Field(ge=0, decimal_places=2, description="Total income for the month")
    ] = Decimal("0")

    # Day-key (YYYY-MM-DD) -> expenses in insertion order
    days: dict[str, tuple[ExpenseItem, ...]] = Field(default_factory=dict)

    @property
    def month_index(self) -> int:
        """Zero-based month index (0 = January)."""
        return int(self.id[5:7]) - 1

    @model_validator(mode='after')
    def validate_month_consistency(self) -> 'MonthData':
        """Validate id, year and day-keys against each other."""
        match = MONTH_ID_PATTERN.match(self.id)
        year, month = int(match.group(1)), int(match.group(2))
        if not 1 <= month <= 12:
            raise ValueError(f"Month out of range in id: {self.id}")
        if year != self.year:
            raise ValueError(
                f"Year {self.year} does not match month id {self.id}"
            )

        for day_key in self.days:
            try:
                day = date.fromisoformat(day_key)
            except ValueError:
                raise ValueError(f"Invalid day key: {day_key!r}")
            # fromisoformat also accepts week dates and basic format
            if day.isoformat() != day_key:
                raise ValueError(f"Invalid day key: {day_key!r}")
            if (day.year, day.month) != (year, month):
                raise ValueError(
                    f"Day {day_key} does not belong to month {self.id}"
                )

            ids = [item.id for item in self.days[day_key]]
            if len(ids) != len(set(ids)):
                raise ValueError(f"Duplicate expense id on {day_key}")

        return self


# Snapshot of the month store: month id -> record.
MonthStore = dict[str, MonthData]

month_store_adapter = TypeAdapter(MonthStore)
