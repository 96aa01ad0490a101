"""
Data Models Package

This package contains all Pydantic models used in the Budget Tracker.
All data flowing through the system must conform to these schemas.
"""

from budget_tracker.models.ledger import (
    ExpenseItem,
    MonthData,
    MonthStore,
    month_store_adapter,
)
from budget_tracker.models.session import (
    GUEST_NAME,
    GUEST_SUBTITLE,
    CredentialRecord,
    CredentialRegistry,
    SessionState,
    User,
    registry_adapter,
)
from budget_tracker.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
)

__all__ = [
    # Ledger models
    "ExpenseItem",
    "MonthData",
    "MonthStore",
    "month_store_adapter",
    # Session models
    "GUEST_NAME",
    "GUEST_SUBTITLE",
    "CredentialRecord",
    "CredentialRegistry",
    "SessionState",
    "User",
    "registry_adapter",
    # Audit models
    "AuditEvent",
    "AuditEventBuilder",
    "AuditEventType",
    "AuditSeverity",
]
