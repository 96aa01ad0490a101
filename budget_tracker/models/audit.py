"""
Audit Models for Budget Tracker

Every state transition in the system is logged for audit purposes.
This provides:
1. Traceability of every income and expense change
2. Debugging information when a save fails
3. Ability to reconstruct how a month reached its totals

DESIGN DECISION: Audit events are append-only. We never modify them.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class AuditEventType(str, Enum):
    """
    Types of events we audit.

    Every intent the presentation layer can forward has its own event type.
    """
    # Month store
    YEAR_INITIALIZED = "year_initialized"
    YEAR_LOADED = "year_loaded"
    INCOME_UPDATED = "income_updated"
    EXPENSE_ADDED = "expense_added"
    EXPENSE_REMOVED = "expense_removed"
    VALIDATION_FAILED = "validation_failed"

    # Session
    SESSION_RESTORED = "session_restored"
    USER_SIGNED_UP = "user_signed_up"
    SIGN_UP_REJECTED = "sign_up_rejected"
    USER_SIGNED_IN = "user_signed_in"
    SIGN_IN_FAILED = "sign_in_failed"
    USER_SIGNED_OUT = "user_signed_out"

    # Persistence
    PERSISTENCE_FAILED = "persistence_failed"


class AuditSeverity(str, Enum):
    """Severity level for audit events."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class AuditEvent(BaseModel):
    """
    A single audit event.

    This is the core unit of our audit trail.
    Every state transition creates one of these.
    """

    # Identity
    event_id: UUID = Field(
        default_factory=uuid4,
        description="Unique event identifier"
    )
    timestamp: datetime = Field(
        default_factory=_utcnow,
        description="When the event occurred (UTC)"
    )

    # Event classification
    event_type: AuditEventType = Field(
        ...,
        description="Type of event"
    )
    severity: AuditSeverity = Field(
        default=AuditSeverity.INFO,
        description="Event severity"
    )

    # Context - what entity is this about?
    entity_type: Optional[str] = Field(
        default=None,
        description="Type of entity (e.g., 'month', 'expense', 'session')"
    )
    entity_id: Optional[str] = Field(
        default=None,
        description="Month id, expense id or email the event relates to"
    )

    description: str = Field(
        ...,
        max_length=500,
        description="Human-readable description of what happened"
    )
    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional event-specific data"
    )

    error_message: Optional[str] = None

    is_user_action: bool = Field(
        default=False,
        description="Was this triggered by a user action?"
    )

    def to_log_dict(self) -> dict:
        """
        Convert to a dictionary suitable for structured logging.
        """
        return {
            "event_id": str(self.event_id),
            "timestamp": self.timestamp.isoformat(),
            "event_type": self.event_type.value,
            "severity": self.severity.value,
            "entity_type": self.entity_type,
            "entity_id": self.entity_id,
            "description": self.description,
            "details": self.details,
            "error_message": self.error_message,
            "is_user_action": self.is_user_action,
        }


class AuditEventBuilder:
    """
    Helper class to build audit events with common patterns.

    Usage:
        event = AuditEventBuilder.expense_added("2026-03", "2026-03-15", item_id, "45.50")
        event = AuditEventBuilder.user_signed_in("me@example.com")
    """

    @staticmethod
    def year_initialized(year: int) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.YEAR_INITIALIZED,
            entity_type="year",
            entity_id=str(year),
            description=f"Initialized 12 empty months for {year}",
        )

    @staticmethod
    def year_loaded(year: int, month_count: int) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.YEAR_LOADED,
            severity=AuditSeverity.DEBUG,
            entity_type="year",
            entity_id=str(year),
            description=f"Loaded {month_count} months for {year} from storage",
            details={"month_count": month_count},
        )

    @staticmethod
    def income_updated(month_id: str, previous: str, new: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.INCOME_UPDATED,
            entity_type="month",
            entity_id=month_id,
            description=f"Income for {month_id} set to {new}",
            details={
                "previous_income": previous,
                "new_income": new,
            },
            is_user_action=True,
        )

    @staticmethod
    def expense_added(
        month_id: str,
        day_key: str,
        item_id: UUID,
        amount: str,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.EXPENSE_ADDED,
            entity_type="expense",
            entity_id=str(item_id),
            description=f"Expense of {amount} added on {day_key}",
            details={
                "month_id": month_id,
                "day_key": day_key,
                "amount": amount,
            },
            is_user_action=True,
        )

    @staticmethod
    def expense_removed(
        month_id: str,
        day_key: str,
        item_id: str,
        removed: bool,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.EXPENSE_REMOVED,
            entity_type="expense",
            entity_id=item_id,
            description=(
                f"Expense removed from {day_key}"
                if removed
                else f"No expense with that id on {day_key}; nothing removed"
            ),
            details={
                "month_id": month_id,
                "day_key": day_key,
                "removed": removed,
            },
            is_user_action=True,
        )

    @staticmethod
    def validation_failed(intent: str, error_message: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.VALIDATION_FAILED,
            severity=AuditSeverity.WARNING,
            description=f"Rejected {intent}",
            error_message=error_message,
            details={"intent": intent},
            is_user_action=True,
        )

    @staticmethod
    def session_restored(email: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.SESSION_RESTORED,
            entity_type="session",
            entity_id=email,
            description="Previous session restored at startup",
        )

    @staticmethod
    def user_signed_up(email: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.USER_SIGNED_UP,
            entity_type="session",
            entity_id=email,
            description="New account registered and signed in",
            is_user_action=True,
        )

    @staticmethod
    def sign_up_rejected(email: str, reason: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.SIGN_UP_REJECTED,
            severity=AuditSeverity.WARNING,
            entity_type="session",
            entity_id=email,
            description="Sign-up rejected",
            error_message=reason,
            is_user_action=True,
        )

    @staticmethod
    def user_signed_in(email: str, method: str = "password") -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.USER_SIGNED_IN,
            entity_type="session",
            entity_id=email,
            description=f"User signed in via {method}",
            details={"method": method},
            is_user_action=True,
        )

    @staticmethod
    def sign_in_failed(email: str) -> AuditEvent:
        # The attempted password is deliberately not recorded.
        return AuditEvent(
            event_type=AuditEventType.SIGN_IN_FAILED,
            severity=AuditSeverity.WARNING,
            entity_type="session",
            entity_id=email,
            description="Sign-in failed: invalid credentials",
            is_user_action=True,
        )

    @staticmethod
    def user_signed_out(email: Optional[str]) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.USER_SIGNED_OUT,
            entity_type="session",
            entity_id=email,
            description="User signed out",
            is_user_action=True,
        )

    @staticmethod
    def persistence_failed(
        operation: str,
        key: str,
        error_message: str,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.PERSISTENCE_FAILED,
            severity=AuditSeverity.WARNING,
            entity_type="storage",
            entity_id=key,
            description=f"Storage {operation} failed for {key}",
            error_message=error_message,
            details={"operation": operation},
        )
