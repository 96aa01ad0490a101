"""
Audit Logger

DESIGN DECISION: Every state transition in the system is logged.
This provides:
1. Traceability of every income and expense change
2. Debugging capability when a save fails
3. A short recent history the UI can show

The audit logger:
- Is synchronous, like everything else in the app
- Gracefully handles failures (doesn't crash the app if logging fails)
- Keeps the most recent events in memory
"""

from collections import deque
from typing import Optional
from uuid import UUID

import structlog

from budget_tracker.models.audit import AuditEvent, AuditEventBuilder, AuditSeverity


# Configure structlog for local logging
structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        structlog.processors.JSONRenderer()
    ],
    wrapper_class=structlog.stdlib.BoundLogger,
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)


class AuditLogger:
    """
    Central audit logging service.

    Logs events to the structured local log and keeps the
    last `history_size` events in memory.
    """

    def __init__(self, history_size: int = 200):
        self._logger = structlog.get_logger("budget_tracker.audit")
        self._history: deque[AuditEvent] = deque(maxlen=history_size)

    @property
    def history(self) -> list[AuditEvent]:
        """Recent events, oldest first."""
        return list(self._history)

    def log(self, event: AuditEvent) -> bool:
        """
        Log an audit event.

        Returns False if the local log write failed. Never raises.
        """
        self._history.append(event)
        log_dict = event.to_log_dict()

        try:
            if event.severity == AuditSeverity.ERROR:
                self._logger.error("audit_event", **log_dict)
            elif event.severity == AuditSeverity.WARNING:
                self._logger.warning("audit_event", **log_dict)
            elif event.severity == AuditSeverity.DEBUG:
                self._logger.debug("audit_event", **log_dict)
            else:
                self._logger.info("audit_event", **log_dict)
        except Exception:
            return False
        return True

    def log_year_initialized(self, year: int) -> None:
        self.log(AuditEventBuilder.year_initialized(year))

    def log_year_loaded(self, year: int, month_count: int) -> None:
        self.log(AuditEventBuilder.year_loaded(year, month_count))

    def log_income_updated(self, month_id: str, previous: str, new: str) -> None:
        """Log income change."""
        self.log(AuditEventBuilder.income_updated(month_id, previous, new))

    def log_expense_added(
        self,
        month_id: str,
        day_key: str,
        item_id: UUID,
        amount: str,
    ) -> None:
        """Log expense creation."""
        self.log(AuditEventBuilder.expense_added(month_id, day_key, item_id, amount))

    def log_expense_removed(
        self,
        month_id: str,
        day_key: str,
        item_id: str,
        removed: bool,
    ) -> None:
        self.log(AuditEventBuilder.expense_removed(month_id, day_key, item_id, removed))

    def log_validation_failed(self, intent: str, error_message: str) -> None:
        """Log a rejected intent."""
        self.log(AuditEventBuilder.validation_failed(intent, error_message))

    def log_session_restored(self, email: str) -> None:
        self.log(AuditEventBuilder.session_restored(email))

    def log_signed_up(self, email: str) -> None:
        self.log(AuditEventBuilder.user_signed_up(email))

    def log_sign_up_rejected(self, email: str, reason: str) -> None:
        self.log(AuditEventBuilder.sign_up_rejected(email, reason))

    def log_signed_in(self, email: str, method: str = "password") -> None:
        self.log(AuditEventBuilder.user_signed_in(email, method))

    def log_sign_in_failed(self, email: str) -> None:
        self.log(AuditEventBuilder.sign_in_failed(email))

    def log_signed_out(self, email: Optional[str]) -> None:
        self.log(AuditEventBuilder.user_signed_out(email))

    def log_persistence_failed(
        self,
        operation: str,
        key: str,
        error_message: str,
    ) -> None:
        """Log storage failure."""
        self.log(AuditEventBuilder.persistence_failed(operation, key, error_message))
