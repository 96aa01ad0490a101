"""
Application Context for Budget Tracker

This module ties together all the components and defines what the
presentation layer can do:
1. Select a year and month (loading or initializing the year)
2. Change income, add and remove expenses
3. Sign up, sign in, sign in with a provider, sign out

DESIGN DECISION: There is no global state. A BudgetApp is constructed
explicitly at startup with its storage, audit logger and identity
provider, and every intent goes through it.

The context enforces the boundaries:
- Each mutation is derived from the latest in-memory snapshot
- The in-memory snapshot is replaced BEFORE persistence is attempted,
  so a failed write never loses the update
- Storage failures become warnings, never crashes
- Every transition is audited
"""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Optional, Union
from uuid import UUID

from budget_tracker.audit import AuditLogger
from budget_tracker.config import get_settings
from budget_tracker.identity import (
    ANONYMOUS,
    IdentityError,
    IdentityProvider,
    InvalidCredentialsError,
    MockGoogleProvider,
    sign_in,
    sign_in_with_provider,
    sign_out,
    sign_up,
)
from budget_tracker.ledger import (
    LedgerError,
    LedgerValidationError,
    add_expense,
    add_income,
    available_years,
    balance,
    daily_total,
    days_in_month,
    format_currency,
    format_day_label,
    has_year,
    initialize_year,
    month_id,
    month_names,
    monthly_total,
    parse_amount,
    remove_expense,
    set_income,
)
from budget_tracker.ledger.month_store import AmountInput
from budget_tracker.models import (
    CredentialRegistry,
    ExpenseItem,
    MonthData,
    MonthStore,
    SessionState,
)
from budget_tracker.services.storage import (
    BudgetStorageInterface,
    InMemoryStorage,
    JsonFileStorage,
    PersistenceFailure,
)


@dataclass(frozen=True)
class DayRow:
    """Everything the presentation layer needs to draw one day."""
    day_key: str
    label: str
    items: tuple[ExpenseItem, ...]
    total: Decimal

    @property
    def transaction_count(self) -> int:
        return len(self.items)


class BudgetApp:
    """
    The running application instance.

    Holds the active (year, month) selection, the month store snapshot,
    the session and the credential registry. The presentation layer
    reads the exposed views and forwards user intents to the methods.
    """

    def __init__(
        self,
        storage: BudgetStorageInterface,
        audit_logger: Optional[AuditLogger] = None,
        identity_provider: Optional[IdentityProvider] = None,
        today: Optional[date] = None,
    ):
        self._storage = storage
        self._audit_logger = audit_logger or AuditLogger()
        self._identity_provider = identity_provider or MockGoogleProvider()
        self._settings = get_settings().app

        today = today or date.today()
        self._current_year = today.year
        self._year = today.year
        self._month_index = today.month - 1

        self._store: MonthStore = {}
        self._session: SessionState = ANONYMOUS
        self._registry: CredentialRegistry = {}
        self._warnings: list[str] = []
        # Years whose last save failed; retried on the next mutation
        self._unsaved_years: set[int] = set()
        self._started = False

    # =========================================================================
    # LIFECYCLE
    # =========================================================================

    def start(self) -> "BudgetApp":
        """Restore the persisted session and load the selected year."""
        if self._started:
            return self

        try:
            user = self._storage.load_session()
        except PersistenceFailure as e:
            self._record_failure(e)
            user = None
        if user is not None:
            self._session = SessionState(user=user)
            self._audit_logger.log_session_restored(user.email)

        try:
            self._registry = self._storage.load_credential_registry()
        except PersistenceFailure as e:
            self._record_failure(e)

        self._ensure_year(self._year)
        self._started = True
        return self

    def close(self) -> None:
        """Last attempt at saving anything a previous write failed on."""
        self._retry_unsaved()

    # =========================================================================
    # SELECTION
    # =========================================================================

    @property
    def year(self) -> int:
        return self._year

    @property
    def month_index(self) -> int:
        return self._month_index

    @property
    def current_month_id(self) -> str:
        return month_id(self._year, self._month_index)

    def select_year(self, year: int) -> None:
        """Switch the active year, loading or initializing it on first use."""
        self._ensure_year(year)
        self._year = year

    def select_month(self, month_index: int) -> None:
        if not 0 <= month_index <= 11:
            raise LedgerValidationError(f"Month index must be 0-11, got {month_index}")
        self._month_index = month_index

    def _ensure_year(self, year: int) -> None:
        if has_year(self._store, year):
            return

        try:
            loaded = self._storage.load_month_store(year)
        except PersistenceFailure as e:
            # Keep whatever is on disk untouched until the user changes something
            self._record_failure(e)
            self._store = initialize_year(self._store, year)
            self._audit_logger.log_year_initialized(year)
            return

        if loaded is not None:
            self._store = {**self._store, **loaded}
            self._audit_logger.log_year_loaded(year, len(loaded))
            return

        self._store = initialize_year(self._store, year)
        self._audit_logger.log_year_initialized(year)
        self._save_year(year)

    # =========================================================================
    # VIEWS
    # =========================================================================

    @property
    def store(self) -> MonthStore:
        """The current snapshot. Treat as read-only."""
        return self._store

    @property
    def current_month(self) -> MonthData:
        return self._store[self.current_month_id]

    @property
    def month_names(self) -> list[str]:
        return month_names(self._year)

    @property
    def available_years(self) -> list[int]:
        return available_years(self._current_year, self._settings.extra_years_list)

    @property
    def income(self) -> Decimal:
        return self.current_month.income

    @property
    def monthly_expense(self) -> Decimal:
        return monthly_total(self.current_month.days)

    @property
    def balance(self) -> Decimal:
        return balance(self.current_month)

    def day_rows(self) -> list[DayRow]:
        """One row per calendar day of the active month, including empty days."""
        days = self.current_month.days
        rows = []
        for day_key in days_in_month(self._year, self._month_index):
            items = days.get(day_key, ())
            rows.append(DayRow(
                day_key=day_key,
                label=format_day_label(day_key),
                items=items,
                total=daily_total(items),
            ))
        return rows

    def format_amount(self, amount: Decimal) -> str:
        return format_currency(amount, self._settings.currency_symbol)

    @property
    def session(self) -> SessionState:
        return self._session

    @property
    def warnings(self) -> list[str]:
        return list(self._warnings)

    def pop_warnings(self) -> list[str]:
        """Return and clear pending warnings (the UI shows each once)."""
        warnings, self._warnings = self._warnings, []
        return warnings

    # =========================================================================
    # LEDGER INTENTS
    # =========================================================================

    def update_income(self, delta: AmountInput) -> Decimal:
        """Add `delta` to the active month's income. Returns the new income."""
        month_identifier = self.current_month_id
        previous = self._store[month_identifier].income
        try:
            new_store = add_income(self._store, month_identifier, delta)
        except LedgerError as e:
            self._audit_logger.log_validation_failed("update_income", str(e))
            raise
        return self._commit_income(month_identifier, previous, new_store)

    def set_income(self, new_income: AmountInput) -> Decimal:
        """Replace the active month's income wholesale."""
        month_identifier = self.current_month_id
        previous = self._store[month_identifier].income
        try:
            new_store = set_income(self._store, month_identifier, new_income)
        except LedgerError as e:
            self._audit_logger.log_validation_failed("set_income", str(e))
            raise
        return self._commit_income(month_identifier, previous, new_store)

    def _commit_income(
        self,
        month_identifier: str,
        previous: Decimal,
        new_store: MonthStore,
    ) -> Decimal:
        self._store = new_store
        income = new_store[month_identifier].income
        self._audit_logger.log_income_updated(month_identifier, str(previous), str(income))
        self._save_year(self._year)
        return income

    def add_expense(
        self,
        day_key: str,
        description: str,
        amount: AmountInput,
    ) -> ExpenseItem:
        """Record an expense on a day of the active month."""
        month_identifier = self.current_month_id
        try:
            value = parse_amount(amount)
            if value > Decimal(str(self._settings.max_expense_amount)):
                raise LedgerValidationError(
                    f"Amount {value} exceeds the maximum of "
                    f"{self._settings.max_expense_amount:,.2f}"
                )
            new_store, item = add_expense(
                self._store, month_identifier, day_key, description, value
            )
        except LedgerError as e:
            self._audit_logger.log_validation_failed("add_expense", str(e))
            raise

        self._store = new_store
        self._audit_logger.log_expense_added(
            month_identifier, day_key, item.id, str(item.amount)
        )
        self._save_year(self._year)
        return item

    def remove_expense(self, day_key: str, item_id: Union[UUID, str]) -> bool:
        """Remove an expense by id. Returns False if nothing matched."""
        month_identifier = self.current_month_id
        new_store = remove_expense(self._store, month_identifier, day_key, item_id)
        removed = new_store is not self._store

        self._audit_logger.log_expense_removed(
            month_identifier, day_key, str(item_id), removed
        )
        if removed:
            self._store = new_store
            self._save_year(self._year)
        return removed

    # =========================================================================
    # SESSION INTENTS
    # =========================================================================

    def sign_up(self, name: str, email: str, password: str) -> SessionState:
        """
        Register and sign in.

        Raises:
            EmailTakenError: If the email is already registered
            IdentityValidationError: If a field is empty
        """
        registry = self._latest_registry()
        try:
            new_registry, session = sign_up(registry, name, email, password)
        except IdentityError as e:
            self._audit_logger.log_sign_up_rejected(email, str(e))
            raise

        self._registry = new_registry
        self._save(self._storage.save_credential_registry, new_registry)
        self._audit_logger.log_signed_up(session.user.email)
        return self._set_session(session)

    def sign_in(self, email: str, password: str) -> SessionState:
        """
        Raises:
            InvalidCredentialsError: If the email/password pair does not match
            IdentityValidationError: If a field is empty
        """
        try:
            session = sign_in(self._latest_registry(), email, password)
        except InvalidCredentialsError:
            self._audit_logger.log_sign_in_failed(email)
            raise
        except IdentityError as e:
            self._audit_logger.log_validation_failed("sign_in", str(e))
            raise

        self._audit_logger.log_signed_in(session.user.email)
        return self._set_session(session)

    def sign_in_with_provider(self) -> SessionState:
        session = sign_in_with_provider(self._identity_provider)
        self._audit_logger.log_signed_in(
            session.user.email, method=self._identity_provider.name
        )
        return self._set_session(session)

    def sign_out(self) -> SessionState:
        email = self._session.user.email if self._session.user else None
        self._session = sign_out()
        self._save(self._storage.clear_session)
        self._audit_logger.log_signed_out(email)
        return self._session

    def _set_session(self, session: SessionState) -> SessionState:
        self._session = session
        self._save(self._storage.save_session, session.user)
        return session

    def _latest_registry(self) -> CredentialRegistry:
        """Registry as stored now; falls back to the in-memory copy."""
        try:
            self._registry = self._storage.load_credential_registry()
        except PersistenceFailure as e:
            self._record_failure(e)
        return self._registry

    # =========================================================================
    # PERSISTENCE
    # =========================================================================

    def _save_year(self, year: int) -> None:
        self._unsaved_years.add(year)
        self._retry_unsaved()

    def _retry_unsaved(self) -> None:
        for year in sorted(self._unsaved_years):
            if self._save(self._storage.save_month_store, year, self._store):
                self._unsaved_years.discard(year)

    def _save(self, operation, *args) -> bool:
        try:
            return operation(*args)
        except PersistenceFailure as e:
            self._record_failure(e)
            return False

    def _record_failure(self, error: PersistenceFailure) -> None:
        self._warnings.append(f"{error}. Working from memory for now.")
        self._audit_logger.log_persistence_failed(error.operation, error.key, error.reason)


def create_storage() -> BudgetStorageInterface:
    """Build the configured storage backend."""
    settings = get_settings().storage
    if settings.backend == "memory":
        return InMemoryStorage(key_prefix=settings.key_prefix)
    return JsonFileStorage()


def create_app_components(
    use_storage: bool = True,
    today: Optional[date] = None,
) -> BudgetApp:
    """
    Factory function to create a started application.

    Args:
        use_storage: Whether to use the configured durable storage.
                    Set to False to keep everything in memory.
        today: Date used for the initial year/month selection.
    """
    storage = create_storage() if use_storage else InMemoryStorage()
    return BudgetApp(storage=storage, audit_logger=AuditLogger(), today=today).start()
