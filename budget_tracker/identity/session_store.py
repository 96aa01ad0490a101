"""
Session / Identity State Machine

Two states:
    Anonymous      - SessionState(user=None)
    Authenticated  - SessionState(user=User(...))

All transitions are pure functions. The registry and session passed in
are never modified; new values are returned instead.

CRITICAL: This is MOCK authentication. Passwords are compared as
plaintext with an exact, case-sensitive match. Do not reuse for
anything that protects real data.
"""

from pydantic import ValidationError

from budget_tracker.errors import BudgetTrackerError
from budget_tracker.identity.providers import IdentityProvider
from budget_tracker.models.session import (
    CredentialRecord,
    CredentialRegistry,
    SessionState,
    User,
)


class IdentityError(BudgetTrackerError):
    """Base exception for session operations."""
    pass


class IdentityValidationError(IdentityError):
    """A required field was missing or malformed."""
    pass


class EmailTakenError(IdentityError):
    """Sign-up against an email that is already registered."""

    def __init__(self, email: str):
        super().__init__("User already exists")
        self.email = email


class InvalidCredentialsError(IdentityError):
    """Unknown email or wrong password."""

    def __init__(self):
        super().__init__("Invalid credentials")


ANONYMOUS = SessionState()


def _require(**fields: str) -> None:
    for field_name, value in fields.items():
        if not isinstance(value, str) or not value.strip():
            raise IdentityValidationError(
                f"All fields are required ({field_name} is empty)"
            )


def sign_up(
    registry: CredentialRegistry,
    name: str,
    email: str,
    password: str,
) -> tuple[CredentialRegistry, SessionState]:
    """
    Register a new account and sign it in.

    Returns:
        (new_registry, authenticated_session)

    Raises:
        IdentityValidationError: If any field is empty
        EmailTakenError: If the email is already registered
    """
    _require(name=name, email=email, password=password)
    # The registry key must be the same string the session shows
    name, email = name.strip(), email.strip()
    if email in registry:
        raise EmailTakenError(email)

    try:
        record = CredentialRecord(name=name, password=password)
        user = User(name=name, email=email)
    except ValidationError as e:
        raise IdentityValidationError(e.errors()[0]["msg"])

    new_registry = dict(registry)
    new_registry[email] = record
    return new_registry, SessionState(user=user)


def sign_in(
    registry: CredentialRegistry,
    email: str,
    password: str,
) -> SessionState:
    """
    Check an email/password pair against the registry.

    Raises:
        IdentityValidationError: If either field is empty
        InvalidCredentialsError: If the email is unknown or the password differs
    """
    _require(email=email, password=password)
    email = email.strip()
    record = registry.get(email)
    if record is None or record.password != password:
        raise InvalidCredentialsError()
    return SessionState(user=User(name=record.name, email=email))


def sign_in_with_provider(provider: IdentityProvider) -> SessionState:
    """Sign in with whatever identity the provider vouches for."""
    return SessionState(user=provider.authenticate())


def sign_out() -> SessionState:
    return ANONYMOUS
