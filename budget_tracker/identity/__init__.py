"""Identity and session package."""

from budget_tracker.identity.providers import IdentityProvider, MockGoogleProvider
from budget_tracker.identity.session_store import (
    ANONYMOUS,
    EmailTakenError,
    IdentityError,
    IdentityValidationError,
    InvalidCredentialsError,
    sign_in,
    sign_in_with_provider,
    sign_out,
    sign_up,
)

__all__ = [
    "ANONYMOUS",
    "EmailTakenError",
    "IdentityError",
    "IdentityProvider",
    "IdentityValidationError",
    "InvalidCredentialsError",
    "MockGoogleProvider",
    "sign_in",
    "sign_in_with_provider",
    "sign_out",
    "sign_up",
]
