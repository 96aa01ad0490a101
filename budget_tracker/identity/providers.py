"""
Third-party Identity Providers

DESIGN DECISION: Provider sign-in sits behind an abstract interface.
The shipped provider is a stub that always returns the same identity;
a real OAuth provider can replace it without touching the session
state machine.
"""

from abc import ABC, abstractmethod
from typing import Optional

from budget_tracker.config import get_settings
from budget_tracker.models.session import User


class IdentityProvider(ABC):
    """Something that can vouch for a user's identity."""

    name: str = "provider"

    @abstractmethod
    def authenticate(self) -> User:
        """
        Run the provider flow and return the verified identity.

        Raises:
            IdentityError: If the provider refuses the sign-in
        """
        pass


class MockGoogleProvider(IdentityProvider):
    """
    Stand-in for a Google sign-in. Always succeeds.

    No network call is made and nothing is verified.
    """

    name = "google"

    def __init__(
        self,
        display_name: Optional[str] = None,
        email: Optional[str] = None,
    ):
        if display_name is None or email is None:
            settings = get_settings().identity
            display_name = display_name or settings.mock_provider_name
            email = email or settings.mock_provider_email
        self._user = User(name=display_name, email=email)

    def authenticate(self) -> User:
        return self._user
