"""
Tests for the session / identity state machine.
"""

import pytest

from budget_tracker.identity import (
    ANONYMOUS,
    EmailTakenError,
    IdentityProvider,
    IdentityValidationError,
    InvalidCredentialsError,
    MockGoogleProvider,
    sign_in,
    sign_in_with_provider,
    sign_out,
    sign_up,
)
from budget_tracker.models import CredentialRecord, User


class TestSignUp:

    def test_sign_up_registers_and_signs_in(self):
        registry, session = sign_up({}, "Rahim", "rahim@example.com", "secret")
        assert registry == {"rahim@example.com": CredentialRecord(name="Rahim", password="secret")}
        assert session.is_authenticated
        assert session.user == User(name="Rahim", email="rahim@example.com")

    def test_sign_up_does_not_modify_input_registry(self):
        original = {}
        sign_up(original, "Rahim", "rahim@example.com", "secret")
        assert original == {}

    def test_sign_up_existing_email_fails(self):
        registry, _ = sign_up({}, "Rahim", "rahim@example.com", "secret")
        before = dict(registry)
        with pytest.raises(EmailTakenError, match="User already exists"):
            sign_up(registry, "Someone Else", "rahim@example.com", "other")
        assert registry == before

    def test_sign_up_strips_name_and_email(self):
        """The registry key is the email the session shows."""
        registry, session = sign_up({}, " Bob ", " bob@example.com ", "pw")
        assert list(registry) == ["bob@example.com"]
        assert registry["bob@example.com"].name == "Bob"
        assert session.user == User(name="Bob", email="bob@example.com")

        again = sign_in(registry, session.user.email, "pw")
        assert again.user == session.user

    def test_sign_up_padded_email_is_taken(self):
        registry, _ = sign_up({}, "Bob", "bob@example.com", "pw")
        with pytest.raises(EmailTakenError):
            sign_up(registry, "Bob", "bob@example.com  ", "pw")

    @pytest.mark.parametrize("name,email,password", [
        ("", "a@example.com", "pw"),
        ("A", "", "pw"),
        ("A", "a@example.com", ""),
        ("  ", "a@example.com", "pw"),
    ])
    def test_sign_up_requires_all_fields(self, name, email, password):
        with pytest.raises(IdentityValidationError, match="All fields are required"):
            sign_up({}, name, email, password)


class TestSignIn:

    @pytest.fixture
    def registry(self):
        registry, _ = sign_up({}, "Rahim", "rahim@example.com", "Secret")
        return registry

    def test_sign_up_then_sign_in(self, registry):
        session = sign_in(registry, "rahim@example.com", "Secret")
        assert session.display_name == "Rahim"
        assert session.user.email == "rahim@example.com"

    def test_wrong_password(self, registry):
        with pytest.raises(InvalidCredentialsError, match="Invalid credentials"):
            sign_in(registry, "rahim@example.com", "wrong")

    def test_padded_email_signs_in(self, registry):
        session = sign_in(registry, "  rahim@example.com ", "Secret")
        assert session.user.email == "rahim@example.com"

    def test_password_is_not_stripped(self, registry):
        with pytest.raises(InvalidCredentialsError):
            sign_in(registry, "rahim@example.com", " Secret ")

    def test_password_is_case_sensitive(self, registry):
        with pytest.raises(InvalidCredentialsError):
            sign_in(registry, "rahim@example.com", "secret")

    def test_unknown_email(self, registry):
        with pytest.raises(InvalidCredentialsError):
            sign_in(registry, "nobody@example.com", "Secret")

    def test_empty_fields(self, registry):
        with pytest.raises(IdentityValidationError):
            sign_in(registry, "", "")


class TestProviderAndSignOut:

    def test_mock_provider_fixed_identity(self):
        session = sign_in_with_provider(MockGoogleProvider())
        assert session.user == User(name="Google User", email="user@gmail.com")

    def test_mock_provider_custom_identity(self):
        provider = MockGoogleProvider(display_name="Test", email="test@example.com")
        assert sign_in_with_provider(provider).display_name == "Test"

    def test_custom_provider_can_be_substituted(self):
        class StaticProvider(IdentityProvider):
            name = "static"

            def authenticate(self) -> User:
                return User(name="Static", email="static@example.com")

        session = sign_in_with_provider(StaticProvider())
        assert session.user.email == "static@example.com"

    def test_sign_out(self):
        session = sign_out()
        assert session is ANONYMOUS
        assert not session.is_authenticated
        assert session.display_name == "Guest User"


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
