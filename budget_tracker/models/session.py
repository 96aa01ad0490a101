"""
Session and Identity Models

CRITICAL: Credentials here are a MOCK. Passwords are stored and
compared as plaintext. Nothing in this package is suitable for
protecting real data - substitute a salted hash before any real use.
"""

from typing import Annotated, Optional

from pydantic import BaseModel, ConfigDict, Field, StringConstraints, TypeAdapter


GUEST_NAME = "Guest User"
GUEST_SUBTITLE = "Free Account"


class User(BaseModel):
    """The identity shown in the header once signed in."""
    model_config = ConfigDict(str_strip_whitespace=True, frozen=True)

    name: str = Field(..., min_length=1, max_length=100)
    email: str = Field(..., min_length=3, max_length=254)


class CredentialRecord(BaseModel):
    """
    Registry entry for one email address.

    The name is stripped like `User.name`; the password is kept exactly
    as typed.
    """
    model_config = ConfigDict(frozen=True)

    name: Annotated[
        str,
        StringConstraints(strip_whitespace=True, min_length=1, max_length=100)
    ]
    password: str = Field(..., min_length=1)


# Email -> credential record
CredentialRegistry = dict[str, CredentialRecord]

registry_adapter = TypeAdapter(CredentialRegistry)


class SessionState(BaseModel):
    """
    Current session: Anonymous when `user` is None, Authenticated otherwise.
    """
    model_config = ConfigDict(frozen=True)

    user: Optional[User] = None

    @property
    def is_authenticated(self) -> bool:
        return self.user is not None

    @property
    def display_name(self) -> str:
        return self.user.name if self.user else GUEST_NAME

    @property
    def display_subtitle(self) -> str:
        return self.user.email if self.user else GUEST_SUBTITLE
