"""Account and session models.

Identities are owned by the external account registry; this package only
reads them to decide which one to authenticate with.
"""

from __future__ import annotations

from pydantic import BaseModel, Field, SecretStr


class AccountMetadata(BaseModel):
    can_auto_connect: bool = False
    """May be tried without user interaction."""


class Identity(BaseModel):
    """A locally known account."""

    id: str
    label: str
    metadata: AccountMetadata = Field(default_factory=AccountMetadata)


class AccessDetails(BaseModel):
    """Credential material installed onto a remote API client."""

    access_token: SecretStr
    secret: SecretStr | None = None


class Session(BaseModel):
    """Result of authenticating an Identity.

    Valid until the remote service rejects it; no local expiry is tracked.
    """

    id: str
    access_details: AccessDetails
    account_details: Identity
