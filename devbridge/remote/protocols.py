"""Interfaces of the external collaborators.

The remote API client, the in-workspace environment client and the account
registry are provided by the host application.  This package depends only on
the protocols below, so tests substitute in-memory fakes.
"""

from __future__ import annotations

from collections.abc import AsyncIterable, Awaitable, Callable
from typing import Protocol, runtime_checkable

from devbridge.remote.models.identity import AccessDetails, AccountMetadata, Identity, Session
from devbridge.remote.models.workspace import EnvironmentStatus, WorkspaceSummary


@runtime_checkable
class RemoteClient(Protocol):
    """Remote API client.

    ``connected`` is true once credentials are installed and accepted.
    ``token`` is the short-lived bearer token handed to the tunnel process.
    """

    @property
    def connected(self) -> bool: ...

    @property
    def region_code(self) -> str: ...

    @property
    def token(self) -> str: ...

    async def set_credentials(self, access_details: AccessDetails, metadata: AccountMetadata) -> None:
        """Install session credentials onto the client."""
        ...

    def list_resources(self, kind: str) -> AsyncIterable[list[WorkspaceSummary]]:
        """Stream a resource listing one page at a time."""
        ...

    async def get_workspace(self, *, organization_name: str, project_name: str, id: str) -> WorkspaceSummary:  # noqa: A002
        """Fetch a workspace summary by its identity tuple."""
        ...


@runtime_checkable
class EnvironmentClient(Protocol):
    """Client for the agent running inside a managed workspace."""

    @property
    def arn(self) -> str | None: ...

    def is_managed_workspace(self) -> bool: ...

    async def get_status(self) -> EnvironmentStatus: ...


@runtime_checkable
class AccountRegistry(Protocol):
    """Host-provided registry of known identities."""

    def list_accounts(self) -> list[Identity]: ...

    async def create_session(self, identity: Identity) -> Session:
        """Authenticate ``identity``.  Raises on failure."""
        ...

    def get_active_session(self) -> Session | None: ...


ClientConstructor = Callable[[], Awaitable[RemoteClient]]
"""Builds a fresh, uncredentialed remote client."""
