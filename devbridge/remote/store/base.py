"""Credential store interface for bearer-token caching.

The tunnel process does not receive the bearer token through its environment;
it reads it from a file whose path is exported as ``BEARER_TOKEN_LOCATION``.
The store owns those paths and writes the token before the environment is
handed to the tunnel.
"""

from __future__ import annotations

from pathlib import Path
from typing import Protocol, runtime_checkable


@runtime_checkable
class CredentialStore(Protocol):
    """Async protocol for caching bearer tokens per workspace.

    Storage layout (keyed by workspace id)::

        {root}/{prefix}.{workspace_id}.token
        {root}/{prefix}.{workspace_id}.log
    """

    def location(self, workspace_id: str) -> Path:
        """Path of the cached bearer token.  Pure, no I/O."""
        ...

    def log_location(self, workspace_id: str) -> Path:
        """Path the tunnel process should log to.  Pure, no I/O."""
        ...

    async def cache(self, token: str, workspace_id: str) -> None:
        """Write ``token`` verbatim, replacing any previous value."""
        ...

    async def read(self, workspace_id: str) -> str:
        """Read the cached token.  Raises ``FileNotFoundError`` if not found."""
        ...

    async def exists(self, workspace_id: str) -> bool: ...

    async def delete(self, workspace_id: str) -> None:
        """Delete the cached token.  No-op if not found."""
        ...
