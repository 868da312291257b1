"""Process environment for the secure tunnel into a workspace.

The tunnel is launched as an SSH ``ProxyCommand``; it learns where and how to
connect purely from environment variables:

- ``AWS_REGION``              -> region of the remote service
- ``AWS_SSM_CLI``             -> path of the tunnel (session manager) binary
- ``CAWS_ENDPOINT``           -> remote API endpoint
- ``BEARER_TOKEN_LOCATION``   -> file holding the bearer token
- ``LOG_FILE_LOCATION``       -> file the tunnel logs to
- ``ORGANIZATION_NAME``, ``PROJECT_NAME``, ``WORKSPACE_ID`` -> target workspace
- ``SSH_AUTH_SOCK``           -> forwarded agent socket (optional)

The bearer token itself is never put in the environment.  It is written to
``BEARER_TOKEN_LOCATION`` first, and only then is the environment returned, so
the tunnel always finds a current token when it starts.
"""

from __future__ import annotations

import os
from collections.abc import Awaitable, Callable, Mapping
from pathlib import Path
from typing import TYPE_CHECKING

from loguru import logger

from devbridge.remote.connection.agent import SSH_AGENT_SOCKET_VARIABLE, start_ssh_agent
from devbridge.remote.settings import get_settings

if TYPE_CHECKING:
    from devbridge.remote.models.workspace import WorkspaceId, WorkspaceSummary
    from devbridge.remote.protocols import RemoteClient
    from devbridge.remote.store.base import CredentialStore

# ---------------------------------------------------------------------------
# Variable names
# ---------------------------------------------------------------------------

REGION_VARIABLE = "AWS_REGION"
TUNNEL_CLI_VARIABLE = "AWS_SSM_CLI"
ENDPOINT_VARIABLE = "CAWS_ENDPOINT"
TOKEN_LOCATION_VARIABLE = "BEARER_TOKEN_LOCATION"
LOG_LOCATION_VARIABLE = "LOG_FILE_LOCATION"
ORGANIZATION_VARIABLE = "ORGANIZATION_NAME"
PROJECT_VARIABLE = "PROJECT_NAME"
WORKSPACE_VARIABLE = "WORKSPACE_ID"

TUNNEL_VARIABLES = (
    REGION_VARIABLE,
    TUNNEL_CLI_VARIABLE,
    ENDPOINT_VARIABLE,
    TOKEN_LOCATION_VARIABLE,
    LOG_LOCATION_VARIABLE,
    ORGANIZATION_VARIABLE,
    PROJECT_VARIABLE,
    WORKSPACE_VARIABLE,
)

EnvProvider = Callable[[], Awaitable[dict[str, str]]]


class EnvironmentUnavailableError(RuntimeError):
    """Tunnel environment requested for a client without valid credentials."""

    def __init__(self, workspace_id: str) -> None:
        super().__init__(f"Unable to provide tunnel environment for workspace '{workspace_id}': client is disconnected")


# ---------------------------------------------------------------------------
# Pure helpers
# ---------------------------------------------------------------------------


def tunnel_variables(
    region: str,
    tunnel_path: str,
    workspace: WorkspaceSummary,
    *,
    endpoint: str,
    store: CredentialStore,
) -> dict[str, str]:
    """Compute the fixed tunnel variables.  No I/O."""
    return {
        REGION_VARIABLE: region,
        TUNNEL_CLI_VARIABLE: tunnel_path,
        ENDPOINT_VARIABLE: endpoint,
        TOKEN_LOCATION_VARIABLE: str(store.location(workspace.id)),
        LOG_LOCATION_VARIABLE: str(store.log_location(workspace.id)),
        ORGANIZATION_VARIABLE: workspace.org.name,
        PROJECT_VARIABLE: workspace.project.name,
        WORKSPACE_VARIABLE: workspace.id,
    }


def host_name_for(workspace: WorkspaceSummary | WorkspaceId | str, prefix: str) -> str:
    """SSH host alias for a workspace, e.g. ``devbridge-<id>``."""
    workspace_id = workspace if isinstance(workspace, str) else workspace.id
    return f"{prefix}{workspace_id}"


# ---------------------------------------------------------------------------
# Builder
# ---------------------------------------------------------------------------


class TunnelEnvironmentBuilder:
    """Builds the environment for a tunnel process.

    ``agent_starter`` receives the inherited environment and returns the agent
    socket path; tests replace it to avoid spawning a real ssh-agent.  The
    socket is remembered and reused for as long as it exists, so repeated
    builds share one agent and the keys loaded into it.

    ``endpoint`` falls back to the configured ``endpoint`` setting.
    """

    def __init__(
        self,
        store: CredentialStore,
        *,
        endpoint: str | None = None,
        agent_starter: Callable[[Mapping[str, str]], Awaitable[str]] = start_ssh_agent,
    ) -> None:
        self._store = store
        self._endpoint = endpoint or get_settings().endpoint
        self._agent_starter = agent_starter
        self._agent_socket: str | None = None

    @property
    def endpoint(self) -> str:
        return self._endpoint

    async def _agent_socket_for(self, env: Mapping[str, str]) -> str:
        if self._agent_socket and Path(self._agent_socket).exists():
            return self._agent_socket
        self._agent_socket = await self._agent_starter(env)
        return self._agent_socket

    async def build_env(
        self,
        client: RemoteClient,
        tunnel_path: str,
        workspace: WorkspaceSummary,
        use_agent_socket: bool = True,
        *,
        base_env: Mapping[str, str] | None = None,
    ) -> dict[str, str]:
        """Persist the bearer token and return the tunnel environment.

        ``base_env`` defaults to a copy of ``os.environ``.  Computed variables
        take precedence over inherited ones; the source mapping is not mutated.

        Raises
        ------
        EnvironmentUnavailableError:
            ``client`` is not connected.  Raised before anything is written.
        OSError:
            The token could not be cached.
        """
        if not client.connected:
            raise EnvironmentUnavailableError(workspace.id)

        await self._store.cache(client.token, workspace.id)

        inherited = os.environ if base_env is None else base_env
        variables = tunnel_variables(
            client.region_code,
            tunnel_path,
            workspace,
            endpoint=self._endpoint,
            store=self._store,
        )
        if use_agent_socket:
            variables[SSH_AGENT_SOCKET_VARIABLE] = await self._agent_socket_for(inherited)

        logger.debug("Built tunnel environment for workspace {} (agent={})", workspace.id, use_agent_socket)
        return {**inherited, **variables}


def create_env_provider(
    builder: TunnelEnvironmentBuilder,
    client: RemoteClient,
    tunnel_path: str,
    workspace: WorkspaceSummary,
    use_agent_socket: bool = True,
) -> EnvProvider:
    """Defer ``build_env`` until the tunnel is about to be launched.

    Each call re-caches the current token, so a provider can be reused across
    reconnects after the client refreshes its credentials.
    """

    async def provider() -> dict[str, str]:
        return await builder.build_env(client, tunnel_path, workspace, use_agent_socket)

    return provider
