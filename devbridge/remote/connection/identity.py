"""Resolve the workspace this process is running in.

Inside a managed workspace the environment client exposes an ARN whose
trailing path segment looks like::

    organization/<GUID>/project/<GUID>/development-workspace/<GUID>

Only the workspace id is taken from the ARN.  Organization and project names
come from the ambient configuration, since the ARN carries GUIDs rather than
the names the remote API expects.

Running outside a managed workspace is the normal case and yields ``None``;
a malformed ARN or missing context is a misconfiguration and raises.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

from loguru import logger

from devbridge.remote.settings import DevbridgeSettings, get_settings

if TYPE_CHECKING:
    from devbridge.remote.models.workspace import WorkspaceSummary
    from devbridge.remote.protocols import EnvironmentClient, RemoteClient

_WORKSPACE_PATTERN = re.compile(r"development-workspace/([\w\-]+)")

# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class ArnParseError(ValueError):
    """Resource identifier is not a workspace ARN."""


class WorkspaceContextError(LookupError):
    """Organization or project name missing from the ambient configuration."""


class DevfileLocationError(LookupError):
    """No root directory or devfile location available."""


# ---------------------------------------------------------------------------
# Models
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ConnectedWorkspace:
    """Resolved workspace paired with the client that reported it."""

    summary: WorkspaceSummary
    environment_client: EnvironmentClient


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def parse_workspace_id(arn: str) -> str:
    """Extract the workspace id from a workspace ARN.

    Raises ``ArnParseError`` if the ARN has no trailing path segment or the
    segment has no ``development-workspace/<id>`` part.
    """
    path = arn.split(":")[-1]
    if not path:
        msg = f'Workspace ARN "{arn}" did not contain a path segment'
        raise ArnParseError(msg)

    match = _WORKSPACE_PATTERN.search(path)
    if match is None:
        msg = f'Unable to parse workspace id from ARN "{arn}"'
        raise ArnParseError(msg)
    return match.group(1)


async def get_connected_workspace(
    client: RemoteClient,
    environment_client: EnvironmentClient,
    *,
    settings: DevbridgeSettings | None = None,
) -> ConnectedWorkspace | None:
    """Look up the workspace described by ``environment_client``.

    Returns ``None`` when not running in a managed workspace.

    Raises
    ------
    ArnParseError:
        The ARN is malformed.
    WorkspaceContextError:
        Organization or project name is not configured.
    """
    arn = environment_client.arn
    if not arn or not environment_client.is_managed_workspace():
        return None

    workspace_id = parse_workspace_id(arn)

    settings = settings or get_settings()
    organization_name = settings.organization_name
    project_name = settings.project_name
    if not organization_name or not project_name:
        msg = "No project or organization name found"
        raise WorkspaceContextError(msg)

    summary = await client.get_workspace(
        organization_name=organization_name,
        project_name=project_name,
        id=workspace_id,
    )
    logger.debug("Resolved connected workspace {} ({}/{})", workspace_id, organization_name, project_name)
    return ConnectedWorkspace(summary=summary, environment_client=environment_client)


async def get_devfile_location(
    environment_client: EnvironmentClient,
    root: Path | None = None,
    *,
    settings: DevbridgeSettings | None = None,
) -> Path:
    """Absolute path of the workspace devfile.

    ``root`` falls back to the configured ``workspace_root``.
    """
    if root is None:
        configured = (settings or get_settings()).workspace_root
        root = Path(configured) if configured else None
    if root is None:
        msg = "No root directory or workspace folder found"
        raise DevfileLocationError(msg)

    status = await environment_client.get_status()
    if not status.location:
        msg = "Devfile location was not found"
        raise DevfileLocationError(msg)

    return root / status.location
