"""Join repository listings with the workspaces that have them checked out."""

from __future__ import annotations

from collections.abc import AsyncIterator
from typing import TYPE_CHECKING
from urllib.parse import quote

from devbridge.remote.connection.collection import AsyncCollection
from devbridge.remote.models.workspace import AnnotatedRepo
from devbridge.remote.settings import get_settings

if TYPE_CHECKING:
    from devbridge.remote.models.workspace import RepoRecord, WorkspaceSummary
    from devbridge.remote.protocols import RemoteClient

WORKSPACE_RESOURCE = "env"


def workspace_key(workspace: WorkspaceSummary) -> str:
    """Join key of a workspace: its first bound repository."""
    return f"{workspace.org.name}.{workspace.project.name}.{workspace.repositories[0].repository_name}"


def repo_key(repo: RepoRecord) -> str:
    return f"{repo.org}.{repo.project}.{repo.name}"


def associate_workspaces(
    client: RemoteClient,
    repos: AsyncCollection[RepoRecord],
) -> AsyncCollection[AnnotatedRepo]:
    """Annotate each repository with the workspace bound to it, if any.

    The workspace listing is drained completely before the first repository is
    produced; repositories themselves stay lazy.  Workspaces sharing a key
    resolve to the one listed last.
    """

    async def _gen() -> AsyncIterator[AnnotatedRepo]:
        workspaces = await (
            AsyncCollection(lambda: client.list_resources(WORKSPACE_RESOURCE))
            .flatten()
            .filter(lambda ws: len(ws.repositories) > 0)
            .to_map(workspace_key)
        )

        async for repo in repos:
            yield AnnotatedRepo.model_validate({**repo.model_dump(), "workspace": workspaces.get(repo_key(repo))})

    return AsyncCollection(_gen)


def to_git_uri(username: str, token: str, repo: RepoRecord, *, git_hostname: str | None = None) -> str:
    """HTTPS clone URL with embedded credentials.

    ``git_hostname`` falls back to the configured ``git_hostname`` setting.
    """
    git_hostname = git_hostname or get_settings().git_hostname
    credentials = f"{quote(username, safe='')}:{quote(token, safe='')}"
    return f"https://{credentials}@{git_hostname}/v1/{repo.org}/{repo.project}/{repo.name}"
