"""Workspace and repository models.

A workspace is a remote development environment bound to an organization and
project, optionally with one or more source repositories checked out in it.
Summaries are fetched fresh from the remote client on every resolution.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class WorkspaceId(BaseModel):
    """Immutable identity tuple of a remote workspace."""

    model_config = ConfigDict(frozen=True)

    id: str
    organization_name: str
    project_name: str


class OrganizationRef(BaseModel):
    name: str


class ProjectRef(BaseModel):
    name: str


class BoundRepository(BaseModel):
    repository_name: str
    branch_name: str | None = None


class WorkspaceSummary(BaseModel):
    """Full descriptor of a remote workspace."""

    id: str
    org: OrganizationRef
    project: ProjectRef
    repositories: list[BoundRepository] = Field(default_factory=list)
    alias: str | None = None
    status: str | None = None

    @property
    def workspace_id(self) -> WorkspaceId:
        return WorkspaceId(id=self.id, organization_name=self.org.name, project_name=self.project.name)


class RepoRecord(BaseModel):
    """A source repository listed under an organization/project."""

    name: str
    org: str
    project: str


class AnnotatedRepo(RepoRecord):
    """Repository joined with the workspace that has it checked out, if any."""

    workspace: WorkspaceSummary | None = None


class EnvironmentStatus(BaseModel):
    """Status reported by the in-workspace environment client."""

    status: str | None = None
    location: str | None = None
    """Devfile location relative to the workspace root."""
