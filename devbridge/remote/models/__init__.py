"""Data models for remote workspace connections."""

from devbridge.remote.models.identity import (
    AccessDetails,
    AccountMetadata,
    Identity,
    Session,
)
from devbridge.remote.models.workspace import (
    AnnotatedRepo,
    BoundRepository,
    EnvironmentStatus,
    OrganizationRef,
    ProjectRef,
    RepoRecord,
    WorkspaceId,
    WorkspaceSummary,
)

__all__ = [
    # Identity
    "AccessDetails",
    "AccountMetadata",
    # Workspace
    "AnnotatedRepo",
    "BoundRepository",
    "EnvironmentStatus",
    "Identity",
    "OrganizationRef",
    "ProjectRef",
    "RepoRecord",
    "Session",
    "WorkspaceId",
    "WorkspaceSummary",
]
