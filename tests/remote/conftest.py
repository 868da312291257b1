"""In-memory fakes for the external collaborator protocols."""

from __future__ import annotations

from collections.abc import AsyncIterator, Callable

import pytest

from devbridge.remote.models.identity import AccessDetails, AccountMetadata, Identity, Session
from devbridge.remote.models.workspace import (
    EnvironmentStatus,
    OrganizationRef,
    ProjectRef,
    WorkspaceSummary,
)
from devbridge.remote.store.local import LocalCredentialStore


class FakeRemoteClient:
    def __init__(
        self,
        *,
        connected: bool = True,
        token: str = "bearer-1",
        region_code: str = "us-west-2",
        pages: list[list[WorkspaceSummary]] | None = None,
    ) -> None:
        self.connected = connected
        self.token = token
        self.region_code = region_code
        self.pages = pages or []
        self.credentials: tuple[AccessDetails, AccountMetadata] | None = None
        self.list_calls = 0
        self.lookups: list[dict[str, str]] = []

    async def set_credentials(self, access_details: AccessDetails, metadata: AccountMetadata) -> None:
        self.credentials = (access_details, metadata)
        self.connected = True

    async def _pages(self) -> AsyncIterator[list[WorkspaceSummary]]:
        self.list_calls += 1
        for page in self.pages:
            yield page

    def list_resources(self, kind: str) -> AsyncIterator[list[WorkspaceSummary]]:
        assert kind == "env"
        return self._pages()

    async def get_workspace(self, *, organization_name: str, project_name: str, id: str) -> WorkspaceSummary:  # noqa: A002
        self.lookups.append({"organization_name": organization_name, "project_name": project_name, "id": id})
        return WorkspaceSummary(
            id=id,
            org=OrganizationRef(name=organization_name),
            project=ProjectRef(name=project_name),
        )


class FakeRegistry:
    def __init__(
        self,
        accounts: list[Identity],
        *,
        failing: set[str] | None = None,
        active: Session | None = None,
    ) -> None:
        self.accounts = accounts
        self.failing = failing or set()
        self.active = active
        self.attempts: list[str] = []

    def list_accounts(self) -> list[Identity]:
        return list(self.accounts)

    async def create_session(self, identity: Identity) -> Session:
        self.attempts.append(identity.id)
        if identity.id in self.failing:
            msg = f"{identity.label} rejected"
            raise PermissionError(msg)
        return Session(
            id=f"session-{identity.id}",
            access_details=AccessDetails(access_token=f"token-{identity.id}"),
            account_details=identity,
        )

    def get_active_session(self) -> Session | None:
        return self.active


class FakeEnvironmentClient:
    def __init__(self, arn: str | None = None, *, managed: bool = True, location: str | None = None) -> None:
        self.arn = arn
        self.managed = managed
        self.location = location

    def is_managed_workspace(self) -> bool:
        return self.managed

    async def get_status(self) -> EnvironmentStatus:
        return EnvironmentStatus(status="RUNNING", location=self.location)


@pytest.fixture
def make_client() -> Callable[..., FakeRemoteClient]:
    return FakeRemoteClient


@pytest.fixture
def make_registry() -> Callable[..., FakeRegistry]:
    return FakeRegistry


@pytest.fixture
def make_env_client() -> Callable[..., FakeEnvironmentClient]:
    return FakeEnvironmentClient


@pytest.fixture
def store(tmp_path) -> LocalCredentialStore:
    return LocalCredentialStore(tmp_path / "storage", prefix="devenv")
