"""Session auto-selection and credentialed client construction.

``auto_connect`` walks the identities marked auto-connectable, in registry
order, and returns the first session that authenticates.  A failing identity
is expected (expired refresh token, revoked account) and must not stop the
next one from being tried, so per-identity errors are logged and dropped here
and nowhere else.  Exhausting the list yields ``None``, not an error.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING

from loguru import logger

if TYPE_CHECKING:
    from devbridge.remote.models.identity import Session
    from devbridge.remote.protocols import AccountRegistry, ClientConstructor, RemoteClient


async def auto_connect(registry: AccountRegistry) -> Session | None:
    """Return the first session obtainable from an auto-connectable identity."""
    candidates = [account for account in registry.list_accounts() if account.metadata.can_auto_connect]

    for account in candidates:
        logger.info("Trying to auto-connect with user: {}", account.label)
        try:
            session = await registry.create_session(account)
        except Exception as exc:  # noqa: BLE001
            logger.debug("Unable to auto-connect with user {!r}: {!r}", account.label, exc)
            continue

        logger.info("Auto-connected with user: {}", account.label)
        return session

    return None


def create_client_factory(
    registry: AccountRegistry,
    client_constructor: ClientConstructor,
) -> Callable[[], Awaitable[RemoteClient]]:
    """Wrap ``client_constructor`` so every client comes back credentialed if possible.

    The active session wins; otherwise ``auto_connect`` is tried.  When no
    session can be established the client is returned uncredentialed -- check
    ``client.connected`` before using it.
    """

    async def factory() -> RemoteClient:
        client = await client_constructor()
        session = registry.get_active_session() or await auto_connect(registry)

        if session is not None:
            await client.set_credentials(session.access_details, session.account_details.metadata)
        else:
            logger.debug("No session available; returning disconnected client")

        return client

    return factory
