"""Client configuration loaded from DEVBRIDGE_* environment variables."""

from __future__ import annotations

from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class DevbridgeSettings(BaseSettings):
    """Devbridge connection settings.

    All fields are read from environment variables with the ``DEVBRIDGE_``
    prefix.  For example, ``DEVBRIDGE_LOG_LEVEL=DEBUG`` maps to ``log_level``.

    Credentials are **not** managed here -- sessions come from the account
    registry and bearer tokens are cached by the credential store.
    """

    model_config = SettingsConfigDict(
        env_prefix="DEVBRIDGE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # -- Logging ---------------------------------------------------------------
    log_level: str = "INFO"

    # -- Local storage ---------------------------------------------------------
    storage_root: str = "~/.devbridge"
    """Directory holding cached bearer tokens and tunnel log files."""

    token_prefix: str = "devenv"
    """File name prefix: ``{storage_root}/{token_prefix}.{workspace_id}.token``."""

    # -- Remote service --------------------------------------------------------
    endpoint: str = "https://api.devbridge.local"
    """Remote API endpoint handed to the tunnel process."""

    git_hostname: str = "git.devbridge.local"
    host_name_prefix: str = "devbridge-"
    """Prefix of the SSH host alias generated for each workspace."""

    # -- Ambient workspace context ---------------------------------------------
    organization_name: str | None = None
    project_name: str | None = None
    """Set inside a managed workspace; required to resolve its identity."""

    workspace_root: str | None = None
    """Local checkout root used to locate the devfile."""

    # -- Helpers ---------------------------------------------------------------

    def storage_path(self) -> Path:
        """Return the storage root with ``~`` expanded."""
        return Path(self.storage_root).expanduser()


def get_settings() -> DevbridgeSettings:
    """Return a cached settings instance.

    Reads from environment variables and ``.env`` on first call, then returns
    the same object.  Call ``_get_settings_cached.cache_clear()`` in tests to
    force a re-read after overriding env vars.
    """
    return _get_settings_cached()


def _get_settings_cached() -> DevbridgeSettings:
    """Inner function wrapped by lru_cache (allows type-safe cache_clear)."""
    return DevbridgeSettings()


# Apply lru_cache at runtime so the function is only called once.
from functools import lru_cache  # noqa: E402

_get_settings_cached = lru_cache(maxsize=1)(_get_settings_cached)
