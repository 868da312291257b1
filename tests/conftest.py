"""Shared test fixtures.

Settings are read from ``DEVBRIDGE_*`` environment variables, so every test
starts from a clean environment and an empty settings cache.
"""

from __future__ import annotations

import os
from collections.abc import Iterator

import pytest

from devbridge.remote.settings import _get_settings_cached


@pytest.fixture(autouse=True)
def clean_settings(monkeypatch: pytest.MonkeyPatch, tmp_path) -> Iterator[None]:
    """Drop ambient DEVBRIDGE_* variables and point storage at tmp_path."""
    for key in list(os.environ):
        if key.upper().startswith("DEVBRIDGE_"):
            monkeypatch.delenv(key)
    monkeypatch.setenv("DEVBRIDGE_STORAGE_ROOT", str(tmp_path / "storage"))
    monkeypatch.chdir(tmp_path)
    _get_settings_cached.cache_clear()
    yield
    _get_settings_cached.cache_clear()
