"""Local filesystem credential store.

Stores one bearer token per workspace as a plain UTF-8 file::

    {storage_root}/{prefix}.{workspace_id}.token

Uses ``anyio.to_thread.run_sync`` for non-blocking file I/O.

Writes are atomic: data is written to a temporary file in the same directory,
then renamed to the target path.  A tunnel process starting concurrently
therefore sees either the previous token or the new one, never a truncated
file.  Repeated writes for the same workspace overwrite; last writer wins.
"""

from __future__ import annotations

import contextlib
import os
import tempfile
from functools import partial
from pathlib import Path

from anyio import to_thread
from loguru import logger


class LocalCredentialStore:
    """Local filesystem implementation of the CredentialStore protocol.

    ``storage_root`` is passed in explicitly (usually from settings) rather
    than read from process-global state.
    """

    def __init__(self, storage_root: str | Path, prefix: str = "devenv") -> None:
        self._root = Path(storage_root)
        self._prefix = prefix

    @property
    def root(self) -> Path:
        return self._root

    # -- Paths -----------------------------------------------------------------

    def location(self, workspace_id: str) -> Path:
        return self._root / f"{self._prefix}.{workspace_id}.token"

    def log_location(self, workspace_id: str) -> Path:
        return self._root / f"{self._prefix}.{workspace_id}.log"

    # -- Write -----------------------------------------------------------------

    async def cache(self, token: str, workspace_id: str) -> None:
        path = self.location(workspace_id)
        await to_thread.run_sync(partial(_atomic_write, path, token))
        logger.debug("Cached bearer token for workspace {} at {}", workspace_id, path)

    # -- Read ------------------------------------------------------------------

    async def read(self, workspace_id: str) -> str:
        return await to_thread.run_sync(partial(_read_file, self.location(workspace_id)))

    # -- Utilities -------------------------------------------------------------

    async def exists(self, workspace_id: str) -> bool:
        return await to_thread.run_sync(self.location(workspace_id).exists)

    async def delete(self, workspace_id: str) -> None:
        await to_thread.run_sync(partial(_unlink, self.location(workspace_id)))


# -- Sync helpers (run in thread pool) -----------------------------------------


def _atomic_write(path: Path, data: str) -> None:
    """Write data atomically: temp file + rename.

    ``mkstemp`` creates the file with mode 0600, which the rename preserves.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_path = tempfile.mkstemp(dir=path.parent, suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(data)
        os.replace(tmp_path, path)
    except BaseException:
        with contextlib.suppress(OSError):
            os.unlink(tmp_path)
        raise


def _read_file(path: Path) -> str:
    return path.read_text(encoding="utf-8")


def _unlink(path: Path) -> None:
    path.unlink(missing_ok=True)
