"""Local ssh-agent discovery and startup.

Agent forwarding lets git inside the workspace use the caller's local keys.
"""

from __future__ import annotations

import os
import re
from collections.abc import Mapping
from pathlib import Path
from subprocess import CalledProcessError

from anyio import run_process
from loguru import logger

SSH_AGENT_SOCKET_VARIABLE = "SSH_AUTH_SOCK"

_SOCKET_PATTERN = re.compile(rf"{SSH_AGENT_SOCKET_VARIABLE}=([^;\s]+);")


class SshAgentError(RuntimeError):
    """The local ssh-agent could not be started or located."""


async def start_ssh_agent(env: Mapping[str, str] | None = None) -> str:
    """Return the socket path of a running ssh-agent, starting one if needed.

    An existing ``SSH_AUTH_SOCK`` is reused when its socket is present.
    """
    env = os.environ if env is None else env
    existing = env.get(SSH_AGENT_SOCKET_VARIABLE)
    if existing and Path(existing).exists():
        return existing

    logger.info("Starting ssh-agent")
    try:
        result = await run_process(["ssh-agent", "-s"])
    except (OSError, CalledProcessError) as exc:
        msg = f"Failed to start ssh-agent: {exc}"
        raise SshAgentError(msg) from exc

    output = result.stdout.decode("utf-8", errors="replace")
    match = _SOCKET_PATTERN.search(output)
    if match is None:
        msg = f"ssh-agent did not report a socket path: {output.strip()!r}"
        raise SshAgentError(msg)

    socket_path = match.group(1)
    logger.debug("ssh-agent listening on {}", socket_path)
    return socket_path
