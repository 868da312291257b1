"""Unit tests for ssh-agent discovery."""

from __future__ import annotations

from subprocess import CalledProcessError, CompletedProcess
from unittest.mock import AsyncMock, patch

import pytest

from devbridge.remote.connection.agent import SshAgentError, start_ssh_agent

AGENT_OUTPUT = (
    b"SSH_AUTH_SOCK=/tmp/ssh-XXXX/agent.42; export SSH_AUTH_SOCK;\n"
    b"SSH_AGENT_PID=43; export SSH_AGENT_PID;\n"
    b"echo Agent pid 43;\n"
)


async def test_reuses_existing_socket(tmp_path) -> None:
    sock = tmp_path / "agent.sock"
    sock.touch()

    with patch("devbridge.remote.connection.agent.run_process", new=AsyncMock()) as run:
        result = await start_ssh_agent({"SSH_AUTH_SOCK": str(sock)})

    assert result == str(sock)
    run.assert_not_called()


async def test_starts_agent_when_socket_missing(tmp_path) -> None:
    completed = CompletedProcess(["ssh-agent", "-s"], 0, stdout=AGENT_OUTPUT, stderr=b"")

    with patch("devbridge.remote.connection.agent.run_process", new=AsyncMock(return_value=completed)) as run:
        result = await start_ssh_agent({"SSH_AUTH_SOCK": str(tmp_path / "gone.sock")})

    assert result == "/tmp/ssh-XXXX/agent.42"  # noqa: S108
    run.assert_awaited_once_with(["ssh-agent", "-s"])


async def test_agent_failure_raises() -> None:
    error = CalledProcessError(2, ["ssh-agent", "-s"])

    with (
        patch("devbridge.remote.connection.agent.run_process", new=AsyncMock(side_effect=error)),
        pytest.raises(SshAgentError, match="Failed to start"),
    ):
        await start_ssh_agent({})


async def test_agent_binary_missing_raises() -> None:
    with (
        patch("devbridge.remote.connection.agent.run_process", new=AsyncMock(side_effect=FileNotFoundError("ssh-agent"))),
        pytest.raises(SshAgentError),
    ):
        await start_ssh_agent({})


async def test_agent_output_without_socket_raises() -> None:
    completed = CompletedProcess(["ssh-agent", "-s"], 0, stdout=b"echo nothing useful;\n", stderr=b"")

    with (
        patch("devbridge.remote.connection.agent.run_process", new=AsyncMock(return_value=completed)),
        pytest.raises(SshAgentError, match="did not report"),
    ):
        await start_ssh_agent({})
