from pathlib import Path

import pytest
from click.testing import CliRunner

from devbridge.cli import main


@pytest.fixture(autouse=True)
def no_log_setup(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep loguru sinks away from CliRunner's temporary streams."""
    monkeypatch.setattr("devbridge.remote.log.setup_logging", lambda level: None)


def test_paths(tmp_path: Path) -> None:
    result = CliRunner().invoke(main, ["paths", "ws-1"])

    assert result.exit_code == 0, result.output
    storage = tmp_path / "storage"
    assert f"token: {storage / 'devenv.ws-1.token'}" in result.output
    assert f"log:   {storage / 'devenv.ws-1.log'}" in result.output
    assert "host:  devbridge-ws-1" in result.output


def test_parse_arn() -> None:
    result = CliRunner().invoke(main, ["parse-arn", "arn:x:y:z:org/o/development-workspace/abc-123"])

    assert result.exit_code == 0
    assert result.output.strip() == "abc-123"


def test_parse_arn_invalid() -> None:
    result = CliRunner().invoke(main, ["parse-arn", "arn:x:y:z:org/p1"])

    assert result.exit_code == 1
    assert "Unable to parse workspace id" in result.output


def test_cache_token(tmp_path: Path) -> None:
    result = CliRunner().invoke(main, ["cache-token", "ws-1"], input="secret-token\n")

    assert result.exit_code == 0, result.output
    assert (tmp_path / "storage" / "devenv.ws-1.token").read_text(encoding="utf-8") == "secret-token"


def test_cache_token_requires_input() -> None:
    result = CliRunner().invoke(main, ["cache-token", "ws-1"], input="")

    assert result.exit_code == 1
    assert "No token provided" in result.output
