"""CLI commands (database work patched out)."""

from click.testing import CliRunner

from taskledger.cli import main as cli_main
from taskledger.errors import DuplicateUsername


def test_sweep_sessions(monkeypatch):
    async def fake_sweep():
        return 3

    monkeypatch.setattr(cli_main, "_sweep_sessions", fake_sweep)
    result = CliRunner().invoke(cli_main.cli, ["sweep-sessions"])
    assert result.exit_code == 0
    assert "Removed 3 expired session(s)" in result.output


def test_create_user_duplicate(monkeypatch):
    async def fake_create(username, password):
        raise DuplicateUsername()

    monkeypatch.setattr(cli_main, "_create_user", fake_create)
    result = CliRunner().invoke(
        cli_main.cli, ["create-user", "alice", "--password", "pw1"]
    )
    assert result.exit_code == 1
    assert "Username already taken" in result.output
