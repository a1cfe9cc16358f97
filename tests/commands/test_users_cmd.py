"""Tests for the add-user, remove-user and change-password CLI commands."""

from __future__ import annotations

from pathlib import Path

import pytest
from click.testing import CliRunner, Result
from sqlalchemy import create_engine, select

from mailctl.cli import cli
from mailctl.infrastructure.database.schema import virtual_users


def _users(db_path: Path) -> dict[str, str]:
    engine = create_engine(f"sqlite:///{db_path}")
    try:
        with engine.connect() as conn:
            rows = conn.execute(select(virtual_users.c.email, virtual_users.c.password)).all()
    finally:
        engine.dispose()
    return {row.email: row.password for row in rows}


def _invoke(cli_runner: CliRunner, db_path: Path, *args: str) -> Result:
    return cli_runner.invoke(cli, [*args, "-database", str(db_path), "-domain", "test.com"])


@pytest.mark.usefixtures("_sqlite_cli")
class TestAddUserCommand:
    def test_add_user(self, cli_runner: CliRunner, db_path: Path) -> None:
        result = _invoke(cli_runner, db_path, "add-user", "-name", "test1", "-password", "pass123")
        assert result.exit_code == 0, result.output
        assert "added successfully" in result.output
        assert result.output.strip() == "User test1@test.com added successfully"
        assert "test1@test.com" in _users(db_path)

    def test_double_dash_flags(self, cli_runner: CliRunner, db_path: Path) -> None:
        result = cli_runner.invoke(
            cli,
            ["add-user", "--name", "dd", "--password", "x", "--database", str(db_path), "--domain", "test.com"],
        )
        assert result.exit_code == 0, result.output
        assert "dd@test.com" in _users(db_path)

    def test_missing_name(self, cli_runner: CliRunner, db_path: Path) -> None:
        result = _invoke(cli_runner, db_path, "add-user", "-password", "pass123")
        assert result.exit_code == 1
        assert result.output.strip() == "-name <username> is required"
        assert _users(db_path) == {}

    def test_missing_password(self, cli_runner: CliRunner, db_path: Path) -> None:
        result = _invoke(cli_runner, db_path, "add-user", "-name", "test5")
        assert result.exit_code == 1
        assert "-password <password> is required" in result.output

    def test_too_many_at(self, cli_runner: CliRunner, db_path: Path) -> None:
        result = _invoke(cli_runner, db_path, "add-user", "-name", "a@b@c", "-password", "x")
        assert result.exit_code == 1
        assert "must not contain more than one '@'" in result.output

    def test_validation_before_connect(self, cli_runner: CliRunner, tmp_path: Path) -> None:
        missing = tmp_path / "missing" / "nonexistent_db"
        result = cli_runner.invoke(cli, ["add-user", "-password", "x", "-database", str(missing)])
        assert result.exit_code == 1
        assert result.output.strip() == "-name <username> is required"

    def test_nonexistent_database(self, cli_runner: CliRunner, tmp_path: Path) -> None:
        missing = tmp_path / "missing" / "nonexistent_db"
        result = cli_runner.invoke(
            cli, ["add-user", "-name", "test6", "-password", "pass123", "-database", str(missing)]
        )
        assert result.exit_code != 0
        assert "Couldn't connect to database" in result.output

    def test_unknown_domain(self, cli_runner: CliRunner, db_path: Path) -> None:
        result = cli_runner.invoke(
            cli,
            ["add-user", "-name", "x", "-password", "y", "-database", str(db_path), "-domain", "nope.org"],
        )
        assert result.exit_code == 1
        assert result.output.strip() == "Couldn't find domain nope.org"

    def test_default_domain_from_env(
        self, cli_runner: CliRunner, db_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("MAILCTL_MAIL__DEFAULT_DOMAIN", "test.com")
        result = cli_runner.invoke(
            cli, ["add-user", "-name", "envuser", "-password", "x", "-database", str(db_path)]
        )
        assert result.exit_code == 0, result.output
        assert "envuser@test.com" in _users(db_path)

    def test_duplicate(self, cli_runner: CliRunner, db_path: Path) -> None:
        _invoke(cli_runner, db_path, "add-user", "-name", "dup", "-password", "x")
        result = _invoke(cli_runner, db_path, "add-user", "-name", "dup", "-password", "y")
        assert result.exit_code == 1
        assert "User dup@test.com already exists" in result.output

    def test_bad_port_is_usage_error(self, cli_runner: CliRunner, db_path: Path) -> None:
        result = _invoke(cli_runner, db_path, "add-user", "-name", "x", "-password", "y", "-port", "abc")
        assert result.exit_code == 2

    def test_unknown_flag_is_usage_error(self, cli_runner: CliRunner, db_path: Path) -> None:
        result = _invoke(cli_runner, db_path, "add-user", "-name", "x", "-alias", "y")
        assert result.exit_code == 2

    def test_verbose_logs_to_stderr(self, cli_runner: CliRunner, db_path: Path) -> None:
        result = cli_runner.invoke(
            cli,
            ["-v", "--log-json", "add-user", "-name", "v", "-password", "x", "-database", str(db_path), "-domain", "test.com"],
        )
        assert result.exit_code == 0, result.output
        assert "User v@test.com added successfully" in result.stdout


@pytest.mark.usefixtures("_sqlite_cli")
class TestRemoveUserCommand:
    def test_add_then_remove(self, cli_runner: CliRunner, db_path: Path) -> None:
        _invoke(cli_runner, db_path, "add-user", "-name", "test2", "-password", "pass123")
        result = _invoke(cli_runner, db_path, "remove-user", "-name", "test2")
        assert result.exit_code == 0, result.output
        assert result.output.strip() == "User test2@test.com removed successfully"
        assert _users(db_path) == {}

    def test_not_found(self, cli_runner: CliRunner, db_path: Path) -> None:
        result = _invoke(cli_runner, db_path, "remove-user", "-name", "test2")
        assert result.exit_code == 1
        assert result.output.strip() == "User test2@test.com not found"

    def test_add_remove_remove(self, cli_runner: CliRunner, db_path: Path) -> None:
        assert _invoke(cli_runner, db_path, "add-user", "-name", "t", "-password", "p").exit_code == 0
        assert _invoke(cli_runner, db_path, "remove-user", "-name", "t").exit_code == 0
        third = _invoke(cli_runner, db_path, "remove-user", "-name", "t")
        assert third.exit_code == 1
        assert "not found" in third.output

    def test_missing_name(self, cli_runner: CliRunner, db_path: Path) -> None:
        result = _invoke(cli_runner, db_path, "remove-user")
        assert result.exit_code == 1
        assert "-name <username> is required" in result.output

    def test_rejects_password_flag(self, cli_runner: CliRunner, db_path: Path) -> None:
        result = _invoke(cli_runner, db_path, "remove-user", "-name", "x", "-password", "y")
        assert result.exit_code == 2


@pytest.mark.usefixtures("_sqlite_cli")
class TestChangePasswordCommand:
    def test_change_password(self, cli_runner: CliRunner, db_path: Path) -> None:
        _invoke(cli_runner, db_path, "add-user", "-name", "test3", "-password", "pass123")
        before = _users(db_path)["test3@test.com"]

        result = _invoke(cli_runner, db_path, "change-password", "-name", "test3", "-password", "newpass")
        assert result.exit_code == 0, result.output
        assert "changed successfully" in result.output
        assert _users(db_path)["test3@test.com"] != before

    def test_not_found(self, cli_runner: CliRunner, db_path: Path) -> None:
        result = _invoke(cli_runner, db_path, "change-password", "-name", "nobody", "-password", "x")
        assert result.exit_code == 1
        assert result.output.strip() == "User nobody@test.com not found"

    def test_missing_password(self, cli_runner: CliRunner, db_path: Path) -> None:
        result = _invoke(cli_runner, db_path, "change-password", "-name", "x")
        assert result.exit_code == 1
        assert "-password <password> is required" in result.output
