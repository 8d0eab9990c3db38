"""Tests for the command line interface."""

import sqlite3
from unittest.mock import patch

import pytest
from typer.testing import CliRunner

from sqlx_codegen.main import app

runner = CliRunner()


class TestGenerateSqlite:
    """Test ``generate sqlite``."""

    def test_generates_files(self, sqlite_path, tmp_path):
        output = tmp_path / "models"
        result = runner.invoke(app, ["generate", "sqlite", "-D", str(sqlite_path), "-o", str(output)])

        assert result.exit_code == 0, result.output
        assert "====== start ======" in result.output
        assert "====== over ======" in result.output
        assert (output / "users.rs").exists()
        assert (output / "mod.rs").exists()

    def test_table_filter(self, sqlite_path, tmp_path):
        output = tmp_path / "models"
        result = runner.invoke(app, [
            "generate", "sqlite", "-D", str(sqlite_path), "-t", "users", "-o", str(output),
        ])

        assert result.exit_code == 0, result.output
        assert sorted(p.name for p in output.iterdir()) == ["mod.rs", "users.rs"]

    def test_unknown_table_reports_empty(self, sqlite_path, tmp_path):
        output = tmp_path / "models"
        result = runner.invoke(app, [
            "generate", "sqlite", "-D", str(sqlite_path), "-t", "missing", "-o", str(output),
        ])

        assert result.exit_code == 0
        assert "tables is empty" in result.output
        assert not output.exists()

    def test_empty_database(self, empty_sqlite_path, tmp_path):
        result = runner.invoke(app, [
            "generate", "sqlite", "-D", str(empty_sqlite_path), "-o", str(tmp_path / "models"),
        ])

        assert result.exit_code == 0
        assert "tables is empty" in result.output
        assert "====== over ======" not in result.output

    def test_missing_file_fails(self, tmp_path):
        result = runner.invoke(app, [
            "generate", "sqlite", "-D", str(tmp_path / "missing.sqlite"), "-o", str(tmp_path),
        ])

        assert result.exit_code == 1
        assert "Connection failed" in result.output

    def test_query_failure_names_stage(self, sqlite_path, tmp_path):
        closed = sqlite3.connect(str(sqlite_path))
        closed.close()

        with patch("sqlx_codegen.commands.generate.open_connection", return_value=closed):
            result = runner.invoke(app, [
                "generate", "sqlite", "-D", str(sqlite_path), "-o", str(tmp_path / "models"),
            ])

        assert result.exit_code == 1
        assert "Introspection failed" in result.output
        assert "[sqlite:tables]" in result.output

    def test_database_is_required(self):
        result = runner.invoke(app, ["generate", "sqlite"])
        assert result.exit_code != 0


class TestGenerateServerDrivers:
    """Test option handling for MySQL and PostgreSQL."""

    @pytest.mark.parametrize("command,port", [("mysql", 3306), ("postgres", 5432)])
    def test_defaults_applied(self, command, port, tmp_path):
        with patch("sqlx_codegen.commands.generate.run_generation") as run_generation:
            result = runner.invoke(app, [
                "generate", command, "-D", "shop", "-u", "app", "-p", "secret", "-o", str(tmp_path),
            ])

        assert result.exit_code == 0, result.output
        spec, path, table_names = run_generation.call_args.args
        assert spec.driver.value == command
        assert spec.host == "localhost"
        assert spec.port == port
        assert spec.password == "secret"
        assert path == str(tmp_path)
        assert table_names == ""

    def test_explicit_host_and_port(self, tmp_path):
        with patch("sqlx_codegen.commands.generate.run_generation") as run_generation:
            runner.invoke(app, [
                "generate", "mysql", "-D", "shop", "-u", "root",
                "-H", "db.internal", "-P", "3307", "-t", "users,orders",
            ])

        spec, path, table_names = run_generation.call_args.args
        assert spec.driver_url() == "mysql://root:@db.internal:3307/shop"
        assert table_names == "users,orders"

    def test_connection_refused(self, tmp_path):
        from sqlx_codegen.errors import ConnectionError

        with patch("sqlx_codegen.commands.generate.open_connection",
                   side_effect=ConnectionError("Error connecting to MySQL: refused")):
            result = runner.invoke(app, [
                "generate", "mysql", "-D", "shop", "-u", "root", "-p", "secret", "-o", str(tmp_path),
            ])

        assert result.exit_code == 1
        assert "refused" in result.output
        assert "secret" not in result.output


class TestInfoCommands:
    """Test ``types`` and ``config``."""

    def test_types_mysql(self):
        result = runner.invoke(app, ["types", "mysql"])
        assert result.exit_code == 0
        assert "TINYINT(1)" in result.output
        assert "(anything else)" in result.output

    def test_types_sqlite(self):
        result = runner.invoke(app, ["types", "sqlite"])
        assert result.exit_code == 0
        assert "DATETIME" in result.output
        assert "TINYINT(1)" not in result.output

    def test_types_unknown_driver(self):
        result = runner.invoke(app, ["types", "oracle"])
        assert result.exit_code != 0

    def test_config(self):
        result = runner.invoke(app, ["config"])
        assert result.exit_code == 0
        assert "Output path" in result.output
        assert "Connect timeout" in result.output
