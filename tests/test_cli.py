"""
Tests for the gatehouse command line interface
"""

import json
import logging
import sys

import pytest
from sqlalchemy import create_engine, inspect

from gatehouse import cli
from gatehouse.config import CONFIG_ENV_VAR
from gatehouse.exceptions import StorageFailureError
from gatehouse.managers import DatabaseManager, ReconciliationManager
from gatehouse.models.database import Permission, Role


@pytest.fixture(autouse=True)
def reset_logging():
    """The CLI reconfigures the root logger; restore it afterwards"""
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    yield
    for handler in root.handlers[:]:
        if handler not in handlers:
            root.removeHandler(handler)
            handler.close()
    for handler in handlers:
        if handler not in root.handlers:
            root.addHandler(handler)
    root.setLevel(level)


@pytest.fixture(autouse=True)
def restore_config_env(monkeypatch):
    """main() exports --config as GATEHOUSE_CONFIG"""
    monkeypatch.setenv(CONFIG_ENV_VAR, "")


@pytest.fixture
def database_url(tmp_path):
    return f"sqlite:///{tmp_path / 'cli.db'}"


def run(command, config_file, database_url, *extra):
    return cli.main([command, "--config", str(config_file), "--database-url", database_url, *extra])


def count_rows(database_url):
    manager = DatabaseManager(database_url)
    session = manager.GetSession()
    try:
        return session.query(Role).count(), session.query(Permission).count()
    finally:
        session.close()
        manager.Dispose()


def test_permissions_seed(config_file, database_url, capsys):
    assert run("permissions:seed", config_file, database_url) == cli.EXIT_SUCCESS

    output = capsys.readouterr().out
    assert "Permissions seeding completed" in output
    assert "Added: 4 new permissions" in output
    assert count_rows(database_url) == (0, 4)


def test_permissions_sync(config_file, database_url, capsys):
    run("permissions:seed", config_file, database_url)
    capsys.readouterr()

    assert run("permissions:sync", config_file, database_url) == cli.EXIT_SUCCESS

    output = capsys.readouterr().out
    assert "Deleted: 4 permissions" in output
    assert "Total: 4 permissions" in output


def test_roles_seed_then_sync(config_file, database_url, capsys):
    assert run("roles:seed", config_file, database_url) == cli.EXIT_SUCCESS
    assert "Added: 3" in capsys.readouterr().out

    assert run("roles:sync", config_file, database_url) == cli.EXIT_SUCCESS
    output = capsys.readouterr().out
    assert "Sync completed" in output
    assert "Deleted: 3" in output
    assert count_rows(database_url) == (3, 4)


def test_missing_roles_is_config_error(tmp_path, database_url, capsys):
    path = tmp_path / "empty.json"
    path.write_text(json.dumps({"permissions": ["read user"], "roles": {}}), encoding="utf-8")

    assert run("roles:sync", path, database_url) == cli.EXIT_CONFIG_ERROR
    assert "No roles found in configuration" in capsys.readouterr().out


def test_invalid_json_is_config_error(tmp_path, database_url, capsys):
    path = tmp_path / "broken.json"
    path.write_text("{not json", encoding="utf-8")

    assert run("permissions:seed", path, database_url) == cli.EXIT_CONFIG_ERROR
    assert "[ERROR]" in capsys.readouterr().out


def test_storage_failure_exit_code(config_file, database_url, monkeypatch, capsys):
    def failing_seed(self, config):
        raise StorageFailureError("Permissions seed failed: database is locked")

    monkeypatch.setattr(ReconciliationManager, "SeedPermissions", failing_seed)

    assert run("permissions:seed", config_file, database_url) == cli.EXIT_FAILURE
    assert "database is locked" in capsys.readouterr().out


def test_log_file_written(config_file, database_url, tmp_path):
    log_file = tmp_path / "logs" / "gatehouse.log"

    assert run("permissions:seed", config_file, database_url, "--log-file", str(log_file)) == cli.EXIT_SUCCESS

    for handler in logging.getLogger().handlers:
        handler.flush()
    assert "Permissions seed completed" in log_file.read_text(encoding="utf-8")


def test_unknown_command_rejected(config_file, database_url):
    with pytest.raises(SystemExit):
        run("users:sync", config_file, database_url)


def test_totals_printed(config_file, database_url, capsys):
    assert run("roles:seed", config_file, database_url) == cli.EXIT_SUCCESS

    assert "Totals: 3 roles, 4 permissions" in capsys.readouterr().out


def custom_tables_config(tmp_path):
    path = tmp_path / "custom.json"
    path.write_text(json.dumps({
        "roles": {"admin": {"permissions": ["read"]}},
        "tables": {"roles": "acl_roles", "permission_role": "acl_permission_role"},
    }), encoding="utf-8")
    return path


def test_table_names_differing_from_loaded_models_rejected(tmp_path, database_url, capsys):
    path = custom_tables_config(tmp_path)

    assert run("roles:seed", path, database_url) == cli.EXIT_CONFIG_ERROR
    assert "Table names in" in capsys.readouterr().out
    assert not (tmp_path / "cli.db").exists()


def test_config_table_names_used_by_fresh_process(pytester, tmp_path, database_url):
    path = custom_tables_config(tmp_path)

    result = pytester.run(
        sys.executable, "-m", "gatehouse", "roles:seed",
        "--config", str(path), "--database-url", database_url,
    )

    assert result.ret == cli.EXIT_SUCCESS
    engine = create_engine(database_url)
    try:
        tables = set(inspect(engine).get_table_names())
    finally:
        engine.dispose()
    assert {"acl_roles", "acl_permission_role"} <= tables
    assert "roles" not in tables
