"""
Shared pytest fixtures for Gatehouse tests

Each test gets its own file-backed SQLite database under tmp_path.
"""

import json

import pytest

from gatehouse.managers import DatabaseManager, ReconciliationManager
from gatehouse.models.config import GatehouseConfig


SAMPLE_CONFIG = {
    "permissions": [
        {"create user": {"slug": "create-user", "description": "Ability to create new user"}},
        "read user",
        {"update user": {"description": "Ability to update user"}},
        {"delete user": {"slug": "delete-user"}},
    ],
    "roles": {
        "admin": {
            "name": "Administrator",
            "permissions": ["create", "read", "update", "delete"],
        },
        "editor": {
            "name": "Editor",
            "permissions": ["create", "read", "update"],
        },
        "viewer": {
            "name": "Viewer",
            "permissions": ["read"],
        },
    },
}


@pytest.fixture
def db_manager(tmp_path):
    """DatabaseManager with all tables created"""
    manager = DatabaseManager(f"sqlite:///{tmp_path / 'gatehouse.db'}")
    manager.InitializeDatabase()
    yield manager
    manager.Dispose()


@pytest.fixture
def session(db_manager):
    session = db_manager.GetSession()
    yield session
    session.close()


@pytest.fixture
def reconciler(db_manager):
    return ReconciliationManager(db_manager)


@pytest.fixture
def sample_config():
    return GatehouseConfig.FromDict(SAMPLE_CONFIG)


@pytest.fixture
def config_file(tmp_path):
    """SAMPLE_CONFIG written to a JSON file"""
    path = tmp_path / "gatehouse.json"
    path.write_text(json.dumps(SAMPLE_CONFIG), encoding="utf-8")
    return path
