"""
Gatehouse - Configuration Manager

Handles loading the roles/permissions configuration from a JSON file and
validating it into an immutable GatehouseConfig.

The configuration file location is taken from the constructor argument, the
GATEHOUSE_CONFIG environment variable, or defaults to gatehouse.json in the
current working directory.
"""

import importlib
import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional

from pydantic import ValidationError

from gatehouse.exceptions import ConfigurationMissingError
from gatehouse.models.config import GatehouseConfig, TableNames

# Configure logging
logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "GATEHOUSE_CONFIG"
DEFAULT_CONFIG_FILE = "gatehouse.json"
DEFAULT_USER_MODEL = "gatehouse.models.database.user.User"

# Default configuration values
DEFAULT_CONFIG = {
    "permissions": [],
    "roles": {},
    "tables": {
        "roles": "roles",
        "permissions": "permissions",
        "role_user": "role_user",
        "permission_role": "permission_role",
        "users": "users",
    },
    "user_model": DEFAULT_USER_MODEL,
    "database_url": "sqlite:///database/gatehouse.db",
    "log_level": "INFO",
}


def GetConfigPath(config_path: Optional[str] = None) -> Path:
    """
    Determine which configuration file to use

    Priority: explicit argument > GATEHOUSE_CONFIG > ./gatehouse.json
    """
    if config_path:
        return Path(config_path)
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        return Path(env_path)
    return Path.cwd() / DEFAULT_CONFIG_FILE


class ConfigManager:
    """
    Manages library configuration.

    Responsibilities:
    - Load gatehouse.json (or the file named by GATEHOUSE_CONFIG)
    - Merge missing keys with DEFAULT_CONFIG
    - Validate the result into a GatehouseConfig
    """

    def __init__(self, config_path: Optional[str] = None):
        """
        Initialize configuration manager

        Args:
            config_path: Optional explicit path to the JSON configuration file
        """
        self.config_file = GetConfigPath(config_path)
        self.config: Dict[str, Any] = {}

    def load_config(self) -> GatehouseConfig:
        """
        Load configuration from the JSON file.
        Falls back to defaults if the file doesn't exist.

        Returns:
            GatehouseConfig: Validated configuration

        Raises:
            ConfigurationMissingError: If the file cannot be parsed or validated
        """
        if self.config_file.exists():
            logger.debug(f"Loading configuration from {self.config_file}")
            try:
                with open(self.config_file, 'r', encoding='utf-8') as f:
                    self.config = json.load(f)
            except (OSError, json.JSONDecodeError) as e:
                raise ConfigurationMissingError(
                    f"Could not read configuration file {self.config_file}: {e}"
                ) from e
            # Merge with defaults for any missing keys
            for key, value in DEFAULT_CONFIG.items():
                if key not in self.config:
                    self.config[key] = value
            logger.info(f"Configuration loaded from {self.config_file}")
        else:
            logger.warning(f"Configuration file not found at {self.config_file}, using defaults")
            self.config = json.loads(json.dumps(DEFAULT_CONFIG))

        try:
            return GatehouseConfig.FromDict(self.config)
        except (ValidationError, ValueError) as e:
            raise ConfigurationMissingError(f"Invalid configuration in {self.config_file}: {e}") from e

    def get(self, key: str, default=None) -> Any:
        """
        Get a raw configuration value.

        Args:
            key: Configuration key
            default: Default value if key not found

        Returns:
            Configuration value
        """
        return self.config.get(key, default)


def GetTableNames() -> TableNames:
    """
    Resolve table names for the database models

    Read once when the models are imported. Only the "tables" section of the
    configuration file is consulted so a broken roles section cannot prevent
    the models from loading.
    """
    config_file = GetConfigPath()
    if not config_file.exists():
        return TableNames()
    try:
        with open(config_file, 'r', encoding='utf-8') as f:
            tables = json.load(f).get("tables") or {}
        return TableNames(**tables)
    except (OSError, json.JSONDecodeError, ValidationError, AttributeError) as e:
        logger.warning(f"Ignoring table names from {config_file}: {e}")
        return TableNames()


def ResolveUserModel(dotted_path: str):
    """
    Import the principal model named by a dotted path

    Args:
        dotted_path: e.g. "gatehouse.models.database.user.User"

    Returns:
        The model class

    Raises:
        ConfigurationMissingError: If the path cannot be imported
    """
    module_path, _, class_name = dotted_path.rpartition(".")
    if not module_path:
        raise ConfigurationMissingError(f"Invalid user_model path: '{dotted_path}'")
    try:
        module = importlib.import_module(module_path)
        return getattr(module, class_name)
    except (ImportError, AttributeError) as e:
        raise ConfigurationMissingError(f"Cannot import user_model '{dotted_path}': {e}") from e
