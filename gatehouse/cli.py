"""
Gatehouse - Command Line Interface

Runs the reconciliation commands against the configured database:

    gatehouse permissions:seed   Add missing permissions
    gatehouse permissions:sync   Delete all permissions and recreate them
    gatehouse roles:seed         Add missing roles, permissions and grants
    gatehouse roles:sync         Delete all roles and recreate them

Configuration is read from --config, GATEHOUSE_CONFIG, or ./gatehouse.json.

Table names are fixed when the database models are imported, so the models
are imported only after --config has been exported as GATEHOUSE_CONFIG.
"""

import argparse
import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import List, Optional

from sqlalchemy.exc import SQLAlchemyError

from gatehouse.config import CONFIG_ENV_VAR, ConfigManager, ResolveUserModel
from gatehouse.exceptions import ConfigurationMissingError, GatehouseError
from gatehouse.models.config import GatehouseConfig

# Exit codes
EXIT_SUCCESS = 0
EXIT_FAILURE = 1
EXIT_CONFIG_ERROR = 2

COMMANDS = ['permissions:seed', 'permissions:sync', 'roles:seed', 'roles:sync']


def setup_cli_logging(log_level: str, log_file: Optional[str] = None):
    """
    Setup logging for CLI mode.

    Args:
        log_level: Level name from configuration
        log_file: Optional log file path (rotated at 10MB, 10 backups kept)
    """
    handlers = [logging.StreamHandler(sys.stderr)]
    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        handlers.append(
            RotatingFileHandler(
                log_file,
                maxBytes=10 * 1024 * 1024,  # 10MB
                backupCount=10,
                encoding='utf-8'
            )
        )

    logging.basicConfig(
        level=getattr(logging, log_level.upper(), logging.INFO),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=handlers,
        force=True,
    )


def print_section(title):
    """Print section header"""
    print()
    print("-" * 70)
    print(f"  {title}")
    print("-" * 70)


# ==================== Commands ====================

def seed_permissions(manager, config: GatehouseConfig):
    print("Seeding permissions...")
    result = manager.SeedPermissions(config)
    print_section("Permissions seeding completed")
    print(f"  - Added: {result.added} new permissions")
    print(f"  - Found: {result.found} existing permissions")


def sync_permissions(manager, config: GatehouseConfig):
    print("Synchronizing permissions...")
    result = manager.SyncPermissions(config)
    print_section("Permissions synchronization completed")
    print(f"  - Deleted: {result.deleted} permissions")
    print(f"  - Total: {result.created} permissions")


def seed_roles(manager, config: GatehouseConfig):
    print("Seeding roles and permissions...")
    result = manager.SeedRoles(config)
    print_section("Roles and permissions seeding completed")
    print("  - Roles:")
    print(f"    * Existing: {result.roles_existing}")
    print(f"    * Added: {result.roles_added}")
    print("  - Permissions:")
    print(f"    * Existing: {result.permissions_existing}")
    print(f"    * Added: {result.permissions_added}")


def sync_roles(manager, config: GatehouseConfig):
    print("Syncing roles and permissions...")
    result = manager.SyncRoles(config)
    print_section("Sync completed")
    print("  - Roles:")
    print(f"    * Deleted: {result.roles_deleted}")
    print(f"    * Added: {result.roles_added}")
    print("  - Permissions:")
    print(f"    * Existing: {result.permissions_existing}")
    print(f"    * Added: {result.permissions_added}")


def print_totals(db_manager):
    session = db_manager.GetSession()
    try:
        counts = db_manager.CountRows(session)
    finally:
        session.close()
    print(f"  - Totals: {counts['roles']} roles, {counts['permissions']} permissions")


COMMAND_HANDLERS = {
    'permissions:seed': seed_permissions,
    'permissions:sync': sync_permissions,
    'roles:seed': seed_roles,
    'roles:sync': sync_roles,
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='gatehouse',
        description='Gatehouse - seed and sync roles and permissions from configuration',
    )
    parser.add_argument('command', choices=COMMANDS,
                        help='Reconciliation command to run')
    parser.add_argument('--config',
                        help='Path to the JSON configuration file (overrides GATEHOUSE_CONFIG)')
    parser.add_argument('--database-url',
                        help='SQLAlchemy database URL (overrides database_url in config)')
    parser.add_argument('--log-file',
                        help='Also write log output to this file')
    return parser


def run_command(command: str, config_path: Optional[str] = None,
                database_url: Optional[str] = None, log_file: Optional[str] = None) -> int:
    """
    Execute one reconciliation command.

    Args:
        command: One of COMMANDS
        config_path: Optional configuration file path
        database_url: Optional database URL override
        log_file: Optional log file path

    Returns:
        Exit code (0 for success, non-zero for failure)
    """
    config_mgr = ConfigManager(config_path)
    try:
        config = config_mgr.load_config()
    except ConfigurationMissingError as e:
        setup_cli_logging("INFO", log_file)
        logging.getLogger(__name__).error(str(e))
        print(f"[ERROR] {e}")
        return EXIT_CONFIG_ERROR

    setup_cli_logging(config.log_level, log_file)
    logger = logging.getLogger(__name__)
    logger.info(f"Running '{command}' with configuration {config_mgr.config_file}")

    from gatehouse.managers import DatabaseManager, ReconciliationManager
    from gatehouse.models.database import TABLES

    if config.tables != TABLES:
        message = (
            f"Table names in {config_mgr.config_file} differ from the ones the models were "
            f"loaded with ({TABLES.model_dump()})"
        )
        logger.error(message)
        print(f"[ERROR] {message}. Set {CONFIG_ENV_VAR} to this file.")
        return EXIT_CONFIG_ERROR

    db_manager = None
    try:
        db_manager = DatabaseManager(database_url or config.database_url, ResolveUserModel(config.user_model))
        db_manager.InitializeDatabase()
        COMMAND_HANDLERS[command](ReconciliationManager(db_manager), config)
        print_totals(db_manager)
        return EXIT_SUCCESS

    except ConfigurationMissingError as e:
        logger.error(str(e))
        print(f"[ERROR] {e}. Please check your configuration file.")
        return EXIT_CONFIG_ERROR
    except GatehouseError as e:
        logger.error(f"'{command}' failed: {str(e)}")
        print(f"[ERROR] {e}")
        return EXIT_FAILURE
    except SQLAlchemyError as e:
        logger.error(f"Database error during '{command}': {str(e)}")
        print(f"[ERROR] Database error: {e}")
        return EXIT_FAILURE
    finally:
        if db_manager is not None:
            db_manager.Dispose()


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point for the gatehouse command.
    """
    args = build_parser().parse_args(argv)
    if args.config:
        os.environ[CONFIG_ENV_VAR] = args.config
    return run_command(args.command, args.config, args.database_url, args.log_file)


if __name__ == '__main__':
    sys.exit(main())
