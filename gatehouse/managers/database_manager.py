"""
Gatehouse - Database Manager

This module manages database connection, initialization, and session creation
for the roles, permissions and principal tables.
"""

import logging
from pathlib import Path

from sqlalchemy import create_engine, event
from sqlalchemy.engine import make_url
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from gatehouse.config import DEFAULT_USER_MODEL, ResolveUserModel
from gatehouse.models.database import Base, Role, Permission

# Create logger
logger = logging.getLogger(__name__)


class DatabaseManager:
    """
    Manages database connection, initialization, and sessions
    """

    def __init__(self, database_url: str = "sqlite:///database/gatehouse.db", user_model=None):
        """
        Initialize database manager

        Args:
            database_url: SQLAlchemy database URL
            user_model: Principal model class (defaults to gatehouse User)
        """
        self.database_url = database_url
        # Importing the principal maps its table, which role_user references
        self.user_model = user_model or ResolveUserModel(DEFAULT_USER_MODEL)

        url = make_url(database_url)
        engine_kwargs = {"echo": False}

        if url.get_backend_name() == "sqlite":
            engine_kwargs["connect_args"] = {"check_same_thread": False}
            if url.database in (None, "", ":memory:"):
                # One shared connection so every session sees the same in-memory database
                engine_kwargs["poolclass"] = StaticPool
            else:
                # Ensure database directory exists
                db_dir = Path(url.database).parent
                if db_dir and str(db_dir) != '.':
                    db_dir.mkdir(parents=True, exist_ok=True)

        self.engine = create_engine(database_url, **engine_kwargs)

        if url.get_backend_name() == "sqlite":

            @event.listens_for(self.engine, "connect")
            def _set_sqlite_pragma(dbapi_connection, _connection_record) -> None:
                # Cascades on the join tables depend on foreign key enforcement
                cursor = dbapi_connection.cursor()
                try:
                    cursor.execute("PRAGMA foreign_keys=ON")
                finally:
                    cursor.close()

        self.SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=self.engine, expire_on_commit=False)

    def InitializeDatabase(self):
        """
        Create all tables if they don't exist
        """
        Base.metadata.create_all(bind=self.engine)
        logger.info(f"Database initialized at {self.engine.url.render_as_string(hide_password=True)}")

    def GetSession(self):
        """
        Get a new database session

        Returns:
            Session: SQLAlchemy session
        """
        return self.SessionLocal()

    def Dispose(self):
        """Release pooled connections"""
        self.engine.dispose()

    # ==================== Query Helpers ====================

    def GetUser(self, session, user_id: int):
        """
        Load a principal by primary key

        Args:
            session: SQLAlchemy session
            user_id: Principal ID

        Returns:
            The principal object, or None if not found
        """
        return session.get(self.user_model, user_id)

    def CountRows(self, session) -> dict:
        """
        Row counts for the roles and permissions tables

        Args:
            session: SQLAlchemy session

        Returns:
            dict: {"roles": int, "permissions": int}
        """
        return {
            "roles": session.query(Role).count(),
            "permissions": session.query(Permission).count(),
        }
