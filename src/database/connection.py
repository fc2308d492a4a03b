"""Database connection and session management."""

from contextlib import contextmanager
from pathlib import Path
from typing import Generator, Optional
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import StaticPool
from config import settings
from models.record import Base
import logging

logger = logging.getLogger(__name__)


class DatabaseManager:
    def __init__(self, database_url: Optional[str] = None):
        self.database_url = database_url or settings.database_url
        self.engine = None
        self.SessionLocal = None

    def initialize(self):
        """Initialize database connection and create tables."""
        is_sqlite = self.database_url.startswith("sqlite")

        # Ensure database directory exists for file-backed SQLite
        if is_sqlite and ":///" in self.database_url and ":memory:" not in self.database_url:
            db_path = self.database_url.split(":///", 1)[-1]
            db_dir = Path(db_path).parent
            if str(db_dir) not in ("", "."):
                db_dir.mkdir(parents=True, exist_ok=True)

        # Use StaticPool for SQLite to avoid connection issues
        connect_args = {"check_same_thread": False} if is_sqlite else {}
        poolclass = StaticPool if is_sqlite else None

        self.engine = create_engine(
            self.database_url,
            connect_args=connect_args,
            poolclass=poolclass,
            echo=settings.database_echo
        )

        # Create all tables
        Base.metadata.create_all(bind=self.engine)

        self.SessionLocal = sessionmaker(
            autocommit=False,
            autoflush=False,
            expire_on_commit=False,
            bind=self.engine
        )

        logger.info(f"Database initialized at {self.database_url}")

    @contextmanager
    def get_session(self) -> Generator[Session, None, None]:
        """Get a database session."""
        if not self.SessionLocal:
            self.initialize()

        session = self.SessionLocal()
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    def close(self):
        """Close database connection."""
        if self.engine:
            self.engine.dispose()
            logger.info("Database connection closed")


# Global database manager instance
db_manager = DatabaseManager()
