"""Database connection and schedule storage."""

from .connection import DatabaseManager, db_manager
from .store import ScheduleStore

__all__ = ["DatabaseManager", "db_manager", "ScheduleStore"]
