"""Persistent storage of registry entries."""

from typing import Any, List
import logging

from models import ScheduleRecord
from scheduler.cron_parser import parse_cron
from scheduler.registry import ScheduleRegistry
from .connection import DatabaseManager

logger = logging.getLogger(__name__)


class ScheduleStore:
    """Stores cron lines with their actions and rebuilds registries from them."""

    def __init__(self, db_manager: DatabaseManager):
        self.db_manager = db_manager

    def add(self, expression: str, action: Any = None) -> ScheduleRecord:
        """Validate and store a schedule.

        Args:
            expression: Five-field cron line
            action: Opaque JSON-serialisable payload

        Returns:
            The stored record

        Raises:
            CronSyntaxError: if the expression is malformed
            InvalidFieldValue: if a field is out of bounds
        """
        schedule = parse_cron(expression)

        with self.db_manager.get_session() as session:
            record = ScheduleRecord(expression=str(schedule), action=action)
            session.add(record)
            session.flush()
            logger.info(f"Stored schedule '{record.expression}' (ID: {record.id})")
            return record

    def get(self, record_id: int) -> ScheduleRecord:
        with self.db_manager.get_session() as session:
            record = session.get(ScheduleRecord, record_id)
            if record is None:
                raise KeyError(f"Schedule {record_id} not found")
            return record

    def list(self, active_only: bool = True) -> List[ScheduleRecord]:
        with self.db_manager.get_session() as session:
            query = session.query(ScheduleRecord)
            if active_only:
                query = query.filter_by(is_active=True)
            return query.order_by(ScheduleRecord.id).all()

    def deactivate(self, record_id: int) -> ScheduleRecord:
        """Stop a schedule from being loaded; records are never deleted."""
        with self.db_manager.get_session() as session:
            record = session.get(ScheduleRecord, record_id)
            if record is None:
                raise KeyError(f"Schedule {record_id} not found")
            record.is_active = False
            logger.info(f"Deactivated schedule {record_id}")
            return record

    def load_registry(self) -> ScheduleRegistry:
        """Build a registry from the active records, in insertion order."""
        registry = ScheduleRegistry()
        for record in self.list():
            registry.add(parse_cron(record.expression, action=record.action))
        logger.info(f"Loaded {len(registry)} schedules")
        return registry
