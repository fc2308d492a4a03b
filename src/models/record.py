"""Persisted schedule registry entries."""

from datetime import datetime
from typing import Any, Dict
from sqlalchemy import Column, String, Integer, DateTime, JSON, Boolean
from sqlalchemy.orm import declarative_base

Base = declarative_base()


class ScheduleRecord(Base):
    __tablename__ = "schedules"

    id = Column(Integer, primary_key=True, autoincrement=True)

    # Five-field cron line, validated before it is stored
    expression = Column(String(255), nullable=False)

    # Opaque payload handed back to the dispatcher when the schedule is due
    # e.g. {"command": "backup.sh"} or "send-report"
    action = Column(JSON)

    is_active = Column(Boolean, default=True)
    created_at = Column(DateTime, default=datetime.now)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "expression": self.expression,
            "action": self.action,
            "is_active": self.is_active,
            "created_at": self.created_at.isoformat() if self.created_at else None
        }
