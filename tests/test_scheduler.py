"""Tests for the APScheduler integration."""

import pytest
from datetime import datetime, timezone
from unittest.mock import Mock, AsyncMock
import sys
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from models import Schedule, every
from scheduler import ScheduleRegistry, ScheduleTrigger, SchedulerManager


@pytest.fixture
def registry():
    """Create a registry with two schedules."""
    return ScheduleRegistry([
        Schedule.build(minute=every(5), action={"command": "sync"}),
        Schedule.build(minute=0, hour=9, action="report"),
    ])


class TestScheduleTrigger:
    """Test next fire time computation."""

    def test_first_fire_time(self):
        trigger = ScheduleTrigger(Schedule.build(minute=every(5)), timezone=timezone.utc)
        now = datetime(2024, 6, 15, 12, 2, 30, tzinfo=timezone.utc)
        assert trigger.get_next_fire_time(None, now) == datetime(2024, 6, 15, 12, 5, tzinfo=timezone.utc)

    def test_due_minute_fires_now(self):
        trigger = ScheduleTrigger(Schedule.build(minute=every(5)), timezone=timezone.utc)
        now = datetime(2024, 6, 15, 12, 5, tzinfo=timezone.utc)
        assert trigger.get_next_fire_time(None, now) == now

    def test_after_previous_fire_time(self):
        trigger = ScheduleTrigger(Schedule.build(minute=every(5)), timezone=timezone.utc)
        previous = datetime(2024, 6, 15, 12, 5, tzinfo=timezone.utc)
        now = datetime(2024, 6, 15, 12, 5, 1, tzinfo=timezone.utc)
        assert trigger.get_next_fire_time(previous, now) == datetime(2024, 6, 15, 12, 10, tzinfo=timezone.utc)

    def test_never_due(self):
        trigger = ScheduleTrigger(Schedule.build(day_of_month=31, month=2), timezone=timezone.utc)
        now = datetime(2024, 6, 15, 12, 0, tzinfo=timezone.utc)
        assert trigger.get_next_fire_time(None, now) is None

    def test_uses_now_timezone_when_unset(self):
        trigger = ScheduleTrigger(Schedule.build(minute=0))
        now = datetime(2024, 6, 15, 12, 30, tzinfo=timezone.utc)
        assert trigger.get_next_fire_time(None, now) == datetime(2024, 6, 15, 13, 0, tzinfo=timezone.utc)

    def test_str(self):
        trigger = ScheduleTrigger(Schedule.build(minute=every(5)))
        assert str(trigger) == "schedule[*/5 * * * *]"


class TestSchedulerManager:
    """Test scheduler manager."""

    def test_status_before_initialize(self, registry):
        manager = SchedulerManager(registry, Mock())
        assert manager.get_scheduler_status() == {"running": False, "schedules_count": 2}

    def test_poll(self, registry):
        manager = SchedulerManager(registry, Mock())
        assert manager.poll(datetime(2024, 6, 15, 9, 0)) == [{"command": "sync"}, "report"]
        assert manager.poll(datetime(2024, 6, 15, 9, 1)) == []

    def test_add_schedule_before_initialize(self, registry):
        manager = SchedulerManager(registry, Mock())
        manager.add_schedule(Schedule.build(hour=3, action="late"))
        assert len(registry) == 3

    @pytest.mark.asyncio
    async def test_dispatch_sync_callback(self, registry):
        dispatcher = Mock()
        manager = SchedulerManager(registry, dispatcher)
        await manager._dispatch("report")
        dispatcher.assert_called_once_with("report")

    @pytest.mark.asyncio
    async def test_dispatch_async_callback(self, registry):
        dispatcher = AsyncMock()
        manager = SchedulerManager(registry, dispatcher)
        await manager._dispatch({"command": "sync"})
        dispatcher.assert_awaited_once_with({"command": "sync"})

    @pytest.mark.asyncio
    async def test_dispatch_failure_is_logged(self, registry, caplog):
        dispatcher = Mock(side_effect=RuntimeError("boom"))
        manager = SchedulerManager(registry, dispatcher)
        await manager._dispatch("report")
        assert "boom" in caplog.text

    @pytest.mark.asyncio
    async def test_initialize_adds_jobs(self, registry):
        manager = SchedulerManager(registry, Mock())
        manager.initialize()
        try:
            status = manager.get_scheduler_status()
            assert status["running"] is True
            assert status["jobs_count"] == 2
            assert all(job["next_run"] is not None for job in status["jobs"])

            manager.add_schedule(Schedule.build(minute=30, action="half"))
            assert manager.get_scheduler_status()["jobs_count"] == 3
            assert len(registry) == 3
        finally:
            manager.shutdown()
