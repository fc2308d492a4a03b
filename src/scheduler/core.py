"""Core scheduler implementation using APScheduler."""

import inspect
from datetime import datetime
from typing import Any, Callable, Dict, List, Optional
from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.jobstores.memory import MemoryJobStore
from apscheduler.executors.asyncio import AsyncIOExecutor
import logging

from config import settings
from models import Schedule
from .registry import ScheduleRegistry
from .trigger import ScheduleTrigger

logger = logging.getLogger(__name__)


class SchedulerManager:
    """Runs the schedules of a registry and dispatches their actions when due.

    The dispatcher receives each due schedule's action unchanged; it may be
    a plain function or a coroutine function.
    """

    def __init__(self, registry: ScheduleRegistry, dispatcher: Callable[[Any], Any]):
        self.registry = registry
        self.dispatcher = dispatcher
        self.scheduler = None
        self._job_count = 0

    def initialize(self):
        """Initialize the scheduler."""
        # Configure APScheduler
        jobstores = {
            'default': MemoryJobStore()
        }

        executors = {
            'default': AsyncIOExecutor()
        }

        job_defaults = settings.scheduler_job_defaults

        self.scheduler = AsyncIOScheduler(
            jobstores=jobstores,
            executors=executors,
            job_defaults=job_defaults,
            timezone=settings.scheduler_timezone
        )

        # Start scheduler
        self.scheduler.start()
        logger.info("Scheduler initialized and started")

        for schedule in self.registry:
            self._add_job(schedule)
        logger.info(f"Loaded {len(self.registry)} scheduled jobs")

    def add_schedule(self, schedule: Schedule) -> Schedule:
        """Register a schedule and start running it if the scheduler is up."""
        self.registry.add(schedule)
        if self.scheduler:
            self._add_job(schedule)
        return schedule

    def _add_job(self, schedule: Schedule):
        """Add a job to the scheduler."""
        self._job_count += 1
        job_id = f"schedule_{self._job_count}"

        trigger = ScheduleTrigger(schedule, timezone=self.scheduler.timezone)

        self.scheduler.add_job(
            func=self._dispatch,
            trigger=trigger,
            args=[schedule.action],
            id=job_id,
            name=f"{schedule} ({job_id})",
            replace_existing=True
        )

        logger.info(f"Added scheduled job '{schedule}' ({job_id})")

    async def _dispatch(self, action: Any):
        """Hand a due action to the dispatcher."""
        try:
            result = self.dispatcher(action)
            if inspect.isawaitable(result):
                await result
        except Exception as e:
            logger.error(f"Dispatching action {action!r} failed: {e}", exc_info=True)

    def poll(self, now: Optional[datetime] = None) -> List[Any]:
        """Return the actions of every schedule due at ``now``, in registry order."""
        now = now or datetime.now()
        return [schedule.action for schedule in self.registry.due_at(now)]

    def get_scheduler_status(self) -> Dict[str, Any]:
        """Get current scheduler status."""
        if not self.scheduler:
            return {"running": False, "schedules_count": len(self.registry)}

        jobs = []
        for job in self.scheduler.get_jobs():
            jobs.append({
                "id": job.id,
                "name": job.name,
                "next_run": job.next_run_time.isoformat() if job.next_run_time else None,
                "trigger": str(job.trigger)
            })

        return {
            "running": self.scheduler.running,
            "schedules_count": len(self.registry),
            "jobs_count": len(jobs),
            "jobs": jobs,
            "timezone": str(self.scheduler.timezone)
        }

    def shutdown(self):
        """Shutdown the scheduler."""
        if self.scheduler and self.scheduler.running:
            self.scheduler.shutdown(wait=False)
            logger.info("Scheduler shut down")
