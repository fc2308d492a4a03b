"""Occurrence search, registry and the polling scheduler."""

from .occurrence import next_occurrence
from .cron_parser import (
    CronSyntaxError, parse_field, parse_cron, validate_cron,
    parse_cron_expression, get_cron_description
)
from .registry import ScheduleRegistry
from .trigger import ScheduleTrigger
from .core import SchedulerManager

__all__ = [
    "next_occurrence",
    "CronSyntaxError",
    "parse_field",
    "parse_cron",
    "validate_cron",
    "parse_cron_expression",
    "get_cron_description",
    "ScheduleRegistry",
    "ScheduleTrigger",
    "SchedulerManager"
]
