#!/usr/bin/env python3
"""Main entry point for ChronoMatch."""

import argparse
import asyncio
import json
import logging
import sys
from datetime import datetime
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent))

from config import settings

logger = logging.getLogger(__name__)


def configure_logging():
    """Configure logging from settings."""
    handlers = [logging.StreamHandler()]
    if settings.log_file:
        Path(settings.log_file).parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(settings.log_file))

    logging.basicConfig(
        level=getattr(logging, settings.log_level),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=handlers
    )


def _parse_time(value: str) -> datetime:
    try:
        return datetime.fromisoformat(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"Invalid ISO timestamp: {value}")


def _parse_action(value: str):
    """Actions are stored as JSON when they parse as JSON, else as plain text."""
    try:
        return json.loads(value)
    except json.JSONDecodeError:
        return value


def cmd_next(args) -> int:
    from scheduler import parse_cron

    schedule = parse_cron(args.expression)
    start = args.from_time or datetime.now()
    found = 0
    for occurrence in schedule.occurrences(start, args.count):
        print(occurrence.isoformat())
        found += 1
    if not found:
        print(f"No occurrence within {settings.max_year_rollovers} years", file=sys.stderr)
        return 1
    return 0


def cmd_match(args) -> int:
    from scheduler import parse_cron

    schedule = parse_cron(args.expression)
    matched = schedule.matches(args.at)
    print("yes" if matched else "no")
    return 0 if matched else 1


def cmd_describe(args) -> int:
    from scheduler import get_cron_description, parse_cron

    print(get_cron_description(parse_cron(args.expression)))
    return 0


def cmd_add(args) -> int:
    from database import db_manager, ScheduleStore

    record = ScheduleStore(db_manager).add(args.expression, _parse_action(args.action))
    print(f"{record.id}\t{record.expression}\t{json.dumps(record.action)}")
    return 0


def cmd_list(args) -> int:
    from database import db_manager, ScheduleStore
    from scheduler import parse_cron

    start = datetime.now()
    for record in ScheduleStore(db_manager).list():
        upcoming = parse_cron(record.expression).next_occurrence(start)
        next_run = upcoming.isoformat() if upcoming else "-"
        print(f"{record.id}\t{record.expression}\t{next_run}\t{json.dumps(record.action)}")
    return 0


async def run_scheduler():
    """Run stored schedules until interrupted, logging each due action."""
    from database import db_manager, ScheduleStore
    from scheduler import SchedulerManager

    registry = ScheduleStore(db_manager).load_registry()

    def dispatch(action):
        logger.info(f"Schedule due: {json.dumps(action)}")

    manager = SchedulerManager(registry, dispatch)
    manager.initialize()
    try:
        await asyncio.Event().wait()
    finally:
        manager.shutdown()
        db_manager.close()


def cmd_run(args) -> int:
    asyncio.run(run_scheduler())
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="ChronoMatch cron schedule evaluator")
    subparsers = parser.add_subparsers(dest="command", required=True)

    next_parser = subparsers.add_parser("next", help="Show upcoming occurrences")
    next_parser.add_argument("expression", help='Cron expression, e.g. "*/5 * * * *"')
    next_parser.add_argument("--from", dest="from_time", type=_parse_time,
                             help="Start time in ISO format (default: now)")
    next_parser.add_argument("--count", type=int, default=1,
                             help="Number of occurrences to show (default: 1)")
    next_parser.set_defaults(func=cmd_next)

    match_parser = subparsers.add_parser("match", help="Check if a time matches")
    match_parser.add_argument("expression")
    match_parser.add_argument("--at", type=_parse_time, required=True,
                              help="Time to check in ISO format")
    match_parser.set_defaults(func=cmd_match)

    describe_parser = subparsers.add_parser("describe", help="Describe a cron expression")
    describe_parser.add_argument("expression")
    describe_parser.set_defaults(func=cmd_describe)

    add_parser = subparsers.add_parser("add", help="Store a schedule")
    add_parser.add_argument("expression")
    add_parser.add_argument("--action", required=True,
                            help="Action payload (JSON or plain text)")
    add_parser.set_defaults(func=cmd_add)

    list_parser = subparsers.add_parser("list", help="List stored schedules")
    list_parser.set_defaults(func=cmd_list)

    run_parser = subparsers.add_parser("run", help="Run stored schedules")
    run_parser.set_defaults(func=cmd_run)

    return parser


def main(argv=None):
    """Main entry point."""
    args = build_parser().parse_args(argv)
    configure_logging()

    try:
        sys.exit(args.func(args))
    except KeyboardInterrupt:
        logger.info("Shutting down ChronoMatch...")
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(2)


if __name__ == "__main__":
    main()
