"""Entry point for the tee schedule tooling."""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from dataclasses import asdict
from datetime import date as date_type
from typing import Optional, Sequence

import structlog

from .config import Settings
from .errors import ScheduleConflictError, ScheduleError, ScheduleNotFoundError
from .formatting import format_schedule
from .service import ScheduleService
from .slots import generate_tee_time_slots
from .store import build_store
from .validation import ensure_no_conflicts, find_conflicts


def configure_logging(level: str = "INFO", json_output: bool = False) -> None:
    """Configure structlog + stdlib logging."""
    numeric_level = getattr(logging, level.upper(), logging.INFO)
    logging.basicConfig(
        level=numeric_level,
        format="%(message)s",
        stream=sys.stderr,
    )
    renderer = structlog.processors.JSONRenderer() if json_output else structlog.dev.ConsoleRenderer()
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.add_log_level,
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(numeric_level),
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


LOGGER = structlog.get_logger(__name__)


def parse_date(value: str) -> date_type:
    try:
        return date_type.fromisoformat(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"Invalid date: {value} (expected YYYY-MM-DD)") from exc


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    """CLI argument parsing."""
    parser = argparse.ArgumentParser(description="Resolve golf course tee sheet schedules.")
    subparsers = parser.add_subparsers(dest="command", required=True)

    resolve_parser = subparsers.add_parser("resolve", help="Show the effective schedule for one date.")
    resolve_parser.add_argument("--course", required=True, help="Course identifier.")
    resolve_parser.add_argument("--date", type=parse_date, help="ISO date (YYYY-MM-DD); defaults to today.")
    resolve_parser.add_argument("--json", action="store_true", help="Print the schedule as JSON.")
    resolve_parser.add_argument("--slots", action="store_true", help="Include the tee-time slot preview.")

    window_parser = subparsers.add_parser("window", help="Show schedules for the current booking window.")
    window_parser.add_argument("--course", required=True, help="Course identifier.")
    window_parser.add_argument("--today", type=parse_date, help="Override today's date (YYYY-MM-DD).")
    window_parser.add_argument("--json", action="store_true", help="Print the schedules as JSON.")

    init_parser = subparsers.add_parser("init", help="Create the default schedule for a course.")
    init_parser.add_argument("--course", required=True, help="Course identifier.")

    check_parser = subparsers.add_parser("check", help="Report rules whose precedence is ambiguous.")
    check_parser.add_argument("--course", required=True, help="Course identifier.")
    check_parser.add_argument("--strict", action="store_true", help="Exit non-zero when conflicts exist.")

    return parser.parse_args(argv)


async def run(settings: Settings, args: argparse.Namespace) -> int:
    """Execute one CLI command and return the exit code."""
    store = build_store(settings)
    service = ScheduleService(store, auto_create=settings.auto_create)

    if args.command == "resolve":
        effective = await service.effective_schedule(args.course, args.date or date_type.today())
        preview = generate_tee_time_slots(effective) if args.slots else None
        if args.json:
            payload = effective.to_dict()
            if preview is not None:
                payload["teeTimeSlots"] = [asdict(slot) for slot in preview.slots]
                payload["summary"] = asdict(preview.summary)
            print(json.dumps(payload, indent=2))
        else:
            print(format_schedule(effective, preview))
        return 0

    if args.command == "window":
        schedules = await service.booking_window(args.course, args.today)
        if args.json:
            print(json.dumps([item.to_dict() for item in schedules], indent=2))
        else:
            print("\n\n".join(format_schedule(item) for item in schedules))
        return 0

    if args.command == "init":
        config = await store.create_default(args.course)
        LOGGER.info("cli.init.complete", course_id=args.course, fingerprint=config.fingerprint()[:12])
        return 0

    if args.command == "check":
        config = await service.get_base_schedule(args.course, auto_create=False)
        if config is None:
            raise ScheduleNotFoundError(args.course)
        if args.strict:
            ensure_no_conflicts(config)
            print("No conflicts.")
            return 0
        conflicts = find_conflicts(config)
        for conflict in conflicts:
            print(conflict.describe())
        if not conflicts:
            print("No conflicts.")
        return 0

    raise ValueError(f"Unknown command {args.command!r}")


def cli(argv: Optional[Sequence[str]] = None) -> None:
    """Console script entrypoint."""
    args = parse_args(argv)

    try:
        settings = Settings()
    except Exception as exc:  # pragma: no cover - startup validation
        configure_logging()
        LOGGER.exception("settings.error", error=str(exc))
        raise SystemExit(2) from exc

    configure_logging(settings.log_level, settings.log_json)

    try:
        code = asyncio.run(run(settings, args))
    except ScheduleConflictError as exc:
        for conflict in exc.conflicts:
            print(conflict.describe())
        raise SystemExit(3) from exc
    except ScheduleError as exc:
        LOGGER.error("cli.failed", command=args.command, error=str(exc))
        raise SystemExit(1) from exc
    raise SystemExit(code)
