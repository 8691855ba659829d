"""CLI entrypoint for inspecting the task selection state.

- `replay` folds a recorded event log through the transition function
- `select` shows which task the initial-task selector would pick
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from pydantic import ValidationError

from task_runner_state import __version__
from task_runner_state.config import TaskRunnerSettings
from task_runner_state.logging import configure_logging
from task_runner_state.state.events import (
    EventDecodeError,
    UnknownEvent,
    events_from_json,
    task_lists_from_json,
)
from task_runner_state.state.selection import get_initial_task_meta
from task_runner_state.state.session import create_initial_app_state, load_session_snapshot
from task_runner_state.state.store import AppStore
from task_runner_state.state.types import TaskId

logger = logging.getLogger(__name__)


def _parse_task_id(value: str | None) -> TaskId | None:
    if value is None:
        return None
    runner_id, sep, type_ = value.partition(":")
    if not sep or not runner_id or not type_:
        raise argparse.ArgumentTypeError(f"Expected RUNNER:TYPE, got {value!r}")
    return TaskId(task_runner_id=runner_id, type=type_)


def _read_json(path: Path) -> object:
    return json.loads(path.read_text(encoding="utf-8"))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="task-runner-state",
        description="Inspect active-task selection for a set of task runners",
    )
    parser.add_argument("--version", action="version", version=f"task-runner-state {__version__}")

    subparsers = parser.add_subparsers(dest="command", required=True)

    replay = subparsers.add_parser(
        "replay", help="Apply a JSON array of events and print the final state"
    )
    replay.add_argument("events_file", type=Path, help="JSON file with event envelopes")
    replay.add_argument(
        "--session",
        type=Path,
        default=None,
        help="Previous session snapshot (defaults to TASK_RUNNER_SESSION_PATH)",
    )

    select = subparsers.add_parser(
        "select", help="Print the task that would become active when tasks are ready"
    )
    select.add_argument(
        "task_lists_file", type=Path, help="JSON object mapping runner id to task list"
    )
    select.add_argument(
        "--previous",
        type=_parse_task_id,
        default=None,
        metavar="RUNNER:TYPE",
        help="Task that was active in the previous session",
    )
    select.add_argument(
        "--active",
        type=_parse_task_id,
        default=None,
        metavar="RUNNER:TYPE",
        help="Task that is currently active",
    )

    return parser


def _replay(args: argparse.Namespace, settings: TaskRunnerSettings) -> int:
    session_path = args.session if args.session is not None else settings.session_path
    snapshot = load_session_snapshot(session_path) if session_path is not None else None

    events = events_from_json(_read_json(args.events_file))
    store = AppStore(create_initial_app_state(snapshot), compare=settings.comparator)
    for event in events:
        if isinstance(event, UnknownEvent):
            logger.warning("Ignoring unknown event", extra={"event_type": event.type})
        store.dispatch(event)

    logger.info("Replay finished", extra={"events": len(events)})
    print(json.dumps(store.state.to_json(), indent=2, ensure_ascii=False))
    return 0


def _select(args: argparse.Namespace, settings: TaskRunnerSettings) -> int:
    task_lists = task_lists_from_json(_read_json(args.task_lists_file))
    chosen = get_initial_task_meta(
        args.previous, args.active, task_lists, compare=settings.comparator
    )
    print(json.dumps(chosen.task_id.to_json() if chosen is not None else None))
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        settings = TaskRunnerSettings()
    except ValidationError as e:
        # Logging isn't configured yet; keep it simple and actionable.
        print("Configuration error (check your .env):", file=sys.stderr)
        print(e, file=sys.stderr)
        return 2

    configure_logging(settings.log_level)

    try:
        if args.command == "replay":
            return _replay(args, settings)
        if args.command == "select":
            return _select(args, settings)
    except (OSError, json.JSONDecodeError, EventDecodeError) as e:
        logger.error("Command failed", extra={"command": args.command, "error": str(e)})
        return 1

    parser.error(f"Unknown command: {args.command}")
    return 2


if __name__ == "__main__":
    raise SystemExit(main())
