"""Test configuration and fixtures."""

from __future__ import annotations

import logging
from collections.abc import Iterator

import pytest

from task_runner_state.state.types import (
    AppState,
    TaskMetadata,
    TaskRunner,
    freeze_task_lists,
    freeze_task_runners,
)


def make_task(
    runner_id: str,
    type_: str,
    *,
    runner_name: str | None = None,
    disabled: bool | None = None,
    priority: float | None = None,
) -> TaskMetadata:
    return TaskMetadata(
        task_runner_id=runner_id,
        task_runner_name=runner_name if runner_name is not None else runner_id,
        type=type_,
        disabled=disabled,
        priority=priority,
    )


@pytest.fixture
def task_factory():
    """Build `TaskMetadata`; the runner name defaults to the runner id."""
    return make_task


@pytest.fixture
def build_task() -> TaskMetadata:
    return make_task("buck", "build", runner_name="Buck")


@pytest.fixture
def test_task() -> TaskMetadata:
    return make_task("buck", "test", runner_name="Buck")


@pytest.fixture
def debug_task() -> TaskMetadata:
    return make_task("hhvm", "debug", runner_name="HHVM Debugger")


@pytest.fixture
def ready_state(
    build_task: TaskMetadata, test_task: TaskMetadata, debug_task: TaskMetadata
) -> AppState:
    """Two registered runners with their task lists, nothing selected yet."""
    return AppState(
        task_runners=freeze_task_runners(
            {
                "buck": TaskRunner(id="buck", name="Buck"),
                "hhvm": TaskRunner(id="hhvm", name="HHVM Debugger"),
            }
        ),
        task_lists=freeze_task_lists({"buck": [build_task, test_task], "hhvm": [debug_task]}),
    )


@pytest.fixture
def restore_root_logger() -> Iterator[None]:
    """Undo `configure_logging` so later tests see pytest's own handlers."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    for handler in list(root.handlers):
        if handler not in handlers:
            root.removeHandler(handler)
    root.setLevel(level)
