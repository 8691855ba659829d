"""The transition function for `AppState`.

`app` is total: every (state, event) pair yields a state, and anything that
is not a recognised event returns the state unchanged.
"""

from __future__ import annotations

import logging
from dataclasses import replace

from .events import (
    InitializeView,
    RegisterTaskRunner,
    SelectTask,
    SetProjectRoot,
    SetTaskLists,
    SetToolbarVisibility,
    TaskCompleted,
    TaskErrored,
    TaskProgress,
    TasksReady,
    TaskStarted,
    TaskStopped,
    UnregisterTaskRunner,
)
from .selection import Comparator, get_initial_task_meta, locale_compare
from .types import (
    AppState,
    RunningTaskInfo,
    freeze_task_lists,
    freeze_task_runners,
    task_ids_are_equal,
)

logger = logging.getLogger(__name__)


def app(state: AppState, event: object, *, compare: Comparator = locale_compare) -> AppState:
    if isinstance(event, SelectTask):
        # Not validated: callers select tasks they got from the task lists.
        return replace(state, active_task_id=event.task_id, previous_session_active_task_id=None)

    if isinstance(event, (TaskCompleted, TaskErrored, TaskStopped)):
        return replace(state, running_task_info=None)

    if isinstance(event, TaskProgress):
        if state.running_task_info is None:
            logger.warning(
                "Task progress received with no running task",
                extra={"progress": event.progress},
            )
            return state
        return replace(
            state, running_task_info=replace(state.running_task_info, progress=event.progress)
        )

    if isinstance(event, TaskStarted):
        return replace(state, running_task_info=RunningTaskInfo(task=event.task, progress=None))

    if isinstance(event, SetToolbarVisibility):
        return replace(state, visible=event.visible)

    if isinstance(event, SetProjectRoot):
        return replace(
            state,
            project_root=event.project_root,
            project_was_opened=state.project_was_opened or event.project_root is not None,
            tasks_are_ready=False,
        )

    if isinstance(event, SetTaskLists):
        return validate_active_task(replace(state, task_lists=freeze_task_lists(event.task_lists)))

    if isinstance(event, TasksReady):
        initial_task_meta = get_initial_task_meta(
            state.previous_session_active_task_id,
            state.active_task_id,
            state.task_lists,
            compare=compare,
        )
        return validate_active_task(
            replace(
                state,
                tasks_are_ready=True,
                active_task_id=None if initial_task_meta is None else initial_task_meta.task_id,
                previous_session_active_task_id=None,
            )
        )

    if isinstance(event, InitializeView):
        return replace(
            state,
            view_is_initialized=True,
            visible=event.visible,
            previous_session_visible=None,
        )

    if isinstance(event, RegisterTaskRunner):
        task_runners = dict(state.task_runners)
        task_runners[event.task_runner.id] = event.task_runner
        return replace(state, task_runners=freeze_task_runners(task_runners))

    if isinstance(event, UnregisterTaskRunner):
        task_runners = dict(state.task_runners)
        task_lists = dict(state.task_lists)
        task_runners.pop(event.id, None)
        task_lists.pop(event.id, None)
        return validate_active_task(
            replace(
                state,
                task_runners=freeze_task_runners(task_runners),
                task_lists=freeze_task_lists(task_lists),
            )
        )

    return state


def validate_active_task(state: AppState) -> AppState:
    """Clear the active task if it no longer names an enabled task."""

    if active_task_is_valid(state):
        return state
    return replace(state, active_task_id=None)


def active_task_is_valid(state: AppState) -> bool:
    active_task_id = state.active_task_id
    if active_task_id is None:
        return False
    for task_list in state.task_lists.values():
        for task_meta in task_list:
            if task_ids_are_equal(task_meta, active_task_id) and task_meta.disabled is not True:
                return True
    return False
