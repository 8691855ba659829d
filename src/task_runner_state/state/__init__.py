"""Selection state for the active task.

This package holds:
- Value types for tasks, task runners and the app state
- The closed set of events and their JSON codec
- A pure transition function with active-task validation
- The initial-task selector used when the task universe becomes ready
- Session snapshots and a small host store
"""

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
    UnknownEvent,
    UnregisterTaskRunner,
)
from .reducers import active_task_is_valid, app, validate_active_task
from .selection import get_initial_task_meta, locale_compare
from .store import AppStore
from .types import (
    AppState,
    RunningTaskInfo,
    TaskId,
    TaskMetadata,
    TaskRunner,
    create_empty_app_state,
    task_ids_are_equal,
)

__all__ = [
    "AppState",
    "AppStore",
    "InitializeView",
    "RegisterTaskRunner",
    "RunningTaskInfo",
    "SelectTask",
    "SetProjectRoot",
    "SetTaskLists",
    "SetToolbarVisibility",
    "TaskCompleted",
    "TaskErrored",
    "TaskId",
    "TaskMetadata",
    "TaskProgress",
    "TaskRunner",
    "TaskStarted",
    "TaskStopped",
    "TasksReady",
    "UnknownEvent",
    "UnregisterTaskRunner",
    "active_task_is_valid",
    "app",
    "create_empty_app_state",
    "get_initial_task_meta",
    "locale_compare",
    "task_ids_are_equal",
    "validate_active_task",
]
