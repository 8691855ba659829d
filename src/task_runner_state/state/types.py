"""Value types for the task runner selection state.

All types are frozen. Map-valued fields of `AppState` hold read-only mapping
proxies so that a state value handed to a collaborator cannot be mutated in
place; every transition builds new mappings instead.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Protocol


class TaskIdentity(Protocol):
    """Anything that names a task kind: a `TaskId` or a `TaskMetadata`."""

    @property
    def task_runner_id(self) -> str: ...

    @property
    def type(self) -> str: ...


@dataclass(frozen=True, slots=True)
class TaskId:
    task_runner_id: str
    type: str

    def to_json(self) -> dict[str, object]:
        return {"task_runner_id": self.task_runner_id, "type": self.type}

    @staticmethod
    def from_json(obj: object) -> TaskId | None:
        if not isinstance(obj, dict):
            return None
        runner = obj.get("task_runner_id")
        type_ = obj.get("type")
        if not isinstance(runner, str) or not isinstance(type_, str):
            return None
        return TaskId(task_runner_id=runner, type=type_)


def task_ids_are_equal(a: TaskIdentity, b: TaskIdentity) -> bool:
    return a.task_runner_id == b.task_runner_id and a.type == b.type


@dataclass(frozen=True, slots=True)
class TaskMetadata:
    """One selectable task offered by a task runner.

    `disabled` is tri-state: True (explicitly disabled), False (explicitly
    enabled) or None (neither). A missing `priority` ranks as 0.
    """

    task_runner_id: str
    task_runner_name: str
    type: str
    disabled: bool | None = None
    priority: float | None = None
    label: str = ""
    description: str = ""

    @property
    def task_id(self) -> TaskId:
        return TaskId(task_runner_id=self.task_runner_id, type=self.type)

    def to_json(self) -> dict[str, object]:
        return {
            "task_runner_id": self.task_runner_id,
            "task_runner_name": self.task_runner_name,
            "type": self.type,
            "disabled": self.disabled,
            "priority": self.priority,
            "label": self.label,
            "description": self.description,
        }


@dataclass(frozen=True, slots=True)
class TaskRunner:
    id: str
    name: str


@dataclass(frozen=True, slots=True)
class RunningTaskInfo:
    task: TaskMetadata
    progress: float | None = None


TaskLists = Mapping[str, tuple[TaskMetadata, ...]]


def freeze_task_runners(runners: Mapping[str, TaskRunner]) -> Mapping[str, TaskRunner]:
    return MappingProxyType(dict(runners))


def freeze_task_lists(task_lists: Mapping[str, object]) -> TaskLists:
    """Copy `task_lists` into a read-only mapping of tuples."""

    return MappingProxyType({runner_id: tuple(tasks) for runner_id, tasks in task_lists.items()})


def _empty_mapping() -> Mapping[str, object]:
    return MappingProxyType({})


@dataclass(frozen=True, slots=True)
class AppState:
    """The single aggregate owned by the host store.

    Replaced wholesale on every event; see `task_runner_state.state.reducers.app`.
    """

    task_runners: Mapping[str, TaskRunner] = field(default_factory=_empty_mapping)
    task_lists: TaskLists = field(default_factory=_empty_mapping)
    active_task_id: TaskId | None = None
    previous_session_active_task_id: TaskId | None = None
    running_task_info: RunningTaskInfo | None = None
    project_root: str | None = None
    project_was_opened: bool = False
    tasks_are_ready: bool = False
    view_is_initialized: bool = False
    visible: bool = False
    previous_session_visible: bool | None = None
    show_placeholder_initially: bool = False

    def to_json(self) -> dict[str, object]:
        running: dict[str, object] | None = None
        if self.running_task_info is not None:
            running = {
                "task": self.running_task_info.task.to_json(),
                "progress": self.running_task_info.progress,
            }
        return {
            "task_runners": {rid: r.name for rid, r in self.task_runners.items()},
            "task_lists": {
                rid: [t.to_json() for t in tasks] for rid, tasks in self.task_lists.items()
            },
            "active_task_id": self.active_task_id.to_json() if self.active_task_id else None,
            "previous_session_active_task_id": (
                self.previous_session_active_task_id.to_json()
                if self.previous_session_active_task_id
                else None
            ),
            "running_task_info": running,
            "project_root": self.project_root,
            "project_was_opened": self.project_was_opened,
            "tasks_are_ready": self.tasks_are_ready,
            "view_is_initialized": self.view_is_initialized,
            "visible": self.visible,
            "previous_session_visible": self.previous_session_visible,
            "show_placeholder_initially": self.show_placeholder_initially,
        }


def create_empty_app_state() -> AppState:
    return AppState()
