"""The closed set of events accepted by the transition function.

Each event has a stable wire name used by the JSON codec. Wire envelopes look
like ``{"type": "SELECT_TASK", "payload": {"task_id": {...}}}``.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from typing import ClassVar, cast

from pydantic import TypeAdapter, ValidationError

from .types import TaskId, TaskMetadata, TaskRunner

TaskListsAdapter: TypeAdapter[dict[str, tuple[TaskMetadata, ...]]] = TypeAdapter(
    dict[str, tuple[TaskMetadata, ...]]
)


class EventDecodeError(ValueError):
    pass


@dataclass(frozen=True, slots=True)
class SelectTask:
    wire_name: ClassVar[str] = "SELECT_TASK"
    task_id: TaskId


@dataclass(frozen=True, slots=True)
class TaskCompleted:
    wire_name: ClassVar[str] = "TASK_COMPLETED"


@dataclass(frozen=True, slots=True)
class TaskProgress:
    wire_name: ClassVar[str] = "TASK_PROGRESS"
    progress: float | None


@dataclass(frozen=True, slots=True)
class TaskErrored:
    wire_name: ClassVar[str] = "TASK_ERRORED"


@dataclass(frozen=True, slots=True)
class TaskStarted:
    wire_name: ClassVar[str] = "TASK_STARTED"
    task: TaskMetadata


@dataclass(frozen=True, slots=True)
class TaskStopped:
    wire_name: ClassVar[str] = "TASK_STOPPED"


@dataclass(frozen=True, slots=True)
class SetToolbarVisibility:
    wire_name: ClassVar[str] = "SET_TOOLBAR_VISIBILITY"
    visible: bool


@dataclass(frozen=True, slots=True)
class SetProjectRoot:
    wire_name: ClassVar[str] = "SET_PROJECT_ROOT"
    project_root: str | None


@dataclass(frozen=True, slots=True)
class SetTaskLists:
    wire_name: ClassVar[str] = "SET_TASK_LISTS"
    task_lists: Mapping[str, tuple[TaskMetadata, ...]]


@dataclass(frozen=True, slots=True)
class TasksReady:
    wire_name: ClassVar[str] = "TASKS_READY"


@dataclass(frozen=True, slots=True)
class InitializeView:
    wire_name: ClassVar[str] = "INITIALIZE_VIEW"
    visible: bool


@dataclass(frozen=True, slots=True)
class RegisterTaskRunner:
    wire_name: ClassVar[str] = "REGISTER_TASK_RUNNER"
    task_runner: TaskRunner


@dataclass(frozen=True, slots=True)
class UnregisterTaskRunner:
    wire_name: ClassVar[str] = "UNREGISTER_TASK_RUNNER"
    id: str


@dataclass(frozen=True, slots=True)
class UnknownEvent:
    """An event whose wire name is not recognised. The reducer ignores it."""

    type: str
    payload: dict[str, object] = field(default_factory=dict)


Event = (
    SelectTask
    | TaskCompleted
    | TaskProgress
    | TaskErrored
    | TaskStarted
    | TaskStopped
    | SetToolbarVisibility
    | SetProjectRoot
    | SetTaskLists
    | TasksReady
    | InitializeView
    | RegisterTaskRunner
    | UnregisterTaskRunner
)

EVENT_TYPES: dict[str, type[Event]] = {
    cls.wire_name: cls
    for cls in (
        SelectTask,
        TaskCompleted,
        TaskProgress,
        TaskErrored,
        TaskStarted,
        TaskStopped,
        SetToolbarVisibility,
        SetProjectRoot,
        SetTaskLists,
        TasksReady,
        InitializeView,
        RegisterTaskRunner,
        UnregisterTaskRunner,
    )
}

_ADAPTERS: dict[str, TypeAdapter[object]] = {}


def _adapter(wire_name: str) -> TypeAdapter[object]:
    adapter = _ADAPTERS.get(wire_name)
    if adapter is None:
        adapter = TypeAdapter(EVENT_TYPES[wire_name])
        _ADAPTERS[wire_name] = adapter
    return adapter


def event_from_json(obj: object) -> Event | UnknownEvent:
    if not isinstance(obj, dict):
        raise EventDecodeError(f"Event envelope must be an object, got {type(obj).__name__}")

    type_raw = obj.get("type")
    if not isinstance(type_raw, str):
        raise EventDecodeError("Event envelope is missing a string 'type'")

    payload_raw = obj.get("payload", {})
    if payload_raw is None:
        payload_raw = {}
    if not isinstance(payload_raw, dict):
        raise EventDecodeError(f"Payload of {type_raw} must be an object")

    if type_raw not in EVENT_TYPES:
        return UnknownEvent(type=type_raw, payload=dict(payload_raw))

    try:
        event = cast(Event, _adapter(type_raw).validate_python(payload_raw))
    except ValidationError as e:
        raise EventDecodeError(f"Invalid payload for {type_raw}: {e}") from e
    return event


def event_to_json(event: Event | UnknownEvent) -> dict[str, object]:
    if isinstance(event, UnknownEvent):
        return {"type": event.type, "payload": dict(event.payload)}
    if isinstance(event, SetTaskLists):
        # Store-held task lists are read-only proxies, which pydantic cannot dump.
        event = replace(event, task_lists=dict(event.task_lists))
    payload = _adapter(event.wire_name).dump_python(event, mode="json")
    return {"type": event.wire_name, "payload": payload}


def task_lists_from_json(obj: object) -> dict[str, tuple[TaskMetadata, ...]]:
    try:
        return TaskListsAdapter.validate_python(obj)
    except ValidationError as e:
        raise EventDecodeError(f"Invalid task lists: {e}") from e


def events_from_json(items: object) -> list[Event | UnknownEvent]:
    if not isinstance(items, list):
        raise EventDecodeError("Expected a JSON array of events")
    return [event_from_json(item) for item in items]


__all__ = [
    "EVENT_TYPES",
    "Event",
    "EventDecodeError",
    "InitializeView",
    "RegisterTaskRunner",
    "SelectTask",
    "SetProjectRoot",
    "SetTaskLists",
    "SetToolbarVisibility",
    "TaskCompleted",
    "TaskErrored",
    "TaskProgress",
    "TaskStarted",
    "TaskStopped",
    "TasksReady",
    "UnknownEvent",
    "UnregisterTaskRunner",
    "event_from_json",
    "event_to_json",
    "events_from_json",
    "task_lists_from_json",
]
