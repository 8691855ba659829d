"""Pick a default task when the task universe becomes ready.

The ranking must not depend on the order in which task runners registered:
runners come and go asynchronously, so two sessions with the same tasks must
pick the same one.
"""

from __future__ import annotations

import locale
import unicodedata
from collections.abc import Callable, Iterable, Mapping
from itertools import chain
from typing import TypeVar

from .types import TaskId, TaskMetadata, task_ids_are_equal

T = TypeVar("T")

Comparator = Callable[[str, str], int]


def flatten(iterables: Iterable[Iterable[T]]) -> list[T]:
    return list(chain.from_iterable(iterables))


def _strip_accents(value: str) -> str:
    decomposed = unicodedata.normalize("NFKD", value)
    return "".join(ch for ch in decomposed if not unicodedata.combining(ch))


def _collation_key(value: str) -> tuple[str, str, str]:
    # Base letters first, then accents, then lowercase before uppercase.
    decomposed = unicodedata.normalize("NFKD", value)
    return (_strip_accents(value).casefold(), decomposed.casefold(), decomposed.swapcase())


def locale_compare(a: str, b: str) -> int:
    """Compare two strings the way a human-facing sort would.

    Case and accents only break ties between otherwise equal strings, so
    "alpha" < "beta" < "Beta" < "gamma".
    """

    ka = _collation_key(a)
    kb = _collation_key(b)
    return (ka > kb) - (ka < kb)


def system_locale_compare(a: str, b: str) -> int:
    """Compare using the collation of the process locale (LC_COLLATE)."""

    result = locale.strcoll(a, b)
    return (result > 0) - (result < 0)


def _priority(task: TaskMetadata) -> float:
    return task.priority or 0


def _prefer(candidate: TaskMetadata, incumbent: TaskMetadata, compare: Comparator) -> bool:
    """Return True if `candidate` should replace `incumbent`."""

    # Explicitly enabled tasks beat tasks that are neither enabled nor disabled.
    if candidate.disabled is False and incumbent.disabled is None:
        return True
    if candidate.disabled is None and incumbent.disabled is False:
        return False

    priority_diff = _priority(candidate) - _priority(incumbent)
    if priority_diff != 0:
        return priority_diff > 0

    name_diff = compare(candidate.task_runner_name, incumbent.task_runner_name)
    if name_diff != 0:
        return name_diff < 0

    type_diff = compare(candidate.type, incumbent.type)
    if type_diff != 0:
        return type_diff < 0

    return False


def get_initial_task_meta(
    previous_session_active_task_id: TaskId | None,
    active_task_id: TaskId | None,
    task_lists: Mapping[str, Iterable[TaskMetadata]],
    *,
    compare: Comparator = locale_compare,
) -> TaskMetadata | None:
    """Select the task that should become active, or None.

    The restore hint wins outright, then the currently active task. Otherwise
    tasks are ranked by explicit enablement, priority (descending), runner
    name and type; on a full tie the first one seen is kept.
    """

    candidate: TaskMetadata | None = None
    still_active: TaskMetadata | None = None

    for task_meta in flatten(task_lists.values()):
        if task_meta.disabled is True:
            continue

        if previous_session_active_task_id is not None and task_ids_are_equal(
            task_meta, previous_session_active_task_id
        ):
            return task_meta

        # The restore hint may still appear later in the lists, so keep scanning.
        if still_active is None and active_task_id is not None:
            if task_ids_are_equal(task_meta, active_task_id):
                still_active = task_meta
                if previous_session_active_task_id is None:
                    return task_meta
                continue

        if candidate is None or _prefer(task_meta, candidate, compare):
            candidate = task_meta

    return still_active if still_active is not None else candidate
