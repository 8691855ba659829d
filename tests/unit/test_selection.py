"""Unit tests for the initial-task selector.

The ranking has to be independent of runner registration order, so most
tests check both orderings of the task lists.
"""

from __future__ import annotations

import locale
from functools import cmp_to_key

import pytest

from task_runner_state.state.selection import (
    flatten,
    get_initial_task_meta,
    locale_compare,
    system_locale_compare,
)
from task_runner_state.state.types import TaskId


def _pick(*tasks, previous=None, active=None):
    lists: dict[str, list] = {}
    for task in tasks:
        lists.setdefault(task.task_runner_id, []).append(task)
    return get_initial_task_meta(previous, active, lists)


def test_flatten_concatenates_in_order() -> None:
    assert flatten([[1, 2], [], (3,)]) == [1, 2, 3]


def test_empty_lists_select_nothing() -> None:
    assert get_initial_task_meta(None, None, {}) is None
    assert get_initial_task_meta(None, None, {"r": []}) is None


def test_disabled_tasks_are_never_selected(task_factory) -> None:
    one = task_factory("r", "one", disabled=True)
    two = task_factory("s", "two", disabled=True, priority=10)

    assert _pick(one, two) is None
    assert _pick(one, two, previous=one.task_id, active=two.task_id) is None


def test_restore_hint_wins_over_active_and_ranking(task_factory) -> None:
    a = task_factory("runner-a", "a", disabled=False, priority=5)
    b = task_factory("runner-b", "b", disabled=False, priority=1)

    assert _pick(a, b, previous=b.task_id, active=a.task_id) is b
    assert _pick(b, a, previous=b.task_id, active=a.task_id) is b


def test_current_selection_is_kept_over_ranking(task_factory) -> None:
    best = task_factory("r", "best", priority=10)
    kept = task_factory("r", "kept", priority=0)

    assert _pick(best, kept, active=kept.task_id) is kept
    assert _pick(kept, best, active=kept.task_id) is kept


def test_unmatched_hints_fall_back_to_ranking(task_factory) -> None:
    low = task_factory("r", "low", priority=1)
    high = task_factory("r", "high", priority=2)

    chosen = _pick(low, high, previous=TaskId("x", "y"), active=TaskId("x", "z"))

    assert chosen is high


def test_restore_hint_on_disabled_task_is_ignored(task_factory) -> None:
    hinted = task_factory("r", "hinted", disabled=True)
    other = task_factory("r", "other")

    assert _pick(hinted, other, previous=hinted.task_id) is other


@pytest.mark.parametrize("reverse", [False, True])
def test_explicitly_enabled_beats_neither(task_factory, reverse: bool) -> None:
    neither = task_factory("a", "neither")
    enabled = task_factory("b", "enabled", disabled=False)

    tasks = (enabled, neither) if reverse else (neither, enabled)
    assert _pick(*tasks) is enabled


def test_priority_decides_between_explicitly_enabled_tasks(task_factory) -> None:
    enabled_low = task_factory("a", "low", disabled=False, priority=1)
    enabled_high = task_factory("b", "high", disabled=False, priority=2)
    neither_high = task_factory("c", "neither", priority=3)

    assert _pick(enabled_low, enabled_high) is enabled_high
    assert _pick(enabled_high, enabled_low) is enabled_high
    # Explicit enablement is compared before priority, in either order.
    assert _pick(enabled_low, neither_high) is enabled_low
    assert _pick(neither_high, enabled_low) is enabled_low


def test_missing_priority_counts_as_zero(task_factory) -> None:
    negative = task_factory("a", "negative", priority=-1)
    missing = task_factory("b", "missing")

    assert _pick(negative, missing) is missing
    assert _pick(missing, negative) is missing


@pytest.mark.parametrize("reverse", [False, True])
def test_runner_name_breaks_priority_ties(task_factory, reverse: bool) -> None:
    beta = task_factory("r1", "task", runner_name="beta", disabled=False)
    alpha = task_factory("r2", "task", runner_name="alpha", disabled=False)

    tasks = (alpha, beta) if reverse else (beta, alpha)
    assert _pick(*tasks) is alpha


@pytest.mark.parametrize("reverse", [False, True])
def test_type_breaks_runner_name_ties(task_factory, reverse: bool) -> None:
    beta = task_factory("r", "beta", runner_name="Runner")
    alpha = task_factory("r", "alpha", runner_name="Runner")

    tasks = (alpha, beta) if reverse else (beta, alpha)
    assert _pick(*tasks) is alpha


def test_full_tie_keeps_first_seen(task_factory) -> None:
    first = task_factory("r1", "same", runner_name="Same")
    second = task_factory("r2", "same", runner_name="Same")

    assert _pick(first, second) is first
    assert _pick(second, first) is second


def test_comparator_is_pluggable(task_factory) -> None:
    alpha = task_factory("a", "t", runner_name="alpha")
    beta = task_factory("b", "t", runner_name="beta")

    def reverse(a: str, b: str) -> int:
        return -locale_compare(a, b)

    chosen = get_initial_task_meta(None, None, {"a": [alpha], "b": [beta]}, compare=reverse)

    assert chosen is beta


def test_locale_compare_orders_case_and_accents_as_ties() -> None:
    words = ["gamma", "Beta", "beta", "Alpha", "álpha", "alpha"]

    ordered = sorted(words, key=cmp_to_key(locale_compare))

    assert ordered == ["alpha", "Alpha", "álpha", "beta", "Beta", "gamma"]
    assert locale_compare("a", "a") == 0
    assert locale_compare("B", "a") == 1
    assert locale_compare("a", "B") == -1


def test_system_locale_compare_follows_strcoll(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(locale, "strcoll", lambda a, b: 42 if a > b else -42 if a < b else 0)

    assert system_locale_compare("b", "a") == 1
    assert system_locale_compare("a", "b") == -1
    assert system_locale_compare("a", "a") == 0
