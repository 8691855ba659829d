"""A minimal host for the transition function.

The store owns the only live `AppState` and serialises events through
`app`. It is a context object; nothing here is module-level state.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from .reducers import app
from .selection import Comparator, locale_compare
from .types import AppState

logger = logging.getLogger(__name__)

Listener = Callable[[AppState], None]


class ReentrantDispatchError(RuntimeError):
    pass


class AppStore:
    def __init__(
        self, initial_state: AppState | None = None, *, compare: Comparator = locale_compare
    ) -> None:
        self._state = initial_state if initial_state is not None else AppState()
        self._compare = compare
        self._listeners: list[Listener] = []
        self._dispatching = False

    @property
    def state(self) -> AppState:
        return self._state

    def dispatch(self, event: object) -> AppState:
        if self._dispatching:
            raise ReentrantDispatchError("Events must not be dispatched from a listener")

        previous = self._state
        self._dispatching = True
        try:
            self._state = app(previous, event, compare=self._compare)
        finally:
            self._dispatching = False

        active = self._state.active_task_id
        logger.debug(
            "Event dispatched",
            extra={
                "event": type(event).__name__,
                "changed": self._state is not previous,
                "active_task_id": active.to_json() if active else None,
            },
        )

        if self._state is not previous:
            self._dispatching = True
            try:
                for listener in list(self._listeners):
                    listener(self._state)
            finally:
                self._dispatching = False
        return self._state

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Call `listener` with every new state. Returns an unsubscribe callable."""

        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe
