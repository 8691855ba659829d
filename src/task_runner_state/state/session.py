"""What one session hands to the next.

Only the active task and the toolbar visibility survive a restart. The
restored task id is a hint: it is consumed by the first `TasksReady` event
whether or not the task still exists.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path

from .types import AppState, TaskId

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class SessionSnapshot:
    active_task_id: TaskId | None = None
    visible: bool | None = None

    def to_json(self) -> dict[str, object]:
        return {
            "active_task_id": self.active_task_id.to_json() if self.active_task_id else None,
            "visible": self.visible,
        }

    @staticmethod
    def from_json(obj: dict[str, object]) -> SessionSnapshot:
        visible_raw = obj.get("visible")
        visible = visible_raw if isinstance(visible_raw, bool) else None
        return SessionSnapshot(
            active_task_id=TaskId.from_json(obj.get("active_task_id")), visible=visible
        )


def serialize_session(state: AppState) -> SessionSnapshot:
    return SessionSnapshot(active_task_id=state.active_task_id, visible=state.visible)


def create_initial_app_state(snapshot: SessionSnapshot | None = None) -> AppState:
    if snapshot is None:
        return AppState()
    return AppState(
        previous_session_active_task_id=snapshot.active_task_id,
        previous_session_visible=snapshot.visible,
        show_placeholder_initially=bool(snapshot.visible),
    )


def load_session_snapshot(path: Path) -> SessionSnapshot | None:
    """Read a snapshot written by a previous session, if there is one."""

    if not path.exists():
        return None

    raw = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(raw, dict):
        logger.warning("Ignoring malformed session snapshot", extra={"path": str(path)})
        return None
    return SessionSnapshot.from_json(raw)
