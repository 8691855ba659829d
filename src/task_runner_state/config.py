"""Settings for hosts and tools built on the selection state.

Configuration is loaded from:
- environment variables
- and a local `.env` file (if present)
"""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from task_runner_state.state.selection import (
    Comparator,
    locale_compare,
    system_locale_compare,
)


class TaskRunnerSettings(BaseSettings):
    """Settings for the task runner selection state.

    Environment variables:
    - LOG_LEVEL                 (optional)
    - TASK_RUNNER_COLLATION     (optional, "unicode" or "locale")
    - TASK_RUNNER_SESSION_PATH  (optional)

    Notes:
        Pydantic-settings supports overriding the env file in tests via:
        `TaskRunnerSettings(_env_file=path_to_env)`.
    """

    log_level: str = Field(
        default="INFO",
        validation_alias="LOG_LEVEL",
        description="Root logging level",
    )

    collation: Literal["unicode", "locale"] = Field(
        default="unicode",
        validation_alias="TASK_RUNNER_COLLATION",
        description=(
            "How runner names and task types are compared when ranking tasks. "
            "'unicode' is independent of the host; 'locale' follows LC_COLLATE."
        ),
    )

    session_path: Path | None = Field(
        default=None,
        validation_alias="TASK_RUNNER_SESSION_PATH",
        description="JSON file holding the previous session snapshot",
    )

    model_config = SettingsConfigDict(
        env_prefix="",
        env_file=".env",
        extra="ignore",
    )

    @property
    def comparator(self) -> Comparator:
        """String comparator used by the initial-task selector."""

        if self.collation == "locale":
            return system_locale_compare
        return locale_compare
