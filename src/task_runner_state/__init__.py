"""Task Runner State.

Keeps track of the single active task among the tasks offered by
dynamically registered task runners:
- a pure transition function over a closed set of events
- deterministic selection of a default task
- settings loaded from `.env`
- structured logging
"""

__version__ = "0.1.0"

from task_runner_state.config import TaskRunnerSettings

__all__ = ["__version__", "TaskRunnerSettings"]
