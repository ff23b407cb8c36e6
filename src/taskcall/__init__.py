"""Run named Python functions from a single taskfile, shell-taskfile style.

`taskcall greet Ada` calls `greet(ctx, "Ada")` from `./taskfile.py`.
"""

__version__ = "0.1.0"

from .context import Context  # noqa: E402
from .core import TaskRegistry, TaskSpec, collect_tasks, task  # noqa: E402
from .dispatcher import Dispatcher, DispatchState, dispatch_argv, run  # noqa: E402
from .loader import Taskfile, load_taskfile  # noqa: E402

__all__ = [
    "__version__",
    "Context",
    "TaskRegistry",
    "TaskSpec",
    "collect_tasks",
    "task",
    "Dispatcher",
    "DispatchState",
    "dispatch_argv",
    "run",
    "Taskfile",
    "load_taskfile",
]
