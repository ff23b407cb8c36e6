"""Load a taskfile from disk into a registry plus initial variables."""

from __future__ import annotations

import importlib.util
import sys
from dataclasses import dataclass, field
from pathlib import Path

from .core import TaskRegistry, collect_tasks, collect_variables
from .errors import TaskfileError, TaskfileLoadError, TaskfileNotFoundError
from .logging import get_logger


DEFAULT_TASKFILE = "taskfile.py"
MODULE_NAME = "taskcall_taskfile"

log = get_logger("taskcall.loader")


@dataclass
class Taskfile:
    path: Path
    registry: TaskRegistry
    variables: dict = field(default_factory=dict)


def load_taskfile(path: str | Path = DEFAULT_TASKFILE) -> Taskfile:
    """Execute the taskfile at `path` as a fresh module and collect its tasks.

    The file runs under its own module name rather than `__main__`, so a
    trailing `taskcall.run(globals())` guard does not fire. While it executes,
    its directory is first on `sys.path`, as when running the file as a
    script; `sys.path` and `sys.modules` are restored once the tasks are
    collected, so sibling modules must be imported at the top of the taskfile.
    """
    p = Path(path)
    if not p.is_file():
        raise TaskfileNotFoundError(f"taskfile not found: {p}")
    p = p.resolve()

    spec = importlib.util.spec_from_file_location(MODULE_NAME, p)
    if spec is None or spec.loader is None:
        raise TaskfileLoadError(f"cannot load taskfile: {p}")
    module = importlib.util.module_from_spec(spec)

    parent = str(p.parent)
    added_path = parent not in sys.path
    if added_path:
        sys.path.insert(0, parent)
    previous = sys.modules.get(MODULE_NAME)
    sys.modules[MODULE_NAME] = module
    try:
        spec.loader.exec_module(module)
        namespace = vars(module)
        taskfile = Taskfile(
            path=p,
            registry=collect_tasks(namespace),
            variables=collect_variables(namespace),
        )
    except TaskfileError:
        raise
    except Exception as e:  # noqa: BLE001
        log.debug("Failed to execute %s", p, exc_info=True)
        raise TaskfileLoadError(f"error in taskfile {p}: {type(e).__name__}: {e}") from e
    finally:
        if added_path and parent in sys.path:
            sys.path.remove(parent)
        if previous is None:
            sys.modules.pop(MODULE_NAME, None)
        else:
            sys.modules[MODULE_NAME] = previous
    log.info("Loaded %d task(s) from %s", len(taskfile.registry), p)
    return taskfile
