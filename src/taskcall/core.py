from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Iterator, List, Mapping

from .errors import DuplicateTaskError, TaskfileLoadError


VARIABLES_ATTR = "VARIABLES"


@dataclass
class TaskSpec:
    name: str
    fn: Callable[..., None]
    help: str = ""


def task(name: str | None = None, help: str | None = None):
    """Decorator to declare a task on a function.

    The wrapped function receives the shared `Context` first, followed by the
    command-line arguments as plain strings.
    """

    def deco(fn: Callable[..., None]):
        spec = TaskSpec(
            name=name or fn.__name__,
            fn=fn,
            help=help if help is not None else _first_doc_line(fn),
        )
        setattr(fn, "_task_spec", spec)
        return fn

    return deco


def _first_doc_line(fn: Callable) -> str:
    doc = (fn.__doc__ or "").strip()
    return doc.splitlines()[0].strip() if doc else ""


class TaskRegistry:
    """Explicit mapping from task name to its spec."""

    def __init__(self, specs: List[TaskSpec] | None = None):
        self._specs: Dict[str, TaskSpec] = {}
        for spec in specs or []:
            self.register(spec)

    def register(self, spec: TaskSpec) -> None:
        existing = self._specs.get(spec.name)
        if existing is not None and existing.fn is not spec.fn:
            raise DuplicateTaskError(
                f"task {spec.name!r} defined twice "
                f"({_qualname(existing.fn)} and {_qualname(spec.fn)})"
            )
        self._specs[spec.name] = spec

    def get(self, name: str) -> TaskSpec | None:
        return self._specs.get(name)

    def names(self) -> List[str]:
        return sorted(self._specs)

    def __contains__(self, name: object) -> bool:
        return name in self._specs

    def __iter__(self) -> Iterator[TaskSpec]:
        return iter(self._specs[n] for n in self.names())

    def __len__(self) -> int:
        return len(self._specs)


def _qualname(fn: Callable) -> str:
    return getattr(fn, "__qualname__", repr(fn))


def collect_tasks(namespace: Mapping[str, object]) -> TaskRegistry:
    """Collect every decorated function found in a module namespace."""
    registry = TaskRegistry()
    for attr_name, obj in namespace.items():
        if attr_name.startswith("__"):
            continue
        spec = getattr(obj, "_task_spec", None)
        if isinstance(spec, TaskSpec):
            registry.register(spec)
    return registry


def collect_variables(namespace: Mapping[str, object]) -> dict:
    """Initial context variables declared as a top-level `VARIABLES` dict."""
    variables = namespace.get(VARIABLES_ATTR) or {}
    if not isinstance(variables, Mapping):
        raise TaskfileLoadError(
            f"{VARIABLES_ATTR} must be a mapping, got {type(variables).__name__}"
        )
    return dict(variables)
