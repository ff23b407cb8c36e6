"""Shared state handed to every task of one invocation."""

from __future__ import annotations

import shutil
import subprocess
import sys
from typing import TYPE_CHECKING, Any, Dict

import typer

from .errors import ShellCommandError, UnsetVariableError
from .logging import get_logger

if TYPE_CHECKING:
    from .dispatcher import Dispatcher


log = get_logger("taskcall.context")

_MISSING = object()


def _strict_shell() -> list[str]:
    bash = shutil.which("bash")
    if bash:
        return [bash, "-euo", "pipefail", "-c"]
    return ["sh", "-eu", "-c"]


class Context:
    """Variables shared by the tasks of a single run.

    Variables are read and written as attributes. Reading a variable that was
    never set raises `UnsetVariableError`, which aborts the run.
    """

    def __init__(self, variables: Dict[str, Any] | None = None):
        object.__setattr__(self, "_vars", dict(variables or {}))
        object.__setattr__(self, "_dispatcher", None)

    def __getattr__(self, name: str) -> Any:
        # Only reached when normal attribute lookup fails.
        if name.startswith("_"):
            raise AttributeError(name)
        value = self._vars.get(name, _MISSING)
        if value is _MISSING:
            raise UnsetVariableError(name)
        return value

    def __setattr__(self, name: str, value: Any) -> None:
        if hasattr(type(self), name) or name.startswith("_"):
            raise AttributeError(f"cannot use reserved name {name!r} as a variable")
        self._vars[name] = value

    def __delattr__(self, name: str) -> None:
        if name not in self._vars:
            raise UnsetVariableError(name)
        del self._vars[name]

    def __contains__(self, name: str) -> bool:
        return name in self._vars

    def __repr__(self) -> str:
        return f"Context({self._vars!r})"

    @property
    def vars(self) -> Dict[str, Any]:
        return dict(self._vars)

    def get(self, name: str, default: Any = None) -> Any:
        return self._vars.get(name, default)

    def bind(self, dispatcher: "Dispatcher") -> None:
        object.__setattr__(self, "_dispatcher", dispatcher)

    def call(self, name: str, *args: str) -> None:
        """Run another task in this same context, exactly with `args`."""
        if self._dispatcher is None:
            raise RuntimeError("context is not bound to a dispatcher")
        self._dispatcher.invoke(name, args)

    def echo(self, *parts: Any) -> None:
        typer.echo(" ".join(str(p) for p in parts))

    def sh(self, command: str, capture: bool = False) -> str | None:
        """Run `command` in a strict shell; a non-zero status aborts the run.

        With `capture=True` the command's stdout is returned without its
        trailing newline.
        """
        argv = _strict_shell() + [command]
        log.debug("sh: %s", command)
        # keep echo output ahead of the child's output
        sys.stdout.flush()
        proc = subprocess.run(
            argv,
            stdout=subprocess.PIPE if capture else None,
            text=True,
            check=False,
        )
        if proc.returncode != 0:
            raise ShellCommandError(command, proc.returncode)
        if capture:
            return proc.stdout.rstrip("\n")
        return None
