from __future__ import annotations

import inspect
import sys
from enum import Enum
from typing import Mapping, NoReturn, Sequence

import typer

from .context import Context
from .core import TaskRegistry, collect_tasks, collect_variables
from .errors import (
    CommandNotFoundError,
    TaskArgumentError,
    TaskfileError,
    exit_code_for,
)
from .logging import get_logger


log = get_logger("taskcall.dispatcher")


class DispatchState(str, Enum):
    IDLE = "idle"
    RUNNING = "running"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


class Dispatcher:
    """Maps an argument list onto one task call.

    `argv[0]` names the task, the remaining items are handed to it untouched.
    Errors are not caught here: they end the run and the caller turns them
    into an exit status.
    """

    def __init__(self, registry: TaskRegistry, context: Context | None = None):
        self.registry = registry
        self.context = context if context is not None else Context()
        self.context.bind(self)
        self.state = DispatchState.IDLE
        self.depth = 0

    def dispatch(self, argv: Sequence[str]) -> None:
        if self.state is not DispatchState.IDLE:
            raise RuntimeError(f"dispatcher already used (state={self.state.value})")
        argv = list(argv)
        if not argv:
            self.state = DispatchState.FAILED
            raise CommandNotFoundError(None)
        name, args = argv[0], tuple(argv[1:])
        self.state = DispatchState.RUNNING
        try:
            self.invoke(name, args)
        except BaseException:
            self.state = DispatchState.FAILED
            raise
        self.state = DispatchState.SUCCEEDED

    def invoke(self, name: str, args: Sequence[str]) -> None:
        """Call task `name` with `args`; used for the top-level call and composition."""
        spec = self.registry.get(name)
        if spec is None:
            raise CommandNotFoundError(name)
        args = tuple(args)
        try:
            inspect.signature(spec.fn).bind(self.context, *args)
        except TypeError as e:
            raise TaskArgumentError(name, args, str(e)) from None
        log.info("%sRun: %s %s", "  " * self.depth, name, list(args))
        self.depth += 1
        try:
            spec.fn(self.context, *args)
        finally:
            self.depth -= 1


def report_failure(exc: BaseException, name: str | None = None) -> int:
    """Write a one-line diagnostic to stderr and return the exit status."""
    code = exit_code_for(exc)
    if isinstance(exc, KeyboardInterrupt):
        typer.echo("taskcall: interrupted", err=True)
    elif isinstance(exc, SystemExit):
        # sys.exit("message") prints the message, as the interpreter would
        if exc.code is not None and not isinstance(exc.code, int):
            typer.echo(str(exc.code), err=True)
    elif isinstance(exc, TaskfileError):
        typer.echo(f"taskcall: {exc}", err=True)
    else:
        log.error("Task failed (%s)", name or "?", exc_info=exc)
        typer.echo(f"taskcall: {name or 'task'}: {type(exc).__name__}: {exc}", err=True)
    return code


def dispatch_argv(
    registry: TaskRegistry, argv: Sequence[str], variables: dict | None = None
) -> int:
    """Dispatch once and return the process exit status."""
    dispatcher = Dispatcher(registry, Context(variables))
    name = argv[0] if argv else None
    try:
        dispatcher.dispatch(argv)
    except BaseException as e:  # noqa: BLE001
        return report_failure(e, name)
    finally:
        sys.stdout.flush()
    return 0


def run(namespace: Mapping[str, object], argv: Sequence[str] | None = None) -> NoReturn:
    """Dispatch the command line against a taskfile's own namespace and exit.

    Meant as the last lines of a taskfile::

        if __name__ == "__main__":
            taskcall.run(globals())
    """
    if argv is None:
        argv = sys.argv[1:]
    try:
        registry = collect_tasks(namespace)
        variables = collect_variables(namespace)
    except Exception as e:  # noqa: BLE001
        sys.exit(report_failure(e))
    sys.exit(dispatch_argv(registry, argv, variables))
