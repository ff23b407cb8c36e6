"""Errors raised while loading and dispatching a taskfile.

Every error carries the process exit status the CLI should finish with.
"""

from __future__ import annotations


class TaskfileError(Exception):
    """Base exception for all taskcall errors."""

    exit_code = 1


class CommandNotFoundError(TaskfileError):
    """Requested task name has no matching routine (or no name was given)."""

    exit_code = 127

    def __init__(self, name: str | None):
        self.name = name
        if name:
            super().__init__(f"command not found: {name}")
        else:
            super().__init__("command not found: no task name given")


class TaskArgumentError(TaskfileError):
    """Task was called with arguments its signature cannot accept."""

    def __init__(self, name: str, args: tuple[str, ...], reason: str):
        self.name = name
        self.args_given = args
        super().__init__(f"{name}: bad arguments {list(args)!r}: {reason}")


class UnsetVariableError(TaskfileError, AttributeError):
    """A task read a context variable that was never set."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"{name}: unbound variable")


class ShellCommandError(TaskfileError):
    def __init__(self, command: str, returncode: int):
        self.command = command
        self.returncode = returncode
        # Signals come back negative from subprocess; map them like a shell does.
        self.exit_code = returncode if returncode > 0 else 128 - returncode
        super().__init__(f"command failed with status {returncode}: {command}")


class DuplicateTaskError(TaskfileError):
    exit_code = 2


class TaskfileNotFoundError(TaskfileError):
    exit_code = 2


class TaskfileLoadError(TaskfileError):
    exit_code = 2


def exit_code_for(exc: BaseException) -> int:
    """Process exit status for an exception that ended a dispatch."""
    if isinstance(exc, TaskfileError):
        return exc.exit_code
    if isinstance(exc, KeyboardInterrupt):
        return 130
    if isinstance(exc, SystemExit):
        code = exc.code
        if code is None:
            return 0
        return code if isinstance(code, int) else 1
    return 1
