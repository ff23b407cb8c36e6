from __future__ import annotations

from pathlib import Path
from typing import List, Optional

import typer

from . import __version__
from .dispatcher import dispatch_argv, report_failure
from .loader import DEFAULT_TASKFILE, load_taskfile
from .logging import get_logger


app = typer.Typer(
    add_completion=False,
    help="Run a task defined in a taskfile: taskcall [OPTIONS] TASK [ARGS]...",
)
log = get_logger("taskcall.cli")


def _print_version(value: bool) -> None:
    if value:
        typer.echo(__version__)
        raise typer.Exit(code=0)


# Option parsing stops at the task name; everything after it reaches the
# task verbatim, including things that look like options.
@app.command(
    context_settings={"allow_interspersed_args": False, "ignore_unknown_options": True}
)
def run_task(
    name: Optional[str] = typer.Argument(None, help="Task name to run", show_default=False),
    args: Optional[List[str]] = typer.Argument(
        None, help="Arguments passed to the task unchanged", show_default=False
    ),
    file: Path = typer.Option(
        Path(DEFAULT_TASKFILE), "--file", "-f", help="Path to the taskfile"
    ),
    list_tasks: bool = typer.Option(False, "--list", "-l", help="List tasks and exit"),
    log_file: Optional[Path] = typer.Option(
        None, "--log-file", help="Also write diagnostics to this file"
    ),
    version: bool = typer.Option(
        False, "--version", callback=_print_version, is_eager=True, help="Show version and exit"
    ),
):
    """Call task NAME from the taskfile with ARGS."""
    if log_file is not None:
        get_logger("taskcall", log_file=log_file)

    try:
        taskfile = load_taskfile(file)
    except BaseException as e:  # noqa: BLE001
        raise typer.Exit(code=report_failure(e))

    if list_tasks:
        _echo_task_list(taskfile.registry)
        raise typer.Exit(code=0)

    argv = ([name] if name is not None else []) + list(args or [])
    code = dispatch_argv(taskfile.registry, argv, taskfile.variables)
    if code:
        log.debug("Exit status %d for %s", code, argv)
        raise typer.Exit(code=code)


def _echo_task_list(registry) -> None:
    if not len(registry):
        typer.echo("No tasks defined. Decorate functions in the taskfile with @task().")
        return
    width = max(len(n) for n in registry.names())
    typer.echo("Available tasks:")
    for spec in registry:
        line = f"- {spec.name:<{width}}  {spec.help}" if spec.help else f"- {spec.name}"
        typer.echo(line.rstrip())


def main():  # pragma: no cover
    app(prog_name="taskcall")


if __name__ == "__main__":  # pragma: no cover
    main()
