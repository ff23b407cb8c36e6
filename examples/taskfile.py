#!/usr/bin/env python3
"""Example taskfile.

    taskcall -f examples/taskfile.py say_hello Cecilia
    python examples/taskfile.py say_hello_and_bye Cecilia
"""

import taskcall
from taskcall import task

VARIABLES = {"name": "Andres"}


@task()
def say_hello(ctx, surname):
    """Introduce yourself."""
    ctx.echo(f"Hello, I am {ctx.name} {surname}")


@task()
def say_hello_and_bye(ctx, *args):
    """Say hello, then goodbye."""
    ctx.call("say_hello", *args)
    ctx.echo("Bye!")


@task()
def files(ctx, pattern="*"):
    """List files in the current directory matching a glob."""
    ctx.sh(f"ls -1 {pattern} | sort")


if __name__ == "__main__":
    taskcall.run(globals())
