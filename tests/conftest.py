from __future__ import annotations

from pathlib import Path

import pytest

from taskcall import Context, Dispatcher, TaskRegistry, collect_tasks, task


EXAMPLE_TASKFILE = Path(__file__).resolve().parents[1] / "examples" / "taskfile.py"


@pytest.fixture()
def example_path() -> Path:
    return EXAMPLE_TASKFILE


@pytest.fixture()
def calls() -> list:
    return []


@pytest.fixture()
def registry(calls: list) -> TaskRegistry:
    """Registry mirroring the example taskfile, plus a few failure cases."""

    @task()
    def say_hello(ctx, surname):
        calls.append(("say_hello", surname))
        ctx.echo(f"Hello, I am {ctx.name} {surname}")

    @task()
    def say_hello_and_bye(ctx, *args):
        calls.append(("say_hello_and_bye",) + args)
        ctx.call("say_hello", *args)
        ctx.echo("Bye!")

    @task()
    def ping(ctx):
        calls.append(("ping",))
        ctx.echo("pong")

    @task()
    def show_args(ctx, *args):
        calls.append(("show_args",) + args)
        for a in args:
            ctx.echo(f"[{a}]")

    @task()
    def uses_unset(ctx):
        calls.append(("uses_unset",))
        ctx.echo("before")
        ctx.echo(ctx.missing)
        ctx.echo("after")

    @task()
    def counter(ctx):
        ctx.count = ctx.get("count", 0) + 1
        ctx.call("bump")
        ctx.echo(ctx.count)

    @task()
    def bump(ctx):
        ctx.count += 1

    @task()
    def boom(ctx):
        calls.append(("boom",))
        raise ValueError("kaput")

    return collect_tasks(locals())


@pytest.fixture()
def dispatcher(registry: TaskRegistry) -> Dispatcher:
    return Dispatcher(registry, Context({"name": "Andres"}))
