from __future__ import annotations

import sys
from pathlib import Path

import pytest

from taskcall import load_taskfile
from taskcall.loader import MODULE_NAME
from taskcall.errors import DuplicateTaskError, TaskfileLoadError, TaskfileNotFoundError


def test_load_example_taskfile(example_path: Path) -> None:
    taskfile = load_taskfile(example_path)
    assert taskfile.path == example_path
    assert taskfile.registry.names() == ["files", "say_hello", "say_hello_and_bye"]
    assert taskfile.variables == {"name": "Andres"}


def test_missing_taskfile(tmp_path: Path) -> None:
    with pytest.raises(TaskfileNotFoundError) as excinfo:
        load_taskfile(tmp_path / "taskfile.py")
    assert excinfo.value.exit_code == 2


def test_broken_taskfile(tmp_path: Path) -> None:
    path = tmp_path / "taskfile.py"
    path.write_text("raise RuntimeError('bad import')\n", encoding="utf-8")
    with pytest.raises(TaskfileLoadError) as excinfo:
        load_taskfile(path)
    assert "RuntimeError: bad import" in str(excinfo.value)


def test_duplicate_names_in_taskfile(tmp_path: Path) -> None:
    path = tmp_path / "taskfile.py"
    path.write_text(
        "from taskcall import task\n"
        "\n"
        "@task(name='x')\n"
        "def a(ctx):\n"
        "    pass\n"
        "\n"
        "@task(name='x')\n"
        "def b(ctx):\n"
        "    pass\n",
        encoding="utf-8",
    )
    with pytest.raises(DuplicateTaskError):
        load_taskfile(path)


def test_main_guard_does_not_fire_on_load(tmp_path: Path) -> None:
    path = tmp_path / "taskfile.py"
    path.write_text(
        "import taskcall\n"
        "\n"
        "@taskcall.task()\n"
        "def hello(ctx):\n"
        "    ctx.echo('hi')\n"
        "\n"
        "if __name__ == '__main__':\n"
        "    taskcall.run(globals())\n",
        encoding="utf-8",
    )
    taskfile = load_taskfile(path)
    assert taskfile.registry.names() == ["hello"]
    assert taskfile.variables == {}


def test_load_leaves_import_state_untouched(tmp_path: Path) -> None:
    path = tmp_path / "taskfile.py"
    path.write_text(
        "from dataclasses import dataclass\n"
        "from taskcall import task\n"
        "\n"
        "@dataclass\n"
        "class Target:\n"
        "    name: str\n"
        "\n"
        "@task()\n"
        "def hello(ctx):\n"
        "    ctx.echo(Target('x').name)\n",
        encoding="utf-8",
    )
    path_before = list(sys.path)
    load_taskfile(path)
    load_taskfile(path)
    assert sys.path == path_before
    assert MODULE_NAME not in sys.modules


def test_failed_load_leaves_import_state_untouched(tmp_path: Path) -> None:
    path = tmp_path / "taskfile.py"
    path.write_text("1 / 0\n", encoding="utf-8")
    path_before = list(sys.path)
    with pytest.raises(TaskfileLoadError):
        load_taskfile(path)
    assert sys.path == path_before
    assert MODULE_NAME not in sys.modules
