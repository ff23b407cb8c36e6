from __future__ import annotations

from logging.handlers import RotatingFileHandler
from pathlib import Path

from taskcall.logging import get_logger


def _file_handlers(logger) -> list:
    return [h for h in logger.handlers if isinstance(h, RotatingFileHandler)]


def test_log_file_handler_added_once(tmp_path: Path) -> None:
    log_file = tmp_path / "a.log"
    logger = get_logger("taskcall.tests.once", log_file=log_file)
    get_logger("taskcall.tests.once", log_file=log_file)
    assert len(_file_handlers(logger)) == 1
    assert log_file.exists()


def test_new_log_file_replaces_old_one(tmp_path: Path) -> None:
    logger = get_logger("taskcall.tests.swap", log_file=tmp_path / "first.log")
    get_logger("taskcall.tests.swap", log_file=tmp_path / "nested" / "second.log")
    handlers = _file_handlers(logger)
    assert len(handlers) == 1
    assert handlers[0].baseFilename == str((tmp_path / "nested" / "second.log").absolute())

    logger.warning("hello file")
    handlers[0].flush()
    assert "hello file" in (tmp_path / "nested" / "second.log").read_text(encoding="utf-8")
    assert "hello file" not in (tmp_path / "first.log").read_text(encoding="utf-8")
