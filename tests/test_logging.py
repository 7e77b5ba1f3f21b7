"""Tests for assetpack.logging."""

from __future__ import annotations

import logging
from pathlib import Path

from assetpack.logging import configure_logging, get_logger


def test_console_defaults_to_warnings() -> None:
    logger = configure_logging()

    assert logger.level == logging.WARNING
    assert [handler.level for handler in logger.handlers] == [logging.WARNING]


def test_verbose_enables_debug_on_console() -> None:
    logger = configure_logging(verbose=True)

    assert logger.level == logging.DEBUG
    assert logger.handlers[0].level == logging.DEBUG


def test_log_file_records_debug_while_console_stays_quiet(tmp_path: Path) -> None:
    log_file = tmp_path / "assetpack.log"
    logger = configure_logging(log_file=log_file)

    get_logger("archive.index").debug("Skipping abc: no destination path member")
    for handler in logger.handlers:
        handler.flush()

    assert [handler.level for handler in logger.handlers] == [logging.WARNING, logging.DEBUG]
    assert "Skipping abc" in log_file.read_text(encoding="utf-8")
    configure_logging()
