from __future__ import annotations

import sys
from collections.abc import Iterator
from pathlib import Path

import pytest
from loguru import logger

from cfpromise import logging_utils


@pytest.fixture(autouse=True)
def _restore_logger(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    monkeypatch.setattr(logging_utils, "_CONFIGURED", None)
    yield
    logger.remove()
    logger.add(sys.stderr)


def test_logs_go_to_configured_file(tmp_path: Path) -> None:
    log_file = tmp_path / "module.log"
    logging_utils.configure_logging("debug", log_file)

    logger.debug("session.started module={}", "mymod")
    logger.remove()

    content = log_file.read_text(encoding="utf-8")
    assert "DEBUG" in content
    assert "session.started module=mymod" in content


def test_level_filters_records(tmp_path: Path) -> None:
    log_file = tmp_path / "module.log"
    logging_utils.configure_logging("WARNING", log_file)

    logger.info("hidden")
    logger.warning("shown")
    logger.remove()

    content = log_file.read_text(encoding="utf-8")
    assert "hidden" not in content
    assert "shown" in content


def test_configuring_twice_is_a_no_op(tmp_path: Path) -> None:
    log_file = tmp_path / "module.log"
    logging_utils.configure_logging("INFO", log_file)
    logging_utils.configure_logging("info", log_file)

    logger.info("once")
    logger.remove()

    assert log_file.read_text(encoding="utf-8").count("once") == 1
