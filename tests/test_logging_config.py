from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterator

import pytest

from user_admin_api.app.core.logging_config import SQL_LOGGER, UVICORN_LOGGERS, setup_logging


@pytest.fixture()
def bare_root_logger() -> Iterator[logging.Logger]:
    """Detach the root handlers (pytest installs its own) and restore them afterwards."""
    root = logging.getLogger()
    saved_handlers = root.handlers[:]
    saved_level = root.level
    sql_level = logging.getLogger(SQL_LOGGER).level
    root.handlers.clear()
    try:
        yield root
    finally:
        for handler in root.handlers:
            handler.close()
        root.handlers[:] = saved_handlers
        root.setLevel(saved_level)
        logging.getLogger(SQL_LOGGER).setLevel(sql_level)


def test_console_and_file_handlers_are_installed_once(bare_root_logger: logging.Logger, tmp_path: Path) -> None:
    logfile = tmp_path / "api.log"

    setup_logging("debug", str(logfile))
    setup_logging("debug", str(logfile))

    assert len(bare_root_logger.handlers) == 2
    assert bare_root_logger.level == logging.DEBUG
    logging.getLogger("user_admin_api.test").info("user created")
    for handler in bare_root_logger.handlers:
        handler.flush()
    assert "[INFO] user_admin_api.test: user created" in logfile.read_text(encoding="utf-8")


def test_level_is_applied_when_handlers_already_exist(bare_root_logger: logging.Logger) -> None:
    bare_root_logger.addHandler(logging.NullHandler())

    setup_logging("warning")

    assert bare_root_logger.level == logging.WARNING
    assert len(bare_root_logger.handlers) == 1


def test_unknown_level_falls_back_to_info(bare_root_logger: logging.Logger) -> None:
    setup_logging("chatty")

    assert bare_root_logger.level == logging.INFO


def test_sql_echo_controls_the_sqlalchemy_logger(bare_root_logger: logging.Logger) -> None:
    setup_logging(sql_echo=True)
    assert logging.getLogger(SQL_LOGGER).level == logging.INFO

    setup_logging(sql_echo=False)
    assert logging.getLogger(SQL_LOGGER).level == logging.WARNING


def test_uvicorn_loggers_propagate_to_root(bare_root_logger: logging.Logger) -> None:
    access = logging.getLogger("uvicorn.access")
    access.addHandler(logging.NullHandler())
    access.propagate = False

    setup_logging()

    for name in UVICORN_LOGGERS:
        assert logging.getLogger(name).handlers == []
        assert logging.getLogger(name).propagate is True
