"""
Logging setup shared by the application and the ``python -m`` runner.

Everything is routed through the root logger: the service and database
modules log under ``user_admin_api.*``, uvicorn's own loggers are made
to propagate instead of installing their handlers, and SQL echo is
enabled by raising the ``sqlalchemy.engine`` logger to INFO rather than
through ``create_engine(echo=True)``, which would attach a second
handler and print every statement twice.
"""

import logging
from pathlib import Path
from typing import Optional


LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

UVICORN_LOGGERS = ("uvicorn", "uvicorn.error", "uvicorn.access")
SQL_LOGGER = "sqlalchemy.engine"


def setup_logging(level: str = "INFO", logfile: Optional[str] = None, sql_echo: bool = False) -> None:
    """Configure logging for the API.

    Handlers (console, plus a file when ``logfile`` is given) are added
    to the root logger only if it has none yet, so calling this again,
    for instance once per ``create_app``, never duplicates output.  The
    levels are applied on every call.

    Parameters
    ----------
    level : str
        Level name for the root logger, case insensitive.  Unknown
        names fall back to INFO.
    logfile : Optional[str]
        File receiving a copy of the log, resolved against the working
        directory.
    sql_echo : bool
        Log every SQL statement issued by SQLAlchemy.
    """
    root = logging.getLogger()
    root.setLevel(getattr(logging, level.upper(), logging.INFO))

    if not root.handlers:
        formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)
        handlers = [logging.StreamHandler()]
        if logfile:
            handlers.append(logging.FileHandler(Path(logfile).resolve(), encoding="utf-8"))
        for handler in handlers:
            handler.setFormatter(formatter)
            root.addHandler(handler)

    for name in UVICORN_LOGGERS:
        uvicorn_logger = logging.getLogger(name)
        uvicorn_logger.handlers.clear()
        uvicorn_logger.propagate = True

    logging.getLogger(SQL_LOGGER).setLevel(logging.INFO if sql_echo else logging.WARNING)
