"""
SQLAlchemy database integration.

This module provides the declarative ``Base`` shared by all ORM models,
helpers for building an engine and a session factory from a database
URL, ``init_db`` which creates the schema on application start, and
``get_db``, a FastAPI dependency yielding one session per request.

The session factory is stored on ``app.state`` by ``create_app`` rather
than at module level, so every application instance (and every test)
talks to its own database.
"""

import logging
from typing import Iterator

from fastapi import Request
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker


logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    """Declarative base class for ORM models."""


def build_engine(database_url: str) -> Engine:
    """Create an engine for ``database_url``.

    SQLite connections are opened with ``check_same_thread`` disabled
    because FastAPI runs synchronous dependencies and endpoints in a
    worker thread pool, so a session may be used from a thread other
    than the one that opened it.
    """
    connect_args = {}
    if database_url.startswith("sqlite"):
        connect_args["check_same_thread"] = False
    return create_engine(database_url, connect_args=connect_args)


def build_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(bind=engine, autoflush=False)


def init_db(engine: Engine) -> None:
    """Create all tables that do not exist yet.

    Importing the models package registers every table on
    ``Base.metadata``.
    """
    from .. import models  # noqa: F401

    Base.metadata.create_all(bind=engine)
    logger.info("Database schema ready (%s)", engine.url.render_as_string(hide_password=True))


def get_db(request: Request) -> Iterator[Session]:
    """Yield a request scoped session and close it afterwards."""
    session_factory = request.app.state.session_factory
    db = session_factory()
    try:
        yield db
    finally:
        db.close()
