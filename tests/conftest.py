from __future__ import annotations

import sys
from pathlib import Path
from typing import Iterator

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from user_admin_api.app.core.db import build_engine, build_session_factory, init_db
from user_admin_api.app.main import create_app
from user_admin_api.app.repositories.user_repository import UserRepository
from user_admin_api.app.services.user_service import UserService


@pytest.fixture()
def database_url(tmp_path: Path) -> str:
    return f"sqlite:///{tmp_path / 'users.sqlite3'}"


@pytest.fixture()
def session(database_url: str) -> Iterator[Session]:
    engine = build_engine(database_url)
    init_db(engine)
    db = build_session_factory(engine)()
    try:
        yield db
    finally:
        db.close()
        engine.dispose()


@pytest.fixture()
def service(session: Session) -> UserService:
    return UserService(UserRepository(session))


@pytest.fixture()
def app(database_url: str) -> FastAPI:
    return create_app(database_url=database_url)


@pytest.fixture()
def client(app: FastAPI) -> Iterator[TestClient]:
    with TestClient(app) as test_client:
        yield test_client
