"""
Application package.

The project is organised into layers: ``api`` (FastAPI routers),
``services`` (business rules), ``repositories`` (database access),
``models`` (SQLAlchemy tables), ``schemas`` (pydantic payloads) and
``core`` (configuration, database, logging and errors).  Versioning is
handled by grouping routers under ``api/<version>/``.
"""

from .main import app, create_app  # noqa: F401
