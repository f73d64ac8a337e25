"""
SQLAlchemy ORM models.

Import every model here so that ``Base.metadata`` knows about all tables
once this package is imported (see ``core.db.init_db``).
"""

from .user import User  # noqa: F401
