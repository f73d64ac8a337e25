"""
Persistence access for users.

``UserRepository`` wraps a SQLAlchemy ``Session`` and exposes the
handful of queries the service layer needs.  Every mutating method
commits immediately, so each call is a single all-or-nothing write.  On
failure the session is rolled back and the original SQLAlchemy error is
re-raised for the service to translate.
"""

from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from ..models.user import User


class UserRepository:
    """Store for ``User`` rows bound to one session."""

    def __init__(self, db: Session):
        self.db = db

    def find_all(self) -> List[User]:
        return list(self.db.scalars(select(User).order_by(User.id)))

    def find_by_id(self, user_id: int) -> Optional[User]:
        return self.db.get(User, user_id)

    def find_by_email(self, email: Optional[str]) -> Optional[User]:
        if email is None:
            return None
        return self.db.scalars(select(User).where(User.email == email)).first()

    def insert(self, user: User) -> User:
        self.db.add(user)
        self._commit()
        self.db.refresh(user)
        return user

    def update(self, user: User) -> User:
        self._commit()
        self.db.refresh(user)
        return user

    def delete(self, user: User) -> None:
        self.db.delete(user)
        self._commit()

    def discard_changes(self) -> None:
        """Throw away pending in-session modifications."""
        self.db.rollback()

    def _commit(self) -> None:
        try:
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
