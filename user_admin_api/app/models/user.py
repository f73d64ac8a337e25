from datetime import datetime
from typing import Optional

from sqlalchemy import Boolean, DateTime, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from ..core.db import Base


EMAIL_MAX_LENGTH = 180
FULL_NAME_MAX_LENGTH = 255
PHONE_MAX_LENGTH = 32


class User(Base):
    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    email: Mapped[str] = mapped_column(String(EMAIL_MAX_LENGTH), nullable=False, index=True)
    full_name: Mapped[Optional[str]] = mapped_column(String(FULL_NAME_MAX_LENGTH), nullable=True)
    phone: Mapped[Optional[str]] = mapped_column(String(PHONE_MAX_LENGTH), nullable=True)
    disabled: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    # Set by UserService.create_user; never touched afterwards.
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)

    __table_args__ = (UniqueConstraint("email", name="uq_users_email"),)

    def __repr__(self) -> str:
        return f"<User id={self.id} email={self.email!r}>"
