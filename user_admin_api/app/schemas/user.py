"""
Pydantic models for user data.

``UserCreate`` decodes a registration body, ``UserPatch`` carries a
partial update and ``UserRead`` encodes a stored user.  Field level
business rules (email format, lengths) are not enforced here but by
``services.validation`` so that every violation can be reported at
once, after the uniqueness checks have run.
"""

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class UserBase(BaseModel):
    model_config = ConfigDict(extra="ignore")

    email: Optional[str] = Field(None, examples=["user@example.com"])
    full_name: Optional[str] = Field(None, examples=["Jane Doe"])
    phone: Optional[str] = Field(None, examples=["+33 6 12 34 56 78"])


class UserCreate(UserBase):
    """Schema for creating a user.

    ``id`` and ``created_at`` are assigned by the server; if a client
    sends them they are ignored like any other unknown key.
    """

    disabled: bool = Field(False, examples=[False])


class UserPatch(UserBase):
    """Partial update of a user.

    Every field is optional.  A field that is absent from the request
    body is left untouched, while a field explicitly sent as ``null`` is
    cleared.  Pydantic records which fields were actually provided in
    ``model_fields_set``; ``changes`` relies on it to tell the two cases
    apart.  ``id`` and ``created_at`` are not declared and can therefore
    never be patched.
    """

    disabled: Optional[bool] = Field(None, examples=[True])

    def changes(self) -> Dict[str, Any]:
        """Return only the fields explicitly set in the request body."""
        return self.model_dump(include=self.model_fields_set)

    def sets(self, field: str) -> bool:
        return field in self.model_fields_set


class UserRead(UserBase):
    """Schema for reading a user from the API."""

    id: int
    email: str
    disabled: bool
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)

    @field_validator("created_at")
    @classmethod
    def assume_utc(cls, value: datetime) -> datetime:
        # SQLite returns stored timestamps without their offset; they are UTC.
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value


class MessageResponse(BaseModel):
    message: str


class ErrorBody(BaseModel):
    kind: str
    details: List[str]


class ErrorResponse(BaseModel):
    """Error envelope shared by every endpoint."""

    error: ErrorBody
