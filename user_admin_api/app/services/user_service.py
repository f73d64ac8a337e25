"""
Business logic for users.

``UserService`` implements the four operations of the user resource
(list, create, update, delete) on top of a ``UserRepository``.  The
repository, and thus the database session, is injected by the caller;
the service keeps no state between requests.

Failures are reported by raising the errors from ``core.errors``; the
API layer turns them into HTTP responses.
"""

import json
import logging
from datetime import datetime, timezone
from typing import List, Union

from pydantic import ValidationError
from sqlalchemy.exc import IntegrityError

from ..core.errors import BadRequestError, ConflictError, NotFoundError, ValidationFailedError
from ..models.user import User
from ..repositories.user_repository import UserRepository
from ..schemas.user import UserCreate, UserPatch, UserRead
from .validation import validate_user


logger = logging.getLogger(__name__)

EMAIL_EXISTS = "Email already exists."
EMAIL_TAKEN = "Email already used by another user."
INVALID_JSON = "Invalid JSON format."


class UserService:
    """Operations on the user resource."""

    def __init__(self, repository: UserRepository):
        self.repository = repository

    def list_users(self) -> List[UserRead]:
        """Return every stored user."""
        return [UserRead.model_validate(user) for user in self.repository.find_all()]

    def create_user(self, data: UserCreate) -> UserRead:
        """Create a new user.

        The email must not be in use yet.  ``created_at`` is set to the
        current UTC time before the value is validated; nothing is
        written when validation fails.
        """
        if self.repository.find_by_email(data.email) is not None:
            logger.warning("Rejected user creation: email %s already exists", data.email)
            raise ConflictError(EMAIL_EXISTS)

        user = User(**data.model_dump(), created_at=datetime.now(timezone.utc))

        violations = validate_user(user)
        if violations:
            logger.warning("Rejected user creation: %d validation error(s)", len(violations))
            raise ValidationFailedError(violations)

        try:
            self.repository.insert(user)
        except IntegrityError as exc:
            # Another request stored the same email between lookup and insert.
            logger.warning("Unique constraint hit while creating user %s", data.email)
            raise ConflictError(EMAIL_EXISTS) from exc

        logger.info("Created user %s (id=%s)", user.email, user.id)
        return UserRead.model_validate(user)

    def update_user(self, user_id: int, body: Union[bytes, str]) -> UserRead:
        """Apply a partial update to an existing user.

        ``body`` is the raw request payload.  It must be a non-empty JSON
        object; only the keys it contains are applied.  ``id`` and
        ``created_at`` can not be changed.
        """
        user = self._get_or_404(user_id)
        patch = self.parse_patch(body)

        if patch.sets("email") and patch.email != user.email:
            owner = self.repository.find_by_email(patch.email)
            if owner is not None and owner.id != user.id:
                logger.warning("Rejected update of user %s: email %s is taken", user_id, patch.email)
                raise ConflictError(EMAIL_TAKEN)

        changes = patch.changes()
        for field, value in changes.items():
            setattr(user, field, value)

        violations = validate_user(user)
        if violations:
            self.repository.discard_changes()
            logger.warning("Rejected update of user %s: %d validation error(s)", user_id, len(violations))
            raise ValidationFailedError(violations)

        try:
            self.repository.update(user)
        except IntegrityError as exc:
            logger.warning("Unique constraint hit while updating user %s", user_id)
            raise ConflictError(EMAIL_TAKEN) from exc

        logger.info("Updated user %s (fields: %s)", user_id, ", ".join(sorted(changes)) or "none")
        return UserRead.model_validate(user)

    def delete_user(self, user_id: int) -> None:
        """Permanently remove a user."""
        user = self._get_or_404(user_id)
        self.repository.delete(user)
        logger.info("Deleted user %s", user_id)

    @staticmethod
    def parse_patch(body: Union[bytes, str]) -> UserPatch:
        """Decode a raw update payload into a ``UserPatch``.

        Raises ``BadRequestError`` when the payload is not a non-empty
        JSON object or when a field has a value of the wrong type.
        """
        try:
            data = json.loads(body)
        except (ValueError, RecursionError) as exc:
            raise BadRequestError(INVALID_JSON) from exc
        if not isinstance(data, dict) or not data:
            raise BadRequestError(INVALID_JSON)

        try:
            return UserPatch.model_validate(data)
        except ValidationError as exc:
            details = [
                f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}"
                for error in exc.errors()
            ]
            raise BadRequestError("Invalid field value.", details) from exc

    def _get_or_404(self, user_id: int) -> User:
        user = self.repository.find_by_id(user_id)
        if user is None:
            raise NotFoundError(f"User {user_id} not found.")
        return user
