"""
Field level constraints for users.

``validate_user`` checks a user value (an ORM instance or anything with
the same attributes) and returns every violation it finds as a list of
messages.  An empty list means the value is valid.  Email syntax is
checked with the ``email_validator`` package; deliverability (DNS) is
not checked.
"""

import re
from typing import Any, List

from email_validator import EmailNotValidError, validate_email

from ..models.user import EMAIL_MAX_LENGTH, FULL_NAME_MAX_LENGTH, PHONE_MAX_LENGTH


PHONE_PATTERN = re.compile(r"\+?[0-9 ().-]+")


def validate_user(user: Any) -> List[str]:
    violations: List[str] = []
    violations.extend(_check_email(getattr(user, "email", None)))

    full_name = getattr(user, "full_name", None)
    if full_name is not None and len(full_name) > FULL_NAME_MAX_LENGTH:
        violations.append(f"Full name must be at most {FULL_NAME_MAX_LENGTH} characters.")

    phone = getattr(user, "phone", None)
    if phone is not None:
        if len(phone) > PHONE_MAX_LENGTH:
            violations.append(f"Phone must be at most {PHONE_MAX_LENGTH} characters.")
        if not PHONE_PATTERN.fullmatch(phone):
            violations.append("Phone may only contain digits, spaces, parentheses, dots, dashes and a leading '+'.")

    if not isinstance(getattr(user, "disabled", None), bool):
        violations.append("Disabled flag must be true or false.")

    return violations


def _check_email(email: Any) -> List[str]:
    if email is None or not str(email).strip():
        return ["Email is required."]
    problems = []
    if len(email) > EMAIL_MAX_LENGTH:
        problems.append(f"Email must be at most {EMAIL_MAX_LENGTH} characters.")
    try:
        validate_email(email, check_deliverability=False)
    except EmailNotValidError as exc:
        problems.append(f"Email is not a valid email address: {exc}")
    return problems
