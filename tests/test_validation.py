from __future__ import annotations

from types import SimpleNamespace

import pytest

from user_admin_api.app.services.validation import validate_user


def _user(**overrides):
    fields = {"email": "jane@example.com", "full_name": "Jane", "phone": None, "disabled": False}
    fields.update(overrides)
    return SimpleNamespace(**fields)


def test_valid_user_has_no_violations() -> None:
    assert validate_user(_user()) == []
    assert validate_user(_user(phone="+1 (555) 010-9999")) == []


@pytest.mark.parametrize("email", [None, "", "   "])
def test_email_is_required(email) -> None:
    assert validate_user(_user(email=email)) == ["Email is required."]


@pytest.mark.parametrize("email", ["plainaddress", "jane@", "@example.com", "jane doe@example.com"])
def test_email_must_be_well_formed(email: str) -> None:
    violations = validate_user(_user(email=email))

    assert len(violations) == 1
    assert violations[0].startswith("Email is not a valid email address")


def test_overlong_email_reports_length() -> None:
    email = "a" * 60 + "@" + ".".join(["b" * 60] * 2) + ".com"

    violations = validate_user(_user(email=email))

    assert "Email must be at most 180 characters." in violations


def test_phone_rules_are_all_reported() -> None:
    violations = validate_user(_user(phone="x" * 40))

    assert violations == [
        "Phone must be at most 32 characters.",
        "Phone may only contain digits, spaces, parentheses, dots, dashes and a leading '+'.",
    ]


def test_disabled_must_be_boolean() -> None:
    assert validate_user(_user(disabled=None)) == ["Disabled flag must be true or false."]


def test_phone_with_trailing_newline_is_rejected() -> None:
    assert validate_user(_user(phone="0612\n")) == [
        "Phone may only contain digits, spaces, parentheses, dots, dashes and a leading '+'.",
    ]
