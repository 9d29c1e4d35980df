from __future__ import annotations

from datetime import date
from decimal import Decimal

import pytest

from office_manager.common.http import bearer_token
from office_manager.common.validators import optional_text, parse_date_field, parse_decimal, parse_enum, parse_id
from office_manager.core.enums import TaskPriority
from office_manager.core.exceptions import AuthenticationError, ValidationError


def test_optional_text_blank_is_none():
    assert optional_text("   ") is None
    assert optional_text(None) is None
    assert optional_text("  x ") == "x"


@pytest.mark.parametrize("value", ["abc", None, "0", -3])
def test_parse_id_rejects(value):
    with pytest.raises(ValidationError):
        parse_id(value, "userId")


def test_parse_enum_default_and_value():
    assert parse_enum(TaskPriority, "", TaskPriority.MEDIUM, "priority") is TaskPriority.MEDIUM
    assert parse_enum(TaskPriority, " High ", TaskPriority.MEDIUM, "priority") is TaskPriority.HIGH


def test_parse_enum_is_case_sensitive():
    with pytest.raises(ValidationError, match="priority must be one of: Low, Medium, High"):
        parse_enum(TaskPriority, "high", TaskPriority.MEDIUM, "priority")


def test_parse_date_accepts_datetime_strings():
    assert parse_date_field("2026-03-01T00:00:00.000Z", "dueDate") == date(2026, 3, 1)
    assert parse_date_field("", "dueDate") is None


def test_parse_decimal():
    assert parse_decimal("85000.00", "salary") == Decimal("85000.00")
    with pytest.raises(ValidationError):
        parse_decimal("NaN", "salary")


def test_bearer_token():
    assert bearer_token("Bearer abc") == "abc"
    assert bearer_token("bearer abc") == "abc"
    with pytest.raises(AuthenticationError):
        bearer_token(None)
    with pytest.raises(AuthenticationError):
        bearer_token("Basic abc")
