"""
Input validation helpers.

Pure functions; each raises ValidationError naming the field and the
violated constraint.
"""

import re
from datetime import datetime, timezone
from typing import Any, Iterable, Optional

from teamtasks.core.exceptions import ValidationError

# Deliberately permissive: local@domain.tld
EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


def require_non_empty(value: Any, field_name: str) -> str:
    """Ensure value is a string with at least one non-whitespace character."""
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"{field_name} is required and cannot be empty")
    return value


def require_length(value: str, field_name: str, min_length: int, max_length: int) -> str:
    """Ensure the trimmed value has a length in [min_length, max_length]."""
    trimmed = value.strip()
    if len(trimmed) < min_length or len(trimmed) > max_length:
        raise ValidationError(
            f"{field_name} must be between {min_length} and {max_length} characters"
        )
    return trimmed


def require_email_shape(value: str) -> str:
    if not EMAIL_PATTERN.match(value):
        raise ValidationError("Invalid email format")
    return value


def require_enum(value: Optional[str], allowed: Iterable[str], field_name: str) -> Optional[str]:
    """Ensure value, when present, is one of the allowed values."""
    allowed = list(allowed)
    if value is not None and value not in allowed:
        raise ValidationError(f"Invalid {field_name}. Must be one of: {', '.join(allowed)}")
    return value


def parse_date_value(value: str) -> datetime:
    """
    Parse an ISO-8601 date or timestamp. Callers pass the value already trimmed.

    Date-only values become midnight UTC; naive timestamps are taken as UTC.

    Raises:
        ValidationError: If the value cannot be parsed
    """
    if not isinstance(value, str):
        raise ValidationError("Invalid deadline format. Use ISO date format (YYYY-MM-DD)")
    text = value[:-1] + "+00:00" if value.endswith("Z") else value
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        raise ValidationError("Invalid deadline format. Use ISO date format (YYYY-MM-DD)")
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def require_parseable_date(value: Optional[str]) -> Optional[str]:
    """Ensure value, when present, is a parseable date. Past dates are allowed."""
    if value is None:
        return None
    parse_date_value(value)
    return value


def require_future_or_absent_date(value: Optional[str], now: Optional[datetime] = None) -> Optional[str]:
    """
    Ensure value, when present, parses and is not strictly before now.

    A date-only value means midnight UTC of that day, so today's date is
    already in the past.
    """
    if value is None:
        return None
    if parse_date_value(value) < (now or datetime.now(timezone.utc)):
        raise ValidationError("Deadline cannot be in the past")
    return value
