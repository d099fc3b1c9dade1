"""
Input normalization helpers shared by every route.

- Emails are compared case-insensitively, so they are stored lower-cased.
- Fields that accept either a list of strings or a comma-separated string
  are normalized to an ordered list of non-empty, trimmed strings.
"""

from typing import Any, Iterable, List, Mapping

from pydantic import EmailStr, TypeAdapter
from pydantic import ValidationError as SchemaValidationError

from app.core.errors import ValidationError

_email_adapter = TypeAdapter(EmailStr)


def normalize_email(value: Any) -> str:
    return str(value).strip().lower()


def is_valid_email(value: str) -> bool:
    """Syntax check through pydantic's EmailStr (no DNS lookup)."""
    try:
        _email_adapter.validate_python(value)
    except SchemaValidationError:
        return False
    return True


def normalize_string_list(value: Any) -> List[str]:
    """
    Canonical ordered list of strings.

    ["a", " b "] -> ["a", "b"]; "a, b ,c" -> ["a", "b", "c"]; 42 -> []
    """
    if isinstance(value, str):
        items: Iterable[Any] = value.split(",")
    elif isinstance(value, (list, tuple)):
        items = value
    else:
        return []
    cleaned = []
    for item in items:
        if item is None:
            continue
        text = str(item).strip()
        if text:
            cleaned.append(text)
    return cleaned


def is_missing(value: Any) -> bool:
    """Absent, null, empty string or a zero id counts as missing."""
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, (int, float)):
        return value == 0
    return False


def require_fields(data: Mapping[str, Any], *fields: str) -> None:
    """Raise ValidationError naming the required fields if any is missing."""
    if any(is_missing(data.get(field)) for field in fields):
        if len(fields) == 1:
            raise ValidationError(f"{fields[0]} is required")
        names = ", ".join(fields[:-1]) + " and " + fields[-1]
        raise ValidationError(f"{names} are required")
