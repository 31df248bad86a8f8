"""Required-field validation for certificate requests."""

import re
from collections.abc import Iterable, Mapping
from typing import Any

BASE_REQUIRED_FIELDS: tuple[str, ...] = ("name", "email", "templateId")

_EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


def is_missing(value: Any) -> bool:
    """A field is missing if absent, null, or an empty string."""
    return value is None or value == ""


def validate_fields(body: Mapping[str, Any], fields: Iterable[str]) -> str | None:
    """Return the first field in ``fields`` missing from ``body``, else None.

    Fields are checked in declared order, so the result is deterministic
    for a given template.
    """
    for field in fields:
        if is_missing(body.get(field)):
            return field
    return None


def is_valid_email(value: Any) -> bool:
    return isinstance(value, str) and _EMAIL_RE.fullmatch(value) is not None
