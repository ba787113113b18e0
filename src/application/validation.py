"""Input coercion shared by the use cases.

Callers hand over loosely typed values (query strings, form fields, JSON
numbers); everything is normalized here so that malformed input is rejected
with a ValidationError before any transaction starts.
"""

from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import Any

from src.application.errors import ValidationError


def require_id(value: Any, label: str = "id") -> int:
    if isinstance(value, bool):
        raise ValidationError(f"Invalid {label}: must be a number")
    try:
        parsed = int(str(value).strip()) if isinstance(value, str) else int(value)
    except (TypeError, ValueError) as exc:
        raise ValidationError(f"Invalid {label}: must be a number") from exc
    if isinstance(value, float) and value != parsed:
        raise ValidationError(f"Invalid {label}: must be a whole number")
    if parsed <= 0:
        raise ValidationError(f"Invalid {label}: must be positive")
    return parsed


def to_decimal(value: Any, label: str) -> Decimal:
    if value is None or isinstance(value, bool):
        raise ValidationError(f"{label} is required")
    try:
        parsed = Decimal(str(value).strip())
    except (InvalidOperation, ValueError) as exc:
        raise ValidationError(f"{label} must be numeric") from exc
    if not parsed.is_finite():
        raise ValidationError(f"{label} must be a finite number")
    return parsed


def require_positive(value: Any, label: str) -> Decimal:
    parsed = to_decimal(value, label)
    if parsed <= 0:
        raise ValidationError(f"{label} must be greater than 0")
    return parsed


QUANTITY_STEP = Decimal("0.001")


def require_quantity(value: Any, label: str = "quantity") -> Decimal:
    """Positive amount that fits the three-decimal stock columns exactly."""
    parsed = require_positive(value, label)
    try:
        scaled = parsed.quantize(QUANTITY_STEP)
    except InvalidOperation as exc:
        raise ValidationError(f"{label} is too large") from exc
    if parsed != scaled:
        raise ValidationError(
            f"{label} supports at most 3 decimal places",
            details={"value": format(parsed, "f")},
        )
    return parsed


def require_text(value: Any, label: str) -> str:
    if value is None or not str(value).strip():
        raise ValidationError(f"{label} is required")
    return str(value).strip()


def to_date(value: Any, label: str) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        raw = value.strip()
        if raw.endswith("Z"):
            raw = raw[:-1] + "+00:00"
        try:
            return datetime.fromisoformat(raw).date()
        except ValueError as exc:
            raise ValidationError(f"{label} must be an ISO date") from exc
    raise ValidationError(f"{label} must be a date")


def format_quantity(value: Decimal) -> str:
    """Render a quantity without trailing zeros ("5", "12.5")."""
    normalized = value.normalize()
    return format(normalized, "f")
