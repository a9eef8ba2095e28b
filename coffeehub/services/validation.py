"""Sanitization and validation of incoming product payloads.

Sanitization only normalizes values (trimming, numeric coercion, the
description default) and never rejects anything. Validation then checks
the normalized fields and reports every violated rule at once.
"""

import math
from dataclasses import dataclass, field
from typing import Any, List, Mapping

from coffeehub.models import (
    DEFAULT_DESCRIPTION,
    DEFAULT_ORIGIN,
    DEFAULT_RATING,
    DEFAULT_ROAST,
    DEFAULT_TYPE,
)

MAX_NAME_LENGTH = 255
MIN_PRICE = 0.0
MAX_PRICE = 999999.99
MIN_RATING = 0.0
MAX_RATING = 5.0

OPTIONAL_TEXT_FIELDS = ("origin", "type", "roast")
NUMERIC_FIELDS = ("price", "rating")
ACCEPTED_FIELDS = ("name", "description") + OPTIONAL_TEXT_FIELDS + NUMERIC_FIELDS


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of validating a sanitized payload."""

    valid: bool
    errors: List[str] = field(default_factory=list)


def _coerce_number(value: Any) -> Any:
    """Turn ints, floats and numeric strings into floats; leave anything else as-is."""
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        try:
            return float(value)
        except OverflowError:
            # Integers beyond float range become infinite and fail the finiteness check
            return math.inf if value > 0 else -math.inf
    if isinstance(value, str):
        try:
            return float(value.replace(",", "."))
        except (ValueError, OverflowError):
            return value
    return value


def sanitize(payload: Mapping[str, Any], partial: bool = False) -> dict[str, Any]:
    """Normalize a raw payload into product fields.

    Args:
        payload: Decoded JSON object from the request body.
        partial: True for updates, where absent fields must stay absent.

    Returns:
        Dict holding only accepted fields that carry a value.
    """
    fields: dict[str, Any] = {}

    for name in ACCEPTED_FIELDS:
        if name not in payload or payload[name] is None:
            continue
        value = payload[name]
        if isinstance(value, str):
            value = value.strip()

        if name in NUMERIC_FIELDS:
            if value == "":
                continue
            value = _coerce_number(value)
        elif name in OPTIONAL_TEXT_FIELDS and value == "":
            continue
        elif name == "description" and value == "":
            value = DEFAULT_DESCRIPTION

        fields[name] = value

    if not partial and "description" not in fields:
        fields["description"] = DEFAULT_DESCRIPTION

    return fields


def _check_number(name: str, value: Any, minimum: float, maximum: float, errors: List[str]) -> None:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        errors.append(f"{name} must be a number")
    elif not math.isfinite(value):
        errors.append(f"{name} must be a finite number")
    elif name == "price":
        if value < minimum:
            errors.append("price must not be negative")
        elif value > maximum:
            errors.append(f"price must not exceed {maximum:.2f}")
    elif not minimum <= value <= maximum:
        errors.append(f"{name} must be between {minimum:g} and {maximum:g}")


def validate(fields: Mapping[str, Any], is_update: bool = False) -> ValidationResult:
    """Check sanitized fields against the product rules.

    In update mode each rule only applies to fields present in ``fields``.
    """
    errors: List[str] = []

    if "name" in fields:
        name = fields["name"]
        if not isinstance(name, str):
            errors.append("name must be text")
        elif not name:
            errors.append("name must not be empty")
        elif len(name) > MAX_NAME_LENGTH:
            errors.append(f"name must be at most {MAX_NAME_LENGTH} characters")
    elif not is_update:
        errors.append("name is required")

    if "price" in fields:
        _check_number("price", fields["price"], MIN_PRICE, MAX_PRICE, errors)
    elif not is_update:
        errors.append("price is required")

    if "rating" in fields:
        _check_number("rating", fields["rating"], MIN_RATING, MAX_RATING, errors)

    for name in OPTIONAL_TEXT_FIELDS + ("description",):
        if name in fields and not isinstance(fields[name], str):
            errors.append(f"{name} must be text")

    return ValidationResult(valid=not errors, errors=errors)


def apply_defaults(fields: Mapping[str, Any]) -> dict[str, Any]:
    """Fill absent optional fields for a new product."""
    return {
        "origin": DEFAULT_ORIGIN,
        "type": DEFAULT_TYPE,
        "roast": DEFAULT_ROAST,
        "rating": DEFAULT_RATING,
        "description": DEFAULT_DESCRIPTION,
        **fields,
    }
