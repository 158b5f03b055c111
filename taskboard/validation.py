"""Request body helpers shared by the route modules."""

from __future__ import annotations

from typing import Any

from flask import request

from taskboard.errors import ValidationError


def json_body() -> dict[str, Any]:
    """
    Return the request's JSON object.

    Raises:
        ValidationError: If the body is missing, not JSON, or not an object.
    """
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")
    return data


def require_fields(data: dict[str, Any], required_fields: list[str]) -> None:
    """
    Check that each of *required_fields* is a non-blank string in *data*.

    Raises:
        ValidationError: Naming the first field that is missing or blank.
    """
    for field in required_fields:
        value = data.get(field)
        if not isinstance(value, str) or not value.strip():
            raise ValidationError(f"'{field}' is required")


def check_field_values(model: type, data: dict[str, Any]) -> None:
    """
    Check the allow-listed fields of *data* against *model*.

    Each writable field must be a string.  ``null`` clears an optional
    field but is refused for the keys in ``model.NON_NULL_FIELDS``.  Keys
    the model does not accept are left alone; they are ignored later.

    Raises:
        ValidationError: Naming the first field with an unusable value.
    """
    for field in model.MUTABLE_FIELDS:
        if field not in data:
            continue
        value = data[field]
        if value is None:
            if field in model.NON_NULL_FIELDS:
                raise ValidationError(f"'{field}' cannot be null")
        elif not isinstance(value, str):
            raise ValidationError(f"'{field}' must be a string")
