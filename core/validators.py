"""
Core Validators

Shared validation functions for request input.
"""

from typing import Any


def validate_required_field(value: Any, field_name: str) -> str:
    """
    Validate that a required text field is present and not blank.

    Args:
        value: Value to validate
        field_name: Human-readable field name for the error message

    Returns:
        The value with surrounding whitespace removed

    Raises:
        ValueError: If value is None, not a string, or empty
    """
    if not isinstance(value, str) or not value.strip():
        raise ValueError(f"Missing {field_name}.")
    return value.strip()
