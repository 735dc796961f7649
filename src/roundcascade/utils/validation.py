"""Validation utilities for Round Cascade.

This module provides reusable single-value checks with consistent error
handling, used when reading configuration and form input.
"""

from typing import Optional

from roundcascade.exceptions import (
    DateValidationException,
    InvalidConfigurationException,
    NumberValidationException,
)
from roundcascade.utils.dates import parse_iso_date
from roundcascade.utils.numbers import normalize_number


class ValidationResult:
    """Result of a validation operation.

    Attributes:
        is_valid: Whether the validation passed
        error_message: Human-readable error message if invalid
        sanitized_value: Cleaned/normalized value if valid
    """

    def __init__(
        self,
        is_valid: bool,
        error_message: Optional[str] = None,
        sanitized_value: Optional[object] = None,
    ):
        self.is_valid = is_valid
        self.error_message = error_message
        self.sanitized_value = sanitized_value

    def __bool__(self) -> bool:
        """Allow using result in boolean context: if result: ..."""
        return self.is_valid

    def __repr__(self) -> str:
        if self.is_valid:
            return f"ValidationResult(VALID, {self.sanitized_value!r})"
        return f"ValidationResult(INVALID, {self.error_message!r})"


# ========== Number Validation ==========


def validate_positive_number(
    value: Optional[object], field_name: str = "Value", required: bool = True
) -> ValidationResult:
    """Validate that a value is a positive number (fractions allowed).

    Args:
        value: Value to validate, numbers or numeric strings
        field_name: Name of the field for error messages
        required: Whether an empty value is an error

    Returns:
        ValidationResult whose sanitized value is an int or float
    """
    if value is None or (isinstance(value, str) and not value.strip()):
        if required:
            return ValidationResult(
                is_valid=False,
                error_message=f"{field_name} is required",
            )
        return ValidationResult(is_valid=True, sanitized_value=None)

    try:
        number = float(value)
    except (ValueError, TypeError):
        return ValidationResult(
            is_valid=False,
            error_message=f"{field_name} must be a number: {value}",
        )

    if number <= 0:
        return ValidationResult(
            is_valid=False,
            error_message=f"{field_name} must be positive",
        )
    return ValidationResult(is_valid=True, sanitized_value=normalize_number(number))


def validate_positive_integer(
    value: Optional[object], field_name: str = "Value", required: bool = True
) -> ValidationResult:
    """Validate that a value is a positive whole number.

    Args:
        value: Value to validate
        field_name: Name of the field for error messages
        required: Whether an empty value is an error

    Returns:
        ValidationResult with validation status
    """
    result = validate_positive_number(value, field_name, required)
    if not result or result.sanitized_value is None:
        return result

    if not isinstance(result.sanitized_value, int):
        return ValidationResult(
            is_valid=False,
            error_message=f"{field_name} must be a whole number: {value}",
        )
    return result


def validate_positive_integer_strict(value: object, field_name: str = "Value") -> int:
    """Validate a positive whole number or raise.

    Raises:
        NumberValidationException: If the value is missing or invalid
    """
    result = validate_positive_integer(value, field_name)
    if not result.is_valid:
        raise NumberValidationException(result.error_message)
    return int(result.sanitized_value)


# ========== Date Validation ==========


def validate_iso_date(value: Optional[str], required: bool = False) -> ValidationResult:
    """Validate a ``YYYY-MM-DD`` date string.

    Args:
        value: Date string to validate
        required: Whether an empty value is an error

    Returns:
        ValidationResult whose sanitized value is a ``datetime.date``
    """
    if value is None or not str(value).strip():
        if required:
            return ValidationResult(
                is_valid=False,
                error_message="Date is required",
            )
        return ValidationResult(is_valid=True, sanitized_value=None)

    try:
        parsed = parse_iso_date(value)
    except InvalidConfigurationException as e:
        return ValidationResult(is_valid=False, error_message=str(e))
    return ValidationResult(is_valid=True, sanitized_value=parsed)


def validate_iso_date_strict(value: str):
    """Validate a required ISO date and return it, or raise.

    Raises:
        DateValidationException: If the date is missing or malformed
    """
    result = validate_iso_date(value, required=True)
    if not result.is_valid:
        raise DateValidationException(result.error_message)
    return result.sanitized_value


# ========== Generic Validation ==========


def validate_non_empty(
    value: Optional[str], field_name: str = "Field"
) -> ValidationResult:
    """Validate that a field is not empty.

    Args:
        value: Value to validate
        field_name: Name of the field for error messages

    Returns:
        ValidationResult with validation status
    """
    if not value or not str(value).strip():
        return ValidationResult(
            is_valid=False,
            error_message=f"{field_name} cannot be empty",
        )
    return ValidationResult(is_valid=True, sanitized_value=str(value).strip())
