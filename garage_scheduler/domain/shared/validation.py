"""
Validators and sanitizers shared by the garage scheduling entities.

Provides:
- Data sanitization for free-text operator input
- Range and required-field business rule checks
- Garage specific checks (vehicle codes, priority reasons, open hours)
"""

import math
import re
from decimal import Decimal
from typing import Any

from .exceptions import ValidationError

HOURS_OPEN_RANGE = (2, 12)
SECTION_VALUE_RANGE = (0, 20)
TOTAL_WORKERS_RANGE = (1, 20)


class DataSanitizer:
    """Utilities for cleaning and sanitizing input data."""

    @staticmethod
    def sanitize_string(
        value: str, max_length: int | None = None, strip: bool = True, allow_empty: bool = True
    ) -> str:
        """
        Sanitize string input.

        Args:
            value: Input string
            max_length: Maximum allowed length
            strip: Whether to strip whitespace
            allow_empty: Whether to allow empty strings

        Returns:
            Sanitized string

        Raises:
            ValidationError: If validation fails
        """
        if not isinstance(value, str):
            raise ValidationError("input", value, "Input must be a string", "INVALID_TYPE")

        if strip:
            value = value.strip()

        if not allow_empty and not value:
            raise ValidationError("input", value, "Value cannot be empty", "EMPTY_VALUE")

        if max_length and len(value) > max_length:
            raise ValidationError(
                "input",
                value,
                f"Value exceeds maximum length of {max_length}",
                "TOO_LONG",
            )

        # Remove null bytes and control characters
        value = re.sub(r"[\x00-\x08\x0b\x0c\x0e-\x1f\x7f-\x84\x86-\x9f]", "", value)

        return value

    @staticmethod
    def sanitize_vehicle_code(value: str | None) -> str:
        """
        Normalise a VIN or internal car code.

        Codes are upper-cased with control characters and inner whitespace
        removed, so hand-typed and scanned codes for the same car match.

        Raises:
            ValidationError: If the code is missing or nothing is left after cleaning
        """
        code = None
        if value is not None:
            code = re.sub(r"\s+", "", DataSanitizer.sanitize_string(value, max_length=64)).upper()
        if not code:
            raise ValidationError(
                "vehicle_code", value, "Vehicle code is required", "MISSING_VEHICLE_CODE"
            )
        return code


class BusinessRuleValidators:
    """Collection of business rule validation functions."""

    @staticmethod
    def validate_positive_number(field_name: str, value: int | float | Decimal) -> None:
        """Validate that number is positive."""
        if value <= 0:
            raise ValidationError(field_name, value, "Value must be positive", "NOT_POSITIVE")

    @staticmethod
    def validate_range(
        field_name: str,
        value: int | float | Decimal,
        min_val: int | float | Decimal | None = None,
        max_val: int | float | Decimal | None = None,
    ) -> None:
        """Validate that value is within specified range."""
        if min_val is not None and value < min_val:
            raise ValidationError(
                field_name, value, f"Value must be at least {min_val}", "BELOW_MINIMUM"
            )

        if max_val is not None and value > max_val:
            raise ValidationError(
                field_name, value, f"Value must be at most {max_val}", "ABOVE_MAXIMUM"
            )

    @staticmethod
    def validate_required_field(field_name: str, value: Any) -> None:
        """Validate that required field is not empty."""
        if value is None or (isinstance(value, str) and not value.strip()):
            raise ValidationError(
                field_name, value, f"{field_name} is required", "REQUIRED_FIELD"
            )


class GarageValidators:
    """Validators specific to the garage schedule."""

    @staticmethod
    def validate_priority_reason(priority: str, reason: str | None) -> None:
        """High priority work must say why it jumps the queue."""
        if priority == "high" and (reason is None or not reason.strip()):
            raise ValidationError(
                "priority_reason",
                reason,
                "A reason is required for high priority work",
                "MISSING_PRIORITY_REASON",
            )

    @staticmethod
    def is_whole_number(value: Any) -> bool:
        """True for ints and integral floats; rejects bools, NaN and infinities."""
        if isinstance(value, bool):
            return False
        if isinstance(value, int):
            return True
        if isinstance(value, float | Decimal):
            return math.isfinite(value) and value == int(value)
        return False

    @staticmethod
    def is_valid_hours_open(hours: Any) -> bool:
        low, high = HOURS_OPEN_RANGE
        return GarageValidators.is_whole_number(hours) and low <= hours <= high

    @staticmethod
    def clamp_section_value(value: Any) -> int:
        """
        Coerce a section worker/capacity input into 0..20.

        Negative input clamps to 0, anything above the ceiling clamps to 20.

        Raises:
            ValidationError: If the value is not a whole number
        """
        if not GarageValidators.is_whole_number(value):
            raise ValidationError(
                "section_value", value, "Value must be a whole number", "INVALID_TYPE"
            )
        low, high = SECTION_VALUE_RANGE
        return max(low, min(high, int(value)))
