"""
Core math modules для Vessel

Математические примитивы с гарантией стабильности для операций над количествами.
"""

from vessel.core.math.numerical_safeguards import (
    # Epsilon constants
    EPS_FLOAT_COMPARE_ABS,
    EPS_FLOAT_COMPARE_REL,
    EPS_UNITS,
    # NaN/Inf sanitization
    is_valid_float,
    sanitize_amount,
    # Epsilon comparisons
    is_close,
    is_zero,
    # Utilities
    clamp,
    # Validation
    validate_non_negative,
    validate_positive,
)

__all__ = [
    "EPS_FLOAT_COMPARE_ABS",
    "EPS_FLOAT_COMPARE_REL",
    "EPS_UNITS",
    "is_valid_float",
    "sanitize_amount",
    "is_close",
    "is_zero",
    "clamp",
    "validate_non_negative",
    "validate_positive",
]
