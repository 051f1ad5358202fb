"""
Core math modules

Целочисленные fixed-point примитивы с гарантией детерминизма.
"""

from src.core.math.fixed_point import (
    UINT256_MAX,
    checked_add,
    checked_mul,
    checked_sub,
    floor_div,
    is_uint,
    mul_div,
    validate_positive_uint,
    validate_uint,
)

__all__ = [
    # Bounds
    "UINT256_MAX",
    # Validation
    "is_uint",
    "validate_uint",
    "validate_positive_uint",
    # Checked arithmetic
    "checked_add",
    "checked_sub",
    "checked_mul",
    "floor_div",
    "mul_div",
]
