"""
Math primitives для PositiveDecimal

Backing-представление (decimal.Decimal) и безопасные операции над ним.
"""

from positive_decimal.math.numerical_safeguards import (
    # Backing representation
    DECIMAL_CONTEXT,
    DECIMAL_MAX,
    DECIMAL_PRECISION,
    MAX_SCALE,
    REMAINDER_CONTEXT,
    # Target ranges
    F64_EPSILON,
    F64_MAX,
    I64_MAX,
    I64_MIN,
    U64_MAX,
    USIZE_MAX,
    # Epsilon constants
    DEFAULT_MAX_RELATIVE,
    DEFAULT_TOLERANCE,
    EPSILON,
    ToleranceConfig,
    # Decimal properties
    decimal_scale,
    fits_backing,
    is_valid_float,
    limit_scale,
    # Conversions
    decimal_to_float,
    decimal_to_int,
    float_to_decimal,
    round_to_places,
    truncate_to_places,
    # Epsilon comparisons
    abs_diff_eq,
    compare_with_tolerance,
    relative_eq,
    # Validation
    validate_non_negative,
    validate_precision,
)

__all__ = [
    # Backing representation
    "DECIMAL_CONTEXT",
    "DECIMAL_MAX",
    "DECIMAL_PRECISION",
    "MAX_SCALE",
    "REMAINDER_CONTEXT",
    # Target ranges
    "F64_EPSILON",
    "F64_MAX",
    "I64_MAX",
    "I64_MIN",
    "U64_MAX",
    "USIZE_MAX",
    # Epsilon constants
    "DEFAULT_MAX_RELATIVE",
    "DEFAULT_TOLERANCE",
    "EPSILON",
    "ToleranceConfig",
    # Decimal properties
    "decimal_scale",
    "fits_backing",
    "is_valid_float",
    "limit_scale",
    # Conversions
    "decimal_to_float",
    "decimal_to_int",
    "float_to_decimal",
    "round_to_places",
    "truncate_to_places",
    # Epsilon comparisons
    "abs_diff_eq",
    "compare_with_tolerance",
    "relative_eq",
    # Validation
    "validate_non_negative",
    "validate_precision",
]
