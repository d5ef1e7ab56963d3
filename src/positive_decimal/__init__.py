"""
PositiveDecimal — неотрицательное десятичное число как тип.

Инвариант "value >= 0" проверяется на каждом публичном пути создания и после
каждой операции, способной дать отрицательный результат.
"""

from positive_decimal.contracts.codec import decode, dumps, encode, loads
from positive_decimal.domain.positive import PositiveDecimal, is_positive_decimal
from positive_decimal.errors import (
    ConversionError,
    InvalidPrecisionError,
    InvalidValueError,
    InvariantViolation,
    OutOfBoundsError,
    PositiveArithmeticError,
    PositiveDecodeError,
    PositiveError,
)
from positive_decimal.math.numerical_safeguards import (
    DECIMAL_MAX,
    DEFAULT_MAX_RELATIVE,
    EPSILON,
    MAX_SCALE,
    ToleranceConfig,
)

__version__ = "0.1.0"

__all__ = [
    # Type
    "PositiveDecimal",
    "is_positive_decimal",
    # Codec
    "encode",
    "decode",
    "dumps",
    "loads",
    # Errors
    "PositiveError",
    "InvalidValueError",
    "PositiveArithmeticError",
    "ConversionError",
    "OutOfBoundsError",
    "InvalidPrecisionError",
    "PositiveDecodeError",
    "InvariantViolation",
    # Configuration
    "DECIMAL_MAX",
    "MAX_SCALE",
    "EPSILON",
    "DEFAULT_MAX_RELATIVE",
    "ToleranceConfig",
]
