"""
Domain: тип PositiveDecimal и его текстовое представление.
"""

from positive_decimal.domain.positive import PositiveDecimal, is_positive_decimal

__all__ = [
    "PositiveDecimal",
    "is_positive_decimal",
]
