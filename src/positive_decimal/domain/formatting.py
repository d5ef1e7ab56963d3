"""
Formatting — Текстовое представление backing-значений

Правила:
- INFINITY (DECIMAL_MAX) → repr(sys.float_info.max)
- scale 0 → целое без точки
- иначе → фиксированная запись без экспоненты, хвостовые нули отброшены
- debug-форма: как основная, но без отбрасывания хвостовых нулей
- точность ".N": ровно N знаков, отбрасывание к нулю
- fixed places: ровно N знаков, банковское округление
"""

import re
from decimal import Decimal
from typing import Final

from positive_decimal.math.numerical_safeguards import (
    DECIMAL_MAX,
    F64_MAX,
    decimal_scale,
    round_to_places,
    truncate_to_places,
    validate_precision,
)

INFINITY_TEXT: Final[str] = repr(F64_MAX)

_PRECISION_SPEC: Final = re.compile(r"^\.(\d+)f?\Z", re.ASCII)


def _plain(value: Decimal) -> str:
    return format(value, "f")


def display(value: Decimal) -> str:
    """
    Основное текстовое представление.

    Examples:
        >>> display(Decimal("1.500"))
        '1.5'
        >>> display(Decimal("100"))
        '100'
    """
    if value == DECIMAL_MAX:
        return INFINITY_TEXT
    text = _plain(value)
    if decimal_scale(value) == 0:
        return text
    return text.rstrip("0").rstrip(".")


def debug(value: Decimal) -> str:
    """Отладочное представление: хвостовые нули сохраняются."""
    if value == DECIMAL_MAX:
        return INFINITY_TEXT
    return _plain(value)


def parse_precision(format_spec: str) -> int | None:
    """
    Число знаков из спецификации формата ".N" / ".Nf".

    Returns:
        N или None, если спецификация другого вида
    """
    match = _PRECISION_SPEC.match(format_spec)
    if match is None:
        return None
    return int(match.group(1))


def with_precision(value: Decimal, decimal_places: int) -> str:
    """
    Ровно decimal_places дробных знаков с отбрасыванием лишних.

    INFINITY и целые значения (scale 0) выводятся без учёта точности.

    Examples:
        >>> with_precision(Decimal("4.578923"), 2)
        '4.57'
        >>> with_precision(Decimal("1.5"), 3)
        '1.500'
    """
    if value == DECIMAL_MAX:
        return INFINITY_TEXT
    if decimal_scale(value) == 0:
        return _plain(value)
    truncated = truncate_to_places(value, decimal_places)
    return f"{truncated:.{decimal_places}f}"


def fixed_places(value: Decimal, decimal_places: int) -> str:
    """
    Ровно decimal_places дробных знаков, банковское округление.

    Raises:
        InvalidPrecisionError: decimal_places вне [0, MAX_SCALE]

    Examples:
        >>> fixed_places(Decimal("10.567"), 2)
        '10.57'
        >>> fixed_places(Decimal("0.1"), 4)
        '0.1000'
    """
    validate_precision(decimal_places)
    rounded = round_to_places(value, decimal_places)
    return f"{rounded:.{decimal_places}f}"
