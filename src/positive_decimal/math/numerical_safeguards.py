"""
Numerical Safeguards — Decimal Backing Primitives

Модуль задаёт backing-представление PositiveDecimal и безопасные операции над ним:
- Decimal-контекст с фиксированной точностью и trap'ами
- Границы представления (масштаб, модуль) и диапазоны целевых типов конверсий
- Конверсии float/int <-> Decimal с проверкой представимости
- Epsilon-сравнения Decimal (абсолютная и относительная толерантность)
- Валидация неотрицательности и точности

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Все Decimal-операции выполняются в DECIMAL_CONTEXT или REMAINDER_CONTEXT (thread-local контекст не читается)
2. |value| <= DECIMAL_MAX, scale(value) <= MAX_SCALE
3. NaN/Inf никогда не попадают в backing-значение
4. Все операции детерминированы и воспроизводимы
"""

import math
import sys
from dataclasses import dataclass
from decimal import (
    ROUND_DOWN,
    ROUND_HALF_EVEN,
    Context,
    Decimal,
    DivisionByZero,
    InvalidOperation,
    Overflow,
)
from typing import Final

from positive_decimal.errors import InvalidPrecisionError, OutOfBoundsError

# =============================================================================
# BACKING-ПРЕДСТАВЛЕНИЕ
# =============================================================================

# Максимальное число дробных знаков
MAX_SCALE: Final[int] = 28

# Максимальный модуль (96-битная мантисса)
DECIMAL_MAX: Final[Decimal] = Decimal(2**96 - 1)

# Значащих цифр в DECIMAL_MAX
DECIMAL_PRECISION: Final[int] = 29

# Контекст всех вычислений.
# Общий для всех потоков: каждая операция пишет в его flags, но flags никто не
# читает; ошибки доставляются только через traps.
DECIMAL_CONTEXT: Final[Context] = Context(
    prec=DECIMAL_PRECISION,
    rounding=ROUND_HALF_EVEN,
    traps=[InvalidOperation, DivisionByZero, Overflow],
)

# Контекст остатка от деления: целое частное DECIMAL_MAX / 1e-28 занимает
# DECIMAL_PRECISION + MAX_SCALE цифр
REMAINDER_CONTEXT: Final[Context] = Context(
    prec=DECIMAL_PRECISION + MAX_SCALE,
    rounding=ROUND_HALF_EVEN,
    traps=[InvalidOperation, DivisionByZero, Overflow],
)

_SCALE_QUANTUM: Final[Decimal] = Decimal(1).scaleb(-MAX_SCALE)
_UNIT: Final[Decimal] = Decimal(1)


# =============================================================================
# ДИАПАЗОНЫ ЦЕЛЕВЫХ ТИПОВ
# =============================================================================

F64_MAX: Final[float] = sys.float_info.max
F64_EPSILON: Final[float] = sys.float_info.epsilon

I64_MIN: Final[int] = -(2**63)
I64_MAX: Final[int] = 2**63 - 1
U64_MAX: Final[int] = 2**64 - 1

# Pointer-sized unsigned: фиксируем 64 бита
USIZE_MAX: Final[int] = U64_MAX


# =============================================================================
# EPSILON-ПАРАМЕТРЫ
# =============================================================================

# Абсолютная толерантность по умолчанию
EPSILON: Final[Decimal] = Decimal("1e-16")

# Относительная толерантность по умолчанию
DEFAULT_MAX_RELATIVE: Final[Decimal] = EPSILON * 100


@dataclass(frozen=True)
class ToleranceConfig:
    """Параметры приближённых сравнений."""

    epsilon: Decimal = EPSILON
    max_relative: Decimal = DEFAULT_MAX_RELATIVE


DEFAULT_TOLERANCE: Final[ToleranceConfig] = ToleranceConfig()


# =============================================================================
# СВОЙСТВА DECIMAL
# =============================================================================


def is_valid_float(value: float) -> bool:
    """
    Проверка, является ли float валидным (не NaN, не Inf).

    Args:
        value: Проверяемое значение

    Returns:
        True если значение конечное
    """
    return math.isfinite(value)


def decimal_scale(value: Decimal) -> int:
    """
    Число дробных знаков Decimal.

    Examples:
        >>> decimal_scale(Decimal("1.50"))
        2
        >>> decimal_scale(Decimal("100"))
        0
    """
    exponent = value.as_tuple().exponent
    if not isinstance(exponent, int):
        return 0
    return max(0, -exponent)


def fits_backing(value: Decimal) -> bool:
    """Конечно и не превышает DECIMAL_MAX по модулю."""
    return value.is_finite() and value.copy_abs() <= DECIMAL_MAX


def limit_scale(value: Decimal) -> Decimal:
    """
    Приведение Decimal к ограничениям backing-представления.

    1. Округление до DECIMAL_PRECISION значащих цифр
    2. Положительная экспонента (1E+2) → scale 0 (100)
    3. Округление до MAX_SCALE дробных знаков
    4. Отрицательный ноль → ноль

    Args:
        value: Конечный Decimal с |value| <= DECIMAL_MAX

    Returns:
        Decimal с 0 <= scale <= MAX_SCALE
    """
    result = DECIMAL_CONTEXT.plus(value)
    if result.as_tuple().exponent > 0:
        result = result.quantize(_UNIT, context=DECIMAL_CONTEXT)
    elif decimal_scale(result) > MAX_SCALE:
        result = result.quantize(_SCALE_QUANTUM, context=DECIMAL_CONTEXT)
    if result.is_zero() and result.is_signed():
        result = result.copy_abs()
    return result


# =============================================================================
# КОНВЕРСИИ
# =============================================================================


def float_to_decimal(value: float) -> Decimal | None:
    """
    Конверсия float → Decimal по кратчайшему десятичному представлению.

    Целые значения получают scale 0, дробные сохраняют цифры repr(value)
    (не более MAX_SCALE дробных знаков).

    Args:
        value: Исходный float

    Returns:
        Decimal или None, если значение NaN/Inf или превышает DECIMAL_MAX

    Examples:
        >>> float_to_decimal(0.1)
        Decimal('0.1')
        >>> float_to_decimal(100.0)
        Decimal('100')
        >>> float_to_decimal(float("nan")) is None
        True
    """
    if not is_valid_float(value):
        return None

    result = Decimal(repr(value))
    if result.copy_abs() > DECIMAL_MAX:
        return None

    if result == result.to_integral_value():
        result = result.quantize(_UNIT, context=DECIMAL_CONTEXT)
    return limit_scale(result)


def decimal_to_float(value: Decimal) -> float | None:
    """
    Конверсия Decimal → float.

    Returns:
        float или None, если результат не конечен
    """
    result = float(value)
    if not is_valid_float(result):
        return None
    return result


def decimal_to_int(value: Decimal, min_value: int, max_value: int) -> int | None:
    """
    Конверсия Decimal → int с отбрасыванием дробной части (к нулю).

    Args:
        value: Конечный Decimal
        min_value: Минимум целевого типа
        max_value: Максимум целевого типа

    Returns:
        int или None, если результат вне [min_value, max_value]

    Examples:
        >>> decimal_to_int(Decimal("5.7"), I64_MIN, I64_MAX)
        5
        >>> decimal_to_int(Decimal(2**70), I64_MIN, I64_MAX) is None
        True
    """
    truncated = int(value)
    if truncated < min_value or truncated > max_value:
        return None
    return truncated


def truncate_to_places(value: Decimal, decimal_places: int) -> Decimal:
    """Отбрасывание знаков после decimal_places (к нулю)."""
    if decimal_scale(value) <= decimal_places:
        return value
    return value.quantize(
        Decimal(1).scaleb(-decimal_places),
        rounding=ROUND_DOWN,
        context=DECIMAL_CONTEXT,
    )


def round_to_places(value: Decimal, decimal_places: int) -> Decimal:
    """Банковское округление до decimal_places знаков (без увеличения scale)."""
    if decimal_scale(value) <= decimal_places:
        return value
    return value.quantize(
        Decimal(1).scaleb(-decimal_places),
        rounding=ROUND_HALF_EVEN,
        context=DECIMAL_CONTEXT,
    )


# =============================================================================
# EPSILON-СРАВНЕНИЯ DECIMAL
# =============================================================================


def abs_diff_eq(a: Decimal, b: Decimal, epsilon: Decimal = EPSILON) -> bool:
    """
    Абсолютное приближённое равенство.

    Алгоритм:
        |a - b| <= epsilon

    Examples:
        >>> abs_diff_eq(Decimal("1.0"), Decimal("1.0") + Decimal("1e-17"))
        True
        >>> abs_diff_eq(Decimal("1.0"), Decimal("1.1"))
        False
    """
    return DECIMAL_CONTEXT.subtract(a, b).copy_abs() <= epsilon


def relative_eq(
    a: Decimal,
    b: Decimal,
    epsilon: Decimal = EPSILON,
    max_relative: Decimal = DEFAULT_MAX_RELATIVE,
) -> bool:
    """
    Относительное приближённое равенство.

    Алгоритм:
        |a - b| <= epsilon  OR  |a - b| <= max_relative * max(|a|, |b|)

    Args:
        a: Первое значение
        b: Второе значение
        epsilon: Абсолютная толерантность (default: EPSILON)
        max_relative: Относительная толерантность (default: EPSILON * 100)

    Returns:
        True если значения близки
    """
    abs_diff = DECIMAL_CONTEXT.subtract(a, b).copy_abs()
    if abs_diff <= epsilon:
        return True
    largest = max(a.copy_abs(), b.copy_abs())
    return abs_diff <= DECIMAL_CONTEXT.multiply(max_relative, largest)


def compare_with_tolerance(a: Decimal, b: Decimal, tol: Decimal = EPSILON) -> int:
    """
    Сравнение двух Decimal с учётом толерантности.

    Returns:
        -1 если a < b (с учётом tol)
         0 если a ≈ b (в пределах tol)
        +1 если a > b (с учётом tol)
    """
    diff = DECIMAL_CONTEXT.subtract(a, b)

    if diff.copy_abs() <= tol:
        return 0
    elif diff < 0:
        return -1
    else:
        return 1


# =============================================================================
# ВАЛИДАЦИЯ
# =============================================================================


def validate_non_negative(value: Decimal, max_value: float = math.inf) -> None:
    """
    Валидация, что значение неотрицательное.

    Args:
        value: Проверяемое значение
        max_value: Верхняя граница для сообщения об ошибке

    Raises:
        OutOfBoundsError: Если value < 0
    """
    if value < 0:
        reported = decimal_to_float(value)
        raise OutOfBoundsError(
            reported if reported is not None else 0.0,
            0.0,
            max_value,
        )


def validate_precision(decimal_places: int) -> None:
    """
    Валидация числа десятичных знаков.

    Raises:
        InvalidPrecisionError: Если decimal_places вне [0, MAX_SCALE]
    """
    if decimal_places < 0:
        raise InvalidPrecisionError(decimal_places, "Precision must be non-negative")
    if decimal_places > MAX_SCALE:
        raise InvalidPrecisionError(
            decimal_places, f"Precision must not exceed {MAX_SCALE} decimal places"
        )
