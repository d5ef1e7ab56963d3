"""
PositiveDecimal — Неотрицательное десятичное число

Immutable value object поверх decimal.Decimal, для которого "value >= 0"
является инвариантом типа.

КЛАСТЕРЫ:
1. Invariant Guard     : валидирующие конструкторы (new, from_decimal, from_int, from_str, ...)
2. Conversion Matrix   : to_float/to_i64/to_u64/to_usize в aborting, checked и lossy вариантах
3. Arithmetic Engine   : infallible, revalidated, checked и saturating семейства операций
4. Ordering/Tolerance  : точный порядок и приближённые сравнения

СЕМЕЙСТВА ОПЕРАЦИЙ:
    a + b, a * b, a / b, powi, powu, pow      : неотрицательны алгебраически, без проверки знака
    a ± x, a * x, a / x, powd (x: Decimal/int/float)
                                                : Guard повторно, нарушение → InvariantViolation
    a - b                                       : InvariantViolation, если b > a
    -a                                          : InvariantViolation всегда
    checked_sub, checked_div, sqrt_checked      : PositiveArithmeticError
    saturating_sub, sub_or_zero                 : clamp к ZERO
    sub_or_none                                 : None

Отражённые операторы: Decimal ○ PositiveDecimal → Decimal,
float ○ PositiveDecimal → float, int ○ PositiveDecimal → PositiveDecimal.

Все Decimal-вычисления выполняются в DECIMAL_CONTEXT.
"""

import math
import re
from decimal import ROUND_CEILING, ROUND_FLOOR, Decimal, DecimalException
from typing import Any, Callable, Final, Iterable

from positive_decimal.domain import formatting
from positive_decimal.errors import (
    ConversionError,
    InvalidPrecisionError,
    OutOfBoundsError,
    PositiveArithmeticError,
    PositiveError,
    abort,
)
from positive_decimal.math.numerical_safeguards import (
    DECIMAL_CONTEXT,
    DECIMAL_MAX,
    DEFAULT_TOLERANCE,
    F64_EPSILON,
    F64_MAX,
    I64_MAX,
    I64_MIN,
    MAX_SCALE,
    REMAINDER_CONTEXT,
    U64_MAX,
    USIZE_MAX,
    abs_diff_eq,
    compare_with_tolerance,
    decimal_scale,
    decimal_to_float,
    decimal_to_int,
    fits_backing,
    float_to_decimal,
    limit_scale,
    relative_eq,
    round_to_places,
    validate_non_negative,
)

_CTX: Final = DECIMAL_CONTEXT

# digits? ('.' digits?)? с необязательным ведущим минусом (отклоняется отдельно)
_LITERAL_PATTERN: Final = re.compile(r"^(-?)(\d*)(?:\.(\d*))?\Z", re.ASCII)

_NICE_ONE_AND_HALF: Final[Decimal] = Decimal("1.5")
_NICE_THREE: Final[Decimal] = Decimal(3)
_NICE_SEVEN: Final[Decimal] = Decimal(7)


# =============================================================================
# INVARIANT GUARD
# =============================================================================


def _guard_float(value: float) -> Decimal:
    """float → backing Decimal с проверкой представимости и знака."""
    try:
        converted = float_to_decimal(float(value))
    except OverflowError:
        converted = None
    if converted is None:
        raise ConversionError("f64", "PositiveDecimal", "failed to parse Decimal")
    validate_non_negative(converted, max_value=F64_MAX)
    return converted


def _guard_decimal(value: Decimal) -> Decimal:
    """Decimal → backing Decimal. OutOfBoundsError тогда и только тогда, когда value < 0."""
    if not value.is_finite():
        raise ConversionError("Decimal", "PositiveDecimal", f"value {value} is not finite")
    validate_non_negative(value)
    if not fits_backing(value):
        raise ConversionError(
            "Decimal", "PositiveDecimal", "magnitude exceeds the decimal range"
        )
    result = limit_scale(value)
    if not fits_backing(result):
        raise ConversionError(
            "Decimal", "PositiveDecimal", "magnitude exceeds the decimal range"
        )
    return result


def _guard_int(value: int) -> Decimal:
    """Знаковый int → backing Decimal."""
    if value < 0:
        raise OutOfBoundsError(float(value), 0.0, math.inf)
    if value > DECIMAL_MAX:
        raise ConversionError("int", "PositiveDecimal", "magnitude exceeds the decimal range")
    return Decimal(value)


def _guard_str(text: str) -> Decimal:
    """Текстовый литерал → backing Decimal."""
    match = _LITERAL_PATTERN.match(text)
    if match is None or not (match.group(2) or match.group(3)):
        raise ConversionError(
            "str", "PositiveDecimal", f"Failed to parse as Decimal: {text!r}"
        )
    parsed = Decimal(text)
    if match.group(1):
        raise OutOfBoundsError(float(parsed), 0.0, math.inf)
    return _guard_decimal(parsed)


def _guard(value: Any) -> Decimal:
    """Диспетчер валидирующих конверсий по типу входа."""
    if isinstance(value, PositiveDecimal):
        return value._value
    if isinstance(value, bool):
        raise ConversionError("bool", "PositiveDecimal", "booleans are not numbers")
    if isinstance(value, Decimal):
        return _guard_decimal(value)
    if isinstance(value, int):
        return _guard_int(value)
    if isinstance(value, float):
        return _guard_float(value)
    if isinstance(value, str):
        return _guard_str(value)
    raise ConversionError(type(value).__name__, "PositiveDecimal", "unsupported source type")


def _backing_of(other: Any) -> Decimal | None:
    """
    Decimal-представление операнда смешанной операции.

    Returns:
        Decimal (возможно NaN/Infinity для float/Decimal) или None,
        если тип операнда не поддерживается
    """
    if isinstance(other, PositiveDecimal):
        return other._value
    if isinstance(other, bool):
        return None
    if isinstance(other, Decimal):
        return other
    if isinstance(other, int):
        return Decimal(other)
    if isinstance(other, float):
        if not math.isfinite(other):
            return Decimal(other)
        return Decimal(repr(other))
    return None


# =============================================================================
# ВЫЧИСЛЕНИЯ
# =============================================================================


def _apply(operation: str, func: Callable[..., Decimal], *args: Decimal) -> Decimal:
    """Вызов операции DECIMAL_CONTEXT; ошибка Decimal → InvariantViolation."""
    try:
        return func(*args)
    except DecimalException as exc:
        abort(f"{operation} failed: {type(exc).__name__}")


def _finite_operand(operation: str, operand: Decimal) -> Decimal:
    if not operand.is_finite():
        abort(f"{operation} operand must be a finite number, got {operand}")
    return operand


def _checked_operand(other: Any) -> Decimal:
    """Операнд checked-операции; ConversionError для нечисловых и бесконечных значений."""
    operand = _backing_of(other)
    if operand is None or not operand.is_finite():
        raise ConversionError(type(other).__name__, "Decimal", "operand is not a finite number")
    return operand


def _positive_operand(other: Any) -> "PositiveDecimal":
    """Операнд сравнения или вычитания через Guard: ConversionError / OutOfBoundsError."""
    if isinstance(other, PositiveDecimal):
        return other
    return PositiveDecimal._wrap(_guard(other))


def _finish(operation: str, result: Decimal) -> "PositiveDecimal":
    """Результат операции, неотрицательной алгебраически: проверяется только диапазон."""
    if not fits_backing(result):
        abort(f"{operation} overflowed the decimal range")
    result = limit_scale(result)
    if not fits_backing(result):
        abort(f"{operation} overflowed the decimal range")
    return PositiveDecimal._wrap(result)


def _revalidate(operation: str, result: Decimal) -> "PositiveDecimal":
    """Результат операции, способной дать отрицательное значение: Guard повторно."""
    if result.is_nan() or result < 0:
        abort(f"{operation} result must be positive, got {result}")
    return _finish(operation, result)


class PositiveDecimal:
    """
    Неотрицательное десятичное число произвольной точности.

    Инвариант: value >= 0 для каждого экземпляра, созданного через публичный
    валидирующий путь или через операцию, неотрицательную алгебраически.

    Экземпляры неизменяемы и хешируемы; равные значения разного scale
    (1.5 и 1.50) равны и имеют одинаковый hash.

    Examples:
        >>> PositiveDecimal.new(2.5) + PositiveDecimal.ONE
        PositiveDecimal('3.5')
        >>> PositiveDecimal(5).checked_sub(PositiveDecimal(7))
        Traceback (most recent call last):
            ...
        positive_decimal.errors.PositiveArithmeticError: Arithmetic error during subtraction: ...
    """

    __slots__ = ("_value",)

    ZERO: "PositiveDecimal"
    ONE: "PositiveDecimal"
    TWO: "PositiveDecimal"
    TEN: "PositiveDecimal"
    HUNDRED: "PositiveDecimal"
    THOUSAND: "PositiveDecimal"
    PI: "PositiveDecimal"
    E: "PositiveDecimal"
    INFINITY: "PositiveDecimal"

    def __init__(self, value: Any = 0):
        """
        Валидирующий конструктор.

        Args:
            value: PositiveDecimal, Decimal, int, float или str

        Raises:
            OutOfBoundsError: Если значение отрицательное
            ConversionError: Если значение непредставимо (NaN, Inf, слишком велико, не число)
        """
        object.__setattr__(self, "_value", _guard(value))

    # -------------------------------------------------------------------------
    # Конструкторы
    # -------------------------------------------------------------------------

    @classmethod
    def _wrap(cls, value: Decimal) -> "PositiveDecimal":
        instance = object.__new__(cls)
        object.__setattr__(instance, "_value", value)
        return instance

    @classmethod
    def new(cls, value: float) -> "PositiveDecimal":
        """
        Создание из float.

        Raises:
            ConversionError: value NaN, бесконечен или больше DECIMAL_MAX
            OutOfBoundsError: value < 0
        """
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise ConversionError(type(value).__name__, "PositiveDecimal", "expected a float")
        return cls._wrap(_guard_float(value))

    @classmethod
    def from_decimal(cls, value: Decimal) -> "PositiveDecimal":
        """
        Создание из Decimal без потери точности.

        Raises:
            OutOfBoundsError: value < 0
            ConversionError: value не конечен или больше DECIMAL_MAX
        """
        if not isinstance(value, Decimal):
            raise ConversionError(type(value).__name__, "PositiveDecimal", "expected a Decimal")
        return cls._wrap(_guard_decimal(value))

    @classmethod
    def from_int(cls, value: int) -> "PositiveDecimal":
        """Создание из знакового целого. OutOfBoundsError для value < 0."""
        if isinstance(value, bool) or not isinstance(value, int):
            raise ConversionError(type(value).__name__, "PositiveDecimal", "expected an int")
        return cls._wrap(_guard_int(value))

    @classmethod
    def from_unsigned(cls, value: int) -> "PositiveDecimal":
        """
        Создание из беззнакового 64-битного целого.

        Любое значение из [0, 2**64 - 1] представимо, поэтому для него
        конверсия не отказывает.

        Raises:
            ConversionError: value не является u64
        """
        if isinstance(value, bool) or not isinstance(value, int) or not 0 <= value <= U64_MAX:
            raise ConversionError(
                type(value).__name__, "PositiveDecimal", f"{value!r} is not an unsigned 64-bit integer"
            )
        return cls._wrap(Decimal(value))

    @classmethod
    def from_str(cls, text: str) -> "PositiveDecimal":
        """
        Разбор текстового литерала `digits? ('.' digits?)?`.

        Raises:
            OutOfBoundsError: ведущий минус
            ConversionError: текст не является десятичным литералом
        """
        if not isinstance(text, str):
            raise ConversionError(type(text).__name__, "PositiveDecimal", "expected a str")
        return cls._wrap(_guard_str(text))

    @classmethod
    def optional(cls, value: Any) -> "PositiveDecimal | None":
        """Валидирующий конструктор, возвращающий None вместо исключения."""
        try:
            return cls(value)
        except PositiveError:
            return None

    @classmethod
    def new_unchecked(cls, value: Decimal) -> "PositiveDecimal":
        """
        Создание БЕЗ валидации.

        НЕБЕЗОПАСНО: вызывающий код обязан гарантировать value >= 0,
        конечность и |value| <= DECIMAL_MAX. Экземпляр с отрицательным
        значением нарушает все гарантии типа (порядок, форматирование,
        арифметику); поведение такого экземпляра не определено.
        """
        return cls._wrap(value)

    @classmethod
    def default(cls) -> "PositiveDecimal":
        return cls.ZERO

    @classmethod
    def sum(cls, values: Iterable[Any]) -> "PositiveDecimal":
        """
        Сумма значений.

        Пустая последовательность → ZERO. Элементы проходят Guard.
        """
        total = Decimal(0)
        for item in values:
            total = _apply("addition", _CTX.add, total, _guard(item))
        return _finish("addition", total)

    # -------------------------------------------------------------------------
    # Неизменяемость и протоколы Python
    # -------------------------------------------------------------------------

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __delattr__(self, name: str) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __reduce__(self):
        return (type(self), (self._value,))

    def __hash__(self) -> int:
        return hash(self._value)

    def __bool__(self) -> bool:
        return not self._value.is_zero()

    def __float__(self) -> float:
        return self.to_float_lossy()

    def __int__(self) -> int:
        return int(self._value)

    def __str__(self) -> str:
        return formatting.display(self._value)

    def __repr__(self) -> str:
        if self._value == DECIMAL_MAX:
            return f"{type(self).__name__}.INFINITY"
        return f"{type(self).__name__}('{formatting.debug(self._value)}')"

    def __format__(self, format_spec: str) -> str:
        if not format_spec:
            return str(self)
        places = formatting.parse_precision(format_spec)
        if places is not None:
            return formatting.with_precision(self._value, places)
        return format(self._value, format_spec)

    # -------------------------------------------------------------------------
    # Доступ к значению
    # -------------------------------------------------------------------------

    @property
    def value(self) -> Decimal:
        """Backing Decimal."""
        return self._value

    def to_dec(self) -> Decimal:
        return self._value

    @property
    def scale(self) -> int:
        """Число дробных знаков backing-значения."""
        return decimal_scale(self._value)

    def is_zero(self) -> bool:
        return self._value.is_zero()

    def is_infinity(self) -> bool:
        return self._value == DECIMAL_MAX

    def debug_string(self) -> str:
        """Отладочное представление без отбрасывания хвостовых нулей."""
        return formatting.debug(self._value)

    def format_fixed_places(self, decimal_places: int) -> str:
        """Ровно decimal_places дробных знаков (банковское округление)."""
        return formatting.fixed_places(self._value, decimal_places)

    # -------------------------------------------------------------------------
    # Conversion Matrix
    # -------------------------------------------------------------------------

    def to_float(self) -> float:
        """float; InvariantViolation, если значение непредставимо."""
        result = decimal_to_float(self._value)
        if result is None:
            abort("Decimal to float conversion failed - value out of range")
        return result

    def to_float_checked(self) -> float | None:
        return decimal_to_float(self._value)

    def to_float_lossy(self) -> float:
        """float; 0.0, если значение непредставимо."""
        result = decimal_to_float(self._value)
        return 0.0 if result is None else result

    def to_i64(self) -> int:
        """Знаковое 64-битное целое (дробная часть отбрасывается)."""
        result = self.to_i64_checked()
        if result is None:
            abort("Decimal to i64 conversion failed - value out of range")
        return result

    def to_i64_checked(self) -> int | None:
        return decimal_to_int(self._value, I64_MIN, I64_MAX)

    def to_u64(self) -> int:
        """Беззнаковое 64-битное целое (дробная часть отбрасывается)."""
        result = self.to_u64_checked()
        if result is None:
            abort("Decimal to u64 conversion failed - value out of range")
        return result

    def to_u64_checked(self) -> int | None:
        return decimal_to_int(self._value, 0, U64_MAX)

    def to_usize(self) -> int:
        """Беззнаковое целое размера указателя (дробная часть отбрасывается)."""
        result = self.to_usize_checked()
        if result is None:
            abort("Decimal to usize conversion failed - value out of range")
        return result

    def to_usize_checked(self) -> int | None:
        return decimal_to_int(self._value, 0, USIZE_MAX)

    # -------------------------------------------------------------------------
    # Сравнение
    # -------------------------------------------------------------------------

    def _compare_key(self, other: Any) -> tuple[Any, Any] | None:
        # float сравнивается со своей конверсией backing-значения
        if isinstance(other, float):
            return self.to_float_lossy(), other
        operand = _backing_of(other)
        if operand is None:
            return None
        return self._value, operand

    def __eq__(self, other: object) -> bool:
        key = self._compare_key(other)
        if key is None:
            return NotImplemented
        return key[0] == key[1]

    def __lt__(self, other: Any) -> bool:
        key = self._compare_key(other)
        if key is None:
            return NotImplemented
        return key[0] < key[1]

    def __le__(self, other: Any) -> bool:
        key = self._compare_key(other)
        if key is None:
            return NotImplemented
        return key[0] <= key[1]

    def __gt__(self, other: Any) -> bool:
        key = self._compare_key(other)
        if key is None:
            return NotImplemented
        return key[0] > key[1]

    def __ge__(self, other: Any) -> bool:
        key = self._compare_key(other)
        if key is None:
            return NotImplemented
        return key[0] >= key[1]

    def abs_diff_eq(self, other: Any, epsilon: Decimal = DEFAULT_TOLERANCE.epsilon) -> bool:
        """|self - other| <= epsilon."""
        return abs_diff_eq(self._value, _guard(other), epsilon)

    def relative_eq(
        self,
        other: Any,
        epsilon: Decimal = DEFAULT_TOLERANCE.epsilon,
        max_relative: Decimal = DEFAULT_TOLERANCE.max_relative,
    ) -> bool:
        """|self - other| <= epsilon или <= max_relative * max(|self|, |other|)."""
        return relative_eq(self._value, _guard(other), epsilon, max_relative)

    def compare_with_tolerance(
        self, other: Any, tol: Decimal = DEFAULT_TOLERANCE.epsilon
    ) -> int:
        """-1 / 0 / +1 с учётом абсолютной толерантности."""
        return compare_with_tolerance(self._value, _guard(other), tol)

    def max(self, other: "PositiveDecimal") -> "PositiveDecimal":
        other = _positive_operand(other)
        return self if self._value > other._value else other

    def min(self, other: "PositiveDecimal") -> "PositiveDecimal":
        other = _positive_operand(other)
        return self if self._value < other._value else other

    def clamp(self, min_value: "PositiveDecimal", max_value: "PositiveDecimal") -> "PositiveDecimal":
        """Ограничение диапазоном [min_value, max_value]."""
        min_value = _positive_operand(min_value)
        max_value = _positive_operand(max_value)
        if self < min_value:
            return min_value
        if self > max_value:
            return max_value
        return self

    def is_multiple(self, other: float) -> bool:
        """Кратность float-значению с точностью машинного epsilon."""
        value = self.to_float()
        if not math.isfinite(value) or not math.isfinite(other) or other == 0.0:
            return False
        remainder = math.fmod(value, other)
        return abs(remainder) < F64_EPSILON or abs(other - abs(remainder)) < F64_EPSILON

    def is_multiple_of(self, other: "PositiveDecimal") -> bool:
        """Кратность другому PositiveDecimal. Для ZERO всегда False."""
        other = _positive_operand(other)
        if other.is_zero():
            return False
        remainder = _apply("remainder", REMAINDER_CONTEXT.remainder, self._value, other._value)
        return remainder.copy_abs() < DEFAULT_TOLERANCE.epsilon

    # -------------------------------------------------------------------------
    # Arithmetic Engine: операторы
    # -------------------------------------------------------------------------

    def __add__(self, other: Any) -> "PositiveDecimal":
        if isinstance(other, PositiveDecimal):
            return _finish("addition", _apply("addition", _CTX.add, self._value, other._value))
        operand = _backing_of(other)
        if operand is None:
            return NotImplemented
        _finite_operand("addition", operand)
        return _revalidate("addition", _apply("addition", _CTX.add, self._value, operand))

    def __radd__(self, other: Any) -> Any:
        if isinstance(other, Decimal):
            return _CTX.add(other, self._value)
        if isinstance(other, float):
            return other + self.to_float()
        return self.__add__(other)

    def __sub__(self, other: Any) -> "PositiveDecimal":
        operand = _backing_of(other)
        if operand is None:
            return NotImplemented
        _finite_operand("subtraction", operand)
        if isinstance(other, PositiveDecimal) and operand > self._value:
            abort("Resulting value must be positive")
        return _revalidate("subtraction", _apply("subtraction", _CTX.subtract, self._value, operand))

    def __rsub__(self, other: Any) -> Any:
        if isinstance(other, Decimal):
            return _CTX.subtract(other, self._value)
        if isinstance(other, float):
            return other - self.to_float()
        operand = _backing_of(other)
        if operand is None:
            return NotImplemented
        return _revalidate("subtraction", _apply("subtraction", _CTX.subtract, operand, self._value))

    def __mul__(self, other: Any) -> "PositiveDecimal":
        if isinstance(other, PositiveDecimal):
            return _finish(
                "multiplication", _apply("multiplication", _CTX.multiply, self._value, other._value)
            )
        operand = _backing_of(other)
        if operand is None:
            return NotImplemented
        _finite_operand("multiplication", operand)
        return _revalidate(
            "multiplication", _apply("multiplication", _CTX.multiply, self._value, operand)
        )

    def __rmul__(self, other: Any) -> Any:
        if isinstance(other, Decimal):
            return _CTX.multiply(other, self._value)
        if isinstance(other, float):
            return other * self.to_float()
        return self.__mul__(other)

    def __truediv__(self, other: Any) -> "PositiveDecimal":
        operand = _backing_of(other)
        if operand is None:
            return NotImplemented
        _finite_operand("division", operand)
        if operand.is_zero():
            abort("division by zero")
        result = _apply("division", _CTX.divide, self._value, operand)
        if isinstance(other, PositiveDecimal):
            return _finish("division", result)
        return _revalidate("division", result)

    def __rtruediv__(self, other: Any) -> Any:
        if isinstance(other, Decimal):
            return _CTX.divide(other, self._value)
        if isinstance(other, float):
            return other / self.to_float()
        operand = _backing_of(other)
        if operand is None:
            return NotImplemented
        if self._value.is_zero():
            abort("division by zero")
        return _revalidate("division", _apply("division", _CTX.divide, operand, self._value))

    def __pow__(self, other: Any) -> "PositiveDecimal":
        if isinstance(other, PositiveDecimal):
            return self.pow(other)
        if isinstance(other, bool):
            return NotImplemented
        if isinstance(other, int):
            return self.powi(other)
        operand = _backing_of(other)
        if operand is None:
            return NotImplemented
        return self.powd(operand)

    def __rpow__(self, other: Any) -> Any:
        if isinstance(other, Decimal):
            return _CTX.power(other, self._value)
        if isinstance(other, float):
            return other ** self.to_float()
        operand = _backing_of(other)
        if operand is None:
            return NotImplemented
        return _revalidate("power", _apply("power", _CTX.power, operand, self._value))

    def __neg__(self) -> "PositiveDecimal":
        abort("Cannot negate a Positive value!")

    def __pos__(self) -> "PositiveDecimal":
        return self

    def __abs__(self) -> "PositiveDecimal":
        return self

    # -------------------------------------------------------------------------
    # Arithmetic Engine: checked / saturating
    # -------------------------------------------------------------------------

    def checked_sub(self, other: Any) -> "PositiveDecimal":
        """
        Вычитание с восстанавливаемой ошибкой.

        Raises:
            PositiveArithmeticError: Если other > self
            ConversionError: Если other не является конечным числом
        """
        operand = _checked_operand(other)
        if operand > self._value:
            raise PositiveArithmeticError("subtraction", "Result would be negative")
        result = _CTX.subtract(self._value, operand)
        if not fits_backing(result):
            raise PositiveArithmeticError("subtraction", "result exceeds the decimal range")
        return PositiveDecimal._wrap(limit_scale(result))

    def checked_div(self, other: Any) -> "PositiveDecimal":
        """
        Деление с восстанавливаемой ошибкой.

        Raises:
            PositiveArithmeticError: Делитель равен нулю, результат отрицателен
                или выходит за диапазон
            ConversionError: Если other не является конечным числом
        """
        operand = _checked_operand(other)
        if operand.is_zero():
            raise PositiveArithmeticError("division", "division by zero")
        if operand < 0:
            raise PositiveArithmeticError("division", "Result would be negative")
        try:
            result = _CTX.divide(self._value, operand)
        except DecimalException as exc:
            raise PositiveArithmeticError("division", type(exc).__name__) from exc
        if not fits_backing(result):
            raise PositiveArithmeticError("division", "result exceeds the decimal range")
        return PositiveDecimal._wrap(limit_scale(result))

    def saturating_sub(self, other: "PositiveDecimal") -> "PositiveDecimal":
        """Вычитание с clamp к ZERO."""
        other = _positive_operand(other)
        if self._value > other._value:
            return PositiveDecimal._wrap(limit_scale(_CTX.subtract(self._value, other._value)))
        return PositiveDecimal.ZERO

    def sub_or_zero(self, other: Decimal) -> "PositiveDecimal":
        """Вычитание Decimal; ZERO, если other >= self."""
        operand = _checked_operand(other)
        if self._value > operand:
            return _finish("subtraction", _apply("subtraction", _CTX.subtract, self._value, operand))
        return PositiveDecimal.ZERO

    def sub_or_none(self, other: Decimal) -> "PositiveDecimal | None":
        """Вычитание Decimal; None, если other > self."""
        operand = _checked_operand(other)
        if self._value >= operand:
            return _finish("subtraction", _apply("subtraction", _CTX.subtract, self._value, operand))
        return None

    # -------------------------------------------------------------------------
    # Arithmetic Engine: степени
    # -------------------------------------------------------------------------

    def powi(self, exponent: int) -> "PositiveDecimal":
        """Целая степень (допускаются отрицательные показатели)."""
        if exponent == 0:
            return PositiveDecimal.ONE
        return _finish("power", _apply("power", _CTX.power, self._value, Decimal(exponent)))

    def powu(self, exponent: int) -> "PositiveDecimal":
        """Беззнаковая целая степень."""
        if exponent < 0:
            abort(f"unsigned exponent must be non-negative, got {exponent}")
        return self.powi(exponent)

    def pow(self, exponent: "PositiveDecimal") -> "PositiveDecimal":
        """Степень с неотрицательным десятичным показателем."""
        if exponent.is_zero():
            return PositiveDecimal.ONE
        return _finish("power", _apply("power", _CTX.power, self._value, exponent._value))

    def powd(self, exponent: Decimal) -> "PositiveDecimal":
        """Степень с произвольным Decimal-показателем (результат проходит Guard)."""
        _finite_operand("power", exponent)
        if exponent.is_zero():
            return PositiveDecimal.ONE
        return _revalidate("power", _apply("power", _CTX.power, self._value, exponent))

    # -------------------------------------------------------------------------
    # Трансцендентные функции и округление
    # -------------------------------------------------------------------------

    def sqrt(self) -> "PositiveDecimal":
        """Квадратный корень; InvariantViolation, если вычисление невозможно."""
        try:
            return self.sqrt_checked()
        except PositiveArithmeticError:
            abort("Square root calculation failed")

    def sqrt_checked(self) -> "PositiveDecimal":
        """
        Квадратный корень.

        Raises:
            PositiveArithmeticError: Если корень не вычисляется
        """
        try:
            result = _CTX.sqrt(self._value)
        except DecimalException as exc:
            raise PositiveArithmeticError("sqrt", "square root calculation failed") from exc
        return PositiveDecimal._wrap(limit_scale(result))

    def ln(self) -> "PositiveDecimal":
        """
        Натуральный логарифм.

        Для значений из [0, 1) логарифм отрицателен → InvariantViolation.
        """
        return _revalidate("ln", _apply("ln", _CTX.ln, self._value))

    def log10(self) -> "PositiveDecimal":
        """Десятичный логарифм. Для значений из [0, 1) → InvariantViolation."""
        return _revalidate("log10", _apply("log10", _CTX.log10, self._value))

    def exp(self) -> "PositiveDecimal":
        return _finish("exp", _apply("exp", _CTX.exp, self._value))

    def round(self) -> "PositiveDecimal":
        """Округление до целого (half-even)."""
        return PositiveDecimal._wrap(round_to_places(self._value, 0))

    def round_to(self, decimal_places: int) -> "PositiveDecimal":
        """
        Округление до decimal_places знаков (half-even).

        Raises:
            InvalidPrecisionError: decimal_places < 0
        """
        if decimal_places < 0:
            raise InvalidPrecisionError(decimal_places, "Precision must be non-negative")
        return PositiveDecimal._wrap(round_to_places(self._value, min(decimal_places, MAX_SCALE)))

    def floor(self) -> "PositiveDecimal":
        return PositiveDecimal._wrap(
            self._value.to_integral_value(rounding=ROUND_FLOOR, context=_CTX)
        )

    def ceiling(self) -> "PositiveDecimal":
        return _finish(
            "ceiling", self._value.to_integral_value(rounding=ROUND_CEILING, context=_CTX)
        )

    def round_to_nice_number(self) -> "PositiveDecimal":
        """
        Привязка к "красивому" значению {1, 2, 5, 10} × 10^k.

        Алгоритм:
            k = floor(log10(value)); n = value / 10^k
            n < 1.5 → 1;  n < 3 → 2;  n < 7 → 5;  иначе → 10

        Examples:
            >>> PositiveDecimal(347).round_to_nice_number()
            PositiveDecimal('500')
            >>> PositiveDecimal("0.012").round_to_nice_number()
            PositiveDecimal('0.01')
        """
        if self._value.is_zero():
            return PositiveDecimal.ZERO
        magnitude = self._value.adjusted()
        normalized = self._value.scaleb(-magnitude, context=_CTX)
        if normalized < _NICE_ONE_AND_HALF:
            nice = Decimal(1)
        elif normalized < _NICE_THREE:
            nice = Decimal(2)
        elif normalized < _NICE_SEVEN:
            nice = Decimal(5)
        else:
            nice = Decimal(10)
        return _finish("round_to_nice_number", nice.scaleb(magnitude, context=_CTX))

    def __round__(self, ndigits: int | None = None) -> Any:
        if ndigits is None:
            return int(self.round()._value)
        return self.round_to(ndigits)

    def __floor__(self) -> int:
        return int(self.floor()._value)

    def __ceil__(self) -> int:
        return int(self.ceiling()._value)

    def __trunc__(self) -> int:
        return int(self._value)

    # -------------------------------------------------------------------------
    # pydantic
    # -------------------------------------------------------------------------

    @classmethod
    def __get_pydantic_core_schema__(cls, source_type: Any, handler: Any) -> Any:
        from positive_decimal.contracts.codec import pydantic_core_schema

        return pydantic_core_schema()

    @classmethod
    def __get_pydantic_json_schema__(cls, core_schema: Any, handler: Any) -> dict[str, Any]:
        from positive_decimal.contracts.codec import pydantic_json_schema

        return pydantic_json_schema()


# =============================================================================
# КОНСТАНТЫ
# =============================================================================

PositiveDecimal.ZERO = PositiveDecimal._wrap(Decimal(0))
PositiveDecimal.ONE = PositiveDecimal._wrap(Decimal(1))
PositiveDecimal.TWO = PositiveDecimal._wrap(Decimal(2))
PositiveDecimal.TEN = PositiveDecimal._wrap(Decimal(10))
PositiveDecimal.HUNDRED = PositiveDecimal._wrap(Decimal(100))
PositiveDecimal.THOUSAND = PositiveDecimal._wrap(Decimal(1000))
PositiveDecimal.PI = PositiveDecimal._wrap(Decimal("3.1415926535897932384626433833"))
PositiveDecimal.E = PositiveDecimal._wrap(Decimal("2.7182818284590452353602874714"))
PositiveDecimal.INFINITY = PositiveDecimal._wrap(DECIMAL_MAX)


def is_positive_decimal(obj: object) -> bool:
    """Является ли obj экземпляром PositiveDecimal."""
    return isinstance(obj, PositiveDecimal)
