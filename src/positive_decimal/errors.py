"""
Errors — Таксономия ошибок PositiveDecimal

Два класса отказов:

1. Восстанавливаемые (PositiveError и наследники).
   Поднимаются валидирующими конструкторами и checked-операциями.
   Наследуют ValueError / ArithmeticError, поэтому совместимы с pydantic
   и с обычными `except ValueError`.

2. Фатальные (InvariantViolation).
   Нарушение контракта программистом: отрицательный результат оператора
   с "безотказной" сигнатурой, отрицание, выход за пределы целевого типа
   в aborting-аксессоре. Наследует BaseException, а не Exception:
   `except Exception` его не перехватывает.
"""

import logging
from typing import NoReturn

logger = logging.getLogger(__name__)


# =============================================================================
# ВОССТАНАВЛИВАЕМЫЕ ОШИБКИ
# =============================================================================


class PositiveError(Exception):
    """
    Базовая ошибка PositiveDecimal.

    Используется напрямую как fallback ("Other") для ошибок,
    не попадающих ни в одну из специализированных категорий.
    """

    def __init__(self, message: str):
        self.message = message
        super().__init__(self._render())

    def _render(self) -> str:
        return f"Positive error: {self.message}"


class InvalidValueError(PositiveError, ValueError):
    """Значение непригодно для PositiveDecimal (NaN, непредставимая величина)."""

    def __init__(self, value: object, reason: str):
        self.value = value
        self.reason = reason
        super().__init__(reason)

    def _render(self) -> str:
        return f"Invalid positive value {self.value}: {self.reason}"


class PositiveArithmeticError(PositiveError, ArithmeticError):
    """
    Ошибка checked-операции.

    Примеры: деление на ноль, отрицательный результат вычитания,
    невычислимый корень.
    """

    def __init__(self, operation: str, reason: str):
        self.operation = operation
        self.reason = reason
        super().__init__(reason)

    def _render(self) -> str:
        return f"Arithmetic error during {self.operation}: {self.reason}"


class ConversionError(PositiveError, ValueError):
    """Ошибка конверсии между числовыми представлениями."""

    def __init__(self, from_type: str, to_type: str, reason: str):
        self.from_type = from_type
        self.to_type = to_type
        self.reason = reason
        super().__init__(reason)

    def _render(self) -> str:
        return f"Failed to convert from {self.from_type} to {self.to_type}: {self.reason}"


class OutOfBoundsError(PositiveError, ValueError):
    """Значение вне допустимого диапазона [min, max]."""

    def __init__(self, value: float, min_value: float, max_value: float):
        self.value = value
        self.min_value = min_value
        self.max_value = max_value
        super().__init__(f"{value} not in [{min_value}, {max_value}]")

    def _render(self) -> str:
        return (
            f"Value {self.value} is out of bounds "
            f"(min: {self.min_value}, max: {self.max_value})"
        )


class InvalidPrecisionError(PositiveError, ValueError):
    """Недопустимое число десятичных знаков."""

    def __init__(self, precision: int, reason: str):
        self.precision = precision
        self.reason = reason
        super().__init__(reason)

    def _render(self) -> str:
        return f"Invalid precision {self.precision}: {self.reason}"


class PositiveDecodeError(PositiveError, ValueError):
    """Входные данные wire-формата не являются неотрицательным числом."""

    def __init__(self, raw: object, reason: str):
        self.raw = raw
        self.reason = reason
        super().__init__(reason)

    def _render(self) -> str:
        return f"Cannot decode {self.raw!r} as PositiveDecimal: {self.reason}"


# =============================================================================
# ФАТАЛЬНЫЕ НАРУШЕНИЯ
# =============================================================================


class InvariantViolation(BaseException):
    """
    Нарушение контракта PositiveDecimal.

    Не является runtime-условием: код, который его получает, содержит ошибку.
    Для восстанавливаемого пути используйте checked_* / saturating_* варианты.
    """

    pass


def abort(message: str) -> NoReturn:
    """
    Фатальное завершение операции.

    Логирует на уровне CRITICAL и поднимает InvariantViolation.

    Args:
        message: Описание нарушенного контракта

    Raises:
        InvariantViolation: всегда
    """
    logger.critical("PositiveDecimal invariant violation: %s", message)
    raise InvariantViolation(message)
