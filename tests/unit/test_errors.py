"""
Тесты таксономии ошибок PositiveDecimal

Проверяет:
1. Тексты сообщений каждой категории
2. Иерархию классов (совместимость с ValueError / ArithmeticError)
3. Фатальное завершение через abort (InvariantViolation, CRITICAL-лог)
"""

import logging

import pytest

from positive_decimal import PositiveDecimal
from positive_decimal.errors import (
    ConversionError,
    InvalidPrecisionError,
    InvalidValueError,
    InvariantViolation,
    OutOfBoundsError,
    PositiveArithmeticError,
    PositiveDecodeError,
    PositiveError,
    abort,
)


class TestErrorMessages:
    """Тексты сообщений"""

    def test_other(self) -> None:
        """Fallback-категория"""
        assert str(PositiveError("boom")) == "Positive error: boom"

    def test_invalid_value(self) -> None:
        error = InvalidValueError(float("nan"), "NaN is not allowed")
        assert str(error) == "Invalid positive value nan: NaN is not allowed"
        assert error.reason == "NaN is not allowed"

    def test_arithmetic(self) -> None:
        error = PositiveArithmeticError("division", "division by zero")
        assert str(error) == "Arithmetic error during division: division by zero"
        assert error.operation == "division"

    def test_conversion(self) -> None:
        error = ConversionError("f64", "Decimal", "not finite")
        assert str(error) == "Failed to convert from f64 to Decimal: not finite"
        assert (error.from_type, error.to_type) == ("f64", "Decimal")

    def test_out_of_bounds(self) -> None:
        error = OutOfBoundsError(-1.0, 0.0, 10.0)
        assert str(error) == "Value -1.0 is out of bounds (min: 0.0, max: 10.0)"
        assert error.value == -1.0
        assert error.max_value == 10.0

    def test_invalid_precision(self) -> None:
        error = InvalidPrecisionError(-1, "Precision must be non-negative")
        assert str(error) == "Invalid precision -1: Precision must be non-negative"

    def test_decode(self) -> None:
        error = PositiveDecodeError("42.5", "strings are not numbers")
        assert str(error) == "Cannot decode '42.5' as PositiveDecimal: strings are not numbers"


class TestErrorHierarchy:
    """Иерархия классов ошибок"""

    @pytest.mark.parametrize(
        "error_type",
        [
            InvalidValueError,
            ConversionError,
            OutOfBoundsError,
            InvalidPrecisionError,
            PositiveDecodeError,
        ],
    )
    def test_value_errors(self, error_type: type) -> None:
        """Ошибки входных данных наследуют ValueError"""
        assert issubclass(error_type, PositiveError)
        assert issubclass(error_type, ValueError)

    def test_arithmetic_error(self) -> None:
        assert issubclass(PositiveArithmeticError, PositiveError)
        assert issubclass(PositiveArithmeticError, ArithmeticError)

    def test_invariant_violation_is_not_exception(self) -> None:
        """InvariantViolation не перехватывается `except Exception`"""
        assert issubclass(InvariantViolation, BaseException)
        assert not issubclass(InvariantViolation, Exception)
        assert not issubclass(InvariantViolation, PositiveError)


class TestAbort:
    """Фатальное завершение"""

    def test_abort_raises(self) -> None:
        with pytest.raises(InvariantViolation, match="broken contract"):
            abort("broken contract")

    def test_abort_logs_critical(self, caplog: pytest.LogCaptureFixture) -> None:
        """Перед исключением пишется CRITICAL-запись"""
        with caplog.at_level(logging.CRITICAL, logger="positive_decimal.errors"):
            with pytest.raises(InvariantViolation):
                abort("broken contract")

        assert len(caplog.records) == 1
        assert caplog.records[0].levelno == logging.CRITICAL
        assert "broken contract" in caplog.records[0].getMessage()

    def test_generic_handler_does_not_swallow(self) -> None:
        """Обработчик `except Exception` не перехватывает нарушение инварианта"""
        swallowed = False
        with pytest.raises(InvariantViolation):
            try:
                -PositiveDecimal.ONE
            except Exception:
                swallowed = True
        assert not swallowed
