"""
Тесты Serialization Codec PositiveDecimal

Проверяет:
1. encode / dumps: int для целых, float для дробных, F64_MAX для INFINITY
2. decode / loads: только неотрицательные числа, sentinel INFINITY
3. Интеграцию с pydantic v2 (валидация, JSON-сериализация, JSON Schema)
"""

import json
import logging
import math
import sys
from decimal import Decimal

import pytest
from pydantic import BaseModel, ValidationError

from positive_decimal import PositiveDecimal, decode, dumps, encode, loads
from positive_decimal.errors import PositiveDecodeError

P = PositiveDecimal


# =============================================================================
# ENCODE
# =============================================================================


class TestEncode:
    """encode / dumps"""

    def test_fractional_as_float(self) -> None:
        result = encode(P.new(42.5))
        assert isinstance(result, float)
        assert result == 42.5
        assert dumps(P.new(42.5)) == "42.5"

    def test_whole_number_as_int(self) -> None:
        result = encode(P.new(100.0))
        assert isinstance(result, int)
        assert result == 100
        assert dumps(P.new(100.0)) == "100"

    def test_large_whole_number(self) -> None:
        """Целые вне диапазона i64 кодируются без потерь"""
        assert encode(P.from_int(2**70)) == 2**70

    def test_infinity(self) -> None:
        assert encode(PositiveDecimal.INFINITY) == sys.float_info.max
        assert dumps(PositiveDecimal.INFINITY) == repr(sys.float_info.max)

    def test_trailing_zero_scale_encoded_as_float(self) -> None:
        result = encode(P("2.50"))
        assert isinstance(result, float)
        assert result == 2.5


# =============================================================================
# DECODE
# =============================================================================


class TestDecode:
    """decode / loads"""

    def test_float(self) -> None:
        assert loads("42.5") == P.new(42.5)
        assert decode(0.1).value == Decimal("0.1")

    def test_int(self) -> None:
        assert loads("100") == P.new(100.0)
        assert loads("0") == PositiveDecimal.ZERO

    @pytest.mark.parametrize("raw", [sys.float_info.max, math.inf])
    def test_infinity_sentinel(self, raw: float) -> None:
        assert decode(raw) is PositiveDecimal.INFINITY

    def test_infinity_round_trip(self) -> None:
        assert loads(dumps(PositiveDecimal.INFINITY)) is PositiveDecimal.INFINITY

    @pytest.mark.parametrize(
        "value", [PositiveDecimal.ZERO, P.new(100.0), P.new(123.456), P("0.1")]
    )
    def test_round_trip(self, value: PositiveDecimal) -> None:
        assert loads(dumps(value)) == value

    @pytest.mark.parametrize("text", ["-42", "-42.5", '"42.5"', "true", "null", "[1]", '{"a": 1}'])
    def test_rejected_json(self, text: str) -> None:
        with pytest.raises(PositiveDecodeError):
            loads(text)

    @pytest.mark.parametrize(
        "raw", [-42, -42.5, "42.5", True, None, math.nan, -math.inf, 1e30, 2**96, [1], {}]
    )
    def test_rejected_values(self, raw: object) -> None:
        with pytest.raises(PositiveDecodeError):
            decode(raw)

    def test_string_message(self) -> None:
        with pytest.raises(PositiveDecodeError, match="Invalid string: '42.5'"):
            decode("42.5")

    def test_invalid_json(self) -> None:
        with pytest.raises(PositiveDecodeError, match="invalid JSON"):
            loads("4 2")

    def test_decode_error_is_value_error(self) -> None:
        with pytest.raises(ValueError):
            decode(-1)

    def test_rejection_logged_at_debug(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.DEBUG, logger="positive_decimal.contracts.codec"):
            with pytest.raises(PositiveDecodeError):
                decode(-1)

        assert any("Rejected PositiveDecimal input" in r.getMessage() for r in caplog.records)


# =============================================================================
# PYDANTIC
# =============================================================================


class Order(BaseModel):
    """Модель с полями PositiveDecimal."""

    quantity: PositiveDecimal
    price: PositiveDecimal

    model_config = {"frozen": True}


class TestPydanticIntegration:
    """PositiveDecimal как тип поля pydantic-модели"""

    def test_validation_from_python(self) -> None:
        order = Order(quantity=10, price=42.5)
        assert isinstance(order.quantity, PositiveDecimal)
        assert order.quantity == P(10)
        assert order.price == P.new(42.5)

    def test_accepts_positive_decimal_and_decimal(self) -> None:
        order = Order(quantity=P(3), price=Decimal("1.25"))
        assert order.quantity is not None
        assert order.price.value == Decimal("1.25")

    @pytest.mark.parametrize(
        "quantity", [-1, -0.5, "1.5", True, None, Decimal("-1"), Decimal("NaN")]
    )
    def test_invalid_values(self, quantity: object) -> None:
        with pytest.raises(ValidationError):
            Order(quantity=quantity, price=1)

    def test_json_round_trip(self) -> None:
        order = Order(quantity=P(100), price=P("123.456"))
        text = order.model_dump_json()
        assert json.loads(text) == {"quantity": 100, "price": 123.456}
        assert Order.model_validate_json(text) == order

    def test_json_infinity(self) -> None:
        order = Order(quantity=PositiveDecimal.INFINITY, price=1)
        assert json.loads(order.model_dump_json())["quantity"] == sys.float_info.max

    def test_python_dump_keeps_type(self) -> None:
        order = Order(quantity=P(2), price=P(3))
        dumped = order.model_dump()
        assert isinstance(dumped["quantity"], PositiveDecimal)
        assert dumped["quantity"] == P(2)

    def test_json_rejects_strings(self) -> None:
        with pytest.raises(ValidationError):
            Order.model_validate_json('{"quantity": "1", "price": 1}')

    def test_json_schema(self) -> None:
        schema = Order.model_json_schema()
        quantity = schema["properties"]["quantity"]
        assert quantity["type"] == "number"
        assert quantity["minimum"] == 0
        assert "$schema" not in quantity

    def test_frozen(self) -> None:
        order = Order(quantity=1, price=1)
        with pytest.raises(ValidationError):
            order.quantity = P(2)  # type: ignore[misc]
