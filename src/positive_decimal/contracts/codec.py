"""
Codec — Wire-формат PositiveDecimal

Каноническое представление для JSON и других структурированных форматов:
- INFINITY            → sys.float_info.max
- scale 0             → целое число
- иначе               → число с плавающей точкой

Декодирование принимает только числа:
- int >= 0
- float >= 0 (NaN отклоняется; +inf и sys.float_info.max → INFINITY)
- str, bool, None, списки, словари и прочее → PositiveDecodeError

Интеграция с pydantic v2: PositiveDecimal можно использовать как тип поля
модели. Валидация идёт через decode, JSON-сериализация через encode,
JSON Schema поля совпадает с контрактом contracts/schema/positive_decimal.json.
"""

import json
import logging
import math
from decimal import Decimal
from typing import Any, Dict

from pydantic_core import core_schema

from positive_decimal.contracts.validators import load_contract_schema
from positive_decimal.domain.positive import PositiveDecimal
from positive_decimal.errors import ConversionError, PositiveDecodeError
from positive_decimal.math.numerical_safeguards import F64_MAX, decimal_scale

logger = logging.getLogger(__name__)

Number = int | float


# =============================================================================
# ENCODE
# =============================================================================


def encode(value: PositiveDecimal) -> Number:
    """
    Каноническое wire-представление.

    Целые значения кодируются Python int без ограничения разрядности
    (JSON допускает произвольные целые литералы).

    Examples:
        >>> encode(PositiveDecimal(100))
        100
        >>> encode(PositiveDecimal("123.456"))
        123.456
        >>> encode(PositiveDecimal.INFINITY) == F64_MAX
        True
    """
    if value.is_infinity():
        return F64_MAX
    if decimal_scale(value.value) == 0:
        return int(value.value)
    return value.to_float()


def dumps(value: PositiveDecimal, **kwargs: Any) -> str:
    """JSON-текст значения (kwargs передаются в json.dumps)."""
    return json.dumps(encode(value), **kwargs)


# =============================================================================
# DECODE
# =============================================================================


def _reject(raw: Any, reason: str) -> PositiveDecodeError:
    logger.debug("Rejected PositiveDecimal input %r: %s", raw, reason)
    return PositiveDecodeError(raw, reason)


def decode(raw: Any) -> PositiveDecimal:
    """
    Разбор wire-представления.

    Args:
        raw: Число, полученное из структурированных данных

    Returns:
        PositiveDecimal

    Raises:
        PositiveDecodeError: Если raw не является неотрицательным числом
    """
    if isinstance(raw, bool):
        raise _reject(raw, "Expected a positive number, got a boolean")

    if isinstance(raw, str):
        raise _reject(raw, f"Invalid string: '{raw}'. Expected a positive number.")

    if isinstance(raw, int):
        if raw < 0:
            raise _reject(raw, "Expected a non-negative integer")
        try:
            return PositiveDecimal.from_int(raw)
        except ConversionError as e:
            raise _reject(raw, e.reason) from e

    if isinstance(raw, float):
        if math.isnan(raw):
            raise _reject(raw, "NaN is not a number")
        if raw == math.inf or raw == F64_MAX:
            return PositiveDecimal.INFINITY
        if raw < 0:
            raise _reject(raw, "Expected a non-negative float")
        try:
            return PositiveDecimal.new(raw)
        except ConversionError as e:
            raise _reject(raw, e.reason) from e

    raise _reject(raw, f"Expected a positive number, got {type(raw).__name__}")


def loads(text: str | bytes) -> PositiveDecimal:
    """
    Разбор JSON-текста.

    Raises:
        PositiveDecodeError: Невалидный JSON или значение не является
            неотрицательным числом
    """
    try:
        raw = json.loads(text)
    except json.JSONDecodeError as e:
        raise _reject(text, f"invalid JSON: {e.msg}") from e
    return decode(raw)


# =============================================================================
# PYDANTIC INTEGRATION
# =============================================================================


def _validate_field(raw: Any) -> PositiveDecimal:
    # Python-режим дополнительно принимает готовые PositiveDecimal и Decimal
    if isinstance(raw, PositiveDecimal):
        return raw
    if isinstance(raw, Decimal):
        return PositiveDecimal.from_decimal(raw)
    return decode(raw)


def pydantic_core_schema() -> core_schema.CoreSchema:
    """Core schema для PositiveDecimal как типа поля pydantic-модели."""
    return core_schema.no_info_plain_validator_function(
        _validate_field,
        serialization=core_schema.plain_serializer_function_ser_schema(
            encode, when_used="json"
        ),
    )


def pydantic_json_schema() -> Dict[str, Any]:
    """JSON Schema поля: контракт без служебных ключей $schema/$id."""
    schema = load_contract_schema()
    return {key: value for key, value in schema.items() if key not in ("$schema", "$id")}
