"""
Tests for JSON Schema Contract Validators

Комплексное тестирование JSON Schema валидатора wire-представления:
- Валидность самой схемы
- Валидация правильных данных
- Детекция нарушений типов и constraints
- Согласованность с кодеком
"""

import json
import sys
from pathlib import Path

import pytest
from jsonschema import ValidationError

from positive_decimal import PositiveDecimal, encode
from positive_decimal.contracts import (
    PositiveDecimalValidator,
    SchemaLoader,
    load_contract_schema,
    validate_positive_decimal,
)

# =============================================================================
# SCHEMA LOADER
# =============================================================================


class TestSchemaLoader:
    """Тесты загрузчика схем"""

    def test_load_contract_schema(self) -> None:
        schema = SchemaLoader().load_schema("positive_decimal")
        assert schema["type"] == "number"
        assert schema["minimum"] == 0

    def test_schema_cached(self) -> None:
        loader = SchemaLoader()
        assert loader.load_schema("positive_decimal") is loader.load_schema("positive_decimal")

    def test_missing_schema(self) -> None:
        with pytest.raises(FileNotFoundError):
            SchemaLoader().load_schema("does_not_exist")

    def test_missing_directory(self, tmp_path: Path) -> None:
        with pytest.raises(RuntimeError, match="Schema directory not found"):
            SchemaLoader(tmp_path / "absent")

    def test_invalid_schema(self, tmp_path: Path) -> None:
        """Meta-validation отклоняет некорректную схему"""
        (tmp_path / "broken.json").write_text(json.dumps({"type": 5}), encoding="utf-8")
        with pytest.raises(ValueError, match="Invalid JSON Schema"):
            SchemaLoader(tmp_path).load_schema("broken")

    def test_module_level_helper(self) -> None:
        assert load_contract_schema()["$schema"].endswith("2020-12/schema")


# =============================================================================
# VALIDATOR
# =============================================================================


class TestPositiveDecimalValidator:
    """Тесты валидатора positive_decimal"""

    @pytest.mark.parametrize("data", [0, 1, 1.5, 123.456, sys.float_info.max, 2**70])
    def test_valid(self, data: object) -> None:
        validator = PositiveDecimalValidator()
        assert validator.is_valid(data)
        validate_positive_decimal(data)

    @pytest.mark.parametrize("data", [-1, -0.5, "1.5", True, None, [1], {"value": 1}])
    def test_invalid(self, data: object) -> None:
        assert not PositiveDecimalValidator().is_valid(data)
        with pytest.raises(ValidationError):
            validate_positive_decimal(data)

    def test_iter_errors(self) -> None:
        errors = list(PositiveDecimalValidator().iter_errors(-1))
        assert len(errors) == 1
        assert errors[0].validator == "minimum"

    @pytest.mark.parametrize(
        "value",
        [
            PositiveDecimal.ZERO,
            PositiveDecimal(100),
            PositiveDecimal("123.456"),
            PositiveDecimal.INFINITY,
        ],
    )
    def test_encoded_values_satisfy_contract(self, value: PositiveDecimal) -> None:
        """Выход кодека всегда соответствует контракту"""
        assert PositiveDecimalValidator().is_valid(encode(value))
