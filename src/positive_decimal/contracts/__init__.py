"""
Contract Module

Wire-формат PositiveDecimal: кодек, интеграция с pydantic и JSON Schema контракт.
"""

from .codec import decode, dumps, encode, loads
from .validators import (
    ContractValidator,
    PositiveDecimalValidator,
    SchemaLoader,
    load_contract_schema,
    validate_positive_decimal,
)

__all__ = [
    # Codec
    "encode",
    "decode",
    "dumps",
    "loads",
    # Classes
    "SchemaLoader",
    "ContractValidator",
    "PositiveDecimalValidator",
    # Functions
    "load_contract_schema",
    "validate_positive_decimal",
]
