"""Coerce string-convertible configuration scalars into string fields."""

from strcoerce.coercion import (
    EXPECTING,
    STRING_COERCER,
    CoercionError,
    StringCoercer,
    coerce_to_string,
)
from strcoerce.config_loader import extract, load_config
from strcoerce.pydantic_types import CoercedStrField
from strcoerce.serde_msgspec import CoercedStr, dec_hook

__all__ = [
    "EXPECTING",
    "STRING_COERCER",
    "CoercedStr",
    "CoercedStrField",
    "CoercionError",
    "StringCoercer",
    "coerce_to_string",
    "dec_hook",
    "extract",
    "load_config",
]
