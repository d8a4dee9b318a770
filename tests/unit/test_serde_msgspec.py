"""Tests for the msgspec CoercedStr decode hook."""

from __future__ import annotations

import msgspec
import pytest

from strcoerce import serde_msgspec
from strcoerce.serde_msgspec import (
    CoercedStr,
    StructBaseStrict,
    convert,
    dec_hook,
    loads_json,
    loads_toml,
    validation_error_payload,
)


class ServiceConfig(StructBaseStrict, frozen=True):
    """Schema with one coerced and one plain string field."""

    name: CoercedStr
    label: str = "default"


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("8080", "8080"),
        (-8080, "-8080"),
        (8080, "8080"),
        (80.822, "80.822"),
        (True, "true"),
        ("foo", "foo"),
    ],
)
def test_convert_coerces_scalars(raw: object, expected: str) -> None:
    """Ensure convert routes CoercedStr fields through the coercion hook."""
    config = convert({"name": raw}, target_type=ServiceConfig)
    assert config.name == expected
    assert isinstance(config.name, str)


def test_convert_rejects_sequence_with_path() -> None:
    """Ensure sequence input fails validation at the field path."""
    with pytest.raises(msgspec.ValidationError) as exc_info:
        convert({"name": [1, 2]}, target_type=ServiceConfig)
    payload = validation_error_payload(exc_info.value)
    assert payload["type"] == "ValidationError"
    assert payload["path"] == "$.name"
    assert payload["summary"] == (
        "invalid type: sequence, expected a string or string-convertible value"
    )


def test_plain_str_fields_stay_strict() -> None:
    """Ensure fields typed as plain str keep msgspec's strict behavior."""
    with pytest.raises(msgspec.ValidationError):
        convert({"name": "x", "label": 5}, target_type=ServiceConfig)


def test_loads_json_coerces_numbers() -> None:
    """Ensure JSON numbers and booleans decode into CoercedStr fields."""
    assert loads_json(b'{"name": -8080}', target_type=ServiceConfig).name == "-8080"
    assert loads_json('{"name": 80.822}', target_type=ServiceConfig).name == "80.822"
    assert loads_json(b'{"name": false}', target_type=ServiceConfig).name == "false"


def test_loads_json_rejects_null_and_objects() -> None:
    """Ensure null and object values are rejected for CoercedStr fields."""
    with pytest.raises(msgspec.ValidationError, match="invalid type: null"):
        loads_json(b'{"name": null}', target_type=ServiceConfig)
    with pytest.raises(msgspec.ValidationError, match="invalid type: map"):
        loads_json(b'{"name": {"a": 1}}', target_type=ServiceConfig)


def test_loads_toml_coerces_scalars() -> None:
    """Ensure TOML scalars decode into CoercedStr fields."""
    assert loads_toml("name = 8080\n", target_type=ServiceConfig).name == "8080"
    assert loads_toml("name = true\n", target_type=ServiceConfig).name == "true"
    assert loads_toml('name = "foo"\n', target_type=ServiceConfig).name == "foo"


def test_loads_toml_rejects_arrays_and_dates() -> None:
    """Ensure TOML arrays and dates are not coerced."""
    with pytest.raises(msgspec.ValidationError, match="invalid type: sequence"):
        loads_toml("name = [1, 2]\n", target_type=ServiceConfig)
    with pytest.raises(msgspec.ValidationError, match="invalid type: date"):
        loads_toml("name = 1979-05-27\n", target_type=ServiceConfig)


def test_dec_hook_rejects_unknown_types() -> None:
    """Ensure the hook declines custom types it does not own."""
    with pytest.raises(NotImplementedError):
        dec_hook(complex, "1+2j")


def test_module_exposes_decode_helpers_only() -> None:
    """Ensure the msgspec surface is limited to decoding helpers."""
    assert set(serde_msgspec.__all__) == {
        "CoercedStr",
        "StructBaseCompat",
        "StructBaseStrict",
        "convert",
        "dec_hook",
        "loads_json",
        "loads_toml",
        "validation_error_payload",
    }
