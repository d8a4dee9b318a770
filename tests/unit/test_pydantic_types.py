"""Tests for pydantic string coercion types."""

from __future__ import annotations

import pydantic
import pytest

from strcoerce.pydantic_types import COERCED_STR_ADAPTER, CoercedStrField, SettingsBase


class ServiceSettings(SettingsBase):
    """Settings with one coerced string field."""

    name: CoercedStrField
    replicas: int = 1


@pytest.mark.parametrize(
    ("raw", "expected"),
    [(-8080, "-8080"), (8080, "8080"), (80.822, "80.822"), (True, "true"), ("foo", "foo")],
)
def test_adapter_coerces_scalars(raw: object, expected: str) -> None:
    """Ensure the adapter renders supported scalars as strings."""
    assert COERCED_STR_ADAPTER.validate_python(raw) == expected


def test_model_field_coercion() -> None:
    """Ensure models coerce the annotated field and ignore unrelated keys."""
    settings = ServiceSettings.model_validate({"name": 8080, "path": "/usr/bin"})
    assert settings.name == "8080"
    assert settings.replicas == 1


def test_model_rejects_sequence_with_loc() -> None:
    """Ensure sequences raise a pydantic ValidationError at the field."""
    with pytest.raises(pydantic.ValidationError) as exc_info:
        ServiceSettings.model_validate({"name": [1, 2]})
    errors = exc_info.value.errors()
    assert errors[0]["loc"] == ("name",)
    assert "expected a string or string-convertible value" in errors[0]["msg"]


def test_model_is_frozen() -> None:
    """Ensure settings instances are immutable."""
    settings = ServiceSettings.model_validate({"name": "foo"})
    with pytest.raises(pydantic.ValidationError):
        settings.name = "bar"  # type: ignore[misc]
