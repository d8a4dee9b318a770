"""Pydantic validation types for string-convertible fields."""

from __future__ import annotations

from typing import Annotated

from pydantic import BaseModel, BeforeValidator, ConfigDict, TypeAdapter

from strcoerce.coercion import coerce_to_string

CoercedStrField = Annotated[str, BeforeValidator(coerce_to_string)]
"""String field accepting integers, floats and booleans.

.. code-block:: python

    class Settings(SettingsBase):
        name: CoercedStrField
"""


class SettingsBase(BaseModel):
    """Base class for settings models validated from merged sources."""

    model_config = ConfigDict(
        extra="ignore",
        validate_default=True,
        frozen=True,
        revalidate_instances="always",
    )


COERCED_STR_ADAPTER = TypeAdapter(CoercedStrField)

__all__ = ["COERCED_STR_ADAPTER", "CoercedStrField", "SettingsBase"]
