"""Provider layers and per-key origin tracking for merged configuration."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from enum import StrEnum

type JsonPrimitive = str | int | float | bool | None
type JsonValue = JsonPrimitive | Mapping[str, JsonValue] | Sequence[JsonValue]


class ConfigSource(StrEnum):
    """Provider layer a value came from, lowest precedence first."""

    DEFAULT = "default"
    CONFIG_FILE = "config_file"
    ENV = "env"


@dataclass(frozen=True)
class ConfigValue:
    """One configuration key as supplied by a provider layer.

    ``location`` is the environment variable name for ``ENV`` values and the
    file path (``path:table`` when a nested table was read) for
    ``CONFIG_FILE`` values. Defaults carry no location.
    """

    key: str
    value: JsonValue
    source: ConfigSource
    location: str | None = None

    def to_dict(self) -> dict[str, object]:
        """Return the value with its origin for display.

        Returns
        -------
        dict[str, object]
            ``value`` and ``source``, plus ``location`` when known.
        """
        result: dict[str, object] = {"value": self.value, "source": self.source.value}
        if self.location:
            result["location"] = self.location
        return result

    def describe(self) -> str:
        """Return a short origin label for validation errors.

        Returns
        -------
        str
            ``source`` or ``source (location)``.
        """
        if self.location:
            return f"{self.source.value} ({self.location})"
        return self.source.value


@dataclass(frozen=True)
class ConfigWithSources:
    """Keys resolved from one or more provider layers.

    Produced by each provider and by ``merge_sources``/``join_sources``; the
    winning ``ConfigValue`` per key keeps the layer it came from.
    """

    values: dict[str, ConfigValue]

    def to_display_dict(self) -> dict[str, dict[str, object]]:
        """Return every key with its value and origin.

        Returns
        -------
        dict[str, dict[str, object]]
            Per-key ``ConfigValue.to_dict`` payloads.
        """
        return {key: cv.to_dict() for key, cv in self.values.items()}

    def to_flat_dict(self) -> dict[str, JsonValue]:
        """Return the plain mapping handed to the decoder.

        Returns
        -------
        dict[str, JsonValue]
            Key to value, without origins.
        """
        return {key: cv.value for key, cv in self.values.items()}


__all__ = ["ConfigSource", "ConfigValue", "ConfigWithSources", "JsonPrimitive", "JsonValue"]
