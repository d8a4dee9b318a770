"""Config providers, precedence merging, and typed extraction."""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping
from pathlib import Path
from typing import cast

import msgspec

from strcoerce.config_source import ConfigSource, ConfigValue, ConfigWithSources, JsonValue
from strcoerce.env_utils import env_text, iter_env
from strcoerce.serde_msgspec import convert, validation_error_payload

logger = logging.getLogger(__name__)

CONFIG_PATH_ENV = "STRCOERCE_CONFIG"

_PATH_KEY_RE = re.compile(r"^\$\.(?P<key>[^.\[]+)")


def defaults_provider(values: Mapping[str, JsonValue]) -> ConfigWithSources:
    """Wrap in-code defaults as a configuration layer.

    Returns
    -------
    ConfigWithSources
        Default values tagged with ``ConfigSource.DEFAULT``.
    """
    return ConfigWithSources(
        values={
            key: ConfigValue(key=key, value=value, source=ConfigSource.DEFAULT)
            for key, value in values.items()
        }
    )


def toml_provider(path: str | Path, *, table: str | None = None) -> ConfigWithSources:
    """Load a TOML file as a configuration layer.

    Parameters
    ----------
    path
        TOML file path. A missing file yields an empty layer.
    table
        Optional dotted table name to read instead of the document root,
        e.g. ``"tool.strcoerce"`` inside ``pyproject.toml``.

    Returns
    -------
    ConfigWithSources
        File values tagged with ``ConfigSource.CONFIG_FILE``.
    """
    path = Path(path)
    if not path.exists():
        logger.debug("Config file %s not found; skipping", path)
        return ConfigWithSources(values={})
    raw = _read_toml(path)
    location = str(path)
    if table is not None:
        nested = _extract_table(raw, table)
        if nested is None:
            logger.warning("Config file %s has no [%s] table; skipping", path, table)
            return ConfigWithSources(values={})
        raw = nested
        location = f"{path}:{table}"
    logger.debug("Loaded %d config values from %s", len(raw), location)
    return ConfigWithSources(
        values={
            key: ConfigValue(
                key=key,
                value=value,
                source=ConfigSource.CONFIG_FILE,
                location=location,
            )
            for key, value in raw.items()
        }
    )


def env_provider(
    *,
    prefix: str = "",
    environ: Mapping[str, str] | None = None,
) -> ConfigWithSources:
    """Load environment variables as a configuration layer.

    Parameters
    ----------
    prefix
        Variable name prefix to select and strip. An empty prefix reads the
        whole environment.
    environ
        Environment mapping, defaults to ``os.environ``.

    Returns
    -------
    ConfigWithSources
        Parsed values tagged with ``ConfigSource.ENV``.
    """
    values = {
        key: ConfigValue(key=key, value=value, source=ConfigSource.ENV, location=name)
        for key, name, value in iter_env(prefix=prefix, environ=environ)
    }
    logger.debug("Loaded %d config values from environment (prefix=%r)", len(values), prefix)
    return ConfigWithSources(values=values)


def merge_sources(*layers: ConfigWithSources) -> ConfigWithSources:
    """Merge layers so that later layers override earlier ones.

    Returns
    -------
    ConfigWithSources
        Merged configuration.
    """
    values: dict[str, ConfigValue] = {}
    for layer in layers:
        values.update(layer.values)
    return ConfigWithSources(values=values)


def join_sources(*layers: ConfigWithSources) -> ConfigWithSources:
    """Merge layers so that the first value seen for a key wins.

    Returns
    -------
    ConfigWithSources
        Joined configuration.
    """
    values: dict[str, ConfigValue] = {}
    for layer in layers:
        for key, value in layer.values.items():
            values.setdefault(key, value)
    return ConfigWithSources(values=values)


def extract[T](config: ConfigWithSources, *, target_type: type[T]) -> T:
    """Convert merged configuration into a typed schema.

    Parameters
    ----------
    config
        Merged configuration layers.
    target_type
        msgspec struct (or other msgspec-supported type) to build.

    Returns
    -------
    T
        Typed configuration.

    Raises
    ------
    ValueError
        Raised when validation fails; the message names the failing value's
        source when it can be determined.
    """
    try:
        return convert(config.to_flat_dict(), target_type=target_type, strict=True)
    except msgspec.ValidationError as exc:
        details = validation_error_payload(exc)
        location = _failing_location(config, details.get("path"))
        msg = f"Config validation failed for {location}: {details}"
        raise ValueError(msg) from exc


def load_config[T](
    target_type: type[T],
    *,
    defaults: Mapping[str, JsonValue] | None = None,
    config_file: str | Path | None = None,
    table: str | None = None,
    env_prefix: str = "",
) -> T:
    """Load defaults, a TOML file, and the environment into a typed schema.

    Precedence, lowest to highest: ``defaults``, ``config_file``, environment.
    When ``config_file`` is not given, ``STRCOERCE_CONFIG`` names it.

    An empty ``env_prefix`` reads the whole process environment, so the
    schema must ignore unknown keys (``StructBaseCompat``).

    Returns
    -------
    T
        Typed configuration.

    Raises
    ------
    ValueError
        Raised when ``env_prefix`` is empty and ``target_type`` forbids
        unknown fields.
    """
    if not env_prefix and _forbids_unknown_fields(target_type):
        msg = (
            f"{target_type.__name__} forbids unknown fields; pass a non-empty "
            "env_prefix or use a StructBaseCompat schema."
        )
        raise ValueError(msg)
    layers = [defaults_provider(defaults or {})]
    path = config_file if config_file is not None else env_text(CONFIG_PATH_ENV)
    if path is not None:
        layers.append(toml_provider(path, table=table))
    layers.append(env_provider(prefix=env_prefix))
    return extract(merge_sources(*layers), target_type=target_type)


def _forbids_unknown_fields(target_type: type) -> bool:
    config = getattr(target_type, "__struct_config__", None)
    return bool(getattr(config, "forbid_unknown_fields", False))


def _read_toml(path: Path) -> dict[str, JsonValue]:
    payload = msgspec.toml.decode(path.read_text(encoding="utf-8"), type=object, strict=True)
    if not isinstance(payload, dict):
        msg = f"Expected TOML mapping in {path}, got {type(payload).__name__}."
        raise TypeError(msg)
    return cast("dict[str, JsonValue]", payload)


def _extract_table(raw: Mapping[str, JsonValue], table: str) -> dict[str, JsonValue] | None:
    current: JsonValue = raw
    for part in table.split("."):
        if not isinstance(current, Mapping):
            return None
        current = current.get(part)
    if not isinstance(current, dict):
        return None
    return cast("dict[str, JsonValue]", current)


def _failing_location(config: ConfigWithSources, path: str | None) -> str:
    if path is None:
        return "merged configuration"
    match = _PATH_KEY_RE.match(path)
    if match is None:
        return path
    value = config.values.get(match.group("key"))
    if value is None:
        return path
    return f"{path} from {value.describe()}"


__all__ = [
    "CONFIG_PATH_ENV",
    "defaults_provider",
    "env_provider",
    "extract",
    "join_sources",
    "load_config",
    "merge_sources",
    "toml_provider",
]
