"""Environment variable resolution utilities."""

from __future__ import annotations

import logging
import os
import re
from collections.abc import Iterator, Mapping

from strcoerce.config_source import JsonPrimitive, JsonValue
from strcoerce.values import I64_MIN, U64_MAX

_LOGGER = logging.getLogger(__name__)

_INT_RE = re.compile(r"^[+-]?\d+$", re.ASCII)
_FLOAT_RE = re.compile(r"^[+-]?(?:\d+\.\d*|\.\d+|\d+)(?:[eE][+-]?\d+)?$", re.ASCII)
# -----------------------------------------------------------------------------
# String Helpers
# -----------------------------------------------------------------------------


def env_text(
    name: str,
    *,
    default: str | None = None,
    strip: bool = True,
    allow_empty: bool = False,
) -> str | None:
    """Return an environment variable string with optional normalization.

    Parameters
    ----------
    name
        Environment variable name.
    default
        Default value if not set or empty (unless allow_empty is True).
    strip
        Whether to strip whitespace from the value.
    allow_empty
        Whether to return empty strings instead of the default.

    Returns
    -------
    str | None
        Parsed value, or default/None when missing.
    """
    raw = os.environ.get(name)
    if raw is None:
        return default
    value = raw.strip() if strip else raw
    if not value and not allow_empty:
        return default
    return value


# -----------------------------------------------------------------------------
# Scalar Parsing
# -----------------------------------------------------------------------------


def parse_env_scalar(raw: str) -> JsonPrimitive:
    """Parse an environment string into a bool, int, float or string.

    ``true``/``false`` are case-insensitive. Integer text outside the 64-bit
    ranges stays a string. Only ASCII digits count as numerals, so other
    Unicode digits stay text. Anything unrecognized is returned stripped.

    Returns
    -------
    JsonPrimitive
        Parsed scalar.
    """
    value = raw.strip()
    lowered = value.lower()
    if lowered == "true":
        return True
    if lowered == "false":
        return False
    if _INT_RE.match(value):
        number = int(value)
        if I64_MIN <= number <= U64_MAX:
            return number
        return value
    if _FLOAT_RE.match(value):
        return float(value)
    return value


def parse_env_value(raw: str) -> JsonValue:
    """Parse an environment string, expanding ``[a, b]`` into a list.

    Items are split on every comma and parsed as scalars; nested brackets are
    not recognized, so ``"[a, [b, c]]"`` yields ``["a", "[b", "c]"]``.

    Returns
    -------
    JsonValue
        Parsed scalar or list of scalars.
    """
    value = raw.strip()
    if value.startswith("[") and value.endswith("]"):
        inner = value[1:-1].strip()
        if not inner:
            return []
        return [parse_env_scalar(item) for item in inner.split(",")]
    return parse_env_scalar(value)


def iter_env(
    *,
    prefix: str = "",
    environ: Mapping[str, str] | None = None,
) -> Iterator[tuple[str, str, JsonValue]]:
    """Yield ``(key, variable, value)`` for environment variables.

    Keys have ``prefix`` stripped and are lower-cased. Empty values are
    skipped.

    Parameters
    ----------
    prefix
        Only variables starting with this prefix are read.
    environ
        Environment mapping, defaults to ``os.environ``.

    Yields
    ------
    tuple[str, str, JsonValue]
        Normalized key, original variable name and parsed value.
    """
    source = os.environ if environ is None else environ
    for name, raw in sorted(source.items()):
        if not name.startswith(prefix):
            continue
        key = name[len(prefix) :].lower()
        if not key:
            continue
        if not raw.strip():
            _LOGGER.debug("Skipping empty environment variable %s", name)
            continue
        yield key, name, parse_env_value(raw)


__all__ = [
    "env_text",
    "iter_env",
    "parse_env_scalar",
    "parse_env_value",
]
