"""Shared msgspec policy and the string coercion decode hook."""

from __future__ import annotations

import re
from collections.abc import Callable
from typing import Any

import msgspec

from strcoerce.coercion import coerce_to_string


class StructBaseStrict(
    msgspec.Struct,
    frozen=True,
    kw_only=True,
    repr_omit_defaults=True,
    forbid_unknown_fields=True,
):
    """Base struct for strict configuration schemas."""


class StructBaseCompat(
    msgspec.Struct,
    frozen=True,
    kw_only=True,
    repr_omit_defaults=True,
    forbid_unknown_fields=False,
):
    """Base struct for schemas fed from sources carrying unrelated keys."""


class CoercedStr(str):
    """String field type that also accepts integers, floats and booleans.

    Declare a struct field as ``CoercedStr`` and decode it through
    ``convert``, ``loads_json`` or ``loads_toml`` (or pass ``dec_hook`` to
    msgspec directly) to have string-convertible scalars rendered as text.

    .. code-block:: python

        class Config(StructBaseStrict, frozen=True):
            name: CoercedStr
    """

    __slots__ = ()


_VALIDATION_RE = re.compile(r"^(?P<summary>.*?)(?:\s+-\s+at\s+`(?P<path>[^`]+)`)?$")

_CONVERTERS: dict[object, Callable[[object], object]] = {
    CoercedStr: lambda value: CoercedStr(coerce_to_string(value)),
}


def dec_hook(type_hint: Any, obj: object) -> object:
    """Decode hook resolving ``CoercedStr`` fields.

    Parameters
    ----------
    type_hint
        Custom type msgspec is decoding into.
    obj
        Raw decoded value.

    Returns
    -------
    object
        Converted value.

    Raises
    ------
    NotImplementedError
        Raised for custom types this hook does not handle.
    """
    handler = _CONVERTERS.get(type_hint)
    if handler is None:
        msg = f"Unsupported type: {type_hint!r}"
        raise NotImplementedError(msg)
    return handler(obj)


def validation_error_payload(exc: msgspec.ValidationError) -> dict[str, str]:
    """Normalize a msgspec ValidationError for diagnostics.

    Parameters
    ----------
    exc
        ValidationError raised by msgspec decoding/conversion.

    Returns
    -------
    dict[str, str]
        Normalized error payload containing type, summary, and optional path.
    """
    message = str(exc).strip()
    match = _VALIDATION_RE.match(message)
    payload: dict[str, str] = {"type": exc.__class__.__name__}
    if match:
        summary = (match.group("summary") or "").strip()
        if summary:
            payload["summary"] = summary
        path = match.group("path")
        if path:
            payload["path"] = path
        return payload
    payload["summary"] = message
    return payload


def loads_json[T](buf: bytes | str, *, target_type: type[T], strict: bool = True) -> T:
    """Deserialize JSON bytes into the requested type.

    Parameters
    ----------
    buf
        JSON payload.
    target_type
        Target type for decoding.
    strict
        Whether to enforce strict decoding.

    Returns
    -------
    T
        Decoded payload.
    """
    decoder = msgspec.json.Decoder(
        type=target_type,
        dec_hook=dec_hook,
        strict=strict,
    )
    return decoder.decode(buf)


def loads_toml[T](buf: bytes | str, *, target_type: type[T], strict: bool = True) -> T:
    """Deserialize TOML text into the requested type.

    Returns
    -------
    T
        Decoded payload.
    """
    return msgspec.toml.decode(buf, type=target_type, strict=strict, dec_hook=dec_hook)


def convert[T](
    obj: object,
    *,
    target_type: type[T],
    strict: bool = True,
) -> T:
    """Convert an object into a target type.

    Parameters
    ----------
    obj
        Object to convert.
    target_type
        Target type for conversion.
    strict
        Whether to enforce strict conversion.

    Returns
    -------
    T
        Converted payload.
    """
    return msgspec.convert(
        obj,
        type=target_type,
        strict=strict,
        dec_hook=dec_hook,
    )


__all__ = [
    "CoercedStr",
    "StructBaseCompat",
    "StructBaseStrict",
    "convert",
    "dec_hook",
    "loads_json",
    "loads_toml",
    "validation_error_payload",
]
