"""Tagged representation of a single presented scalar value."""

from __future__ import annotations

from collections.abc import Mapping, Sequence, Set
from typing import cast

import msgspec

I64_MIN = -(2**63)
U64_MAX = 2**64 - 1


class _ValueBase(
    msgspec.Struct,
    frozen=True,
    kw_only=True,
    forbid_unknown_fields=True,
):
    """Base struct for presented values."""


class StrValue(_ValueBase, frozen=True):
    """Text value."""

    value: str


class SignedValue(_ValueBase, frozen=True):
    """Negative integer within the signed 64-bit range."""

    value: int


class UnsignedValue(_ValueBase, frozen=True):
    """Non-negative integer within the unsigned 64-bit range."""

    value: int


class BoolValue(_ValueBase, frozen=True):
    """Boolean value."""

    value: bool


class FloatValue(_ValueBase, frozen=True):
    """64-bit floating point value."""

    value: float


class UnsupportedValue(_ValueBase, frozen=True):
    """Value whose shape is not a supported scalar.

    ``kind`` is a short human-readable shape name such as ``"sequence"``.
    """

    kind: str


type DecodedValue = (
    StrValue | SignedValue | UnsignedValue | BoolValue | FloatValue | UnsupportedValue
)

DECODED_VALUE_TYPES: tuple[type[_ValueBase], ...] = (
    StrValue,
    SignedValue,
    UnsignedValue,
    BoolValue,
    FloatValue,
    UnsupportedValue,
)


def describe_kind(obj: object) -> str:
    """Return the shape name used in error messages for a non-scalar value.

    Parameters
    ----------
    obj
        Value to describe.

    Returns
    -------
    str
        Shape name.
    """
    if obj is None:
        return "null"
    if isinstance(obj, Mapping):
        return "map"
    if isinstance(obj, (bytes, bytearray, memoryview)):
        return "bytes"
    if isinstance(obj, (Sequence, Set)):
        return "sequence"
    return type(obj).__name__


def classify_value(obj: object) -> DecodedValue:
    """Classify a raw decoded object into a ``DecodedValue``.

    ``bool`` is checked before ``int``. Integers outside both the signed and
    unsigned 64-bit ranges are reported as unsupported.

    Parameters
    ----------
    obj
        Raw value produced by a decoder or configuration source.

    Returns
    -------
    DecodedValue
        Tagged value.
    """
    if isinstance(obj, DECODED_VALUE_TYPES):
        return cast("DecodedValue", obj)
    if isinstance(obj, bool):
        return BoolValue(value=obj)
    if isinstance(obj, int):
        number = int(obj)
        if I64_MIN <= number < 0:
            return SignedValue(value=number)
        if 0 <= number <= U64_MAX:
            return UnsignedValue(value=number)
        return UnsupportedValue(kind="integer out of range")
    if isinstance(obj, float):
        return FloatValue(value=float(obj))
    if isinstance(obj, str):
        return StrValue(value=str(obj))
    return UnsupportedValue(kind=describe_kind(obj))


__all__ = [
    "DECODED_VALUE_TYPES",
    "I64_MIN",
    "U64_MAX",
    "BoolValue",
    "DecodedValue",
    "FloatValue",
    "SignedValue",
    "StrValue",
    "UnsignedValue",
    "UnsupportedValue",
    "classify_value",
    "describe_kind",
]
