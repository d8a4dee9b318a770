"""String coercion for string-convertible scalar values."""

from __future__ import annotations

from collections.abc import Callable
from typing import assert_never

from strcoerce.values import (
    BoolValue,
    DecodedValue,
    FloatValue,
    SignedValue,
    StrValue,
    UnsignedValue,
    UnsupportedValue,
    classify_value,
)

EXPECTING = "a string or string-convertible value"

type ErrorFactory = Callable[[str], Exception]


class CoercionError(ValueError):
    """Raised when a presented value has an unsupported shape."""

    def __init__(self, message: str, *, kind: str | None = None) -> None:
        self.kind = kind
        super().__init__(message)


def unsupported_message(kind: str) -> str:
    """Return the error message for an unsupported value shape.

    Returns
    -------
    str
        Human-readable expectation message.
    """
    return f"invalid type: {kind}, expected {EXPECTING}"


def render_float(value: float) -> str:
    """Render a float using the shortest round-trippable representation.

    ``float(render_float(x)) == x`` holds for every finite ``x``. Non-finite
    values render as ``"nan"``, ``"inf"`` and ``"-inf"``.

    Returns
    -------
    str
        Textual float.
    """
    return repr(value)


def coerce_to_string(
    value: object,
    *,
    error_factory: ErrorFactory | None = None,
) -> str:
    """Coerce one presented value into its canonical string form.

    Parameters
    ----------
    value
        A ``DecodedValue`` or a raw decoded object.
    error_factory
        Callable building the host decoder's error from a message. Defaults
        to ``CoercionError``.

    Returns
    -------
    str
        Coerced string.

    Raises
    ------
    CoercionError
        Raised when the value shape is unsupported and no factory is given.
    """
    decoded: DecodedValue = classify_value(value)
    match decoded:
        case StrValue(value=text):
            return text
        case SignedValue(value=number) | UnsignedValue(value=number):
            return str(number)
        case BoolValue(value=flag):
            return "true" if flag else "false"
        case FloatValue(value=number):
            return render_float(number)
        case UnsupportedValue(kind=shape):
            message = unsupported_message(shape)
            if error_factory is None:
                raise CoercionError(message, kind=shape)
            raise error_factory(message)
        case _:
            assert_never(decoded)


class StringCoercer:
    """Callable coercion hook for fields that accept string-convertible values."""

    expecting = EXPECTING

    def __init__(self, *, error_factory: ErrorFactory | None = None) -> None:
        self._error_factory = error_factory

    def coerce(self, value: object) -> str:
        """Return the string form of ``value``.

        Returns
        -------
        str
            Coerced string.
        """
        return coerce_to_string(value, error_factory=self._error_factory)

    def __call__(self, value: object) -> str:
        return self.coerce(value)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(expecting={self.expecting!r})"


STRING_COERCER = StringCoercer()

__all__ = [
    "EXPECTING",
    "STRING_COERCER",
    "CoercionError",
    "ErrorFactory",
    "StringCoercer",
    "coerce_to_string",
    "render_float",
    "unsupported_message",
]
