"""Exception hierarchy for bitschema.

This module defines all custom exceptions used throughout the package.
All exceptions inherit from BitschemaError for easy catching of any bitschema-specific error.
Field-level errors carry the offending field name in ``field``.
"""

from __future__ import annotations


class BitschemaError(Exception):
    """Base exception for all bitschema errors."""

    def __init__(self, message: str, field: str | None = None) -> None:
        super().__init__(message)
        self.field = field


class SchemaError(BitschemaError):
    """Raised when a field declaration or schema is invalid.

    Examples:
        - Int bounds are invalid (e.g., min > max)
        - Bytes field with a negative max length
        - Field wider than the bit accumulator allows
        - Duplicate field names
    """


class EncodeError(BitschemaError):
    """Raised when encoding a value mapping fails."""


class MissingValueError(EncodeError):
    """A required field is absent from the value mapping."""


class TypeMismatchError(EncodeError):
    """A value's variant does not match the field's declared kind."""


class RangeError(EncodeError):
    """An Int value is outside [min, max], or a payload is longer than max."""


class DecodeError(BitschemaError):
    """Raised when decoding binary data fails.

    Examples:
        - Truncated data (insufficient bytes)
        - Length prefix pointing past the end of the buffer
        - Decoded value outside the declared bounds
    """


class BufferUnderrunError(DecodeError):
    """Not enough input bytes to satisfy a field's bit demand."""


class InvalidLengthError(DecodeError):
    """A decoded length prefix exceeds the field max or the remaining buffer."""


class InvalidValueError(DecodeError):
    """A decoded Int offset is outside the field's declared range."""
