"""Compact binary encoder.

This module provides ``to_buffer``, which packs a name-keyed value mapping
against a resolved Schema, and ``encode``, which does the same for a pydantic
message instance.
"""

from __future__ import annotations

import logging
from typing import Any, List, Mapping

from pydantic import BaseModel

from ..exceptions import EncodeError, MissingValueError, RangeError, TypeMismatchError
from ..models.values import BooleanValue, BufferValue, IntValue, Value, as_value
from .bitpack import BitPacker
from .schema import ResolvedField, Schema, schema_from_model

logger = logging.getLogger(__name__)

_KIND_NAMES = {IntValue: "int", BooleanValue: "boolean", BufferValue: "bytes"}


def to_buffer(schema: Schema, values: Mapping[str, Any]) -> bytes:
    """Encode a value mapping to compact binary format.

    Fields are packed LSB-first in resolved schema order. The fixed region
    holds every Int and Boolean value and the length prefix of every Bytes
    field; it is followed by the raw payload of each Bytes field, in order.
    Always-present Int fields cost nothing and are not looked up.

    Args:
        schema: Resolved schema
        values: Mapping of field name to a Value or a plain int/bool/bytes

    Returns:
        Encoded bytes

    Raises:
        MissingValueError: If a required field has no value
        TypeMismatchError: If a value does not match its field's kind
        RangeError: If an Int is out of bounds or a payload is too long

    Example:
        >>> schema = construct([Int("difficulty", 0, 2)])
        >>> to_buffer(schema, {"difficulty": 2})
        b'\\x02'
    """
    packer = BitPacker()
    payloads: List[bytes] = []

    for field in schema.fields:
        if field.always_present:
            continue
        value = _lookup(values, field)
        _encode_field(packer, field, value, payloads)

    encoded = packer.to_bytes() + b"".join(payloads)
    logger.debug(
        "encoded %d fields into %d bytes (%d payload bytes)",
        len(schema),
        len(encoded),
        sum(len(payload) for payload in payloads),
    )
    return encoded


def _lookup(values: Mapping[str, Any], field: ResolvedField) -> Value:
    try:
        raw = values[field.name]
    except KeyError:
        raise MissingValueError(
            f"Field {field.name}: required but missing from values", field.name
        ) from None

    try:
        return as_value(raw)
    except TypeError as err:
        raise TypeMismatchError(f"Field {field.name}: {err}", field.name) from err


def _expect(field: ResolvedField, value: Value, expected: type) -> Any:
    """Check the tag and the payload it wraps; return the payload.

    A tagged value built by hand may hold anything, so the payload type is
    checked as strictly as a plain value would be in ``as_value``.
    """
    if not isinstance(value, expected):
        raise TypeMismatchError(
            f"Field {field.name}: expected {_KIND_NAMES[expected]}, "
            f"got {_KIND_NAMES[type(value)]}",
            field.name,
        )

    payload = value.value
    if expected is IntValue:
        valid = isinstance(payload, int) and not isinstance(payload, bool)
    elif expected is BooleanValue:
        valid = isinstance(payload, bool)
    else:
        valid = isinstance(payload, (bytes, bytearray, memoryview))
        if valid:
            payload = bytes(payload)

    if not valid:
        raise TypeMismatchError(
            f"Field {field.name}: {_KIND_NAMES[expected]} value holds "
            f"{type(payload).__name__}",
            field.name,
        )
    return payload


def _encode_field(
    packer: BitPacker, field: ResolvedField, value: Value, payloads: List[bytes]
) -> None:
    """Encode a single field value.

    Bytes payloads are appended to ``payloads`` rather than the packer.
    """
    if field.kind == "int":
        number = _expect(field, value, IntValue)
        offset = number - field.min
        if offset < 0 or offset > field.max - field.min:
            raise RangeError(
                f"Field {field.name}: value {number} out of bounds "
                f"[{field.min}, {field.max}]",
                field.name,
            )
        packer.write_uint(offset, field.bits)
        return

    if field.kind == "boolean":
        packer.write_bool(_expect(field, value, BooleanValue))
        return

    if field.kind == "bytes":
        buffer = _expect(field, value, BufferValue)
        length = len(buffer)
        if length > field.max:
            raise RangeError(
                f"Field {field.name}: payload of {length} bytes exceeds max {field.max}",
                field.name,
            )
        packer.write_uint(length, field.bits)
        payloads.append(buffer)
        return

    raise EncodeError(f"Field {field.name}: unsupported kind {field.kind}", field.name)


def encode(message: BaseModel) -> bytes:
    """Encode a pydantic message to compact binary format.

    The schema is derived from the message class with ``schema_from_model``.

    Args:
        message: Pydantic message instance to encode

    Returns:
        Compact binary representation

    Raises:
        SchemaError: If the message class cannot be mapped to a schema
        EncodeError: If a field value is invalid or out of bounds

    Example:
        ```python
        from pydantic import Field
        from bitschema import BaseMessage, encode

        class Settings(BaseMessage):
            lives: int = Field(ge=1, le=5)
            hardcore: bool

        data = encode(Settings(lives=3, hardcore=True))
        ```
    """
    schema = schema_from_model(type(message))
    values = {field.name: getattr(message, field.name) for field in schema.fields}
    return to_buffer(schema, values)
