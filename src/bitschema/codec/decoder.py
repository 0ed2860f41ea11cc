"""Compact binary decoder.

This module provides ``from_buffer``, which unpacks bytes produced by
``to_buffer`` against the same Schema, and ``decode``, which rebuilds a
pydantic message instance.
"""

from __future__ import annotations

import logging
from typing import Dict, List, Tuple, TypeVar, Union

from pydantic import BaseModel

from ..exceptions import (
    BufferUnderrunError,
    DecodeError,
    InvalidLengthError,
    InvalidValueError,
)
from ..models.values import BooleanValue, BufferValue, IntValue, Value, unwrap
from .bitpack import BitUnpacker
from .schema import ResolvedField, Schema, schema_from_model

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=BaseModel)


def from_buffer(schema: Schema, data: Union[bytes, bytearray, memoryview]) -> Dict[str, Value]:
    """Decode compact binary data to a value mapping.

    The fixed region is read first, field by field, pulling input bytes only
    as a field's width demands. Bytes payloads follow the fixed region, which
    is always ``schema.max_byte_length`` bytes long; each Bytes field takes
    its payload from a running cursor over that trailing region, in field
    order. Decoded buffers are copies of the input.

    Args:
        schema: Resolved schema the data was encoded with
        data: Encoded bytes

    Returns:
        Mapping of field name to decoded Value

    Raises:
        BufferUnderrunError: If the input ends inside the fixed region
        InvalidLengthError: If a length prefix exceeds the field max or the remaining input
        InvalidValueError: If a decoded Int lies outside its declared bounds
    """
    data = bytes(data)
    unpacker = BitUnpacker(data)
    values: Dict[str, Value] = {}
    lengths: List[Tuple[ResolvedField, int]] = []

    for field in schema.fields:
        if field.always_present:
            values[field.name] = IntValue(field.min)
            continue

        try:
            raw = unpacker.read_uint(field.bits)
        except IndexError as e:
            raise BufferUnderrunError(
                f"Truncated data while decoding field {field.name}: {e}", field.name
            ) from e

        if field.kind == "int":
            if raw > field.max - field.min:
                raise InvalidValueError(
                    f"Field {field.name}: decoded value {raw + field.min} exceeds max {field.max}",
                    field.name,
                )
            values[field.name] = IntValue(raw + field.min)
        elif field.kind == "boolean":
            values[field.name] = BooleanValue(raw == 1)
        elif field.kind == "bytes":
            if raw > field.max:
                raise InvalidLengthError(
                    f"Field {field.name}: decoded length {raw} exceeds max {field.max}",
                    field.name,
                )
            lengths.append((field, raw))
        else:
            raise DecodeError(f"Field {field.name}: unsupported kind {field.kind}", field.name)

    cursor = schema.max_byte_length
    for field, length in lengths:
        remaining = len(data) - cursor
        if length > remaining:
            raise InvalidLengthError(
                f"Field {field.name}: decoded length {length} exceeds the "
                f"{max(remaining, 0)} bytes remaining",
                field.name,
            )
        values[field.name] = BufferValue(data[cursor : cursor + length])
        cursor += length

    logger.debug(
        "decoded %d fields from %d bytes (%d fixed bytes read)",
        len(values),
        len(data),
        unpacker.bytes_consumed(),
    )
    return values


def decode(message_class: type[T], data: bytes) -> T:
    """Decode compact binary data to a pydantic message.

    Args:
        message_class: Pydantic message class to decode to
        data: Binary data to decode

    Returns:
        Decoded message instance

    Raises:
        SchemaError: If the message class cannot be mapped to a schema
        DecodeError: If data is truncated, corrupted, or doesn't match the schema
    """
    schema = schema_from_model(message_class)
    field_values = unwrap(from_buffer(schema, data))

    try:
        return message_class(**field_values)
    except Exception as e:
        raise DecodeError(f"Failed to construct {message_class.__name__}: {e}") from e
