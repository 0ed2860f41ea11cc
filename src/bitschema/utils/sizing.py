"""Message size calculation utilities.

This module provides functions to calculate the encoded size of messages
without actually encoding them.
"""

from __future__ import annotations

from typing import Any, Mapping, Optional, Union

from pydantic import BaseModel

from ..codec.schema import Schema, schema_from_model
from ..models.values import BufferValue, as_value

SchemaLike = Union[Schema, BaseModel, type]


def _as_schema(schema_or_message: SchemaLike) -> Schema:
    """Accept a Schema, a pydantic message instance, or a message class."""
    if isinstance(schema_or_message, Schema):
        return schema_or_message
    if isinstance(schema_or_message, BaseModel):
        return schema_from_model(type(schema_or_message))
    return schema_from_model(schema_or_message)


def encoded_size(
    schema_or_message: SchemaLike, values: Optional[Mapping[str, Any]] = None
) -> int:
    """Calculate the encoded size in bytes.

    Without values this is the size of the fixed region. With values, or
    when given a message instance, the Bytes payload lengths are added.

    Args:
        schema_or_message: Schema, message instance or message class
        values: Optional value mapping to size payloads from

    Returns:
        Size in bytes

    Raises:
        SchemaError: If a message class cannot be mapped to a schema

    Example:
        >>> schema = construct([Int("lives", 1, 5), Boolean("hardcore")])
        >>> encoded_size(schema)
        1  # 3 bits + 1 bit = 4 bits = 1 byte
    """
    schema = _as_schema(schema_or_message)

    if values is None and isinstance(schema_or_message, BaseModel):
        values = {field.name: getattr(schema_or_message, field.name) for field in schema.fields}

    size = schema.max_byte_length
    if values is None:
        return size

    for field in schema.fields:
        if field.is_bytes and field.name in values:
            value = as_value(values[field.name])
            if isinstance(value, BufferValue):
                size += len(value.value)
    return size


def encoded_bits(schema_or_message: SchemaLike) -> int:
    """Calculate the size of the fixed region in bits.

    Example:
        >>> encoded_bits(schema)
        4  # 3 bits + 1 bit
    """
    return _as_schema(schema_or_message).total_bits


def field_sizes(schema_or_message: SchemaLike) -> dict[str, int]:
    """Get the size in bits of each field, in resolved order.

    Bytes fields report the width of their length prefix.

    Example:
        >>> field_sizes(schema)
        {'lives': 3, 'hardcore': 1}
    """
    schema = _as_schema(schema_or_message)
    return {field.name: field.bits for field in schema.fields}
