"""bitschema: Compact Schema-Driven Binary Codec

A Python library that packs named values into the minimal number of bits a
declarative schema allows. Designed for size-sensitive payloads such as
configuration blobs and game-state snapshots.

Key Features:
- Bounded integers cost ceil(log2(max - min + 1)) bits, booleans 1 bit
- Single-valued integers cost nothing and are always present
- Variable-length byte payloads with a minimal length prefix
- Schemas from Python declarations, JSON files, or pydantic models

Quick Start:
    >>> from bitschema import Boolean, Bytes, Int, construct, unwrap
    >>>
    >>> schema = construct([
    ...     Int("lives", 1, 5),
    ...     Boolean("hardcore"),
    ...     Bytes("note", 255),
    ... ])
    >>> data = schema.encode({"lives": 3, "hardcore": True, "note": b"hi"})
    >>> unwrap(schema.decode(data))
    {'lives': 3, 'hardcore': True, 'note': b'hi'}

The byte layout carries no tags or version: data is only meaningful together
with a schema built from the same, identically ordered declarations.
"""

from __future__ import annotations

__version__ = "0.1.0"

from .codec import (
    ResolvedField,
    Schema,
    construct,
    decode,
    encode,
    from_buffer,
    load_schema,
    schema_from_dicts,
    schema_from_model,
    to_buffer,
)
from .exceptions import (
    BitschemaError,
    BufferUnderrunError,
    DecodeError,
    EncodeError,
    InvalidLengthError,
    InvalidValueError,
    MissingValueError,
    RangeError,
    SchemaError,
    TypeMismatchError,
)
from .models import (
    BaseMessage,
    Boolean,
    BooleanField,
    BooleanValue,
    BufferValue,
    Bytes,
    BytesField,
    FieldSpec,
    Int,
    IntField,
    IntValue,
    Value,
    as_value,
    unwrap,
)
from .utils import encoded_bits, encoded_size, field_sizes

__all__ = [
    # Core API
    "construct",
    "Schema",
    "ResolvedField",
    "to_buffer",
    "from_buffer",
    # Schema loading
    "load_schema",
    "schema_from_dicts",
    "schema_from_model",
    # Message API
    "BaseMessage",
    "encode",
    "decode",
    # Field declarations
    "FieldSpec",
    "IntField",
    "BooleanField",
    "BytesField",
    "Int",
    "Boolean",
    "Bytes",
    # Values
    "Value",
    "IntValue",
    "BooleanValue",
    "BufferValue",
    "as_value",
    "unwrap",
    # Exceptions
    "BitschemaError",
    "SchemaError",
    "EncodeError",
    "MissingValueError",
    "TypeMismatchError",
    "RangeError",
    "DecodeError",
    "BufferUnderrunError",
    "InvalidLengthError",
    "InvalidValueError",
    # Sizing
    "encoded_size",
    "encoded_bits",
    "field_sizes",
    # Version
    "__version__",
]
