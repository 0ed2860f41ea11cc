"""Field declarations and runtime values for bitschema.

This module provides the declarative field kinds a schema is built from, the
tagged values that flow through encode and decode, and a pydantic base class
for message-style declarations.
"""

from __future__ import annotations

from .base import BaseMessage
from .fields import Boolean, BooleanField, Bytes, BytesField, FieldSpec, Int, IntField
from .values import BooleanValue, BufferValue, IntValue, Value, as_value, unwrap

__all__ = [
    "BaseMessage",
    "FieldSpec",
    "IntField",
    "BooleanField",
    "BytesField",
    "Int",
    "Boolean",
    "Bytes",
    "Value",
    "IntValue",
    "BooleanValue",
    "BufferValue",
    "as_value",
    "unwrap",
]
