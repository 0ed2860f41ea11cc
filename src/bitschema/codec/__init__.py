"""Compact binary codec for bitschema.

This module provides schema resolution plus the encoder and decoder that pack
named values into the minimal bit width each field needs.
"""

from __future__ import annotations

from .decoder import decode, from_buffer
from .encoder import encode, to_buffer
from .schema import (
    ResolvedField,
    Schema,
    construct,
    load_schema,
    schema_from_dicts,
    schema_from_model,
)

__all__ = [
    "construct",
    "load_schema",
    "schema_from_dicts",
    "schema_from_model",
    "to_buffer",
    "from_buffer",
    "encode",
    "decode",
    "Schema",
    "ResolvedField",
]
