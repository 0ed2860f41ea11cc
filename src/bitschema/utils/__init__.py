"""Utility functions for bitschema.

This module provides size calculation helpers.
"""

from __future__ import annotations

from .sizing import encoded_bits, encoded_size, field_sizes

__all__ = [
    "encoded_size",
    "encoded_bits",
    "field_sizes",
]
