"""Field declarations.

This module provides the three field kinds a schema can be declared with.
Declarations are immutable and carry no resolved widths; the resolver in
``bitschema.codec.schema`` turns them into ``ResolvedField`` records.

Each declaration has a ``kind`` literal so that a list of plain dicts (for
example loaded from JSON) validates into the ``FieldSpec`` union.
"""

from __future__ import annotations

from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, StrictInt


class _FieldBase(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    name: str = Field(min_length=1)


class IntField(_FieldBase):
    """A bounded integer slot.

    Both bounds are inclusive. A field whose bounds collapse to a single value
    costs zero bits and is always decoded as ``min``.

    Example:
        >>> IntField(name="lives", min=1, max=5)
    """

    kind: Literal["int"] = "int"
    min: StrictInt
    max: StrictInt


class BooleanField(_FieldBase):
    """A single-bit flag."""

    kind: Literal["boolean"] = "boolean"


class BytesField(_FieldBase):
    """A variable-length byte payload of at most ``max`` bytes.

    Only the payload length is packed into the fixed bit region; the payload
    itself is appended after it.
    """

    kind: Literal["bytes"] = "bytes"
    max: StrictInt


FieldSpec = Annotated[Union[IntField, BooleanField, BytesField], Field(discriminator="kind")]


def Int(name: str, min: int, max: int) -> IntField:
    """Declare a bounded integer field.

    Args:
        name: Field name
        min: Minimum value (inclusive)
        max: Maximum value (inclusive)

    Returns:
        IntField declaration
    """
    return IntField(name=name, min=min, max=max)


def Boolean(name: str) -> BooleanField:
    """Declare a boolean field."""
    return BooleanField(name=name)


def Bytes(name: str, max: int) -> BytesField:
    """Declare a bytes field holding at most ``max`` bytes."""
    return BytesField(name=name, max=max)
