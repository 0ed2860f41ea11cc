"""Tagged runtime values.

Encode input and decode output are name-keyed mappings of these values. Plain
Python ``int``, ``bool`` and bytes-like objects are accepted on encode and
coerced with ``as_value``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Mapping, Union


@dataclass(frozen=True)
class IntValue:
    """An integer value."""

    value: int


@dataclass(frozen=True)
class BooleanValue:
    """A boolean value."""

    value: bool


@dataclass(frozen=True)
class BufferValue:
    """A raw byte buffer."""

    value: bytes


Value = Union[IntValue, BooleanValue, BufferValue]


def as_value(raw: Any) -> Value:
    """Coerce a plain Python object into a tagged value.

    ``bool`` is checked before ``int`` since it is an ``int`` subclass; a
    boolean never becomes an IntValue.

    Args:
        raw: A Value, int, bool, bytes, bytearray or memoryview

    Returns:
        The tagged value

    Raises:
        TypeError: If the object has no tagged representation
    """
    if isinstance(raw, (IntValue, BooleanValue, BufferValue)):
        return raw
    if isinstance(raw, bool):
        return BooleanValue(raw)
    if isinstance(raw, int):
        return IntValue(raw)
    if isinstance(raw, (bytes, bytearray, memoryview)):
        return BufferValue(bytes(raw))
    raise TypeError(f"cannot represent {type(raw).__name__} as a value")


def unwrap(values: Mapping[str, Value]) -> Dict[str, Any]:
    """Strip the tags off a decoded mapping.

    Example:
        >>> unwrap({"lives": IntValue(3)})
        {'lives': 3}
    """
    return {name: value.value for name, value in values.items()}
