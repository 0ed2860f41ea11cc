"""Bit-level packing and unpacking utilities.

This module provides the bit accumulator used by the encoder and decoder.
Values are packed LSB-first: each value is shifted in above the bits already
pending, and whole bytes leave the accumulator from the low end.
"""

from __future__ import annotations

#: Widest single field; the accumulator then never holds more than this
#: plus one input byte.
MAX_FIELD_BITS = 32


class BitPacker:
    """Packs values into a byte buffer through a bit accumulator.

    Example:
        >>> packer = BitPacker()
        >>> packer.write_uint(2, num_bits=2)
        >>> packer.write_bool(True)
        >>> packer.to_bytes()
        b'\\x06'
    """

    def __init__(self) -> None:
        """Initialize an empty bit packer."""
        self._accumulator = 0
        self._pending = 0
        self._out = bytearray()

    def write_bool(self, value: bool) -> None:
        """Write a boolean as a single bit.

        Args:
            value: Boolean value to write (True=1, False=0)
        """
        self.write_uint(1 if value else 0, 1)

    def write_uint(self, value: int, num_bits: int) -> None:
        """Write an unsigned integer using the specified number of bits.

        Args:
            value: Unsigned integer value to write (must be >= 0)
            num_bits: Number of bits to use for encoding (0-MAX_FIELD_BITS)

        Raises:
            ValueError: If value is negative or doesn't fit in num_bits
        """
        if num_bits < 0 or num_bits > MAX_FIELD_BITS:
            raise ValueError(f"num_bits must be 0-{MAX_FIELD_BITS}, got {num_bits}")
        if value < 0:
            raise ValueError(f"write_uint requires non-negative value, got {value}")

        max_value = (1 << num_bits) - 1
        if value > max_value:
            raise ValueError(f"Value {value} requires more than {num_bits} bits (max: {max_value})")

        self._accumulator |= value << self._pending
        self._pending += num_bits
        self._flush()

    def _flush(self) -> None:
        while self._pending >= 8:
            self._out.append(self._accumulator & 0xFF)
            self._accumulator >>= 8
            self._pending -= 8

    def bit_length(self) -> int:
        """Return the number of bits written so far."""
        return len(self._out) * 8 + self._pending

    def to_bytes(self) -> bytes:
        """Return the packed bytes.

        A trailing partial byte is always emitted, zero-padded in its high
        bits, even when all of its bits are zero.

        Returns:
            Packed bytes
        """
        result = bytearray(self._out)
        if self._pending > 0:
            result.append(self._accumulator & 0xFF)
        return bytes(result)


class BitUnpacker:
    """Unpacks values from a byte buffer through a bit accumulator.

    Input bytes are pulled only when a read needs more bits than are pending,
    so reading never touches bytes past the ones a field requires.

    Example:
        >>> unpacker = BitUnpacker(b"\\x06")
        >>> unpacker.read_uint(2)
        2
        >>> unpacker.read_bool()
        True
    """

    def __init__(self, data: bytes) -> None:
        """Initialize a bit unpacker with the given data.

        Args:
            data: Byte buffer to unpack
        """
        self._data = data
        self._accumulator = 0
        self._pending = 0
        self._cursor = 0

    def read_bool(self) -> bool:
        """Read a single bit as a boolean.

        Raises:
            IndexError: If no more bits are available
        """
        return self.read_uint(1) == 1

    def read_uint(self, num_bits: int) -> int:
        """Read an unsigned integer of the specified bit width.

        Args:
            num_bits: Number of bits to read (0-MAX_FIELD_BITS)

        Returns:
            Unsigned integer value

        Raises:
            ValueError: If num_bits is out of range
            IndexError: If not enough bytes are available
        """
        if num_bits < 0 or num_bits > MAX_FIELD_BITS:
            raise ValueError(f"num_bits must be 0-{MAX_FIELD_BITS}, got {num_bits}")

        while self._pending < num_bits:
            if self._cursor >= len(self._data):
                raise IndexError(
                    f"Not enough bits: need {num_bits}, have {self._pending} "
                    f"after {len(self._data)} bytes"
                )
            self._accumulator |= self._data[self._cursor] << self._pending
            self._cursor += 1
            self._pending += 8

        value = self._accumulator & ((1 << num_bits) - 1)
        self._accumulator >>= num_bits
        self._pending -= num_bits
        return value

    def bytes_consumed(self) -> int:
        """Return how many input bytes have been pulled into the accumulator."""
        return self._cursor
