"""Unit tests for encoding/decoding."""

from __future__ import annotations

from typing import Any

import pytest

from bitschema import (
    Boolean,
    BooleanValue,
    BufferUnderrunError,
    BufferValue,
    Bytes,
    DecodeError,
    EncodeError,
    Int,
    IntValue,
    InvalidLengthError,
    InvalidValueError,
    MissingValueError,
    RangeError,
    Schema,
    TypeMismatchError,
    construct,
    unwrap,
)


class TestScenarios:
    """Test the reference encode/decode scenarios."""

    def test_small_int(self) -> None:
        """Int [0,2] holding 2 packs into the low two bits of one byte."""
        schema = construct([Int("difficulty", 0, 2)])
        assert schema.field("difficulty").bits == 2

        data = schema.encode({"difficulty": 2})
        assert data == b"\x02"
        assert schema.decode(data) == {"difficulty": IntValue(2)}

    def test_boolean_true(self) -> None:
        """A single true Boolean is 0b00000001."""
        schema = construct([Boolean("flag")])

        data = schema.encode({"flag": True})
        assert data == bytes([0b00000001])
        assert schema.decode(data) == {"flag": BooleanValue(True)}

    def test_always_present(self) -> None:
        """A single-valued Int costs nothing and needs no value."""
        schema = construct([Int("mode", 5, 5)])

        data = schema.encode({})
        assert data == b""
        assert schema.decode(b"") == {"mode": IntValue(5)}

    def test_truncated_fixed_region(self) -> None:
        """Decoding too few bytes raises instead of reading out of bounds."""
        schema = construct([Int("a", 0, 255), Int("b", 0, 255)])

        with pytest.raises(BufferUnderrunError, match="Truncated") as excinfo:
            schema.decode(b"\x01")
        assert excinfo.value.field == "b"

    def test_out_of_range_int(self) -> None:
        """An out-of-range Int raises rather than corrupting later fields."""
        schema = construct([Int("difficulty", 0, 2), Boolean("flag")])

        with pytest.raises(RangeError, match="out of bounds") as excinfo:
            schema.encode({"difficulty": 3, "flag": True})
        assert excinfo.value.field == "difficulty"


class TestEncode:
    """Test encoder output layout."""

    def test_lsb_first_layout(self) -> None:
        """Later fields are packed above earlier ones."""
        schema = construct([Int("a", 0, 15), Int("b", 0, 255)])
        assert schema.encode({"a": 0xA, "b": 0xBC}) == b"\xca\x0b"

    def test_negative_bounds(self) -> None:
        """Values are stored as an offset from min."""
        schema = construct([Int("temp", -100, 100)])
        assert schema.encode({"temp": -50}) == b"\x32"
        assert schema.encode({"temp": -100}) == b"\x00"

    def test_zero_trailing_byte_kept(self) -> None:
        """An all-zero final partial byte is still emitted."""
        schema = construct([Int("a", 0, 255), Boolean("flag")])
        assert schema.encode({"a": 7, "flag": False}) == b"\x07\x00"

    def test_payload_follows_fixed_region(self) -> None:
        """Bytes payloads come after the packed fixed region."""
        schema = construct([Bytes("note", 10), Int("n", 0, 3)])
        # n (2 bits) = 1, note length (4 bits) = 3
        assert schema.encode({"n": 1, "note": b"abc"}) == b"\x0dabc"

    def test_multiple_payloads_in_field_order(self) -> None:
        """Several payloads are concatenated in resolved order."""
        schema = construct([Bytes("a", 5), Bytes("b", 5)])
        assert schema.encode({"a": b"hi", "b": b"xyz"}) == b"\x1ahixyz"

    def test_accepts_tagged_and_plain_values(self) -> None:
        """Tagged values and plain Python values encode the same."""
        schema = construct([Int("n", 0, 3), Boolean("f"), Bytes("d", 4)])
        plain = schema.encode({"n": 2, "f": True, "d": bytearray(b"ab")})
        tagged = schema.encode(
            {"n": IntValue(2), "f": BooleanValue(True), "d": BufferValue(b"ab")}
        )
        assert plain == tagged

    def test_tagged_bytes_like_payload(self) -> None:
        """A tagged buffer may wrap any bytes-like object."""
        schema = construct([Bytes("d", 4)])
        assert schema.encode({"d": BufferValue(bytearray(b"ab"))}) == b"\x02ab"

    def test_always_present_value_ignored(self) -> None:
        """A value given for an always-present field contributes no bits."""
        schema = construct([Int("mode", 5, 5), Boolean("flag")])
        assert schema.encode({"mode": 5, "flag": True}) == b"\x01"

    def test_empty_payload(self) -> None:
        """An empty payload only costs its length prefix."""
        schema = construct([Bytes("note", 3)])
        assert schema.encode({"note": b""}) == b"\x00"


class TestEncodeErrors:
    """Test encoding error handling."""

    def test_missing_value(self) -> None:
        """A required field absent from the mapping."""
        schema = construct([Int("a", 0, 3), Boolean("flag")])

        with pytest.raises(MissingValueError, match="flag") as excinfo:
            schema.encode({"a": 1})
        assert excinfo.value.field == "flag"

    @pytest.mark.parametrize(
        "field, value",
        [
            (Int("x", 0, 3), True),
            (Int("x", 0, 3), b"\x01"),
            (Boolean("x"), 1),
            (Bytes("x", 4), 3),
            (Bytes("x", 4), "text"),
            (Int("x", 0, 3), 1.5),
            (Int("x", 0, 3), IntValue(1.5)),
            (Int("x", 0, 3), IntValue(True)),
            (Int("x", 0, 3), BooleanValue(True)),
            (Boolean("x"), BooleanValue(5)),
            (Boolean("x"), IntValue(1)),
            (Bytes("x", 4), BufferValue("abc")),
            (Bytes("x", 4), BufferValue(3)),
        ],
    )
    def test_type_mismatch(self, field: Any, value: Any) -> None:
        """A value of the wrong kind."""
        schema = construct([field])

        with pytest.raises(TypeMismatchError) as excinfo:
            schema.encode({"x": value})
        assert excinfo.value.field == "x"

    def test_int_below_min(self) -> None:
        """Values below min are out of range too."""
        schema = construct([Int("x", 1, 3)])

        with pytest.raises(RangeError, match=r"\[1, 3\]"):
            schema.encode({"x": 0})

    def test_payload_too_long(self) -> None:
        """A payload longer than max."""
        schema = construct([Bytes("note", 4)])

        with pytest.raises(RangeError, match="exceeds max 4"):
            schema.encode({"note": b"hello"})

    def test_errors_share_base(self) -> None:
        """All encode errors can be caught as EncodeError."""
        schema = construct([Int("x", 0, 3)])

        with pytest.raises(EncodeError):
            schema.encode({})


class TestDecode:
    """Test decoder behaviour."""

    def test_multiple_payloads(self) -> None:
        """Each Bytes field reads its own payload slice."""
        schema = construct([Bytes("a", 5), Int("n", 0, 3), Bytes("b", 5)])
        data = schema.encode({"a": b"hi", "n": 3, "b": b"xyz"})

        assert unwrap(schema.decode(data)) == {"n": 3, "a": b"hi", "b": b"xyz"}

    def test_accepts_bytes_like(self) -> None:
        """bytearray and memoryview inputs decode like bytes."""
        schema = construct([Bytes("d", 8)])
        data = schema.encode({"d": b"abc"})

        assert schema.decode(bytearray(data)) == {"d": BufferValue(b"abc")}
        assert schema.decode(memoryview(data)) == {"d": BufferValue(b"abc")}

    def test_decoded_buffers_are_bytes(self) -> None:
        """Decoded payloads are independent bytes objects."""
        schema = construct([Bytes("d", 8)])
        source = bytearray(schema.encode({"d": b"abc"}))
        decoded = schema.decode(source)
        source[-1] = ord("z")

        assert decoded["d"].value == b"abc"
        assert isinstance(decoded["d"].value, bytes)

    def test_zero_width_payload(self) -> None:
        """A Bytes field with max 0 has no prefix and no payload."""
        schema = construct([Bytes("empty", 0)])

        assert schema.encode({"empty": b""}) == b""
        assert schema.decode(b"") == {"empty": BufferValue(b"")}


class TestDecodeErrors:
    """Test decoding error handling."""

    def test_empty_input(self) -> None:
        """Empty input for a schema with fixed bits."""
        schema = construct([Boolean("flag")])

        with pytest.raises(BufferUnderrunError):
            schema.decode(b"")

    def test_length_exceeds_remaining(self) -> None:
        """A length prefix pointing past the end of the input."""
        schema = construct([Bytes("note", 10)])

        with pytest.raises(InvalidLengthError, match="remaining") as excinfo:
            schema.decode(b"\x05ab")
        assert excinfo.value.field == "note"

    def test_length_exceeds_max(self) -> None:
        """A length prefix larger than the declared max."""
        schema = construct([Bytes("note", 10)])

        with pytest.raises(InvalidLengthError, match="exceeds max"):
            schema.decode(b"\x0f" + b"x" * 15)

    def test_second_payload_truncated(self) -> None:
        """The running payload cursor detects a short second payload."""
        schema = construct([Bytes("a", 5), Bytes("b", 5)])
        data = schema.encode({"a": b"hi", "b": b"xyz"})

        with pytest.raises(InvalidLengthError) as excinfo:
            schema.decode(data[:-1])
        assert excinfo.value.field == "b"

    def test_int_offset_out_of_range(self) -> None:
        """An offset the encoder could never produce."""
        schema = construct([Int("difficulty", 0, 2)])

        with pytest.raises(InvalidValueError, match="exceeds max 2"):
            schema.decode(b"\x03")

    def test_errors_share_base(self) -> None:
        """All decode errors can be caught as DecodeError."""
        schema = construct([Int("a", 0, 255)])

        with pytest.raises(DecodeError):
            schema.decode(b"")


class TestGameSettings:
    """Test the game-settings schema end to end."""

    def test_roundtrip(self, game_schema: Schema, game_values: dict[str, Any]) -> None:
        """All values survive encode/decode."""
        data = game_schema.encode(game_values)

        assert len(data) == game_schema.max_byte_length + len(b"hello world")
        assert data.endswith(b"hello world")
        assert unwrap(game_schema.decode(data)) == game_values

    def test_always_present_fields_optional(
        self, game_schema: Schema, game_values: dict[str, Any]
    ) -> None:
        """Always-present fields may be left out of the mapping."""
        values = dict(game_values)
        del values["language"]
        del values["gameMode"]

        assert game_schema.encode(values) == game_schema.encode(game_values)
        decoded = game_schema.decode(game_schema.encode(values))
        assert decoded["language"] == IntValue(0)
        assert decoded["gameMode"] == IntValue(0)
