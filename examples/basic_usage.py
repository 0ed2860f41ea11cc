#!/usr/bin/env python3
"""Basic usage example for bitschema.

This example demonstrates:
1. Declaring a schema for a game-settings blob
2. Encoding a set of values to compact binary format
3. Decoding back to named values
4. Loading the same schema from JSON
"""

from __future__ import annotations

from pathlib import Path

from bitschema import Boolean, Bytes, Int, construct, field_sizes, load_schema, unwrap


def main() -> None:
    """Run the basic usage example."""
    print("=" * 60)
    print("bitschema Basic Usage Example")
    print("=" * 60)
    print()

    print("1. Declaring the schema...")
    schema = construct(
        [
            Int("language", 0, 0),
            Int("gameMode", 0, 0),
            Int("regenChallengeDifficulty", 0, 2),
            Int("regenChallenges", 1, 3),
            Int("solvesPerSyllable", -5000, 5000),
            Int("turnDuration", 1, 10),
            Int("startingLives", 1, 5),
            Int("maxLives", 1, 5),
            Int("syllableDuration", 1, 10),
            Boolean("allowHyphensAndApostrophesInSyllables"),
            Bytes("buffer", 1000),
        ]
    )
    for name, bits in field_sizes(schema).items():
        print(f"   {name}: {bits} bits")
    print(f"   Fixed region: {schema.total_bits} bits = {schema.max_byte_length} bytes")
    print()

    print("2. Encoding...")
    values = {
        "regenChallengeDifficulty": 0,
        "regenChallenges": 3,
        "solvesPerSyllable": 1000,
        "turnDuration": 7,
        "startingLives": 2,
        "maxLives": 3,
        "syllableDuration": 2,
        "allowHyphensAndApostrophesInSyllables": False,
        "buffer": b"hello world",
    }
    encoded = schema.encode(values)
    print(f"   {len(encoded)} bytes: {list(encoded)}")
    print()

    print("3. Decoding...")
    for name, value in unwrap(schema.decode(encoded)).items():
        print(f"   {name} = {value!r}")
    print()

    print("4. Loading the same schema from JSON...")
    loaded = load_schema(Path(__file__).with_name("game_settings.json"))
    print(f"   Same bytes: {loaded.encode(values) == encoded}")


if __name__ == "__main__":
    main()
