"""Pytest configuration and shared fixtures."""

from __future__ import annotations

from typing import Any

import pytest

from bitschema import Boolean, Bytes, Int, Schema, construct
from bitschema.models.fields import FieldSpec


@pytest.fixture
def game_fields() -> list[FieldSpec]:
    """Game-settings declarations: two always-present ints and one payload."""
    return [
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


@pytest.fixture
def game_schema(game_fields: list[FieldSpec]) -> Schema:
    """Resolved game-settings schema."""
    return construct(game_fields)


@pytest.fixture
def game_values() -> dict[str, Any]:
    """Sample game-settings values."""
    return {
        "language": 0,
        "gameMode": 0,
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
