"""Tests for the identifier to numeric id mapping."""

import uuid

import pytest

from game_reviews.identity import (
    INT32_MAX,
    INT32_MIN,
    map_identity,
    rolling_hash,
    utf16_code_units,
)


def reference_hash(text: str) -> int:
    """Closed form of the rolling hash: sum(unit * 31**k) reduced to signed 32 bits."""
    units = utf16_code_units(text)
    n = len(units)
    total = sum(unit * 31 ** (n - 1 - i) for i, unit in enumerate(units)) % 2**32
    return total - 2**32 if total >= 2**31 else total


class TestMapIdentity:
    """Tests for map_identity."""

    @pytest.mark.parametrize("identifier", ["", None])
    def test_empty_identifier_is_no_identity(self, identifier: str | None) -> None:
        """Test that missing identifiers map to zero."""
        assert map_identity(identifier) == 0

    @pytest.mark.parametrize(
        ("identifier", "expected"),
        [
            ("a", 97),
            ("ab", 3105),
            ("hello", 99162322),
        ],
    )
    def test_known_values(self, identifier: str, expected: int) -> None:
        """Test values that match the browser's hash of the same string."""
        assert map_identity(identifier) == expected

    def test_minimum_sentinel_is_replaced(self) -> None:
        """Test that a hash of exactly INT32_MIN maps to INT32_MAX."""
        assert rolling_hash("polygenelubricants") == INT32_MIN
        assert map_identity("polygenelubricants") == INT32_MAX

    def test_surrogate_pairs_count_as_two_units(self) -> None:
        """Test that characters outside the BMP hash as their UTF-16 surrogate pair."""
        assert utf16_code_units("\U0001f600") == [0xD83D, 0xDE00]
        assert map_identity("\U0001f600") == 0xD83D * 31 + 0xDE00

    def test_wraparound_matches_closed_form(self) -> None:
        """Test that long identifiers wrap exactly like 32-bit signed arithmetic."""
        for _ in range(50):
            identifier = str(uuid.uuid4())
            expected = reference_hash(identifier)
            assert rolling_hash(identifier) == expected
            assert map_identity(identifier) == (
                INT32_MAX if expected == INT32_MIN else abs(expected)
            )

    def test_deterministic_and_in_range(self) -> None:
        """Test that the mapping is stable and always a non-negative 32-bit value."""
        for _ in range(50):
            identifier = str(uuid.uuid4())
            first = map_identity(identifier)
            assert first == map_identity(identifier)
            assert 0 <= first <= INT32_MAX
            assert first != INT32_MIN
