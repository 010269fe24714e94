"""
Unit tests for the message reconstructor.

Tests cover:
- Priority tie-break in canonical beacon order
- Gaps, None entries and lists of different lengths
- Idempotence when the beacons agree
"""

import itertools

import pytest

from beacon_core.messaging import MessageReconstructor


class TestMessageReconstructor:
    """Tests for fragment merging."""

    def test_one_word_per_beacon(self, reconstructor):
        """Each beacon contributes the word only it heard."""
        result = reconstructor.reconstruct([
            ["a", "", ""],
            ["", "b", ""],
            ["", "", "c"],
        ])

        assert result == "a b c"

    def test_earlier_beacon_wins_tie(self, reconstructor):
        """Kenobi's word beats Skywalker's at the same index."""
        assert reconstructor.reconstruct([["x"], ["y"], []]) == "x"

    def test_later_beacon_fills_gap(self, reconstructor):
        """An index empty in earlier beacons takes the later one's word."""
        assert reconstructor.reconstruct([[""], [""], ["z"]]) == "z"

    def test_classic_message(self, reconstructor):
        """Overlapping partial messages merge into the full sentence."""
        result = reconstructor.reconstruct([
            ["este", "", "", "mensaje", ""],
            ["", "es", "", "", "secreto"],
            ["este", "", "un", "", ""],
        ])

        assert result == "este es un mensaje secreto"

    def test_missing_position_adds_no_separator(self, reconstructor):
        """Indices no beacon heard are skipped without a double space."""
        result = reconstructor.reconstruct([
            ["hola", "", "mundo"],
            ["", "", ""],
            ["", "", ""],
        ])

        assert result == "hola mundo"

    def test_shorter_lists_treated_as_absent(self, reconstructor):
        """Lists shorter than the longest simply have nothing at later indices."""
        result = reconstructor.reconstruct([
            ["uno"],
            ["", "dos"],
            ["", "", "tres", "cuatro"],
        ])

        assert result == "uno dos tres cuatro"

    def test_none_entries_are_gaps(self, reconstructor):
        """None is treated like an empty string."""
        result = reconstructor.reconstruct([
            [None, "b"],
            ["a", None],
            [None, None],
        ])

        assert result == "a b"

    @pytest.mark.parametrize("fragment_lists", [
        [[], [], []],
        [[""], ["", ""], [None]],
    ])
    def test_empty_input_gives_empty_string(self, reconstructor, fragment_lists):
        """Nothing heard anywhere reconstructs to an empty message."""
        assert reconstructor.reconstruct(fragment_lists) == ""

    def test_consistent_input_independent_of_order(self, reconstructor):
        """When beacons agree at every shared index, scan order does not matter."""
        fragment_lists = [
            ["este", "", "un", ""],
            ["este", "es", "", "mensaje"],
            ["", "es", "un"],
        ]

        results = {
            reconstructor.reconstruct(list(order))
            for order in itertools.permutations(fragment_lists)
        }

        assert results == {"este es un mensaje"}

    def test_reconstruct_is_idempotent(self, reconstructor):
        """Same input, same output."""
        first = reconstructor.reconstruct([["a", ""], ["", "b"], ["a", "b"]])
        words = first.split(" ")

        assert reconstructor.reconstruct([words, words, words]) == first

    def test_accepts_tuples(self, reconstructor):
        assert reconstructor.reconstruct([("a", ""), ("", "b"), ()]) == "a b"
