"""
Tests for challenge generation from the selected guitar strings.
"""

import logging
import random

from fretboard.notes import classify
from fretboard.strings import (
    GUITAR_STRINGS,
    OPEN_STRING_FREQUENCIES,
    STRING_NOTES,
    available_notes,
    generate_challenge,
    string_label,
)


class TestAvailableNotes:
    def test_low_e_first_five_frets(self) -> None:
        assert available_notes(6) == ["E", "F", "F#", "G", "G#", "A"]

    def test_b_string_wraps_octave(self) -> None:
        assert available_notes(2) == ["B", "C", "C#", "D", "D#", "E"]

    def test_string_label(self) -> None:
        assert string_label(1) == "1 (E)"
        assert string_label(5) == "5 (A)"

    def test_open_string_frequencies_classify_as_string_notes(self) -> None:
        octaves = {1: 4, 2: 3, 3: 3, 4: 3, 5: 2, 6: 2}
        for string in GUITAR_STRINGS:
            note = classify(OPEN_STRING_FREQUENCIES[string])
            assert note.note_name == STRING_NOTES[string]
            assert note.octave == octaves[string]
            assert abs(note.cents) <= 1


class TestGenerateChallenge:
    def test_respects_selected_strings(self) -> None:
        rng = random.Random(7)
        for _ in range(50):
            challenge = generate_challenge([3, 4], rng)
            assert challenge.string in (3, 4)
            assert challenge.note in available_notes(challenge.string)
            assert challenge.warning is None

    def test_seeded_rng_is_deterministic(self) -> None:
        first = [generate_challenge(GUITAR_STRINGS, random.Random(42)) for _ in range(3)]
        second = [generate_challenge(GUITAR_STRINGS, random.Random(42)) for _ in range(3)]
        assert first == second

    def test_empty_selection_falls_back_with_warning(self, caplog) -> None:
        with caplog.at_level(logging.WARNING, logger="fretboard.strings"):
            challenge = generate_challenge([], random.Random(1))
        assert challenge.string in GUITAR_STRINGS
        assert challenge.warning is not None
        assert "defaulting to all strings" in caplog.text

    def test_unknown_strings_are_ignored(self) -> None:
        challenge = generate_challenge([9, 0], random.Random(3))
        assert challenge.string in GUITAR_STRINGS
        assert challenge.warning is not None

    def test_label(self) -> None:
        challenge = generate_challenge([5], random.Random(0))
        assert challenge.label.startswith("String 5 (A), note ")
