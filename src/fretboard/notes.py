from __future__ import annotations

import math
from dataclasses import dataclass

from .dsp import hz_to_midi, midi_to_hz

NOTE_NAMES = ("C", "C#", "D", "D#", "E", "F", "F#", "G", "G#", "A", "A#", "B")

MAX_CENTS = 50


@dataclass(frozen=True)
class ClassifiedNote:
    note_name: str
    octave: int
    midi: int
    cents: int
    frequency_hz: float

    @property
    def label(self) -> str:
        return f"{self.note_name}{self.octave}"


def classify(frequency_hz: float) -> ClassifiedNote:
    """Nearest equal-tempered note (A4 = 440 Hz) and the deviation from it in cents."""
    midi_exact = hz_to_midi(frequency_hz)
    if midi_exact is None:
        raise ValueError(f"Cannot classify non-positive frequency {frequency_hz!r}")

    # half-semitone ties round up
    midi = math.floor(midi_exact + 0.5)
    perfect = midi_to_hz(midi)
    cents = math.floor(1200.0 * math.log2(frequency_hz / perfect))
    cents = max(-MAX_CENTS, min(MAX_CENTS, cents))

    return ClassifiedNote(
        note_name=NOTE_NAMES[midi % 12],
        octave=midi // 12 - 1,
        midi=midi,
        cents=cents,
        frequency_hz=frequency_hz,
    )


def note_to_midi(note_name: str, octave: int) -> int:
    try:
        index = NOTE_NAMES.index(note_name)
    except ValueError:
        raise ValueError(f"Unknown note name {note_name!r}") from None
    return (octave + 1) * 12 + index


def note_frequency(note_name: str, octave: int) -> float:
    return midi_to_hz(note_to_midi(note_name, octave))
