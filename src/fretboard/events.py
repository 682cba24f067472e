from __future__ import annotations

from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True)
class FirstOctaveDetected:
    note_name: str


@dataclass(frozen=True)
class ChallengeCompleted:
    time_taken_ms: float


@dataclass(frozen=True)
class WrongNoteDetected:
    note_name: str


@dataclass(frozen=True)
class ChallengeFailed:
    error_count: int


@dataclass(frozen=True)
class LiveClassification:
    note_name: str
    octave: int
    frequency_hz: float
    cents: int


GameEvent = Union[FirstOctaveDetected, ChallengeCompleted, WrongNoteDetected, ChallengeFailed]
Event = Union[GameEvent, LiveClassification]
