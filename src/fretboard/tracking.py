from __future__ import annotations

from collections import Counter, deque
from dataclasses import dataclass
from typing import Deque, Optional

from .notes import MAX_CENTS, ClassifiedNote
from .thresholds import DetectionThresholds

HISTORY_SIZE = 10


@dataclass(frozen=True)
class RecentDetection:
    note_name: str
    timestamp_ms: float
    amplitude: float
    confidence: float


@dataclass(frozen=True)
class Verdict:
    is_stable: bool
    is_correct: bool
    is_incorrect: bool
    most_frequent_note: Optional[str] = None


def detection_confidence(cents: int) -> float:
    return max(0.0, 1.0 - abs(cents) / MAX_CENTS)


class DetectionStabilizer:
    """Turns per-tick note classifications into correct/incorrect verdicts.

    A verdict is only reached after the same outcome repeats for the streak
    length the thresholds ask for; a short recent history is kept alongside
    to report the dominant note.
    """

    def __init__(self):
        self.history: Deque[RecentDetection] = deque(maxlen=HISTORY_SIZE)
        self.correct_streak = 0
        self.incorrect_streak = 0

    def process(
        self,
        note: ClassifiedNote,
        target_note_name: str,
        amplitude: float,
        thresholds: DetectionThresholds,
        now_ms: float,
    ) -> Verdict:
        self.history.append(
            RecentDetection(
                note_name=note.note_name,
                timestamp_ms=now_ms,
                amplitude=amplitude,
                confidence=detection_confidence(note.cents),
            )
        )

        most_frequent, max_count = Counter(d.note_name for d in self.history).most_common(1)[0]

        matches = note.note_name == target_note_name
        if matches:
            self.correct_streak += 1
            self.incorrect_streak = 0
        else:
            self.incorrect_streak += 1
            self.correct_streak = 0

        return Verdict(
            is_stable=max_count >= thresholds.min_correct_streak,
            is_correct=matches and self.correct_streak >= thresholds.min_correct_streak,
            is_incorrect=not matches and self.incorrect_streak >= thresholds.min_incorrect_streak,
            most_frequent_note=most_frequent,
        )

    def forgive(self) -> None:
        self.incorrect_streak = 0

    def reset(self) -> None:
        self.history.clear()
        self.correct_streak = 0
        self.incorrect_streak = 0
