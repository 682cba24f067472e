from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional

from .events import ChallengeCompleted, ChallengeFailed, FirstOctaveDetected, GameEvent, WrongNoteDetected
from .notes import ClassifiedNote
from .thresholds import DetectionThresholds
from .tracking import Verdict

logger = logging.getLogger(__name__)

DEFAULT_MAX_ERRORS = 3


class ChallengeStatus(Enum):
    AWAITING_FIRST_OCTAVE = "awaiting_first_octave"
    AWAITING_NEXT_OCTAVE = "awaiting_next_octave"
    COMPLETED = "completed"
    FAILED = "failed"


@dataclass(frozen=True)
class OctaveHit:
    note_name: str
    octave: int

    def next_octave(self) -> "OctaveHit":
        return OctaveHit(self.note_name, self.octave + 1)


@dataclass
class ChallengeState:
    target_note_name: str
    max_errors: int = DEFAULT_MAX_ERRORS
    started_at_ms: float = 0.0
    first_octave_hit: Optional[OctaveHit] = None
    error_count: int = 0
    failed: bool = False
    last_wrong_note_ms: Optional[float] = None
    status: ChallengeStatus = ChallengeStatus.AWAITING_FIRST_OCTAVE

    @property
    def finished(self) -> bool:
        return self.status in (ChallengeStatus.COMPLETED, ChallengeStatus.FAILED)


class ChallengeMatcher:
    """Two-octave challenge: play the target note, then the same note one octave up.

    Wrong notes count against an error budget; spending it fails the challenge.
    Once completed or failed the matcher ignores input until :meth:`reset`.
    """

    def __init__(self, target_note_name: str, max_errors: int = DEFAULT_MAX_ERRORS, now_ms: float = 0.0):
        self.max_errors = max_errors
        self.state = ChallengeState(target_note_name, max_errors=max_errors, started_at_ms=now_ms)

    def reset(self, target_note_name: Optional[str] = None, now_ms: float = 0.0) -> ChallengeState:
        target = self.state.target_note_name if target_note_name is None else target_note_name
        self.state = ChallengeState(target, max_errors=self.max_errors, started_at_ms=now_ms)
        return self.state

    def process(
        self,
        note: ClassifiedNote,
        verdict: Verdict,
        thresholds: DetectionThresholds,
        now_ms: float,
    ) -> List[GameEvent]:
        state = self.state
        if state.finished:
            return []

        if verdict.is_correct and abs(note.cents) < thresholds.cents_tolerance_correct:
            return self._on_correct(note, now_ms)

        if verdict.is_incorrect and abs(note.cents) < thresholds.cents_tolerance_incorrect:
            if state.last_wrong_note_ms is None or now_ms - state.last_wrong_note_ms > thresholds.incorrect_delay_ms:
                return self._on_wrong(note, now_ms)

        return []

    def _on_correct(self, note: ClassifiedNote, now_ms: float) -> List[GameEvent]:
        state = self.state
        hit = OctaveHit(note.note_name, note.octave)

        if state.first_octave_hit is None:
            state.first_octave_hit = hit
            state.status = ChallengeStatus.AWAITING_NEXT_OCTAVE
            logger.debug("First octave hit: %s%d", hit.note_name, hit.octave)
            return [FirstOctaveDetected(note.note_name)]

        if hit == state.first_octave_hit.next_octave():
            state.status = ChallengeStatus.COMPLETED
            time_taken_ms = now_ms - state.started_at_ms
            logger.info("Challenge %s completed in %.0f ms", state.target_note_name, time_taken_ms)
            return [ChallengeCompleted(time_taken_ms)]

        return []

    def _on_wrong(self, note: ClassifiedNote, now_ms: float) -> List[GameEvent]:
        state = self.state
        state.last_wrong_note_ms = now_ms
        state.error_count += 1
        events: List[GameEvent] = [WrongNoteDetected(note.note_name)]
        logger.debug(
            "Wrong note %s (target %s), %d/%d errors",
            note.note_name,
            state.target_note_name,
            state.error_count,
            state.max_errors,
        )

        if state.error_count >= state.max_errors:
            state.failed = True
            state.status = ChallengeStatus.FAILED
            logger.info("Challenge %s failed after %d errors", state.target_note_name, state.error_count)
            events.append(ChallengeFailed(state.error_count))
        return events
