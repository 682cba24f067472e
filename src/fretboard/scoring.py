from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Sequence

from .events import ChallengeCompleted, ChallengeFailed, GameEvent
from .strings import Challenge


@dataclass
class ChallengeResult:
    string: int
    note: str
    time_taken_ms: float
    errors: int
    success: bool


@dataclass
class PracticeSummary:
    attempts: int
    completed: int
    failed: int
    accuracy: float
    average_time_ms: Optional[float]
    total_errors: int


def result_from_event(
    challenge: Challenge,
    event: GameEvent,
    errors: int,
    elapsed_ms: float,
) -> Optional[ChallengeResult]:
    """Build the result of a finished challenge from its terminal event."""
    if isinstance(event, ChallengeCompleted):
        return ChallengeResult(challenge.string, challenge.note, event.time_taken_ms, errors, True)
    if isinstance(event, ChallengeFailed):
        return ChallengeResult(challenge.string, challenge.note, elapsed_ms, event.error_count, False)
    return None


def summarize(results: Sequence[ChallengeResult]) -> PracticeSummary:
    if not results:
        return PracticeSummary(0, 0, 0, 0.0, None, 0)

    successful: List[ChallengeResult] = [r for r in results if r.success]
    completed = len(successful)
    average_time_ms = None
    if successful:
        average_time_ms = sum(r.time_taken_ms for r in successful) / completed

    return PracticeSummary(
        attempts=len(results),
        completed=completed,
        failed=len(results) - completed,
        accuracy=completed / len(results) * 100.0,
        average_time_ms=average_time_ms,
        total_errors=sum(r.errors for r in results),
    )
