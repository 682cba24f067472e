from __future__ import annotations

import logging
import math
import random
import threading
import time
from typing import Callable, List, Optional, Protocol

import numpy as np

from .config import ChallengeConfig
from .events import (
    ChallengeCompleted,
    ChallengeFailed,
    FirstOctaveDetected,
    GameEvent,
    LiveClassification,
    WrongNoteDetected,
)
from .scoring import ChallengeResult, result_from_event
from .session import DetectionSession, TickResult
from .strings import Challenge, generate_challenge

logger = logging.getLogger(__name__)


class FrameSource(Protocol):
    sample_rate: float

    def get_frame(self) -> np.ndarray:
        ...


def run_listener(
    source: FrameSource,
    session: DetectionSession,
    handle: Callable[[TickResult], None],
    stop: threading.Event,
    period_s: float = 0.03,
) -> None:
    """Poll ``source`` every ``period_s`` until ``stop`` is set.

    Late ticks are skipped rather than replayed.
    """
    next_tick = time.monotonic()
    while not stop.is_set():
        try:
            result = session.tick(source.get_frame())
        except Exception:
            logger.exception("Pitch detection tick failed")
            result = None
        if result is not None:
            handle(result)

        next_tick += period_s
        wait = next_tick - time.monotonic()
        if wait > 0:
            stop.wait(wait)
        else:
            next_tick = time.monotonic()


class PracticeRunner:
    """Drives consecutive challenges on top of a session and collects their results."""

    def __init__(
        self,
        session: DetectionSession,
        config: ChallengeConfig,
        stop: threading.Event,
        rounds: int = 0,
        rng: Optional[random.Random] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.session = session
        self.config = config
        self.stop = stop
        self.rounds = rounds
        self.rng = rng or random.Random()
        self.clock = clock
        self.results: List[ChallengeResult] = []
        self.challenge: Optional[Challenge] = None
        self._countdown_at: Optional[float] = None
        self._start_at: Optional[float] = None
        self._last_count: Optional[int] = None
        self._last_live: Optional[str] = None

    def schedule(self, delay_s: float = 0.0) -> None:
        """Pick the next challenge; it goes live after ``delay_s`` plus the countdown."""
        challenge = generate_challenge(self.config.selected_strings, self.rng)
        if challenge.warning:
            print(f"  ! {challenge.warning}")
        self.challenge = challenge
        self.session.paused = True
        self._countdown_at = self.clock() + delay_s
        self._start_at = self._countdown_at + self.config.countdown_s
        self._last_count = None
        print("")
        print(f"{challenge.label}: play {challenge.note}, then {challenge.note} one octave higher")

    def handle(self, result: TickResult) -> None:
        if self._start_at is not None:
            self._advance_countdown(self.clock())

        for event in result.events:
            if isinstance(event, LiveClassification):
                self._show_live(event)
            elif isinstance(event, FirstOctaveDetected):
                print(f"  First octave: {event.note_name}. Now one octave higher.")
            elif isinstance(event, WrongNoteDetected):
                print(f"  Incorrect! {event.note_name} detected instead of {self.session.state.target_note_name}.")
            elif isinstance(event, ChallengeCompleted):
                print(f"  Challenge completed in {event.time_taken_ms / 1000.0:.2f} seconds!")
                self._finish(event)
            elif isinstance(event, ChallengeFailed):
                print("  Challenge failed. Too many errors. Try again!")
                self._finish(event)

    def _advance_countdown(self, now: float) -> None:
        if now >= self._start_at:
            self._countdown_at = self._start_at = None
            self.session.reset(self.challenge.note)
            self.session.paused = False
            print("  Go!")
        elif now >= self._countdown_at:
            remaining = math.ceil(self._start_at - now)
            if remaining != self._last_count:
                self._last_count = remaining
                print(f"  {remaining} ...")

    def _show_live(self, event: LiveClassification) -> None:
        label = f"{event.note_name}{event.octave}"
        if label == self._last_live or not self.session.detector_mode:
            return
        self._last_live = label
        print(f"  {label:<4} {event.frequency_hz:7.1f} Hz  {event.cents:+3d} cents")

    def _finish(self, event: GameEvent) -> None:
        state = self.session.state
        elapsed_ms = self.session.clock() - state.started_at_ms
        record = result_from_event(self.challenge, event, state.error_count, elapsed_ms)
        if record is not None:
            self.results.append(record)
        if self.rounds and len(self.results) >= self.rounds:
            self.stop.set()
            return
        self.schedule(self.config.next_challenge_delay_s)
