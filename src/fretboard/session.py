from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import Callable, List, Optional

import numpy as np

from .challenge import ChallengeMatcher, ChallengeState
from .config import AudioConfig, ChallengeConfig, DetectionConfig
from .events import Event, LiveClassification
from .gate import VolumeGate
from .notes import ClassifiedNote, classify
from .pitch import PitchEstimator, is_valid_frequency
from .thresholds import DetectionThresholds, calculate_thresholds
from .tracking import DetectionStabilizer, Verdict

logger = logging.getLogger(__name__)


def monotonic_ms() -> float:
    return time.monotonic() * 1000.0


@dataclass
class DisplaySnapshot:
    amplitude: float = 0.0
    has_volume: bool = False
    note: Optional[ClassifiedNote] = None
    is_correct: bool = False
    waveform: Optional[np.ndarray] = None


@dataclass
class TickResult:
    snapshot: DisplaySnapshot
    events: List[Event] = field(default_factory=list)
    verdict: Optional[Verdict] = None


class DetectionSession:
    """Owns the whole per-tick pipeline and all of its mutable state.

    ``sensitivity``, ``extended_range``, ``detector_mode`` and ``paused`` are
    plain attributes; changes take effect on the next tick.
    """

    def __init__(
        self,
        sample_rate: float,
        target_note_name: str = "",
        detection: Optional[DetectionConfig] = None,
        challenge: Optional[ChallengeConfig] = None,
        audio: Optional[AudioConfig] = None,
        clock: Callable[[], float] = monotonic_ms,
    ):
        detection = detection or DetectionConfig()
        challenge = challenge or ChallengeConfig()
        self.audio = audio or AudioConfig(sample_rate=int(sample_rate))
        self.clock = clock

        self.sensitivity = detection.sensitivity
        self.extended_range = detection.extended_range
        self.detector_mode = detection.detector_mode
        self.paused = False

        self.gate = VolumeGate(detection.silence_window_ms)
        self.estimator = PitchEstimator(sample_rate)
        self.stabilizer = DetectionStabilizer()
        self.matcher = ChallengeMatcher(target_note_name, challenge.max_errors, now_ms=clock())
        self._busy = False

    @property
    def state(self) -> ChallengeState:
        return self.matcher.state

    @property
    def thresholds(self) -> DetectionThresholds:
        return calculate_thresholds(self.sensitivity)

    def reset(self, target_note_name: Optional[str] = None, now_ms: Optional[float] = None) -> ChallengeState:
        """Start a fresh challenge, keeping the current target unless a new one is given."""
        if now_ms is None:
            now_ms = self.clock()
        self.gate.reset()
        self.stabilizer.reset()
        state = self.matcher.reset(target_note_name, now_ms)
        logger.debug("Session reset, target %r", state.target_note_name)
        return state

    def tick(self, frame: np.ndarray, now_ms: Optional[float] = None) -> Optional[TickResult]:
        """Run one frame through the pipeline.

        Returns None when a previous tick is still running; that frame is dropped.
        """
        if self._busy:
            logger.debug("Dropping tick, previous tick still in progress")
            return None
        self._busy = True
        try:
            return self._run(frame, self.clock() if now_ms is None else now_ms)
        finally:
            self._busy = False

    def _run(self, frame: np.ndarray, now_ms: float) -> TickResult:
        if self.paused and not self.detector_mode:
            return TickResult(DisplaySnapshot())

        thresholds = calculate_thresholds(self.sensitivity)
        reading = self.gate.process(frame, thresholds.volume_threshold, now_ms)
        snapshot = DisplaySnapshot(
            amplitude=reading.amplitude,
            has_volume=reading.has_volume,
            waveform=np.array(frame, copy=True),
        )

        if not reading.has_volume:
            if self.gate.silence:
                self.stabilizer.forgive()
            return TickResult(snapshot)

        estimate = self.estimator.estimate(frame)
        if estimate.hz is None or not self._in_range(estimate.hz):
            return TickResult(snapshot)

        note = classify(estimate.hz)
        snapshot.note = note
        events: List[Event] = [LiveClassification(note.note_name, note.octave, note.frequency_hz, note.cents)]

        verdict = self.stabilizer.process(
            note,
            self.matcher.state.target_note_name,
            reading.amplitude,
            thresholds,
            now_ms,
        )
        snapshot.is_correct = verdict.is_correct

        if not self.detector_mode:
            events.extend(self.matcher.process(note, verdict, thresholds, now_ms))
        return TickResult(snapshot, events, verdict)

    def _in_range(self, hz: float) -> bool:
        return is_valid_frequency(
            hz,
            self.extended_range,
            min_freq=self.audio.min_freq,
            max_freq=self.audio.max_freq,
            extended_max_freq=self.audio.extended_max_freq,
        )
