from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import numpy as np

from .dsp import autocorrelation, parabolic_offset, rms

MIN_FREQ_HZ = 75.0
MAX_FREQ_HZ = 1000.0
EXTENDED_MAX_FREQ_HZ = 2000.0


@dataclass
class PitchEstimate:
    hz: Optional[float]


def is_valid_frequency(
    hz: float,
    extended_range: bool,
    min_freq: float = MIN_FREQ_HZ,
    max_freq: float = MAX_FREQ_HZ,
    extended_max_freq: float = EXTENDED_MAX_FREQ_HZ,
) -> bool:
    upper = extended_max_freq if extended_range else max_freq
    return min_freq <= hz <= upper


class PitchEstimator:
    """Time-domain autocorrelation pitch tracker for a single monophonic frame."""

    def __init__(self, sample_rate: float, min_rms: float = 0.01, trim_threshold: float = 0.2):
        self.sample_rate = sample_rate
        self.min_rms = min_rms
        self.trim_threshold = trim_threshold

    def estimate(self, frame: np.ndarray) -> PitchEstimate:
        if frame.size == 0 or rms(frame) < self.min_rms:
            return PitchEstimate(None)

        window = self._trim(frame.astype(np.float64))
        if window.size < 3:
            return PitchEstimate(None)

        corr = autocorrelation(window)

        # step past the zero-lag lobe
        rising = np.flatnonzero(np.diff(corr) >= 0)
        if rising.size == 0:
            return PitchEstimate(None)
        start = int(rising[0])

        lag = start + int(np.argmax(corr[start:]))
        if lag <= 0 or corr[lag] <= 0:
            return PitchEstimate(None)

        period = float(lag)
        if lag < corr.size - 1:
            offset = parabolic_offset(corr[lag - 1], corr[lag], corr[lag + 1])
            if offset is not None:
                period = lag + offset

        if period <= 0:
            return PitchEstimate(None)
        return PitchEstimate(self.sample_rate / period)

    def _trim(self, x: np.ndarray) -> np.ndarray:
        n = x.size
        half = (n + 1) // 2
        quiet = np.abs(x) < self.trim_threshold

        head = np.flatnonzero(quiet[:half])
        start = int(head[0]) if head.size else 0

        # scan backwards from the last sample, never past the midpoint
        tail = np.flatnonzero(quiet[n - half + 1 :][::-1])
        end = n - 1 - int(tail[0]) if tail.size else n - 1

        return x[start:end]
