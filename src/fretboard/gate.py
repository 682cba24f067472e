from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from .dsp import rms


@dataclass
class VolumeReading:
    has_volume: bool
    amplitude: float


class VolumeGate:
    """Energy gate in front of the pitch estimator.

    ``silence`` turns on once the signal has stayed under the threshold for
    longer than ``silence_window_ms`` and turns off on the next loud frame.
    """

    def __init__(self, silence_window_ms: float = 500.0):
        self.silence_window_ms = silence_window_ms
        self.last_sound_ms = 0.0
        self.silence = False

    def process(self, frame: np.ndarray, threshold: float, now_ms: float) -> VolumeReading:
        amplitude = rms(frame)
        if amplitude >= threshold:
            self.silence = False
            self.last_sound_ms = now_ms
            return VolumeReading(True, amplitude)

        if now_ms - self.last_sound_ms > self.silence_window_ms:
            self.silence = True
        return VolumeReading(False, amplitude)

    def reset(self) -> None:
        self.last_sound_ms = 0.0
        self.silence = False
