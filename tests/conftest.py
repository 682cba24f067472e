"""
Shared fixtures for the test suite.

Synthetic sine frames stand in for the microphone so every test runs
without audio hardware.
"""

import numpy as np
import pytest

SAMPLE_RATE = 44100
FRAME_SIZE = 2048


def sine_frame(freq_hz: float, amplitude: float = 0.5, size: int = FRAME_SIZE, sample_rate: int = SAMPLE_RATE) -> np.ndarray:
    t = np.arange(size) / sample_rate
    return (amplitude * np.sin(2.0 * np.pi * freq_hz * t)).astype(np.float32)


def silent_frame(size: int = FRAME_SIZE) -> np.ndarray:
    return np.zeros(size, dtype=np.float32)


class FakeClock:
    """Manually advanced millisecond clock."""

    def __init__(self, start_ms: float = 0.0) -> None:
        self.now_ms = start_ms

    def __call__(self) -> float:
        return self.now_ms

    def advance(self, ms: float) -> float:
        self.now_ms += ms
        return self.now_ms


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()
