from __future__ import annotations

import math
from typing import Optional

import numpy as np


def rms(frame: np.ndarray) -> float:
    if frame.size == 0:
        return 0.0
    return float(np.sqrt(np.mean(frame.astype(np.float64) ** 2)))


def hz_to_midi(hz: float) -> Optional[float]:
    if hz <= 0:
        return None
    return 69.0 + 12.0 * math.log2(hz / 440.0)


def midi_to_hz(midi: float) -> float:
    return 440.0 * (2.0 ** ((midi - 69.0) / 12.0))


def autocorrelation(x: np.ndarray) -> np.ndarray:
    """Unnormalized autocorrelation: ``c[lag] = sum_j x[j] * x[j + lag]`` for every lag."""
    x = x.astype(np.float64)
    if x.size == 0:
        return x
    full = np.correlate(x, x, mode="full")
    return full[x.size - 1 :]


def parabolic_offset(y0: float, y1: float, y2: float) -> Optional[float]:
    """Sub-sample offset of the vertex through three equally spaced points.

    Returns None when the points are collinear.
    """
    a = (y0 + y2 - 2.0 * y1) / 2.0
    b = (y2 - y0) / 2.0
    if a == 0:
        return None
    return -b / (2.0 * a)
