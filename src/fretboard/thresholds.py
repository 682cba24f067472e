from __future__ import annotations

import math
from dataclasses import dataclass

MIN_SENSITIVITY = 0
MAX_SENSITIVITY = 100


@dataclass(frozen=True)
class DetectionThresholds:
    volume_threshold: float
    incorrect_delay_ms: float
    min_correct_streak: int
    min_incorrect_streak: int
    cents_tolerance_correct: int
    cents_tolerance_incorrect: int


def clamp_sensitivity(sensitivity: float) -> float:
    return min(MAX_SENSITIVITY, max(MIN_SENSITIVITY, sensitivity))


def calculate_thresholds(sensitivity: float) -> DetectionThresholds:
    """Derive every detection threshold from the 0-100 sensitivity dial.

    Higher sensitivity means a lower volume gate, shorter streaks, a shorter
    pause between wrong-note reports and wider cents tolerances. Values outside
    the dial range are clamped.
    """
    ratio = clamp_sensitivity(sensitivity) / 100.0
    return DetectionThresholds(
        volume_threshold=0.05 - ratio * 0.045,
        incorrect_delay_ms=4000.0 - ratio * 3000.0,
        min_correct_streak=5 - math.floor(ratio * 3),
        min_incorrect_streak=7 - math.floor(ratio * 5),
        cents_tolerance_correct=30 + math.floor(ratio * 20),
        cents_tolerance_incorrect=20 + math.floor(ratio * 30),
    )


def sensitivity_label(sensitivity: float) -> str:
    if sensitivity <= 20:
        return "Very Low (Less Sensitive)"
    if sensitivity <= 40:
        return "Low"
    if sensitivity <= 60:
        return "Medium"
    if sensitivity <= 80:
        return "High"
    return "Very High (More Sensitive)"
