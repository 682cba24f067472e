from dataclasses import dataclass, field
from typing import Tuple

from .pitch import EXTENDED_MAX_FREQ_HZ, MAX_FREQ_HZ, MIN_FREQ_HZ


@dataclass
class AudioConfig:
    sample_rate: int = 44100
    block_size: int = 1024
    frame_size: int = 2048
    channels: int = 1
    poll_interval_s: float = 0.03
    min_freq: float = MIN_FREQ_HZ
    max_freq: float = MAX_FREQ_HZ
    extended_max_freq: float = EXTENDED_MAX_FREQ_HZ


@dataclass
class DetectionConfig:
    sensitivity: int = 50
    extended_range: bool = False
    detector_mode: bool = False
    silence_window_ms: float = 500.0


@dataclass
class ChallengeConfig:
    max_errors: int = 3
    countdown_s: int = 3
    next_challenge_delay_s: float = 2.0
    selected_strings: Tuple[int, ...] = field(default_factory=lambda: (1, 2, 3, 4, 5, 6))
