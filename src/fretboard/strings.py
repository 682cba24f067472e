from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Tuple

from .notes import NOTE_NAMES

logger = logging.getLogger(__name__)

# 1 is the high E string, 6 the low E
GUITAR_STRINGS: Tuple[int, ...] = (1, 2, 3, 4, 5, 6)

STRING_NOTES: Dict[int, str] = {1: "E", 2: "B", 3: "G", 4: "D", 5: "A", 6: "E"}

OPEN_STRING_FREQUENCIES: Dict[int, float] = {
    1: 329.63,
    2: 246.94,
    3: 196.00,
    4: 146.83,
    5: 110.00,
    6: 82.41,
}

FRETS_PER_CHALLENGE = 5


@dataclass(frozen=True)
class Challenge:
    string: int
    note: str
    warning: Optional[str] = None

    @property
    def label(self) -> str:
        return f"String {string_label(self.string)}, note {self.note}"


def string_label(string: int) -> str:
    return f"{string} ({STRING_NOTES[string]})"


def available_notes(string: int, frets: int = FRETS_PER_CHALLENGE) -> List[str]:
    """Open note of the string plus the notes of its first ``frets`` frets."""
    open_index = NOTE_NAMES.index(STRING_NOTES[string])
    return [NOTE_NAMES[(open_index + fret) % 12] for fret in range(frets + 1)]


def generate_challenge(
    selected_strings: Iterable[int] = GUITAR_STRINGS,
    rng: Optional[random.Random] = None,
) -> Challenge:
    rng = rng or random.Random()
    strings = [s for s in selected_strings if s in STRING_NOTES]

    warning = None
    if not strings:
        warning = "No valid strings selected, defaulting to all strings"
        logger.warning(warning)
        strings = list(GUITAR_STRINGS)

    string = rng.choice(strings)
    note = rng.choice(available_notes(string))
    logger.debug("New challenge: string %s, note %s", string_label(string), note)
    return Challenge(string=string, note=note, warning=warning)
