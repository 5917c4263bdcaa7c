"""Equal-tempered pitch table and pitch-to-frequency conversion."""

import logging
import math
import threading
from types import MappingProxyType
from typing import Mapping

from .errors import UnknownPitch

log = logging.getLogger(__name__)

# Chromatic order within an octave. No flats: c# is the only spelling.
NOTE_NAMES = ("c", "c#", "d", "d#", "e", "f", "f#", "g", "g#", "a", "a#", "b")
OCTAVES = range(9)

# C0 is 57 semitones below A4
C0_OFFSET = -57

DEFAULT_A4_FREQUENCY = 440

# Built on first use, read without locking afterwards
_pitch_table: Mapping[str, int] | None = None
_pitch_table_lock = threading.Lock()


def _build_pitch_table() -> dict[str, int]:
    keys = [f"{name}{octave}" for octave in OCTAVES for name in NOTE_NAMES]
    return {key: index + C0_OFFSET for index, key in enumerate(keys)}


def get_pitch_table() -> Mapping[str, int]:
    """Return the shared pitch-key -> semitones-from-A4 table.

    The table is built exactly once, under a lock, and only published after
    it is complete, so concurrent first callers all see the full table.
    """
    global _pitch_table
    if _pitch_table is None:
        with _pitch_table_lock:
            if _pitch_table is None:
                table = _build_pitch_table()
                log.debug("Built pitch table with %d entries", len(table))
                _pitch_table = MappingProxyType(table)
    return _pitch_table


def lookup(pitch: str) -> int:
    """Return the signed semitone distance from A4 to *pitch* (e.g. 'c#4')."""
    try:
        return get_pitch_table()[pitch]
    except (KeyError, TypeError):
        raise UnknownPitch(pitch) from None


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def frequency_of(pitch: str, a4_frequency: int = DEFAULT_A4_FREQUENCY) -> int:
    """Convert a pitch key to whole Hz in the tuning anchored at *a4_frequency*.

    Format: [a-g][#]?[0-8]
    Examples at A440: a4=440, c4=262 (261.63 rounded), c0=16, b8=7902

    Ties round up (floor(x + 0.5)).
    """
    semitones = lookup(pitch)
    return _round_half_up(a4_frequency * 2.0 ** (semitones / 12.0))
