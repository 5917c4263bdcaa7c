"""pycomposer - Nokia composer scores to frequencies and durations."""

from .composer import (
    NOKIA_TUNE,
    CompiledNote,
    Composer,
    duration_of,
)
from .errors import (
    BadNote,
    ComposerError,
    InvalidFraction,
    InvalidTempo,
    UnknownPitch,
)
from .parser import NoteToken, parse_note, tokenize
from .pitch import DEFAULT_A4_FREQUENCY, frequency_of, get_pitch_table

__version__ = "0.1.0"
__all__ = [
    "Composer",
    "CompiledNote",
    "NoteToken",
    "NOKIA_TUNE",
    "DEFAULT_A4_FREQUENCY",
    "duration_of",
    "frequency_of",
    "get_pitch_table",
    "parse_note",
    "tokenize",
    "ComposerError",
    "BadNote",
    "UnknownPitch",
    "InvalidFraction",
    "InvalidTempo",
]
