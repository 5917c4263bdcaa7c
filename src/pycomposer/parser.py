"""Parse Nokia composer notation into note tokens."""

import re
from dataclasses import dataclass

from .errors import InvalidFraction, UnknownPitch
from .pitch import get_pitch_table

# Leading fraction digits, then everything else is the pitch
_NOTE_PATTERN = re.compile(r"([0-9]*)(.*)", re.DOTALL)


@dataclass(frozen=True)
class NoteToken:
    """A single parsed note: duration fraction and pitch key."""

    fraction: int
    pitch: str


def tokenize(score: str) -> list[str]:
    """Split a score on runs of whitespace.

    Example: " 4c4  8e4\\n2g4 " -> ["4c4", "8e4", "2g4"]
    """
    return score.split()


def parse_note(token: str) -> NoteToken:
    """Split a token like '4c#4' into NoteToken(fraction=4, pitch='c#4').

    Raises:
        InvalidFraction: no leading digits, or the fraction is 0
        UnknownPitch: nothing after the digits, or not a valid pitch key
    """
    match = _NOTE_PATTERN.fullmatch(token)
    digits, pitch = match.group(1), match.group(2)

    if not digits:
        raise InvalidFraction(digits)
    try:
        fraction = int(digits)
    except ValueError as e:
        # longer than the interpreter's int conversion limit
        raise InvalidFraction(digits) from e
    if fraction < 1:
        raise InvalidFraction(fraction)

    if pitch not in get_pitch_table():
        raise UnknownPitch(pitch)

    return NoteToken(fraction=fraction, pitch=pitch)
