"""Compile Nokia composer scores into frequency/duration pairs."""

import logging
import threading
from typing import NamedTuple

from .errors import BadNote, ComposerError, InvalidFraction, InvalidTempo
from .parser import parse_note, tokenize
from .pitch import DEFAULT_A4_FREQUENCY, frequency_of

log = logging.getLogger(__name__)

# C sharp, F sharp, G sharp
NOKIA_TUNE = "8e5 8d5 4f#4 4g#4 8c#5 8b4 4d4 4e4 8b4 8a4 4c#4 4e4 2a4"

# At 240 quarter beats per minute a whole note lasts exactly one second
WHOLE_NOTE_BPM = 240.0


class CompiledNote(NamedTuple):
    """One playable note: frequency in Hz and duration in milliseconds."""

    frequency: int
    duration: int


def _is_whole_number(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _check_tempo(bpm) -> None:
    if not _is_whole_number(bpm) or bpm <= 0:
        raise InvalidTempo(bpm)


def duration_of(fraction: int, bpm: int) -> int:
    """Convert a note fraction to milliseconds at *bpm* quarter beats per minute.

    Formula: (240 / bpm) / fraction * 1000, truncated.
    Examples: duration_of(1, 240) = 1000, duration_of(4, 240) = 250

    Also gives the length of a rest, which scores cannot express.
    """
    if not _is_whole_number(fraction) or fraction <= 0:
        raise InvalidFraction(fraction)
    _check_tempo(bpm)
    try:
        whole = WHOLE_NOTE_BPM / bpm
    except OverflowError as e:
        raise InvalidTempo(bpm) from e
    try:
        return int((whole / fraction) * 1000)
    except OverflowError as e:
        raise InvalidFraction(fraction) from e


class Composer:
    """Turns scores written for the Nokia composer into tone-generator input.

    A score is a run of whitespace-separated notes of the form

        [fraction][a-g in lowercase][optional # for sharp notes][octave 0-8]

    where the fraction is the length relative to a whole note (2 is a
    minim, 4 a quarter, 8 a quaver; arbitrary integers such as 3 make
    tuplets). There are no flats, rests, dots or key signatures: write
    4c#4 instead of 4db4, split the score around rests and use
    fraction_to_duration() for the pause, and tie 4c4 8c4 for 4.c4.

    The tempo can be changed between compilations. A compile in progress
    always uses one tempo for the whole score.
    """

    def __init__(self, bpm: int, a4_frequency: int = DEFAULT_A4_FREQUENCY):
        _check_tempo(bpm)
        if not _is_whole_number(a4_frequency) or a4_frequency <= 0:
            raise ValueError(f"A4 frequency must be a positive whole number of Hz, got {a4_frequency!r}")
        self._bpm = bpm
        self._a4_frequency = a4_frequency
        self._tempo_lock = threading.Lock()

    def __repr__(self) -> str:
        return f"Composer(bpm={self._bpm}, a4_frequency={self._a4_frequency})"

    @property
    def tempo(self) -> int:
        """Quarter beats per minute."""
        return self._bpm

    @tempo.setter
    def tempo(self, bpm: int) -> None:
        self.change_tempo(bpm)

    def change_tempo(self, bpm: int) -> None:
        """Set a new tempo. Already compiled scores keep their durations."""
        _check_tempo(bpm)
        with self._tempo_lock:
            self._bpm = bpm

    @property
    def a4_frequency(self) -> int:
        """Frequency of A4 in Hz used by this composer (not necessarily 440)."""
        return self._a4_frequency

    def note_to_frequency(self, pitch: str) -> int:
        return frequency_of(pitch, self._a4_frequency)

    def fraction_to_duration(self, fraction: int) -> int:
        return duration_of(fraction, self._bpm)

    def compile_score(self, score: str) -> list[CompiledNote]:
        """Compile *score* into (frequency, duration) pairs in playing order.

        Raises:
            BadNote: on the first token that cannot be compiled; carries
                the token and the underlying error
        """
        with self._tempo_lock:
            bpm = self._bpm
            compiled = []
            for token in tokenize(score):
                try:
                    note = parse_note(token)
                    compiled.append(
                        CompiledNote(
                            frequency_of(note.pitch, self._a4_frequency),
                            duration_of(note.fraction, bpm),
                        )
                    )
                except ComposerError as e:
                    raise BadNote(token, e) from e

        log.debug("Compiled %d notes at %d BPM, A4=%d Hz", len(compiled), bpm, self._a4_frequency)
        return compiled

    def compile_score_unchecked(self, score: str) -> list[CompiledNote]:
        """Same as compile_score(), but raises a plain ValueError."""
        try:
            return self.compile_score(score)
        except BadNote as e:
            raise ValueError(str(e)) from e
