"""Exceptions raised while compiling scores."""

NOTE_FORMAT = (
    "[fraction][a-g in lowercase][optional # for sharp notes][octave from 0 to 8]"
)


class ComposerError(Exception):
    """Base class for score compilation errors."""


class UnknownPitch(ComposerError):
    """Pitch key is not one of the 108 entries in the pitch table."""

    def __init__(self, pitch: str):
        self.pitch = pitch
        super().__init__(f"Unknown pitch {pitch!r}, expected [a-g][#]?[0-8]")


class InvalidFraction(ComposerError):
    """Note fraction is missing, non-numeric or below 1."""

    def __init__(self, fraction):
        self.fraction = fraction
        super().__init__(f"Invalid fraction {fraction!r}, expected a whole number >= 1")


class InvalidTempo(ComposerError):
    """Tempo is not a positive number of quarter beats per minute."""

    def __init__(self, bpm):
        self.bpm = bpm
        super().__init__(f"Invalid tempo {bpm!r}, expected a whole number of BPM >= 1")


class BadNote(ComposerError):
    """A score token could not be compiled.

    Carries the offending token as written in the score and the lower-level
    error that rejected it.
    """

    def __init__(self, token: str, cause: Exception):
        self.token = token
        self.cause = cause
        super().__init__(
            f"{token} is an invalid note. Remember the format: {NOTE_FORMAT} ({cause})"
        )
