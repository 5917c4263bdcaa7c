#!/usr/bin/env python3
"""Unit tests for composer.py - durations and score compilation."""

import threading

import pytest

from pycomposer.composer import NOKIA_TUNE, CompiledNote, Composer, duration_of
from pycomposer.errors import BadNote, InvalidFraction, InvalidTempo, UnknownPitch

NOKIA_TUNE_AT_120 = [
    (659, 250), (587, 250), (370, 500), (415, 500),
    (554, 250), (494, 250), (294, 500), (330, 500),
    (494, 250), (440, 250), (277, 500), (330, 500),
    (440, 1000),
]


class TestDurationOf:
    """Tests for duration_of function."""

    def test_whole_note_at_240(self):
        """Test a whole note lasts one second at 240 BPM."""
        assert duration_of(1, 240) == 1000

    def test_quarter_note_at_240(self):
        """Test a quarter note at 240 BPM."""
        assert duration_of(4, 240) == 250

    def test_truncates(self):
        """Test milliseconds are truncated, not rounded."""
        # 2000 / 3 = 666.67
        assert duration_of(3, 120) == 666

    def test_decreasing_in_fraction(self):
        """Test shorter fractions give strictly shorter notes."""
        durations = [duration_of(f, 120) for f in range(1, 33)]
        assert all(a > b for a, b in zip(durations, durations[1:]))

    def test_decreasing_in_bpm(self):
        """Test faster tempos give strictly shorter notes."""
        durations = [duration_of(4, bpm) for bpm in range(30, 241)]
        assert all(a > b for a, b in zip(durations, durations[1:]))

    @pytest.mark.parametrize("fraction", [0, -4, 2.5, "4", True])
    def test_invalid_fraction(self, fraction):
        """Test non-positive and non-integer fractions."""
        with pytest.raises(InvalidFraction):
            duration_of(fraction, 120)

    @pytest.mark.parametrize("bpm", [0, -120, 120.0, None])
    def test_invalid_tempo(self, bpm):
        """Test non-positive and non-integer tempos."""
        with pytest.raises(InvalidTempo):
            duration_of(4, bpm)

    def test_huge_fraction(self):
        """Test a fraction beyond float range raises InvalidFraction."""
        with pytest.raises(InvalidFraction):
            duration_of(10 ** 400, 120)

    def test_huge_tempo(self):
        """Test a tempo beyond float range raises InvalidTempo."""
        with pytest.raises(InvalidTempo):
            duration_of(4, 10 ** 400)

    def test_very_small_duration_truncates_to_zero(self):
        """Test a large but finite fraction gives 0ms."""
        assert duration_of(10 ** 300, 120) == 0


class TestComposerInit:
    """Tests for Composer construction and properties."""

    def test_defaults_to_a440(self):
        """Test default tuning."""
        composer = Composer(120)
        assert composer.a4_frequency == 440
        assert composer.tempo == 120

    def test_custom_tuning(self):
        """Test a4_frequency is kept."""
        assert Composer(120, 432).a4_frequency == 432

    def test_a4_frequency_is_read_only(self):
        """Test tuning cannot be changed after construction."""
        composer = Composer(120)
        with pytest.raises(AttributeError):
            composer.a4_frequency = 415

    @pytest.mark.parametrize("bpm", [0, -1])
    def test_invalid_tempo(self, bpm):
        """Test non-positive tempo is rejected."""
        with pytest.raises(InvalidTempo):
            Composer(bpm)

    @pytest.mark.parametrize("a4_frequency", [0, -440])
    def test_invalid_tuning(self, a4_frequency):
        """Test non-positive A4 frequency is rejected."""
        with pytest.raises(ValueError):
            Composer(120, a4_frequency)

    def test_change_tempo(self):
        """Test change_tempo updates tempo."""
        composer = Composer(120)
        composer.change_tempo(90)
        assert composer.tempo == 90

    def test_tempo_setter(self):
        """Test assigning tempo goes through validation."""
        composer = Composer(120)
        composer.tempo = 60
        assert composer.tempo == 60
        with pytest.raises(InvalidTempo):
            composer.tempo = 0
        assert composer.tempo == 60


class TestStandaloneConversions:
    """Tests for note_to_frequency and fraction_to_duration."""

    def test_note_to_frequency_uses_tuning(self):
        """Test frequency follows the instance's A4."""
        assert Composer(120, 432).note_to_frequency("a4") == 432

    def test_fraction_to_duration_uses_tempo(self):
        """Test duration follows the instance's tempo."""
        composer = Composer(240)
        assert composer.fraction_to_duration(4) == 250
        composer.change_tempo(120)
        assert composer.fraction_to_duration(4) == 500

    def test_errors_are_not_wrapped(self):
        """Test direct calls raise the specific error."""
        composer = Composer(120)
        with pytest.raises(UnknownPitch):
            composer.note_to_frequency("4c4")
        with pytest.raises(InvalidFraction):
            composer.fraction_to_duration(0)


class TestCompileScore:
    """Tests for compile_score."""

    def test_nokia_tune(self):
        """Test the built-in tune compiles to 13 pairs in order."""
        notes = Composer(120).compile_score(NOKIA_TUNE)
        assert len(notes) == 13
        assert notes == NOKIA_TUNE_AT_120

    def test_returns_compiled_notes(self):
        """Test each pair exposes frequency and duration."""
        note = Composer(240).compile_score("4a4")[0]
        assert isinstance(note, CompiledNote)
        assert note.frequency == 440
        assert note.duration == 250

    def test_empty_score(self):
        """Test empty input compiles to nothing."""
        assert Composer(120).compile_score("") == []

    def test_whitespace_only_score(self):
        """Test blank input compiles to nothing."""
        assert Composer(120).compile_score(" \n\t ") == []

    def test_whitespace_runs(self):
        """Test notes separated by several whitespace characters."""
        notes = Composer(240).compile_score("  4a4 \n\n 1a5\t")
        assert notes == [(440, 250), (880, 1000)]

    def test_unknown_pitch(self):
        """Test BadNote carries the token and the cause."""
        with pytest.raises(BadNote) as exc_info:
            Composer(120).compile_score("4z9")
        assert exc_info.value.token == "4z9"
        assert isinstance(exc_info.value.cause, UnknownPitch)
        assert exc_info.value.__cause__ is exc_info.value.cause

    def test_zero_fraction(self):
        """Test 0 fraction wraps InvalidFraction."""
        with pytest.raises(BadNote) as exc_info:
            Composer(120).compile_score("0c4")
        assert exc_info.value.token == "0c4"
        assert isinstance(exc_info.value.cause, InvalidFraction)

    def test_fraction_too_large_for_float(self):
        """Test a fraction beyond float range is reported as BadNote."""
        token = "1" + "0" * 400 + "c4"
        with pytest.raises(BadNote) as exc_info:
            Composer(120).compile_score(token)
        assert exc_info.value.token == token
        assert isinstance(exc_info.value.cause, InvalidFraction)

    def test_fraction_too_long_to_parse(self):
        """Test a fraction past the int conversion digit limit is reported as BadNote."""
        token = "1" * 5000 + "c4"
        with pytest.raises(BadNote) as exc_info:
            Composer(120).compile_score(token)
        assert exc_info.value.token == token
        assert isinstance(exc_info.value.cause, InvalidFraction)

    def test_stops_at_first_bad_note(self):
        """Test the first failing token is reported."""
        with pytest.raises(BadNote) as exc_info:
            Composer(120).compile_score("4c4 4db4 4q4")
        assert exc_info.value.token == "4db4"

    def test_message_restates_format(self):
        """Test the error message names the token and the notation."""
        with pytest.raises(BadNote) as exc_info:
            Composer(120).compile_score("4c4 4z9")
        message = str(exc_info.value)
        assert message.startswith("4z9 is an invalid note.")
        assert "[fraction][a-g in lowercase]" in message

    def test_idempotent(self):
        """Test compiling twice gives equal results."""
        composer = Composer(120)
        assert composer.compile_score(NOKIA_TUNE) == composer.compile_score(NOKIA_TUNE)

    def test_tempo_change_does_not_alter_previous_result(self):
        """Test compiled notes are independent of later tempo changes."""
        composer = Composer(120)
        notes = composer.compile_score("4c4 8e4")
        composer.change_tempo(60)
        assert notes == [(262, 500), (330, 250)]
        assert composer.compile_score("4c4 8e4") == [(262, 1000), (330, 500)]

    def test_concurrent_tempo_changes_never_split_a_score(self):
        """Test every compiled score uses a single tempo throughout."""
        composer = Composer(120)
        score = " ".join(["4a4"] * 200)
        stop = threading.Event()

        def flip_tempo():
            while not stop.is_set():
                composer.change_tempo(60)
                composer.change_tempo(240)

        flipper = threading.Thread(target=flip_tempo)
        flipper.start()
        try:
            for _ in range(50):
                durations = {duration for _, duration in composer.compile_score(score)}
                assert len(durations) == 1
        finally:
            stop.set()
            flipper.join()


class TestCompileScoreUnchecked:
    """Tests for compile_score_unchecked."""

    def test_valid_score(self):
        """Test same result as compile_score."""
        composer = Composer(120)
        assert composer.compile_score_unchecked(NOKIA_TUNE) == NOKIA_TUNE_AT_120

    def test_raises_value_error(self):
        """Test failures surface as a plain ValueError."""
        with pytest.raises(ValueError) as exc_info:
            Composer(120).compile_score_unchecked("4c4 4z9")
        assert not isinstance(exc_info.value, BadNote)
        assert "4z9" in str(exc_info.value)
        assert "Unknown pitch 'z9'" in str(exc_info.value)
        assert isinstance(exc_info.value.__cause__, BadNote)
