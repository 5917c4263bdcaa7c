"""Render compiled notes to audio samples and WAV files."""

import logging
from pathlib import Path
from typing import Iterable

import numpy as np
from scipy.io import wavfile

from .composer import CompiledNote

log = logging.getLogger(__name__)

DEFAULT_SAMPLE_RATE = 44100
STYLES = ("sine", "square", "bell")


def _sample_count(duration_ms: int, sample_rate: int) -> int:
    return int(sample_rate * duration_ms / 1000)


def generate_tone(
    frequency: int,
    duration_ms: int,
    sample_rate: int = DEFAULT_SAMPLE_RATE,
    style: str = "sine",
) -> np.ndarray:
    """Generate a single tone.

    Args:
        frequency: Tone frequency in Hz
        duration_ms: Duration in milliseconds
        sample_rate: Sample rate in Hz
        style: Synthesis style ("sine", "square", "bell")

    Returns:
        Float samples normalized to [-1, 1]
    """
    if style not in STYLES:
        raise ValueError(f"Unknown style '{style}'. Use one of: {', '.join(STYLES)}")

    n_samples = _sample_count(duration_ms, sample_rate)
    t = np.arange(n_samples) / sample_rate

    if style == "square":
        return _generate_square(frequency, t)
    elif style == "bell":
        return _generate_bell(frequency, t)
    return _generate_sine(frequency, t, sample_rate)


def _fade_envelope(n_samples: int, sample_rate: int) -> np.ndarray:
    """Linear 10ms fade in/out, shortened for very short notes."""
    fade_samples = min(int(sample_rate * 0.01), n_samples // 2)
    envelope = np.ones(n_samples)
    if fade_samples:
        ramp = np.arange(fade_samples) / fade_samples
        envelope[:fade_samples] = ramp
        envelope[n_samples - fade_samples:] = ramp[::-1]
    return envelope


def _generate_sine(freq: int, t: np.ndarray, sample_rate: int) -> np.ndarray:
    """Simple sine wave with fade in/out."""
    return _fade_envelope(len(t), sample_rate) * np.sin(2 * np.pi * freq * t)


def _generate_square(freq: int, t: np.ndarray) -> np.ndarray:
    """Buzzer-style square wave at half amplitude."""
    return 0.5 * np.sign(np.sin(2 * np.pi * freq * t))


def _generate_bell(freq: int, t: np.ndarray) -> np.ndarray:
    """Bell-like tone with decaying harmonics."""
    harmonics = [
        (1.0, 1.0, 1.0),
        (2.0, 0.5, 1.5),
        (3.0, 0.25, 2.0),
        (4.0, 0.15, 2.5),
        (5.0, 0.1, 3.0),
    ]

    if len(t) == 0:
        return np.zeros(0)

    progress = np.arange(len(t)) / len(t)
    envelope = np.exp(-progress * 4) * (1 - np.exp(-progress * 50))

    value = np.zeros(len(t))
    for mult, amp, decay in harmonics:
        value += amp * np.exp(-progress * decay * 3) * np.sin(2 * np.pi * freq * mult * t)

    return 0.4 * envelope * value


def render_notes(
    notes: Iterable[CompiledNote],
    sample_rate: int = DEFAULT_SAMPLE_RATE,
    style: str = "sine",
    gap_ms: int = 0,
) -> np.ndarray:
    """Render compiled notes back to back.

    Played as-is, repeated notes such as 4c4 8c4 slur into one. *gap_ms* of
    silence is taken from the end of each note so they re-articulate while
    every note still starts on time.
    """
    if gap_ms < 0:
        raise ValueError(f"gap_ms must not be negative, got {gap_ms}")

    chunks = []
    for frequency, duration in notes:
        sounding = max(duration - gap_ms, 0)
        chunks.append(generate_tone(frequency, sounding, sample_rate, style))
        rest = _sample_count(duration, sample_rate) - _sample_count(sounding, sample_rate)
        if rest:
            chunks.append(np.zeros(rest))

    if not chunks:
        return np.zeros(0)
    return np.clip(np.concatenate(chunks), -1.0, 1.0)


def _to_pcm16(samples: np.ndarray) -> np.ndarray:
    return (np.clip(samples, -1.0, 1.0) * 32767).astype(np.int16)


def samples_to_wav(samples: np.ndarray, path: Path, sample_rate: int = DEFAULT_SAMPLE_RATE) -> None:
    """Write samples to a 16-bit mono WAV file."""
    wavfile.write(str(path), sample_rate, _to_pcm16(samples))
    log.debug("Wrote %d samples to %s", len(samples), path)


def samples_to_bytes(samples: np.ndarray) -> bytes:
    """Convert samples to raw 16-bit PCM bytes."""
    return _to_pcm16(samples).tobytes()
