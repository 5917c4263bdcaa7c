"""Configuration management for nokiacomposer."""

import copy
import json
import logging
import os

from .paths import config_dir, config_file, ensure_dir

log = logging.getLogger(__name__)

DEFAULT_CONFIG = {
    "composer": {
        "bpm": 120,  # quarter beats per minute
        "a4_frequency": 440,  # Hz
    },
    "render": {
        "sample_rate": 44100,
        "style": "sine",  # "sine", "square", or "bell"
        "gap_ms": 0,  # silence at the end of each note, 0 = slur
    },
}


def get_config() -> dict:
    """Load configuration, creating default if needed."""
    ensure_dir(config_dir())
    cfg_file = config_file()

    if cfg_file.exists():
        try:
            with open(cfg_file) as f:
                config = json.load(f)
            if not isinstance(config, dict):
                log.warning("Ignoring config %s: expected a JSON object", cfg_file)
                return copy.deepcopy(DEFAULT_CONFIG)
            # Merge with defaults for any missing keys
            merged = copy.deepcopy(DEFAULT_CONFIG)
            for key, value in config.items():
                if isinstance(value, dict) and key in merged:
                    merged[key] = {**merged[key], **value}
                else:
                    merged[key] = value
            return merged
        except (json.JSONDecodeError, IOError) as e:
            log.warning("Ignoring unreadable config %s: %s", cfg_file, e)
            return copy.deepcopy(DEFAULT_CONFIG)
    else:
        save_config(DEFAULT_CONFIG)
        return copy.deepcopy(DEFAULT_CONFIG)


def save_config(config: dict) -> None:
    """Save configuration to file."""
    ensure_dir(config_dir())
    with open(config_file(), "w") as f:
        json.dump(config, f, indent=2)


def _env_int(name: str) -> int | None:
    val = os.environ.get(name)
    if not val:
        return None
    try:
        return int(val)
    except ValueError:
        log.warning("Ignoring %s=%r: not a whole number", name, val)
        return None


def get_composer_config() -> dict:
    """Get tempo and tuning (environment variables override config file)."""
    config = get_config()
    composer_config = config.get("composer", {})

    bpm = _env_int("NOKIACOMPOSER_BPM")
    a4_frequency = _env_int("NOKIACOMPOSER_A4_FREQUENCY")

    return {
        "bpm": bpm if bpm is not None else composer_config.get("bpm", 120),
        "a4_frequency": (
            a4_frequency if a4_frequency is not None else composer_config.get("a4_frequency", 440)
        ),
    }


def get_render_config() -> dict:
    """Get WAV rendering configuration."""
    config = get_config()
    return config.get("render", {})
