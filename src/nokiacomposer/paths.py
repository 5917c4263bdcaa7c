"""Centralized path management for nokiacomposer.

All path functions (not constants) so NOKIACOMPOSER_DIR is checked at call
time. When NOKIACOMPOSER_DIR is set, all subdirectories live under it.
Otherwise, platformdirs determines OS-appropriate locations.
"""

import os
from pathlib import Path

from platformdirs import user_config_dir, user_data_dir

_APP_NAME = "nokiacomposer"


def _override_root() -> Path | None:
    """Return the NOKIACOMPOSER_DIR override path, or None."""
    val = os.environ.get("NOKIACOMPOSER_DIR")
    return Path(val) if val else None


# -- Config ------------------------------------------------------------------

def config_dir() -> Path:
    """Config directory (config.json)."""
    root = _override_root()
    if root:
        return root / "config"
    return Path(user_config_dir(_APP_NAME))


def config_file() -> Path:
    return config_dir() / "config.json"


# -- Data --------------------------------------------------------------------

def data_dir() -> Path:
    """Persistent data (renders/)."""
    root = _override_root()
    if root:
        return root / "data"
    return Path(user_data_dir(_APP_NAME))


def renders_dir() -> Path:
    return data_dir() / "renders"


# -- Helpers -----------------------------------------------------------------

def ensure_dir(path: Path) -> Path:
    """Create *path* (and parents) if missing, then return it."""
    path.mkdir(parents=True, exist_ok=True)
    return path
