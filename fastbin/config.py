"""Application-wide configuration such as the scratch directory."""

from __future__ import annotations

import tempfile
from pathlib import Path

APP_NAME = "fastbin"


def temp_dir() -> Path:
    """Return the application's scratch directory, creating it if needed."""
    path = Path(tempfile.gettempdir()) / APP_NAME
    path.mkdir(parents=True, exist_ok=True)
    return path