"""Installing a binary from a URL into the user's bin directory."""

from __future__ import annotations

import os
import shutil
import stat
from pathlib import Path

from fastbin.errors import AppError
from fastbin.sources import new_source


def bin_home() -> Path:
    """Return the user's binary directory: $XDG_BIN_HOME or ~/.local/bin."""
    value = os.environ.get("XDG_BIN_HOME", "")
    if value and os.path.isabs(value):
        return Path(value)
    return Path.home() / ".local" / "bin"


def move_cross_device(source: str | os.PathLike, destination: str | os.PathLike) -> None:
    """Copy ``source`` to ``destination`` with its mode, then remove ``source``."""
    with open(source, "rb") as src, open(destination, "wb") as dst:
        shutil.copyfileobj(src, dst)
    mode = stat.S_IMODE(os.stat(source).st_mode)
    os.chmod(destination, mode)
    os.remove(source)


def move_to_bin_dir(source: str | os.PathLike, destination: str | os.PathLike) -> None:
    """Move a file, falling back to copying when renaming is not possible."""
    try:
        os.rename(source, destination)
    except OSError:
        move_cross_device(source, destination)


def install(url: str) -> list[Path]:
    """Download ``url`` and install the binaries it holds; return their paths."""
    source = new_source(url)
    downloaded = source.download(url)

    if not downloaded.is_binary():
        executables = downloaded.find_executables()
        if not executables:
            raise AppError("no binaries found in archive")
        downloaded.extract(executables)

    target_dir = bin_home()
    installed: list[Path] = []
    for binary in downloaded.binaries:
        destination = target_dir / Path(binary.name).name
        move_to_bin_dir(binary.location, destination)
        installed.append(destination)
    return installed