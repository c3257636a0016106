"""Downloaded files: telling binaries from archives and extracting executables."""

from __future__ import annotations

import enum
import hashlib
import lzma
import os
import re
import shutil
import stat
import tarfile
from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass, field
from pathlib import Path

from fastbin.config import temp_dir
from fastbin.errors import AppError

_COMPRESSION_MODES = {
    ".gz": "r:gz",
    ".bzip2": "r:bz2",
    ".xz": "r:xz",
}

_READ_ERRORS = (tarfile.TarError, OSError, EOFError, lzma.LZMAError)


class ExecNotFoundError(AppError):
    """Raised when the selected executable is not in the archive."""

    def __init__(self, message: str = "Executable not found", **kwargs) -> None:
        super().__init__(message, **kwargs)


class FileType(enum.Enum):
    BINARY = 0
    ARCHIVE = 1


@dataclass
class Binary:
    name: str
    location: str
    hash: str = ""


def _ext(path: str) -> str:
    """Return the extension of the last path element, dot included."""
    base = path.replace(os.sep, "/").rsplit("/", 1)[-1]
    index = base.rfind(".")
    return base[index:] if index >= 0 else ""


def open_compressed(path: str | os.PathLike) -> tarfile.TarFile:
    """Open a compressed tar archive, choosing the codec from the extension."""
    ext = _ext(os.fspath(path))
    mode = _COMPRESSION_MODES.get(ext)
    if mode is None:
        raise AppError("unsupported compression format: %s").fmt(ext)
    return tarfile.open(path, mode)


def is_potential_binary(member: tarfile.TarInfo) -> bool:
    """A member may be a binary if it is not a directory and has no extension."""
    return not member.isdir() and _ext(member.name) == ""


def is_executable(mode: int) -> bool:
    """Whether any execute bit is set in ``mode``."""
    return mode & 0o111 != 0


def make_executable(path: str | os.PathLike, mode: int) -> None:
    """Set ``mode`` on ``path`` with the owner's execute bit added."""
    os.chmod(path, mode | stat.S_IXUSR)


def get_hash(path: str | os.PathLike) -> str:
    """Return the hex SHA-256 digest of the file at ``path``."""
    digest = hashlib.sha256()
    with open(path, "rb") as handle:
        for chunk in iter(lambda: handle.read(65536), b""):
            digest.update(chunk)
    return digest.hexdigest()


def _ask(title: str, names: Sequence[str]) -> str:
    print(title)
    for number, name in enumerate(names, 1):
        print(f"  {number}) {name}")
    try:
        return input("> ").strip()
    except EOFError as exc:
        raise AppError("form interaction failed").wrap(exc) from exc


def choose_one(names: Iterable[str]) -> str:
    """Ask the user to pick one name by number or by typing it."""
    options = list(names)
    answer = _ask("Select the binary file", options)
    if answer.isdigit() and 1 <= int(answer) <= len(options):
        return options[int(answer) - 1]
    return answer


def choose_many(names: Iterable[str]) -> list[str]:
    """Ask the user to pick any number of names by their numbers."""
    options = list(names)
    answer = _ask(
        "Multiple executables found in the archive. "
        "What would you like to install?",
        options,
    )
    chosen: list[str] = []
    for token in filter(None, re.split(r"[,\s]+", answer)):
        if not token.isdigit() or not 1 <= int(token) <= len(options):
            raise AppError("form interaction failed: invalid selection %r").fmt(
                token
            )
        name = options[int(token) - 1]
        if name not in chosen:
            chosen.append(name)
    return chosen


@dataclass
class File:
    """A downloaded file that is either a bare binary or an archive."""

    name: str
    location: str
    kind: FileType = FileType.BINARY
    binaries: list[Binary] = field(default_factory=list)

    def set_type(self) -> None:
        """Classify the file; a bare binary is made executable."""
        info = os.stat(self.location)
        self.kind = FileType.ARCHIVE
        if _ext(self.location) == "":
            self.kind = FileType.BINARY
            self.binaries = [Binary(name=self.name, location=self.location)]
            make_executable(self.location, stat.S_IMODE(info.st_mode))

    def is_binary(self) -> bool:
        return self.kind is FileType.BINARY

    def find_executables(
        self, chooser: Callable[[list[str]], str] | None = None
    ) -> list[tarfile.TarInfo]:
        """List executable members; if none, let ``chooser`` pick a candidate."""
        try:
            archive = open_compressed(self.location)
        except FileNotFoundError as exc:
            raise AppError("failed to open file").wrap(exc) from exc
        except AppError as exc:
            raise AppError("failed to create compressed reader").wrap(exc) from exc
        except _READ_ERRORS as exc:
            raise AppError("failed to find binaries").wrap(exc) from exc

        executables: list[tarfile.TarInfo] = []
        files: dict[str, tarfile.TarInfo] = {}
        try:
            with archive:
                for member in archive:
                    if not is_potential_binary(member):
                        continue
                    files[member.name] = member
                    if is_executable(member.mode):
                        executables.append(member)
        except _READ_ERRORS as exc:
            raise AppError("failed to find binaries").wrap(exc) from exc

        if executables:
            return executables

        selected = (chooser or choose_one)(sorted(files))
        if selected not in files:
            raise ExecNotFoundError()
        return [files[selected]]

    def extract(
        self,
        members: Sequence[tarfile.TarInfo],
        chooser: Callable[[list[str]], list[str]] | None = None,
    ) -> None:
        """Extract ``members`` into the scratch directory as executables."""
        chosen = list(members)
        if len(chosen) > 1:
            by_name = {member.name: member for member in chosen}
            picked = (chooser or choose_many)(list(by_name))
            chosen = [by_name[name] for name in picked if name in by_name]

        if not chosen:
            return

        base = temp_dir()
        try:
            archive = open_compressed(self.location)
        except (AppError, *_READ_ERRORS) as exc:
            raise AppError("failed to copy file").wrap(exc) from exc

        with archive:
            for member in chosen:
                target = Path(base) / member.name
                try:
                    target.parent.mkdir(parents=True, exist_ok=True)
                except OSError as exc:
                    raise AppError("failed to create directories").wrap(exc) from exc

                try:
                    source = archive.extractfile(member.name)
                    if source is None:
                        raise AppError("%s is not a regular file").fmt(member.name)
                    with source, open(target, "wb") as out:
                        shutil.copyfileobj(source, out)
                except (AppError, *_READ_ERRORS) as exc:
                    raise AppError("failed to copy file").wrap(exc) from exc

                try:
                    make_executable(target, member.mode)
                except OSError as exc:
                    raise AppError("failed to make file executable").wrap(exc) from exc

                try:
                    digest = get_hash(target)
                except OSError as exc:
                    raise AppError("hash failed").wrap(exc) from exc

                self.binaries.append(
                    Binary(name=member.name, location=str(target), hash=digest)
                )