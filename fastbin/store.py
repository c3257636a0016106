"""The on-disk database that records installed binaries."""

from __future__ import annotations

import os
import sqlite3
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field
from datetime import datetime

from fastbin.errors import AppError

DB_FILE = "fastbin.db"
BIN_BUCKET = "binaries"
DEFAULT_TIMEOUT = 1.0
_FILE_MODE = 0o600


class DBLockedError(AppError):
    """Raised when another process holds the database."""

    def __init__(
        self, message: str = "Cannot acquire lock on binary database", **kwargs
    ) -> None:
        super().__init__(message, **kwargs)


@dataclass
class StoredBinary:
    """What is recorded about one installed binary."""

    name: str
    version: str = ""
    source_url: str = ""
    location: str = ""
    hash: str = ""
    last_updated: datetime | None = None
    scripts: list[str] = field(default_factory=list)
    man_page: str = ""
    size: int = 0
    architecture: str = ""
    os: str = ""


class Store:
    """An open, exclusively locked binary database."""

    def __init__(self, path: str | os.PathLike, connection: sqlite3.Connection) -> None:
        self.path = os.fspath(path)
        self._connection = connection
        self.closed = False

    @contextmanager
    def _write(self) -> Iterator[sqlite3.Connection]:
        self._connection.execute("BEGIN EXCLUSIVE")
        try:
            yield self._connection
        except BaseException:
            self._connection.execute("ROLLBACK")
            raise
        else:
            self._connection.execute("COMMIT")

    def close(self) -> None:
        """Release the lock and close the database."""
        if not self.closed:
            self._connection.close()
            self.closed = True

    def __enter__(self) -> Store:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


def open_store(path: str | os.PathLike, timeout: float = DEFAULT_TIMEOUT) -> Store:
    """Create or open the database at ``path`` and take an exclusive lock on it.

    Waits at most ``timeout`` seconds for another holder to let go.
    """
    existed = os.path.exists(path)
    try:
        connection = sqlite3.connect(path, timeout=timeout, isolation_level=None)
    except sqlite3.Error as exc:
        raise AppError("cannot open binary database").wrap(exc) from exc

    try:
        connection.execute("PRAGMA locking_mode=EXCLUSIVE")
        connection.execute("BEGIN EXCLUSIVE")
        connection.execute("COMMIT")
    except sqlite3.OperationalError as exc:
        connection.close()
        if "locked" in str(exc):
            raise DBLockedError().wrap(exc) from exc
        raise AppError("cannot open binary database").wrap(exc) from exc
    except sqlite3.Error as exc:
        connection.close()
        raise AppError("cannot open binary database").wrap(exc) from exc

    if not existed:
        os.chmod(path, _FILE_MODE)
    return Store(path, connection)


def init_store(path: str | os.PathLike = DB_FILE) -> Store:
    """Open the database and make sure the binaries table exists."""
    store = open_store(path)
    try:
        with store._write() as connection:
            connection.execute(
                f"CREATE TABLE IF NOT EXISTS {BIN_BUCKET} "
                "(key TEXT PRIMARY KEY, value TEXT NOT NULL)"
            )
    except sqlite3.Error as exc:
        store.close()
        raise AppError("cannot initialise binary database").wrap(exc) from exc
    return store