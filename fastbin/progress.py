"""A reader wrapper that reports download progress on the terminal."""

from __future__ import annotations

import sys
from typing import IO, Any, BinaryIO

from tqdm import tqdm

MAX_WIDTH = 80


class ProgressReader:
    """Wrap a binary stream and show how much of it has been read.

    When ``total`` is not positive the size is unknown and the bar shows
    only a running count.
    """

    def __init__(
        self,
        reader: BinaryIO | Any,
        total: int = -1,
        *,
        output: IO[str] | None = None,
        disable: bool = False,
    ) -> None:
        self.reader = reader
        self.total = total
        self.read_so_far = 0
        self.closed = False
        self._bar = tqdm(
            total=total if total > 0 else None,
            unit="B",
            unit_scale=True,
            unit_divisor=1024,
            ncols=MAX_WIDTH,
            file=output if output is not None else sys.stderr,
            disable=disable,
            leave=True,
        )

    @property
    def is_spinner(self) -> bool:
        """Whether the size is unknown, so no percentage can be shown."""
        return self.total <= 0

    @property
    def percent(self) -> float:
        """Fraction of the expected total read so far, or 0.0 if unknown."""
        if self.is_spinner:
            return 0.0
        return self.read_so_far / self.total

    def read(self, size: int = -1) -> bytes:
        """Read up to ``size`` bytes from the wrapped stream and count them."""
        data = self.reader.read(size)
        if data:
            self.read_so_far += len(data)
            self._bar.update(len(data))
        return data

    def close(self) -> None:
        """Finish the progress display. The wrapped stream is left open."""
        if not self.closed:
            self._bar.close()
            self.closed = True

    def __enter__(self) -> ProgressReader:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()