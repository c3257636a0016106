"""Application error type carrying a message, an optional cause and context."""

from __future__ import annotations

from typing import Any


class AppError(Exception):
    """An error with a human readable message and an optional underlying cause."""

    def __init__(
        self,
        message: str = "",
        cause: BaseException | None = None,
        context: Any = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.cause = cause
        self.context = context
        if cause is not None:
            self.__cause__ = cause

    def __str__(self) -> str:
        if self.cause is None:
            return self.message
        return f"{self.message}: {self.cause}"

    def wrap(self, cause: BaseException | None) -> AppError:
        """Attach the underlying error and return self."""
        self.cause = cause
        self.__cause__ = cause
        return self

    def fmt(self, *args: Any) -> AppError:
        """Interpolate ``args`` into the message using printf-style formatting."""
        if args:
            self.message = self.message % args
            self.args = (self.message,)
        return self

    def with_context(self, context: Any) -> AppError:
        """Attach arbitrary context and return self."""
        self.context = context
        return self