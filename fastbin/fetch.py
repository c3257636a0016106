"""Downloading a file from a URL into the scratch directory."""

from __future__ import annotations

from pathlib import Path

import requests

from fastbin.config import temp_dir
from fastbin.errors import AppError
from fastbin.file import File
from fastbin.progress import ProgressReader

_CHUNK_SIZE = 64 * 1024


class ResponseNotOKError(AppError):
    """Raised when the server answers with an error status."""

    def __init__(self, message: str = "response is not OK", **kwargs) -> None:
        super().__init__(message, **kwargs)


def _base_name(url: str) -> str:
    """Return the last slash-separated element of ``url``."""
    if not url:
        return "."
    stripped = url.rstrip("/")
    if not stripped:
        return "/"
    return stripped.rsplit("/", 1)[-1]


def _content_length(headers) -> int:
    try:
        return int(headers.get("Content-Length", ""))
    except (TypeError, ValueError):
        return -1


def download_file(url: str, session: requests.Session | None = None) -> File:
    """Download ``url`` into the scratch directory and classify the result."""
    base_name = _base_name(url)
    target = Path(temp_dir()) / base_name

    owns_session = session is None
    http = session if session is not None else requests.Session()
    try:
        with open(target, "wb") as out:
            with http.get(url, stream=True) as response:
                size = _content_length(response.headers)
                if response.status_code > 399:
                    raise ResponseNotOKError()

                raw = response.raw
                raw.decode_content = True
                with ProgressReader(raw, size) as reader:
                    while chunk := reader.read(_CHUNK_SIZE):
                        out.write(chunk)
    finally:
        if owns_session:
            http.close()

    print("✅ Download completed")

    downloaded = File(name=base_name, location=str(target))
    downloaded.set_type()
    return downloaded