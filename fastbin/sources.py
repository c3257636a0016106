"""Places binaries can be installed from."""

from __future__ import annotations

import abc

import requests

from fastbin.fetch import download_file
from fastbin.file import File


class Source(abc.ABC):
    """Somewhere a binary can be downloaded from."""

    @abc.abstractmethod
    def download(self, url: str) -> File:
        """Fetch ``url`` and return the downloaded file."""


class DirectSource(Source):
    """A plain URL pointing straight at a binary or an archive."""

    def __init__(self, session: requests.Session | None = None) -> None:
        self.session = session

    def download(self, url: str) -> File:
        return download_file(url, self.session)


def new_source(url: str) -> Source:
    """Pick the source able to handle ``url``."""
    return DirectSource()