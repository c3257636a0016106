import tempfile

import pytest
import requests
import responses

from fastbin.fetch import ResponseNotOKError
from fastbin.sources import DirectSource, Source, new_source


@pytest.fixture(autouse=True)
def scratch(tmp_path, monkeypatch):
    monkeypatch.setattr(tempfile, "tempdir", str(tmp_path))
    return tmp_path


@pytest.fixture
def mocked():
    with responses.RequestsMock() as rsps:
        yield rsps


def test_source_is_abstract():
    with pytest.raises(TypeError):
        Source()


def test_new_source_downloads_directly(scratch, mocked):
    url = "http://example.com/bin/runner"
    mocked.add(responses.GET, url, body=b"runner-bytes")

    source = new_source(url)
    result = source.download(url)

    assert isinstance(source, DirectSource)
    assert result.name == "runner"
    assert result.is_binary()
    with open(result.location, "rb") as handle:
        assert handle.read() == b"runner-bytes"


def test_direct_source_uses_given_session(mocked):
    url = "http://example.com/bin/helper"
    mocked.add(responses.GET, url, body=b"helper")
    with requests.Session() as session:
        session.headers["X-Test"] = "yes"
        result = DirectSource(session).download(url)
    assert mocked.calls[0].request.headers["X-Test"] == "yes"
    assert result.name == "helper"


def test_direct_source_error_status(mocked):
    url = "http://example.com/bin/gone"
    mocked.add(responses.GET, url, status=500)
    with pytest.raises(ResponseNotOKError) as info:
        DirectSource().download(url)
    assert str(info.value) == "response is not OK"