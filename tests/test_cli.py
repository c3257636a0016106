import tempfile

import pytest
import responses

from fastbin.cli import build_parser, main
from fastbin.store import init_store

PAYLOAD = b"\x7fELF fake program"


@pytest.fixture
def workdir(tmp_path, monkeypatch):
    scratch = tmp_path / "tmp"
    scratch.mkdir()
    bins = tmp_path / "bin"
    bins.mkdir()
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr(tempfile, "tempdir", str(scratch))
    monkeypatch.setenv("XDG_BIN_HOME", str(bins))
    return tmp_path


def test_parser_install_alias():
    args = build_parser().parse_args(["i", "https://example.com/tool"])
    assert args.command == "install"
    assert args.url == "https://example.com/tool"


def test_parser_without_command():
    args = build_parser().parse_args([])
    assert args.command is None


def test_main_without_command_creates_database(workdir):
    assert main([]) == 0
    assert (workdir / "fastbin.db").exists()


def test_main_version(workdir, capsys):
    assert main(["--version"]) == 0
    assert "v0.0.1" in capsys.readouterr().out


def test_main_install_missing_url_is_usage_error(workdir):
    assert main(["install"]) == 2


def test_main_install(workdir):
    url = "https://example.com/downloads/tool"
    with responses.RequestsMock() as mock:
        mock.add(responses.GET, url, body=PAYLOAD)
        assert main(["install", url]) == 0
    assert (workdir / "bin" / "tool").read_bytes() == PAYLOAD


def test_main_install_failure_reports(workdir, capsys):
    url = "https://example.com/downloads/tool"
    with responses.RequestsMock() as mock:
        mock.add(responses.GET, url, status=500)
        assert main(["install", url]) == 1
    assert "response is not OK" in capsys.readouterr().err


def test_main_locked_database(workdir, capsys):
    with init_store(workdir / "fastbin.db"):
        assert main([]) == 1
    assert "Cannot acquire lock on binary database" in capsys.readouterr().err