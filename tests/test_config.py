import tempfile

from fastbin import config


def test_temp_dir_is_created_under_system_temp(tmp_path, monkeypatch):
    monkeypatch.setattr(tempfile, "tempdir", str(tmp_path))
    path = config.temp_dir()
    assert path == tmp_path / "fastbin"
    assert path.is_dir()


def test_temp_dir_is_idempotent(tmp_path, monkeypatch):
    monkeypatch.setattr(tempfile, "tempdir", str(tmp_path))
    first = config.temp_dir()
    (first / "marker").write_text("x")
    second = config.temp_dir()
    assert first == second
    assert (second / "marker").read_text() == "x"


def test_temp_dir_name_is_app_name(tmp_path, monkeypatch):
    monkeypatch.setattr(tempfile, "tempdir", str(tmp_path))
    assert config.temp_dir().name == config.APP_NAME