import json

import pytest

from utils import app_config


@pytest.fixture(autouse=True)
def _isolate_config(tmp_path, monkeypatch):
    """Point the config file at a per-test directory."""
    config_dir = tmp_path / ".gestor"
    monkeypatch.setattr(app_config, "CONFIG_DIR", config_dir)
    monkeypatch.setattr(app_config, "CONFIG_FILE", config_dir / "config.json")
    return config_dir


def test_missing_config_is_empty():
    assert app_config.load_config() == {}
    assert app_config.get_db_folder() is None
    assert app_config.get_log_level() is None


def test_corrupt_config_is_empty(_isolate_config):
    _isolate_config.mkdir()
    (_isolate_config / "config.json").write_text("{not json", encoding="utf-8")
    assert app_config.load_config() == {}


def test_db_folder_round_trip(_isolate_config):
    app_config.set_db_folder("/data/gestor")
    assert app_config.get_db_folder() == "/data/gestor"
    assert json.loads((_isolate_config / "config.json").read_text()) == {"db_folder": "/data/gestor"}

    app_config.set_db_folder(None)
    assert app_config.get_db_folder() is None
    assert not (_isolate_config / "config.tmp").exists()


def test_user_id_defaults_to_login_name(monkeypatch):
    monkeypatch.setattr(app_config.getpass, "getuser", lambda: "maria")
    assert app_config.get_user_id() == "maria"

    app_config.set_user_id("joao")
    assert app_config.get_user_id() == "joao"


def test_user_id_is_saved_next_to_db_folder(_isolate_config):
    app_config.set_db_folder("/data/gestor")
    app_config.set_user_id("joao")

    assert json.loads((_isolate_config / "config.json").read_text()) == {
        "db_folder": "/data/gestor", "user_id": "joao",
    }
