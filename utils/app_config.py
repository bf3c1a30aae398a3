"""Pre-DB bootstrap configuration. Zero imports from the rest of the app.

Stores values that must be known before opening the DB (db_folder), the
local user identity that scopes every query (user_id) and the log level.
Config lives in ~/.gestor/config.json to avoid a bootstrapping problem.
"""
import getpass
import json
import os
from pathlib import Path

CONFIG_DIR = Path.home() / ".gestor"
CONFIG_FILE = CONFIG_DIR / "config.json"


def load_config() -> dict:
    """Returns {} on missing or corrupt file; never raises."""
    try:
        with open(CONFIG_FILE, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError):
        return {}
    return data if isinstance(data, dict) else {}


def save_config(config: dict) -> None:
    """Creates ~/.gestor/ if needed; atomic write via .tmp + os.replace()."""
    CONFIG_DIR.mkdir(parents=True, exist_ok=True)
    tmp = CONFIG_FILE.with_suffix(".tmp")
    try:
        with open(tmp, "w", encoding="utf-8") as f:
            json.dump(config, f, indent=2)
        os.replace(tmp, CONFIG_FILE)
    except OSError:
        tmp.unlink(missing_ok=True)
        raise


def get_db_folder() -> str | None:
    return load_config().get("db_folder")


def set_db_folder(path: str | None) -> None:
    config = load_config()
    if path is None:
        config.pop("db_folder", None)
    else:
        config["db_folder"] = path
    save_config(config)


def get_user_id() -> str:
    """Configured user id, or the OS login name when none is set."""
    user_id = load_config().get("user_id")
    if user_id:
        return str(user_id)
    return getpass.getuser()


def set_user_id(user_id: str) -> None:
    config = load_config()
    config["user_id"] = user_id
    save_config(config)


def get_log_level() -> str | None:
    return load_config().get("log_level")
