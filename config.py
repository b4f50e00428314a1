import os
import yaml

from settings_schema import validate_settings

APP_VERSION = "1.0.0"

DEFAULT_DB_PATH = "./workouts.db"
DOCKER_DB_PATH = "/database/workouts.db"


class YamlConfig:
    """Load and save settings to a YAML file."""

    def __init__(self, path: str = "settings.yaml") -> None:
        self.path = path

    def load(self) -> dict:
        if not os.path.exists(self.path):
            return {}
        with open(self.path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
        if not isinstance(data, dict):
            raise ValueError(f"{self.path} must contain a mapping")
        return data

    def save(self, data: dict) -> None:
        with open(self.path, "w", encoding="utf-8") as f:
            yaml.safe_dump(dict(data), f)


def default_db_path() -> str:
    if os.environ.get("DOCKER_ENV") == "true":
        return DOCKER_DB_PATH
    return DEFAULT_DB_PATH


def load_settings(path: str = "settings.yaml") -> dict:
    """Return settings from defaults, ``path`` and ``LOGBOOK_*`` variables.

    Later sources win: the YAML file overrides the defaults and the
    environment overrides the file.
    """
    settings: dict = {
        "db_path": default_db_path(),
        "host": "0.0.0.0",
        "port": 8081,
        "log_level": "INFO",
    }
    settings.update(YamlConfig(path).load())
    env_map = {
        "LOGBOOK_DB_PATH": "db_path",
        "LOGBOOK_HOST": "host",
        "LOGBOOK_PORT": "port",
        "LOGBOOK_LOG_LEVEL": "log_level",
    }
    for env_key, key in env_map.items():
        value = os.environ.get(env_key)
        if value:
            settings[key] = value
    return validate_settings(settings)
