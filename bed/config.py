"""
Configuration — loads settings from .bed.yaml, environment variables,
and built-in defaults (in that priority order: CLI args > env > YAML > defaults).
"""

import os

import yaml


_DEFAULTS = {
    "editor": "",
    "progress": True,
    "confirm": False,
    "log_file": "",
    "encoding": "utf-8",
}

# Config file search locations
_CONFIG_FILENAMES = [".bed.yaml", ".bed.yml"]

# Checked in order; the first non-empty one wins
_EDITOR_ENV_VARS = ("BED_EDITOR", "EDITOR")


def _find_config_file(explicit_path: str | None = None) -> str | None:
    """Find the config file. Checks explicit path, CWD, then user home."""
    if explicit_path:
        if os.path.isfile(explicit_path):
            return explicit_path
        return None

    search_dirs = [os.getcwd(), os.path.expanduser("~")]
    for d in search_dirs:
        for name in _CONFIG_FILENAMES:
            path = os.path.join(d, name)
            if os.path.isfile(path):
                return path
    return None


def _load_yaml(path: str) -> dict:
    """Load YAML file, returns empty dict on failure."""
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
        return data if isinstance(data, dict) else {}
    except (OSError, yaml.YAMLError):
        return {}


class Config:
    """Application configuration.

    Settings are resolved in priority order:
    1. CLI arguments (handled by caller)
    2. Environment variables
    3. .bed.yaml config file
    4. Built-in defaults
    """

    def __init__(self, yaml_data: dict | None = None):
        yd = yaml_data or {}

        def _get(env_key: str, yaml_key: str, default: str) -> str:
            env_val = os.getenv(env_key)
            if env_val is not None:
                return env_val
            yaml_val = yd.get(yaml_key)
            if yaml_val is not None:
                return str(yaml_val)
            return default

        def _get_bool(env_key: str, yaml_key: str, default: bool) -> bool:
            env_val = os.getenv(env_key)
            if env_val is not None:
                return env_val.lower() == "true"
            yaml_val = yd.get(yaml_key)
            if yaml_val is not None:
                return bool(yaml_val)
            return default

        self.EDITOR = ""
        for env_key in _EDITOR_ENV_VARS:
            if os.getenv(env_key):
                self.EDITOR = os.environ[env_key]
                break
        else:
            self.EDITOR = str(yd.get("editor") or _DEFAULTS["editor"])

        self.PROGRESS = _get_bool("BED_PROGRESS", "progress",
                                  _DEFAULTS["progress"])
        self.CONFIRM = _get_bool("BED_CONFIRM", "confirm",
                                 _DEFAULTS["confirm"])
        self.LOG_FILE = _get("BED_LOG_FILE", "log_file", _DEFAULTS["log_file"])
        self.ENCODING = _get("BED_ENCODING", "encoding", _DEFAULTS["encoding"])

    @classmethod
    def load(cls, config_path: str | None = None) -> "Config":
        """Load config from YAML file (if found) + env vars + defaults."""
        path = _find_config_file(config_path)
        yaml_data = _load_yaml(path) if path else {}
        return cls(yaml_data)
