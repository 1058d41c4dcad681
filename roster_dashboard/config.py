"""
Configuration settings for the Roster Dashboard
"""

import copy
import json
import os
from typing import Any, Dict, Optional

import dotenv

from roster_dashboard.errors import ConfigError
from simple_logger import LogLevel, Slogger


DEFAULT_CONFIG = {
    "api": {
        "endpoint": "http://localhost:4000/graphql",
        "token": None,
        "timeout": 30,
        "impersonate": "chrome110",
    },
    "ui": {
        "search_debounce_ms": 500,
        "date_format": "%Y-%m-%d %H:%M",
    },
    "logging": {
        "path": "logs/roster.log",
        "level": "INFO",
    },
}

CONFIG_FILE = os.path.expanduser("~/.roster_dashboard_config.json")

ENV_OVERRIDES = {
    "ROSTER_API_URL": ("api", "endpoint"),
    "ROSTER_API_TOKEN": ("api", "token"),
    "ROSTER_LOG_LEVEL": ("logging", "level"),
}


def _merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(base.get(key), dict):
            _merge(base[key], value)
        else:
            base[key] = value
    return base


def load_config(path: Optional[str] = None) -> Dict[str, Any]:
    """
    Load configuration from defaults, the JSON config file, .env and the environment

    Args:
        path: Config file to read instead of ~/.roster_dashboard_config.json

    Raises:
        ConfigError: if the resulting settings are unusable
    """
    config = copy.deepcopy(DEFAULT_CONFIG)
    config_file = path or CONFIG_FILE

    dotenv.load_dotenv()

    if os.path.exists(config_file):
        try:
            with open(config_file, "r", encoding="utf-8") as f:
                file_config = json.load(f)
        except (json.JSONDecodeError, OSError) as e:
            raise ConfigError(f"Error loading config file {config_file}: {e}") from e
        if not isinstance(file_config, dict):
            raise ConfigError(f"Config file {config_file} must contain a JSON object")
        _merge(config, file_config)

    for env_name, (section, key) in ENV_OVERRIDES.items():
        if os.environ.get(env_name):
            config[section][key] = os.environ[env_name]

    _validate(config)
    return config


def save_config(config: Dict[str, Any], path: Optional[str] = None) -> bool:
    """
    Save configuration to file
    """
    try:
        with open(path or CONFIG_FILE, "w", encoding="utf-8") as f:
            json.dump(config, f, indent=2)
        return True
    except OSError as e:
        Slogger.error(f"Error saving config file: {e}")
        return False


def search_debounce_seconds(config: Dict[str, Any]) -> float:
    return config.get("ui", {}).get("search_debounce_ms", 500) / 1000.0


def _validate(config: Dict[str, Any]) -> None:
    debounce = config["ui"].get("search_debounce_ms")
    if not isinstance(debounce, (int, float)) or isinstance(debounce, bool) or debounce < 0:
        raise ConfigError(f"ui.search_debounce_ms must be a non-negative number, got {debounce!r}")

    if not config["api"].get("endpoint"):
        raise ConfigError("api.endpoint is required")

    timeout = config["api"].get("timeout")
    if not isinstance(timeout, (int, float)) or timeout <= 0:
        raise ConfigError(f"api.timeout must be a positive number, got {timeout!r}")

    level = str(config["logging"].get("level", "")).upper()
    if level not in {lvl.value for lvl in LogLevel}:
        raise ConfigError(f"logging.level must be one of DEBUG, INFO, WARNING, ERROR, got {level!r}")
