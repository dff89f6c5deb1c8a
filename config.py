import json
import os
from typing import Any, Dict

from constants import PLUGIN_ID, PLUGIN_TYPE
from utils.logger import log_warning

CONFIG_PATH = "config.json"

# Default configuration values
DEFAULT_CONFIG = {
    "api_endpoint": "https://api.software.com",
    "session_file": "data/session.json",

    "plugin_id": PLUGIN_ID,
    "plugin_type": PLUGIN_TYPE,

    "request_timeout": 15,
    # Delay before playlist and recommendation views reload after a disconnect
    "refresh_delay_seconds": 1.0,
    "open_browser": True,

    "log_level": "INFO",
}

# Validation rules for config fields
CONFIG_SCHEMA = {
    "api_endpoint": {"type": str, "required": True},
    "session_file": {"type": str, "required": True},

    "plugin_id": {"type": int, "required": False, "min": 0},
    "plugin_type": {"type": str, "required": False},

    "request_timeout": {"type": (int, float), "required": False, "min": 1, "max": 120},
    "refresh_delay_seconds": {"type": (int, float), "required": False, "min": 0, "max": 30},
    "open_browser": {"type": bool, "required": False},

    "log_level": {"type": str, "required": False, "choices": ["DEBUG", "INFO", "WARNING", "ERROR"]},
}


def load_config(path: str = CONFIG_PATH) -> Dict[str, Any]:
    """Load configuration from file, applying defaults for missing fields.

    A missing file is not an error: the defaults are returned as-is.
    """
    config: Dict[str, Any] = {}

    if os.path.exists(path):
        with open(path, "r", encoding="utf-8") as f:
            config = json.load(f)
    else:
        log_warning(f"Config file {path} not found, using defaults.")

    # Apply defaults for missing fields
    for key, value in DEFAULT_CONFIG.items():
        if key not in config:
            config[key] = value

    return config


def validate_config(config: Dict[str, Any]) -> tuple[bool, list[str]]:
    """
    Validate configuration against schema.
    Returns (is_valid, list_of_errors).
    """
    errors = []

    for key, rules in CONFIG_SCHEMA.items():
        # Check required fields
        if rules.get("required", False) and key not in config:
            errors.append(f"Missing required field: {key}")
            continue

        if key not in config:
            continue

        value = config[key]

        # Type check (bool is an int subclass, so reject it for numeric fields explicitly)
        expected_type = rules.get("type")
        wrong_bool = isinstance(value, bool) and expected_type is not bool
        if expected_type and (wrong_bool or not isinstance(value, expected_type)):
            type_names = expected_type.__name__ if not isinstance(expected_type, tuple) else "/".join(t.__name__ for t in expected_type)
            errors.append(f"Field '{key}' must be {type_names}, got {type(value).__name__}")
            continue

        # Choices check
        if "choices" in rules and value not in rules["choices"]:
            errors.append(f"Field '{key}' must be one of {rules['choices']}, got '{value}'")

        # Range check for numeric values
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            if "min" in rules and value < rules["min"]:
                errors.append(f"Field '{key}' must be >= {rules['min']}, got {value}")
            if "max" in rules and value > rules["max"]:
                errors.append(f"Field '{key}' must be <= {rules['max']}, got {value}")

    return len(errors) == 0, errors
