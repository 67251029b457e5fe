import json
import logging
import os
from dataclasses import dataclass, fields, replace
from json import JSONDecodeError
from typing import Optional

from sentinel.advisor import ADVICE_TIMEOUT, DEFAULT_MODEL
from sentinel.breach_check import HIBP_RANGE_URL, REQUEST_TIMEOUT

CONFIG_PATH = "data/config.json"
API_KEY_ENV_VARS = ("SENTINEL_API_KEY", "GEMINI_API_KEY", "API_KEY")
HISTORY_PATH_ENV_VAR = "SENTINEL_HISTORY_PATH"

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Settings:
    api_key: Optional[str] = None
    advice_model: str = DEFAULT_MODEL
    range_url: str = HIBP_RANGE_URL
    request_timeout: float = float(REQUEST_TIMEOUT)
    advice_timeout: float = float(ADVICE_TIMEOUT)
    history_path: str = "data/history.db"
    history_capacity: int = 10


def _read_config_file(path: str) -> dict:
    if not os.path.exists(path):
        return {}
    try:
        with open(path, "r") as f:
            data = json.load(f)
    except (JSONDecodeError, OSError) as e:
        # empty/corrupt file -> defaults
        logger.warning("Ignoring unreadable config %s: %s", path, e)
        return {}
    if not isinstance(data, dict):
        logger.warning("Ignoring config %s: expected a JSON object", path)
        return {}
    return data


def _coerce(settings: Settings, data: dict) -> Settings:
    """
    Applies known keys from the config file, keeping defaults for values
    of the wrong type.
    """
    defaults = {f.name: getattr(settings, f.name) for f in fields(settings)}
    changes = {}
    for key, value in data.items():
        if key not in defaults:
            logger.warning("Unknown config key %r", key)
            continue
        default = defaults[key]
        if key == "api_key":
            if isinstance(value, str) and value:
                changes[key] = value
        elif isinstance(default, str):
            if isinstance(value, str) and value:
                changes[key] = value
        elif isinstance(value, (int, float)) and not isinstance(value, bool) and value > 0:
            changes[key] = type(default)(value)
        else:
            logger.warning("Invalid value for %s: %r", key, value)
    return replace(settings, **changes)


def load_settings(path: str = CONFIG_PATH) -> Settings:
    """
    Reads data/config.json (if present) and applies environment overrides.
    """
    settings = _coerce(Settings(), _read_config_file(path))

    for var in API_KEY_ENV_VARS:
        if os.environ.get(var):
            settings = replace(settings, api_key=os.environ[var])
            break

    if os.environ.get(HISTORY_PATH_ENV_VAR):
        settings = replace(settings, history_path=os.environ[HISTORY_PATH_ENV_VAR])

    return settings
