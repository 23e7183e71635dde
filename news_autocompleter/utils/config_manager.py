# config_manager.py - JSON config manager with .env/environment overrides

import json
import os
from pathlib import Path

from dotenv import load_dotenv

from news_autocompleter.utils.logger_utils import LEVELS, log

PACKAGE_DIR = Path(__file__).resolve().parents[1]
DEFAULT_WORD_LIST = str(PACKAGE_DIR / "data" / "words.txt")

# env var -> config key
ENV_OVERRIDES = {
    "WORD_LIST_PATH": "word_list",
    "MONGO_URI": "mongo_uri",
    "TITLE_COLLECTION": "title_collection",
    "TITLE_FIELD": "title_field",
    "TITLE_TIMEOUT_S": "title_timeout_s",
    "HOST": "host",
    "PORT": "port",
    "CORS_ORIGINS": "cors_origins",
    "LOG_LEVEL": "log_level",
}


def _defaults():
    return {
        "word_list": DEFAULT_WORD_LIST,
        "mongo_uri": "mongodb://localhost:27017/newsapp",
        "title_collection": "news",
        "title_field": "title",
        "dict_limit": 10,
        "title_limit": 5,
        "max_suggestions": 10,
        "title_timeout_s": 1.0,
        "host": "0.0.0.0",
        "port": 5000,
        "cors_origins": ["http://localhost:3000", "http://localhost:5173"],
        "cors_origin_regex": r"https://.*\.vercel\.app",
        "log_level": "INFO",
    }


def check(key, val):
    """Reject values the rest of the service cannot use."""
    if key == "log_level" and str(val).upper() not in LEVELS:
        raise ValueError(f"unknown log level: {val}")
    return val


def coerce(default, val):
    """Convert `val` (usually a string) to the type of `default`."""
    if not isinstance(val, str):
        return val
    if isinstance(default, bool):
        return val.strip().lower() in ("1", "true", "yes", "on")
    if isinstance(default, list):
        return [v.strip() for v in val.split(",") if v.strip()]
    return type(default)(val)


class Config:
    """
    Settings for the suggestion service.
    Resolution order: built-in defaults, then the JSON file (if any), then
    environment variables (a local .env file is loaded first).
    """

    def __init__(self, path=None, use_env=True):
        self.path = path
        self.data = _defaults()
        self._load()
        if use_env:
            load_dotenv()
            self._apply_env()

    def _load(self):
        if not self.path:
            return
        if os.path.exists(self.path):
            try:
                with open(self.path, "r", encoding="utf8") as f:
                    loaded = json.load(f)
            except (OSError, ValueError) as e:
                log.warning(f"[Config] could not read {self.path}: {e}; using defaults")
                return
            for k, v in loaded.items():
                if k not in self.data:
                    log.warning(f"[Config] ignoring unknown option '{k}'")
                    continue
                try:
                    self.data[k] = check(k, v)
                except ValueError as e:
                    log.warning(f"[Config] {e}; keeping {self.data[k]!r}")
        else:
            self.save()

    def _apply_env(self):
        for env_name, key in ENV_OVERRIDES.items():
            raw = os.getenv(env_name)
            if raw is None or raw == "":
                continue
            try:
                self.data[key] = check(key, coerce(self.data[key], raw))
            except ValueError:
                log.warning(f"[Config] bad value for {env_name}: {raw!r}")

    def save(self):
        with open(self.path, "w", encoding="utf8") as f:
            json.dump(self.data, f, indent=2)

    def get(self, key, default=None):
        return self.data.get(key, default)

    def __getitem__(self, key):
        return self.data[key]

    def items(self):
        return self.data.items()

    def set(self, key, val):
        if key not in self.data:
            raise KeyError(f"No such option: {key}")
        self.data[key] = check(key, coerce(self.data[key], val))
        if self.path:
            self.save()
