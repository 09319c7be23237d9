# FILE: charbuf/config.py
# ------------------------------------------------------------------------------
import os
from typing import Optional

from charbuf.errors.fatal import ConfigurationError

_TRUE_VALUES = ("1", "true", "yes", "on")
_FALSE_VALUES = ("0", "false", "no", "off")
_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class Config:
    def __init__(self):
        self.allocation_limit = self._get_optional_int("CHARBUF_ALLOCATION_LIMIT")
        self.wipe_on_exit = self._get_bool("CHARBUF_WIPE_ON_EXIT", True)
        self.log_level = os.getenv("CHARBUF_LOG_LEVEL", "WARNING").strip().upper()
        self.log_format = os.getenv("CHARBUF_LOG_FORMAT", "text").strip().lower()
        self.log_dir = os.getenv("CHARBUF_LOG_DIR") or None
        self._validate()

    def _get_optional_int(self, key: str) -> Optional[int]:
        val = os.getenv(key)
        if val is None or val.strip() == "":
            return None
        try:
            return int(val)
        except ValueError:
            raise ConfigurationError(f"Config {key} must be an integer", context={"key": key, "value": val})

    def _get_bool(self, key: str, default: bool) -> bool:
        val = os.getenv(key)
        if val is None:
            return default
        normalized = val.strip().lower()
        if normalized in _TRUE_VALUES:
            return True
        if normalized in _FALSE_VALUES:
            return False
        raise ConfigurationError(f"Config {key} must be a boolean", context={"key": key, "value": val})

    def _validate(self):
        if self.allocation_limit is not None and self.allocation_limit <= 0:
            raise ConfigurationError(
                "CHARBUF_ALLOCATION_LIMIT must be positive",
                context={"value": self.allocation_limit},
            )
        if self.log_level not in _LOG_LEVELS:
            raise ConfigurationError("Unknown CHARBUF_LOG_LEVEL", context={"value": self.log_level})
        if self.log_format not in ("text", "json"):
            raise ConfigurationError("CHARBUF_LOG_FORMAT must be text or json", context={"value": self.log_format})


_config_instance: Optional[Config] = None


def get_config() -> Config:
    """Return the process-wide Config, building it from the environment on first use."""
    global _config_instance
    if _config_instance is None:
        _config_instance = Config()
    return _config_instance


def reload_config() -> Config:
    global _config_instance
    _config_instance = Config()
    return _config_instance
