import json
import logging
import os
from logging.handlers import RotatingFileHandler
from typing import Optional

from charbuf.config import Config, get_config

# Root of the hierarchy the library logs through (charbuf.buffer, charbuf.allocator)
LIBRARY_LOGGER = "charbuf"

# Context keys a rejected buffer operation attaches to its record
BUFFER_FIELDS = ("operation", "capacity", "length", "start", "end", "index")

_RECORD_ATTRS = set(vars(logging.LogRecord("", 0, "", 0, "", (), None))) | {"message", "asctime"}


def _buffer_context(record: logging.LogRecord) -> dict:
    return {key: value for key, value in vars(record).items() if key not in _RECORD_ATTRS}


class JsonFormatter(logging.Formatter):
    """One JSON object per record; buffer fields always present, other context nested."""

    def format(self, record: logging.LogRecord) -> str:
        context = _buffer_context(record)
        payload = {
            "time": self.formatTime(record, datefmt="%Y-%m-%dT%H:%M:%S"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for field in BUFFER_FIELDS:
            payload[field] = context.pop(field, None)
        if context:
            payload["context"] = context
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=True, default=str)


class TextFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        msg = super().format(record)
        context = _buffer_context(record)
        if context:
            # Buffer fields first, in a fixed order, then anything else
            ordered = [f for f in BUFFER_FIELDS if f in context]
            ordered += [k for k in context if k not in BUFFER_FIELDS]
            msg = f"{msg} | " + " ".join(f"{key}={context[key]}" for key in ordered)
        return msg


def _owned(handler: logging.Handler) -> bool:
    return getattr(handler, "_charbuf_owned", False)


def setup_logging(config: Optional[Config] = None) -> logging.Logger:
    """Attach charbuf's handlers to the library logger hierarchy.

    Level, format and optional log directory come from ``Config``
    (CHARBUF_LOG_LEVEL, CHARBUF_LOG_FORMAT, CHARBUF_LOG_DIR). Calling it
    again replaces the handlers it installed before and leaves handlers
    added by anyone else alone.
    """
    config = config or get_config()
    logger = logging.getLogger(LIBRARY_LOGGER)
    for handler in [h for h in logger.handlers if _owned(h)]:
        logger.removeHandler(handler)
        handler.close()

    level = getattr(logging, config.log_level)
    if config.log_format == "json":
        formatter = JsonFormatter()
    else:
        formatter = TextFormatter("%(asctime)s [%(levelname)s] %(name)s: %(message)s")

    handlers = [logging.StreamHandler()]
    if config.log_dir:
        os.makedirs(config.log_dir, exist_ok=True)
        path = os.path.join(config.log_dir, f"{LIBRARY_LOGGER}.log")
        handlers.append(RotatingFileHandler(path, maxBytes=5 * 1024 * 1024, backupCount=3))

    for handler in handlers:
        handler._charbuf_owned = True
        handler.setFormatter(formatter)
        handler.setLevel(level)
        logger.addHandler(handler)

    logger.setLevel(level)
    return logger
