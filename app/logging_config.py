"""
Centralized logging configuration.

Sets up:
- Console handler (level from LOG_LEVEL)
- Rotating round log under LOG_DIR (DEBUG level, when LOG_TO_FILE)
- Separate error log under LOG_DIR (ERROR level, when LOG_TO_FILE)

The ``imposter`` package logs at GAME_LOG_LEVEL so phase transitions can
be traced without turning on DEBUG for FastAPI and the Gemini client.
"""

import logging
import logging.config
import os
from types import SimpleNamespace
from typing import Dict

from configs.config import get_config

# Third-party loggers that are chatty at DEBUG
_QUIET_LOGGERS = ("httpx", "httpcore", "google_genai", "urllib3")


def build_logging_config(cfg: SimpleNamespace) -> Dict:
    """Return the dictConfig mapping for ``cfg``."""
    handlers: Dict[str, Dict] = {
        "console": {
            "class": "logging.StreamHandler",
            "level": cfg.LOG_LEVEL,
            "formatter": "console",
        },
    }
    if cfg.LOG_TO_FILE:
        handlers["round_log_handler"] = {
            "class": "logging.handlers.RotatingFileHandler",
            "level": "DEBUG",
            "formatter": "detailed",
            "filename": os.path.join(cfg.LOG_DIR, cfg.LOG_FILE_APP),
            "maxBytes": cfg.LOG_MAX_BYTES,
            "backupCount": cfg.LOG_BACKUP_COUNT,
            "encoding": "utf8",
        }
        handlers["error_log_handler"] = {
            "class": "logging.FileHandler",
            "level": "ERROR",
            "formatter": "detailed",
            "filename": os.path.join(cfg.LOG_DIR, cfg.LOG_FILE_ERRORS),
            "encoding": "utf8",
        }

    loggers: Dict[str, Dict] = {
        name: {"level": "WARNING"} for name in _QUIET_LOGGERS
    }
    loggers["imposter"] = {"level": cfg.GAME_LOG_LEVEL}

    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "console": {
                "format": "%(asctime)s %(levelname)-7s %(name)s: %(message)s",
                "datefmt": "%H:%M:%S",
            },
            "detailed": {
                "format": (
                    "%(asctime)s - %(name)s - %(levelname)s - "
                    "%(funcName)s:%(lineno)d - %(message)s"
                ),
            },
        },
        "handlers": handlers,
        "loggers": loggers,
        "root": {
            "level": "DEBUG",
            "handlers": list(handlers),
        },
    }


def setup_logging() -> None:
    """Configure logging once at application startup."""
    cfg = get_config()
    if cfg.LOG_TO_FILE:
        os.makedirs(cfg.LOG_DIR, exist_ok=True)
    logging.config.dictConfig(build_logging_config(cfg))
    logging.info(
        "Logging configured (console=%s, files=%s)",
        cfg.LOG_LEVEL, cfg.LOG_DIR if cfg.LOG_TO_FILE else "off",
    )
