"""
Centralized configuration loader.

Reads the ENVIRONMENT env-var and merges the correct environment module
(config_prod or config_local) into a single settings namespace.

Usage:
    from configs.config import get_config
    cfg = get_config()
    print(cfg.GEMINI_MODEL_NAME)
"""

import os
import importlib
import logging
from types import SimpleNamespace

logger = logging.getLogger(__name__)

# ── Environment detection ────────────────────────────────────────────────
ENVIRONMENT = os.getenv("ENVIRONMENT", "production")

# ── Shared constants (environment-independent) ───────────────────────────

CORS_METHODS = ["GET", "POST", "PUT", "DELETE", "OPTIONS"]
CORS_HEADERS = [
    "Accept",
    "Accept-Language",
    "Content-Type",
    "Origin",
    "X-Requested-With",
    "X-Request-ID",
]

# Gemini / round content generation
GEMINI_API_KEY = os.getenv("GEMINI_API_KEY", "")
GEMINI_MODEL_NAME = os.getenv("GEMINI_MODEL_NAME", "gemini-3-flash-preview")
GEMINI_TEMPERATURE = 1.0

# Logging
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
GAME_LOG_LEVEL = os.getenv("GAME_LOG_LEVEL", "INFO")
LOG_TO_FILE = os.getenv("LOG_TO_FILE", "1") not in ("0", "false", "no")
LOG_DIR = os.getenv("LOG_DIR", "logs")
LOG_FILE_APP = "rounds.log"
LOG_FILE_ERRORS = "errors.log"
LOG_MAX_BYTES = 5 * 1024 * 1024  # 5 MB
LOG_BACKUP_COUNT = 5

# Game rules
MIN_PLAYERS = 3
MAX_PLAYERS = 20
MAX_PLAYER_NAME_LENGTH = 30
RECENT_WORDS_WINDOW = 50
MAX_HINT_WORDS = 2
MIN_HINT_DIFFICULTY = 1
MAX_HINT_DIFFICULTY = 10

# Rate limits for the session routes
RATE_LIMIT_READ = "240/minute"
RATE_LIMIT_WRITE = "60/minute"
RATE_LIMIT_GENERATE = "10/minute"


# ── Config loader ────────────────────────────────────────────────────────

_config_cache = None


def get_config() -> SimpleNamespace:
    """
    Return a merged configuration namespace.

    Environment-specific values from config_local or config_prod
    override the shared defaults defined above.
    """
    global _config_cache
    if _config_cache is not None:
        return _config_cache

    # Start with all module-level constants
    base = {
        key: value
        for key, value in globals().items()
        if key.isupper() and not key.startswith("_")
    }

    # Overlay environment-specific settings
    env_module_name = (
        "configs.config_local" if ENVIRONMENT == "development"
        else "configs.config_prod"
    )
    try:
        env_module = importlib.import_module(env_module_name)
        for key in dir(env_module):
            if key.isupper():
                base[key] = getattr(env_module, key)
        logger.info("Loaded configuration from %s", env_module_name)
    except ImportError:
        logger.warning(
            "Environment config '%s' not found; using shared defaults.",
            env_module_name,
        )

    _config_cache = SimpleNamespace(**base)
    return _config_cache
