"""
Development / local environment configuration overrides.

Only values that DIFFER from production need to be declared here.
The base config.py merges these on top of the production defaults.
"""

# FastAPI docs are enabled in development
DOCS_ENABLED = True

# The table UI is usually served by a dev server on another port
CORS_ORIGINS = [
    "http://localhost:3000",
    "http://localhost:5173",
    "http://127.0.0.1:3000",
    "http://127.0.0.1:5173",
]

ALLOWED_HOSTS = [
    "localhost",
    "127.0.0.1",
    "testserver",
]

LOG_LEVEL = "DEBUG"
GAME_LOG_LEVEL = "DEBUG"
