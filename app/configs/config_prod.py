"""
Production environment configuration.

These are the baseline defaults. Local overrides live in config_local.py.
"""

# FastAPI docs are disabled in production
DOCS_ENABLED = False

# One device runs both the UI and this API
CORS_ORIGINS = [
    "http://localhost:8000",
    "http://127.0.0.1:8000",
]

ALLOWED_HOSTS = [
    "localhost",
    "127.0.0.1",
]
