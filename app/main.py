import logging
import random
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.trustedhost import TrustedHostMiddleware
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from commons import limiter
from configs.config import get_config
from imposter.game.content_client import RoundContentClient
from imposter.game.roles import RoleAssigner
from imposter.game.session import GameSession
from imposter.routes.game_routes import router as game_router
from logging_config import setup_logging
from security import RequestIdMiddleware, SecurityHeadersMiddleware

# ── Logging ──────────────────────────────────────────────────────────────────
setup_logging()
logger = logging.getLogger(__name__)

cfg = get_config()


def build_game_session() -> GameSession:
    """One session per process, sharing one random source."""
    rng = random.Random()
    return GameSession(
        content_client=RoundContentClient(rng=rng),
        role_assigner=RoleAssigner(rng=rng),
    )


# ── App Factory ──────────────────────────────────────────────────────────────
def create_app(game_session: Optional[GameSession] = None) -> FastAPI:
    docs_enabled = getattr(cfg, "DOCS_ENABLED", False)
    app = FastAPI(
        title="Imposter Party API",
        docs_url="/docs" if docs_enabled else None,
        redoc_url="/redoc" if docs_enabled else None,
        openapi_url="/openapi.json" if docs_enabled else None,
    )
    app.state.limiter = limiter
    app.state.game_session = game_session or build_game_session()
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

    # ── Middleware Stack (order matters – outermost first) ───────────────────

    # 1. Request-ID tracking
    app.add_middleware(RequestIdMiddleware)

    # 2. Security response headers
    app.add_middleware(SecurityHeadersMiddleware)

    # 3. Trusted hosts
    app.add_middleware(TrustedHostMiddleware, allowed_hosts=cfg.ALLOWED_HOSTS)

    # 4. CORS – explicit methods & headers instead of wildcards
    app.add_middleware(
        CORSMiddleware,
        allow_origins=cfg.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=cfg.CORS_METHODS,
        allow_headers=cfg.CORS_HEADERS,
    )

    app.include_router(game_router)
    return app


app = create_app()


# ═══════════════════════════════════════════════════════════════════════════
#  ENTRY POINT
# ═══════════════════════════════════════════════════════════════════════════

if __name__ == "__main__":
    import uvicorn
    import argparse

    parser = argparse.ArgumentParser(description="Run the Imposter party API")
    parser.add_argument("--host", default="127.0.0.1", help="Host to bind to (default: 127.0.0.1)")
    parser.add_argument("--port", type=int, default=8000, help="Port to bind to (default: 8000)")
    parser.add_argument("--reload", action="store_true", help="Enable auto-reload on code changes")

    args = parser.parse_args()

    if not cfg.GEMINI_API_KEY:
        logger.warning("GEMINI_API_KEY is not set; every round will use fallback content")

    logger.info("Starting HTTP server on %s:%s", args.host, args.port)
    logger.info("  Local: http://localhost:%s", args.port)

    uvicorn.run(
        "main:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
        log_level="info",
    )
