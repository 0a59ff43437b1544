"""
Imposter session API routes.

One table, one in-memory session (kept on ``app.state.game_session``).

Endpoints:
    GET    /api/categories                         — list categories
    GET    /api/session                            — observable state
    PUT    /api/session/settings                   — edit settings (setup)
    POST   /api/session/start                      — start a round
    POST   /api/session/players/{player_id}/viewed — player saw their card
    GET    /api/session/players/{player_id}/card   — a player's role card
    GET    /api/session/timer                      — discussion seconds
    POST   /api/session/reveal                     — end discussion
    POST   /api/session/play-again                 — same roster, new round
    POST   /api/session/change-settings            — back to setup
    DELETE /api/session/error                      — dismiss error message

All handlers are ``async def`` so transitions run on the event loop
thread one at a time.
"""

import logging
from typing import Dict, List, Optional

from fastapi import APIRouter, Depends, HTTPException, Request
from pydantic import BaseModel, Field, field_validator

from commons import limiter
from configs.config import get_config
from imposter.game.constants import (
    ERROR_INVALID_TRANSITION,
    ERROR_NOT_FOUND,
    Category,
)
from imposter.game.models import Settings
from imposter.game.session import GameSession
from security import safe_error_response, validate_player_id

logger = logging.getLogger(__name__)

cfg = get_config()

router = APIRouter(prefix="/api", tags=["session"])

_STATUS_BY_ERROR = {
    ERROR_NOT_FOUND: 404,
    ERROR_INVALID_TRANSITION: 409,
}


# ── Pydantic request bodies ─────────────────────────────────────────────


class StartGameRequest(BaseModel):
    player_names: List[str] = Field(
        ..., min_length=1, max_length=cfg.MAX_PLAYERS,
        description="Names in seating order; blank entries are ignored",
    )
    settings: Optional[Settings] = None

    @field_validator("player_names")
    @classmethod
    def _name_lengths(cls, names: List[str]) -> List[str]:
        for name in names:
            if len(name.strip()) > cfg.MAX_PLAYER_NAME_LENGTH:
                raise ValueError(
                    f"Player names are limited to "
                    f"{cfg.MAX_PLAYER_NAME_LENGTH} characters"
                )
        return names


# ── Helpers ──────────────────────────────────────────────────────────────


async def get_game_session(request: Request) -> GameSession:
    return request.app.state.game_session


def _raise_for_failure(response: Dict, default_message: str) -> None:
    raise HTTPException(
        status_code=_STATUS_BY_ERROR.get(response.get("error"), 400),
        detail=response.get("message", default_message),
    )


# ── Endpoints ────────────────────────────────────────────────────────────


@router.get("/categories")
@limiter.limit(cfg.RATE_LIMIT_READ)
async def list_categories(request: Request) -> dict:
    """List every category a round can be drawn from."""
    return {"categories": [category.value for category in Category]}


@router.get("/session")
@limiter.limit(cfg.RATE_LIMIT_READ)
async def get_session(
    request: Request, session: GameSession = Depends(get_game_session)
) -> dict:
    """Return the observable session state."""
    try:
        return session.snapshot()
    except Exception as exc:
        safe_error_response(exc, context="get_session")


@router.put("/session/settings")
@limiter.limit(cfg.RATE_LIMIT_WRITE)
async def update_settings(
    request: Request,
    body: Settings,
    session: GameSession = Depends(get_game_session),
) -> dict:
    """Replace the table settings while in setup."""
    try:
        success, response = session.update_settings(body)
        if success:
            return response
        _raise_for_failure(response, "Failed to update settings")
    except HTTPException:
        raise
    except Exception as exc:
        safe_error_response(exc, context="update_settings")


@router.post("/session/start")
@limiter.limit(cfg.RATE_LIMIT_GENERATE)
async def start_game(
    request: Request,
    body: StartGameRequest,
    session: GameSession = Depends(get_game_session),
) -> dict:
    """Generate a round and deal roles."""
    try:
        success, response = await session.start_game(
            body.player_names, body.settings
        )
        if success:
            logger.info(
                "Game started with %d players", response["player_count"]
            )
            return response
        _raise_for_failure(response, "Failed to start game")
    except HTTPException:
        raise
    except Exception as exc:
        safe_error_response(exc, context="start_game")


@router.post("/session/players/{player_id}/viewed")
@limiter.limit(cfg.RATE_LIMIT_WRITE)
async def mark_player_viewed(
    request: Request,
    player_id: str,
    session: GameSession = Depends(get_game_session),
) -> dict:
    """Record that a player has seen their role card."""
    validate_player_id(player_id)
    try:
        success, response = session.mark_player_viewed(player_id)
        if success:
            return response
        _raise_for_failure(response, "Failed to mark player as viewed")
    except HTTPException:
        raise
    except Exception as exc:
        safe_error_response(exc, context="mark_player_viewed")


@router.get("/session/players/{player_id}/card")
@limiter.limit(cfg.RATE_LIMIT_READ)
async def get_role_card(
    request: Request,
    player_id: str,
    session: GameSession = Depends(get_game_session),
) -> dict:
    """Return what a single player is allowed to see."""
    validate_player_id(player_id)
    try:
        success, response = session.role_card(player_id)
        if success:
            return response
        _raise_for_failure(response, "Role card unavailable")
    except HTTPException:
        raise
    except Exception as exc:
        safe_error_response(exc, context="get_role_card")


@router.get("/session/timer")
@limiter.limit(cfg.RATE_LIMIT_READ)
async def get_timer(
    request: Request, session: GameSession = Depends(get_game_session)
) -> dict:
    """Seconds elapsed in the current discussion."""
    return {
        "phase": session.phase.value,
        "elapsed_seconds": session.elapsed_discussion_seconds(),
    }


@router.post("/session/reveal")
@limiter.limit(cfg.RATE_LIMIT_WRITE)
async def reveal(
    request: Request, session: GameSession = Depends(get_game_session)
) -> dict:
    """End the discussion and reveal the imposters."""
    try:
        success, response = session.reveal()
        if success:
            return response
        _raise_for_failure(response, "Failed to reveal")
    except HTTPException:
        raise
    except Exception as exc:
        safe_error_response(exc, context="reveal")


@router.post("/session/play-again")
@limiter.limit(cfg.RATE_LIMIT_GENERATE)
async def play_again(
    request: Request, session: GameSession = Depends(get_game_session)
) -> dict:
    """Start a new round with the same players and settings."""
    try:
        success, response = await session.play_again()
        if success:
            return response
        _raise_for_failure(response, "Failed to start a new round")
    except HTTPException:
        raise
    except Exception as exc:
        safe_error_response(exc, context="play_again")


@router.post("/session/change-settings")
@limiter.limit(cfg.RATE_LIMIT_WRITE)
async def change_settings(
    request: Request, session: GameSession = Depends(get_game_session)
) -> dict:
    """Leave the reveal screen for setup."""
    try:
        success, response = session.change_settings()
        if success:
            return response
        _raise_for_failure(response, "Failed to return to setup")
    except HTTPException:
        raise
    except Exception as exc:
        safe_error_response(exc, context="change_settings")


@router.delete("/session/error")
@limiter.limit(cfg.RATE_LIMIT_WRITE)
async def clear_error(
    request: Request, session: GameSession = Depends(get_game_session)
) -> dict:
    """Dismiss the current error message."""
    _, response = session.clear_error()
    return response
