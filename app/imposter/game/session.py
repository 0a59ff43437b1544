"""
Game session for the Imposter party game.

Owns the phase, the roster, the round content and the discussion timing
for one table, and coordinates content generation and role assignment.

Every transition returns ``(success, response)``. Failures carry a
one-line ``message`` and an ``error`` kind; nothing raises out of the
session. ``start_game`` switches to LOADING before its only await, so
while a round is being generated every other transition is refused.
"""

import logging
import math
import time
from typing import Callable, Dict, List, Optional, Sequence, Tuple

from configs.config import get_config
from imposter.game.constants import (
    ERROR_INVALID_CONFIGURATION,
    ERROR_INVALID_TRANSITION,
    ERROR_NOT_FOUND,
    ERROR_START_FAILED,
    GamePhase,
)
from imposter.game.content_client import RoundContentClient
from imposter.game.errors import InvalidConfigurationError
from imposter.game.history import RoundHistory
from imposter.game.models import Player, RoundContent, SessionStats, Settings
from imposter.game.roles import RoleAssigner

logger = logging.getLogger(__name__)

cfg = get_config()

Response = Tuple[bool, Dict]


class GameSession:
    """
    State machine for one table.

    SETUP → LOADING → DISTRIBUTION → DISCUSSION → REVEAL, then back to
    LOADING (play again) or SETUP (change settings). A failed start lands
    in SETUP with ``error`` set.
    """

    def __init__(
        self,
        content_client: RoundContentClient,
        role_assigner: Optional[RoleAssigner] = None,
        history: Optional[RoundHistory] = None,
        settings: Optional[Settings] = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._content_client = content_client
        self._role_assigner = role_assigner or RoleAssigner()
        self._history = history if history is not None else RoundHistory()
        self._clock = clock

        self._phase = GamePhase.SETUP
        self._settings = settings or Settings()
        self._players: List[Player] = []
        self._round: Optional[RoundContent] = None
        self._stats = SessionStats()
        self._discussion_start_time: Optional[float] = None
        self._error: Optional[str] = None

    # ── Read-only state ──────────────────────────────────────────────────

    @property
    def phase(self) -> GamePhase:
        return self._phase

    @property
    def players(self) -> List[Player]:
        return [player.model_copy() for player in self._players]

    @property
    def round_content(self) -> Optional[RoundContent]:
        return self._round

    @property
    def stats(self) -> SessionStats:
        return self._stats.model_copy()

    @property
    def settings(self) -> Settings:
        return self._settings.model_copy(deep=True)

    @property
    def history(self) -> RoundHistory:
        return self._history

    @property
    def error(self) -> Optional[str]:
        return self._error

    @property
    def discussion_start_time(self) -> Optional[float]:
        return self._discussion_start_time

    # ── Helpers ──────────────────────────────────────────────────────────

    def _reject(self, action: str) -> Response:
        logger.warning(
            "Rejected %s while in phase %s", action, self._phase.value
        )
        return False, {
            "success": False,
            "error": ERROR_INVALID_TRANSITION,
            "message": f"Cannot {action} during the {self._phase.value} phase",
        }

    def _fail_setup(self, message: str, error: str) -> Response:
        self._phase = GamePhase.SETUP
        self._players = []
        self._round = None
        self._discussion_start_time = None
        self._error = message
        logger.info("Back to setup: %s", message)
        return False, {"success": False, "error": error, "message": message}

    def _find_player(self, player_id: str) -> Optional[Player]:
        for player in self._players:
            if player.id == player_id:
                return player
        return None

    # ── Setup ────────────────────────────────────────────────────────────

    def update_settings(self, settings: Settings) -> Response:
        """Replace the table settings; only allowed during setup."""
        if self._phase != GamePhase.SETUP:
            return self._reject("edit settings")
        self._settings = settings.model_copy(deep=True)
        logger.info("Settings updated: %s", settings.model_dump(mode="json"))
        return True, {
            "success": True,
            "settings": self._settings.model_dump(mode="json"),
        }

    def clear_error(self) -> Response:
        self._error = None
        return True, {"success": True}

    # ── Transitions ──────────────────────────────────────────────────────

    async def start_game(
        self, names: Sequence[str], settings: Optional[Settings] = None
    ) -> Response:
        """Generate round content, deal roles and enter DISTRIBUTION."""
        if self._phase not in (GamePhase.SETUP, GamePhase.REVEAL):
            return self._reject("start a game")

        if settings is not None:
            self._settings = settings.model_copy(deep=True)
        self._error = None

        valid_names = [name.strip() for name in names if name and name.strip()]
        if len(valid_names) < cfg.MIN_PLAYERS:
            return self._fail_setup(
                f"Need at least {cfg.MIN_PLAYERS} players to start "
                f"(got {len(valid_names)})",
                ERROR_INVALID_CONFIGURATION,
            )

        self._phase = GamePhase.LOADING
        self._players = []
        self._round = None
        self._discussion_start_time = None
        logger.info("Generating round for %d players", len(valid_names))

        try:
            content = await self._content_client.request_round(
                self._settings.enabled_categories,
                self._history,
                self._settings.hint_difficulty,
            )
            players = self._role_assigner.assign(
                valid_names, self._settings.imposter_count
            )
        except InvalidConfigurationError as exc:
            return self._fail_setup(
                f"Failed to generate game: {exc}",
                ERROR_INVALID_CONFIGURATION,
            )
        except Exception as exc:
            logger.error("Error starting game: %s", exc, exc_info=True)
            return self._fail_setup(
                f"Failed to generate game. Please try again. {exc}",
                ERROR_START_FAILED,
            )

        if not content.is_fallback:
            self._history.record(content.category, content.secret_word)
        self._round = content
        self._players = players
        self._phase = GamePhase.DISTRIBUTION
        logger.info(
            "Round ready in '%s' (fallback=%s); distributing roles",
            content.category, content.is_fallback,
        )
        return True, self.snapshot()

    def mark_player_viewed(self, player_id: str) -> Response:
        """Record that a player has seen their role card."""
        if self._phase != GamePhase.DISTRIBUTION:
            return self._reject("mark a player as viewed")

        player = self._find_player(player_id)
        if player is None:
            return False, {
                "success": False,
                "error": ERROR_NOT_FOUND,
                "message": "Player not found",
            }

        if not player.has_viewed:
            player.has_viewed = True
            logger.info("Player %s viewed their role", player.name)

        if all(p.has_viewed for p in self._players):
            self._discussion_start_time = self._clock()
            self._phase = GamePhase.DISCUSSION
            logger.info("All players viewed; discussion started")

        return True, self.snapshot()

    def reveal(self) -> Response:
        """Stop the discussion clock and reveal the round."""
        if self._phase != GamePhase.DISCUSSION:
            return self._reject("reveal")

        elapsed = self._clock() - self._discussion_start_time
        self._stats = SessionStats(
            discussion_duration_seconds=max(0, math.floor(elapsed))
        )
        self._phase = GamePhase.REVEAL
        logger.info(
            "Revealed after %ds of discussion",
            self._stats.discussion_duration_seconds,
        )
        return True, self.snapshot()

    async def play_again(self) -> Response:
        """Start a fresh round with the same roster and settings."""
        if self._phase != GamePhase.REVEAL:
            return self._reject("play again")
        names = [player.name for player in self._players]
        return await self.start_game(names)

    def change_settings(self) -> Response:
        """Leave the reveal for setup, dropping the roster and round."""
        if self._phase != GamePhase.REVEAL:
            return self._reject("change settings")
        self._players = []
        self._round = None
        self._discussion_start_time = None
        self._phase = GamePhase.SETUP
        logger.info("Returned to setup")
        return True, self.snapshot()

    # ── Views ────────────────────────────────────────────────────────────

    def elapsed_discussion_seconds(self) -> int:
        """Whole seconds since discussion started (0 outside discussion)."""
        if (
            self._phase != GamePhase.DISCUSSION
            or self._discussion_start_time is None
        ):
            return 0
        return max(0, math.floor(self._clock() - self._discussion_start_time))

    def role_card(self, player_id: str) -> Response:
        """What one player privately sees when handed the device."""
        if self._phase not in (GamePhase.DISTRIBUTION, GamePhase.REVEAL):
            return self._reject("show a role card")

        player = self._find_player(player_id)
        if player is None:
            return False, {
                "success": False,
                "error": ERROR_NOT_FOUND,
                "message": "Player not found",
            }

        card: Dict = {
            "success": True,
            "player_id": player.id,
            "player_name": player.name,
            "is_imposter": player.is_imposter,
        }
        if not player.is_imposter:
            card["secret_word"] = self._round.secret_word
            card["category"] = self._round.category
            return True, card

        if self._settings.reveal_category_to_imposter:
            card["category"] = self._round.category
        if self._settings.reveal_hint_to_imposter:
            card["hint"] = self._round.hint
        return True, card

    def snapshot(self) -> Dict:
        """
        Observable state for presentation adapters.

        Roles and round content stay hidden until REVEAL; individual
        players get theirs through ``role_card``.
        """
        revealed = self._phase == GamePhase.REVEAL
        players = []
        for player in self._players:
            entry = {
                "player_id": player.id,
                "player_name": player.name,
                "has_viewed": player.has_viewed,
            }
            if revealed:
                entry["is_imposter"] = player.is_imposter
            players.append(entry)

        response: Dict = {
            "success": True,
            "phase": self._phase.value,
            "players": players,
            "player_count": len(self._players),
            "viewed_count": sum(1 for p in self._players if p.has_viewed),
            "settings": self._settings.model_dump(mode="json"),
            "stats": self._stats.model_dump(),
            "error": self._error,
        }
        if revealed and self._round is not None:
            response["round"] = self._round.model_dump()
            response["imposters"] = [
                p.name for p in self._players if p.is_imposter
            ]
        return response
