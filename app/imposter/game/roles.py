"""
Random, exclusive imposter assignment for a roster of names.
"""

import logging
import random
import uuid
from typing import Callable, List, Optional, Sequence

from configs.config import get_config
from imposter.game.models import Player

logger = logging.getLogger(__name__)

cfg = get_config()


def generate_player_id() -> str:
    """Return a UUID-based player ID."""
    return str(uuid.uuid4())


def effective_imposter_count(requested: int, player_count: int) -> int:
    """Clamp the requested count so at least one player is not an imposter."""
    return max(1, min(requested, player_count - 1))


class RoleAssigner:
    """
    Deal roles for one round.

    ``rng`` and ``id_factory`` are injectable so tests can seed the draw
    and predict identifiers.
    """

    def __init__(
        self,
        rng: Optional[random.Random] = None,
        id_factory: Callable[[], str] = generate_player_id,
    ) -> None:
        self._rng = rng or random.Random()
        self._id_factory = id_factory

    def assign(self, names: Sequence[str], imposter_count: int) -> List[Player]:
        """
        Return one fresh ``Player`` per name, in input order.

        Imposter positions are drawn uniformly without replacement.
        Duplicate names are distinct players.
        """
        if len(names) < cfg.MIN_PLAYERS:
            raise ValueError(
                f"Need at least {cfg.MIN_PLAYERS} players, got {len(names)}"
            )

        count = effective_imposter_count(imposter_count, len(names))
        imposter_positions = set(self._rng.sample(range(len(names)), count))

        players = [
            Player(
                id=self._id_factory(),
                name=name,
                is_imposter=index in imposter_positions,
            )
            for index, name in enumerate(names)
        ]
        logger.info(
            "Assigned %d imposter(s) among %d players", count, len(players)
        )
        return players
