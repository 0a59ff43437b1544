"""
Per-category record of secret words already issued this session.

The full history is kept for the session's lifetime; only the most recent
``RECENT_WORDS_WINDOW`` entries of a category are handed to the generator
as the do-not-repeat list.
"""

import logging
from typing import Dict, List, Optional

from configs.config import get_config

logger = logging.getLogger(__name__)

cfg = get_config()


class RoundHistory:
    """Append-only mapping of category -> issued secret words."""

    def __init__(self) -> None:
        self._words: Dict[str, List[str]] = {}

    def record(self, category: str, secret_word: str) -> None:
        """Append ``secret_word`` to the history of ``category``."""
        self._words.setdefault(category, []).append(secret_word)
        logger.debug(
            "History for '%s' now holds %d words",
            category, len(self._words[category]),
        )

    def words(self, category: str) -> List[str]:
        """Every word issued for ``category``, oldest first."""
        return list(self._words.get(category, []))

    def recent(self, category: str, limit: Optional[int] = None) -> List[str]:
        """The newest ``limit`` words for ``category``, oldest first."""
        if limit is None:
            limit = cfg.RECENT_WORDS_WINDOW
        if limit <= 0:
            return []
        return list(self._words.get(category, [])[-limit:])

    def as_dict(self) -> Dict[str, List[str]]:
        return {category: list(words) for category, words in self._words.items()}

    def __len__(self) -> int:
        return sum(len(words) for words in self._words.values())

    def __contains__(self, category: object) -> bool:
        return category in self._words
