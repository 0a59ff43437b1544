"""
Round content generation for the Imposter game.

``RoundContentClient`` picks the category locally, hands the generator the
category's recent words and a hint-difficulty band, and normalises the
answer. Any generator failure is absorbed into a fixed fallback round so a
flaky provider never blocks play; only an empty category set is reported
back to the caller.

``GeminiRoundGenerator`` is the shipped generator, backed by Google Gemini.
"""

import json
import logging
import random
import time
from typing import Any, Collection, Dict, List, Mapping, Optional, Protocol

from google import genai

from configs.config import get_config
from imposter.game.constants import Category, DifficultyBand
from imposter.game.errors import ContentGenerationError, InvalidConfigurationError
from imposter.game.history import RoundHistory
from imposter.game.models import RoundContent

logger = logging.getLogger(__name__)

cfg = get_config()


# ── Difficulty bands ─────────────────────────────────────────────────────


def difficulty_band(hint_difficulty: int) -> DifficultyBand:
    """Map the 1-10 slider onto the three hint styles."""
    if hint_difficulty <= 3:
        return DifficultyBand.EASY
    if hint_difficulty >= 8:
        return DifficultyBand.HARD
    return DifficultyBand.MEDIUM


def hint_instruction(band: DifficultyBand, hint_difficulty: int) -> str:
    if band is DifficultyBand.EASY:
        return (
            "Create a hint that is vague but definitely connected. It should "
            "be easier to understand than a purely abstract concept, but "
            "still not an immediate giveaway."
        )
    if band is DifficultyBand.HARD:
        return "Create a hint that is EXTREMELY vague, abstract, and difficult."
    return (
        f"Create a hint with a difficulty of {hint_difficulty}/10 (where 1 "
        "is helpful/easy and 10 is extremely abstract). It should be "
        "moderately vague."
    )


# ── Generator contract ───────────────────────────────────────────────────


class RoundGenerator(Protocol):
    """Anything that can produce a raw round payload for one category."""

    async def generate(
        self,
        category: str,
        recent_words: List[str],
        band: DifficultyBand,
        hint_difficulty: int,
    ) -> Mapping[str, Any]:
        ...


# ── Gemini generator ─────────────────────────────────────────────────────

_STYLES = (
    "a very popular and iconic example",
    "a classic or traditional example",
    "a modern or trending example",
    "a specific but recognizable example",
    "a broad concept or type within the category",
    "an example that is distinct from typical choices",
)

_CATEGORY_NOTES = {
    Category.HISTORICAL_EVENTS.value: (
        "You may occasionally choose edgy or internet-culture relevant "
        "events (e.g., Fyre Festival, Area 51 Raid, specific historical "
        "assassinations, or major viral moments) in addition to standard "
        "history."
    ),
    Category.PEOPLE.value: (
        "Choose very common celebrities or famous people. Examples "
        "include: Nixon, P Diddy, Drake, Bad Bunny, Timothee Chalamet, "
        "Max Verstappen, Tom Cruise, Elon Musk, Donald Trump, etc."
    ),
}

_ROUND_SCHEMA = {
    "type": "OBJECT",
    "properties": {
        "secretWord": {
            "type": "STRING",
            "description": "The secret word for the players to describe.",
        },
        "category": {
            "type": "STRING",
            "description": "The category the word belongs to.",
        },
        "hint": {
            "type": "STRING",
            "description": "A subtle, 1-2 word hint about the secret word.",
        },
    },
    "required": ["secretWord", "category", "hint"],
}


class GeminiRoundGenerator:
    """Ask Gemini for a secret word and hint in a given category."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        model_name: Optional[str] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        self._api_key = api_key if api_key is not None else cfg.GEMINI_API_KEY
        self._model_name = model_name or cfg.GEMINI_MODEL_NAME
        self._rng = rng or random.Random()
        self._client: Optional[genai.Client] = None

    def _get_client(self) -> genai.Client:
        if self._client is None:
            self._client = genai.Client(api_key=self._api_key)
        return self._client

    def build_instruction(
        self,
        category: str,
        recent_words: List[str],
        band: DifficultyBand,
        hint_difficulty: int,
    ) -> str:
        style = self._rng.choice(_STYLES)
        note = _CATEGORY_NOTES.get(category, "")
        return (
            "You are a game master for the party game 'Imposter' "
            "(similar to Spyfall).\n"
            "Your goal is to generate a secret word, its category, and a "
            "hint based on the selected category.\n\n"
            f"Target Category: {category}\n"
            f"Target Style: {style}\n"
            f"Timestamp: {int(time.time())}\n\n"
            "RULES:\n"
            "1. Generate a secret word/concept specifically for the "
            f'category: "{category}".\n'
            f"2. {hint_instruction(band, hint_difficulty)}\n"
            f"3. The hint MUST be exactly 1 or {cfg.MAX_HINT_WORDS} words "
            f"long. Do not use more than {cfg.MAX_HINT_WORDS} words.\n"
            f"4. {note}\n"
            "5. CRITICAL: Ensure the secret word is NOT in this list of "
            "previously used words for this category: "
            f"{json.dumps(recent_words)}.\n"
            "6. Return ONLY the JSON object.\n"
        )

    async def generate(
        self,
        category: str,
        recent_words: List[str],
        band: DifficultyBand,
        hint_difficulty: int,
    ) -> Dict[str, Any]:
        instruction = self.build_instruction(
            category, recent_words, band, hint_difficulty
        )
        logger.debug("Gemini instruction: %s", instruction)

        response = await self._get_client().aio.models.generate_content(
            model=self._model_name,
            contents="Generate a new game round.",
            config={
                "system_instruction": instruction,
                "temperature": cfg.GEMINI_TEMPERATURE,
                "response_mime_type": "application/json",
                "response_schema": _ROUND_SCHEMA,
            },
        )
        if not response.text:
            raise ContentGenerationError("Empty response from Gemini")

        payload = json.loads(response.text)
        if not isinstance(payload, dict):
            raise ContentGenerationError(
                f"Expected a JSON object, got {type(payload).__name__}"
            )
        return payload


# ── Client used by the session ───────────────────────────────────────────


class RoundContentClient:
    """Request, normalise and (on failure) replace round content."""

    def __init__(
        self,
        generator: Optional[RoundGenerator] = None,
        rng: Optional[random.Random] = None,
        recent_window: Optional[int] = None,
    ) -> None:
        self._rng = rng or random.Random()
        self._generator = generator or GeminiRoundGenerator(rng=self._rng)
        self._recent_window = (
            recent_window if recent_window is not None
            else cfg.RECENT_WORDS_WINDOW
        )

    async def request_round(
        self,
        enabled_categories: Collection[str],
        history: RoundHistory,
        hint_difficulty: int,
    ) -> RoundContent:
        """
        Return content for the next round.

        Raises ``InvalidConfigurationError`` when no category is enabled,
        before the generator is touched. Every other failure yields
        ``RoundContent.fallback()``.
        """
        if not enabled_categories:
            raise InvalidConfigurationError("No categories selected.")

        # Sorted so a seeded rng picks reproducibly from a set
        category = self._rng.choice(sorted(enabled_categories))
        recent_words = history.recent(category, self._recent_window)
        band = difficulty_band(hint_difficulty)
        logger.info(
            "Requesting round: category='%s' band=%s recent=%d",
            category, band.value, len(recent_words),
        )

        try:
            payload = await self._generator.generate(
                category, recent_words, band, hint_difficulty
            )
            # The generator is told the category; it does not get to change it
            content = RoundContent.model_validate(
                {**payload, "category": category}
            )
        except Exception as exc:
            logger.error(
                "Round generation failed for '%s': %s", category, exc
            )
            logger.info("Using fallback round content")
            return RoundContent.fallback()

        self._log_quality_issues(content, recent_words)
        return content

    @staticmethod
    def _log_quality_issues(
        content: RoundContent, recent_words: List[str]
    ) -> None:
        hint_words = len(content.hint.split())
        if hint_words == 0 or hint_words > cfg.MAX_HINT_WORDS:
            logger.warning(
                "Hint '%s' has %d words (expected 1-%d)",
                content.hint, hint_words, cfg.MAX_HINT_WORDS,
            )
        recent_lower = {word.lower() for word in recent_words}
        if content.secret_word.lower() in recent_lower:
            logger.warning(
                "Secret word '%s' repeats a recent word in '%s'",
                content.secret_word, content.category,
            )
