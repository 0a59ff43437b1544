"""
Data models for the game core.

``RoundContent`` accepts the camelCase keys the generator returns
(``secretWord``) as well as the snake_case field names.
"""

from typing import Set

from pydantic import BaseModel, ConfigDict, Field, field_validator

from configs.config import get_config
from imposter.game.constants import (
    ALL_CATEGORIES,
    FALLBACK_CATEGORY,
    FALLBACK_HINT,
    FALLBACK_SECRET_WORD,
)

cfg = get_config()


class Player(BaseModel):
    """One seat at the table for the current round."""

    id: str
    name: str = Field(..., min_length=1)
    is_imposter: bool = False
    has_viewed: bool = False


class RoundContent(BaseModel):
    """Secret word, its category and the imposter hint for one round."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    secret_word: str = Field(..., alias="secretWord")
    category: str
    hint: str = ""

    @field_validator("secret_word", "category", mode="before")
    @classmethod
    def _strip(cls, value):
        if isinstance(value, str):
            return value.strip()
        return value

    @field_validator("hint", mode="before")
    @classmethod
    def _coerce_hint(cls, value):
        # A bad hint is a quality problem, not a reason to drop the round
        if value is None:
            return ""
        return str(value).strip()

    @field_validator("secret_word")
    @classmethod
    def _non_empty_word(cls, value: str) -> str:
        if not value:
            raise ValueError("secret word is empty")
        return value

    @classmethod
    def fallback(cls) -> "RoundContent":
        return cls(
            secret_word=FALLBACK_SECRET_WORD,
            category=FALLBACK_CATEGORY,
            hint=FALLBACK_HINT,
        )

    @property
    def is_fallback(self) -> bool:
        return (
            self.category == FALLBACK_CATEGORY
            and self.secret_word == FALLBACK_SECRET_WORD
        )


class Settings(BaseModel):
    """Table settings chosen during setup and kept across replays."""

    enabled_categories: Set[str] = Field(
        default_factory=lambda: set(ALL_CATEGORIES)
    )
    imposter_count: int = Field(default=1, ge=1)
    reveal_category_to_imposter: bool = False
    reveal_hint_to_imposter: bool = False
    hint_difficulty: int = Field(
        default=1,
        ge=cfg.MIN_HINT_DIFFICULTY,
        le=cfg.MAX_HINT_DIFFICULTY,
    )

    @field_validator("enabled_categories")
    @classmethod
    def _known_categories(cls, value: Set[str]) -> Set[str]:
        unknown = value - ALL_CATEGORIES
        if unknown:
            raise ValueError(
                f"Unknown categories: {', '.join(sorted(unknown))}"
            )
        return value


class SessionStats(BaseModel):
    discussion_duration_seconds: int = Field(default=0, ge=0)
