"""
Phase, category and sentinel constants for the Imposter party game.
"""

from enum import Enum


class GamePhase(str, Enum):
    """Phases of a single round, in play order."""

    SETUP = "setup"
    LOADING = "loading"
    DISTRIBUTION = "distribution"
    DISCUSSION = "discussion"
    REVEAL = "reveal"


class Category(str, Enum):
    """Categories a round's secret word can be drawn from."""

    SPORTS = "Sports"
    LOCATIONS = "Locations"
    FOODS = "Foods"
    ANIMALS = "Animals"
    HISTORICAL_EVENTS = "Historical Events"
    PEOPLE = "People"
    PROFESSIONS = "Professions"
    BRANDS = "Brands"
    VEHICLES = "Vehicles"
    TOOLS = "Tools"
    GAMES = "Games"
    CITIES = "Cities"
    HOLIDAYS = "Holidays"
    OBJECTS = "Objects"


class DifficultyBand(str, Enum):
    """Hint style bands derived from the 1-10 hint difficulty slider."""

    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


ALL_CATEGORIES = frozenset(c.value for c in Category)

# Error kinds attached to failed transition responses
ERROR_INVALID_TRANSITION = "invalid_transition"
ERROR_INVALID_CONFIGURATION = "invalid_configuration"
ERROR_NOT_FOUND = "not_found"
ERROR_START_FAILED = "start_failed"

# Round content served when the generator fails
FALLBACK_SECRET_WORD = "Error Generating Word"
FALLBACK_CATEGORY = "System"
FALLBACK_HINT = "Try Again"
