import random

import pytest

from imposter.game.content_client import RoundContentClient
from imposter.game.history import RoundHistory
from imposter.game.roles import RoleAssigner
from imposter.game.session import GameSession


class FakeClock:
    """Manually advanced stand-in for ``time.time``."""

    def __init__(self, start: float = 1_700_000_000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class StubGenerator:
    """Round generator that records its calls and returns numbered words."""

    def __init__(self, payload=None, exc=None):
        self.payload = payload
        self.exc = exc
        self.calls = []

    async def generate(self, category, recent_words, band, hint_difficulty):
        self.calls.append({
            "category": category,
            "recent_words": list(recent_words),
            "band": band,
            "hint_difficulty": hint_difficulty,
        })
        if self.exc is not None:
            raise self.exc
        if self.payload is not None:
            return self.payload
        return {
            "secretWord": f"Word {len(self.calls)}",
            "category": "Whatever The Model Said",
            "hint": "Quiet clue",
        }


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def generator():
    return StubGenerator()


@pytest.fixture
def history():
    return RoundHistory()


@pytest.fixture
def session(generator, clock, history):
    rng = random.Random(1234)
    return GameSession(
        content_client=RoundContentClient(generator=generator, rng=rng),
        role_assigner=RoleAssigner(rng=rng),
        history=history,
        clock=clock,
    )
