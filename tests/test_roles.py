import itertools
import random
from collections import Counter

import pytest

from imposter.game.roles import RoleAssigner, effective_imposter_count


def test_assign_keeps_input_order_and_resets_views():
    assigner = RoleAssigner(rng=random.Random(3))

    players = assigner.assign(["Ann", "Bo", "Cy", "Di"], 2)

    assert [p.name for p in players] == ["Ann", "Bo", "Cy", "Di"]
    assert all(not p.has_viewed for p in players)
    assert sum(p.is_imposter for p in players) == 2
    assert len({p.id for p in players}) == 4


@pytest.mark.parametrize("requested", [3, 4, 10])
def test_imposters_never_fill_the_table(requested):
    assigner = RoleAssigner(rng=random.Random(requested))

    players = assigner.assign(["Ann", "Bo", "Cy"], requested)

    assert sum(p.is_imposter for p in players) == 2


def test_effective_imposter_count():
    assert effective_imposter_count(1, 3) == 1
    assert effective_imposter_count(3, 3) == 2
    assert effective_imposter_count(5, 8) == 5
    assert effective_imposter_count(0, 5) == 1


def test_duplicate_names_are_distinct_players():
    ids = (f"id-{n}" for n in itertools.count())
    assigner = RoleAssigner(rng=random.Random(0), id_factory=lambda: next(ids))

    players = assigner.assign(["Sam", "Sam", "Sam"], 1)

    assert [p.id for p in players] == ["id-0", "id-1", "id-2"]
    assert sum(p.is_imposter for p in players) == 1


def test_too_few_names_is_rejected():
    with pytest.raises(ValueError):
        RoleAssigner().assign(["Ann", "Bo"], 1)


@pytest.mark.parametrize("imposter_count", [1, 2, 3])
def test_imposter_positions_are_uniform(imposter_count):
    names = ["Ann", "Bo", "Cy", "Di", "Ed"]
    trials = 4000
    assigner = RoleAssigner(rng=random.Random(2024 + imposter_count))

    hits = Counter()
    for _ in range(trials):
        for index, player in enumerate(assigner.assign(names, imposter_count)):
            if player.is_imposter:
                hits[index] += 1

    expected = trials * imposter_count / len(names)
    for index in range(len(names)):
        assert abs(hits[index] - expected) < expected * 0.15
