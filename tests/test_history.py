from imposter.game.history import RoundHistory


def test_record_keeps_insertion_order_per_category():
    history = RoundHistory()
    history.record("Animals", "Otter")
    history.record("Foods", "Taco")
    history.record("Animals", "Heron")

    assert history.words("Animals") == ["Otter", "Heron"]
    assert history.words("Foods") == ["Taco"]
    assert history.words("Cities") == []
    assert len(history) == 3
    assert "Animals" in history
    assert "Cities" not in history


def test_recent_is_capped_at_fifty_but_storage_is_not():
    history = RoundHistory()
    for i in range(70):
        history.record("Tools", f"tool-{i}")

    recent = history.recent("Tools")

    assert len(recent) == 50
    assert recent[0] == "tool-20"
    assert recent[-1] == "tool-69"
    assert len(history.words("Tools")) == 70


def test_recent_with_custom_limit():
    history = RoundHistory()
    for word in ("a", "b", "c"):
        history.record("Games", word)

    assert history.recent("Games", limit=2) == ["b", "c"]
    assert history.recent("Games", limit=0) == []
    assert history.recent("Unknown") == []


def test_returned_lists_do_not_alias_internal_state():
    history = RoundHistory()
    history.record("Brands", "Lego")

    history.words("Brands").append("Nike")
    history.recent("Brands").append("Nike")
    history.as_dict()["Brands"].append("Nike")

    assert history.words("Brands") == ["Lego"]
