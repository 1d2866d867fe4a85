from realm import CharacterClass, GameConfig, Player, create_session

from snapshot import serialize_snapshot


def test_basic_snapshot_structure():
    session = create_session(
        GameConfig(seed=42),
        [Player("A", CharacterClass.FIGHTER), Player("B", is_ai=True)],
    )

    snap = serialize_snapshot(session)

    assert snap["status"] == "active"
    assert snap["current_turn"] == 1
    assert snap["current_player"] == 1
    assert snap["phase"] == "awaiting_movement"
    assert snap["board_size"] == 100
    assert snap["winner"] is None
    assert snap["last_movement"] is None
    assert snap["event_count"] == len(session.event_log)
    assert "players" in snap and isinstance(snap["players"], list) and len(snap["players"]) == 2

    first = snap["players"][0]
    assert first["player_number"] == 1
    assert first["character_class"] == "Fighter"
    assert first["position"] == 0
    assert first["tile_name"] == "Shadow Portal"
    assert first["health"] == 100
    assert first["gold"] == 1500
    assert set(first["stats"]) == {
        "strength",
        "dexterity",
        "constitution",
        "intelligence",
        "wisdom",
        "charisma",
    }
    assert snap["players"][1]["is_ai"] is True
    assert first["primary_stats"] == ["strength", "constitution"]
    assert set(first["modifiers"].values()) == {0}
    assert first["is_defeated"] is False


def test_snapshot_tracks_rolls(engine, scripted, basic_session):
    scripted.push(5, 6, 13)
    engine.roll_movement(basic_session, 1)
    engine.roll_action(basic_session, 1)

    snap = serialize_snapshot(basic_session)

    assert snap["last_movement"] == [5, 6]
    assert snap["last_action_roll"] == 13
    assert snap["phase"] == "turn_complete"
    assert snap["players"][0]["position"] == 11


def test_snapshot_after_end(basic_session):
    basic_session.players[2].gold = 2000
    basic_session.end()

    snap = serialize_snapshot(basic_session)
    assert snap["status"] == "ended"
    assert snap["winner"] == 2


def test_defeated_player_flagged(basic_session):
    basic_session.players[2].health = 0
    basic_session.players[2].stats.strength = 17

    player = serialize_snapshot(basic_session)["players"][1]
    assert player["is_defeated"] is True
    assert player["modifiers"]["strength"] == 3
    assert player["primary_stats"] == []
