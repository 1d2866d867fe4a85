"""
Tests for session roster and lifecycle.
"""

import pytest

from realm import (
    CharacterClass,
    GameConfig,
    GameSession,
    Player,
    PlayerState,
    SessionStatus,
    TurnPhase,
    create_session,
    create_standard_board,
)
from realm.eventlog import EventType
from realm.exceptions import RosterInvalidError, SessionNotActiveError, ValidationError


class TestRoster:
    def test_players_numbered_in_join_order(self, game_config):
        session = GameSession(game_config)
        first = session.add_player(Player("Aria", CharacterClass.WIZARD))
        second = session.add_player(Player("Borin", is_ai=True))

        assert (first.player_number, second.player_number) == (1, 2)
        assert first.position == 0
        assert first.health == 100
        assert first.gold == 1500
        assert first.avatar == CharacterClass.WIZARD.avatar
        assert second.is_ai

    def test_join_is_logged(self, game_config):
        session = GameSession(game_config)
        session.add_player(Player("Aria", CharacterClass.ROGUE))

        event = session.event_log.get_events()[-1]
        assert event.event_type == EventType.PLAYER_JOINED
        assert event.player_number == 1
        assert event.details == {"name": "Aria", "character_class": "Rogue", "is_ai": False}

    def test_full_session_rejects_join(self):
        session = GameSession(GameConfig(max_players=2))
        session.add_player(Player("A"))
        session.add_player(Player("B"))
        with pytest.raises(RosterInvalidError):
            session.add_player(Player("C"))

    def test_join_after_start_rejected(self, basic_session):
        with pytest.raises(SessionNotActiveError):
            basic_session.add_player(Player("Late"))

    def test_start_without_players(self, game_config):
        session = GameSession(game_config)
        with pytest.raises(RosterInvalidError):
            session.start()
        assert session.status == SessionStatus.WAITING

    def test_min_players_enforced(self):
        session = GameSession(GameConfig(min_players=2))
        session.add_player(Player("Alone"))
        with pytest.raises(RosterInvalidError):
            session.start()

    def test_load_players_requires_contiguous_numbers(self, game_config):
        session = GameSession(game_config)
        with pytest.raises(RosterInvalidError):
            session.load_players([PlayerState(1, "A"), PlayerState(3, "C")])
        with pytest.raises(RosterInvalidError):
            session.load_players([PlayerState(1, "A"), PlayerState(1, "B")])

        session.load_players([PlayerState(2, "B"), PlayerState(1, "A")])
        assert [p.name for p in session.ordered_players()] == ["A", "B"]

    def test_load_players_rejected_once_started(self, game_config):
        session = create_session(game_config, [Player("A"), Player("B"), Player("C")])
        session.current_player = 3

        with pytest.raises(SessionNotActiveError):
            session.load_players([PlayerState(1, "A"), PlayerState(2, "B")])

        assert sorted(session.players) == [1, 2, 3]
        assert session.get_current_player().player_number == 3

    def test_unknown_player_lookup(self, basic_session):
        with pytest.raises(ValidationError):
            basic_session.get_player(9)


class TestLifecycle:
    def test_start_opens_first_turn(self, game_config, two_players):
        session = create_session(game_config, two_players)

        assert session.status == SessionStatus.ACTIVE
        assert session.current_player == 1
        assert session.current_turn == 1
        assert session.phase == TurnPhase.AWAITING_MOVEMENT

        start, turn = session.event_log.events[-2:]
        assert start.event_type == EventType.SESSION_START
        assert start.details == {"players": ["Aria", "Borin"], "board_size": 100, "seed": 42}
        assert turn.event_type == EventType.TURN_START
        assert turn.player_number == 1

    def test_start_twice(self, basic_session):
        with pytest.raises(SessionNotActiveError):
            basic_session.start()

    def test_end_picks_richest_player(self, basic_session):
        basic_session.players[2].gold = 1600
        winner = basic_session.end("turn_limit")

        assert winner == 2
        assert basic_session.winner == 2
        assert basic_session.status == SessionStatus.ENDED
        last = basic_session.event_log.events[-1]
        assert last.event_type == EventType.SESSION_END
        assert last.details == {"reason": "turn_limit"}

    def test_gold_tie_broken_by_health_then_seat(self, basic_session):
        basic_session.players[1].health = 50
        assert basic_session.standings()[0].player_number == 2
        basic_session.players[1].health = 100
        assert basic_session.standings()[0].player_number == 1

    def test_end_while_waiting_has_no_winner(self, game_config):
        session = GameSession(game_config)
        session.add_player(Player("Aria"))
        assert session.end() is None
        assert session.status == SessionStatus.ENDED

    def test_end_twice(self, basic_session):
        basic_session.end()
        with pytest.raises(SessionNotActiveError):
            basic_session.end()

    def test_board_must_match_config(self):
        with pytest.raises(ValidationError):
            GameSession(GameConfig(board_size=40), board=create_standard_board(100))


@pytest.mark.parametrize(
    "overrides",
    [
        {"board_size": 1},
        {"starting_health": 150},
        {"starting_gold": -5},
        {"min_players": 5, "max_players": 4},
    ],
)
def test_invalid_config(overrides):
    with pytest.raises(ValueError):
        GameConfig(**overrides)
