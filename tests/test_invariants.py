"""
Long seeded games: resource bounds and turn bookkeeping hold throughout.
"""

import random

import pytest

from realm import DiceRoller, GameConfig, Player, TurnEngine, TurnPhase, create_session
from realm.agents import RandomAgent
from realm.exceptions import InvalidPhaseError
from realm.rules import apply_action, get_legal_actions


@pytest.mark.parametrize("seed", [1, 7, 42, 2024])
def test_seeded_random_game_keeps_invariants(seed):
    config = GameConfig(seed=seed, starting_gold=40)
    session = create_session(config, [Player("A"), Player("B"), Player("C")])
    engine = TurnEngine(dice=DiceRoller(seed=seed))
    agents = {n: RandomAgent(n, f"P{n}", rng=random.Random(seed + n)) for n in session.players}

    turns_seen = [session.current_turn]
    for _ in range(600):
        number = session.current_player
        legal = get_legal_actions(session, number)
        assert legal

        apply_action(engine, session, agents[number].choose_action(session, legal), number)

        for player in session.players.values():
            assert 0 <= player.health <= config.max_health
            assert player.gold >= 0
            assert 0 <= player.position < session.board.size
        assert 1 <= session.current_player <= len(session.players)
        turns_seen.append(session.current_turn)

    assert turns_seen == sorted(turns_seen)
    assert session.current_turn > 1


def test_same_seed_replays_identically():
    def play(seed):
        session = create_session(GameConfig(seed=seed), [Player("A"), Player("B")])
        engine = TurnEngine(dice=DiceRoller(seed=seed))
        for _ in range(20):
            number = session.current_player
            engine.roll_movement(session, number)
            engine.roll_action(session, number)
            engine.end_turn(session, number)
        return [(e.event_type, e.player_number, e.details) for e in session.event_log.events]

    assert play(11) == play(11)


def test_failed_operations_do_not_touch_the_log(engine, scripted, basic_session):
    before = len(basic_session.event_log)
    for op in (engine.roll_action, engine.end_turn):
        with pytest.raises(InvalidPhaseError):
            op(basic_session, 1)
    assert len(basic_session.event_log) == before
    assert basic_session.phase == TurnPhase.AWAITING_MOVEMENT
