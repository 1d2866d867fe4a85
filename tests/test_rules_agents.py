"""
Tests for legal action detection and the computer-controlled players.
"""

import random

import pytest

from realm import TileType, create_session
from realm.agents import Agent, CautiousAgent, RandomAgent, build_agent
from realm.rules import Action, ActionType, apply_action, get_legal_actions


def _kinds(actions):
    return [a.action_type for a in actions]


class TestLegalActions:
    def test_follow_the_phase(self, engine, scripted, basic_session):
        assert _kinds(get_legal_actions(basic_session, 1)) == [ActionType.ROLL_MOVEMENT]

        scripted.push(1, 2)
        engine.roll_movement(basic_session, 1)
        assert _kinds(get_legal_actions(basic_session, 1)) == [
            ActionType.ROLL_ACTION,
            ActionType.END_TURN,
        ]

        scripted.push(10)
        engine.roll_action(basic_session, 1)
        assert _kinds(get_legal_actions(basic_session, 1)) == [ActionType.END_TURN]

    def test_other_players_have_none(self, basic_session):
        assert get_legal_actions(basic_session, 2) == []

    def test_none_once_ended(self, basic_session):
        basic_session.end()
        assert get_legal_actions(basic_session, 1) == []

    def test_apply_action_dispatches(self, engine, scripted, basic_session):
        scripted.push(3, 4)
        result = apply_action(engine, basic_session, Action(ActionType.ROLL_MOVEMENT), 1)
        assert result.new_position == 7

    def test_action_equality(self):
        assert Action(ActionType.END_TURN) == Action(ActionType.END_TURN)
        assert Action(ActionType.END_TURN) != Action(ActionType.ROLL_ACTION)


class TestCautiousAgent:
    def test_always_moves_first(self, monster_session):
        agent = CautiousAgent(1, "Aria")
        action = agent.choose_action(monster_session, get_legal_actions(monster_session, 1))
        assert action.action_type == ActionType.ROLL_MOVEMENT

    def test_fights_when_healthy(self, engine, scripted, monster_session):
        scripted.push(1, 1)
        engine.roll_movement(monster_session, 1)
        agent = CautiousAgent(1, "Aria")
        action = agent.choose_action(monster_session, get_legal_actions(monster_session, 1))
        assert action.action_type == ActionType.ROLL_ACTION

    def test_retreats_from_monster_when_wounded(self, engine, scripted, monster_session):
        scripted.push(1, 1)
        engine.roll_movement(monster_session, 1)
        monster_session.players[1].health = 30
        agent = CautiousAgent(1, "Aria")
        action = agent.choose_action(monster_session, get_legal_actions(monster_session, 1))
        assert action.action_type == ActionType.END_TURN

    def test_wounded_still_opens_treasure(self, engine, scripted, game_config, two_players, board_of):
        session = create_session(game_config, two_players, board=board_of(TileType.TREASURE))
        scripted.push(1, 1)
        engine.roll_movement(session, 1)
        session.players[1].health = 5
        action = CautiousAgent(1, "Aria").choose_action(session, get_legal_actions(session, 1))
        assert action.action_type == ActionType.ROLL_ACTION

    def test_no_legal_actions(self, basic_session):
        with pytest.raises(ValueError):
            CautiousAgent(2, "Borin").choose_action(basic_session, [])


class TestRandomAgent:
    def test_picks_a_legal_action(self, basic_session):
        agent = RandomAgent(1, "Aria", rng=random.Random(0))
        legal = get_legal_actions(basic_session, 1)
        for _ in range(20):
            assert agent.choose_action(basic_session, legal) in legal

    def test_no_legal_actions(self, basic_session):
        with pytest.raises(ValueError):
            RandomAgent(1, "Aria").choose_action(basic_session, [])


def test_build_agent():
    assert isinstance(build_agent("cautious", 1, "A"), CautiousAgent)
    assert isinstance(build_agent("random", 2, "B"), RandomAgent)
    assert isinstance(build_agent("random", 2, "B"), Agent)
    with pytest.raises(ValueError):
        build_agent("greedy", 1, "A")
