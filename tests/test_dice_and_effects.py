"""
Tests for dice rolling and tile effect resolution.
"""

import random

import pytest

from realm import DiceRoller, EffectPolicy, TileEffect, TileEffectResolver, TileType
from realm.effects import EFFECT_TABLE, NO_EFFECT


class TestDiceRoller:
    def test_rolls_stay_within_faces(self):
        dice = DiceRoller(seed=3)
        for _ in range(200):
            movement = dice.roll_movement()
            assert len(movement) == 2
            assert all(1 <= d <= 6 for d in movement)
            assert 1 <= dice.roll_action() <= 20

    def test_same_seed_same_rolls(self):
        first = DiceRoller(seed=99)
        second = DiceRoller(seed=99)
        assert [first.roll_movement() for _ in range(20)] == [second.roll_movement() for _ in range(20)]

    def test_injected_rng_is_used(self, scripted):
        scripted.push(6, 1, 17)
        dice = DiceRoller(scripted)
        assert dice.roll_movement() == (6, 1)
        assert dice.roll_action() == 17

    def test_custom_dice_shape(self):
        dice = DiceRoller(random.Random(5))
        rolls = dice.roll_dice(3, 4)
        assert len(rolls) == 3
        assert all(1 <= r <= 4 for r in rolls)

    def test_zero_dice(self):
        assert DiceRoller(seed=1).roll_dice(0) == []

    @pytest.mark.parametrize("count,sides", [(-1, 6), (2, 0)])
    def test_bad_dice_rejected(self, count, sides):
        with pytest.raises(ValueError):
            DiceRoller(seed=1).roll_dice(count, sides)

    def test_attribute_drops_lowest_die(self, scripted):
        scripted.push(2, 6, 5, 4)
        assert DiceRoller(scripted).roll_attribute() == 15


class TestMonsterEffects:
    def setup_method(self):
        self.resolver = TileEffectResolver()

    def test_high_roll_wins_gold(self):
        assert self.resolver.resolve(TileType.MONSTER, 18) == TileEffect(gold_delta=140)

    def test_threshold_roll_wins(self):
        assert self.resolver.resolve(TileType.MONSTER, 15) == TileEffect(gold_delta=125)

    def test_low_roll_costs_health(self):
        assert self.resolver.resolve(TileType.MONSTER, 5) == TileEffect(health_delta=-15)
        assert self.resolver.resolve(TileType.MONSTER, 8) == TileEffect(health_delta=-15)

    @pytest.mark.parametrize("roll", [9, 12, 14])
    def test_middle_rolls_are_a_standoff(self, roll):
        assert self.resolver.resolve(TileType.MONSTER, roll).is_noop


class TestOtherEffects:
    def setup_method(self):
        self.resolver = TileEffectResolver()

    def test_treasure_always_pays(self):
        assert self.resolver.resolve(TileType.TREASURE, 10) == TileEffect(gold_delta=55)
        assert self.resolver.resolve(TileType.TREASURE, 1) == TileEffect(gold_delta=28)

    def test_event_outcomes(self):
        assert self.resolver.resolve(TileType.EVENT, 12) == TileEffect(gold_delta=30)
        assert self.resolver.resolve(TileType.EVENT, 3) == TileEffect(gold_delta=-20)
        assert self.resolver.resolve(TileType.EVENT, 6) == TileEffect(gold_delta=-20)
        assert self.resolver.resolve(TileType.EVENT, 9) is NO_EFFECT

    @pytest.mark.parametrize("tile_type", [TileType.PROPERTY, TileType.START])
    def test_inert_tiles(self, tile_type):
        for roll in (1, 10, 20):
            assert self.resolver.resolve(tile_type, roll).is_noop

    def test_every_tile_type_has_a_resolver(self):
        assert set(EFFECT_TABLE) == set(TileType)

    def test_custom_policy(self):
        policy = EffectPolicy(monster_high=10, monster_low=2, monster_damage=40)
        resolver = TileEffectResolver(policy)
        assert resolver.resolve(TileType.MONSTER, 10) == TileEffect(gold_delta=100)
        assert resolver.resolve(TileType.MONSTER, 2) == TileEffect(health_delta=-40)

    def test_overlapping_thresholds_rejected(self):
        with pytest.raises(ValueError):
            EffectPolicy(event_high=6, event_low=6)
