"""
Tile effect resolution.

Every tile type maps to exactly one resolver in ``EFFECT_TABLE``; the
engine never branches on tile type itself.
"""

from dataclasses import dataclass
from typing import Callable, Dict, Optional

from realm.config import EffectPolicy
from realm.tiles import TileType


@dataclass(frozen=True)
class TileEffect:
    """Resource change produced by an action roll on a tile."""

    health_delta: int = 0
    gold_delta: int = 0

    @property
    def is_noop(self) -> bool:
        return self.health_delta == 0 and self.gold_delta == 0


NO_EFFECT = TileEffect()


def _monster(roll: int, policy: EffectPolicy) -> TileEffect:
    if roll >= policy.monster_high:
        return TileEffect(gold_delta=policy.monster_base_reward + roll * policy.monster_reward_per_point)
    if roll <= policy.monster_low:
        return TileEffect(health_delta=-policy.monster_damage)
    return NO_EFFECT


def _treasure(roll: int, policy: EffectPolicy) -> TileEffect:
    return TileEffect(gold_delta=policy.treasure_base + roll * policy.treasure_per_point)


def _event(roll: int, policy: EffectPolicy) -> TileEffect:
    if roll >= policy.event_high:
        return TileEffect(gold_delta=policy.event_reward)
    if roll <= policy.event_low:
        return TileEffect(gold_delta=-policy.event_penalty)
    return NO_EFFECT


def _inert(roll: int, policy: EffectPolicy) -> TileEffect:
    return NO_EFFECT


EFFECT_TABLE: Dict[TileType, Callable[[int, EffectPolicy], TileEffect]] = {
    TileType.MONSTER: _monster,
    TileType.TREASURE: _treasure,
    TileType.EVENT: _event,
    # Purchase flow for property tiles lives outside the engine
    TileType.PROPERTY: _inert,
    TileType.START: _inert,
}


class TileEffectResolver:
    """Pure mapping of (tile type, action roll) to a resource delta."""

    def __init__(self, policy: Optional[EffectPolicy] = None):
        self.policy = policy or EffectPolicy()

    def resolve(self, tile_type: TileType, roll: int) -> TileEffect:
        """
        Compute the effect of an action roll on a tile type.

        Args:
            tile_type: Type of the tile the player stands on
            roll: Action roll outcome

        Returns:
            TileEffect with the health and gold deltas
        """
        return EFFECT_TABLE[tile_type](roll, self.policy)
