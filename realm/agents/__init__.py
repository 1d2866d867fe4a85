from realm.agents.base import Agent
from realm.agents.cautious import CautiousAgent
from realm.agents.random import RandomAgent

__all__ = ["Agent", "CautiousAgent", "RandomAgent", "build_agent"]


def build_agent(kind: str, player_number: int, name: str) -> Agent:
    """Build an agent by its short name ("cautious" or "random")."""
    if kind == "random":
        return RandomAgent(player_number, name)
    if kind == "cautious":
        return CautiousAgent(player_number, name)
    raise ValueError(f"Unknown agent kind: {kind}")
