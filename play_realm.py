#!/usr/bin/env python3
"""
Minimal CLI for simulating Shadow Realm sessions.

Runs a session where every seat is played by an AI agent and writes the
engine events to a JSONL log.
"""

import argparse
import logging
import random
from typing import Optional

from game_logger import GameLogger
from realm import DiceRoller, GameConfig, GameSession, Player, TurnEngine, create_session
from realm.agents import CautiousAgent, RandomAgent
from realm.rules import apply_action, get_legal_actions
from services.session_service import AI_NAMES


def print_session_state(session: GameSession) -> None:
    """Print current session state."""
    print("\n" + "=" * 60)
    print(f"TURN {session.current_turn}")
    print("=" * 60)

    for number, player in sorted(session.players.items()):
        tile = session.board.tile_at(player.position)
        print(f"Player {number} ({player.name}): {player.gold} gold | {player.health} HP | at {tile.name}")


def print_session_summary(session: GameSession) -> None:
    """Print final session summary."""
    print("\n" + "=" * 60)
    print("ADVENTURE OVER")
    print("=" * 60)

    if session.winner is not None:
        winner = session.players[session.winner]
        print(f"\nWinner: {winner.name}")
        print(f"Final Gold: {winner.gold}")
        print(f"Final Health: {winner.health}")

    print("\nFinal Standings:")
    for player in session.standings():
        print(f"  {player.name}: {player.gold} gold, {player.health} HP")

    print(f"\nTotal Turns: {session.current_turn}")


def simulate_session(
    num_players: int = 4,
    agent_type: str = "cautious",
    seed: Optional[int] = None,
    verbose: bool = True,
    max_turns: int = 50,
    log_file: Optional[str] = None,
) -> GameSession:
    """
    Simulate a complete session with AI players.

    Args:
        num_players: Number of players (1-8)
        agent_type: Type of AI ('random' or 'cautious')
        seed: Random seed for reproducibility
        verbose: Whether to print detailed output
        max_turns: Turn after which the session ends
        log_file: Path to JSONL log file (None = auto-generate)
    """
    config = GameConfig(seed=seed, max_players=max(num_players, 4))
    players = [Player(AI_NAMES[i], is_ai=True) for i in range(num_players)]
    session = create_session(config, players)
    engine = TurnEngine(dice=DiceRoller(random.Random(seed)))

    game_log = GameLogger(log_file, session_id=session.session_id)
    game_log.flush_engine_events(session)

    agent_rng = random.Random(seed)
    if agent_type == "random":
        agents = {n: RandomAgent(n, p.name, rng=agent_rng) for n, p in session.players.items()}
    else:
        agents = {n: CautiousAgent(n, p.name) for n, p in session.players.items()}

    if verbose:
        print(f"Starting session with {num_players} players using {agent_type} agents")
        print(f"Seed: {seed}")
        print(f"Logging to: {game_log.log_file}")

    while session.is_active and session.current_turn <= max_turns:
        number = session.current_player
        legal_actions = get_legal_actions(session, number)
        action = agents[number].choose_action(session, legal_actions)
        apply_action(engine, session, action, number)
        game_log.flush_engine_events(session)

        if verbose and session.current_player == 1 and session.current_turn % 10 == 0:
            print_session_state(session)

    session.end("turn_limit")
    game_log.flush_engine_events(session)

    if verbose:
        print_session_summary(session)
        print(f"\nSession logged to: {game_log.log_file}")

    return session


def main():
    """Main entry point for CLI."""
    parser = argparse.ArgumentParser(description="Simulate a Shadow Realm session")
    parser.add_argument(
        "--players",
        type=int,
        default=4,
        choices=range(1, 9),
        help="Number of players (1-8)",
    )
    parser.add_argument(
        "--agent",
        type=str,
        default="cautious",
        choices=["random", "cautious"],
        help="AI agent type",
    )
    parser.add_argument("--seed", type=int, default=None, help="Random seed")
    parser.add_argument("--quiet", action="store_true", help="Reduce output verbosity")
    parser.add_argument("--max-turns", type=int, default=50, help="Number of turns to play")
    parser.add_argument(
        "--log-file",
        type=str,
        default=None,
        help="Path to JSONL log file (default: auto-generated timestamp)",
    )

    args = parser.parse_args()
    logging.basicConfig(level=logging.WARNING if args.quiet else logging.INFO)

    simulate_session(
        num_players=args.players,
        agent_type=args.agent,
        seed=args.seed,
        verbose=not args.quiet,
        max_turns=args.max_turns,
        log_file=args.log_file,
    )


if __name__ == "__main__":
    main()
