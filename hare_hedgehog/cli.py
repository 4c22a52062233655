"""
Minimal CLI for simulating Hare & Hedgehog games.

Runs unattended games where every player is controlled by a simple policy
that picks fields and answers carrot decisions.
"""

import argparse
import logging
from typing import List, Optional, Sequence

from hare_hedgehog.config import GameConfig
from hare_hedgehog.connector import PolicyConnector
from hare_hedgehog.exceptions import InvalidSnapshotError
from hare_hedgehog.game import Game, create_game
from hare_hedgehog.game_logger import GameLogger
from hare_hedgehog.policies import GreedyPolicy, Policy, RandomPolicy
from hare_hedgehog.settings import get_game_settings
from hare_hedgehog.snapshot import load_snapshot

logger = logging.getLogger(__name__)

PLAYER_NAMES = ["Alice", "Bob", "Charlie", "Diana", "Eve", "Frank"]

# Policies never stop on their own if they keep taking carrots.
DEFAULT_MAX_TURNS = 1000


class ReportingConnector(PolicyConnector):
    """Policy connector that reports the game state at every turn start."""

    def __init__(self, policies: Sequence[Policy], game_logger: Optional[GameLogger] = None, verbose: bool = True):
        super().__init__(policies)
        self.game: Optional[Game] = None
        self.game_logger = game_logger
        self.verbose = verbose

    def update_player_name(self, name: str) -> None:
        # Called once when a turn starts.
        super().update_player_name(name)
        if self.game is None:
            return
        if self.game_logger is not None:
            self.game_logger.flush_engine_events(self.game)
            self.game_logger.log_turn_snapshot(self.game)
        if self.verbose:
            print_game_state(self.game)


def print_game_state(game: Game) -> None:
    """Print current game state."""
    print("\n" + "=" * 60)
    print(f"TURN {game.turn_number}: {game.get_current_player().name}")
    print("=" * 60)

    for player in game.players:
        if game.has_finished(player):
            status = f"FINISHED ({game.rank(player)}.)"
        elif player.suspended:
            status = f"SUSPENDED at {game.board.describe(player.field)}"
        else:
            status = f"at {game.board.describe(player.field)}"

        print(f"{player.name}: {player.carrots} carrots | {player.salads} salads | {status}")


def print_game_summary(game: Game) -> None:
    """Print final game summary."""
    print("\n" + "=" * 60)
    print("GAME OVER")
    print("=" * 60)

    winner = game.winner
    if winner is not None:
        print(f"\nWinner: {winner.name}")

    print("\nFinal Standings:")
    for rank, player in game.standings():
        status = "finished" if game.has_finished(player) else f"at {game.board.describe(player.field)}"
        print(f"  {rank}. {player.name}: {status}, {player.carrots} carrots, {player.salads} salads")

    print(f"\nTotal Turns: {game.turn_number}")


def make_policies(policy_type: str, count: int, seed: Optional[int] = None) -> List[Policy]:
    """Create one policy per player."""
    if policy_type == "random":
        return [RandomPolicy(None if seed is None else seed + i) for i in range(count)]
    return [GreedyPolicy() for _ in range(count)]


def simulate_game(
    num_players: int = 4,
    names: Optional[Sequence[str]] = None,
    policy_type: str = "greedy",
    seed: Optional[int] = None,
    verbose: bool = True,
    max_turns: Optional[int] = None,
    log_file: Optional[str] = None,
    load: Optional[str] = None,
    save: Optional[str] = None,
) -> Game:
    """
    Simulate a complete game of Hare & Hedgehog.

    Args:
        num_players: Number of players (2-6), ignored when names are given
        names: Player names in turn order
        policy_type: Type of policy ('random' or 'greedy')
        seed: Card-shuffle seed for reproducibility
        verbose: Whether to print detailed output
        max_turns: Maximum number of turns (time limit variant)
        log_file: JSONL log file, relative to the log_dir setting (None = no log)
        load: Save file to continue from
        save: Save file to write when the game is over

    Raises:
        InvalidSnapshotError: if `load` is not a valid save file.
    """
    settings = get_game_settings()
    game_logger = GameLogger(log_file, settings.log_dir) if log_file is not None else None

    config = GameConfig(seed=seed, max_turns=max_turns)

    if load is not None:
        snapshot = load_snapshot(load)
        policies = make_policies(policy_type, len(snapshot.players), seed)
        connector = ReportingConnector(policies, game_logger, verbose)
        game = Game.from_snapshot(snapshot, connector, config)
    else:
        names = list(names) if names else PLAYER_NAMES[:num_players]
        policies = make_policies(policy_type, len(names), seed)
        connector = ReportingConnector(policies, game_logger, verbose)
        game = create_game(names, connector, config)

    connector.game = game

    if verbose:
        print(f"Starting game with {len(game.players)} players using {policy_type} policies")
        print(f"Seed: {game.seed}")
        if game_logger is not None:
            print(f"Logging to: {game_logger.log_file}")

    game.start()

    if game_logger is not None:
        game_logger.flush_engine_events(game)
        game_logger.log_game_end(game)

    if save is not None and game.save(save) and verbose:
        print(f"\nGame saved to: {save}")

    if verbose:
        print_game_summary(game)
        if game_logger is not None:
            print(f"\nGame logged to: {game_logger.log_file}")

    return game


def main(argv: Optional[Sequence[str]] = None) -> None:
    """Main entry point for CLI."""
    parser = argparse.ArgumentParser(description="Simulate a Hare & Hedgehog game")
    parser.add_argument(
        "--players",
        type=int,
        default=4,
        choices=range(2, 7),
        help="Number of players (2-6)",
    )
    parser.add_argument(
        "--names",
        nargs="+",
        default=None,
        help="Player names in turn order (overrides --players)",
    )
    parser.add_argument(
        "--policy",
        type=str,
        default="greedy",
        choices=["random", "greedy"],
        help="Policy controlling the players",
    )
    parser.add_argument("--seed", type=int, default=None, help="Card-shuffle seed")
    parser.add_argument("--quiet", action="store_true", help="Reduce output verbosity")
    parser.add_argument(
        "--max-turns",
        type=int,
        default=None,
        help=f"Maximum number of turns (default: HARE_MAX_TURNS or {DEFAULT_MAX_TURNS})",
    )
    parser.add_argument(
        "--log-file",
        type=str,
        default=None,
        help="JSONL log file, relative to HARE_LOG_DIR (default: no log)",
    )
    parser.add_argument("--load", type=str, default=None, help="Continue from a save file")
    parser.add_argument("--save", type=str, default=None, help="Write a save file when the game is over")

    args = parser.parse_args(argv)

    settings = get_game_settings()
    logging.basicConfig(level=settings.log_level, format="%(levelname)s %(name)s: %(message)s")

    seed = args.seed if args.seed is not None else settings.seed
    max_turns = args.max_turns or settings.max_turns or DEFAULT_MAX_TURNS

    if args.names is not None and not 2 <= len(args.names) <= 6:
        parser.error("--names needs 2 to 6 names")

    try:
        simulate_game(
            num_players=args.players,
            names=args.names,
            policy_type=args.policy,
            seed=seed,
            verbose=not args.quiet,
            max_turns=max_turns,
            log_file=args.log_file,
            load=args.load,
            save=args.save,
        )
    except InvalidSnapshotError as e:
        parser.error(f"cannot load {args.load}: {e}")


if __name__ == "__main__":
    main()
