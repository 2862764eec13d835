"""Main entry point for the 3x3x3 cube game."""

import argparse
import logging

from controller import CubeGameController
from game.constants import Side
from game.player_config import parse_player_spec


def main() -> None:
    parser = argparse.ArgumentParser(
        description="3x3x3 Tic-Tac-Toe",
        epilog="""
Player Configuration:
  Use --player1 and --player2 to configure each player with the format:
    TYPE[:PARAM=VALUE,PARAM=VALUE,...]

  Types:
    random          - Random move selection
    human           - Moves typed at the prompt as INDEX or X,Y,Z
    computer        - Minimax opponent

  Computer Parameters:
    difficulty=X    - easy, medium, hard or impossible (default: medium)
    think=1         - Pause like a person thinking before each move
    seed=N          - Random seed for reproducibility
    name=TEXT       - Display name (all player types)

  Examples:
    --player1 human
    --player2 computer:difficulty=hard
    --player1 computer:difficulty=easy,seed=7 --player2 random
        """,
        formatter_class=argparse.RawDescriptionHelpFormatter
    )
    parser.add_argument(
        "--player1",
        type=str,
        default="human",
        metavar="SPEC",
        help="Player 1 (X) configuration (default: human). See --help for format."
    )
    parser.add_argument(
        "--player2",
        type=str,
        default="computer",
        metavar="SPEC",
        help="Player 2 (O) configuration (default: computer). See --help for format."
    )
    parser.add_argument(
        "--seed",
        type=int,
        help="Random seed for reproducible games",
    )
    parser.add_argument(
        "--games", type=int, default=1, help="Number of games to play (default: 1, 0 plays indefinitely)"
    )
    parser.add_argument(
        "--first",
        choices=["1", "2", "alternate"],
        default="1",
        help="Which player moves first: 1, 2, or alternate between games (default: 1)",
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Do not print the game transcript",
    )
    parser.add_argument(
        "--stats",
        action="store_true",
        help="Track and report statistics for each game",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=None,
        help="Seconds a computer player may think before a random move is played",
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="WARNING",
        help="Logging level (default: WARNING)",
    )
    args = parser.parse_args()

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(name)s %(levelname)s: %(message)s",
    )

    # Parse player configurations
    try:
        player1_config = parse_player_spec(args.player1)
        player2_config = parse_player_spec(args.player2)
    except ValueError as e:
        parser.error(f"Invalid player configuration: {e}")
        return

    if args.games < 0:
        parser.error("--games must not be negative")
    if args.timeout is not None and args.timeout <= 0:
        parser.error("--timeout must be positive")

    controller = CubeGameController(
        seed=args.seed,
        player1_config=player1_config,
        player2_config=player2_config,
        first_side=Side.SECOND if args.first == "2" else Side.FIRST,
        alternate_first=args.first == "alternate",
        max_games=args.games or None,
        log_to_screen=not args.quiet,
        move_timeout=args.timeout,
        track_statistics=args.stats,
    )
    controller.run()

    # Print timing statistics if enabled
    if args.stats:
        controller.print_statistics()


if __name__ == "__main__":
    main()
