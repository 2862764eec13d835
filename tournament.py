"""Run round-robin tournaments between computer difficulty levels.

Every pairing plays the same number of games, alternating which level moves
first, and the win/loss/draw counts are reported per pairing.

Usage:
    # Default: Random, Easy, Medium, Hard
    python tournament.py --games 20

    # Choose the entrants
    python tournament.py --games 10 --players random easy impossible
"""

import argparse
import time

from game.constants import DRAW, FIRST_WIN, SECOND_WIN, Side
from game.cube_game import apply_move, new_game, start_game
from game.players import ComputerCubePlayer, RandomCubePlayer
from learner.minimax.difficulty import Difficulty

ENTRANTS = ["random"] + [difficulty.value for difficulty in Difficulty]
DEFAULT_ENTRANTS = ["random", "easy", "medium", "hard"]


def make_player(entrant, side, seed):
    """Create a player for an entrant id ('random' or a difficulty name)."""
    if entrant == "random":
        return RandomCubePlayer(side, name="Random", rng_seed=seed)
    difficulty = Difficulty.parse(entrant)
    return ComputerCubePlayer(side, difficulty=difficulty, name=difficulty.value, rng_seed=seed)


def play_game(entrant1, entrant2, seed=None):
    """Play a single game, entrant1 moving first as X.

    Returns:
        Game outcome: 1 (entrant1 won), -1 (entrant2 won), 0 (draw)
    """
    player1 = make_player(entrant1, Side.FIRST, seed)
    player2 = make_player(entrant2, Side.SECOND, None if seed is None else seed + 1)

    state = start_game(new_game(), Side.FIRST)
    while not state.is_finished:
        current_player = player1 if state.side_to_move is Side.FIRST else player2
        state = apply_move(state, current_player.get_action(state)).unwrap()

    return state.outcome


def run_tournament(entrants, games_per_matchup=10, seed=None):
    """Run a round-robin tournament between entrants.

    Args:
        entrants: List of entrant ids
        games_per_matchup: Games to play per pairing
        seed: Base seed (None for unseeded play)

    Returns:
        dict mapping (entrant_a, entrant_b) to {1: wins_a, -1: wins_b, 0: draws}
    """
    print("\n" + "=" * 60)
    print("Tournament Configuration")
    print("=" * 60)
    print(f"Players: {', '.join(entrants)}")
    print(f"Games per matchup: {games_per_matchup}")
    print("=" * 60 + "\n")

    standings = {}
    total_games = 0
    start_time = time.time()

    for i, entrant_a in enumerate(entrants):
        for j, entrant_b in enumerate(entrants):
            if i >= j:  # Skip self-play and duplicate matchups
                continue

            print(f"Matchup: {entrant_a} vs {entrant_b}")
            matchup_start = time.time()
            results = {FIRST_WIN: 0, SECOND_WIN: 0, DRAW: 0}

            for game_num in range(games_per_matchup):
                game_seed = None if seed is None else seed + 2 * total_games
                # Alternate who moves first for fairness
                if game_num % 2 == 0:
                    outcome = play_game(entrant_a, entrant_b, game_seed)
                    results[outcome] += 1
                else:
                    outcome = play_game(entrant_b, entrant_a, game_seed)
                    results[-outcome] += 1
                total_games += 1

            matchup_time = time.time() - matchup_start
            print(f"  {entrant_a} wins: {results[FIRST_WIN]}")
            print(f"  {entrant_b} wins: {results[SECOND_WIN]}")
            print(f"  Draws: {results[DRAW]}")
            print(f"  Time: {matchup_time:.1f}s\n")

            standings[(entrant_a, entrant_b)] = results

    elapsed = time.time() - start_time
    print("=" * 60)
    print("Tournament Complete!")
    print("=" * 60)
    print(f"Total games: {total_games}")
    print(f"Total time: {elapsed:.1f}s")

    return standings


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Run difficulty round-robin tournament")
    parser.add_argument("--games", type=int, default=10,
                        help="Games per matchup (default: 10)")
    parser.add_argument("--players", nargs="+", choices=ENTRANTS, default=DEFAULT_ENTRANTS,
                        help="Entrants (default: random easy medium hard)")
    parser.add_argument("--seed", type=int, help="Base random seed")

    args = parser.parse_args()

    if len(args.players) < 2:
        parser.error("At least two players are required")

    run_tournament(args.players, games_per_matchup=args.games, seed=args.seed)
