#!/usr/bin/env python3
"""
Evaluate the TicTacToe engine, or play against it.

Usage:
    python eval.py                              # strength report
    python eval.py --play --mode ai             # you are X, the engine is O
    python eval.py --play --mode human --scores-file ~/.xo_scores.json
"""

import sys
import time
import logging
import argparse
from pathlib import Path

from tqdm.auto import tqdm

# Add src to path
sys.path = [str(Path(__file__).parent / "src")] + sys.path

from xo import (
    AI,
    HUMAN,
    GameSession,
    IllegalMoveError,
    SessionConfig,
    eval_all_opponent_lines,
    eval_solver_agreement_all_states,
    eval_vs_random,
    format_board,
)


def print_scores(session):
    s = session.scores
    print(f"Score  X: {s.x}  O: {s.o}  Draws: {s.draw}")


def play_interactive(session: GameSession):
    """Play games in the terminal until the user quits."""
    print("\n=== Interactive Game ===")
    print("Mode: " + ("you (X) vs computer (O)" if session.mode == AI else "two players"))
    print("Enter moves as numbers 0-8, 'n' for a new game, 'r' to reset scores, 'q' to quit:")
    print(" 0 | 1 | 2 ")
    print("---+---+---")
    print(" 3 | 4 | 5 ")
    print("---+---+---")
    print(" 6 | 7 | 8 ")
    print()

    while True:
        if session.is_ai_turn:
            time.sleep(session.config.ai_delay)
            index = session.ai_move()
            print(f"Computer plays: {index}\n")
            continue

        print(format_board(session.board))
        print(session.status_text)
        if session.is_game_over:
            print_scores(session)

        try:
            answer = input("> ").strip().lower()
        except (EOFError, KeyboardInterrupt):
            print("\nBye")
            return

        if answer == "q":
            return
        if answer == "n":
            session.new_game()
            continue
        if answer == "r":
            session.reset_scores()
            print_scores(session)
            continue

        try:
            index = int(answer)
        except ValueError:
            print("Invalid input, try again")
            continue

        try:
            session.play(index)
        except IllegalMoveError as e:
            print(f"Invalid move: {e}")
        print()


def main():
    parser = argparse.ArgumentParser(description="Evaluate or play the TicTacToe engine")
    parser.add_argument("--play", action="store_true", help="Play interactive game")
    parser.add_argument("--mode", choices=[HUMAN, AI], default=AI, help="Opponent for --play")
    parser.add_argument("--scores-file", type=str, default=None, help="JSON file for persistent scores")
    parser.add_argument("--reset-scores", action="store_true", help="Zero the stored scores first")
    parser.add_argument("--ai-delay", type=float, default=0.45, help="Pause before computer moves (s)")
    parser.add_argument("--games", type=int, default=500, help="Number of games vs random")
    parser.add_argument("--seed", type=int, default=0, help="Random seed")
    parser.add_argument("--skip-exhaustive", action="store_true", help="Skip exhaustive evaluations")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")

    args = parser.parse_args()

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(asctime)s %(name)s %(levelname)s: %(message)s")

    # Interactive play
    if args.play:
        config = SessionConfig(
            mode=args.mode,
            ai_delay=args.ai_delay,
            scores_path=args.scores_file,
        )
        session = GameSession(config)
        if args.reset_scores:
            session.reset_scores()
        play_interactive(session)
        return

    # Evaluation
    print("=== Evaluation ===")

    print(f"\nvs Random ({args.games} games per side)...")
    for side, name in ((+1, "X"), (-1, "O")):
        w, d, l = eval_vs_random(games=args.games, ai_player=side, seed=args.seed)
        print(f"  Engine as {name}:  {w:.2%} W / {d:.2%} D / {l:.2%} L")

    if args.skip_exhaustive:
        return

    print("\nvs Every Opponent...")
    for side, name in ((+1, "X"), (-1, "O")):
        res = eval_all_opponent_lines(ai_player=side)
        tqdm.write(f"  Engine as {name}:  {res['games']} games | "
                   f"W {res['ai_w']} / D {res['ai_d']} / L {res['ai_l']}")

    print("\nSolver Agreement (all states)...")
    sa = eval_solver_agreement_all_states()
    print(f"  States:    {sa['n_states']}")
    print(f"  Optimal:   {sa['agree_rate']:.2%}")
    for board, player, move in sa["disagreements"][:5]:
        print(f"  Mismatch:  {board} player {player:+d} -> {move}")


if __name__ == "__main__":
    main()
