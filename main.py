#!/usr/bin/env python3
"""
Minesweeper - Main entry point.

Usage:
    python main.py play [--difficulty {easy,medium,hard}] [--width W --height H --mines M]
    python main.py scores
"""
import argparse
import logging
import random
import sys
from pathlib import Path

# Run from a checkout without installing
sys.path.insert(0, str(Path(__file__).parent / "src"))

from minefield.config import Difficulty
from minefield.engine import GamePhase
from minefield.environment import render_board
from minefield.errors import MinefieldError
from minefield.scores import BestScores
from minefield.session import GameSession

DEFAULT_SCORES = Path.home() / ".minefield" / "scores.json"

HELP = "Commands: r ROW COL (reveal), f ROW COL (flag), c ROW COL (chord), n (new game), q (quit)"

logger = logging.getLogger(__name__)


def print_status(session: GameSession) -> None:
    """Print the board with the mine counter and clock."""
    board = session.engine.board
    show_mines = session.phase == GamePhase.LOST
    print()
    print(render_board(board, show_mines=show_mines))
    print(f"Mines: {board.mines_remaining}  Time: {session.clock.display()}")


def run_command(session: GameSession, line: str) -> bool:
    """
    Apply one typed command.

    Returns:
        False when the player quits.
    """
    parts = line.split()
    if not parts:
        return True
    action = parts[0].lower()

    if action == "q":
        return False
    if action == "n":
        if session.difficulty is None:
            config = session.engine.board.config
            session.new_game(
                width=config.width, height=config.height, num_mines=config.num_mines
            )
        else:
            session.new_game(session.difficulty)
        return True

    commands = {"r": session.reveal, "f": session.flag, "c": session.chord_reveal}
    if action not in commands or len(parts) != 3:
        print(HELP)
        return True

    try:
        row, col = int(parts[1]), int(parts[2])
        result = commands[action](row, col)
    except ValueError:
        print(HELP)
        return True
    except MinefieldError as error:
        print(f"Error: {error}")
        return True

    if GamePhase.WON in result.transitions:
        print(f"\n*** WIN in {session.clock.display()}! ***")
        if session.last_record:
            print("New best score!")
    elif GamePhase.LOST in result.transitions:
        print("\n*** LOST (hit mine) ***")
    return True


def play(args: argparse.Namespace) -> None:
    """Play an interactive game in the terminal."""
    scores = BestScores(args.scores)
    rng = random.Random(args.seed) if args.seed is not None else None
    session = GameSession(
        difficulty=args.difficulty,
        width=args.width,
        height=args.height,
        num_mines=args.mines,
        scores=scores,
        rng=rng,
    )
    config = session.engine.board.config
    label = session.difficulty.value if session.difficulty else "custom"
    print(f"Board: {config.width}x{config.height} with {config.num_mines} mines ({label})")
    print(HELP)

    while True:
        print_status(session)
        try:
            line = input("> ")
        except EOFError:
            break
        if not run_command(session, line):
            break


def show_scores(args: argparse.Namespace) -> None:
    """Print best times per difficulty."""
    scores = BestScores(args.scores)

    print(f"{'Difficulty':<12} {'Best':<8}")
    print("-" * 20)
    for difficulty in Difficulty:
        best = scores.best(difficulty)
        value = "-" if best is None else f"{best // 60:02d}:{best % 60:02d}"
        print(f"{difficulty.value:<12} {value:<8}")


def main() -> None:
    """Parse arguments and run the appropriate command."""
    parser = argparse.ArgumentParser(
        description="Minesweeper - play in the terminal"
    )
    parser.add_argument(
        "--verbose", action="store_true", help="Enable debug logging"
    )
    parser.add_argument(
        "--scores", type=Path, default=DEFAULT_SCORES, help="Best score file"
    )
    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    # Play command
    play_parser = subparsers.add_parser("play", help="Play a game")
    play_parser.add_argument(
        "--difficulty",
        choices=[difficulty.value for difficulty in Difficulty],
        default="medium",
        help="Preset used unless a valid custom size is given",
    )
    play_parser.add_argument("--width", type=int, help="Custom number of columns")
    play_parser.add_argument("--height", type=int, help="Custom number of rows")
    play_parser.add_argument("--mines", type=int, help="Custom number of mines")
    play_parser.add_argument("--seed", type=int, help="Random seed for mine layout")

    # Scores command
    subparsers.add_parser("scores", help="Show best scores")

    args = parser.parse_args()

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    try:
        if args.command == "play":
            play(args)
        elif args.command == "scores":
            show_scores(args)
        else:
            parser.print_help()
    except MinefieldError as error:
        logger.error("%s", error)
        raise SystemExit(1)


if __name__ == "__main__":
    main()
