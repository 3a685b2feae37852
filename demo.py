#!/usr/bin/env python3
"""Watch a random player play Minesweeper."""
import time
import os
import sys
from pathlib import Path

# Run from a checkout without installing
sys.path.insert(0, str(Path(__file__).parent / "src"))

from minefield.config import Difficulty, PRESETS
from minefield.environment import MinesweeperEnv


def clear_screen():
    os.system('cls' if os.name == 'nt' else 'clear')


def demo(delay: float = 0.3, games: int = 5, difficulty: str = "easy", seed: int = None):
    """Run demo games with visualization."""
    config = PRESETS[Difficulty(difficulty)]
    env = MinesweeperEnv(config=config, render_mode="ansi")
    env.action_space.seed(seed)

    print(f"Board: {config.width}x{config.height} with {config.num_mines} mines")
    print("Starting in 2 seconds...")
    time.sleep(2)

    wins = 0

    for game in range(games):
        env.reset(seed=None if seed is None else seed + game)

        clear_screen()
        print(f"=== Game {game + 1}/{games} ===")
        print(f"Wins so far: {wins}\n")
        print(env.render())
        time.sleep(delay)

        done = False
        step = 0

        while not done:
            action = env.action_space.sample(mask=env.get_action_mask())
            row, col = divmod(int(action), config.width)

            obs, reward, terminated, truncated, info = env.step(action)
            done = terminated or truncated
            step += 1

            clear_screen()
            print(f"=== Game {game + 1}/{games} | Step {step} ===")
            print(f"Wins so far: {wins}")
            print(f"Last move: ({row}, {col})\n")
            print(env.render())

            if done:
                if info.get("game_state") == "WON":
                    wins += 1
                    print(f"\n*** WIN! ***")
                else:
                    print(f"\n*** LOST (hit mine) ***")

            time.sleep(delay)

        time.sleep(1.0)  # Pause between games

    print(f"\n=== Final: {wins}/{games} wins ({100*wins/games:.0f}%) ===")


if __name__ == "__main__":
    import argparse
    parser = argparse.ArgumentParser()
    parser.add_argument("--delay", type=float, default=0.3, help="Delay between moves")
    parser.add_argument("--games", type=int, default=5, help="Number of games")
    parser.add_argument(
        "--difficulty", choices=[d.value for d in Difficulty], default="easy",
        help="Board preset",
    )
    parser.add_argument("--seed", type=int, default=None, help="Random seed")
    args = parser.parse_args()

    demo(delay=args.delay, games=args.games, difficulty=args.difficulty, seed=args.seed)
