"""
Play Starfall in a window.

Controls: pointer or LEFT/RIGHT to move, SPACE toggles shooting,
ENTER (or click) starts and restarts, ESC quits.

Usage:
    python -m game.starfall --seed 7
"""

from __future__ import annotations

import argparse
import logging

from .config import SimConfig
from .simulation import Simulation
from .utils import seed_everything


def main(argv=None):
    parser = argparse.ArgumentParser(description="Play the Starfall arcade shooter")
    parser.add_argument("--width", type=int, default=400, help="Window width in pixels (default: 400)")
    parser.add_argument("--height", type=int, default=550, help="Window height in pixels (default: 550)")
    parser.add_argument("--seed", type=int, default=None, help="Seed for a reproducible run")
    parser.add_argument("--mute", action="store_true", help="Disable sound effects")
    parser.add_argument(
        "--log-level",
        type=str,
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity (default: INFO)",
    )
    args = parser.parse_args(argv)

    logging.basicConfig(level=args.log_level, format="%(asctime)s %(name)s %(levelname)s: %(message)s")
    seed_everything(args.seed)

    # arcade is only needed once a window opens
    from .window import run_game

    sim = Simulation(SimConfig(width=args.width, height=args.height), seed=args.seed)
    run_game(sim, args.width, args.height, mute=args.mute)


if __name__ == "__main__":
    main()
