"""
Play one of the games in an arcade window

    python -m game.play flappy
    python -m game.play pacman --seed 7
"""

import argparse
import logging
import random

import arcade

from game.flappy.simulation import new_session as new_flappy_session
from game.flappy.window import FlappyWindow
from game.pacman.simulation import new_session as new_pacman_session
from game.pacman.window import PacmanWindow

GAMES = {
    "flappy": (new_flappy_session, FlappyWindow),
    "pacman": (new_pacman_session, PacmanWindow),
}


def make_window(game: str, seed=None):
    if game not in GAMES:
        raise ValueError(f"Unknown game: {game}")
    new_session, window_cls = GAMES[game]
    return window_cls(new_session(rng=random.Random(seed)))


def main():
    parser = argparse.ArgumentParser(description="Play an arcade mini-game")
    parser.add_argument(
        "game",
        type=str,
        choices=sorted(GAMES),
        help="Which game to play",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Random seed for spawns (default: random)",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log captures, lifecycle changes and spawn fallbacks",
    )

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )

    make_window(args.game, seed=args.seed)
    arcade.run()


if __name__ == "__main__":
    main()
