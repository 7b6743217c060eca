"""Command-line entry point: self-play games or the HTTP server."""

import argparse
import logging
import random
from typing import Optional

from varichess import Color, Engine, move_to_notation, outcome, standard_board


def play_game(depth: int, turns: int, opponent: str, seed: Optional[int] = None) -> None:
    """Play from the standard position, printing each move."""
    white = Engine(depth=depth)
    black = Engine(depth=depth, rng=random.Random(seed))
    board = standard_board()
    player = Color.WHITE
    moves = []

    for _ in range(turns):
        engine = white if player == Color.WHITE else black
        if player == Color.BLACK and opponent == "random":
            move = engine.random_move(board, player)
        else:
            move = engine.search(board, player)
        if move is None:
            print(f"\nNo more valid moves: {outcome(board, player)}")
            break
        pos, actions = move
        notation = move_to_notation(pos, actions, board.height)
        moves.append(notation)
        board = board.play(player, pos, actions)
        print(f"{len(moves)}. {player.value} {notation}")
        player = player.next()
    else:
        print("\nGame too long")

    print(board)
    print(" ".join(moves))


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="varichess engine")
    parser.add_argument(
        "--depth",
        "-d",
        type=int,
        default=3,
        help="Search depth in plies (default: 3)",
    )
    parser.add_argument(
        "--turns",
        "-t",
        type=int,
        default=100,
        help="Maximum number of plies to play (default: 100)",
    )
    parser.add_argument(
        "--opponent",
        choices=["minmax", "random"],
        default="minmax",
        help="How Black picks its moves (default: minmax)",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Seed for random moves",
    )
    parser.add_argument(
        "--serve",
        action="store_true",
        help="Run the HTTP API instead of a self-play game",
    )
    parser.add_argument(
        "--host",
        type=str,
        default="0.0.0.0",
        help="Host to bind to (default: 0.0.0.0)",
    )
    parser.add_argument(
        "--port",
        "-p",
        type=int,
        default=8000,
        help="Port to bind to (default: 8000)",
    )
    parser.add_argument(
        "--reload",
        action="store_true",
        help="Enable auto-reload for development",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable debug logging",
    )

    args = parser.parse_args()
    if args.depth < 1:
        parser.error("--depth must be at least 1")

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO)

    if args.serve:
        import uvicorn

        uvicorn.run("api:app", host=args.host, port=args.port, reload=args.reload)
    else:
        play_game(args.depth, args.turns, args.opponent, args.seed)
