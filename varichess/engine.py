"""Move search: negamax with alpha-beta pruning."""

import logging
import random
from typing import List, Optional, Tuple

from .board import Board, Candidate
from .evaluation import MaterialEvaluator, move_value
from .pieces import Color

logger = logging.getLogger(__name__)


class Engine:
    """Fixed-depth search engine."""

    def __init__(
        self,
        depth: int = 3,
        evaluator: Optional[MaterialEvaluator] = None,
        rng: Optional[random.Random] = None,
    ):
        """Initialize engine.

        Args:
            depth: Search depth in plies, at least 1
            evaluator: Leaf evaluator (defaults to MaterialEvaluator)
            rng: Source of randomness for ``random_move``; anything with a
                ``randrange`` method. Defaults to a fresh ``random.Random``.
        """
        if depth < 1:
            raise ValueError(f"Search depth must be at least 1, got {depth}")
        self.depth = depth
        self.evaluator = evaluator or MaterialEvaluator()
        self.rng = rng or random.Random()
        self.nodes_searched = 0

    def search(self, board: Board, color: Color) -> Optional[Candidate]:
        """Find the best move for ``color``, or None if it has nothing to play."""
        self.nodes_searched = 0

        best_move = None
        best_score = float("-inf")
        for pos, actions in board.candidates(color, check_legality=True):
            score = -self._negamax(
                board.play(color, pos, actions),
                self.depth - 1,
                float("-inf"),
                -best_score,
                color.next(),
            )
            # Strictly better only: the first of equal moves is kept
            if score > best_score or best_move is None:
                best_score = score
                best_move = (pos, actions)

        if best_move is not None:
            logger.debug(
                "best move from %s scored %.3f (%d nodes)",
                best_move[0], best_score, self.nodes_searched,
            )
        return best_move

    def random_move(self, board: Board, color: Color) -> Optional[Candidate]:
        """Pick a random origin, then one of its moves.

        Origins are equally likely no matter how many moves each has.
        """
        moves = board.moves(color, check_legality=True)
        if not moves:
            return None
        origins = list(moves)
        origin = origins[self.rng.randrange(len(origins))]
        options = moves[origin]
        return origin, options[self.rng.randrange(len(options))]

    def _order_moves(self, board: Board, moves: List[Candidate], prune_unsafe: bool) -> List[Candidate]:
        """Sort moves by descending move value, dropping losing ones if asked."""
        scored: List[Tuple[float, Candidate]] = []
        for pos, actions in moves:
            value = move_value(board, pos, actions)
            if prune_unsafe and value < 0:
                continue
            scored.append((value, (pos, actions)))
        # sort is stable: equal values keep generation order
        scored.sort(key=lambda item: item[0], reverse=True)
        return [move for _, move in scored]

    def _negamax(self, board: Board, depth: int, alpha: float, beta: float, color: Color) -> float:
        """Score ``board`` for ``color`` to move, ``depth`` plies deep."""
        self.nodes_searched += 1

        if depth == 0:
            return self.evaluator.evaluate(board, color)

        # Moves that expose the king still count here: the king's value
        # makes the reply that takes it decisive
        moves = self._order_moves(board, board.candidates(color), prune_unsafe=depth == 1)

        best_score = float("-inf")
        for pos, actions in moves:
            score = -self._negamax(
                board.play(color, pos, actions),
                depth - 1,
                -beta,
                -alpha,
                color.next(),
            )
            best_score = max(best_score, score)
            alpha = max(alpha, best_score)
            if alpha >= beta:
                break
        return best_score


def minmax(board: Board, color: Color, depth: int) -> Optional[Candidate]:
    """Best move for ``color`` searched ``depth`` plies deep."""
    return Engine(depth=depth).search(board, color)


def random_move(board: Board, color: Color, rng: Optional[random.Random] = None) -> Optional[Candidate]:
    """Uniformly random origin, then uniformly random move from it."""
    return Engine(depth=1, rng=rng).random_move(board, color)
