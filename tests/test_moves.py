"""Unit tests for piece-specific movement rules."""

import pytest
import sys
import os

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from varichess import (
    Board, Color, Go, PieceType, Position, Promotion, moves_for, standard_board,
)


def sq(name, height=8):
    return Position.from_square(name, height)


def moves_at(board, square):
    pos = sq(square, board.height)
    return moves_for(board, pos, board.get(pos))


def as_set(moves):
    return {tuple(actions) for actions in moves}


def destinations(moves):
    return {actions[0].pos for actions in moves}


class TestPawnMoves:
    """Test pawn movement rules."""

    def test_initial_step_and_leap(self):
        moves = moves_at(standard_board(), "e2")

        assert as_set(moves) == {(Go(sq("e3")),), (Go(sq("e4")),)}

    def test_black_pawn_moves_down(self):
        moves = moves_at(standard_board(), "d7")

        assert as_set(moves) == {(Go(sq("d6")),), (Go(sq("d5")),)}

    def test_blocked_pawn(self):
        board = Board.from_setup(8, 8, {"e2": "P", "e3": "n"})

        assert moves_at(board, "e2") == []

    def test_leap_blocked_step_free(self):
        board = Board.from_setup(8, 8, {"e2": "P", "e4": "n"})

        assert as_set(moves_at(board, "e2")) == {(Go(sq("e3")),)}

    def test_no_leap_after_moving(self):
        board = Board.from_setup(8, 8, {"e3": "P"})

        assert as_set(moves_at(board, "e3")) == {(Go(sq("e4")),)}

    def test_diagonal_capture_only_opponents(self):
        board = Board.from_setup(8, 8, {"e4": "P", "d5": "p", "f5": "N"})

        assert as_set(moves_at(board, "e4")) == {(Go(sq("e5")),), (Go(sq("d5")),)}

    def test_no_forward_capture(self):
        board = Board.from_setup(8, 8, {"e4": "P", "e5": "p"})

        assert moves_at(board, "e4") == []

    def test_promotion(self):
        board = Board.from_setup(8, 8, {"e7": "P", "d8": "r"})

        assert as_set(moves_at(board, "e7")) == {
            (Go(sq("e8")), Promotion(PieceType.QUEEN)),
            (Go(sq("e8")), Promotion(PieceType.KNIGHT)),
            (Go(sq("d8")), Promotion(PieceType.QUEEN)),
            (Go(sq("d8")), Promotion(PieceType.KNIGHT)),
        }

    def test_black_promotion(self):
        board = Board.from_setup(8, 8, {"a2": "p"})

        assert as_set(moves_at(board, "a2")) == {
            (Go(sq("a1")), Promotion(PieceType.QUEEN)),
            (Go(sq("a1")), Promotion(PieceType.KNIGHT)),
        }


class TestKnightMoves:
    """Test knight movement rules."""

    def test_corner(self):
        board = Board.from_setup(8, 8, {"a1": "N"})

        assert destinations(moves_at(board, "a1")) == {sq("b3"), sq("c2")}

    def test_center(self):
        board = Board.from_setup(8, 8, {"d4": "N"})

        assert len(moves_at(board, "d4")) == 8

    def test_initial_position(self):
        assert destinations(moves_at(standard_board(), "b1")) == {sq("a3"), sq("c3")}

    def test_never_lands_on_own_piece(self):
        board = standard_board()
        for pos, piece in board.pieces():
            if piece.kind not in (PieceType.KNIGHT, PieceType.KING):
                continue
            for actions in moves_for(board, pos, piece):
                target = board.get(actions[0].pos)
                assert target is None or target.color != piece.color

    def test_captures_opponent(self):
        board = Board.from_setup(8, 8, {"d4": "N", "e6": "p", "c6": "P"})

        found = destinations(moves_at(board, "d4"))

        assert sq("e6") in found
        assert sq("c6") not in found


class TestSlidingMoves:
    """Test bishop, rook and queen rays."""

    def test_blocked_bishop(self):
        assert moves_at(standard_board(), "c1") == []

    def test_rook_rays_stop_at_first_occupant(self):
        board = Board.from_setup(8, 8, {"a1": "R", "a4": "P", "d1": "p", "e1": "q"})

        assert destinations(moves_at(board, "a1")) == {
            sq("a2"), sq("a3"), sq("b1"), sq("c1"), sq("d1"),
        }

    def test_bishop_does_not_jump(self):
        board = Board.from_setup(8, 8, {"c1": "B", "e3": "p", "f4": "p"})

        found = destinations(moves_at(board, "c1"))

        assert sq("e3") in found
        assert sq("f4") not in found
        assert sq("a3") in found

    def test_queen_on_empty_board(self):
        board = Board.from_setup(8, 8, {"d4": "Q"})

        assert len(moves_at(board, "d4")) == 27

    def test_rook_on_narrow_board(self):
        board = Board.from_setup(3, 5, {"a5": "R"})

        assert len(moves_at(board, "a5")) == 6


class TestKingMoves:
    """Test king movement rules."""

    def test_center(self):
        board = Board.from_setup(8, 8, {"d4": "K"})

        assert len(moves_at(board, "d4")) == 8

    def test_corner(self):
        board = Board.from_setup(8, 8, {"h1": "K"})

        assert destinations(moves_at(board, "h1")) == {sq("g1"), sq("g2"), sq("h2")}

    def test_blocked_in_initial_position(self):
        assert moves_at(standard_board(), "e1") == []

    @pytest.mark.parametrize("color", [Color.WHITE, Color.BLACK])
    def test_no_castling(self, color):
        setup = {"e1": "K", "h1": "R"} if color == Color.WHITE else {"e8": "k", "h8": "r"}
        board = Board.from_setup(8, 8, setup)
        king = "e1" if color == Color.WHITE else "e8"

        assert all(len(actions) == 1 for actions in moves_at(board, king))
        assert all(abs(actions[0].pos.x - 4) <= 1 for actions in moves_at(board, king))
