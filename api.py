"""FastAPI backend for varichess games."""

import asyncio
import logging
import os
import random
from concurrent.futures import ThreadPoolExecutor
from contextlib import asynccontextmanager
from time import time
from typing import Dict, List, Optional, Tuple

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel, Field

from varichess import CHECKMATE, Board, Color, Engine, move_to_notation, outcome, parse_move, standard_board
from varichess.board import Candidate

logger = logging.getLogger(__name__)

# Default search depth of new games (override with VARICHESS_DEPTH)
DEFAULT_DEPTH = int(os.environ.get("VARICHESS_DEPTH", "3"))
MAX_DEPTH = 6
MAX_UNDO = 50

# Thread pool for CPU-intensive searches, created on first use
_executor: Optional[ThreadPoolExecutor] = None


def get_executor() -> ThreadPoolExecutor:
    global _executor
    if _executor is None:
        _executor = ThreadPoolExecutor(max_workers=4)
    return _executor


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    global _executor
    yield
    if _executor is not None:
        _executor.shutdown(wait=True)
        _executor = None


app = FastAPI(title="varichess", lifespan=lifespan)


class GameState:
    """A game in progress.

    Boards are immutable, so the undo stack simply keeps earlier boards.
    """

    def __init__(self, board: Board, engine: Engine, side_to_move: Color):
        self.board = board
        self.engine = engine
        self.side_to_move = side_to_move
        self.move_history: List[str] = []
        self.undo_stack: List[Tuple[Board, Color]] = []
        self.lock = asyncio.Lock()
        self.last_access = time()
        self.is_processing = False

    def apply(self, move: Candidate) -> str:
        """Play ``move`` for the side to move and return its notation."""
        pos, actions = move
        notation = move_to_notation(pos, actions, self.board.height)
        self.undo_stack.append((self.board, self.side_to_move))
        if len(self.undo_stack) > MAX_UNDO:
            self.undo_stack.pop(0)
        self.board = self.board.play(self.side_to_move, pos, actions)
        self.side_to_move = self.side_to_move.next()
        self.move_history.append(notation)
        return notation

    def undo(self) -> None:
        self.board, self.side_to_move = self.undo_stack.pop()
        self.move_history.pop()


games: Dict[str, GameState] = {}
games_lock = asyncio.Lock()


async def get_game_state(game_id: str) -> GameState:
    """Get game state with proper error handling."""
    async with games_lock:
        if game_id not in games:
            raise HTTPException(status_code=404, detail="Game not found")
        game_state = games[game_id]
        game_state.last_access = time()
        return game_state


class NewGameRequest(BaseModel):
    """Request model for creating a new game."""

    game_id: str
    depth: int = Field(default=DEFAULT_DEPTH, ge=1, le=MAX_DEPTH)
    side_to_move: Color = Color.WHITE
    width: int = Field(default=8, ge=1, le=26)
    height: int = Field(default=8, ge=1, le=26)
    custom_setup: Optional[Dict[str, str]] = None  # e.g. {"e1": "K", "e8": "k"}
    seed: Optional[int] = None  # seeds random moves


class MoveRequest(BaseModel):
    """Request model for making a move."""

    game_id: str
    move: str  # e.g. "e2e4", "e7e8=Q"


class BoardResponse(BaseModel):
    """Response model for board state."""

    board: List[List[Optional[str]]]  # rows from the top rank down
    width: int
    height: int
    side_to_move: str
    game_over: bool
    result: Optional[str] = None  # "checkmate" or "stalemate"
    winner: Optional[str] = None
    in_check: bool
    legal_moves: List[str]
    move_history: List[str]
    can_undo: bool = False


def board_rows(board: Board) -> List[List[Optional[str]]]:
    rows = []
    for y in range(board.height):
        row = []
        for x in range(board.width):
            piece = board.squares[x + y * board.width]
            row.append(piece.symbol if piece is not None else None)
        rows.append(row)
    return rows


@app.post("/api/new-game")
async def new_game(request: NewGameRequest):
    """Create a new game."""
    if request.custom_setup:
        try:
            board = Board.from_setup(request.width, request.height, request.custom_setup)
        except ValueError as e:
            raise HTTPException(status_code=400, detail=f"Invalid setup: {e}")
    elif (request.width, request.height) != (8, 8):
        raise HTTPException(
            status_code=400, detail="Board sizes other than 8x8 need a custom_setup"
        )
    else:
        board = standard_board()

    engine = Engine(depth=request.depth, rng=random.Random(request.seed))

    async with games_lock:
        games[request.game_id] = GameState(board, engine, request.side_to_move)

    logger.info("new game %s (%dx%d, depth %d)", request.game_id, board.width, board.height, request.depth)
    return {"status": "ok", "game_id": request.game_id}


@app.get("/api/board/{game_id}", response_model=BoardResponse)
async def get_board(game_id: str):
    """Get current board state."""
    game_state = await get_game_state(game_id)

    async with game_state.lock:
        board = game_state.board
        color = game_state.side_to_move
        move_history = list(game_state.move_history)
        can_undo = len(game_state.undo_stack) > 0

    legal_moves = [
        move_to_notation(pos, actions, board.height)
        for pos, actions in board.candidates(color, check_legality=True)
    ]
    result = None if legal_moves else outcome(board, color)
    winner = color.next().value if result == CHECKMATE else None

    return BoardResponse(
        board=board_rows(board),
        width=board.width,
        height=board.height,
        side_to_move=color.value,
        game_over=result is not None,
        result=result,
        winner=winner,
        in_check=board.is_in_check(color),
        legal_moves=legal_moves,
        move_history=move_history,
        can_undo=can_undo,
    )


@app.post("/api/move")
async def make_move(request: MoveRequest):
    """Make a move."""
    game_state = await get_game_state(request.game_id)

    async with game_state.lock:
        try:
            move = parse_move(game_state.board, game_state.side_to_move, request.move)
        except ValueError as e:
            raise HTTPException(status_code=400, detail=str(e))
        notation = game_state.apply(move)

    return {"status": "ok", "move": notation}


def _run_ai_search(engine: Engine, board: Board, color: Color) -> Tuple[Optional[Candidate], int]:
    """Run the search in a worker thread."""
    move = engine.search(board, color)
    return move, engine.nodes_searched


@app.post("/api/ai-move/{game_id}")
async def ai_move(game_id: str):
    """Let the engine play the side to move."""
    game_state = await get_game_state(game_id)

    async with game_state.lock:
        if game_state.is_processing:
            raise HTTPException(
                status_code=409, detail="AI is already processing a move. Please wait."
            )
        game_state.is_processing = True
        board = game_state.board
        color = game_state.side_to_move

    try:
        # The board snapshot is immutable, so the search runs without the lock
        loop = asyncio.get_running_loop()
        best_move, nodes_searched = await loop.run_in_executor(
            get_executor(), _run_ai_search, game_state.engine, board, color
        )

        if best_move is None:
            raise HTTPException(status_code=400, detail="No legal moves available")

        async with game_state.lock:
            if game_state.board is not board:
                raise HTTPException(status_code=409, detail="Board changed during search")
            notation = game_state.apply(best_move)

        logger.info("game %s: %s played %s (%d nodes)", game_id, color.value, notation, nodes_searched)
        return {"status": "ok", "move": notation, "nodes_searched": nodes_searched}
    finally:
        async with game_state.lock:
            game_state.is_processing = False


@app.post("/api/random-move/{game_id}")
async def random_ai_move(game_id: str):
    """Play a random legal move for the side to move."""
    game_state = await get_game_state(game_id)

    async with game_state.lock:
        move = game_state.engine.random_move(game_state.board, game_state.side_to_move)
        if move is None:
            raise HTTPException(status_code=400, detail="No legal moves available")
        notation = game_state.apply(move)

    return {"status": "ok", "move": notation}


@app.post("/api/undo/{game_id}")
async def undo_move(game_id: str):
    """Undo the last move."""
    game_state = await get_game_state(game_id)

    async with game_state.lock:
        if not game_state.undo_stack:
            raise HTTPException(status_code=400, detail="No moves to undo")
        game_state.undo()

    return {"status": "ok", "message": "Move undone successfully"}
