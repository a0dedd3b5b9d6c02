from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, NamedTuple, Optional

from loguru import logger

from .config import SETTINGS
from .rules import SIDE_STEPS, MoveError, check_move
from .state import (
    DEFAULT_IDS,
    SIDE_COLORS,
    Coord,
    GameState,
    IdSource,
    Player,
    initial_state,
)


class Move(NamedTuple):
    piece_id: str
    target: Coord


@dataclass
class MoveResult:
    ok: bool
    error: Optional[MoveError] = None
    scored: bool = False


class GameNotStartedError(RuntimeError):
    pass


def apply_move(state: GameState, piece_id: str, target: Coord) -> MoveResult:
    """Move a piece of the current player, score it and pass the turn.

    A rejected move leaves ``state`` untouched.
    """
    error = check_move(state, piece_id, target)
    if error is not None:
        return MoveResult(ok=False, error=error)

    mover = state.current_player
    player = state.players[mover]
    piece = player.find_piece(piece_id)
    target = tuple(target)

    old_x, old_y = piece.position
    state.board[old_x][old_y] = None
    piece.position = target
    new_x, new_y = target
    state.board[new_x][new_y] = piece

    scored = target in state.destinations[mover]
    if scored:
        state.board[new_x][new_y] = None
        player.pieces = [p for p in player.pieces if p.id != piece_id]

    if not player.pieces:
        state.is_over = True
        state.winner = mover

    state.current_player = 1 - mover
    state.ply += 1
    return MoveResult(ok=True, scored=scored)


def list_legal_moves(state: GameState) -> List[Move]:
    """Legal moves of the current player, piece by piece in creation order."""
    if state.is_over:
        return []
    mover = state.current_player
    moves: List[Move] = []
    for piece in state.players[mover].pieces:
        x, y = piece.position
        for dx, dy in SIDE_STEPS[mover]:
            target = (x + dx, y + dy)
            if check_move(state, piece.id, target) is None:
                moves.append(Move(piece.id, target))
    return moves


class GameEngine:
    """Owns one game and exposes the turn-level API to a driver.

    ``start`` must be called before any other operation.
    """

    def __init__(
        self,
        size: Optional[int] = None,
        depth: Optional[int] = None,
        ids: Optional[IdSource] = None,
        time_limit_s: Optional[float] = None,
    ) -> None:
        self.size = size if size is not None else SETTINGS.game_size
        self.depth = depth if depth is not None else SETTINGS.search_depth
        self.time_limit_s = time_limit_s if time_limit_s is not None else SETTINGS.time_limit_s
        if self.size < 2:
            raise ValueError(f"Game size must be at least 2, got {self.size}")
        self.ids = ids or DEFAULT_IDS
        self.state: Optional[GameState] = None
        self.solver = None
        self.last_error: Optional[MoveError] = None

    def start(self, player_a: Player, player_b: Player) -> GameState:
        # imported here: ai depends on this module
        from .ai import MinimaxSolver

        self.state = initial_state(self.size, player_a, player_b, self.ids)
        self.last_error = None
        self.solver = MinimaxSolver(self.size, self.depth, self.time_limit_s) if player_b.is_ai else None
        logger.info(
            f"Game {self.state.id} started: size={self.size} "
            f"{player_a.name} vs {player_b.name}{' (AI)' if player_b.is_ai else ''}"
        )
        return self.state

    def _require_started(self) -> GameState:
        if self.state is None:
            raise GameNotStartedError("GameEngine.start() must be called first")
        return self.state

    @property
    def current_player(self) -> Player:
        state = self._require_started()
        return state.players[state.current_player]

    def play_turn(self, piece_id: str, target: Coord) -> bool:
        state = self._require_started()
        mover = state.current_player
        result = apply_move(state, piece_id, target)
        if not result.ok:
            self.last_error = result.error
            logger.debug(f"Rejected {piece_id} -> {tuple(target)}: {result.error.value}")
            return False

        self.last_error = None
        logger.debug(
            f"Player {mover} moved {piece_id} -> {tuple(target)}{' and scored' if result.scored else ''}"
        )
        if state.is_over:
            logger.info(f"Game {state.id} over, winner: player {state.winner}")
        return True

    def request_ai_move(self) -> Optional[Move]:
        """Best move for the AI side, computed by the attached solver.

        None when the game is over or it is not the AI's turn. Nothing is
        applied; the caller decides when to play it.
        """
        state = self._require_started()
        if self.solver is None:
            raise GameNotStartedError("No AI player attached to this game")
        if state.is_over:
            return None
        if not state.players[state.current_player].is_ai:
            return None
        return self.solver.get_best_move(state)

    def apply_ai_move(self) -> Optional[Move]:
        move = self.request_ai_move()
        if move is None:
            return None
        if not self.play_turn(move.piece_id, move.target):
            return None
        return move

    def legal_moves(self) -> List[Move]:
        return list_legal_moves(self._require_started())

    def snapshot(self) -> GameState:
        return self._require_started().snapshot()

    def clone(self) -> GameState:
        return self._require_started().clone(self.ids)

    def status(self) -> Dict[str, object]:
        state = self._require_started()
        board = [[cell.color if cell else None for cell in row] for row in state.board]
        pieces = [
            {"id": piece.id, "player": index, "color": SIDE_COLORS[index], "position": list(piece.position)}
            for index, player in enumerate(state.players)
            for piece in player.pieces
        ]
        return {
            "id": state.id,
            "size": state.size,
            "board": board,
            "pieces": pieces,
            "players": [
                {"id": p.id, "name": p.name, "is_ai": p.is_ai, "remaining": len(p.pieces)}
                for p in state.players
            ],
            "current_player": state.current_player,
            "winner": state.winner,
            "is_over": state.is_over,
            "legal_moves": [
                {"piece": move.piece_id, "to": list(move.target)} for move in list_legal_moves(state)
            ],
            "last_error": self.last_error.value if self.last_error else None,
        }
