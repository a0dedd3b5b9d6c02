from __future__ import annotations

from enum import Enum
from typing import Optional, Tuple

from .state import AI, HUMAN, Coord, GameState

# Step deltas each side may try; anything else fails a rule below.
HUMAN_STEPS: Tuple[Coord, ...] = ((-1, 0), (0, 1), (0, -1))
AI_STEPS: Tuple[Coord, ...] = ((-1, 0), (1, 0), (0, 1))
SIDE_STEPS = (HUMAN_STEPS, AI_STEPS)


class MoveError(Enum):
    INVALID_PIECE_ID = "invalid_piece_id"
    OUT_OF_BOUNDS = "out_of_bounds"
    OCCUPIED_TARGET = "occupied_target"
    ILLEGAL_STEP = "illegal_step"
    FORBIDDEN_DESTINATION = "forbidden_destination"
    FORBIDDEN_DIRECTION = "forbidden_direction"
    GAME_ALREADY_OVER = "game_already_over"


def check_move(state: GameState, piece_id: str, target: Coord) -> Optional[MoveError]:
    """Return why moving ``piece_id`` to ``target`` is rejected, or None if legal.

    Only the current player's pieces may move. Does not mutate ``state``.
    """
    if state.is_over:
        return MoveError.GAME_ALREADY_OVER

    mover = state.current_player
    piece = state.players[mover].find_piece(piece_id)
    if piece is None:
        return MoveError.INVALID_PIECE_ID

    if not _is_coord(target):
        return MoveError.OUT_OF_BOUNDS
    target = tuple(target)
    if not state.in_bounds(target):
        return MoveError.OUT_OF_BOUNDS

    if state.piece_at(target) is not None:
        return MoveError.OCCUPIED_TARGET

    x, y = piece.position
    new_x, new_y = target
    dx, dy = abs(new_x - x), abs(new_y - y)
    if dx > 1 or dy > 1 or dx * dy != 0:
        return MoveError.ILLEGAL_STEP

    if target in state.destinations[1 - mover]:
        return MoveError.FORBIDDEN_DESTINATION

    if mover == HUMAN and new_x > x:
        return MoveError.FORBIDDEN_DIRECTION
    if mover == AI and new_y < y:
        return MoveError.FORBIDDEN_DIRECTION

    return None


def is_legal(state: GameState, piece_id: str, target: Coord) -> bool:
    return check_move(state, piece_id, target) is None


def _is_coord(target) -> bool:
    # bool is an int subclass but never a coordinate
    return (
        isinstance(target, (tuple, list))
        and len(target) == 2
        and all(isinstance(v, int) and not isinstance(v, bool) for v in target)
    )
