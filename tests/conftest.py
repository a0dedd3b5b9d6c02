from __future__ import annotations

from typing import Iterable, Optional

import pytest

from dodgem.state import (
    AI_COLOR,
    HUMAN_COLOR,
    GameState,
    IdSource,
    Piece,
    Player,
    destination_zones,
    empty_board,
)


def build_state(
    size: int,
    human: Iterable,
    ai: Iterable,
    current: int = 0,
    ids: Optional[IdSource] = None,
) -> GameState:
    """Place pieces at the given cells instead of the opening layout."""
    ids = ids or IdSource()
    players = [Player("human", ids=ids), Player("computer", is_ai=True, ids=ids)]
    board = empty_board(size + 1)
    for index, (cells, color) in enumerate(((human, HUMAN_COLOR), (ai, AI_COLOR))):
        for x, y in cells:
            piece = Piece(ids.make("piece"), players[index].id, color, (x, y))
            players[index].pieces.append(piece)
            board[x][y] = piece
    return GameState(
        id=ids.make("game"),
        size=size,
        players=players,
        board=board,
        destinations=destination_zones(size),
        current_player=current,
    )


@pytest.fixture
def make_state():
    return build_state


@pytest.fixture
def ids():
    return IdSource()
