from __future__ import annotations

from dataclasses import dataclass
from itertools import count
from typing import FrozenSet, List, Optional, Tuple

Coord = Tuple[int, int]

HUMAN = 0
AI = 1
HUMAN_COLOR = "red"
AI_COLOR = "blue"
SIDE_COLORS = (HUMAN_COLOR, AI_COLOR)


class IdSource:
    """Sequential id generator.

    Ids look like ``piece-7``. Pass a fresh source to get reproducible ids.
    """

    def __init__(self, start: int = 1) -> None:
        self._counter = count(start)

    def make(self, kind: str) -> str:
        return f"{kind}-{next(self._counter)}"


DEFAULT_IDS = IdSource()


@dataclass
class Piece:
    id: str
    owner: str
    color: str
    position: Coord

    def snapshot(self) -> "Piece":
        return Piece(self.id, self.owner, self.color, self.position)

    def clone(self, ids: IdSource, owner: Optional[str] = None) -> "Piece":
        return Piece(ids.make("piece"), owner or self.owner, self.color, self.position)


class Player:
    """A side of the game and the pieces it still has on the board.

    ``pieces`` is kept in creation order.
    """

    def __init__(
        self,
        name: str,
        is_ai: bool = False,
        ids: Optional[IdSource] = None,
        player_id: Optional[str] = None,
    ) -> None:
        self.id = player_id or (ids or DEFAULT_IDS).make("player")
        self.name = name
        self.is_ai = is_ai
        self.pieces: List[Piece] = []

    def find_piece(self, piece_id: str) -> Optional[Piece]:
        for piece in self.pieces:
            if piece.id == piece_id:
                return piece
        return None

    def snapshot(self) -> "Player":
        copy = Player(self.name, self.is_ai, player_id=self.id)
        copy.pieces = [piece.snapshot() for piece in self.pieces]
        return copy

    def clone(self, ids: IdSource) -> "Player":
        copy = Player(self.name, self.is_ai, ids=ids)
        copy.pieces = [piece.clone(ids, owner=copy.id) for piece in self.pieces]
        return copy

    def __repr__(self) -> str:
        return f"Player({self.name!r}, is_ai={self.is_ai}, pieces={len(self.pieces)})"


def destination_zones(size: int) -> Tuple[FrozenSet[Coord], FrozenSet[Coord]]:
    """Scoring cells for each side of a game of ``size``."""
    human = frozenset((0, i) for i in range(size))
    ai = frozenset((i + 1, size) for i in range(size))
    return human, ai


def empty_board(side: int) -> List[List[Optional[Piece]]]:
    return [[None] * side for _ in range(side)]


@dataclass
class GameState:
    """All mutable data of one game.

    The board is indexed ``board[x][y]`` and has side ``size + 1``. A cell
    holds the piece standing on it or ``None``.
    """

    id: str
    size: int
    players: List[Player]
    board: List[List[Optional[Piece]]]
    destinations: Tuple[FrozenSet[Coord], FrozenSet[Coord]]
    current_player: int = HUMAN
    winner: Optional[int] = None
    is_over: bool = False
    # bumped on every applied move
    ply: int = 0

    @property
    def board_size(self) -> int:
        return self.size + 1

    def in_bounds(self, pos: Coord) -> bool:
        x, y = pos
        return 0 <= x < self.board_size and 0 <= y < self.board_size

    def piece_at(self, pos: Coord) -> Optional[Piece]:
        x, y = pos
        return self.board[x][y]

    def find_piece(self, piece_id: str) -> Optional[Tuple[int, Piece]]:
        for index, player in enumerate(self.players):
            piece = player.find_piece(piece_id)
            if piece is not None:
                return index, piece
        return None

    def snapshot(self) -> "GameState":
        """Deep copy that keeps every id and field."""
        players = [player.snapshot() for player in self.players]
        return GameState(
            id=self.id,
            size=self.size,
            players=players,
            board=_board_for(players, self.board_size),
            destinations=self.destinations,
            current_player=self.current_player,
            winner=self.winner,
            is_over=self.is_over,
            ply=self.ply,
        )

    def clone(self, ids: Optional[IdSource] = None) -> "GameState":
        """Deep copy with fresh ids for the game, its players and pieces."""
        ids = ids or DEFAULT_IDS
        players = [player.clone(ids) for player in self.players]
        return GameState(
            id=ids.make("game"),
            size=self.size,
            players=players,
            board=_board_for(players, self.board_size),
            destinations=self.destinations,
            current_player=self.current_player,
            winner=self.winner,
            is_over=self.is_over,
            ply=self.ply,
        )

    def render(self) -> str:
        return "\n".join(
            " | ".join(cell.color if cell else "_" for cell in row) for row in self.board
        )


def _board_for(players: List[Player], side: int) -> List[List[Optional[Piece]]]:
    board = empty_board(side)
    for player in players:
        for piece in player.pieces:
            x, y = piece.position
            board[x][y] = piece
    return board


def initial_state(
    size: int, human: Player, ai: Player, ids: Optional[IdSource] = None
) -> GameState:
    """Lay out a fresh game.

    Each side gets ``size - 1`` pieces: the human side along ``x == size``
    and the AI side along ``y == 0``. Any pieces the players held before are
    discarded.
    """
    if size < 2:
        raise ValueError(f"Game size must be at least 2, got {size}")
    ids = ids or DEFAULT_IDS
    human.pieces = []
    ai.pieces = []
    board = empty_board(size + 1)
    for i in range(1, size):
        human_piece = Piece(ids.make("piece"), human.id, HUMAN_COLOR, (size, i))
        ai_piece = Piece(ids.make("piece"), ai.id, AI_COLOR, (i, 0))
        board[size][i] = human_piece
        board[i][0] = ai_piece
        human.pieces.append(human_piece)
        ai.pieces.append(ai_piece)

    return GameState(
        id=ids.make("game"),
        size=size,
        players=[human, ai],
        board=board,
        destinations=destination_zones(size),
    )
