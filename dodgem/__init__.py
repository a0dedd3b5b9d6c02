"""Dodgem game engine with an alpha-beta AI opponent.

Modules:
- state: pieces, players, board and the game state record
- rules: move legality and rejection reasons
- game: move application, enumeration and the GameEngine facade
- evaluator: positional tables and static evaluation
- ai: minimax with alpha-beta pruning
"""

from .ai import MinimaxSolver, SearchResult
from .evaluator import Evaluator
from .game import GameEngine, GameNotStartedError, Move, MoveResult
from .rules import MoveError
from .state import GameState, IdSource, Piece, Player

__all__ = [
    "GameEngine",
    "GameNotStartedError",
    "GameState",
    "IdSource",
    "MinimaxSolver",
    "Move",
    "MoveError",
    "MoveResult",
    "Piece",
    "Player",
    "SearchResult",
    "Evaluator",
]
