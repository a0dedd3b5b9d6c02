from __future__ import annotations

import math
import time
from dataclasses import dataclass
from typing import List, Optional, Tuple

from loguru import logger

from .evaluator import Evaluator
from .game import Move, apply_move, list_legal_moves
from .state import GameState


@dataclass
class SearchResult:
    best_move: Optional[Move]
    score: float
    nodes: int
    scored_moves: Optional[List[Tuple[Move, float]]] = None
    timed_out: bool = False


class MinimaxSolver:
    """Depth-limited minimax with alpha-beta pruning for the AI side.

    The AI is always player 1 and maximizes; player 0 minimizes. Every node
    works on its own snapshot of the state, so the caller's state is never
    touched. With ``time_limit_s`` unset the search always finishes the full
    depth and is deterministic.
    """

    def __init__(self, game_size: int, depth: int, time_limit_s: Optional[float] = None) -> None:
        if depth < 1:
            raise ValueError(f"Search depth must be at least 1, got {depth}")
        self.game_size = game_size
        self.depth = depth
        self.time_limit_s = time_limit_s
        # tables cover the whole board, which is one wider than the game size
        self.evaluator = Evaluator(game_size + 1)
        self._deadline_ts: Optional[float] = None
        self._nodes = 0

    def evaluate(self, state: GameState) -> float:
        return self.evaluator.evaluate(state)

    def _child(self, state: GameState, move: Move) -> GameState:
        child = state.snapshot()
        apply_move(child, move.piece_id, move.target)
        return child

    def ordered_moves(self, state: GameState) -> List[Move]:
        """Legal moves sorted by the static score one ply ahead, best for the AI first.

        The same order is used for both sides. Equal scores keep enumeration order.
        """
        moves = list_legal_moves(state)
        scores = {move: self.evaluate(self._child(state, move)) for move in moves}
        return sorted(moves, key=lambda m: scores[m], reverse=True)

    def get_best_move(self, state: GameState) -> Optional[Move]:
        return self.search(state).best_move

    def search(self, state: GameState) -> SearchResult:
        self._nodes = 0
        self._deadline_ts = (time.time() + self.time_limit_s) if self.time_limit_s else None

        if state.is_over:
            return SearchResult(best_move=None, score=self.evaluate(state), nodes=0)

        moves = self.ordered_moves(state)
        if not moves:
            return SearchResult(best_move=None, score=self.evaluate(state), nodes=0)

        best_move: Optional[Move] = None
        best_score = -math.inf
        alpha = -math.inf
        beta = math.inf
        scored_moves: List[Tuple[Move, float]] = []
        timed_out = False

        for move in moves:
            try:
                self._guard_time()
                score = self.min_val(self._child(state, move), self.depth - 1, alpha, beta)
            except _SearchTimeout:
                timed_out = True
                break
            scored_moves.append((move, score))
            # strict: ties keep the earlier candidate
            if best_move is None or score > best_score:
                best_score = score
                best_move = move
            alpha = max(alpha, best_score)

        self._deadline_ts = None
        if best_move is None:
            # deadline hit before any candidate finished
            best_move = moves[0]
            best_score = self.evaluate(self._child(state, best_move))
        if timed_out:
            logger.warning(
                f"Search deadline of {self.time_limit_s}s hit after "
                f"{len(scored_moves)}/{len(moves)} root moves"
            )
        logger.debug(
            f"Searched depth {self.depth}: {self._nodes} nodes, "
            f"best {best_move.piece_id} -> {best_move.target} ({best_score})"
        )
        return SearchResult(
            best_move=best_move,
            score=best_score,
            nodes=self._nodes,
            scored_moves=scored_moves,
            timed_out=timed_out,
        )

    def max_val(self, state: GameState, depth: int, alpha: float = -math.inf, beta: float = math.inf) -> float:
        self._nodes += 1
        if depth == 0 or state.is_over:
            return self.evaluate(state)

        value = -math.inf
        for move in self.ordered_moves(state):
            self._guard_time()
            value = max(value, self.min_val(self._child(state, move), depth - 1, alpha, beta))
            alpha = max(alpha, value)
            if alpha >= beta:
                break
        return value

    def min_val(self, state: GameState, depth: int, alpha: float = -math.inf, beta: float = math.inf) -> float:
        self._nodes += 1
        if depth == 0 or state.is_over:
            return self.evaluate(state)

        value = math.inf
        for move in self.ordered_moves(state):
            self._guard_time()
            value = min(value, self.max_val(self._child(state, move), depth - 1, alpha, beta))
            beta = min(beta, value)
            if alpha >= beta:
                break
        return value

    def _guard_time(self) -> None:
        if self._deadline_ts is None:
            return
        if time.time() >= self._deadline_ts:
            raise _SearchTimeout()


class _SearchTimeout(Exception):
    pass
