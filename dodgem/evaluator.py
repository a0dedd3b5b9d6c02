from __future__ import annotations

import math
from typing import List

from .state import AI, HUMAN, GameState

Matrix = List[List[int]]


def ai_matrix(n: int) -> Matrix:
    """Positional values for AI pieces on an ``n`` x ``n`` grid, indexed [x][y]."""
    matrix = [[5 * (n - 1) * n] * n for _ in range(n)]
    step = 5 * (n - 1)
    for i in range(1, n):
        base = 5 * (n - i - 1)
        for j in range(n - 1):
            matrix[i][j] = base + j * step
    return matrix


def human_matrix(n: int) -> Matrix:
    """Positional values for human pieces; more negative is better for the human."""
    matrix = [[-5 * (n - 1) * n] * n for _ in range(n)]
    step = 5 * (n - 1)
    for i in range(1, n):
        base = step * (n - i - 1)
        for j in range(n - 1):
            matrix[i][j] = -base - j * 5
    return matrix


def block_bonus(n: int) -> int:
    return 5 * n * (n - 2)


def indirect_block_bonus(n: int) -> int:
    return 5 * (n - 1) * (n - 2)


class Evaluator:
    """Static evaluation of a Dodgem position.

    Positive scores favor the AI side (player 1), negative the human side.
    A finished game scores +inf or -inf. ``size`` is the side of the grid the
    tables cover and must be at least the board side.
    """

    def __init__(self, size: int) -> None:
        self.size = size
        self.ai_table = ai_matrix(size)
        self.human_table = human_matrix(size)
        self.block = block_bonus(size)
        self.indirect_block = indirect_block_bonus(size)

    def evaluate(self, state: GameState) -> float:
        if state.is_over:
            if state.winner == AI:
                return math.inf
            if state.winner == HUMAN:
                return -math.inf

        score = 0
        for piece in state.players[AI].pieces:
            x, y = piece.position
            score += self.ai_table[x][y]
        for piece in state.players[HUMAN].pieces:
            x, y = piece.position
            score += self.human_table[x][y]

        ai_id = state.players[AI].id
        human_id = state.players[HUMAN].id

        def owner_at(x: int, y: int):
            if not state.in_bounds((x, y)):
                return None
            cell = state.board[x][y]
            return cell.owner if cell else None

        # Sign pattern kept as tuned; see DESIGN.md.
        for piece in state.players[HUMAN].pieces:
            x, y = piece.position
            if owner_at(x, y - 1) == ai_id:
                score -= self.block
            if owner_at(x, y - 2) == ai_id:
                score -= self.indirect_block
            if owner_at(x - 1, y) == human_id:
                score += self.block
            if owner_at(x - 2, y) == human_id:
                score += self.indirect_block
        return score
