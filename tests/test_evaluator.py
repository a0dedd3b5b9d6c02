from __future__ import annotations

import math

from dodgem.evaluator import (
    Evaluator,
    ai_matrix,
    block_bonus,
    human_matrix,
    indirect_block_bonus,
)
from dodgem.game import apply_move


def test_ai_matrix_size_4():
    assert ai_matrix(4) == [
        [60, 60, 60, 60],
        [10, 25, 40, 60],
        [5, 20, 35, 60],
        [0, 15, 30, 60],
    ]


def test_human_matrix_size_4():
    assert human_matrix(4) == [
        [-60, -60, -60, -60],
        [-30, -35, -40, -60],
        [-15, -20, -25, -60],
        [0, -5, -10, -60],
    ]


def test_matrix_shapes():
    for n in range(2, 8):
        for matrix in (ai_matrix(n), human_matrix(n)):
            assert len(matrix) == n
            assert all(len(row) == n for row in matrix)


def test_rows_are_independent():
    matrix = ai_matrix(3)
    matrix[0][2] = -1
    assert matrix[1][2] == 30
    assert matrix[2][2] == 30


def test_bonuses():
    assert block_bonus(4) == 40
    assert indirect_block_bonus(4) == 30
    assert block_bonus(2) == 0
    assert indirect_block_bonus(5) == 60


def test_opening_position_is_level(make_state):
    state = make_state(3, human=[(3, 1), (3, 2)], ai=[(1, 0), (2, 0)])
    assert Evaluator(4).evaluate(state) == 0


def test_ai_piece_below_human_counts_against(make_state):
    # AI at (3,1) sits at y-1 of the human piece
    state = make_state(3, human=[(3, 2)], ai=[(3, 1)])
    assert Evaluator(4).evaluate(state) == 15 - 10 - 40


def test_human_two_rows_ahead_counts_for(make_state):
    # human at (1,2) sits at x-2 of the human piece at (3,2)
    state = make_state(3, human=[(3, 2), (1, 2)], ai=[(2, 0)])
    assert Evaluator(4).evaluate(state) == -10 - 40 + 5 + 30


def test_adjacent_and_indirect_both_apply(make_state):
    state = make_state(3, human=[(3, 2), (2, 2)], ai=[(3, 1), (3, 0)])
    # positional: ai 15 + 0, human -10 - 25
    # (3,2): ai at (3,1) -40, ai at (3,0) -30, human at (2,2) +40
    assert Evaluator(4).evaluate(state) == 15 - 35 - 40 - 30 + 40


def test_finished_games_score_infinite(make_state):
    evaluator = Evaluator(4)

    state = make_state(3, human=[(3, 1)], ai=[(2, 2)], current=1)
    apply_move(state, state.players[1].pieces[0].id, (2, 3))
    assert not state.players[1].pieces
    assert evaluator.evaluate(state) == math.inf

    state = make_state(3, human=[(1, 1)], ai=[(2, 0)])
    apply_move(state, state.players[0].pieces[0].id, (0, 1))
    assert not state.players[0].pieces
    assert evaluator.evaluate(state) == -math.inf
