from __future__ import annotations

import pytest

from dodgem.game import apply_move
from dodgem.state import IdSource, Player, destination_zones, initial_state


def _new(size: int, ids: IdSource):
    return initial_state(size, Player("a", ids=ids), Player("b", is_ai=True, ids=ids), ids)


@pytest.mark.parametrize("size", [2, 3, 4, 5, 7])
def test_initial_layout(size, ids):
    state = _new(size, ids)
    human, ai = state.players
    assert len(human.pieces) == size - 1
    assert len(ai.pieces) == size - 1

    cells = [p.position for p in human.pieces + ai.pieces]
    assert len(set(cells)) == len(cells)
    for cell in cells:
        assert cell not in state.destinations[0]
        assert cell not in state.destinations[1]
        assert state.piece_at(cell) is not None

    occupied = sum(1 for row in state.board for cell in row if cell is not None)
    assert occupied == 2 * (size - 1)
    assert state.current_player == 0
    assert state.winner is None and not state.is_over


def test_initial_positions_size_3(ids):
    state = _new(3, ids)
    assert state.board_size == 4
    assert [p.position for p in state.players[0].pieces] == [(3, 1), (3, 2)]
    assert [p.position for p in state.players[1].pieces] == [(1, 0), (2, 0)]
    assert state.destinations[0] == {(0, 0), (0, 1), (0, 2)}
    assert state.destinations[1] == {(1, 3), (2, 3), (3, 3)}


def test_destination_zones_disjoint():
    for size in range(2, 8):
        human, ai = destination_zones(size)
        assert len(human) == len(ai) == size
        assert not human & ai


def test_size_below_two_rejected(ids):
    with pytest.raises(ValueError):
        _new(1, ids)


def test_pieces_carry_owner_and_color(ids):
    state = _new(3, ids)
    for index, color in ((0, "red"), (1, "blue")):
        player = state.players[index]
        assert all(p.owner == player.id for p in player.pieces)
        assert all(p.color == color for p in player.pieces)


def test_snapshot_keeps_ids_and_fields(ids):
    state = _new(3, ids)
    apply_move(state, state.players[0].pieces[0].id, (2, 1))

    snap = state.snapshot()
    assert snap.id == state.id
    assert [p.id for p in snap.players] == [p.id for p in state.players]
    for original, copied in zip(state.players, snap.players):
        assert [(p.id, p.position) for p in copied.pieces] == [
            (p.id, p.position) for p in original.pieces
        ]
    assert snap.current_player == state.current_player == 1
    assert snap.winner == state.winner
    assert snap.is_over == state.is_over
    assert snap.destinations == state.destinations
    assert snap.render() == state.render()


def test_snapshot_is_independent(ids):
    state = _new(3, ids)
    before = state.render()
    snap = state.snapshot()

    assert snap.board[3][1] is not state.board[3][1]
    assert snap.board[3][1] is snap.players[0].pieces[0]

    assert apply_move(snap, snap.players[0].pieces[0].id, (2, 1)).ok
    assert state.render() == before
    assert state.players[0].pieces[0].position == (3, 1)
    assert state.current_player == 0


def test_clone_gets_fresh_ids(ids):
    state = _new(3, ids)
    clone = state.clone(ids)

    assert clone.id != state.id
    old_ids = {p.id for p in state.players} | {
        piece.id for p in state.players for piece in p.pieces
    }
    new_ids = {p.id for p in clone.players} | {
        piece.id for p in clone.players for piece in p.pieces
    }
    assert not old_ids & new_ids
    for player in clone.players:
        assert all(piece.owner == player.id for piece in player.pieces)
    assert clone.render() == state.render()


def test_clone_is_independent(ids):
    state = _new(3, ids)
    clone = state.clone(ids)
    assert apply_move(clone, clone.players[0].pieces[0].id, (2, 1)).ok
    assert state.players[0].pieces[0].position == (3, 1)
    assert state.board[2][1] is None
    assert state.current_player == 0


def test_render():
    state = _new(2, IdSource())
    assert state.render() == "_ | _ | _\nblue | _ | _\n_ | red | _"


def test_id_source_is_sequential():
    ids = IdSource()
    assert ids.make("piece") == "piece-1"
    assert ids.make("player") == "player-2"
