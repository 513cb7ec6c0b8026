import pytest

from hnefatafl.board import Board
from hnefatafl.errors import IllegalMove, IllegalMoveReason
from hnefatafl.pieces import ATTACKER_PAWN, DEFENDER_PAWN, KING, Side
from hnefatafl.rules import (
    Move,
    NeighborKind,
    classify_neighbor,
    legal_targets,
    resolve_captures,
    validate_move,
)


def reason_for(board, origin, target, side):
    with pytest.raises(IllegalMove) as info:
        validate_move(board, origin, target, side)
    return info.value.reason


def test_valid_move_returns_move():
    board = Board.standard()
    assert validate_move(board, (5, 1), (5, 2), Side.ATTACKER) == Move((5, 1), (5, 2))


@pytest.mark.parametrize(
    "origin, target, reason",
    [
        ((11, 0), (10, 0), IllegalMoveReason.OUT_OF_BOUNDS),
        ((3, 0), (3, -1), IllegalMoveReason.OUT_OF_BOUNDS),
        ((3, 0), (3, 0), IllegalMoveReason.NOT_ORTHOGONAL),
        ((2, 2), (2, 3), IllegalMoveReason.EMPTY_SOURCE),
        ((3, 5), (2, 5), IllegalMoveReason.NOT_YOUR_PIECE),
        ((0, 3), (1, 4), IllegalMoveReason.NOT_ORTHOGONAL),
        ((5, 0), (5, 2), IllegalMoveReason.PATH_BLOCKED),
        ((0, 3), (0, 4), IllegalMoveReason.DESTINATION_OCCUPIED),
        ((3, 0), (3, 5), IllegalMoveReason.DESTINATION_OCCUPIED),
    ],
)
def test_validation_reasons_on_start_position(origin, target, reason):
    assert reason_for(Board.standard(), origin, target, Side.ATTACKER) is reason


def test_pawn_may_not_land_on_corner_or_throne():
    board = Board({(0, 3): ATTACKER_PAWN, (5, 2): DEFENDER_PAWN})
    assert reason_for(board, (0, 3), (0, 0), Side.ATTACKER) is IllegalMoveReason.RESTRICTED_SQUARE
    assert reason_for(board, (5, 2), (5, 5), Side.DEFENDER) is IllegalMoveReason.RESTRICTED_SQUARE


def test_path_is_checked_before_restriction():
    board = Board({(0, 3): ATTACKER_PAWN, (0, 1): DEFENDER_PAWN})
    assert reason_for(board, (0, 3), (0, 0), Side.ATTACKER) is IllegalMoveReason.PATH_BLOCKED


def test_king_may_land_on_restricted_squares():
    board = Board({(0, 3): KING, (5, 2): ATTACKER_PAWN})
    assert validate_move(board, (0, 3), (0, 0), Side.DEFENDER).target == (0, 0)
    board = Board({(5, 2): KING})
    assert validate_move(board, (5, 2), (5, 5), Side.DEFENDER).target == (5, 5)


def test_pawn_may_cross_empty_throne():
    board = Board({(5, 2): ATTACKER_PAWN})
    assert validate_move(board, (5, 2), (5, 8), Side.ATTACKER).target == (5, 8)


def test_legal_targets_from_start():
    targets = legal_targets(Board.standard(), (5, 1))
    assert (5, 2) in targets
    assert (5, 3) not in targets
    assert len(targets) == 11


def test_legal_targets_skip_restricted_landings_for_pawns():
    board = Board({(0, 5): ATTACKER_PAWN})
    targets = legal_targets(board, (0, 5))
    assert (0, 0) not in targets
    assert (0, 10) not in targets
    assert (5, 5) not in targets
    assert (6, 5) in targets
    assert len(targets) == 17


def test_legal_targets_include_corner_for_king():
    board = Board({(0, 5): KING})
    targets = legal_targets(board, (0, 5))
    assert (0, 0) in targets
    assert (5, 5) in targets
    assert len(targets) == 20


def test_classify_neighbor():
    board = Board({(5, 5): KING, (4, 5): ATTACKER_PAWN, (6, 5): DEFENDER_PAWN})
    assert classify_neighbor(board, (-1, 0), Side.ATTACKER) is NeighborKind.EDGE
    assert classify_neighbor(board, (0, 0), Side.ATTACKER) is NeighborKind.KINGS_SQUARE
    assert classify_neighbor(board, (5, 5), Side.ATTACKER) is NeighborKind.OPPOSED
    assert classify_neighbor(board, (6, 5), Side.DEFENDER) is NeighborKind.UNOPPOSED
    assert classify_neighbor(board, (4, 5), Side.DEFENDER) is NeighborKind.OPPOSED
    assert classify_neighbor(board, (2, 2), Side.DEFENDER) is NeighborKind.UNOPPOSED
    board.clear((5, 5))
    assert classify_neighbor(board, (5, 5), Side.ATTACKER) is NeighborKind.KINGS_SQUARE


def test_sandwich_capture_on_row():
    board = Board({(3, 3): ATTACKER_PAWN, (3, 4): DEFENDER_PAWN, (3, 5): ATTACKER_PAWN})
    report = resolve_captures(board, (3, 5), Side.ATTACKER)
    assert report.captured == {(3, 4)}
    assert not report.king_captured
    assert board.square_at((3, 4)) is None


def test_capture_along_other_axis():
    # Defender stepped between two attackers earlier; a later attacker move next to it
    # resolves the standing north/south sandwich.
    board = Board(
        {
            (3, 4): ATTACKER_PAWN,
            (5, 4): ATTACKER_PAWN,
            (4, 4): DEFENDER_PAWN,
            (4, 3): ATTACKER_PAWN,
        }
    )
    report = resolve_captures(board, (4, 3), Side.ATTACKER)
    assert report.captured == {(4, 4)}


def test_double_capture():
    board = Board(
        {
            (2, 1): DEFENDER_PAWN,
            (2, 2): ATTACKER_PAWN,
            (2, 3): DEFENDER_PAWN,
            (2, 4): DEFENDER_PAWN,
            (2, 5): ATTACKER_PAWN,
        }
    )
    report = resolve_captures(board, (2, 2), Side.ATTACKER)
    assert report.captured == frozenset()
    board = Board(
        {
            (2, 0): ATTACKER_PAWN,
            (2, 1): DEFENDER_PAWN,
            (2, 2): ATTACKER_PAWN,
            (2, 3): DEFENDER_PAWN,
            (2, 4): ATTACKER_PAWN,
        }
    )
    report = resolve_captures(board, (2, 2), Side.ATTACKER)
    assert report.captured == {(2, 1), (2, 3)}


def test_mover_between_two_enemies_is_not_captured():
    board = Board({(3, 3): DEFENDER_PAWN, (3, 4): ATTACKER_PAWN, (3, 5): DEFENDER_PAWN})
    report = resolve_captures(board, (3, 4), Side.ATTACKER)
    assert report.captured == frozenset()
    assert board.square_at((3, 4)) == ATTACKER_PAWN


def test_empty_corner_is_hostile_anchor():
    board = Board({(0, 1): DEFENDER_PAWN, (0, 2): ATTACKER_PAWN})
    assert resolve_captures(board, (0, 2), Side.ATTACKER).captured == {(0, 1)}


def test_empty_throne_is_hostile_anchor():
    board = Board({(5, 4): DEFENDER_PAWN, (5, 3): ATTACKER_PAWN})
    assert resolve_captures(board, (5, 3), Side.ATTACKER).captured == {(5, 4)}


def test_board_edge_is_hostile_wall():
    board = Board({(0, 4): DEFENDER_PAWN, (1, 4): ATTACKER_PAWN})
    assert resolve_captures(board, (1, 4), Side.ATTACKER).captured == {(0, 4)}


def test_own_pieces_are_never_captured():
    board = Board({(3, 3): ATTACKER_PAWN, (3, 4): ATTACKER_PAWN, (3, 5): ATTACKER_PAWN})
    assert resolve_captures(board, (3, 5), Side.ATTACKER).captured == frozenset()


def test_king_needs_four_hostile_sides():
    board = Board({(2, 2): KING, (1, 2): ATTACKER_PAWN, (3, 2): ATTACKER_PAWN, (2, 1): ATTACKER_PAWN})
    report = resolve_captures(board, (2, 1), Side.ATTACKER)
    assert not report.king_captured

    board.place((2, 3), ATTACKER_PAWN)
    report = resolve_captures(board, (2, 3), Side.ATTACKER)
    assert report.king_captured
    assert report.king_at == (2, 2)
    assert report.captured == frozenset()
    # The king stays on the board; the engine turns this into the outcome.
    assert board.square_at((2, 2)) == KING


def test_king_beside_empty_throne():
    board = Board({(4, 5): KING, (3, 5): ATTACKER_PAWN, (4, 4): ATTACKER_PAWN, (4, 6): ATTACKER_PAWN})
    assert resolve_captures(board, (4, 6), Side.ATTACKER).king_captured


def test_king_sandwiched_on_one_axis_survives():
    board = Board({(4, 2): KING, (4, 1): ATTACKER_PAWN, (4, 3): ATTACKER_PAWN})
    assert not resolve_captures(board, (4, 3), Side.ATTACKER).king_captured


def test_king_can_capture():
    board = Board({(3, 3): DEFENDER_PAWN, (3, 4): ATTACKER_PAWN, (3, 5): KING})
    assert resolve_captures(board, (3, 5), Side.DEFENDER).captured == {(3, 4)}


def test_occupied_throne_is_not_an_anchor_for_defenders():
    board = Board({(5, 5): KING, (5, 4): DEFENDER_PAWN, (5, 3): ATTACKER_PAWN})
    report = resolve_captures(board, (5, 3), Side.ATTACKER)
    assert report.captured == frozenset()
    assert board.square_at((5, 4)) == DEFENDER_PAWN


def test_bool_coordinates_are_out_of_bounds():
    board = Board({(1, 1): ATTACKER_PAWN})
    assert reason_for(board, (True, True), (1, 4), Side.ATTACKER) is IllegalMoveReason.OUT_OF_BOUNDS
