"""Move validation and custodian capture resolution."""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import FrozenSet, List, Optional, Tuple

from .board import (
    DIRECTIONS,
    Board,
    Coord,
    coord_in_bounds,
    coord_to_notation,
    is_corner,
    is_restricted,
    is_throne,
    step,
)
from .errors import IllegalMove, IllegalMoveReason
from .pieces import Piece, Side


@dataclass(frozen=True)
class Move:
    origin: Coord
    target: Coord

    def notation(self) -> str:
        return f"{coord_to_notation(self.origin)}-{coord_to_notation(self.target)}"


def _as_coord(value) -> Coord:
    try:
        row, col = value
    except (TypeError, ValueError):
        raise IllegalMove(IllegalMoveReason.OUT_OF_BOUNDS, repr(value)) from None
    # bool is an int subclass but never a board index.
    if any(isinstance(v, bool) or not isinstance(v, int) for v in (row, col)):
        raise IllegalMove(IllegalMoveReason.OUT_OF_BOUNDS, repr(value))
    if not coord_in_bounds((row, col)):
        raise IllegalMove(IllegalMoveReason.OUT_OF_BOUNDS, repr(value))
    return (row, col)


def squares_between(origin: Coord, target: Coord) -> List[Coord]:
    """Squares strictly between two coordinates sharing a row or column."""
    (r0, c0), (r1, c1) = origin, target
    if r0 == r1:
        lo, hi = sorted((c0, c1))
        return [(r0, col) for col in range(lo + 1, hi)]
    lo, hi = sorted((r0, r1))
    return [(row, c0) for row in range(lo + 1, hi)]


def validate_move(board: Board, origin: Coord, target: Coord, side_to_move: Side) -> Move:
    """Return the move if legal, otherwise raise IllegalMove with the first failing reason."""
    origin = _as_coord(origin)
    target = _as_coord(target)
    if origin == target:
        raise IllegalMove(IllegalMoveReason.NOT_ORTHOGONAL, "origin and target are the same square")

    piece = board.square_at(origin)
    if piece is None:
        raise IllegalMove(IllegalMoveReason.EMPTY_SOURCE)
    if piece.side is not side_to_move:
        raise IllegalMove(IllegalMoveReason.NOT_YOUR_PIECE)

    if (origin[0] == target[0]) == (origin[1] == target[1]):
        raise IllegalMove(IllegalMoveReason.NOT_ORTHOGONAL)

    for square in squares_between(origin, target):
        if board.square_at(square) is not None:
            raise IllegalMove(IllegalMoveReason.PATH_BLOCKED, coord_to_notation(square))

    if board.square_at(target) is not None:
        raise IllegalMove(IllegalMoveReason.DESTINATION_OCCUPIED)

    if is_restricted(target) and not piece.is_king:
        raise IllegalMove(IllegalMoveReason.RESTRICTED_SQUARE)

    return Move(origin=origin, target=target)


def legal_targets(board: Board, origin: Coord) -> List[Coord]:
    """Return empty target squares the piece at origin may slide to and stop on."""
    piece = board.square_at(origin)
    if piece is None:
        return []
    targets: List[Coord] = []
    for direction in DIRECTIONS:
        target = step(origin, direction)
        while coord_in_bounds(target):
            if board.square_at(target) is not None:
                # Sliding stops before any occupied square.
                break
            # Pawns may cross the empty throne but never stop on it.
            if piece.is_king or not is_restricted(target):
                targets.append(target)
            target = step(target, direction)
    targets.sort()
    return targets


class NeighborKind(IntEnum):
    UNOPPOSED = 0
    EDGE = 1
    KINGS_SQUARE = 2
    OPPOSED = 3

    @property
    def hostile(self) -> bool:
        return self is not NeighborKind.UNOPPOSED


def classify_neighbor(board: Board, coord: Coord, side: Side) -> NeighborKind:
    """Classify the square at coord as seen by a piece of the given side."""
    if not coord_in_bounds(coord):
        return NeighborKind.EDGE
    occupant = board.square_at(coord)
    if occupant is None:
        if is_throne(coord) or is_corner(coord):
            return NeighborKind.KINGS_SQUARE
        return NeighborKind.UNOPPOSED
    if occupant.side is not side:
        return NeighborKind.OPPOSED
    return NeighborKind.UNOPPOSED


def neighbors(board: Board, coord: Coord, side: Side) -> Tuple[NeighborKind, ...]:
    """Neighbour kinds in west, east, north, south order."""
    return tuple(classify_neighbor(board, step(coord, d), side) for d in DIRECTIONS)


def is_surrounded(board: Board, coord: Coord, piece: Piece) -> bool:
    """Whether the piece standing at coord is captured on the current board.

    Pawns fall when flanked on one axis; the king only when all four sides
    are hostile.
    """
    west, east, north, south = (kind.hostile for kind in neighbors(board, coord, piece.side))
    if piece.is_king:
        return west and east and north and south
    return (west and east) or (north and south)


@dataclass(frozen=True)
class CaptureReport:
    captured: FrozenSet[Coord] = field(default_factory=frozenset)
    king_captured: bool = False
    king_at: Optional[Coord] = None


def find_captures(board: Board, last_moved: Coord, mover: Side) -> CaptureReport:
    """Inspect the four neighbours of the piece that just moved.

    Reads the board only; every neighbour is judged against the same
    post-move position.
    """
    captured = set()
    king_captured = False
    king_at: Optional[Coord] = None
    for direction in DIRECTIONS:
        adjacent = step(last_moved, direction)
        if classify_neighbor(board, adjacent, mover) is not NeighborKind.OPPOSED:
            continue
        victim = board.square_at(adjacent)
        if not is_surrounded(board, adjacent, victim):
            continue
        if victim.is_king:
            king_captured = True
            king_at = adjacent
        else:
            captured.add(adjacent)
    return CaptureReport(captured=frozenset(captured), king_captured=king_captured, king_at=king_at)


def resolve_captures(board: Board, last_moved: Coord, mover: Side) -> CaptureReport:
    """Find captures around last_moved and remove the captured pawns from board.

    The king is never removed here; a king capture is only reported.
    """
    report = find_captures(board, last_moved, mover)
    for coord in report.captured:
        board.clear(coord)
    return report
