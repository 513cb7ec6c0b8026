"""Board storage, special squares and the standard starting layout.

Coordinates are zero-based ``(row, col)`` tuples. Notation strings use a
column letter followed by a one-based row number, so ``(0, 0)`` is ``A1``
and the throne ``(5, 5)`` is ``F6``.
"""
from __future__ import annotations

from typing import Dict, Iterator, Optional, Sequence, Tuple

from .errors import OutOfBounds
from .pieces import ATTACKER_PAWN, DEFENDER_PAWN, KING, Piece, PieceKind, Side

BOARD_SIZE = 11
COLUMNS = "ABCDEFGHIJK"
Coord = Tuple[int, int]  # (row, col), zero-based

THRONE: Coord = (5, 5)
CORNERS: Sequence[Coord] = (
    (0, 0),
    (0, BOARD_SIZE - 1),
    (BOARD_SIZE - 1, 0),
    (BOARD_SIZE - 1, BOARD_SIZE - 1),
)

# West, east, north, south.
DIRECTIONS: Sequence[Coord] = ((0, -1), (0, 1), (-1, 0), (1, 0))


def coord_in_bounds(coord: Coord) -> bool:
    row, col = coord
    return 0 <= row < BOARD_SIZE and 0 <= col < BOARD_SIZE


def is_throne(coord: Coord) -> bool:
    return tuple(coord) == THRONE


def is_corner(coord: Coord) -> bool:
    return tuple(coord) in CORNERS


def is_restricted(coord: Coord) -> bool:
    """Squares only the king may stop on."""
    return is_throne(coord) or is_corner(coord)


def step(coord: Coord, direction: Coord) -> Coord:
    return (coord[0] + direction[0], coord[1] + direction[1])


def coord_to_notation(coord: Coord) -> str:
    row, col = coord
    return f"{COLUMNS[col]}{row + 1}"


def notation_to_coord(token: str) -> Coord:
    token = token.strip()
    if len(token) < 2:
        raise ValueError(f"Invalid coordinate token: {token}")
    col_char, row_str = token[0].upper(), token[1:]
    if col_char not in COLUMNS:
        raise ValueError(f"Invalid column: {col_char}")
    if not row_str.isdigit():
        raise ValueError(f"Invalid row: {row_str}")
    coord = (int(row_str) - 1, COLUMNS.index(col_char))
    if not coord_in_bounds(coord):
        raise ValueError(f"Out of bounds coordinate: {token}")
    return coord


class Board:
    """Fixed 11x11 grid; each square holds at most one piece.

    This layer only stores pieces. Legality of moves is decided in
    :mod:`hnefatafl.rules`.
    """

    def __init__(self, squares: Optional[Dict[Coord, Piece]] = None) -> None:
        self._squares: Dict[Coord, Piece] = {}
        for coord, piece in (squares or {}).items():
            self.place(coord, piece)

    @classmethod
    def standard(cls) -> "Board":
        board = cls()
        for i in range(3, 8):
            board.place((i, 0), ATTACKER_PAWN)
            board.place((0, i), ATTACKER_PAWN)
            board.place((i, BOARD_SIZE - 1), ATTACKER_PAWN)
            board.place((BOARD_SIZE - 1, i), ATTACKER_PAWN)
        board.place((5, 1), ATTACKER_PAWN)
        board.place((1, 5), ATTACKER_PAWN)
        board.place((5, BOARD_SIZE - 2), ATTACKER_PAWN)
        board.place((BOARD_SIZE - 2, 5), ATTACKER_PAWN)

        for row in range(4, 7):
            for col in range(4, 7):
                board.place((row, col), DEFENDER_PAWN)
        board.place(THRONE, KING)
        board.place((5, 3), DEFENDER_PAWN)
        board.place((3, 5), DEFENDER_PAWN)
        board.place((5, BOARD_SIZE - 4), DEFENDER_PAWN)
        board.place((BOARD_SIZE - 4, 5), DEFENDER_PAWN)
        return board

    def _check(self, coord: Coord) -> Coord:
        try:
            row, col = coord
        except (TypeError, ValueError):
            raise OutOfBounds(coord) from None
        if not isinstance(row, int) or not isinstance(col, int):
            raise OutOfBounds(coord)
        if not coord_in_bounds((row, col)):
            raise OutOfBounds(coord)
        return (row, col)

    def square_at(self, coord: Coord) -> Optional[Piece]:
        return self._squares.get(self._check(coord))

    def place(self, coord: Coord, piece: Piece) -> None:
        self._squares[self._check(coord)] = piece

    def clear(self, coord: Coord) -> None:
        self._squares.pop(self._check(coord), None)

    def pieces(self) -> Iterator[Tuple[Coord, Piece]]:
        """Occupied squares in row-major order."""
        for coord in sorted(self._squares):
            yield coord, self._squares[coord]

    def find_king(self) -> Optional[Coord]:
        for coord, piece in self._squares.items():
            if piece.kind is PieceKind.KING:
                return coord
        return None

    def count(self, side: Side, kind: PieceKind = PieceKind.PAWN) -> int:
        return sum(1 for piece in self._squares.values() if piece.side is side and piece.kind is kind)

    def copy(self) -> "Board":
        clone = Board()
        clone._squares = dict(self._squares)
        return clone

    def __len__(self) -> int:
        return len(self._squares)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self._squares == other._squares

    def __repr__(self) -> str:
        return f"Board({len(self._squares)} pieces)"

    def __str__(self) -> str:
        lines = ["   " + " ".join(COLUMNS)]
        for row in range(BOARD_SIZE):
            cells = []
            for col in range(BOARD_SIZE):
                piece = self._squares.get((row, col))
                if piece is not None:
                    cells.append(piece.symbol())
                elif is_restricted((row, col)):
                    cells.append("+")
                else:
                    cells.append(".")
            lines.append(f"{row + 1:>2} " + " ".join(cells))
        return "\n".join(lines)
