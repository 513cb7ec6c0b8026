"""Validation errors raised by the board and rules layers."""
from __future__ import annotations

from enum import Enum
from typing import Optional


class IllegalMoveReason(str, Enum):
    OUT_OF_BOUNDS = "out_of_bounds"
    EMPTY_SOURCE = "empty_source"
    NOT_YOUR_PIECE = "not_your_piece"
    NOT_ORTHOGONAL = "not_orthogonal"
    PATH_BLOCKED = "path_blocked"
    DESTINATION_OCCUPIED = "destination_occupied"
    RESTRICTED_SQUARE = "restricted_square"
    GAME_ALREADY_OVER = "game_already_over"


MESSAGES = {
    IllegalMoveReason.OUT_OF_BOUNDS: "Coordinate is off the board",
    IllegalMoveReason.EMPTY_SOURCE: "No piece at origin",
    IllegalMoveReason.NOT_YOUR_PIECE: "Not this piece's turn",
    IllegalMoveReason.NOT_ORTHOGONAL: "Pieces move along a single row or column",
    IllegalMoveReason.PATH_BLOCKED: "Another piece stands in the way",
    IllegalMoveReason.DESTINATION_OCCUPIED: "Target square is occupied",
    IllegalMoveReason.RESTRICTED_SQUARE: "Only the king may stop on the throne or a corner",
    IllegalMoveReason.GAME_ALREADY_OVER: "Game already finished",
}


class HnefataflError(ValueError):
    """Base class for engine errors."""


class OutOfBounds(HnefataflError):
    def __init__(self, coord) -> None:
        super().__init__(f"Out of bounds coordinate: {coord!r}")
        self.coord = coord


class IllegalMove(HnefataflError):
    def __init__(self, reason: IllegalMoveReason, detail: Optional[str] = None) -> None:
        message = MESSAGES[reason]
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)
        self.reason = reason
