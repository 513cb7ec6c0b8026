"""hnefatafl package."""

from .board import Board, coord_to_notation, notation_to_coord  # noqa: F401
from .engine import (  # noqa: F401
    GameState,
    MoveResult,
    Outcome,
    apply_move,
    attempt_move,
    deserialize_state,
    legal_moves,
    new_game,
    restart,
    serialize_state,
)
from .errors import IllegalMove, IllegalMoveReason, OutOfBounds  # noqa: F401
from .pieces import Piece, PieceKind, Side  # noqa: F401
from .rules import Move  # noqa: F401

__all__ = [
    "__version__",
    "Board",
    "GameState",
    "IllegalMove",
    "IllegalMoveReason",
    "Move",
    "MoveResult",
    "Outcome",
    "OutOfBounds",
    "Piece",
    "PieceKind",
    "Side",
    "apply_move",
    "attempt_move",
    "coord_to_notation",
    "create_app",
    "deserialize_state",
    "legal_moves",
    "new_game",
    "notation_to_coord",
    "restart",
    "serialize_state",
]

__version__ = "0.1.0"


def create_app():
    """Lazy import to avoid requiring FastAPI unless requested."""
    from hnefatafl.api import create_app as factory

    return factory()
