"""Core rules engine for Hnefatafl (11x11, king escapes to the corners).

The engine is deterministic and UI-agnostic so it can be shared by the HTTP
adapter and any rendering client. A caller hands :func:`attempt_move` a
source and destination coordinate and renders whatever comes back; the
state passed in is never mutated.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, FrozenSet, List, Optional, Tuple

from .board import CORNERS, Board, Coord, coord_to_notation, notation_to_coord
from .errors import IllegalMove, IllegalMoveReason
from .pieces import Piece, PieceKind, Side
from .rules import CaptureReport, Move, legal_targets, resolve_captures, validate_move

logger = logging.getLogger(__name__)

TOTAL_ATTACKER_PAWNS = 24
TOTAL_DEFENDER_PAWNS = 12


class Outcome(str, Enum):
    IN_PROGRESS = "in_progress"
    DEFENDER_ESCAPED = "defender_escaped"
    ATTACKER_WINS = "attacker_wins"
    # Never produced by apply_move; an empty defender side ends in ATTACKER_WINS.
    DEFENDER_ELIMINATED = "defender_eliminated"

    @property
    def winner(self) -> Optional[Side]:
        if self is Outcome.IN_PROGRESS:
            return None
        if self is Outcome.DEFENDER_ESCAPED:
            return Side.DEFENDER
        return Side.ATTACKER


@dataclass
class GameState:
    board: Board = field(default_factory=Board.standard)
    side_to_move: Side = Side.ATTACKER
    attacker_count: int = TOTAL_ATTACKER_PAWNS
    defender_count: int = TOTAL_DEFENDER_PAWNS
    outcome: Outcome = Outcome.IN_PROGRESS
    summary: Optional[str] = None

    @classmethod
    def from_board(cls, board: Board, side_to_move: Side = Side.ATTACKER) -> "GameState":
        """Build a state for an arbitrary position, counting pawns from the board."""
        return cls(
            board=board,
            side_to_move=side_to_move,
            attacker_count=board.count(Side.ATTACKER),
            defender_count=board.count(Side.DEFENDER),
        )

    @property
    def active(self) -> bool:
        return self.outcome is Outcome.IN_PROGRESS

    @property
    def winner(self) -> Optional[Side]:
        return self.outcome.winner


@dataclass(frozen=True)
class MoveResult:
    """What happened to a single attempt_move call."""

    accepted: bool
    outcome: Outcome
    reason: Optional[IllegalMoveReason] = None
    message: Optional[str] = None
    move: Optional[Move] = None
    captured: FrozenSet[Coord] = frozenset()
    king_captured: bool = False


def new_game() -> GameState:
    return GameState()


def restart() -> GameState:
    return new_game()


def apply_move(state: GameState, move: Move) -> Tuple[GameState, Move, CaptureReport]:
    """Apply a move, raising IllegalMove if it is not legal in this state.

    Returns the new state, the validated move and the captures it caused.
    """
    if not state.active:
        raise IllegalMove(IllegalMoveReason.GAME_ALREADY_OVER)
    move = validate_move(state.board, move.origin, move.target, state.side_to_move)
    mover = state.side_to_move

    board = state.board.copy()
    piece = board.square_at(move.origin)
    board.clear(move.origin)
    board.place(move.target, piece)

    report = resolve_captures(board, move.target, mover)
    attacker_count = state.attacker_count
    defender_count = state.defender_count
    if mover is Side.ATTACKER:
        defender_count -= len(report.captured)
    else:
        attacker_count -= len(report.captured)
    if report.captured:
        logger.debug(
            "%s %s captured %s",
            mover.value,
            move.notation(),
            ", ".join(coord_to_notation(c) for c in sorted(report.captured)),
        )

    outcome, summary = _determine_outcome(board, report, attacker_count, defender_count)
    if outcome is not Outcome.IN_PROGRESS:
        logger.info("Game over after %s: %s", move.notation(), summary)

    new_state = GameState(
        board=board,
        side_to_move=mover.opponent() if outcome is Outcome.IN_PROGRESS else mover,
        attacker_count=attacker_count,
        defender_count=defender_count,
        outcome=outcome,
        summary=summary,
    )
    return new_state, move, report


def attempt_move(state: GameState, origin: Coord, target: Coord) -> Tuple[GameState, MoveResult]:
    """Try to play origin -> target for the side to move.

    A rejected move returns the very same state object together with the
    reason; nothing is mutated.
    """
    try:
        new_state, move, report = apply_move(state, Move(origin=origin, target=target))
    except IllegalMove as exc:
        logger.debug("Rejected move %r -> %r: %s", origin, target, exc)
        return state, MoveResult(
            accepted=False,
            outcome=state.outcome,
            reason=exc.reason,
            message=str(exc),
        )
    return new_state, MoveResult(
        accepted=True,
        outcome=new_state.outcome,
        move=move,
        captured=report.captured,
        king_captured=report.king_captured,
    )


def _king_on_corner(board: Board) -> bool:
    king = board.find_king()
    return king is not None and king in CORNERS


def _determine_outcome(
    board: Board,
    report: CaptureReport,
    attacker_count: int,
    defender_count: int,
) -> Tuple[Outcome, Optional[str]]:
    if _king_on_corner(board):
        return Outcome.DEFENDER_ESCAPED, "The king escaped to a corner."
    if report.king_captured:
        return Outcome.ATTACKER_WINS, "The king was surrounded on all four sides."
    if defender_count == 0:
        return Outcome.ATTACKER_WINS, "All defending pawns removed."
    if attacker_count == 0:
        return Outcome.DEFENDER_ESCAPED, "All attacking pawns removed."
    return Outcome.IN_PROGRESS, None


def legal_moves(state: GameState, origin: Optional[Coord] = None) -> List[Move]:
    """List legal moves for the side to move, optionally from one square only."""
    if not state.active:
        return []
    if origin is not None:
        origins = [tuple(origin)]
    else:
        origins = [coord for coord, piece in state.board.pieces() if piece.side is state.side_to_move]
    moves: List[Move] = []
    for source in origins:
        piece = state.board.square_at(source)
        if piece is None or piece.side is not state.side_to_move:
            continue
        moves.extend(Move(origin=source, target=target) for target in legal_targets(state.board, source))
    return moves


def serialize_move_result(result: MoveResult) -> Dict:
    return {
        "accepted": result.accepted,
        "outcome": result.outcome.value,
        "reason": result.reason.value if result.reason else None,
        "message": result.message,
        "move": (
            {"origin": coord_to_notation(result.move.origin), "target": coord_to_notation(result.move.target)}
            if result.move
            else None
        ),
        "captured": [coord_to_notation(c) for c in sorted(result.captured)],
        "king_captured": result.king_captured,
    }


def serialize_state(state: GameState) -> Dict:
    """Serialize GameState to a JSON-friendly dict."""
    winner = state.winner
    return {
        "side_to_move": state.side_to_move.value,
        "outcome": state.outcome.value,
        "winner": winner.value if winner else None,
        "counts": {
            Side.ATTACKER.value: state.attacker_count,
            Side.DEFENDER.value: state.defender_count,
        },
        "board": [
            {
                "coord": coord_to_notation(coord),
                "piece": {"side": piece.side.value, "kind": piece.kind.value},
            }
            for coord, piece in state.board.pieces()
        ],
        "summary": state.summary,
    }


def deserialize_state(payload: Dict) -> GameState:
    board = Board()
    for item in payload.get("board", []):
        coord = notation_to_coord(item["coord"])
        piece = Piece(side=Side(item["piece"]["side"]), kind=PieceKind(item["piece"].get("kind", "pawn")))
        board.place(coord, piece)
    counts = payload.get("counts") or {}
    return GameState(
        board=board,
        side_to_move=Side(payload.get("side_to_move", "attacker")),
        attacker_count=counts.get("attacker", board.count(Side.ATTACKER)),
        defender_count=counts.get("defender", board.count(Side.DEFENDER)),
        outcome=Outcome(payload.get("outcome", "in_progress")),
        summary=payload.get("summary"),
    )
