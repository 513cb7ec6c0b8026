"""Sides and piece kinds."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Side(str, Enum):
    ATTACKER = "attacker"
    DEFENDER = "defender"

    def opponent(self) -> "Side":
        return Side.DEFENDER if self is Side.ATTACKER else Side.ATTACKER


class PieceKind(str, Enum):
    PAWN = "pawn"
    KING = "king"


@dataclass(frozen=True)
class Piece:
    side: Side
    kind: PieceKind = PieceKind.PAWN

    @property
    def is_king(self) -> bool:
        return self.kind is PieceKind.KING

    def symbol(self) -> str:
        if self.is_king:
            return "K"
        return "a" if self.side is Side.ATTACKER else "d"


ATTACKER_PAWN = Piece(Side.ATTACKER)
DEFENDER_PAWN = Piece(Side.DEFENDER)
KING = Piece(Side.DEFENDER, PieceKind.KING)
