"""Defines the chess pieces as the rest of the bot sees them (independent of the rules engine in use)."""

from dataclasses import dataclass, field
from enum import StrEnum
from typing import Self

from src.core.exceptions import InvalidFENError
from src.core.shared_types import Color


class PieceType(StrEnum):
    PAWN = "pawn"
    KNIGHT = "knight"
    BISHOP = "bishop"
    ROOK = "rook"
    QUEEN = "queen"
    KING = "king"


FEN_TO_PIECE: dict[str, PieceType] = {
    "p": PieceType.PAWN,
    "n": PieceType.KNIGHT,
    "b": PieceType.BISHOP,
    "r": PieceType.ROOK,
    "q": PieceType.QUEEN,
    "k": PieceType.KING,
}

PIECE_TO_FEN: dict[PieceType, str] = {value: key for key, value in FEN_TO_PIECE.items()}


# The King's worth is undefined, it does not count towards the material score
PIECE_POINTS: dict[PieceType, int] = {
    PieceType.PAWN: 1,
    PieceType.KNIGHT: 3,
    PieceType.BISHOP: 3,
    PieceType.ROOK: 5,
    PieceType.QUEEN: 9,
    PieceType.KING: 0,
}


@dataclass(frozen=True)
class Piece:
    type: PieceType
    color: Color
    points: int = field(init=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "points", PIECE_POINTS[self.type])

    @classmethod
    def from_fen(cls, character: str) -> Self:
        # lower case: Black pieces, upper case: White pieces
        if character.lower() not in FEN_TO_PIECE:
            raise InvalidFENError(f"Not a piece character: {character!r}")
        color = Color.WHITE if character.isupper() else Color.BLACK
        return cls(FEN_TO_PIECE[character.lower()], color)

    def to_fen(self) -> str:
        letter = PIECE_TO_FEN[self.type]
        return letter.upper() if self.color == Color.WHITE else letter
