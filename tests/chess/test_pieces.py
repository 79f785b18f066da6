"""Unit tests for /src/chess/pieces.py"""

import pytest

from src.chess.pieces import FEN_TO_PIECE, PIECE_POINTS, PIECE_TO_FEN, Piece, PieceType
from src.core.exceptions import InvalidFENError
from src.core.shared_types import Color


@pytest.mark.parametrize("char", [char.upper() for char in FEN_TO_PIECE.keys()])
def test_creating_white_piece_from_fen(char: str) -> None:
    """Capital letters are used for white pieces"""
    piece = Piece.from_fen(char)
    assert piece.type == FEN_TO_PIECE[char.lower()]
    assert piece.color == Color.WHITE


@pytest.mark.parametrize("char", [char.lower() for char in FEN_TO_PIECE.keys()])
def test_creating_black_piece_from_fen(char: str) -> None:
    """Lower case letters are used for black pieces"""
    piece = Piece.from_fen(char)
    assert piece.type == FEN_TO_PIECE[char.lower()]
    assert piece.color == Color.BLACK


@pytest.mark.parametrize("piece_type", list(PieceType))
def test_pieces_to_fen(piece_type: PieceType) -> None:
    assert Piece(piece_type, Color.WHITE).to_fen() == PIECE_TO_FEN[piece_type].upper()
    assert Piece(piece_type, Color.BLACK).to_fen() == PIECE_TO_FEN[piece_type]


@pytest.mark.parametrize("char", ["x", "1", "/", " "])
def test_unknown_piece_character(char: str) -> None:
    with pytest.raises(InvalidFENError):
        Piece.from_fen(char)


def test_piece_points() -> None:
    """Standard values, king is worth nothing."""
    assert PIECE_POINTS == {
        PieceType.PAWN: 1,
        PieceType.KNIGHT: 3,
        PieceType.BISHOP: 3,
        PieceType.ROOK: 5,
        PieceType.QUEEN: 9,
        PieceType.KING: 0,
    }
    assert Piece.from_fen("Q").points == 9


def test_pieces_compare_by_type_and_color() -> None:
    assert Piece.from_fen("k") == Piece(PieceType.KING, Color.BLACK)
    assert Piece.from_fen("k") != Piece.from_fen("K")
