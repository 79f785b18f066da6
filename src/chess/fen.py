"""
Helpers around FEN strings, the format game positions are persisted in.

<board position> <active color> <castling rights> <en passant square> <half move clock> <full move number>

ex) The standard starting position:
rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1

Full legality is the rules engine's business. These checks are structural only, so the bot can reject
garbage before it reaches the engine or the record store.
"""

from string import ascii_lowercase

from src.chess.pieces import FEN_TO_PIECE
from src.core.exceptions import InvalidFENError

STARTING_FEN = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1"
BOARD_DIMENSIONS = (8, 8)
FILE_NAMES = ascii_lowercase[: BOARD_DIMENSIONS[0]]
CASTLING_ORDER = "KQkq"


def position_part(fen: str) -> str:
    """Piece placement only (first field). Also accepts a bare position."""
    position = fen.strip().split(" ")[0]
    if not is_valid_position(position):
        raise InvalidFENError(f"Cannot interpret supplied string as FEN: {fen!r}")
    return position


def is_valid_fen(fen: str) -> bool:
    """
    Check if given string follows proper FEN notation.
    """
    parts = fen.split(" ")
    if len(parts) != 6:
        return False

    position, color, castling, en_passant, half_moves, full_moves = parts
    return (
        is_valid_position(position)
        and is_valid_color_code(color)
        and is_valid_castling_rights(castling)
        and is_valid_en_passant(en_passant)
        and is_valid_move_counter(half_moves)
        and is_valid_move_counter(full_moves)
    )


def is_valid_position(position: str) -> bool:
    """Only check the part of the FEN encoding for the board position."""
    num_files, num_ranks = BOARD_DIMENSIONS
    rank_fens = position.split("/")
    if len(rank_fens) != num_ranks:
        return False

    for rank_fen in rank_fens:
        file_count = 0
        for character in rank_fen:
            if character.isdigit():
                file_count += int(character)
            elif character.lower() in FEN_TO_PIECE:
                file_count += 1
            else:
                return False

        if file_count != num_files:
            return False
    return True


def is_valid_color_code(color: str) -> bool:
    return color in {"w", "b"}


def is_valid_castling_rights(castling: str) -> bool:
    """Either '-' or a non-empty subsequence of KQkq (order matters)."""
    if castling == "-":
        return True
    remaining = iter(CASTLING_ORDER)
    return bool(castling) and all(char in remaining for char in castling)


def is_valid_en_passant(en_passant: str) -> bool:
    return (en_passant == "-") or is_valid_square(en_passant)


def is_valid_move_counter(counter: str) -> bool:
    return counter.isdigit()


def is_valid_square(square: str) -> bool:
    """Valid square should be a letter for the file + a number for the rank"""
    if len(square) < 2:
        return False

    file_char, rank_char = square[0], square[1:]
    if file_char not in FILE_NAMES or not rank_char.isdigit():
        return False

    return 1 <= int(rank_char) <= BOARD_DIMENSIONS[1]
