"""
Material score heuristic.

Counts the standard piece values for both sides from the piece placement of a FEN and reports who is ahead.
No positional factors, no engine: this is only used to annotate the status line of an ongoing game.
"""

from src.chess.fen import position_part
from src.chess.pieces import Piece
from src.core.shared_types import Color

TIED_SCORE = "White: 0, Black 0"


def material_totals(fen: str) -> dict[Color, int]:
    """Sum of piece values per color. Accepts a full FEN or just the placement field."""
    totals = {Color.WHITE: 0, Color.BLACK: 0}
    for character in position_part(fen):
        if character.isalpha():
            piece = Piece.from_fen(character)
            totals[piece.color] += piece.points
    return totals


def relative_score(fen: str) -> str:
    """'White: +3', 'Black: +9', or the tie string when material is level."""
    totals = material_totals(fen)
    white_diff = totals[Color.WHITE] - totals[Color.BLACK]
    black_diff = -white_diff

    if white_diff == 0:
        return TIED_SCORE

    if white_diff > black_diff:
        return f"White: +{white_diff}"
    return f"Black: +{black_diff}"
