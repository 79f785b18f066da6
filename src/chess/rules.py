"""
Rules engine seam.

The bot never decides chess legality itself. Everything it needs to know about a position goes through the
RulesEngine protocol, so another implementation can be swapped in without touching the service layer.
PythonChessRules is the implementation used in production, backed by python-chess.
"""

import logging
from dataclasses import dataclass
from typing import Optional, Protocol

import chess

from src.chess.pieces import Piece
from src.core.exceptions import InvalidMoveError, RulesEngineError
from src.core.shared_types import Color

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AcceptedMove:
    """Snapshot of a move the rules engine accepted."""

    from_square: str
    to_square: str
    san: str
    uci: str

    @property
    def lan(self) -> str:
        """Origin + destination, e.g. 'e2e4'. Used to highlight the last move on a board image."""
        return f"{self.from_square}{self.to_square}"


class RulesEngine(Protocol):
    """What the bot needs to know about chess."""

    def submit_move(self, fen: str, move_text: str) -> tuple[AcceptedMove, str]:
        """Play the move on the position. Returns the accepted move and the new FEN.

        Raises InvalidMoveError if the move is illegal / unreadable and RulesEngineError if the position is.
        """
        ...

    def side_to_move(self, fen: str) -> Color: ...

    def is_check(self, fen: str) -> bool: ...

    def is_checkmate(self, fen: str) -> bool: ...

    def is_game_over(self, fen: str) -> bool:
        """Any terminal condition: checkmate, stalemate or any draw the engine knows about."""
        ...

    def board_squares(self, fen: str) -> dict[str, Piece]:
        """Occupied squares (algebraic name) and the piece on them."""
        ...

    def legal_moves(self, fen: str) -> list[str]:
        """Legal moves for the side to move, in SAN."""
        ...


def king_square(rules: RulesEngine, fen: str, color: Color) -> Optional[str]:
    """Find the square of the king of the given color."""
    king = Piece.from_fen("K" if color == Color.WHITE else "k")
    return next(
        (square for square, piece in rules.board_squares(fen).items() if piece == king),
        None,
    )


def checked_square(rules: RulesEngine, fen: str) -> Optional[str]:
    """The king under attack is always the one of the side to move."""
    return king_square(rules, fen, rules.side_to_move(fen))


class PythonChessRules:
    """RulesEngine implemented with python-chess."""

    def submit_move(self, fen: str, move_text: str) -> tuple[AcceptedMove, str]:
        board = self._board(fen)
        move = self._parse_move(board, move_text)
        accepted = AcceptedMove(
            from_square=chess.square_name(move.from_square),
            to_square=chess.square_name(move.to_square),
            san=board.san(move),
            uci=move.uci(),
        )
        board.push(move)
        return accepted, board.fen()

    def side_to_move(self, fen: str) -> Color:
        return Color.WHITE if self._board(fen).turn == chess.WHITE else Color.BLACK

    def is_check(self, fen: str) -> bool:
        return self._board(fen).is_check()

    def is_checkmate(self, fen: str) -> bool:
        return self._board(fen).is_checkmate()

    def is_game_over(self, fen: str) -> bool:
        board = self._board(fen)
        # fifty-move rule: only once the halfmove clock has reached 100
        return board.is_game_over() or board.is_fifty_moves()

    def board_squares(self, fen: str) -> dict[str, Piece]:
        return {
            chess.square_name(square): Piece.from_fen(piece.symbol())
            for square, piece in self._board(fen).piece_map().items()
        }

    def legal_moves(self, fen: str) -> list[str]:
        board = self._board(fen)
        return [board.san(move) for move in board.legal_moves]

    # -- Internal helpers --
    def _board(self, fen: str) -> chess.Board:
        try:
            return chess.Board(fen)
        except ValueError as e:
            raise RulesEngineError(f"Invalid position {fen!r}: {e}") from e

    def _parse_move(self, board: chess.Board, move_text: str) -> chess.Move:
        """Standard algebraic notation first ('Nf3', 'exd5', 'O-O'), then UCI ('g1f3') as a fallback."""
        text = move_text.strip()
        if not text:
            raise InvalidMoveError("Invalid move")

        try:
            move = board.parse_san(text)
        except ValueError:
            logger.debug("%r is not a legal SAN move, trying UCI", text)
            try:
                move = board.parse_uci(text.lower())
            except ValueError as e:
                raise InvalidMoveError("Invalid move") from e

        # null moves ('--', '0000', ...) would pass the turn
        if not move:
            raise InvalidMoveError("Invalid move")
        return move
