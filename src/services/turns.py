"""
Turn state machine.

There are two states, white to move and black to move. Neither is stored anywhere: the side to move is read from
the position every time, and it flips because an accepted move writes a new position.
"""

import logging

from src.chess.rules import RulesEngine
from src.chess.session import GameSession
from src.core.exceptions import GameOverError, NotYourTurnError
from src.core.shared_types import Color

logger = logging.getLogger(__name__)


def side_to_move(rules: RulesEngine, session: GameSession) -> Color:
    return rules.side_to_move(session.game_fen)


def player_to_move(rules: RulesEngine, session: GameSession) -> str:
    """Participant that owns the side to move."""
    return (
        session.white
        if side_to_move(rules, session) == Color.WHITE
        else session.black
    )


def ensure_in_progress(rules: RulesEngine, session: GameSession) -> None:
    """Finished games (checkmate / draw stored as the last position) accept no more moves."""
    if rules.is_game_over(session.game_fen):
        raise GameOverError(
            f"The game between {session.white} and {session.black} is over. "
            "Challenge them again for a rematch!"
        )


def authorize(rules: RulesEngine, session: GameSession, player: str) -> None:
    """Raise NotYourTurnError unless the player owns the side to move."""
    expected = player_to_move(rules, session)
    if player != expected:
        logger.debug(
            "Rejected move attempt by %s in %r, waiting for %s",
            player,
            session.id,
            expected,
        )
        raise NotYourTurnError("It's not your turn!")
