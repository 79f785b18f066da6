"""
Exceptions raised by the domain, persistence and service layers.

All of them derive from GameError, so the chat command boundary can catch one type and report the message back to the user.
"""


class GameError(Exception):
    """Base class for anything that ends a single chat command early."""


class SessionNotFoundError(GameError):
    """No game record matches either ordering of the participant pair."""


class NotYourTurnError(GameError):
    """Move attempted by a participant who is not the one to move."""


class InvalidMoveError(GameError):
    """Rules engine rejected the move text."""


class GameOverError(GameError):
    """The stored position is already checkmate or a draw."""


class RulesEngineError(GameError):
    """The rules engine could not work with the supplied position."""


class InvalidFENError(RulesEngineError):
    """String cannot be interpreted as (part of) a FEN."""


class InvalidRequestError(GameError):
    """Request data that does not make sense before even touching the game."""


class RepositoryError(GameError):
    """Persistence layer could not fulfil the request."""


class DuplicateGameError(RepositoryError):
    """A game record for this pair of participants already exists."""
