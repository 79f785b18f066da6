"""
Boundary layer data model(s).

These objects are used to communicate with the Service.
Both the chat layer (higher) and the db layer (lower) send/receive the model defined here, which decouples the
record layout of the store from the domain GameSession.
"""

from dataclasses import dataclass

# Type aliases to make GameModel easier to read
GameId = str
ParticipantId = str


@dataclass
class GameModel:
    """Transport-safe representation of a persisted chess game record."""

    id: GameId
    white: ParticipantId
    black: ParticipantId
    game_fen: str
