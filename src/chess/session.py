"""
The GameSession is what the service layer works with: two participants and the current position.

Whose turn it is, whether the game is over, etc. is never stored here. It is always derived from game_fen by
the rules engine, so it cannot drift away from the position.
"""

from dataclasses import dataclass
from typing import Self

from src.chess.fen import STARTING_FEN
from src.core.models import GameModel


def pair_key(first: str, second: str) -> str:
    """Record id for a game between two participants, in the order given."""
    return f"{first} vs {second}"


@dataclass
class GameSession:
    id: str
    white: str
    black: str
    game_fen: str

    @classmethod
    def new_game(cls, white: str, black: str) -> Self:
        """Fresh game from the starting position. The challenger (white) comes first in the id."""
        return cls(
            id=pair_key(white, black), white=white, black=black, game_fen=STARTING_FEN
        )

    @classmethod
    def from_model(cls, model: GameModel) -> Self:
        return cls(
            id=model.id, white=model.white, black=model.black, game_fen=model.game_fen
        )

    def to_model(self) -> GameModel:
        return GameModel(
            id=self.id, white=self.white, black=self.black, game_fen=self.game_fen
        )

    @property
    def participants(self) -> tuple[str, str]:
        return (self.white, self.black)

    def is_participant(self, player: str) -> bool:
        return player in self.participants
