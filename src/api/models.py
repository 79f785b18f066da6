"""Requests and Response models"""

from typing import Optional, Self

from pydantic import BaseModel, field_validator, model_validator

from src.core.exceptions import InvalidRequestError
from src.core.shared_types import Color, OutcomeKind

ParticipantId = str


def _strip_participant(value: str) -> str:
    value = value.strip()
    if not value:
        raise InvalidRequestError("Participant id cannot be empty.")
    return value


# --- REQUEST MODELS ---
class GameRequest(BaseModel):
    """Anything a participant asks about their game with an opponent."""

    player: ParticipantId
    opponent: ParticipantId

    @field_validator("player", "opponent")
    @classmethod
    def validate_participant(cls, value: str) -> str:
        return _strip_participant(value)

    @model_validator(mode="after")
    def validate_distinct(self) -> Self:
        if self.player == self.opponent:
            raise InvalidRequestError("You cannot play chess against yourself.")
        return self


class ChallengeRequest(GameRequest):
    pass


class MoveRequest(GameRequest):
    move: str

    @field_validator("move")
    @classmethod
    def validate_move(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise InvalidRequestError("Which move? e.g. `e4`, `Nf3` or `e2e4`.")
        return value


class ListGamesRequest(BaseModel):
    player: ParticipantId

    @field_validator("player")
    @classmethod
    def validate_participant(cls, value: str) -> str:
        return _strip_participant(value)


# --- RESPONSE MODELS ---
class GameResponse(BaseModel):
    game_id: str
    white: ParticipantId
    black: ParticipantId
    fen_state: str
    side_to_move: Color
    next_player: ParticipantId
    is_over: bool


class MoveOutcome(BaseModel):
    """
    Result of one move attempt.

    checked_square is only set for check / checkmate, score only for check / continuing.
    Everything about the board is None for an invalid move, which leaves the game untouched.
    """

    kind: OutcomeKind
    game_id: str
    game_fen: str
    side_to_move: Color
    next_player: ParticipantId
    move_san: Optional[str] = None
    last_move: Optional[tuple[str, str]] = None
    checked_square: Optional[str] = None
    score: Optional[str] = None
    flip_board: bool = False
    render_url: Optional[str] = None

    @property
    def last_move_lan(self) -> Optional[str]:
        return "".join(self.last_move) if self.last_move else None


class BoardView(BaseModel):
    game: GameResponse
    score: str
    render_url: str


class LegalMovesResponse(BaseModel):
    game_id: str
    player: ParticipantId
    color: Color
    legal_moves: list[str]
