"""
Protocol repository + the structured filters it can be queried with.

Filters are plain data. Each repository implementation compiles them into its own (parameterised) query
language, so participant ids never get spliced into query text.
"""

from dataclasses import dataclass
from typing import Protocol, Union

from src.core.models import GameId, GameModel


@dataclass(frozen=True)
class IdContains:
    """Record id contains the given text (literally, no wildcards)."""

    text: str

    def __or__(self, other: "GameFilter") -> "AnyOf":
        return AnyOf((self, other))


@dataclass(frozen=True)
class AnyOf:
    """Matches if any of the contained filters match."""

    filters: tuple["GameFilter", ...]

    def __or__(self, other: "GameFilter") -> "AnyOf":
        return AnyOf((*self.filters, other))


GameFilter = Union[IdContains, AnyOf]


def matches(game_filter: GameFilter, model: GameModel) -> bool:
    """Evaluate a filter in Python. Used by in-memory repositories."""
    if isinstance(game_filter, IdContains):
        return game_filter.text in model.id
    return any(matches(sub_filter, model) for sub_filter in game_filter.filters)


class GameRepository(Protocol):
    """Persistence layer orchestration"""

    def get_game(self, game_id: GameId) -> GameModel | None:
        """Get game by ID, if record exists."""
        ...

    def find_games(self, game_filter: GameFilter) -> list[GameModel]:
        """All games matching the filter."""
        ...

    def all_games(self) -> list[GameModel]: ...

    def create_game(self, game: GameModel) -> GameModel:
        """Store a new game. Raises DuplicateGameError if the pair already has a record."""
        ...

    def update_game(
        self,
        game_id: GameId,
        *,
        white: str | None = None,
        black: str | None = None,
        game_fen: str | None = None,
    ) -> GameModel:
        """Change the given fields. Creates the record if absent (then all fields are required)."""
        ...
