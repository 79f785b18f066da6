"""
Pytest will auto-discover / import this file called 'conftest.py'.
This file defines fixtures/variables required for testing multiple layers.
"""

from typing import Generator

import pytest
from sqlalchemy import StaticPool, create_engine
from sqlalchemy.orm import Session, sessionmaker

from src.chess.fen import STARTING_FEN
from src.chess.rules import PythonChessRules
from src.core.exceptions import DuplicateGameError, RepositoryError
from src.core.models import GameId, GameModel
from src.db.repository import GameFilter, matches
from src.db.schema import Base
from src.services.chess_service import ChessService
from src.services.render import LilaGifRenderer

# Setup an in-memory SQLite database for testing
DATABASE_URL = "sqlite:///:memory:"
engine = create_engine(
    DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)

TestingSessionLocal = sessionmaker(autoflush=False, bind=engine)

RENDER_URL = "https://boards.example.test/image.gif"


class MockRepository:
    """Mock the GameRepository using a dictionary of game models."""

    def __init__(self) -> None:
        self._games: dict[GameId, GameModel] = {}
        self.writes = 0

    def get_game(self, game_id: GameId) -> GameModel | None:
        return self._games.get(game_id)

    def find_games(self, game_filter: GameFilter) -> list[GameModel]:
        return [model for model in self._games.values() if matches(game_filter, model)]

    def all_games(self) -> list[GameModel]:
        return list(self._games.values())

    def create_game(self, game: GameModel) -> GameModel:
        pair = {game.white, game.black}
        if game.id in self._games or any(
            {model.white, model.black} == pair for model in self._games.values()
        ):
            raise DuplicateGameError(f"{game.id} already exists")
        self.writes += 1
        self._games[game.id] = GameModel(game.id, game.white, game.black, game.game_fen)
        return game

    def update_game(
        self,
        game_id: GameId,
        *,
        white: str | None = None,
        black: str | None = None,
        game_fen: str | None = None,
    ) -> GameModel:
        model = self._games.get(game_id)
        if model is None:
            if white is None or black is None or game_fen is None:
                raise RepositoryError(f"{game_id} not found")
            return self.create_game(GameModel(game_id, white, black, game_fen))

        self.writes += 1
        model.white = white if white is not None else model.white
        model.black = black if black is not None else model.black
        model.game_fen = game_fen if game_fen is not None else model.game_fen
        return model

    def seed(self, fen: str = STARTING_FEN, white: str = "U1", black: str = "U2") -> GameModel:
        """Put a game in the repository directly (does not count as a write)."""
        model = GameModel(id=f"{white} vs {black}", white=white, black=black, game_fen=fen)
        self._games[model.id] = model
        return model

    def clear(self) -> None:
        """Clear the repository (useful in between tests)"""
        self._games.clear()


@pytest.fixture
def mock_repository() -> Generator[MockRepository, None, None]:
    """Ensures to clear the repository between tests"""
    repo = MockRepository()
    try:
        yield repo
    finally:
        repo.clear()


@pytest.fixture
def rules() -> PythonChessRules:
    return PythonChessRules()


@pytest.fixture
def service(mock_repository: MockRepository, rules: PythonChessRules) -> ChessService:
    return ChessService(mock_repository, rules, LilaGifRenderer(RENDER_URL))


@pytest.fixture
def db_session_repo() -> Generator[Session, None, None]:
    """Connection to a test database. Tables are removed at teardown to make unit tests of repository independent of each other."""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        Base.metadata.drop_all(bind=engine)
        db.close()
