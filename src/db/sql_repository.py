"""Implementation of (Game)Repository using SQLAlchemy"""

import logging

from sqlalchemy import ColumnElement, and_, or_, select
from sqlalchemy.orm import Session

from src.chess.fen import is_valid_fen
from src.core.exceptions import DuplicateGameError, InvalidFENError, RepositoryError
from src.core.models import GameId, GameModel
from src.db.repository import AnyOf, GameFilter, IdContains
from src.db.schema import DBChessGame

logger = logging.getLogger(__name__)


def compile_filter(game_filter: GameFilter) -> ColumnElement[bool]:
    """Structured filter -> SQLAlchemy expression. Values are bound parameters, LIKE wildcards escaped."""
    if isinstance(game_filter, IdContains):
        return DBChessGame.id.contains(game_filter.text, autoescape=True)
    if isinstance(game_filter, AnyOf):
        return or_(*(compile_filter(sub_filter) for sub_filter in game_filter.filters))
    raise RepositoryError(f"Unsupported filter: {game_filter!r}")


class SQLGameRepository:
    """Data stored using SQL / methods implemented using SQLAlchemy"""

    def __init__(self, db_session: Session) -> None:
        self.db = db_session

    def get_game(self, game_id: GameId) -> GameModel | None:
        """Get game by ID, if record exists."""
        game_db = self._fetch_game(game_id)
        if game_db:
            return self._to_model(game_db)
        return None

    def find_games(self, game_filter: GameFilter) -> list[GameModel]:
        query = (
            select(DBChessGame)
            .where(compile_filter(game_filter))
            .order_by(DBChessGame.created_at)
        )
        return [self._to_model(game_db) for game_db in self.db.scalars(query)]

    def all_games(self) -> list[GameModel]:
        query = select(DBChessGame).order_by(DBChessGame.created_at)
        return [self._to_model(game_db) for game_db in self.db.scalars(query)]

    def create_game(self, game: GameModel) -> GameModel:
        """Store new game and return the stored data."""
        self._assert_valid_fen(game.game_fen)
        if self._fetch_game(game.id) or self._fetch_pair(game.white, game.black):
            raise DuplicateGameError(
                f"A game between {game.white} and {game.black} already exists."
            )

        game_db = DBChessGame(
            id=game.id,
            white=game.white,
            black=game.black,
            game_fen=game.game_fen,
        )
        self.db.add(game_db)
        self.db.commit()
        self.db.refresh(game_db)
        logger.debug("Created game record %r", game.id)
        return self._to_model(game_db)

    def update_game(
        self,
        game_id: GameId,
        *,
        white: str | None = None,
        black: str | None = None,
        game_fen: str | None = None,
    ) -> GameModel:
        """Add new info to existing record, or create the record if all fields are given."""
        if game_fen is not None:
            self._assert_valid_fen(game_fen)

        game_db = self._fetch_game(game_id)
        if not game_db:
            if white is None or black is None or game_fen is None:
                raise RepositoryError(
                    f"Game with {game_id=} not found and not enough data to create it."
                )
            return self.create_game(
                GameModel(id=game_id, white=white, black=black, game_fen=game_fen)
            )

        if white is not None:
            game_db.white = white
        if black is not None:
            game_db.black = black
        if game_fen is not None:
            game_db.game_fen = game_fen
        self.db.commit()
        self.db.refresh(game_db)
        return self._to_model(game_db)

    def _assert_valid_fen(self, fen: str) -> None:
        """Never persist something the rules engine could not load again."""
        if not is_valid_fen(fen):
            raise InvalidFENError(f"Refusing to store invalid FEN: {fen!r}")

    def _fetch_game(self, game_id: GameId) -> DBChessGame | None:
        query = select(DBChessGame).where(DBChessGame.id == game_id)
        return self.db.scalar(query)

    def _fetch_pair(self, first: str, second: str) -> DBChessGame | None:
        """Record for the unordered pair, whichever color each participant plays."""
        query = select(DBChessGame).where(
            or_(
                and_(DBChessGame.white == first, DBChessGame.black == second),
                and_(DBChessGame.white == second, DBChessGame.black == first),
            )
        )
        return self.db.scalars(query).first()

    def _to_model(self, game_db: DBChessGame) -> GameModel:
        """Convert SQLAlchemy model to data transfer model."""
        return GameModel(
            id=game_db.id,
            white=game_db.white,
            black=game_db.black,
            game_fen=game_db.game_fen,
        )
