"""Unit tests for src/db/database.py"""

import pytest

from src.chess.session import GameSession
from src.core.config import Settings
from src.db.database import Database
from src.db.sql_repository import SQLGameRepository


def test_session_requires_open_database() -> None:
    database = Database("sqlite:///:memory:")
    with pytest.raises(RuntimeError):
        with database.session():
            pass


def test_open_creates_tables() -> None:
    database = Database("sqlite:///:memory:")
    database.open()
    try:
        with database.session() as db:
            repo = SQLGameRepository(db)
            session = GameSession.new_game(white="U1", black="U2")
            repo.create_game(session.to_model())
            assert repo.get_game("U1 vs U2") == session.to_model()
    finally:
        database.close()
    assert not database.is_open


def test_data_survives_between_sessions() -> None:
    with Database("sqlite:///:memory:") as database:
        with database.session() as db:
            SQLGameRepository(db).create_game(GameSession.new_game("U1", "U2").to_model())
        with database.session() as db:
            assert len(SQLGameRepository(db).all_games()) == 1


def test_open_and_close_are_idempotent() -> None:
    database = Database("sqlite:///:memory:")
    database.open()
    database.open()
    assert database.is_open
    database.close()
    database.close()
    assert not database.is_open


def test_from_settings() -> None:
    settings = Settings(database_url="sqlite:///:memory:", database_echo=True)
    database = Database.from_settings(settings)
    assert database.url == "sqlite:///:memory:"
    assert database.echo
