"""Connection lifecycle of the game record store: open at process start, close at shutdown."""

import logging
from contextlib import contextmanager
from typing import Generator

from sqlalchemy import Engine, StaticPool, create_engine
from sqlalchemy.orm import Session, sessionmaker

from src.core.config import Settings
from src.db.schema import Base

logger = logging.getLogger(__name__)


class Database:
    """Owns the SQLAlchemy engine. Passed explicitly to whatever needs a session."""

    def __init__(self, url: str, echo: bool = False) -> None:
        self.url = url
        self.echo = echo
        self._engine: Engine | None = None
        self._sessionmaker: sessionmaker[Session] | None = None

    @classmethod
    def from_settings(cls, settings: Settings) -> "Database":
        return cls(settings.database_url, echo=settings.database_echo)

    @property
    def is_open(self) -> bool:
        return self._engine is not None

    def open(self) -> None:
        """Create the engine and make sure all tables exist."""
        if self.is_open:
            return

        kwargs: dict = {"echo": self.echo}
        if self.url.startswith("sqlite"):
            kwargs["connect_args"] = {"check_same_thread": False}
            # in-memory sqlite only lives as long as its one connection
            if ":memory:" in self.url:
                kwargs["poolclass"] = StaticPool

        self._engine = create_engine(self.url, **kwargs)
        self._sessionmaker = sessionmaker(bind=self._engine, autoflush=False)
        Base.metadata.create_all(bind=self._engine)
        logger.info("Opened game record store at %s", self._engine.url)

    def close(self) -> None:
        if self._engine is None:
            return
        self._engine.dispose()
        logger.info("Closed game record store")
        self._engine = None
        self._sessionmaker = None

    @contextmanager
    def session(self) -> Generator[Session, None, None]:
        if self._sessionmaker is None:
            raise RuntimeError("Database is not open. Call open() first.")
        db = self._sessionmaker()
        try:
            yield db
        finally:
            db.close()

    def __enter__(self) -> "Database":
        self.open()
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
