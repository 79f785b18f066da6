"""Database tables / schema"""

from datetime import datetime, timezone

from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    pass


class DBChessGame(Base):
    __tablename__ = "chess_games"
    id: Mapped[str] = mapped_column(primary_key=True)
    white: Mapped[str] = mapped_column(index=True)
    black: Mapped[str] = mapped_column(index=True)
    game_fen: Mapped[str]
    created_at: Mapped[datetime] = mapped_column(default=utc_now)
    updated_at: Mapped[datetime] = mapped_column(default=utc_now, onupdate=utc_now)
