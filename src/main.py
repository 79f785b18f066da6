"""
Console front-end for the chess bot.

Every stdin line is "<user>: <command>", e.g. "U1: chess play <@U2>". Replies go to stdout.
A chat platform adapter wires the same CommandRouter to its own message events.
"""

import argparse
import logging
import sys

from src.bot.commands import CommandRouter
from src.bot.messaging import StreamMessenger
from src.chess.rules import PythonChessRules
from src.core.config import get_settings
from src.core.log_config import setup_logging
from src.db.database import Database
from src.db.sql_repository import SQLGameRepository
from src.services.chess_service import ChessService
from src.services.render import LilaGifRenderer

logger = logging.getLogger(__name__)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Play chess through chat commands.")
    parser.add_argument(
        "--database-url",
        default=None,
        help="SQLAlchemy URL of the game store (overrides CHESSBOT_DATABASE_URL)",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    settings = get_settings()
    setup_logging(settings)

    database = Database(args.database_url or settings.database_url, echo=settings.database_echo)
    renderer = LilaGifRenderer(settings.render_base_url)
    messenger = StreamMessenger(sys.stdout)

    with database, database.session() as db:
        service = ChessService(SQLGameRepository(db), PythonChessRules(), renderer)
        router = CommandRouter(service)

        for line in sys.stdin:
            user, sep, text = line.partition(":")
            if not sep:
                messenger.say("Expected '<user>: <command>'")
                continue
            if not router.dispatch(text, user.strip(), messenger):
                logger.debug("Ignored message %r", text.strip())
    return 0


if __name__ == "__main__":
    sys.exit(main())
