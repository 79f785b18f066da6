"""Logging setup. Modules only ever call logging.getLogger(__name__); this configures where the records go."""

import logging

from src.core.config import Settings

LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"


def setup_logging(settings: Settings) -> None:
    """Configure the root logger once at process start. Records go to stderr, replies to the chat own stdout."""
    level = getattr(logging, settings.log_level)
    logging.basicConfig(level=level, format=LOG_FORMAT)
    # basicConfig leaves the level alone when a handler was already installed
    logging.getLogger().setLevel(level)

    # SQLAlchemy has its own echo flag, keep its loggers quiet otherwise
    if not settings.database_echo:
        logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
