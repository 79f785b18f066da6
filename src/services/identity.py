"""
Game identity: which record belongs to a pair of participants.

Records are stored under "<challenger> vs <opponent>" exactly as created, so the lookup has to try both orderings.
"""

from src.chess.session import GameSession, pair_key
from src.db.repository import GameFilter, GameRepository, IdContains


def canonical_pair_key(first: str, second: str) -> str:
    """Same key for (a, b) and (b, a). Used where a stable per-pair name is needed (e.g. locking)."""
    return pair_key(*sorted((first, second)))


def candidate_keys(first: str, second: str) -> tuple[str, str]:
    """Both ways a game between the two could have been stored."""
    return pair_key(first, second), pair_key(second, first)


def pair_filter(first: str, second: str) -> GameFilter:
    forward, backward = candidate_keys(first, second)
    return IdContains(forward) | IdContains(backward)


def resolve_session(
    repo: GameRepository, first: str, second: str
) -> GameSession | None:
    """Find the game between two participants, regardless of who challenged whom."""
    participants = {first, second}
    for model in repo.find_games(pair_filter(first, second)):
        # id matching is a substring match, only accept the record of exactly this pair
        if {model.white, model.black} == participants:
            return GameSession.from_model(model)
    return None
