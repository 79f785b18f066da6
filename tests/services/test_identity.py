"""Unit tests for src/services/identity.py"""

import pytest
from conftest import MockRepository

from src.db.repository import AnyOf, IdContains
from src.services.identity import (
    canonical_pair_key,
    candidate_keys,
    pair_filter,
    resolve_session,
)


def test_canonical_pair_key_ignores_order() -> None:
    assert canonical_pair_key("U1", "U2") == canonical_pair_key("U2", "U1") == "U1 vs U2"


def test_candidate_keys() -> None:
    assert candidate_keys("A", "B") == ("A vs B", "B vs A")


def test_pair_filter_is_structured() -> None:
    assert pair_filter("A", "B") == AnyOf((IdContains("A vs B"), IdContains("B vs A")))


@pytest.mark.parametrize("stored_white, stored_black", [("A", "B"), ("B", "A")])
@pytest.mark.parametrize("first, second", [("A", "B"), ("B", "A")])
def test_resolve_with_either_ordering(
    mock_repository: MockRepository,
    stored_white: str,
    stored_black: str,
    first: str,
    second: str,
) -> None:
    """However the record was stored, both lookups find it."""
    mock_repository.seed(white=stored_white, black=stored_black)
    session = resolve_session(mock_repository, first, second)
    assert session is not None
    assert session.id == f"{stored_white} vs {stored_black}"
    assert (session.white, session.black) == (stored_white, stored_black)


def test_resolve_unknown_pair(mock_repository: MockRepository) -> None:
    mock_repository.seed(white="A", black="B")
    assert resolve_session(mock_repository, "A", "C") is None


def test_resolve_ignores_substring_matches(mock_repository: MockRepository) -> None:
    """'XU1 vs U2' contains 'U1 vs U2' but is a game of somebody else."""
    mock_repository.seed(white="XU1", black="U2")
    assert resolve_session(mock_repository, "U1", "U2") is None

    mock_repository.seed(white="U1", black="U2")
    session = resolve_session(mock_repository, "U1", "U2")
    assert session is not None
    assert session.white == "U1"


def test_resolve_is_read_only(mock_repository: MockRepository) -> None:
    mock_repository.seed()
    resolve_session(mock_repository, "U1", "U2")
    assert mock_repository.writes == 0
