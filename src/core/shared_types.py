"""
Type definitions used across layers
"""

from enum import StrEnum


class Color(StrEnum):
    WHITE = "white"
    BLACK = "black"


class OutcomeKind(StrEnum):
    """What a submitted move did to the game."""

    INVALID = "invalid"
    CONTINUING = "continuing"
    CHECK = "check"
    CHECKMATE = "checkmate"
    DRAW = "draw"
