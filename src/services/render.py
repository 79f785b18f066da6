"""Board images: the bot only builds the URL, the image service draws the board."""

from typing import Optional, Protocol
from uuid import uuid4

from src.chess.fen import position_part


class Renderer(Protocol):
    def render_url(
        self,
        position: str,
        flip_board: bool = False,
        last_move: Optional[str] = None,
        check: Optional[str] = None,
    ) -> str:
        """URL of an image of the position. last_move like 'e2e4', check like 'e8'."""
        ...


class LilaGifRenderer:
    """Renders through a lila-gif compatible endpoint."""

    def __init__(self, base_url: str) -> None:
        self.base_url = base_url

    def render_url(
        self,
        position: str,
        flip_board: bool = False,
        last_move: Optional[str] = None,
        check: Optional[str] = None,
    ) -> str:
        params = {"fen": position_part(position)}
        if flip_board:
            params["orientation"] = "black"
        if last_move:
            params["lastMove"] = last_move
        if check:
            params["check"] = check

        # values are FEN placement / square names, nothing that needs percent-encoding.
        # The fragment stops chat clients from reusing a cached preview of an older image.
        query = "&".join(f"{key}={value}" for key, value in params.items())
        return f"{self.base_url}?{query}#{uuid4().hex}"
