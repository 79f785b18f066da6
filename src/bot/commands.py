"""
Chat commands.

Each command is a regex plus a handler. A handler turns the regex groups into a request, calls the ChessService
and says the result. This is the only place GameErrors are caught: the user gets the error text, nothing else
happens for that command.
"""

import logging
import re
from dataclasses import dataclass
from typing import Callable, Optional

from src.api.models import (
    ChallengeRequest,
    GameRequest,
    ListGamesRequest,
    MoveOutcome,
    MoveRequest,
)
from src.bot.messaging import Messenger
from src.core.exceptions import GameError
from src.core.shared_types import OutcomeKind
from src.services.chess_service import ChessService

logger = logging.getLogger(__name__)

MENTION = re.compile(r"^<@([^>|]+)(?:\|[^>]*)?>$")

HELP_TEXT = "\n".join(
    [
        "Chess commands:",
        "`chess play @opponent` - challenge someone (you play white)",
        "`chess @opponent move <move>` - play a move, e.g. `e4`, `Nxf7`, `O-O` or `e2e4`",
        "`chess @opponent moves` - list your legal moves",
        "`chess @opponent board` - show the current board",
        "`chess games` - list your games",
    ]
)


def resolve_participant(text: str) -> str:
    """'<@U123>' / '<@U123|name>' -> 'U123'. Anything else is taken as the id itself."""
    text = text.strip()
    match = MENTION.match(text)
    return match.group(1) if match else text


def outcome_messages(outcome: MoveOutcome) -> list[str]:
    """Status line followed by the board image, in the order they should be said."""
    if outcome.kind == OutcomeKind.INVALID:
        return ["Invalid move"]

    status = {
        OutcomeKind.CHECKMATE: "You win!",
        OutcomeKind.DRAW: "Draw!",
        OutcomeKind.CHECK: f"Check - {outcome.next_player} it's your turn! Score: {outcome.score}",
        OutcomeKind.CONTINUING: f"{outcome.next_player} your turn! Score: {outcome.score}",
    }[outcome.kind]
    if outcome.render_url is None:
        return [status]
    return [status, outcome.render_url]


@dataclass
class CommandContext:
    user: str
    match: re.Match[str]
    say: Callable[[str], None]

    def group(self, index: int) -> Optional[str]:
        value = self.match.group(index)
        return value.strip() if value and value.strip() else None


Handler = Callable[[ChessService, CommandContext], None]


def handle_help(service: ChessService, ctx: CommandContext) -> None:
    ctx.say(HELP_TEXT)


def handle_play(service: ChessService, ctx: CommandContext) -> None:
    opponent = ctx.group(1)
    if opponent is None:
        ctx.say("Who do you want to play? `chess play @opponent`")
        return

    opponent = resolve_participant(opponent)
    game = service.challenge(ChallengeRequest(player=ctx.user, opponent=opponent))
    board = service.board(GameRequest(player=ctx.user, opponent=opponent))
    ctx.say(f"{game.white} (white) vs {game.black} (black) - {game.next_player} it's your turn!")
    ctx.say(board.render_url)


def handle_move(service: ChessService, ctx: CommandContext) -> None:
    request = MoveRequest(
        player=ctx.user,
        opponent=resolve_participant(ctx.group(1) or ""),
        move=ctx.group(2) or "",
    )
    outcome = service.make_move(request)
    for message in outcome_messages(outcome):
        ctx.say(message)


def handle_moves(service: ChessService, ctx: CommandContext) -> None:
    response = service.legal_moves(
        GameRequest(player=ctx.user, opponent=resolve_participant(ctx.group(1) or ""))
    )
    ctx.say(", ".join(sorted(response.legal_moves)))


def handle_board(service: ChessService, ctx: CommandContext) -> None:
    view = service.board(
        GameRequest(player=ctx.user, opponent=resolve_participant(ctx.group(1) or ""))
    )
    status = "Game over" if view.game.is_over else f"{view.game.next_player} to move"
    ctx.say(f"{status}. Score: {view.score}")
    ctx.say(view.render_url)


def handle_games(service: ChessService, ctx: CommandContext) -> None:
    games = service.list_games(ListGamesRequest(player=ctx.user))
    if not games:
        ctx.say("You have no games - try challenging someone with `chess play @opponent`")
        return

    lines = []
    for game in games:
        state = "over" if game.is_over else f"{game.next_player} to move"
        lines.append(f"{game.white} (white) vs {game.black} (black): {state}")
    ctx.say("\n".join(lines))


COMMANDS: list[tuple[re.Pattern[str], Handler]] = [
    (re.compile(r"^chess$"), handle_help),
    (re.compile(r"^chess play(?:$|\s+(.*))$"), handle_play),
    (re.compile(r"^chess (<@[^>]*>|\S+) move(?:$|\s+(.*))$"), handle_move),
    (re.compile(r"^chess (<@[^>]*>|\S+) moves$"), handle_moves),
    (re.compile(r"^chess (<@[^>]*>|\S+) board$"), handle_board),
    (re.compile(r"^chess games$"), handle_games),
]


class CommandRouter:
    """Dispatches an inbound message to the first command whose pattern matches."""

    def __init__(
        self,
        service: ChessService,
        commands: list[tuple[re.Pattern[str], Handler]] | None = None,
    ) -> None:
        self.service = service
        self.commands = commands if commands is not None else COMMANDS

    def dispatch(self, text: str, user: str, messenger: Messenger) -> bool:
        """Run the matching command. Returns False if no command matched."""
        text = text.strip()
        for pattern, handler in self.commands:
            match = pattern.match(text)
            if match is None:
                continue

            ctx = CommandContext(user=user, match=match, say=messenger.say)
            try:
                handler(self.service, ctx)
            except GameError as e:
                logger.debug("Command %r by %s failed: %s", text, user, e)
                messenger.say(str(e))
            return True
        return False
