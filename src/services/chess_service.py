"""Orchestration of communication from the chat commands to the chess rules and persistence layers (and the reverse direction)."""

import logging

from src.api.models import (
    BoardView,
    ChallengeRequest,
    GameRequest,
    GameResponse,
    LegalMovesResponse,
    ListGamesRequest,
    MoveOutcome,
    MoveRequest,
)
from src.chess.fen import STARTING_FEN
from src.chess.rules import AcceptedMove, RulesEngine, checked_square
from src.chess.score import relative_score
from src.chess.session import GameSession
from src.core.exceptions import InvalidMoveError, SessionNotFoundError
from src.core.shared_types import Color, OutcomeKind
from src.db.repository import GameRepository, IdContains
from src.services import turns
from src.services.identity import canonical_pair_key, resolve_session
from src.services.locks import SessionLocks
from src.services.render import Renderer

logger = logging.getLogger(__name__)

NO_GAME_FOUND = "No game found - try challenging someone with `chess play @opponent`"


class ChessService:
    """Orchestration of layers for chess games played between two chat participants."""

    def __init__(
        self,
        repository: GameRepository,
        rules: RulesEngine,
        renderer: Renderer,
        locks: SessionLocks | None = None,
    ) -> None:
        self.repo = repository
        self.rules = rules
        self.renderer = renderer
        self.locks = locks or SessionLocks()

    # -- Chat command logic ---
    def challenge(self, request: ChallengeRequest) -> GameResponse:
        """
        Start a game against the opponent, with the challenger playing white.
        ----

        An ongoing game between the two is returned as is (whoever challenged first).
        A finished game is reset to the starting position: a rematch reuses the pair's record.
        """
        with self.locks.hold(canonical_pair_key(request.player, request.opponent)):
            session = resolve_session(self.repo, request.player, request.opponent)

            if session is None:
                session = GameSession.new_game(white=request.player, black=request.opponent)
                self.repo.create_game(session.to_model())
                logger.info("New game %r", session.id)
            elif self.rules.is_game_over(session.game_fen):
                session.game_fen = STARTING_FEN
                self.repo.update_game(session.id, game_fen=session.game_fen)
                logger.info("Rematch in %r", session.id)

            return self._create_game_response(session)

    def get_game_state(self, request: GameRequest) -> GameResponse:
        session = self._fetch_session(request.player, request.opponent)
        return self._create_game_response(session)

    def board(self, request: GameRequest) -> BoardView:
        """Current position as an image, oriented toward whoever has to move."""
        session = self._fetch_session(request.player, request.opponent)
        game = self._create_game_response(session)
        check = (
            checked_square(self.rules, session.game_fen)
            if self.rules.is_check(session.game_fen)
            else None
        )
        return BoardView(
            game=game,
            score=relative_score(session.game_fen),
            render_url=self.renderer.render_url(
                session.game_fen,
                flip_board=game.side_to_move == Color.BLACK,
                check=check,
            ),
        )

    def legal_moves(self, request: GameRequest) -> LegalMovesResponse:
        """Legal moves of the player, only available when it is their turn."""
        session = self._fetch_session(request.player, request.opponent)
        turns.ensure_in_progress(self.rules, session)
        turns.authorize(self.rules, session, request.player)

        return LegalMovesResponse(
            game_id=session.id,
            player=request.player,
            color=turns.side_to_move(self.rules, session),
            legal_moves=self.rules.legal_moves(session.game_fen),
        )

    def list_games(self, request: ListGamesRequest) -> list[GameResponse]:
        """All games the player takes part in."""
        sessions = [
            GameSession.from_model(model)
            for model in self.repo.find_games(IdContains(request.player))
        ]
        return [
            self._create_game_response(session)
            for session in sessions
            if session.is_participant(request.player)
        ]

    def make_move(self, request: MoveRequest) -> MoveOutcome:
        """
        Make a move attempt.
        ----

        1. find the game of the pair (either ordering)
        2. the game must still be going and it must be the player's turn
        3. let the rules engine play the move (invalid move? -> nothing gets written)
        4. classify the new position: checkmate > draw > check > continuing
        5. persist the new position, only now that everything above succeeded

        Steps 1-5 hold the pair's lock, so a concurrent attempt sees the position written here.
        """
        with self.locks.hold(canonical_pair_key(request.player, request.opponent)):
            session = self._fetch_session(request.player, request.opponent)
            turns.ensure_in_progress(self.rules, session)
            turns.authorize(self.rules, session, request.player)

            try:
                accepted, new_fen = self.rules.submit_move(session.game_fen, request.move)
            except InvalidMoveError:
                logger.debug("Invalid move %r in %r", request.move, session.id)
                return self._invalid_outcome(session)

            outcome = self._classify(session, accepted, new_fen)

            self.repo.update_game(session.id, game_fen=new_fen)
            logger.info(
                "%s played %s in %r: %s", request.player, accepted.san, session.id, outcome.kind
            )
            return outcome

    # -- Internal helpers --
    def _classify(
        self, session: GameSession, accepted: AcceptedMove, new_fen: str
    ) -> MoveOutcome:
        """Build the outcome for a position the rules engine produced. Does not persist anything."""
        after = GameSession(session.id, session.white, session.black, new_fen)
        side = turns.side_to_move(self.rules, after)

        check: str | None = None
        score: str | None = None
        if self.rules.is_checkmate(new_fen):
            kind = OutcomeKind.CHECKMATE
            check = checked_square(self.rules, new_fen)
        elif self.rules.is_game_over(new_fen):
            kind = OutcomeKind.DRAW
        elif self.rules.is_check(new_fen):
            kind = OutcomeKind.CHECK
            check = checked_square(self.rules, new_fen)
            score = relative_score(new_fen)
        else:
            kind = OutcomeKind.CONTINUING
            score = relative_score(new_fen)

        flip_board = side == Color.BLACK
        return MoveOutcome(
            kind=kind,
            game_id=session.id,
            game_fen=new_fen,
            side_to_move=side,
            next_player=turns.player_to_move(self.rules, after),
            move_san=accepted.san,
            last_move=(accepted.from_square, accepted.to_square),
            checked_square=check,
            score=score,
            flip_board=flip_board,
            render_url=self.renderer.render_url(
                new_fen, flip_board=flip_board, last_move=accepted.lan, check=check
            ),
        )

    def _invalid_outcome(self, session: GameSession) -> MoveOutcome:
        return MoveOutcome(
            kind=OutcomeKind.INVALID,
            game_id=session.id,
            game_fen=session.game_fen,
            side_to_move=turns.side_to_move(self.rules, session),
            next_player=turns.player_to_move(self.rules, session),
        )

    def _create_game_response(self, session: GameSession) -> GameResponse:
        """Convert a GameSession into a GameResponse."""
        return GameResponse(
            game_id=session.id,
            white=session.white,
            black=session.black,
            fen_state=session.game_fen,
            side_to_move=turns.side_to_move(self.rules, session),
            next_player=turns.player_to_move(self.rules, session),
            is_over=self.rules.is_game_over(session.game_fen),
        )

    def _fetch_session(self, player: str, opponent: str) -> GameSession:
        """Attempt to find the pair's game in the repository and raise error if it fails."""
        session = resolve_session(self.repo, player, opponent)
        if session is None:
            raise SessionNotFoundError(NO_GAME_FOUND)
        return session
