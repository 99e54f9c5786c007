"""Orchestration of communication from the presentation layer to the domain layer (and the reverse direction)."""

import logging
from uuid import UUID

from chessboard.api.models import (
    DeleteGameRequest,
    GameResponse,
    GetGameRequest,
    LegalMovesRequest,
    LegalMovesResponse,
    MoveRecordView,
    MoveRequest,
    ResetGameRequest,
    SelectionResponse,
    SelectSquareRequest,
    SquareView,
)
from chessboard.chess.game import GameState
from chessboard.chess.selection import handle_square_click
from chessboard.chess.square import NUM_SQUARES, square_shade, square_to_algebraic
from chessboard.core.exceptions import (
    GameNotFoundError,
    InvalidMoveError,
    WrongSideError,
)
from chessboard.services.store import GameSession, GameStore

logger = logging.getLogger(__name__)


class ChessService:
    """Orchestration of layers for the chess board manager."""

    def __init__(self, store: GameStore) -> None:
        self.store = store

    # -- Presentation layer logic ---
    def create_game(self) -> GameResponse:
        """Start a new game in the standard starting position."""
        session = GameSession()
        game_id = self.store.create_session(session)
        logger.info("Created game %s", game_id)
        return self._create_game_response(game_id, session)

    def get_game(self, request: GetGameRequest) -> GameResponse:
        """Retrieve current game state (to redraw the board)."""
        session = self._fetch_session(request.game_id)
        return self._create_game_response(request.game_id, session)

    def legal_moves(self, request: LegalMovesRequest) -> LegalMovesResponse:
        """
        Destinations of the piece on the requested square.
        ----
        Does not care whose turn it is: an empty square simply has no destinations.
        """
        session = self._fetch_session(request.game_id)
        piece = session.state.piece_at(request.square)
        destinations = session.state.legal_destinations(request.square)
        return LegalMovesResponse(
            game_id=request.game_id,
            square=request.square,
            piece=piece.to_fen() if piece else None,
            destinations=sorted(destinations),
        )

    def make_move(self, request: MoveRequest) -> GameResponse:
        """Make a move attempt on behalf of the side to move. The turn passes to the opponent afterwards."""
        session = self._fetch_session(request.game_id)

        try:
            session.state.play_move(request.from_square, request.to_square)
        except (WrongSideError, InvalidMoveError) as exc:
            logger.warning("Rejected move in game %s: %s", request.game_id, exc)
            raise

        # whatever was highlighted belongs to the position before the move
        session.selection.clear()
        logger.info(
            "Game %s: %s",
            request.game_id,
            session.state.history[-1].to_algebraic(),
        )
        return self._create_game_response(request.game_id, session)

    def select_square(self, request: SelectSquareRequest) -> SelectionResponse:
        """The player clicked on a square: select / deselect / move."""
        session = self._fetch_session(request.game_id)
        result = handle_square_click(session.state, session.selection, request.square)
        logger.debug("Game %s: click on %s -> %s", request.game_id, request.square, result)
        return SelectionResponse(
            result=result,
            game=self._create_game_response(request.game_id, session),
        )

    def reset_game(self, request: ResetGameRequest) -> GameResponse:
        """Throw away the current game and start over (a fresh GameState, the old one is not reused)."""
        self._fetch_session(request.game_id)
        session = GameSession(state=GameState.new_game())
        self.store.replace_session(request.game_id, session)
        logger.info("Reset game %s", request.game_id)
        return self._create_game_response(request.game_id, session)

    def delete_game(self, request: DeleteGameRequest) -> None:
        """Handle a request to delete a game."""
        if self.store.delete_session(request.game_id) is None:
            raise GameNotFoundError(f"Game with {request.game_id=} not found.")
        logger.info("Deleted game %s", request.game_id)

    # -- Internal helpers --
    def _create_game_response(self, game_id: UUID, session: GameSession) -> GameResponse:
        """Convert the session into a GameResponse (for game with given ID.)"""
        state = session.state
        return GameResponse(
            game_id=game_id,
            turn=state.side_to_move(),
            position=state.board.to_fen(),
            squares=[self._square_view(state, square) for square in range(NUM_SQUARES)],
            move_history=[
                MoveRecordView(
                    from_square=record.from_square,
                    to_square=record.to_square,
                    piece=record.piece.to_fen(),
                    notation=record.to_algebraic(),
                )
                for record in state.history
            ],
            selected_square=session.selection.square,
            highlighted_squares=session.selection.destinations,
        )

    def _square_view(self, state: GameState, square: int) -> SquareView:
        piece = state.piece_at(square)
        return SquareView(
            index=square,
            name=square_to_algebraic(square),
            shade=square_shade(square),
            piece=piece.to_fen() if piece else None,
            symbol=piece.symbol() if piece else None,
        )

    def _fetch_session(self, game_id: UUID) -> GameSession:
        """Attempt to find the game in the store and raise error if it fails."""
        session = self.store.get_session(game_id)
        if session is None:
            raise GameNotFoundError(f"Game with {game_id=} not found.")
        return session
