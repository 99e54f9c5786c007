"""
The GameState is the entrypoint into the domain layer.

It owns the board, whose turn it is and the log of the moves applied so far. Legality of moves is delegated to
the movement rules in moves.py, the position itself is updated by the Board.

The module-level functions at the bottom are the in-process API for a presentation layer (or any other driver).
"""

import logging
from dataclasses import dataclass, field
from typing import Optional, Self

from chessboard.chess.board import Board
from chessboard.chess.moves import legal_destinations as board_destinations
from chessboard.chess.pieces import Piece, is_own_piece
from chessboard.chess.square import SquareIndex, is_valid_index, square_to_algebraic
from chessboard.core.exceptions import InvalidMoveError, WrongSideError
from chessboard.core.shared_types import Side

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MoveRecord:
    """One entry of the move history. `piece` is the piece as it was BEFORE the move (so a pawn, even if it promoted)."""

    from_square: SquareIndex
    to_square: SquareIndex
    piece: Piece

    def to_algebraic(self) -> str:
        return f"{square_to_algebraic(self.from_square)}{square_to_algebraic(self.to_square)}"


@dataclass
class GameState:
    board: Board = field(default_factory=Board.starting_position)
    turn: Side = Side.WHITE
    history: list[MoveRecord] = field(default_factory=list)

    @classmethod
    def new_game(cls) -> Self:
        """Standard starting position, White to move, nothing played yet."""
        return cls()

    @classmethod
    def from_fen(cls, position: str, turn: Side = Side.WHITE) -> Self:
        """Start from an arbitrary placement of pieces (history starts out empty)"""
        return cls(board=Board.from_fen(position), turn=turn)

    # --- QUERIES ---
    def piece_at(self, square: SquareIndex) -> Optional[Piece]:
        return self.board.piece_at(square)

    def side_to_move(self) -> Side:
        return self.turn

    @staticmethod
    def is_own_piece(piece: Optional[Piece], side: Side) -> bool:
        return is_own_piece(piece, side)

    def legal_destinations(self, square: SquareIndex) -> set[SquareIndex]:
        return board_destinations(self.board, square)

    # --- MUTATIONS ---
    def apply_move(self, from_square: SquareIndex, to_square: SquareIndex) -> None:
        """
        Move the piece on `from_square` to `to_square`
        ----

        * Captures by overwriting the destination
        * Promotes a pawn reaching the far row into a queen
        * Appends to the move history

        Does NOT toggle the turn and does not care whose piece it is (see `play_move()` for that).
        Raises InvalidMoveError (and leaves the board untouched) if there is nothing on `from_square` or the piece
        is not allowed to go to `to_square`.
        """
        self._assert_valid_move(from_square, to_square)
        self._record_move(from_square, to_square)

    def play_move(self, from_square: SquareIndex, to_square: SquareIndex) -> None:
        """
        A full turn, as a player makes it
        ----

        1. Check the piece belongs to the side to move
        2. Check and apply the move
        3. Hand the turn to the opponent
        """
        piece = self.piece_at(from_square)
        if piece is not None and not is_own_piece(piece, self.turn):
            raise WrongSideError(
                f"It is {self.turn}'s turn. Cannot move the {piece.side} {piece.type} on {square_to_algebraic(from_square)}."
            )
        self.apply_move(from_square, to_square)
        self.toggle_turn()

    def toggle_turn(self) -> None:
        self.turn = self.turn.opponent

    def reset(self) -> None:
        """Back to the starting position with an empty history and White to move"""
        self.board = Board.starting_position()
        self.turn = Side.WHITE
        self.history = []
        logger.debug("Game state reset to the starting position")

    # -- PRIVATE HELPERS ---
    def _assert_valid_move(self, from_square: SquareIndex, to_square: SquareIndex) -> None:
        if not (is_valid_index(from_square) and is_valid_index(to_square)):
            raise InvalidMoveError(
                f"Squares must be in the range 0-63. Got from={from_square}, to={to_square}."
            )

        if self.piece_at(from_square) is None:
            raise InvalidMoveError(
                f"There is no piece on {square_to_algebraic(from_square)} to move."
            )

        if to_square not in self.legal_destinations(from_square):
            raise InvalidMoveError(
                f"Move not allowed: {square_to_algebraic(from_square)}{square_to_algebraic(to_square)}"
            )

    def _record_move(self, from_square: SquareIndex, to_square: SquareIndex) -> None:
        """Update the board and the move history. No validation: callers must have checked the move first."""
        piece_that_moved = self.board.move_piece(from_square, to_square)
        # for the type checker: only called after validation, so there was a piece to move
        assert piece_that_moved is not None

        record = MoveRecord(from_square, to_square, piece_that_moved)
        self.history.append(record)
        logger.debug("Applied %s %s", piece_that_moved.to_fen(), record.to_algebraic())

        if self.piece_at(to_square) != piece_that_moved:
            logger.debug(
                "Promoted %s pawn on %s",
                piece_that_moved.side,
                square_to_algebraic(to_square),
            )


# --- IN-PROCESS API ---
def new_game() -> GameState:
    return GameState.new_game()


def legal_destinations(state: GameState, square: SquareIndex) -> set[SquareIndex]:
    return state.legal_destinations(square)


def apply_move(state: GameState, from_square: SquareIndex, to_square: SquareIndex) -> None:
    state.apply_move(from_square, to_square)


def toggle_turn(state: GameState) -> None:
    state.toggle_turn()


def reset(state: GameState) -> None:
    state.reset()


def piece_at(state: GameState, square: SquareIndex) -> Optional[Piece]:
    return state.piece_at(square)
