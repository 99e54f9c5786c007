"""The Board holds the `position` (in chess: the configuration of pieces on the board) and nothing else"""

from dataclasses import dataclass, field
from typing import Optional, Self

from chessboard.chess.moves import PROMOTE_TO, is_promotion_square
from chessboard.chess.pieces import Piece
from chessboard.chess.square import (
    BOARD_DIMENSIONS,
    NUM_SQUARES,
    SquareIndex,
    is_valid_index,
    to_index,
)
from chessboard.core.exceptions import InvalidPositionError

STARTING_POSITION = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR"
EMPTY_POSITION = "/".join(["8"] * BOARD_DIMENSIONS[0])


def _empty_squares() -> list[Optional[Piece]]:
    return [None] * NUM_SQUARES


@dataclass
class Board:
    squares: list[Optional[Piece]] = field(default_factory=_empty_squares)

    @classmethod
    def starting_position(cls) -> Self:
        return cls.from_fen(STARTING_POSITION)

    @classmethod
    def from_fen(cls, fen_str: str) -> Self:
        """Construct a board using the piece placement part of a FEN string.

        ex. standard starting position:
        rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR
        means:
        * black pieces are on the top row (row 0), starting with the rook on a8
        * black pawns cover row 1 entirely
        * rows 2 through 5 have 8 consecutive empty squares
        * row 6 holds the white pawns (capital letters)
        * row 7 holds the white pieces, again read left-to-right from a1 to h1.
        """
        rows = fen_str.split("/")
        if len(rows) != BOARD_DIMENSIONS[0]:
            raise InvalidPositionError(
                f"Expected {BOARD_DIMENSIONS[0]} rows separated by '/', got {len(rows)}: {fen_str!r}"
            )

        squares = _empty_squares()
        for row, fen_one_row in enumerate(rows):
            col = 0
            for character in fen_one_row:
                if character.isdigit():
                    # A number denotes the amount of empty squares after each other
                    col += int(character)
                    continue

                if col >= BOARD_DIMENSIONS[1]:
                    raise InvalidPositionError(f"Row {row} is too long: {fen_one_row!r}")
                squares[to_index(row, col)] = Piece.from_fen(character)
                col += 1

            if col != BOARD_DIMENSIONS[1]:
                raise InvalidPositionError(
                    f"Row {row} does not cover {BOARD_DIMENSIONS[1]} squares: {fen_one_row!r}"
                )
        return cls(squares)

    def to_fen(self) -> str:
        """Rows are separated by slashes in FEN string."""
        return "/".join(self._row_to_fen(row) for row in range(BOARD_DIMENSIONS[0]))

    def _row_to_fen(self, row: int) -> str:
        """FEN string of a single row"""
        fen_characters: list[str] = []
        empty_count = 0
        for col in range(BOARD_DIMENSIONS[1]):
            piece = self.piece_at(to_index(row, col))

            if piece is not None:
                if empty_count > 0:
                    fen_characters.append(str(empty_count))
                    empty_count = 0
                fen_characters.append(piece.to_fen())
            else:
                empty_count += 1

        # if the entire row is empty, then we still place this number in the string
        if empty_count > 0:
            fen_characters.append(str(empty_count))
        return "".join(fen_characters)

    def piece_at(self, square: SquareIndex) -> Optional[Piece]:
        if not is_valid_index(square):
            return None
        return self.squares[square]

    def place_piece(self, piece: Piece, square: SquareIndex) -> None:
        self.squares[square] = piece

    def remove_piece(self, square: SquareIndex) -> None:
        self.squares[square] = None

    def occupied_squares(self) -> list[SquareIndex]:
        return [square for square, piece in enumerate(self.squares) if piece is not None]

    def move_piece(
        self, from_square: SquareIndex, to_square: SquareIndex
    ) -> Optional[Piece]:
        """
        Raw update of the position: no checks at all.
        ---

        Whatever stood on `to_square` is overwritten (that is how a capture happens), `from_square` is emptied and a pawn
        reaching the far row is replaced by a queen.
        Returns the piece as it was before moving.
        """
        piece_that_moved = self.squares[from_square]
        self.squares[from_square] = None
        self.squares[to_square] = piece_that_moved

        if piece_that_moved is not None and is_promotion_square(
            piece_that_moved, to_square
        ):
            self.squares[to_square] = piece_that_moved.promoted_to(PROMOTE_TO)
        return piece_that_moved
