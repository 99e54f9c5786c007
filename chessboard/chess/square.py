"""
Squares on the board

(placed in its own module as multiple other modules need to import it)

A square is addressed by its index 0-63, read row by row starting from the top-left corner:
* row 0 is Black's back rank (the 8th rank), row 7 is White's back rank (the 1st rank)
* column 0 is the a-file, column 7 is the h-file
So index 0 is a8 and index 63 is h1.
"""

from __future__ import annotations

from dataclasses import dataclass
from string import ascii_lowercase

# Chess board is always 8x8. (rows, columns)
BOARD_DIMENSIONS = (8, 8)
NUM_SQUARES = BOARD_DIMENSIONS[0] * BOARD_DIMENSIONS[1]

SquareIndex = int


def on_board(row: int, col: int) -> bool:
    return (0 <= row < BOARD_DIMENSIONS[0]) and (0 <= col < BOARD_DIMENSIONS[1])


def is_valid_index(index: SquareIndex) -> bool:
    return 0 <= index < NUM_SQUARES


def to_index(row: int, col: int) -> SquareIndex:
    return row * BOARD_DIMENSIONS[1] + col


def row_of(index: SquareIndex) -> int:
    return index // BOARD_DIMENSIONS[1]


def col_of(index: SquareIndex) -> int:
    return index % BOARD_DIMENSIONS[1]


def square_to_algebraic(index: SquareIndex) -> str:
    """index 0 -> 'a8', index 63 -> 'h1'"""
    return Square.from_index(index).to_algebraic()


def square_from_algebraic(name: str) -> SquareIndex:
    """'a8' -> 0, 'h1' -> 63"""
    return Square.from_algebraic(name).to_index()


def square_shade(index: SquareIndex) -> str:
    """The top-left square (a8) is a light square."""
    return "light" if (row_of(index) + col_of(index)) % 2 == 0 else "dark"


@dataclass(frozen=True)
class Square:
    row: int
    col: int

    @classmethod
    def from_index(cls, index: SquareIndex) -> Square:
        return cls(row_of(index), col_of(index))

    @classmethod
    def from_algebraic(cls, sq: str) -> Square:
        """Algebraic notation: 'a8' - 'h1' get converted to (0,0) - (7,7)"""
        col = ascii_lowercase.index(sq[0])
        row = BOARD_DIMENSIONS[0] - int(sq[1])
        return cls(row, col)

    def to_index(self) -> SquareIndex:
        return to_index(self.row, self.col)

    def to_algebraic(self) -> str:
        return f"{ascii_lowercase[self.col]}{BOARD_DIMENSIONS[0] - self.row}"

    def is_within_bounds(self) -> bool:
        return on_board(self.row, self.col)

    def shifted(self, d_row: int, d_col: int) -> Square:
        """The square reached by stepping along the given vector (may lie off the board)"""
        return Square(self.row + d_row, self.col + d_col)
