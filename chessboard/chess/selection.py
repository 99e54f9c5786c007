"""
Clicking on squares
----

The presentation layer only reports "the player clicked on square X". Whether that selects a piece, deselects it,
or makes a move is decided here. Drawing the highlighted squares is left to the caller.
"""

from dataclasses import dataclass, field
from typing import Optional

from chessboard.chess.game import GameState
from chessboard.chess.pieces import is_own_piece
from chessboard.chess.square import SquareIndex
from chessboard.core.shared_types import ClickResult


@dataclass
class Selection:
    """The currently selected square and the squares its piece may move to"""

    square: Optional[SquareIndex] = None
    destinations: list[SquareIndex] = field(default_factory=list)

    @property
    def is_active(self) -> bool:
        return self.square is not None

    def select(self, state: GameState, square: SquareIndex) -> None:
        self.square = square
        self.destinations = sorted(state.legal_destinations(square))

    def clear(self) -> None:
        self.square = None
        self.destinations = []


def handle_square_click(
    state: GameState, selection: Selection, square: SquareIndex
) -> ClickResult:
    """
    Order of checks (first one that applies wins):

    1. clicking the selected square again deselects it
    2. clicking one of the highlighted destinations plays the move (and the turn passes to the opponent)
    3. clicking one of your own pieces selects it (also when another piece was selected)
    4. anything else clears the selection
    """
    if selection.is_active:
        if square == selection.square:
            selection.clear()
            return ClickResult.DESELECTED

        if square in selection.destinations:
            # for the type checker: is_active guarantees a square
            assert selection.square is not None
            state.play_move(selection.square, square)
            selection.clear()
            return ClickResult.MOVED

    if is_own_piece(state.piece_at(square), state.side_to_move()):
        selection.select(state, square)
        return ClickResult.SELECTED

    if selection.is_active:
        selection.clear()
        return ClickResult.DESELECTED
    return ClickResult.IGNORED
