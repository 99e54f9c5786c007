"""
Type definitions used across layers
"""

from enum import StrEnum

# --- Neither Side nor PieceType has a member for an empty square. An empty square is simply `None` on the Board.


class Side(StrEnum):
    WHITE = "white"
    BLACK = "black"

    @property
    def opponent(self) -> "Side":
        return Side.BLACK if self == Side.WHITE else Side.WHITE


class PieceType(StrEnum):
    PAWN = "pawn"
    KNIGHT = "knight"
    BISHOP = "bishop"
    ROOK = "rook"
    QUEEN = "queen"
    KING = "king"


class ClickResult(StrEnum):
    """What happened after the player clicked on a square"""

    SELECTED = "selected"
    DESELECTED = "deselected"
    MOVED = "moved"
    IGNORED = "ignored"
