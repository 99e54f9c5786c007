"""Defines the types of chess pieces"""

from dataclasses import dataclass
from typing import Optional, Self

from chessboard.core.exceptions import InvalidPositionError
from chessboard.core.shared_types import PieceType, Side

FEN_TO_PIECE: dict[str, PieceType] = {
    "p": PieceType.PAWN,
    "n": PieceType.KNIGHT,
    "b": PieceType.BISHOP,
    "r": PieceType.ROOK,
    "q": PieceType.QUEEN,
    "k": PieceType.KING,
}

PIECE_TO_FEN: dict[PieceType, str] = {value: key for key, value in FEN_TO_PIECE.items()}

# Outlined glyphs for White, filled glyphs for Black
PIECE_SYMBOLS: dict[Side, dict[PieceType, str]] = {
    Side.WHITE: {
        PieceType.PAWN: "♙",
        PieceType.KNIGHT: "♘",
        PieceType.BISHOP: "♗",
        PieceType.ROOK: "♖",
        PieceType.QUEEN: "♕",
        PieceType.KING: "♔",
    },
    Side.BLACK: {
        PieceType.PAWN: "♟",
        PieceType.KNIGHT: "♞",
        PieceType.BISHOP: "♝",
        PieceType.ROOK: "♜",
        PieceType.QUEEN: "♛",
        PieceType.KING: "♚",
    },
}


@dataclass(frozen=True)
class Piece:
    """
    Kind + side, nothing else.

    Frozen: the move history keeps references to pieces as they were before moving. A promotion therefore puts a new
    Piece on the board instead of changing the pawn.
    """

    type: PieceType
    side: Side

    @classmethod
    def from_fen(cls, character: str) -> Self:
        # lower case: Black pieces, upper case: White pieces
        if character.lower() not in FEN_TO_PIECE:
            raise InvalidPositionError(f"Unknown piece character: {character!r}")
        side = Side.WHITE if character.isupper() else Side.BLACK
        piece_type = FEN_TO_PIECE[character.lower()]
        return cls(piece_type, side)

    def to_fen(self) -> str:
        return (
            PIECE_TO_FEN[self.type].upper()
            if self.side == Side.WHITE
            else PIECE_TO_FEN[self.type].lower()
        )

    def symbol(self) -> str:
        return PIECE_SYMBOLS[self.side][self.type]

    def promoted_to(self, new_type: PieceType) -> Self:
        return type(self)(new_type, self.side)


def is_own_piece(piece: Optional[Piece], side: Side) -> bool:
    """An empty square never belongs to anyone"""
    return piece is not None and piece.side == side
