"""Requests and Response models"""

from string import ascii_lowercase, digits
from typing import Any, Optional
from uuid import UUID

from pydantic import BaseModel, field_validator

from chessboard.chess.square import (
    NUM_SQUARES,
    Square,
    SquareIndex,
    is_valid_index,
)
from chessboard.core.exceptions import InvalidRequestError
from chessboard.core.shared_types import ClickResult, Side


def parse_square(value: Any) -> SquareIndex:
    """
    Squares can be sent either as an index (0-63) or by name in algebraic notation ('a8' - 'h1').
    """

    def _is_algebraic_notation(value: str) -> bool:
        if len(value) != 2:
            return False

        first_character = value[0].lower()
        second_character = value[1]
        if not (first_character in ascii_lowercase and second_character in digits):
            return False
        return Square.from_algebraic(value.lower()).is_within_bounds()

    if isinstance(value, str) and not value.isdecimal():
        if not _is_algebraic_notation(value):
            raise InvalidRequestError(
                f"Cannot interpret {value!r} as a valid square name."
            )
        return Square.from_algebraic(value.lower()).to_index()

    if isinstance(value, bool) or not isinstance(value, (int, str)):
        raise InvalidRequestError(f"Cannot interpret {value!r} as a square.")

    index = int(value)
    if not is_valid_index(index):
        raise InvalidRequestError(
            f"Square index must lie in the range 0-{NUM_SQUARES - 1}, got {index}."
        )
    return index


# --- REQUEST MODELS ---
class GetGameRequest(BaseModel):
    game_id: UUID


class LegalMovesRequest(BaseModel):
    game_id: UUID
    square: SquareIndex

    @field_validator("square", mode="before")
    @classmethod
    def validate_square(cls, value: Any) -> SquareIndex:
        return parse_square(value)


class MoveRequest(BaseModel):
    game_id: UUID
    from_square: SquareIndex
    to_square: SquareIndex

    @field_validator(*["from_square", "to_square"], mode="before")
    @classmethod
    def validate_square(cls, value: Any) -> SquareIndex:
        return parse_square(value)


class SelectSquareRequest(BaseModel):
    game_id: UUID
    square: SquareIndex

    @field_validator("square", mode="before")
    @classmethod
    def validate_square(cls, value: Any) -> SquareIndex:
        return parse_square(value)


class ResetGameRequest(BaseModel):
    game_id: UUID


class DeleteGameRequest(BaseModel):
    game_id: UUID


# --- RESPONSE MODELS ---
class SquareView(BaseModel):
    """Everything needed to draw a single square"""

    index: SquareIndex
    name: str
    shade: str
    piece: Optional[str]  # placement letter: upper case White, lower case Black
    symbol: Optional[str]


class MoveRecordView(BaseModel):
    from_square: SquareIndex
    to_square: SquareIndex
    piece: str
    notation: str


class GameResponse(BaseModel):
    game_id: UUID
    turn: Side
    position: str
    squares: list[SquareView]
    move_history: list[MoveRecordView]
    selected_square: Optional[SquareIndex]
    highlighted_squares: list[SquareIndex]


class LegalMovesResponse(BaseModel):
    game_id: UUID
    square: SquareIndex
    piece: Optional[str]
    destinations: list[SquareIndex]


class SelectionResponse(BaseModel):
    result: ClickResult
    game: GameResponse
