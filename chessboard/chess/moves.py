"""
Geometry/Base movement and capturing rules

Key idea: Use strategy pattern to define the destination squares for each piece type.

Simplified rule set:
* no castling, no en passant
* a move that leaves your own king in check is still listed (check is never looked at)
Promotion is not decided here. The board swaps the pawn for a queen when it reaches the far row.
"""

from typing import Callable, Optional, Protocol

from chessboard.chess.pieces import Piece, is_own_piece
from chessboard.chess.square import (
    Square,
    SquareIndex,
    is_valid_index,
    on_board,
    to_index,
)
from chessboard.core.shared_types import PieceType, Side


class Board(Protocol):
    """Just the parts the movement strategies need"""

    def piece_at(self, square: SquareIndex) -> Optional[Piece]: ...


# (d_row, d_col)
Vector = tuple[int, int]

DIAGONALS: list[Vector] = [(-1, -1), (-1, 1), (1, -1), (1, 1)]
STRAIGHTS: list[Vector] = [(-1, 0), (1, 0), (0, -1), (0, 1)]
KING_STEPS: list[Vector] = DIAGONALS + STRAIGHTS
KNIGHT_JUMPS: list[Vector] = [
    (-2, -1),
    (-2, 1),
    (-1, -2),
    (-1, 2),
    (1, -2),
    (1, 2),
    (2, -1),
    (2, 1),
]

# White moves UP the board (towards row 0), Black moves DOWN
PAWN_DIRECTION: dict[Side, int] = {Side.WHITE: -1, Side.BLACK: 1}
PAWN_START_ROW: dict[Side, int] = {Side.WHITE: 6, Side.BLACK: 1}

# The row a pawn of the given side promotes on, and what it promotes into (no underpromotion)
PROMOTION_ROW: dict[Side, int] = {Side.WHITE: 0, Side.BLACK: 7}
PROMOTE_TO = PieceType.QUEEN


def is_promotion_square(piece: Piece, square: SquareIndex) -> bool:
    """A pawn landing on the opposite-most row"""
    return (
        piece.type == PieceType.PAWN
        and Square.from_index(square).row == PROMOTION_ROW[piece.side]
    )


def can_land(board: Board, square: SquareIndex, mover_side: Side) -> bool:
    """Empty square, or one that holds an opponent's piece (capture)."""
    target = board.piece_at(square)
    return target is None or target.side != mover_side


# --- MOVEMENT RULES ---
def raycasting_move(
    square: SquareIndex, board: Board, directions: list[Vector]
) -> list[SquareIndex]:
    """
    Raycasting algorithm
    -----

    ---
    Walk outward along each direction until we hit another piece or the edge of the board.
    * empty square: destination, keep walking
    * opponent's piece: destination (capture), ray stops
    * own piece: not a destination, ray stops
    """
    player_side = board.piece_at(square).side
    start = Square.from_index(square)

    destinations: list[SquareIndex] = []
    for d_row, d_col in directions:
        target = start.shifted(d_row, d_col)
        while target.is_within_bounds():
            target_index = target.to_index()
            occupant = board.piece_at(target_index)
            if occupant is None:
                destinations.append(target_index)
                target = target.shifted(d_row, d_col)
                continue

            # only the first occupied square matters, and only if it can be captured
            if occupant.side != player_side:
                destinations.append(target_index)
            break
    return destinations


def single_step_move(
    square: SquareIndex, board: Board, deltas: list[Vector]
) -> list[SquareIndex]:
    """Raycasting is for sliding pieces. This is the equivalent for kings and knights that jump a single step along each vector"""
    player_side = board.piece_at(square).side
    start = Square.from_index(square)

    destinations: list[SquareIndex] = []
    for d_row, d_col in deltas:
        target = start.shifted(d_row, d_col)
        if not target.is_within_bounds():
            continue

        if can_land(board, target.to_index(), player_side):
            destinations.append(target.to_index())
    return destinations


def candidate_pawn_moves(square: SquareIndex, board: Board) -> list[SquareIndex]:
    """
    A pawn:
    - moves by a single square forward, but only onto an empty square.
    - can move by two from its starting row, if both squares in front of it are empty.
    - takes diagonally, but only when there is an opponent's piece to take (no en passant).
    """
    player_side = board.piece_at(square).side
    direction = PAWN_DIRECTION[player_side]
    start = Square.from_index(square)
    next_row = start.row + direction

    destinations: list[SquareIndex] = []
    if not on_board(next_row, start.col):
        return destinations

    # pawn pushes
    one_step = to_index(next_row, start.col)
    if board.piece_at(one_step) is None:
        destinations.append(one_step)

        two_steps_row = next_row + direction
        if start.row == PAWN_START_ROW[player_side] and on_board(
            two_steps_row, start.col
        ):
            two_steps = to_index(two_steps_row, start.col)
            if board.piece_at(two_steps) is None:
                destinations.append(two_steps)

    # pawn takes
    for d_col in (-1, 1):
        capture_col = start.col + d_col
        if not on_board(next_row, capture_col):
            continue
        capture_square = to_index(next_row, capture_col)
        if is_own_piece(board.piece_at(capture_square), player_side.opponent):
            destinations.append(capture_square)
    return destinations


def candidate_knight_moves(square: SquareIndex, board: Board) -> list[SquareIndex]:
    """Knights always jump such that |delta_row| + |delta_col| = 3"""
    return single_step_move(square, board, KNIGHT_JUMPS)


def candidate_bishop_moves(square: SquareIndex, board: Board) -> list[SquareIndex]:
    """Bishops move diagonally: |delta_row| = |delta_col|"""
    return raycasting_move(square, board, DIAGONALS)


def candidate_rook_moves(square: SquareIndex, board: Board) -> list[SquareIndex]:
    """Rooks move either horizontally or vertically"""
    return raycasting_move(square, board, STRAIGHTS)


def candidate_queen_moves(square: SquareIndex, board: Board) -> list[SquareIndex]:
    """
    The Queen combines the rook moves (horizontal + vertical movements) and bishop moves (diagonal movement)
    """
    diagonal_moves = candidate_bishop_moves(square, board)
    horizontal_and_vertical_moves = candidate_rook_moves(square, board)
    return diagonal_moves + horizontal_and_vertical_moves


def candidate_king_moves(square: SquareIndex, board: Board) -> list[SquareIndex]:
    """
    The king can move by a single square at the time. No castling.
    """
    return single_step_move(square, board, KING_STEPS)


# -- STRATEGY PATTERN: MOVEMENT RULES ---
CandidateMovesFn = Callable[[SquareIndex, Board], list[SquareIndex]]
MOVEMENT_RULES: dict[PieceType, CandidateMovesFn] = {
    PieceType.PAWN: candidate_pawn_moves,
    PieceType.KNIGHT: candidate_knight_moves,
    PieceType.BISHOP: candidate_bishop_moves,
    PieceType.ROOK: candidate_rook_moves,
    PieceType.QUEEN: candidate_queen_moves,
    PieceType.KING: candidate_king_moves,
}


def legal_destinations(board: Board, square: SquareIndex) -> set[SquareIndex]:
    """
    Squares the piece standing on `square` may move to, for whichever side owns it.
    Empty squares and indices outside of the board give an empty set (never an error).
    """
    if not is_valid_index(square):
        return set()

    piece = board.piece_at(square)
    if piece is None:
        return set()

    movement_rule = MOVEMENT_RULES[piece.type]
    return set(movement_rule(square, board))
