"""Unit tests for /chessboard/chess/moves.py"""

from typing import Callable
from unittest.mock import Mock, patch

import pytest

from chessboard.chess.board import Board
from chessboard.chess.moves import (
    DIAGONALS,
    MOVEMENT_RULES,
    STRAIGHTS,
    PieceType,
    Side,
    can_land,
    candidate_bishop_moves,
    candidate_king_moves,
    candidate_knight_moves,
    candidate_pawn_moves,
    candidate_queen_moves,
    candidate_rook_moves,
    is_promotion_square,
    legal_destinations,
    raycasting_move,
    single_step_move,
)
from chessboard.chess.pieces import Piece
from chessboard.chess.square import square_from_algebraic, square_to_algebraic, to_index

BoardFactory = Callable[..., Board]

CENTER = to_index(4, 4)  # e4
CORNERS = [0, 7, 56, 63]


def names(squares: list[int] | set[int]) -> set[str]:
    """Compare destinations by square name, so failures are readable"""
    return {square_to_algebraic(square) for square in squares}


def sq(name: str) -> int:
    return square_from_algebraic(name)


# --- SHARED PRIMITIVES ---
def test_can_land(board_with_pieces: BoardFactory) -> None:
    """Empty squares and opponent's pieces are fine, your own pieces are not"""
    board = board_with_pieces(d4="Q", d5="p", d3="P")
    assert can_land(board, sq("e4"), Side.WHITE)
    assert can_land(board, sq("d5"), Side.WHITE)
    assert not can_land(board, sq("d3"), Side.WHITE)
    assert can_land(board, sq("d3"), Side.BLACK)
    assert not can_land(board, sq("d5"), Side.BLACK)


def test_empty_square_has_no_destinations() -> None:
    """For every empty square of the starting position, nothing can move"""
    board = Board.starting_position()
    for square in range(16, 48):
        assert legal_destinations(board, square) == set()


@pytest.mark.parametrize("square", [-1, 64, 100])
def test_out_of_range_square_has_no_destinations(square: int) -> None:
    board = Board.starting_position()
    assert legal_destinations(board, square) == set()


# --- RAYCASTING ---
def test_raycasting_move_empty_board(board_with_pieces: BoardFactory) -> None:
    """On an empty board, movements should only be restricted by board dimensions"""
    board = board_with_pieces(a5="R")
    horizontal_moves = [(0, 1), (0, -1)]
    moves = raycasting_move(sq("a5"), board, horizontal_moves)
    assert names(moves) == {"b5", "c5", "d5", "e5", "f5", "g5", "h5"}

    vertical_moves = [(1, 0), (-1, 0)]
    moves = raycasting_move(sq("a5"), board, vertical_moves)
    assert names(moves) == {"a1", "a2", "a3", "a4", "a6", "a7", "a8"}


def test_raycasting_move_w_enemy_blocker(board_with_pieces: BoardFactory) -> None:
    """
    When running into an enemy piece, still include it (capture)

    NOTE: The piece type does not matter here, only the side.
    """
    board = board_with_pieces(d2="P", d5="p")
    moves = raycasting_move(sq("d2"), board, STRAIGHTS[:2])
    assert names(moves) == {"d1", "d3", "d4", "d5"}

    # Similar test for diagonal moves. Enemy piece is placed on f4 (same diagonal as d2)
    board = board_with_pieces(d2="P", f4="p")
    moves = raycasting_move(sq("d2"), board, DIAGONALS)
    assert names(moves) == {"c1", "e3", "f4", "c3", "b4", "a5", "e1"}


def test_raycasting_move_w_friendly_blocker(board_with_pieces: BoardFactory) -> None:
    """When your own piece is blocking, do not include a move to that square"""
    board = board_with_pieces(d2="P", d5="P")
    moves = raycasting_move(sq("d2"), board, STRAIGHTS[:2])
    assert names(moves) == {"d1", "d3", "d4"}

    # You are playing with the black pieces and have pieces on d2 and f4
    board = board_with_pieces(d2="p", f4="p")
    moves = raycasting_move(sq("d2"), board, DIAGONALS)
    assert names(moves) == {"c1", "e3", "c3", "b4", "a5", "e1"}


def test_raycasting_move_w_mixed_blockers(board_with_pieces: BoardFactory) -> None:
    """Own pieces block, the first opponent's piece in sight can be captured."""
    board = board_with_pieces(a1="p", a5="P", a7="P")
    moves = raycasting_move(sq("a5"), board, STRAIGHTS[:2])
    assert names(moves) == {"a4", "a3", "a2", "a1", "a6"}


def test_single_step_in_bounds(board_with_pieces: BoardFactory) -> None:
    board = board_with_pieces(d4="N")
    moves = single_step_move(sq("d4"), board, [(-4, -2)])
    assert names(moves) == {"b8"}


def test_single_step_out_of_bounds(board_with_pieces: BoardFactory) -> None:
    """Attempt to step outside of the board: Should return empty list"""
    board = board_with_pieces(d4="N")
    moves = single_step_move(sq("d4"), board, [(42, 23)])
    assert moves == []


def test_single_step_w_blockers(board_with_pieces: BoardFactory) -> None:
    """Capture an opponent's piece, never your own"""
    board = board_with_pieces(d4="K", d5="p", d3="P")
    moves = single_step_move(sq("d4"), board, [(-1, 0), (1, 0)])
    assert names(moves) == {"d5"}


# --- KNIGHT / KING ---
def test_knight_in_the_center(board_with_pieces: BoardFactory) -> None:
    board = board_with_pieces(e4="N")
    moves = candidate_knight_moves(CENTER, board)
    assert names(moves) == {"d6", "f6", "c5", "g5", "c3", "g3", "d2", "f2"}


@pytest.mark.parametrize("corner", CORNERS)
def test_knight_in_the_corner(corner: int) -> None:
    board = Board()
    board.place_piece(Piece(PieceType.KNIGHT, Side.BLACK), corner)
    assert len(legal_destinations(board, corner)) == 2


def test_king_in_the_center(board_with_pieces: BoardFactory) -> None:
    board = board_with_pieces(e4="k")
    moves = candidate_king_moves(CENTER, board)
    assert names(moves) == {"d5", "e5", "f5", "d4", "f4", "d3", "e3", "f3"}


@pytest.mark.parametrize("corner", CORNERS)
def test_king_in_the_corner(corner: int) -> None:
    board = Board()
    board.place_piece(Piece(PieceType.KING, Side.WHITE), corner)
    assert len(legal_destinations(board, corner)) == 3


def test_knight_jumps_over_pieces() -> None:
    """In the starting position, the knight on b1 can jump over the pawns onto a3 and c3"""
    board = Board.starting_position()
    assert names(legal_destinations(board, sq("b1"))) == {"a3", "c3"}
    assert names(legal_destinations(board, sq("g8"))) == {"f6", "h6"}


def test_king_surrounded_by_own_pieces() -> None:
    board = Board.starting_position()
    assert legal_destinations(board, sq("e1")) == set()


# --- SLIDING PIECES ---
@pytest.mark.parametrize(
    "fen_char, expected_count",
    [("B", 13), ("R", 14), ("Q", 27), ("b", 13), ("r", 14), ("q", 27)],
)
def test_sliding_pieces_on_empty_board(
    board_with_pieces: BoardFactory, fen_char: str, expected_count: int
) -> None:
    """Rays from e4 reach all the way to the edges of the board"""
    board = board_with_pieces(e4=fen_char)
    assert len(legal_destinations(board, CENTER)) == expected_count


@pytest.mark.parametrize("distance", [1, 2, 3, 4])
def test_rook_ray_with_own_blocker(board_with_pieces: BoardFactory, distance: int) -> None:
    """A blocker of your own at distance k leaves k-1 squares in that direction"""
    blocker_square = square_to_algebraic(to_index(4 - distance, 4))
    board = board_with_pieces(e4="R", **{blocker_square: "P"})
    moves = candidate_rook_moves(CENTER, board)
    upwards = [square for square in moves if square % 8 == 4 and square < CENTER]
    assert len(upwards) == distance - 1
    assert sq(blocker_square) not in moves


@pytest.mark.parametrize("distance", [1, 2, 3, 4])
def test_rook_ray_with_opponent_blocker(
    board_with_pieces: BoardFactory, distance: int
) -> None:
    """An opponent's blocker at distance k leaves k squares in that direction (including the capture)"""
    blocker_square = square_to_algebraic(to_index(4 - distance, 4))
    board = board_with_pieces(e4="R", **{blocker_square: "p"})
    moves = candidate_rook_moves(CENTER, board)
    upwards = [square for square in moves if square % 8 == 4 and square < CENTER]
    assert len(upwards) == distance
    assert sq(blocker_square) in moves


def test_bishop_with_blockers(board_with_pieces: BoardFactory) -> None:
    board = board_with_pieces(c1="B", e3="N", a3="n")
    moves = candidate_bishop_moves(sq("c1"), board)
    assert names(moves) == {"d2", "b2", "a3"}


def test_queen_combines_rook_and_bishop(board_with_pieces: BoardFactory) -> None:
    board = board_with_pieces(d4="q", d6="P", f6="p", b4="p")
    queen_moves = set(candidate_queen_moves(sq("d4"), board))
    rook_moves = set(candidate_rook_moves(sq("d4"), board))
    bishop_moves = set(candidate_bishop_moves(sq("d4"), board))
    assert queen_moves == rook_moves | bishop_moves
    assert sq("d6") in queen_moves
    assert sq("f6") not in queen_moves
    assert sq("b4") not in queen_moves
    assert sq("a4") not in queen_moves


def test_no_sliding_moves_in_starting_position() -> None:
    board = Board.starting_position()
    for name in ["a1", "c1", "d1", "f1", "h1", "a8", "c8", "d8", "f8", "h8"]:
        assert legal_destinations(board, sq(name)) == set()


# --- PAWNS ---
def test_white_pawn_on_starting_row() -> None:
    """One or two squares forward from the starting row"""
    board = Board.starting_position()
    assert legal_destinations(board, 52) == {44, 36}


def test_black_pawn_on_starting_row() -> None:
    """Black moves down the board"""
    board = Board.starting_position()
    assert names(legal_destinations(board, sq("d7"))) == {"d6", "d5"}


def test_pawn_off_starting_row_moves_one_square(board_with_pieces: BoardFactory) -> None:
    board = board_with_pieces(e3="P", d6="p")
    assert names(candidate_pawn_moves(sq("e3"), board)) == {"e4"}
    assert names(candidate_pawn_moves(sq("d6"), board)) == {"d5"}


@pytest.mark.parametrize("blocker", ["p", "P"])
def test_pawn_blocked_on_single_step(board_with_pieces: BoardFactory, blocker: str) -> None:
    """With the square in front occupied, no forward move at all (also not the double step, and no capture straight ahead)"""
    board = board_with_pieces(e2="P", e3=blocker)
    assert candidate_pawn_moves(sq("e2"), board) == []


@pytest.mark.parametrize("blocker", ["p", "P"])
def test_pawn_blocked_on_double_step(board_with_pieces: BoardFactory, blocker: str) -> None:
    board = board_with_pieces(e2="P", e4=blocker)
    assert names(candidate_pawn_moves(sq("e2"), board)) == {"e3"}


def test_pawn_captures_diagonally(board_with_pieces: BoardFactory) -> None:
    board = board_with_pieces(e2="P", d3="n", f3="b")
    assert names(candidate_pawn_moves(sq("e2"), board)) == {"e3", "e4", "d3", "f3"}

    board = board_with_pieces(e7="p", d6="N", f6="P")
    assert names(candidate_pawn_moves(sq("e7"), board)) == {"e6", "e5", "d6", "f6"}


def test_pawn_does_not_capture_own_piece(board_with_pieces: BoardFactory) -> None:
    board = board_with_pieces(e4="P", d5="P", f5="N")
    assert names(candidate_pawn_moves(sq("e4"), board)) == {"e5"}


def test_pawn_does_not_move_diagonally_onto_empty_square(
    board_with_pieces: BoardFactory,
) -> None:
    """No en passant: an empty diagonal is never a destination"""
    board = board_with_pieces(e5="P", d5="p")
    assert names(candidate_pawn_moves(sq("e5"), board)) == {"e6"}


def test_pawn_on_the_edge(board_with_pieces: BoardFactory) -> None:
    board = board_with_pieces(a4="P", b5="p", h5="p", g4="P")
    assert names(candidate_pawn_moves(sq("a4"), board)) == {"a5", "b5"}
    assert names(candidate_pawn_moves(sq("h5"), board)) == {"h4", "g4"}


def test_pawn_about_to_promote(board_with_pieces: BoardFactory) -> None:
    board = board_with_pieces(b7="P", a8="r", c8="R")
    assert names(candidate_pawn_moves(sq("b7"), board)) == {"b8", "a8"}


def test_pawn_on_the_last_row_has_nowhere_to_go(board_with_pieces: BoardFactory) -> None:
    board = board_with_pieces(b8="P")
    assert candidate_pawn_moves(sq("b8"), board) == []


@pytest.mark.parametrize(
    "fen_char, square_name, expected",
    [
        ("P", "e8", True),
        ("P", "e1", False),
        ("p", "e1", True),
        ("p", "e8", False),
        ("Q", "e8", False),
        ("P", "e7", False),
    ],
)
def test_is_promotion_square(fen_char: str, square_name: str, expected: bool) -> None:
    assert is_promotion_square(Piece.from_fen(fen_char), sq(square_name)) == expected


# --- DISPATCH ---
def test_destinations_use_rule_of_piece_type(board_with_pieces: BoardFactory) -> None:
    """legal_destinations hands over to the movement rule registered for the piece type"""
    board = board_with_pieces(e4="N")
    mock_rules = {piece_type: Mock(return_value=[]) for piece_type in PieceType}
    mock_rules[PieceType.KNIGHT] = Mock(return_value=[sq("f6"), sq("f6")])
    with patch.dict("chessboard.chess.moves.MOVEMENT_RULES", mock_rules):
        destinations = legal_destinations(board, CENTER)

    mock_rules[PieceType.KNIGHT].assert_called_once_with(CENTER, board)
    for piece_type, mock_rule in mock_rules.items():
        if piece_type != PieceType.KNIGHT:
            mock_rule.assert_not_called()
    assert destinations == {sq("f6")}


def test_every_piece_type_has_a_rule() -> None:
    assert set(MOVEMENT_RULES.keys()) == set(PieceType)


def test_destinations_are_deterministic() -> None:
    board = Board.from_fen("r1bqkbnr/pppp1ppp/2n5/4p3/2B1P3/5N2/PPPP1PPP/RNBQK2R")
    for square in range(64):
        assert legal_destinations(board, square) == legal_destinations(board, square)
        piece = board.piece_at(square)
        if piece is not None:
            first = MOVEMENT_RULES[piece.type](square, board)
            assert first == MOVEMENT_RULES[piece.type](square, board)
            assert len(first) == len(set(first))
