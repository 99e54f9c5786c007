"""
Pytest will auto-discover / import this file called 'conftest.py'.
This file defines fixtures/variables required for testing multiple layers.
"""

from typing import Callable, Generator

import pytest

from chessboard.chess.board import Board
from chessboard.chess.pieces import Piece
from chessboard.chess.square import square_from_algebraic
from chessboard.services.store import InMemoryGameStore

STARTING_POSITION_FEN = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR"
EMPTY_FEN = "/".join(["8"] * 8)


@pytest.fixture
def board_with_pieces() -> Callable[..., Board]:
    """
    Call the inner function with keyword arguments `<square name>="<piece letter>"`.
    ex) board_with_pieces(d4="Q", d7="p") gives a board with a white queen on d4 and a black pawn on d7
    """

    def _create_board(**placements: str) -> Board:
        board = Board.from_fen(EMPTY_FEN)
        for square_name, fen_char in placements.items():
            board.place_piece(Piece.from_fen(fen_char), square_from_algebraic(square_name))
        return board

    return _create_board


@pytest.fixture
def game_store() -> Generator[InMemoryGameStore, None, None]:
    """Ensures to clear the store between tests"""
    store = InMemoryGameStore()
    try:
        yield store
    finally:
        store.clear()
