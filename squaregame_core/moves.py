from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, List, Optional

if TYPE_CHECKING:
    from .board import Board


@dataclass(frozen=True)
class Move:
    """One turn's meal: eat `amount` squares from row `row_index`."""
    row_index: int
    amount: int

    def as_pair(self) -> List[int]:
        return [self.row_index, self.amount]


class InvalidMove(ValueError):
    """A move that does not fit the board it is applied to."""

    def __init__(self, row_index: int, amount: int, reason: str = "") -> None:
        self.row_index = row_index
        self.amount = amount
        super().__init__(reason or f"invalid move: row {row_index}, amount {amount}")


class NoMoveAvailable(RuntimeError):
    """Raised when a move is requested from a board with nothing left to eat."""


def legal_moves(board: Board) -> List[Move]:
    """Calculates every legal move, ordered by row and then by amount."""
    return [
        Move(row_index, amount)
        for row_index, row in enumerate(board.rows)
        for amount in range(1, row.remaining + 1)
    ]


def move_for_square(board: Board, row_index: int, square_index: int) -> Optional[Move]:
    """
    Translates a selected square into a move.
    Rows are eaten from the right end, so picking a square eats it together with
    every uneaten square to its right. Returns None if the square is already eaten.
    """
    if not 0 <= row_index < len(board.rows):
        raise InvalidMove(row_index, 0, f"no row {row_index}")
    row = board.rows[row_index]
    if not 0 <= square_index < row.original_length:
        raise InvalidMove(row_index, 0, f"no square {square_index} in row {row_index}")
    amount = (row.original_length - square_index) - len(row.consumed_by)
    if amount <= 0:
        return None
    return Move(row_index, amount)
