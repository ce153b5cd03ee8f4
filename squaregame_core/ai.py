from __future__ import annotations

import logging
import random
from functools import reduce
from operator import xor
from typing import Iterable, Optional

from .board import Board
from .moves import Move, NoMoveAvailable

log = logging.getLogger(__name__)


def nim_sum(counts: Iterable[int]) -> int:
    """XOR of all counts: the binary column sums of the rows, ignoring carries."""
    return reduce(xor, counts, 0)


def is_winning_move(board: Board, row_index: int, amount: int) -> bool:
    """
    Determines whether eating `amount` squares from `row_index` leaves the board
    with a Nim-sum of zero, i.e. a position the opponent cannot win from.
    The board is not modified.
    """
    board.check_move(Move(row_index, amount))
    counts = board.remaining_counts()
    counts[row_index] -= amount
    return nim_sum(counts) == 0


def find_optimal_move(board: Board) -> Optional[Move]:
    """Finds the first winning move by row, then by amount. Returns None if the position is already lost."""
    for row_index, row in enumerate(board.rows):
        for amount in range(1, row.remaining + 1):
            if is_winning_move(board, row_index, amount):
                return Move(row_index, amount)
    return None


def find_any_legal_move(board: Board, rng: Optional[random.Random] = None) -> Optional[Move]:
    """Picks one square from a random non-empty row. Returns None if the board is empty."""
    available = [row_index for row_index, row in enumerate(board.rows) if row.remaining > 0]
    if not available:
        return None
    rng = rng or random.Random()
    return Move(rng.choice(available), 1)


def take_best_move(board: Board, rng: Optional[random.Random] = None) -> Move:
    """Plays an optimal move if one exists, otherwise an arbitrary one, and returns it."""
    move = find_optimal_move(board)
    if move is None:
        move = find_any_legal_move(board, rng)
        if move is None:
            raise NoMoveAvailable("No squares left to eat")
        log.debug("No winning move for %s; falling back to %s", board.current_turn.value, move)
    else:
        log.debug("Winning move for %s: %s", board.current_turn.value, move)
    board.apply(move)
    return move
