from __future__ import annotations

import random
from typing import Optional

from .board import Board, Player

DEFAULT_ROWS = 6
DEFAULT_MAX_ROW_LENGTH = 8


def deal_board(
    num_rows: int = DEFAULT_ROWS,
    max_row_length: int = DEFAULT_MAX_ROW_LENGTH,
    starting_turn: Player = Player.FIRST,
    seed: Optional[int] = None,
    rng: Optional[random.Random] = None,
) -> Board:
    """Deals a random board; the same seed always deals the same rows.
    A caller that already owns a generator passes it as `rng` instead of a seed."""
    rng = rng or random.Random(seed)
    return Board.random(num_rows, max_row_length, starting_turn, rng=rng)
