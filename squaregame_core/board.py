from __future__ import annotations

import random
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, List, Optional

from .moves import InvalidMove, Move

MAX_ROW_LENGTH = 255  # remaining counts are displayed as 8-bit binary


class Player(Enum):
    """The two sides of a game. FIRST moves first unless told otherwise."""
    FIRST = "first"
    SECOND = "second"

    def other(self) -> 'Player':
        return Player.SECOND if self is Player.FIRST else Player.FIRST

    @property
    def symbol(self) -> str:
        return "1" if self is Player.FIRST else "2"


@dataclass
class Row:
    """A single row of squares and the record of who ate each one."""
    original_length: int
    consumed_by: List[Player] = field(default_factory=list)  # removal order

    @property
    def remaining(self) -> int:
        return self.original_length - len(self.consumed_by)


def _check_length(length: int) -> int:
    if not 0 <= length <= MAX_ROW_LENGTH:
        raise ValueError(f"Row length {length} outside 0..{MAX_ROW_LENGTH}")
    return length


@dataclass
class Board:
    """Mutable game state: the rows in display order and whose turn it is."""
    rows: List[Row]
    current_turn: Player = Player.FIRST

    @classmethod
    def from_lengths(cls, lengths: Iterable[int], starting_turn: Player = Player.FIRST) -> 'Board':
        """Creates a board with one untouched row per length, in the given order."""
        rows = [Row(original_length=_check_length(int(n))) for n in lengths]
        return cls(rows=rows, current_turn=starting_turn)

    @classmethod
    def random(
        cls,
        num_rows: int,
        max_row_length: int,
        starting_turn: Player = Player.FIRST,
        rng: Optional[random.Random] = None,
    ) -> 'Board':
        """Creates `num_rows` rows, each holding between one and `max_row_length` squares."""
        if num_rows < 0:
            raise ValueError(f"num_rows must be non-negative, got {num_rows}")
        if not 1 <= max_row_length <= MAX_ROW_LENGTH:
            raise ValueError(f"max_row_length must be in 1..{MAX_ROW_LENGTH}, got {max_row_length}")
        rng = rng or random.Random()
        lengths = [rng.randint(1, max_row_length) for _ in range(num_rows)]
        return cls.from_lengths(lengths, starting_turn)

    def check_move(self, move: Move) -> None:
        """Raises InvalidMove unless `move` can be applied to the board as it stands."""
        if not 0 <= move.row_index < len(self.rows):
            raise InvalidMove(move.row_index, move.amount, f"no row {move.row_index}")
        left = self.rows[move.row_index].remaining
        if not 1 <= move.amount <= left:
            raise InvalidMove(
                move.row_index,
                move.amount,
                f"cannot take {move.amount} from row {move.row_index} with {left} remaining",
            )

    def apply(self, move: Move) -> None:
        """Eats `move.amount` squares from the row on behalf of the current player.

        The turn is not advanced; callers follow up with next_turn().
        """
        self.check_move(move)
        self.rows[move.row_index].consumed_by.extend([self.current_turn] * move.amount)

    def remaining(self, row_index: int) -> int:
        return self.rows[row_index].remaining

    def remaining_counts(self) -> List[int]:
        return [row.remaining for row in self.rows]

    def is_empty(self) -> bool:
        return all(row.remaining == 0 for row in self.rows)

    def next_turn(self) -> None:
        self.current_turn = self.current_turn.other()

    def winner(self) -> Optional[Player]:
        """The player who ate the last square, once the board is empty.

        Assumes next_turn() was called after the final move, which leaves the
        loser on turn.
        """
        if not self.is_empty():
            return None
        return self.current_turn.other()

    def pretty(self) -> str:
        """Generates a human-readable view: '#' uneaten, '1'/'2' eaten by that player."""
        lines: List[str] = []
        width = max((row.original_length for row in self.rows), default=0)
        for row_index, row in enumerate(self.rows):
            # Squares are eaten from the right end, earliest meal rightmost.
            eaten = "".join(p.symbol for p in reversed(row.consumed_by))
            cells = "#" * row.remaining + eaten
            binary = format(row.remaining, "04b")
            lines.append(f"{row_index}: {cells.ljust(width)}  {binary} ({row.remaining})")
        lines.append(f"Turn: {self.current_turn.value}")
        return "\n".join(lines)
