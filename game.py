from __future__ import annotations

# Facade module that re-exports the square game core.
# Used by the Flask app and tests; single-responsibility modules live under squaregame_core/*.

from squaregame_core.board import MAX_ROW_LENGTH, Board, Player, Row
from squaregame_core.moves import (
    InvalidMove,
    Move,
    NoMoveAvailable,
    legal_moves,
    move_for_square,
)
from squaregame_core.ai import (
    find_any_legal_move,
    find_optimal_move,
    is_winning_move,
    nim_sum,
    take_best_move,
)
from squaregame_core.deal import deal_board
from squaregame_core.layout import board_from_file, load_row_lengths, parse_row_lengths

__all__ = [
    "MAX_ROW_LENGTH",
    "Board",
    "Player",
    "Row",
    "InvalidMove",
    "Move",
    "NoMoveAvailable",
    "legal_moves",
    "move_for_square",
    "find_any_legal_move",
    "find_optimal_move",
    "is_winning_move",
    "nim_sum",
    "take_best_move",
    "deal_board",
    "board_from_file",
    "load_row_lengths",
    "parse_row_lengths",
]


def main() -> None:
    # CLI driver delegated to squaregame_core.cli
    from squaregame_core.cli import main as _main
    _main()


if __name__ == '__main__':
    main()
