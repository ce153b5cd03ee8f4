"""
Row layouts read from plain text: one row length per line.

Lines that are not a whole number in 0..255 (blank lines, notes, typos) are
skipped rather than rejected, so a layout file can carry comments.
"""
from __future__ import annotations

import logging
from typing import Iterable, List

from .board import MAX_ROW_LENGTH, Board, Player

log = logging.getLogger(__name__)


def parse_row_lengths(lines: Iterable[str]) -> List[int]:
    lengths: List[int] = []
    for lineno, line in enumerate(lines, start=1):
        text = line.strip()
        try:
            value = int(text)
        except ValueError:
            log.debug("Skipping line %d: %r is not a row length", lineno, text)
            continue
        if not 0 <= value <= MAX_ROW_LENGTH:
            log.debug("Skipping line %d: %d outside 0..%d", lineno, value, MAX_ROW_LENGTH)
            continue
        lengths.append(value)
    return lengths


def load_row_lengths(path: str) -> List[int]:
    with open(path, "r", encoding="utf-8") as f:
        lengths = parse_row_lengths(f)
    log.info("Loaded %d rows from %s", len(lengths), path)
    return lengths


def board_from_file(path: str, starting_turn: Player = Player.FIRST) -> Board:
    return Board.from_lengths(load_row_lengths(path), starting_turn)
