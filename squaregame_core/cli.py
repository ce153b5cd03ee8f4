from __future__ import annotations

import argparse
import logging
import random
from typing import List, Optional, Set, Union

from .ai import find_optimal_move, nim_sum, take_best_move
from .board import Board, Player
from .config import SETTINGS
from .deal import deal_board
from .layout import board_from_file
from .moves import InvalidMove, Move

QUIT = "q"
RESTART = "r"

log = logging.getLogger(__name__)


def parse_move_text(text: str) -> Optional[Move]:
    """Parses 'row amount' or 'row,amount'. Returns None if the text is not two integers."""
    sep = ',' if ',' in text else ' '
    try:
        r_s, a_s = [t for t in text.split(sep) if t.strip() != '']
        return Move(int(r_s), int(a_s))
    except ValueError:
        return None


def _deal(args: argparse.Namespace, rng: random.Random) -> Board:
    if args.layout:
        return board_from_file(args.layout, Player.FIRST)
    return deal_board(args.rows, args.max_row_length, Player.FIRST, rng=rng)


def _computer_sides(args: argparse.Namespace) -> Set[Player]:
    if args.auto:
        return {Player.FIRST, Player.SECOND}
    if args.computer == 'none':
        return set()
    return {Player(args.computer)}


def prompt_human_move(board: Board, show_hint: bool) -> Union[Move, str]:
    """Reads moves until a legal one (or q / r) is entered."""
    if show_hint:
        best = find_optimal_move(board)
        if best is None:
            print('Hint: nim-sum is 0, no winning move exists.')
        else:
            print(f'Hint: eat {best.amount} from row {best.row_index}')
    while True:
        try:
            text = input(f'Player {board.current_turn.value}, enter row and amount (q quits, r restarts): ').strip()
        except EOFError:
            return QUIT
        if text.lower() in (QUIT, RESTART):
            return text.lower()
        move = parse_move_text(text)
        if move is None:
            print('Could not parse. Try again.')
            continue
        try:
            board.check_move(move)
        except InvalidMove as e:
            print(f'Illegal move: {e}. Try again.')
            continue
        return move


def main(argv: Optional[List[str]] = None) -> None:
    parser = argparse.ArgumentParser(description='Square game: eat squares from one row per turn')
    parser.add_argument('--rows', type=int, default=SETTINGS.rows, help='Number of rows on a random board')
    parser.add_argument('--max-row-length', type=int, default=SETTINGS.max_row_length,
                        help='Largest row on a random board')
    parser.add_argument('--layout', default=SETTINGS.layout, help='Text file with one row length per line')
    parser.add_argument('--seed', type=int, default=None, help='RNG seed for the deal and fallback moves')
    parser.add_argument('--computer', choices=['first', 'second', 'none'], default='second',
                        help='Side played by the computer')
    parser.add_argument('--auto', action='store_true', help='Computer plays both sides')
    parser.add_argument('--hint', action='store_true', help='Show the winning move before each human turn')
    parser.add_argument('--verbose', action='store_true', help='Log engine decisions')
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else SETTINGS.log_level,
        format='%(levelname)s %(name)s: %(message)s',
    )

    rng = random.Random(args.seed)
    try:
        board = _deal(args, rng)
    except FileNotFoundError:
        parser.error(f'layout file not found: {args.layout}')
    except ValueError as e:
        parser.error(str(e))
    computer = _computer_sides(args)

    print('Initial board:')
    print(board.pretty())
    if board.is_empty():
        print('Nothing to play: the board has no squares.')
        return

    while True:
        if board.is_empty():
            winner = board.winner()
            print(f"Player {winner.value} wins!")
            break
        if board.current_turn in computer:
            mover = board.current_turn
            move = take_best_move(board, rng)
            print(f"Computer ({mover.value}) eats {move.amount} from row {move.row_index}")
        else:
            choice = prompt_human_move(board, args.hint)
            if choice == QUIT:
                print('Bye.')
                return
            if choice == RESTART:
                board = _deal(args, rng)
                print('New board:')
                print(board.pretty())
                if board.is_empty():
                    print('Nothing to play: the board has no squares.')
                    return
                continue
            board.apply(choice)
        board.next_turn()
        print(board.pretty())
        log.debug("nim-sum now %d", nim_sum(board.remaining_counts()))


if __name__ == '__main__':
    main()
