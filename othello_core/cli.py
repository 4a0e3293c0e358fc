from __future__ import annotations

import argparse
import logging
from typing import List, Optional

from .board import BLACK, WHITE, Coord
from .session import Game
from .moves import must_pass
from .state import DRAW

NAMES = {BLACK: "Black", WHITE: "White"}


def setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        datefmt="%H:%M:%S",
    )


def parse_command(text: str) -> str:
    """Classifies one line of console input as 'pass', 'quit' or 'move'."""
    t = text.strip().lower()
    if t in ('p', 'pass'):
        return 'pass'
    if t in ('q', 'quit', 'exit'):
        return 'quit'
    return 'move'


def parse_move(text: str, one_based: bool = True) -> Coord:
    """Parses 'r,c' or 'r c' into a 0-based position. Raises ValueError otherwise."""
    t = text.strip()
    sep = ',' if ',' in t else ' '
    parts = [x for x in t.split(sep) if x.strip() != '']
    if len(parts) != 2:
        raise ValueError(f"Could not parse {text!r}")
    r, c = int(parts[0]), int(parts[1])
    if one_based:
        r, c = r - 1, c - 1
    return r, c


def describe_result(result: Optional[str]) -> str:
    if result == DRAW:
        return 'Draw'
    return f"{NAMES.get(result or '', '?')} wins"


def main(argv: Optional[List[str]] = None) -> None:
    parser = argparse.ArgumentParser(description='Othello hotseat game on the console')
    parser.add_argument('--zero-based', action='store_true', help='Enter and show coordinates starting at 0')
    parser.add_argument('--verbose', action='store_true', help='Enable debug logging')
    args = parser.parse_args(argv)
    setup_logging(args.verbose)

    one_based = not args.zero_based
    base = 1 if one_based else 0
    game = Game()
    print('Game start')

    while not game.is_terminal():
        s = game.score()
        moves = game.legal_moves()
        print(game.board.pretty(set(moves), one_based=one_based))
        print(f"Black {s.black} - White {s.white}")
        player = NAMES[game.current]
        if must_pass(game.state):
            print(f"{player} has no legal move and must pass.")
        try:
            text = input(f"{game.move_number}. {player} to move (r,c / pass / quit): ")
        except EOFError:
            print()
            return
        cmd = parse_command(text)
        if cmd == 'quit':
            return
        if cmd == 'pass':
            res = game.attempt_pass()
            if res.ok:
                print(f"{player} passes.")
            else:
                print('Cannot pass: a legal move exists.')
            continue
        try:
            pos = parse_move(text, one_based)
        except ValueError:
            print('Could not parse. Try again.')
            continue
        number = game.move_number
        res = game.attempt_move(*pos)
        if not res.ok:
            print('Illegal move. Try again.')
            continue
        print(f"{number}. {player}: row {pos[0] + base} col {pos[1] + base} ({len(res.flipped)} flipped)")

    s = game.score()
    print(game.board.pretty(one_based=one_based))
    print(f"Game over: {describe_result(game.winner())} (Black {s.black} - White {s.white})")


if __name__ == '__main__':  # pragma: no cover
    main()
