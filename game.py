from __future__ import annotations

# Facade module that re-exports Othello core functionality.
# Used by the Flask app, the console entry point and the tests.
# Single-responsibility modules live under othello_core/*.

from othello_core.board import (  # noqa: F401
    Board,
    Cell,
    Coord,
    Player,
    EMPTY,
    BLACK,
    WHITE,
    SIZE,
    opponent,
    in_bounds,
)
from othello_core.state import GameState, Result, DRAW, initial_state  # noqa: F401
from othello_core.moves import (  # noqa: F401
    DIRECTIONS,
    Score,
    flippable_lines,
    legal_moves,
    has_any_move,
    apply_move,
    apply_pass,
    score,
    is_terminal,
    winner,
    must_pass,
)
from othello_core.errors import OthelloError, IllegalMove, IllegalPass, GameOver  # noqa: F401
from othello_core.session import Game, LogEntry, MoveResult  # noqa: F401


def main() -> None:
    # Console driver delegated to othello_core.cli
    from othello_core.cli import main as _main
    _main()


if __name__ == '__main__':
    main()
