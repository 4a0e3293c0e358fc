from __future__ import annotations

import logging
from typing import List, NamedTuple, Optional, Tuple

from .board import Board, Coord, Player, BLACK, WHITE, EMPTY, SIZE, in_bounds, opponent
from .errors import GameOver, IllegalMove, IllegalPass
from .state import DRAW, GameState, Result

logger = logging.getLogger(__name__)

# N, NE, E, SE, S, SW, W, NW
DIRECTIONS: Tuple[Coord, ...] = (
    (-1, 0), (-1, 1), (0, 1), (1, 1),
    (1, 0), (1, -1), (0, -1), (-1, -1),
)


class Score(NamedTuple):
    black: int
    white: int

    @property
    def empty(self) -> int:
        return SIZE * SIZE - self.black - self.white


def _ray_flips(board: Board, pos: Coord, player: Player, dr: int, dc: int) -> List[Coord]:
    """Opponent discs bracketed by `player` along one direction, or [] if the run is not closed."""
    opp = opponent(player)
    run: List[Coord] = []
    r, c = pos[0] + dr, pos[1] + dc
    while in_bounds(r, c) and board.at(r, c) == opp:
        run.append((r, c))
        r += dr
        c += dc
    # The run must be closed by our own disc, not by the edge or an empty cell.
    if run and in_bounds(r, c) and board.at(r, c) == player:
        return run
    return []


def flippable_lines(board: Board, pos: Coord, player: Player) -> List[Coord]:
    """
    Returns every disc that would flip if `player` placed at `pos`, in row-major order.
    An occupied or off-board position flips nothing.
    """
    r, c = pos
    if not in_bounds(r, c) or board.at(r, c) != EMPTY:
        return []
    flips: List[Coord] = []
    for dr, dc in DIRECTIONS:
        flips.extend(_ray_flips(board, pos, player, dr, dc))
    return sorted(flips)


def legal_moves(board: Board, player: Player) -> List[Coord]:
    """Calculates all legal placements for `player`, sorted row-major."""
    return [
        coord for coord in board.coords()
        if board.at(*coord) == EMPTY and flippable_lines(board, coord, player)
    ]


def has_any_move(board: Board, player: Player) -> bool:
    return any(board.at(*coord) == EMPTY and flippable_lines(board, coord, player) for coord in board.coords())


def score(board: Board) -> Score:
    return Score(black=board.count(BLACK), white=board.count(WHITE))


def is_terminal(board: Board) -> bool:
    """The game is over when neither side can place a disc."""
    return not has_any_move(board, BLACK) and not has_any_move(board, WHITE)


def winner(board: Board) -> Result:
    """Compares disc counts: higher count wins, equal counts is a draw."""
    s = score(board)
    if s.black > s.white:
        return BLACK
    if s.white > s.black:
        return WHITE
    return DRAW


def must_pass(state: GameState) -> bool:
    """True when the player to move has no placement but the game continues."""
    return not state.terminal and not has_any_move(state.board, state.current)


def _settle(state: GameState) -> GameState:
    # Re-evaluate the terminal flag after the turn has switched.
    if is_terminal(state.board):
        result = winner(state.board)
        logger.info("Game over: result=%s score=%s", result, score(state.board))
        return GameState(state.board, state.current, state.move_number, True, result)
    return state


def apply_move(state: GameState, pos: Coord, player: Optional[Player] = None) -> Tuple[GameState, List[Coord]]:
    """
    Places a disc for `player` (default: the player to move) and returns the new state
    together with the flipped positions. Raises GameOver or IllegalMove on rejection.
    """
    if state.terminal:
        raise GameOver("The game is over; reset to play again")
    mover = state.current if player is None else player
    if mover != state.current:
        raise IllegalMove(f"It is {state.current}'s turn, not {mover}'s")
    r, c = pos
    if not in_bounds(r, c):
        raise IllegalMove(f"Position {(r, c)} is off the board")
    if state.board.at(r, c) != EMPTY:
        raise IllegalMove(f"Position {(r, c)} is occupied")
    flips = flippable_lines(state.board, (r, c), mover)
    if not flips:
        raise IllegalMove(f"Position {(r, c)} flips no discs for {mover}")

    board = state.board.with_cells(mover, [(r, c)] + flips)
    next_state = GameState(board, opponent(mover), state.move_number + 1)
    logger.debug("Move %d: %s at %s flips %d", state.move_number, mover, (r, c), len(flips))
    return _settle(next_state), flips


def apply_pass(state: GameState, player: Optional[Player] = None) -> GameState:
    """Hands the turn to the opponent. Only allowed when the player has no legal placement."""
    if state.terminal:
        raise GameOver("The game is over; reset to play again")
    mover = state.current if player is None else player
    if mover != state.current:
        raise IllegalPass(f"It is {state.current}'s turn, not {mover}'s")
    if has_any_move(state.board, mover):
        raise IllegalPass(f"{mover} has a legal move and cannot pass")
    logger.debug("Pass by %s before move %d", mover, state.move_number)
    return _settle(state.with_turn(opponent(mover)))
