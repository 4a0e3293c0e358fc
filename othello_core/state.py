from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Optional

from .board import Board, Player, BLACK, opponent

Result = str  # 'B', 'W' or 'draw'
DRAW: Result = 'draw'


@dataclass(frozen=True)
class GameState:
    """Represents the dynamic state of a game: the board, whose turn it is, and the outcome once decided."""
    board: Board
    current: Player
    move_number: int = 1
    terminal: bool = False
    result: Optional[Result] = None

    def other_player(self) -> Player:
        return opponent(self.current)

    def with_turn(self, next_turn: Player) -> 'GameState':
        return replace(self, current=next_turn)


def initial_state() -> GameState:
    """Standard starting position with Black to move."""
    return GameState(board=Board.initial(), current=BLACK)
