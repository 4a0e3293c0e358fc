from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from .board import Board, Coord, Player
from .errors import OthelloError
from .moves import Score, apply_move, apply_pass, legal_moves, score
from .state import GameState, Result, initial_state

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LogEntry:
    """One line of the linear game log."""
    kind: str  # 'start', 'move', 'pass', 'rejected' or 'end'
    move_number: int
    player: Optional[Player] = None
    position: Optional[Coord] = None
    flipped: int = 0
    result: Optional[Result] = None
    error: Optional[str] = None


@dataclass(frozen=True)
class MoveResult:
    """
    Outcome of a command. On rejection `state` is the unchanged state. `state` and
    `log` are captured together under the game lock.
    """
    ok: bool
    state: GameState
    flipped: List[Coord] = field(default_factory=list)
    error: Optional[str] = None  # 'IllegalMove', 'IllegalPass' or 'GameOver'
    message: str = ''
    log: Tuple[LogEntry, ...] = ()


class Game:
    """
    Owned handle over one game. Holds the current GameState and the log; every
    command is serialized by a per-game lock so one instance can be shared between
    request handlers.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._state = initial_state()
        self._log: List[LogEntry] = [LogEntry('start', 1)]

    # ---------- queries ----------

    @property
    def state(self) -> GameState:
        return self._state

    @property
    def board(self) -> Board:
        return self._state.board

    @property
    def current(self) -> Player:
        return self._state.current

    @property
    def move_number(self) -> int:
        return self._state.move_number

    @property
    def log(self) -> Tuple[LogEntry, ...]:
        return tuple(self._log)

    def legal_moves(self) -> List[Coord]:
        return legal_moves(self._state.board, self._state.current)

    def score(self) -> Score:
        return score(self._state.board)

    def is_terminal(self) -> bool:
        return self._state.terminal

    def winner(self) -> Optional[Result]:
        return self._state.result

    def snapshot(self) -> Tuple[GameState, List[Coord], Tuple[LogEntry, ...]]:
        """Consistent (state, legal moves, log) view taken under the game lock."""
        with self._lock:
            s = self._state
            return s, legal_moves(s.board, s.current), tuple(self._log)

    # ---------- commands ----------

    def attempt_move(self, row: int, col: int) -> MoveResult:
        with self._lock:
            before = self._state
            try:
                after, flipped = apply_move(before, (row, col))
            except OthelloError as e:
                logger.info("Rejected move %s by %s: %s", (row, col), before.current, e)
                return MoveResult(False, before, error=type(e).__name__, message=str(e), log=tuple(self._log))
            self._state = after
            self._log.append(LogEntry('move', before.move_number, before.current, (row, col), len(flipped)))
            self._record_end()
            return MoveResult(True, after, flipped, log=tuple(self._log))

    def attempt_pass(self) -> MoveResult:
        with self._lock:
            before = self._state
            try:
                after = apply_pass(before)
            except OthelloError as e:
                logger.info("Rejected pass by %s: %s", before.current, e)
                self._log.append(LogEntry('rejected', before.move_number, before.current, error=type(e).__name__))
                return MoveResult(False, before, error=type(e).__name__, message=str(e), log=tuple(self._log))
            self._state = after
            self._log.append(LogEntry('pass', before.move_number, before.current))
            self._record_end()
            return MoveResult(True, after, log=tuple(self._log))

    def reset(self) -> MoveResult:
        with self._lock:
            self._state = initial_state()
            self._log = [LogEntry('start', 1)]
            logger.debug("Game reset")
            return MoveResult(True, self._state, log=tuple(self._log))

    def _record_end(self) -> None:
        if self._state.terminal:
            self._log.append(LogEntry('end', self._state.move_number, result=self._state.result))
