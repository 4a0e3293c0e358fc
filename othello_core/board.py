from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence, Set, Tuple

Cell = str  # '.', 'B', 'W'
Player = str  # 'B' or 'W'
Coord = Tuple[int, int]

EMPTY: Cell = '.'
BLACK: Player = 'B'
WHITE: Player = 'W'
CELLS = (EMPTY, BLACK, WHITE)

SIZE = 8


def opponent(player: Player) -> Player:
    """Returns the other player."""
    if player == BLACK:
        return WHITE
    if player == WHITE:
        return BLACK
    raise ValueError(f"Invalid player: {player!r}")


def in_bounds(r: int, c: int) -> bool:
    return 0 <= r < SIZE and 0 <= c < SIZE


@dataclass(frozen=True)
class Board:
    """Represents the fixed 8x8 grid of cells."""
    grid: Tuple[Cell, ...]  # row-major, length == SIZE * SIZE

    def __post_init__(self) -> None:
        if len(self.grid) != SIZE * SIZE:
            raise ValueError(f"Board must have {SIZE * SIZE} cells, got {len(self.grid)}")
        for cell in self.grid:
            if cell not in CELLS:
                raise ValueError(f"Invalid cell: {cell!r}")

    @staticmethod
    def initial() -> 'Board':
        """Builds the standard starting position."""
        cells: List[Cell] = [EMPTY] * (SIZE * SIZE)
        mid = SIZE // 2
        cells[(mid - 1) * SIZE + (mid - 1)] = WHITE
        cells[mid * SIZE + mid] = WHITE
        cells[(mid - 1) * SIZE + mid] = BLACK
        cells[mid * SIZE + (mid - 1)] = BLACK
        return Board(tuple(cells))

    @staticmethod
    def from_rows(rows: Sequence[Sequence[Cell]]) -> 'Board':
        """Builds a board from 8 rows of 8 cells each."""
        if len(rows) != SIZE or any(len(r) != SIZE for r in rows):
            raise ValueError("Board must be 8x8")
        return Board(tuple(cell for row in rows for cell in row))

    def to_rows(self) -> List[List[Cell]]:
        return [list(self.grid[r * SIZE:(r + 1) * SIZE]) for r in range(SIZE)]

    def index(self, r: int, c: int) -> int:
        """Calculates the 1D index for a given row and column."""
        return r * SIZE + c

    def at(self, r: int, c: int) -> Cell:
        """Gets the cell at a given row and column."""
        if not in_bounds(r, c):
            raise IndexError(f"Out of bounds: {(r, c)}")
        return self.grid[self.index(r, c)]

    def coords(self) -> Iterable[Coord]:
        """Iterates over all coordinates on the board in row-major order."""
        for r in range(SIZE):
            for c in range(SIZE):
                yield (r, c)

    def count(self, cell: Cell) -> int:
        return sum(1 for x in self.grid if x == cell)

    def with_cells(self, player: Player, coords: Iterable[Coord]) -> 'Board':
        """Returns a new board with every coord in `coords` set to `player`."""
        cells = list(self.grid)
        for r, c in coords:
            cells[self.index(r, c)] = player
        return Board(tuple(cells))

    def pretty(self, marks: Optional[Set[Coord]] = None, one_based: bool = True) -> str:
        """Generates a human-readable string representation of the board."""
        mset = marks or set()
        base = 1 if one_based else 0
        lines: List[str] = ["  " + " ".join(str(c + base) for c in range(SIZE))]
        for r in range(SIZE):
            row: List[str] = []
            for c in range(SIZE):
                cell = self.at(r, c)
                if cell == EMPTY and (r, c) in mset:
                    row.append("*")
                else:
                    row.append(cell)
            lines.append(f"{r + base} " + " ".join(row))
        return "\n".join(lines)
