# tierpath/grid.py
from __future__ import annotations
from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence, Tuple
import random

from .errors import MapFormatError
from .types import CellState, Coord

# down, up, right, left; expansion order is part of the search's determinism
MOVES: Tuple[Coord, ...] = ((1, 0), (-1, 0), (0, 1), (0, -1))

@dataclass(frozen=True)
class Grid:
    rows: int
    cols: int
    cells: Tuple[Tuple[CellState, ...], ...]

    @staticmethod
    def from_rows(values: Sequence[Sequence[int]]) -> "Grid":
        if not values or not values[0]:
            raise MapFormatError("grid must have at least one row and one column")
        cols = len(values[0])
        cells = []
        for r, row in enumerate(values):
            if len(row) != cols:
                raise MapFormatError(f"row {r} has {len(row)} cells, expected {cols}")
            try:
                cells.append(tuple(CellState(int(v)) for v in row))
            except ValueError:
                raise MapFormatError(f"row {r} holds a cell value outside 0/1/2: {list(row)}") from None
        return Grid(len(cells), cols, tuple(cells))

    @staticmethod
    def random(rows: int = 20, cols: int = 20, p_blocked: float = 0.25,
               seed: Optional[int] = None, origin: Optional[Coord] = None) -> "Grid":
        if rows <= 0 or cols <= 0:
            raise MapFormatError(f"grid must be at least 1x1 (got {rows}x{cols})")
        rng = random.Random(seed)
        values = [[int(CellState.OBSTACLE) if rng.random() < p_blocked else int(CellState.FREE)
                   for _ in range(cols)] for _ in range(rows)]
        sr, sc = origin if origin is not None else (rng.randrange(rows), rng.randrange(cols))
        if not (0 <= sr < rows and 0 <= sc < cols):
            raise MapFormatError(f"origin {(sr, sc)} is outside the {rows}x{cols} grid")
        values[sr][sc] = int(CellState.ORIGIN)
        return Grid.from_rows(values)

    def to_text(self) -> str:
        lines = [f"{self.rows} {self.cols}"]
        lines.extend(" ".join(str(int(v)) for v in row) for row in self.cells)
        return "\n".join(lines) + "\n"

    def in_bounds(self, s: Coord) -> bool:
        r, c = s
        return 0 <= r < self.rows and 0 <= c < self.cols

    def state(self, s: Coord) -> CellState:
        r, c = s
        return self.cells[r][c]

    def is_blocked(self, s: Coord) -> bool:
        return self.state(s) is CellState.OBSTACLE

    def origin_cells(self) -> List[Coord]:
        return [(r, c) for r in range(self.rows) for c in range(self.cols)
                if self.cells[r][c] is CellState.ORIGIN]

    def free_cells(self) -> Iterable[Coord]:
        for r in range(self.rows):
            for c in range(self.cols):
                if self.cells[r][c] is not CellState.OBSTACLE:
                    yield (r, c)

    def neighbors(self, s: Coord) -> List[Coord]:
        r, c = s
        cand = [(r + dr, c + dc) for dr, dc in MOVES]
        return [p for p in cand if self.in_bounds(p)]
