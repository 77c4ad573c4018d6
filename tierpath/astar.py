# tierpath/astar.py
from __future__ import annotations
from dataclasses import dataclass, field
from typing import List, NamedTuple, Optional, Set, Tuple
import heapq

from loguru import logger

from .errors import OutOfBoundsError, SearchBudgetExceeded
from .grid import Grid
from .heuristics import manhattan
from .types import Coord

TIE_BREAKS = ("fifo", "larger_g", "smaller_g")

class SearchNode(NamedTuple):
    coord: Coord
    g: int
    h: int
    parent: int  # arena index, -1 for the root

    @property
    def f(self) -> int:
        return self.g + self.h

class FrontierOrder:
    """
    Heap key policy for the open list.

    Keys are (f, tie, seq). `tie` comes from the tie-break rule; `seq` is the
    insertion counter, so nodes with equal (f, tie) pop first-in first-out.
    """
    def __init__(self, tie_break: str = "fifo"):
        if tie_break not in TIE_BREAKS:
            raise ValueError(f"unknown tie_break {tie_break!r}; expected one of {', '.join(TIE_BREAKS)}")
        self.tie_break = tie_break

    def key(self, node: SearchNode, seq: int) -> Tuple[int, int, int]:
        if self.tie_break == "larger_g":
            tie = -node.g
        elif self.tie_break == "smaller_g":
            tie = node.g
        else:
            tie = 0
        return (node.f, tie, seq)

    def __repr__(self) -> str:
        return f"FrontierOrder({self.tie_break!r})"

@dataclass
class SearchResult:
    path: Optional[List[Coord]]
    expanded: Set[Coord] = field(default_factory=set)
    pushes: int = 0

    @property
    def found(self) -> bool:
        return self.path is not None

def _reconstruct(arena: List[SearchNode], idx: int) -> List[Coord]:
    path = []
    while idx != -1:
        node = arena[idx]
        path.append(node.coord)
        idx = node.parent
    path.reverse()
    return path

def find_path(
    grid: Grid,
    origin: Coord,
    target: Coord,
    order: Optional[FrontierOrder] = None,
    max_expansions: Optional[int] = None,
) -> SearchResult:
    """
    A* from origin to target with unit step cost and 4-way moves.

    Returns a SearchResult whose path is None when the target cannot be
    reached. Cells are closed when popped, so a cell may sit on the frontier
    several times; the first pop is optimal because manhattan is consistent.
    The origin's own cell state is not checked.
    """
    for name, s in (("origin", origin), ("target", target)):
        if not grid.in_bounds(s):
            raise OutOfBoundsError(f"{name} {s} is outside the {grid.rows}x{grid.cols} grid")
    if order is None:
        order = FrontierOrder()

    closed = [[False] * grid.cols for _ in range(grid.rows)]
    arena: List[SearchNode] = [SearchNode(origin, 0, manhattan(origin, target), -1)]
    openh: List[Tuple[Tuple[int, int, int], int]] = []
    seq = 0
    heapq.heappush(openh, (order.key(arena[0], seq), 0))
    seq += 1
    expanded: Set[Coord] = set()
    pops = 0

    while openh:
        _, idx = heapq.heappop(openh)
        cur = arena[idx]
        r, c = cur.coord
        if closed[r][c]:
            continue
        pops += 1
        if max_expansions is not None and pops > max_expansions:
            raise SearchBudgetExceeded(max_expansions)

        if cur.coord == target:
            path = _reconstruct(arena, idx)
            logger.debug(f"path {origin} -> {target}: {len(path) - 1} steps, {len(expanded)} expanded")
            return SearchResult(path, expanded, seq)

        closed[r][c] = True
        expanded.add(cur.coord)

        for nb in grid.neighbors(cur.coord):
            nr, nc = nb
            if closed[nr][nc] or grid.is_blocked(nb):
                continue
            arena.append(SearchNode(nb, cur.g + 1, manhattan(nb, target), idx))
            heapq.heappush(openh, (order.key(arena[-1], seq), len(arena) - 1))
            seq += 1

    logger.debug(f"no path {origin} -> {target} after {len(expanded)} expansions")
    return SearchResult(None, expanded, seq)
