from collections import deque
from typing import List, Optional

import pytest

from tierpath.grid import Grid
from tierpath.types import Coord


def grid_from(*lines: str) -> Grid:
    """'.' free, '#' obstacle, 'S' origin marker."""
    table = {".": 0, "#": 1, "S": 2}
    return Grid.from_rows([[table[ch] for ch in line] for line in lines])


def bfs_steps(grid: Grid, origin: Coord, target: Coord) -> Optional[int]:
    if origin == target:
        return 0
    seen = {origin}
    q = deque([(origin, 0)])
    while q:
        cur, d = q.popleft()
        for nb in grid.neighbors(cur):
            if nb in seen or grid.is_blocked(nb):
                continue
            if nb == target:
                return d + 1
            seen.add(nb)
            q.append((nb, d + 1))
    return None


def assert_walkable(grid: Grid, path: List[Coord]) -> None:
    for a, b in zip(path, path[1:]):
        assert abs(a[0] - b[0]) + abs(a[1] - b[1]) == 1, f"{a} -> {b} is not a 4-way step"
    for p in path[1:]:
        assert not grid.is_blocked(p)


@pytest.fixture
def open3():
    return grid_from("S..", "...", "...")


@pytest.fixture
def walled3():
    return grid_from("S..", ".#.", ".#.")
