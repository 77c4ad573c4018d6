# tierpath/loaders.py
from __future__ import annotations
from typing import Iterable, List, Tuple
import os

from loguru import logger

from .errors import MapFormatError
from .grid import Grid
from .sequencer import DestinationRequest
from .types import Coord

def load_map(path: str) -> Tuple[Grid, Coord]:
    """
    Read a map file: `rows cols` followed by rows*cols cell values (0 free,
    1 obstacle, 2 origin) in row-major order. Line breaks don't matter.
    Returns the grid and the origin cell.
    """
    with open(path, "r") as f:
        tokens = f.read().split()
    if len(tokens) < 2:
        raise MapFormatError(f"{path}: missing 'rows cols' header")
    try:
        values = [int(t) for t in tokens]
    except ValueError as e:
        raise MapFormatError(f"{path}: non-integer token ({e})") from None

    rows, cols = values[0], values[1]
    if rows <= 0 or cols <= 0:
        raise MapFormatError(f"{path}: bad dimensions {rows}x{cols}")
    body = values[2:]
    if len(body) != rows * cols:
        raise MapFormatError(f"{path}: expected {rows * cols} cells for {rows}x{cols}, found {len(body)}")

    try:
        grid = Grid.from_rows([body[r * cols:(r + 1) * cols] for r in range(rows)])
    except MapFormatError as e:
        raise MapFormatError(f"{path}: {e}") from None

    origins = grid.origin_cells()
    if not origins:
        raise MapFormatError(f"{path}: no origin cell (value 2)")
    if len(origins) > 1:
        logger.warning(f"{path}: {len(origins)} origin cells, using the last one {origins[-1]}")
    logger.debug(f"loaded {rows}x{cols} map from {path}, origin {origins[-1]}")
    return grid, origins[-1]

def load_destinations(path: str) -> List[Tuple[Coord, int]]:
    """
    Read `row col tier` triples. Stops at the first token that isn't an
    integer; tiers are not validated here.
    """
    with open(path, "r") as f:
        tokens = f.read().split()
    values: List[int] = []
    for t in tokens:
        try:
            values.append(int(t))
        except ValueError:
            logger.warning(f"{path}: stopped reading at non-integer token {t!r}")
            break
    if len(values) % 3:
        logger.warning(f"{path}: ignoring {len(values) % 3} trailing value(s) of an incomplete triple")
    out = [((values[i], values[i + 1]), values[i + 2]) for i in range(0, len(values) - 2, 3)]
    logger.debug(f"loaded {len(out)} destinations from {path}")
    return out

def save_map(grid: Grid, path: str) -> None:
    d = os.path.dirname(path)
    if d:
        os.makedirs(d, exist_ok=True)
    with open(path, "w") as f:
        f.write(grid.to_text())

def save_destinations(requests: Iterable[DestinationRequest], path: str) -> None:
    d = os.path.dirname(path)
    if d:
        os.makedirs(d, exist_ok=True)
    with open(path, "w") as f:
        for req in requests:
            r, c = req.target
            f.write(f"{r} {c} {int(req.tier)}\n")
