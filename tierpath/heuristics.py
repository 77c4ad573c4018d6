# tierpath/heuristics.py
from .types import Coord

def manhattan(a: Coord, b: Coord) -> int:
    """Admissible and consistent for unit-cost 4-connected moves."""
    (ar, ac), (br, bc) = a, b
    return abs(ar - br) + abs(ac - bc)
