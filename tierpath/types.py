# tierpath/types.py
from __future__ import annotations
from enum import IntEnum
import operator
from typing import Tuple

from .errors import InvalidTierError

Coord = Tuple[int, int]  # (row, col)


class CellState(IntEnum):
    FREE = 0
    OBSTACLE = 1
    ORIGIN = 2


class Tier(IntEnum):
    """Visiting rank of a destination. Lower value is visited first."""
    FIRST = 1
    SECOND = 2
    THIRD = 3

    @classmethod
    def parse(cls, value) -> "Tier":
        """Accept ints and integer strings only; bools and fractional values are rejected."""
        try:
            if isinstance(value, bool):
                raise TypeError("bool")
            n = int(value) if isinstance(value, str) else operator.index(value)
            return cls(n)
        except (TypeError, ValueError):
            raise InvalidTierError(f"tier must be one of 1, 2, 3 (got {value!r})") from None
