# tierpath/sequencer.py
from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Iterable, Iterator, List, Optional, Sequence, Tuple, Union

from loguru import logger

from .astar import FrontierOrder, find_path
from .errors import InvalidTierError, OutOfBoundsError, SearchBudgetExceeded
from .grid import Grid
from .types import Coord, Tier

@dataclass(frozen=True)
class DestinationRequest:
    target: Coord
    tier: Tier

RawRequest = Union[DestinationRequest, Tuple[Coord, int], Tuple[int, int, int]]

class VisitStatus(str, Enum):
    REACHED = "reached"
    UNREACHABLE = "unreachable"
    OUT_OF_BOUNDS = "out_of_bounds"
    BUDGET_EXHAUSTED = "budget_exhausted"

@dataclass
class Visit:
    request: DestinationRequest
    origin: Coord
    status: VisitStatus
    path: List[Coord] = field(default_factory=list)
    expansions: int = 0

    @property
    def reached(self) -> bool:
        return self.status is VisitStatus.REACHED

    @property
    def steps(self) -> Optional[int]:
        return len(self.path) - 1 if self.reached else None

@dataclass
class TourPlan:
    origin: Coord
    listing: List[DestinationRequest]
    visits: List[Visit]
    final_origin: Coord
    dropped: List[Tuple[Coord, int]] = field(default_factory=list)

    @property
    def reached_count(self) -> int:
        return sum(1 for v in self.visits if v.reached)

    @property
    def total_steps(self) -> int:
        return sum(v.steps for v in self.visits if v.reached)

def _split_raw(raw: RawRequest) -> Tuple[Coord, int]:
    if isinstance(raw, DestinationRequest):
        return raw.target, int(raw.tier)
    if len(raw) == 3:
        r, c, tier = raw
        return (int(r), int(c)), tier
    coord, tier = raw
    return (int(coord[0]), int(coord[1])), tier

def bucket_requests(
    requests: Iterable[RawRequest], strict: bool = False
) -> Tuple[Dict[Tier, List[DestinationRequest]], List[Tuple[Coord, int]]]:
    """
    Stable partition into one bucket per tier.

    Requests with a tier outside 1..3 are returned in the second element and
    logged, or raise InvalidTierError when strict is set.
    """
    buckets: Dict[Tier, List[DestinationRequest]] = {t: [] for t in Tier}
    dropped: List[Tuple[Coord, int]] = []
    for raw in requests:
        coord, tier = _split_raw(raw)
        try:
            t = Tier.parse(tier)
        except InvalidTierError:
            if strict:
                raise
            logger.warning(f"dropping destination {coord}: tier {tier!r} is not 1, 2 or 3")
            dropped.append((coord, tier))
            continue
        buckets[t].append(DestinationRequest(coord, t))
    return buckets, dropped

def listing(buckets: Dict[Tier, List[DestinationRequest]]) -> List[DestinationRequest]:
    return [req for t in sorted(Tier) for req in buckets.get(t, [])]

def iter_visits(
    grid: Grid,
    origin: Coord,
    ordered: Sequence[DestinationRequest],
    order: Optional[FrontierOrder] = None,
    max_expansions: Optional[int] = None,
) -> Iterator[Visit]:
    """Run the searches one after another, chaining each reached target as the next origin."""
    if not grid.in_bounds(origin):
        raise OutOfBoundsError(f"origin {origin} is outside the {grid.rows}x{grid.cols} grid")
    cur = origin
    for req in ordered:
        if not grid.in_bounds(req.target):
            logger.warning(f"destination {req.target} (tier {int(req.tier)}) is outside the grid; treating as unreachable")
            yield Visit(req, cur, VisitStatus.OUT_OF_BOUNDS)
            continue
        try:
            res = find_path(grid, cur, req.target, order=order, max_expansions=max_expansions)
        except SearchBudgetExceeded as e:
            logger.warning(f"gave up on {req.target} (tier {int(req.tier)}): {e}")
            yield Visit(req, cur, VisitStatus.BUDGET_EXHAUSTED, expansions=e.budget)
            continue
        if res.found:
            yield Visit(req, cur, VisitStatus.REACHED, res.path, len(res.expanded))
            cur = req.target
        else:
            logger.info(f"destination {req.target} (tier {int(req.tier)}) unreachable from {cur}")
            yield Visit(req, cur, VisitStatus.UNREACHABLE, expansions=len(res.expanded))

def plan(
    grid: Grid,
    origin: Coord,
    requests: Iterable[RawRequest],
    order: Optional[FrontierOrder] = None,
    max_expansions: Optional[int] = None,
    strict: bool = False,
) -> TourPlan:
    buckets, dropped = bucket_requests(requests, strict=strict)
    ordered = listing(buckets)
    visits = list(iter_visits(grid, origin, ordered, order=order, max_expansions=max_expansions))
    final = origin
    for v in visits:
        if v.reached:
            final = v.request.target
    logger.info(f"tour finished: {sum(v.reached for v in visits)}/{len(visits)} destinations reached")
    return TourPlan(origin, ordered, visits, final, dropped)
