# tierpath/__init__.py
from .types import Coord, CellState, Tier
from .errors import (TierPathError, MapFormatError, InvalidTierError,
                     OutOfBoundsError, SearchBudgetExceeded)
from .grid import Grid
from .heuristics import manhattan
from .astar import find_path, FrontierOrder, SearchNode, SearchResult
from .sequencer import (DestinationRequest, Visit, VisitStatus, TourPlan,
                        bucket_requests, listing, iter_visits, plan)
from .loaders import load_map, load_destinations, save_map, save_destinations
from .report import format_report, format_summary, write_csv

__all__ = [
    "Coord", "CellState", "Tier",
    "TierPathError", "MapFormatError", "InvalidTierError", "OutOfBoundsError", "SearchBudgetExceeded",
    "Grid", "manhattan",
    "find_path", "FrontierOrder", "SearchNode", "SearchResult",
    "DestinationRequest", "Visit", "VisitStatus", "TourPlan",
    "bucket_requests", "listing", "iter_visits", "plan",
    "load_map", "load_destinations", "save_map", "save_destinations",
    "format_report", "format_summary", "write_csv",
]
