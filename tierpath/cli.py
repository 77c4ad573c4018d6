# tierpath/cli.py
from __future__ import annotations
import argparse, csv, os, os.path, random
import sys
from typing import List, Optional

from loguru import logger

from .astar import TIE_BREAKS, FrontierOrder
from .errors import TierPathError
from .grid import Grid
from .loaders import load_destinations, load_map, save_destinations, save_map
from .log import setup_logging
from .report import format_report, format_summary, visit_row, write_csv
from .sequencer import DestinationRequest, plan
from .types import Tier
from .viz import draw_plan_png

MAP_SUFFIX = ".map.txt"
DEST_SUFFIX = ".dest.txt"

def run_tour(map_path: str, dest_path: str, tie_break: str = "fifo",
             max_expansions: Optional[int] = None, strict: bool = False) -> tuple:
    grid, origin = load_map(map_path)
    requests = load_destinations(dest_path)
    tour = plan(grid, origin, requests, order=FrontierOrder(tie_break),
                max_expansions=max_expansions, strict=strict)
    return grid, tour

def random_requests(grid: Grid, count: int, seed: Optional[int] = None) -> List[DestinationRequest]:
    rng = random.Random(seed)
    cells = [(r, c) for r in range(grid.rows) for c in range(grid.cols)]
    picks = rng.sample(cells, min(count, len(cells)))
    return [DestinationRequest(p, rng.choice(list(Tier))) for p in picks]

# -------- subcommands --------

def cmd_run(args: argparse.Namespace) -> None:
    grid, tour = run_tour(args.map, args.dests, tie_break=args.tie_break,
                          max_expansions=args.max_expansions, strict=args.strict_tiers)
    sys.stdout.write(format_report(tour))
    if args.summary:
        print()
        print(format_summary(tour))
    if args.png:
        draw_plan_png(grid, tour, args.png, cell=args.cell)
        logger.info(f"wrote PNG: {args.png}")
    if args.csv:
        write_csv(tour, args.csv)
        logger.info(f"wrote CSV: {args.csv}")

def cmd_gen(args: argparse.Namespace) -> None:
    os.makedirs(args.out, exist_ok=True)
    for i in range(args.count):
        seed = (args.seed + i) if args.seed is not None else None
        grid = Grid.random(rows=args.rows, cols=args.cols, p_blocked=args.p, seed=seed)
        base = os.path.join(args.out, f"tour_{i:03d}")
        save_map(grid, base + MAP_SUFFIX)
        save_destinations(random_requests(grid, args.dests, seed=seed), base + DEST_SUFFIX)
        print("wrote", base + MAP_SUFFIX, base + DEST_SUFFIX)

def cmd_bench(args: argparse.Namespace) -> None:
    maps = sorted(p for p in os.listdir(args.envdir) if p.endswith(MAP_SUFFIX))
    rows = []
    for fname in maps:
        base = fname[:-len(MAP_SUFFIX)]
        dest = os.path.join(args.envdir, base + DEST_SUFFIX)
        if not os.path.exists(dest):
            logger.warning(f"{fname}: no {base + DEST_SUFFIX} next to it, skipping")
            continue
        _, tour = run_tour(os.path.join(args.envdir, fname), dest, tie_break=args.tie_break)
        for line in format_summary(tour).splitlines():
            print(f"{base} :: {line}")
        rows.extend(dict(env=base, **visit_row(v)) for v in tour.visits)
    if args.csv and rows:
        with open(args.csv, "w", newline="") as f:
            writer = csv.DictWriter(f, fieldnames=list(rows[0].keys()))
            writer.writeheader()
            writer.writerows(rows)
        print("wrote CSV:", args.csv)

def build_argparser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Tiered multi-destination A* over grid maps")
    p.add_argument("-v", "--verbose", action="store_true", help="debug logging on stderr")
    p.add_argument("--log-file", type=str, default=None, help="also write a debug log here")
    sub = p.add_subparsers(dest="cmd", required=True)

    r = sub.add_parser("run", help="visit every destination of one map in tier order")
    r.add_argument("map", type=str)
    r.add_argument("dests", type=str)
    r.add_argument("--tie-break", choices=TIE_BREAKS, default="fifo")
    r.add_argument("--max-expansions", type=int, default=None)
    r.add_argument("--strict-tiers", action="store_true", help="fail on tiers outside 1..3 instead of dropping them")
    r.add_argument("--summary", action="store_true", help="print a per-destination summary after the report")
    r.add_argument("--png", type=str, default="")
    r.add_argument("--cell", type=int, default=10)
    r.add_argument("--csv", type=str, default="")
    r.set_defaults(func=cmd_run)

    g = sub.add_parser("gen", help="generate random map/destination pairs")
    g.add_argument("--count", type=int, default=10)
    g.add_argument("--rows", type=int, default=20)
    g.add_argument("--cols", type=int, default=20)
    g.add_argument("--p", type=float, default=0.25)
    g.add_argument("--dests", type=int, default=6)
    g.add_argument("--out", type=str, default="envs")
    g.add_argument("--seed", type=int, default=None)
    g.set_defaults(func=cmd_gen)

    b = sub.add_parser("bench", help=f"run every *{MAP_SUFFIX} in a folder with its *{DEST_SUFFIX}")
    b.add_argument("--envdir", type=str, required=True)
    b.add_argument("--tie-break", choices=TIE_BREAKS, default="fifo")
    b.add_argument("--csv", type=str, default="")
    b.set_defaults(func=cmd_bench)

    return p

def main(argv: Optional[List[str]] = None) -> int:
    ap = build_argparser()
    args = ap.parse_args(argv)
    setup_logging("DEBUG" if args.verbose else "WARNING", args.log_file)
    try:
        args.func(args)
    except (TierPathError, OSError) as e:
        logger.error(str(e))
        return 2
    return 0
