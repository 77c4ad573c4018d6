# tierpath/report.py
from __future__ import annotations
from typing import List
import csv
import os

from .sequencer import TourPlan, Visit
from .types import Coord

CSV_FIELDS = ["tier", "row", "col", "status", "steps", "expansions", "origin_row", "origin_col"]

def _pt(c: Coord) -> str:
    return f"({c[0]}, {c[1]})"

def format_report(plan: TourPlan) -> str:
    lines: List[str] = ["Sorted Addresses:"]
    for req in plan.listing:
        lines.append(f"{_pt(req.target)} with priority {int(req.tier)}")
    lines.append("")
    for v in plan.visits:
        where = f"destination {_pt(v.request.target)} with priority {int(v.request.tier)}"
        if v.reached:
            lines.append(f"Optimal Path to {where}:")
            lines.extend(_pt(p) for p in v.path)
        else:
            lines.append(f"Cannot find a path to {where}.")
    lines.append("All done!")
    return "\n".join(lines) + "\n"

def format_visit(v: Visit) -> str:
    steps = "-" if v.steps is None else str(v.steps)
    return (f"tier={int(v.request.tier)} | dest={_pt(v.request.target):10s} | "
            f"from={_pt(v.origin):10s} | {v.status.value:16s} | "
            f"steps={steps:>5s} | expansions={v.expansions:6d}")

def format_summary(plan: TourPlan) -> str:
    lines = [format_visit(v) for v in plan.visits]
    lines.append(f"reached {plan.reached_count}/{len(plan.visits)} | total steps {plan.total_steps} | "
                 f"final position {_pt(plan.final_origin)}")
    if plan.dropped:
        lines.append(f"dropped {len(plan.dropped)} request(s) with invalid tier")
    return "\n".join(lines)

def visit_row(v: Visit) -> dict:
    return {
        "tier": int(v.request.tier),
        "row": v.request.target[0],
        "col": v.request.target[1],
        "status": v.status.value,
        "steps": "" if v.steps is None else v.steps,
        "expansions": v.expansions,
        "origin_row": v.origin[0],
        "origin_col": v.origin[1],
    }

def write_csv(plan: TourPlan, path: str) -> None:
    d = os.path.dirname(path)
    if d:
        os.makedirs(d, exist_ok=True)
    with open(path, "w", newline="") as f:
        writer = csv.DictWriter(f, fieldnames=CSV_FIELDS)
        writer.writeheader()
        writer.writerows(visit_row(v) for v in plan.visits)
