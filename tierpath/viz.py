# tierpath/viz.py
from __future__ import annotations
import os
from typing import Dict, Tuple

from PIL import Image, ImageDraw

from .grid import Grid
from .sequencer import TourPlan
from .types import Tier

RGB = Tuple[int, int, int]

TIER_COLORS: Dict[Tier, RGB] = {
    Tier.FIRST: (160, 190, 255),
    Tier.SECOND: (170, 220, 160),
    Tier.THIRD: (250, 210, 140),
}
OBSTACLE = (0, 0, 0)
FLOOR = (240, 240, 240)
ORIGIN = (100, 220, 120)
REACHED = (60, 90, 200)
MISSED = (220, 60, 60)

def draw_plan_png(grid: Grid, plan: TourPlan, out_png: str, cell: int = 10) -> None:
    img = Image.new("RGB", (grid.cols * cell, grid.rows * cell), (255, 255, 255))
    drw = ImageDraw.Draw(img)

    def box(r: int, c: int, inset: int = 0):
        x0, y0 = c * cell, r * cell
        return (x0 + inset, y0 + inset, x0 + cell - 1 - inset, y0 + cell - 1 - inset)

    # base grid
    for r in range(grid.rows):
        for c in range(grid.cols):
            drw.rectangle(box(r, c), fill=OBSTACLE if grid.is_blocked((r, c)) else FLOOR)

    # legs, later tiers painted under earlier ones
    for v in sorted(plan.visits, key=lambda v: -int(v.request.tier)):
        for (r, c) in v.path:
            drw.rectangle(box(r, c), fill=TIER_COLORS[v.request.tier])

    # destinations
    inset = cell // 4
    for v in plan.visits:
        r, c = v.request.target
        if grid.in_bounds((r, c)):
            drw.rectangle(box(r, c, inset), fill=REACHED if v.reached else MISSED)

    sr, sc = plan.origin
    drw.rectangle(box(sr, sc), fill=ORIGIN)

    d = os.path.dirname(out_png)
    if d:
        os.makedirs(d, exist_ok=True)
    img.save(out_png)
