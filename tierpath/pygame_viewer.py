# tierpath/pygame_viewer.py (tour playback)
from __future__ import annotations
import argparse
from dataclasses import dataclass
from typing import List, Optional

import pygame
from loguru import logger

from .astar import TIE_BREAKS, FrontierOrder
from .grid import Grid
from .loaders import load_destinations, load_map
from .log import setup_logging
from .sequencer import TourPlan, Visit, plan
from .types import Coord, Tier

@dataclass
class Colors:
    BG = (18, 18, 22)
    WALL = (35, 35, 44)
    FLOOR = (230, 230, 240)
    AGENT = (220, 90, 90)
    ORIGIN = (100, 220, 120)
    MISSED = (200, 60, 60)
    DONE = (120, 120, 140)
    GRID = (60, 60, 70)
    TIERS = {
        Tier.FIRST: (90, 160, 220),
        Tier.SECOND: (70, 170, 110),
        Tier.THIRD: (220, 160, 60),
    }

def _is_cmd_ctrl_f(event):
    mods = event.mod
    KMOD_CMD = getattr(pygame, "KMOD_META", 0) | getattr(pygame, "KMOD_GUI", 0)
    return event.key == pygame.K_f and (mods & pygame.KMOD_CTRL) and (mods & KMOD_CMD)

class Viewer:
    """
    Plays a TourPlan back leg by leg. Unreachable destinations are skipped
    and stay marked in red.
    """
    def __init__(self, grid: Grid, tour: TourPlan, cell_size: int = 28, fps: int = 60,
                 speed: float = 6.0, fullscreen: bool = False):
        self.grid = grid
        self.tour = tour
        self.cell = cell_size
        self.fps = fps
        self.speed_tiles_per_sec = speed
        self.show_grid = False
        self._trail_tile = self._make_trail_tile()

        self.fullscreen = fullscreen
        self._recreate_display()
        pygame.display.set_caption("tierpath: tiered tour")
        self.clock = pygame.time.Clock()

        self._reset_state()

    # ----------------- display / fullscreen -----------------
    def _make_trail_tile(self) -> "pygame.Surface":
        tile = pygame.Surface((self.cell, self.cell), pygame.SRCALPHA)
        tile.fill((*Colors.DONE, 70))
        return tile

    def _recreate_display(self) -> None:
        W, H = self.grid.cols * self.cell, self.grid.rows * self.cell
        flags = pygame.SCALED | (pygame.FULLSCREEN if self.fullscreen else 0)
        self.screen = pygame.display.set_mode((W, H), flags)

    def toggle_fullscreen(self) -> None:
        self.fullscreen = not self.fullscreen
        self._recreate_display()

    def _recalculate_step_interval(self) -> None:
        self._step_interval = 1.0 / self.speed_tiles_per_sec

    # ----------------- playback -----------------
    def _reset_state(self) -> None:
        self.cur: Coord = self.tour.origin
        self.leg = 0
        self.path_index = 0
        self.trail: List[Coord] = [self.cur]
        self.autopilot = False
        self._step_timer = 0.0
        self._recalculate_step_interval()
        self._skip_missed()

    def _skip_missed(self) -> None:
        while self.leg < len(self.tour.visits) and not self.tour.visits[self.leg].reached:
            self.leg += 1
        self.path_index = 1  # path[0] is the leg's origin

    @property
    def current_leg(self) -> Optional[Visit]:
        if self.leg < len(self.tour.visits):
            return self.tour.visits[self.leg]
        return None

    @property
    def finished(self) -> bool:
        return self.current_leg is None

    def _step(self) -> None:
        v = self.current_leg
        if v is None:
            return
        if self.path_index < len(v.path):
            self.cur = v.path[self.path_index]
            self.trail.append(self.cur)
            self.path_index += 1
        if self.path_index >= len(v.path):
            self.leg += 1
            self._skip_missed()

    def _finish_leg(self) -> None:
        start = self.leg
        while not self.finished and self.leg == start:
            self._step()

    # ----------------- draw -----------------
    def draw(self) -> None:
        self.render(self.screen)
        pygame.display.flip()

    def render(self, scr: "pygame.Surface") -> None:
        rows, cols, cell = self.grid.rows, self.grid.cols, self.cell
        scr.fill(Colors.BG)

        for r in range(rows):
            for c in range(cols):
                rect = pygame.Rect(c * cell, r * cell, cell, cell)
                scr.fill(Colors.WALL if self.grid.is_blocked((r, c)) else Colors.FLOOR, rect)

        v = self.current_leg
        if v is not None:
            color = Colors.TIERS[v.request.tier]
            for (r, c) in v.path[self.path_index:]:
                rect = pygame.Rect(c * cell + cell // 4, r * cell + cell // 4, cell // 2, cell // 2)
                pygame.draw.rect(scr, color, rect, border_radius=4)

        for (r, c) in self.trail:
            scr.blit(self._trail_tile, (c * cell, r * cell))

        for i, visit in enumerate(self.tour.visits):
            if not self.grid.in_bounds(visit.request.target):
                continue
            gr, gc = visit.request.target
            if not visit.reached:
                color = Colors.MISSED
            elif i < self.leg:
                color = Colors.DONE
            else:
                color = Colors.TIERS[visit.request.tier]
            rect = pygame.Rect(gc * cell + 4, gr * cell + 4, cell - 8, cell - 8)
            pygame.draw.rect(scr, color, rect, border_radius=6)

        orr, oc = self.tour.origin
        pygame.draw.rect(scr, Colors.ORIGIN, pygame.Rect(oc * cell + 2, orr * cell + 2, cell - 4, cell - 4), width=3)

        pr, pc = self.cur
        agent_rect = pygame.Rect(pc * cell + 6, pr * cell + 6, cell - 12, cell - 12)
        pygame.draw.rect(scr, Colors.AGENT, agent_rect, border_radius=8)

        if self.show_grid:
            for i in range(cols + 1):
                pygame.draw.line(scr, Colors.GRID, (i * cell, 0), (i * cell, rows * cell))
            for i in range(rows + 1):
                pygame.draw.line(scr, Colors.GRID, (0, i * cell), (cols * cell, i * cell))

    # ----------------- loop -----------------
    def run(self) -> None:
        running = True
        while running:
            dt = self.clock.tick(self.fps) / 1000.0
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN:
                    if event.key == pygame.K_ESCAPE:
                        running = False
                    elif event.key == pygame.K_SPACE:
                        self.autopilot = not self.autopilot
                    elif event.key == pygame.K_n:
                        self._finish_leg()
                    elif event.key == pygame.K_r:
                        self._reset_state()
                    elif event.key == pygame.K_PAGEUP:
                        self.speed_tiles_per_sec = min(self.speed_tiles_per_sec + 1, 60)
                        self._recalculate_step_interval()
                    elif event.key == pygame.K_PAGEDOWN:
                        self.speed_tiles_per_sec = max(self.speed_tiles_per_sec - 1, 1)
                        self._recalculate_step_interval()
                    elif event.key == pygame.K_h:
                        self.show_grid = not self.show_grid
                    elif (event.key == pygame.K_RETURN and (event.mod & pygame.KMOD_ALT)) or _is_cmd_ctrl_f(event):
                        self.toggle_fullscreen()
                    elif event.key == pygame.K_F11:
                        self.toggle_fullscreen()

            if self.autopilot and not self.finished:
                self._step_timer += dt
                while self._step_timer >= self._step_interval and not self.finished:
                    self._step()
                    self._step_timer -= self._step_interval

            self.draw()

def main():
    parser = argparse.ArgumentParser(description="Play back a tiered destination tour")
    parser.add_argument("map", type=str, help="Map file (rows cols, then cells)")
    parser.add_argument("dests", type=str, help="Destination file (row col tier triples)")
    parser.add_argument("--tie-break", choices=TIE_BREAKS, default="fifo", help="Frontier tie-break rule")
    parser.add_argument("--cell", type=int, default=28, help="Cell size in pixels")
    parser.add_argument("--fps", type=int, default=60, help="Frames per second")
    parser.add_argument("--speed", type=float, default=6.0, help="Autopilot speed in tiles/sec")
    parser.add_argument("--fullscreen", action="store_true", help="Start in fullscreen (toggle Option+Enter / F11)")
    args = parser.parse_args()

    setup_logging("INFO")
    grid, origin = load_map(args.map)
    tour = plan(grid, origin, load_destinations(args.dests), order=FrontierOrder(args.tie_break))
    logger.info(f"{tour.reached_count}/{len(tour.visits)} destinations reachable; space to play, n for next leg")

    pygame.init()
    try:
        Viewer(grid, tour, cell_size=args.cell, fps=args.fps, speed=args.speed, fullscreen=args.fullscreen).run()
    finally:
        pygame.quit()

if __name__ == "__main__":
    main()
