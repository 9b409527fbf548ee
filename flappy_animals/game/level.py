# flappy_animals/game/level.py
from __future__ import annotations
import random
from dataclasses import dataclass
from typing import List, Tuple
from .config import (
    GameParams, DEFAULT_PARAMS, OBSTACLE_DISTANCE_DEFAULT, COLOR_RED, COLOR_YELLOW
)
from .player import Player
from .render import CellGrid


def obstacle_size_for_score(score: int, params: GameParams = DEFAULT_PARAMS) -> int:
    """Gap height shrinks by one cell every two points, never below the floor."""
    return max(params.obstacle_min_size, params.obstacle_base_size - score // 2)


@dataclass
class Obstacle:
    """A single pipe column with a gap centred on gap_y."""
    x: float
    gap_y: int
    size: int
    scored: bool = False

    @property
    def column(self) -> int:
        return int(self.x)

    @property
    def gap_top(self) -> int:
        return self.gap_y - self.size // 2

    @property
    def gap_bottom(self) -> int:
        return self.gap_y + self.size // 2

    def step(self, speed: float):
        self.x -= speed

    def hits(self, player: Player) -> bool:
        """AABB vs gap: the column crosses the player's span and the player
        is not fully inside [gap_top, gap_bottom)."""
        col = self.column
        overlaps_x = player.x <= col < player.x + player.width
        outside_gap = player.y < self.gap_top or player.y + player.height > self.gap_bottom
        return overlaps_x and outside_gap

    def passed_by(self, player: Player) -> bool:
        return player.x > self.column

    def draw(self, grid: CellGrid):
        col = self.column
        for y in range(0, self.gap_top):
            grid.set(col, y, COLOR_RED, COLOR_YELLOW, "|")
        for y in range(self.gap_bottom, grid.height):
            grid.set(col, y, COLOR_RED, COLOR_YELLOW, "|")


class ObstacleField:
    """
    Endless stream of obstacles entering from the right edge.
    Spacing is measured in scrolled distance, so a smaller setting packs
    columns tighter without changing scroll speed.
    """
    def __init__(self, seed: int | None = None, params: GameParams = DEFAULT_PARAMS,
                 spacing: int = OBSTACLE_DISTANCE_DEFAULT):
        if seed is None:
            seed = random.randrange(0, 2**32 - 1)
        self.seed = seed
        self.rng = random.Random(seed)
        self.params = params
        self.spacing = spacing
        self.obstacles: List[Obstacle] = []
        self.distance = 0.0
        self.reset()

    def reset(self, spacing: int | None = None):
        if spacing is not None:
            self.spacing = spacing
        self.distance = 0.0
        self.obstacles = [self.spawn(score=0)]

    def spawn(self, score: int) -> Obstacle:
        p = self.params
        return Obstacle(
            x=float(p.screen_w),
            gap_y=self.rng.randrange(p.gap_y_min, p.gap_y_max),
            size=obstacle_size_for_score(score, p),
        )

    def update(self, player: Player, score: int, grid: CellGrid | None = None) -> Tuple[int, bool]:
        """
        Advance one tick: scroll (and draw) each obstacle, score the ones the
        player has passed, test collisions, cull, then pace new spawns.
        Returns (points gained this tick, whether the player was hit).
        """
        gained = 0
        hit = False
        for ob in self.obstacles:
            ob.step(self.params.obstacle_speed)
            if grid is not None:
                ob.draw(grid)
            if not ob.scored and ob.passed_by(player):
                ob.scored = True
                gained += 1
            if ob.hits(player):
                hit = True

        self.obstacles = [ob for ob in self.obstacles if ob.x > 0.0]

        self.distance += self.params.obstacle_speed
        if self.distance > self.spacing:
            self.obstacles.append(self.spawn(score + gained))
            self.distance = 0.0
        return gained, hit

