# flappy_animals/game/player.py
from __future__ import annotations
import math
import pygame
from dataclasses import dataclass
from .config import GameParams, DEFAULT_PARAMS


@dataclass
class Player:
    """
    The flapping avatar:
    - x, y are integer cell coordinates of the sprite's top-left corner
    - velocity is in cells per gravity step, positive = falling
    """
    x: int
    y: int
    velocity: float = 0.0
    params: GameParams = DEFAULT_PARAMS
    _frame_time: float = 0.0    # ms accumulated since the last gravity step

    @classmethod
    def spawn(cls, params: GameParams = DEFAULT_PARAMS) -> "Player":
        return cls(x=params.player_start_x, y=params.player_start_y, params=params)

    @property
    def width(self) -> int:
        return self.params.player_w

    @property
    def height(self) -> int:
        return self.params.player_h

    @property
    def rect(self) -> pygame.Rect:
        return pygame.Rect(self.x, self.y, self.width, self.height)

    def gravity_step(self):
        """Accelerate toward the fall cap, move, and keep y on screen at the top."""
        self.velocity = min(self.velocity + self.params.gravity_step, self.params.max_fall_velocity)
        self.y += math.floor(self.velocity)
        if self.y < 0:
            self.y = 0

    def flap(self):
        self.velocity = self.params.flap_velocity

    def update(self, dt_ms: float) -> bool:
        """Run at most one gravity step once a full frame duration has elapsed.
        Returns True if a step was taken."""
        self._frame_time += dt_ms
        if self._frame_time > self.params.frame_duration_ms:
            self.gravity_step()
            self._frame_time = 0.0
            return True
        return False

    def fell_off(self) -> bool:
        return self.y + self.height > self.params.screen_h
