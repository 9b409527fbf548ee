# flappy_animals/env/observations.py
from __future__ import annotations
from typing import Iterable, Optional
import numpy as np

from flappy_animals.game.config import GameParams, DEFAULT_PARAMS
from flappy_animals.game.level import Obstacle
from flappy_animals.game.player import Player

OBS_SIZE = 5


def _clamp01(x: float) -> float:
    return 0.0 if x < 0.0 else (1.0 if x > 1.0 else x)


def _norm_y(y: float, params: GameParams) -> float:
    """Normalize a top coordinate into [0,1] using [0, screen_h - player_h]."""
    denom = max(1, params.screen_h - params.player_h)
    return _clamp01(y / denom)


def _norm_velocity(v: float, params: GameParams) -> float:
    """Scale velocity to [-1,1] by the larger of the flap and fall magnitudes."""
    vmax = max(abs(params.flap_velocity), abs(params.max_fall_velocity), 1e-6)
    vv = max(-vmax, min(v, vmax))
    return vv / vmax


def _next_obstacle(player: Player, obstacles: Iterable[Obstacle]) -> Optional[Obstacle]:
    ahead = [ob for ob in obstacles if ob.column >= player.x]
    return min(ahead, key=lambda ob: ob.x, default=None)


def build_observation(
    player: Player,
    obstacles: Iterable[Obstacle],
    params: GameParams = DEFAULT_PARAMS,
) -> np.ndarray:
    """
    Returns a fixed (5,) float32 vector:
      [ y_norm, velocity_norm, next_dx, next_gap_top, next_gap_bottom ]
    - y_norm        in [0,1]
    - velocity_norm in [-1,1]
    - next_dx: horizontal distance from player.x to the next column / screen_w
    - gap edges normalized by screen_h
    Sentinel with no obstacle ahead: dx=1.0, gap=[0.0, 1.0] (fully open).
    """
    y_norm = _norm_y(float(player.y), params)
    v_norm = _norm_velocity(float(player.velocity), params)

    nxt = _next_obstacle(player, obstacles)
    if nxt is None:
        dx, gap_top, gap_bot = 1.0, 0.0, 1.0
    else:
        dx = _clamp01((nxt.column - player.x) / float(params.screen_w))
        gap_top = _clamp01(nxt.gap_top / float(params.screen_h))
        gap_bot = _clamp01(nxt.gap_bottom / float(params.screen_h))

    return np.asarray([y_norm, v_norm, dx, gap_top, gap_bot], dtype=np.float32)
