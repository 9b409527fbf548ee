# flappy_animals/game/config.py
from __future__ import annotations
from dataclasses import dataclass

# --- Display (cells) ---
SCREEN_W = 120
SCREEN_H = 80
TILE_PX = 10                # each cell is a 10x10 px tile
FPS = 60
WINDOW_TITLE = "Flappy Animals"

# --- Player ---
PLAYER_START_X = 2
PLAYER_START_Y = 25
PLAYER_W = 14
PLAYER_H = 14
FRAME_DURATION_MS = 75.0    # one gravity step per elapsed frame duration
GRAVITY_STEP = 0.2
MAX_FALL_VELOCITY = 2.0
FLAP_VELOCITY = -2.5

# --- Obstacles ---
OBSTACLE_SPEED = 0.5        # cells per tick
GAP_Y_MIN = 30
GAP_Y_MAX = 60              # exclusive
OBSTACLE_BASE_SIZE = 40
OBSTACLE_MIN_SIZE = 20
OBSTACLE_DISTANCE_DEFAULT = 50
OBSTACLE_DISTANCE_MIN = 40
OBSTACLE_DISTANCE_MAX = 60
OBSTACLE_DISTANCE_STEP = 5

# --- Background ---
BACKGROUND_SPEED = 0.001    # cells per elapsed ms

# --- Persistence ---
HIGHSCORE_FILE = "highscore.txt"

# --- Colors (RGB) ---
COLOR_BLACK = (0, 0, 0)
COLOR_WHITE = (255, 255, 255)
COLOR_YELLOW = (255, 255, 0)
COLOR_RED = (255, 0, 0)


@dataclass(frozen=True)
class GameParams:
    """Every tunable the simulation reads. Built once, shared by reference."""

    screen_w: int = SCREEN_W
    screen_h: int = SCREEN_H
    player_start_x: int = PLAYER_START_X
    player_start_y: int = PLAYER_START_Y
    player_w: int = PLAYER_W
    player_h: int = PLAYER_H
    frame_duration_ms: float = FRAME_DURATION_MS
    gravity_step: float = GRAVITY_STEP
    max_fall_velocity: float = MAX_FALL_VELOCITY
    flap_velocity: float = FLAP_VELOCITY
    obstacle_speed: float = OBSTACLE_SPEED
    gap_y_min: int = GAP_Y_MIN
    gap_y_max: int = GAP_Y_MAX
    obstacle_base_size: int = OBSTACLE_BASE_SIZE
    obstacle_min_size: int = OBSTACLE_MIN_SIZE
    background_speed: float = BACKGROUND_SPEED


DEFAULT_PARAMS = GameParams()
