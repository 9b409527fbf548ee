# flappy_animals/env/flappy_env.py
from __future__ import annotations
from typing import Optional, Dict, Any
import numpy as np
import gymnasium as gym
import pygame

from flappy_animals.game.assets import AssetStore
from flappy_animals.game.config import GameParams, DEFAULT_PARAMS, TILE_PX, WINDOW_TITLE
from flappy_animals.game.game import FlappyGame, GameMode
from flappy_animals.game.input import Key
from flappy_animals.game.menu import Settings
from flappy_animals.game.render import GridPresenter
from flappy_animals.env.observations import build_observation, OBS_SIZE


class FlappyEnv(gym.Env):
    """
    Flappy Animals Gymnasium environment (vector observations).
    - Drives the real game controller in Playing mode, 60 ticks per simulated second.
    - Agent acts every `frame_skip` ticks (default 4); the flap is applied on the first tick.
    - Observation: shape (5,), float32 (see build_observation).
    - Never touches the high-score file.
    """
    metadata = {"render_modes": ["human", "rgb_array"], "render_fps": 60}

    def __init__(self,
                 render_mode: Optional[str] = None,
                 frame_skip: int = 4,
                 time_limit_seconds: Optional[float] = 60.0,
                 params: GameParams = DEFAULT_PARAMS,
                 settings: Optional[Settings] = None,
                 assets: Optional[AssetStore] = None):
        super().__init__()
        assert frame_skip >= 1, "frame_skip must be >= 1"
        assert render_mode is None or render_mode in self.metadata["render_modes"]
        self.render_mode = render_mode
        self.frame_skip = int(frame_skip)
        self.params = params
        self.settings = settings if settings is not None else Settings()
        self.assets = assets if assets is not None else AssetStore.load(screen_w=params.screen_w)

        # Internal sim timing
        self.sim_fps = 60
        self.dt_ms = 1000.0 / self.sim_fps

        self.time_limit_decisions = None
        if time_limit_seconds is not None:
            # decisions per second = sim_fps / frame_skip
            self.time_limit_decisions = int(self.sim_fps * time_limit_seconds / self.frame_skip)

        # Actions: 0 = NOOP, 1 = FLAP
        self.action_space = gym.spaces.Discrete(2)
        # [y_norm, velocity_norm, next_dx, next_gap_top, next_gap_bottom]
        low = np.array([0.0, -1.0, 0.0, 0.0, 0.0], dtype=np.float32)
        high = np.array([1.0, 1.0, 1.0, 1.0, 1.0], dtype=np.float32)
        self.observation_space = gym.spaces.Box(low=low, high=high, shape=(OBS_SIZE,), dtype=np.float32)

        # --- Runtime state ---
        self.game: Optional[FlappyGame] = None
        self.timestep: int = 0
        self.current_seed: Optional[int] = None
        self.death_cause: Optional[str] = None   # "obstacle" | "fell" | None

        # Rendering
        self.screen = None
        self.clock = None
        self.presenter: Optional[GridPresenter] = None

    # -------------------- Core API --------------------

    def reset(self, *, seed: Optional[int] = None, options: Optional[Dict[str, Any]] = None):
        super().reset(seed=seed)  # initializes self.np_random

        # Explicit seed -> obstacle layout seed; otherwise draw one from np_random
        if seed is not None:
            level_seed = int(seed)
        else:
            level_seed = int(self.np_random.integers(0, 2**31 - 1))

        self.game = FlappyGame(self.assets, self.params, highscore_path=None,
                               seed=level_seed, settings=self.settings)
        self.game.restart()
        self.timestep = 0
        self.death_cause = None
        self.current_seed = level_seed

        obs = self._get_obs()
        info = {"seed": self.current_seed, "score": 0}
        return obs, info

    def step(self, action: int):
        assert self.action_space.contains(action), f"Invalid action {action}"
        assert self.game is not None, "Call reset() before step()"
        game = self.game

        for i in range(self.frame_skip):
            key = Key.SPACE if (action == 1 and i == 0) else None
            game.tick(self.dt_ms, key)
            if game.mode is not GameMode.PLAYING:
                break

        alive = game.mode is GameMode.PLAYING
        if not alive and self.death_cause is None:
            self.death_cause = "fell" if game.player.fell_off() else "obstacle"

        # Reward: +1 if alive after this decision; -1 on death
        reward = 1.0 if alive else -1.0

        self.timestep += 1
        terminated = not alive
        truncated = False
        if (self.time_limit_decisions is not None) and (self.timestep >= self.time_limit_decisions):
            truncated = True

        obs = self._get_obs()
        info = {
            "score": game.score,
            "timestep": self.timestep,
            "seed": self.current_seed,
            "death_cause": self.death_cause,
        }

        if self.render_mode == "human":
            self.render()

        return obs, reward, terminated, truncated, info

    # -------------------- Helpers --------------------

    def _get_obs(self) -> np.ndarray:
        assert self.game is not None
        return build_observation(self.game.player, self.game.obstacles, self.params)

    # -------------------- Rendering --------------------

    def render(self):
        if self.render_mode is None or self.game is None:
            return None

        if self.render_mode == "rgb_array":
            return self.game.grid.to_rgb_array(TILE_PX)

        if self.screen is None:
            pygame.init()
            self.screen = pygame.display.set_mode(
                (self.params.screen_w * TILE_PX, self.params.screen_h * TILE_PX))
            pygame.display.set_caption(f"{WINDOW_TITLE} - Gym Env")
            self.clock = pygame.time.Clock()
            self.presenter = GridPresenter(TILE_PX)

        # Pump the event queue so the OS doesn't think we're hung
        pygame.event.pump()
        self.presenter.present(self.game.grid, self.screen)
        pygame.display.flip()
        if self.clock is not None:
            self.clock.tick(self.metadata.get("render_fps", 60))
        return None

    def close(self):
        if self.screen is not None:
            pygame.display.quit()
            pygame.quit()
            self.screen = None
            self.clock = None
            self.presenter = None
