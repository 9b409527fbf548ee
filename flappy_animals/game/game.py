# flappy_animals/game/game.py
from __future__ import annotations
import sys, argparse, logging
from enum import Enum
from pathlib import Path
from typing import Callable, Dict, Optional
import pygame
from .config import (
    GameParams, DEFAULT_PARAMS, FPS, TILE_PX, WINDOW_TITLE, HIGHSCORE_FILE,
    COLOR_WHITE, COLOR_BLACK, COLOR_YELLOW
)
from .assets import AssetStore, AssetError
from .highscore import load_high_score, save_high_score
from .input import Key, KeyboardInput
from .level import ObstacleField
from .menu import MenuState, MenuAction, Settings
from .player import Player
from .render import CellGrid, GridPresenter, blit_sprite, render_scrolling_background

logger = logging.getLogger(__name__)

MAX_FRAME_MS = 1000.0 / 30.0   # clamp stalls (window drag, breakpoints)


class GameMode(Enum):
    MENU = "menu"
    PLAYING = "playing"
    END = "end"


class FlappyGame:
    """
    Whole-game state plus the per-frame tick. The host calls
    tick(dt_ms, key) once per frame and then presents `grid`.
    """
    def __init__(self,
                 assets: AssetStore,
                 params: GameParams = DEFAULT_PARAMS,
                 highscore_path: Optional[Path | str] = HIGHSCORE_FILE,
                 seed: int | None = None,
                 settings: Optional[Settings] = None):
        self.assets = assets
        self.params = params
        # None disables persistence (headless simulation)
        self.highscore_path = Path(highscore_path) if highscore_path is not None else None
        self.high_score = load_high_score(self.highscore_path) if self.highscore_path else 0

        self.settings = settings if settings is not None else Settings()
        self.menu = MenuState()
        self.grid = CellGrid(params.screen_w, params.screen_h)

        self.player = Player.spawn(params)
        self.field = ObstacleField(seed, params, spacing=self.settings.obstacle_distance)
        self.score = 0
        self.background_offset = 0.0
        self.mode = GameMode.MENU
        self.quitting = False

        self._handlers: Dict[GameMode, Callable[[float, Optional[Key]], None]] = {
            GameMode.MENU: self._menu,
            GameMode.PLAYING: self._playing,
            GameMode.END: self._end,
        }

    # -------------------- Core API --------------------

    def tick(self, dt_ms: float, key: Optional[Key] = None):
        self._handlers[self.mode](dt_ms, key)

    def restart(self):
        """Fresh run with the current settings; enters Playing."""
        self.player = Player.spawn(self.params)
        self.field.reset(spacing=self.settings.obstacle_distance)
        self.score = 0
        self.background_offset = 0.0
        self.mode = GameMode.PLAYING
        logger.info("Game started (seed=%s, spacing=%d, player=%s, background=%s)",
                    self.field.seed, self.field.spacing,
                    self.settings.player_style.value, self.settings.background_style.value)

    @property
    def obstacles(self):
        return self.field.obstacles

    # -------------------- Helpers --------------------

    def _update_background(self, dt_ms: float):
        self.background_offset += self.params.background_speed * dt_ms

    def _render_background(self):
        image = self.assets.background(self.settings.background_style)
        render_scrolling_background(self.grid, image, self.background_offset)

    def _render_player(self):
        image = self.assets.player(self.settings.player_style)
        p = self.player
        blit_sprite(self.grid, image, p.x, p.y, p.width, p.height)

    def _game_over(self, cause: str):
        if self.mode is GameMode.PLAYING:
            logger.info("Game over (%s) with score %d", cause, self.score)
        self.mode = GameMode.END

    # -------------------- Mode handlers --------------------

    def _menu(self, dt_ms: float, key: Optional[Key]):
        self._render_background()
        self._update_background(dt_ms)
        for x, y, ch in self.assets.menu_title:
            self.grid.set(x, y, COLOR_YELLOW, None, ch)
        self.menu.draw(self.grid, self.settings)

        action = self.menu.handle_key(key, self.settings)
        if action is MenuAction.START:
            self.restart()
        elif action is MenuAction.QUIT:
            self.quitting = True

    def _playing(self, dt_ms: float, key: Optional[Key]):
        self._update_background(dt_ms)
        self._render_background()

        self.player.update(dt_ms)
        if key is Key.SPACE:
            self.player.flap()

        self._render_player()
        self.grid.print(0, 0, "Press Space to flap")
        self.grid.print(0, 1, f"Score: {self.score}")

        gained, hit = self.field.update(self.player, self.score, self.grid)
        self.score += gained
        if hit:
            self._game_over("obstacle")

        if self.player.fell_off():
            self._game_over("fell")

    def _end(self, dt_ms: float, key: Optional[Key]):
        if self.score > self.high_score:
            self.high_score = self.score
            logger.info("New high score: %d", self.high_score)
            if self.highscore_path is not None:
                save_high_score(self.highscore_path, self.high_score)

        self._update_background(dt_ms)
        self._render_background()

        lines = [
            "You are dead!",
            f"Final Score: {self.score}",
            f"High Score: {self.high_score}",
            "(P) Play Again",
            "(M) Main Menu",
            "(Q) Quit Game",
        ]
        for i, text in enumerate(lines):
            self.grid.print_centered(5 + i, text, COLOR_WHITE, COLOR_BLACK)

        if key is Key.P:
            self.restart()
        elif key is Key.M:
            self.mode = GameMode.MENU
        elif key is Key.Q:
            self.quitting = True


def parse_args(argv=None):
    p = argparse.ArgumentParser(description="Flappy Animals")
    p.add_argument("--seed", type=int, default=None,
                   help="Obstacle seed. Omit for a random layout each launch.")
    p.add_argument("--highscore-file", type=Path, default=Path(HIGHSCORE_FILE),
                   help="Where the best score is kept (default: ./highscore.txt).")
    p.add_argument("--assets-dir", type=Path, default=None,
                   help="Folder with player/<skin>.png and background/<skin>.png overrides.")
    p.add_argument("--log-level", default="WARNING",
                   choices=["DEBUG", "INFO", "WARNING", "ERROR"],
                   help="Logging verbosity.")
    return p.parse_args(argv)


def run(argv=None):
    args = parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level),
                        format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    try:
        assets = AssetStore.load(args.assets_dir)
    except AssetError as e:
        logger.critical("Cannot start without game art: %s", e)
        sys.exit(f"Flappy Animals: {e}")

    params = DEFAULT_PARAMS
    game = FlappyGame(assets, params, highscore_path=args.highscore_file, seed=args.seed)

    pygame.init()
    pygame.display.set_caption(WINDOW_TITLE)
    screen = pygame.display.set_mode((params.screen_w * TILE_PX, params.screen_h * TILE_PX))
    clock = pygame.time.Clock()
    presenter = GridPresenter(TILE_PX)
    keyboard = KeyboardInput()

    try:
        while not game.quitting:
            dt_ms = min(float(clock.tick(FPS)), MAX_FRAME_MS)

            keyboard.feed(pygame.event.get())
            if keyboard.quit_requested:
                break

            game.tick(dt_ms, keyboard.poll())
            presenter.present(game.grid, screen)
            pygame.display.flip()
    finally:
        pygame.quit()


if __name__ == "__main__":
    run()
