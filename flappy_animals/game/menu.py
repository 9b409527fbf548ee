# flappy_animals/game/menu.py
"""Main menu panels and the settings they edit."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional

from .assets import BackgroundStyle, PlayerStyle
from .config import (
    COLOR_WHITE,
    COLOR_YELLOW,
    COLOR_BLACK,
    OBSTACLE_DISTANCE_DEFAULT,
    OBSTACLE_DISTANCE_MAX,
    OBSTACLE_DISTANCE_MIN,
    OBSTACLE_DISTANCE_STEP,
)
from .input import Key
from .render import CellGrid

logger = logging.getLogger(__name__)


class MenuPanel(Enum):
    MAIN = "main"
    BACKGROUND = "background"
    PLAYER = "player"
    OBSTACLE = "obstacle"


class MenuAction(Enum):
    """What the controller should do after a menu key."""

    NONE = "none"
    START = "start"
    QUIT = "quit"


MAIN_OPTIONS = ["Start Game", "Background Style", "Player Style", "Obstacle Distance", "Quit Game"]
BACKGROUND_OPTIONS = [
    (BackgroundStyle.STARS, "Stars"),
    (BackgroundStyle.CLOUDS, "Clouds"),
    (BackgroundStyle.MOUNTAINS, "Mountains"),
]
PLAYER_OPTIONS = [
    (PlayerStyle.DRAGON, "Dragon"),
    (PlayerStyle.BIRD, "Bird"),
    (PlayerStyle.DUCK, "Duck"),
]

OPTION_COUNT: Dict[MenuPanel, int] = {
    MenuPanel.MAIN: len(MAIN_OPTIONS),
    MenuPanel.BACKGROUND: len(BACKGROUND_OPTIONS) + 1,  # + Back
    MenuPanel.PLAYER: len(PLAYER_OPTIONS) + 1,
    MenuPanel.OBSTACLE: 2,  # spacing row, Back
}

# Main-menu entry that opens each sub-panel; Back restores the selection to it.
SUBPANEL_BY_MAIN_INDEX: Dict[int, MenuPanel] = {
    1: MenuPanel.BACKGROUND,
    2: MenuPanel.PLAYER,
    3: MenuPanel.OBSTACLE,
}
MAIN_INDEX_BY_SUBPANEL: Dict[MenuPanel, int] = {p: i for i, p in SUBPANEL_BY_MAIN_INDEX.items()}

MENU_TOP_ROW = 15
MENU_ROW_STEP = 2
PANEL_HEADING_ROW = 12


@dataclass
class Settings:
    """Player-chosen options. Live for the whole process, never saved."""

    background_style: BackgroundStyle = BackgroundStyle.MOUNTAINS
    player_style: PlayerStyle = PlayerStyle.DUCK
    obstacle_distance: int = OBSTACLE_DISTANCE_DEFAULT

    def adjust_obstacle_distance(self, delta: int) -> None:
        self.obstacle_distance = max(
            OBSTACLE_DISTANCE_MIN, min(OBSTACLE_DISTANCE_MAX, self.obstacle_distance + delta)
        )


@dataclass
class MenuState:
    panel: MenuPanel = MenuPanel.MAIN
    selected: int = 0

    @property
    def max_index(self) -> int:
        return OPTION_COUNT[self.panel] - 1

    def go_main(self, selected: int = 0) -> None:
        self.panel = MenuPanel.MAIN
        self.selected = selected

    def handle_key(self, key: Optional[Key], settings: Settings) -> MenuAction:
        """Apply one key to the menu; returns the action the controller must take."""
        if key is None:
            return MenuAction.NONE

        if key is Key.UP:
            if self.selected > 0:
                self.selected -= 1
        elif key is Key.DOWN:
            if self.selected < self.max_index:
                self.selected += 1
        elif key is Key.RETURN:
            return self._activate(settings)
        elif key in (Key.LEFT, Key.RIGHT):
            if self.panel is MenuPanel.OBSTACLE and self.selected == 0:
                step = OBSTACLE_DISTANCE_STEP if key is Key.RIGHT else -OBSTACLE_DISTANCE_STEP
                settings.adjust_obstacle_distance(step)
                logger.debug("Obstacle distance -> %d", settings.obstacle_distance)
        elif key is Key.ESCAPE:
            self.go_main(0)
        return MenuAction.NONE

    def _activate(self, settings: Settings) -> MenuAction:
        if self.panel is MenuPanel.MAIN:
            if self.selected == 0:
                return MenuAction.START
            if self.selected in SUBPANEL_BY_MAIN_INDEX:
                self.panel = SUBPANEL_BY_MAIN_INDEX[self.selected]
                self.selected = 0
                return MenuAction.NONE
            return MenuAction.QUIT

        if self.selected == self.max_index:
            # last row of every sub-panel is Back
            self.go_main(MAIN_INDEX_BY_SUBPANEL[self.panel])
        elif self.panel is MenuPanel.BACKGROUND:
            settings.background_style = BACKGROUND_OPTIONS[self.selected][0]
            logger.debug("Background style -> %s", settings.background_style.value)
        elif self.panel is MenuPanel.PLAYER:
            settings.player_style = PLAYER_OPTIONS[self.selected][0]
            logger.debug("Player style -> %s", settings.player_style.value)
        return MenuAction.NONE

    # -------------------- Rendering --------------------

    def draw(self, grid: CellGrid, settings: Settings) -> None:
        if self.panel is MenuPanel.MAIN:
            self._draw_options(grid, MAIN_OPTIONS)
        elif self.panel is MenuPanel.BACKGROUND:
            grid.print_centered(PANEL_HEADING_ROW, "Select Background Style", COLOR_WHITE, COLOR_BLACK)
            self._draw_options(grid, _with_marks(BACKGROUND_OPTIONS, settings.background_style))
        elif self.panel is MenuPanel.PLAYER:
            grid.print_centered(PANEL_HEADING_ROW, "Select Player Style", COLOR_WHITE, COLOR_BLACK)
            self._draw_options(grid, _with_marks(PLAYER_OPTIONS, settings.player_style))
        else:
            grid.print_centered(PANEL_HEADING_ROW, "Obstacle Distance", COLOR_WHITE, COLOR_BLACK)
            rows = [
                (14, f"Current: {settings.obstacle_distance} spaces"),
                (16, "(Use Left/Right to adjust)"),
            ]
            for y, text in rows:
                color = COLOR_YELLOW if self.selected == 0 else COLOR_WHITE
                grid.print_centered(y, text, color, COLOR_BLACK)
            back_color = COLOR_YELLOW if self.selected == 1 else COLOR_WHITE
            grid.print_centered(18, "Back", back_color, COLOR_BLACK)

    def _draw_options(self, grid: CellGrid, options: List[str]) -> None:
        for i, text in enumerate(options):
            color = COLOR_YELLOW if i == self.selected else COLOR_WHITE
            grid.print_centered(MENU_TOP_ROW + i * MENU_ROW_STEP, text, color, None)


def _with_marks(options, active) -> List[str]:
    lines = [("(*) " if style is active else "( ) ") + label for style, label in options]
    lines.append("( ) Back")
    return lines
