# flappy_animals/tests/test_menu.py
"""
Menu navigation and settings edits.

Usage (from repo root):
  python -m flappy_animals.tests.test_menu
"""

from __future__ import annotations
import random
import sys

from flappy_animals.game.assets import BackgroundStyle, PlayerStyle
from flappy_animals.game.input import Key
from flappy_animals.game.menu import MenuAction, MenuPanel, MenuState, OPTION_COUNT, Settings
from flappy_animals.game.render import CellGrid


def press(menu: MenuState, settings: Settings, *keys: Key) -> MenuAction:
    action = MenuAction.NONE
    for k in keys:
        action = menu.handle_key(k, settings)
    return action


def test_selection_clamped():
    menu, settings = MenuState(), Settings()
    press(menu, settings, Key.UP)
    assert menu.selected == 0
    press(menu, settings, *([Key.DOWN] * 10))
    assert menu.selected == 4


def test_selection_stays_in_bounds_under_random_keys():
    rng = random.Random(0)
    keys = [Key.UP, Key.DOWN, Key.RETURN, Key.ESCAPE, Key.LEFT, Key.RIGHT]
    menu, settings = MenuState(), Settings()
    for _ in range(5000):
        action = menu.handle_key(rng.choice(keys), settings)
        assert 0 <= menu.selected < OPTION_COUNT[menu.panel]
        assert 40 <= settings.obstacle_distance <= 60
        if action is not MenuAction.NONE:
            menu.go_main(0)


def test_start_and_quit_actions():
    menu, settings = MenuState(), Settings()
    assert press(menu, settings, Key.RETURN) is MenuAction.START
    menu = MenuState()
    assert press(menu, settings, *([Key.DOWN] * 4), Key.RETURN) is MenuAction.QUIT


def test_background_panel():
    menu, settings = MenuState(), Settings()
    press(menu, settings, Key.DOWN, Key.RETURN)
    assert (menu.panel, menu.selected) == (MenuPanel.BACKGROUND, 0)
    press(menu, settings, Key.DOWN, Key.RETURN)
    assert settings.background_style is BackgroundStyle.CLOUDS
    assert menu.panel is MenuPanel.BACKGROUND, "choosing a skin must not leave the panel"
    press(menu, settings, Key.DOWN, Key.DOWN, Key.RETURN)
    assert (menu.panel, menu.selected) == (MenuPanel.MAIN, 1)


def test_player_panel():
    menu, settings = MenuState(), Settings()
    press(menu, settings, Key.DOWN, Key.DOWN, Key.RETURN)
    assert menu.panel is MenuPanel.PLAYER
    press(menu, settings, Key.RETURN)
    assert settings.player_style is PlayerStyle.DRAGON
    press(menu, settings, Key.DOWN, Key.RETURN)
    assert settings.player_style is PlayerStyle.BIRD
    press(menu, settings, Key.DOWN, Key.DOWN, Key.RETURN)
    assert (menu.panel, menu.selected) == (MenuPanel.MAIN, 2)


def test_obstacle_panel():
    menu, settings = MenuState(), Settings()
    assert settings.obstacle_distance == 50
    press(menu, settings, Key.DOWN, Key.DOWN, Key.DOWN, Key.RETURN)
    assert (menu.panel, menu.selected) == (MenuPanel.OBSTACLE, 0)

    press(menu, settings, Key.RIGHT)
    assert settings.obstacle_distance == 55
    press(menu, settings, Key.RIGHT, Key.RIGHT)
    assert settings.obstacle_distance == 60
    press(menu, settings, *([Key.LEFT] * 6))
    assert settings.obstacle_distance == 40

    press(menu, settings, Key.RETURN)           # row 0: nothing to activate
    assert menu.panel is MenuPanel.OBSTACLE

    press(menu, settings, Key.DOWN, Key.RIGHT)  # row 1 ignores Left/Right
    assert settings.obstacle_distance == 40
    press(menu, settings, Key.RETURN)
    assert (menu.panel, menu.selected) == (MenuPanel.MAIN, 3)


def test_left_right_ignored_outside_obstacle_panel():
    menu, settings = MenuState(), Settings()
    press(menu, settings, Key.LEFT, Key.RIGHT, Key.RIGHT)
    assert settings.obstacle_distance == 50
    assert (menu.panel, menu.selected) == (MenuPanel.MAIN, 0)


def test_escape_returns_to_main_top():
    menu, settings = MenuState(), Settings()
    press(menu, settings, Key.DOWN, Key.DOWN, Key.RETURN, Key.DOWN, Key.ESCAPE)
    assert (menu.panel, menu.selected) == (MenuPanel.MAIN, 0)


def test_draw_main_and_marks():
    grid = CellGrid()
    menu, settings = MenuState(), Settings()
    grid.clear()
    menu.draw(grid, settings)
    assert grid.text_at(15).strip() == "Start Game"
    assert tuple(grid.fg[15, 60]) == (255, 255, 0)    # selected row in yellow
    assert grid.text_at(23).strip() == "Quit Game"

    press(menu, settings, Key.DOWN, Key.RETURN)
    grid.clear()
    menu.draw(grid, settings)
    assert grid.text_at(12).strip() == "Select Background Style"
    assert grid.text_at(19).strip() == "(*) Mountains"
    assert grid.text_at(15).strip() == "( ) Stars"


def main():
    tests = [
        test_selection_clamped,
        test_selection_stays_in_bounds_under_random_keys,
        test_start_and_quit_actions,
        test_background_panel,
        test_player_panel,
        test_obstacle_panel,
        test_left_right_ignored_outside_obstacle_panel,
        test_escape_returns_to_main_top,
        test_draw_main_and_marks,
    ]
    try:
        for t in tests:
            t()
            print(f"✓ {t.__name__}")
    except AssertionError as e:
        print(f"✗ Test failed: {e}", file=sys.stderr)
        sys.exit(1)
    print("🎉 Menu tests passed")


if __name__ == "__main__":
    main()
