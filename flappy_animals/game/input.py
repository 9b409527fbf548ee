# flappy_animals/game/input.py
"""Keyboard handling: host key codes in, at most one game Key out per tick."""

from __future__ import annotations

from collections import deque
from enum import Enum
from typing import Deque, Iterable, Optional

import pygame


class Key(Enum):
    SPACE = "space"
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"
    RETURN = "return"
    ESCAPE = "escape"
    P = "p"
    M = "m"
    Q = "q"


KEYMAP = {
    pygame.K_SPACE: Key.SPACE,
    pygame.K_UP: Key.UP,
    pygame.K_DOWN: Key.DOWN,
    pygame.K_LEFT: Key.LEFT,
    pygame.K_RIGHT: Key.RIGHT,
    pygame.K_RETURN: Key.RETURN,
    pygame.K_KP_ENTER: Key.RETURN,
    pygame.K_ESCAPE: Key.ESCAPE,
    pygame.K_p: Key.P,
    pygame.K_m: Key.M,
    pygame.K_q: Key.Q,
}


class KeyboardInput:
    """Buffers pygame key presses and releases them one per tick.

    pygame hands over every event since the last frame at once; the game
    only looks at a single key each tick, so extra presses wait in a FIFO
    instead of being discarded.
    """

    def __init__(self, max_pending: int = 8) -> None:
        self._pending: Deque[Key] = deque(maxlen=max_pending)
        self.quit_requested = False

    def feed(self, events: Iterable[pygame.event.Event]) -> None:
        for event in events:
            if event.type == pygame.QUIT:
                self.quit_requested = True
            elif event.type == pygame.KEYDOWN:
                key = KEYMAP.get(event.key)
                if key is not None:
                    self._pending.append(key)

    def poll(self) -> Optional[Key]:
        """Return the oldest unconsumed key, or None."""
        if self._pending:
            return self._pending.popleft()
        return None

    def reset(self) -> None:
        self._pending.clear()
