# flappy_animals/game/render.py
from __future__ import annotations
from typing import Dict, Optional, Tuple
import numpy as np
import pygame
from .config import SCREEN_W, SCREEN_H, TILE_PX, COLOR_BLACK, COLOR_WHITE

Color = Tuple[int, int, int]


class CellGrid:
    """
    Character-cell frame buffer the game draws into every tick.
    Each cell holds a foreground color, a background color and one glyph;
    a GridPresenter turns it into pixels.
    """
    def __init__(self, width: int = SCREEN_W, height: int = SCREEN_H):
        self.width = width
        self.height = height
        self.fg = np.zeros((height, width, 3), dtype=np.uint8)
        self.bg = np.zeros((height, width, 3), dtype=np.uint8)
        self.glyphs = np.full((height, width), " ", dtype="<U1")

    def clear(self, bg: Color = COLOR_BLACK):
        self.fg[:] = COLOR_WHITE
        self.bg[:] = bg
        self.glyphs[:] = " "

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def set(self, x: int, y: int, fg: Color, bg: Optional[Color], glyph: str):
        """Write one cell. Off-grid writes are dropped; bg=None keeps the cell's background."""
        if not self.in_bounds(x, y):
            return
        self.fg[y, x] = fg
        if bg is not None:
            self.bg[y, x] = bg
        self.glyphs[y, x] = glyph

    def print(self, x: int, y: int, text: str,
              fg: Color = COLOR_WHITE, bg: Optional[Color] = COLOR_BLACK):
        for i, ch in enumerate(text):
            self.set(x + i, y, fg, bg, ch)

    def print_centered(self, y: int, text: str,
                       fg: Color = COLOR_WHITE, bg: Optional[Color] = COLOR_BLACK):
        x = (self.width - len(text)) // 2
        self.print(x, y, text, fg, bg)

    def text_at(self, y: int) -> str:
        return "".join(self.glyphs[y])

    def to_rgb_array(self, tile_px: int = 1) -> np.ndarray:
        """(H*tile, W*tile, 3) uint8 image of the cell backgrounds."""
        img = self.bg
        if tile_px > 1:
            img = np.repeat(np.repeat(img, tile_px, axis=0), tile_px, axis=1)
        return img.copy()


def render_scrolling_background(grid: CellGrid, image: np.ndarray, offset: float):
    """
    Fill every cell's background from a horizontally wrapping image:
    cell (x, y) <- image[y mod h, (x + offset) mod w].
    `image` is an (h, w, 4) RGBA array; alpha is ignored.
    """
    h, w = image.shape[:2]
    off = int(offset) % w
    xs = (np.arange(grid.width) + off) % w
    ys = np.arange(grid.height) % h
    grid.bg[:] = image[ys[:, None], xs[None, :], :3]
    grid.fg[:] = COLOR_BLACK
    grid.glyphs[:] = " "


def blit_sprite(grid: CellGrid, image: np.ndarray, x: int, y: int, width: int, height: int):
    """
    Copy a width x height block of an RGBA sprite to (x, y) as cell backgrounds.
    Source pixels with alpha 0 and destinations off the grid are skipped.
    """
    h = min(height, image.shape[0])
    w = min(width, image.shape[1])
    # clip the destination rectangle to the grid, then map back to source coords
    x0, y0 = max(x, 0), max(y, 0)
    x1, y1 = min(x + w, grid.width), min(y + h, grid.height)
    if x0 >= x1 or y0 >= y1:
        return
    src = image[y0 - y:y1 - y, x0 - x:x1 - x]
    opaque = src[..., 3] != 0
    region_bg = grid.bg[y0:y1, x0:x1]
    region_bg[opaque] = src[..., :3][opaque]
    grid.fg[y0:y1, x0:x1][opaque] = COLOR_BLACK
    grid.glyphs[y0:y1, x0:x1][opaque] = " "


class GridPresenter:
    """Draws a CellGrid onto a pygame surface, one TILE_PX square per cell."""

    def __init__(self, tile_px: int = TILE_PX, font: Optional[pygame.font.Font] = None):
        self.tile_px = tile_px
        if font is None:
            if not pygame.font.get_init():
                pygame.font.init()
            font = pygame.font.SysFont("couriernew,dejavusansmono,monospace", tile_px + 2, bold=True)
        self.font = font
        self._glyph_cache: Dict[Tuple[str, Color], pygame.Surface] = {}

    def _glyph(self, ch: str, color: Color) -> pygame.Surface:
        key = (ch, color)
        surf = self._glyph_cache.get(key)
        if surf is None:
            surf = self.font.render(ch, True, color)
            self._glyph_cache[key] = surf
        return surf

    def present(self, grid: CellGrid, surface: pygame.Surface):
        t = self.tile_px
        # surfarray is (W, H, 3), the grid is (H, W, 3)
        bg_small = pygame.surfarray.make_surface(np.ascontiguousarray(grid.bg.transpose(1, 0, 2)))
        surface.blit(pygame.transform.scale(bg_small, (grid.width * t, grid.height * t)), (0, 0))

        ys, xs = np.nonzero(grid.glyphs != " ")
        for y, x in zip(ys.tolist(), xs.tolist()):
            color = tuple(int(c) for c in grid.fg[y, x])
            g = self._glyph(str(grid.glyphs[y, x]), color)
            surface.blit(g, (x * t + (t - g.get_width()) // 2, y * t + (t - g.get_height()) // 2))
