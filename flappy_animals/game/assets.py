# flappy_animals/game/assets.py
"""
Skins and title art.

Every image is held decoded as an (h, w, 4) uint8 RGBA numpy array. The
built-in skins are pixel-art tables and small procedural painters, so the game
runs without any files on disk; an assets directory laid out as
``player/<skin>.png`` and ``background/<skin>.png`` overrides them.
"""
from __future__ import annotations
import logging
import math
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Callable, Dict, List, Optional, Sequence, Tuple
import numpy as np
import pygame
from .config import SCREEN_W, PLAYER_W, PLAYER_H

logger = logging.getLogger(__name__)

RGB = Tuple[int, int, int]


class AssetError(RuntimeError):
    """An image could not be decoded; the game cannot start without its skins."""


class PlayerStyle(Enum):
    DRAGON = "dragon"
    BIRD = "bird"
    DUCK = "duck"


class BackgroundStyle(Enum):
    STARS = "stars"
    CLOUDS = "clouds"
    MOUNTAINS = "mountains"


# --- Avatar pixel art (14x14, '.' = transparent) ---
_DRAGON_ROWS = (
    "..R.....R.....",
    "..GG...GG.....",
    "...GGGGGG.....",
    "..GGGGGKGG....",
    "..GGGGGGGGGR..",
    "...GGGGGGGRR..",
    "G...GGGG......",
    "GG.GGGGGGG..W.",
    ".GGGGLLLGGGWW.",
    "..GGLLLLLGGW..",
    "...GGLLLGG....",
    "....GGGGG.....",
    "....G...G.....",
    "...GG..GG.....",
)
_DRAGON_PALETTE: Dict[str, RGB] = {
    "G": (60, 170, 70), "L": (200, 230, 150), "K": (20, 20, 20),
    "R": (210, 50, 40), "W": (245, 245, 245),
}

_BIRD_ROWS = (
    "..............",
    ".....BBBBB....",
    "....BBBBBBB...",
    "...BBBBBWKBB..",
    "...BBBBBWWBOO.",
    "..BBBBBBBBBOOO",
    ".BBLLLLBBBB...",
    "BBLLLLLLBBB...",
    "BBBLLLLBBBB...",
    ".BBBBBBBBBW...",
    "..BBBBBBBWW...",
    "...BBBBBBB....",
    "....O...O.....",
    "...OO..OO.....",
)
_BIRD_PALETTE: Dict[str, RGB] = {
    "B": (60, 120, 220), "L": (170, 210, 250), "K": (20, 20, 20),
    "W": (245, 245, 245), "O": (240, 140, 30),
}

_DUCK_ROWS = (
    "..............",
    "......YYYY....",
    ".....YYYYYY...",
    ".....YYYKYYOO.",
    ".....YYYYYYOOO",
    "......YYYYY...",
    "..YY..YYYY....",
    ".YYYYYYYYYYY..",
    "YYYYWWYYYYYYY.",
    "YYYWWWWYYYYYY.",
    ".YYYWWYYYYYYY.",
    "..YYYYYYYYYY..",
    "....YYYYYYY...",
    ".....OO..OO...",
)
_DUCK_PALETTE: Dict[str, RGB] = {
    "Y": (250, 210, 40), "O": (240, 140, 30), "K": (20, 20, 20),
    "W": (255, 240, 170),
}

PLAYER_ART: Dict[PlayerStyle, Tuple[Sequence[str], Dict[str, RGB]]] = {
    PlayerStyle.DRAGON: (_DRAGON_ROWS, _DRAGON_PALETTE),
    PlayerStyle.BIRD: (_BIRD_ROWS, _BIRD_PALETTE),
    PlayerStyle.DUCK: (_DUCK_ROWS, _DUCK_PALETTE),
}

# Background tiles wrap horizontally, so every painter must be seamless in x.
BG_W = 160
BG_H = 80


def decode_pixel_art(rows: Sequence[str], palette: Dict[str, RGB], name: str = "sprite") -> np.ndarray:
    """Turn a table of palette characters into an RGBA array."""
    if not rows:
        raise AssetError(f"{name}: pixel art has no rows")
    width = len(rows[0])
    img = np.zeros((len(rows), width, 4), dtype=np.uint8)
    for y, row in enumerate(rows):
        if len(row) != width:
            raise AssetError(f"{name}: row {y} is {len(row)} wide, expected {width}")
        for x, ch in enumerate(row):
            if ch == ".":
                continue
            if ch not in palette:
                raise AssetError(f"{name}: unknown palette entry {ch!r} at ({x}, {y})")
            img[y, x, :3] = palette[ch]
            img[y, x, 3] = 255
    return img


def _vertical_gradient(top: RGB, bottom: RGB, w: int = BG_W, h: int = BG_H) -> np.ndarray:
    t = np.linspace(0.0, 1.0, h)[:, None]
    top_a = np.asarray(top, dtype=np.float64)
    bot_a = np.asarray(bottom, dtype=np.float64)
    rows = top_a * (1.0 - t) + bot_a * t                 # (h, 3)
    img = np.empty((h, w, 4), dtype=np.uint8)
    img[..., :3] = np.repeat(rows[:, None, :], w, axis=1).round().astype(np.uint8)
    img[..., 3] = 255
    return img


def paint_stars(w: int = BG_W, h: int = BG_H) -> np.ndarray:
    img = _vertical_gradient((5, 8, 30), (25, 30, 70), w, h)
    rng = np.random.default_rng(1977)
    n = (w * h) // 90
    xs = rng.integers(0, w, size=n)
    ys = rng.integers(0, h, size=n)
    bright = rng.integers(150, 256, size=n)
    img[ys, xs, 0] = bright
    img[ys, xs, 1] = bright
    img[ys, xs, 2] = np.minimum(bright + 20, 255)
    return img


def paint_clouds(w: int = BG_W, h: int = BG_H) -> np.ndarray:
    img = _vertical_gradient((90, 160, 235), (200, 230, 255), w, h)
    yy, xx = np.mgrid[0:h, 0:w]
    # (cx, cy, rx, ry)
    puffs = [
        (20, 12, 14, 5), (32, 10, 9, 5),
        (75, 30, 18, 6), (90, 27, 10, 6),
        (130, 16, 16, 5), (148, 50, 12, 4),
        (45, 58, 15, 5), (110, 66, 13, 4),
    ]
    for cx, cy, rx, ry in puffs:
        dx = np.abs(xx - cx)
        dx = np.minimum(dx, w - dx)         # wrap so clouds cross the seam cleanly
        inside = (dx / rx) ** 2 + ((yy - cy) / ry) ** 2 <= 1.0
        img[inside, :3] = (250, 250, 255)
    return img


def paint_mountains(w: int = BG_W, h: int = BG_H) -> np.ndarray:
    img = _vertical_gradient((140, 190, 240), (235, 215, 190), w, h)
    yy, xx = np.mgrid[0:h, 0:w]
    phase = 2.0 * math.pi * xx / w
    far = 44 - 12 * np.sin(2 * phase) - 5 * np.sin(5 * phase + 1.0)
    near = 60 - 9 * np.sin(3 * phase + 0.5) - 4 * np.sin(7 * phase)
    img[yy >= far, :3] = (105, 115, 150)
    img[(yy >= far) & (yy < far + 3) & (far < 38), :3] = (240, 240, 250)
    img[yy >= near, :3] = (65, 105, 70)
    return img


BACKGROUND_PAINTERS: Dict[BackgroundStyle, Callable[[], np.ndarray]] = {
    BackgroundStyle.STARS: paint_stars,
    BackgroundStyle.CLOUDS: paint_clouds,
    BackgroundStyle.MOUNTAINS: paint_mountains,
}


def title_glyphs(lines: Sequence[Tuple[str, int]] = (("FLAPPY", 5), ("ANIMALS", 7)),
                 screen_w: int = SCREEN_W, spacing: int = 2) -> List[Tuple[int, int, str]]:
    """Lay out each title word centred on its row with letters `spacing` cells apart."""
    out: List[Tuple[int, int, str]] = []
    for word, y in lines:
        span = spacing * (len(word) - 1) + 1
        x0 = (screen_w - span) // 2
        out.extend((x0 + i * spacing, y, ch) for i, ch in enumerate(word))
    return out


def load_image_file(path: Path) -> np.ndarray:
    """Decode an image file into an (h, w, 4) RGBA array."""
    try:
        surf = pygame.image.load(str(path))
        raw = pygame.image.tobytes(surf, "RGBA")
    except (pygame.error, OSError) as e:
        raise AssetError(f"Failed to load image {path}: {e}") from e
    w, h = surf.get_size()
    return np.frombuffer(raw, dtype=np.uint8).reshape(h, w, 4).copy()


@dataclass
class AssetStore:
    players: Dict[PlayerStyle, np.ndarray]
    backgrounds: Dict[BackgroundStyle, np.ndarray]
    menu_title: List[Tuple[int, int, str]]

    def player(self, style: PlayerStyle) -> np.ndarray:
        return self.players[style]

    def background(self, style: BackgroundStyle) -> np.ndarray:
        return self.backgrounds[style]

    @classmethod
    def load(cls, assets_dir: Optional[Path] = None, screen_w: int = SCREEN_W,
             sprite_size: Tuple[int, int] = (PLAYER_W, PLAYER_H)) -> "AssetStore":
        """Decode every skin. Raises AssetError if any of them is unusable."""
        players: Dict[PlayerStyle, np.ndarray] = {}
        for style, (rows, palette) in PLAYER_ART.items():
            img = _override(assets_dir, "player", style.value)
            if img is None:
                img = decode_pixel_art(rows, palette, name=f"{style.value} sprite")
            sw, sh = sprite_size
            if img.shape[1] < sw or img.shape[0] < sh:
                raise AssetError(
                    f"{style.value} sprite is {img.shape[1]}x{img.shape[0]}, needs at least {sw}x{sh}"
                )
            players[style] = img

        backgrounds: Dict[BackgroundStyle, np.ndarray] = {}
        for style, painter in BACKGROUND_PAINTERS.items():
            img = _override(assets_dir, "background", style.value)
            if img is None:
                img = painter()
            if img.shape[0] == 0 or img.shape[1] == 0:
                raise AssetError(f"{style.value} background is empty")
            backgrounds[style] = img

        return cls(players=players, backgrounds=backgrounds, menu_title=title_glyphs(screen_w=screen_w))


def _override(assets_dir: Optional[Path], kind: str, name: str) -> Optional[np.ndarray]:
    if assets_dir is None:
        return None
    path = Path(assets_dir) / kind / f"{name}.png"
    if not path.exists():
        return None
    logger.info("Using %s skin %r from %s", kind, name, path)
    return load_image_file(path)
