# flappy_animals/game/highscore.py
"""Best score persistence: one decimal integer in a text file."""

from __future__ import annotations

import logging
import os
import re
import tempfile
from pathlib import Path
from typing import Union

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]

# plain signed decimal in 32-bit range; no underscores or other digit scripts
_SCORE_RE = re.compile(r"[+-]?[0-9]+")
SCORE_MIN, SCORE_MAX = -(2 ** 31), 2 ** 31 - 1


def load_high_score(path: PathLike) -> int:
    """Read the stored high score. Missing or garbled files count as 0."""
    p = Path(path)
    try:
        text = p.read_text(encoding="utf-8")
    except FileNotFoundError:
        return 0
    except (OSError, UnicodeDecodeError) as e:
        logger.warning("Could not read high score from %s: %s", p, e)
        return 0
    text = text.strip()
    if not _SCORE_RE.fullmatch(text) or not SCORE_MIN <= int(text) <= SCORE_MAX:
        logger.warning("Ignoring unparsable high score file %s", p)
        return 0
    return int(text)


def save_high_score(path: PathLike, score: int) -> bool:
    """Replace the stored high score. Failures are logged and reported, never raised."""
    p = Path(path)
    tmp_name = None
    try:
        fd, tmp_name = tempfile.mkstemp(prefix=p.name, suffix=".tmp", dir=p.parent)
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(str(int(score)))
        os.replace(tmp_name, p)
        tmp_name = None
        return True
    except OSError as e:
        logger.warning("Could not save high score to %s: %s", p, e)
        return False
    finally:
        if tmp_name is not None:
            try:
                os.unlink(tmp_name)
            except OSError:
                pass
