"""Built-in pattern library and helpers that stamp patterns onto a grid."""

import logging
from typing import TYPE_CHECKING, Dict, List

import numpy as np
from PIL import Image, ImageDraw, ImageFont

from .rle import Pattern, center_pattern, parse_rle

if TYPE_CHECKING:
    from .automaton import SparseLife

logger = logging.getLogger(__name__)


def _pulsar() -> Pattern:
    arms = (2, 3, 4, 8, 9, 10)
    bars = (0, 5, 7, 12)
    cells = [(x, y) for x in arms for y in bars]
    cells += [(x, y) for x in bars for y in arms]
    return cells


GOSPER_GLIDER_GUN_RLE = """#N Gosper glider gun
x = 36, y = 9, rule = B3/S23
24bo$22bobo$12b2o6b2o12b2o$11bo3bo4b2o12b2o$2o8bo5bo3b2o$2o8bo3bob2o4bobo$
10bo5bo7bo$11bo3bo$12b2o!
"""

PATTERNS: Dict[str, Pattern] = {
    # Still lifes
    "block": [(0, 0), (0, 1), (1, 0), (1, 1)],
    "beehive": [(1, 0), (2, 0), (0, 1), (3, 1), (1, 2), (2, 2)],
    "loaf": [(1, 0), (2, 0), (0, 1), (3, 1), (1, 2), (3, 2), (2, 3)],
    "boat": [(0, 0), (1, 0), (0, 1), (2, 1), (1, 2)],
    "tub": [(1, 0), (0, 1), (2, 1), (1, 2)],
    # Oscillators
    "blinker": [(-1, 0), (0, 0), (1, 0)],
    "toad": [(-1, 0), (0, 0), (1, 0), (0, 1), (1, 1), (2, 1)],
    "beacon": [(-1, -1), (0, -1), (-1, 0), (0, 0), (1, 1), (2, 1), (1, 2), (2, 2)],
    "pulsar": _pulsar(),
    "pentadecathlon": [(x, 0) for x in range(-5, 5)],
    # Spaceships
    "glider": [(1, 0), (2, 1), (0, 2), (1, 2), (2, 2)],
    "lwss": [(1, 0), (4, 0), (0, 1), (0, 2), (4, 2), (0, 3), (1, 3), (2, 3), (3, 3)],
    "mwss": [
        (3, 0), (1, 1), (5, 1), (0, 2), (0, 3), (5, 3),
        (0, 4), (1, 4), (2, 4), (3, 4), (4, 4),
    ],
    "hwss": [
        (3, 0), (4, 0), (1, 1), (6, 1), (0, 2), (0, 3), (6, 3),
        (0, 4), (1, 4), (2, 4), (3, 4), (4, 4), (5, 4),
    ],
    # Methuselahs
    "r_pentomino": [(1, 0), (2, 0), (0, 1), (1, 1), (1, 2)],
    "diehard": [(6, 0), (0, 1), (1, 1), (1, 2), (5, 2), (6, 2), (7, 2)],
    "acorn": [(1, 0), (3, 1), (0, 2), (1, 2), (4, 2), (5, 2), (6, 2)],
    # Guns
    "gosper_glider_gun": parse_rle(GOSPER_GLIDER_GUN_RLE),
}


def get_pattern(name: str) -> Pattern:
    """Look up a library pattern by name (case-insensitive), centered on the origin."""
    key = name.strip().lower().replace(" ", "_").replace("-", "_")
    if key not in PATTERNS:
        raise KeyError(f"Unknown pattern: {name!r}")
    return center_pattern(PATTERNS[key])


def list_patterns() -> List[str]:
    return sorted(PATTERNS)


def insert_pattern(life: "SparseLife", pattern: Pattern, ox: int = 0, oy: int = 0):
    """Stamp ``pattern`` onto ``life`` with its origin at (ox, oy)."""
    life.insert_pattern_at(pattern, ox, oy)


def load_pattern(life: "SparseLife", pattern: Pattern):
    """Replace the grid of ``life`` with ``pattern`` placed at the origin."""
    life.clear()
    life.insert_pattern_at(pattern, 0, 0)
    logger.debug("Loaded pattern with %d cells", len(pattern))


def text_to_pattern(text: str, threshold: int = 128) -> Pattern:
    """Rasterize ``text`` with Pillow's default font and return its lit pixels."""
    if not text:
        return []

    font = ImageFont.load_default()
    left, top, right, bottom = font.getbbox(text)
    width, height = max(right, 1), max(bottom, 1)

    img = Image.new("L", (width, height), 0)
    ImageDraw.Draw(img).text((0, 0), text, fill=255, font=font)

    pixels = np.asarray(img)
    ys, xs = np.nonzero(pixels > threshold)
    return center_pattern([(int(x), int(y)) for x, y in zip(xs, ys)])
