"""Rendering of the live-cell set to RGB images and animated GIFs."""

import colorsys
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Iterable, List, Mapping, Optional, Tuple, Union

import numpy as np
from PIL import Image

from .automaton import SparseLife
from .codec import decode
from .metrics import bounding_box

DEAD_COLOR = (30, 30, 30)
LIVE_COLOR = (255, 255, 255)
DEFAULT_BASE_HUE = 200.0

Color = Tuple[int, int, int]


@dataclass(frozen=True)
class Viewport:
    """Window of the unbounded grid; (x, y) is the top-left cell."""
    x: int
    y: int
    width: int
    height: int

    def __post_init__(self):
        if self.width <= 0 or self.height <= 0:
            raise ValueError("Viewport dimensions must be positive")

    @classmethod
    def centered(cls, width: int, height: int) -> "Viewport":
        return cls(-(width // 2), -(height // 2), width, height)

    @classmethod
    def fit(cls, cells: Iterable[int], margin: int = 2) -> "Viewport":
        """Smallest viewport holding every cell, padded by ``margin``."""
        bbox = bounding_box(cells)
        if bbox is None:
            return cls.centered(2 * margin + 1, 2 * margin + 1)
        min_x, min_y, max_x, max_y = bbox
        return cls(
            min_x - margin,
            min_y - margin,
            max_x - min_x + 1 + 2 * margin,
            max_y - min_y + 1 + 2 * margin,
        )

    def contains(self, x: int, y: int) -> bool:
        return self.x <= x < self.x + self.width and self.y <= y < self.y + self.height


@lru_cache(maxsize=1024)
def age_color(age: int, base_hue: float = DEFAULT_BASE_HUE) -> Color:
    """Color for a cell of the given age: hue rotates, lightness rises until age 10."""
    hue = (base_hue + age * 15.0) % 360.0
    lightness = 0.4 + min(age, 10) * 0.05
    r, g, b = colorsys.hls_to_rgb(hue / 360.0, lightness, 0.7)
    return int(round(r * 255)), int(round(g * 255)), int(round(b * 255))


def render_cells(
    cells: Iterable[int],
    ages: Mapping[int, int],
    viewport: Viewport,
    cell_size: int = 4,
    colored: bool = True,
    base_hue: float = DEFAULT_BASE_HUE,
) -> np.ndarray:
    """Render the cells inside ``viewport`` as an RGB image array."""
    img = np.empty((viewport.height * cell_size, viewport.width * cell_size, 3), dtype=np.uint8)
    img[:] = DEAD_COLOR

    for key in cells:
        x, y = decode(key)
        if not viewport.contains(x, y):
            continue
        col, row = x - viewport.x, y - viewport.y
        color = age_color(ages.get(key, 0), base_hue) if colored else LIVE_COLOR
        img[row * cell_size:(row + 1) * cell_size, col * cell_size:(col + 1) * cell_size] = color

    return img


def render_life(life: SparseLife, viewport: Optional[Viewport] = None, **kwargs) -> np.ndarray:
    """Render the current generation of ``life``."""
    if viewport is None:
        viewport = Viewport.fit(life.cells)
    return render_cells(life.cells, life.ages, viewport, **kwargs)


def save_image(frame: np.ndarray, filepath: Union[str, Path]):
    """Save a rendered frame as PNG."""
    Image.fromarray(frame).save(filepath)


def save_animation(
    frames: List[np.ndarray],
    filepath: Union[str, Path],
    duration: int = 100,
    loop: int = 0,
):
    """Save rendered frames as an animated GIF."""
    images = [Image.fromarray(frame) for frame in frames]
    if images:
        images[0].save(
            filepath,
            save_all=True,
            append_images=images[1:],
            duration=duration,
            loop=loop,
        )


def record_frames(
    life: SparseLife,
    steps: int,
    viewport: Optional[Viewport] = None,
    margin: int = 8,
    **kwargs,
) -> List[np.ndarray]:
    """
    Run ``life`` for ``steps`` generations and render every generation.

    Without an explicit viewport, the window is fitted to the starting cells
    plus ``margin`` so moving patterns stay in frame for a while.

    Returns:
        Frames for the starting state and each following generation.
    """
    if viewport is None:
        viewport = Viewport.fit(life.cells, margin=margin)

    frames = [render_cells(life.cells, life.ages, viewport, **kwargs)]
    for _ in range(steps):
        life.step()
        frames.append(render_cells(life.cells, life.ages, viewport, **kwargs))
    return frames
