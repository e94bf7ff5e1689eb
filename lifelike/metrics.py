"""Population statistics for a running automaton."""

from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Tuple

import numpy as np

from .automaton import SparseLife
from .codec import decode

BoundingBox = Tuple[int, int, int, int]


@dataclass
class GenerationStats:
    """Snapshot of counters and shape of the live set after one generation."""
    generation: int
    population: int
    births: int  # Births in the most recent step
    deaths: int  # Deaths in the most recent step
    total_births: int
    total_deaths: int
    bbox: Optional[BoundingBox]  # (min_x, min_y, max_x, max_y)
    mean_age: float
    max_age: int

    def to_dict(self) -> Dict:
        return {
            "generation": self.generation,
            "population": self.population,
            "births": self.births,
            "deaths": self.deaths,
            "total_births": self.total_births,
            "total_deaths": self.total_deaths,
            "bbox": list(self.bbox) if self.bbox is not None else None,
            "mean_age": self.mean_age,
            "max_age": self.max_age,
        }


def bounding_box(cells: Iterable[int]) -> Optional[BoundingBox]:
    """Bounding box of a set of cell keys, or None when empty."""
    coords = [decode(key) for key in cells]
    if not coords:
        return None
    xs = np.array([x for x, _ in coords])
    ys = np.array([y for _, y in coords])
    return int(xs.min()), int(ys.min()), int(xs.max()), int(ys.max())


def summarize(life: SparseLife, births: int = 0, deaths: int = 0) -> GenerationStats:
    """Collect statistics for the current generation of ``life``."""
    ages = np.fromiter(life.ages.values(), dtype=np.int64, count=len(life.ages))

    return GenerationStats(
        generation=life.generation,
        population=life.population,
        births=births,
        deaths=deaths,
        total_births=life.total_births,
        total_deaths=life.total_deaths,
        bbox=bounding_box(life.cells),
        mean_age=float(ages.mean()) if ages.size else 0.0,
        max_age=int(ages.max()) if ages.size else 0,
    )


def run_with_stats(life: SparseLife, steps: int) -> List[GenerationStats]:
    """Step ``life`` and record statistics after every generation."""
    history = []
    for _ in range(steps):
        result = life.step()
        history.append(summarize(life, len(result.births), len(result.deaths)))
    return history


def population_variation(history: List[GenerationStats]) -> float:
    """Coefficient of variation of the population over a run."""
    if len(history) < 2:
        return 0.0

    populations = np.array([s.population for s in history], dtype=float)
    mean_pop = populations.mean()
    if mean_pop == 0:
        return 0.0

    return float(populations.std() / mean_pop)
