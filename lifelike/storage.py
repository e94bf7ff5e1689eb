"""Persistence of the current generation as JSON snapshots."""

import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Dict, Union

from .automaton import Rule, SparseLife

logger = logging.getLogger(__name__)

SNAPSHOT_VERSION = 1


class SnapshotError(ValueError):
    """Raised when a snapshot file cannot be understood."""


def to_dict(life: SparseLife) -> Dict:
    """Serialize the current generation. Cells are stored as packed keys."""
    cells = sorted(life.cells)
    return {
        "version": SNAPSHOT_VERSION,
        "saved_at": datetime.now().isoformat(),
        "rule": life.rule.to_string(),
        "generation": life.generation,
        "total_births": life.total_births,
        "total_deaths": life.total_deaths,
        "cells": cells,
        "ages": {str(key): age for key, age in life.ages.items()},
    }


def from_dict(data: Dict) -> SparseLife:
    """Build a new automaton from a dict produced by to_dict()."""
    version = data.get("version")
    if version != SNAPSHOT_VERSION:
        raise SnapshotError(
            f"Unsupported snapshot version {version!r}, expected {SNAPSHOT_VERSION}"
        )

    ages = data.get("ages", {})
    if not isinstance(ages, dict):
        raise SnapshotError(f"Malformed snapshot: ages must be an object, got {type(ages).__name__}")

    try:
        life = SparseLife(Rule.from_string(data["rule"]))
        life.restore(
            cells=(int(key) for key in data["cells"]),
            ages={int(key): int(age) for key, age in ages.items()},
            generation=int(data.get("generation", 0)),
            total_births=int(data.get("total_births", 0)),
            total_deaths=int(data.get("total_deaths", 0)),
        )
    except (KeyError, TypeError, ValueError) as e:
        raise SnapshotError(f"Malformed snapshot: {e}") from e

    return life


def save_snapshot(life: SparseLife, filepath: Union[str, Path]) -> Path:
    """Write the current generation of ``life`` to ``filepath``."""
    path = Path(filepath)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w") as f:
        json.dump(to_dict(life), f, indent=2)
    logger.debug("Saved %d cells to %s", life.population, path)
    return path


def load_snapshot(filepath: Union[str, Path]) -> SparseLife:
    """Load a snapshot written by save_snapshot()."""
    path = Path(filepath)
    with open(path, "r") as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            raise SnapshotError(f"Invalid snapshot JSON in {path}: {e}") from e

    if not isinstance(data, dict):
        raise SnapshotError(f"Snapshot in {path} is not a JSON object")

    life = from_dict(data)
    logger.debug("Loaded %d cells from %s", life.population, path)
    return life
