"""Sparse, unbounded 2D Life-like automaton using outer-totalistic rules."""

import logging
import re
from collections import Counter
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, FrozenSet, Iterable, List, Mapping, Optional, Tuple

from .codec import decode, encode
from .rle import Pattern, parse_rle

logger = logging.getLogger(__name__)

# Moore neighborhood offsets
NEIGHBORHOOD: Tuple[Tuple[int, int], ...] = tuple(
    (dx, dy) for dx in (-1, 0, 1) for dy in (-1, 0, 1) if (dx, dy) != (0, 0)
)

_BS_RE = re.compile(r"^B(\d*)/?S(\d*)$")
_SB_LETTERS_RE = re.compile(r"^S(\d*)/?B(\d*)$")
_B_ONLY_RE = re.compile(r"^B(\d*)$")
_S_ONLY_RE = re.compile(r"^S(\d*)$")
_SB_DIGITS_RE = re.compile(r"^(\d*)/(\d*)$")


def _digits(part: str) -> FrozenSet[int]:
    return frozenset(int(c) for c in part)


@dataclass(frozen=True)
class Rule:
    """Outer-totalistic rule: neighbor counts that keep a cell alive or give birth.

    Counts outside 0-8 are accepted but can never match.
    """
    survive: FrozenSet[int] = field(default_factory=frozenset)
    born: FrozenSet[int] = field(default_factory=frozenset)

    def __post_init__(self):
        object.__setattr__(self, "survive", frozenset(int(n) for n in self.survive))
        object.__setattr__(self, "born", frozenset(int(n) for n in self.born))

    @classmethod
    def from_string(cls, rule_str: str) -> "Rule":
        """Parse 'B3/S23', 'B3S23', 'S23/B3', 'B3', 'S23' or the digit form '23/3' (survive/born)."""
        text = re.sub(r"\s+", "", rule_str).upper()

        m = _BS_RE.match(text) or _B_ONLY_RE.match(text)
        if m:
            born = m.group(1)
            survive = m.group(2) if m.re is _BS_RE else ""
            return cls(survive=_digits(survive), born=_digits(born))

        m = _SB_LETTERS_RE.match(text) or _SB_DIGITS_RE.match(text)
        if m:
            return cls(survive=_digits(m.group(1)), born=_digits(m.group(2)))

        m = _S_ONLY_RE.match(text)
        if m:
            return cls(survive=_digits(m.group(1)))

        raise ValueError(f"Unrecognized rule notation: {rule_str!r}")

    @classmethod
    def from_lists(cls, survive: Iterable[int], born: Iterable[int]) -> "Rule":
        return cls(survive=frozenset(survive), born=frozenset(born))

    @classmethod
    def from_csv(cls, survive: str, born: str) -> "Rule":
        """Build a rule from comma-separated fields such as '2,3' and '3'."""
        def parse(value: str) -> FrozenSet[int]:
            return frozenset(int(p) for p in value.split(",") if p.strip())

        return cls(survive=parse(survive), born=parse(born))

    @classmethod
    def from_bits(cls, born_bits: int, survive_bits: int) -> "Rule":
        """Create rule from bit representations (0-511 each, 9 bits for counts 0-8)."""
        born = {i for i in range(9) if born_bits & (1 << i)}
        survive = {i for i in range(9) if survive_bits & (1 << i)}
        return cls(survive=frozenset(survive), born=frozenset(born))

    def to_string(self) -> str:
        """Convert to standard notation like 'B3/S23'."""
        b_str = "".join(str(i) for i in sorted(self.born))
        s_str = "".join(str(i) for i in sorted(self.survive))
        return f"B{b_str}/S{s_str}"

    def to_bits(self) -> Tuple[int, int]:
        """Convert to (born_bits, survive_bits); counts outside 0-8 are dropped."""
        born_bits = sum(1 << i for i in self.born if 0 <= i <= 8)
        survive_bits = sum(1 << i for i in self.survive if 0 <= i <= 8)
        return born_bits, survive_bits

    def __str__(self) -> str:
        return self.to_string()


def count_neighbors(cells: Iterable[int]) -> Counter:
    """Count live Moore neighbors for every key adjacent to a live cell.

    Work is bounded by 8 * len(cells); dead cells with no live neighbor never
    appear in the result.
    """
    counts: Counter = Counter()
    for key in cells:
        x, y = decode(key)
        for dx, dy in NEIGHBORHOOD:
            counts[encode(x + dx, y + dy)] += 1
    return counts


@dataclass(frozen=True)
class StepResult:
    """Outcome of one generation."""
    cells: FrozenSet[int]
    ages: Mapping[int, int]
    births: FrozenSet[int]
    deaths: FrozenSet[int]

    @property
    def newborns(self) -> List[Tuple[int, int]]:
        return sorted(decode(key) for key in self.births)


def evolve(cells: FrozenSet[int], ages: Mapping[int, int], rule: Rule) -> StepResult:
    """Compute the next generation from immutable inputs."""
    counts = count_neighbors(cells)

    # Live cells with zero neighbors still need evaluating when 0 is in survive
    candidates = set(counts)
    candidates.update(cells)

    survive, born = rule.survive, rule.born
    next_cells = frozenset(
        key for key in candidates
        if (counts[key] in survive if key in cells else counts[key] in born)
    )

    next_ages = {
        key: (ages.get(key, 0) if key in cells else 0) + 1
        for key in next_cells
    }

    return StepResult(
        cells=next_cells,
        ages=MappingProxyType(next_ages),
        births=next_cells - cells,
        deaths=cells - next_cells,
    )


class SparseLife:
    """Life-like automaton on an unbounded grid, stored as a set of live cell keys.

    Every mutation replaces the cell set and age map wholesale, so references
    taken from ``cells`` or ``ages`` stay valid snapshots.
    """

    def __init__(self, rule: Optional[Rule] = None):
        self._rule = rule or GAME_OF_LIFE
        self._cells: FrozenSet[int] = frozenset()
        self._ages: Dict[int, int] = {}
        self._generation = 0
        self._total_births = 0
        self._total_deaths = 0
        self._newborns: List[Tuple[int, int]] = []

    # Observers

    @property
    def cells(self) -> FrozenSet[int]:
        return self._cells

    @property
    def ages(self) -> Mapping[int, int]:
        return MappingProxyType(self._ages)

    @property
    def rule(self) -> Rule:
        return self._rule

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def total_births(self) -> int:
        return self._total_births

    @property
    def total_deaths(self) -> int:
        return self._total_deaths

    @property
    def newborns(self) -> List[Tuple[int, int]]:
        """Cells born in the most recent step."""
        return list(self._newborns)

    @property
    def population(self) -> int:
        return len(self._cells)

    def is_alive(self, x: int, y: int) -> bool:
        return encode(x, y) in self._cells

    def age_at(self, x: int, y: int) -> Optional[int]:
        return self._ages.get(encode(x, y))

    def coords(self) -> List[Tuple[int, int]]:
        """Decoded live cells, sorted."""
        return sorted(decode(key) for key in self._cells)

    # Mutations

    def set_rules(self, survive: Iterable[int], born: Iterable[int]):
        """Replace the rule set; takes effect on the next step."""
        self._rule = Rule.from_lists(survive, born)

    def set_rule(self, rule: Rule):
        self._rule = rule

    def toggle_cell(self, x: int, y: int):
        """Flip one cell. A cell switched on starts at age 1."""
        key = encode(x, y)
        cells = set(self._cells)
        ages = dict(self._ages)
        if key in cells:
            cells.discard(key)
            ages.pop(key, None)
        else:
            cells.add(key)
            ages[key] = 1
        self._cells = frozenset(cells)
        self._ages = ages

    def insert_pattern_at(self, pattern: Pattern, ox: int = 0, oy: int = 0):
        """Add every offset of ``pattern`` relative to (ox, oy).

        Cells already alive are left alone; ages for new cells are assigned
        by the next step.
        """
        added = frozenset(encode(ox + dx, oy + dy) for dx, dy in pattern)
        self._cells = self._cells | added

    def clear(self):
        """Empty the grid and reset all counters."""
        self._cells = frozenset()
        self._ages = {}
        self._generation = 0
        self._total_births = 0
        self._total_deaths = 0
        self._newborns = []

    def load_from_text(self, text: str):
        """Replace the grid with an RLE pattern centered on the origin.

        The text is decoded before anything is cleared, so a FormatError
        leaves the current grid untouched.
        """
        from .patterns import load_pattern

        pattern = parse_rle(text)
        load_pattern(self, pattern)

    def restore(
        self,
        cells: Iterable[int],
        ages: Mapping[int, int],
        generation: int = 0,
        total_births: int = 0,
        total_deaths: int = 0,
    ):
        """Replace the whole state, e.g. from a saved snapshot.

        Keys are re-packed through the codec, so out-of-range keys that alias
        the same cell collapse into one.
        """
        cells = frozenset(encode(*decode(key)) for key in cells)
        self._cells = cells
        self._ages = {}
        for key, age in ages.items():
            key = encode(*decode(key))
            if key in cells:
                self._ages[key] = age
        self._generation = generation
        self._total_births = total_births
        self._total_deaths = total_deaths
        self._newborns = []

    def copy(self) -> "SparseLife":
        other = SparseLife(self._rule)
        other.restore(
            self._cells, self._ages,
            self._generation, self._total_births, self._total_deaths,
        )
        return other

    # Simulation

    def step(self) -> StepResult:
        """Advance exactly one generation."""
        result = evolve(self._cells, self._ages, self._rule)

        self._cells = result.cells
        self._ages = dict(result.ages)
        self._generation += 1
        self._total_births += len(result.births)
        self._total_deaths += len(result.deaths)
        self._newborns = result.newborns

        logger.debug(
            "Generation %d: population=%d births=%d deaths=%d",
            self._generation, len(result.cells), len(result.births), len(result.deaths),
        )
        return result

    def run(self, steps: int) -> "SparseLife":
        """Advance several generations."""
        for _ in range(steps):
            self.step()
        return self


# Some well-known rules
GAME_OF_LIFE = Rule.from_string("B3/S23")
HIGHLIFE = Rule.from_string("B36/S23")
DAY_AND_NIGHT = Rule.from_string("B3678/S34678")
SEEDS = Rule.from_string("B2/S")
LIFE_WITHOUT_DEATH = Rule.from_string("B3/S012345678")
DIAMOEBA = Rule.from_string("B35678/S5678")

RULES: Dict[str, Rule] = {
    "life": GAME_OF_LIFE,
    "highlife": HIGHLIFE,
    "day_and_night": DAY_AND_NIGHT,
    "seeds": SEEDS,
    "life_without_death": LIFE_WITHOUT_DEATH,
    "diamoeba": DIAMOEBA,
}
