"""Decoder for run-length encoded (RLE) Life patterns.

Only the subset needed to seed a grid is understood: a header line starting
with ``x = <width>`` and a body of run counts, ``b`` (dead), ``o`` (alive),
``$`` (end of row) and ``!`` (end of pattern). Anything else is ignored.
"""

import logging
import re
from typing import List, Tuple

logger = logging.getLogger(__name__)

Pattern = List[Tuple[int, int]]

HEADER_RE = re.compile(r"^x\s*=\s*\d+", re.IGNORECASE)


class FormatError(ValueError):
    """Raised when pattern text has no RLE header line."""


def _find_header(lines: List[str]) -> int:
    for idx, line in enumerate(lines):
        if HEADER_RE.match(line):
            return idx
    raise FormatError("Invalid RLE: header line not found")


def center_pattern(cells: Pattern) -> Pattern:
    """Shift cells so their bounding box is centered on (0, 0)."""
    if not cells:
        return []
    xs = [x for x, _ in cells]
    ys = [y for _, y in cells]
    cx = (min(xs) + max(xs)) // 2
    cy = (min(ys) + max(ys)) // 2
    return [(x - cx, y - cy) for x, y in cells]


def parse_rle(text: str) -> Pattern:
    """
    Decode RLE text into a list of (dx, dy) offsets centered on the origin.

    Raises:
        FormatError: if no ``x = <digits>`` header line is present.
    """
    lines = re.split(r"\r?\n", text)
    header_idx = _find_header(lines)

    # Body rows are concatenated with all whitespace removed
    data = re.sub(r"\s+", "", "".join(lines[header_idx + 1:]))

    cells: Pattern = []
    x = y = 0
    run = ""

    for ch in data:
        if "0" <= ch <= "9":
            run += ch
        elif ch in "bo":
            count = int(run) if run else 1
            if ch == "o":
                cells.extend((x + i, y) for i in range(count))
            x += count
            run = ""
        elif ch == "$":
            y += int(run) if run else 1
            x = 0
            run = ""
        elif ch == "!":
            break
        # A dangling run count at the end of input is dropped

    logger.debug("Decoded RLE pattern with %d live cells", len(cells))
    return center_pattern(cells)
