"""Mapping of newborn cells to musical notes.

Each newborn's row picks a degree of the current scale; rows beyond the
scale length move up or down by octaves. Only note numbers and frequencies
are produced here, playing them is left to the host.
"""

from typing import Dict, Iterable, List, Tuple

SCALES: Dict[str, Tuple[int, ...]] = {
    "major": (0, 2, 4, 5, 7, 9, 11),
    "minor": (0, 2, 3, 5, 7, 8, 10),
    "lydian": (0, 2, 4, 6, 7, 9, 11),
    "dorian": (0, 2, 3, 5, 7, 9, 10),
}

DEFAULT_ROOT = 60  # MIDI C4


def frequency(note: int) -> float:
    """Equal-tempered frequency in Hz for a MIDI note number (A4 = 440 Hz)."""
    return 440.0 * 2 ** ((note - 69) / 12)


class NoteMapper:
    def __init__(self, scale: str = "major", root: int = DEFAULT_ROOT):
        self.root = root
        self.scale = SCALES["major"]
        self.scale_name = "major"
        self.set_scale(scale)

    def set_scale(self, name: str):
        """Switch scale; unknown names fall back to major."""
        if name in SCALES:
            self.scale_name = name
        else:
            self.scale_name = "major"
        self.scale = SCALES[self.scale_name]

    def note_for_row(self, row: int) -> int:
        n = len(self.scale)
        octave, idx = divmod(row, n)
        return self.root + octave * 12 + self.scale[idx]

    def notes_for(self, newborns: Iterable[Tuple[int, int]]) -> List[int]:
        """One MIDI note per newborn cell, in the given order."""
        return [self.note_for_row(y) for _, y in newborns]

    def frequencies_for(self, newborns: Iterable[Tuple[int, int]]) -> List[float]:
        return [frequency(note) for note in self.notes_for(newborns)]
