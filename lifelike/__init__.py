"""Lifelike - sparse Life-like cellular automata on an unbounded grid."""

from .automaton import GAME_OF_LIFE, RULES, Rule, SparseLife, StepResult, count_neighbors, evolve
from .codec import decode, encode
from .patterns import PATTERNS, get_pattern, insert_pattern, load_pattern
from .rle import FormatError, parse_rle

__all__ = [
    "GAME_OF_LIFE",
    "RULES",
    "Rule",
    "SparseLife",
    "StepResult",
    "count_neighbors",
    "evolve",
    "decode",
    "encode",
    "PATTERNS",
    "get_pattern",
    "insert_pattern",
    "load_pattern",
    "FormatError",
    "parse_rle",
]
