"""
models.py – Data carried between the AI core and its host.

  WordPlacement        – one placed word (immutable after setup)
  GameStateSnapshot    – read-only view of the opponent's grid for one decision
  MemoryRecord         – one learned fact with its turn stamp
  KnownFacts           – memory-filtered facts handed to the evaluators
  GuessRecommendation  – LetterGuess | CoordinateGuess | WordGuess | NoGuess
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Union

from settings import ALPHABET, UNKNOWN_LETTER

Coord = tuple[int, int]


# ══════════════════════════════════════════════════════════
#  Directions
# ══════════════════════════════════════════════════════════

# (dir_row, dir_col) → compass name; rows grow downward
DIRECTIONS: dict[Coord, str] = {
    (0, 1): "E",
    (0, -1): "W",
    (1, 0): "S",
    (-1, 0): "N",
    (1, 1): "SE",
    (1, -1): "SW",
    (-1, 1): "NE",
    (-1, -1): "NW",
}


# ══════════════════════════════════════════════════════════
#  Word placement
# ══════════════════════════════════════════════════════════

@dataclass(frozen=True)
class WordPlacement:
    """A word laid on the grid from an origin along one of 8 unit vectors."""

    word: str
    start_row: int
    start_col: int
    dir_row: int
    dir_col: int
    slot_index: int     # position in the caller's word list, not the length-sorted order

    def __post_init__(self):
        if (self.dir_row, self.dir_col) not in DIRECTIONS:
            raise ValueError(
                f"Direction ({self.dir_row}, {self.dir_col}) is not a unit vector")
        if not self.word:
            raise ValueError("WordPlacement needs a non-empty word")

    @property
    def direction_name(self) -> str:
        return DIRECTIONS[(self.dir_row, self.dir_col)]

    def cells(self) -> list[Coord]:
        return [
            (self.start_row + i * self.dir_row, self.start_col + i * self.dir_col)
            for i in range(len(self.word))
        ]

    def in_bounds(self, grid_size: int) -> bool:
        return all(0 <= r < grid_size and 0 <= c < grid_size for r, c in self.cells())


# ══════════════════════════════════════════════════════════
#  Game state snapshot
# ══════════════════════════════════════════════════════════

@dataclass(frozen=True)
class GameStateSnapshot:
    """Everything the AI may see about the opponent's grid for one decision.

    Built by the host each turn.  ``fill_ratio`` defaults to guessed cells
    over total cells when not supplied.
    """

    grid_size: int
    word_patterns: tuple[str, ...] = ()
    words_solved: tuple[bool, ...] = ()
    guessed_letters: frozenset[str] = frozenset()
    hit_letters: frozenset[str] = frozenset()
    guessed_coordinates: frozenset[Coord] = frozenset()
    hit_coordinates: frozenset[Coord] = frozenset()
    guessed_words: frozenset[str] = frozenset()
    word_bank: frozenset[str] = frozenset()
    fill_ratio: float | None = None
    skill: float = 0.5
    all_letters_found: bool = False
    all_coordinates_found: bool = False

    def __post_init__(self):
        # Normalise to immutable, upper-case containers
        object.__setattr__(self, "word_patterns",
                           tuple(p.upper() for p in self.word_patterns))
        solved = tuple(self.words_solved)
        if len(solved) < len(self.word_patterns):
            solved = solved + (False,) * (len(self.word_patterns) - len(solved))
        object.__setattr__(self, "words_solved", solved)
        object.__setattr__(self, "guessed_letters",
                           frozenset(ch.upper() for ch in self.guessed_letters))
        object.__setattr__(self, "hit_letters",
                           frozenset(ch.upper() for ch in self.hit_letters))
        object.__setattr__(self, "guessed_coordinates", frozenset(self.guessed_coordinates))
        object.__setattr__(self, "hit_coordinates", frozenset(self.hit_coordinates))
        object.__setattr__(self, "guessed_words",
                           frozenset(w.upper() for w in self.guessed_words))
        object.__setattr__(self, "word_bank", frozenset(w.upper() for w in self.word_bank))
        if self.fill_ratio is None:
            total = self.grid_size * self.grid_size
            ratio = len(self.guessed_coordinates) / total if total > 0 else 0.0
            object.__setattr__(self, "fill_ratio", max(0.0, min(1.0, ratio)))

    def unguessed_letters(self) -> list[str]:
        return [ch for ch in ALPHABET if ch not in self.guessed_letters]

    def unguessed_coordinates(self) -> list[Coord]:
        return [
            (row, col)
            for row in range(self.grid_size)
            for col in range(self.grid_size)
            if (row, col) not in self.guessed_coordinates
        ]

    def with_skill(self, skill: float) -> "GameStateSnapshot":
        return replace(self, skill=skill)


# ══════════════════════════════════════════════════════════
#  Memory
# ══════════════════════════════════════════════════════════

class MemoryKind(Enum):
    HIT_COORDINATE = "hit_coordinate"
    REVEALED_LETTER = "revealed_letter"


@dataclass(frozen=True)
class MemoryRecord:
    """One fact the AI learned, stamped with the turn it was learned on."""

    kind: MemoryKind
    value: Union[Coord, str]
    turn_learned: int
    sequence: int       # global learn order, ties on turn_learned broken by this


@dataclass(frozen=True)
class KnownFacts:
    """Memory-filtered view of learned facts for one decision.

    ``forgotten_*`` hold facts the AI learned but cannot recall right now;
    evaluators hide exactly those, never facts the memory was never told about.
    """

    hits: frozenset[Coord] = frozenset()
    letters: frozenset[str] = frozenset()
    forgotten_hits: frozenset[Coord] = frozenset()
    forgotten_letters: frozenset[str] = frozenset()

    def mask_pattern(self, pattern: str) -> str:
        """Blank out pattern letters the AI has forgotten."""
        if not self.forgotten_letters:
            return pattern
        return "".join(
            UNKNOWN_LETTER if ch in self.forgotten_letters else ch for ch in pattern)

    def remembered_hits(self, snapshot_hits: frozenset[Coord]) -> frozenset[Coord]:
        return snapshot_hits - self.forgotten_hits


# ══════════════════════════════════════════════════════════
#  Guess recommendation (tagged union)
# ══════════════════════════════════════════════════════════

class GuessType(Enum):
    LETTER = "letter"
    COORDINATE = "coordinate"
    WORD = "word"
    NONE = "none"


@dataclass(frozen=True)
class LetterGuess:
    letter: str
    confidence: float = 0.0
    guess_type: GuessType = field(default=GuessType.LETTER, init=False)
    is_valid: bool = field(default=True, init=False)

    def __post_init__(self):
        object.__setattr__(self, "letter", self.letter.upper())

    def __str__(self) -> str:
        return f"Letter '{self.letter}' (confidence: {self.confidence:.0%})"


@dataclass(frozen=True)
class CoordinateGuess:
    row: int
    col: int
    confidence: float = 0.0
    guess_type: GuessType = field(default=GuessType.COORDINATE, init=False)
    is_valid: bool = field(default=True, init=False)

    def __str__(self) -> str:
        return f"Coordinate ({self.row},{self.col}) (confidence: {self.confidence:.0%})"


@dataclass(frozen=True)
class WordGuess:
    word: str
    slot_index: int
    confidence: float = 0.0
    guess_type: GuessType = field(default=GuessType.WORD, init=False)
    is_valid: bool = field(default=True, init=False)

    def __post_init__(self):
        if not self.word:
            raise ValueError("WordGuess needs a non-empty word")
        object.__setattr__(self, "word", self.word.upper())

    def __str__(self) -> str:
        return (f"Word '{self.word}' for slot {self.slot_index} "
                f"(confidence: {self.confidence:.0%})")


@dataclass(frozen=True)
class NoGuess:
    """A strategy had nothing worth recommending. Never act on it."""

    reason: str = ""
    confidence: float = field(default=0.0, init=False)
    guess_type: GuessType = field(default=GuessType.NONE, init=False)
    is_valid: bool = field(default=False, init=False)

    def __str__(self) -> str:
        return f"Invalid recommendation ({self.reason})" if self.reason else "Invalid recommendation"


GuessRecommendation = Union[LetterGuess, CoordinateGuess, WordGuess, NoGuess]
