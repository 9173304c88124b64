"""
placement_engine.py – Chooses the AI's secret words and hides them on its grid.

Setup runs in two stages:

  1. select_words  – one word per required length from the host's candidate
                     lists, no duplicates (case-insensitive).
  2. place_words   – longest word first, random direction and origin, retried
                     up to ``max_attempts`` times per word.

A coin flip per ``place_words`` call decides whether words may cross.  When
they may, a shared cell must carry the same letter for both words; when they
may not, any shared cell is rejected.

Failure at either stage returns False and leaves no partial result behind.
"""

from __future__ import annotations

import logging
import random
from itertools import cycle, islice
from typing import Mapping, Sequence

from settings import DEFAULT_FIRST_WORD_LENGTH
from executioner.config import ExecutionerConfig
from executioner.models import DIRECTIONS, Coord, WordPlacement

logger = logging.getLogger(__name__)


def _origin_range(direction: int, length: int, grid_size: int) -> range:
    """Origins along one axis that keep a word of *length* on the grid."""
    span = length - 1
    if direction > 0:
        return range(0, grid_size - span)
    if direction < 0:
        return range(span, grid_size)
    return range(0, grid_size)


class WordPlacementEngine:
    """Hides ``word_count`` words on a ``grid_size`` square grid.

    Usage:
        engine = WordPlacementEngine(8, 3, rng=random.Random(1))
        ok = engine.perform_setup({3: ["CAT"], 4: ["DOGS"], 5: ["BIRDS"]})
        for p in engine.placements:
            print(p.word, p.cells())
    """

    def __init__(self, grid_size: int, word_count: int,
                 word_lengths: Sequence[int] | None = None,
                 config: ExecutionerConfig | None = None,
                 rng: random.Random | None = None):
        self.cfg = config or ExecutionerConfig()
        self.grid_size = grid_size
        self.word_count = word_count
        self._rng = rng or random.Random()

        if word_lengths:
            self.word_lengths = list(islice(cycle(word_lengths), word_count))
        else:
            self.word_lengths = [DEFAULT_FIRST_WORD_LENGTH + i for i in range(word_count)]

        self._selected: list[str] = []
        self._placements: list[WordPlacement] = []
        self._occupied: dict[Coord, str] = {}
        self._crossword = False

    # ── Properties ────────────────────────────────────────

    @property
    def selected_words(self) -> list[str]:
        return list(self._selected)

    @property
    def placements(self) -> list[WordPlacement]:
        return list(self._placements)

    @property
    def crossword_enabled(self) -> bool:
        return self._crossword

    @property
    def is_setup_complete(self) -> bool:
        return self.word_count > 0 and len(self._placements) == self.word_count

    def occupied_cells(self) -> dict[Coord, str]:
        return dict(self._occupied)

    def letter_at(self, row: int, col: int) -> str | None:
        return self._occupied.get((row, col))

    # ══════════════════════════════════════════════════════
    #  Stage 1: word selection
    # ══════════════════════════════════════════════════════

    def select_words(self, candidates_by_length: Mapping[int, Sequence[str]]) -> bool:
        """Pick one unused word per required length."""
        self._selected = []
        chosen: list[str] = []
        used: set[str] = set()

        for length in self.word_lengths:
            candidates = candidates_by_length.get(length)
            if not candidates:
                logger.error("No candidate words of length %d", length)
                return False

            unique = dict.fromkeys(w.upper() for w in candidates)
            fresh = [w for w in unique if w not in used]
            if not fresh:
                logger.error("Every candidate of length %d is already selected", length)
                return False

            word = self._rng.choice(fresh)
            chosen.append(word)
            used.add(word)

        self._selected = chosen
        logger.info("Selected words: %s", ", ".join(chosen))
        return True

    # ══════════════════════════════════════════════════════
    #  Stage 2: placement
    # ══════════════════════════════════════════════════════

    def place_words(self, max_attempts: int | None = None,
                    crossword_probability: float | None = None) -> bool:
        """Place every selected word; all or nothing."""
        if max_attempts is None:
            max_attempts = self.cfg.max_placement_attempts
        if crossword_probability is None:
            crossword_probability = self.cfg.crossword_probability

        self._clear_placements()
        if not self._selected:
            logger.error("place_words called before select_words")
            return False

        self._crossword = self._rng.random() < crossword_probability
        logger.debug("Crossword mode %s", "ON" if self._crossword else "OFF")

        # Longest first; ties keep list order
        order = sorted(range(len(self._selected)),
                       key=lambda i: len(self._selected[i]), reverse=True)

        for slot in order:
            word = self._selected[slot]
            if len(word) > self.grid_size:
                logger.error("'%s' is longer than the %dx%d grid",
                             word, self.grid_size, self.grid_size)
                self._clear_placements()
                return False
            placement = self._try_place(word, slot, max_attempts)
            if placement is None:
                logger.error("Could not place '%s' after %d attempts", word, max_attempts)
                self._clear_placements()
                return False
            self._commit(placement)

        self._placements.sort(key=lambda p: p.slot_index)
        logger.info("Placed %d words (crossword %s)",
                    len(self._placements), "on" if self._crossword else "off")
        return True

    def perform_setup(self, candidates_by_length: Mapping[int, Sequence[str]],
                      max_attempts: int | None = None,
                      crossword_probability: float | None = None) -> bool:
        if not self.select_words(candidates_by_length):
            self._clear_placements()
            return False
        return self.place_words(max_attempts, crossword_probability)

    # ── Internals ─────────────────────────────────────────

    def _try_place(self, word: str, slot: int, max_attempts: int) -> WordPlacement | None:
        length = len(word)
        directions = list(DIRECTIONS)
        for _ in range(max_attempts):
            dr, dc = self._rng.choice(directions)
            row = self._rng.choice(_origin_range(dr, length, self.grid_size))
            col = self._rng.choice(_origin_range(dc, length, self.grid_size))
            candidate = WordPlacement(word, row, col, dr, dc, slot)
            if self._is_valid(candidate):
                return candidate
        return None

    def _is_valid(self, placement: WordPlacement) -> bool:
        if not placement.in_bounds(self.grid_size):
            return False
        for i, cell in enumerate(placement.cells()):
            existing = self._occupied.get(cell)
            if existing is None:
                continue
            if not self._crossword or existing != placement.word[i]:
                return False
        return True

    def _commit(self, placement: WordPlacement):
        for i, cell in enumerate(placement.cells()):
            self._occupied[cell] = placement.word[i]
        self._placements.append(placement)

    def _clear_placements(self):
        self._placements.clear()
        self._occupied.clear()

    # ── Debug ─────────────────────────────────────────────

    def debug_summary(self) -> str:
        lines = [
            f"Grid: {self.grid_size}x{self.grid_size}",
            f"Crossword: {'Yes' if self._crossword else 'No'}",
            f"Words: {len(self._placements)}/{self.word_count}",
        ]
        for p in self._placements:
            lines.append(f"  [{p.slot_index}] {p.word} at ({p.start_row},{p.start_col}) "
                         f"going {p.direction_name}")
        return "\n".join(lines)
