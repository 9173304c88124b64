"""
word_grid.py – One side's hidden-word grid, as the host game keeps it.

Applies the opponent's guesses to a set of WordPlacements and builds the
GameStateSnapshot the AI reads each turn.  Letters are revealed in word
patterns only by letter guesses or a solved word; a coordinate hit marks
the cell as occupied without revealing which letter is there.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, Sequence

from settings import ALPHABET, UNKNOWN_LETTER
from executioner.models import Coord, GameStateSnapshot, WordPlacement

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GuessResult:
    """Outcome of one guess against the grid."""

    hit: bool
    revealed_letters: tuple[str, ...] = ()
    repeated: bool = False


class HiddenWordGrid:
    """Hidden words plus everything the opponent has guessed against them.

    Usage:
        grid = HiddenWordGrid(8, engine.placements)
        result = grid.apply_letter("E")
        snapshot = grid.snapshot(word_bank)
    """

    def __init__(self, grid_size: int, placements: Sequence[WordPlacement]):
        self.grid_size = grid_size
        self.placements = sorted(placements, key=lambda p: p.slot_index)

        self._cells: dict[Coord, str] = {}
        for p in self.placements:
            for i, cell in enumerate(p.cells()):
                self._cells[cell] = p.word[i]
        self._letters = frozenset(ch for p in self.placements for ch in p.word)

        self.guessed_letters: set[str] = set()
        self.hit_letters: set[str] = set()
        self.guessed_coordinates: set[Coord] = set()
        self.hit_coordinates: set[Coord] = set()
        self.guessed_words: set[str] = set()
        self.words_solved: list[bool] = [False] * len(self.placements)

    # ── Guesses ───────────────────────────────────────────

    def apply_letter(self, letter: str) -> GuessResult:
        letter = letter.upper()
        if letter in self.guessed_letters:
            return GuessResult(hit=letter in self._letters, repeated=True)
        self.guessed_letters.add(letter)
        if letter in self._letters:
            self.hit_letters.add(letter)
            return GuessResult(hit=True, revealed_letters=(letter,))
        return GuessResult(hit=False)

    def apply_coordinate(self, row: int, col: int) -> GuessResult:
        cell = (row, col)
        if cell in self.guessed_coordinates:
            return GuessResult(hit=cell in self._cells, repeated=True)
        self.guessed_coordinates.add(cell)
        if cell in self._cells:
            self.hit_coordinates.add(cell)
            return GuessResult(hit=True)
        return GuessResult(hit=False)

    def apply_word(self, word: str, slot_index: int) -> GuessResult:
        """A correct word solves its slot and reveals all of its letters."""
        word = word.upper()
        repeated = word in self.guessed_words
        self.guessed_words.add(word)
        if not 0 <= slot_index < len(self.placements):
            logger.warning("Word guess for unknown slot %d", slot_index)
            return GuessResult(hit=False, repeated=repeated)

        if self.placements[slot_index].word != word or self.words_solved[slot_index]:
            return GuessResult(hit=False, repeated=repeated)

        self.words_solved[slot_index] = True
        new_letters = tuple(sorted(set(word) - self.hit_letters))
        self.hit_letters.update(word)
        self.guessed_letters.update(word)
        return GuessResult(hit=True, revealed_letters=new_letters, repeated=repeated)

    # ── Queries ───────────────────────────────────────────

    @property
    def all_letters_found(self) -> bool:
        return self._letters <= self.hit_letters

    @property
    def all_coordinates_found(self) -> bool:
        return set(self._cells) <= self.hit_coordinates

    @property
    def all_words_solved(self) -> bool:
        return all(self.words_solved)

    @property
    def is_cleared(self) -> bool:
        """The opponent has uncovered everything on this grid."""
        return self.all_words_solved or (self.all_letters_found and self.all_coordinates_found)

    def unguessed_cells(self, occupied: bool) -> list[Coord]:
        """Cells not yet guessed that do (or do not) hold a letter, row-major."""
        return [
            (r, c)
            for r in range(self.grid_size)
            for c in range(self.grid_size)
            if (r, c) not in self.guessed_coordinates and ((r, c) in self._cells) == occupied
        ]

    def unguessed_letters(self, in_words: bool) -> list[str]:
        """Letters not yet guessed that are (or are not) in the hidden words."""
        return [
            ch for ch in ALPHABET
            if ch not in self.guessed_letters and (ch in self._letters) == in_words
        ]

    def word_patterns(self) -> list[str]:
        patterns = []
        for p, solved in zip(self.placements, self.words_solved):
            if solved:
                patterns.append(p.word)
            else:
                patterns.append("".join(
                    ch if ch in self.hit_letters else UNKNOWN_LETTER for ch in p.word))
        return patterns

    def snapshot(self, word_bank: Iterable[str] = ()) -> GameStateSnapshot:
        return GameStateSnapshot(
            grid_size=self.grid_size,
            word_patterns=tuple(self.word_patterns()),
            words_solved=tuple(self.words_solved),
            guessed_letters=frozenset(self.guessed_letters),
            hit_letters=frozenset(self.hit_letters),
            guessed_coordinates=frozenset(self.guessed_coordinates),
            hit_coordinates=frozenset(self.hit_coordinates),
            guessed_words=frozenset(self.guessed_words),
            word_bank=frozenset(word_bank),
            all_letters_found=self.all_letters_found,
            all_coordinates_found=self.all_coordinates_found,
        )

    def render(self, reveal: bool = False) -> str:
        """Text grid; hidden cells show '.', found cells '#', or letters when revealed."""
        rows = ["   " + " ".join(chr(ord("A") + c) for c in range(self.grid_size))]
        for r in range(self.grid_size):
            cells = []
            for c in range(self.grid_size):
                letter = self._cells.get((r, c))
                if reveal and letter:
                    cells.append(letter)
                elif (r, c) in self.hit_coordinates:
                    cells.append("#")
                elif (r, c) in self.guessed_coordinates:
                    cells.append("x")
                else:
                    cells.append(".")
            rows.append(f"{r + 1:>2} " + " ".join(cells))
        return "\n".join(rows)
