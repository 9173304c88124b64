"""
Tests for the letter, coordinate and word evaluators plus the grid helpers
they score with.
"""

import random

import pytest

from settings import ALPHABET
from executioner import grid_analyzer, letter_frequency
from executioner.config import ExecutionerConfig
from executioner.models import (
    CoordinateGuess, GameStateSnapshot, GuessType, KnownFacts, LetterGuess, WordGuess,
)
from executioner.strategies import (
    coordinate_scores, evaluate_coordinate, evaluate_letter, evaluate_word,
    find_matching_words, letter_scores, matches_pattern, word_analysis,
)

CFG = ExecutionerConfig()
NOTHING_FORGOTTEN = KnownFacts()
BANK = frozenset({"CAT", "COT", "DOG", "BIRD"})


def _rng():
    return random.Random(11)


class TestPatternMatching:
    """Underscore is a wildcard; length must match."""

    def test_matches(self):
        assert matches_pattern("CAT", "C_T")
        assert matches_pattern("cot", "c_t")

    def test_rejects(self):
        assert not matches_pattern("CART", "C_T")
        assert not matches_pattern("DOG", "C_T")

    def test_find_is_sorted(self):
        assert find_matching_words("C_T", BANK) == ["CAT", "COT"]


class TestWordStrategy:
    """Whole-word guesses need a confident, revealed pattern."""

    def test_single_match_is_guessed_even_at_low_skill(self):
        snap = GameStateSnapshot(8, word_patterns=("D_G",), word_bank=BANK)
        guess = evaluate_word(snap, NOTHING_FORGOTTEN, 0.15, CFG, _rng())
        assert isinstance(guess, WordGuess)
        assert guess.word == "DOG"
        assert guess.slot_index == 0
        assert guess.confidence == pytest.approx(0.95)

    def test_two_matches_need_high_skill(self):
        snap = GameStateSnapshot(8, word_patterns=("C_T",), word_bank=BANK)
        assert not evaluate_word(snap, NOTHING_FORGOTTEN, 0.5, CFG, _rng()).is_valid
        guess = evaluate_word(snap, NOTHING_FORGOTTEN, 0.95, CFG, _rng())
        assert guess.is_valid
        assert guess.word in {"CAT", "COT"}
        assert guess.confidence == pytest.approx(0.5)

    def test_best_slot_wins(self):
        snap = GameStateSnapshot(8, word_patterns=("C_T", "D_G"), word_bank=BANK)
        guess = evaluate_word(snap, NOTHING_FORGOTTEN, 0.95, CFG, _rng())
        assert guess.word == "DOG"
        assert guess.slot_index == 1

    def test_guessed_words_are_excluded(self):
        snap = GameStateSnapshot(8, word_patterns=("D_G",), word_bank=BANK,
                                 guessed_words=frozenset({"dog"}))
        assert not evaluate_word(snap, NOTHING_FORGOTTEN, 0.95, CFG, _rng()).is_valid

    def test_unrevealed_and_solved_patterns_skipped(self):
        snap = GameStateSnapshot(8, word_patterns=("___", "D_G"), words_solved=(False, True),
                                 word_bank=BANK)
        guess = evaluate_word(snap, NOTHING_FORGOTTEN, 0.95, CFG, _rng())
        assert guess.guess_type is GuessType.NONE

    def test_no_bank(self):
        snap = GameStateSnapshot(8, word_patterns=("D_G",))
        assert not evaluate_word(snap, NOTHING_FORGOTTEN, 0.95, CFG, _rng()).is_valid

    def test_forgotten_letters_hide_pattern(self):
        snap = GameStateSnapshot(8, word_patterns=("D_G",), word_bank=BANK)
        known = KnownFacts(forgotten_letters=frozenset({"D", "G"}))
        assert not evaluate_word(snap, known, 0.95, CFG, _rng()).is_valid

    def test_analysis_mentions_candidates(self):
        snap = GameStateSnapshot(8, word_patterns=("C_T",), word_bank=BANK)
        text = word_analysis(snap, NOTHING_FORGOTTEN, 0.95, CFG)
        assert "CAT, COT" in text


class TestLetterStrategy:
    """Frequency plus pattern bonus, picked from a skill-sized pool."""

    def test_best_letter_at_top_skill(self):
        snap = GameStateSnapshot(8)
        guess = evaluate_letter(snap, NOTHING_FORGOTTEN, 0.95, CFG, _rng())
        assert isinstance(guess, LetterGuess)
        assert guess.letter == "E"
        assert guess.confidence == pytest.approx(1.0)

    def test_skips_guessed_letters(self):
        snap = GameStateSnapshot(8, guessed_letters=frozenset({"E"}))
        assert evaluate_letter(snap, NOTHING_FORGOTTEN, 0.95, CFG, _rng()).letter == "T"

    def test_pattern_bonus(self):
        bank = frozenset({"CAT", "BAT", "HAT"})
        snap = GameStateSnapshot(8, word_patterns=("_AT",), word_bank=bank)
        scores = dict(letter_scores(snap, NOTHING_FORGOTTEN))
        assert scores["C"] == pytest.approx(letter_frequency.frequency("C") + 2.0 / 3)
        # A already appears in the pattern, so it earns no bonus
        assert scores["A"] == pytest.approx(letter_frequency.frequency("A"))

    def test_low_skill_stays_within_pool(self):
        snap = GameStateSnapshot(8)
        top_ten = {letter for letter, _ in letter_scores(snap, NOTHING_FORGOTTEN)[:10]}
        rng = random.Random(5)
        for _ in range(50):
            guess = evaluate_letter(snap, NOTHING_FORGOTTEN, 0.15, CFG, rng)
            assert guess.letter in top_ten
            assert 0.0 < guess.confidence <= 1.0

    def test_all_letters_found(self):
        snap = GameStateSnapshot(8, all_letters_found=True)
        assert not evaluate_letter(snap, NOTHING_FORGOTTEN, 0.5, CFG, _rng()).is_valid

    def test_alphabet_exhausted(self):
        snap = GameStateSnapshot(8, guessed_letters=frozenset(ALPHABET))
        assert not evaluate_letter(snap, NOTHING_FORGOTTEN, 0.5, CFG, _rng()).is_valid


class TestCoordinateStrategy:
    """Adjacency to remembered hits dominates the score."""

    HIT = frozenset({(3, 3)})

    def _snapshot(self, **kwargs):
        return GameStateSnapshot(8, guessed_coordinates=self.HIT, hit_coordinates=self.HIT,
                                 **kwargs)

    def test_picks_neighbour_of_hit(self):
        guess = evaluate_coordinate(self._snapshot(), NOTHING_FORGOTTEN, 0.95, CFG, _rng())
        assert isinstance(guess, CoordinateGuess)
        assert (guess.row, guess.col) in {(3, 4), (4, 3)}
        assert 0.0 <= guess.confidence <= 1.0

    def test_forgotten_hit_is_not_evidence(self):
        snap = self._snapshot()
        remembered = dict(coordinate_scores(snap, NOTHING_FORGOTTEN))
        forgotten = dict(coordinate_scores(snap, KnownFacts(forgotten_hits=self.HIT)))
        assert remembered[(2, 3)] > 2.0
        assert forgotten[(2, 3)] < 1.0

    def test_guessed_cells_never_offered(self):
        snap = self._snapshot()
        cells = {cell for cell, _ in coordinate_scores(snap, KnownFacts(forgotten_hits=self.HIT))}
        assert (3, 3) not in cells
        assert len(cells) == 63

    def test_confidence_scaled_on_sparse_grid(self):
        guess = evaluate_coordinate(self._snapshot(), NOTHING_FORGOTTEN, 0.95, CFG, _rng())
        assert guess.confidence < 0.6

    def test_all_coordinates_found(self):
        snap = self._snapshot(all_coordinates_found=True)
        assert not evaluate_coordinate(snap, NOTHING_FORGOTTEN, 0.5, CFG, _rng()).is_valid

    def test_grid_exhausted(self):
        every_cell = frozenset((r, c) for r in range(2) for c in range(2))
        snap = GameStateSnapshot(2, guessed_coordinates=every_cell)
        assert not evaluate_coordinate(snap, NOTHING_FORGOTTEN, 0.5, CFG, _rng()).is_valid


class TestGridAnalyzer:
    """Geometry helpers."""

    def test_line_extension(self):
        hits = {(2, 2), (2, 3)}
        assert grid_analyzer.extends_hit_line(2, 4, hits, 8)
        assert grid_analyzer.extends_hit_line(2, 1, hits, 8)
        assert not grid_analyzer.extends_hit_line(3, 2, hits, 8)

    def test_bridge_between_hits(self):
        assert grid_analyzer.extends_hit_line(1, 1, {(0, 1), (2, 1)}, 8)

    def test_proximity_bonus(self):
        hits = {(0, 0)}
        assert grid_analyzer.proximity_bonus(0, 2, hits, 8) == pytest.approx(0.3)
        assert grid_analyzer.proximity_bonus(0, 1, hits, 8) == 0.0
        assert grid_analyzer.proximity_bonus(5, 5, hits, 8) == 0.0

    def test_center_bias(self):
        assert grid_analyzer.center_bias_score(0, 0, 8) == pytest.approx(0.0)
        assert grid_analyzer.center_bias_score(3, 3, 8) > 0.8

    def test_lerp_clamps(self):
        assert grid_analyzer.lerp(0.5, 1.0, 2.0) == 1.0
        assert grid_analyzer.lerp(0.5, 1.0, -1.0) == 0.5

    def test_coordinate_strings(self):
        assert grid_analyzer.coordinate_to_string(0, 0) == "A1"
        assert grid_analyzer.parse_coordinate("c4") == (3, 2)
        assert grid_analyzer.parse_coordinate("4C") is None
        assert grid_analyzer.parse_coordinate("") is None

    def test_density_category(self):
        assert grid_analyzer.density_category(0.4) == "High"
        assert grid_analyzer.density_category(0.05) == "Very Low"
