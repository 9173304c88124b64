"""
Tests for WordPlacementEngine word selection and grid placement.
"""

import random

import pytest

from executioner.models import WordPlacement
from executioner.placement_engine import WordPlacementEngine, _origin_range
from systems.word_lists import candidates_by_length

CAT_DOGS_BIRDS = {3: ["CAT"], 4: ["DOGS"], 5: ["BIRDS"]}


def _all_cells(placements):
    return [cell for p in placements for cell in p.cells()]


class TestSelection:
    """One unique word per required length."""

    def test_default_lengths_ascend(self):
        engine = WordPlacementEngine(8, 4)
        assert engine.word_lengths == [3, 4, 5, 6]

    def test_supplied_lengths_are_cycled(self):
        engine = WordPlacementEngine(8, 5, word_lengths=[3, 5])
        assert engine.word_lengths == [3, 5, 3, 5, 3]

    def test_missing_length_fails(self, caplog):
        engine = WordPlacementEngine(8, 2, word_lengths=[3, 7])
        assert engine.select_words({3: ["CAT"]}) is False
        assert engine.selected_words == []
        assert "length 7" in caplog.text

    def test_empty_list_fails(self):
        engine = WordPlacementEngine(8, 1)
        assert engine.select_words({3: []}) is False

    def test_duplicates_excluded_case_insensitively(self):
        engine = WordPlacementEngine(8, 2, word_lengths=[3, 3], rng=random.Random(4))
        assert engine.select_words({3: ["cat", "CAT", "dog"]}) is True
        assert sorted(engine.selected_words) == ["CAT", "DOG"]

    def test_case_variants_count_once(self):
        seen = []

        class RecordingRandom(random.Random):
            def choice(self, seq):
                seen.append(list(seq))
                return super().choice(seq)

        engine = WordPlacementEngine(8, 1, word_lengths=[3], rng=RecordingRandom(0))
        assert engine.select_words({3: ["cat", "CAT", "dog"]}) is True
        assert seen == [["CAT", "DOG"]]

    def test_not_enough_unique_words(self):
        engine = WordPlacementEngine(8, 2, word_lengths=[3, 3])
        assert engine.select_words({3: ["cat", "CAT"]}) is False
        assert engine.selected_words == []


class TestPlacement:
    """Words land in bounds and respect the occupancy rule."""

    @pytest.mark.parametrize("seed", range(20))
    def test_cat_dogs_birds_without_crossword(self, seed):
        engine = WordPlacementEngine(8, 3, rng=random.Random(seed))
        assert engine.perform_setup(CAT_DOGS_BIRDS, crossword_probability=0.0) is True
        placements = engine.placements
        assert [p.word for p in placements] == ["CAT", "DOGS", "BIRDS"]
        assert all(p.in_bounds(8) for p in placements)
        cells = _all_cells(placements)
        assert len(cells) == len(set(cells))
        assert engine.crossword_enabled is False
        assert engine.is_setup_complete

    @pytest.mark.parametrize("seed", range(20))
    def test_crossword_cells_agree(self, seed):
        engine = WordPlacementEngine(8, 5, word_lengths=[3, 4, 5, 6, 3],
                                     rng=random.Random(seed))
        if not engine.perform_setup(candidates_by_length(), crossword_probability=1.0):
            pytest.skip("placement exhausted for this seed")
        assert engine.crossword_enabled is True
        for p in engine.placements:
            for i, (row, col) in enumerate(p.cells()):
                assert engine.letter_at(row, col) == p.word[i]

    def test_crossing_rule(self):
        engine = WordPlacementEngine(5, 2)
        engine._commit(WordPlacement("CAT", 0, 0, 0, 1, 0))    # (0,0) (0,1) (0,2)
        same_letter = WordPlacement("ANT", 0, 1, 1, 0, 1)      # shares A at (0,1)
        other_letter = WordPlacement("DOG", 0, 1, 1, 0, 1)     # D against A at (0,1)
        apart = WordPlacement("DOG", 2, 0, 0, 1, 1)

        engine._crossword = True
        assert engine._is_valid(same_letter) is True
        assert engine._is_valid(other_letter) is False
        assert engine._is_valid(apart) is True

        engine._crossword = False
        assert engine._is_valid(same_letter) is False
        assert engine._is_valid(apart) is True

    def test_output_restores_slot_order(self):
        engine = WordPlacementEngine(8, 3, word_lengths=[3, 5, 4], rng=random.Random(2))
        assert engine.perform_setup(CAT_DOGS_BIRDS) is True
        assert [p.word for p in engine.placements] == ["CAT", "BIRDS", "DOGS"]
        assert [p.slot_index for p in engine.placements] == [0, 1, 2]

    def test_occupancy_matches_placements(self):
        engine = WordPlacementEngine(8, 3, rng=random.Random(9))
        assert engine.perform_setup(CAT_DOGS_BIRDS, crossword_probability=0.0)
        assert set(engine.occupied_cells()) == set(_all_cells(engine.placements))


class TestFailure:
    """Failure leaves nothing usable behind."""

    def test_word_longer_than_grid(self, caplog):
        engine = WordPlacementEngine(4, 1, word_lengths=[5])
        assert engine.perform_setup({5: ["BIRDS"]}) is False
        assert engine.placements == []
        assert engine.occupied_cells() == {}
        assert "longer than the 4x4 grid" in caplog.text
        assert "Could not place" not in caplog.text

    def test_exhaustion_clears_state(self, caplog):
        engine = WordPlacementEngine(3, 4, word_lengths=[3], rng=random.Random(0))
        ok = engine.perform_setup({3: ["CAT", "DOG", "OWL", "FOX"]},
                                  max_attempts=20, crossword_probability=0.0)
        assert ok is False
        assert engine.placements == []
        assert engine.occupied_cells() == {}
        assert not engine.is_setup_complete
        assert "Could not place" in caplog.text

    def test_place_before_select(self):
        engine = WordPlacementEngine(8, 3)
        assert engine.place_words() is False


class TestOriginRange:
    """Origins reserve room on the side the word extends toward."""

    def test_forward(self):
        assert _origin_range(1, 3, 8) == range(0, 6)

    def test_backward(self):
        assert _origin_range(-1, 3, 8) == range(2, 8)

    def test_flat_axis(self):
        assert _origin_range(0, 3, 8) == range(0, 8)
