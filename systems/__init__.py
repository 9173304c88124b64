"""systems package – Host-side hidden-word grid and built-in word lists."""

from .word_grid import GuessResult, HiddenWordGrid
from .word_lists import WORDS_BY_LENGTH, candidates_by_length, word_bank
