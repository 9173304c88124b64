"""
strategies.py – The three guess evaluators.

Each evaluator is a pure function of one decision's inputs:

    evaluate_letter(snapshot, known, skill, config, rng)
    evaluate_coordinate(snapshot, known, skill, config, rng)
    evaluate_word(snapshot, known, skill, config, rng)

and returns a GuessRecommendation; ``NoGuess`` means "nothing worth trying",
never "no legal move".  ``known`` is the memory-filtered view: pattern
letters the AI has forgotten are blanked and forgotten hits stop counting as
evidence.  What has already been *guessed* is never filtered, so the AI
cannot repeat a guess because it forgot about it.

Skill shows up in two places: the size of the top-N pool a pick is drawn
from, and how sure the AI must be before it gambles on a whole word.
"""

from __future__ import annotations

import logging
import random
from typing import AbstractSet, Iterable

from settings import (
    HIGH_DENSITY_THRESHOLD, MIN_VIABLE_WORD_CONFIDENCE, PATTERN_BONUS_WEIGHT,
    SINGLE_MATCH_CONFIDENCE, UNKNOWN_LETTER,
)
from executioner import grid_analyzer, letter_frequency
from executioner.config import ExecutionerConfig
from executioner.models import (
    CoordinateGuess, GameStateSnapshot, GuessRecommendation, KnownFacts,
    LetterGuess, NoGuess, WordGuess,
)

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════
#  Pattern matching
# ══════════════════════════════════════════════════════════

def has_revealed_letters(pattern: str) -> bool:
    return any(ch != UNKNOWN_LETTER for ch in pattern)


def matches_pattern(word: str, pattern: str) -> bool:
    """``"C_T"`` matches CAT and COT; ``_`` is a wildcard, case is ignored."""
    if len(word) != len(pattern):
        return False
    for w, p in zip(word.upper(), pattern.upper()):
        if p != UNKNOWN_LETTER and w != p:
            return False
    return True


def find_matching_words(pattern: str, word_bank: Iterable[str]) -> list[str]:
    """Bank words fitting *pattern*, sorted so results do not depend on set order."""
    return sorted(w for w in word_bank if matches_pattern(w, pattern))


def _visible_patterns(snapshot: GameStateSnapshot, known: KnownFacts) -> list[tuple[int, str]]:
    """(slot, masked pattern) for every unsolved word."""
    return [
        (i, known.mask_pattern(pattern))
        for i, pattern in enumerate(snapshot.word_patterns)
        if not snapshot.words_solved[i]
    ]


def _pick_from_pool(ranked: list, pool_size: int, rng: random.Random):
    return ranked[rng.randrange(min(pool_size, len(ranked)))]


# ══════════════════════════════════════════════════════════
#  Letter strategy
# ══════════════════════════════════════════════════════════

def letter_scores(snapshot: GameStateSnapshot, known: KnownFacts) -> list[tuple[str, float]]:
    """Unguessed letters with scores, best first (ties alphabetical)."""
    patterns = _visible_patterns(snapshot, known) if snapshot.word_bank else []
    matches = {slot: find_matching_words(p, snapshot.word_bank) for slot, p in patterns}

    scored = []
    for letter in snapshot.unguessed_letters():
        bonus = 0.0
        for slot, pattern in patterns:
            if letter in pattern or not matches[slot]:
                continue
            with_letter = sum(1 for w in matches[slot] if letter in w)
            bonus += with_letter / len(matches[slot])
        scored.append((letter, letter_frequency.frequency(letter) + bonus * PATTERN_BONUS_WEIGHT))

    scored.sort(key=lambda item: (-item[1], item[0]))
    return scored


def evaluate_letter(snapshot: GameStateSnapshot, known: KnownFacts, skill: float,
                    config: ExecutionerConfig, rng: random.Random) -> GuessRecommendation:
    if snapshot.all_letters_found:
        return NoGuess("all letters found")

    scored = letter_scores(snapshot, known)
    if not scored:
        return NoGuess("no unguessed letters")

    letter, score = _pick_from_pool(scored, config.letter_pool_size(skill), rng)
    best = scored[0][1]
    confidence = score / best if best > 0 else 0.5
    return LetterGuess(letter, confidence)


# ══════════════════════════════════════════════════════════
#  Coordinate strategy
# ══════════════════════════════════════════════════════════

def coordinate_scores(snapshot: GameStateSnapshot,
                      known: KnownFacts) -> list[tuple[tuple[int, int], float]]:
    """Unguessed cells with scores, best first (ties in row-major order)."""
    hits: AbstractSet = known.remembered_hits(snapshot.hit_coordinates)
    size = snapshot.grid_size
    ratio = snapshot.fill_ratio

    scored = []
    for row, col in snapshot.unguessed_coordinates():
        score = grid_analyzer.coordinate_score(row, col, hits, size, ratio)
        score += grid_analyzer.proximity_bonus(row, col, hits, size)
        scored.append(((row, col), score))

    scored.sort(key=lambda item: (-item[1], item[0]))
    return scored


def evaluate_coordinate(snapshot: GameStateSnapshot, known: KnownFacts, skill: float,
                        config: ExecutionerConfig, rng: random.Random) -> GuessRecommendation:
    if snapshot.all_coordinates_found:
        return NoGuess("all coordinates found")

    scored = coordinate_scores(snapshot, known)
    if not scored:
        return NoGuess("no unguessed coordinates")

    (row, col), score = _pick_from_pool(scored, config.coordinate_pool_size(skill), rng)
    best = scored[0][1]
    relative = score / best if best > 0 else 0.5
    # Coordinate guesses are less informative on a sparse grid
    density_factor = grid_analyzer.lerp(0.5, 1.0, snapshot.fill_ratio / HIGH_DENSITY_THRESHOLD)
    confidence = max(0.0, min(1.0, relative * density_factor))
    return CoordinateGuess(row, col, confidence)


# ══════════════════════════════════════════════════════════
#  Word strategy
# ══════════════════════════════════════════════════════════

def word_confidence(match_count: int) -> float:
    if match_count <= 0:
        return 0.0
    if match_count == 1:
        return SINGLE_MATCH_CONFIDENCE
    return 1.0 / match_count


def _word_candidates(snapshot: GameStateSnapshot, pattern: str) -> list[str]:
    return [w for w in find_matching_words(pattern, snapshot.word_bank)
            if w not in snapshot.guessed_words]


def evaluate_word(snapshot: GameStateSnapshot, known: KnownFacts, skill: float,
                  config: ExecutionerConfig, rng: random.Random) -> GuessRecommendation:
    if not snapshot.word_bank:
        return NoGuess("no word bank")

    threshold = config.word_guess_threshold(skill)
    best_slot = -1
    best_matches: list[str] = []
    best_confidence = 0.0

    for slot, pattern in _visible_patterns(snapshot, known):
        if not has_revealed_letters(pattern):
            continue
        candidates = _word_candidates(snapshot, pattern)
        if not candidates:
            continue
        confidence = word_confidence(len(candidates))
        if confidence > best_confidence:
            best_slot, best_matches, best_confidence = slot, candidates, confidence

    if not best_matches:
        return NoGuess("no pattern with matching words")
    if best_confidence < threshold or best_confidence < MIN_VIABLE_WORD_CONFIDENCE:
        return NoGuess(f"best word confidence {best_confidence:.0%} below {threshold:.0%}")

    word = rng.choice(best_matches)
    logger.debug("Word guess %s for slot %d (confidence %.0f%%, threshold %.0f%%)",
                 word, best_slot, best_confidence * 100, threshold * 100)
    return WordGuess(word, best_slot, best_confidence)


# ── Debug ─────────────────────────────────────────────────

def word_analysis(snapshot: GameStateSnapshot, known: KnownFacts, skill: float,
                  config: ExecutionerConfig) -> str:
    threshold = config.word_guess_threshold(skill)
    lines = [f"Word Guess Analysis (skill: {skill:.2f}, threshold: {threshold:.0%}):"]
    for i, pattern in enumerate(snapshot.word_patterns):
        if snapshot.words_solved[i]:
            lines.append(f"Word {i + 1}: {pattern} (SOLVED)")
            continue
        visible = known.mask_pattern(pattern)
        lines.append(f"Word {i + 1}: {visible}")
        if not has_revealed_letters(visible):
            lines.append("  -> No revealed letters, skipping")
            continue
        candidates = _word_candidates(snapshot, visible)
        confidence = word_confidence(len(candidates))
        lines.append(f"  -> {len(candidates)} matches, confidence: {confidence:.0%}")
        if candidates:
            shown = ", ".join(candidates[:5]) + ("..." if len(candidates) > 5 else "")
            lines.append(f"  -> Candidates: {shown}")
        lines.append("  -> WOULD GUESS" if confidence >= threshold else "  -> Below threshold")
    return "\n".join(lines)
