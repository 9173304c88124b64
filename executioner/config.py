"""
config.py – Tunable parameters for the Executioner AI opponent.

One dataclass gathers every knob the core reads: skill bounds, rubber-band
thresholds per difficulty, memory decay, think time, strategy weighting and
word placement.  Defaults come from ``settings.py``.

The config is read-only once handed to a component; nothing in the core
writes back into it.
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass, fields
from enum import Enum
from typing import Callable

from settings import (
    MIN_SKILL, MAX_SKILL, SKILL_STEP, PERFECT_RECALL_SKILL,
    EASY_START_SKILL, NORMAL_START_SKILL, HARD_START_SKILL,
    EASY_THRESHOLDS, NORMAL_THRESHOLDS, HARD_THRESHOLDS,
    MIN_HITS_TO_INCREASE, MAX_HITS_TO_INCREASE,
    MIN_MISSES_TO_DECREASE, MAX_MISSES_TO_DECREASE,
    CONSECUTIVE_ADJUSTMENTS_TO_ADAPT, RECENT_GUESSES_TO_TRACK,
    MAX_FORGET_CHANCE, ALWAYS_REMEMBER_RECENT,
    MIN_THINK_TIME, MAX_THINK_TIME,
    DENSITY_WEIGHT_BANDS, LETTER_POOL_BANDS, COORDINATE_POOL_BANDS,
    WORD_GUESS_RISK_FACTOR, MAX_PLACEMENT_ATTEMPTS, CROSSWORD_PROBABILITY,
)

from executioner.errors import ConfigError

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════
#  Difficulty labels
# ══════════════════════════════════════════════════════════

class DifficultySetting(Enum):
    """Difficulty label, either chosen by the player or derived for the AI."""

    EASY = "easy"
    NORMAL = "normal"
    HARD = "hard"

    def inverse(self) -> "DifficultySetting":
        """Player Easy → AI Hard, Player Hard → AI Easy, Normal stays Normal."""
        if self is DifficultySetting.EASY:
            return DifficultySetting.HARD
        if self is DifficultySetting.HARD:
            return DifficultySetting.EASY
        return DifficultySetting.NORMAL

    @classmethod
    def parse(cls, value: "str | DifficultySetting") -> "DifficultySetting":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise ConfigError(f"Unknown difficulty: {value!r}") from None


# ══════════════════════════════════════════════════════════
#  Configuration
# ══════════════════════════════════════════════════════════

@dataclass
class ExecutionerConfig:
    """Tunable knobs for every subsystem of the AI core."""

    # ── Skill bounds ──────────────────────────────────────
    min_skill: float = MIN_SKILL
    max_skill: float = MAX_SKILL
    skill_step: float = SKILL_STEP
    perfect_recall_skill: float = PERFECT_RECALL_SKILL

    # ── Starting skill (indexed by the AI's difficulty) ───
    easy_start_skill: float = EASY_START_SKILL
    normal_start_skill: float = NORMAL_START_SKILL
    hard_start_skill: float = HARD_START_SKILL

    # ── Starting thresholds ───────────────────────────────
    easy_hits_to_increase: int = EASY_THRESHOLDS[0]
    easy_misses_to_decrease: int = EASY_THRESHOLDS[1]
    normal_hits_to_increase: int = NORMAL_THRESHOLDS[0]
    normal_misses_to_decrease: int = NORMAL_THRESHOLDS[1]
    hard_hits_to_increase: int = HARD_THRESHOLDS[0]
    hard_misses_to_decrease: int = HARD_THRESHOLDS[1]

    # ── Adaptive thresholds ───────────────────────────────
    consecutive_adjustments_to_adapt: int = CONSECUTIVE_ADJUSTMENTS_TO_ADAPT
    min_hits_to_increase: int = MIN_HITS_TO_INCREASE
    max_hits_to_increase: int = MAX_HITS_TO_INCREASE
    min_misses_to_decrease: int = MIN_MISSES_TO_DECREASE
    max_misses_to_decrease: int = MAX_MISSES_TO_DECREASE
    recent_guesses_to_track: int = RECENT_GUESSES_TO_TRACK

    # ── Memory ────────────────────────────────────────────
    max_forget_chance: float = MAX_FORGET_CHANCE
    always_remember_recent: int = ALWAYS_REMEMBER_RECENT
    forget_chance_fn: Callable[[float], float] | None = None

    # ── Timing (seconds) ──────────────────────────────────
    min_think_time: float = MIN_THINK_TIME
    max_think_time: float = MAX_THINK_TIME

    # ── Strategy ──────────────────────────────────────────
    density_weight_bands: tuple = DENSITY_WEIGHT_BANDS
    letter_pool_bands: tuple = LETTER_POOL_BANDS
    coordinate_pool_bands: tuple = COORDINATE_POOL_BANDS
    word_guess_risk_factor: float = WORD_GUESS_RISK_FACTOR

    # ── Placement ─────────────────────────────────────────
    max_placement_attempts: int = MAX_PLACEMENT_ATTEMPTS
    crossword_probability: float = CROSSWORD_PROBABILITY

    def __post_init__(self):
        if self.min_skill > self.max_skill:
            raise ConfigError(
                f"min_skill ({self.min_skill}) exceeds max_skill ({self.max_skill})")
        if self.min_hits_to_increase > self.max_hits_to_increase:
            raise ConfigError("min_hits_to_increase exceeds max_hits_to_increase")
        if self.min_misses_to_decrease > self.max_misses_to_decrease:
            raise ConfigError("min_misses_to_decrease exceeds max_misses_to_decrease")
        if self.recent_guesses_to_track < 1:
            raise ConfigError("recent_guesses_to_track must be at least 1")
        if self.always_remember_recent < 0:
            raise ConfigError("always_remember_recent must not be negative")
        if self.max_placement_attempts < 1:
            raise ConfigError("max_placement_attempts must be at least 1")
        for name in ("density_weight_bands", "letter_pool_bands", "coordinate_pool_bands"):
            if not getattr(self, name):
                raise ConfigError(f"{name} must not be empty")

        # Orderings that can be repaired are repaired, not rejected
        if self.min_think_time > self.max_think_time:
            logger.warning("min_think_time %.2f > max_think_time %.2f; clamping",
                           self.min_think_time, self.max_think_time)
            self.min_think_time = self.max_think_time
        self.density_weight_bands = tuple(
            sorted(self.density_weight_bands, key=lambda band: band[0], reverse=True))

    @classmethod
    def from_dict(cls, data: dict) -> "ExecutionerConfig":
        """Build a config from a plain mapping (e.g. parsed JSON)."""
        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            raise ConfigError(f"Unknown config keys: {sorted(unknown)}")
        return cls(**data)

    # ══════════════════════════════════════════════════════
    #  Per-difficulty lookups
    # ══════════════════════════════════════════════════════

    def start_skill_for(self, difficulty: DifficultySetting) -> float:
        return {
            DifficultySetting.EASY: self.easy_start_skill,
            DifficultySetting.NORMAL: self.normal_start_skill,
            DifficultySetting.HARD: self.hard_start_skill,
        }[difficulty]

    def hits_to_increase_for(self, difficulty: DifficultySetting) -> int:
        return {
            DifficultySetting.EASY: self.easy_hits_to_increase,
            DifficultySetting.NORMAL: self.normal_hits_to_increase,
            DifficultySetting.HARD: self.hard_hits_to_increase,
        }[difficulty]

    def misses_to_decrease_for(self, difficulty: DifficultySetting) -> int:
        return {
            DifficultySetting.EASY: self.easy_misses_to_decrease,
            DifficultySetting.NORMAL: self.normal_misses_to_decrease,
            DifficultySetting.HARD: self.hard_misses_to_decrease,
        }[difficulty]

    # ══════════════════════════════════════════════════════
    #  Clamping
    # ══════════════════════════════════════════════════════

    def clamp_skill(self, skill: float) -> float:
        return max(self.min_skill, min(self.max_skill, skill))

    def clamp_hits_to_increase(self, value: int) -> int:
        return max(self.min_hits_to_increase, min(self.max_hits_to_increase, value))

    def clamp_misses_to_decrease(self, value: int) -> int:
        return max(self.min_misses_to_decrease, min(self.max_misses_to_decrease, value))

    # ══════════════════════════════════════════════════════
    #  Derived values
    # ══════════════════════════════════════════════════════

    def forget_chance(self, skill: float) -> float:
        """Probability of forgetting an older fact; rises as skill falls.

        Default: ``(1 - skill) * max_forget_chance``
        (skill 0.15 → 25.5%, skill 0.5 → 15%, skill 0.95 → 1.5%).
        """
        if self.forget_chance_fn is not None:
            chance = self.forget_chance_fn(skill)
        else:
            chance = (1.0 - skill) * self.max_forget_chance
        return max(0.0, min(1.0, chance))

    def word_guess_threshold(self, skill: float) -> float:
        """Minimum confidence for a word guess; lower for bolder, higher-skill AI."""
        return 1.0 - skill * self.word_guess_risk_factor

    def random_think_time(self, rng: random.Random) -> float:
        return rng.uniform(self.min_think_time, self.max_think_time)

    def strategy_weights_for_density(self, fill_ratio: float) -> tuple[float, float]:
        """Return ``(letter_weight, coordinate_weight)`` for a grid fill ratio."""
        for floor, letter_w, coord_w in self.density_weight_bands:
            if fill_ratio >= floor:
                return letter_w, coord_w
        _, letter_w, coord_w = self.density_weight_bands[-1]
        return letter_w, coord_w

    def letter_pool_size(self, skill: float) -> int:
        return _pool_size(self.letter_pool_bands, skill)

    def coordinate_pool_size(self, skill: float) -> int:
        return _pool_size(self.coordinate_pool_bands, skill)


def _pool_size(bands: tuple, skill: float) -> int:
    """Top-N candidates to pick from; smaller pools mean sharper play."""
    for floor, size in bands:
        if skill >= floor:
            return max(1, size)
    return max(1, bands[-1][1])
