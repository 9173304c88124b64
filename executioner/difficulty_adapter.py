"""
difficulty_adapter.py – Rubber-banding skill control with adaptive thresholds.

Keeps matches close by adjusting AI skill from the player's recent results:

  Player on a hit streak   →  AI sharpens:  skill += step
  Player on a miss streak  →  AI eases up:  skill -= step

Streaks are read from a fixed-size ring buffer of the last N player guesses;
once a streak triggers a change the buffer is cleared (the streak is spent).

The rubber band itself adapts.  If skill keeps moving the same way the
thresholds shift so the AI does not ratchet to one extreme:

  Player dominating  →  hits_to_increase -1, misses_to_decrease +1
  Player struggling  →  hits_to_increase +1, misses_to_decrease -1

Everything is clamp arithmetic; no call here raises in normal play.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import IntEnum

from executioner.config import DifficultySetting, ExecutionerConfig

logger = logging.getLogger(__name__)


class Adjustment(IntEnum):
    """What a recorded guess did to the AI's skill."""

    NONE = 0
    INCREASED = 1
    DECREASED = -1


@dataclass(frozen=True)
class DifficultyState:
    """Point-in-time copy of the adapter's live state."""

    skill: float
    hits_to_increase: int
    misses_to_decrease: int
    consecutive_increases: int
    consecutive_decreases: int
    recent_outcomes: tuple[bool, ...]


# ══════════════════════════════════════════════════════════
#  Ring buffer
# ══════════════════════════════════════════════════════════

class _OutcomeRing:
    """Fixed-capacity circular buffer of hit/miss outcomes."""

    def __init__(self, capacity: int):
        self._slots: list[bool] = [False] * capacity
        self._capacity = capacity
        self._next = 0        # index of the next write
        self._count = 0

    def __len__(self) -> int:
        return self._count

    def push(self, outcome: bool):
        self._slots[self._next] = outcome
        self._next = (self._next + 1) % self._capacity
        self._count = min(self._count + 1, self._capacity)

    def clear(self):
        self._next = 0
        self._count = 0

    def trailing(self, target: bool) -> int:
        """Length of the run of *target* ending at the most recent write."""
        run = 0
        idx = self._next
        for _ in range(self._count):
            idx = (idx - 1) % self._capacity
            if self._slots[idx] != target:
                break
            run += 1
        return run

    def ordered(self) -> tuple[bool, ...]:
        """Contents oldest → newest."""
        start = (self._next - self._count) % self._capacity
        return tuple(self._slots[(start + i) % self._capacity] for i in range(self._count))


# ══════════════════════════════════════════════════════════
#  Difficulty Adapter
# ══════════════════════════════════════════════════════════

class DifficultyAdapter:
    """Owns the AI's current skill and the streak thresholds that move it.

    The *player's* difficulty is inverted to seed the AI: a player who picks
    Easy faces an AI that starts from the Hard profile, and vice versa.

    Usage:
        adapter = DifficultyAdapter(config, DifficultySetting.NORMAL)
        adapter.record_player_guess(was_hit=True)
        skill = adapter.current_skill
    """

    def __init__(self, config: ExecutionerConfig | None = None,
                 player_difficulty: DifficultySetting = DifficultySetting.NORMAL):
        self.cfg = config or ExecutionerConfig()
        self._player_difficulty = player_difficulty
        self._ai_difficulty = player_difficulty.inverse()

        self._recent = _OutcomeRing(self.cfg.recent_guesses_to_track)
        self._skill: float = 0.0
        self._hits_to_increase: int = 0
        self._misses_to_decrease: int = 0
        self._consecutive_increases: int = 0
        self._consecutive_decreases: int = 0

        self._seed_from_difficulty()
        logger.info(
            "Initialized for player %s (AI %s) - skill %.2f, hits_to_increase %d, "
            "misses_to_decrease %d",
            player_difficulty.name, self._ai_difficulty.name, self._skill,
            self._hits_to_increase, self._misses_to_decrease,
        )

    # ── Properties ────────────────────────────────────────

    @property
    def current_skill(self) -> float:
        return self._skill

    @property
    def hits_to_increase(self) -> int:
        return self._hits_to_increase

    @property
    def misses_to_decrease(self) -> int:
        return self._misses_to_decrease

    @property
    def consecutive_increases(self) -> int:
        return self._consecutive_increases

    @property
    def consecutive_decreases(self) -> int:
        return self._consecutive_decreases

    @property
    def player_difficulty(self) -> DifficultySetting:
        return self._player_difficulty

    @property
    def ai_difficulty(self) -> DifficultySetting:
        return self._ai_difficulty

    def recent_outcomes(self) -> tuple[bool, ...]:
        return self._recent.ordered()

    def state(self) -> DifficultyState:
        return DifficultyState(
            skill=self._skill,
            hits_to_increase=self._hits_to_increase,
            misses_to_decrease=self._misses_to_decrease,
            consecutive_increases=self._consecutive_increases,
            consecutive_decreases=self._consecutive_decreases,
            recent_outcomes=self._recent.ordered(),
        )

    # ══════════════════════════════════════════════════════
    #  Event Recording
    # ══════════════════════════════════════════════════════

    def record_player_guess(self, was_hit: bool) -> Adjustment:
        """Feed one player guess result; may move skill. Call after every player guess."""
        self._recent.push(bool(was_hit))

        if self._recent.trailing(True) >= self._hits_to_increase:
            self._increase_skill()
            return Adjustment.INCREASED
        if self._recent.trailing(False) >= self._misses_to_decrease:
            self._decrease_skill()
            return Adjustment.DECREASED
        return Adjustment.NONE

    def reset(self, player_difficulty: DifficultySetting | None = None):
        """Back to the starting profile for a new game."""
        if player_difficulty is not None:
            self._player_difficulty = player_difficulty
            self._ai_difficulty = player_difficulty.inverse()
        self._seed_from_difficulty()
        logger.info("Reset for player %s - skill %.2f",
                    self._player_difficulty.name, self._skill)

    # ══════════════════════════════════════════════════════
    #  Skill adjustment
    # ══════════════════════════════════════════════════════

    def _increase_skill(self):
        """Player doing well → make the AI harder."""
        old = self._skill
        self._skill = self.cfg.clamp_skill(self._skill + self.cfg.skill_step)
        self._consecutive_increases += 1
        self._consecutive_decreases = 0
        logger.info("AI skill INCREASED: %.2f -> %.2f (player doing well)", old, self._skill)

        if self._consecutive_increases >= self.cfg.consecutive_adjustments_to_adapt:
            self._adapt_for_dominating_player()
        self._recent.clear()

    def _decrease_skill(self):
        """Player struggling → make the AI easier."""
        old = self._skill
        self._skill = self.cfg.clamp_skill(self._skill - self.cfg.skill_step)
        self._consecutive_decreases += 1
        self._consecutive_increases = 0
        logger.info("AI skill DECREASED: %.2f -> %.2f (player struggling)", old, self._skill)

        if self._consecutive_decreases >= self.cfg.consecutive_adjustments_to_adapt:
            self._adapt_for_struggling_player()
        self._recent.clear()

    # ══════════════════════════════════════════════════════
    #  Adaptive thresholds
    # ══════════════════════════════════════════════════════

    def _adapt_for_dominating_player(self):
        old_hits, old_misses = self._hits_to_increase, self._misses_to_decrease
        self._hits_to_increase = self.cfg.clamp_hits_to_increase(self._hits_to_increase - 1)
        self._misses_to_decrease = self.cfg.clamp_misses_to_decrease(self._misses_to_decrease + 1)
        self._consecutive_increases = 0
        logger.info(
            "Thresholds adapted (player dominating) - hits_to_increase %d -> %d, "
            "misses_to_decrease %d -> %d",
            old_hits, self._hits_to_increase, old_misses, self._misses_to_decrease,
        )

    def _adapt_for_struggling_player(self):
        old_hits, old_misses = self._hits_to_increase, self._misses_to_decrease
        self._hits_to_increase = self.cfg.clamp_hits_to_increase(self._hits_to_increase + 1)
        self._misses_to_decrease = self.cfg.clamp_misses_to_decrease(self._misses_to_decrease - 1)
        self._consecutive_decreases = 0
        logger.info(
            "Thresholds adapted (player struggling) - hits_to_increase %d -> %d, "
            "misses_to_decrease %d -> %d",
            old_hits, self._hits_to_increase, old_misses, self._misses_to_decrease,
        )

    # ── Internals ─────────────────────────────────────────

    def _seed_from_difficulty(self):
        cfg = self.cfg
        ai = self._ai_difficulty
        self._skill = cfg.clamp_skill(cfg.start_skill_for(ai))
        self._hits_to_increase = cfg.clamp_hits_to_increase(cfg.hits_to_increase_for(ai))
        self._misses_to_decrease = cfg.clamp_misses_to_decrease(cfg.misses_to_decrease_for(ai))
        self._consecutive_increases = 0
        self._consecutive_decreases = 0
        self._recent.clear()

    # ── Debug ─────────────────────────────────────────────

    def debug_summary(self) -> str:
        recent = "".join("H" if hit else "M" for hit in self._recent.ordered()) or "(none)"
        return (
            f"Skill: {self._skill:.2f}\n"
            f"HitsToIncrease: {self._hits_to_increase}\n"
            f"MissesToDecrease: {self._misses_to_decrease}\n"
            f"Consec. Increases: {self._consecutive_increases}\n"
            f"Consec. Decreases: {self._consecutive_decreases}\n"
            f"Recent Guesses: {recent}"
        )
