"""
simulation_runner.py – Headless Executioner-vs-scripted-player matches.

Runs N matches where a scripted player with a fixed hit probability plays
against the real AI core.  The AI goes through the same path a host game
uses (snapshot → take_turn → apply guess → record results), only with a
zero-length think delay.

Usage (from CLI):
    python main.py --simulate 50 --difficulty easy --seed 7

Each match:
    1. Both sides hide their words with WordPlacementEngine.
    2. Player and AI alternate one guess each, player first.
    3. The first side to uncover the other's grid wins; ``max_turns``
       rounds without a winner is a timeout.
"""

from __future__ import annotations

import asyncio
import logging
import random
from dataclasses import dataclass, field

import numpy as np

from settings import (
    DEFAULT_FIRST_WORD_LENGTH, DEFAULT_GRID_SIZE, DEFAULT_WORD_COUNT,
    SIM_MAX_TURNS, SIM_PLAYER_HIT_RATE,
)
from executioner.config import DifficultySetting, ExecutionerConfig
from executioner.data_logger import MatchLogger
from executioner.errors import ExecutionerError
from executioner.models import CoordinateGuess, GuessRecommendation, LetterGuess, WordGuess
from executioner.orchestrator import StrategyOrchestrator
from executioner.placement_engine import WordPlacementEngine
from executioner.stats import SessionStats
from systems.word_grid import GuessResult, HiddenWordGrid
from systems.word_lists import WORDS_BY_LENGTH, candidates_by_length, word_bank

logger = logging.getLogger(__name__)


async def _no_delay(_seconds: float):
    """Think-time stand-in: yields to the loop without waiting."""
    await asyncio.sleep(0)


# ══════════════════════════════════════════════════════════
#  Per-match result
# ══════════════════════════════════════════════════════════

@dataclass
class MatchResult:
    """Lightweight record for one simulated match."""
    match_number: int = 0
    winner: str = ""               # "player", "ai" or "timeout"
    turns: int = 0
    start_skill: float = 0.0
    final_skill: float = 0.0
    skill_increases: int = 0
    skill_decreases: int = 0
    ai_accuracy: float = 0.0
    player_accuracy: float = 0.0
    crossword: bool = False        # whether the AI's own words may cross
    stats: SessionStats | None = field(default=None, repr=False)


# ══════════════════════════════════════════════════════════
#  Simulation Runner
# ══════════════════════════════════════════════════════════

class SimulationRunner:
    """Run *n_matches* headless matches against a scripted player.

    Parameters
    ----------
    n_matches : int
        How many matches to run.
    player_difficulty : DifficultySetting | str
        Difficulty the simulated player "chose"; the AI starts inverted.
    seed : int | None
        Seeds every random source, so a run is reproducible.
    player_hit_rate : float
        Probability that each scripted player guess is a hit.
    logger_path : str | None
        CSV file to append one row per match to.
    """

    def __init__(self, n_matches: int = 10,
                 player_difficulty: DifficultySetting | str = DifficultySetting.NORMAL,
                 grid_size: int = DEFAULT_GRID_SIZE,
                 word_count: int = DEFAULT_WORD_COUNT,
                 seed: int | None = None,
                 player_hit_rate: float = SIM_PLAYER_HIT_RATE,
                 max_turns: int = SIM_MAX_TURNS,
                 logger_path: str | None = None,
                 config: ExecutionerConfig | None = None) -> None:
        self.cfg = config or ExecutionerConfig()
        self._n_matches = max(1, n_matches)
        self._difficulty = DifficultySetting.parse(player_difficulty)
        self._grid_size = grid_size
        self._word_count = word_count
        self._hit_rate = max(0.0, min(1.0, player_hit_rate))
        self._max_turns = max(1, max_turns)
        self._rng = random.Random(seed)
        self._match_logger = MatchLogger(logger_path) if logger_path else None
        self._results: list[MatchResult] = []

        lengths = sorted(WORDS_BY_LENGTH)
        self._word_lengths = [
            lengths[(DEFAULT_FIRST_WORD_LENGTH - lengths[0] + i) % len(lengths)]
            for i in range(word_count)
        ]
        self._word_bank = word_bank(set(self._word_lengths))

    @property
    def results(self) -> list[MatchResult]:
        return list(self._results)

    # ── Public entry points ───────────────────────────────

    def run(self) -> list[MatchResult]:
        """Execute all N matches on a fresh event loop."""
        return asyncio.run(self.run_async())

    async def run_async(self) -> list[MatchResult]:
        for i in range(1, self._n_matches + 1):
            logger.info("=== Simulation match %d / %d ===", i, self._n_matches)
            result = await self._run_one_match(i)
            self._results.append(result)
            logger.info(
                "Match %d: winner=%s  turns=%d  skill=%.2f->%.2f  (+%d/-%d)",
                i, result.winner, result.turns, result.start_skill,
                result.final_skill, result.skill_increases, result.skill_decreases,
            )
        return self._results

    # ── Single match ──────────────────────────────────────

    async def _run_one_match(self, match_number: int) -> MatchResult:
        rng = random.Random(self._rng.getrandbits(32))

        ai_engine = self._setup_side(rng)
        player_engine = self._setup_side(rng)
        ai_grid = HiddenWordGrid(self._grid_size, ai_engine.placements)
        player_grid = HiddenWordGrid(self._grid_size, player_engine.placements)

        ai = StrategyOrchestrator(self.cfg, rng=rng, sleep=_no_delay)
        ai.initialize(self._difficulty)
        stats = SessionStats(self._difficulty.value, ai.current_skill)

        winner = "timeout"
        turns = 0
        for turns in range(1, self._max_turns + 1):
            # ── Player turn ──
            hit = self._scripted_player_guess(ai_grid, rng)
            adjustment = ai.record_player_guess(hit)
            stats.record_player_guess(hit, ai.current_skill, adjustment)
            if ai_grid.is_cleared:
                winner = "player"
                break

            # ── AI turn ──
            guess = await ai.take_turn(player_grid.snapshot(self._word_bank))
            result = self._apply_ai_guess(player_grid, guess, ai)
            stats.record_ai_guess(guess.guess_type, result.hit)
            ai.end_turn()
            if player_grid.is_cleared:
                winner = "ai"
                break

        stats.result = winner
        result = MatchResult(
            match_number=match_number,
            winner=winner,
            turns=turns,
            start_skill=stats.start_skill,
            final_skill=stats.final_skill,
            skill_increases=stats.skill_increases,
            skill_decreases=stats.skill_decreases,
            ai_accuracy=stats.ai_accuracy,
            player_accuracy=stats.player_accuracy,
            crossword=ai_engine.crossword_enabled,
            stats=stats,
        )
        if self._match_logger is not None:
            self._match_logger.log_match(
                {**stats.as_dict(), "winner": winner, "turns": turns,
                 "crossword": ai_engine.crossword_enabled})
        return result

    def _setup_side(self, rng: random.Random) -> WordPlacementEngine:
        engine = WordPlacementEngine(self._grid_size, self._word_count,
                                     self._word_lengths, self.cfg, rng)
        if not engine.perform_setup(candidates_by_length(self._word_lengths)):
            raise ExecutionerError(
                f"Could not hide {self._word_count} words on a {self._grid_size}x"
                f"{self._grid_size} grid")
        return engine

    # ── Scripted player ───────────────────────────────────

    def _scripted_player_guess(self, grid: HiddenWordGrid, rng: random.Random) -> bool:
        """One coordinate guess (letters once every cell is found). Returns hit."""
        want_hit = rng.random() < self._hit_rate

        if not grid.all_coordinates_found:
            cells = grid.unguessed_cells(occupied=want_hit) or grid.unguessed_cells(not want_hit)
            row, col = rng.choice(cells)
            return grid.apply_coordinate(row, col).hit

        letters = grid.unguessed_letters(in_words=want_hit) or grid.unguessed_letters(not want_hit)
        return grid.apply_letter(rng.choice(letters)).hit

    # ── Applying AI guesses ───────────────────────────────

    @staticmethod
    def _apply_ai_guess(grid: HiddenWordGrid, guess: GuessRecommendation,
                        ai: StrategyOrchestrator) -> GuessResult:
        if isinstance(guess, LetterGuess):
            result = grid.apply_letter(guess.letter)
        elif isinstance(guess, CoordinateGuess):
            result = grid.apply_coordinate(guess.row, guess.col)
            if result.hit:
                ai.record_ai_hit(guess.row, guess.col)
        elif isinstance(guess, WordGuess):
            result = grid.apply_word(guess.word, guess.slot_index)
        else:
            raise ExecutionerError(f"AI produced an unusable guess: {guess!r}")

        for letter in result.revealed_letters:
            ai.record_revealed_letter(letter)
        return result

    # ── Summary ───────────────────────────────────────────

    def summary(self) -> dict:
        """Aggregate statistics over every finished match."""
        n = len(self._results)
        if n == 0:
            return {"matches": 0}

        winners = np.array([r.winner for r in self._results])
        turns = np.array([r.turns for r in self._results], dtype=float)
        final_skill = np.array([r.final_skill for r in self._results])
        changes = np.array([r.skill_increases + r.skill_decreases for r in self._results],
                           dtype=float)
        ai_acc = np.array([r.ai_accuracy for r in self._results])

        return {
            "matches": n,
            "player_win_rate": float(np.mean(winners == "player")),
            "ai_win_rate": float(np.mean(winners == "ai")),
            "timeout_rate": float(np.mean(winners == "timeout")),
            "mean_turns": float(turns.mean()),
            "std_turns": float(turns.std()),
            "mean_final_skill": float(final_skill.mean()),
            "std_final_skill": float(final_skill.std()),
            "mean_skill_changes": float(changes.mean()),
            "mean_ai_accuracy": float(ai_acc.mean()),
        }

    def print_summary(self) -> None:
        s = self.summary()
        if s["matches"] == 0:
            print("\nNo matches completed.")
            return

        print(f"\n{'=' * 58}")
        print(f"  Simulation Results  ({s['matches']} matches, "
              f"player on {self._difficulty.value})")
        print(f"{'=' * 58}")
        print(f"\n  Player wins : {s['player_win_rate']:>6.1%}")
        print(f"  AI wins     : {s['ai_win_rate']:>6.1%}")
        if s["timeout_rate"]:
            print(f"  Timeouts    : {s['timeout_rate']:>6.1%}")
        print(f"\n  Avg turns             : {s['mean_turns']:.1f} (std {s['std_turns']:.1f})")
        print(f"  Avg final skill       : {s['mean_final_skill']:.2f} "
              f"(std {s['std_final_skill']:.2f})")
        print(f"  Avg skill adjustments : {s['mean_skill_changes']:.1f}")
        print(f"  Avg AI accuracy       : {s['mean_ai_accuracy']:.1%}")
        print(f"\n{'=' * 58}\n")
