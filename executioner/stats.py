"""
stats.py  –  Per-session statistics for the Executioner.

SessionStats records, turn by turn, the AI's skill and the outcome of
every guess on both sides.  At session end it prints a formatted summary
and saves a skill-trend line graph via matplotlib.
"""

from __future__ import annotations

import logging

logger = logging.getLogger(__name__)

import matplotlib
matplotlib.use("Agg")  # headless backend; the CLI and tests never open a window
import matplotlib.pyplot as plt

from executioner.difficulty_adapter import Adjustment
from executioner.models import GuessType


class SessionStats:
    """Tracks one session's guesses and skill, and produces end-of-session reports.

    Attributes tracked:
        player_difficulty  – str
        skill_history      – list[float]  (AI skill after each player guess)
        player_hits        – int
        player_misses      – int
        ai_guesses         – dict[GuessType, int]
        ai_hits            – int
        skill_increases    – int
        skill_decreases    – int
    """

    def __init__(self, player_difficulty: str, start_skill: float):
        self.player_difficulty: str = player_difficulty
        self.start_skill: float = start_skill

        self.skill_history: list[float] = [start_skill]
        self.player_hits: int = 0
        self.player_misses: int = 0
        self.ai_guesses: dict[GuessType, int] = {
            GuessType.LETTER: 0, GuessType.COORDINATE: 0, GuessType.WORD: 0}
        self.ai_hits: int = 0
        self.skill_increases: int = 0
        self.skill_decreases: int = 0
        self.result: str = ""

    # ===========================================================
    #  Recorders
    # ===========================================================

    def record_player_guess(self, was_hit: bool, skill_after: float,
                            adjustment: Adjustment = Adjustment.NONE):
        """Call after the adapter has seen a player guess."""
        if was_hit:
            self.player_hits += 1
        else:
            self.player_misses += 1
        if adjustment is Adjustment.INCREASED:
            self.skill_increases += 1
        elif adjustment is Adjustment.DECREASED:
            self.skill_decreases += 1
        self.skill_history.append(skill_after)

    def record_ai_guess(self, guess_type: GuessType, was_hit: bool):
        if guess_type in self.ai_guesses:
            self.ai_guesses[guess_type] += 1
        if was_hit:
            self.ai_hits += 1

    @property
    def ai_guess_count(self) -> int:
        return sum(self.ai_guesses.values())

    @property
    def final_skill(self) -> float:
        return self.skill_history[-1]

    @property
    def player_accuracy(self) -> float:
        total = self.player_hits + self.player_misses
        return self.player_hits / total if total else 0.0

    @property
    def ai_accuracy(self) -> float:
        return self.ai_hits / self.ai_guess_count if self.ai_guess_count else 0.0

    # ===========================================================
    #  End-of-session
    # ===========================================================

    def end_session(self, result: str, plot_path: str | None = None):
        """Finalise stats, print summary and optionally save the skill graph.

        Parameters
        ----------
        result    : "player", "ai" or "draw"
        plot_path : where to write the PNG; no graph when None
        """
        self.result = result
        self.print_summary()
        if plot_path:
            self.plot_skill_trend(plot_path)

    def print_summary(self):
        print("\n" + "=" * 52)
        print("  SESSION SUMMARY")
        print("=" * 52)
        print(f"  Result           : {self.result or 'in progress'}")
        print(f"  Player Difficulty: {self.player_difficulty}")
        print(f"  AI Skill         : {self.start_skill:.2f} -> {self.final_skill:.2f}")
        print("-" * 52)
        print(f"  Player Guesses   : {self.player_hits + self.player_misses} "
              f"({self.player_accuracy:.0%} hit)")
        print(f"  AI Guesses       : {self.ai_guess_count} ({self.ai_accuracy:.0%} hit)")
        print(f"    letters        : {self.ai_guesses[GuessType.LETTER]}")
        print(f"    coordinates    : {self.ai_guesses[GuessType.COORDINATE]}")
        print(f"    words          : {self.ai_guesses[GuessType.WORD]}")
        print(f"  Skill Increases  : {self.skill_increases}")
        print(f"  Skill Decreases  : {self.skill_decreases}")
        print("=" * 52 + "\n")

    def plot_skill_trend(self, path: str) -> str:
        """Save a line graph of skill_history to *path* and return the path."""
        fig, ax = plt.subplots()
        ax.plot(range(len(self.skill_history)), self.skill_history, marker="o", markersize=3)
        ax.set_xlabel("Player guesses")
        ax.set_ylabel("AI skill")
        ax.set_ylim(0.0, 1.0)
        ax.set_title(f"AI Skill Trend (player on {self.player_difficulty})")
        ax.grid(True)

        fig.savefig(path, dpi=100, bbox_inches="tight")
        plt.close(fig)
        logger.info("Skill graph saved to %s", path)
        return path

    # ===========================================================
    #  Data accessors
    # ===========================================================

    def as_dict(self) -> dict:
        return {
            "player_difficulty": self.player_difficulty,
            "result":            self.result,
            "start_skill":       round(self.start_skill, 2),
            "final_skill":       round(self.final_skill, 2),
            "player_hits":       self.player_hits,
            "player_misses":     self.player_misses,
            "ai_letters":        self.ai_guesses[GuessType.LETTER],
            "ai_coordinates":    self.ai_guesses[GuessType.COORDINATE],
            "ai_words":          self.ai_guesses[GuessType.WORD],
            "ai_hits":           self.ai_hits,
            "skill_increases":   self.skill_increases,
            "skill_decreases":   self.skill_decreases,
        }
