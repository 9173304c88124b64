"""
orchestrator.py – The Executioner's brain: one decision per AI turn.

Architecture:
    orchestrator.StrategyOrchestrator
      ├── difficulty_adapter.DifficultyAdapter   (rubber-banded skill)
      ├── memory_model.MemoryModel               (skill-gated recall)
      └── strategies                             (letter / coordinate / word)

Turn lifecycle:

    IDLE ──take_turn──▶ THINKING ──think time──▶ DECIDED ──event──▶ IDLE

The think-time wait is the only suspension point.  Everything after it runs
synchronously, so the snapshot the evaluators read cannot change under them.
A turn requested while another is in flight is rejected, never queued.

Decision order:
  1. A confident whole-word guess wins outright.
  2. Otherwise grid fill ratio weights letter vs coordinate; one family is
     sampled and the other is the fallback.
  3. Both families exhausted → NoLegalMoveError.
"""

from __future__ import annotations

import asyncio
import logging
import random
from enum import IntEnum
from typing import Awaitable, Callable

from executioner import grid_analyzer, strategies
from executioner.config import DifficultySetting, ExecutionerConfig
from executioner.difficulty_adapter import Adjustment, DifficultyAdapter
from executioner.errors import NoLegalMoveError
from executioner.events import (
    CoordinateGuessed, EventSink, ExecutionerEvent, LetterGuessed,
    ThinkingComplete, ThinkingStarted, WordGuessed,
)
from executioner.memory_model import MemoryModel
from executioner.models import (
    CoordinateGuess, GameStateSnapshot, GuessRecommendation, LetterGuess,
    NoGuess, WordGuess,
)

logger = logging.getLogger(__name__)


class TurnState(IntEnum):
    """Where the orchestrator is in the current AI turn."""

    IDLE = 0
    THINKING = 1
    DECIDED = 2


class StrategyOrchestrator:
    """Owns one game session's AI: skill, memory and the turn state machine.

    Usage:
        ai = StrategyOrchestrator(sink=host.on_ai_event, rng=random.Random(3))
        ai.initialize(DifficultySetting.NORMAL)
        guess = await ai.take_turn(snapshot)
        ai.record_ai_hit(row, col)
        ai.end_turn()
    """

    def __init__(self, config: ExecutionerConfig | None = None,
                 sink: EventSink | None = None,
                 rng: random.Random | None = None,
                 sleep: Callable[[float], Awaitable[None]] = asyncio.sleep):
        self.cfg = config or ExecutionerConfig()
        self._sink = sink
        self._rng = rng or random.Random()
        self._sleep = sleep

        self._adapter: DifficultyAdapter | None = None
        self._memory: MemoryModel | None = None
        self._state = TurnState.IDLE
        self._task: asyncio.Task | None = None
        self._turns_taken = 0

    # ── Properties ────────────────────────────────────────

    @property
    def is_initialized(self) -> bool:
        return self._adapter is not None

    @property
    def state(self) -> TurnState:
        return self._state

    @property
    def is_thinking(self) -> bool:
        return self._state != TurnState.IDLE

    @property
    def current_skill(self) -> float:
        return self._adapter.current_skill if self._adapter else self.cfg.normal_start_skill

    @property
    def adapter(self) -> DifficultyAdapter | None:
        return self._adapter

    @property
    def memory(self) -> MemoryModel | None:
        return self._memory

    @property
    def turns_taken(self) -> int:
        return self._turns_taken

    # ══════════════════════════════════════════════════════
    #  Lifecycle
    # ══════════════════════════════════════════════════════

    def initialize(self, player_difficulty: DifficultySetting | str):
        """Start a session against a player who chose *player_difficulty*."""
        if self._state != TurnState.IDLE:
            logger.warning("initialize called while AI is %s - ignored", self._state.name)
            return
        difficulty = DifficultySetting.parse(player_difficulty)
        self._adapter = DifficultyAdapter(self.cfg, difficulty)
        self._memory = MemoryModel(self.cfg, rng=self._rng)
        self._turns_taken = 0
        logger.info("Executioner initialized - player %s, AI skill %.2f",
                    difficulty.name, self._adapter.current_skill)

    def reset(self):
        """New game, same difficulty."""
        if not self._guard_between_turns("reset"):
            return
        self._adapter.reset()
        self._memory.reset()
        self._turns_taken = 0

    # ══════════════════════════════════════════════════════
    #  Turn execution
    # ══════════════════════════════════════════════════════

    async def take_turn(self, snapshot: GameStateSnapshot) -> GuessRecommendation | None:
        """Think, decide and announce one guess; None if the turn was refused."""
        if not self._begin_turn():
            return None
        return await self._run_turn(snapshot)

    def start_turn(self, snapshot: GameStateSnapshot) -> asyncio.Task | None:
        """Schedule a turn on the running loop; None if one is already in flight."""
        loop = asyncio.get_running_loop()
        if not self._begin_turn():
            return None
        self._task = loop.create_task(self._run_turn(snapshot))
        self._task.add_done_callback(self._on_task_done)
        return self._task

    def cancel_turn(self) -> bool:
        """Cancel a scheduled turn that is still thinking."""
        if self._task is None or self._task.done():
            return False
        self._task.cancel()
        return True

    def _on_task_done(self, task: asyncio.Task):
        # A task cancelled before its first step never reaches _run_turn
        if task.cancelled():
            self._state = TurnState.IDLE

    def _begin_turn(self) -> bool:
        if not self._guard_initialized("take_turn"):
            return False
        if self._state != TurnState.IDLE:
            logger.warning("Turn requested while %s - ignored", self._state.name)
            return False
        self._state = TurnState.THINKING
        return True

    async def _run_turn(self, snapshot: GameStateSnapshot) -> GuessRecommendation:
        try:
            think_time = self.cfg.random_think_time(self._rng)
            self._emit(ThinkingStarted(think_time))
            try:
                await self._sleep(think_time)
            except asyncio.CancelledError:
                logger.info("AI turn cancelled while thinking")
                raise

            recommendation = self.decide(snapshot)
            self._emit(ThinkingComplete())
            self._state = TurnState.DECIDED
            self._emit(self._event_for(recommendation))
            self._turns_taken += 1
            return recommendation
        finally:
            self._state = TurnState.IDLE

    # ══════════════════════════════════════════════════════
    #  Decision
    # ══════════════════════════════════════════════════════

    def decide(self, snapshot: GameStateSnapshot) -> GuessRecommendation:
        """Pick the next guess synchronously; no think delay, no events."""
        if not self._guard_initialized("decide"):
            return NoGuess("not initialized")

        skill = self._adapter.current_skill
        snapshot = snapshot.with_skill(skill)
        known = self._memory.known_facts(skill)

        word = strategies.evaluate_word(snapshot, known, skill, self.cfg, self._rng)
        if word.is_valid:
            logger.debug("Decision: %s", word)
            return word

        letter_w, coord_w = self.cfg.strategy_weights_for_density(snapshot.fill_ratio)
        total = letter_w + coord_w
        letter_share = letter_w / total if total > 0 else 0.5

        families = [strategies.evaluate_letter, strategies.evaluate_coordinate]
        if self._rng.random() >= letter_share:
            families.reverse()
        logger.debug("Fill %.0f%% (%s) - letter weight %.2f, trying %s first",
                     snapshot.fill_ratio * 100,
                     grid_analyzer.density_category(snapshot.fill_ratio),
                     letter_share, families[0].__name__)

        for evaluate in families:
            recommendation = evaluate(snapshot, known, skill, self.cfg, self._rng)
            if recommendation.is_valid:
                logger.debug("Decision: %s", recommendation)
                return recommendation

        raise NoLegalMoveError("No letter or coordinate left to guess")

    # ══════════════════════════════════════════════════════
    #  Inbound signals from the host
    # ══════════════════════════════════════════════════════

    def record_player_guess(self, was_hit: bool) -> Adjustment | None:
        if not self._guard_between_turns("record_player_guess"):
            return None
        return self._adapter.record_player_guess(was_hit)

    def record_ai_hit(self, row: int, col: int):
        if self._guard_between_turns("record_ai_hit"):
            self._memory.record_hit(row, col)

    def record_revealed_letter(self, letter: str):
        if self._guard_between_turns("record_revealed_letter"):
            self._memory.record_revealed_letter(letter)

    def end_turn(self):
        if self._guard_between_turns("end_turn"):
            self._memory.advance_turn()

    # ── Internals ─────────────────────────────────────────

    def _guard_initialized(self, action: str) -> bool:
        if self._adapter is None:
            logger.warning("%s called before initialize() - ignored", action)
            return False
        return True

    def _guard_between_turns(self, action: str) -> bool:
        if not self._guard_initialized(action):
            return False
        if self._state != TurnState.IDLE:
            logger.warning("%s called while AI is %s - ignored", action, self._state.name)
            return False
        return True

    def _emit(self, event: ExecutionerEvent):
        if self._sink is not None:
            self._sink(event)

    @staticmethod
    def _event_for(recommendation: GuessRecommendation) -> ExecutionerEvent:
        if isinstance(recommendation, LetterGuess):
            return LetterGuessed(recommendation.letter)
        if isinstance(recommendation, CoordinateGuess):
            return CoordinateGuessed(recommendation.row, recommendation.col)
        if isinstance(recommendation, WordGuess):
            return WordGuessed(recommendation.word, recommendation.slot_index)
        raise TypeError(f"Cannot announce {recommendation!r}")

    # ── Debug ─────────────────────────────────────────────

    def debug_summary(self) -> str:
        if self._adapter is None:
            return "Executioner: not initialized"
        skill = self._adapter.current_skill
        return (
            f"=== Executioner ===\n"
            f"State: {self._state.name}\n"
            f"Turns: {self._turns_taken}\n"
            f"--- Difficulty ---\n{self._adapter.debug_summary()}\n"
            f"--- Memory ---\n{self._memory.debug_summary(skill)}"
        )

    def strategy_analysis(self, snapshot: GameStateSnapshot, top_n: int = 5) -> str:
        """Score breakdown for all three strategies without making a guess."""
        if not self._guard_initialized("strategy_analysis"):
            return "Executioner: not initialized"

        skill = self._adapter.current_skill
        snapshot = snapshot.with_skill(skill)
        known = self._memory.known_facts(skill)
        letter_w, coord_w = self.cfg.strategy_weights_for_density(snapshot.fill_ratio)

        lines = [
            f"Skill: {skill:.2f}",
            f"Fill: {snapshot.fill_ratio:.0%} ({grid_analyzer.density_category(snapshot.fill_ratio)})",
            f"Weights: letter {letter_w:.2f} / coordinate {coord_w:.2f}",
            f"Letter pool: {self.cfg.letter_pool_size(skill)}",
        ]
        for i, (letter, score) in enumerate(strategies.letter_scores(snapshot, known)[:top_n]):
            lines.append(f"  {i + 1}. {letter}: {score:.2f}")
        lines.append(f"Coordinate pool: {self.cfg.coordinate_pool_size(skill)}")
        for i, ((row, col), score) in enumerate(
                strategies.coordinate_scores(snapshot, known)[:top_n]):
            lines.append(f"  {i + 1}. {grid_analyzer.coordinate_to_string(row, col)}: {score:.2f}")
        lines.append(strategies.word_analysis(snapshot, known, skill, self.cfg))
        return "\n".join(lines)
