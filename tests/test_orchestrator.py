"""
Tests for the StrategyOrchestrator turn state machine and decision logic.

Async turns run under ``asyncio.run`` with an injected sleep so no test
waits on a real think delay.
"""

import asyncio
import random

import pytest

from settings import ALPHABET
from executioner.config import DifficultySetting, ExecutionerConfig
from executioner.difficulty_adapter import Adjustment
from executioner.errors import NoLegalMoveError
from executioner.events import (
    CoordinateGuessed, EventRecorder, LetterGuessed, ThinkingComplete, ThinkingStarted,
    WordGuessed,
)
from executioner.models import CoordinateGuess, GameStateSnapshot, GuessType, WordGuess
from executioner.orchestrator import StrategyOrchestrator, TurnState

SNAPSHOT = GameStateSnapshot(8)


async def _no_sleep(_seconds):
    return None


def _make_ai(sink=None, sleep=_no_sleep, seed=1):
    ai = StrategyOrchestrator(ExecutionerConfig(), sink=sink, rng=random.Random(seed),
                              sleep=sleep)
    ai.initialize(DifficultySetting.NORMAL)
    return ai


class TestUninitialized:
    """Calls before initialize() are harmless no-ops."""

    def test_take_turn_returns_none(self, caplog):
        events = EventRecorder()
        ai = StrategyOrchestrator(sink=events, sleep=_no_sleep)
        assert asyncio.run(ai.take_turn(SNAPSHOT)) is None
        assert events.events == []
        assert "before initialize" in caplog.text

    def test_inbound_signals_ignored(self):
        ai = StrategyOrchestrator(sleep=_no_sleep)
        assert ai.record_player_guess(True) is None
        ai.record_ai_hit(1, 1)
        ai.record_revealed_letter("A")
        ai.end_turn()
        assert ai.memory is None
        assert not ai.is_initialized


class TestTurnLifecycle:
    """IDLE → THINKING → DECIDED → IDLE with events in order."""

    def test_event_order(self):
        events = EventRecorder()
        ai = _make_ai(sink=events)
        guess = asyncio.run(ai.take_turn(SNAPSHOT))

        assert guess is not None and guess.is_valid
        kinds = [type(e) for e in events.events]
        assert kinds[0] is ThinkingStarted
        assert kinds[1] is ThinkingComplete
        assert kinds[2] in (LetterGuessed, CoordinateGuessed)
        assert len(kinds) == 3
        assert ai.state is TurnState.IDLE
        assert ai.turns_taken == 1

    def test_think_time_within_range(self):
        waited = []

        async def record_sleep(seconds):
            waited.append(seconds)

        events = EventRecorder()
        ai = _make_ai(sink=events, sleep=record_sleep)
        asyncio.run(ai.take_turn(SNAPSHOT))
        cfg = ai.cfg
        assert len(waited) == 1
        assert cfg.min_think_time <= waited[0] <= cfg.max_think_time
        assert events.of_type(ThinkingStarted)[0].think_time == waited[0]

    def test_word_guess_event(self):
        events = EventRecorder()
        ai = _make_ai(sink=events)
        snap = GameStateSnapshot(8, word_patterns=("D_G",), word_bank=frozenset({"DOG"}))
        guess = asyncio.run(ai.take_turn(snap))
        assert isinstance(guess, WordGuess)
        assert events.of_type(WordGuessed) == [WordGuessed("DOG", 0)]


class TestSingleFlight:
    """Only one decision may be in flight."""

    def test_reentrant_turn_rejected(self):
        events = EventRecorder()

        async def scenario():
            gate = asyncio.Event()

            async def blocking_sleep(_seconds):
                await gate.wait()

            ai = _make_ai(sink=events, sleep=blocking_sleep)
            task = ai.start_turn(SNAPSHOT)
            await asyncio.sleep(0)
            assert ai.state is TurnState.THINKING

            assert await ai.take_turn(SNAPSHOT) is None
            assert ai.start_turn(SNAPSHOT) is None

            gate.set()
            return await task

        guess = asyncio.run(scenario())
        assert guess.is_valid
        assert len(events.of_type(ThinkingStarted)) == 1
        assert len(events.of_type(ThinkingComplete)) == 1

    def test_signals_rejected_while_thinking(self):
        async def scenario():
            gate = asyncio.Event()

            async def blocking_sleep(_seconds):
                await gate.wait()

            ai = _make_ai(sleep=blocking_sleep)
            task = ai.start_turn(SNAPSHOT)
            await asyncio.sleep(0)
            assert ai.record_player_guess(True) is None
            ai.record_ai_hit(2, 2)
            ai.record_revealed_letter("Q")
            gate.set()
            await task
            return ai

        ai = asyncio.run(scenario())
        assert ai.memory.all_hits() == set()
        assert ai.memory.all_letters() == set()
        assert ai.adapter.recent_outcomes() == ()

    def test_cancel_returns_to_idle(self):
        events = EventRecorder()

        async def scenario():
            async def forever(_seconds):
                await asyncio.Event().wait()

            ai = _make_ai(sink=events, sleep=forever)
            task = ai.start_turn(SNAPSHOT)
            await asyncio.sleep(0)
            assert ai.cancel_turn() is True
            with pytest.raises(asyncio.CancelledError):
                await task
            return ai

        ai = asyncio.run(scenario())
        assert ai.state is TurnState.IDLE
        assert events.of_type(ThinkingComplete) == []
        assert events.of_type(LetterGuessed) == []
        assert events.of_type(CoordinateGuessed) == []

    def test_cancel_without_turn(self):
        assert _make_ai().cancel_turn() is False

    def test_sink_error_leaves_idle(self):
        calls = []

        def flaky_sink(event):
            calls.append(event)
            if len(calls) == 1:
                raise RuntimeError("host broke")

        ai = _make_ai(sink=flaky_sink)
        with pytest.raises(RuntimeError):
            asyncio.run(ai.take_turn(SNAPSHOT))
        assert ai.state is TurnState.IDLE

        guess = asyncio.run(ai.take_turn(SNAPSHOT))
        assert guess is not None and guess.is_valid
        assert ai.turns_taken == 1

    def test_reset_refused_during_awaited_turn(self, caplog):
        events = EventRecorder()

        async def scenario():
            gate = asyncio.Event()

            async def blocking_sleep(_seconds):
                await gate.wait()

            ai = _make_ai(sink=events, sleep=blocking_sleep)
            first = asyncio.ensure_future(ai.take_turn(SNAPSHOT))
            await asyncio.sleep(0)
            ai.reset()
            assert ai.state is TurnState.THINKING
            second = asyncio.ensure_future(ai.take_turn(SNAPSHOT))
            await asyncio.sleep(0)
            gate.set()
            return await first, await second

        first, second = asyncio.run(scenario())
        assert first is not None
        assert second is None
        guesses = events.of_type(LetterGuessed) + events.of_type(CoordinateGuessed)
        assert len(guesses) == 1
        assert "reset called while AI is THINKING" in caplog.text

    def test_reset_refused_during_scheduled_turn(self):
        events = EventRecorder()

        async def scenario():
            gate = asyncio.Event()

            async def blocking_sleep(_seconds):
                await gate.wait()

            ai = _make_ai(sink=events, sleep=blocking_sleep)
            task = ai.start_turn(SNAPSHOT)
            await asyncio.sleep(0)
            ai.reset()
            assert ai.start_turn(SNAPSHOT) is None
            gate.set()
            await task
            return ai

        ai = asyncio.run(scenario())
        assert ai.state is TurnState.IDLE
        assert len(events.of_type(ThinkingStarted)) == 1

    def test_start_turn_without_loop_stays_idle(self):
        ai = _make_ai()
        with pytest.raises(RuntimeError):
            ai.start_turn(SNAPSHOT)
        assert ai.state is TurnState.IDLE
        assert asyncio.run(ai.take_turn(SNAPSHOT)) is not None


class TestDecide:
    """Word first, then a density-weighted family with fallback."""

    def test_letters_exhausted_falls_back_to_coordinates(self):
        ai = _make_ai()
        snap = GameStateSnapshot(8, guessed_letters=frozenset(ALPHABET))
        for _ in range(20):
            assert isinstance(ai.decide(snap), CoordinateGuess)

    def test_no_legal_move(self):
        ai = _make_ai()
        every_cell = frozenset((r, c) for r in range(2) for c in range(2))
        snap = GameStateSnapshot(2, guessed_letters=frozenset(ALPHABET),
                                 guessed_coordinates=every_cell)
        with pytest.raises(NoLegalMoveError):
            ai.decide(snap)

    def test_no_legal_move_during_turn_leaves_idle(self):
        ai = _make_ai()
        every_cell = frozenset((r, c) for r in range(2) for c in range(2))
        snap = GameStateSnapshot(2, guessed_letters=frozenset(ALPHABET),
                                 guessed_coordinates=every_cell)
        with pytest.raises(NoLegalMoveError):
            asyncio.run(ai.take_turn(snap))
        assert ai.state is TurnState.IDLE

    def test_sparse_grid_favours_letters(self):
        ai = _make_ai(seed=0)
        kinds = [ai.decide(SNAPSHOT).guess_type for _ in range(200)]
        assert kinds.count(GuessType.LETTER) > 120

    def test_dense_grid_favours_coordinates(self):
        ai = _make_ai(seed=0)
        guessed = frozenset((r, c) for r in range(8) for c in range(4))
        snap = GameStateSnapshot(8, guessed_coordinates=guessed)
        kinds = [ai.decide(snap).guess_type for _ in range(200)]
        assert kinds.count(GuessType.COORDINATE) > 90


class TestSignals:
    """Inbound results reach the adapter and the memory."""

    def test_player_guesses_move_skill(self):
        ai = _make_ai()
        results = [ai.record_player_guess(True) for _ in range(3)]
        assert results[-1] is Adjustment.INCREASED
        assert ai.current_skill == pytest.approx(0.65)

    def test_ai_hits_and_letters_remembered(self):
        ai = _make_ai()
        ai.record_ai_hit(1, 2)
        ai.record_revealed_letter("e")
        ai.end_turn()
        assert ai.memory.all_hits() == {(1, 2)}
        assert ai.memory.all_letters() == {"E"}
        assert ai.memory.current_turn == 1

    def test_reset(self):
        ai = _make_ai()
        ai.record_ai_hit(1, 2)
        for _ in range(3):
            ai.record_player_guess(True)
        ai.reset()
        assert len(ai.memory) == 0
        assert ai.current_skill == pytest.approx(0.5)

    def test_debug_output(self):
        ai = _make_ai()
        assert "State: IDLE" in ai.debug_summary()
        assert "Letter pool" in ai.strategy_analysis(SNAPSHOT)
