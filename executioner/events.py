"""
events.py – Messages the AI core emits to its host.

The orchestrator never calls into UI or rendering; it hands one of these
to the host-provided sink (any callable taking a single event).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Union


@dataclass(frozen=True)
class ThinkingStarted:
    think_time: float


@dataclass(frozen=True)
class ThinkingComplete:
    pass


@dataclass(frozen=True)
class LetterGuessed:
    letter: str


@dataclass(frozen=True)
class CoordinateGuessed:
    row: int
    col: int


@dataclass(frozen=True)
class WordGuessed:
    word: str
    slot_index: int


ExecutionerEvent = Union[ThinkingStarted, ThinkingComplete,
                         LetterGuessed, CoordinateGuessed, WordGuessed]
EventSink = Callable[[ExecutionerEvent], None]


class EventRecorder:
    """Sink that keeps every event in order; handy for tests and replays."""

    def __init__(self):
        self.events: list[ExecutionerEvent] = []

    def __call__(self, event: ExecutionerEvent):
        self.events.append(event)

    def of_type(self, event_type: type) -> list[ExecutionerEvent]:
        return [e for e in self.events if isinstance(e, event_type)]

    def clear(self):
        self.events.clear()
