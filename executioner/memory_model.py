"""
memory_model.py – Skill-gated recall of everything the AI has learned.

High-skill AI has perfect recall.  Lower skill may "forget" older facts,
which makes the opponent feel human without ever losing data: records are
never deleted, forgetting is noise layered on at read time and recomputed
on every query.  When the difficulty adapter raises skill mid-game the
"forgotten" facts simply come back.

Two kinds of fact are tracked:
  - hit coordinates the AI found on the opponent's grid
  - letters revealed to be in the opponent's words

The most recent ``always_remember_recent`` facts of each kind are always
recalled; every older fact is kept with probability
``1 - config.forget_chance(skill)``.
"""

from __future__ import annotations

import logging
import random

from executioner.config import ExecutionerConfig
from executioner.models import Coord, KnownFacts, MemoryKind, MemoryRecord

logger = logging.getLogger(__name__)


class MemoryModel:
    """Permanent fact store with a skill-dependent read filter.

    Usage:
        memory = MemoryModel(config, rng=random.Random(7))
        memory.record_hit(2, 3)
        memory.record_revealed_letter("e")
        memory.advance_turn()
        facts = memory.known_facts(skill)
    """

    def __init__(self, config: ExecutionerConfig | None = None,
                 rng: random.Random | None = None):
        self.cfg = config or ExecutionerConfig()
        self._rng = rng or random.Random()

        self._records: list[MemoryRecord] = []
        self._index: dict[tuple[MemoryKind, object], MemoryRecord] = {}
        self._current_turn: int = 0

    # ── Properties ────────────────────────────────────────

    @property
    def current_turn(self) -> int:
        return self._current_turn

    @property
    def total_hit_count(self) -> int:
        return sum(1 for r in self._records if r.kind is MemoryKind.HIT_COORDINATE)

    @property
    def total_letter_count(self) -> int:
        return sum(1 for r in self._records if r.kind is MemoryKind.REVEALED_LETTER)

    def __len__(self) -> int:
        return len(self._records)

    # ══════════════════════════════════════════════════════
    #  Recording
    # ══════════════════════════════════════════════════════

    def record(self, kind: MemoryKind, value) -> bool:
        """Store a fact stamped with the current turn. Returns False if already known."""
        if kind is MemoryKind.REVEALED_LETTER:
            value = str(value).upper()
        else:
            value = (int(value[0]), int(value[1]))

        key = (kind, value)
        if key in self._index:
            return False

        rec = MemoryRecord(kind=kind, value=value,
                           turn_learned=self._current_turn,
                           sequence=len(self._records))
        self._records.append(rec)
        self._index[key] = rec
        return True

    def record_hit(self, row: int, col: int) -> bool:
        return self.record(MemoryKind.HIT_COORDINATE, (row, col))

    def record_revealed_letter(self, letter: str) -> bool:
        return self.record(MemoryKind.REVEALED_LETTER, letter)

    def advance_turn(self):
        self._current_turn += 1

    def reset(self):
        """Forget everything for a new game."""
        self._records.clear()
        self._index.clear()
        self._current_turn = 0

    # ══════════════════════════════════════════════════════
    #  Retrieval with skill filter
    # ══════════════════════════════════════════════════════

    def effective_known(self, skill: float,
                        kind: MemoryKind | None = None) -> list[MemoryRecord]:
        """Records the AI recalls at *skill*, oldest first.

        Each older record consumes exactly one RNG draw, in learn order, so
        for a fixed seed a higher skill recalls a superset of a lower one.
        """
        kinds = [kind] if kind is not None else list(MemoryKind)
        by_kind = {k: self._records_of(k) for k in kinds}

        if skill >= self.cfg.perfect_recall_skill:
            kept = [r for k in kinds for r in by_kind[k]]
            return sorted(kept, key=lambda r: r.sequence)

        forget_chance = self.cfg.forget_chance(skill)
        keep_recent = self.cfg.always_remember_recent
        kept: list[MemoryRecord] = []

        for k in kinds:
            records = by_kind[k]
            cutoff = len(records) - keep_recent
            for i, rec in enumerate(records):
                if i >= cutoff:
                    kept.append(rec)
                elif self._rng.random() >= forget_chance:
                    kept.append(rec)

        return sorted(kept, key=lambda r: r.sequence)

    def effective_hits(self, skill: float) -> set[Coord]:
        return {r.value for r in self.effective_known(skill, MemoryKind.HIT_COORDINATE)}

    def effective_letters(self, skill: float) -> set[str]:
        return {r.value for r in self.effective_known(skill, MemoryKind.REVEALED_LETTER)}

    def known_facts(self, skill: float) -> KnownFacts:
        """Recalled facts plus the ones currently forgotten, for one decision."""
        recalled = self.effective_known(skill)
        hits = frozenset(r.value for r in recalled if r.kind is MemoryKind.HIT_COORDINATE)
        letters = frozenset(r.value for r in recalled if r.kind is MemoryKind.REVEALED_LETTER)
        facts = KnownFacts(
            hits=hits,
            letters=letters,
            forgotten_hits=frozenset(self.all_hits()) - hits,
            forgotten_letters=frozenset(self.all_letters()) - letters,
        )
        if facts.forgotten_hits or facts.forgotten_letters:
            logger.debug("Memory at skill %.2f forgot %d hit(s), %d letter(s)",
                         skill, len(facts.forgotten_hits), len(facts.forgotten_letters))
        return facts

    def all_hits(self) -> set[Coord]:
        return {r.value for r in self._records_of(MemoryKind.HIT_COORDINATE)}

    def all_letters(self) -> set[str]:
        return {r.value for r in self._records_of(MemoryKind.REVEALED_LETTER)}

    # ── Debug ─────────────────────────────────────────────

    def debug_summary(self, skill: float) -> str:
        hits = self.effective_hits(skill)
        letters = self.effective_letters(skill)
        return (
            f"Turn: {self._current_turn}\n"
            f"Total Hits: {self.total_hit_count} (remembers {len(hits)})\n"
            f"Total Letters: {self.total_letter_count} (remembers {len(letters)})\n"
            f"Forget Chance: {self.cfg.forget_chance(skill):.1%}"
        )

    # ── Internals ─────────────────────────────────────────

    def _records_of(self, kind: MemoryKind) -> list[MemoryRecord]:
        return [r for r in self._records if r.kind is kind]
