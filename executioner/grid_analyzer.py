"""
grid_analyzer.py – Stateless grid geometry and coordinate scoring.

Coordinates are (row, col), 0-indexed.  Scores favour cells next to known
hits (words are contiguous), cells that extend a run of hits, and, weakly,
cells near the centre (long words tend to cross it).
"""

from __future__ import annotations

import math
from typing import AbstractSet

from settings import HIGH_DENSITY_THRESHOLD, MEDIUM_DENSITY_THRESHOLD, LOW_DENSITY_THRESHOLD

Coord = tuple[int, int]

LINE_EXTENSION_BONUS = 0.5
CENTER_BIAS_WEIGHT = 0.3


def lerp(a: float, b: float, t: float) -> float:
    """Linear interpolation with *t* clamped to [0, 1]."""
    t = max(0.0, min(1.0, t))
    return a + (b - a) * t


# ── Density ───────────────────────────────────────────────

def density_category(ratio: float) -> str:
    if ratio >= HIGH_DENSITY_THRESHOLD:
        return "High"
    if ratio >= MEDIUM_DENSITY_THRESHOLD:
        return "Medium"
    if ratio >= LOW_DENSITY_THRESHOLD:
        return "Low"
    return "Very Low"


# ── Adjacency ─────────────────────────────────────────────

def is_valid_coordinate(row: int, col: int, grid_size: int) -> bool:
    return 0 <= row < grid_size and 0 <= col < grid_size


def adjacent_coordinates(row: int, col: int, grid_size: int) -> list[Coord]:
    """Orthogonal neighbours inside the grid."""
    candidates = ((row - 1, col), (row + 1, col), (row, col - 1), (row, col + 1))
    return [(r, c) for r, c in candidates if is_valid_coordinate(r, c, grid_size)]


def count_adjacent_hits(row: int, col: int, hits: AbstractSet[Coord], grid_size: int) -> int:
    return sum(1 for cell in adjacent_coordinates(row, col, grid_size) if cell in hits)


def is_adjacent_to_any(row: int, col: int, hits: AbstractSet[Coord], grid_size: int) -> bool:
    return count_adjacent_hits(row, col, hits, grid_size) > 0


def extends_hit_line(row: int, col: int, hits: AbstractSet[Coord], grid_size: int) -> bool:
    """True if the cell continues or bridges a horizontal/vertical run of hits."""
    for dr, dc in ((0, 1), (1, 0)):
        before1 = (row - dr, col - dc)
        before2 = (row - 2 * dr, col - 2 * dc)
        after1 = (row + dr, col + dc)
        after2 = (row + 2 * dr, col + 2 * dc)
        # [hit][hit][cell], [cell][hit][hit], [hit][cell][hit]
        if before1 in hits and before2 in hits:
            return True
        if after1 in hits and after2 in hits:
            return True
        if before1 in hits and after1 in hits:
            return True
    return False


# ── Centre bias ───────────────────────────────────────────

def distance_from_center(row: int, col: int, grid_size: int) -> float:
    center = (grid_size - 1) / 2.0
    return math.hypot(row - center, col - center)


def center_bias_score(row: int, col: int, grid_size: int) -> float:
    """1.0 at the centre falling to 0.0 at the corners."""
    max_distance = distance_from_center(0, 0, grid_size)
    if max_distance <= 0:
        return 1.0
    return 1.0 - distance_from_center(row, col, grid_size) / max_distance


# ── Scoring ───────────────────────────────────────────────

def coordinate_score(row: int, col: int, hits: AbstractSet[Coord],
                     grid_size: int, ratio: float) -> float:
    """Base desirability of guessing (row, col).

    Adjacency is worth more on sparse grids, where a hit is rarer evidence.
    """
    score = count_adjacent_hits(row, col, hits, grid_size) * lerp(3.0, 1.0, ratio)
    if extends_hit_line(row, col, hits, grid_size):
        score += LINE_EXTENSION_BONUS
    score += center_bias_score(row, col, grid_size) * CENTER_BIAS_WEIGHT
    return score


def proximity_bonus(row: int, col: int, hits: AbstractSet[Coord], grid_size: int) -> float:
    """0.3 for cells 2–3 steps (Manhattan) from a hit but not adjacent to one."""
    if not hits or is_adjacent_to_any(row, col, hits, grid_size):
        return 0.0
    nearest = min(abs(row - r) + abs(col - c) for r, c in hits)
    return 0.3 if 2 <= nearest <= 3 else 0.0


# ── Formatting ────────────────────────────────────────────

def coordinate_to_string(row: int, col: int) -> str:
    """(0, 0) → "A1": column letter then 1-based row."""
    return f"{chr(ord('A') + col)}{row + 1}"


def parse_coordinate(text: str) -> Coord | None:
    """"C4" → (3, 2); None if malformed."""
    text = (text or "").strip().upper()
    if len(text) < 2 or not ("A" <= text[0] <= "Z"):
        return None
    try:
        row = int(text[1:]) - 1
    except ValueError:
        return None
    if row < 0:
        return None
    return row, ord(text[0]) - ord("A")
