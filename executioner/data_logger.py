"""
data_logger.py  –  Per-match result logging.

Appends one summary row per finished match to a CSV file.  Uses the
built-in ``csv`` module; one file write per match.
"""

import csv
import os

# Column order written to CSV
FIELDNAMES = [
    "match_id",
    "player_difficulty",
    "winner",
    "turns",
    "start_skill",
    "final_skill",
    "skill_increases",
    "skill_decreases",
    "player_hits",
    "player_misses",
    "ai_letters",
    "ai_coordinates",
    "ai_words",
    "ai_hits",
    "crossword",
]


class MatchLogger:
    """Writes one row per match to ``path``, header on first write."""

    def __init__(self, path: str):
        self.path = path
        self._next_match_id = 1

    def log_match(self, row: dict) -> int:
        """Append *row*; missing columns are left blank. Returns the match id."""
        match_id = self._next_match_id
        self._next_match_id += 1
        self._write_row({"match_id": match_id, **row})
        return match_id

    def _write_row(self, row: dict):
        file_exists = os.path.isfile(self.path)

        with open(self.path, "a", newline="", encoding="utf-8") as f:
            writer = csv.DictWriter(f, fieldnames=FIELDNAMES, extrasaction="ignore")

            if not file_exists:
                writer.writeheader()

            writer.writerow(row)
