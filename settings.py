"""
settings.py - Tuning constants for the Executioner AI opponent.

All configurable values live here so they're easy to tweak
and easy to reference from any module.  ``ExecutionerConfig``
takes its defaults from these constants.
"""

# ── Skill bounds ──────────────────────────────────────────
MIN_SKILL = 0.15               # AI never becomes completely random
MAX_SKILL = 0.95               # AI never becomes perfect
SKILL_STEP = 0.15              # change per rubber-band adjustment
PERFECT_RECALL_SKILL = 0.80    # at or above this, memory never forgets

# ── Starting skill by AI difficulty ──────────────────────
EASY_START_SKILL = 0.25
NORMAL_START_SKILL = 0.50
HARD_START_SKILL = 0.75

# ── Streak thresholds by AI difficulty ───────────────────
#    (hits_to_increase, misses_to_decrease)
EASY_THRESHOLDS = (5, 2)
NORMAL_THRESHOLDS = (3, 3)
HARD_THRESHOLDS = (2, 5)

MIN_HITS_TO_INCREASE = 1
MAX_HITS_TO_INCREASE = 7
MIN_MISSES_TO_DECREASE = 1
MAX_MISSES_TO_DECREASE = 7

# Same-direction skill changes before the thresholds themselves adapt
CONSECUTIVE_ADJUSTMENTS_TO_ADAPT = 2

# How many recent player guesses the ring buffer holds
RECENT_GUESSES_TO_TRACK = 5

# ── Memory ────────────────────────────────────────────────
MAX_FORGET_CHANCE = 0.30       # forget chance at skill 0.0
ALWAYS_REMEMBER_RECENT = 3     # newest N facts per kind are never forgotten

# ── Timing (seconds) ──────────────────────────────────────
MIN_THINK_TIME = 1.0
MAX_THINK_TIME = 3.0

# ── Strategy: grid density → (letter weight, coordinate weight) ──
#    Bands are checked top-down; the first whose floor is <= fill ratio wins.
HIGH_DENSITY_THRESHOLD = 0.35
MEDIUM_DENSITY_THRESHOLD = 0.20
LOW_DENSITY_THRESHOLD = 0.12
DENSITY_WEIGHT_BANDS = (
    (HIGH_DENSITY_THRESHOLD, 0.40, 0.60),     # dense: favour coordinates
    (MEDIUM_DENSITY_THRESHOLD, 0.50, 0.50),   # balanced
    (LOW_DENSITY_THRESHOLD, 0.65, 0.35),      # sparse: favour letters
    (0.0, 0.80, 0.20),                        # very sparse: strongly letters
)

# ── Strategy: selection pool size by skill ───────────────
#    (skill floor, pool size), checked top-down
LETTER_POOL_BANDS = ((0.9, 1), (0.7, 2), (0.4, 5), (0.0, 10))
COORDINATE_POOL_BANDS = ((0.9, 1), (0.7, 3), (0.4, 8), (0.0, 15))

# ── Strategy: word guessing ──────────────────────────────
WORD_GUESS_RISK_FACTOR = 0.7   # threshold = 1.0 - skill * factor
SINGLE_MATCH_CONFIDENCE = 0.95
MIN_VIABLE_WORD_CONFIDENCE = 0.25
PATTERN_BONUS_WEIGHT = 2.0

# ── Word placement ───────────────────────────────────────
MAX_PLACEMENT_ATTEMPTS = 100
CROSSWORD_PROBABILITY = 0.4
DEFAULT_FIRST_WORD_LENGTH = 3  # default lengths ascend from here

# ── Grid ──────────────────────────────────────────────────
DEFAULT_GRID_SIZE = 8
DEFAULT_WORD_COUNT = 3
MIN_GRID_SIZE = 6
MAX_GRID_SIZE = 12
ALPHABET = "ABCDEFGHIJKLMNOPQRSTUVWXYZ"
UNKNOWN_LETTER = "_"

# ── Simulation ────────────────────────────────────────────
SIM_PLAYER_HIT_RATE = 0.45
SIM_MAX_TURNS = 120
