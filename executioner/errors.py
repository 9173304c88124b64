"""
errors.py – Exception types raised by the Executioner core.

Steady-state play never raises; these cover configuration mistakes and
the one genuinely exceptional runtime outcome (no legal move left).
"""


class ExecutionerError(Exception):
    """Base class for every error raised by the AI core."""


class ConfigError(ExecutionerError, ValueError):
    """Configuration values are impossible to honour."""


class NoLegalMoveError(ExecutionerError):
    """Both the letter and the coordinate family came back empty.

    Distinct from a strategy returning ``NoGuess``, which only means the
    strategy found nothing worth recommending.
    """
