"""
executioner package – Adaptive AI opponent for a hidden-word grid game.

Modules:
    orchestrator        – Turn state machine and guess decision (StrategyOrchestrator)
    difficulty_adapter  – Rubber-banded skill with self-adjusting streak thresholds
    memory_model        – Skill-gated recall of learned hits and letters
    placement_engine    – Secret word selection and grid placement
    strategies          – Letter, coordinate and whole-word evaluators
    grid_analyzer       – Grid geometry and coordinate scoring helpers
    letter_frequency    – English letter frequency table
    models              – Placements, snapshots, memory records, guess variants
    events              – Messages emitted to the host
    config              – ExecutionerConfig and DifficultySetting
    errors              – Exception hierarchy
    stats               – Per-session statistics and skill-trend plot
    data_logger         – Per-match CSV logging
    simulation_runner   – Headless matches against a scripted player
"""

from executioner.config import DifficultySetting, ExecutionerConfig
from executioner.errors import ConfigError, ExecutionerError, NoLegalMoveError
from executioner.orchestrator import StrategyOrchestrator, TurnState
from executioner.placement_engine import WordPlacementEngine
