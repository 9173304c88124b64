"""
main.py - Entry point for the Executioner AI opponent.

Drives the AI core without a game client:
- Headless simulated matches against a scripted player (executioner/simulation_runner.py)
- Word selection and placement demo (executioner/placement_engine.py)
- Per-match CSV logging and skill-trend plots (executioner/data_logger.py, executioner/stats.py)

Run:
    python main.py --simulate 50 --difficulty easy --seed 7 --plot skill.png
    python main.py --setup-demo --grid-size 8 --words 3
"""
VERSION = "1.0.0"

import argparse
import logging
import random
import sys

logger = logging.getLogger(__name__)

# ── Project imports ───────────────────────────────────────
from settings import (
    DEFAULT_GRID_SIZE, DEFAULT_WORD_COUNT, MIN_GRID_SIZE, MAX_GRID_SIZE,
    SIM_PLAYER_HIT_RATE,
)
from executioner.config import DifficultySetting, ExecutionerConfig
from executioner.errors import ExecutionerError
from executioner.orchestrator import StrategyOrchestrator
from executioner.placement_engine import WordPlacementEngine
from executioner.simulation_runner import SimulationRunner
from systems.word_grid import HiddenWordGrid
from systems.word_lists import candidates_by_length, word_bank


def _grid_size(value: str) -> int:
    size = int(value)
    if not MIN_GRID_SIZE <= size <= MAX_GRID_SIZE:
        raise argparse.ArgumentTypeError(
            f"grid size must be between {MIN_GRID_SIZE} and {MAX_GRID_SIZE}")
    return size


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Executioner - adaptive AI opponent for a hidden-word grid game",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python main.py --simulate 50 --difficulty hard --csv matches.csv
  python main.py --setup-demo --seed 3
        """
    )
    parser.add_argument(
        "--simulate",
        type=int,
        metavar="N",
        help="Run N headless matches against a scripted player"
    )
    parser.add_argument(
        "--setup-demo",
        action="store_true",
        help="Place the AI's words on a grid and show one decision"
    )
    parser.add_argument(
        "--difficulty",
        choices=[d.value for d in DifficultySetting],
        default=DifficultySetting.NORMAL.value,
        help="Difficulty chosen by the (simulated) player; the AI starts inverted"
    )
    parser.add_argument("--seed", type=int, help="Seed for reproducible runs")
    parser.add_argument(
        "--grid-size",
        type=_grid_size,
        default=DEFAULT_GRID_SIZE,
        help=f"Grid side length ({MIN_GRID_SIZE}-{MAX_GRID_SIZE})"
    )
    parser.add_argument(
        "--words",
        type=int,
        default=DEFAULT_WORD_COUNT,
        help="Words hidden per side"
    )
    parser.add_argument(
        "--hit-rate",
        type=float,
        default=SIM_PLAYER_HIT_RATE,
        help="Scripted player's hit probability"
    )
    parser.add_argument("--plot", metavar="PATH", help="Save the last match's skill trend PNG")
    parser.add_argument("--csv", metavar="PATH", help="Append one CSV row per match")
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Debug logging"
    )
    return parser


def run_simulation(args) -> int:
    runner = SimulationRunner(
        n_matches=args.simulate,
        player_difficulty=args.difficulty,
        grid_size=args.grid_size,
        word_count=args.words,
        seed=args.seed,
        player_hit_rate=args.hit_rate,
        logger_path=args.csv,
    )
    results = runner.run()
    runner.print_summary()
    if args.plot and results and results[-1].stats is not None:
        results[-1].stats.plot_skill_trend(args.plot)
    return 0


def run_setup_demo(args) -> int:
    rng = random.Random(args.seed)
    config = ExecutionerConfig()

    engine = WordPlacementEngine(args.grid_size, args.words, config=config, rng=rng)
    if not engine.perform_setup(candidates_by_length()):
        print("Setup failed - see log for details", file=sys.stderr)
        return 1

    grid = HiddenWordGrid(args.grid_size, engine.placements)
    print(engine.debug_summary())
    print()
    print(grid.render(reveal=True))
    print()

    ai = StrategyOrchestrator(config, rng=rng)
    ai.initialize(args.difficulty)
    snapshot = grid.snapshot(word_bank(set(engine.word_lengths)))
    print(ai.strategy_analysis(snapshot))
    print()
    print(f"Decision: {ai.decide(snapshot)}")
    return 0


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )

    try:
        if args.simulate:
            return run_simulation(args)
        if args.setup_demo:
            return run_setup_demo(args)
    except ExecutionerError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    parser.print_help()
    return 0


# ── Run ───────────────────────────────────────────────────
if __name__ == "__main__":
    sys.exit(main())
