#!/usr/bin/env python3
"""
Main entry point for the VOT equivalence analysis.

Usage:
    python run_analysis.py --config config/analysis_config.yaml
    python run_analysis.py --input vot.csv --low-bound -5 --high-bound 5
    python run_analysis.py --welch --no-figures
"""

import argparse
import sys
import logging
from pathlib import Path

import matplotlib

matplotlib.use("Agg")

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from tost_equivalence.config import AnalysisConfig, load_config
from tost_equivalence.data import load_vot_table
from tost_equivalence.errors import EquivalenceError
from tost_equivalence.pipeline import run_analysis, save_artifacts


def setup_logging(log_file: Path = None, level: str = "INFO"):
    """Configure logging."""
    handlers = [logging.StreamHandler()]
    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=getattr(logging, level.upper()),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        handlers=handlers,
    )


def apply_overrides(config: AnalysisConfig, args: argparse.Namespace) -> AnalysisConfig:
    """Apply command-line overrides to the loaded configuration."""
    if args.low_bound is not None:
        config.test.low_bound = args.low_bound
    if args.high_bound is not None:
        config.test.high_bound = args.high_bound
    if args.alpha is not None:
        config.test.alpha = args.alpha
    if args.welch:
        config.test.equal_variance = False
    if args.seed is not None:
        config.simulation.seed = args.seed
    if args.no_figures:
        config.output.save_figures = False
    if args.output_dir is not None:
        config.output.directory = str(args.output_dir)
    return config


def main():
    parser = argparse.ArgumentParser(
        description="Run a TOST equivalence analysis on VOT data"
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=Path(__file__).parent.parent / "config" / "analysis_config.yaml",
        help="Path to configuration file",
    )
    parser.add_argument(
        "--input",
        type=Path,
        help="CSV table to analyse instead of simulating data",
    )
    parser.add_argument("--group-column", default="group", help="Group label column")
    parser.add_argument("--value-column", default="vot", help="Measurement column")
    parser.add_argument("--low-bound", type=float, help="Lower equivalence bound (raw scale)")
    parser.add_argument("--high-bound", type=float, help="Upper equivalence bound (raw scale)")
    parser.add_argument("--alpha", type=float, help="Significance level")
    parser.add_argument(
        "--welch",
        action="store_true",
        help="Use Welch's test instead of the pooled-variance test",
    )
    parser.add_argument("--seed", type=int, help="Simulation seed")
    parser.add_argument(
        "--no-figures",
        action="store_true",
        help="Skip figure generation",
    )
    parser.add_argument(
        "--output-dir",
        type=Path,
        help="Output directory for results",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level",
    )

    args = parser.parse_args()

    # Load configuration
    config_missing = not args.config.exists()
    try:
        config = AnalysisConfig() if config_missing else load_config(args.config)
    except EquivalenceError as e:
        print(f"Invalid configuration {args.config}: {e}", file=sys.stderr)
        sys.exit(1)
    config = apply_overrides(config, args)

    # Setup logging
    output_dir = Path(config.output.directory)
    setup_logging(output_dir / "analysis.log", args.log_level)
    if config_missing:
        logging.warning(f"Config not found at {args.config}, using defaults")

    try:
        data = None
        if args.input:
            data = load_vot_table(args.input, args.group_column, args.value_column)

        run = run_analysis(config, data, args.group_column, args.value_column)
        print("\n" + run.report + "\n")

        saved = save_artifacts(run, config, output_dir, args.group_column, args.value_column)
        logging.info(f"Artifacts: {[str(p) for p in saved]}")
    except (EquivalenceError, FileNotFoundError) as e:
        logging.error(f"Analysis failed: {e}")
        sys.exit(1)

    logging.info("Analysis completed successfully!")


if __name__ == "__main__":
    main()
