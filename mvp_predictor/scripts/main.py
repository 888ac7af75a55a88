#!/usr/bin/env python
# -*- coding: utf-8 -*-

"""
NBA MVP Predictor - Main Module

Command-line entry point: runs the award-share pipeline over a player-season
CSV and prints the model comparison report.

Usage:
    python -m mvp_predictor.scripts.main --data data/player_mvp_stats.csv
"""

import sys
import argparse
import logging
from typing import Dict, Any, Optional, List

from ..config import get_default_config, get_log_level, merge_config, validate_config
from ..exceptions import MVPPipelineError
from ..pipeline import MVPTrainingPipeline
from ..utils.logger import setup_logging

logger = logging.getLogger(__name__)


def parse_arguments(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """
    Parse command-line arguments

    Returns:
        argparse.Namespace: Parsed arguments
    """
    parser = argparse.ArgumentParser(description="NBA MVP award-share model comparison")
    parser.add_argument(
        "--data",
        type=str,
        help="Player-season CSV file (defaults to data/player_mvp_stats.csv)"
    )
    parser.add_argument(
        "--season-cutoff",
        type=float,
        help="Last season included in TRAIN (inclusive)"
    )
    parser.add_argument(
        "--cutoff-units",
        choices=["raw", "scaled"],
        help="Whether the cutoff is a season label or in standardized season units"
    )
    parser.add_argument(
        "--scale-on-train",
        action="store_true",
        help="Fit the feature scaler on TRAIN rows only instead of the full dataset"
    )
    parser.add_argument(
        "--config",
        type=str,
        help="JSON file with configuration overrides"
    )
    parser.add_argument(
        "--parallel",
        action="store_true",
        help="Fit the models in parallel worker processes"
    )
    parser.add_argument(
        "--top-n",
        type=int,
        help="Number of top predicted candidates to show"
    )
    parser.add_argument(
        "--no-save",
        action="store_true",
        help="Do not write the report or the best model to disk"
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable verbose logging"
    )

    return parser.parse_args(argv)


def build_overrides(args: argparse.Namespace) -> Dict[str, Any]:
    """
    Translate command-line flags into configuration overrides

    Args:
        args: Parsed arguments

    Returns:
        Nested configuration overrides
    """
    overrides: Dict[str, Any] = {}
    if args.data:
        overrides['paths'] = {'data_file': args.data}
    split = {}
    if args.season_cutoff is not None:
        cutoff = args.season_cutoff
        split['season_cutoff'] = int(cutoff) if cutoff.is_integer() else cutoff
    if args.cutoff_units:
        split['cutoff_units'] = args.cutoff_units
    if split:
        overrides['split'] = split
    if args.scale_on_train:
        overrides['scaling'] = {'fit_scope': 'train'}
    if args.parallel:
        overrides['training'] = {'parallel': True}
    if args.top_n is not None:
        overrides['results'] = {'top_n': args.top_n}
    return overrides


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main function to run the MVP pipeline

    Returns:
        Process exit code
    """
    args = parse_arguments(argv)

    try:
        config = validate_config(merge_config(get_default_config(args.config), build_overrides(args)))
    except MVPPipelineError as e:
        setup_logging("mvp_pipeline", log_to_file=False)
        logger.error(f"{type(e).__name__}: {str(e)}")
        return 1

    setup_logging(
        "mvp_pipeline",
        logging.DEBUG if args.verbose else get_log_level(config),
        log_dir=config['paths']['logs_dir'],
        log_to_file=config['logging'].get('to_file', True),
        console=config['logging'].get('console', True)
    )
    logger.info("Starting NBA MVP predictor")

    try:
        pipeline = MVPTrainingPipeline(config=config)
        result = pipeline.run(save=not args.no_save)
        pipeline.results_manager.display_report(result)

        if result.report_path:
            logger.info(f"Report written to {result.report_path}")
        return 0

    except MVPPipelineError as e:
        logger.error(f"{type(e).__name__}: {str(e)}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
