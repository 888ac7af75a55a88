# -*- coding: utf-8 -*-
"""
Logger Module

This module provides logging utilities for the MVP prediction pipeline.
"""

import sys
import logging
from datetime import datetime
from pathlib import Path
from typing import Optional, Union

LOGS_DIR = Path(__file__).resolve().parent.parent.parent / "logs"

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def setup_logging(app_name: str, log_level: int = logging.INFO,
                  log_dir: Optional[Union[str, Path]] = None,
                  log_to_file: bool = True, console: bool = True) -> logging.Logger:
    """
    Set up logging for the application

    Handlers are attached to the ``mvp_predictor`` package logger so every
    pipeline module (which logs through child loggers) reaches the same
    console and file outputs.

    Args:
        app_name: Name of the application for the log file
        log_level: Logging level (default: INFO)
        log_dir: Directory for log files (default: <project>/logs)
        log_to_file: Whether to write a timestamped log file
        console: Whether to log to stdout

    Returns:
        logging.Logger: Configured package logger
    """
    logger = logging.getLogger('mvp_predictor')
    logger.setLevel(log_level)

    # Clear existing handlers to avoid duplicates
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(LOG_FORMAT)

    if console:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(log_level)
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

    if log_to_file:
        target_dir = Path(log_dir) if log_dir else LOGS_DIR
        target_dir.mkdir(parents=True, exist_ok=True)

        # Create a unique log file with timestamp
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        log_file = target_dir / f"{app_name}_{timestamp}.log"

        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(log_level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

        logger.info(f"Log file: {log_file}")

    logger.info(f"Logging initialized for {app_name}")

    return logger
