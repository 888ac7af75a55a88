#!/usr/bin/env python
# -*- coding: utf-8 -*-

"""
Data Loading Module for the MVP Pipeline

Responsibilities:
- Read the player-season table (one row per player per season) from CSV
- Check that every configured column is present
- Check that season and target columns hold usable values

The loader does not clean or impute anything; that is the Cleaner's job.
"""

from pathlib import Path
from typing import Dict, List, Any, Union

import numpy as np
import pandas as pd

from .config import logger
from .exceptions import DataError


def required_columns(config: Dict[str, Any]) -> List[str]:
    """
    List every raw column the pipeline reads

    Args:
        config: Pipeline configuration

    Returns:
        Column names in a stable order, without duplicates
    """
    columns = config['columns']
    names = [
        columns['player'],
        columns['season'],
        columns['target'],
        columns['position'],
        columns['games'],
        columns['team_win_pct'],
    ]
    names.extend(columns['per_game'].values())
    names.extend(columns['shooting'])
    names.extend(columns['advanced'].values())

    seen = set()
    ordered = []
    for name in names:
        if name not in seen:
            seen.add(name)
            ordered.append(name)
    return ordered


def validate_dataset(df: pd.DataFrame, config: Dict[str, Any]) -> pd.DataFrame:
    """
    Validate a loaded player-season table

    Args:
        df: Raw player-season DataFrame
        config: Pipeline configuration

    Returns:
        The same DataFrame, with the season column coerced to numeric

    Raises:
        DataError: If the table is empty, columns are missing, seasons are not
            numeric or award shares fall outside [0, 1]
    """
    if df.empty:
        raise DataError("Player-season dataset is empty")

    missing = [col for col in required_columns(config) if col not in df.columns]
    if missing:
        raise DataError(f"Dataset is missing required columns: {missing}")

    season_col = config['columns']['season']
    seasons = pd.to_numeric(df[season_col], errors='coerce')
    bad_seasons = seasons.isna() & df[season_col].notna()
    if bad_seasons.any():
        examples = df.loc[bad_seasons, season_col].astype(str).unique()[:5].tolist()
        raise DataError(f"Column '{season_col}' contains non-numeric seasons: {examples}")
    if seasons.isna().any():
        raise DataError(f"Column '{season_col}' has {int(seasons.isna().sum())} missing seasons")
    df[season_col] = seasons

    target_col = config['columns']['target']
    target = pd.to_numeric(df[target_col], errors='coerce')
    if (target.isna() & df[target_col].notna()).any():
        raise DataError(f"Target column '{target_col}' contains non-numeric values")
    out_of_range = target[(target < 0) | (target > 1)]
    if not out_of_range.empty:
        raise DataError(
            f"Target column '{target_col}' must lie in [0, 1]; "
            f"found {len(out_of_range)} values between {out_of_range.min()} and {out_of_range.max()}"
        )
    df[target_col] = target

    return df


def load_player_seasons(path: Union[str, Path], config: Dict[str, Any]) -> pd.DataFrame:
    """
    Load the player-season dataset

    Args:
        path: CSV file with one row per player-season
        config: Pipeline configuration

    Returns:
        Validated DataFrame

    Raises:
        DataError: If the file cannot be read or fails validation
    """
    path = Path(path)
    logger.info(f"Loading player-season data from {path}")

    if not path.exists():
        raise DataError(f"Could not find dataset file {path}")

    try:
        df = pd.read_csv(path)
    except (pd.errors.ParserError, pd.errors.EmptyDataError, UnicodeDecodeError) as e:
        raise DataError(f"Could not parse dataset file {path}: {str(e)}") from e

    # Some exports carry the DataFrame index as an unnamed first column
    unnamed = [col for col in df.columns if str(col).startswith('Unnamed:')]
    if unnamed:
        df = df.drop(columns=unnamed)

    df = validate_dataset(df, config)

    season_col = config['columns']['season']
    logger.info(
        f"Loaded {len(df)} player-seasons across {df[season_col].nunique()} seasons "
        f"({df[season_col].min()}-{df[season_col].max()})"
    )
    missing_total = int(df.select_dtypes(include=[np.number]).isna().sum().sum())
    if missing_total:
        logger.info(f"Dataset has {missing_total} missing numeric values to impute")

    return df
