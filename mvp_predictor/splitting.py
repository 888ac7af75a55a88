#!/usr/bin/env python
# -*- coding: utf-8 -*-

"""
Season Split Module for the MVP Pipeline

Rows with season <= cutoff go to TRAIN, everything later to TEST. The split
is a pure function of the season column.

The cutoff can be given as a raw season label (split.cutoff_units = 'raw') or
in standard units of the season column over the full dataset
(split.cutoff_units = 'scaled'), which is how a cutoff like 1.22 is read.
"""

from dataclasses import dataclass

import pandas as pd

from .config import logger
from .exceptions import DataError, EvaluationError


@dataclass
class SeasonSplit:
    """TRAIN/TEST partition of the player-season table"""
    train: pd.DataFrame
    test: pd.DataFrame
    cutoff: float
    cutoff_units: str

    def summary(self) -> dict:
        return {
            'cutoff': self.cutoff,
            'cutoff_units': self.cutoff_units,
            'train_rows': len(self.train),
            'test_rows': len(self.test)
        }


def season_train_mask(seasons: pd.Series, cutoff: float, cutoff_units: str = 'raw') -> pd.Series:
    """
    Boolean mask of TRAIN rows

    Args:
        seasons: Raw season values
        cutoff: Last TRAIN season (inclusive)
        cutoff_units: 'raw' for a season label, 'scaled' for standard units

    Returns:
        Series aligned with seasons, True for TRAIN rows
    """
    if cutoff_units == 'raw':
        return seasons <= cutoff

    if cutoff_units == 'scaled':
        std = float(seasons.std(ddof=0))
        if std == 0:
            raise DataError("A scaled season cutoff needs more than one distinct season")
        standardized = (seasons - seasons.mean()) / std
        return standardized <= cutoff

    raise DataError(f"Unknown cutoff units {cutoff_units!r}; expected 'raw' or 'scaled'")


def split_by_season(df: pd.DataFrame, season_col: str, cutoff: float, cutoff_units: str = 'raw') -> SeasonSplit:
    """
    Partition rows into TRAIN and TEST by season

    Args:
        df: Player-season DataFrame (season column holds raw seasons)
        season_col: Season column name
        cutoff: Last TRAIN season (inclusive)
        cutoff_units: 'raw' or 'scaled'

    Returns:
        SeasonSplit with disjoint TRAIN and TEST frames

    Raises:
        DataError: If TRAIN is empty
        EvaluationError: If TEST is empty
    """
    if season_col not in df.columns:
        raise DataError(f"Season column '{season_col}' not found")

    seasons = df[season_col]
    mask = season_train_mask(seasons, cutoff, cutoff_units)
    season_range = f"{seasons.min()}-{seasons.max()}"

    train = df.loc[mask].copy()
    test = df.loc[~mask].copy()

    if train.empty:
        raise DataError(f"Season cutoff {cutoff} ({cutoff_units}) leaves TRAIN empty; dataset seasons {season_range}")
    if test.empty:
        raise EvaluationError(f"Season cutoff {cutoff} ({cutoff_units}) leaves TEST empty; dataset seasons {season_range}")

    logger.info(
        f"Split at season cutoff {cutoff} ({cutoff_units}): "
        f"TRAIN {len(train)} rows, seasons {train[season_col].min()}-{train[season_col].max()}; "
        f"TEST {len(test)} rows, seasons {test[season_col].min()}-{test[season_col].max()}"
    )

    return SeasonSplit(train=train, test=test, cutoff=cutoff, cutoff_units=cutoff_units)
