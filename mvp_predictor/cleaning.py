#!/usr/bin/env python
# -*- coding: utf-8 -*-

"""
Cleaning and Labelling Module for the MVP Pipeline

Responsibilities:
- Impute missing numeric values with the per-column median
- Derive the boolean "won MVP this season" label from award share
"""

from typing import Optional, List

import numpy as np
import pandas as pd

from .config import logger
from .exceptions import DataError


def impute_missing_values(df: pd.DataFrame, exclude: Optional[List[str]] = None) -> pd.DataFrame:
    """
    Replace missing numeric values with each column's median

    The median is computed over the non-missing values of the same column, so
    it is unchanged by the imputation. Non-numeric columns pass through as-is.

    Args:
        df: Player-season DataFrame
        exclude: Numeric columns to leave untouched

    Returns:
        New DataFrame without missing numeric values

    Raises:
        DataError: If a numeric column has no values at all
    """
    df = df.copy()
    exclude = set(exclude or [])
    numeric_cols = [col for col in df.select_dtypes(include=[np.number]).columns if col not in exclude]

    empty_cols = [col for col in numeric_cols if df[col].notna().sum() == 0]
    if empty_cols:
        raise DataError(f"Cannot impute median for entirely missing columns: {empty_cols}")

    imputed = 0
    for col in numeric_cols:
        missing = int(df[col].isna().sum())
        if missing == 0:
            continue
        median = df[col].median()
        df[col] = df[col].fillna(median)
        imputed += missing
        logger.debug(f"Imputed {missing} values in '{col}' with median {median:.4f}")

    if imputed:
        logger.info(f"Imputed {imputed} missing values across {len(numeric_cols)} numeric columns using median strategy")

    return df


def build_mvp_labels(df: pd.DataFrame, season_col: str, target_col: str, label_col: str = 'mvp') -> pd.DataFrame:
    """
    Mark the season MVP(s)

    Every row whose award share equals its season's maximum is marked, so a
    tie for the top share marks all tied players.

    Args:
        df: Player-season DataFrame
        season_col: Season column name
        target_col: Award share column name
        label_col: Name of the boolean label column to add

    Returns:
        New DataFrame with the label column

    Raises:
        DataError: If award share is missing for a whole season
    """
    df = df.copy()
    season_max = df.groupby(season_col)[target_col].transform('max')

    if season_max.isna().any():
        seasons = sorted(df.loc[season_max.isna(), season_col].unique().tolist())
        raise DataError(f"Seasons without any '{target_col}' value: {seasons}")

    df[label_col] = df[target_col] == season_max

    multi = df.groupby(season_col)[label_col].sum()
    tied = multi[multi > 1]
    if not tied.empty:
        logger.info(f"Seasons with tied MVP award share (all marked): {tied.index.tolist()}")

    return df
