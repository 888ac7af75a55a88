#!/usr/bin/env python
# -*- coding: utf-8 -*-

"""
Feature Scaling Module for the MVP Pipeline

Standardizes numeric feature columns to zero mean and unit variance with
scikit-learn's StandardScaler. The scaler is fit exactly once and the same
parameters are applied to every record.

By default the pipeline fits on the full dataset before the train/test split
(scaling.fit_scope = 'full'), so TEST rows contribute to the means and
standard deviations. Setting fit_scope = 'train' fits on TRAIN rows only.

Constant columns cannot be standardized. With scaling.zero_variance = 'error'
they raise DataError; with 'skip' they are left unscaled. Constant indicator
columns, such as the flag of a position absent from the data, are always left
unscaled.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Iterable

import numpy as np
import pandas as pd
from sklearn.preprocessing import StandardScaler

from .config import logger
from .exceptions import DataError


@dataclass
class ScalingParameters:
    """Per-feature (mean, standard deviation) pairs"""
    means: Dict[str, float] = field(default_factory=dict)
    stds: Dict[str, float] = field(default_factory=dict)
    skipped: List[str] = field(default_factory=list)

    @property
    def columns(self) -> List[str]:
        return list(self.means.keys())

    def to_dict(self) -> Dict[str, Dict[str, float]]:
        return {col: {'mean': self.means[col], 'std': self.stds[col]} for col in self.columns}


def scalable_columns(df: pd.DataFrame, exclude: Iterable[str]) -> List[str]:
    """
    Numeric columns eligible for scaling

    Args:
        df: Player-season DataFrame
        exclude: Identifier, target and label columns to leave alone

    Returns:
        Column names in table order
    """
    exclude = set(exclude)
    numeric = df.select_dtypes(include=[np.number]).columns
    return [col for col in numeric if col not in exclude and not pd.api.types.is_bool_dtype(df[col])]


class FeatureScaler:
    """
    Fit-once standardizer for player-season features
    """

    def __init__(self, zero_variance: str = 'error'):
        """
        Initialize the scaler

        Args:
            zero_variance: 'error' to reject constant columns, 'skip' to leave them unscaled
        """
        if zero_variance not in ('error', 'skip'):
            raise ValueError(f"zero_variance must be 'error' or 'skip', got {zero_variance!r}")
        self.zero_variance = zero_variance
        self.params: Optional[ScalingParameters] = None
        self._scaler: Optional[StandardScaler] = None

    @property
    def is_fitted(self) -> bool:
        return self.params is not None

    def fit(self, df: pd.DataFrame, columns: List[str],
            indicators: Optional[Iterable[str]] = None) -> ScalingParameters:
        """
        Compute scaling parameters

        Args:
            df: Rows to fit on (full dataset or TRAIN)
            columns: Numeric columns to standardize
            indicators: 0/1 flag columns that may be constant; those are left unscaled

        Returns:
            Fitted ScalingParameters

        Raises:
            DataError: On missing, non-numeric, non-finite or (with 'error' policy)
                constant non-indicator columns
        """
        if self.is_fitted:
            raise DataError("FeatureScaler is already fitted; scaling parameters are computed once per run")
        if df.empty:
            raise DataError("Cannot fit scaler on an empty table")

        missing = [col for col in columns if col not in df.columns]
        if missing:
            raise DataError(f"Cannot scale missing columns: {missing}")

        values = df[columns]
        non_finite = [col for col in columns if not np.isfinite(values[col].to_numpy(dtype=float)).all()]
        if non_finite:
            raise DataError(f"Columns contain missing or infinite values and cannot be scaled: {non_finite}")

        indicators = set(indicators or [])
        constant = [col for col in columns if values[col].nunique() <= 1]
        constant_features = [col for col in constant if col not in indicators]
        if constant_features and self.zero_variance == 'error':
            raise DataError(f"Zero-variance columns cannot be standardized: {constant_features}")
        if constant:
            logger.warning(f"Leaving zero-variance columns unscaled: {constant}")

        fit_columns = [col for col in columns if col not in constant]
        params = ScalingParameters(skipped=constant)

        if fit_columns:
            scaler = StandardScaler()
            scaler.fit(values[fit_columns].to_numpy(dtype=float))
            for col, mean, std in zip(fit_columns, scaler.mean_, scaler.scale_):
                params.means[col] = float(mean)
                params.stds[col] = float(std)
            self._scaler = scaler

        self.params = params
        logger.info(f"Fitted scaler on {len(df)} rows for {len(fit_columns)} columns")
        return params

    def transform(self, df: pd.DataFrame) -> pd.DataFrame:
        """
        Apply the fitted parameters

        Args:
            df: Rows to transform

        Returns:
            New DataFrame with standardized columns
        """
        if not self.is_fitted:
            raise DataError("FeatureScaler must be fitted before transform")

        df = df.copy()
        columns = self.params.columns
        if not columns:
            return df

        missing = [col for col in columns if col not in df.columns]
        if missing:
            raise DataError(f"Cannot transform, columns missing from table: {missing}")

        scaled = self._scaler.transform(df[columns].to_numpy(dtype=float))
        df[columns] = pd.DataFrame(scaled, index=df.index, columns=columns)
        return df

    def fit_transform(self, df: pd.DataFrame, columns: List[str]) -> pd.DataFrame:
        self.fit(df, columns)
        return self.transform(df)
