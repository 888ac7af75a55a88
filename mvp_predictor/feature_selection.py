#!/usr/bin/env python
# -*- coding: utf-8 -*-

"""
Feature Selection Module for the MVP Pipeline

Ranks candidate features by the absolute Pearson correlation with award share
on the TRAIN partition and keeps the strongest top_k. The sort is stable, so
equally correlated features keep their candidate-list order.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Sequence

import pandas as pd

from .config import logger
from .exceptions import SelectionError


@dataclass
class FeatureSelection:
    """Selected features plus the full correlation ranking"""
    selected: List[str]
    correlations: Dict[str, float] = field(default_factory=dict)

    def ranking(self) -> List[str]:
        return list(self.correlations.keys())


def rank_features(train: pd.DataFrame, candidates: Sequence[str], target_col: str) -> Dict[str, float]:
    """
    Correlate each candidate with the target and rank by |r|

    Args:
        train: TRAIN partition
        candidates: Candidate feature names, in tie-break order
        target_col: Target column

    Returns:
        Ordered mapping feature -> signed Pearson r, strongest first
    """
    target = train[target_col].astype(float)
    correlations = {}
    for feature in candidates:
        r = train[feature].astype(float).corr(target)
        if pd.isna(r):
            logger.warning(f"Correlation of '{feature}' with '{target_col}' is undefined on TRAIN; ranking it as 0")
            r = 0.0
        correlations[feature] = float(r)

    ordered = sorted(correlations.items(), key=lambda item: abs(item[1]), reverse=True)
    return dict(ordered)


def select_top_features(train: pd.DataFrame, candidates: Sequence[str], target_col: str,
                        top_k: int = 10) -> FeatureSelection:
    """
    Select the top_k candidates most correlated with the target

    Args:
        train: TRAIN partition
        candidates: Candidate feature names
        target_col: Target column
        top_k: Number of features to keep

    Returns:
        FeatureSelection

    Raises:
        SelectionError: If fewer than top_k candidates are available
    """
    if target_col not in train.columns:
        raise SelectionError(f"Target column '{target_col}' not in TRAIN partition")

    available = [feature for feature in candidates if feature in train.columns]
    absent = [feature for feature in candidates if feature not in train.columns]
    if absent:
        logger.warning(f"Candidate features not found and skipped: {absent}")

    if len(available) < top_k:
        raise SelectionError(
            f"Need at least {top_k} candidate features, only {len(available)} available: {available}"
        )

    non_numeric = [feature for feature in available if not pd.api.types.is_numeric_dtype(train[feature])]
    if non_numeric:
        raise SelectionError(f"Candidate features must be numeric: {non_numeric}")

    correlations = rank_features(train, available, target_col)
    selected = list(correlations.keys())[:top_k]

    logger.info(
        "Selected features: " + ", ".join(f"{name} (r={correlations[name]:.3f})" for name in selected)
    )
    return FeatureSelection(selected=selected, correlations=correlations)
