#!/usr/bin/env python
# -*- coding: utf-8 -*-

"""
MVP Decision Module

For each TEST season the predicted MVP is the row with the highest predicted
award share and the actual MVP the row with the highest actual share. Both use
a strict argmax where the first row wins a tie, unlike the label builder,
which marks every tied player. Accuracy is the fraction of seasons where the
two players match.
"""

from dataclasses import dataclass, asdict
from typing import Dict, List, Any

import numpy as np
import pandas as pd

from .config import logger
from .exceptions import EvaluationError


@dataclass
class SeasonPrediction:
    """Predicted vs actual MVP for one season"""
    season: Any
    predicted_player: Any
    predicted_share: float
    actual_player: Any
    actual_share: float
    candidates: int

    @property
    def correct(self) -> bool:
        return self.predicted_player == self.actual_player

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data['correct'] = self.correct
        return data


def decide_season_mvps(test: pd.DataFrame, predictions, player_col: str, season_col: str,
                       target_col: str) -> List[SeasonPrediction]:
    """
    Pick the predicted and actual MVP of every TEST season

    Args:
        test: TEST partition, rows in their table order
        predictions: Predicted award share, aligned with test rows
        player_col: Player identity column
        season_col: Season column
        target_col: Actual award share column

    Returns:
        One SeasonPrediction per season, in season order

    Raises:
        EvaluationError: On an empty TEST partition or unusable predictions
    """
    if test.empty:
        raise EvaluationError("Cannot decide MVPs on an empty TEST partition")

    predicted = np.asarray(predictions, dtype=float).ravel()
    if predicted.size != len(test):
        raise EvaluationError(f"{predicted.size} predictions for {len(test)} TEST rows")
    if not np.isfinite(predicted).all():
        raise EvaluationError("Predictions contain NaN or infinite values")

    frame = test[[player_col, season_col, target_col]].reset_index(drop=True)
    frame['predicted_share'] = predicted

    decisions = []
    for season, group in frame.groupby(season_col, sort=True):
        # idxmax returns the first occurrence of the maximum
        predicted_row = group.loc[group['predicted_share'].idxmax()]
        actual_row = group.loc[group[target_col].idxmax()]
        decisions.append(SeasonPrediction(
            season=season,
            predicted_player=predicted_row[player_col],
            predicted_share=float(predicted_row['predicted_share']),
            actual_player=actual_row[player_col],
            actual_share=float(actual_row[target_col]),
            candidates=len(group)
        ))

    return decisions


def mvp_accuracy(decisions: List[SeasonPrediction]) -> float:
    """
    Fraction of seasons whose predicted MVP is the actual MVP

    Args:
        decisions: Per-season decisions

    Returns:
        Accuracy in [0, 1]
    """
    if not decisions:
        raise EvaluationError("No TEST seasons to score MVP accuracy on")

    correct = sum(1 for decision in decisions if decision.correct)
    accuracy = correct / len(decisions)
    logger.info(f"MVP prediction accuracy: {correct}/{len(decisions)} seasons ({accuracy:.1%})")
    return accuracy
