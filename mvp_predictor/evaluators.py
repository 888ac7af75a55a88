#!/usr/bin/env python
# -*- coding: utf-8 -*-

"""
Model Evaluation Module for the MVP Pipeline

Responsibilities:
- Score each fitted model on the TEST partition (RMSE, MAE, R^2)
- Compare every model against a mean-of-TRAIN baseline
- Select the best model by minimum RMSE, ties going to the earlier bank entry
- Compute non-negative feature importances for the best model
"""

from dataclasses import dataclass, field
from typing import Dict, List, Any, Optional

import numpy as np
import pandas as pd
from sklearn.inspection import permutation_importance
from sklearn.metrics import mean_absolute_error, r2_score

from .config import logger
from .exceptions import EvaluationError
from .model_bank import ModelResult


@dataclass
class SelectionResult:
    """Outcome of model selection; the single best model of a run"""
    best_model: str
    best_rmse: float
    rmses: Dict[str, float] = field(default_factory=dict)

    def ranking(self) -> List[str]:
        return [name for name, _ in sorted(self.rmses.items(), key=lambda item: item[1])]


def compute_rmse(y_true, y_pred) -> float:
    """
    Root mean squared error

    Args:
        y_true: Actual award shares
        y_pred: Predicted award shares

    Returns:
        sqrt(mean((y_pred - y_true)^2))

    Raises:
        EvaluationError: On empty, mismatched or non-finite inputs
    """
    y_true = np.asarray(y_true, dtype=float).ravel()
    y_pred = np.asarray(y_pred, dtype=float).ravel()

    if y_true.size == 0:
        raise EvaluationError("Cannot compute RMSE on an empty TEST partition")
    if y_true.shape != y_pred.shape:
        raise EvaluationError(f"{y_pred.size} predictions for {y_true.size} actual values")
    if not np.isfinite(y_pred).all():
        raise EvaluationError("Predictions contain NaN or infinite values")
    if not np.isfinite(y_true).all():
        raise EvaluationError("Actual values contain NaN or infinite values")

    return float(np.sqrt(np.mean((y_pred - y_true) ** 2)))


def select_best_model(results: Dict[str, ModelResult]) -> SelectionResult:
    """
    Pick the model with the lowest TEST RMSE

    Args:
        results: Evaluated model results in bank order

    Returns:
        SelectionResult with all RMSEs and the winner
    """
    if not results:
        raise EvaluationError("No evaluated models to select from")

    best_name, best_rmse = None, None
    rmses = {}
    for name, result in results.items():
        if result.test_rmse is None:
            raise EvaluationError(f"Model '{name}' has not been evaluated")
        rmses[name] = result.test_rmse
        # Strict comparison keeps the earliest model on ties
        if best_rmse is None or result.test_rmse < best_rmse:
            best_name, best_rmse = name, result.test_rmse

    logger.info(f"Best model: {best_name} (RMSE {best_rmse:.4f})")
    return SelectionResult(best_model=best_name, best_rmse=best_rmse, rmses=rmses)


class ModelEvaluator:
    """
    Held-out evaluator for award-share regressors
    """

    def __init__(self, config: Dict[str, Any]):
        """
        Initialize the model evaluator with configuration

        Args:
            config: Configuration dictionary with evaluation settings
        """
        self.config = config
        evaluation = config.get('evaluation', {})
        self.importance_repeats = evaluation.get('importance_repeats', 10)
        self.random_state = config.get('training', {}).get('random_state', 42)
        self.evaluation_results: Dict[str, Dict[str, Any]] = {}

        self.metrics = {
            'models_evaluated': 0
        }

    def evaluate_model(self, result: ModelResult, X_test: np.ndarray, y_test: np.ndarray,
                       baseline_value: Optional[float] = None) -> np.ndarray:
        """
        Score one model on TEST

        Fills result.test_rmse and result.metrics.

        Args:
            result: Fitted model result
            X_test: TEST feature matrix
            y_test: TEST target
            baseline_value: Constant baseline prediction (mean TRAIN target)

        Returns:
            TEST predictions
        """
        logger.info(f"Evaluating {result.name} model")

        y_test = np.asarray(y_test, dtype=float).ravel()
        if y_test.size == 0:
            raise EvaluationError("TEST partition is empty; nothing to evaluate")

        y_pred = result.predict(X_test)
        rmse = compute_rmse(y_test, y_pred)

        metrics = {
            'rmse': rmse,
            'mae': float(mean_absolute_error(y_test, y_pred)),
            'test_samples': int(y_test.size)
        }
        # R^2 is undefined for a single sample
        if y_test.size >= 2:
            metrics['r2'] = float(r2_score(y_test, y_pred))

        if baseline_value is not None:
            baseline_rmse = compute_rmse(y_test, np.full_like(y_test, baseline_value))
            metrics['baseline_rmse'] = baseline_rmse
            metrics['rmse_improvement'] = baseline_rmse - rmse

        result.test_rmse = rmse
        result.metrics = metrics
        self.evaluation_results[result.name] = metrics
        self.metrics['models_evaluated'] += 1

        logger.info(f"RMSE: {rmse:.4f}, MAE: {metrics['mae']:.4f}" +
                    (f", R²: {metrics['r2']:.4f}" if 'r2' in metrics else ""))
        return y_pred

    def evaluate_all(self, results: Dict[str, ModelResult], X_test: np.ndarray, y_test: np.ndarray,
                     baseline_value: Optional[float] = None) -> Dict[str, np.ndarray]:
        """
        Score every model and return their TEST predictions in bank order
        """
        return {
            name: self.evaluate_model(result, X_test, y_test, baseline_value)
            for name, result in results.items()
        }

    def feature_importance(self, result: ModelResult, X: np.ndarray, y: np.ndarray) -> pd.Series:
        """
        Ranked, non-negative feature importances for a fitted model

        Tree ensembles report impurity importances, linear models the absolute
        coefficients, and other models (SVR, KNN) permutation importance on the
        given rows, clipped at zero.

        Args:
            result: Fitted model result
            X: Feature matrix used for permutation importance
            y: Target used for permutation importance

        Returns:
            Series indexed by feature name, sorted descending
        """
        model = result.model
        if hasattr(model, 'feature_importances_'):
            scores = np.asarray(model.feature_importances_, dtype=float)
            method = 'impurity'
        elif hasattr(model, 'coef_'):
            scores = np.abs(np.asarray(model.coef_, dtype=float).ravel())
            method = 'coefficient'
        else:
            permutation = permutation_importance(
                model, np.asarray(X, dtype=float), np.asarray(y, dtype=float).ravel(),
                n_repeats=self.importance_repeats,
                random_state=self.random_state,
                scoring='neg_mean_squared_error'
            )
            scores = np.clip(permutation.importances_mean, 0.0, None)
            method = 'permutation'

        importance = pd.Series(scores, index=result.features, name='importance')
        importance = importance.sort_values(ascending=False, kind='mergesort')
        logger.info(f"Computed {method} feature importance for {result.name}")
        return importance

    def get_evaluation_metrics(self) -> Dict[str, Any]:
        """
        Get metrics about the evaluation process

        Returns:
            Dictionary with evaluation metrics
        """
        return self.metrics
