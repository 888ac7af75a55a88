#!/usr/bin/env python
# -*- coding: utf-8 -*-

"""
Base Model Trainer Module

Provides the abstract base class for all award-share regressors in the model
bank. Each trainer wraps one scikit-learn estimator behind the same
train/predict interface and, where the estimator has tunable
hyperparameters, runs a k-fold grid search on the training data.
"""

import math
import time
import warnings
import traceback
from abc import ABC, abstractmethod
from typing import Dict, List, Any, Optional

import numpy as np
from sklearn.base import RegressorMixin
from sklearn.exceptions import ConvergenceWarning
from sklearn.model_selection import GridSearchCV, KFold, cross_val_score

from ..config import logger
from ..exceptions import FitError


class BaseModelTrainer(ABC):
    """
    Abstract base class for model trainers

    All model trainers must implement build_estimator. Tuned trainers read
    their search space from the 'param_grid' entry of their configuration.
    """

    def __init__(self, config: Dict[str, Any]):
        """
        Initialize the base trainer

        Args:
            config: Model configuration dictionary
        """
        self.config = config
        self.model_type = "base"
        self.params = dict(config.get('params', {}))
        self.optimize_hyperparams = config.get('optimize_hyperparams', False)
        self.cv_folds = config.get('cv_folds', 5)
        self.random_state = config.get('random_state', 42)
        self.silence_search_convergence_warnings = config.get('silence_search_convergence_warnings', False)

        # Filled by train()
        self.best_params_: Dict[str, Any] = {}
        self.cv_rmse_: Optional[float] = None
        self.train_time_: Optional[float] = None

    @abstractmethod
    def build_estimator(self, **params) -> RegressorMixin:
        """
        Create an unfitted estimator

        Args:
            **params: Estimator hyperparameters

        Returns:
            scikit-learn regressor
        """
        pass

    def get_param_grid(self, n_samples: int) -> Dict[str, List[Any]]:
        """
        Hyperparameter grid for the k-fold search

        Args:
            n_samples: Number of training rows

        Returns:
            Grid in GridSearchCV format (empty when nothing is tuned)
        """
        if not self.optimize_hyperparams:
            return {}
        return dict(self.config.get('param_grid', {}))

    def _cv_splitter(self) -> KFold:
        return KFold(n_splits=self.cv_folds, shuffle=True, random_state=self.random_state)

    def smallest_fold_train_size(self, n_samples: int) -> int:
        """Rows in the smallest training fold of the k-fold split"""
        return n_samples - math.ceil(n_samples / self.cv_folds)

    def _validate_training_data(self, X: np.ndarray, y: np.ndarray) -> None:
        if X.ndim != 2:
            raise FitError(f"{self.model_type}: feature matrix must be 2-dimensional, got shape {X.shape}")
        if X.shape[0] != y.shape[0]:
            raise FitError(f"{self.model_type}: {X.shape[0]} feature rows but {y.shape[0]} targets")
        if X.shape[1] == 0:
            raise FitError(f"{self.model_type}: feature matrix has no columns")
        if not np.isfinite(X).all():
            raise FitError(f"{self.model_type}: feature matrix contains NaN or infinite values")
        if not np.isfinite(y).all():
            raise FitError(f"{self.model_type}: target contains NaN or infinite values")
        if X.shape[0] < self.cv_folds:
            raise FitError(
                f"{self.model_type}: {X.shape[0]} training rows are too few for {self.cv_folds}-fold cross-validation"
            )

    def train(self, X: np.ndarray, y: np.ndarray) -> RegressorMixin:
        """
        Train the estimator, tuning hyperparameters with k-fold CV when configured

        Convergence warnings raised while scoring CV folds or discarded grid
        candidates are logged. The final estimator, refit on every training
        row, must converge.

        Args:
            X: Training features
            y: Training targets

        Returns:
            Fitted estimator

        Raises:
            FitError: If the data is malformed, the estimator fails or the
                final estimator does not converge
        """
        X = np.asarray(X, dtype=float)
        y = np.asarray(y, dtype=float).ravel()
        self._validate_training_data(X, y)

        logger.info(f"Training {self.model_type} model on {X.shape[0]} rows x {X.shape[1]} features")
        start_time = time.time()

        try:
            with warnings.catch_warnings(record=True) as caught:
                warnings.simplefilter('always', ConvergenceWarning)
                param_grid = self.get_param_grid(X.shape[0])
                if param_grid:
                    params = self._search(X, y, param_grid)
                else:
                    params = dict(self.params)
                    scores = cross_val_score(
                        self.build_estimator(**params), X, y,
                        cv=self._cv_splitter(), scoring='neg_mean_squared_error'
                    )
                    self.cv_rmse_ = float(np.sqrt(-scores.mean()))
            self._log_search_warnings(caught)

            self.best_params_ = params
            model = self._fit_final(X, y, params)
        except (ValueError, np.linalg.LinAlgError) as e:
            logger.error(f"Error training {self.model_type} model: {str(e)}")
            logger.error(traceback.format_exc())
            raise FitError(f"{self.model_type} failed to fit: {str(e)}") from e

        self.train_time_ = time.time() - start_time
        logger.info(
            f"Trained {self.model_type} model in {self.train_time_:.2f} seconds "
            f"(cv RMSE {self.cv_rmse_:.4f}, params {self.best_params_})"
        )
        return model

    def _search(self, X: np.ndarray, y: np.ndarray, param_grid: Dict[str, List[Any]]) -> Dict[str, Any]:
        """
        Grid search over param_grid with k-fold CV

        Args:
            X: Training features
            y: Training targets
            param_grid: Search space

        Returns:
            Full parameter set of the best candidate
        """
        logger.info(f"Starting {self.cv_folds}-fold hyperparameter search for {self.model_type}: {param_grid}")

        base_params = {key: value for key, value in self.params.items() if key not in param_grid}
        search = GridSearchCV(
            estimator=self.build_estimator(**base_params),
            param_grid=param_grid,
            cv=self._cv_splitter(),
            scoring='neg_mean_squared_error',
            error_score='raise',
            refit=False
        )
        search.fit(X, y)

        self.cv_rmse_ = float(np.sqrt(-search.best_score_))
        logger.info(f"Best parameters: {search.best_params_}")

        return {**base_params, **search.best_params_}

    def _fit_final(self, X: np.ndarray, y: np.ndarray, params: Dict[str, Any]) -> RegressorMixin:
        """
        Fit the chosen parameters on all training rows

        Raises:
            FitError: If the estimator reports that it did not converge
        """
        model = self.build_estimator(**params)
        with warnings.catch_warnings(record=True) as caught:
            warnings.simplefilter('always', ConvergenceWarning)
            model.fit(X, y)

        convergence = [w for w in caught if issubclass(w.category, ConvergenceWarning)]
        if convergence:
            raise FitError(
                f"{self.model_type} did not converge with params {params}: {convergence[-1].message}"
            )
        for other in caught:
            logger.debug(f"{self.model_type}: {other.category.__name__}: {other.message}")
        return model

    def _log_search_warnings(self, caught: List[warnings.WarningMessage]) -> None:
        convergence = [w for w in caught if issubclass(w.category, ConvergenceWarning)]
        for other in caught:
            if not issubclass(other.category, ConvergenceWarning):
                logger.debug(f"{self.model_type}: {other.category.__name__}: {other.message}")
        if not convergence:
            return

        message = (f"{self.model_type} raised {len(convergence)} convergence warnings during "
                   f"cross-validation: {convergence[-1].message}")
        if self.silence_search_convergence_warnings:
            logger.debug(message)
        else:
            logger.warning(message)

    def predict(self, model: RegressorMixin, X: np.ndarray) -> np.ndarray:
        """
        Predict award share

        Args:
            model: Fitted estimator returned by train()
            X: Feature matrix with the training columns

        Returns:
            1-D array of predictions
        """
        return np.asarray(model.predict(np.asarray(X, dtype=float)), dtype=float).ravel()

    def get_hyperparameters(self) -> Dict[str, Any]:
        """
        Get the hyperparameters for the model

        Returns:
            Dictionary of hyperparameters
        """
        return self.params

    def set_hyperparameters(self, params: Dict[str, Any]) -> None:
        """
        Set hyperparameters for the model

        Args:
            params: Dictionary of hyperparameters
        """
        self.params.update(params)
        logger.info(f"Updated {self.model_type} hyperparameters: {params}")
