#!/usr/bin/env python
# -*- coding: utf-8 -*-

"""
Model Bank Module for the MVP Pipeline

Responsibilities:
- Load the configured trainers by name from the model_trainers package
- Fit every algorithm on the same TRAIN matrix of selected features
- Optionally fit the algorithms in parallel worker processes
- Return one ModelResult per algorithm, in bank order
"""

import importlib
import concurrent.futures
from dataclasses import dataclass, field
from typing import Dict, List, Any, Optional, Tuple

import numpy as np

from .config import logger
from .exceptions import ConfigurationError, FitError
from .model_trainers.base_trainer import BaseModelTrainer


@dataclass
class ModelResult:
    """A fitted model and its scores"""
    name: str
    model: Any
    trainer: BaseModelTrainer
    features: List[str]
    best_params: Dict[str, Any] = field(default_factory=dict)
    cv_rmse: Optional[float] = None
    train_time: Optional[float] = None
    test_rmse: Optional[float] = None
    metrics: Dict[str, Any] = field(default_factory=dict)

    def predict(self, X: np.ndarray) -> np.ndarray:
        return self.trainer.predict(self.model, X)


def _fit_trainer(trainer: BaseModelTrainer, X: np.ndarray, y: np.ndarray) -> Tuple[BaseModelTrainer, Any]:
    # Module-level so worker processes can unpickle it
    model = trainer.train(X, y)
    return trainer, model


class ModelBank:
    """
    Bank of award-share regressors trained with identical inputs
    """

    def __init__(self, config: Dict[str, Any]):
        """
        Initialize the model bank with configuration

        Args:
            config: Pipeline configuration dictionary
        """
        self.config = config
        training = config['training']
        self.model_names = list(training['models'])
        self.parallel = training.get('parallel', False)
        self.max_workers = training.get('max_workers')
        self.model_trainers: Dict[str, BaseModelTrainer] = {}

        self.metrics = {
            'models_trained': 0,
            'training_time_seconds': 0.0
        }

    def _trainer_config(self, model_name: str) -> Dict[str, Any]:
        training = self.config['training']
        model_config = dict(self.config['models'][model_name])
        model_config.setdefault('cv_folds', training['cv_folds'])
        model_config.setdefault('random_state', training['random_state'])
        model_config.setdefault(
            'silence_search_convergence_warnings', training.get('silence_search_convergence_warnings', False)
        )
        return model_config

    def load_model_trainers(self) -> Dict[str, BaseModelTrainer]:
        """
        Dynamically load model trainers from config

        Returns:
            Mapping of model name to trainer, in bank order

        Raises:
            ConfigurationError: If a trainer module or class cannot be found
        """
        self.model_trainers = {}
        for model_name in self.model_names:
            if model_name not in self.config['models']:
                raise ConfigurationError(f"No configuration for model '{model_name}'")

            model_config = self._trainer_config(model_name)
            trainer_module = model_config.get('trainer_module')
            trainer_class = model_config.get('trainer_class')

            try:
                module = importlib.import_module(f".model_trainers.{trainer_module}", package="mvp_predictor")
                trainer_cls = getattr(module, trainer_class)
            except (ImportError, AttributeError, TypeError) as e:
                logger.error(f"Error loading model trainer {model_name}: {str(e)}")
                raise ConfigurationError(
                    f"Cannot load trainer {trainer_class!r} from module {trainer_module!r} for '{model_name}'"
                ) from e

            self.model_trainers[model_name] = trainer_cls(model_config)
            logger.info(f"Loaded model trainer: {model_name} using {trainer_class}")

        return self.model_trainers

    def train_all(self, X: np.ndarray, y: np.ndarray, features: List[str]) -> Dict[str, ModelResult]:
        """
        Fit every model in the bank

        Args:
            X: TRAIN feature matrix (columns in the order of features)
            y: TRAIN target
            features: Names of the feature columns

        Returns:
            Ordered mapping of model name to ModelResult

        Raises:
            FitError: If any model fails; the run is aborted
        """
        X = np.asarray(X, dtype=float)
        y = np.asarray(y, dtype=float).ravel()
        if X.ndim != 2 or X.shape[1] != len(features):
            raise FitError(f"Feature matrix shape {X.shape} does not match {len(features)} selected features")

        if not self.model_trainers:
            self.load_model_trainers()

        logger.info(f"Training {len(self.model_trainers)} models on {X.shape[0]} rows")

        if self.parallel and len(self.model_trainers) > 1:
            fitted = self._train_parallel(X, y)
        else:
            fitted = {name: _fit_trainer(trainer, X, y) for name, trainer in self.model_trainers.items()}

        results = {}
        for name in self.model_trainers:
            trainer, model = fitted[name]
            self.model_trainers[name] = trainer
            results[name] = ModelResult(
                name=name,
                model=model,
                trainer=trainer,
                features=list(features),
                best_params=dict(trainer.best_params_),
                cv_rmse=trainer.cv_rmse_,
                train_time=trainer.train_time_
            )
            self.metrics['models_trained'] += 1
            self.metrics['training_time_seconds'] += trainer.train_time_ or 0.0

        return results

    def _train_parallel(self, X: np.ndarray, y: np.ndarray) -> Dict[str, Tuple[BaseModelTrainer, Any]]:
        logger.info(f"Fitting models in parallel (max_workers={self.max_workers})")
        fitted = {}
        with concurrent.futures.ProcessPoolExecutor(max_workers=self.max_workers) as executor:
            futures = {
                executor.submit(_fit_trainer, trainer, X, y): name
                for name, trainer in self.model_trainers.items()
            }
            for future in concurrent.futures.as_completed(futures):
                name = futures[future]
                try:
                    fitted[name] = future.result()
                except FitError:
                    logger.error(f"Model {name} failed to fit; aborting run")
                    raise
        return fitted

    def get_training_metrics(self) -> Dict[str, Any]:
        """
        Get metrics about the training process

        Returns:
            Dictionary with training metrics
        """
        return self.metrics
