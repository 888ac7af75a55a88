#!/usr/bin/env python
# -*- coding: utf-8 -*-

"""
Gradient Boosting Model Trainer

Responsibilities:
- Train a gradient boosted tree regressor on award share
- Tune ensemble size, learning rate and tree depth with k-fold grid search

Impurity importances of the fitted model are reported by the evaluator.
"""

from typing import Dict, Any

from sklearn.ensemble import GradientBoostingRegressor

from .base_trainer import BaseModelTrainer
from ..config import logger


class GradientBoostingTrainer(BaseModelTrainer):
    """
    Gradient Boosting model trainer for award-share regression
    """

    def __init__(self, config: Dict[str, Any]):
        """
        Initialize the Gradient Boosting trainer

        Args:
            config: Model configuration dictionary
        """
        super().__init__(config)
        self.model_type = "gradient_boosting"

        # Default hyperparameters
        self.params = {
            'n_estimators': self.params.get('n_estimators', 100),
            'learning_rate': self.params.get('learning_rate', 0.1),
            'max_depth': self.params.get('max_depth', 3),
            'subsample': self.params.get('subsample', 1.0)
        }

        logger.info(f"Initialized GradientBoostingTrainer with params: {self.params}")
        if self.optimize_hyperparams:
            logger.info("Hyperparameter tuning enabled using grid search")

    def build_estimator(self, **params) -> GradientBoostingRegressor:
        params.setdefault('random_state', self.random_state)
        return GradientBoostingRegressor(**params)
