#!/usr/bin/env python
# -*- coding: utf-8 -*-

"""
Linear Model Trainers

Ordinary least squares plus the three penalized variants. The penalty
strength (and the L1/L2 mix for Elastic Net) is chosen by k-fold grid search.
"""

from typing import Dict, Any

from sklearn.linear_model import LinearRegression, Lasso, Ridge, ElasticNet

from .base_trainer import BaseModelTrainer


class LinearRegressionTrainer(BaseModelTrainer):
    """Ordinary least squares, no hyperparameters to tune"""

    def __init__(self, config: Dict[str, Any]):
        super().__init__(config)
        self.model_type = "linear_regression"

    def build_estimator(self, **params) -> LinearRegression:
        return LinearRegression(**params)

    def get_param_grid(self, n_samples: int):
        return {}


class LassoTrainer(BaseModelTrainer):
    """L1-penalized linear regression"""

    def __init__(self, config: Dict[str, Any]):
        super().__init__(config)
        self.model_type = "lasso"

    def build_estimator(self, **params) -> Lasso:
        params.setdefault('random_state', self.random_state)
        return Lasso(**params)


class RidgeTrainer(BaseModelTrainer):
    """L2-penalized linear regression"""

    def __init__(self, config: Dict[str, Any]):
        super().__init__(config)
        self.model_type = "ridge"

    def build_estimator(self, **params) -> Ridge:
        return Ridge(**params)


class ElasticNetTrainer(BaseModelTrainer):
    """Mixed L1/L2-penalized linear regression"""

    def __init__(self, config: Dict[str, Any]):
        super().__init__(config)
        self.model_type = "elastic_net"

    def build_estimator(self, **params) -> ElasticNet:
        params.setdefault('random_state', self.random_state)
        return ElasticNet(**params)
