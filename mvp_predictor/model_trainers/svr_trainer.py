#!/usr/bin/env python
# -*- coding: utf-8 -*-

"""
Support Vector Regression Trainer

Kernel SVR (RBF by default) with C, gamma and epsilon chosen by k-fold grid
search. SVR does not expose feature importances; the evaluator falls back to
permutation importance for it.
"""

from typing import Dict, Any

from sklearn.svm import SVR

from .base_trainer import BaseModelTrainer


class SVRTrainer(BaseModelTrainer):
    """Kernel support-vector regressor"""

    def __init__(self, config: Dict[str, Any]):
        super().__init__(config)
        self.model_type = "svr"
        self.params.setdefault('kernel', 'rbf')

    def build_estimator(self, **params) -> SVR:
        return SVR(**params)
