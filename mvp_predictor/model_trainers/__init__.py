# -*- coding: utf-8 -*-
"""
Model Trainers Package

One trainer per regression algorithm in the model bank, all sharing the
BaseModelTrainer train/predict interface.
"""

from .base_trainer import BaseModelTrainer
from .linear_trainers import LinearRegressionTrainer, LassoTrainer, RidgeTrainer, ElasticNetTrainer
from .gradient_boosting_trainer import GradientBoostingTrainer
from .svr_trainer import SVRTrainer
from .knn_trainer import KNNTrainer

__all__ = [
    'BaseModelTrainer',
    'LinearRegressionTrainer',
    'LassoTrainer',
    'RidgeTrainer',
    'ElasticNetTrainer',
    'GradientBoostingTrainer',
    'SVRTrainer',
    'KNNTrainer'
]
