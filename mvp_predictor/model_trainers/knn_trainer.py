#!/usr/bin/env python
# -*- coding: utf-8 -*-

"""
K-Nearest-Neighbors Regression Trainer

The neighbor count is tuned by k-fold grid search. Candidate counts larger
than the smallest CV training fold are dropped from the grid, since a fold
cannot supply more neighbors than it has rows.
"""

from typing import Dict, Any, List

from sklearn.neighbors import KNeighborsRegressor

from .base_trainer import BaseModelTrainer
from ..config import logger


class KNNTrainer(BaseModelTrainer):
    """k-nearest-neighbors regressor"""

    def __init__(self, config: Dict[str, Any]):
        super().__init__(config)
        self.model_type = "knn"

    def build_estimator(self, **params) -> KNeighborsRegressor:
        return KNeighborsRegressor(**params)

    def get_param_grid(self, n_samples: int) -> Dict[str, List[Any]]:
        grid = super().get_param_grid(n_samples)
        max_neighbors = self.smallest_fold_train_size(n_samples)

        if not grid:
            # Untuned: the configured count still has to fit in a CV fold
            if self.params.get('n_neighbors', 5) > max_neighbors:
                logger.warning(f"Reducing knn n_neighbors to {max_neighbors} for {n_samples} training rows")
                self.params['n_neighbors'] = max(1, max_neighbors)
            return grid

        candidates = grid.get('n_neighbors', [self.params.get('n_neighbors', 5)])
        usable = [k for k in candidates if k <= max_neighbors]
        if not usable:
            usable = [max(1, max_neighbors)]
        if len(usable) < len(candidates):
            logger.info(f"knn n_neighbors grid limited to {usable} (smallest CV fold has {max_neighbors} rows)")
        grid['n_neighbors'] = usable
        return grid
