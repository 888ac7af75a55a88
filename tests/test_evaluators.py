#!/usr/bin/env python
# -*- coding: utf-8 -*-

"""
Tests for model evaluation and selection
"""

import unittest
import os
import sys

import numpy as np

# Add project root to path if needed for imports
sys.path.append(os.path.join(os.path.dirname(__file__), '..'))

from mvp_predictor.config import get_default_config
from mvp_predictor.evaluators import ModelEvaluator, compute_rmse, select_best_model
from mvp_predictor.exceptions import EvaluationError
from mvp_predictor.model_bank import ModelBank, ModelResult


class TestRMSE(unittest.TestCase):
    """Test case for the RMSE metric"""

    def test_perfect_predictions(self):
        """Test that identical predictions score zero"""
        y = [0.1, 0.5, 0.9]
        self.assertEqual(compute_rmse(y, y), 0.0)

    def test_known_value(self):
        """Test RMSE against a hand-computed value"""
        # Errors 0.1, -0.1, 0.2, 0.0: mean square 0.015
        rmse = compute_rmse([0.0, 0.5, 0.3, 0.8], [0.1, 0.4, 0.5, 0.8])
        self.assertAlmostEqual(rmse, np.sqrt(0.015))

    def test_empty_input(self):
        """Test that an empty TEST set is an error"""
        with self.assertRaises(EvaluationError):
            compute_rmse([], [])

    def test_length_mismatch(self):
        """Test that predictions must line up with actual values"""
        with self.assertRaises(EvaluationError):
            compute_rmse([0.1, 0.2], [0.1])

    def test_nan_prediction(self):
        """Test that a NaN prediction is an error"""
        with self.assertRaises(EvaluationError):
            compute_rmse([0.1, 0.2], [0.1, np.nan])


class TestModelSelection(unittest.TestCase):
    """Test case for picking the best model"""

    def _result(self, name, rmse):
        return ModelResult(name=name, model=None, trainer=None, features=[], test_rmse=rmse)

    def test_lowest_rmse_wins(self):
        """Test that the minimum RMSE model is selected"""
        results = {
            'linear_regression': self._result('linear_regression', 0.08),
            'ridge': self._result('ridge', 0.05),
            'knn': self._result('knn', 0.07)
        }

        selection = select_best_model(results)

        self.assertEqual(selection.best_model, 'ridge')
        self.assertEqual(selection.best_rmse, 0.05)
        self.assertEqual(selection.ranking(), ['ridge', 'knn', 'linear_regression'])

    def test_tie_goes_to_earlier_model(self):
        """Test that equal RMSEs keep the earlier bank entry"""
        results = {
            'lasso': self._result('lasso', 0.05),
            'ridge': self._result('ridge', 0.05),
            'svr': self._result('svr', 0.06)
        }

        self.assertEqual(select_best_model(results).best_model, 'lasso')

    def test_unevaluated_model(self):
        """Test that every model needs a TEST RMSE"""
        with self.assertRaises(EvaluationError):
            select_best_model({'ridge': self._result('ridge', None)})


class TestModelEvaluator(unittest.TestCase):
    """Test case for the ModelEvaluator class"""

    def setUp(self):
        """Set up test environment before each test"""
        self.config = get_default_config(config={
            'training': {'models': ['linear_regression', 'gradient_boosting', 'knn']}
        })
        rng = np.random.RandomState(5)
        self.features = ['pts_per_g', 'ws', 'vorp']
        X = rng.normal(size=(50, 3))
        y = np.clip(0.3 + 0.1 * X[:, 0] + 0.03 * X[:, 1], 0, 1)
        self.X_train, self.y_train = X[:40], y[:40]
        self.X_test, self.y_test = X[40:], y[40:]

        self.results = ModelBank(self.config).train_all(self.X_train, self.y_train, self.features)
        self.evaluator = ModelEvaluator(self.config)

    def test_evaluate_model_metrics(self):
        """Test the metrics recorded for a model"""
        result = self.results['linear_regression']
        preds = self.evaluator.evaluate_model(result, self.X_test, self.y_test,
                                              baseline_value=float(self.y_train.mean()))

        self.assertEqual(preds.shape, (10,))
        self.assertAlmostEqual(result.test_rmse, result.metrics['rmse'])
        self.assertEqual(result.metrics['test_samples'], 10)
        self.assertIn('r2', result.metrics)
        # A noiseless linear target beats the constant baseline
        self.assertGreater(result.metrics['rmse_improvement'], 0)

    def test_single_row_has_no_r2(self):
        """Test that R^2 is not reported for a one-row TEST set"""
        result = self.results['linear_regression']
        self.evaluator.evaluate_model(result, self.X_test[:1], self.y_test[:1])

        self.assertNotIn('r2', result.metrics)

    def test_evaluate_all(self):
        """Test that every model is scored, in bank order"""
        predictions = self.evaluator.evaluate_all(self.results, self.X_test, self.y_test)

        self.assertEqual(list(predictions.keys()), ['linear_regression', 'gradient_boosting', 'knn'])
        for result in self.results.values():
            self.assertIsNotNone(result.test_rmse)
        self.assertEqual(self.evaluator.get_evaluation_metrics()['models_evaluated'], 3)

    def test_feature_importance(self):
        """Test that importances are non-negative and sorted for every model kind"""
        for name, result in self.results.items():
            with self.subTest(model=name):
                importance = self.evaluator.feature_importance(result, self.X_test, self.y_test)

                self.assertEqual(sorted(importance.index), sorted(self.features))
                self.assertTrue((importance >= 0).all())
                self.assertTrue(importance.is_monotonic_decreasing)

    def test_linear_importance_ranks_driver_first(self):
        """Test that the dominant coefficient ranks first"""
        importance = self.evaluator.feature_importance(self.results['linear_regression'], self.X_test, self.y_test)
        self.assertEqual(importance.index[0], 'pts_per_g')


if __name__ == '__main__':
    unittest.main()
