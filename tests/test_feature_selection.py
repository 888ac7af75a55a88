#!/usr/bin/env python
# -*- coding: utf-8 -*-

"""
Tests for correlation-based feature selection
"""

import unittest
import os
import sys

import numpy as np
import pandas as pd

# Add project root to path if needed for imports
sys.path.append(os.path.join(os.path.dirname(__file__), '..'))

from mvp_predictor.exceptions import SelectionError
from mvp_predictor.feature_selection import select_top_features, rank_features
from synthetic_data import correlated_feature


class TestFeatureSelection(unittest.TestCase):
    """Test case for selecting the features most correlated with award share"""

    def setUp(self):
        """Set up test environment before each test"""
        rng = np.random.RandomState(3)
        target = rng.uniform(0, 1, 60)

        columns = {'award_share': target}
        columns['feature_a'] = correlated_feature(target, 0.9, seed=1)
        columns['feature_b'] = correlated_feature(target, 0.3, seed=2)
        # Fillers with small, distinct correlations
        for i in range(8):
            columns[f'filler_{i}'] = correlated_feature(target, 0.01 * (i + 1), seed=10 + i)
        columns['feature_neg'] = correlated_feature(target, -0.95, seed=4)

        self.train = pd.DataFrame(columns)
        self.candidates = [col for col in self.train.columns if col != 'award_share']

    def test_stronger_correlation_ranks_first(self):
        """Test that |r| = 0.9 ranks before |r| = 0.3"""
        correlations = rank_features(self.train, ['feature_b', 'feature_a'], 'award_share')

        self.assertEqual(list(correlations.keys()), ['feature_a', 'feature_b'])
        self.assertAlmostEqual(correlations['feature_a'], 0.9)
        self.assertAlmostEqual(correlations['feature_b'], 0.3)

    def test_negative_correlation_counts_by_magnitude(self):
        """Test that a strong negative correlation is selected first"""
        selection = select_top_features(self.train, self.candidates, 'award_share', top_k=10)

        self.assertEqual(selection.selected[0], 'feature_neg')
        self.assertLess(selection.correlations['feature_neg'], 0)

    def test_top_k_selected(self):
        """Test that exactly top_k features are kept, weakest filler dropped"""
        selection = select_top_features(self.train, self.candidates, 'award_share', top_k=10)

        self.assertEqual(len(selection.selected), 10)
        self.assertEqual(selection.selected[:3], ['feature_neg', 'feature_a', 'feature_b'])
        self.assertNotIn('filler_0', selection.selected)
        # The full ranking is kept for reporting
        self.assertEqual(len(selection.ranking()), len(self.candidates))

    def test_too_few_candidates(self):
        """Test that fewer candidates than top_k is an error"""
        with self.assertRaises(SelectionError):
            select_top_features(self.train, self.candidates[:9], 'award_share', top_k=10)

    def test_absent_candidates_skipped(self):
        """Test that unknown candidate names are skipped, not fatal"""
        candidates = self.candidates + ['not_a_column']
        selection = select_top_features(self.train, candidates, 'award_share', top_k=5)

        self.assertNotIn('not_a_column', selection.correlations)

    def test_ties_keep_candidate_order(self):
        """Test that equally correlated features keep their listed order"""
        train = self.train.assign(copy_of_a=self.train['feature_a'])

        correlations = rank_features(train, ['copy_of_a', 'feature_b', 'feature_a'], 'award_share')

        self.assertEqual(list(correlations.keys()), ['copy_of_a', 'feature_a', 'feature_b'])

    def test_constant_feature_ranks_as_zero(self):
        """Test that an undefined correlation is ranked last"""
        train = self.train.assign(constant=1.0)

        correlations = rank_features(train, ['constant', 'feature_b'], 'award_share')

        self.assertEqual(list(correlations.keys()), ['feature_b', 'constant'])
        self.assertEqual(correlations['constant'], 0.0)

    def test_non_numeric_candidate(self):
        """Test that text columns cannot be candidates"""
        train = self.train.assign(pos='PG')
        with self.assertRaises(SelectionError):
            select_top_features(train, self.candidates + ['pos'], 'award_share', top_k=10)


if __name__ == '__main__':
    unittest.main()
