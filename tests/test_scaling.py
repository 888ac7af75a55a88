#!/usr/bin/env python
# -*- coding: utf-8 -*-

"""
Tests for feature standardization
"""

import unittest
import os
import sys

import numpy as np
import pandas as pd

# Add project root to path if needed for imports
sys.path.append(os.path.join(os.path.dirname(__file__), '..'))

from mvp_predictor.exceptions import DataError
from mvp_predictor.scaling import FeatureScaler, scalable_columns


class TestFeatureScaler(unittest.TestCase):
    """Test case for the FeatureScaler class"""

    def setUp(self):
        """Set up test environment before each test"""
        self.df = pd.DataFrame({
            'player': ['A', 'B', 'C', 'D', 'E'],
            'season': [2001, 2001, 2002, 2002, 2003],
            'pts_per_g': [10.0, 15.0, 20.0, 25.0, 30.0],
            'ws': [2.0, 4.0, 3.0, 9.0, 12.0],
            'award_share': [0.0, 0.1, 0.2, 0.5, 0.9],
            'mvp': [False, False, False, True, True]
        })

    def test_scalable_columns(self):
        """Test that identifiers, target and label are left out"""
        columns = scalable_columns(self.df, exclude=['season', 'award_share'])
        self.assertEqual(columns, ['pts_per_g', 'ws'])

    def test_standardized_moments(self):
        """Test zero mean and unit population variance after scaling"""
        scaler = FeatureScaler()
        result = scaler.fit_transform(self.df, ['pts_per_g', 'ws'])

        for col in ['pts_per_g', 'ws']:
            self.assertAlmostEqual(result[col].mean(), 0.0)
            self.assertAlmostEqual(result[col].std(ddof=0), 1.0)

        # Parameters are recorded per column
        self.assertAlmostEqual(scaler.params.means['pts_per_g'], 20.0)
        self.assertAlmostEqual(scaler.params.stds['pts_per_g'], np.sqrt(50.0))

    def test_unscaled_columns_untouched(self):
        """Test that only the fitted columns change"""
        result = FeatureScaler().fit_transform(self.df, ['pts_per_g'])

        self.assertEqual(result['ws'].tolist(), self.df['ws'].tolist())
        self.assertEqual(result['season'].tolist(), self.df['season'].tolist())
        self.assertEqual(self.df['pts_per_g'].tolist(), [10.0, 15.0, 20.0, 25.0, 30.0])

    def test_fit_on_subset_applies_to_all_rows(self):
        """Test fitting on some rows and transforming every row"""
        scaler = FeatureScaler()
        scaler.fit(self.df.iloc[:4], ['pts_per_g'])
        result = scaler.transform(self.df)

        # Mean of the first four rows is 17.5
        self.assertAlmostEqual(scaler.params.means['pts_per_g'], 17.5)
        self.assertGreater(result.loc[4, 'pts_per_g'], 1.0)

    def test_zero_variance_error(self):
        """Test that a constant column is rejected by default"""
        df = self.df.assign(g=82)

        with self.assertRaises(DataError):
            FeatureScaler().fit(df, ['pts_per_g', 'g'])

    def test_zero_variance_skip(self):
        """Test that the skip policy leaves constant columns as they are"""
        df = self.df.assign(g=82)
        scaler = FeatureScaler(zero_variance='skip')

        result = scaler.fit_transform(df, ['pts_per_g', 'g'])

        self.assertEqual(scaler.params.skipped, ['g'])
        self.assertTrue((result['g'] == 82).all())
        self.assertAlmostEqual(result['pts_per_g'].mean(), 0.0)

    def test_fit_once(self):
        """Test that refitting a fitted scaler is refused"""
        scaler = FeatureScaler()
        scaler.fit(self.df, ['pts_per_g'])

        with self.assertRaises(DataError):
            scaler.fit(self.df, ['ws'])

    def test_transform_before_fit(self):
        """Test that transform needs fitted parameters"""
        with self.assertRaises(DataError):
            FeatureScaler().transform(self.df)

    def test_non_finite_values(self):
        """Test that NaN values cannot be scaled"""
        df = self.df.copy()
        df.loc[2, 'ws'] = np.nan

        with self.assertRaises(DataError):
            FeatureScaler().fit(df, ['ws'])

    def test_constant_indicator_left_unscaled(self):
        """Test that an all-zero position flag does not abort scaling"""
        df = self.df.assign(pos_C=0, pos_PG=[1, 0, 0, 1, 0])
        scaler = FeatureScaler()

        scaler.fit(df, ['pts_per_g', 'pos_C', 'pos_PG'], indicators=['pos_C', 'pos_PG'])
        result = scaler.transform(df)

        self.assertEqual(scaler.params.skipped, ['pos_C'])
        self.assertTrue((result['pos_C'] == 0).all())
        # A varying flag is still standardized
        self.assertAlmostEqual(result['pos_PG'].mean(), 0.0)

    def test_constant_feature_still_rejected_with_indicators(self):
        """Test that indicators do not relax the check for other columns"""
        df = self.df.assign(g=82, pos_C=0)

        with self.assertRaises(DataError) as ctx:
            FeatureScaler().fit(df, ['g', 'pos_C'], indicators=['pos_C'])
        self.assertIn("['g']", str(ctx.exception))
        self.assertNotIn('pos_C', str(ctx.exception))


if __name__ == '__main__':
    unittest.main()
