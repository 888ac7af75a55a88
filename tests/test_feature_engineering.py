#!/usr/bin/env python
# -*- coding: utf-8 -*-

"""
Tests for the MVP feature engineering module
"""

import unittest
import os
import sys

import pandas as pd

# Add project root to path if needed for imports
sys.path.append(os.path.join(os.path.dirname(__file__), '..'))

from mvp_predictor.config import get_default_config
from mvp_predictor.exceptions import DataError
from mvp_predictor.feature_engineering import MVPFeatureEngineer
from synthetic_data import make_player_seasons


class TestMVPFeatureEngineer(unittest.TestCase):
    """Test case for the MVPFeatureEngineer class"""

    def setUp(self):
        """Set up test environment before each test"""
        self.config = get_default_config()
        self.engineer = MVPFeatureEngineer(self.config)

        self.row = pd.DataFrame([{
            'player': 'Nikola Jokic',
            'season': 2022,
            'pos': 'C',
            'g': 74,
            'pts_per_g': 27.1,
            'trb_per_g': 13.8,
            'ast_per_g': 7.9,
            'stl_per_g': 1.5,
            'blk_per_g': 0.9,
            'fg_pct': 0.6,
            'fg3_pct': 0.3,
            'ft_pct': 0.9,
            'ws': 15.2,
            'vorp': 9.8,
            'bpm': 13.7,
            'obpm': 9.2,
            'dbpm': 4.5,
            'win_loss_pct': 0.585,
            'award_share': 0.875
        }])

    def test_derived_features(self):
        """Test the row-wise composite features"""
        result = self.engineer.engineer_features(self.row)
        row = result.iloc[0]

        # Verify each derived value
        self.assertAlmostEqual(row['scoring_load'], 27.1 + 7.9)
        self.assertAlmostEqual(row['combined_efficiency'], 0.6)
        self.assertAlmostEqual(row['two_way_score'], 13.7)
        self.assertAlmostEqual(row['value_composite'], 0.5 * 15.2 + 0.3 * 9.8 + 0.2 * 13.7)
        self.assertAlmostEqual(row['team_success'], 58.5)
        self.assertAlmostEqual(row['games_played_frac'], 74 / 82)

    def test_original_columns_preserved(self):
        """Test that engineering only adds columns"""
        result = self.engineer.engineer_features(self.row)

        for col in self.row.columns:
            self.assertIn(col, result.columns)
        self.assertNotIn('scoring_load', self.row.columns)

    def test_position_flags(self):
        """Test one-hot position flags, including hyphenated positions"""
        df = pd.DataFrame({'pos': ['SG-PG', 'c', 'PF', 'G']})

        result = self.engineer.add_position_flags(df)

        self.assertEqual(result['pos_SG'].tolist(), [1, 0, 0, 0])
        self.assertEqual(result['pos_PG'].tolist(), [0, 0, 0, 0])
        self.assertEqual(result['pos_C'].tolist(), [0, 1, 0, 0])
        self.assertEqual(result['pos_PF'].tolist(), [0, 0, 1, 0])
        # Unrecognised positions get no flag
        self.assertEqual(self.engineer.get_engineering_metrics()['unknown_positions'], 1)

    def test_missing_column(self):
        """Test that a missing source column is reported"""
        df = self.row.drop(columns=['obpm'])

        with self.assertRaises(DataError) as ctx:
            self.engineer.engineer_features(df)
        self.assertIn('two_way_score', str(ctx.exception))

    def test_trend_features(self):
        """Test season-over-season differences for one player"""
        df = pd.DataFrame({
            'player': ['A', 'A', 'A'],
            'season': [2001, 2002, 2003],
            'pts_per_g': [10.0, 15.0, 12.0],
            'ws': [4.0, 4.0, 6.5]
        })

        result = self.engineer.build_trend_features(df)

        self.assertEqual(result['pts_trend'].tolist(), [0.0, 5.0, -3.0])
        self.assertEqual(result['ws_trend'].tolist(), [0.0, 0.0, 2.5])

    def test_trend_features_unordered_rows(self):
        """Test that trends follow season order, not row order"""
        df = pd.DataFrame({
            'player': ['B', 'A', 'A', 'B', 'A'],
            'season': [2002, 2003, 2001, 2001, 2002],
            'pts_per_g': [20.0, 12.0, 10.0, 18.0, 15.0],
            'ws': [1.0, 1.0, 1.0, 1.0, 1.0]
        })

        result = self.engineer.build_trend_features(df)

        # Rows stay in their original order
        self.assertEqual(result['season'].tolist(), [2002, 2003, 2001, 2001, 2002])
        self.assertEqual(result['pts_trend'].tolist(), [2.0, -3.0, 0.0, 0.0, 5.0])

    def test_first_season_trend_is_zero(self):
        """Test that every player's first season has a zero trend"""
        df = make_player_seasons().sample(frac=1.0, random_state=7)

        result = self.engineer.build_trend_features(df)
        first_seasons = result.loc[result.groupby('player')['season'].idxmin()]

        self.assertTrue((first_seasons['pts_trend'] == 0).all())
        self.assertTrue((first_seasons['ws_trend'] == 0).all())

    def test_custom_trend_metric(self):
        """Test a trend over an arbitrary column name"""
        df = pd.DataFrame({
            'player': ['A', 'A'],
            'season': [2001, 2002],
            'pts_per_g': [10.0, 11.0],
            'ws': [3.0, 3.0],
            'vorp': [1.0, 3.5]
        })

        result = self.engineer.build_trend_features(df, metrics={'vorp_trend': 'vorp'})

        self.assertEqual(result['vorp_trend'].tolist(), [0.0, 2.5])
        self.assertNotIn('pts_trend', result.columns)


if __name__ == '__main__':
    unittest.main()
