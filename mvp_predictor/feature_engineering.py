#!/usr/bin/env python
# -*- coding: utf-8 -*-

"""
Feature Engineering Module for the MVP Pipeline

Responsibilities:
- Derive composite features from raw per-game and advanced statistics
- One-hot encode the primary playing position
- Build per-player season-over-season trend features

All row-wise transforms are deterministic functions of the raw columns and are
applied to the whole table, so TRAIN and TEST rows are transformed the same way.
Trend features are the only cross-row features; the pipeline builds them after
scaling, so trends are differences of scaled values.
"""

from typing import Dict, List, Any, Optional

import pandas as pd

from .config import logger
from .exceptions import DataError


class MVPFeatureEngineer:
    """
    Feature engineer for player-season MVP records

    Derived columns:
    - scoring_load: points + assists per game
    - combined_efficiency: mean of the shooting percentage columns
    - two_way_score: offensive + defensive box plus/minus
    - value_composite: weighted win shares, VORP and BPM
    - team_success: team win-loss percentage on a 0-100 scale
    - games_played_frac: games played as a fraction of a full season
    - pos_<POS>: one-hot primary position flags
    """

    def __init__(self, config: Dict[str, Any]):
        """
        Initialize the feature engineer with configuration

        Args:
            config: Pipeline configuration dictionary
        """
        self.config = config
        self.columns = config['columns']

        fe_config = config.get('feature_engineering', {})
        self.season_games = fe_config.get('season_games', 82)
        self.team_success_scale = fe_config.get('team_success_scale', 100.0)
        self.positions = fe_config.get('positions', ['PG', 'SG', 'SF', 'PF', 'C'])
        self.value_weights = fe_config.get('value_weights', {'win_shares': 0.5, 'vorp': 0.3, 'bpm': 0.2})
        self.trend_metrics = fe_config.get('trend_metrics', {'pts_trend': 'points', 'ws_trend': 'win_shares'})

        # Metrics for feature quality tracking
        self.metrics = {
            'records_processed': 0,
            'features_created': 0,
            'unknown_positions': 0
        }

        logger.info(f"Initialized MVPFeatureEngineer with {len(self.positions)} position flags")

    def _require(self, df: pd.DataFrame, cols: List[str], feature: str) -> None:
        missing = [col for col in cols if col not in df.columns]
        if missing:
            raise DataError(f"Cannot build '{feature}': missing columns {missing}")

    def _stat_column(self, key: str) -> str:
        """Resolve a stat key ('points', 'win_shares', ...) to its column name"""
        if key in self.columns['per_game']:
            return self.columns['per_game'][key]
        if key in self.columns['advanced']:
            return self.columns['advanced'][key]
        raise DataError(f"Unknown stat key '{key}'; expected one of the per-game or advanced columns")

    def engineer_features(self, df: pd.DataFrame) -> pd.DataFrame:
        """
        Add all row-wise derived features

        Args:
            df: Cleaned player-season DataFrame

        Returns:
            New DataFrame with derived feature columns
        """
        df = df.copy()
        per_game = self.columns['per_game']
        advanced = self.columns['advanced']
        before = len(df.columns)

        points, assists = per_game['points'], per_game['assists']
        self._require(df, [points, assists], 'scoring_load')
        df['scoring_load'] = df[points] + df[assists]

        shooting = list(self.columns['shooting'])
        self._require(df, shooting, 'combined_efficiency')
        df['combined_efficiency'] = df[shooting].mean(axis=1)

        self._require(df, [advanced['obpm'], advanced['dbpm']], 'two_way_score')
        df['two_way_score'] = df[advanced['obpm']] + df[advanced['dbpm']]

        composite = pd.Series(0.0, index=df.index)
        for key, weight in self.value_weights.items():
            col = self._stat_column(key)
            self._require(df, [col], 'value_composite')
            composite = composite + weight * df[col]
        df['value_composite'] = composite

        win_pct = self.columns['team_win_pct']
        self._require(df, [win_pct], 'team_success')
        df['team_success'] = df[win_pct] * self.team_success_scale

        games = self.columns['games']
        self._require(df, [games], 'games_played_frac')
        df['games_played_frac'] = df[games] / float(self.season_games)

        df = self.add_position_flags(df)

        self.metrics['records_processed'] = len(df)
        self.metrics['features_created'] = len(df.columns) - before
        logger.info(f"Created {self.metrics['features_created']} derived features for {len(df)} player-seasons")

        return df

    def position_columns(self) -> List[str]:
        """Names of the one-hot position flag columns"""
        return [f'pos_{position}' for position in self.positions]

    def add_position_flags(self, df: pd.DataFrame) -> pd.DataFrame:
        """
        One-hot encode the primary position

        Hyphenated positions ('SG-PG') count as their first listed position.

        Args:
            df: Player-season DataFrame

        Returns:
            DataFrame with one integer flag column per configured position
        """
        pos_col = self.columns['position']
        self._require(df, [pos_col], 'position flags')

        primary = df[pos_col].astype(str).str.split('-').str[0].str.strip().str.upper()
        for position in self.positions:
            df[f'pos_{position}'] = (primary == position).astype(int)

        unknown = ~primary.isin(self.positions)
        self.metrics['unknown_positions'] = int(unknown.sum())
        if unknown.any():
            logger.warning(
                f"{int(unknown.sum())} rows have unrecognised positions "
                f"{sorted(primary[unknown].unique().tolist())[:5]}; all position flags set to 0"
            )

        return df

    def build_trend_features(self, df: pd.DataFrame, metrics: Optional[Dict[str, str]] = None) -> pd.DataFrame:
        """
        Add season-over-season trend features

        Within each player, rows are ordered by season and the trend is the
        current value minus the previous season's value. A player's first
        season has a trend of 0.

        Args:
            df: Player-season DataFrame
            metrics: Mapping of trend column name to stat key or column name
                (defaults to feature_engineering.trend_metrics)

        Returns:
            New DataFrame with trend columns, rows in their original order
        """
        df = df.copy()
        metrics = metrics or self.trend_metrics
        player_col = self.columns['player']
        season_col = self.columns['season']
        self._require(df, [player_col, season_col], 'trend features')

        ordered = df.sort_values([player_col, season_col], kind='mergesort')
        for trend_col, key in metrics.items():
            source = key if key in df.columns else self._stat_column(key)
            self._require(df, [source], trend_col)
            trend = ordered.groupby(player_col, sort=False)[source].diff().fillna(0.0)
            df[trend_col] = trend.reindex(df.index)

        logger.info(f"Built trend features {list(metrics.keys())} for {df[player_col].nunique()} players")
        return df

    def get_engineering_metrics(self) -> Dict[str, Any]:
        """
        Get metrics about the feature engineering process

        Returns:
            Dictionary with feature engineering metrics
        """
        return self.metrics
