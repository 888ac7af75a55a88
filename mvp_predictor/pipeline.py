#!/usr/bin/env python
# -*- coding: utf-8 -*-

"""
Main Pipeline Module for the MVP Pipeline

Responsibilities:
- Orchestrate the whole run: load, clean, label, engineer, scale, trend,
  split, select, train, evaluate, decide, report
- Handle configuration management
- Log every step and abort the run on the first failing stage
- Track pipeline metrics

Data flows strictly forward; each stage returns a new DataFrame.
"""

import time
import traceback
from datetime import datetime
from dataclasses import dataclass, field
from typing import Dict, List, Any, Optional

import numpy as np
import pandas as pd

from .config import logger, get_default_config, validate_config, get_data_path
from .exceptions import MVPPipelineError, DataError
from .data_loader import load_player_seasons, validate_dataset
from .cleaning import impute_missing_values, build_mvp_labels
from .feature_engineering import MVPFeatureEngineer
from .scaling import FeatureScaler, ScalingParameters, scalable_columns
from .splitting import split_by_season, season_train_mask
from .feature_selection import FeatureSelection, select_top_features
from .model_bank import ModelBank, ModelResult
from .evaluators import ModelEvaluator, SelectionResult, select_best_model
from .mvp_decider import SeasonPrediction, decide_season_mvps, mvp_accuracy
from .results_manager import ResultsManager


def format_time_elapsed(seconds):
    """Format time elapsed"""
    minutes, seconds = divmod(seconds, 60)
    hours, minutes = divmod(minutes, 60)
    return f"{int(hours)}h {int(minutes)}m {int(seconds)}s"


@dataclass
class PipelineResult:
    """Everything a run produces"""
    model_results: Dict[str, ModelResult]
    selection: SelectionResult
    feature_selection: FeatureSelection
    scaling_params: ScalingParameters
    season_predictions: List[SeasonPrediction]
    mvp_accuracy: float
    feature_importance: pd.Series
    top_candidates: pd.DataFrame
    top_candidates_season: Any
    split_summary: Dict[str, Any] = field(default_factory=dict)
    predictions: Dict[str, np.ndarray] = field(default_factory=dict)
    report_path: Optional[str] = None
    model_path: Optional[str] = None

    @property
    def best_model(self) -> ModelResult:
        return self.model_results[self.selection.best_model]


class MVPTrainingPipeline:
    """
    End-to-end MVP award-share pipeline
    """

    def __init__(self, config_path: Optional[str] = None, config: Optional[Dict[str, Any]] = None):
        """
        Initialize the pipeline with configuration

        Args:
            config_path: Path to a JSON configuration file
            config: Configuration overrides (applied on top of the defaults)
        """
        self.start_time = time.time()
        self.config = validate_config(get_default_config(config_path, config))

        self.columns = self.config['columns']
        self.feature_engineer = MVPFeatureEngineer(self.config)
        self.scaler = FeatureScaler(zero_variance=self.config['scaling']['zero_variance'])
        self.model_bank = ModelBank(self.config)
        self.evaluator = ModelEvaluator(self.config)
        self.results_manager = ResultsManager(self.config)

        self.metrics = {
            'feature_engineering': {},
            'model_training': {},
            'evaluation': {},
            'results': {},
            'pipeline': {
                'start_time': datetime.now().isoformat(),
                'total_time_seconds': 0,
                'rows_loaded': 0
            }
        }

        logger.info(f"Initialized MVPTrainingPipeline with config: {config_path if config_path else 'defaults'}")

    def prepare_data(self, data: Optional[pd.DataFrame] = None) -> pd.DataFrame:
        """
        Steps 1-6: load, clean, label, engineer, scale and build trends

        Args:
            data: Player-season table; read from the configured CSV when None

        Returns:
            Model-ready DataFrame (raw seasons, scaled features, trends)
        """
        cols = self.columns
        season_col, target_col = cols['season'], cols['target']
        split_config = self.config['split']

        logger.info("Step 1: Loading player-season data")
        if data is None:
            df = load_player_seasons(get_data_path(self.config), self.config)
        else:
            df = validate_dataset(data.copy(), self.config)
        df = df.reset_index(drop=True)
        self.metrics['pipeline']['rows_loaded'] = len(df)

        logger.info("Step 2: Imputing missing numeric values")
        if self.config['cleaning'].get('impute_missing', True):
            df = impute_missing_values(df)

        logger.info("Step 3: Building MVP labels")
        df = build_mvp_labels(df, season_col, target_col, cols['label'])

        logger.info("Step 4: Engineering features")
        df = self.feature_engineer.engineer_features(df)
        self.metrics['feature_engineering'] = self.feature_engineer.get_engineering_metrics()

        logger.info(f"Step 5: Scaling features (fit on {self.config['scaling']['fit_scope']} data)")
        exclude = [cols['player'], season_col, target_col, cols['label']]
        columns = scalable_columns(df, exclude)
        if self.config['scaling']['fit_scope'] == 'train':
            train_mask = season_train_mask(df[season_col], split_config['season_cutoff'], split_config['cutoff_units'])
            if not train_mask.any():
                raise DataError(
                    f"Season cutoff {split_config['season_cutoff']} leaves no TRAIN rows to fit the scaler; "
                    f"dataset seasons {df[season_col].min()}-{df[season_col].max()}"
                )
            self.scaler.fit(df.loc[train_mask], columns, indicators=self.feature_engineer.position_columns())
        else:
            self.scaler.fit(df, columns, indicators=self.feature_engineer.position_columns())
        df = self.scaler.transform(df)

        logger.info("Step 6: Building trend features")
        df = self.feature_engineer.build_trend_features(df)

        return df

    def run(self, data: Optional[pd.DataFrame] = None, save: bool = True) -> PipelineResult:
        """
        Execute the full pipeline

        Args:
            data: Player-season table; read from the configured CSV when None
            save: Whether to write the report and best model to disk

        Returns:
            PipelineResult

        Raises:
            MVPPipelineError: If any stage fails
        """
        logger.info("Starting NBA MVP award-share pipeline")
        try:
            result = self._run(data, save)
        except MVPPipelineError as e:
            logger.error(f"Pipeline aborted: {type(e).__name__}: {str(e)}")
            logger.debug(traceback.format_exc())
            raise

        total = time.time() - self.start_time
        self.metrics['pipeline']['total_time_seconds'] = total
        logger.info(f"Pipeline finished in {format_time_elapsed(total)}")
        return result

    def _run(self, data: Optional[pd.DataFrame], save: bool) -> PipelineResult:
        cols = self.columns
        player_col, season_col, target_col = cols['player'], cols['season'], cols['target']
        split_config = self.config['split']

        df = self.prepare_data(data)

        logger.info("Step 7: Splitting by season")
        split = split_by_season(df, season_col, split_config['season_cutoff'], split_config['cutoff_units'])

        logger.info("Step 8: Selecting features on TRAIN")
        feature_selection = select_top_features(
            split.train,
            self.config['selection']['candidate_features'],
            target_col,
            top_k=self.config['selection']['top_k']
        )
        features = feature_selection.selected

        X_train = split.train[features].to_numpy(dtype=float)
        y_train = split.train[target_col].to_numpy(dtype=float)
        X_test = split.test[features].to_numpy(dtype=float)
        y_test = split.test[target_col].to_numpy(dtype=float)

        logger.info("Step 9: Training model bank")
        model_results = self.model_bank.train_all(X_train, y_train, features)
        self.metrics['model_training'] = self.model_bank.get_training_metrics()

        logger.info("Step 10: Evaluating models on TEST")
        predictions = self.evaluator.evaluate_all(model_results, X_test, y_test, baseline_value=float(y_train.mean()))
        selection = select_best_model(model_results)
        best = model_results[selection.best_model]
        importance = self.evaluator.feature_importance(best, X_test, y_test)
        self.metrics['evaluation'] = self.evaluator.get_evaluation_metrics()

        logger.info("Step 11: Deciding season MVPs")
        for name, result in model_results.items():
            decisions = decide_season_mvps(split.test, predictions[name], player_col, season_col, target_col)
            result.metrics['mvp_accuracy'] = sum(d.correct for d in decisions) / len(decisions)
        season_predictions = decide_season_mvps(
            split.test, predictions[selection.best_model], player_col, season_col, target_col
        )
        accuracy = mvp_accuracy(season_predictions)

        top_season, top_candidates = self._top_candidates(split.test, predictions[selection.best_model])

        result = PipelineResult(
            model_results=model_results,
            selection=selection,
            feature_selection=feature_selection,
            scaling_params=self.scaler.params,
            season_predictions=season_predictions,
            mvp_accuracy=accuracy,
            feature_importance=importance,
            top_candidates=top_candidates,
            top_candidates_season=top_season,
            split_summary=split.summary(),
            predictions=predictions
        )

        logger.info("Step 12: Reporting")
        if save:
            report = self.results_manager.build_report(result)
            result.report_path = self.results_manager.save_report(report)
            result.model_path = self.results_manager.save_model(
                selection.best_model, best.model, metadata={
                    'features': features,
                    'best_params': best.best_params,
                    'test_rmse': best.test_rmse,
                    'cv_rmse': best.cv_rmse,
                    'mvp_accuracy': accuracy,
                    'scaling': self.scaler.params.to_dict()
                }
            )
            self.metrics['results'] = self.results_manager.get_results_metrics()

        return result

    def _top_candidates(self, test: pd.DataFrame, predicted: np.ndarray):
        """Highest predicted award shares in the most recent TEST season"""
        cols = self.columns
        season_col = cols['season']
        top_n = self.config['results'].get('top_n', 10)

        frame = test[[cols['player'], season_col, cols['target']]].reset_index(drop=True)
        frame['predicted_share'] = np.asarray(predicted, dtype=float)
        latest = frame[season_col].max()
        latest_rows = frame[frame[season_col] == latest]
        top = latest_rows.sort_values('predicted_share', ascending=False, kind='mergesort').head(top_n)
        return latest, top.reset_index(drop=True)

    def get_pipeline_metrics(self) -> Dict[str, Any]:
        """
        Get metrics about the pipeline run

        Returns:
            Dictionary with pipeline metrics
        """
        return self.metrics
