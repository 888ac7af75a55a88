#!/usr/bin/env python
# -*- coding: utf-8 -*-

"""
Results Manager Module for the MVP Pipeline

Responsibilities:
- Build a structured report from a pipeline run
- Print the console report (model RMSEs, best model, MVP accuracy,
  per-season decisions, feature importance, top predicted candidates)
- Save the report as JSON and the best model with joblib
"""

import os
import json
from datetime import datetime
from typing import Dict, Any, Optional

import joblib
import numpy as np

from .config import logger


def _json_default(value: Any) -> Any:
    if isinstance(value, np.integer):
        return int(value)
    if isinstance(value, np.floating):
        return float(value)
    if isinstance(value, np.bool_):
        return bool(value)
    if isinstance(value, np.ndarray):
        return value.tolist()
    return str(value)


class ResultsManager:
    """
    Report builder and artifact writer for MVP pipeline runs
    """

    def __init__(self, config: Dict[str, Any]):
        """
        Initialize the results manager with configuration

        Args:
            config: Configuration dictionary with output settings
        """
        self.config = config
        self.results_dir = config['paths']['results_dir']
        self.models_dir = config['paths']['models_dir']
        self.save_report_enabled = config['results'].get('save_report', True)
        self.save_model_enabled = config['results'].get('save_best_model', True)

        self.metrics = {
            'reports_saved': 0,
            'models_saved': 0
        }

    def build_report(self, run: Any) -> Dict[str, Any]:
        """
        Assemble a JSON-serializable report

        Args:
            run: PipelineResult

        Returns:
            Report dictionary
        """
        selection = run.selection
        return {
            'timestamp': datetime.now().isoformat(),
            'split': run.split_summary,
            'selected_features': list(run.feature_selection.selected),
            'feature_correlations': dict(run.feature_selection.correlations),
            'model_rmse': dict(selection.rmses),
            'model_metrics': {name: dict(result.metrics) for name, result in run.model_results.items()},
            'model_params': {name: dict(result.best_params) for name, result in run.model_results.items()},
            'cv_rmse': {name: result.cv_rmse for name, result in run.model_results.items()},
            'best_model': selection.best_model,
            'best_rmse': selection.best_rmse,
            'mvp_accuracy': run.mvp_accuracy,
            'season_predictions': [decision.to_dict() for decision in run.season_predictions],
            'feature_importance': {name: float(score) for name, score in run.feature_importance.items()},
            'top_candidates': run.top_candidates.to_dict(orient='records'),
            'scaling': {
                'fit_scope': self.config['scaling']['fit_scope'],
                'skipped_columns': list(run.scaling_params.skipped)
            }
        }

    def display_report(self, run: Any) -> None:
        """
        Print the console report

        Args:
            run: PipelineResult
        """
        selection = run.selection
        print("\n" + "=" * 60)
        print("NBA MVP AWARD SHARE MODELS")
        print("=" * 60)

        print("\nTest RMSE by model:")
        for name, rmse in selection.rmses.items():
            marker = "  <- best" if name == selection.best_model else ""
            print(f"  {name:<20} {rmse:.4f}{marker}")

        print(f"\nBest model: {selection.best_model} (RMSE {selection.best_rmse:.4f})")
        print(f"MVP prediction accuracy: {run.mvp_accuracy:.1%} "
              f"({sum(d.correct for d in run.season_predictions)}/{len(run.season_predictions)} seasons)")

        print("\nPredicted vs actual MVP:")
        for decision in run.season_predictions:
            status = "OK " if decision.correct else "MISS"
            print(f"  {decision.season}  [{status}] predicted {decision.predicted_player} "
                  f"({decision.predicted_share:.3f}), actual {decision.actual_player} ({decision.actual_share:.3f})")

        print(f"\nFeature importance ({selection.best_model}):")
        for name, score in run.feature_importance.items():
            print(f"  {name:<22} {score:.4f}")

        if not run.top_candidates.empty:
            print(f"\nTop predicted candidates, season {run.top_candidates_season}:")
            print(run.top_candidates.to_string(index=False, float_format=lambda v: f"{v:.3f}"))
        print()

    def save_report(self, report: Dict[str, Any], filename: str = 'evaluation_report.json') -> Optional[str]:
        """
        Write the report to the results directory

        Args:
            report: Report dictionary
            filename: Output file name

        Returns:
            Path of the written file, or None when saving is disabled
        """
        if not self.save_report_enabled:
            return None

        os.makedirs(self.results_dir, exist_ok=True)
        report_path = os.path.join(self.results_dir, filename)
        with open(report_path, 'w') as f:
            json.dump(report, f, indent=2, default=_json_default)

        self.metrics['reports_saved'] += 1
        logger.info(f"Evaluation report saved to {report_path}")
        return report_path

    def save_model(self, model_name: str, model: Any, metadata: Optional[Dict[str, Any]] = None) -> Optional[str]:
        """
        Save a fitted model with joblib plus a metadata sidecar

        Args:
            model_name: Name identifier for the model
            model: Fitted estimator
            metadata: Additional model metadata

        Returns:
            Path to the saved model file, or None when saving is disabled
        """
        if not self.save_model_enabled:
            return None

        logger.info(f"Saving model {model_name}")
        os.makedirs(self.models_dir, exist_ok=True)

        timestamp = datetime.now().strftime('%Y%m%d_%H%M%S')
        safe_name = model_name.lower().replace(' ', '_')
        model_path = os.path.join(self.models_dir, f"{safe_name}_{timestamp}.joblib")
        joblib.dump(model, model_path)

        full_metadata = {
            'model_name': model_name,
            'timestamp': timestamp,
            'model_path': model_path,
            **(metadata or {})
        }
        metadata_path = os.path.join(self.models_dir, f"{safe_name}_{timestamp}_metadata.json")
        with open(metadata_path, 'w') as f:
            json.dump(full_metadata, f, indent=2, default=_json_default)

        self.metrics['models_saved'] += 1
        logger.info(f"Model saved to {model_path}")
        return model_path

    def get_results_metrics(self) -> Dict[str, Any]:
        """
        Get metrics about saved artifacts

        Returns:
            Dictionary with results metrics
        """
        return self.metrics
