#!/usr/bin/env python
# -*- coding: utf-8 -*-

"""
MVP Pipeline Configuration

This module defines configuration settings and constants for the MVP pipeline:
- Base paths and directories
- Dataset column names
- Feature engineering, scaling, split and selection settings
- Model bank definition and hyperparameter grids
- Evaluation and reporting settings

Used by all pipeline components to ensure consistent settings.
"""

import os
import copy
import json
import logging
from pathlib import Path
from typing import Dict, Any, Optional

from .exceptions import ConfigurationError

logger = logging.getLogger(__name__)

# Base directory for the project
BASE_DIR = Path(__file__).resolve().parent.parent

# Bank order matters: ties on RMSE go to the earlier model
MODEL_NAMES = [
    'linear_regression',
    'lasso',
    'ridge',
    'elastic_net',
    'gradient_boosting',
    'svr',
    'knn'
]


def get_default_config(config_path: Optional[str] = None, config: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """
    Get default configuration for the MVP pipeline

    Args:
        config_path: Path to a JSON configuration file
        config: Configuration dictionary (overrides config_path if provided)

    Returns:
        Dictionary with default configuration settings
    """
    default_config = {
        'paths': {
            'data_file': str(BASE_DIR / 'data' / 'player_mvp_stats.csv'),
            'results_dir': str(BASE_DIR / 'results'),
            'models_dir': str(BASE_DIR / 'results' / 'models'),
            'logs_dir': str(BASE_DIR / 'logs')
        },
        'columns': {
            'player': 'player',
            'season': 'season',
            'target': 'award_share',
            'label': 'mvp',
            'position': 'pos',
            'games': 'g',
            'team_win_pct': 'win_loss_pct',
            'per_game': {
                'points': 'pts_per_g',
                'rebounds': 'trb_per_g',
                'assists': 'ast_per_g',
                'steals': 'stl_per_g',
                'blocks': 'blk_per_g'
            },
            'shooting': ['fg_pct', 'fg3_pct', 'ft_pct'],
            'advanced': {
                'win_shares': 'ws',
                'vorp': 'vorp',
                'bpm': 'bpm',
                'obpm': 'obpm',
                'dbpm': 'dbpm'
            }
        },
        'cleaning': {
            'impute_missing': True
        },
        'feature_engineering': {
            'season_games': 82,
            'team_success_scale': 100.0,
            'positions': ['PG', 'SG', 'SF', 'PF', 'C'],
            'value_weights': {
                'win_shares': 0.5,
                'vorp': 0.3,
                'bpm': 0.2
            },
            # Keys into columns.per_game / columns.advanced
            'trend_metrics': {
                'pts_trend': 'points',
                'ws_trend': 'win_shares'
            }
        },
        'scaling': {
            'fit_scope': 'full',  # 'full', 'train'
            'zero_variance': 'error'  # 'error', 'skip'
        },
        'split': {
            'season_cutoff': 2016,
            'cutoff_units': 'raw'  # 'raw', 'scaled'
        },
        'selection': {
            'top_k': 10,
            'candidate_features': [
                'pts_per_g', 'trb_per_g', 'ast_per_g', 'stl_per_g', 'blk_per_g',
                'fg_pct', 'fg3_pct', 'ft_pct',
                'ws', 'vorp', 'bpm', 'obpm', 'dbpm',
                'win_loss_pct', 'g',
                'scoring_load', 'combined_efficiency', 'two_way_score',
                'value_composite', 'team_success', 'games_played_frac',
                'pts_trend', 'ws_trend',
                'pos_PG', 'pos_SG', 'pos_SF', 'pos_PF', 'pos_C'
            ]
        },
        'training': {
            'models': list(MODEL_NAMES),
            'cv_folds': 5,
            'random_state': 42,
            'parallel': False,
            'max_workers': None,
            'silence_search_convergence_warnings': False
        },
        'models': {
            'linear_regression': {
                'trainer_module': 'linear_trainers',
                'trainer_class': 'LinearRegressionTrainer',
                'params': {},
                'optimize_hyperparams': False
            },
            'lasso': {
                'trainer_module': 'linear_trainers',
                'trainer_class': 'LassoTrainer',
                'params': {'alpha': 0.01, 'max_iter': 10000},
                'optimize_hyperparams': True,
                'param_grid': {
                    'alpha': [0.0001, 0.0005, 0.001, 0.005, 0.01, 0.05, 0.1, 0.5, 1.0]
                }
            },
            'ridge': {
                'trainer_module': 'linear_trainers',
                'trainer_class': 'RidgeTrainer',
                'params': {'alpha': 1.0},
                'optimize_hyperparams': True,
                'param_grid': {
                    'alpha': [0.001, 0.01, 0.1, 1.0, 10.0, 100.0]
                }
            },
            'elastic_net': {
                'trainer_module': 'linear_trainers',
                'trainer_class': 'ElasticNetTrainer',
                'params': {'alpha': 0.01, 'l1_ratio': 0.5, 'max_iter': 10000},
                'optimize_hyperparams': True,
                'param_grid': {
                    'alpha': [0.0001, 0.001, 0.01, 0.1, 1.0],
                    'l1_ratio': [0.1, 0.5, 0.9]
                }
            },
            'gradient_boosting': {
                'trainer_module': 'gradient_boosting_trainer',
                'trainer_class': 'GradientBoostingTrainer',
                'params': {
                    'n_estimators': 100,
                    'learning_rate': 0.1,
                    'max_depth': 3,
                    'subsample': 1.0
                },
                'optimize_hyperparams': True,
                'param_grid': {
                    'n_estimators': [100, 200],
                    'learning_rate': [0.05, 0.1],
                    'max_depth': [2, 3]
                }
            },
            'svr': {
                'trainer_module': 'svr_trainer',
                'trainer_class': 'SVRTrainer',
                'params': {'kernel': 'rbf', 'C': 1.0, 'gamma': 'scale', 'epsilon': 0.01},
                'optimize_hyperparams': True,
                'param_grid': {
                    'C': [0.1, 1.0, 10.0],
                    'gamma': ['scale', 0.01, 0.1],
                    'epsilon': [0.01, 0.05]
                }
            },
            'knn': {
                'trainer_module': 'knn_trainer',
                'trainer_class': 'KNNTrainer',
                'params': {'n_neighbors': 5, 'weights': 'uniform'},
                'optimize_hyperparams': True,
                'param_grid': {
                    'n_neighbors': [3, 5, 7, 9, 11, 15, 21],
                    'weights': ['uniform', 'distance']
                }
            }
        },
        'evaluation': {
            'importance_repeats': 10
        },
        'results': {
            'save_report': True,
            'save_best_model': True,
            'top_n': 10
        },
        'logging': {
            'level': 'INFO',
            'console': True,
            'to_file': True
        }
    }

    # Load config from file if provided
    if config_path and config is None:
        try:
            with open(config_path, 'r') as f:
                config = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.error(f"Failed to load config from {config_path}: {str(e)}")
            raise ConfigurationError(f"Could not read configuration file {config_path}: {str(e)}") from e

    # Override default config with provided config
    if config:
        default_config = merge_config(default_config, config)

    return default_config


def merge_config(base: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    """
    Recursively merge override values into a copy of the base configuration

    Args:
        base: Configuration to start from
        overrides: Values to apply on top (nested dicts are merged, everything else replaced)

    Returns:
        Merged configuration dictionary
    """
    merged = copy.deepcopy(base)
    for key, value in overrides.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict) and key != 'param_grid':
            merged[key] = merge_config(merged[key], value)
        else:
            merged[key] = copy.deepcopy(value)
    return merged


def validate_config(config: Dict[str, Any]) -> Dict[str, Any]:
    """
    Validate and normalize configuration settings

    Args:
        config: Configuration dictionary to validate

    Returns:
        Validated and normalized configuration

    Raises:
        ConfigurationError: If settings are invalid or contradict each other
    """
    default_config = get_default_config()

    # Ensure all required sections exist
    for section in default_config.keys():
        if section not in config:
            config[section] = copy.deepcopy(default_config[section])
            logger.warning(f"Missing configuration section '{section}', using defaults")
        elif isinstance(default_config[section], dict):
            # For nested sections, ensure all fields exist
            for key in default_config[section].keys():
                if key not in config[section]:
                    config[section][key] = copy.deepcopy(default_config[section][key])
                    logger.warning(f"Missing configuration key '{section}.{key}', using default")

    fit_scope = config['scaling']['fit_scope']
    if fit_scope not in ('full', 'train'):
        raise ConfigurationError(f"scaling.fit_scope must be 'full' or 'train', got {fit_scope!r}")

    if config['scaling']['zero_variance'] not in ('error', 'skip'):
        raise ConfigurationError(
            f"scaling.zero_variance must be 'error' or 'skip', got {config['scaling']['zero_variance']!r}"
        )

    cutoff_units = config['split']['cutoff_units']
    if cutoff_units not in ('raw', 'scaled'):
        raise ConfigurationError(f"split.cutoff_units must be 'raw' or 'scaled', got {cutoff_units!r}")

    # A standardized cutoff only has a meaning relative to full-dataset season statistics
    if cutoff_units == 'scaled' and fit_scope == 'train':
        raise ConfigurationError(
            "split.cutoff_units='scaled' cannot be combined with scaling.fit_scope='train'; "
            "use a raw season cutoff when fitting the scaler on TRAIN only"
        )

    top_k = config['selection']['top_k']
    if not isinstance(top_k, int) or top_k < 1:
        raise ConfigurationError(f"selection.top_k must be a positive integer, got {top_k!r}")

    cv_folds = config['training']['cv_folds']
    if not isinstance(cv_folds, int) or cv_folds < 2:
        raise ConfigurationError(f"training.cv_folds must be an integer >= 2, got {cv_folds!r}")

    unknown = [name for name in config['training']['models'] if name not in config['models']]
    if unknown:
        raise ConfigurationError(f"No model configuration for: {unknown}")

    if not config['training']['models']:
        raise ConfigurationError("training.models is empty; nothing to train")

    get_log_level(config)

    return config


def get_log_level(config: Dict[str, Any]) -> int:
    """Numeric logging level for the configured level name"""
    name = str(config['logging'].get('level', 'INFO')).upper()
    level = logging.getLevelName(name)
    if not isinstance(level, int):
        raise ConfigurationError(f"logging.level must be a logging level name, got {config['logging']['level']!r}")
    return level


def get_data_path(config: Dict[str, Any]) -> str:
    """Resolve the dataset path, allowing MVP_DATA_FILE to override the configured file"""
    return os.environ.get('MVP_DATA_FILE', config['paths']['data_file'])
