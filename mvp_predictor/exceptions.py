#!/usr/bin/env python
# -*- coding: utf-8 -*-

"""
Pipeline exceptions

Every stage of the MVP pipeline validates its inputs and raises one of these
errors instead of letting NaN or empty frames flow into the metrics.
"""


class MVPPipelineError(Exception):
    """Base exception for all pipeline failures"""
    pass


class ConfigurationError(MVPPipelineError, ValueError):
    """Invalid or contradictory configuration"""
    pass


class DataError(MVPPipelineError):
    """Missing or corrupt input column, all-missing column, zero-variance column"""
    pass


class SelectionError(MVPPipelineError):
    """Not enough candidate features to select from"""
    pass


class FitError(MVPPipelineError):
    """A regressor could not be fitted on the training matrix"""
    pass


class EvaluationError(MVPPipelineError):
    """Held-out evaluation is impossible (empty TEST, non-finite predictions)"""
    pass
