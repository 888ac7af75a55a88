# -*- coding: utf-8 -*-
"""
Utilities Package for the MVP Predictor

This package contains utility modules for the MVP prediction pipeline.
"""

from .logger import setup_logging

__all__ = [
    'setup_logging'
]
