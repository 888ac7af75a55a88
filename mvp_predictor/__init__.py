#!/usr/bin/env python
# -*- coding: utf-8 -*-

"""
NBA MVP Predictor

Batch pipeline that fits a bank of regression models to historical NBA
player-season statistics, predicts MVP award voting share, and reports which
model best identifies each season's actual MVP.
"""

__version__ = '1.0.0'
__author__ = 'NBA Algorithm Team'
