# -*- coding: utf-8 -*-
"""
Command-line scripts for the MVP Predictor
"""
