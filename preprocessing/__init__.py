#!/usr/bin/env python
# -*- coding: utf-8 -*-

"""
Preprocessing module for the temperature and sales analysis.
"""

from .data_cleaning import load_sales_data, run_data_quality_checks, convert_date_column
from .feature_engineering import create_calendar_features, create_regression_features, prepare_analysis_data
