#!/usr/bin/env python
# -*- coding: utf-8 -*-

"""
Evaluation module for the temperature and sales analysis.
"""

from .reporting import regression_table, format_regression_table, compare_temperature_effects, is_robust
from .visualization import plot_temperature_vs_sales, plot_sales_by_season, plot_residuals_vs_fitted
