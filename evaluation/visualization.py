#!/usr/bin/env python
# -*- coding: utf-8 -*-

"""
Visualization utilities for the temperature and sales analysis.
This module provides the exploratory and diagnostic plots of the pipeline.
"""

import numpy as np
import matplotlib.pyplot as plt
import seaborn as sns

from preprocessing.feature_engineering import SEASON_ORDER

# Set default style
plt.style.use('seaborn-v0_8-whitegrid')
sns.set_palette('viridis')


def _empty_figure(fig, ax):
    ax.text(0.5, 0.5, "No data available for plotting",
            horizontalalignment='center', verticalalignment='center',
            transform=ax.transAxes, fontsize=14)
    return fig


def plot_temperature_vs_sales(df, temp_col='Temperature', sales_col='Weekly_Sales',
                              smooth=True, figsize=(10, 6), title=None):
    """
    Scatter plot of weekly sales against temperature with a LOWESS smoother.

    Parameters:
    -----------
    df : pandas.DataFrame
        Sales data
    temp_col : str, optional
        Temperature column
    sales_col : str, optional
        Weekly sales column
    smooth : bool, optional
        Whether to overlay the LOWESS curve
    figsize : tuple, optional
        Figure size
    title : str, optional
        Plot title

    Returns:
    --------
    matplotlib.figure.Figure
        Figure object
    """
    fig, ax = plt.subplots(figsize=figsize)

    if len(df) == 0:
        return _empty_figure(fig, ax)

    ax.scatter(df[temp_col], df[sales_col], alpha=0.2, s=10, color='#1f77b4')

    if smooth and len(df) > 2:
        sns.regplot(x=temp_col, y=sales_col, data=df, lowess=True, scatter=False,
                    ax=ax, line_kws={'color': '#ff7f0e', 'linewidth': 2})

    ax.set_title(title or 'Weekly Sales vs Temperature', fontsize=14)
    ax.set_xlabel(temp_col, fontsize=12)
    ax.set_ylabel(sales_col, fontsize=12)
    ax.grid(True, alpha=0.3)

    plt.tight_layout()
    return fig


def plot_sales_by_season(df, season_col='season', value_col='log_sales',
                         figsize=(10, 6), title='Log Weekly Sales by Season'):
    """
    Boxplot of log weekly sales for each season.

    Parameters:
    -----------
    df : pandas.DataFrame
        Analysis data with a season column
    season_col : str, optional
        Season column
    value_col : str, optional
        Column to summarize
    figsize : tuple, optional
        Figure size
    title : str, optional
        Plot title

    Returns:
    --------
    matplotlib.figure.Figure
        Figure object
    """
    fig, ax = plt.subplots(figsize=figsize)

    if len(df) == 0:
        return _empty_figure(fig, ax)

    sns.boxplot(x=season_col, y=value_col, data=df, order=SEASON_ORDER,
                color='lightblue', ax=ax)

    ax.set_title(title, fontsize=14)
    ax.set_xlabel('Season', fontsize=12)
    ax.set_ylabel('Log Weekly Sales', fontsize=12)

    plt.tight_layout()
    return fig


def plot_residuals_vs_fitted(fitted, residuals, model_name=None, figsize=(10, 6), title=None):
    """
    Residual vs fitted plot for spotting heteroskedasticity.

    Parameters:
    -----------
    fitted : array-like
        Fitted values
    residuals : array-like
        Residuals
    model_name : str, optional
        Name of the model
    figsize : tuple, optional
        Figure size
    title : str, optional
        Plot title

    Returns:
    --------
    matplotlib.figure.Figure
        Figure object
    """
    fitted = np.asarray(fitted)
    residuals = np.asarray(residuals)

    if len(fitted) != len(residuals):
        raise ValueError(f"fitted and residuals differ in length: {len(fitted)} != {len(residuals)}")

    fig, ax = plt.subplots(figsize=figsize)

    if len(fitted) == 0:
        return _empty_figure(fig, ax)

    ax.scatter(fitted, residuals, alpha=0.3, color='blue', s=10)
    ax.axhline(y=0, color='red', linestyle='--')

    if title:
        ax.set_title(title, fontsize=14)
    else:
        ax.set_title(f'Residual vs Fitted{" (" + model_name + ")" if model_name else ""}', fontsize=14)

    ax.set_xlabel('Fitted', fontsize=12)
    ax.set_ylabel('Residuals', fontsize=12)
    ax.grid(True, alpha=0.3)

    plt.tight_layout()
    return fig
