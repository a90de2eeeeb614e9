#!/usr/bin/env python
# -*- coding: utf-8 -*-

"""
Feature engineering module for the temperature and sales analysis.
This module derives the calendar and regression features used by the
fixed-effects models.
"""

import pandas as pd
import numpy as np
import logging
import warnings
warnings.filterwarnings("ignore")

from .data_cleaning import convert_date_column, validate_columns, DATE_FORMAT

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

SEASON_ORDER = ['Winter', 'Spring', 'Summer', 'Fall']

SEASON_BY_MONTH = {
    12: 'Winter', 1: 'Winter', 2: 'Winter',
    3: 'Spring', 4: 'Spring', 5: 'Spring',
    6: 'Summer', 7: 'Summer', 8: 'Summer',
    9: 'Fall', 10: 'Fall', 11: 'Fall',
}


def assign_season(month):
    """
    Map a calendar month (1-12) to its meteorological season.

    Args:
        month (int): Month number

    Returns:
        str: One of 'Winter', 'Spring', 'Summer', 'Fall'
    """
    try:
        return SEASON_BY_MONTH[int(month)]
    except (KeyError, TypeError, ValueError):
        raise ValueError(f"Invalid month: {month}")


def create_calendar_features(df, date_column='Date'):
    """
    Create month, year and season features.

    Month fixed effects absorb within-year seasonality that moves both
    temperature and sales; year fixed effects absorb economy-wide trends.
    Season is kept as an ordered categorical for plotting.

    Args:
        df (pd.DataFrame): Input DataFrame with a parsed date column
        date_column (str): Name of the date column

    Returns:
        pd.DataFrame: DataFrame with 'month', 'year' and 'season' columns
    """
    validate_columns(df, [date_column])
    if not pd.api.types.is_datetime64_any_dtype(df[date_column]):
        raise ValueError(f"Column {date_column} must be datetime; parse it first")

    df_copy = df.copy()
    dates = df_copy[date_column]

    # Nullable integers so rows with an unparsed date stay in the table as <NA>
    df_copy['month'] = dates.dt.month.astype('Int64')
    df_copy['year'] = dates.dt.year.astype('Int64')
    df_copy['season'] = pd.Categorical(
        df_copy['month'].map(SEASON_BY_MONTH).astype(object),
        categories=SEASON_ORDER,
        ordered=True
    )

    logger.info(f"Created 3 calendar features; season counts: "
                f"{df_copy['season'].value_counts(sort=False).to_dict()}")

    return df_copy


def create_regression_features(df, temp_col='Temperature', sales_col='Weekly_Sales'):
    """
    Create the squared temperature and log sales columns.

    The squared term lets the temperature effect be non-linear. Logging
    sales makes coefficients read as approximate percentage changes.

    Args:
        df (pd.DataFrame): Input DataFrame
        temp_col (str): Name of the temperature column
        sales_col (str): Name of the weekly sales column

    Returns:
        pd.DataFrame: DataFrame with 'Temp_sq' and 'log_sales' columns
    """
    validate_columns(df, [temp_col, sales_col])

    non_positive = int((df[sales_col] <= 0).sum())
    if non_positive > 0:
        raise ValueError(f"{non_positive} rows have non-positive {sales_col}; "
                         f"log sales is undefined")

    df_copy = df.copy()
    df_copy['Temp_sq'] = df_copy[temp_col] ** 2
    df_copy['log_sales'] = np.log(df_copy[sales_col])

    logger.info("Created 2 regression features: Temp_sq, log_sales")

    return df_copy


def prepare_analysis_data(df, date_column='Date', date_format=DATE_FORMAT):
    """
    Run the full transformation step: date parsing, calendar features and
    regression features.

    Args:
        df (pd.DataFrame): Raw sales data
        date_column (str): Name of the date column
        date_format (str): Format of the raw dates

    Returns:
        pd.DataFrame: Analysis-ready DataFrame
    """
    df_prepared = convert_date_column(df, date_column=date_column, date_format=date_format)
    df_prepared = create_calendar_features(df_prepared, date_column=date_column)
    df_prepared = create_regression_features(df_prepared)

    logger.info(f"Analysis data shape: {df_prepared.shape}")

    return df_prepared
