#!/usr/bin/env python
# -*- coding: utf-8 -*-

"""
Data loading and cleaning diagnostics for the store-week sales panel.
The checks in this module report on the data; they never modify it.
"""

import os
import pandas as pd
import logging

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

REQUIRED_COLUMNS = ['Store', 'Date', 'Weekly_Sales', 'Holiday_Flag',
                    'Temperature', 'Fuel_Price', 'CPI', 'Unemployment']

# Dates in the Walmart extract are day-first (e.g. 05-02-2010)
DATE_FORMAT = '%d-%m-%Y'


def validate_columns(df, required_columns):
    """
    Raise if any required column is absent.

    Args:
        df (pd.DataFrame): Input DataFrame
        required_columns (list): Column names that must be present
    """
    missing = [col for col in required_columns if col not in df.columns]
    if missing:
        raise ValueError(f"Missing required columns: {missing}")


def load_sales_data(path, required_columns=REQUIRED_COLUMNS):
    """
    Load the weekly sales table from a CSV file.

    Args:
        path (str): Path to the CSV file
        required_columns (list): Columns the file must contain

    Returns:
        pd.DataFrame: Raw sales data
    """
    if not os.path.exists(path):
        raise FileNotFoundError(f"Sales data file not found: {path}")

    df = pd.read_csv(path)

    if required_columns:
        validate_columns(df, required_columns)

    logger.info(f"Loaded {len(df)} rows and {df.shape[1]} columns from {path}")

    return df


def check_missing_values(df):
    """
    Count missing values per column.

    Args:
        df (pd.DataFrame): Input DataFrame

    Returns:
        pd.Series: Number of missing values for each column
    """
    missing = df.isnull().sum()
    total_missing = int(missing.sum())

    if total_missing > 0:
        logger.warning(f"Found {total_missing} missing values in columns: "
                       f"{missing[missing > 0].index.tolist()}")
    else:
        logger.info("No missing values found")

    return missing


def check_duplicates(df, subset=None):
    """
    Count fully duplicated rows (or duplicates on a subset of columns).

    Args:
        df (pd.DataFrame): Input DataFrame
        subset (list): Columns to consider; all columns if None

    Returns:
        int: Number of duplicated rows
    """
    n_duplicates = int(df.duplicated(subset=subset).sum())

    if n_duplicates > 0:
        logger.warning(f"Found {n_duplicates} duplicated rows")
    else:
        logger.info("No duplicated rows found")

    return n_duplicates


def check_column_types(df):
    """
    Summarize the structure of the DataFrame: dtype, non-null count and an
    example value for every column.

    Args:
        df (pd.DataFrame): Input DataFrame

    Returns:
        pd.DataFrame: One row per column, indexed by column name
    """
    summary = pd.DataFrame({
        'dtype': df.dtypes.astype(str),
        'non_null': df.notnull().sum(),
        'example': [df[col].iloc[0] if len(df) > 0 else None for col in df.columns]
    })
    summary.index.name = 'column'

    logger.info(f"Column types: {summary['dtype'].to_dict()}")

    return summary


def check_panel_structure(df, unit_col='Store', time_col='Date'):
    """
    Check that the table holds one row per store-week observation.

    Args:
        df (pd.DataFrame): Input DataFrame
        unit_col (str): Panel unit column
        time_col (str): Panel time column

    Returns:
        int: Number of rows whose (unit, time) key is duplicated
    """
    validate_columns(df, [unit_col, time_col])

    n_duplicate_keys = int(df.duplicated(subset=[unit_col, time_col]).sum())
    n_units = df[unit_col].nunique()
    n_periods = df[time_col].nunique()

    if n_duplicate_keys > 0:
        logger.warning(f"{n_duplicate_keys} rows repeat a ({unit_col}, {time_col}) key")

    logger.info(f"Panel: {n_units} units x {n_periods} periods, {len(df)} observations")

    return n_duplicate_keys


def run_data_quality_checks(df, unit_col='Store', time_col='Date'):
    """
    Run every diagnostic check on the raw sales table.

    Args:
        df (pd.DataFrame): Raw sales data
        unit_col (str): Panel unit column
        time_col (str): Panel time column

    Returns:
        dict: Quality report with keys 'n_rows', 'n_columns', 'missing_values',
            'total_missing', 'duplicate_rows', 'duplicate_panel_keys' and
            'column_types'
    """
    missing = check_missing_values(df)

    report = {
        'n_rows': len(df),
        'n_columns': df.shape[1],
        'missing_values': missing,
        'total_missing': int(missing.sum()),
        'duplicate_rows': check_duplicates(df),
        'duplicate_panel_keys': None,
        'column_types': check_column_types(df),
    }

    if unit_col in df.columns and time_col in df.columns:
        report['duplicate_panel_keys'] = check_panel_structure(df, unit_col, time_col)

    return report


def convert_date_column(df, date_column='Date', date_format=DATE_FORMAT):
    """
    Parse the date column into datetime64.

    Args:
        df (pd.DataFrame): Input DataFrame
        date_column (str): Name of the date column
        date_format (str): strftime format of the raw dates; None to infer
            day-first dates

    Returns:
        pd.DataFrame: Copy of the DataFrame with a parsed date column
    """
    validate_columns(df, [date_column])
    df_copy = df.copy()

    if pd.api.types.is_datetime64_any_dtype(df_copy[date_column]):
        return df_copy

    try:
        if date_format:
            df_copy[date_column] = pd.to_datetime(df_copy[date_column], format=date_format)
        else:
            df_copy[date_column] = pd.to_datetime(df_copy[date_column], dayfirst=True)
    except (ValueError, TypeError) as e:
        raise ValueError(f"Could not parse column {date_column} as dates: {e}") from e

    logger.info(f"Parsed {date_column}: {df_copy[date_column].min().date()} "
                f"to {df_copy[date_column].max().date()}")

    return df_copy
