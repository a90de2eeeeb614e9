#!/usr/bin/env python
# -*- coding: utf-8 -*-

"""
Temperature & Retail Sales Analysis Script
This script runs the full pipeline: load the weekly store sales table, run
data quality checks, build calendar and regression features, draw the
exploratory plots, and fit the two fixed-effects panel regressions.
"""

import os
import sys
import matplotlib.pyplot as plt
import warnings
warnings.filterwarnings('ignore')

# Add parent directory to path
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

# Import project modules
from preprocessing.data_cleaning import load_sales_data, run_data_quality_checks
from preprocessing.feature_engineering import prepare_analysis_data

from models.fixed_effects import (fit_temperature_model, fit_robustness_model,
                                  temperature_turning_point, breusch_pagan_test)

from evaluation.reporting import (regression_table, format_regression_table,
                                  compare_temperature_effects, is_robust)
from evaluation.visualization import (plot_temperature_vs_sales, plot_sales_by_season,
                                      plot_residuals_vs_fitted)


# Set up directories
project_dir = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
default_data_path = os.path.join(project_dir, "data", "raw_data", "Walmart_Sales.csv")
default_results_dir = os.path.join(project_dir, "results")


def _banner(step, title):
    print(f"Step {step}: {title}")
    print("-" * 50)


def _save_figure(fig, results_dir, filename):
    if results_dir:
        fig.savefig(os.path.join(results_dir, filename))


def run_analysis(data_path=None, sales_df=None, results_dir=None, show_plots=False):
    """
    Run the temperature and sales analysis end to end.

    Parameters:
    -----------
    data_path : str, optional
        CSV file to load; ignored when sales_df is given
    sales_df : pandas.DataFrame, optional
        Raw sales table already in memory
    results_dir : str, optional
        Directory for figures and tables; nothing is written if None
    show_plots : bool, optional
        Display the figures instead of closing them after saving

    Returns:
    --------
    dict
        Keys: data, quality_report, model1, model2, tables, figures,
        comparison, robust, turning_points, heteroskedasticity
    """
    if sales_df is None and data_path is None:
        raise ValueError("Either data_path or sales_df must be provided")

    if results_dir and not os.path.exists(results_dir):
        os.makedirs(results_dir)

    print("=" * 80)
    print("TEMPERATURE & RETAIL SALES: FIXED-EFFECTS PANEL ANALYSIS")
    print("=" * 80)
    print()

    # Step 1: Load data
    _banner(1, "Loading Data")
    if sales_df is None:
        raw_df = load_sales_data(data_path)
    else:
        raw_df = sales_df.copy()
    print(f"Loaded {len(raw_df)} rows across {raw_df['Store'].nunique()} stores")
    print()

    # Step 2: Data quality checks
    _banner(2, "Data Quality Checks")
    quality_report = run_data_quality_checks(raw_df)
    print("Missing values per column:")
    print(quality_report['missing_values'].to_string())
    print(f"Duplicated rows: {quality_report['duplicate_rows']}")
    print(f"Duplicated store-week keys: {quality_report['duplicate_panel_keys']}")
    print("Column types:")
    print(quality_report['column_types'].to_string())
    print()

    # Step 3: Feature engineering
    _banner(3, "Building Calendar and Regression Features")
    analysis_df = prepare_analysis_data(raw_df)
    print(f"Data shape after feature engineering: {analysis_df.shape}")
    print()

    # Step 4: Exploratory plots
    _banner(4, "Exploratory Visualization")
    figures = {}
    figures['temperature_vs_sales'] = plot_temperature_vs_sales(analysis_df)
    _save_figure(figures['temperature_vs_sales'], results_dir, "temperature_vs_sales.png")

    figures['sales_by_season'] = plot_sales_by_season(analysis_df)
    _save_figure(figures['sales_by_season'], results_dir, "log_sales_by_season.png")
    print()

    # Step 5: Main specification
    _banner(5, "Fitting Model 1 (all controls)")
    model1 = fit_temperature_model(analysis_df)
    print(format_regression_table({'Model 1': model1}))
    print()

    fitted = model1.fitted_values()
    residuals = model1.residuals()
    analysis_df.loc[fitted.index, 'fitted'] = fitted
    analysis_df.loc[residuals.index, 'residuals'] = residuals

    figures['residuals_vs_fitted'] = plot_residuals_vs_fitted(fitted, residuals, model_name=model1.name)
    _save_figure(figures['residuals_vs_fitted'], results_dir, "residuals_vs_fitted.png")

    heteroskedasticity = breusch_pagan_test(model1)
    print(f"Breusch-Pagan test: LM={heteroskedasticity['lm_statistic']:.3f}, "
          f"p={heteroskedasticity['lm_pvalue']:.4f}")
    print()

    # Step 6: Robustness specification
    _banner(6, "Fitting Model 2 (without Unemployment)")
    model2 = fit_robustness_model(analysis_df)
    print(format_regression_table({'Model 2': model2}))
    print()

    # Step 7: Report
    _banner(7, "Regression Tables")
    models = {'Model 1': model1, 'Model 2': model2}
    tables = {
        'regression_table': regression_table(models),
        'model1_coefficients': model1.coefficients(),
        'model2_coefficients': model2.coefficients(),
    }
    table_text = format_regression_table(models)
    print(table_text)
    print()

    comparison = compare_temperature_effects(model1, model2)
    robust = is_robust(comparison)
    turning_points = {
        model1.name: temperature_turning_point(model1),
        model2.name: temperature_turning_point(model2),
    }
    tables['temperature_comparison'] = comparison

    print("Temperature effects across specifications:")
    print(comparison.to_string())
    print(f"Robust to excluding Unemployment: {robust}")
    print()

    if results_dir:
        with open(os.path.join(results_dir, "regression_table.txt"), "w") as f:
            f.write(table_text + "\n")
        for name, table in tables.items():
            table.to_csv(os.path.join(results_dir, f"{name}.csv"))
        print(f"Results saved to {results_dir}")

    if show_plots:
        plt.show()
    else:
        for fig in figures.values():
            plt.close(fig)

    return {
        'data': analysis_df,
        'quality_report': quality_report,
        'model1': model1,
        'model2': model2,
        'tables': tables,
        'figures': figures,
        'comparison': comparison,
        'robust': robust,
        'turning_points': turning_points,
        'heteroskedasticity': heteroskedasticity,
    }


if __name__ == "__main__":
    if os.path.exists(default_data_path):
        run_analysis(data_path=default_data_path, results_dir=default_results_dir)
    else:
        from data.generate_sample_data import generate_walmart_sales_data

        print(f"{default_data_path} not found; using generated sample data")
        run_analysis(sales_df=generate_walmart_sales_data(), results_dir=default_results_dir)
