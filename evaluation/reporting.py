#!/usr/bin/env python
# -*- coding: utf-8 -*-

"""
Regression tables and robustness comparisons for fitted panel models.
"""

import numpy as np
import pandas as pd
import logging

from models.fixed_effects import TEMPERATURE_TERMS, temperature_turning_point

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

SIGNIFICANCE_LEVELS = [(0.01, '***'), (0.05, '**'), (0.1, '*')]


def significance_stars(p_value):
    """
    Significance marker for a p-value.

    Parameters:
    -----------
    p_value : float
        Two-sided p-value

    Returns:
    --------
    str
        '***', '**', '*' or ''
    """
    if p_value is None or np.isnan(p_value):
        return ''
    for threshold, stars in SIGNIFICANCE_LEVELS:
        if p_value < threshold:
            return stars
    return ''


def _as_model_dict(models):
    if isinstance(models, dict):
        return models
    return {model.name: model for model in models}


def regression_table(models, digits=4):
    """
    Side-by-side regression table for one or more fitted models.

    Each coefficient gets an estimate row (with significance stars) and a
    standard error row in parentheses. Footer rows report fixed effects,
    clustering, observations and fit statistics.

    Parameters:
    -----------
    models : dict or list
        Fitted PanelFixedEffectsModel objects, keyed by column label if a dict
    digits : int, optional
        Decimal places

    Returns:
    --------
    pandas.DataFrame
        Table with one column per model
    """
    models = _as_model_dict(models)
    if not models:
        raise ValueError("No models to tabulate")

    # Union of terms in first-seen order
    terms = []
    for model in models.values():
        for term in model.regressors:
            if term not in terms:
                terms.append(term)

    fixed_effects = []
    for model in models.values():
        for fe in model.fixed_effects:
            if fe not in fixed_effects:
                fixed_effects.append(fe)

    columns = {}
    for label, model in models.items():
        coefs = model.coefficients()
        column = {}

        for term in terms:
            if term in coefs.index:
                row = coefs.loc[term]
                column[term] = f"{row['estimate']:.{digits}f}{significance_stars(row['p_value'])}"
                column[f"{term} (se)"] = f"({row['std_error']:.{digits}f})"
            else:
                column[term] = ''
                column[f"{term} (se)"] = ''

        for fe in fixed_effects:
            column[f"{fe} FE"] = 'Yes' if fe in model.fixed_effects else 'No'

        column['Clustered SE'] = f"by: {model.cluster_var}" if model.cluster_var else 'hetero'
        column['Observations'] = f"{model.nobs:,}"
        column['R2'] = f"{model.r_squared:.{digits}f}"
        column['Within R2'] = f"{model.within_r_squared:.{digits}f}"

        columns[label] = column

    table = pd.DataFrame(columns)
    table.index.name = 'Dependent var.: ' + next(iter(models.values())).depvar

    return table


def format_regression_table(models, digits=4):
    """
    Plain-text rendering of ``regression_table``.

    Parameters:
    -----------
    models : dict or list
        Fitted models
    digits : int, optional
        Decimal places

    Returns:
    --------
    str
        Printable table followed by the significance legend
    """
    table = regression_table(models, digits=digits)

    # Standard error rows print with a blank label under their coefficient
    display = table.copy()
    display.index = ['' if label.endswith(' (se)') else label for label in display.index]

    legend = 'Signif. codes: 0 *** 0.01 ** 0.05 * 0.1'
    return f"{table.index.name}\n{display.to_string()}\n---\n{legend}"


def compare_temperature_effects(base_model, alternative_model, terms=None):
    """
    Compare the temperature coefficients of two specifications.

    Parameters:
    -----------
    base_model : PanelFixedEffectsModel
        Reference specification
    alternative_model : PanelFixedEffectsModel
        Specification being checked against the reference
    terms : list, optional
        Terms to compare (defaults to the temperature terms)

    Returns:
    --------
    pandas.DataFrame
        One row per term plus a turning-point row
    """
    terms = terms or TEMPERATURE_TERMS
    base_coefs = base_model.coefficients()
    alt_coefs = alternative_model.coefficients()

    rows = {}
    for term in terms:
        if term not in base_coefs.index or term not in alt_coefs.index:
            raise ValueError(f"Term {term} is not in both models")

        base = base_coefs.loc[term]
        alt = alt_coefs.loc[term]
        difference = alt['estimate'] - base['estimate']

        rows[term] = {
            base_model.name: base['estimate'],
            alternative_model.name: alt['estimate'],
            'difference': difference,
            'pct_change': difference / base['estimate'] * 100 if base['estimate'] != 0 else np.nan,
            'same_sign': bool(np.sign(base['estimate']) == np.sign(alt['estimate'])),
            'within_base_ci': bool(base['ci_lower'] <= alt['estimate'] <= base['ci_upper']),
        }

    base_tp = temperature_turning_point(base_model)
    alt_tp = temperature_turning_point(alternative_model)
    rows['turning_point'] = {
        base_model.name: base_tp,
        alternative_model.name: alt_tp,
        'difference': alt_tp - base_tp,
        'pct_change': (alt_tp - base_tp) / base_tp * 100 if base_tp and not np.isnan(base_tp) else np.nan,
        'same_sign': bool(np.sign(base_tp) == np.sign(alt_tp)),
        'within_base_ci': np.nan,
    }

    comparison = pd.DataFrame(rows).T
    comparison.index.name = 'term'

    return comparison


def is_robust(comparison, terms=None):
    """
    Decide whether the temperature results survive the alternative specification.

    Robust means every compared term keeps its sign and the alternative
    estimate falls inside the base model's confidence interval.

    Parameters:
    -----------
    comparison : pandas.DataFrame
        Output of ``compare_temperature_effects``
    terms : list, optional
        Terms to check (defaults to the temperature terms)

    Returns:
    --------
    bool
    """
    terms = terms or TEMPERATURE_TERMS
    subset = comparison.loc[terms]
    robust = bool(subset['same_sign'].astype(bool).all() and subset['within_base_ci'].astype(bool).all())

    logger.info(f"Temperature effects robust across specifications: {robust}")

    return robust
