#!/usr/bin/env python
# -*- coding: utf-8 -*-

"""
Panel fixed-effects regressions of log sales on temperature.
This module wraps pyfixest's feols estimator with store-clustered standard
errors and exposes the quantities the analysis reports on.
"""

import pandas as pd
import numpy as np
import pyfixest as pf
import statsmodels.api as sm
from statsmodels.stats.diagnostic import het_breuschpagan
import logging
import warnings
warnings.filterwarnings("ignore")

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

DEPVAR = 'log_sales'
TEMPERATURE_TERMS = ['Temperature', 'Temp_sq']
CONTROLS = ['Holiday_Flag', 'Fuel_Price', 'CPI', 'Unemployment']
FIXED_EFFECTS = ['Store', 'month', 'year']
CLUSTER_VAR = 'Store'


def build_formula(depvar, regressors, fixed_effects=None):
    """
    Build a pyfixest formula string.

    Parameters:
    -----------
    depvar : str
        Dependent variable
    regressors : list
        Right-hand side variables
    fixed_effects : list, optional
        Variables whose levels are absorbed as fixed effects

    Returns:
    --------
    str
        Formula of the form ``y ~ x1 + x2 | fe1 + fe2``
    """
    if not regressors:
        raise ValueError("At least one regressor is required")

    formula = f"{depvar} ~ {' + '.join(regressors)}"
    if fixed_effects:
        formula += f" | {' + '.join(fixed_effects)}"
    return formula


class PanelFixedEffectsModel:
    """
    Least-squares regression with absorbed fixed effects and clustered
    standard errors.
    """

    def __init__(self, depvar=DEPVAR, regressors=None, fixed_effects=None,
                 cluster_var=CLUSTER_VAR, name=None, fixef_rm='none'):
        """
        Initialize the model.

        Parameters:
        -----------
        depvar : str, optional
            Dependent variable
        regressors : list, optional
            Right-hand side variables (defaults to temperature terms and all controls)
        fixed_effects : list, optional
            Fixed-effect variables (defaults to store, month and year)
        cluster_var : str, optional
            Variable to cluster standard errors on; None for heteroskedasticity-robust
        name : str, optional
            Label used in tables and logs
        fixef_rm : str, optional
            Singleton handling passed to feols; 'none' keeps every observation
        """
        self.depvar = depvar
        self.regressors = list(regressors) if regressors is not None else TEMPERATURE_TERMS + CONTROLS
        self.fixed_effects = list(fixed_effects) if fixed_effects is not None else list(FIXED_EFFECTS)
        self.cluster_var = cluster_var
        self.name = name or 'model'
        self.fixef_rm = fixef_rm
        self.formula = build_formula(self.depvar, self.regressors, self.fixed_effects)
        self.results = None
        self.sample = None
        self.trained = False

    def _check_fitted(self):
        if not self.trained:
            raise RuntimeError(f"Model '{self.name}' has not been fitted yet")

    @property
    def vcov(self):
        if self.cluster_var:
            return {'CRV1': self.cluster_var}
        return 'hetero'

    def fit(self, df):
        """
        Fit the model to the data.

        Parameters:
        -----------
        df : pandas.DataFrame
            Analysis data containing every model variable

        Returns:
        --------
        self
        """
        columns = [self.depvar] + self.regressors + self.fixed_effects
        if self.cluster_var and self.cluster_var not in columns:
            columns.append(self.cluster_var)

        missing = [col for col in columns if col not in df.columns]
        if missing:
            raise ValueError(f"Missing model variables: {missing}")

        # feols drops incomplete rows; keep the same sample for residual alignment
        sample = df[columns].dropna()
        # Nullable calendar columns (Int64) go to the estimator as plain integers
        nullable_ints = [col for col in sample.columns
                         if pd.api.types.is_extension_array_dtype(sample[col])
                         and pd.api.types.is_integer_dtype(sample[col])]
        if nullable_ints:
            sample = sample.astype({col: 'int64' for col in nullable_ints})
        dropped = len(df) - len(sample)
        if dropped > 0:
            logger.warning(f"{self.name}: dropping {dropped} rows with missing values")
        if len(sample) == 0:
            raise ValueError("No complete observations to fit")

        logger.info(f"Fitting {self.name}: {self.formula} (vcov={self.vcov})")

        results = pf.feols(self.formula, data=sample, vcov=self.vcov, fixef_rm=self.fixef_rm)

        used = int(results._N)
        if used != len(sample):
            raise RuntimeError(f"{self.name}: estimator used {used} of "
                               f"{len(sample)} observations; residuals cannot be aligned")

        self.results = results
        self.sample = sample
        self.trained = True

        logger.info(f"{self.name}: N={self.nobs}, R2={self.r_squared:.4f}, "
                    f"within R2={self.within_r_squared:.4f}")

        return self

    def coefficients(self, alpha=0.05):
        """
        Coefficient table for the fitted model.

        Parameters:
        -----------
        alpha : float, optional
            Significance level for the confidence interval

        Returns:
        --------
        pandas.DataFrame
            Indexed by regressor with columns estimate, std_error, t_value,
            p_value, ci_lower, ci_upper
        """
        self._check_fitted()
        ci = self.results.confint(alpha=alpha)

        table = pd.DataFrame({
            'estimate': self.results.coef(),
            'std_error': self.results.se(),
            't_value': self.results.tstat(),
            'p_value': self.results.pvalue(),
            'ci_lower': ci.iloc[:, 0],
            'ci_upper': ci.iloc[:, 1],
        })
        table.index.name = 'term'

        return table.loc[[term for term in self.regressors if term in table.index]]

    def coef(self, term):
        self._check_fitted()
        return float(self.results.coef().get(term, np.nan))

    def se(self, term):
        self._check_fitted()
        return float(self.results.se().get(term, np.nan))

    def residuals(self):
        """Residuals indexed like the estimation sample."""
        self._check_fitted()
        return pd.Series(np.asarray(self.results.resid()).ravel(),
                         index=self.sample.index, name='residuals')

    def fitted_values(self):
        """Fitted values (including fixed effects) indexed like the estimation sample."""
        fitted = self.sample[self.depvar] - self.residuals()
        fitted.name = 'fitted'
        return fitted

    @property
    def nobs(self):
        self._check_fitted()
        return int(self.results._N)

    @property
    def r_squared(self):
        self._check_fitted()
        return float(self.results._r2)

    @property
    def within_r_squared(self):
        self._check_fitted()
        return float(self.results._r2_within)

    @property
    def n_clusters(self):
        self._check_fitted()
        if not self.cluster_var:
            return None
        return int(self.sample[self.cluster_var].nunique())

    def summary(self):
        """Short dictionary summary of the fit."""
        self._check_fitted()
        return {
            'name': self.name,
            'formula': self.formula,
            'nobs': self.nobs,
            'r_squared': self.r_squared,
            'within_r_squared': self.within_r_squared,
            'cluster_var': self.cluster_var,
            'n_clusters': self.n_clusters,
            'coefficients': self.coefficients(),
        }


def fit_temperature_model(df, name='Model 1'):
    """
    Fit the main specification: log sales on temperature (linear and squared)
    and all controls, with store, month and year fixed effects and
    store-clustered standard errors.
    """
    model = PanelFixedEffectsModel(regressors=TEMPERATURE_TERMS + CONTROLS, name=name)
    return model.fit(df)


def fit_robustness_model(df, name='Model 2', excluded=('Unemployment',)):
    """
    Fit the robustness specification: the main model without Unemployment.
    """
    controls = [col for col in CONTROLS if col not in excluded]
    model = PanelFixedEffectsModel(regressors=TEMPERATURE_TERMS + controls, name=name)
    return model.fit(df)


def temperature_turning_point(model, linear_term='Temperature', squared_term='Temp_sq'):
    """
    Temperature at which the fitted quadratic effect reaches its extremum.

    Parameters:
    -----------
    model : PanelFixedEffectsModel
        Fitted model containing both temperature terms
    linear_term : str, optional
        Name of the linear temperature term
    squared_term : str, optional
        Name of the squared temperature term

    Returns:
    --------
    float
        -b1 / (2 * b2), or NaN when the squared coefficient is zero
    """
    b1 = model.coef(linear_term)
    b2 = model.coef(squared_term)
    if b2 == 0 or np.isnan(b2):
        return np.nan
    return -b1 / (2 * b2)


def breusch_pagan_test(model, regressors=None):
    """
    Breusch-Pagan test for heteroskedasticity of the model residuals.

    Parameters:
    -----------
    model : PanelFixedEffectsModel
        Fitted model
    regressors : list, optional
        Variables the residual variance is tested against (defaults to the
        model's regressors)

    Returns:
    --------
    dict
        LM statistic and p-value, F statistic and p-value
    """
    residuals = model.residuals()
    exog = sm.add_constant(model.sample[regressors or model.regressors].astype(float))

    lm_stat, lm_pvalue, f_stat, f_pvalue = het_breuschpagan(residuals.values, exog.values)

    logger.info(f"{model.name}: Breusch-Pagan LM={lm_stat:.3f} (p={lm_pvalue:.4f})")

    return {
        'lm_statistic': float(lm_stat),
        'lm_pvalue': float(lm_pvalue),
        'f_statistic': float(f_stat),
        'f_pvalue': float(f_pvalue),
    }
