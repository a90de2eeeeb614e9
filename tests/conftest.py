import matplotlib
matplotlib.use("Agg")

import pytest

from data.generate_sample_data import generate_walmart_sales_data
from preprocessing.feature_engineering import prepare_analysis_data
from models.fixed_effects import fit_temperature_model, fit_robustness_model

TRUE_TEMPERATURE_EFFECT = (0.004, -0.00004)


@pytest.fixture(scope="session")
def raw_sales_df():
    """Sample store-week panel in the raw CSV layout"""
    return generate_walmart_sales_data(n_stores=12, seed=7,
                                       temperature_effect=TRUE_TEMPERATURE_EFFECT)


@pytest.fixture(scope="session")
def analysis_df(raw_sales_df):
    """Sample panel with calendar and regression features"""
    return prepare_analysis_data(raw_sales_df)


@pytest.fixture(scope="session")
def precise_analysis_df():
    """Low-noise panel for checking coefficient recovery"""
    raw = generate_walmart_sales_data(n_stores=10, seed=11, noise_scale=0.001,
                                      temperature_effect=TRUE_TEMPERATURE_EFFECT)
    return prepare_analysis_data(raw)


@pytest.fixture(scope="session")
def model1(analysis_df):
    return fit_temperature_model(analysis_df)


@pytest.fixture(scope="session")
def model2(analysis_df):
    return fit_robustness_model(analysis_df)
