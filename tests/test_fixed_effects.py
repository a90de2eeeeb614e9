"""
Tests for the panel fixed-effects models
"""
import numpy as np
import pytest

from models.fixed_effects import (
    CONTROLS,
    FIXED_EFFECTS,
    PanelFixedEffectsModel,
    build_formula,
    fit_temperature_model,
    temperature_turning_point,
    breusch_pagan_test,
)

TRUE_TEMPERATURE_EFFECT = (0.004, -0.00004)


class _StubModel:
    """Minimal stand-in exposing coef()"""

    def __init__(self, coefs):
        self.coefs = coefs

    def coef(self, term):
        return self.coefs.get(term, np.nan)


def test_build_formula():
    formula = build_formula("log_sales", ["Temperature", "Temp_sq"], ["Store", "month"])
    assert formula == "log_sales ~ Temperature + Temp_sq | Store + month"


def test_build_formula_without_fixed_effects():
    assert build_formula("y", ["x"]) == "y ~ x"


def test_build_formula_requires_regressors():
    with pytest.raises(ValueError):
        build_formula("y", [])


def test_model_defaults():
    model = PanelFixedEffectsModel()

    assert model.regressors == ["Temperature", "Temp_sq"] + CONTROLS
    assert model.fixed_effects == FIXED_EFFECTS
    assert model.vcov == {"CRV1": "Store"}
    assert model.formula.endswith("| Store + month + year")


def test_unfitted_model_raises():
    model = PanelFixedEffectsModel(name="unfitted")

    with pytest.raises(RuntimeError):
        model.coefficients()
    with pytest.raises(RuntimeError):
        model.residuals()
    with pytest.raises(RuntimeError):
        _ = model.nobs


def test_fit_missing_columns(analysis_df):
    model = PanelFixedEffectsModel(regressors=["Temperature", "Rainfall"])

    with pytest.raises(ValueError, match="Rainfall"):
        model.fit(analysis_df)


def test_temperature_model_structure(model1, analysis_df):
    """Test the main specification's outputs"""
    coefs = model1.coefficients()

    assert list(coefs.index) == ["Temperature", "Temp_sq"] + CONTROLS
    assert list(coefs.columns) == ["estimate", "std_error", "t_value", "p_value", "ci_lower", "ci_upper"]
    assert (coefs["std_error"] > 0).all()
    assert (coefs["ci_lower"] < coefs["estimate"]).all()
    assert (coefs["estimate"] < coefs["ci_upper"]).all()

    assert model1.nobs == len(analysis_df)
    assert model1.n_clusters == analysis_df["Store"].nunique()
    assert 0 < model1.within_r_squared <= model1.r_squared <= 1


def test_residuals_and_fitted_values(model1, analysis_df):
    """Test fitted + residual reproduces log sales"""
    residuals = model1.residuals()
    fitted = model1.fitted_values()

    assert len(residuals) == model1.nobs
    assert residuals.index.equals(analysis_df.index)
    np.testing.assert_allclose(fitted + residuals, analysis_df["log_sales"])
    assert abs(residuals.mean()) < 1e-6


def test_robustness_model_drops_unemployment(model2):
    assert "Unemployment" not in model2.regressors
    assert "Unemployment" not in model2.coefficients().index
    assert model2.name == "Model 2"


def test_recovers_temperature_effect(precise_analysis_df):
    """Test coefficients are recovered from a low-noise panel"""
    model = fit_temperature_model(precise_analysis_df)

    assert model.coef("Temperature") == pytest.approx(TRUE_TEMPERATURE_EFFECT[0], abs=5e-4)
    assert model.coef("Temp_sq") == pytest.approx(TRUE_TEMPERATURE_EFFECT[1], abs=5e-6)
    assert model.coef("Holiday_Flag") == pytest.approx(0.05, abs=5e-3)

    true_turning_point = -TRUE_TEMPERATURE_EFFECT[0] / (2 * TRUE_TEMPERATURE_EFFECT[1])
    assert temperature_turning_point(model) == pytest.approx(true_turning_point, abs=10)


def test_temperature_turning_point():
    model = _StubModel({"Temperature": 0.006, "Temp_sq": -0.00005})
    assert temperature_turning_point(model) == pytest.approx(60.0)


def test_temperature_turning_point_linear():
    model = _StubModel({"Temperature": 0.006, "Temp_sq": 0.0})
    assert np.isnan(temperature_turning_point(model))


def test_breusch_pagan_test(model1):
    result = breusch_pagan_test(model1)

    assert set(result) == {"lm_statistic", "lm_pvalue", "f_statistic", "f_pvalue"}
    assert result["lm_statistic"] >= 0
    assert 0 <= result["lm_pvalue"] <= 1


def test_summary(model1):
    summary = model1.summary()

    assert summary["name"] == "Model 1"
    assert summary["cluster_var"] == "Store"
    assert summary["nobs"] == model1.nobs


def test_breusch_pagan_test_custom_regressors(model1):
    result = breusch_pagan_test(model1, regressors=["Temperature"])

    assert 0 <= result["lm_pvalue"] <= 1


def test_fit_keeps_singleton_store(analysis_df):
    """Test a store observed once stays in the estimation sample"""
    first_row = analysis_df.index[analysis_df["Store"] == 12][0]
    df = analysis_df[(analysis_df["Store"] != 12) | (analysis_df.index == first_row)]

    model = fit_temperature_model(df)

    assert model.nobs == len(df)
    assert model.residuals().index.equals(df.index)
    assert model.n_clusters == 12


def test_fit_row_mismatch_leaves_model_unfitted(analysis_df):
    """Test the estimator dropping rows raises and leaves no partial state"""
    first_row = analysis_df.index[analysis_df["Store"] == 12][0]
    df = analysis_df[(analysis_df["Store"] != 12) | (analysis_df.index == first_row)]
    model = PanelFixedEffectsModel(name="singleton removal", fixef_rm="singleton")

    with pytest.raises(RuntimeError, match="cannot be aligned"):
        model.fit(df)

    assert not model.trained
    assert model.results is None
    with pytest.raises(RuntimeError):
        model.residuals()
    with pytest.raises(RuntimeError):
        model.fitted_values()


def test_fit_drops_incomplete_rows(analysis_df):
    """Test rows with missing controls are dropped and residuals align"""
    df = analysis_df.copy()
    missing_rows = df.index[[5, 40, 300]]
    df.loc[missing_rows, "CPI"] = np.nan

    model = fit_temperature_model(df)

    assert model.nobs == len(df) - 3
    assert model.residuals().index.equals(df.index.drop(missing_rows))
    np.testing.assert_allclose(model.fitted_values() + model.residuals(),
                               df["log_sales"].drop(missing_rows))


def test_fit_no_complete_rows(analysis_df):
    df = analysis_df.copy()
    df["CPI"] = np.nan

    model = PanelFixedEffectsModel(name="empty")
    with pytest.raises(ValueError, match="No complete observations"):
        model.fit(df)
    assert not model.trained


def test_fit_statistics_propagate_missing_attributes():
    """Test fit statistics are read directly from the estimator results"""
    model = PanelFixedEffectsModel(name="stub")
    model.results = object()
    model.trained = True

    with pytest.raises(AttributeError):
        _ = model.r_squared
    with pytest.raises(AttributeError):
        _ = model.within_r_squared
