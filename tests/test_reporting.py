"""
Tests for regression tables and robustness comparison
"""
import numpy as np
import pytest

from evaluation.reporting import (
    significance_stars,
    regression_table,
    format_regression_table,
    compare_temperature_effects,
    is_robust,
)


@pytest.mark.parametrize("p_value,stars", [
    (0.001, "***"), (0.03, "**"), (0.07, "*"), (0.5, ""), (np.nan, ""),
])
def test_significance_stars(p_value, stars):
    assert significance_stars(p_value) == stars


def test_regression_table(model1, model2):
    """Test side-by-side layout of both models"""
    table = regression_table({"Model 1": model1, "Model 2": model2})

    assert list(table.columns) == ["Model 1", "Model 2"]
    assert table.index.name == "Dependent var.: log_sales"
    for row in ["Temperature", "Temperature (se)", "Temp_sq", "Unemployment",
                "Store FE", "month FE", "year FE", "Clustered SE", "Observations", "R2", "Within R2"]:
        assert row in table.index

    assert table.loc["Unemployment", "Model 2"] == ""
    assert table.loc["Unemployment", "Model 1"] != ""
    assert table.loc["Store FE", "Model 1"] == "Yes"
    assert table.loc["Clustered SE", "Model 2"] == "by: Store"
    assert table.loc["Temperature (se)", "Model 1"].startswith("(")
    assert table.loc["Observations", "Model 1"] == f"{model1.nobs:,}"


def test_regression_table_from_list(model1):
    table = regression_table([model1])
    assert list(table.columns) == ["Model 1"]


def test_regression_table_empty():
    with pytest.raises(ValueError):
        regression_table({})


def test_format_regression_table(model1, model2):
    text = format_regression_table([model1, model2])

    assert text.startswith("Dependent var.: log_sales")
    assert "Temperature" in text
    assert "(se)" not in text
    assert "Signif. codes" in text


def test_compare_temperature_effects_identical(model1):
    """Test a model compared with itself is trivially robust"""
    comparison = compare_temperature_effects(model1, model1)

    assert list(comparison.index) == ["Temperature", "Temp_sq", "turning_point"]
    assert comparison.loc["Temperature", "difference"] == 0
    assert bool(comparison.loc["Temp_sq", "within_base_ci"])
    assert is_robust(comparison)


def test_compare_temperature_effects(model1, model2):
    """Test dropping Unemployment leaves the temperature effect intact"""
    comparison = compare_temperature_effects(model1, model2)

    assert "Model 1" in comparison.columns
    assert "Model 2" in comparison.columns
    assert comparison.loc["Temperature", "difference"] == pytest.approx(
        model2.coef("Temperature") - model1.coef("Temperature"))
    assert is_robust(comparison)
