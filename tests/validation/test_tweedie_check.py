"""Tests for the TweedieModelValidator."""

import math
from types import SimpleNamespace

import numpy as np
import pandas as pd
import pytest

from conftest import make_tweedie_fit
from loss_modeling.core.enums import DiagnosticKind
from loss_modeling.validation.checks.tweedie import TweedieModelValidator


def test_tweedie_pass(tweedie_fit):
    result = TweedieModelValidator().validate(tweedie_fit, 1.5)

    assert result.valid is True
    assert result.warnings == ()
    diag = result.diagnostics
    assert diag.deviance == 250.0
    assert diag.null_deviance == 1000.0
    assert diag.pseudo_r2 == pytest.approx(0.75)
    assert diag.aic == 812.5
    assert diag.n_coef == 3
    assert diag.resid_mean == pytest.approx(0.0)
    assert diag.resid_sd == pytest.approx(np.std([0.5, -0.5, 0.2, -0.2], ddof=1))


def test_tweedie_not_converged():
    result = TweedieModelValidator().validate(make_tweedie_fit(converged=False), 1.5)

    assert result.valid is False
    assert result.error_kinds() == [DiagnosticKind.CONVERGENCE_ERROR]
    assert result.errors[0].message == "Model did not converge"
    # Diagnostics are still recorded
    assert result.diagnostics.pseudo_r2 == pytest.approx(0.75)


@pytest.mark.parametrize("power", [1, 1.0, 0.5, 2, 2.0, 2.7, -1.5])
def test_tweedie_power_out_of_bounds(tweedie_fit, power):
    """Powers outside the open interval (1, 2) are errors naming the value."""
    result = TweedieModelValidator().validate(tweedie_fit, power)

    assert result.valid is False
    assert result.error_kinds() == [DiagnosticKind.PARAMETER_BOUNDS_ERROR]
    assert str(power) in result.errors[0].message
    assert result.errors[0].message.startswith("Power parameter out of bounds (1, 2):")


@pytest.mark.parametrize("power", [1.0001, 1.5, 1.65, 1.9999])
def test_tweedie_power_in_bounds(tweedie_fit, power):
    assert TweedieModelValidator().validate(tweedie_fit, power).valid is True


def test_tweedie_insignificant_coefficients_warn():
    fit = make_tweedie_fit(
        coefficient_pvalues={"Intercept": 0.001, "log_premium": 0.2, "AccidentYear": 0.051}
    )

    result = TweedieModelValidator().validate(fit, 1.5)

    assert result.valid is True
    assert len(result.warnings) == 1
    assert result.warnings[0].kind == DiagnosticKind.DEGENERATE_FIT
    assert result.warnings[0].message == "Insignificant coefficients: log_premium, AccidentYear"


def test_tweedie_pvalue_at_threshold_is_significant():
    fit = make_tweedie_fit(
        coefficient_pvalues={"Intercept": 0.05, "log_premium": 0.0, "AccidentYear": 0.0}
    )
    assert TweedieModelValidator().validate(fit, 1.5).warnings == ()


@pytest.mark.parametrize("bad_value", [0.0, -12.0])
def test_tweedie_nonpositive_fitted_values(bad_value):
    fit = make_tweedie_fit(fitted_values=[1400.0, bad_value, 41000.0, 54000.0])

    result = TweedieModelValidator().validate(fit, 1.5)

    assert result.valid is False
    assert result.errors[0].kind == DiagnosticKind.RANGE_VIOLATION
    assert result.errors[0].message == "Model produces non-positive fitted values"
    assert result.errors[0].value == 1


def test_tweedie_large_mean_residual_warns():
    fit = make_tweedie_fit(deviance_residuals=[0.4, 0.3, -0.1, 0.2])

    result = TweedieModelValidator().validate(fit, 1.5)

    assert result.valid is True
    assert result.diagnostics.resid_mean == pytest.approx(0.2)
    assert [w.message for w in result.warnings] == ["Large mean residual: 0.2"]
    assert result.warnings[0].kind == DiagnosticKind.DEGENERATE_FIT


def test_tweedie_all_errors_accumulate():
    fit = make_tweedie_fit(converged=False, fitted_values=[-1.0, 2.0, 3.0, 4.0])

    result = TweedieModelValidator().validate(fit, 2.5)

    assert result.error_kinds() == [
        DiagnosticKind.CONVERGENCE_ERROR,
        DiagnosticKind.PARAMETER_BOUNDS_ERROR,
        DiagnosticKind.RANGE_VIOLATION,
    ]


def test_tweedie_accepts_statsmodels_style_results():
    """Any object with GLMResults attribute names can be validated."""
    model = SimpleNamespace(
        converged=True,
        params=pd.Series({"const": 6.5, "x": 0.3}),
        pvalues=pd.Series({"const": 1e-8, "x": 0.4}),
        deviance=90.0,
        null_deviance=120.0,
        aic=float("nan"),
        fittedvalues=np.array([10.0, 20.0, 30.0]),
        resid_deviance=np.array([0.01, -0.02, 0.01]),
    )

    result = TweedieModelValidator().validate(model, 1.3)

    assert result.valid is True
    assert [w.message for w in result.warnings] == ["Insignificant coefficients: x"]
    assert result.diagnostics.n_coef == 2
    assert result.diagnostics.pseudo_r2 == pytest.approx(0.25)
    assert math.isnan(result.diagnostics.aic)
