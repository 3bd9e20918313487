"""Unit tests for the validation runner and artifact loaders."""

from __future__ import annotations

import io

import pandas as pd
import pytest

from loss_modeling.validation import run_validation
from loss_modeling.validation.config import ValidationThresholds
from loss_modeling.validation.fits import EVTFit
from loss_modeling.validation.models import (
    EVTResult,
    ModelDataResult,
    PredictionResult,
    RawDataResult,
    TweedieResult,
)
from loss_modeling.validation.registry import (
    load_evt_fits,
    load_predictions,
    load_table,
    load_tweedie_fit,
    print_report,
)


def test_run_validation_all_artifacts_in_pipeline_order(raw_df, model_df, tweedie_fit, gev_fit, gpd_fit):
    report = run_validation(
        predicted=[105, 190, 330],
        actual=[100, 200, 300],
        gpd_fit=gpd_fit,
        gev_fit=gev_fit,
        power=1.5,
        tweedie_model=tweedie_fit,
        model_data=model_df,
        raw_data=raw_df,
    )

    assert list(report) == ["raw_data", "model_data", "tweedie_model", "evt_models", "predictions"]
    assert isinstance(report["raw_data"], RawDataResult)
    assert isinstance(report["model_data"], ModelDataResult)
    assert isinstance(report["tweedie_model"], TweedieResult)
    assert isinstance(report["evt_models"], EVTResult)
    assert isinstance(report["predictions"], PredictionResult)
    assert report.all_valid is True


def test_run_validation_skips_missing_artifacts(model_df):
    report = run_validation(model_data=model_df)
    assert list(report) == ["model_data"]


def test_run_validation_nothing_supplied():
    report = run_validation()
    assert len(report) == 0
    assert report.all_valid is True


@pytest.mark.parametrize(
    "kwargs, match",
    [
        ({"tweedie_model": object()}, "power parameter"),
        ({"gev_fit": EVTFit(scale=1.0, shape=0.1)}, "both a GEV and a GPD"),
        ({"actual": [1.0]}, "both actual and predicted"),
    ],
)
def test_run_validation_requires_companion_inputs(kwargs, match):
    with pytest.raises(ValueError, match=match):
        run_validation(**kwargs)


def test_run_validation_applies_thresholds(model_df):
    model_df.loc[0, "Loss"] = 12000.0  # ratio 6
    report = run_validation(
        model_data=model_df,
        actual=[100, 100],
        predicted=[108, 94],
        thresholds=ValidationThresholds(max_loss_ratio=5, tolerance_pct=5),
    )

    assert report["model_data"].warnings[0].check_id == "model_extreme_loss_ratio"
    assert report["predictions"].metrics.n_exceed_tolerance == 2


def test_run_validation_explicit_tolerance_wins(model_df):
    report = run_validation(actual=[100, 100], predicted=[108, 94], tolerance_pct=50)
    assert report["predictions"].warnings == ()


def test_load_table(tmp_path, model_df):
    path = tmp_path / "model.csv"
    model_df.to_csv(path, index=False)

    loaded = load_table(path)
    pd.testing.assert_frame_equal(loaded, model_df)


def test_load_table_errors(tmp_path):
    with pytest.raises(FileNotFoundError, match="CSV file not found"):
        load_table(tmp_path / "missing.csv")

    empty = tmp_path / "empty.csv"
    empty.write_text("", encoding="utf-8")
    with pytest.raises(ValueError, match="Failed to read CSV file"):
        load_table(empty)


def test_load_predictions(tmp_path):
    path = tmp_path / "preds.csv"
    path.write_text("year,obs,fcst\n2001,100,105\n2002,200,\n", encoding="utf-8")

    actual, predicted = load_predictions(path, actual_col="obs", predicted_col="fcst")
    assert list(actual) == [100, 200]
    assert predicted.isna().sum() == 1

    with pytest.raises(ValueError, match="missing columns: actual, predicted"):
        load_predictions(path)


def test_load_evt_fits(tmp_path):
    path = tmp_path / "evt.yaml"
    path.write_text(
        "gev: {location: 1200000, scale: 500000, shape: -0.33}\n"
        "gpd: {scale: 300000, shape: 0.82}\n",
        encoding="utf-8",
    )

    gev, gpd = load_evt_fits(path)
    assert gev == EVTFit(scale=500000.0, shape=-0.33, location=1200000.0)
    assert gpd == EVTFit(scale=300000.0, shape=0.82)


def test_load_evt_fits_missing_family(tmp_path):
    path = tmp_path / "evt.yaml"
    path.write_text("gev: {scale: 1, shape: 0.1}\n", encoding="utf-8")
    with pytest.raises(ValueError, match="no 'gpd' estimate"):
        load_evt_fits(path)


def test_load_tweedie_fit(tmp_path):
    path = tmp_path / "tweedie.yaml"
    path.write_text(
        "converged: true\n"
        "power: 1.55\n"
        "coefficients: {Intercept: 7.1, log_premium: 0.9}\n"
        "pvalues: {Intercept: 0.001, log_premium: 0.002}\n"
        "deviance: 250\n"
        "null_deviance: 1000\n"
        "aic: 800\n"
        "fitted_values: [10, 20]\n"
        "deviance_residuals: [0.1, -0.1]\n",
        encoding="utf-8",
    )

    fit = load_tweedie_fit(path)
    assert fit.power == 1.55
    assert fit.converged is True
    assert run_validation(tweedie_model=fit, power=fit.power).all_valid is True


@pytest.mark.parametrize(
    "bad_line",
    ["coefficients: [1, 2]\n", "fitted_values: 3\n", "deviance: [250]\n", "aic: high\n"],
    ids=["coefficients_list", "fitted_scalar", "deviance_list", "aic_text"],
)
def test_load_tweedie_fit_malformed_values(tmp_path, bad_line):
    good = {
        "converged": "converged: true\n",
        "coefficients": "coefficients: {Intercept: 7.1}\n",
        "pvalues": "pvalues: {Intercept: 0.001}\n",
        "deviance": "deviance: 250\n",
        "null_deviance": "null_deviance: 1000\n",
        "aic": "aic: 800\n",
        "fitted_values": "fitted_values: [10, 20]\n",
        "deviance_residuals": "deviance_residuals: [0.1, -0.1]\n",
    }
    good[bad_line.split(":")[0]] = bad_line
    path = tmp_path / "tweedie.yaml"
    path.write_text("".join(good.values()), encoding="utf-8")

    with pytest.raises(ValueError, match="Malformed Tweedie fit summary"):
        load_tweedie_fit(path)


def test_load_evt_fits_malformed_value(tmp_path):
    path = tmp_path / "evt.yaml"
    path.write_text(
        "gev: {location: 1, scale: [5], shape: -0.3}\ngpd: {scale: 3, shape: 0.8}\n",
        encoding="utf-8",
    )
    with pytest.raises(ValueError, match="Malformed EVT estimate"):
        load_evt_fits(path)


def test_load_tweedie_fit_not_mapping(tmp_path):
    path = tmp_path / "tweedie.yaml"
    path.write_text("just text\n", encoding="utf-8")
    with pytest.raises(ValueError, match="must contain a mapping"):
        load_tweedie_fit(path)


def test_print_report(model_df):
    report = run_validation(model_data=model_df)
    stream = io.StringIO()

    print_report(report, stream)

    output = stream.getvalue()
    assert "--- MODEL_DATA ---" in output
    assert output.rstrip().endswith("=" * 80)
    assert "ALL CHECKS PASSED" in output
