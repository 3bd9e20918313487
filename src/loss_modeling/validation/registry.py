"""Validation runner and artifact loaders.

This module orchestrates the validators over one pipeline run:
- run_validation(): Validates whichever artifacts are supplied, in pipeline order
- load_table(), load_predictions(), load_evt_fits(), load_tweedie_fit(): read
  artifacts written by the upstream pipeline stages
- print_report(): Displays validation results to console
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, Optional, Sequence, TextIO, Tuple, Union

import pandas as pd
import yaml

from loss_modeling.core.enums import ValidationTarget
from .checks import (
    EVTModelValidator,
    ModelDataValidator,
    PredictionValidator,
    RawDataValidator,
    TweedieModelValidator,
)
from .config import DEFAULT_THRESHOLDS, ValidationThresholds
from .fits import EVTFit, TweedieFitSummary, TweedieModel
from .models import ValidationReport
from .report import ReportGenerator
from .report import print_report as print_lines

PathLike = Union[str, Path]


def run_validation(
    raw_data: Optional[pd.DataFrame] = None,
    model_data: Optional[pd.DataFrame] = None,
    tweedie_model: Optional[TweedieModel] = None,
    power: Optional[float] = None,
    gev_fit: Optional[EVTFit] = None,
    gpd_fit: Optional[EVTFit] = None,
    actual: Optional[Sequence[float]] = None,
    predicted: Optional[Sequence[float]] = None,
    tolerance_pct: Optional[float] = None,
    thresholds: Optional[ValidationThresholds] = None,
) -> ValidationReport:
    """Run the validators for every supplied artifact.

    Results are named after ``ValidationTarget`` values and ordered as the
    pipeline produces the artifacts: raw data, modeling table, Tweedie model,
    EVT fits, predictions. Artifacts left as None are skipped.

    Args:
        raw_data: Raw CAS Schedule P records.
        model_data: Per company-year modeling table.
        tweedie_model: Fitted Tweedie GLM; requires ``power``.
        power: Tweedie power parameter.
        gev_fit: GEV fit to block maxima; requires ``gpd_fit``.
        gpd_fit: GPD fit to threshold exceedances; requires ``gev_fit``.
        actual: Realized values; requires ``predicted``.
        predicted: Predicted values; requires ``actual``.
        tolerance_pct: Prediction tolerance; defaults to the thresholds' value.
        thresholds: Threshold overrides (see ``config.load_thresholds``).

    Returns:
        ValidationReport with one result per validated artifact.

    Raises:
        ValueError: If an artifact is supplied without its companion input.

    Examples:
        >>> report = run_validation(model_data=df, actual=[100, 200], predicted=[110, 190])
        >>> list(report)
        ['model_data', 'predictions']
    """
    thresholds = thresholds or DEFAULT_THRESHOLDS

    if tweedie_model is not None and power is None:
        raise ValueError("A Tweedie model requires its power parameter")
    if (gev_fit is None) != (gpd_fit is None):
        raise ValueError("EVT validation requires both a GEV and a GPD fit")
    if (actual is None) != (predicted is None):
        raise ValueError("Prediction validation requires both actual and predicted values")

    report = ValidationReport()

    if raw_data is not None:
        report.add(ValidationTarget.RAW_DATA.value, RawDataValidator().validate(raw_data))

    if model_data is not None:
        report.add(
            ValidationTarget.MODEL_DATA.value,
            ModelDataValidator(thresholds).validate(model_data),
        )

    if tweedie_model is not None:
        report.add(
            ValidationTarget.TWEEDIE_MODEL.value,
            TweedieModelValidator(thresholds).validate(tweedie_model, power),
        )

    if gev_fit is not None:
        report.add(
            ValidationTarget.EVT_MODELS.value,
            EVTModelValidator(thresholds).validate(gev_fit, gpd_fit),
        )

    if actual is not None:
        report.add(
            ValidationTarget.PREDICTIONS.value,
            PredictionValidator(thresholds).validate(actual, predicted, tolerance_pct),
        )

    for name, result in report.items():
        logging.debug(
            "%s: %s (%d errors, %d warnings)",
            name,
            "valid" if result.valid else "invalid",
            len(result.errors),
            len(result.warnings),
        )
    return report


# ============================================================================
# LOADERS
# ============================================================================


def load_table(path: PathLike) -> pd.DataFrame:
    """Load a CSV table written by an upstream pipeline stage.

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If the CSV cannot be parsed.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"CSV file not found: {path}")
    try:
        return pd.read_csv(path, encoding="utf-8-sig")
    except (OSError, pd.errors.ParserError, pd.errors.EmptyDataError) as e:
        raise ValueError(f"Failed to read CSV file {path}: {e}") from e


def load_predictions(
    path: PathLike, actual_col: str = "actual", predicted_col: str = "predicted"
) -> Tuple[pd.Series, pd.Series]:
    """Load aligned actual and predicted columns from a CSV file.

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If the CSV cannot be parsed or a column is absent.
    """
    df = load_table(path)
    missing = [c for c in (actual_col, predicted_col) if c not in df.columns]
    if missing:
        raise ValueError(f"Predictions file {path} is missing columns: {', '.join(missing)}")
    return df[actual_col], df[predicted_col]


def _load_yaml_mapping(path: PathLike, what: str) -> Dict[str, Any]:
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"{what} file not found: {path}")
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        raise ValueError(f"Failed to read {what} file {path}: {e}") from e
    if not isinstance(data, dict):
        raise ValueError(f"{what} file {path} must contain a mapping")
    return data


def load_evt_fits(path: PathLike) -> Tuple[EVTFit, EVTFit]:
    """Load GEV and GPD estimates from a YAML file.

    Expected layout::

        gev: {location: 1.2e6, scale: 5.0e5, shape: -0.33}
        gpd: {scale: 3.0e5, shape: 0.82}

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If the file is malformed or a family is missing.
    """
    data = _load_yaml_mapping(path, "EVT fit")
    fits = []
    for family in ("gev", "gpd"):
        estimate = data.get(family)
        if not isinstance(estimate, dict):
            raise ValueError(f"EVT fit file {path} has no '{family}' estimate mapping")
        fits.append(EVTFit.from_estimate(estimate))
    return fits[0], fits[1]


def load_tweedie_fit(path: PathLike) -> TweedieFitSummary:
    """Load a Tweedie fit summary (see ``TweedieFitSummary.from_mapping``) from YAML.

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If the file is malformed or incomplete.
    """
    return TweedieFitSummary.from_mapping(_load_yaml_mapping(path, "Tweedie fit"))


def print_report(report: ValidationReport, stream: Optional[TextIO] = None) -> None:
    """Print validation report to console.

    Logs a summary, then writes the full text report.

    Args:
        report: ValidationReport to display.
        stream: Target stream (stdout by default).
    """
    for line in report.summary().splitlines():
        logging.info(line)
    print_lines(ReportGenerator().generate(report), stream)
