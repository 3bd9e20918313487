"""Prediction accuracy validation check.

Compares forecast aggregate losses with the realized values in percentage
terms. Pairs with a missing actual or predicted value are left out of the
statistics, but missing predictions are still reported as errors.

Precondition: actual values must be non-zero. A zero actual makes the
percentage error undefined; it is not guarded here and propagates as
inf/NaN into the metrics.
"""

from __future__ import annotations

from typing import Optional, Sequence

import numpy as np

from loss_modeling.core.enums import DiagnosticKind, ValidationTarget
from ..config import DEFAULT_THRESHOLDS, ValidationThresholds
from ..models import PredictionMetrics, PredictionResult
from ._common import DiagnosticCollector, nan_stat, to_float_array


class PredictionValidator:
    """Validate predictions against actual values."""

    target = ValidationTarget.PREDICTIONS

    def __init__(self, thresholds: ValidationThresholds = DEFAULT_THRESHOLDS) -> None:
        self.thresholds = thresholds

    def validate(
        self,
        actual: Sequence[float],
        predicted: Sequence[float],
        tolerance_pct: Optional[float] = None,
    ) -> PredictionResult:
        """Compute percentage-error metrics and flag tolerance and bias violations.

        Args:
            actual: Realized values.
            predicted: Predicted values, aligned with ``actual`` by position.
            tolerance_pct: Acceptable mean absolute percentage error. Defaults
                to the configured tolerance (20%).

        Returns:
            PredictionResult; ``metrics`` is None if the lengths differ.
        """
        if tolerance_pct is None:
            tolerance_pct = self.thresholds.tolerance_pct

        collector = DiagnosticCollector()

        actual_arr = to_float_array(actual)
        predicted_arr = to_float_array(predicted)

        if actual_arr.size != predicted_arr.size:
            collector.add(
                "prediction_length",
                DiagnosticKind.LENGTH_MISMATCH,
                "Actual and predicted have different lengths",
            )
            return PredictionResult(**collector.as_fields(), metrics=None)

        n_na = int(np.isnan(predicted_arr).sum())
        if n_na > 0:
            collector.add(
                "prediction_missing",
                DiagnosticKind.MISSING_VALUE,
                f"{n_na} NA predictions",
                value=n_na,
            )

        present = ~(np.isnan(actual_arr) | np.isnan(predicted_arr))
        act = actual_arr[present]
        diff = predicted_arr[present] - act
        with np.errstate(divide="ignore", invalid="ignore"):
            pct_errors = np.abs(diff / act) * 100
            signed_pct = diff / act * 100

        metrics = PredictionMetrics(
            mae_pct=nan_stat(np.mean, pct_errors),
            median_ae_pct=nan_stat(np.median, pct_errors),
            max_ae_pct=nan_stat(np.max, pct_errors),
            n_exceed_tolerance=int(np.sum(pct_errors > tolerance_pct)),
            bias=nan_stat(np.mean, diff),
            bias_pct=nan_stat(np.mean, signed_pct),
        )

        if metrics.mae_pct > tolerance_pct:
            collector.add(
                "prediction_tolerance",
                DiagnosticKind.TOLERANCE_EXCEEDED,
                f"Mean absolute error exceeds tolerance: {round(metrics.mae_pct, 2)} %",
                value=metrics.mae_pct,
            )

        if abs(metrics.bias_pct) > self.thresholds.max_abs_bias_pct:
            collector.add(
                "prediction_bias",
                DiagnosticKind.SYSTEMATIC_BIAS,
                f"Systematic bias detected: {round(metrics.bias_pct, 2)} %",
                value=metrics.bias_pct,
            )

        return PredictionResult(**collector.as_fields(), metrics=metrics)
