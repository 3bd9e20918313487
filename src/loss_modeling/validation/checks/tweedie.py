"""Tweedie GLM validation check.

Compound Poisson-Gamma losses are modeled with a Tweedie GLM whose power
parameter must lie strictly between 1 (Poisson) and 2 (Gamma). The check
reads the fitted model through the ``TweedieModel`` interface and reports
convergence, parameter bounds, coefficient significance and residual bias.
"""

from __future__ import annotations

import numpy as np
import pandas as pd

from loss_modeling.core.enums import DiagnosticKind, ValidationTarget
from ..config import DEFAULT_THRESHOLDS, TWEEDIE_POWER_BOUNDS, ValidationThresholds
from ..fits import TweedieModel
from ..models import TweedieDiagnostics, TweedieResult
from ._common import DiagnosticCollector, nan_stat, to_float_array


class TweedieModelValidator:
    """Validate a fitted Tweedie GLM and its power parameter."""

    target = ValidationTarget.TWEEDIE_MODEL

    def __init__(self, thresholds: ValidationThresholds = DEFAULT_THRESHOLDS) -> None:
        self.thresholds = thresholds

    def validate(self, model: TweedieModel, power: float) -> TweedieResult:
        """Check convergence, power bounds, significance, fitted values and residuals.

        Args:
            model: Fitted GLM (statsmodels ``GLMResults`` or ``TweedieFitSummary``).
            power: Tweedie variance power used for the fit.

        Returns:
            TweedieResult with diagnostics always populated.
        """
        collector = DiagnosticCollector()

        if not bool(model.converged):
            collector.add(
                "tweedie_convergence",
                DiagnosticKind.CONVERGENCE_ERROR,
                "Model did not converge",
            )

        lower, upper = TWEEDIE_POWER_BOUNDS
        if not lower < power < upper:
            collector.add(
                "tweedie_power_bounds",
                DiagnosticKind.PARAMETER_BOUNDS_ERROR,
                f"Power parameter out of bounds ({lower:g}, {upper:g}): {power}",
                value=power,
            )

        pvalues = pd.Series(model.pvalues, dtype=float)
        above = (pvalues > self.thresholds.coef_pvalue).to_numpy()
        insignificant = [str(name) for name in pvalues.index[above]]
        if insignificant:
            collector.add(
                "tweedie_insignificant_coefficients",
                DiagnosticKind.DEGENERATE_FIT,
                f"Insignificant coefficients: {', '.join(insignificant)}",
                value=len(insignificant),
            )

        fitted = to_float_array(model.fittedvalues)
        n_nonpositive = int(np.sum(fitted <= 0))
        if n_nonpositive > 0:
            collector.add(
                "tweedie_nonpositive_fitted",
                DiagnosticKind.RANGE_VIOLATION,
                "Model produces non-positive fitted values",
                value=n_nonpositive,
            )

        deviance = float(model.deviance)
        null_deviance = float(model.null_deviance)
        resids = to_float_array(model.resid_deviance)
        resid_mean = nan_stat(np.mean, resids)
        resid_sd = float(np.std(resids, ddof=1)) if resids.size > 1 else float("nan")

        diagnostics = TweedieDiagnostics(
            deviance=deviance,
            null_deviance=null_deviance,
            pseudo_r2=1 - deviance / null_deviance if null_deviance else float("nan"),
            aic=float(model.aic),
            n_coef=len(model.params),
            resid_mean=resid_mean,
            resid_sd=resid_sd,
        )

        if abs(resid_mean) > self.thresholds.max_abs_resid_mean:
            collector.add(
                "tweedie_residual_mean",
                DiagnosticKind.DEGENERATE_FIT,
                f"Large mean residual: {round(resid_mean, 3)}",
                value=resid_mean,
            )

        return TweedieResult(**collector.as_fields(), diagnostics=diagnostics)
