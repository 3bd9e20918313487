"""Extreme-value fit validation check.

Two tail models are fitted independently: a GEV to annual block maxima and a
GPD to exceedances over a high threshold. A non-positive scale makes either
distribution undefined. A GEV shape beyond +/-1 is legal but implies an
implausible tail, so it is only flagged. A negative GPD shape bounds the
tail; the implied maximum loss is recorded for review.
"""

from __future__ import annotations

from loss_modeling.core.enums import DiagnosticKind, ValidationTarget
from ..config import DEFAULT_THRESHOLDS, ValidationThresholds
from ..fits import EVTFit
from ..models import EVTChecks, EVTResult
from ._common import DiagnosticCollector


class EVTModelValidator:
    """Validate GEV (block maxima) and GPD (threshold exceedance) parameter estimates."""

    target = ValidationTarget.EVT_MODELS

    def __init__(self, thresholds: ValidationThresholds = DEFAULT_THRESHOLDS) -> None:
        self.thresholds = thresholds

    def validate(self, gev_fit: EVTFit, gpd_fit: EVTFit) -> EVTResult:
        collector = DiagnosticCollector()

        if gev_fit.scale <= 0:
            collector.add(
                "gev_scale",
                DiagnosticKind.PARAMETER_BOUNDS_ERROR,
                "GEV scale parameter must be positive",
                value=gev_fit.scale,
            )

        if abs(gev_fit.shape) > self.thresholds.max_abs_gev_shape:
            collector.add(
                "gev_shape",
                DiagnosticKind.DEGENERATE_FIT,
                f"GEV shape parameter is extreme: {round(gev_fit.shape, 3)}",
                value=gev_fit.shape,
            )

        if gpd_fit.scale <= 0:
            collector.add(
                "gpd_scale",
                DiagnosticKind.PARAMETER_BOUNDS_ERROR,
                "GPD scale parameter must be positive",
                value=gpd_fit.scale,
            )

        upper_bound = None
        if gpd_fit.shape < 0:
            upper_bound = -gpd_fit.scale / gpd_fit.shape

        checks = EVTChecks(
            gev_shape=float(gev_fit.shape),
            gpd_shape=float(gpd_fit.shape),
            gev_scale=float(gev_fit.scale),
            gpd_scale=float(gpd_fit.scale),
            gpd_upper_bound=upper_bound,
        )
        return EVTResult(**collector.as_fields(), checks=checks)
