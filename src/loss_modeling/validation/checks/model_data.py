"""Modeling table validation check.

The modeling table holds one row per company and accident year with the
aggregated Loss and Premium. Premium is the exposure base of every model, so
non-positive premiums are errors. Zero losses are legitimate (no claims) but
break log-scale severity models, so they are only flagged for review.
"""

from __future__ import annotations

import numpy as np
import pandas as pd

from loss_modeling.core.enums import DiagnosticKind, ValidationTarget
from loss_modeling.core.schemas import (
    LOSS_FIELD,
    PREMIUM_FIELD,
    find_missing_fields,
    get_required_fields,
)
from ..config import DEFAULT_THRESHOLDS, ValidationThresholds
from ..models import ModelDataChecks, ModelDataResult
from ._common import DiagnosticCollector, nan_stat


class ModelDataValidator:
    """Validate the per company-year Loss/Premium table."""

    target = ValidationTarget.MODEL_DATA

    def __init__(self, thresholds: ValidationThresholds = DEFAULT_THRESHOLDS) -> None:
        self.thresholds = thresholds

    def validate(self, df: pd.DataFrame) -> ModelDataResult:
        """Check positivity of Loss and Premium and the loss ratio distribution.

        Returns immediately, without checks, if a required column is missing.
        """
        collector = DiagnosticCollector()

        missing = find_missing_fields(df.columns, get_required_fields(self.target))
        if missing:
            collector.add(
                "model_required_columns",
                DiagnosticKind.SCHEMA_ERROR,
                f"Missing columns: {', '.join(missing)}",
                value=len(missing),
            )
            return ModelDataResult(**collector.as_fields(), checks=None)

        loss = pd.to_numeric(df[LOSS_FIELD], errors="coerce").to_numpy(dtype=float, na_value=np.nan)
        premium = pd.to_numeric(df[PREMIUM_FIELD], errors="coerce").to_numpy(
            dtype=float, na_value=np.nan
        )

        n_loss = int(np.sum(loss <= 0))
        if n_loss > 0:
            collector.add(
                "model_nonpositive_loss",
                DiagnosticKind.RANGE_VIOLATION,
                f"{n_loss} zero or negative Loss values",
                value=n_loss,
            )

        n_premium = int(np.sum(premium <= 0))
        if n_premium > 0:
            collector.add(
                "model_nonpositive_premium",
                DiagnosticKind.RANGE_VIOLATION,
                f"{n_premium} zero or negative Premium values",
                value=n_premium,
            )

        with np.errstate(divide="ignore", invalid="ignore"):
            loss_ratio = loss / premium

        max_ratio = self.thresholds.max_loss_ratio
        n_extreme = int(np.sum(loss_ratio > max_ratio))
        if n_extreme > 0:
            collector.add(
                "model_extreme_loss_ratio",
                DiagnosticKind.RANGE_VIOLATION,
                f"{n_extreme} observations with loss ratio > {max_ratio:g}",
                value=n_extreme,
            )

        # Missing ratios are dropped; a zero premium gives an infinite ratio that is kept
        observed_ratio = loss_ratio[~np.isnan(loss_ratio)]
        observed_loss = loss[~np.isnan(loss)]
        loss_mean = nan_stat(np.mean, observed_loss)
        loss_sd = float(np.std(observed_loss, ddof=1)) if observed_loss.size > 1 else float("nan")

        checks = ModelDataChecks(
            n_obs=len(df),
            complete_cases=int(df.notna().all(axis=1).sum()),
            loss_ratio_mean=nan_stat(np.mean, observed_ratio),
            loss_ratio_median=nan_stat(np.median, observed_ratio),
            loss_cv=loss_sd / loss_mean if loss_mean else float("nan"),
        )
        return ModelDataResult(**collector.as_fields(), checks=checks)
