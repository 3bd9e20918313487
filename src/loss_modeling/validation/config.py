"""Validation configuration constants.

This module centralizes all validation thresholds and severity rules.
Adjust these constants to tune validation behavior based on real data patterns,
or override the thresholds per run from a YAML file (see ``load_thresholds``).

Severity Levels:
    - "error": Critical issues that invalidate the result (data corruption,
      failed fits, parameters outside their domain)
    - "warning": Issues that warrant review but do not stop the pipeline
"""

from __future__ import annotations

from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union

import yaml

from loss_modeling.core.enums import Severity
from loss_modeling.core.utils import get_report_paths

# ============================================================================
# THRESHOLD CONSTANTS
# ============================================================================

# Loss ratios above this multiple of premium are flagged as extreme
MAX_LOSS_RATIO = 10.0

# Coefficients with p-values above this are reported as insignificant
COEF_PVALUE_THRESHOLD = 0.05

# Tweedie power parameter must lie strictly inside this interval
TWEEDIE_POWER_BOUNDS = (1.0, 2.0)

# Mean deviance residual beyond this magnitude suggests a biased fit
MAX_ABS_RESID_MEAN = 0.1

# GEV shape beyond this magnitude is an extreme tail
MAX_ABS_GEV_SHAPE = 1.0

# Default acceptable mean absolute percentage error (in %)
DEFAULT_TOLERANCE_PCT = 20.0

# Mean signed percentage error beyond this (in %) is systematic bias
MAX_ABS_BIAS_PCT = 5.0

DEFAULT_REPORT_PATH = get_report_paths()[0]


# ============================================================================
# SEVERITY RULES
# ============================================================================
# Format: {check_id: severity}. The validators route each finding into the
# errors or warnings list of their result through get_severity().

RAW_DATA_SEVERITY = {
    "raw_required_columns": "error",
    "raw_missing_values": "warning",
    "raw_negative_values": "error",
}

MODEL_DATA_SEVERITY = {
    "model_required_columns": "error",
    "model_nonpositive_loss": "warning",
    "model_nonpositive_premium": "error",
    "model_extreme_loss_ratio": "warning",
}

TWEEDIE_SEVERITY = {
    "tweedie_convergence": "error",
    "tweedie_power_bounds": "error",
    "tweedie_insignificant_coefficients": "warning",
    "tweedie_nonpositive_fitted": "error",
    "tweedie_residual_mean": "warning",
}

EVT_SEVERITY = {
    "gev_scale": "error",
    "gev_shape": "warning",
    "gpd_scale": "error",
}

PREDICTION_SEVERITY = {
    "prediction_length": "error",
    "prediction_missing": "error",
    "prediction_tolerance": "warning",
    "prediction_bias": "warning",
}


# ============================================================================
# SEVERITY MAP (for get_severity helper)
# ============================================================================

_SEVERITY_MAP: Dict[str, str] = {
    **RAW_DATA_SEVERITY,
    **MODEL_DATA_SEVERITY,
    **TWEEDIE_SEVERITY,
    **EVT_SEVERITY,
    **PREDICTION_SEVERITY,
}


# ============================================================================
# RUNTIME THRESHOLDS
# ============================================================================


@dataclass(frozen=True)
class ValidationThresholds:
    """Numeric thresholds applied by the validators.

    Defaults mirror the module constants. Instances are immutable; use
    ``load_thresholds`` or ``dataclasses.replace`` to derive variants.
    """

    max_loss_ratio: float = MAX_LOSS_RATIO
    coef_pvalue: float = COEF_PVALUE_THRESHOLD
    max_abs_resid_mean: float = MAX_ABS_RESID_MEAN
    max_abs_gev_shape: float = MAX_ABS_GEV_SHAPE
    tolerance_pct: float = DEFAULT_TOLERANCE_PCT
    max_abs_bias_pct: float = MAX_ABS_BIAS_PCT


DEFAULT_THRESHOLDS = ValidationThresholds()


# ============================================================================
# HELPER FUNCTIONS
# ============================================================================


def get_severity(check_id: str) -> Severity:
    """Get severity level for a specific check.

    Args:
        check_id: Validation check identifier (e.g., "model_nonpositive_premium").

    Returns:
        Severity.ERROR or Severity.WARNING.

    Raises:
        ValueError: If check_id is unknown.

    Examples:
        >>> get_severity("model_nonpositive_premium")
        <Severity.ERROR: 'error'>
        >>> get_severity("model_nonpositive_loss")
        <Severity.WARNING: 'warning'>
    """
    if check_id not in _SEVERITY_MAP:
        raise ValueError(f"Unknown check_id: {check_id}")
    return Severity(_SEVERITY_MAP[check_id])


def thresholds_from_mapping(
    data: Mapping[str, Any], base: Optional[ValidationThresholds] = None
) -> ValidationThresholds:
    """Build thresholds from a mapping, starting from ``base`` (or the defaults).

    Raises:
        ValueError: If the mapping has unknown keys or non-numeric values.
    """
    base = base or DEFAULT_THRESHOLDS
    known = {f.name for f in fields(ValidationThresholds)}
    unknown = sorted(set(data) - known)
    if unknown:
        raise ValueError(
            f"Unknown threshold(s): {', '.join(unknown)}. Valid keys: {', '.join(sorted(known))}"
        )

    overrides: Dict[str, float] = {}
    for key, value in data.items():
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise ValueError(f"Threshold '{key}' must be numeric, got {value!r}")
        overrides[key] = float(value)
    return replace(base, **overrides)


def load_thresholds(path: Union[str, Path]) -> ValidationThresholds:
    """Load threshold overrides from a YAML file.

    The file holds a flat mapping, optionally nested under a ``thresholds`` key::

        thresholds:
          max_loss_ratio: 8
          tolerance_pct: 15

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If the YAML cannot be parsed or holds invalid keys/values.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Thresholds file not found: {path}")

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ValueError(f"Failed to parse thresholds file {path}: {e}") from e

    if not isinstance(data, dict):
        raise ValueError(f"Thresholds file {path} must contain a mapping")
    if "thresholds" in data:
        data = data["thresholds"] or {}
        if not isinstance(data, dict):
            raise ValueError(f"'thresholds' in {path} must be a mapping")
    return thresholds_from_mapping(data)
