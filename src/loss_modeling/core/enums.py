"""Core enumerations used across the package."""

from __future__ import annotations

from enum import Enum


class ValidationTarget(str, Enum):
    """Pipeline artifacts that can be validated.

    Values double as the check names used in validation reports.
    """

    RAW_DATA = "raw_data"
    MODEL_DATA = "model_data"
    TWEEDIE_MODEL = "tweedie_model"
    EVT_MODELS = "evt_models"
    PREDICTIONS = "predictions"


class Severity(str, Enum):
    """Whether a finding invalidates a result or only asks for review."""

    ERROR = "error"
    WARNING = "warning"


class DiagnosticKind(str, Enum):
    """Category of a validation finding.

    Tests and callers should branch on the kind rather than on message text.
    """

    SCHEMA_ERROR = "schema_error"
    RANGE_VIOLATION = "range_violation"
    CONVERGENCE_ERROR = "convergence_error"
    PARAMETER_BOUNDS_ERROR = "parameter_bounds_error"
    DEGENERATE_FIT = "degenerate_fit"
    LENGTH_MISMATCH = "length_mismatch"
    MISSING_VALUE = "missing_value"
    TOLERANCE_EXCEEDED = "tolerance_exceeded"
    SYSTEMATIC_BIAS = "systematic_bias"


__all__ = ["ValidationTarget", "Severity", "DiagnosticKind"]
