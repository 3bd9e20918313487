"""Validation system for Loss Modeling Tools.

This module provides the validation framework for the loss modeling pipeline:

- **Models**: Diagnostic, ValidationResult and its variants, ValidationReport
- **Checks**: One validator per pipeline artifact (see validation/checks/)
- **Fits**: Interfaces for fitted Tweedie and EVT models (see validation/fits.py)
- **Config**: Thresholds and severity rules (import from .config)
- **Report**: ReportGenerator - text/JSON rendering and persistence
- **Registry**: run_validation(), print_report() - orchestration

Public API:
    ValidationResult: Common result interface (valid, errors, warnings, details)
    ValidationReport: Ordered results of one pipeline run
    ReportGenerator: Formats results as a text report
    run_validation: Validate the supplied pipeline artifacts
    print_report: Display validation results to console
    save_report: Persist report lines to a text file

Usage:
    >>> from loss_modeling.validation import run_validation, ReportGenerator, save_report
    >>> report = run_validation(model_data=df, actual=actual, predicted=predicted)
    >>> lines = ReportGenerator().generate(report)
    >>> save_report(lines, "results/validation_report.txt")
"""

from __future__ import annotations

from loss_modeling.core.enums import DiagnosticKind, ValidationTarget

from .checks import (
    EVTModelValidator,
    ModelDataValidator,
    PredictionValidator,
    RawDataValidator,
    TweedieModelValidator,
)
from .fits import EVTFit, TweedieFitSummary, TweedieModel
from .models import (
    Diagnostic,
    EVTResult,
    ModelDataResult,
    PredictionResult,
    RawDataResult,
    TweedieResult,
    ValidationReport,
    ValidationResult,
)
from .registry import print_report, run_validation
from .report import ReportGenerator, save_report

__all__ = [
    # Data models
    "Diagnostic",
    "ValidationResult",
    "RawDataResult",
    "ModelDataResult",
    "TweedieResult",
    "EVTResult",
    "PredictionResult",
    "ValidationReport",
    # Model inputs
    "TweedieModel",
    "TweedieFitSummary",
    "EVTFit",
    # Validators
    "RawDataValidator",
    "ModelDataValidator",
    "TweedieModelValidator",
    "EVTModelValidator",
    "PredictionValidator",
    # Reporting and runner functions
    "ReportGenerator",
    "save_report",
    "run_validation",
    "print_report",
    # Enums
    "DiagnosticKind",
    "ValidationTarget",
]
