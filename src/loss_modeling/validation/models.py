"""Validation data models.

This module defines core data structures for validation results:
- Diagnostic: One finding (error or warning) raised by a validator
- ValidationResult: Common interface shared by every validator's result
- RawDataResult, ModelDataResult, TweedieResult, EVTResult, PredictionResult:
  per-validator variants, each carrying a fixed payload
- ValidationReport: Ordered collection of named results from one pipeline run
"""

from __future__ import annotations

import math
from dataclasses import asdict, dataclass, field
from typing import Any, ClassVar, Dict, Iterator, List, Optional, Tuple

from loss_modeling.core.enums import DiagnosticKind

Range = Tuple[Optional[float], Optional[float]]


@dataclass(frozen=True)
class Diagnostic:
    """A single validation finding.

    Attributes:
        check_id: Identifier of the check that produced it (e.g., "gpd_scale").
        kind: Category of the finding, stable across message wording changes.
        message: Human-readable description used in reports.
        value: Optional numeric payload (offending count, parameter, metric).

    Examples:
        >>> Diagnostic(
        ...     check_id="model_nonpositive_premium",
        ...     kind=DiagnosticKind.RANGE_VIOLATION,
        ...     message="3 zero or negative Premium values",
        ...     value=3,
        ... )
    """

    check_id: str
    kind: DiagnosticKind
    message: str
    value: Optional[float] = None

    def __str__(self) -> str:
        return self.message

    def to_dict(self) -> Dict[str, Any]:
        return {
            "check_id": self.check_id,
            "kind": self.kind.value,
            "message": self.message,
            "value": _json_number(self.value),
        }


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of one validator call.

    A result is valid exactly when it carries no errors; warnings never
    affect validity. Subclasses add one payload field and name it through
    ``payload_field`` / ``payload_label`` so reports can render it without
    knowing the concrete type.

    Attributes:
        errors: Fatal findings, in the order they were detected.
        warnings: Non-fatal findings, in the order they were detected.
    """

    payload_field: ClassVar[str] = ""
    payload_label: ClassVar[str] = ""

    errors: Tuple[Diagnostic, ...] = ()
    warnings: Tuple[Diagnostic, ...] = ()

    @property
    def valid(self) -> bool:
        return not self.errors

    @property
    def payload(self) -> Optional[Any]:
        if not self.payload_field:
            return None
        return getattr(self, self.payload_field)

    @property
    def details(self) -> Dict[str, Any]:
        """Payload flattened to an ordered ``name -> value`` mapping (empty if absent)."""
        payload = self.payload
        if payload is None:
            return {}
        return asdict(payload)

    def has_kind(self, kind: DiagnosticKind) -> bool:
        """True if any error or warning is of the given kind."""
        return any(d.kind == kind for d in self.errors + self.warnings)

    def error_kinds(self) -> List[DiagnosticKind]:
        return [d.kind for d in self.errors]

    def warning_kinds(self) -> List[DiagnosticKind]:
        return [d.kind for d in self.warnings]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": type(self).__name__,
            "valid": self.valid,
            "errors": [d.to_dict() for d in self.errors],
            "warnings": [d.to_dict() for d in self.warnings],
            "details": {k: _json_value(v) for k, v in self.details.items()},
        }


# ============================================================================
# PAYLOADS
# ============================================================================


@dataclass(frozen=True)
class RawDataInfo:
    """Descriptive statistics of the raw CAS table (ranges ignore missing values)."""

    n_rows: int
    n_companies: int
    year_range: Range
    loss_range: Range
    premium_range: Range


@dataclass(frozen=True)
class ModelDataChecks:
    """Summary statistics of the per company-year modeling table.

    Loss ratio statistics skip missing ratios but keep infinite ones, so a
    positive loss on a zero premium makes ``loss_ratio_mean`` infinite.
    """

    n_obs: int
    complete_cases: int
    loss_ratio_mean: float
    loss_ratio_median: float
    loss_cv: float


@dataclass(frozen=True)
class TweedieDiagnostics:
    """Goodness-of-fit diagnostics of a Tweedie GLM."""

    deviance: float
    null_deviance: float
    pseudo_r2: float
    aic: float
    n_coef: int
    resid_mean: float
    resid_sd: float


@dataclass(frozen=True)
class EVTChecks:
    """Parameter estimates of the GEV and GPD fits.

    ``gpd_upper_bound`` is only set for a bounded (negative shape) GPD tail.
    """

    gev_shape: float
    gpd_shape: float
    gev_scale: float
    gpd_scale: float
    gpd_upper_bound: Optional[float] = None


@dataclass(frozen=True)
class PredictionMetrics:
    """Percentage-error metrics of predictions against actual values."""

    mae_pct: float
    median_ae_pct: float
    max_ae_pct: float
    n_exceed_tolerance: int
    bias: float
    bias_pct: float


# ============================================================================
# RESULT VARIANTS
# ============================================================================


@dataclass(frozen=True)
class RawDataResult(ValidationResult):
    payload_field: ClassVar[str] = "info"
    payload_label: ClassVar[str] = "Info"

    info: Optional[RawDataInfo] = None


@dataclass(frozen=True)
class ModelDataResult(ValidationResult):
    """Modeling table result; ``checks`` is None when required columns are missing."""

    payload_field: ClassVar[str] = "checks"
    payload_label: ClassVar[str] = "Checks"

    checks: Optional[ModelDataChecks] = None


@dataclass(frozen=True)
class TweedieResult(ValidationResult):
    payload_field: ClassVar[str] = "diagnostics"
    payload_label: ClassVar[str] = "Diagnostics"

    diagnostics: Optional[TweedieDiagnostics] = None


@dataclass(frozen=True)
class EVTResult(ValidationResult):
    payload_field: ClassVar[str] = "checks"
    payload_label: ClassVar[str] = "Checks"

    checks: Optional[EVTChecks] = None

    @property
    def details(self) -> Dict[str, Any]:
        """Check values; ``gpd_upper_bound`` appears only for a bounded GPD tail."""
        details = super().details
        if details and details["gpd_upper_bound"] is None:
            del details["gpd_upper_bound"]
        return details

    def family_valid(self, family: str) -> bool:
        """Validity of a single distribution family ("gev" or "gpd").

        Examples:
            >>> result.family_valid("gev")
            True
        """
        family = family.lower()
        if family not in ("gev", "gpd"):
            raise ValueError(f"Unknown EVT family: {family}. Must be 'gev' or 'gpd'.")
        return not any(d.check_id.startswith(f"{family}_") for d in self.errors)


@dataclass(frozen=True)
class PredictionResult(ValidationResult):
    """Prediction result; ``metrics`` is None when the sequences differ in length."""

    payload_field: ClassVar[str] = "metrics"
    payload_label: ClassVar[str] = "Metrics"

    metrics: Optional[PredictionMetrics] = None


# ============================================================================
# REPORT
# ============================================================================


@dataclass
class ValidationReport:
    """Named validation results collected during one pipeline run.

    Insertion order is preserved and is the order used in rendered reports.

    Examples:
        >>> report = ValidationReport()
        >>> report.add("raw_data", raw_result)
        >>> report.add("predictions", prediction_result)
        >>> report.all_valid
        False
        >>> report.get_failed_checks()
        ['predictions']
    """

    results: Dict[str, ValidationResult] = field(default_factory=dict)

    def add(self, name: str, result: ValidationResult) -> None:
        if name in self.results:
            raise ValueError(f"Duplicate check name: {name}")
        self.results[name] = result

    def __getitem__(self, name: str) -> ValidationResult:
        return self.results[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self.results)

    def __len__(self) -> int:
        return len(self.results)

    def __contains__(self, name: object) -> bool:
        return name in self.results

    def items(self):
        return self.results.items()

    @property
    def all_valid(self) -> bool:
        return all(r.valid for r in self.results.values())

    def has_errors(self, strict: bool = False) -> bool:
        """Check if validation failed.

        Args:
            strict: If True, treat warnings as errors. Default False.
        """
        if not self.all_valid:
            return True
        return strict and self.get_warning_count() > 0

    def get_error_count(self) -> int:
        return sum(len(r.errors) for r in self.results.values())

    def get_warning_count(self) -> int:
        return sum(len(r.warnings) for r in self.results.values())

    def get_failed_checks(self) -> List[str]:
        """Names of the checks whose result is not valid, in insertion order."""
        return [name for name, r in self.results.items() if not r.valid]

    def summary(self) -> str:
        """Generate a concise text summary of validation results.

        Examples:
            >>> print(report.summary())
            Validation Summary:
              Checks: 5 executed (4 passed, 1 failed)
              Issues: 2 errors, 3 warnings
        """
        total = len(self.results)
        failed = len(self.get_failed_checks())
        return (
            f"Validation Summary:\n"
            f"  Checks: {total} executed ({total - failed} passed, {failed} failed)\n"
            f"  Issues: {self.get_error_count()} errors, {self.get_warning_count()} warnings"
        )


def _json_number(value: Any) -> Any:
    if value is None:
        return None
    value = float(value)
    if math.isnan(value) or math.isinf(value):
        return None
    return int(value) if value.is_integer() and abs(value) < 2**53 else value


def _json_value(value: Any) -> Any:
    if isinstance(value, (tuple, list)):
        return [_json_number(v) for v in value]
    return _json_number(value)
