"""Shared helpers for the validators."""

from __future__ import annotations

from typing import Dict, Iterable, List, Optional, Tuple

import numpy as np
import pandas as pd

from loss_modeling.core.enums import DiagnosticKind, Severity
from ..config import get_severity
from ..models import Diagnostic, Range


class DiagnosticCollector:
    """Accumulates findings in detection order, split by configured severity."""

    def __init__(self) -> None:
        self.errors: List[Diagnostic] = []
        self.warnings: List[Diagnostic] = []

    def add(
        self,
        check_id: str,
        kind: DiagnosticKind,
        message: str,
        value: Optional[float] = None,
    ) -> Diagnostic:
        diagnostic = Diagnostic(check_id=check_id, kind=kind, message=message, value=value)
        if get_severity(check_id) == Severity.ERROR:
            self.errors.append(diagnostic)
        else:
            self.warnings.append(diagnostic)
        return diagnostic

    def as_fields(self) -> Dict[str, Tuple[Diagnostic, ...]]:
        """Keyword arguments for constructing a ValidationResult."""
        return {"errors": tuple(self.errors), "warnings": tuple(self.warnings)}


def to_float_array(values: Iterable) -> np.ndarray:
    """Coerce a sequence to a float array; None and non-numeric entries become NaN."""
    series = pd.to_numeric(pd.Series(list(values), dtype=object), errors="coerce")
    return series.to_numpy(dtype=float, na_value=np.nan)


def value_range(series: pd.Series) -> Range:
    """(min, max) of a column ignoring missing values; (None, None) if nothing is left."""
    values = pd.to_numeric(series, errors="coerce").dropna()
    if values.empty:
        return (None, None)
    return (float(values.min()), float(values.max()))


def nan_stat(func, values: np.ndarray) -> float:
    """Apply a NaN-aware numpy reduction, returning NaN for an empty input."""
    if values.size == 0 or np.all(np.isnan(values)):
        return float("nan")
    return float(func(values))
