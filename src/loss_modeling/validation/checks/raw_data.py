"""Raw data validation check.

Sanity checks on a freshly loaded CAS Schedule P table: the expected columns
exist, the loss and premium amounts are present and non-negative. Missing
amounts only warrant review; negative amounts indicate a corrupt source file.
"""

from __future__ import annotations

import pandas as pd

from loss_modeling.core.enums import DiagnosticKind, ValidationTarget
from loss_modeling.core.schemas import (
    ACCIDENT_YEAR_FIELD,
    COMPANY_FIELD,
    find_missing_fields,
    get_amount_fields,
    get_required_fields,
)
from ..models import RawDataInfo, RawDataResult
from ._common import DiagnosticCollector, value_range


class RawDataValidator:
    """Validate schema and value ranges of raw CAS records."""

    target = ValidationTarget.RAW_DATA

    def validate(self, df: pd.DataFrame) -> RawDataResult:
        """Check required columns, missing amounts and negative amounts.

        Missing columns do not stop the remaining checks; checks on an absent
        column are simply skipped.

        Args:
            df: Raw records (GRCODE, AccidentYear, DevelopmentLag, IncurLoss_B,
                EarnedPremDIR_B).

        Returns:
            RawDataResult with descriptive info always populated.
        """
        collector = DiagnosticCollector()

        missing = find_missing_fields(df.columns, get_required_fields(self.target))
        if missing:
            collector.add(
                "raw_required_columns",
                DiagnosticKind.SCHEMA_ERROR,
                f"Missing required columns: {', '.join(missing)}",
                value=len(missing),
            )

        amount_fields = [f for f in get_amount_fields(self.target) if f in df.columns]

        for f in amount_fields:
            n_na = int(df[f].isna().sum())
            if n_na > 0:
                collector.add(
                    "raw_missing_values",
                    DiagnosticKind.MISSING_VALUE,
                    f"NA values found in {f}",
                    value=n_na,
                )

        for f in amount_fields:
            n_negative = int((pd.to_numeric(df[f], errors="coerce") < 0).sum())
            if n_negative > 0:
                collector.add(
                    "raw_negative_values",
                    DiagnosticKind.RANGE_VIOLATION,
                    f"Negative values found in {f}",
                    value=n_negative,
                )

        loss_field, premium_field = get_amount_fields(self.target)
        info = RawDataInfo(
            n_rows=len(df),
            n_companies=(
                int(df[COMPANY_FIELD].nunique(dropna=False)) if COMPANY_FIELD in df.columns else 0
            ),
            year_range=_column_range(df, ACCIDENT_YEAR_FIELD),
            loss_range=_column_range(df, loss_field),
            premium_range=_column_range(df, premium_field),
        )
        return RawDataResult(**collector.as_fields(), info=info)


def _column_range(df: pd.DataFrame, column: str):
    if column not in df.columns:
        return (None, None)
    return value_range(df[column])
