"""Column definitions for the tables flowing through the loss modeling pipeline.

Raw records come from the CAS Schedule P loader (one row per company,
accident year and development lag). The modeling table is the aggregated
per company-year view used to fit the Tweedie and EVT models.
"""

from __future__ import annotations

from typing import Iterable, List

from .enums import ValidationTarget

# Raw CAS Schedule P columns
COMPANY_FIELD = "GRCODE"
ACCIDENT_YEAR_FIELD = "AccidentYear"
DEVELOPMENT_LAG_FIELD = "DevelopmentLag"
RAW_LOSS_FIELD = "IncurLoss_B"
RAW_PREMIUM_FIELD = "EarnedPremDIR_B"

# Modeling table columns
LOSS_FIELD = "Loss"
PREMIUM_FIELD = "Premium"


def get_required_fields(target: ValidationTarget) -> List[str]:
    """Get the required columns for a tabular validation target.

    Args:
        target: Either RAW_DATA or MODEL_DATA.

    Returns:
        Column names in the order they are reported when missing.

    Raises:
        ValueError: If the target is not tabular.

    Examples:
        >>> get_required_fields(ValidationTarget.MODEL_DATA)
        ['Loss', 'Premium', 'AccidentYear']
    """
    if target == ValidationTarget.RAW_DATA:
        return [
            COMPANY_FIELD,
            ACCIDENT_YEAR_FIELD,
            DEVELOPMENT_LAG_FIELD,
            RAW_LOSS_FIELD,
            RAW_PREMIUM_FIELD,
        ]
    if target == ValidationTarget.MODEL_DATA:
        return [LOSS_FIELD, PREMIUM_FIELD, ACCIDENT_YEAR_FIELD]
    raise ValueError(f"No table schema for target: {target.value}")


def get_amount_fields(target: ValidationTarget) -> List[str]:
    """Get the currency columns (loss first, premium second) for a target."""
    if target == ValidationTarget.RAW_DATA:
        return [RAW_LOSS_FIELD, RAW_PREMIUM_FIELD]
    if target == ValidationTarget.MODEL_DATA:
        return [LOSS_FIELD, PREMIUM_FIELD]
    raise ValueError(f"No table schema for target: {target.value}")


def find_missing_fields(columns: Iterable[str], required: Iterable[str]) -> List[str]:
    """Return the required fields absent from ``columns``, in required order."""
    present = set(columns)
    return [f for f in required if f not in present]


__all__ = [
    "COMPANY_FIELD",
    "ACCIDENT_YEAR_FIELD",
    "DEVELOPMENT_LAG_FIELD",
    "RAW_LOSS_FIELD",
    "RAW_PREMIUM_FIELD",
    "LOSS_FIELD",
    "PREMIUM_FIELD",
    "get_required_fields",
    "get_amount_fields",
    "find_missing_fields",
]
