"""Fitted-model inputs read by the model validators.

The fitting stage lives outside this package. Validators only read the
fitted objects, through the small interfaces defined here:

- TweedieModel: what the Tweedie validator reads from a fitted GLM. The
  attribute names follow statsmodels' ``GLMResults``, so a statsmodels fit
  can be passed directly.
- TweedieFitSummary: a plain-data TweedieModel, e.g. loaded from a YAML
  summary written by the fitting stage.
- EVTFit: parameter estimates of a GEV or GPD fit.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional, Protocol, Sequence

import numpy as np
import pandas as pd


class TweedieModel(Protocol):
    """Read-only view of a fitted Tweedie GLM.

    Attributes:
        converged: Whether the IRLS fit converged.
        params: Coefficient estimates indexed by variable name.
        pvalues: Coefficient p-values indexed by variable name.
        deviance: Residual deviance.
        null_deviance: Deviance of the intercept-only model.
        aic: Akaike information criterion.
        fittedvalues: Fitted means on the response scale.
        resid_deviance: Deviance residuals.
    """

    converged: bool
    params: pd.Series
    pvalues: pd.Series
    deviance: float
    null_deviance: float
    aic: float
    fittedvalues: Any
    resid_deviance: Any


@dataclass(frozen=True)
class TweedieFitSummary:
    """Plain-data implementation of ``TweedieModel``.

    Coefficient data is given as ``{name: value}`` mappings and exposed as
    pandas Series, matching what statsmodels returns.
    """

    converged: bool
    coefficients: Mapping[str, float]
    coefficient_pvalues: Mapping[str, float]
    deviance: float
    null_deviance: float
    aic: float
    fitted_values: Sequence[float]
    deviance_residuals: Sequence[float]
    power: Optional[float] = None
    extra: Dict[str, Any] = field(default_factory=dict, compare=False)

    @property
    def params(self) -> pd.Series:
        return pd.Series(dict(self.coefficients), dtype=float)

    @property
    def pvalues(self) -> pd.Series:
        return pd.Series(dict(self.coefficient_pvalues), dtype=float)

    @property
    def fittedvalues(self) -> np.ndarray:
        return np.asarray(self.fitted_values, dtype=float)

    @property
    def resid_deviance(self) -> np.ndarray:
        return np.asarray(self.deviance_residuals, dtype=float)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "TweedieFitSummary":
        """Build a summary from a mapping such as a parsed YAML document.

        Required keys: converged, coefficients, pvalues, deviance,
        null_deviance, aic, fitted_values, deviance_residuals. Optional: power.
        Unknown keys are kept in ``extra``.

        Raises:
            ValueError: If a required key is missing or a value has the wrong shape.
        """
        required = [
            "converged",
            "coefficients",
            "pvalues",
            "deviance",
            "null_deviance",
            "aic",
            "fitted_values",
            "deviance_residuals",
        ]
        missing = [k for k in required if k not in data]
        if missing:
            raise ValueError(f"Tweedie fit summary is missing keys: {', '.join(missing)}")

        power = data.get("power")
        try:
            return cls(
                converged=bool(data["converged"]),
                coefficients={str(k): float(v) for k, v in dict(data["coefficients"]).items()},
                coefficient_pvalues={
                    str(k): float(v) for k, v in dict(data["pvalues"]).items()
                },
                deviance=float(data["deviance"]),
                null_deviance=float(data["null_deviance"]),
                aic=float(data["aic"]),
                fitted_values=[float(v) for v in data["fitted_values"]],
                deviance_residuals=[float(v) for v in data["deviance_residuals"]],
                power=float(power) if power is not None else None,
                extra={k: v for k, v in data.items() if k not in required and k != "power"},
            )
        except (TypeError, ValueError) as e:
            raise ValueError(f"Malformed Tweedie fit summary: {e}") from e


@dataclass(frozen=True)
class EVTFit:
    """Parameter estimates of an extreme-value fit.

    Uses the usual actuarial sign convention: positive ``shape`` is a heavy
    (Fréchet-type) tail, negative ``shape`` a bounded (Weibull-type) tail.
    ``location`` is None for threshold-exceedance (GPD) fits.
    """

    scale: float
    shape: float
    location: Optional[float] = None

    @classmethod
    def from_estimate(cls, estimate: Mapping[str, Any]) -> "EVTFit":
        """Build from a named estimate vector, e.g. ``{"scale": 5e5, "shape": -0.3}``.

        Raises:
            ValueError: If scale or shape is missing or a value is not numeric.
        """
        missing = [k for k in ("scale", "shape") if k not in estimate]
        if missing:
            raise ValueError(f"EVT estimate is missing: {', '.join(missing)}")
        location = estimate.get("location", estimate.get("loc"))
        try:
            return cls(
                scale=float(estimate["scale"]),
                shape=float(estimate["shape"]),
                location=float(location) if location is not None else None,
            )
        except (TypeError, ValueError) as e:
            raise ValueError(f"Malformed EVT estimate: {e}") from e

    @classmethod
    def from_genextreme(cls, c: float, loc: float, scale: float) -> "EVTFit":
        """Convert ``scipy.stats.genextreme.fit`` output, whose ``c`` is the negated shape."""
        return cls(scale=float(scale), shape=-float(c), location=float(loc))

    @classmethod
    def from_genpareto(cls, c: float, loc: float, scale: float) -> "EVTFit":
        """Convert ``scipy.stats.genpareto.fit`` output (``loc`` is the threshold)."""
        return cls(scale=float(scale), shape=float(c), location=float(loc))
