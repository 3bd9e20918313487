"""Loss Modeling Tools — validation and reporting for aggregate-loss models.

The package checks the artifacts produced by the loss modeling pipeline
(CAS Schedule P raw data, the per company-year modeling table, the fitted
Tweedie GLM, the GEV/GPD extreme-value fits and the forecast predictions)
and aggregates the outcomes into a plain-text validation report.
"""

__all__ = [
    "__version__",
]

__version__ = "0.1.0"
