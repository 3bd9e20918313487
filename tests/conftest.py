"""Shared pytest fixtures for loss model validation testing."""

import pandas as pd
import pytest

from loss_modeling.validation.fits import EVTFit, TweedieFitSummary


@pytest.fixture
def raw_df() -> pd.DataFrame:
    """Clean raw CAS Schedule P records: two companies, two accident years."""
    return pd.DataFrame(
        {
            "GRCODE": [86, 86, 86, 337, 337, 337],
            "AccidentYear": [1988, 1988, 1989, 1988, 1989, 1989],
            "DevelopmentLag": [1, 2, 1, 1, 1, 2],
            "IncurLoss_B": [1200.0, 1500.0, 900.0, 40000.0, 52000.0, 55000.0],
            "EarnedPremDIR_B": [2000.0, 2000.0, 1800.0, 60000.0, 65000.0, 65000.0],
        }
    )


@pytest.fixture
def model_df() -> pd.DataFrame:
    """Clean per company-year modeling table."""
    return pd.DataFrame(
        {
            "Loss": [1500.0, 900.0, 40000.0, 55000.0],
            "Premium": [2000.0, 1800.0, 60000.0, 65000.0],
            "AccidentYear": [1988, 1989, 1988, 1989],
        }
    )


def make_tweedie_fit(**overrides) -> TweedieFitSummary:
    """A converged, well-behaved Tweedie fit; keyword arguments replace fields."""
    fields = {
        "converged": True,
        "coefficients": {"Intercept": 7.1, "log_premium": 0.95, "AccidentYear": 0.02},
        "coefficient_pvalues": {"Intercept": 0.0001, "log_premium": 0.001, "AccidentYear": 0.01},
        "deviance": 250.0,
        "null_deviance": 1000.0,
        "aic": 812.5,
        "fitted_values": [1400.0, 950.0, 41000.0, 54000.0],
        "deviance_residuals": [0.5, -0.5, 0.2, -0.2],
    }
    fields.update(overrides)
    return TweedieFitSummary(**fields)


@pytest.fixture
def tweedie_fit() -> TweedieFitSummary:
    return make_tweedie_fit()


@pytest.fixture
def gev_fit() -> EVTFit:
    return EVTFit(location=1_200_000.0, scale=500_000.0, shape=-0.33)


@pytest.fixture
def gpd_fit() -> EVTFit:
    return EVTFit(scale=300_000.0, shape=0.82)
