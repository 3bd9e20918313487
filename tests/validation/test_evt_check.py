"""Tests for the EVTModelValidator."""

import pytest

from loss_modeling.core.enums import DiagnosticKind
from loss_modeling.validation.checks.evt import EVTModelValidator
from loss_modeling.validation.fits import EVTFit


def test_evt_heavy_tail_scenario(gev_fit, gpd_fit):
    """GEV shape -0.33 and GPD shape 0.82: valid, and no GPD upper bound."""
    result = EVTModelValidator().validate(gev_fit, gpd_fit)

    assert result.valid is True
    assert result.errors == ()
    assert result.warnings == ()
    assert result.checks.gpd_upper_bound is None
    assert "gpd_upper_bound" not in result.details
    assert list(result.details) == ["gev_shape", "gpd_shape", "gev_scale", "gpd_scale"]
    assert result.checks.gev_shape == -0.33
    assert result.checks.gev_scale == 500_000.0
    assert result.checks.gpd_shape == 0.82
    assert result.checks.gpd_scale == 300_000.0


def test_evt_bounded_gpd_records_upper_bound(gev_fit):
    gpd = EVTFit(scale=300_000.0, shape=-0.25)

    result = EVTModelValidator().validate(gev_fit, gpd)

    assert result.valid is True
    assert result.checks.gpd_upper_bound == pytest.approx(1_200_000.0)
    assert result.details["gpd_upper_bound"] == pytest.approx(1_200_000.0)


@pytest.mark.parametrize("scale", [0.0, -1.0])
def test_evt_gev_scale_invalid_only_gev(gpd_fit, scale):
    result = EVTModelValidator().validate(EVTFit(scale=scale, shape=0.1), gpd_fit)

    assert result.valid is False
    assert [e.message for e in result.errors] == ["GEV scale parameter must be positive"]
    assert result.errors[0].kind == DiagnosticKind.PARAMETER_BOUNDS_ERROR
    assert result.family_valid("gev") is False
    assert result.family_valid("gpd") is True


@pytest.mark.parametrize("scale", [0.0, -300.0])
def test_evt_gpd_scale_invalid_only_gpd(gev_fit, scale):
    result = EVTModelValidator().validate(gev_fit, EVTFit(scale=scale, shape=0.5))

    assert result.valid is False
    assert [e.message for e in result.errors] == ["GPD scale parameter must be positive"]
    assert result.family_valid("gpd") is False
    assert result.family_valid("GEV") is True


def test_evt_both_scales_invalid():
    result = EVTModelValidator().validate(EVTFit(scale=-1, shape=0.1), EVTFit(scale=0, shape=0.1))

    assert len(result.errors) == 2
    assert not result.family_valid("gev")
    assert not result.family_valid("gpd")


@pytest.mark.parametrize("shape, expect_warning", [(1.0, False), (1.2, True), (-1.5, True)])
def test_evt_extreme_gev_shape_warns(gpd_fit, shape, expect_warning):
    result = EVTModelValidator().validate(EVTFit(scale=10.0, shape=shape), gpd_fit)

    assert result.valid is True
    assert result.has_kind(DiagnosticKind.DEGENERATE_FIT) is expect_warning
    if expect_warning:
        assert result.warnings[0].message == f"GEV shape parameter is extreme: {round(shape, 3)}"


def test_evt_family_valid_rejects_unknown_family(gev_fit, gpd_fit):
    result = EVTModelValidator().validate(gev_fit, gpd_fit)
    with pytest.raises(ValueError, match="Unknown EVT family"):
        result.family_valid("gumbel")
