# tests/fixed_income/test_validation.py

import pytest

from treasury_curve.fixed_income.schemas import YieldObservation
from treasury_curve.fixed_income.validation import validate_observations


def make_point(m, y):
    return YieldObservation(maturity_years=m, yield_percent=y, label=f"{m}Y")


def test_negative_yield_allowed():
    pts = [make_point(0.25, -0.5), make_point(1.0, 0.1)]
    validate_observations(pts)


def test_duplicate_maturity_raises():
    pts = [make_point(1.0, 1.0), make_point(1.0, 1.1)]
    with pytest.raises(ValueError):
        validate_observations(pts)


def test_unsorted_maturities_raises():
    pts = [make_point(2.0, 1.8), make_point(0.5, 1.5)]
    with pytest.raises(ValueError):
        validate_observations(pts)


def test_non_finite_raises():
    bad = YieldObservation.model_construct(
        maturity_years=1.0, yield_percent=float("nan"), label="1Y"
    )
    with pytest.raises(ValueError):
        validate_observations([bad])


def test_valid_points_pass():
    pts = [make_point(0.5, 1.0), make_point(1.0, 1.2), make_point(10.0, 2.1)]
    validate_observations(pts)
    validate_observations([])
