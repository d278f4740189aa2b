# src/treasury_curve/fixed_income/validation.py
from __future__ import annotations

import math
from typing import Sequence

from treasury_curve.fixed_income.schemas import YieldObservation


class CurveError(Exception):
    """Base class for yield curve errors."""

    pass


class UnknownMaturityLabel(CurveError, KeyError):
    """Label is not part of the maturity catalog."""

    pass


class MalformedRow(CurveError):
    """Input row is too short to carry a date and any yields."""

    pass


class UnparsableCell(CurveError):
    """Single yield cell is empty, non-numeric or non-finite."""

    pass


class NoMatchingDate(CurveError):
    """No usable row matched the requested date."""

    pass


class DegenerateInterval(CurveError):
    """Forward or duration math produced a non-finite result."""

    pass


def validate_observations(observations: Sequence[YieldObservation]) -> None:
    """
    Domain-specific validation for a single-date curve.
    Ensures:
        - Finite maturities and yields
        - Strictly positive maturities
        - No duplicate maturities
        - Ascending maturities

    NOTE:
        Negative yields are allowed; short rates have traded below zero
        in several sovereign markets.
    """

    for o in observations:
        if not (math.isfinite(o.maturity_years) and math.isfinite(o.yield_percent)):
            raise ValueError(f"Non-finite observation: {o}")
        if o.maturity_years <= 0:
            raise ValueError(f"Maturity must be positive: {o}")

    maturities = [o.maturity_years for o in observations]

    if len(maturities) != len(set(maturities)):
        raise ValueError(f"Duplicate maturity points: {maturities}")

    if sorted(maturities) != maturities:
        raise ValueError(f"Maturities must be sorted: {maturities}")
