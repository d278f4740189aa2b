# src/treasury_curve/fixed_income/yield_curve.py
from __future__ import annotations

import logging
import math
from typing import Iterable, Iterator, List, Tuple

import numpy as np
from scipy.interpolate import CubicSpline

from treasury_curve.fixed_income.schemas import CurveShape, YieldObservation
from treasury_curve.fixed_income.validation import (
    DegenerateInterval,
    validate_observations,
)

LOGGER = logging.getLogger(__name__)

# Two maturities closer than this are the same point on the curve.
MATURITY_TOLERANCE = 1e-6

# Benchmark maturities used by the shape classifier (years).
SHAPE_SHORT = 0.25
SHAPE_MEDIUM = 5.0
SHAPE_LONG = 30.0


# ------------------------------------------------------------
# Observation helpers
# ------------------------------------------------------------
def _sorted_unique(
    observations: Iterable[YieldObservation],
) -> Tuple[YieldObservation, ...]:
    """
    Drop later duplicates in input order (first one wins, no merging), then
    sort by maturity.
    """
    kept: List[YieldObservation] = []
    for obs in observations:
        match = next(
            (
                k
                for k in kept
                if abs(obs.maturity_years - k.maturity_years) < MATURITY_TOLERANCE
            ),
            None,
        )
        if match is not None:
            LOGGER.warning(
                "Dropping duplicate maturity %s (%.7f y); keeping %s",
                obs.label,
                obs.maturity_years,
                match.label,
            )
            continue
        kept.append(obs)
    return tuple(sorted(kept, key=lambda o: o.maturity_years))


class YieldCurve:
    """
    Single-date yield curve built from discrete benchmark observations.

    Observations are held sorted strictly ascending by maturity and never
    mutated; a new load produces a new curve. Every query is defined on an
    empty curve and returns its documented default instead of raising.
    """

    def __init__(self, date: str = "", observations: Iterable[YieldObservation] = ()):
        self._date = date
        self._observations = _sorted_unique(observations)
        validate_observations(self._observations)

    # ------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------
    @property
    def date(self) -> str:
        return self._date

    @property
    def observations(self) -> Tuple[YieldObservation, ...]:
        return self._observations

    @property
    def maturities(self) -> np.ndarray:
        return np.array([o.maturity_years for o in self._observations], dtype=float)

    @property
    def yields(self) -> np.ndarray:
        return np.array([o.yield_percent for o in self._observations], dtype=float)

    @property
    def is_empty(self) -> bool:
        return not self._observations

    def __len__(self) -> int:
        return len(self._observations)

    def __iter__(self) -> Iterator[YieldObservation]:
        return iter(self._observations)

    def __repr__(self) -> str:
        return f"YieldCurve(date={self._date!r}, points={len(self._observations)})"

    # ------------------------------------------------------------
    # Interpolated yield (percent)
    # ------------------------------------------------------------
    def get_yield(self, maturity: float) -> float:
        """
        Yield in percent at ``maturity`` (years).

        Exact observations are returned as stored, maturities outside the
        observed range take the nearest boundary yield, and anything in
        between is linearly interpolated. An empty curve returns 0.0.
        """
        if not self._observations:
            return 0.0

        for obs in self._observations:
            if abs(obs.maturity_years - maturity) < MATURITY_TOLERANCE:
                return obs.yield_percent

        # np.interp clamps to the boundary values outside [m_min, m_max]
        return float(np.interp(float(maturity), self.maturities, self.yields))

    # ------------------------------------------------------------
    # Implied forward rate (percent, annual compounding)
    # ------------------------------------------------------------
    def get_forward_rate(self, start: float, end: float) -> float:
        """
        Forward rate between ``start`` and ``end`` implied by the curve:
        ((1 + y2)^end / (1 + y1)^start)^(1 / (end - start)) - 1, in percent.

        Returns 0.0 when end <= start or when the result is not finite.
        """
        if end <= start:
            return 0.0

        y1 = self.get_yield(start) / 100.0
        y2 = self.get_yield(end) / 100.0

        try:
            growth = math.pow(1.0 + y2, end) / math.pow(1.0 + y1, start)
            forward = math.pow(growth, 1.0 / (end - start)) - 1.0
            if not math.isfinite(forward):
                raise DegenerateInterval(f"non-finite forward {start}->{end}")
        except (ValueError, OverflowError, ZeroDivisionError, DegenerateInterval) as e:
            LOGGER.debug("Forward rate %s->%s unavailable: %s", start, end, e)
            return 0.0

        return forward * 100.0

    # ------------------------------------------------------------
    # Duration (years)
    # ------------------------------------------------------------
    def get_duration(self, maturity: float, coupon_rate: float = 0.0) -> float:
        """
        Zero-coupon bonds: duration equals maturity.
        Coupon bonds: modified-duration proxy maturity / (1 + y) using the
        interpolated yield. Not a cash-flow weighted duration.
        """
        if coupon_rate == 0.0:
            return float(maturity)

        y = self.get_yield(maturity) / 100.0
        try:
            duration = maturity / (1.0 + y)
            if not math.isfinite(duration):
                raise DegenerateInterval(f"non-finite duration at {maturity}")
        except (ZeroDivisionError, DegenerateInterval) as e:
            LOGGER.debug("Duration at %s unavailable: %s", maturity, e)
            return 0.0
        return float(duration)

    # ------------------------------------------------------------
    # Spread (percentage points)
    # ------------------------------------------------------------
    def get_spread(self, maturity1: float, maturity2: float) -> float:
        return self.get_yield(maturity2) - self.get_yield(maturity1)

    # ------------------------------------------------------------
    # Shape classification
    # ------------------------------------------------------------
    def classify_shape(self) -> CurveShape:
        """
        Qualitative shape from the 3M, 5Y and 30Y yields.

        Branches are checked in order and the first match wins; thresholds
        are in percentage points.
        """
        if len(self._observations) < 3:
            return CurveShape.INSUFFICIENT

        short = self.get_yield(SHAPE_SHORT)
        medium = self.get_yield(SHAPE_MEDIUM)
        long_ = self.get_yield(SHAPE_LONG)

        if short > medium + 0.2 and long_ > medium + 0.2:
            return CurveShape.HUMPED
        if short > long_ + 0.1:
            return CurveShape.INVERTED
        if long_ > short + 0.5:
            return CurveShape.STEEP_NORMAL
        if long_ > short + 0.1:
            return CurveShape.NORMAL
        return CurveShape.FLAT

    # ------------------------------------------------------------
    # Natural cubic spline (smoothing / plotting only)
    # ------------------------------------------------------------
    def _spline(self) -> CubicSpline | None:
        if len(self._observations) < 3:
            return None
        return CubicSpline(self.maturities, self.yields, bc_type="natural")

    def spline_coefficients(self) -> np.ndarray:
        """
        Second-order coefficients c_i of the natural cubic spline through the
        observations (c_i = S''(m_i) / 2), one per observation. Empty when
        fewer than three observations are loaded.
        """
        spline = self._spline()
        if spline is None:
            return np.array([], dtype=float)
        # natural boundary: curvature is zero at the last knot
        return np.append(spline.c[1], 0.0)

    def smooth_yield(self, maturity: float) -> float:
        """
        Spline-smoothed yield with flat extrapolation. Falls back to
        get_yield() for curves too short to fit a spline.
        """
        spline = self._spline()
        if spline is None:
            return self.get_yield(maturity)
        m = float(np.clip(maturity, self.maturities[0], self.maturities[-1]))
        return float(spline(m))
