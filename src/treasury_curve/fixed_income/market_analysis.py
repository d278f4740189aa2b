# src/treasury_curve/fixed_income/market_analysis.py
"""
Qualitative market read of a yield curve snapshot.

All functions work on the public query surface of YieldCurve, so an empty
curve yields a well-formed (if uninformative) summary. Spreads and slopes are
in percentage points unless the name ends in ``_bps``.
"""

from __future__ import annotations

from typing import List, Sequence

from treasury_curve.fixed_income.schemas import (
    ForwardExpectations,
    MarketSummary,
    RiskRow,
)
from treasury_curve.fixed_income.yield_curve import YieldCurve

KEY_RISK_MATURITIES = (("2Y", 2.0), ("5Y", 5.0), ("10Y", 10.0), ("30Y", 30.0))


# ============================================================
# Bucketing rules
# ============================================================


def risk_level(duration: float) -> str:
    if duration < 2:
        return "LOW"
    if duration < 7:
        return "MODERATE"
    if duration < 15:
        return "HIGH"
    return "VERY_HIGH"


def spread_signal(spread_2s10s: float) -> str:
    if spread_2s10s < -0.2:
        return "RECESSION_WARNING"
    if spread_2s10s < 0:
        return "INVERTED"
    if spread_2s10s < 0.5:
        return "FLATTENING"
    return "NORMAL"


def curve_steepness(spread_2s10s: float) -> str:
    if spread_2s10s > 1.0:
        return "steep"
    if spread_2s10s < -0.1:
        return "inverted"
    return "flat"


def recession_probability(spread_2s10s_bps: float) -> str:
    if spread_2s10s_bps < -20:
        return "HIGH"
    if spread_2s10s_bps < 0:
        return "ELEVATED"
    if spread_2s10s_bps < 50:
        return "LOW_MODERATE"
    return "LOW"


def market_regime(slope_3m10y: float) -> str:
    if slope_3m10y < -0.5:
        return "DEEPLY_INVERTED"
    if slope_3m10y < 0:
        return "INVERTED"
    if slope_3m10y < 0.5:
        return "FLAT"
    if slope_3m10y > 2.0:
        return "VERY_STEEP"
    return "NORMAL"


def policy_outlook(near_forward: float, current_short: float) -> str:
    """
    Market-implied policy path from the 3M->15M forward vs the 3M yield.
    """
    if near_forward < current_short - 0.5:
        return "AGGRESSIVE_CUTS"
    if near_forward < current_short - 0.1:
        return "MODEST_CUTS"
    if near_forward > current_short + 0.1:
        return "HIKES"
    return "STABLE"


def term_premium_level(term_premium: float) -> str:
    if term_premium < 0.2:
        return "LOW"
    if term_premium > 0.8:
        return "HIGH"
    return "NORMAL"


# ============================================================
# Curve-level analysis
# ============================================================


def interest_rate_risk(
    curve: YieldCurve,
    maturities: Sequence[tuple[str, float]] = KEY_RISK_MATURITIES,
) -> List[RiskRow]:
    rows = []
    for label, m in maturities:
        duration = curve.get_duration(m)
        rows.append(
            RiskRow(
                label=label,
                maturity_years=m,
                yield_percent=curve.get_yield(m),
                duration=duration,
                dv01=duration * 100,
                risk_level=risk_level(duration),
            )
        )
    return rows


def analyze_market(curve: YieldCurve) -> MarketSummary:
    spread_2s10s = curve.get_spread(2.0, 10.0)
    slope_3m10y = curve.get_spread(0.25, 10.0)
    short_rate = curve.get_yield(0.25)

    forwards = ForwardExpectations(
        near_term=curve.get_forward_rate(0.25, 1.25),
        medium_term=curve.get_forward_rate(1.0, 3.0),
        long_term=curve.get_forward_rate(5.0, 10.0),
    )
    term_premium = curve.get_spread(10.0, 30.0)

    return MarketSummary(
        date=curve.date,
        curve_shape=curve.classify_shape(),
        policy_rate_1m=curve.get_yield(1.0 / 12.0),
        short_rate_3m=short_rate,
        rate_2y=curve.get_yield(2.0),
        benchmark_10y=curve.get_yield(10.0),
        long_rate_30y=curve.get_yield(30.0),
        spread_2s10s_bps=spread_2s10s * 100,
        spread_signal=spread_signal(spread_2s10s),
        recession_probability=recession_probability(spread_2s10s * 100),
        slope_3m10y=slope_3m10y,
        market_regime=market_regime(slope_3m10y),
        short_end_spread_bps=abs(curve.get_spread(0.25, 1.0)) * 100,
        long_end_spread_bps=abs(curve.get_spread(10.0, 30.0)) * 100,
        forwards=forwards,
        policy_outlook=policy_outlook(forwards.near_term, short_rate),
        term_premium=term_premium,
        term_premium_level=term_premium_level(term_premium),
        risk=interest_rate_risk(curve),
    )
