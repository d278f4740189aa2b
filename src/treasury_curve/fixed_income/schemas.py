# src/treasury_curve/fixed_income/schemas.py
from __future__ import annotations

from enum import Enum
from typing import List

from pydantic import BaseModel, ConfigDict, Field


class YieldObservation(BaseModel):
    """
    Single observed point on a yield curve.

    - maturity_years: time to maturity in years (e.g., 0.25 for 3MO)
    - yield_percent: yield in percent (e.g., 4.25 means 4.25%); may be negative
    - label: catalog label the value was read under (e.g., "10Y")
    """

    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    maturity_years: float = Field(..., gt=0.0, description="Maturity in years")
    yield_percent: float = Field(..., description="Yield percentage (e.g., 4.25)")
    label: str = Field(..., description="Maturity label (e.g., 10Y)")


class CurveShape(str, Enum):
    INSUFFICIENT = "Insufficient Data"
    HUMPED = "Humped"
    INVERTED = "Inverted"
    STEEP_NORMAL = "Steep Normal"
    NORMAL = "Normal"
    FLAT = "Flat"


# ============================================================
# Market analysis results
# ============================================================


class RiskRow(BaseModel):
    """
    Interest-rate risk figures for one benchmark maturity.
    """

    label: str
    maturity_years: float
    yield_percent: float
    duration: float
    dv01: float = Field(..., description="Duration * 100 (per $10,000 face).")
    risk_level: str


class ForwardExpectations(BaseModel):
    near_term: float = Field(..., description="3M -> 15M implied forward (%).")
    medium_term: float = Field(..., description="1Y -> 3Y implied forward (%).")
    long_term: float = Field(..., description="5Y -> 10Y implied forward (%).")


class MarketSummary(BaseModel):
    """
    Qualitative read of a curve snapshot, built from the curve's query surface.
    """

    date: str
    curve_shape: CurveShape

    policy_rate_1m: float
    short_rate_3m: float
    rate_2y: float
    benchmark_10y: float
    long_rate_30y: float

    spread_2s10s_bps: float
    spread_signal: str
    recession_probability: str

    slope_3m10y: float
    market_regime: str
    short_end_spread_bps: float = Field(..., description="|3M - 1Y| in bps.")
    long_end_spread_bps: float = Field(..., description="|10Y - 30Y| in bps.")

    forwards: ForwardExpectations
    policy_outlook: str

    term_premium: float = Field(..., description="30Y - 10Y in percentage points.")
    term_premium_level: str

    risk: List[RiskRow] = Field(default_factory=list)
