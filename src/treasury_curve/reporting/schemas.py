# src/treasury_curve/reporting/schemas.py
from __future__ import annotations

from typing import List

from pydantic import BaseModel, ConfigDict, Field

from treasury_curve.fixed_income.schemas import CurveShape


class _AliasedModel(BaseModel):
    # JSON keys such as "2s10s_bps" are not valid identifiers
    model_config = ConfigDict(populate_by_name=True)


class CurvePointRecord(_AliasedModel):
    maturity_label: str
    maturity_years: float
    yield_percent: float = Field(..., alias="yield")
    duration: float


class KeySpreads(_AliasedModel):
    spread_2s10s_bps: float = Field(..., alias="2s10s_bps")
    spread_3m10y_bps: float = Field(..., alias="3m10y_bps")
    spread_5s30s_bps: float = Field(..., alias="5s30s_bps")
    spread_1m3m_bps: float = Field(..., alias="1m3m_bps")


class ForwardRates(_AliasedModel):
    fwd_1y1y: float = Field(..., alias="1y1y")
    fwd_2y1y: float = Field(..., alias="2y1y")
    fwd_5y5y: float = Field(..., alias="5y5y")
    fwd_10y10y: float = Field(..., alias="10y10y")


class EconomicIndicators(BaseModel):
    recession_warning: bool = Field(..., description="2s10s below -20 bps.")
    term_premium_bps: float = Field(..., description="10Y -> 30Y spread in bps.")
    curve_steepness: str = Field(..., description="steep / flat / inverted.")


class CurveSnapshot(BaseModel):
    """
    Dashboard document for one curve date.
    """

    data_source: str
    source_url: str
    date: str
    curve_shape: CurveShape
    yield_points: List[CurvePointRecord] = Field(default_factory=list)
    key_spreads: KeySpreads
    forward_rates: ForwardRates
    economic_indicators: EconomicIndicators
