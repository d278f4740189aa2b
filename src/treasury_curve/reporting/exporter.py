# src/treasury_curve/reporting/exporter.py
from __future__ import annotations

import logging
from pathlib import Path

import pandas as pd

from treasury_curve.fixed_income.market_analysis import curve_steepness, risk_level
from treasury_curve.fixed_income.yield_curve import YieldCurve
from treasury_curve.reporting.schemas import (
    CurvePointRecord,
    CurveSnapshot,
    EconomicIndicators,
    ForwardRates,
    KeySpreads,
)

LOGGER = logging.getLogger(__name__)

DEFAULT_SOURCE_NAME = "Federal Reserve H.15 Selected Interest Rates"
DEFAULT_SOURCE_URL = "https://www.federalreserve.gov/releases/h15/"

# Standard spread pairs (short, long) and forward tenors (start, end), in years
SPREAD_PAIRS = {
    "2s10s_bps": (2.0, 10.0),
    "3m10y_bps": (0.25, 10.0),
    "5s30s_bps": (5.0, 30.0),
    "1m3m_bps": (1.0 / 12.0, 0.25),
}
FORWARD_TENORS = {
    "1y1y": (1.0, 2.0),
    "2y1y": (2.0, 3.0),
    "5y5y": (5.0, 10.0),
    "10y10y": (10.0, 20.0),
}

BPS_DECIMALS = 2

ANALYSIS_COLUMNS = [
    "date",
    "maturity_label",
    "maturity_years",
    "yield",
    "duration",
    "dv01",
    "forward_1y",
    "risk_level",
]


def _bps(curve: YieldCurve, short: float, long: float) -> float:
    return round(curve.get_spread(short, long) * 100, BPS_DECIMALS)


# ============================================================
# Snapshot document
# ============================================================


def build_snapshot(
    curve: YieldCurve,
    source_name: str = DEFAULT_SOURCE_NAME,
    source_url: str = DEFAULT_SOURCE_URL,
) -> CurveSnapshot:
    spread_2s10s = curve.get_spread(2.0, 10.0)

    points = [
        CurvePointRecord(
            maturity_label=o.label,
            maturity_years=o.maturity_years,
            yield_percent=o.yield_percent,
            duration=curve.get_duration(o.maturity_years),
        )
        for o in curve.observations
    ]

    return CurveSnapshot(
        data_source=source_name,
        source_url=source_url,
        date=curve.date,
        curve_shape=curve.classify_shape(),
        yield_points=points,
        key_spreads=KeySpreads.model_validate(
            {key: _bps(curve, *pair) for key, pair in SPREAD_PAIRS.items()}
        ),
        forward_rates=ForwardRates.model_validate(
            {key: curve.get_forward_rate(*tenor) for key, tenor in FORWARD_TENORS.items()}
        ),
        economic_indicators=EconomicIndicators(
            recession_warning=spread_2s10s < -0.2,
            term_premium_bps=_bps(curve, 10.0, 30.0),
            curve_steepness=curve_steepness(spread_2s10s),
        ),
    )


def snapshot_to_dict(snapshot: CurveSnapshot) -> dict:
    return snapshot.model_dump(mode="json", by_alias=True)


def export_json(
    curve: YieldCurve,
    path: str | Path,
    source_name: str = DEFAULT_SOURCE_NAME,
    source_url: str = DEFAULT_SOURCE_URL,
) -> Path:
    snapshot = build_snapshot(curve, source_name=source_name, source_url=source_url)
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(snapshot.model_dump_json(indent=2, by_alias=True))
    LOGGER.info("Yield curve snapshot exported to %s", path)
    return path


# ============================================================
# Flat analysis table
# ============================================================


def build_analysis_table(curve: YieldCurve) -> pd.DataFrame:
    """
    One row per observation: duration (zero-coupon), DV01, 1y forward and
    duration risk bucket.
    """
    records = []
    for o in curve.observations:
        m = o.maturity_years
        duration = curve.get_duration(m)
        records.append(
            {
                "date": curve.date,
                "maturity_label": o.label,
                "maturity_years": m,
                "yield": o.yield_percent,
                "duration": duration,
                "dv01": duration * 100,
                "forward_1y": curve.get_forward_rate(m, m + 1.0) if m >= 1.0 else 0.0,
                "risk_level": risk_level(duration),
            }
        )
    return pd.DataFrame.from_records(records, columns=ANALYSIS_COLUMNS)


def export_analysis_csv(curve: YieldCurve, path: str | Path) -> Path:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    build_analysis_table(curve).to_csv(path, index=False)
    LOGGER.info("Analysis table exported to %s", path)
    return path
