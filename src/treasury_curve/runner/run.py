from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict

import pandas as pd

from treasury_curve.config.loader import load_config
from treasury_curve.config.models import AnalyzerConfig
from treasury_curve.data.ingestion.treasury import LoadResult, TreasuryCsvIngestor
from treasury_curve.fixed_income.market_analysis import analyze_market
from treasury_curve.fixed_income.schemas import MarketSummary
from treasury_curve.fixed_income.yield_curve import YieldCurve
from treasury_curve.reporting.exporter import (
    build_analysis_table,
    build_snapshot,
    export_analysis_csv,
    export_json,
)
from treasury_curve.reporting.schemas import CurveSnapshot

LOGGER = logging.getLogger(__name__)


@dataclass
class AnalysisResult:
    found: bool
    curve: YieldCurve
    snapshot: CurveSnapshot
    table: pd.DataFrame
    summary: MarketSummary
    outputs: Dict[str, Path] = field(default_factory=dict)


# ======================================================================
# Curve loading
# ======================================================================


def load_from_config(cfg: AnalyzerConfig) -> LoadResult:
    ingestor = TreasuryCsvIngestor(
        cfg.data_source,
        date_filter=cfg.date_filter,
        strict=cfg.strict_rows,
    )
    return ingestor.run()


# ======================================================================
# Main entrypoint
# ======================================================================


def run_from_config(
    config: str | Path | AnalyzerConfig,
    save_dir: str | Path | None = None,
) -> AnalysisResult:
    if isinstance(config, AnalyzerConfig):
        cfg = config
    else:
        LOGGER.info("Loading config: %s", config)
        cfg = load_config(config)

    if save_dir is not None:
        cfg = cfg.model_copy(
            update={"output": cfg.output.model_copy(update={"directory": str(save_dir)})}
        )

    LOGGER.info("Loading rate data from %s", cfg.data_source)
    loaded = load_from_config(cfg)
    curve = loaded.curve

    result = AnalysisResult(
        found=loaded.found,
        curve=curve,
        snapshot=build_snapshot(curve, cfg.source_name, cfg.source_url),
        table=build_analysis_table(curve),
        summary=analyze_market(curve),
    )

    if not loaded.found:
        LOGGER.warning("No curve loaded; skipping exports")
        return result

    out_dir = Path(cfg.output.directory)
    if cfg.output.export_json:
        result.outputs["json"] = export_json(
            curve,
            out_dir / cfg.output.json_filename,
            source_name=cfg.source_name,
            source_url=cfg.source_url,
        )
    if cfg.output.export_csv:
        result.outputs["csv"] = export_analysis_csv(
            curve, out_dir / cfg.output.csv_filename
        )

    return result
