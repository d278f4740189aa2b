from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


# ============================================================
# Output settings
# ============================================================


class OutputSettings(BaseModel):
    model_config = ConfigDict(extra="forbid")

    directory: str = "."
    json_filename: str = "live_yield_curve_data.json"
    csv_filename: str = "live_yield_analysis.csv"
    export_json: bool = True
    export_csv: bool = True


# ============================================================
# Top-level AnalyzerConfig
# ============================================================


class AnalyzerConfig(BaseModel):
    """
    Settings for a curve analysis run.
    """

    model_config = ConfigDict(extra="forbid")

    data_source: str = "treasury_yields_live.csv"
    date_filter: Optional[str] = Field(
        default=None,
        description="Date or date prefix to analyze; latest row when unset.",
    )
    strict_rows: bool = Field(
        default=False,
        description="Skip rows that do not carry every catalog column.",
    )

    source_name: str = "Federal Reserve H.15 Selected Interest Rates"
    source_url: str = "https://www.federalreserve.gov/releases/h15/"

    output: OutputSettings = Field(default_factory=OutputSettings)
