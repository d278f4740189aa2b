from __future__ import annotations

from pathlib import Path
import json

import pytest

from treasury_curve.config.loader import load_config
from treasury_curve.config.models import AnalyzerConfig


def test_load_config_yaml(tmp_path: Path):
    cfg_path = tmp_path / "cfg.yaml"
    cfg_path.write_text(
        """
data_source: "/tmp/rates.csv"
date_filter: "2025-09-16"
strict_rows: true
output:
  directory: "/tmp/out"
  export_csv: false
"""
    )
    cfg = load_config(cfg_path)
    assert isinstance(cfg, AnalyzerConfig)
    assert cfg.data_source == "/tmp/rates.csv"
    assert cfg.date_filter == "2025-09-16"
    assert cfg.strict_rows is True
    assert cfg.output.directory == "/tmp/out"
    assert cfg.output.export_csv is False
    assert cfg.output.json_filename == "live_yield_curve_data.json"


def test_load_config_json(tmp_path: Path):
    cfg_path = tmp_path / "cfg.json"
    cfg_path.write_text(json.dumps({"data_source": "rates.csv"}))
    cfg = load_config(cfg_path)
    assert cfg.data_source == "rates.csv"
    assert cfg.date_filter is None
    assert cfg.output.export_json is True


def test_empty_yaml_uses_defaults(tmp_path: Path):
    cfg_path = tmp_path / "cfg.yml"
    cfg_path.write_text("")
    assert load_config(cfg_path) == AnalyzerConfig()


def test_missing_config(tmp_path: Path):
    with pytest.raises(FileNotFoundError):
        load_config(tmp_path / "nope.yaml")


def test_unsupported_suffix(tmp_path: Path):
    cfg_path = tmp_path / "cfg.toml"
    cfg_path.write_text("data_source = 'x'")
    with pytest.raises(ValueError):
        load_config(cfg_path)


def test_unknown_key_rejected(tmp_path: Path):
    cfg_path = tmp_path / "cfg.json"
    cfg_path.write_text(json.dumps({"data_sauce": "rates.csv"}))
    with pytest.raises(ValueError):
        load_config(cfg_path)


def test_malformed_json(tmp_path: Path):
    cfg_path = tmp_path / "cfg.json"
    cfg_path.write_text("{not json")
    with pytest.raises(ValueError):
        load_config(cfg_path)
