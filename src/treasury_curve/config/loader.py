from __future__ import annotations

import json
from pathlib import Path

import yaml
from pydantic import ValidationError

from treasury_curve.config.models import AnalyzerConfig


def load_config(path: str | Path) -> AnalyzerConfig:
    """
    Load an AnalyzerConfig from YAML or JSON.

    Automatically validates using Pydantic v2.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Config file does not exist: {path}")

    text = path.read_text()

    try:
        if path.suffix.lower() in {".yaml", ".yml"}:
            raw = yaml.safe_load(text)
        elif path.suffix.lower() == ".json":
            raw = json.loads(text)
        else:
            raise ValueError("Config path must be YAML or JSON.")
    except (yaml.YAMLError, json.JSONDecodeError) as e:
        raise ValueError(f"Failed to parse config: {e}") from e

    try:
        return AnalyzerConfig.model_validate(raw or {})
    except ValidationError as e:
        raise ValueError(f"Invalid AnalyzerConfig: {e}") from e
