from __future__ import annotations

import copy
import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional, Tuple, Union

import yaml

from .constants import DEFAULT_CONFIG


def _deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    out = dict(base)
    for k, v in (override or {}).items():
        if isinstance(v, dict) and isinstance(out.get(k), dict):
            out[k] = _deep_merge(out[k], v)
        else:
            out[k] = v
    return out


@dataclass
class AnalysisConfig:
    max_rows: int = DEFAULT_CONFIG['max_rows']
    forecast_enabled: bool = DEFAULT_CONFIG['forecast']['enabled']
    forecast_horizon: int = DEFAULT_CONFIG['forecast']['horizon']
    candidate_periods: Tuple[int, ...] = field(
        default_factory=lambda: tuple(DEFAULT_CONFIG['forecast']['candidate_periods'])
    )
    default_period: int = DEFAULT_CONFIG['forecast']['default_period']
    min_forecast_points: int = DEFAULT_CONFIG['forecast']['min_points']
    include_cleaned_data: bool = DEFAULT_CONFIG['output']['include_cleaned_data']
    log_level: str = DEFAULT_CONFIG['logging']['level']

    @classmethod
    def from_dict(cls, cfg: Dict[str, Any]) -> "AnalysisConfig":
        cfg = _deep_merge(DEFAULT_CONFIG, cfg or {})
        fc = cfg.get('forecast', {})
        return cls(
            max_rows=int(cfg.get('max_rows')),
            forecast_enabled=bool(fc.get('enabled')),
            forecast_horizon=int(fc.get('horizon')),
            candidate_periods=tuple(int(p) for p in fc.get('candidate_periods')),
            default_period=int(fc.get('default_period')),
            min_forecast_points=int(fc.get('min_points')),
            include_cleaned_data=bool(cfg.get('output', {}).get('include_cleaned_data')),
            log_level=str(cfg.get('logging', {}).get('level') or 'INFO'),
        )


def load_config(config_path: Optional[Union[str, Path]]) -> AnalysisConfig:
    """Load a YAML or JSON config file and merge it over ``DEFAULT_CONFIG``."""
    if not config_path:
        return AnalysisConfig.from_dict(copy.deepcopy(DEFAULT_CONFIG))

    p = Path(config_path)
    if not p.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    text = p.read_text(encoding="utf-8", errors="ignore")
    if p.suffix.lower() in (".yaml", ".yml"):
        user_cfg = yaml.safe_load(text) or {}
    elif p.suffix.lower() == ".json":
        user_cfg = json.loads(text)
    else:
        raise ValueError("Config must be .yaml/.yml or .json")

    return AnalysisConfig.from_dict(user_cfg)


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    )
