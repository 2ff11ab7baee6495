from dataclasses import asdict
from typing import Any, Dict, List, Optional, Sequence
import logging

from .base import AnalysisResult
from .cleaner import clean_data
from .config import AnalysisConfig
from .errors import ForecastError, ValidationError
from .forecast import forecast_columns
from .loader import load_rows
from .miner import mine_insights
from .profiler import summarize_columns
from .schema_inference import infer_column_types
from .validator import validate_rows

log = logging.getLogger("dataset_insights.pipeline")


def analyze(rows: Sequence[Dict[str, Any]], cfg: Optional[AnalysisConfig] = None) -> AnalysisResult:
    """Run inference, summaries, cleaning, insight mining and forecasting over parsed rows.

    Raises ValidationError when there is nothing to analyze. A failed forecast
    never fails the analysis; it is reported in ``warnings`` instead.
    """
    cfg = cfg or AnalysisConfig()

    warnings, errors = validate_rows(rows, asdict(cfg))
    if errors:
        raise ValidationError('; '.join(errors))

    columns = infer_column_types(rows)
    columns = summarize_columns(columns)
    cleaned, cleaned_data, clean_log = clean_data(columns)
    warnings.extend(clean_log)

    insights = mine_insights(cleaned)

    time_series = None
    if cfg.forecast_enabled:
        try:
            time_series = forecast_columns(cleaned, cfg)
        except ForecastError as e:
            log.warning(f"Forecast unavailable: {e}")
            warnings.append(f'No forecast available: {e}')

    return AnalysisResult(
        columns=cleaned,
        row_count=len(cleaned[0].values),
        insights=insights,
        cleaned_data=cleaned_data if cfg.include_cleaned_data else None,
        time_series=time_series,
        warnings=warnings,
    )


def analyze_file(path: str, cfg: Optional[AnalysisConfig] = None, load_cfg: Optional[Dict[str, Any]] = None) -> AnalysisResult:
    rows: List[Dict[str, Any]] = load_rows(path, load_cfg)
    log.info(f"Analyzing {path}: {len(rows)} rows")
    return analyze(rows, cfg)
