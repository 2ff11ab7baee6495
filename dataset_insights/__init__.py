"""Column typing, cleaning, insight mining and seasonal forecasting for tabular data."""

from .base import (
    AnalysisResult,
    Column,
    ColumnSummary,
    ColumnType,
    DateRange,
    ForecastResult,
    Insight,
    InsightType,
    ValueCount,
)
from .cleaner import clean_data
from .config import AnalysisConfig, configure_logging, load_config
from .errors import (
    AnalysisError,
    ForecastError,
    InsufficientDataError,
    LoadError,
    ValidationError,
)
from .forecast import forecast_columns, seasonal_forecast, select_period
from .loader import load_rows
from .miner import mine_insights
from .pipeline import analyze, analyze_file
from .profiler import profile, summarize_columns
from .schema_inference import infer_column_types, infer_type

__all__ = [
    "AnalysisConfig",
    "AnalysisError",
    "AnalysisResult",
    "Column",
    "ColumnSummary",
    "ColumnType",
    "DateRange",
    "ForecastError",
    "ForecastResult",
    "Insight",
    "InsightType",
    "InsufficientDataError",
    "LoadError",
    "ValidationError",
    "ValueCount",
    "analyze",
    "analyze_file",
    "clean_data",
    "configure_logging",
    "forecast_columns",
    "infer_column_types",
    "infer_type",
    "load_config",
    "load_rows",
    "mine_insights",
    "profile",
    "seasonal_forecast",
    "select_period",
    "summarize_columns",
]
