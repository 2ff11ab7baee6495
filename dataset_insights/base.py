from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

import pandas as pd

from .utils import to_jsonable


class ColumnType(str, Enum):
    NUMERIC = 'numeric'
    CATEGORICAL = 'categorical'
    DATETIME = 'datetime'
    UNKNOWN = 'unknown'


class InsightType(str, Enum):
    CORRELATION = 'correlation'
    OUTLIER = 'outlier'
    TREND = 'trend'
    SEASONALITY = 'seasonality'
    DISTRIBUTION = 'distribution'
    SUMMARY = 'summary'


@dataclass(frozen=True)
class ValueCount:
    value: str
    count: int


@dataclass(frozen=True)
class DateRange:
    start: pd.Timestamp
    end: pd.Timestamp


@dataclass(frozen=True)
class ColumnSummary:
    missing_values: int
    missing_percent: float
    # numeric
    min: Optional[float] = None
    max: Optional[float] = None
    mean: Optional[float] = None
    median: Optional[float] = None
    std_dev: Optional[float] = None
    # categorical
    unique_values: Optional[Tuple[ValueCount, ...]] = None
    # datetime
    date_range: Optional[DateRange] = None


@dataclass(frozen=True)
class Column:
    name: str
    type: ColumnType
    values: Tuple[Any, ...]
    summary: Optional[ColumnSummary] = None


@dataclass(frozen=True)
class Insight:
    type: InsightType
    title: str
    description: str
    importance: float
    columns: Tuple[str, ...]
    chart_type: Optional[str] = None
    chart_data: Optional[Tuple[Dict[str, Any], ...]] = None


@dataclass(frozen=True)
class ForecastResult:
    model_type: str
    forecast: Tuple[float, ...]
    mape: Optional[float]
    params: Dict[str, int]
    historical_data: Tuple[Dict[str, Any], ...] = ()


@dataclass
class AnalysisResult:
    columns: List[Column]
    row_count: int
    insights: List[Insight]
    cleaned_data: Optional[List[List[Any]]] = None
    time_series: Optional[ForecastResult] = None
    warnings: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        def summary_dict(s: Optional[ColumnSummary]) -> Optional[Dict[str, Any]]:
            if s is None:
                return None
            out = {k: v for k, v in s.__dict__.items() if v is not None}
            if s.unique_values is not None:
                out['unique_values'] = [{'value': vc.value, 'count': vc.count} for vc in s.unique_values]
            if s.date_range is not None:
                out['date_range'] = {'start': s.date_range.start, 'end': s.date_range.end}
            return out

        ts = None
        if self.time_series is not None:
            ts = {
                'model_type': self.time_series.model_type,
                'forecast': list(self.time_series.forecast),
                'mape': self.time_series.mape,
                'params': dict(self.time_series.params),
                'historical_data': list(self.time_series.historical_data),
            }
        return to_jsonable({
            'columns': [
                {'name': c.name, 'type': c.type.value, 'values': list(c.values), 'summary': summary_dict(c.summary)}
                for c in self.columns
            ],
            'row_count': self.row_count,
            'insights': [
                {
                    'type': i.type.value,
                    'title': i.title,
                    'description': i.description,
                    'importance': i.importance,
                    'columns': list(i.columns),
                    'chart_type': i.chart_type,
                    'chart_data': list(i.chart_data) if i.chart_data is not None else None,
                }
                for i in self.insights
            ],
            'cleaned_data': self.cleaned_data,
            'time_series': ts,
            'warnings': list(self.warnings),
        })


class DetectorBase:
    """A single insight detector run by the miner.

    Subclasses return zero or more insights and must not raise; a candidate
    that cannot be computed is skipped.
    """
    name: str = 'base'

    def detect(self, columns: List[Column], row_count: int) -> List[Insight]:
        raise NotImplementedError()
