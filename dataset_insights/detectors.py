"""Insight detectors.

Each detector looks at the cleaned columns and emits zero or more insights.
Statistics on degenerate data (constant columns, too few points) can fail;
a detector then logs the failure and skips that candidate rather than raising.
"""
from collections import Counter
from itertools import combinations
from typing import List
import logging

import numpy as np
import pandas as pd

from .base import Column, ColumnType, DetectorBase, Insight, InsightType
from .constants import (
    CATEGORY_LABEL_MAX_LEN,
    CORRELATION_IMPORTANCE_SCALE,
    CORRELATION_MIN_PAIRS,
    CORRELATION_THRESHOLD,
    DISTRIBUTION_CHART_CATEGORIES,
    DISTRIBUTION_IMPORTANCE,
    DISTRIBUTION_MAX_UNIQUE,
    DISTRIBUTION_MAX_UNIQUE_RATIO,
    DISTRIBUTION_TOP_N,
    OUTLIER_MAX_IMPORTANCE,
    OUTLIER_SIGMA,
    SUMMARY_IMPORTANCE,
    TREND_IMPORTANCE_SCALE,
    TREND_MAX_IMPORTANCE,
    TREND_MIN_POINTS,
    TREND_SLOPE_THRESHOLD,
)
from .registry import register
from .regression import fit_trend, sample_correlation
from .utils import is_missing, numeric_values, parse_dates, to_number, to_text

log = logging.getLogger("dataset_insights.detectors")


def _of_type(columns: List[Column], ctype: ColumnType) -> List[Column]:
    return [c for c in columns if c.type == ctype]


@register('summary')
class SummaryDetector(DetectorBase):
    name = 'summary'

    def detect(self, columns, row_count):
        return [Insight(
            type=InsightType.SUMMARY,
            title='Dataset Overview',
            description=f"This dataset contains {row_count} rows and {len(columns)} columns.",
            importance=SUMMARY_IMPORTANCE,
            columns=tuple(c.name for c in columns),
        )]


@register('correlation')
class CorrelationDetector(DetectorBase):
    name = 'correlation'

    def detect(self, columns, row_count):
        out = []
        for col1, col2 in combinations(_of_type(columns, ColumnType.NUMERIC), 2):
            try:
                pairs = []
                for v1, v2 in zip(col1.values, col2.values):
                    if is_missing(v1) or is_missing(v2):
                        continue
                    x, y = to_number(v1), to_number(v2)
                    if x is not None and y is not None:
                        pairs.append((x, y))
                if len(pairs) <= CORRELATION_MIN_PAIRS:
                    continue

                r = sample_correlation([p[0] for p in pairs], [p[1] for p in pairs])
                if np.isnan(r) or abs(r) <= CORRELATION_THRESHOLD:
                    continue

                out.append(Insight(
                    type=InsightType.CORRELATION,
                    title=f"Strong {'positive' if r > 0 else 'negative'} correlation",
                    description=f"{col1.name} and {col2.name} have a correlation of {r:.2f}.",
                    importance=abs(r) * CORRELATION_IMPORTANCE_SCALE,
                    columns=(col1.name, col2.name),
                    chart_type='scatter',
                    chart_data=tuple(
                        {'x': x, 'y': y, 'name': f"Point {i + 1}"} for i, (x, y) in enumerate(pairs)
                    ),
                ))
            except Exception as e:
                log.debug(f"correlation skipped for {col1.name}/{col2.name}: {e}")
        return out


@register('outlier')
class OutlierDetector(DetectorBase):
    name = 'outlier'

    def detect(self, columns, row_count):
        out = []
        for col in _of_type(columns, ColumnType.NUMERIC):
            s = col.summary
            if s is None or s.mean is None or s.std_dev is None:
                continue
            try:
                nums = numeric_values(col.values)
                if not nums.size:
                    continue
                mask = np.abs(nums - s.mean) > OUTLIER_SIGMA * s.std_dev
                n_out = int(mask.sum())
                if n_out == 0:
                    continue
                pct = n_out / nums.size * 100
                q1, median, q3 = np.percentile(nums, [25, 50, 75])
                out.append(Insight(
                    type=InsightType.OUTLIER,
                    title='Outliers detected',
                    description=f"{col.name} has {n_out} outliers ({pct:.1f}% of values).",
                    importance=min(pct, OUTLIER_MAX_IMPORTANCE),
                    columns=(col.name,),
                    chart_type='boxplot',
                    chart_data=({
                        'column': col.name,
                        'min': float(nums.min()),
                        'q1': float(q1),
                        'median': float(median),
                        'q3': float(q3),
                        'max': float(nums.max()),
                        'outliers': [float(v) for v in nums[mask]],
                    },),
                ))
            except Exception as e:
                log.debug(f"outlier check skipped for {col.name}: {e}")
        return out


@register('trend')
class TrendDetector(DetectorBase):
    """Linear trend of each numeric column over each datetime column.

    The line is fitted against the position in the date-sorted series, not
    elapsed time, so irregular sampling shows up in the slope.
    """
    name = 'trend'

    def detect(self, columns, row_count):
        out = []
        numeric = _of_type(columns, ColumnType.NUMERIC)
        for date_col in _of_type(columns, ColumnType.DATETIME):
            dates = parse_dates(date_col.values)
            for num_col in numeric:
                try:
                    points = []
                    for d, v in zip(dates, num_col.values):
                        if pd.isna(d) or is_missing(v):
                            continue
                        y = to_number(v)
                        if y is not None:
                            points.append((d, y))
                    if len(points) <= TREND_MIN_POINTS:
                        continue

                    points.sort(key=lambda p: p[0])
                    ys = [p[1] for p in points]
                    line = fit_trend(ys)
                    slope = line.slope
                    if abs(slope) <= TREND_SLOPE_THRESHOLD:
                        continue

                    fitted = line.predict(np.arange(len(ys)))
                    rising = slope > 0
                    out.append(Insight(
                        type=InsightType.TREND,
                        title=f"{'Upward' if rising else 'Downward'} trend detected",
                        description=f"{num_col.name} shows a {'rising' if rising else 'falling'} trend over time.",
                        importance=min(abs(slope) * TREND_IMPORTANCE_SCALE, TREND_MAX_IMPORTANCE),
                        columns=(date_col.name, num_col.name),
                        chart_type='line',
                        chart_data=tuple(
                            {'date': d.strftime('%Y-%m-%d'), 'value': y, 'trend': float(t)}
                            for (d, y), t in zip(points, fitted)
                        ),
                    ))
                except Exception as e:
                    log.debug(f"trend skipped for {date_col.name}/{num_col.name}: {e}")
        return out


def _label(value: str) -> str:
    if len(value) > CATEGORY_LABEL_MAX_LEN:
        return value[:CATEGORY_LABEL_MAX_LEN] + '...'
    return value


@register('distribution')
class DistributionDetector(DetectorBase):
    name = 'distribution'

    def detect(self, columns, row_count):
        out = []
        limit = min(DISTRIBUTION_MAX_UNIQUE, DISTRIBUTION_MAX_UNIQUE_RATIO * row_count)
        for col in _of_type(columns, ColumnType.CATEGORICAL):
            try:
                counts = Counter(to_text(v) for v in col.values if not is_missing(v))
                n_unique = len(counts)
                if not (1 < n_unique <= limit):
                    continue
                top = sorted(counts.items(), key=lambda kv: kv[1], reverse=True)
                top_n = top[:DISTRIBUTION_TOP_N]
                covered = sum(cnt for _, cnt in top_n) / row_count * 100
                out.append(Insight(
                    type=InsightType.DISTRIBUTION,
                    title=f"{col.name} distribution",
                    description=(
                        f"{col.name} has {n_unique} categories; the top {len(top_n)} "
                        f"cover {covered:.1f}% of rows."
                    ),
                    importance=DISTRIBUTION_IMPORTANCE,
                    columns=(col.name,),
                    chart_type='bar',
                    chart_data=tuple(
                        {'category': _label(v), 'count': cnt, 'percent': cnt / row_count * 100}
                        for v, cnt in top[:DISTRIBUTION_CHART_CATEGORIES]
                    ),
                ))
            except Exception as e:
                log.debug(f"distribution skipped for {col.name}: {e}")
        return out
