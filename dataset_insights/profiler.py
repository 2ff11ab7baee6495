from collections import Counter
from dataclasses import replace
from typing import Any, Dict, List

import numpy as np
import pandas as pd

from .base import Column, ColumnSummary, ColumnType, DateRange, ValueCount
from .utils import is_missing, numeric_values, parse_dates, to_text


def summarize_column(column: Column) -> Column:
    values = column.values
    vals_nonnull = [v for v in values if not is_missing(v)]
    missing = len(values) - len(vals_nonnull)
    base = {
        'missing_values': missing,
        'missing_percent': (missing / len(values)) * 100 if values else 0.0,
    }

    if column.type == ColumnType.NUMERIC:
        nums = numeric_values(vals_nonnull)
        if nums.size:
            base.update(
                min=float(nums.min()),
                max=float(nums.max()),
                mean=float(nums.mean()),
                median=float(np.median(nums)),
                std_dev=float(nums.std(ddof=0)),
            )

    elif column.type == ColumnType.CATEGORICAL:
        # Counter keeps first-seen order and sorted() is stable, so ties stay in that order
        counts = Counter(to_text(v) for v in vals_nonnull)
        base['unique_values'] = tuple(
            ValueCount(value=k, count=c)
            for k, c in sorted(counts.items(), key=lambda kv: kv[1], reverse=True)
        )

    elif column.type == ColumnType.DATETIME:
        dates = parse_dates(vals_nonnull).dropna().sort_values()
        if not dates.empty:
            base['date_range'] = DateRange(start=dates.iloc[0], end=dates.iloc[-1])

    return replace(column, summary=ColumnSummary(**base))


def summarize_columns(columns: List[Column]) -> List[Column]:
    return [summarize_column(c) for c in columns]


def profile(columns: List[Column]) -> Dict[str, Any]:
    """Dataset-level overview of already summarized columns."""
    out: Dict[str, Any] = {}
    n_rows = len(columns[0].values) if columns else 0
    out['shape'] = {'rows': n_rows, 'cols': len(columns)}

    by_type: Dict[str, int] = {t.value: 0 for t in ColumnType}
    for c in columns:
        by_type[c.type.value] += 1
    out['column_types'] = by_type

    miss = sorted(
        ((c.name, c.summary.missing_percent) for c in columns if c.summary is not None),
        key=lambda x: x[1],
        reverse=True,
    )
    out['missing_top'] = [{'column': k, 'missing_percent': v} for k, v in miss[:20] if v > 0]

    if columns:
        frame = pd.DataFrame({c.name: [to_text(v) if not is_missing(v) else None for v in c.values] for c in columns})
        out['duplicate_rows'] = int(frame.duplicated().sum())
    else:
        out['duplicate_rows'] = 0
    return out
