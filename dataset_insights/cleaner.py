from dataclasses import replace
from typing import Any, List, Tuple

import numpy as np

from .base import Column, ColumnType
from .constants import ROW_MISSING_THRESHOLD
from .errors import ValidationError
from .utils import is_missing


def row_validity_mask(columns: List[Column]) -> np.ndarray:
    """True for rows where at most half of the columns are missing."""
    missing = np.array([[is_missing(v) for v in c.values] for c in columns], dtype=bool)
    return missing.sum(axis=0) <= len(columns) * ROW_MISSING_THRESHOLD


def _fill_value(column: Column) -> Any:
    s = column.summary
    if s is None:
        return None
    if column.type == ColumnType.NUMERIC:
        return s.mean
    if column.type == ColumnType.CATEGORICAL and s.unique_values:
        return s.unique_values[0].value
    return None


def clean_data(columns: List[Column]) -> Tuple[List[Column], List[List[Any]], List[str]]:
    """Drop sparse rows from every column at once, then impute the remaining gaps.

    Imputation uses the summaries computed before cleaning: numeric columns get
    their mean, categorical columns their most frequent value, anything else is
    left as-is.
    """
    if not columns:
        raise ValidationError('Cannot clean an empty column set')

    log: List[str] = []
    valid = row_validity_mask(columns)
    dropped = int((~valid).sum())
    if dropped:
        log.append(f"dropped {dropped} rows with more than {int(ROW_MISSING_THRESHOLD * 100)}% missing values")

    cleaned: List[Column] = []
    for c in columns:
        fill = _fill_value(c)
        new_values = []
        imputed = 0
        for v, keep in zip(c.values, valid):
            if not keep:
                continue
            if is_missing(v) and fill is not None:
                new_values.append(fill)
                imputed += 1
            else:
                new_values.append(v)
        if imputed:
            log.append(f"{c.name}: imputed {imputed} missing values")
        cleaned.append(replace(c, values=tuple(new_values)))

    n_rows = len(cleaned[0].values)
    cleaned_data = [[c.values[i] for c in cleaned] for i in range(n_rows)]
    return cleaned, cleaned_data, log
