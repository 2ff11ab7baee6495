"""Schema inference helpers.

Classify each column of raw parsed rows as datetime, numeric, categorical or
unknown. First match wins, in that order, and a type needs to cover at least
``TYPE_DOMINANCE_RATIO`` of the non-missing cells so a few malformed entries
do not flip a column.
"""
from typing import Any, Dict, List, Sequence

from .base import Column, ColumnType
from .constants import TYPE_DOMINANCE_RATIO
from .utils import is_missing, parse_dates, to_number


def column_names(rows: Sequence[Dict[str, Any]]) -> List[str]:
    names: Dict[str, None] = {}
    for row in rows:
        for k in row.keys():
            names.setdefault(k, None)
    return list(names)


def infer_type(values: Sequence[Any]) -> ColumnType:
    vals_nonnull = [v for v in values if not is_missing(v)]
    if not vals_nonnull:
        return ColumnType.UNKNOWN

    needed = TYPE_DOMINANCE_RATIO * len(vals_nonnull)

    date_count = int(parse_dates(vals_nonnull).notna().sum())
    if date_count >= needed:
        return ColumnType.DATETIME

    num_count = sum(1 for v in vals_nonnull if to_number(v) is not None)
    if num_count >= needed:
        return ColumnType.NUMERIC

    return ColumnType.CATEGORICAL


def infer_column_types(rows: Sequence[Dict[str, Any]]) -> List[Column]:
    out = []
    for name in column_names(rows):
        values = tuple(row.get(name) for row in rows)
        out.append(Column(name=name, type=infer_type(values), values=values))
    return out
