"""Cell coercion helpers plus the file sniffing used by the loader.

Raw cells are ``None``, numbers, strings, or date objects already parsed by an
ingestion step. Every helper here turns an unusable value into ``None``/``NaT``
instead of NaN so downstream statistics never see a poisoned value.
"""
from datetime import date, datetime
from typing import Any, Iterable, List, Optional, Tuple, Union
import csv
import math
import re

import chardet
import numpy as np
import pandas as pd

Cell = Union[None, int, float, str, date, datetime]

# a four-digit year, or three numeric day/month/year groups ("1/5/24")
_DATE_SHAPE_RE = re.compile(r"(?<!\d)\d{4}(?!\d)|\d{1,2}[/.\-]\d{1,2}[/.\-]\d{2,4}")


def is_missing(v: Any) -> bool:
    if v is None or v is pd.NaT or v is pd.NA:
        return True
    if isinstance(v, (float, np.floating)) and math.isnan(v):
        return True
    if isinstance(v, str) and not v.strip():
        return True
    return False


def to_number(v: Any) -> Optional[float]:
    # bool is an int subclass but never a measurement
    if isinstance(v, (bool, np.bool_)):
        return None
    if isinstance(v, (int, float, np.integer, np.floating)):
        f = float(v)
    elif isinstance(v, str):
        try:
            f = float(v.strip())
        except ValueError:
            return None
    else:
        return None
    return f if math.isfinite(f) else None


def to_text(v: Any) -> str:
    if isinstance(v, (float, np.floating)) and math.isfinite(v) and float(v).is_integer():
        return str(int(v))
    return str(v)


def numeric_values(values: Iterable[Any]) -> np.ndarray:
    out = [to_number(v) for v in values if not is_missing(v)]
    return np.array([f for f in out if f is not None], dtype=float)


def _date_candidate(v: Any) -> Any:
    if isinstance(v, (datetime, date)):
        return v
    if isinstance(v, str):
        s = v.strip()
        # bare numbers ("2020") are measurements; ordinals, clock times and
        # "Jan 5" have no year for dateutil to anchor on
        if s and _DATE_SHAPE_RE.search(s) and to_number(s) is None:
            return s
    return None


def parse_dates(values: Iterable[Any]) -> pd.Series:
    """Parse cells to UTC timestamps positionally; unparsable cells become NaT."""
    candidates = [_date_candidate(v) for v in values]
    if all(c is None for c in candidates):
        return pd.Series(pd.NaT, index=range(len(candidates)), dtype="datetime64[ns, UTC]")
    return pd.to_datetime(
        pd.Series(candidates, dtype=object), errors="coerce", utc=True, format="mixed"
    )


def to_jsonable(x: Any) -> Any:
    if isinstance(x, (np.integer,)):
        return int(x)
    if isinstance(x, (np.floating,)):
        return float(x)
    if isinstance(x, (np.ndarray,)):
        return x.tolist()
    if isinstance(x, (pd.Timestamp, datetime, date)):
        return x.isoformat()
    if isinstance(x, dict):
        return {k: to_jsonable(v) for k, v in x.items()}
    if isinstance(x, (list, tuple)):
        return [to_jsonable(v) for v in x]
    return x


DELIMITERS = (',', '\t', ';', '|')


def _column_consistency(lines: List[str], delim: str) -> float:
    widths = [len(line.split(delim)) for line in lines]
    return sum(widths) / len(widths) - 0.1 * (max(widths) - min(widths))


def rank_delimiters(sample: str) -> List[str]:
    """Delimiters to try on ``sample``, most likely first.

    csv.Sniffer's pick (restricted to :data:`DELIMITERS`) leads; the rest are
    ordered by how many columns they produce and how steadily.
    """
    lines = [line for line in sample.splitlines() if line.strip()][:20]
    ranked = list(DELIMITERS)
    if lines:
        ranked.sort(key=lambda d: _column_consistency(lines, d), reverse=True)
    try:
        sniffed = csv.Sniffer().sniff(sample, delimiters=''.join(DELIMITERS)).delimiter
    except csv.Error:
        return ranked
    return [sniffed] + [d for d in ranked if d != sniffed]


def sniff_text_table(path: str, sample_size: int = 16384) -> Tuple[str, List[str]]:
    """Encoding (chardet, utf-8 when undecided) and ranked delimiters for a text table."""
    with open(path, "rb") as f:
        raw = f.read(sample_size)
    encoding = chardet.detect(raw[:4096]).get("encoding") or "utf-8"
    try:
        sample = raw.decode(encoding, errors="ignore")
    except LookupError:
        encoding = "utf-8"
        sample = raw.decode(encoding, errors="ignore")
    return encoding, rank_delimiters(sample)
