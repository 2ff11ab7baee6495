from typing import Any, Dict, List, Sequence, Tuple

from .constants import DEFAULT_CONFIG
from .schema_inference import column_names
from .utils import is_missing


def validate_rows(rows: Sequence[Dict[str, Any]], cfg: Dict[str, Any]) -> Tuple[List[str], List[str]]:
    warnings = []
    errors = []

    if not rows:
        errors.append('Empty or unreadable table')
        return warnings, errors

    cols = column_names(rows)
    if not cols:
        errors.append('Table has no columns')
        return warnings, errors

    if len(rows) < 10:
        warnings.append('Very small number of rows (<10)')

    max_rows = cfg.get('max_rows', DEFAULT_CONFIG['max_rows'])
    if len(rows) > max_rows:
        warnings.append(f'{len(rows)} rows exceeds the recommended maximum of {max_rows}; analysis may be slow')

    # mostly empty columns
    many_missing = []
    for c in cols:
        missing = sum(1 for r in rows if is_missing(r.get(c)))
        if missing / len(rows) > 0.95:
            many_missing.append(c)
    if many_missing:
        warnings.append(f'Columns with >95% missing values: {many_missing[:10]}')

    # malformed CSV detection: single column with many commas -> warn
    if len(cols) == 1:
        s = [str(r.get(cols[0])) for r in rows[:100]]
        comma_lines = sum(1 for v in s if ',' in v)
        if comma_lines > 5:
            warnings.append('File might be malformed CSV (single-column parse).')

    return warnings, errors
