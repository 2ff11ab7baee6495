from pathlib import Path
from typing import Any, Dict, List, Optional
import logging

import pandas as pd

from .errors import LoadError
from .utils import sniff_text_table

log = logging.getLogger("dataset_insights.loader")


def load_rows(path: str, cfg: Optional[Dict[str, Any]] = None) -> List[Dict[str, Any]]:
    """Read a tabular file into a list of ``{column: value}`` rows with NaN as None."""
    return frame_to_rows(load_frame(path, cfg or {}))


def frame_to_rows(df: pd.DataFrame) -> List[Dict[str, Any]]:
    df = df.astype(object)
    return df.where(pd.notna(df), None).to_dict('records')


def load_frame(path: str, cfg: Dict[str, Any]) -> pd.DataFrame:
    p = Path(path)
    if not p.exists():
        raise LoadError(f"File not found: {path}")

    ext = p.suffix.lower()
    override = cfg.get("type_override")
    if ext in (".csv", ".tsv", ".txt") or override == "csv":
        return _load_csv(p)
    if ext in (".xls", ".xlsx") or override == "excel":
        return _load_excel(p, cfg)
    if ext == ".parquet" or override == "parquet":
        return _load_parquet(p)
    if ext == ".json" or override == "json":
        return _load_json(p)
    raise LoadError(f"Unsupported file type: {ext}")


def _clean_columns(df: pd.DataFrame) -> pd.DataFrame:
    # header repair: strip, remove BOM, replace line breaks, dedupe
    new_cols = []
    seen = {}
    for c in list(df.columns):
        name = str(c).strip().lstrip('\ufeff')
        name = name.replace('\n', ' ').replace('\r', ' ').strip()
        if not name or name.startswith('Unnamed:'):
            name = 'col'
        base = name
        i = 1
        while name in seen:
            i += 1
            name = f"{base}__{i}"
        seen[name] = True
        new_cols.append(name)
    df.columns = new_cols
    return df


def _load_csv(p: Path) -> pd.DataFrame:
    enc, candidates = sniff_text_table(str(p))

    last_exc = None
    best_df = None
    best_delim = None
    for delim in candidates:
        try:
            df = pd.read_csv(str(p), encoding=enc, delimiter=delim, engine='c',
                             low_memory=False, on_bad_lines='skip', skip_blank_lines=True)
        except (pd.errors.ParserError, pd.errors.EmptyDataError, UnicodeDecodeError) as e:
            last_exc = e
            log.debug(f"CSV parse failed for delimiter {repr(delim)}: {e}")
            continue
        if df.shape[1] > 1:
            log.info(f"CSV loaded with delimiter={repr(delim)} encoding={enc}")
            return _clean_columns(df)
        if best_df is None:
            best_df, best_delim = df, delim

    if best_df is not None:
        log.warning(f"CSV loaded with best-effort delimiter={repr(best_delim)} (single column)")
        return _clean_columns(best_df)
    raise LoadError(f"CSV load failed: {last_exc}") from last_exc


def _load_excel(p: Path, cfg: Dict[str, Any]) -> pd.DataFrame:
    try:
        df = pd.read_excel(str(p), sheet_name=cfg.get("excel_sheet") or 0)
    except Exception as e:
        log.exception("Excel load failed")
        raise LoadError(f"Excel load failed: {e}") from e
    return _clean_columns(df)


def _load_parquet(p: Path) -> pd.DataFrame:
    try:
        df = pd.read_parquet(str(p))
    except Exception as e:
        log.exception("Parquet load failed")
        raise LoadError(f"Parquet load failed: {e}") from e
    return _clean_columns(df)


def _load_json(p: Path) -> pd.DataFrame:
    try:
        obj = pd.read_json(str(p), orient='records', convert_dates=False)
    except ValueError as e:
        log.exception("JSON load failed")
        raise LoadError(f"JSON load failed: {e}") from e
    return _clean_columns(obj)
