"""Seasonal-decomposition forecasting.

A deliberately simple SARIMA stand-in: smooth the series, estimate one
multiplicative seasonal factor per phase, fit a straight line through the
deseasonalized values and project ``trend(x) * factor[x mod period]``.
There is no maximum-likelihood estimation anywhere in here.

Unlike the insight detectors, everything in this module raises
:class:`ForecastError` on failure and never returns a partial result.
"""
from __future__ import annotations

import logging
from typing import List, Optional, Sequence

import numpy as np
import pandas as pd
from scipy.signal import savgol_filter

from .base import Column, ColumnType, ForecastResult
from .config import AnalysisConfig
from .constants import (
    FORECAST_MODEL_LABEL,
    SEASONALITY_MIN_SUBSET,
    SMOOTHING_MAX_WINDOW,
    SMOOTHING_POLYORDER,
    VALIDATION_FRACTION,
)
from .errors import ForecastError, InsufficientDataError
from .regression import TrendLine, fit_trend, sample_correlation
from .utils import is_missing, parse_dates, to_number

log = logging.getLogger("dataset_insights.forecast")


def build_series(columns: List[Column], min_points: int = 20) -> Optional[List[float]]:
    """Values of the first numeric column ordered by the first datetime column.

    Returns None when the dataset has no datetime/numeric pair at all.
    """
    date_col = next((c for c in columns if c.type == ColumnType.DATETIME), None)
    num_col = next((c for c in columns if c.type == ColumnType.NUMERIC), None)
    if date_col is None or num_col is None:
        return None

    points = []
    for d, v in zip(parse_dates(date_col.values), num_col.values):
        if pd.isna(d) or is_missing(v):
            continue
        y = to_number(v)
        if y is not None:
            points.append((d, y))

    if len(points) < min_points:
        raise InsufficientDataError(min_points, len(points), "valid date/value pairs")

    points.sort(key=lambda p: p[0])
    return [p[1] for p in points]


def lag_correlation_score(data: Sequence[float], period: int) -> float:
    """Average correlation between each phase's values and the same phase one period later."""
    arr = np.asarray(data, dtype=float)
    n = arr.size
    correlations = []
    for i in range(period):
        now = arr[i:n - period:period]
        later = arr[i + period:n:period]
        if len(now) > SEASONALITY_MIN_SUBSET:
            correlations.append(sample_correlation(now, later))
    valid = [r for r in correlations if not np.isnan(r)]
    return float(np.mean(valid)) if valid else 0.0


def select_period(
    data: Sequence[float],
    candidates: Sequence[int] = (7, 12, 4, 30),
    default: int = 7,
) -> int:
    if not candidates or len(data) < 2 * max(candidates):
        return default
    best_period, best_score = default, 0.0
    for period in candidates:
        score = lag_correlation_score(data, period)
        if score > best_score:
            best_period, best_score = period, score
    return best_period


def smooth(data: np.ndarray) -> np.ndarray:
    # savgol needs an odd window longer than the polynomial order
    window = min(SMOOTHING_MAX_WINDOW, len(data) // 3)
    if window % 2 == 0:
        window -= 1
    window = max(window, SMOOTHING_POLYORDER + 1)
    return savgol_filter(data, window, SMOOTHING_POLYORDER)


def seasonal_factors(data: np.ndarray, period: int) -> np.ndarray:
    phase_means = np.array([data[i::period].mean() for i in range(period)])
    with np.errstate(divide='ignore', invalid='ignore'):
        factors = phase_means / phase_means.mean()
    if not np.isfinite(factors).all() or np.any(factors == 0):
        raise ForecastError("Seasonal factors are undefined for this series (zero-mean phase or series)")
    return factors


def validation_mape(
    data: np.ndarray,
    trend: TrendLine,
    factors: np.ndarray,
    period: int,
    horizon: int,
) -> Optional[float]:
    """MAPE of the fitted model over the last ``min(horizon, 20%)`` observations.

    Zero actuals have no defined percentage error and are left out; when the
    whole window is zero (or empty) the result is None.
    """
    n = data.size
    test_size = min(horizon, int(n * VALIDATION_FRACTION))
    if test_size <= 0:
        return None
    xs = np.arange(n - test_size, n)
    predicted = trend.predict(xs) * factors[xs % period]
    actual = data[xs]
    usable = actual != 0
    if not usable.any():
        log.warning("MAPE undefined: every actual value in the validation window is zero")
        return None
    return float(np.mean(np.abs((actual[usable] - predicted[usable]) / actual[usable])) * 100)


def seasonal_forecast(data: Sequence[float], period: int = 7, horizon: int = 10) -> ForecastResult:
    arr = np.asarray(data, dtype=float)
    n = arr.size
    if period < 1:
        raise ForecastError(f"Seasonal period must be positive, got {period}")
    if horizon < 1:
        raise ForecastError(f"Forecast horizon must be positive, got {horizon}")
    if n < 2 * period:
        raise InsufficientDataError(2 * period, n)
    if not np.isfinite(arr).all():
        raise ForecastError("Series contains non-finite values")

    try:
        smoothed = smooth(arr)
    except (ValueError, np.linalg.LinAlgError) as e:
        raise ForecastError(f"Smoothing failed: {e}") from e

    factors = seasonal_factors(arr, period)
    deseasonalized = arr / factors[np.arange(n) % period]

    try:
        trend = fit_trend(deseasonalized)
    except ValueError as e:
        raise ForecastError(f"Trend regression failed: {e}") from e

    xs = np.arange(n, n + horizon)
    forecast = trend.predict(xs) * factors[xs % period]

    return ForecastResult(
        model_type=FORECAST_MODEL_LABEL,
        forecast=tuple(float(v) for v in forecast),
        mape=validation_mape(arr, trend, factors, period, horizon),
        params={'period': int(period)},
        historical_data=tuple(
            {'index': i, 'value': float(v), 'type': 'Historical'} for i, v in enumerate(smoothed)
        ),
    )


def forecast_columns(columns: List[Column], cfg: Optional[AnalysisConfig] = None) -> Optional[ForecastResult]:
    cfg = cfg or AnalysisConfig()
    data = build_series(columns, cfg.min_forecast_points)
    if data is None:
        log.debug("no datetime/numeric column pair; skipping forecast")
        return None
    period = select_period(data, cfg.candidate_periods, cfg.default_period)
    result = seasonal_forecast(data, period, cfg.forecast_horizon)
    log.info(f"Forecast produced: period={period} points={len(data)} mape={result.mape}")
    return result
