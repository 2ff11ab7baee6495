"""Small numeric building blocks shared by the trend detector and the forecaster."""
from typing import Sequence

import numpy as np
from scipy.stats import pearsonr
from sklearn.linear_model import LinearRegression


def sample_correlation(x: Sequence[float], y: Sequence[float]) -> float:
    """Sample Pearson correlation; NaN when either side has zero variance."""
    xa = np.asarray(x, dtype=float)
    ya = np.asarray(y, dtype=float)
    if xa.size != ya.size or xa.size < 2:
        return float('nan')
    if not (np.isfinite(xa).all() and np.isfinite(ya).all()):
        return float('nan')
    # pearsonr only warns on constant input, so check it here
    if np.ptp(xa) == 0 or np.ptp(ya) == 0:
        return float('nan')
    r, _ = pearsonr(xa, ya)
    return max(-1.0, min(1.0, float(r)))


class TrendLine:
    """Ordinary least-squares line fitted against the point index 0..n-1."""

    def __init__(self, model: LinearRegression):
        self._model = model

    @property
    def slope(self) -> float:
        return float(self._model.coef_[0])

    @property
    def intercept(self) -> float:
        return float(self._model.intercept_)

    def predict(self, x) -> np.ndarray:
        xs = np.atleast_1d(np.asarray(x, dtype=float)).reshape(-1, 1)
        return self._model.predict(xs)


def fit_trend(y: Sequence[float]) -> TrendLine:
    ya = np.asarray(y, dtype=float)
    if ya.size < 2:
        raise ValueError(f"Need at least 2 points to fit a trend, got {ya.size}")
    if not np.isfinite(ya).all():
        raise ValueError("Cannot fit a trend through non-finite values")
    xs = np.arange(ya.size, dtype=float).reshape(-1, 1)
    return TrendLine(LinearRegression().fit(xs, ya))
