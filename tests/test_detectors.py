"""
tests/test_detectors.py

Coverage
--------
- Summary insight
- Correlation: sign, importance scaling, minimum pair count, weak pairs
- Outliers: 3-sigma rule and importance cap
- Trend: direction, chronological ordering, minimum points, flat series
- Distribution: unique-count bounds and coverage text
- Registry lookups and failure isolation
"""

from __future__ import annotations

from datetime import date, timedelta

import pytest

from dataset_insights import detectors
from dataset_insights.base import Column, ColumnType, InsightType
from dataset_insights.detectors import (
    CorrelationDetector,
    DistributionDetector,
    OutlierDetector,
    SummaryDetector,
    TrendDetector,
)
from dataset_insights.profiler import summarize_columns
from dataset_insights.registry import get_detector, registered_names


def _num(name, values) -> Column:
    return Column(name=name, type=ColumnType.NUMERIC, values=tuple(values))


def _cat(name, values) -> Column:
    return Column(name=name, type=ColumnType.CATEGORICAL, values=tuple(values))


def _dates(n, name="day") -> Column:
    start = date(2024, 1, 1)
    return Column(
        name=name,
        type=ColumnType.DATETIME,
        values=tuple((start + timedelta(days=i)).isoformat() for i in range(n)),
    )


# ---------------------------------------------------------------------------
# Summary
# ---------------------------------------------------------------------------

class TestSummary:
    def test_overview_insight(self) -> None:
        cols = [_num("a", [1, 2, 3]), _cat("b", ["x", "y", "z"])]
        [insight] = SummaryDetector().detect(cols, 3)
        assert insight.type == InsightType.SUMMARY
        assert insight.importance == 10
        assert insight.description == "This dataset contains 3 rows and 2 columns."
        assert insight.columns == ("a", "b")


# ---------------------------------------------------------------------------
# Correlation
# ---------------------------------------------------------------------------

class TestCorrelation:
    def test_perfect_negative(self) -> None:
        cols = [_num("a", [1, 2, 3, 4, 5, 6]), _num("b", [6, 5, 4, 3, 2, 1])]
        [insight] = CorrelationDetector().detect(cols, 6)
        assert insight.title == "Strong negative correlation"
        assert insight.importance == pytest.approx(8.0)
        assert insight.description == "a and b have a correlation of -1.00."
        assert insight.chart_type == "scatter"
        assert insight.chart_data[0] == {"x": 1.0, "y": 6.0, "name": "Point 1"}

    def test_positive(self) -> None:
        cols = [_num("a", [1, 2, 3, 4, 5, 6, 7]), _num("b", [2, 4, 5, 8, 10, 13, 14])]
        [insight] = CorrelationDetector().detect(cols, 7)
        assert insight.title == "Strong positive correlation"
        assert 0 < insight.importance <= 8

    def test_five_pairs_is_not_enough(self) -> None:
        cols = [_num("a", [1, 2, 3, 4, 5]), _num("b", [5, 4, 3, 2, 1])]
        assert CorrelationDetector().detect(cols, 5) == []

    def test_rows_with_missing_cells_are_skipped(self) -> None:
        cols = [
            _num("a", [1, 2, None, 3, 4, 5]),
            _num("b", [5, 4, 3, 2, 1, None]),
        ]
        assert CorrelationDetector().detect(cols, 6) == []

    def test_weak_correlation_is_ignored(self) -> None:
        cols = [
            _num("a", [1, 2, 3, 4, 5, 6, 7, 8]),
            _num("b", [1, -1, 1, -1, 1, -1, 1, -1]),
        ]
        assert CorrelationDetector().detect(cols, 8) == []

    def test_constant_column_is_skipped(self) -> None:
        cols = [_num("a", [1, 2, 3, 4, 5, 6]), _num("b", [3] * 6)]
        assert CorrelationDetector().detect(cols, 6) == []

    def test_failure_skips_the_pair(self, monkeypatch) -> None:
        def boom(x, y):
            raise RuntimeError("boom")

        monkeypatch.setattr(detectors, "sample_correlation", boom)
        cols = [_num("a", [1, 2, 3, 4, 5, 6]), _num("b", [6, 5, 4, 3, 2, 1])]
        assert CorrelationDetector().detect(cols, 6) == []


# ---------------------------------------------------------------------------
# Outliers
# ---------------------------------------------------------------------------

class TestOutliers:
    def test_single_far_value(self) -> None:
        [col] = summarize_columns([_num("v", [10] * 30 + [100])])
        [insight] = OutlierDetector().detect([col], 31)
        assert insight.title == "Outliers detected"
        assert insight.importance == pytest.approx(100 / 31)
        assert insight.chart_type == "boxplot"
        assert insight.chart_data[0]["outliers"] == [100.0]
        assert "1 outliers" in insight.description

    def test_uniform_values_have_none(self) -> None:
        [col] = summarize_columns([_num("v", range(1, 31))])
        assert OutlierDetector().detect([col], 30) == []

    def test_importance_is_capped(self) -> None:
        values = [0] * 10 + [1000]
        [col] = summarize_columns([_num("v", values)])
        insights = OutlierDetector().detect([col], len(values))
        assert all(i.importance <= 10 for i in insights)

    def test_requires_summary(self) -> None:
        assert OutlierDetector().detect([_num("v", [1, 2, 100])], 3) == []


# ---------------------------------------------------------------------------
# Trend
# ---------------------------------------------------------------------------

class TestTrend:
    def test_upward(self) -> None:
        cols = [_dates(20), _num("sales", [2 * i for i in range(20)])]
        [insight] = TrendDetector().detect(cols, 20)
        assert insight.title == "Upward trend detected"
        assert insight.description == "sales shows a rising trend over time."
        assert insight.importance == 9
        assert insight.columns == ("day", "sales")
        assert insight.chart_data[0]["date"] == "2024-01-01"
        assert insight.chart_data[-1]["trend"] == pytest.approx(38.0)

    def test_downward(self) -> None:
        cols = [_dates(20), _num("stock", [100 - 0.05 * i for i in range(20)])]
        [insight] = TrendDetector().detect(cols, 20)
        assert insight.title == "Downward trend detected"
        assert insight.importance == pytest.approx(5.0)

    def test_points_are_ordered_by_date(self) -> None:
        dates = _dates(20)
        values = [2 * i for i in range(20)]
        cols = [
            Column("day", ColumnType.DATETIME, tuple(reversed(dates.values))),
            _num("sales", reversed(values)),
        ]
        [insight] = TrendDetector().detect(cols, 20)
        assert insight.title == "Upward trend detected"

    def test_ten_points_is_not_enough(self) -> None:
        cols = [_dates(10), _num("sales", range(10))]
        assert TrendDetector().detect(cols, 10) == []

    def test_flat_series(self) -> None:
        cols = [_dates(20), _num("sales", [5] * 20)]
        assert TrendDetector().detect(cols, 20) == []


# ---------------------------------------------------------------------------
# Distribution
# ---------------------------------------------------------------------------

def _cycle(n_unique, n_rows):
    labels = [f"label{i}" for i in range(n_unique)]
    return [labels[i % n_unique] for i in range(n_rows)]


class TestDistribution:
    def test_fifteen_categories_qualify(self) -> None:
        [insight] = DistributionDetector().detect([_cat("kind", _cycle(15, 1000))], 1000)
        assert insight.title == "kind distribution"
        assert insight.importance == 6
        assert insight.description == "kind has 15 categories; the top 5 cover 33.5% of rows."
        assert len(insight.chart_data) == 10
        assert insight.chart_data[0]["count"] == 67

    def test_sixteen_categories_do_not(self) -> None:
        assert DistributionDetector().detect([_cat("kind", _cycle(16, 1000))], 1000) == []

    def test_single_category_does_not(self) -> None:
        assert DistributionDetector().detect([_cat("kind", ["a"] * 50)], 50) == []

    def test_limit_shrinks_with_small_datasets(self) -> None:
        assert DistributionDetector().detect([_cat("kind", _cycle(11, 100))], 100) == []
        assert DistributionDetector().detect([_cat("kind", _cycle(10, 100))], 100) != []

    def test_long_labels_are_truncated(self) -> None:
        values = ["a very long category name"] * 30 + ["short"] * 30
        [insight] = DistributionDetector().detect([_cat("kind", values)], 60)
        assert insight.chart_data[0]["category"] == "a very long cat..."
        assert insight.chart_data[1]["category"] == "short"


# ---------------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------------

class TestRegistry:
    def test_builtin_detectors_in_order(self) -> None:
        assert registered_names()[:5] == ["summary", "correlation", "outlier", "trend", "distribution"]

    def test_lookup_is_case_insensitive(self) -> None:
        assert isinstance(get_detector("Trend"), TrendDetector)

    def test_unknown_detector(self) -> None:
        with pytest.raises(KeyError):
            get_detector("nope")
