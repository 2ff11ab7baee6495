from __future__ import annotations

from datetime import date, timedelta

import pytest


@pytest.fixture()
def sales_rows() -> list[dict]:
    """60 daily rows: rising sales, correlated units, three regions, two gaps."""
    start = date(2024, 1, 1)
    regions = ["north", "south", "east"]
    rows = []
    for i in range(60):
        rows.append({
            "date": (start + timedelta(days=i)).isoformat(),
            "sales": 100 + 2 * i + (5 if i % 7 == 0 else 0),
            "units": 10 + i,
            "region": regions[i % 3],
        })
    rows[5]["units"] = None
    rows[11]["region"] = ""
    return rows


@pytest.fixture()
def short_series_rows() -> list[dict]:
    """15 dated rows: enough for insights, too few for a forecast."""
    start = date(2024, 1, 1)
    return [
        {"date": (start + timedelta(days=i)).isoformat(), "value": 50 + i}
        for i in range(15)
    ]
