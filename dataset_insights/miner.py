from typing import List, Optional, Sequence

from . import detectors  # noqa: F401  registers the built-in detectors
from .base import Column, Insight
from .registry import get_detector, get_detectors


def mine_insights(columns: List[Column], detector_names: Optional[Sequence[str]] = None) -> List[Insight]:
    """Run the detector battery and rank the findings by importance, highest first."""
    row_count = len(columns[0].values) if columns else 0
    battery = [get_detector(n) for n in detector_names] if detector_names else get_detectors()

    insights: List[Insight] = []
    for det in battery:
        insights.extend(det.detect(columns, row_count))
    return sorted(insights, key=lambda i: i.importance, reverse=True)
