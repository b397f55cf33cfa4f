import os
import sys
from datetime import datetime, timedelta, timezone

import pytest

# ensure workspace root is on sys.path so our application packages can be imported
ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from api.requests import DataPoint

START = datetime(2026, 1, 1, tzinfo=timezone.utc)


def make_points(values, start=START, step=timedelta(days=1), metadata=None):
    return [
        DataPoint(timestamp=start + i * step, value=float(v), metadata=metadata)
        for i, v in enumerate(values)
    ]


class FakeProvider:
    """Async historical data provider backed by a dict of metric id -> values."""

    def __init__(self, series=None, errors=None):
        self.series = series or {}
        self.errors = errors or {}
        self.calls = []

    async def fetch_range(self, metric_id, start, end):
        self.calls.append(("range", metric_id, start, end))
        if metric_id in self.errors:
            raise self.errors[metric_id]
        return make_points(self.series.get(metric_id, []))

    async def fetch(self, metric_id, window_days=None):
        self.calls.append(("fetch", metric_id, window_days))
        if metric_id in self.errors:
            raise self.errors[metric_id]
        return make_points(self.series.get(metric_id, []))

    async def aclose(self):
        return None


@pytest.fixture
def points():
    return make_points
