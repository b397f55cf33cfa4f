from __future__ import annotations

from typing import Dict, Iterable, List, Mapping, Union

from datasources.base import MetricRef, MetricsCatalog
from datasources.exceptions import UnknownDashboard

MetricSpec = Union[MetricRef, Mapping[str, str]]


class StaticMetricsCatalog(MetricsCatalog):
    """In-memory dashboard -> metrics mapping."""

    def __init__(self, dashboards: Mapping[str, Iterable[MetricSpec]], strict: bool = False):
        self._dashboards: Dict[str, List[MetricRef]] = {
            dashboard_id: [m if isinstance(m, MetricRef) else MetricRef(**m) for m in metrics]
            for dashboard_id, metrics in dashboards.items()
        }
        self.strict = strict

    async def list_metrics(self, dashboard_id: str) -> List[MetricRef]:
        if dashboard_id not in self._dashboards:
            if self.strict:
                raise UnknownDashboard(f"unknown dashboard: {dashboard_id}")
            return []
        # dedupe by id, first occurrence wins
        seen: Dict[str, MetricRef] = {}
        for metric in self._dashboards[dashboard_id]:
            seen.setdefault(metric.id, metric)
        return list(seen.values())
