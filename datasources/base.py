"""
Collaborator contracts consumed by the realtime and dashboard layers: a source of historical data points per metric and a catalog of the metrics shown on a dashboard.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from abc import ABC, abstractmethod
from datetime import datetime, timedelta, timezone
from typing import List, Optional

from pydantic import BaseModel

from api.requests import DataPoint
from config import settings


class MetricRef(BaseModel):
    model_config = {"frozen": True}

    id: str
    name: str


class HistoricalDataProvider(ABC):
    """Source of chronologically ordered data points for a metric.

    Implementations perform I/O; their exceptions propagate to callers
    unchanged.
    """

    @abstractmethod
    async def fetch_range(self, metric_id: str, start: datetime, end: datetime) -> List[DataPoint]: ...

    async def fetch(self, metric_id: str, window_days: Optional[int] = None) -> List[DataPoint]:
        if window_days is None:
            window_days = settings.realtime_history_days
        end = datetime.now(timezone.utc)
        return await self.fetch_range(metric_id, end - timedelta(days=window_days), end)

    async def aclose(self) -> None:
        return None


class MetricsCatalog(ABC):
    @abstractmethod
    async def list_metrics(self, dashboard_id: str) -> List[MetricRef]: ...
