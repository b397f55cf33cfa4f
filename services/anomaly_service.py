"""
Anomaly detection service facade wiring the pure detection pipeline to the historical data provider and metrics catalog supplied by the host application.

Copyright (c) 2026 Stefan Kumarasinghe
Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""
from __future__ import annotations

import asyncio
from datetime import datetime
from typing import Optional, Sequence

from api.requests import DataPoint, DetectionOptions, TimeRange
from api.responses import AnomalyDetectionResult, DashboardAnomalyInsights, RealtimeAnomalyResult
from datasources.base import HistoricalDataProvider, MetricsCatalog
from engine.pipeline import detect
from services.dashboard_service import DashboardAggregator
from services.realtime_service import RealtimeDetector


class AnomalyDetectionService:
    def __init__(
        self,
        provider: HistoricalDataProvider,
        catalog: MetricsCatalog,
        max_parallel_metrics: Optional[int] = None,
    ) -> None:
        self.provider = provider
        self.catalog = catalog
        self.realtime = RealtimeDetector(provider)
        self.dashboards = DashboardAggregator(provider, catalog, max_parallel=max_parallel_metrics)

    def detect(
        self,
        data: Sequence[DataPoint],
        options: Optional[DetectionOptions] = None,
    ) -> AnomalyDetectionResult:
        return detect(data, options)

    async def detect_metric(
        self,
        metric_id: str,
        start: datetime,
        end: datetime,
        options: Optional[DetectionOptions] = None,
    ) -> AnomalyDetectionResult:
        data = await self.provider.fetch_range(metric_id, start, end)
        return await asyncio.to_thread(detect, data, options)

    async def detect_realtime(
        self,
        metric_id: str,
        current_value: float,
        timestamp: Optional[datetime] = None,
    ) -> RealtimeAnomalyResult:
        return await self.realtime.detect(metric_id, current_value, timestamp)

    async def detect_for_dashboard(self, dashboard_id: str, time_range: TimeRange) -> DashboardAnomalyInsights:
        return await self.dashboards.detect(dashboard_id, time_range)

    async def aclose(self) -> None:
        await self.provider.aclose()
