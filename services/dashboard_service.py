"""
Dashboard aggregator service that fans the detection pipeline out over every metric on a dashboard and ranks the metrics by criticality.

Copyright (c) 2026 Stefan Kumarasinghe
Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""
from __future__ import annotations

import asyncio
import logging
from typing import List, Optional, Tuple

from api.requests import DetectionOptions, TimeRange
from api.responses import AnomalyDetectionResult, DashboardAnomalyInsights
from datasources.base import HistoricalDataProvider, MetricRef, MetricsCatalog
from engine import dashboard
from engine.pipeline import detect
from config import settings

log = logging.getLogger(__name__)


class DashboardAggregator:
    def __init__(
        self,
        provider: HistoricalDataProvider,
        catalog: MetricsCatalog,
        max_parallel: Optional[int] = None,
    ) -> None:
        self.provider = provider
        self.catalog = catalog
        self.max_parallel = max(1, int(max_parallel or settings.dashboard_max_parallel_metrics))

    async def _detect_metric(
        self,
        sem: asyncio.Semaphore,
        metric: MetricRef,
        time_range: TimeRange,
        options: DetectionOptions,
    ) -> Tuple[MetricRef, AnomalyDetectionResult]:
        # each await is a cancellation point; metrics still waiting on the
        # semaphore never start once the caller cancels
        async with sem:
            data = await self.provider.fetch_range(metric.id, time_range.start, time_range.end)
            result = await asyncio.to_thread(detect, data, options)
        log.debug("dashboard metric=%s points=%d anomalies=%d", metric.id, len(data), len(result.anomalies))
        return metric, result

    async def detect(self, dashboard_id: str, time_range: TimeRange) -> DashboardAnomalyInsights:
        metrics = await self.catalog.list_metrics(dashboard_id)
        options = dashboard.dashboard_options()
        sem = asyncio.Semaphore(self.max_parallel)

        tasks = [
            asyncio.create_task(self._detect_metric(sem, m, time_range, options))
            for m in metrics
        ]
        try:
            results: List[Tuple[MetricRef, AnomalyDetectionResult]] = list(await asyncio.gather(*tasks))
        except BaseException:
            for task in tasks:
                task.cancel()
            # settle siblings so their exceptions are retrieved before propagating
            await asyncio.gather(*tasks, return_exceptions=True)
            raise

        insights = dashboard.aggregate(dashboard_id, time_range, results)
        log.info(
            "dashboard=%s metrics=%d with_anomalies=%d critical=%d",
            dashboard_id,
            insights.total_metrics,
            insights.metrics_with_anomalies,
            insights.summary.critical_anomalies,
        )
        return insights
