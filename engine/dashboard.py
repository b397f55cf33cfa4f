"""
Dashboard-level roll-up of per-metric detection results, keeping only metrics that produced anomalies and ranking them by how many critical anomalies each one carries.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

from typing import List, Optional, Sequence, Tuple

from api.requests import DetectionOptions, TimeRange
from api.responses import (
    AnomalyDetectionResult,
    DashboardAnomalyInsights,
    DashboardSummary,
    MetricAnomalyInfo,
)
from config import DASHBOARD_METHODS
from datasources.base import MetricRef
from engine.enums import Sensitivity


def dashboard_options() -> DetectionOptions:
    return DetectionOptions(methods=tuple(DASHBOARD_METHODS), sensitivity=Sensitivity.medium)


def metric_info(metric: MetricRef, result: AnomalyDetectionResult) -> Optional[MetricAnomalyInfo]:
    if not result.anomalies:
        return None
    return MetricAnomalyInfo(
        metric_id=metric.id,
        metric_name=metric.name,
        anomaly_count=len(result.anomalies),
        critical_count=result.summary.severity_counts.critical,
        top_anomaly=result.anomalies[0],
        most_recent_anomaly=max(result.anomalies, key=lambda a: (a.timestamp, a.index)),
        trend=result.trend,
    )


def aggregate(
    dashboard_id: str,
    time_range: TimeRange,
    results: Sequence[Tuple[MetricRef, AnomalyDetectionResult]],
) -> DashboardAnomalyInsights:
    infos: List[MetricAnomalyInfo] = []
    for metric, result in results:
        info = metric_info(metric, result)
        if info is not None:
            infos.append(info)

    # stable sort keeps catalog order among metrics with equal critical counts
    infos.sort(key=lambda i: -i.critical_count)

    return DashboardAnomalyInsights(
        dashboard_id=dashboard_id,
        time_range=time_range,
        total_metrics=len(results),
        metrics_with_anomalies=len(infos),
        anomalies=infos,
        summary=DashboardSummary(
            total_anomalies=sum(i.anomaly_count for i in infos),
            critical_anomalies=sum(i.critical_count for i in infos),
        ),
    )
