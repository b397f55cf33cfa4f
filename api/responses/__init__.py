"""
Result models returned by the detection pipeline, the realtime check and the dashboard aggregation.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, List, Optional

import numpy as np
from pydantic import BaseModel, Field, model_serializer

from api.requests import TimeRange
from engine.enums import Severity
from engine.seasonality.autocorrelation import SeasonalityAnalysis
from engine.trend.regression import TrendAnalysis


def _coerce(obj: Any) -> Any:
    if isinstance(obj, dict):
        return {k: _coerce(v) for k, v in obj.items()}
    if isinstance(obj, list):
        return [_coerce(v) for v in obj]
    if isinstance(obj, np.integer):
        return int(obj)
    if isinstance(obj, np.floating):
        return float(obj)
    if isinstance(obj, np.ndarray):
        return obj.tolist()
    return obj


class NpModel(BaseModel):

    @model_serializer(mode="wrap")
    def _serialize(self, handler: Any) -> Any:
        return _coerce(handler(self))


class Anomaly(NpModel):
    model_config = {"frozen": True}

    index: int
    timestamp: datetime
    value: float
    expected_value: float
    deviation: float
    severity: Severity
    confidence: float = Field(ge=0.0, le=1.0)
    methods: List[str]
    reasons: List[str]
    metadata: Optional[Dict[str, Any]] = None


class SeverityCounts(NpModel):

    critical: int = 0
    high: int = 0
    medium: int = 0
    low: int = 0


class AnomalySummary(NpModel):

    total_points: int
    anomaly_count: int = 0
    anomaly_rate: float = 0.0
    confidence_level: float
    methods: List[str]
    severity_counts: SeverityCounts = Field(default_factory=SeverityCounts)


class DetectionMetadata(NpModel):

    execution_time_ms: float
    insufficient_data: bool = False
    message: Optional[str] = None


class AnomalyDetectionResult(NpModel):

    anomalies: List[Anomaly] = Field(default_factory=list)
    summary: AnomalySummary
    trend: Optional[TrendAnalysis] = None
    seasonality: Optional[SeasonalityAnalysis] = None
    metadata: DetectionMetadata


class ThresholdBand(NpModel):

    upper: float
    lower: float


class RealtimeAnomalyResult(NpModel):

    is_anomaly: bool
    confidence: float = 0.0
    message: str
    severity: Optional[Severity] = None
    timestamp: Optional[datetime] = None
    current_value: Optional[float] = None
    expected_value: Optional[float] = None
    deviation: Optional[float] = None
    deviation_percentage: Optional[float] = None
    z_score: Optional[float] = None
    iqr_score: Optional[float] = None
    threshold: Optional[ThresholdBand] = None


class MetricAnomalyInfo(NpModel):

    metric_id: str
    metric_name: str
    anomaly_count: int
    critical_count: int
    top_anomaly: Anomaly
    most_recent_anomaly: Anomaly
    trend: Optional[TrendAnalysis] = None


class DashboardSummary(NpModel):

    total_anomalies: int = 0
    critical_anomalies: int = 0


class DashboardAnomalyInsights(NpModel):

    dashboard_id: str
    time_range: TimeRange
    total_metrics: int
    metrics_with_anomalies: int
    anomalies: List[MetricAnomalyInfo] = Field(default_factory=list)
    summary: DashboardSummary = Field(default_factory=DashboardSummary)
