"""
Detection pipeline: runs the selected detectors over one series, merges their scores into anomaly records and characterizes the series trend and seasonality.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import logging
import time
from typing import Optional, Sequence

from api.requests import DataPoint, DetectionOptions
from api.responses import AnomalyDetectionResult, AnomalySummary, DetectionMetadata
from engine import seasonality, trend
from engine.aggregate import merge, summarize
from engine.constants import INSUFFICIENT_DATA_MESSAGE
from engine.detectors import run_detectors
from engine.stats import as_array

log = logging.getLogger(__name__)


def _elapsed_ms(started: float) -> float:
    return round((time.perf_counter() - started) * 1000.0, 3)


def _insufficient(data: Sequence[DataPoint], options: DetectionOptions, started: float) -> AnomalyDetectionResult:
    return AnomalyDetectionResult(
        anomalies=[],
        summary=AnomalySummary(
            total_points=len(data),
            confidence_level=options.confidence_level,
            methods=list(options.methods),
        ),
        metadata=DetectionMetadata(
            execution_time_ms=_elapsed_ms(started),
            insufficient_data=True,
            message=INSUFFICIENT_DATA_MESSAGE.format(required=options.min_data_points),
        ),
    )


def detect(data: Sequence[DataPoint], options: Optional[DetectionOptions] = None) -> AnomalyDetectionResult:
    """Run a full detection pass over ``data``.

    ``data`` must be in ascending timestamp order; ordering is not checked.
    A series shorter than ``options.min_data_points`` is not an error: the
    result comes back empty with ``metadata.insufficient_data`` set.
    """
    started = time.perf_counter()
    if options is None:
        options = DetectionOptions()

    if len(data) < options.min_data_points:
        log.debug("detect: %d points below minimum %d", len(data), options.min_data_points)
        return _insufficient(data, options, started)

    values = as_array([p.value for p in data])
    method_scores = run_detectors(values, options)
    anomalies = merge(data, values, method_scores)

    trend_analysis = trend.analyze(values)
    seasonality_analysis = seasonality.analyze(values) if options.include_seasonality else None

    result = AnomalyDetectionResult(
        anomalies=anomalies,
        summary=summarize(anomalies, len(data), options),
        trend=trend_analysis,
        seasonality=seasonality_analysis,
        metadata=DetectionMetadata(execution_time_ms=_elapsed_ms(started)),
    )
    log.debug(
        "detect: points=%d anomalies=%d trend=%s seasonal=%s",
        len(data),
        len(anomalies),
        trend_analysis.direction.value,
        bool(seasonality_analysis and seasonality_analysis.detected),
    )
    return result
