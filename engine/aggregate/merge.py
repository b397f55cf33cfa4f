"""
Merge logic that folds per-method scores into unified anomaly records, assigning confidence, severity band and an expected value from the surrounding window, then ordering the records by confidence.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

from typing import Dict, List, Sequence, Tuple

import numpy as np

from api.requests import DataPoint, DetectionOptions
from api.responses import Anomaly, AnomalySummary, SeverityCounts
from engine.constants import REPORTED_SEVERITIES
from engine.detectors import MethodScore, window_size
from engine.enums import DetectionMethod, Severity


def expected_value(values: np.ndarray, index: int) -> float:
    n = len(values)
    w = window_size(n)
    start = max(0, index - w)
    end = min(n, index + w + 1)
    neighbours = np.concatenate((values[start:index], values[index + 1:end]))
    if neighbours.size == 0:
        return float(values[index])
    return float(neighbours.mean())


def merge(
    data: Sequence[DataPoint],
    values: np.ndarray,
    method_scores: List[Tuple[DetectionMethod, List[MethodScore]]],
) -> List[Anomaly]:
    grouped: Dict[int, List[Tuple[DetectionMethod, MethodScore]]] = {}
    for method, scores in method_scores:
        for s in scores:
            grouped.setdefault(s.index, []).append((method, s))

    anomalies: List[Anomaly] = []
    for index in sorted(grouped):
        entries = grouped[index]
        confidence = float(np.mean([s.score for _, s in entries]))
        point = data[index]
        expected = expected_value(values, index)
        anomalies.append(Anomaly(
            index=index,
            timestamp=point.timestamp,
            value=point.value,
            expected_value=expected,
            deviation=abs(point.value - expected),
            severity=Severity.from_score(confidence),
            confidence=confidence,
            methods=[m.value for m, _ in entries],
            reasons=[s.reason for _, s in entries],
            metadata=point.metadata,
        ))

    # sorted() is stable, so equal confidences keep ascending index order
    return sorted(anomalies, key=lambda a: -a.confidence)


def summarize(anomalies: List[Anomaly], total_points: int, options: DetectionOptions) -> AnomalySummary:
    counts = {sev.value: 0 for sev in REPORTED_SEVERITIES}
    for a in anomalies:
        counts[a.severity.value] += 1
    return AnomalySummary(
        total_points=total_points,
        anomaly_count=len(anomalies),
        anomaly_rate=len(anomalies) / total_points if total_points else 0.0,
        confidence_level=options.confidence_level,
        methods=list(options.methods),
        severity_counts=SeverityCounts(**counts),
    )
