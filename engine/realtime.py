"""
Single-point anomaly check of a live value against a historical baseline, combining z-score and IQR distance with an exponentially smoothed expected value.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional, Sequence

from api.responses import RealtimeAnomalyResult, ThresholdBand
from engine.constants import DEVIATION_MESSAGE, INSUFFICIENT_HISTORY_MESSAGE, WITHIN_RANGE_MESSAGE
from engine.detectors.base import iqr_score_threshold, zscore_threshold
from engine.enums import Sensitivity, Severity
from engine.stats import compute, iqr_score, z_score
from config import settings

# baseline checks always use the medium table; callers cannot tune it
_SENSITIVITY = Sensitivity.medium


def smoothed_expectation(vals: Sequence[float], alpha: float | None = None) -> float:
    if alpha is None:
        alpha = settings.realtime_smoothing_alpha
    smoothed = float(vals[0])
    for v in vals[1:]:
        smoothed = alpha * float(v) + (1 - alpha) * smoothed
    return smoothed


def evaluate(
    history: Sequence[float],
    current_value: float,
    timestamp: Optional[datetime] = None,
) -> RealtimeAnomalyResult:
    if len(history) < settings.realtime_min_history:
        return RealtimeAnomalyResult(
            is_anomaly=False,
            confidence=0.0,
            message=INSUFFICIENT_HISTORY_MESSAGE,
            timestamp=timestamp,
            current_value=current_value,
        )

    stats = compute(history)
    z = z_score(current_value, stats)
    iqr = iqr_score(current_value, history)
    z_limit = zscore_threshold(_SENSITIVITY)
    iqr_limit = iqr_score_threshold(_SENSITIVITY)

    is_anomaly = z > z_limit or iqr > iqr_limit
    confidence = min(max(z, iqr) / settings.realtime_confidence_divisor, 1.0)

    expected = smoothed_expectation(history)
    deviation = abs(current_value - expected)
    # divides by the signed baseline, so a negative expected value gives a negative percentage
    deviation_pct = deviation / expected * 100.0 if expected != 0 else 0.0

    return RealtimeAnomalyResult(
        is_anomaly=is_anomaly,
        confidence=confidence,
        severity=Severity.from_score(confidence) if is_anomaly else Severity.normal,
        timestamp=timestamp,
        current_value=current_value,
        expected_value=expected,
        deviation=deviation,
        deviation_percentage=deviation_pct,
        z_score=z,
        iqr_score=iqr,
        threshold=ThresholdBand(
            upper=stats.mean + z_limit * stats.std_dev,
            lower=stats.mean - z_limit * stats.std_dev,
        ),
        message=(
            DEVIATION_MESSAGE.format(value=current_value, pct=deviation_pct, expected=expected)
            if is_anomaly
            else WITHIN_RANGE_MESSAGE
        ),
    )
