"""
Seasonality discovery via autocorrelation. The series is correlated with lagged copies of itself over a bounded range of lags; lags whose correlation clears the peak threshold are ranked and the strongest one is reported as the dominant period.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple

import numpy as np

from config import settings


@dataclass(frozen=True)
class Peak:
    lag: int
    correlation: float


@dataclass(frozen=True)
class SeasonalityAnalysis:
    detected: bool
    period: int
    strength: float
    peaks: Tuple[Peak, ...] = field(default_factory=tuple)


def autocorrelation(arr: np.ndarray, lag: int) -> float:
    centered = arr - arr.mean()
    denominator = float(np.sum(centered ** 2))
    if denominator == 0:
        return 0.0
    numerator = float(np.sum(centered[: len(arr) - lag] * centered[lag:]))
    return numerator / denominator


def _candidate_lags(n: int) -> range:
    return range(1, min(settings.seasonality_max_lag, n // 3) + 1)


def analyze(values: Sequence[float], period: Optional[int] = None) -> Optional[SeasonalityAnalysis]:
    if period is None:
        period = settings.seasonality_period
    arr = np.array(values, dtype=float)
    if len(arr) < period * settings.seasonality_min_cycles:
        return None

    correlations: List[Peak] = [
        Peak(lag=lag, correlation=autocorrelation(arr, lag)) for lag in _candidate_lags(len(arr))
    ]
    peaks = sorted(
        (p for p in correlations if p.correlation > settings.seasonality_peak_threshold),
        key=lambda p: -p.correlation,
    )
    if not peaks:
        return SeasonalityAnalysis(detected=False, period=0, strength=0.0)

    strongest = peaks[0]
    return SeasonalityAnalysis(
        detected=True,
        period=strongest.lag,
        strength=strongest.correlation,
        peaks=tuple(peaks[: settings.seasonality_top_peaks]),
    )
