"""
Trend characterization using an ordinary least-squares fit of value against sequence index, reporting slope, intercept, goodness of fit and a coarse direction, with a pure forecast helper for extrapolating the fitted line.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence, Tuple

import numpy as np
from scipy.stats import linregress

from engine.enums import TrendDirection
from config import settings


@dataclass(frozen=True)
class TrendAnalysis:
    slope: float
    intercept: float
    r_squared: float
    direction: TrendDirection
    n: int

    def forecast(self, steps: int) -> float:
        """Value of the fitted line ``steps`` positions after the last observation."""
        return self.slope * (self.n + steps - 1) + self.intercept


def _linear_fit(vals: np.ndarray) -> Tuple[float, float]:
    if len(vals) < 2:
        return 0.0, (float(vals[0]) if len(vals) else 0.0)
    fit = linregress(np.arange(len(vals), dtype=float), vals)
    return float(fit.slope), float(fit.intercept)


def _r_squared(vals: np.ndarray, slope: float, intercept: float) -> float:
    x = np.arange(len(vals), dtype=float)
    predicted = slope * x + intercept
    ss_res = np.sum((vals - predicted) ** 2)
    ss_tot = np.sum((vals - np.mean(vals)) ** 2)
    return float(1.0 - ss_res / ss_tot) if ss_tot > 0 else 0.0


def _direction(slope: float) -> TrendDirection:
    if abs(slope) < settings.trend_stable_slope:
        return TrendDirection.stable
    return TrendDirection.increasing if slope > 0 else TrendDirection.decreasing


def analyze(values: Sequence[float]) -> TrendAnalysis:
    arr = np.array(values, dtype=float)
    slope, intercept = _linear_fit(arr)
    return TrendAnalysis(
        slope=slope,
        intercept=intercept,
        r_squared=_r_squared(arr, slope, intercept),
        direction=_direction(slope),
        n=len(arr),
    )
