"""
Descriptive statistics over a numeric series (population mean, variance and standard deviation, linearly interpolated percentiles), shared by every detector and the realtime check so that they agree on the same baseline numbers.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence, Tuple, Union

import numpy as np

Values = Union[Sequence[float], np.ndarray]


@dataclass(frozen=True)
class Statistics:
    mean: float
    median: float
    std_dev: float
    variance: float
    min: float
    max: float
    count: int


def as_array(values: Values) -> np.ndarray:
    # always a fresh copy; callers' sequences are never mutated or sorted in place
    return np.array(values, dtype=float)


def percentile(sorted_values: np.ndarray, p: float) -> float:
    """Linear interpolation between the two ranks bracketing ``p/100 * (n-1)``."""
    n = len(sorted_values)
    index = (p / 100.0) * (n - 1)
    lower = int(np.floor(index))
    upper = int(np.ceil(index))
    weight = index - lower
    return float(sorted_values[lower] * (1.0 - weight) + sorted_values[upper] * weight)


def quartiles(values: Values) -> Tuple[float, float]:
    ordered = np.sort(as_array(values))
    return percentile(ordered, 25), percentile(ordered, 75)


def median(values: Values) -> float:
    return percentile(np.sort(as_array(values)), 50)


def compute(values: Values) -> Statistics:
    arr = as_array(values)
    n = len(arr)
    mean = float(arr.sum() / n)
    variance = float(np.sum((arr - mean) ** 2) / n)
    ordered = np.sort(arr)
    return Statistics(
        mean=mean,
        median=percentile(ordered, 50),
        std_dev=float(np.sqrt(variance)),
        variance=variance,
        min=float(ordered[0]),
        max=float(ordered[-1]),
        count=n,
    )


def z_score(value: float, stats: Statistics) -> float:
    if stats.std_dev == 0:
        return 0.0
    return abs(value - stats.mean) / stats.std_dev


def iqr_score(value: float, values: Values) -> float:
    q1, q3 = quartiles(values)
    iqr = q3 - q1
    if iqr == 0:
        return 0.0
    if value < q1:
        return (q1 - value) / iqr
    if value > q3:
        return (value - q3) / iqr
    return 0.0
