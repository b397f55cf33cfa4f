"""
Windowed local-density detector. Each point is scored by its mean absolute distance to the points within a fixed number of positions on either side, relative to the global standard deviation; points sitting in sparse neighbourhoods score high. Deterministic: the same input always flags the same indices.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

from typing import List

import numpy as np

from engine.detectors.base import Detector, MethodScore, sensitivity_multiplier, window_size
from engine.enums import DetectionMethod
from engine.stats import compute
from config import settings


def isolation_scores(values: np.ndarray) -> np.ndarray:
    n = len(values)
    std = compute(values).std_dev
    if std == 0:
        return np.zeros(n)
    w = window_size(n)
    scores = np.empty(n)
    for i in range(n):
        # neighbourhood is by position, not time, and includes the point itself
        neighbours = values[max(0, i - w): i + w + 1]
        scores[i] = np.mean(np.abs(neighbours - values[i])) / std
    return scores


class LocalDensityDetector(Detector):
    method = DetectionMethod.local_density

    def score(self, values: np.ndarray, options) -> List[MethodScore]:
        threshold = sensitivity_multiplier(options.sensitivity)
        scores = isolation_scores(values)

        flagged: List[MethodScore] = []
        for index in np.flatnonzero(scores > threshold):
            s = float(scores[index])
            flagged.append(MethodScore(
                index=int(index),
                score=min(s / settings.density_score_divisor, 1.0),
                reason=f"Isolation score {s:.2f} indicates sparse region",
            ))
        return flagged
