from __future__ import annotations

from typing import List

import numpy as np

from engine.detectors.base import Detector, MethodScore, sensitivity_multiplier, window_size
from engine.enums import DetectionMethod
from engine.stats import compute


class MovingAverageDetector(Detector):
    method = DetectionMethod.moving_average

    def score(self, values: np.ndarray, options) -> List[MethodScore]:
        multiplier = sensitivity_multiplier(options.sensitivity)
        w = window_size(len(values))

        flagged: List[MethodScore] = []
        for i in range(w, len(values)):
            window = compute(values[i - w:i])
            threshold = multiplier * window.std_dev
            # a flat trailing window gives no scale to measure against
            if threshold == 0:
                continue
            deviation = abs(float(values[i]) - window.mean)
            if deviation <= threshold:
                continue
            flagged.append(MethodScore(
                index=i,
                score=min(deviation / (threshold * 2), 1.0),
                reason=f"Value {values[i]:.2f} deviates from moving average {window.mean:.2f}",
            ))
        return flagged
