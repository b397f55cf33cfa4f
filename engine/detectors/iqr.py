from __future__ import annotations

from typing import List

import numpy as np

from engine.detectors.base import Detector, MethodScore, sensitivity_multiplier
from engine.enums import DetectionMethod
from engine.stats import quartiles


class IqrDetector(Detector):
    method = DetectionMethod.iqr

    def score(self, values: np.ndarray, options) -> List[MethodScore]:
        q1, q3 = quartiles(values)
        iqr = q3 - q1
        if iqr == 0:
            return []

        multiplier = sensitivity_multiplier(options.sensitivity)
        lower = q1 - multiplier * iqr
        upper = q3 + multiplier * iqr

        flagged: List[MethodScore] = []
        for index, value in enumerate(values):
            if lower <= value <= upper:
                continue
            distance = lower - value if value < lower else value - upper
            flagged.append(MethodScore(
                index=index,
                score=min(float(distance) / iqr, 1.0),
                reason=f"Value {value:.2f} outside IQR bounds [{lower:.2f}, {upper:.2f}]",
            ))
        return flagged
