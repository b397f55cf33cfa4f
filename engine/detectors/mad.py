from __future__ import annotations

from typing import List

import numpy as np

from engine.detectors.base import Detector, MethodScore, sensitivity_multiplier
from engine.enums import DetectionMethod
from engine.stats import median
from config import settings


def modified_z_scores(values: np.ndarray) -> np.ndarray:
    center = median(values)
    mad = median(np.abs(values - center))
    if mad == 0:
        return np.zeros_like(values, dtype=float)
    return settings.mad_scale * (values - center) / mad


class MadDetector(Detector):
    method = DetectionMethod.mad

    def score(self, values: np.ndarray, options) -> List[MethodScore]:
        threshold = sensitivity_multiplier(options.sensitivity) * settings.mad_threshold_factor
        scores = modified_z_scores(values)

        flagged: List[MethodScore] = []
        for index in np.flatnonzero(np.abs(scores) > threshold):
            m = float(scores[index])
            flagged.append(MethodScore(
                index=int(index),
                score=min(abs(m) / settings.mad_score_divisor, 1.0),
                reason=f"Modified Z-score {m:.2f} exceeds threshold {threshold:.2f}",
            ))
        return flagged
