from __future__ import annotations

from typing import List

import numpy as np

from engine.detectors.base import Detector, MethodScore, zscore_threshold
from engine.enums import DetectionMethod
from engine.stats import compute
from config import settings


class ZScoreDetector(Detector):
    method = DetectionMethod.zscore

    def score(self, values: np.ndarray, options) -> List[MethodScore]:
        stats = compute(values)
        if stats.std_dev == 0:
            return []
        threshold = zscore_threshold(options.sensitivity)

        z_scores = np.abs(values - stats.mean) / stats.std_dev
        flagged: List[MethodScore] = []
        for index in np.flatnonzero(z_scores > threshold):
            z = float(z_scores[index])
            flagged.append(MethodScore(
                index=int(index),
                score=min(z / settings.zscore_score_divisor, 1.0),
                reason=f"Z-score {z:.2f} exceeds threshold {threshold:.2f}",
            ))
        return flagged
