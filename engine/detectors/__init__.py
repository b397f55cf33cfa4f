"""
Registry of anomaly scoring strategies keyed by detection method.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import logging
from typing import Dict, List, Optional, Tuple, Union

import numpy as np

from engine.detectors.base import Detector, MethodScore, window_size
from engine.detectors.iqr import IqrDetector
from engine.detectors.local_density import LocalDensityDetector
from engine.detectors.mad import MadDetector
from engine.detectors.moving_average import MovingAverageDetector
from engine.detectors.zscore import ZScoreDetector
from engine.enums import DetectionMethod

log = logging.getLogger(__name__)

DETECTORS: Dict[DetectionMethod, Detector] = {
    d.method: d
    for d in (
        ZScoreDetector(),
        IqrDetector(),
        MadDetector(),
        LocalDensityDetector(),
        MovingAverageDetector(),
    )
}


def get_detector(method: Union[DetectionMethod, str]) -> Optional[Detector]:
    parsed = method if isinstance(method, DetectionMethod) else DetectionMethod.parse(method)
    if parsed is None:
        return None
    return DETECTORS.get(parsed)


def run_detectors(values: np.ndarray, options) -> List[Tuple[DetectionMethod, List[MethodScore]]]:
    if options.unknown_methods:
        log.warning("ignoring unknown detection methods: %s", ", ".join(options.unknown_methods))

    results: List[Tuple[DetectionMethod, List[MethodScore]]] = []
    for name in options.methods:
        detector = get_detector(name)
        if detector is None:
            continue
        method = detector.method
        scores = detector.score(values, options)
        log.debug("detector=%s flagged=%d", method.value, len(scores))
        results.append((method, scores))
    return results


__all__ = [
    "DETECTORS",
    "Detector",
    "MethodScore",
    "get_detector",
    "run_detectors",
    "window_size",
]
