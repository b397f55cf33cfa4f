"""
Conversion of Prometheus-compatible range query responses into chronologically ordered data points.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import logging
import math
from datetime import datetime, timezone
from typing import Any, Dict, Iterator, List, Tuple

from api.requests import DataPoint

log = logging.getLogger(__name__)


def iter_series(response: Dict[str, Any]) -> Iterator[Tuple[Dict[str, Any], List[DataPoint]]]:
    if not isinstance(response, dict):
        log.warning("iter_series expected dict, got %s", type(response).__name__)
        return

    results = response.get("data", {}).get("result", [])
    if not isinstance(results, list):
        log.warning("iter_series: 'data.result' is not a list: %s", type(results).__name__)
        return

    for result in results:
        if not isinstance(result, dict):
            continue
        labels = result.get("metric", {}) or {}

        points: List[DataPoint] = []
        for pair in result.get("values", []):
            try:
                ts = float(pair[0])
                value = float(pair[1])
            except (ValueError, TypeError, IndexError):
                continue
            if not math.isfinite(value):
                continue
            points.append(DataPoint(
                timestamp=datetime.fromtimestamp(ts, tz=timezone.utc),
                value=value,
                metadata=dict(labels) or None,
            ))

        if points:
            yield labels, points


def to_points(response: Dict[str, Any]) -> List[DataPoint]:
    series = list(iter_series(response))
    if not series:
        return []
    if len(series) > 1:
        log.debug("to_points: %d series returned, using the first", len(series))
    _, points = series[0]
    return sorted(points, key=lambda p: p.timestamp)
