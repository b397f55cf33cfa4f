"""
Realtime detector service that checks a single live value of a metric against its recent history fetched from the configured historical data provider.

Copyright (c) 2026 Stefan Kumarasinghe
Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""
from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Optional

from api.responses import RealtimeAnomalyResult
from datasources.base import HistoricalDataProvider
from engine import realtime
from config import settings

log = logging.getLogger(__name__)


class RealtimeDetector:
    def __init__(self, provider: HistoricalDataProvider) -> None:
        self.provider = provider

    async def detect(
        self,
        metric_id: str,
        current_value: float,
        timestamp: Optional[datetime] = None,
    ) -> RealtimeAnomalyResult:
        if timestamp is None:
            timestamp = datetime.now(timezone.utc)
        history = await self.provider.fetch(metric_id, window_days=settings.realtime_history_days)
        result = realtime.evaluate([p.value for p in history], current_value, timestamp)
        if result.is_anomaly:
            log.info(
                "realtime anomaly metric=%s value=%.4g expected=%.4g confidence=%.2f",
                metric_id,
                current_value,
                result.expected_value,
                result.confidence,
            )
        else:
            log.debug("realtime check metric=%s history=%d: %s", metric_id, len(history), result.message)
        return result
