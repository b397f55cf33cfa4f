# datasources/prometheus.py

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Dict, List, Optional

import httpx

from api.requests import DataPoint
from config import settings
from datasources.base import HistoricalDataProvider
from datasources.exceptions import DataSourceUnavailable, InvalidQuery, QueryTimeout
from datasources.series import to_points

log = logging.getLogger(__name__)


class PrometheusHistoryProvider(HistoricalDataProvider):
    """Historical data from a Prometheus-compatible ``query_range`` API (Mimir, VictoriaMetrics).

    ``metric_id`` is sent as the PromQL expression; only the first returned
    series is used.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        tenant_id: Optional[str] = None,
        timeout: Optional[int] = None,
        step: Optional[str] = None,
        path: Optional[str] = None,
        headers: Optional[Dict[str, str]] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = str(base_url or settings.prometheus_url).rstrip("/")
        self.tenant_id = tenant_id or settings.tenant_id
        self.timeout = timeout or settings.connector_timeout
        self.step = step or settings.query_step
        self.path = path or settings.prometheus_path
        self.headers = headers or {}
        self._client = httpx.AsyncClient(timeout=self.timeout, transport=transport)

    @property
    def query_url(self) -> str:
        return f"{self.base_url}{self.path}"

    def _headers(self) -> Dict[str, str]:
        return {**self.headers, "X-Scope-OrgID": self.tenant_id}

    async def query_range(self, query: str, start: int, end: int) -> Dict[str, Any]:
        params: Dict[str, Any] = {"query": query, "start": start, "end": end, "step": self.step}
        url = self.query_url
        try:
            resp = await self._client.get(url, params=params, headers=self._headers())
            resp.raise_for_status()
            return resp.json()
        except httpx.HTTPStatusError as e:
            raise InvalidQuery(f"range query failed [{e.response.status_code}]: {e.response.text}") from e
        except httpx.TimeoutException as e:
            raise QueryTimeout("range query timed out") from e
        except httpx.RequestError as e:
            raise DataSourceUnavailable(f"Cannot reach metrics backend at {url}") from e

    async def fetch_range(self, metric_id: str, start: datetime, end: datetime) -> List[DataPoint]:
        raw = await self.query_range(metric_id, int(start.timestamp()), int(end.timestamp()))
        points = to_points(raw)
        log.debug("fetch_range metric=%s points=%d", metric_id, len(points))
        return points

    async def aclose(self) -> None:
        await self._client.aclose()
