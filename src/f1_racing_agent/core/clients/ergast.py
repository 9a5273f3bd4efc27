"""Jolpica Ergast F1 API client.

API docs: https://github.com/jolpica/jolpica-f1/blob/main/docs/README.md
No authentication required. Read-only, GET only.

Every call is a single attempt: non-success statuses raise UpstreamError,
transport failures raise NetworkError, and payloads that do not match the
boundary models raise UpstreamShapeError.
"""

from __future__ import annotations

import logging
from typing import Any, Optional, TypeVar

import httpx
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from ...config import CONNECT_TIMEOUT_SECONDS, DEFAULT_API_BASE, DEFAULT_TIMEOUT_SECONDS
from ..errors import NetworkError, UpstreamError, UpstreamShapeError
from ..models import DriverTableResponse, RaceTableResponse, StandingsResponse

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


class ErgastClient:
    """Stateless fetcher for Ergast resources.

    Args:
        base_url: API root, without trailing slash.
        timeout: Total request timeout in seconds.
        transport: Optional httpx transport (tests mount ``httpx.MockTransport``).
    """

    def __init__(
        self,
        base_url: str = DEFAULT_API_BASE,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self._timeout = httpx.Timeout(timeout, connect=min(timeout, CONNECT_TIMEOUT_SECONDS))
        self._transport = transport

    async def fetch_json(self, path: str) -> Any:
        """GET ``base_url + path`` and return the decoded JSON body."""
        url = f"{self.base_url}{path}"
        try:
            async with httpx.AsyncClient(timeout=self._timeout, transport=self._transport) as client:
                response = await client.get(url, headers={"Accept": "application/json"})
        except httpx.TransportError as exc:
            logger.warning("F1 API unreachable at %s: %s", url, exc)
            raise NetworkError(url, type(exc).__name__) from exc

        if not response.is_success:
            logger.warning("F1 API returned %d for %s", response.status_code, url)
            raise UpstreamError(response.status_code, url)

        try:
            return response.json()
        except ValueError as exc:
            raise UpstreamShapeError(path, "body is not JSON") from exc

    async def fetch_model(self, path: str, model: type[ModelT]) -> ModelT:
        """Fetch ``path`` and parse it into the given boundary model."""
        data = await self.fetch_json(path)
        try:
            return model.model_validate(data)
        except PydanticValidationError as exc:
            fields = ", ".join(".".join(str(p) for p in err["loc"]) for err in exc.errors()[:5])
            raise UpstreamShapeError(path, fields) from exc

    async def driver_standings(self, season: str) -> StandingsResponse:
        return await self.fetch_model(f"/{season}/driverStandings.json", StandingsResponse)

    async def constructor_standings(self, season: str) -> StandingsResponse:
        return await self.fetch_model(f"/{season}/constructorStandings.json", StandingsResponse)

    async def schedule(self, season: str) -> RaceTableResponse:
        return await self.fetch_model(f"/{season}.json", RaceTableResponse)

    async def driver(self, driver_id: str) -> DriverTableResponse:
        return await self.fetch_model(f"/drivers/{driver_id}.json", DriverTableResponse)

    async def driver_results(self, season: str, driver_id: str) -> RaceTableResponse:
        return await self.fetch_model(f"/{season}/drivers/{driver_id}/results.json", RaceTableResponse)

    async def race_results(self, season: str, round: str) -> RaceTableResponse:
        """Results for one race. ``round`` may be a number or ``'last'``."""
        return await self.fetch_model(f"/{season}/{round}/results.json", RaceTableResponse)
