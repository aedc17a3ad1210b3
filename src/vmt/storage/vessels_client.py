"""HTTP client for the vessel registry REST backend."""

from __future__ import annotations

import json
import logging
from typing import Optional

import httpx

from ..config import get_settings
from ..models.outcome import ApiResponse
from ..models.vessel import Vessel
from ..query.strategies import SearchRequest

logger = logging.getLogger(__name__)

VESSELS_PATH = "/vessels"


class VesselsClient:
    """Thin wrapper around `httpx.AsyncClient` for the `/vessels` resource.

    Every call returns the raw status, decoded body and headers. Deciding
    what counts as success is left to the caller. Transport failures
    propagate as `httpx.HTTPError`.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        client: Optional[httpx.AsyncClient] = None,
    ):
        """Initialize the client.

        Args:
            base_url: Registry base URL (default: settings.api_base_url).
            timeout: Request timeout in seconds (default: settings.request_timeout).
            client: Preconfigured httpx client, used as-is when given.
        """
        if client is None:
            settings = get_settings()
            client = httpx.AsyncClient(
                base_url=base_url or settings.api_base_url,
                timeout=timeout or settings.request_timeout,
            )
        self.client = client

    async def close(self):
        """Close the underlying HTTP connection pool."""
        await self.client.aclose()

    async def __aenter__(self) -> VesselsClient:
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()

    # ==================== Vessel Operations ====================

    async def load(self, uuid: str) -> ApiResponse:
        """GET /vessels/{uuid}."""
        logger.debug("Loading vessel %s", uuid)
        response = await self.client.get(f"{VESSELS_PATH}/{uuid}")
        return self._to_api_response(response)

    async def create(self, vessel: Vessel) -> ApiResponse:
        """POST /vessels. The new identity comes back in the `Location` header."""
        logger.debug("Creating vessel %s", vessel.name)
        response = await self.client.post(VESSELS_PATH, json=vessel.to_wire())
        return self._to_api_response(response)

    async def update(self, vessel: Vessel) -> ApiResponse:
        """PUT /vessels/{uuid}."""
        uuid = self._require_identity(vessel)
        logger.debug("Updating vessel %s", uuid)
        response = await self.client.put(f"{VESSELS_PATH}/{uuid}", json=vessel.to_wire())
        return self._to_api_response(response)

    async def search(self, request: SearchRequest) -> ApiResponse:
        """Run a search with either GET /vessels?query= or POST /vessels/search."""
        headers = {"Cache-Control": "no-cache"}
        logger.debug("Searching vessels (%s): %s", request.strategy, request.query)

        if request.method == "GET":
            query = json.dumps(request.query, separators=(",", ":"))
            response = await self.client.get(
                VESSELS_PATH, params={"query": query}, headers=headers
            )
        else:
            response = await self.client.post(
                f"{VESSELS_PATH}/search", json=request.query, headers=headers
            )
        return self._to_api_response(response)

    async def delete(self, vessel: Vessel) -> ApiResponse:
        """DELETE /vessels/{uuid}."""
        uuid = self._require_identity(vessel)
        logger.debug("Deleting vessel %s", uuid)
        response = await self.client.delete(f"{VESSELS_PATH}/{uuid}")
        return self._to_api_response(response)

    # ==================== Helpers ====================

    @staticmethod
    def _require_identity(vessel: Vessel) -> str:
        if not vessel.uuid:
            raise ValueError(f"Vessel {vessel.name!r} has no identity yet")
        return vessel.uuid

    @staticmethod
    def _to_api_response(response: httpx.Response) -> ApiResponse:
        """Convert an httpx response, decoding JSON bodies when present."""
        body = None
        if response.content:
            try:
                body = response.json()
            except ValueError:
                body = response.text
        return ApiResponse(
            status_code=response.status_code,
            body=body,
            headers=dict(response.headers),
        )
