"""Shipday API client implementing the ``DispatchProvider`` port."""

from __future__ import annotations

import asyncio
from logging import getLogger
from typing import TYPE_CHECKING, Any
from urllib.parse import quote

import httpx
from pydantic import ValidationError

from befast.adapters.http_resilience import ResilientClient

from .schema import ShipdayOrderPayload, ShipdayProgressPayload
from .translator import translate_order, translate_progress

if TYPE_CHECKING:
    from collections.abc import Callable

    from befast.config.http_resilience import ResilienceConfig
    from befast.config.shipday import ShipdayConfig
    from befast.domain.model import ProviderOrderDetail, ProviderProgress

log = getLogger(__name__)


class ShipdayAPIError(RuntimeError):
    """Raised internally when Shipday answers with something unusable."""


class ShipdayClient:
    """Reads order detail and live progress from Shipday.

    One ``ResilientClient`` is created on first use and shared until
    ``aclose``, so the configured rate limit spans concurrent calls. Every
    public call is bounded by ``config.deadline_seconds`` on top of the
    per-request timeout and retries, and degrades to ``None`` on any failure.
    """

    def __init__(
        self,
        *,
        config: ShipdayConfig,
        client_factory: Callable[[ResilienceConfig], ResilientClient] | None = None,
    ) -> None:
        self._config = config
        self._resilience = config.resilience
        self._client_factory = client_factory or ResilientClient
        self._http: ResilientClient | None = None

    @property
    def http(self) -> ResilientClient:
        """The shared client; one rate limiter and connection pool for every call."""

        if self._http is None:
            self._http = self._client_factory(self._resilience)
        return self._http

    async def aclose(self) -> None:
        if self._http is not None:
            http, self._http = self._http, None
            await http.aclose()

    async def fetch_order_detail(self, identifier: str) -> ProviderOrderDetail | None:
        path = f"orders/{quote(identifier, safe='')}"
        payload = await self._get_json(path, what="order detail", subject=identifier)
        if payload is None:
            return None
        try:
            order = ShipdayOrderPayload.model_validate(_single_order(payload))
        except (ShipdayAPIError, ValidationError) as exc:
            log.warning("Unusable Shipday order detail for %s: %s", identifier, exc)
            return None
        return translate_order(order)

    async def fetch_progress(self, tracking_token: str) -> ProviderProgress | None:
        path = f"order/progress/{quote(tracking_token, safe='')}"
        payload = await self._get_json(
            path,
            what="order progress",
            subject=tracking_token,
            params={"isStaticDataRequired": "false"},
        )
        if payload is None:
            return None
        try:
            progress = ShipdayProgressPayload.model_validate(payload)
        except ValidationError as exc:
            log.warning("Unusable Shipday progress for %s: %s", tracking_token, exc)
            return None
        return translate_progress(progress)

    async def _get_json(
        self,
        path: str,
        *,
        what: str,
        subject: str,
        params: dict[str, str] | None = None,
    ) -> Any | None:
        headers = {"Authorization": self._config.authorization}
        try:
            async with asyncio.timeout(self._config.deadline_seconds):
                response = await self.http.get(path, params=params, headers=headers)
        except TimeoutError:
            log.warning(
                "Shipday %s for %s exceeded %.1fs deadline",
                what,
                subject,
                self._config.deadline_seconds,
            )
            return None
        except httpx.HTTPError as exc:
            log.warning("Shipday %s request for %s failed: %s", what, subject, exc)
            return None

        if not response.is_success:
            log.warning(
                "Shipday %s for %s returned HTTP %s", what, subject, response.status_code
            )
            return None
        try:
            return response.json()
        except ValueError as exc:
            log.warning("Shipday %s for %s is not JSON: %s", what, subject, exc)
            return None


def _single_order(payload: Any) -> Any:
    # Lookups by order number answer with a list of matching orders.
    if isinstance(payload, list):
        if not payload:
            raise ShipdayAPIError("empty order list")
        return payload[0]
    return payload
