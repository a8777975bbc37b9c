"""Test doubles for the dispatch provider."""

from __future__ import annotations

import asyncio
import threading
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

import httpx

from befast.adapters.http_resilience import ResilientClient
from befast.config import RateLimit, ResilienceConfig, RetryPolicy, ShipdayConfig

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    from befast.domain.model import ProviderOrderDetail, ProviderProgress

TEST_BASE_URL = "https://api.shipday.test"


@dataclass
class FakeDispatch:
    details: dict[str, ProviderOrderDetail] = field(default_factory=dict)
    progress: dict[str, ProviderProgress] = field(default_factory=dict)
    calls: list[tuple[str, str]] = field(default_factory=list)
    closed: bool = False

    async def fetch_order_detail(self, identifier: str) -> ProviderOrderDetail | None:
        self.calls.append(("detail", identifier))
        return self.details.get(identifier)

    async def fetch_progress(self, tracking_token: str) -> ProviderProgress | None:
        self.calls.append(("progress", tracking_token))
        return self.progress.get(tracking_token)

    async def aclose(self) -> None:
        self.closed = True


@dataclass
class StalledDispatch:
    """Never answers; records when the pending call is cancelled."""

    started: threading.Event = field(default_factory=threading.Event)
    cancelled: threading.Event = field(default_factory=threading.Event)

    async def fetch_order_detail(self, identifier: str) -> ProviderOrderDetail | None:
        self.started.set()
        try:
            await asyncio.sleep(30)
        except asyncio.CancelledError:
            self.cancelled.set()
            raise
        return None

    async def fetch_progress(self, tracking_token: str) -> ProviderProgress | None:
        return await self.fetch_order_detail(tracking_token)

    async def aclose(self) -> None:
        return None


def shipday_config(
    *, deadline_seconds: float = 5.0, ratelimit: RateLimit | None = None
) -> ShipdayConfig:
    return ShipdayConfig(
        api_key="test-key",
        resilience=ResilienceConfig(
            name="shipday-test",
            base_url=TEST_BASE_URL,
            timeout_seconds=5.0,
            retry=RetryPolicy(total=0),
            ratelimit=ratelimit,
        ),
        deadline_seconds=deadline_seconds,
    )


def mock_client_factory(
    handler: Callable[[httpx.Request], httpx.Response | Awaitable[httpx.Response]],
) -> Callable[[ResilienceConfig], ResilientClient]:
    async def async_handler(request: httpx.Request) -> httpx.Response:
        result = handler(request)
        if isinstance(result, httpx.Response):
            return result
        return await result

    def factory(resilience: ResilienceConfig) -> ResilientClient:
        client = ResilientClient(resilience)
        client._client = httpx.AsyncClient(  # noqa: SLF001  # type: ignore[reportPrivateUsage]
            base_url=resilience.base_url or "",
            transport=httpx.MockTransport(async_handler),
        )
        return client

    return factory
