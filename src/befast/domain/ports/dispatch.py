"""Port for the external dispatch provider."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from befast.domain.model import ProviderOrderDetail, ProviderProgress


@runtime_checkable
class DispatchProvider(Protocol):
    """Read-only access to the dispatch provider's live view of an order.

    Implementations bound every call in time and return ``None`` for any soft
    failure (non-2xx, transport error, malformed payload, timeout). They must
    let ``asyncio.CancelledError`` propagate. Connections may be kept between
    calls until ``aclose``.
    """

    async def fetch_order_detail(self, identifier: str) -> ProviderOrderDetail | None: ...

    async def fetch_progress(self, tracking_token: str) -> ProviderProgress | None: ...

    async def aclose(self) -> None: ...
