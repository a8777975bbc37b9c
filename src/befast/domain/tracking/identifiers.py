"""Locate the persistent order record behind an opaque order reference.

A reference reaching the engine is usually the customer-facing order number
from a tracking link, but internal callers also pass the provider's order id
or the storage key. Strategies are tried in that order; the first one that
matches anything wins.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING
from urllib.parse import urlsplit

from .errors import OrderNotFoundError

if TYPE_CHECKING:
    from befast.domain.model import OrderRecord
    from befast.domain.ports import TrackingRepositories

log = getLogger(__name__)

type FindOrders = Callable[[TrackingRepositories, str], tuple[OrderRecord, ...]]


@dataclass(frozen=True, slots=True)
class LookupStrategy:
    name: str
    find: FindOrders


def _by_order_number(repositories: TrackingRepositories, reference: str) -> tuple[OrderRecord, ...]:
    return repositories.orders.find_by_order_number(reference)


def _by_shipday_order_id(
    repositories: TrackingRepositories, reference: str
) -> tuple[OrderRecord, ...]:
    return repositories.orders.find_by_shipday_order_id(reference)


def _by_storage_key(repositories: TrackingRepositories, reference: str) -> tuple[OrderRecord, ...]:
    record = repositories.orders.get(reference)
    return (record,) if record is not None else ()


DEFAULT_LOOKUP_STRATEGIES: tuple[LookupStrategy, ...] = (
    LookupStrategy("order_number", _by_order_number),
    LookupStrategy("shipday_order_id", _by_shipday_order_id),
    LookupStrategy("storage_key", _by_storage_key),
)


def resolve_order(
    repositories: TrackingRepositories,
    reference: str,
    *,
    strategies: tuple[LookupStrategy, ...] = DEFAULT_LOOKUP_STRATEGIES,
    strict: bool = False,
) -> OrderRecord:
    """Return the order record for ``reference`` or raise ``OrderNotFoundError``.

    When a strategy yields several records the first (lowest storage key)
    wins and a warning is logged. With ``strict`` set the lookup fails closed
    instead.
    """

    normalized = reference.strip()
    if not normalized:
        raise OrderNotFoundError(reference, reason="empty_reference")

    for strategy in strategies:
        matches = strategy.find(repositories, normalized)
        if not matches:
            continue
        if len(matches) > 1:
            keys = ", ".join(match.key for match in matches)
            if strict:
                log.warning(
                    "Ambiguous order reference %r via %s (records: %s); refusing to pick one",
                    normalized,
                    strategy.name,
                    keys,
                )
                raise OrderNotFoundError(normalized, reason="ambiguous_reference")
            log.warning(
                "Ambiguous order reference %r via %s (records: %s); using %s",
                normalized,
                strategy.name,
                keys,
                matches[0].key,
            )
        log.debug("Resolved order reference %r via %s", normalized, strategy.name)
        return matches[0]

    raise OrderNotFoundError(normalized)


def provider_order_identifier(record: OrderRecord) -> str:
    """Identifier to query the provider with.

    Provider order number beats provider order id; the platform order number is
    a last-resort guess that only works when both sides happen to share it.
    """

    return record.shipday_order_number or record.shipday_order_id or record.order_number


def tracking_token(link: str | None) -> str | None:
    """Extract the tracking token from the final path segment of a tracking link."""

    if not link or not isinstance(link, str):
        return None
    path = urlsplit(link.strip()).path
    if "/" not in path:
        return None
    token = path.rsplit("/", 1)[-1]
    return token or None
