"""Order tracking: look up, reconcile, write back."""

from __future__ import annotations

from .errors import OrderNotFoundError, TrackingError, TrackingUnavailableError
from .identifiers import (
    DEFAULT_LOOKUP_STRATEGIES,
    LookupStrategy,
    provider_order_identifier,
    resolve_order,
    tracking_token,
)
from .identity import (
    DEFAULT_IDENTITY_RESOLVERS,
    AssignmentByProviderOrderId,
    CarrierByAssignedId,
    IdentityResolver,
    RosterDriverById,
    resolve_fallback_identity,
)
from .reconcile import Reconciliation, learn_facts, provider_courier, reconcile
from .serialize import to_wire
from .service import TrackingService
from .snapshot import assemble_timeline, build_snapshot
from .write_back import WriteBackApplier, WriteBackFacts, WriteBackResult, compute_patch

__all__ = [
    "DEFAULT_IDENTITY_RESOLVERS",
    "DEFAULT_LOOKUP_STRATEGIES",
    "AssignmentByProviderOrderId",
    "CarrierByAssignedId",
    "IdentityResolver",
    "LookupStrategy",
    "OrderNotFoundError",
    "Reconciliation",
    "RosterDriverById",
    "TrackingError",
    "TrackingService",
    "TrackingUnavailableError",
    "WriteBackApplier",
    "WriteBackFacts",
    "WriteBackResult",
    "assemble_timeline",
    "build_snapshot",
    "compute_patch",
    "learn_facts",
    "provider_courier",
    "provider_order_identifier",
    "reconcile",
    "resolve_fallback_identity",
    "resolve_order",
    "tracking_token",
    "to_wire",
]
