"""Public interface for the Shipday adapter."""

from __future__ import annotations

from .client import ShipdayAPIError, ShipdayClient
from .schema import ShipdayOrderPayload, ShipdayProgressPayload
from .translator import translate_order, translate_progress

__all__ = [
    "ShipdayAPIError",
    "ShipdayClient",
    "ShipdayOrderPayload",
    "ShipdayProgressPayload",
    "translate_order",
    "translate_progress",
]
