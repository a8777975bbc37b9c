"""Pydantic models describing the Shipday API payloads the tracker reads."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _blank_to_none(value: object) -> object:
    if isinstance(value, str):
        stripped = value.strip()
        return stripped or None
    return value


class ShipdayBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class OrderStatusPayload(ShipdayBaseModel):
    order_state: str | None = Field(default=None, alias="orderState")

    _normalize_state = field_validator("order_state", mode="before")(_blank_to_none)


class CarrierPayload(ShipdayBaseModel):
    id: int | None = None
    name: str | None = None
    phone_number: str | None = Field(default=None, alias="phoneNumber")
    carrier_photo: str | None = Field(default=None, alias="carrierPhoto")

    _normalize_text = field_validator("name", "phone_number", "carrier_photo", mode="before")(
        _blank_to_none
    )


class PartyPayload(ShipdayBaseModel):
    """Customer or restaurant block of an order."""

    name: str | None = None
    address: str | None = None
    phone_number: str | None = Field(default=None, alias="phoneNumber")
    latitude: float | None = None
    longitude: float | None = None

    _normalize_text = field_validator("name", "address", "phone_number", mode="before")(
        _blank_to_none
    )


class ActivityLogPayload(ShipdayBaseModel):
    placement_time: datetime | None = Field(default=None, alias="placementTime")
    assigned_time: datetime | None = Field(default=None, alias="assignedTime")
    start_time: datetime | None = Field(default=None, alias="startTime")
    picked_up_time: datetime | None = Field(default=None, alias="pickedUpTime")
    arrived_time: datetime | None = Field(default=None, alias="arrivedTime")
    delivery_time: datetime | None = Field(default=None, alias="deliveryTime")

    _normalize_times = field_validator(
        "placement_time",
        "assigned_time",
        "start_time",
        "picked_up_time",
        "arrived_time",
        "delivery_time",
        mode="before",
    )(_blank_to_none)


class ProofOfDeliveryPayload(ShipdayBaseModel):
    image_urls: list[str | None] = Field(default_factory=list, alias="imageUrls")
    signature_path: str | None = Field(default=None, alias="signaturePath")

    @field_validator("image_urls", mode="before")
    @classmethod
    def _none_to_empty(cls, value: object) -> object:
        return [] if value is None else value


class ShipdayOrderPayload(ShipdayBaseModel):
    """Response of ``GET /orders/{identifier}``."""

    order_id: int | None = Field(default=None, alias="orderId")
    order_number: str | None = Field(default=None, alias="orderNumber")
    order_status: OrderStatusPayload | None = Field(default=None, alias="orderStatus")
    assigned_carrier_id: int | None = Field(default=None, alias="assignedCarrierId")
    assigned_carrier: CarrierPayload | None = Field(default=None, alias="assignedCarrier")
    restaurant: PartyPayload | None = None
    customer: PartyPayload | None = None
    activity_log: ActivityLogPayload | None = Field(default=None, alias="activityLog")
    proof_of_delivery: ProofOfDeliveryPayload | None = Field(default=None, alias="proofOfDelivery")
    tracking_link: str | None = Field(default=None, alias="trackingLink")
    feedback: float | None = None
    eta_time: str | None = Field(default=None, alias="etaTime")

    @field_validator("order_number", mode="before")
    @classmethod
    def _coerce_order_number(cls, value: object) -> object:
        if isinstance(value, int):
            return str(value)
        return _blank_to_none(value)

    @field_validator("feedback", "eta_time", "tracking_link", mode="before")
    @classmethod
    def _blank_optional(cls, value: object) -> object:
        return _blank_to_none(value)


class CarrierLocationPayload(ShipdayBaseModel):
    latitude: float
    longitude: float


class DynamicDataPayload(ShipdayBaseModel):
    carrier_location: CarrierLocationPayload | None = Field(default=None, alias="carrierLocation")
    estimated_time_in_minutes: int | None = Field(default=None, alias="estimatedTimeInMinutes")

    @field_validator("estimated_time_in_minutes", mode="before")
    @classmethod
    def _parse_minutes(cls, value: object) -> int | None:
        # Sent as a number or a numeric string; anything else means "unknown".
        if isinstance(value, bool):
            return None
        if isinstance(value, int):
            return value
        if isinstance(value, float):
            return int(value)
        if isinstance(value, str):
            try:
                return int(float(value.strip()))
            except ValueError:
                return None
        return None

    @field_validator("carrier_location", mode="before")
    @classmethod
    def _drop_incomplete_location(cls, value: object) -> object:
        if isinstance(value, dict) and None in (value.get("latitude"), value.get("longitude")):
            return None
        return value


class ShipdayProgressPayload(ShipdayBaseModel):
    """Response of ``GET /order/progress/{trackingToken}``."""

    dynamic_data: DynamicDataPayload | None = Field(default=None, alias="dynamicData")
