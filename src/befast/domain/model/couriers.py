"""Courier identity and the secondary collections it can be recovered from."""

from __future__ import annotations

from dataclasses import dataclass

DEFAULT_DRIVER_RATING = 4.5


@dataclass(frozen=True, slots=True, kw_only=True)
class CourierIdentity:
    name: str
    phone_number: str | None = None
    photo: str | None = None
    rating: float | None = None
    # Dispatch provider's carrier id, when the identity came from the provider.
    provider_id: int | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class CourierAssignmentRecord:
    """Mirror of a provider order's assignment, keyed by provider order id."""

    shipday_order_id: int
    carrier_name: str | None = None
    carrier_phone: str | None = None
    carrier_photo: str | None = None

    def identity(self) -> CourierIdentity | None:
        if not self.carrier_name:
            return None
        return CourierIdentity(
            name=self.carrier_name,
            phone_number=self.carrier_phone or None,
            photo=self.carrier_photo or None,
        )


@dataclass(frozen=True, slots=True, kw_only=True)
class CarrierRecord:
    """Provider carrier mirrored locally, keyed by the order's assigned carrier id."""

    id: str
    name: str | None = None
    phone_number: str | None = None
    photo: str | None = None

    def identity(self) -> CourierIdentity | None:
        if not self.name:
            return None
        return CourierIdentity(
            name=self.name,
            phone_number=self.phone_number or None,
            photo=self.photo or None,
        )


@dataclass(frozen=True, slots=True, kw_only=True)
class DriverRecord:
    """Platform courier roster entry."""

    id: str
    full_name: str | None = None
    phone_number: str | None = None
    profile_photo: str | None = None
    average_rating: float | None = None

    def identity(self) -> CourierIdentity | None:
        if not self.full_name:
            return None
        return CourierIdentity(
            name=self.full_name,
            phone_number=self.phone_number or None,
            photo=self.profile_photo or None,
            rating=(
                self.average_rating
                if self.average_rating is not None
                else DEFAULT_DRIVER_RATING
            ),
        )
