"""Pydantic v2 schemas for the raw records the aggregator consumes."""

from datetime import date, datetime
from decimal import Decimal
from typing import Literal, get_args

from pydantic import BaseModel, ConfigDict, Field

ReservationStatus = Literal[
    "confirmed",
    "pending",
    "checked_in",
    "checked_out",
    "cancelled",
    "no_show",
]

RESERVATION_STATUSES: tuple[str, ...] = get_args(ReservationStatus)


class Reservation(BaseModel):
    """A guest stay as exported by the reservation system.

    Date ordering is deliberately not validated here: dirty records must reach
    the aggregator, which clamps or rejects them depending on strict mode.
    Naive datetimes are interpreted as UTC.
    """

    id: str
    check_in_date: date | datetime
    check_out_date: date | datetime
    created_at: date | datetime | None = None
    total_amount: Decimal = Field(Decimal("0"), ge=0)
    status: ReservationStatus = "confirmed"
    adults: int = Field(1, ge=0)
    children: int = Field(0, ge=0)
    guest_key: str | None = None  # e.g. guest email; used for repeat-guest detection
    room_id: str | None = None

    model_config = ConfigDict(frozen=True)

    @property
    def party_size(self) -> int:
        return self.adults + self.children


class Room(BaseModel):
    """A sellable room and its category."""

    id: str
    type: str = "Standard"
    base_price: Decimal = Field(Decimal("0"), ge=0)

    model_config = ConfigDict(frozen=True)
