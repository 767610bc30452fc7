"""Mutable domain records owned by a station.

These are plain dataclasses: the engine mutates them in place under the
station lock.  Callers only ever see pydantic snapshots from
``evdock.models.results``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from evdock.models.enums import BookingStatus, ChargingType, EnergySourceKind, MembershipLevel

# Names longer than this are truncated on registration.
MAX_NAME_LENGTH = 49


@dataclass
class User:
    user_id: int
    name: str
    membership: MembershipLevel = MembershipLevel.REGULAR

    @property
    def is_premium(self) -> bool:
        return self.membership is MembershipLevel.PREMIUM


@dataclass
class Vehicle:
    vehicle_id: int
    user_id: int
    battery_soc: float
    battery_capacity_kwh: float
    supports_v2g: bool = False

    def __post_init__(self) -> None:
        self.battery_soc = clamp_soc(self.battery_soc)

    @property
    def stored_energy_kwh(self) -> float:
        return self.battery_soc / 100.0 * self.battery_capacity_kwh


@dataclass
class Dock:
    dock_id: int
    power_rating_kw: float
    source: EnergySourceKind
    occupied: bool = False
    current_vehicle_id: Optional[int] = None
    occupied_hours: float = 0.0
    """Sum of durations of bookings completed on this dock."""

    def occupy(self, vehicle_id: int) -> None:
        self.occupied = True
        self.current_vehicle_id = vehicle_id

    def release(self) -> None:
        self.occupied = False
        self.current_vehicle_id = None


@dataclass
class Booking:
    booking_id: int
    user_id: int
    vehicle_id: int
    dock_id: int
    station_id: int
    start_time: float
    """Effective start — already moved to the end of the peak window if deferred."""
    duration: float
    charging_type: ChargingType
    requested_start_time: float
    status: BookingStatus = BookingStatus.ACTIVE
    cost: float = 0.0
    energy_consumed: float = 0.0
    cancellation_penalty: float = 0.0

    @property
    def end_time(self) -> float:
        return self.start_time + self.duration

    @property
    def is_active(self) -> bool:
        return self.status is BookingStatus.ACTIVE

    @property
    def was_deferred(self) -> bool:
        return self.start_time != self.requested_start_time


def clamp_soc(soc: float) -> float:
    """Keep a state of charge inside [0, 100]."""
    return max(0.0, min(100.0, soc))
