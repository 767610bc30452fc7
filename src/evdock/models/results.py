"""Result types — the contract between the engine, the station and the API.

Every public station operation returns one of these models or a
``Rejected``.  All of them serialise with ``model_dump()``.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel

from evdock.models.enums import (
    BookingStatus,
    ChargingType,
    EnergySourceKind,
    MembershipLevel,
    RejectionReason,
)


# ═══════════════════════════════════════════════════════════════════════════
# Failure
# ═══════════════════════════════════════════════════════════════════════════

class Rejected(BaseModel):
    """A recoverable refusal.  Nothing was mutated."""

    reason: RejectionReason
    message: str


class InvariantViolation(RuntimeError):
    """Station state is internally inconsistent — a bug, not a user error."""


# ═══════════════════════════════════════════════════════════════════════════
# Registry
# ═══════════════════════════════════════════════════════════════════════════

class UserRecord(BaseModel):
    user_id: int
    name: str
    membership: MembershipLevel


class VehicleRecord(BaseModel):
    vehicle_id: int
    user_id: int
    battery_soc: float
    battery_capacity_kwh: float
    supports_v2g: bool


# ═══════════════════════════════════════════════════════════════════════════
# Booking lifecycle
# ═══════════════════════════════════════════════════════════════════════════

class BookingConfirmation(BaseModel):
    """Returned by a successful allocation."""

    booking_id: int
    station_id: int
    dock_id: int
    source: EnergySourceKind
    requested_start_time: float
    start_time: float
    """Effective start; equals ``requested_start_time`` unless deferred."""
    duration: float
    deferred: bool


class CancellationReceipt(BaseModel):
    booking_id: int
    dock_id: int
    time_to_start: float
    """Hours between the station's anchor time and the booking start."""
    penalty: float


class Invoice(BaseModel):
    """Billing outcome of one completed session."""

    booking_id: int
    user_id: int
    vehicle_id: int
    dock_id: int
    source: EnergySourceKind
    charging_type: ChargingType
    energy_kwh: float
    rate_per_kwh: float
    """Rate after type, peak and source multipliers; before the membership discount."""
    premium_discount_applied: bool
    cost: float
    vehicle_soc_after: float


class DischargeResult(BaseModel):
    vehicle_id: int
    requested_kwh: float
    discharged_kwh: float
    battery_soc: float


class BookingSnapshot(BaseModel):
    booking_id: int
    user_id: int
    vehicle_id: int
    dock_id: int
    station_id: int
    requested_start_time: float
    start_time: float
    duration: float
    charging_type: ChargingType
    status: BookingStatus
    cost: float
    energy_consumed: float
    cancellation_penalty: float
    deferred: bool


# ═══════════════════════════════════════════════════════════════════════════
# Read-side views
# ═══════════════════════════════════════════════════════════════════════════

class DockStatus(BaseModel):
    dock_id: int
    power_rating_kw: float
    source_name: str
    available_power_kw: float
    occupied: bool
    occupant_vehicle_id: Optional[int] = None


class LiveSession(BaseModel):
    """Progress of an active booking at a simulated clock time."""

    booking_id: int
    vehicle_id: int
    dock_id: int
    elapsed_hours: float
    energy_delivered_kwh: float
    remaining_hours: float


class PowerOverview(BaseModel):
    current_draw_kw: float
    """Sum of available power across occupied docks."""
    grid_capacity_kw: float
    headroom_kw: float


class StationReport(BaseModel):
    """Analytics over the booking ledger and dock statistics."""

    station_id: int
    utilization_pct: float
    avg_session_duration_hours: float
    grid_share_pct: float
    solar_share_pct: float
    regular_bookings: int
    premium_bookings: int
    total_revenue: float
    co2_kg: float
    """Σ source emission over settled bookings (grid factor × grid energy)."""

    # --- booking counts / totals ---
    active_bookings: int = 0
    completed_bookings: int = 0
    cancelled_bookings: int = 0
    total_energy_kwh: float = 0.0
    total_penalties: float = 0.0


class Notification(BaseModel):
    """One event delivered to the notification sink."""

    user_id: int
    message: str
    value: Optional[float] = None

    def render(self) -> str:
        text = f"[Notification for User ID: {self.user_id}] {self.message}"
        if self.value is not None:
            text += f" {self.value:g}"
        return text
