"""Allocation engine — peak deferral, dock selection and cancellation.

Request flow:

  1. validate     ledger capacity → time window → charging type → user/vehicle
  2. classify     peak = start ∈ [peak_start, peak_end)
                  critical = Premium member OR vehicle SOC < critical_soc_pct
  3. defer        peak and not critical → effective start = peak_end
  4. select       first dock (in pool order) that is free, has no overlapping
                  active booking, delivers ≥ the requested power under the
                  current weather, and is solar-backed if the type is Solar.
                  In the peak window a non-Solar request prefers a solar dock.
  5. commit       append Active booking, occupy dock, notify.

Cancellation charges a flat fee keyed on how far the booking starts after
the station's anchor time (``system_start_time``).
"""

from __future__ import annotations

import logging
import math
from typing import Optional, Union

from evdock.config.policy import CancellationPolicy, PeakPolicy
from evdock.engine.docks import DockPool
from evdock.engine.ledger import BookingLedger
from evdock.models.entities import Booking, Dock, User, Vehicle
from evdock.models.enums import NOMINAL_POWER_KW, BookingStatus, ChargingType, RejectionReason
from evdock.models.results import BookingConfirmation, CancellationReceipt, Rejected
from evdock.notifications import NotificationSink
from evdock.registry import UserRegistry, VehicleRegistry

logger = logging.getLogger(__name__)

HOURS_PER_DAY = 24.0


# ═══════════════════════════════════════════════════════════════════════════
# Pure policy functions
# ═══════════════════════════════════════════════════════════════════════════

def is_peak_hour(start_time: float, peak: PeakPolicy) -> bool:
    return peak.peak_start <= start_time < peak.peak_end


def is_critical(user: User, vehicle: Vehicle, peak: PeakPolicy) -> bool:
    """Critical requests keep their requested time during peak hours."""
    return user.is_premium or vehicle.battery_soc < peak.critical_soc_pct


def cancellation_penalty(time_to_start: float, policy: CancellationPolicy) -> float:
    if time_to_start < policy.short_notice_hours:
        return policy.short_notice_fee
    if time_to_start < policy.medium_notice_hours:
        return policy.medium_notice_fee
    return 0.0


def find_available_dock(
    pool: DockPool,
    ledger: BookingLedger,
    power_rating_kw: float,
    start_time: float,
    duration: float,
    solar_only: bool,
    peak: PeakPolicy,
) -> Optional[Dock]:
    """Pick a dock for the window, or ``None`` if nothing qualifies."""
    candidates = [
        dock
        for dock in pool
        if not dock.occupied
        and pool.available_power(dock) >= power_rating_kw
        and (not solar_only or pool.is_solar(dock))
        and not ledger.has_conflict(dock.dock_id, start_time, duration)
    ]
    if not candidates:
        return None

    if is_peak_hour(start_time, peak) and not solar_only:
        for dock in candidates:
            if pool.is_solar(dock):
                return dock
    return candidates[0]


# ═══════════════════════════════════════════════════════════════════════════
# Engine
# ═══════════════════════════════════════════════════════════════════════════

class AllocationEngine:
    """Creates and cancels bookings for one station.

    Not thread-safe on its own; the owning ``Station`` serialises calls.
    """

    def __init__(
        self,
        station_id: int,
        pool: DockPool,
        ledger: BookingLedger,
        users: UserRegistry,
        vehicles: VehicleRegistry,
        notifier: NotificationSink,
        peak: PeakPolicy,
        cancellation: CancellationPolicy,
    ) -> None:
        self._station_id = station_id
        self._pool = pool
        self._ledger = ledger
        self._users = users
        self._vehicles = vehicles
        self._notifier = notifier
        self._peak = peak
        self._cancellation = cancellation
        self.system_start_time = 0.0
        """Requested start of the first booking; anchor for penalties and utilisation."""

    # ── Booking ─────────────────────────────────────────────────────────

    def request_booking(
        self,
        user_id: int,
        vehicle_id: int,
        start_time: float,
        duration: float,
        charging_type: Union[int, ChargingType],
        power_rating_kw: Optional[float] = None,
    ) -> Union[BookingConfirmation, Rejected]:
        if self._ledger.is_full:
            return Rejected(
                reason=RejectionReason.CAPACITY_EXCEEDED,
                message=f"Maximum booking limit reached ({self._ledger.capacity})",
            )
        if (
            not math.isfinite(start_time)
            or not math.isfinite(duration)
            or not 0.0 <= start_time < HOURS_PER_DAY
            or duration <= 0.0
        ):
            return Rejected(
                reason=RejectionReason.INVALID_REQUEST,
                message=f"Invalid start time {start_time} or duration {duration}",
            )
        try:
            ctype = ChargingType(charging_type)
        except ValueError:
            return Rejected(
                reason=RejectionReason.INVALID_REQUEST,
                message=f"Invalid charging type code: {charging_type}",
            )
        power = NOMINAL_POWER_KW[ctype] if power_rating_kw is None else power_rating_kw
        if not math.isfinite(power) or power < 0:
            return Rejected(
                reason=RejectionReason.INVALID_REQUEST,
                message=f"Requested power must be a non-negative number, got {power}",
            )

        user = self._users.lookup(user_id)
        vehicle = self._vehicles.lookup_owned(vehicle_id, user_id)
        if user is None or vehicle is None:
            return Rejected(reason=RejectionReason.NOT_FOUND, message="User or vehicle not found")

        effective_start = start_time
        deferred = is_peak_hour(start_time, self._peak) and not is_critical(user, vehicle, self._peak)
        if deferred:
            effective_start = self._peak.peak_end
            self._notifier.notify(
                user_id,
                "Your booking has been deferred due to peak hours. New start time:",
                effective_start,
            )

        solar_only = ctype is ChargingType.SOLAR
        dock = find_available_dock(
            self._pool, self._ledger, power, effective_start, duration, solar_only, self._peak,
        )
        if dock is None:
            return Rejected(
                reason=RejectionReason.NO_AVAILABLE_RESOURCE,
                message=f"No available dock for {power:g} kW {ctype.label} at {effective_start:g}",
            )

        if len(self._ledger) == 0:
            self.system_start_time = start_time

        booking = Booking(
            booking_id=self._ledger.next_booking_id,
            user_id=user_id,
            vehicle_id=vehicle_id,
            dock_id=dock.dock_id,
            station_id=self._station_id,
            start_time=effective_start,
            duration=duration,
            charging_type=ctype,
            requested_start_time=start_time,
        )
        self._ledger.append(booking)
        dock.occupy(vehicle_id)
        self._notifier.notify(user_id, "Upcoming charging session scheduled at:", effective_start)
        logger.debug(
            "Station %d: booking %d on dock %d at %.2f (requested %.2f)",
            self._station_id, booking.booking_id, dock.dock_id, effective_start, start_time,
        )

        return BookingConfirmation(
            booking_id=booking.booking_id,
            station_id=self._station_id,
            dock_id=dock.dock_id,
            source=dock.source,
            requested_start_time=start_time,
            start_time=effective_start,
            duration=duration,
            deferred=deferred,
        )

    # ── Cancellation ────────────────────────────────────────────────────

    def cancel_booking(self, booking_id: int) -> Union[CancellationReceipt, Rejected]:
        booking = self._ledger.get(booking_id)
        if booking is None:
            return Rejected(reason=RejectionReason.NOT_FOUND, message=f"Booking {booking_id} not found")
        if not booking.is_active:
            return Rejected(
                reason=RejectionReason.INVALID_STATE,
                message=f"Booking {booking_id} is {booking.status.value}, not Active",
            )

        dock = self._pool.require(booking.dock_id)
        time_to_start = booking.start_time - self.system_start_time
        penalty = cancellation_penalty(time_to_start, self._cancellation)

        booking.status = BookingStatus.CANCELLED
        booking.cancellation_penalty = penalty
        dock.release()
        self._notifier.notify(booking.user_id, "Booking cancelled. Penalty charged: $", penalty)

        return CancellationReceipt(
            booking_id=booking_id,
            dock_id=dock.dock_id,
            time_to_start=time_to_start,
            penalty=penalty,
        )
